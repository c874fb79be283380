# ABOUTME: Classifier for bridge heartbeat responses
# ABOUTME: Decodes a body once into object/array/malformed and decides if it carries API errors

import json
from dataclasses import dataclass
from typing import Any

from huebeat.heartbeat.types import ResourceType

# An unauthenticated config request still gets an answer, but a truncated one
CONFIG_ERROR_MAX_FIELDS = 8


@dataclass(frozen=True)
class DecodedObject:
    """Top-level JSON object."""

    value: dict[str, Any]


@dataclass(frozen=True)
class DecodedArray:
    """Top-level JSON array, used by the bridge to carry error records."""

    value: list[Any]


@dataclass(frozen=True)
class Malformed:
    """Body that is not JSON, or JSON with a scalar top level."""

    reason: str


Decoded = DecodedObject | DecodedArray | Malformed


def decode_payload(body: str | bytes) -> Decoded:
    """
    Decode a response body into exactly one Decoded variant.

    Args:
        body: Raw response body

    Returns:
        DecodedObject, DecodedArray or Malformed
    """
    try:
        value = json.loads(body)
    except (ValueError, UnicodeDecodeError) as e:
        return Malformed(reason=f"invalid JSON: {e}")
    except RecursionError:
        return Malformed(reason="nested too deeply")

    if isinstance(value, dict):
        return DecodedObject(value=value)
    if isinstance(value, list):
        return DecodedArray(value=value)
    return Malformed(reason=f"unexpected top-level {type(value).__name__}")


def is_bridge_error(decoded: Decoded, resource_type: ResourceType) -> bool:
    """
    Decide whether a decoded response is a bridge API error.

    Detection rules:
    1. config: an object with at most CONFIG_ERROR_MAX_FIELDS fields is an error
    2. every other resource type: an array is an error
    3. Malformed bodies are never classified as errors

    Args:
        decoded: Result of decode_payload
        resource_type: Resource type the request was made for

    Returns:
        True if the response should be handled as an error
    """
    match decoded:
        case DecodedObject(value=obj) if resource_type is ResourceType.CONFIG:
            return len(obj) <= CONFIG_ERROR_MAX_FIELDS
        case DecodedArray() if resource_type is not ResourceType.CONFIG:
            return True
        case _:
            return False
