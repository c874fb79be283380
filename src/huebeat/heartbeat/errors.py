# ABOUTME: Bridge-reported API errors decoded from error-array responses
# ABOUTME: Maps numeric bridge error codes to BridgeErrorType and skips malformed records

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class BridgeErrorType(Enum):
    """Error codes the bridge reports inside an HTTP 200 response."""

    UNAUTHORIZED_USER = 1
    INVALID_JSON = 2
    RESOURCE_NOT_AVAILABLE = 3
    METHOD_NOT_AVAILABLE = 4
    MISSING_PARAMETERS = 5
    PARAMETER_NOT_AVAILABLE = 6
    INVALID_VALUE = 7
    PARAMETER_NOT_MODIFIABLE = 8
    TOO_MANY_ITEMS = 11
    PORTAL_CONNECTION_REQUIRED = 12
    INTERNAL_ERROR = 901
    UNKNOWN = -1

    @classmethod
    def from_code(cls, code: int) -> "BridgeErrorType":
        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class BridgeError:
    """
    A single error record from a bridge error array.

    The bridge wraps each record as {"error": {"type": 1, "address": "/",
    "description": "unauthorized user"}}.

    Attributes:
        type: Decoded error type
        code: Raw numeric code as sent by the bridge
        address: Resource path the error refers to
        description: Human readable description from the bridge
    """

    type: BridgeErrorType
    code: int
    address: str
    description: str

    @classmethod
    def from_json(cls, element: Any) -> "BridgeError | None":
        """
        Decode one error array element.

        Returns:
            BridgeError, or None if the element doesn't have the expected shape
        """
        if not isinstance(element, dict):
            return None

        body = element.get("error")
        if not isinstance(body, dict):
            return None

        code = body.get("type")
        # bool is an int subclass, reject it explicitly
        if not isinstance(code, int) or isinstance(code, bool):
            return None

        description = body.get("description", "")
        address = body.get("address", "")
        if not isinstance(description, str) or not isinstance(address, str):
            return None

        return cls(
            type=BridgeErrorType.from_code(code),
            code=code,
            address=address,
            description=description,
        )


def decode_bridge_errors(elements: list[Any]) -> list[BridgeError]:
    """Decode every well-formed error record, dropping the rest."""
    errors = []
    for element in elements:
        error = BridgeError.from_json(element)
        if error is None:
            logger.debug(f"Skipping malformed bridge error element: {element!r}")
            continue
        errors.append(error)
    return errors
