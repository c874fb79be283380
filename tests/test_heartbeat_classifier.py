# ABOUTME: Unit tests for bridge response decoding and error classification
# ABOUTME: Covers object/array/malformed decoding and the config field-count rule

import json

import pytest

from huebeat.heartbeat.classifier import (
    CONFIG_ERROR_MAX_FIELDS,
    DecodedArray,
    DecodedObject,
    Malformed,
    decode_payload,
    is_bridge_error,
)
from huebeat.heartbeat.types import ResourceType


def _config_object(fields: int) -> DecodedObject:
    return DecodedObject(value={f"field{i}": i for i in range(fields)})


class TestDecodePayload:
    """Tests for decode_payload."""

    def test_object(self):
        result = decode_payload(b'{"1": {"name": "Lamp"}}')
        assert result == DecodedObject(value={"1": {"name": "Lamp"}})

    def test_array(self):
        result = decode_payload('[{"error": {"type": 1}}]')
        assert isinstance(result, DecodedArray)
        assert result.value == [{"error": {"type": 1}}]

    def test_invalid_json_is_malformed(self):
        result = decode_payload(b"<html>nope</html>")
        assert isinstance(result, Malformed)
        assert "invalid JSON" in result.reason

    def test_invalid_utf8_is_malformed(self):
        assert isinstance(decode_payload(b"\xff\xfe\xfa"), Malformed)

    @pytest.mark.parametrize("body", ["42", '"text"', "null", "true"])
    def test_scalar_is_malformed(self, body):
        assert isinstance(decode_payload(body), Malformed)


class TestIsBridgeError:
    """Tests for is_bridge_error."""

    def test_short_config_is_error(self):
        assert is_bridge_error(_config_object(CONFIG_ERROR_MAX_FIELDS), ResourceType.CONFIG)
        assert is_bridge_error(_config_object(3), ResourceType.CONFIG)

    def test_full_config_is_not_error(self):
        assert not is_bridge_error(_config_object(CONFIG_ERROR_MAX_FIELDS + 1), ResourceType.CONFIG)

    def test_config_array_is_not_error(self):
        """The config rule only looks at objects."""
        assert not is_bridge_error(DecodedArray(value=[]), ResourceType.CONFIG)

    @pytest.mark.parametrize(
        "resource_type", [rt for rt in ResourceType if rt is not ResourceType.CONFIG]
    )
    def test_array_is_error_for_other_types(self, resource_type):
        decoded = decode_payload(json.dumps([{"error": {"type": 1}}]))
        assert is_bridge_error(decoded, resource_type)

    def test_small_lights_object_is_not_error(self):
        """The field-count rule applies to config only."""
        assert not is_bridge_error(DecodedObject(value={}), ResourceType.LIGHTS)

    def test_malformed_is_never_error(self):
        for resource_type in ResourceType:
            assert not is_bridge_error(Malformed(reason="x"), resource_type)


class TestDecodeNesting:
    """Bodies nested beyond the parser's recursion limit."""

    def test_deeply_nested_array_is_malformed(self):
        body = b"[" * 100000 + b"]" * 100000

        result = decode_payload(body)

        assert isinstance(result, Malformed)
        assert result.reason == "nested too deeply"
