# ABOUTME: Unit tests for bridge error record decoding
# ABOUTME: Verifies code mapping and that malformed elements are skipped

from huebeat.heartbeat.errors import BridgeError, BridgeErrorType, decode_bridge_errors

UNAUTHORIZED = {"error": {"type": 1, "address": "/lights", "description": "unauthorized user"}}


class TestBridgeErrorFromJson:
    """Tests for BridgeError.from_json."""

    def test_unauthorized_user(self):
        error = BridgeError.from_json(UNAUTHORIZED)

        assert error is not None
        assert error.type is BridgeErrorType.UNAUTHORIZED_USER
        assert error.code == 1
        assert error.address == "/lights"
        assert error.description == "unauthorized user"

    def test_known_code(self):
        error = BridgeError.from_json({"error": {"type": 3, "address": "/x", "description": "gone"}})
        assert error.type is BridgeErrorType.RESOURCE_NOT_AVAILABLE

    def test_unknown_code_keeps_raw_code(self):
        error = BridgeError.from_json({"error": {"type": 999, "description": "?"}})
        assert error.type is BridgeErrorType.UNKNOWN
        assert error.code == 999
        assert error.address == ""

    def test_malformed_elements(self):
        for element in [
            "error",
            None,
            {"success": {}},
            {"error": "text"},
            {"error": {"description": "no type"}},
            {"error": {"type": "1"}},
            {"error": {"type": True}},
            {"error": {"type": 1, "description": 5}},
        ]:
            assert BridgeError.from_json(element) is None


class TestDecodeBridgeErrors:
    """Tests for decode_bridge_errors."""

    def test_skips_malformed_and_keeps_order(self):
        second = {"error": {"type": 7, "address": "/a", "description": "invalid value"}}
        errors = decode_bridge_errors([UNAUTHORIZED, {"bogus": 1}, second])

        assert [e.type for e in errors] == [
            BridgeErrorType.UNAUTHORIZED_USER,
            BridgeErrorType.INVALID_VALUE,
        ]

    def test_empty(self):
        assert decode_bridge_errors([]) == []
