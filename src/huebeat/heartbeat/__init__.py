# ABOUTME: Heartbeat module for huebeat - periodic bridge polling and connectivity events
# ABOUTME: Provides interval parsing, config, response classification, notifier, processors and the poller

from huebeat.heartbeat.classifier import DecodedArray, DecodedObject, Malformed, decode_payload, is_bridge_error
from huebeat.heartbeat.config import HeartbeatConfig
from huebeat.heartbeat.errors import BridgeError, BridgeErrorType
from huebeat.heartbeat.interval import parse_interval
from huebeat.heartbeat.notifier import ConnectionStatusNotifier, NotificationBus
from huebeat.heartbeat.poller import HeartbeatPoller
from huebeat.heartbeat.processor import BridgeStateCache, HeartbeatProcessor
from huebeat.heartbeat.types import BridgeAccessConfig, ConnectionStatus, ResourceType

__all__ = [
    "BridgeAccessConfig",
    "BridgeError",
    "BridgeErrorType",
    "BridgeStateCache",
    "ConnectionStatus",
    "ConnectionStatusNotifier",
    "DecodedArray",
    "DecodedObject",
    "HeartbeatConfig",
    "HeartbeatPoller",
    "HeartbeatProcessor",
    "Malformed",
    "NotificationBus",
    "ResourceType",
    "decode_payload",
    "is_bridge_error",
    "parse_interval",
]
