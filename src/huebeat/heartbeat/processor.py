# ABOUTME: Processor protocol for successful heartbeat payloads
# ABOUTME: Includes BridgeStateCache, a processor that keeps the latest payload per resource type

import logging
from datetime import datetime, timezone
from typing import Any, Protocol, runtime_checkable

from huebeat.heartbeat.types import ResourceType

logger = logging.getLogger(__name__)


@runtime_checkable
class HeartbeatProcessor(Protocol):
    """Consumer of decoded payloads from successful polls."""

    def process_payload(self, payload: dict[str, Any], resource_type: ResourceType) -> None: ...


class BridgeStateCache:
    """
    Keeps the most recent payload for each resource type.

    Useful as the default processor: anything that needs the bridge state
    reads it from here instead of polling on its own.
    """

    def __init__(self) -> None:
        self._state: dict[ResourceType, dict[str, Any]] = {}
        self._updated_at: dict[ResourceType, datetime] = {}

    def process_payload(self, payload: dict[str, Any], resource_type: ResourceType) -> None:
        self._state[resource_type] = payload
        self._updated_at[resource_type] = datetime.now(timezone.utc)
        logger.debug(f"Cached {resource_type.value} ({len(payload)} entries)")

    def get(self, resource_type: ResourceType) -> dict[str, Any] | None:
        return self._state.get(resource_type)

    def updated_at(self, resource_type: ResourceType) -> datetime | None:
        return self._updated_at.get(resource_type)

    def __contains__(self, resource_type: object) -> bool:
        return resource_type in self._state
