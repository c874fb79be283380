# ABOUTME: Shared types for the bridge heartbeat - resource types, status events, access config
# ABOUTME: ResourceType keys all per-type poller state; ConnectionStatus names the published events

from enum import Enum

from pydantic import BaseModel, Field


class ResourceType(str, Enum):
    """Bridge sub-resources that can be polled."""

    LIGHTS = "lights"
    GROUPS = "groups"
    SCENES = "scenes"
    SENSORS = "sensors"
    RULES = "rules"
    CONFIG = "config"
    SCHEDULES = "schedules"


class ConnectionStatus(str, Enum):
    """Event names published on the notification bus."""

    LOCAL_CONNECTION = "localConnection"
    NOT_AUTHENTICATED = "notAuthenticated"
    NO_LOCAL_CONNECTION = "noLocalConnection"


class BridgeAccessConfig(BaseModel):
    """
    Host and credentials used to reach the bridge.

    Attributes:
        ip_address: Bridge host (IP or hostname, optionally with port)
        username: Whitelisted API username, embedded in every request path
    """

    ip_address: str = Field(min_length=1)
    username: str = Field(min_length=1)

    def resource_url(self, resource_type: ResourceType) -> str:
        """Build the poll URL for a resource type."""
        return f"http://{self.ip_address}/api/{self.username}/{resource_type.value.lower()}"
