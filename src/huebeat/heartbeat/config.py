# ABOUTME: Pydantic model for heartbeat configuration settings
# ABOUTME: Validates per-resource poll intervals, notification window and request timeout

from datetime import timedelta
from typing import Annotated

from pydantic import BaseModel, Field, computed_field, field_validator

from huebeat.heartbeat.interval import parse_interval
from huebeat.heartbeat.types import ResourceType


def _default_intervals() -> dict[ResourceType, str]:
    return {
        ResourceType.LIGHTS: "10s",
        ResourceType.GROUPS: "10s",
        ResourceType.CONFIG: "30s",
    }


class HeartbeatConfig(BaseModel):
    """
    Configuration model for the bridge heartbeat.

    Attributes:
        intervals: Poll interval per resource type as duration strings.
            Resource types missing from the mapping are not polled.
        notification_window: Seconds during which a repeated connectivity
            event is suppressed (default: 10)
        request_timeout: HTTP timeout in seconds for each poll (default: 5)
    """

    intervals: dict[ResourceType, str] = Field(default_factory=_default_intervals)
    notification_window: Annotated[float, Field(gt=0)] = 10.0
    request_timeout: Annotated[float, Field(gt=0)] = 5.0

    @field_validator("intervals")
    @classmethod
    def validate_intervals(cls, v: dict[ResourceType, str]) -> dict[ResourceType, str]:
        """
        Validate every interval string with parse_interval.

        Raises:
            ValueError: If any interval string is invalid
        """
        for resource_type, every in v.items():
            try:
                parse_interval(every)
            except ValueError as e:
                raise ValueError(f"Invalid interval for {resource_type.value}: {e}") from e
        return v

    @computed_field  # type: ignore[prop-decorator]
    @property
    def poll_intervals(self) -> dict[ResourceType, timedelta]:
        """Parsed intervals, ready for HeartbeatPoller.set_interval."""
        return {
            resource_type: parse_interval(every)
            for resource_type, every in self.intervals.items()
        }
