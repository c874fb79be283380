# ABOUTME: Configuration management for huebeat using pydantic-settings
# ABOUTME: Loads bridge access and poll intervals from HUEBEAT_* environment variables and .env files

import logging
from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from huebeat.heartbeat.config import HeartbeatConfig
from huebeat.heartbeat.interval import parse_interval
from huebeat.heartbeat.types import BridgeAccessConfig, ResourceType

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """huebeat configuration settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_prefix="HUEBEAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Bridge access
    bridge_ip: str = ""
    bridge_username: str = ""

    # Poll intervals, empty string disables polling for that resource
    lights_every: str = "10s"
    groups_every: str = "10s"
    scenes_every: str = ""
    sensors_every: str = ""
    rules_every: str = ""
    config_every: str = "30s"
    schedules_every: str = ""

    notification_window: Annotated[float, Field(gt=0)] = 10.0
    request_timeout: Annotated[float, Field(gt=0)] = 5.0

    log_level: str = "INFO"

    def validate_ready(self) -> list[str]:
        """Check if all required settings are configured. Returns list of errors."""
        errors = []

        if not self.bridge_ip.strip():
            errors.append("HUEBEAT_BRIDGE_IP is required")

        if not self.bridge_username.strip():
            errors.append("HUEBEAT_BRIDGE_USERNAME is required")

        intervals = self.configured_intervals
        if not intervals:
            errors.append("At least one HUEBEAT_<RESOURCE>_EVERY interval must be set")

        for resource_type, every in intervals.items():
            try:
                parse_interval(every)
            except ValueError as e:
                errors.append(f"HUEBEAT_{resource_type.value.upper()}_EVERY is invalid: {e}")

        return errors

    @property
    def configured_intervals(self) -> dict[ResourceType, str]:
        """Interval strings for every resource type that has polling enabled."""
        intervals = {}
        for resource_type in ResourceType:
            every = getattr(self, f"{resource_type.value}_every").strip()
            if every:
                intervals[resource_type] = every
        return intervals

    def get_bridge_access_config(self) -> BridgeAccessConfig:
        return BridgeAccessConfig(
            ip_address=self.bridge_ip.strip(),
            username=self.bridge_username.strip(),
        )

    def get_heartbeat_config(self) -> HeartbeatConfig:
        """Build HeartbeatConfig from environment settings."""
        intervals = self.configured_intervals
        logger.info(
            "Polling: " + ", ".join(f"{rt.value}={every}" for rt, every in intervals.items())
        )
        return HeartbeatConfig(
            intervals=intervals,
            notification_window=self.notification_window,
            request_timeout=self.request_timeout,
        )


def get_settings() -> Settings:
    """Get settings instance."""
    return Settings()
