# ABOUTME: Tests for the huebeat entry point
# ABOUTME: Covers single-shot runs against a mock bridge and configuration error exits

import httpx
import pytest

from huebeat import main as main_module
from huebeat.config import Settings
from huebeat.heartbeat import HeartbeatPoller, ResourceType

LIGHTS = {"1": {"name": "Desk"}}


def _settings(**kwargs) -> Settings:
    return Settings(_env_file=None, **kwargs)


class TestRunOnce:
    """Tests for run(once=True)."""

    @pytest.mark.asyncio
    async def test_polls_each_configured_resource(self, monkeypatch):
        requested = []

        def bridge(request: httpx.Request) -> httpx.Response:
            requested.append(request.url.path)
            return httpx.Response(200, json=LIGHTS)

        def build_poller(settings, bus, cache):
            return HeartbeatPoller.from_config(
                access_config=settings.get_bridge_access_config(),
                config=settings.get_heartbeat_config(),
                processors=[cache],
                bus=bus,
                client=httpx.AsyncClient(transport=httpx.MockTransport(bridge)),
            )

        monkeypatch.setattr(main_module, "build_poller", build_poller)
        settings = _settings(
            bridge_ip="bridge.local",
            bridge_username="user",
            groups_every="",
            config_every="",
        )

        cache = await main_module.run(settings, once=True)

        assert requested == ["/api/user/lights"]
        assert cache.get(ResourceType.LIGHTS) == LIGHTS


class TestMain:
    """Tests for main() startup checks."""

    def test_exits_on_configuration_errors(self, monkeypatch):
        monkeypatch.setattr(main_module, "get_settings", lambda: _settings())

        with pytest.raises(SystemExit) as exc_info:
            main_module.main([])

        assert exc_info.value.code == 1

    def test_exits_when_settings_fail_to_load(self, monkeypatch):
        def broken():
            raise ValueError("bad env")

        monkeypatch.setattr(main_module, "get_settings", broken)

        with pytest.raises(SystemExit) as exc_info:
            main_module.main([])

        assert exc_info.value.code == 1

    def test_exits_on_non_positive_notification_window(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HUEBEAT_BRIDGE_IP", "bridge.local")
        monkeypatch.setenv("HUEBEAT_BRIDGE_USERNAME", "user")
        monkeypatch.setenv("HUEBEAT_NOTIFICATION_WINDOW", "0")

        with pytest.raises(SystemExit) as exc_info:
            main_module.main(["--once"])

        assert exc_info.value.code == 1
