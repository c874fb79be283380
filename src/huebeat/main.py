# ABOUTME: huebeat entry point - runs the bridge heartbeat until interrupted
# ABOUTME: Validates configuration, wires the poller to a state cache and logs connectivity events

import asyncio
import contextlib
import logging
import signal
import sys

from .config import Settings, get_settings
from .heartbeat import BridgeStateCache, ConnectionStatus, HeartbeatPoller, NotificationBus, ResourceType

logger = logging.getLogger(__name__)


def _log_status(status: ConnectionStatus):
    def callback() -> None:
        logger.info(f"Bridge status: {status.value}")

    return callback


def build_poller(settings: Settings, bus: NotificationBus, cache: BridgeStateCache) -> HeartbeatPoller:
    """Create a HeartbeatPoller from settings."""
    return HeartbeatPoller.from_config(
        access_config=settings.get_bridge_access_config(),
        config=settings.get_heartbeat_config(),
        processors=[cache],
        bus=bus,
    )


async def run(settings: Settings, once: bool = False) -> BridgeStateCache:
    """
    Run the heartbeat.

    Args:
        settings: Loaded settings
        once: Poll every configured resource a single time and return

    Returns:
        The state cache filled by the poller
    """
    bus = NotificationBus()
    for status in ConnectionStatus:
        bus.subscribe(status.value, _log_status(status))

    cache = BridgeStateCache()
    async with build_poller(settings, bus, cache) as poller:
        if once:
            await asyncio.gather(*(poller.poll_once(rt) for rt in poller.intervals))
            return cache

        stop_event = asyncio.Event()
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            # Not available on Windows event loops
            with contextlib.suppress(NotImplementedError):
                loop.add_signal_handler(sig, stop_event.set)

        poller.start()
        await stop_event.wait()
        logger.info("Shutting down heartbeat")

    return cache


def main(argv: list[str] | None = None) -> None:
    """Main entry point for huebeat."""
    args = sys.argv[1:] if argv is None else argv
    once = "--once" in args

    try:
        settings = get_settings()
    except Exception as e:
        logging.basicConfig(level=logging.INFO)
        logger.error(f"Failed to load settings: {e}")
        sys.exit(1)

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info("Starting huebeat - bridge heartbeat")

    errors = settings.validate_ready()
    if errors:
        logger.error("Configuration errors:")
        for error in errors:
            logger.error(f"  - {error}")
        sys.exit(1)

    logger.info(f"Bridge: {settings.bridge_ip}")

    cache = asyncio.run(run(settings, once=once))

    if once:
        for resource_type in ResourceType:
            payload = cache.get(resource_type)
            if payload is not None:
                logger.info(f"{resource_type.value}: {len(payload)} entries")


if __name__ == "__main__":
    main()
