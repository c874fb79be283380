# ABOUTME: HeartbeatPoller polls bridge resources on per-type intervals using asyncio
# ABOUTME: Manages timer lifecycle (start/stop), response classification, processor fan-out and status events

import asyncio
import logging
from collections.abc import Iterable
from datetime import timedelta
from typing import Any

import httpx

from huebeat.heartbeat.classifier import DecodedArray, DecodedObject, Malformed, decode_payload, is_bridge_error
from huebeat.heartbeat.config import HeartbeatConfig
from huebeat.heartbeat.errors import BridgeErrorType, decode_bridge_errors
from huebeat.heartbeat.notifier import ConnectionStatusNotifier, NotificationBus
from huebeat.heartbeat.processor import HeartbeatProcessor
from huebeat.heartbeat.types import BridgeAccessConfig, ResourceType

logger = logging.getLogger(__name__)


class HeartbeatPoller:
    """
    Polls one bridge on a fixed interval per resource type.

    For every tick the poller:
    1. Issues GET http://{host}/api/{username}/{resource}
    2. Classifies the body as payload, error array or malformed
    3. Hands payloads to every processor, in order
    4. Reports connectivity through the ConnectionStatusNotifier

    Each resource type gets its own timer task on the running event loop.
    Requests run as separate tasks, so a slow response never delays the next
    tick. Overlapping requests for the same resource type are not coalesced.
    """

    def __init__(
        self,
        access_config: BridgeAccessConfig,
        processors: Iterable[HeartbeatProcessor],
        notifier: ConnectionStatusNotifier,
        client: httpx.AsyncClient | None = None,
        request_timeout: float = 5.0,
    ):
        """
        Initialize the HeartbeatPoller.

        Args:
            access_config: Bridge host and username
            processors: Consumers of successful payloads, called in order
            notifier: Publishes connectivity events
            client: Optional shared HTTP client; one is created (and owned) if omitted
            request_timeout: Timeout in seconds for the owned client
        """
        self.access_config = access_config
        self.processors: list[HeartbeatProcessor] = list(processors)
        self.notifier = notifier
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=request_timeout)
        self._intervals: dict[ResourceType, timedelta] = {}
        self._timers: dict[ResourceType, asyncio.Task[None]] = {}
        self._inflight: set[asyncio.Task[None]] = set()

    @classmethod
    def from_config(
        cls,
        access_config: BridgeAccessConfig,
        config: HeartbeatConfig,
        processors: Iterable[HeartbeatProcessor],
        bus: NotificationBus,
        client: httpx.AsyncClient | None = None,
    ) -> "HeartbeatPoller":
        """Build a poller with intervals, window and timeout taken from HeartbeatConfig."""
        poller = cls(
            access_config=access_config,
            processors=processors,
            notifier=ConnectionStatusNotifier(bus, window=config.notification_window),
            client=client,
            request_timeout=config.request_timeout,
        )
        for resource_type, interval in config.poll_intervals.items():
            poller.set_interval(resource_type, interval)
        return poller

    async def __aenter__(self) -> "HeartbeatPoller":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    @property
    def intervals(self) -> dict[ResourceType, timedelta]:
        return dict(self._intervals)

    @property
    def active_resource_types(self) -> set[ResourceType]:
        return set(self._timers)

    def set_interval(self, resource_type: ResourceType, interval: timedelta | float) -> None:
        """
        Set or replace the poll interval for a resource type.

        Takes effect the next time the timer for that type is created by start().
        """
        if not isinstance(interval, timedelta):
            interval = timedelta(seconds=interval)
        self._intervals[resource_type] = interval

    def remove_heartbeat(self, resource_type: ResourceType) -> None:
        """
        Stop polling a resource type.

        Cancels its timer so no further requests are issued. A request
        already in flight still completes. The interval stays configured.
        """
        task = self._timers.pop(resource_type, None)
        if task is not None:
            task.cancel()
            logger.info(f"Removed heartbeat for {resource_type.value}")

    def start(self) -> None:
        """
        Start polling every configured resource type.

        Each type is requested once immediately, then on every interval.
        Types that already have a running timer are left alone. Must be
        called from within a running event loop.
        """
        for resource_type, interval in self._intervals.items():
            if resource_type in self._timers:
                logger.warning(f"Heartbeat for {resource_type.value} already running")
                continue

            self._fire(resource_type)

            task = asyncio.create_task(
                self._timer_loop(resource_type, interval),
                name=f"heartbeat-{resource_type.value}",
            )
            task.add_done_callback(self._on_timer_done)
            self._timers[resource_type] = task
            logger.info(
                f"Heartbeat for {resource_type.value} started with interval: {interval.total_seconds()}s"
            )

    async def stop(self) -> None:
        """
        Cancel every timer and wait for them to finish.

        Configured intervals are kept, so a later start() resumes the same polling.
        """
        timers = list(self._timers.values())
        self._timers.clear()
        for task in timers:
            task.cancel()
        if timers:
            await asyncio.gather(*timers, return_exceptions=True)
            logger.info("Heartbeat stopped")

    async def close(self) -> None:
        """Stop timers, cancel in-flight requests and close the owned HTTP client."""
        await self.stop()

        inflight = list(self._inflight)
        for task in inflight:
            task.cancel()
        if inflight:
            await asyncio.gather(*inflight, return_exceptions=True)

        if self._owns_client:
            await self._client.aclose()

    async def poll_once(self, resource_type: ResourceType) -> None:
        """Issue a single request for a resource type and handle the response."""
        await self._do_request(resource_type)

    @staticmethod
    def _on_timer_done(task: asyncio.Task[None]) -> None:
        """Log when a timer task finishes (expected or not)."""
        if task.cancelled():
            logger.debug("Timer %s was cancelled", task.get_name())
        elif task.exception():
            logger.error(
                "Timer %s died with exception: %s",
                task.get_name(),
                task.exception(),
            )
        else:
            logger.warning("Timer %s completed unexpectedly", task.get_name())

    def _on_request_done(self, task: asyncio.Task[None]) -> None:
        """Forget a finished request and log anything it raised."""
        self._inflight.discard(task)
        if not task.cancelled() and task.exception():
            logger.error(
                "Heartbeat request %s failed with exception: %r",
                task.get_name(),
                task.exception(),
            )

    async def _timer_loop(self, resource_type: ResourceType, interval: timedelta) -> None:
        seconds = interval.total_seconds()
        while True:
            await asyncio.sleep(seconds)
            self._fire(resource_type)

    def _fire(self, resource_type: ResourceType) -> None:
        """Start a request without waiting for it."""
        task = asyncio.create_task(
            self._do_request(resource_type),
            name=f"heartbeat-request-{resource_type.value}",
        )
        self._inflight.add(task)
        task.add_done_callback(self._on_request_done)

    async def _do_request(self, resource_type: ResourceType) -> None:
        url = self.access_config.resource_url(resource_type)
        logger.debug(f"Heartbeat request: {url}")

        try:
            response = await self._client.get(url)
        except httpx.RequestError as e:
            logger.warning(f"Heartbeat request error for {resource_type.value}: {e!r}")
            self.notifier.notify_no_local_connection()
            return

        logger.debug(
            f"Heartbeat response for {resource_type.value} received (HTTP {response.status_code})"
        )
        self._handle_response(resource_type, response.content)

    def _handle_response(self, resource_type: ResourceType, body: bytes) -> None:
        decoded = decode_payload(body)

        if is_bridge_error(decoded, resource_type):
            if isinstance(decoded, DecodedArray):
                self._handle_errors(decoded.value)
            else:
                logger.info(f"Bridge answered {resource_type.value} with a truncated response")
            return

        match decoded:
            case DecodedObject(value=payload):
                self._dispatch(resource_type, payload)
                self.notifier.notify_local_connection()
            case Malformed(reason=reason):
                logger.debug(f"Ignoring malformed {resource_type.value} response: {reason}")
            case _:
                logger.debug(f"Ignoring unexpected {resource_type.value} response shape")

    def _dispatch(self, resource_type: ResourceType, payload: dict[str, Any]) -> None:
        for processor in self.processors:
            try:
                processor.process_payload(payload, resource_type)
            except Exception:
                logger.exception(f"Processor {processor!r} failed for {resource_type.value}")

    def _handle_errors(self, elements: list[Any]) -> None:
        for error in decode_bridge_errors(elements):
            logger.info(f"Heartbeat received error result: {error.code} {error.description}")
            if error.type is BridgeErrorType.UNAUTHORIZED_USER:
                self.notifier.notify_not_authenticated()
