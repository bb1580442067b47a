"""Poll cycle and scheduler for one Alfen Eve charger."""

import asyncio
import enum
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .api_client import AlfenApiClient
from .const import DEFAULT_REFRESH_RATE
from .exceptions import AlfenError, RequestError
from .logger import SmartLogger
from .mapper import map_properties
from .models import CapabilityUpdate, DeviceSettings
from .sync import CapabilityStore, CapabilitySynchronizer

ClientFactory = Callable[..., AlfenApiClient]


class PollState(enum.Enum):
    """State of a poller."""

    IDLE = "idle"
    POLLING = "polling"


@dataclass
class PollResult:
    """Outcome of one completed poll cycle."""

    updates: List[CapabilityUpdate] = field(default_factory=list)
    applied: List[CapabilityUpdate] = field(default_factory=list)
    duration: float = 0.0


class AlfenPoller:
    """Runs login, fetch, logout, map and sync for one charger.

    Only one cycle runs at a time. A poll requested while a cycle is in
    progress is skipped rather than queued.
    """

    def __init__(
        self,
        settings: DeviceSettings,
        store: CapabilityStore,
        client_factory: ClientFactory = AlfenApiClient,
    ):
        self._settings = settings
        self._client_factory = client_factory
        self._synchronizer = CapabilitySynchronizer(store)
        self._lock = asyncio.Lock()
        self._state = PollState.IDLE
        self._logger = SmartLogger(__name__)
        self.last_result: Optional[PollResult] = None

    @property
    def settings(self) -> DeviceSettings:
        return self._settings

    @property
    def logger(self) -> SmartLogger:
        return self._logger

    @property
    def state(self) -> PollState:
        return self._state

    @property
    def store(self) -> CapabilityStore:
        return self._synchronizer.store

    async def async_poll(self) -> Optional[PollResult]:
        """Run one poll cycle, or return None if one is already running.

        Raises AuthError or RequestError when the cycle fails.
        """
        if self._lock.locked():
            self._logger.debug("Poll already in progress for %s, skipping", self._settings.address)
            return None

        async with self._lock:
            self._state = PollState.POLLING
            try:
                result = await self._async_run_cycle()
            finally:
                self._state = PollState.IDLE

        self.last_result = result
        return result

    async def _async_run_cycle(self) -> PollResult:
        start = time.monotonic()
        self._logger.debug("Refresh device %s", self._settings.address)

        async with self._client_factory(self._settings, logger=self._logger) as client:
            await client.login()
            try:
                records = await client.fetch_properties()
            finally:
                try:
                    await client.logout()
                except RequestError as err:
                    self._logger.error("Logout failed: %s", err)

        updates = map_properties(records)
        applied = await self._synchronizer.async_sync(updates)
        duration = time.monotonic() - start

        self._logger.debug(
            "Poll of %s finished in %.3f seconds, %d of %d capabilities changed",
            self._settings.address, duration, len(applied), len(updates),
        )
        return PollResult(updates=updates, applied=applied, duration=duration)


class PollScheduler:
    """Polls on a fixed interval outside Home Assistant.

    The first poll runs as soon as the scheduler starts. Failed cycles are
    logged and the next fire is the only recovery.
    """

    def __init__(
        self,
        poller: AlfenPoller,
        interval: float = DEFAULT_REFRESH_RATE,
        on_result: Optional[Callable[[Optional[PollResult]], None]] = None,
    ):
        self._poller = poller
        self._interval = interval
        self._on_result = on_result
        self._task: Optional[asyncio.Task] = None

    @property
    def failed_polls(self) -> int:
        return self._poller.logger.failed_cycles

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        """Start polling on the running event loop."""
        if self.running:
            return self._task
        self._task = asyncio.get_running_loop().create_task(self._run())
        return self._task

    async def stop(self) -> None:
        """Stop polling and wait for the loop to exit."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        finally:
            self._task = None

    async def async_poll_once(self) -> Optional[PollResult]:
        """Run one cycle, logging instead of raising on failure."""
        try:
            result = await self._poller.async_poll()
        except AlfenError as err:
            self._poller.logger.cycle_failed(
                "Poll of %s failed: %s", self._poller.settings.address, err
            )
            result = None
        else:
            if result is not None:
                self._poller.logger.cycle_succeeded(self._poller.settings.address)

        if self._on_result is not None:
            self._on_result(result)
        return result

    async def _run(self) -> None:
        self._poller.logger.info("Polling %s every %s seconds", self._poller.settings.address, self._interval)
        while True:
            try:
                await self.async_poll_once()
            except asyncio.CancelledError:
                raise
            except Exception as err:  # pylint: disable=broad-except
                self._poller.logger.exception("Unexpected error while polling: %s", err)
            await asyncio.sleep(self._interval)
