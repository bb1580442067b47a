"""Data update coordinator for Alfen Eve integration."""
import logging
from datetime import timedelta
from typing import Any, Dict

from homeassistant.core import HomeAssistant
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed

from .alfen import AlfenError, AlfenPoller, DeviceSettings, MemoryCapabilityStore
from .const import DOMAIN

_LOGGER = logging.getLogger(__name__)


class AlfenDataUpdateCoordinator(DataUpdateCoordinator[Dict[str, Any]]):
    """Polls one charger and holds its capability values."""

    def __init__(
        self,
        hass: HomeAssistant,
        settings: DeviceSettings,
        update_interval: timedelta,
    ) -> None:
        """Initialize the coordinator."""
        super().__init__(
            hass,
            _LOGGER,
            name=f"{DOMAIN} {settings.address}",
            update_interval=update_interval,
        )
        self.settings = settings
        self.store = MemoryCapabilityStore()
        self.poller = AlfenPoller(settings, self.store)

    async def _async_update_data(self) -> Dict[str, Any]:
        """Run one poll cycle and return the capability values."""
        try:
            result = await self.poller.async_poll()
        except AlfenError as err:
            self.poller.logger.cycle_failed(
                "Error fetching %s data: %s", self.settings.address, err
            )
            raise UpdateFailed(f"Error fetching {DOMAIN} data: {err}") from err

        if result is None:
            _LOGGER.debug("Previous poll still running, keeping current data")
            return self.store.snapshot()

        self.poller.logger.cycle_succeeded(self.settings.address)
        for update in result.applied:
            _LOGGER.debug("Capability %s changed to %s", update.capability_id, update.value)

        return self.store.snapshot()

    async def async_shutdown(self) -> None:
        """Shut down the coordinator."""
        _LOGGER.debug("Shutting down coordinator for %s", self.settings.address)
        await super().async_shutdown()
