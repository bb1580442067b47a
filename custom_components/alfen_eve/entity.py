"""Base entity for Alfen Eve integration."""

from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .const import DOMAIN, MANUFACTURER
from .coordinator import AlfenDataUpdateCoordinator


class AlfenEntity(CoordinatorEntity[AlfenDataUpdateCoordinator]):
    """Base class for all Alfen Eve entities.

    Every entity mirrors one capability of the charger and belongs to the
    device identified by the config entry.
    """

    _attr_has_entity_name = True

    def __init__(
        self, coordinator: AlfenDataUpdateCoordinator, entry_id: str, capability_id: str
    ) -> None:
        """Initialize the entity."""
        super().__init__(coordinator)
        self._entry_id = entry_id
        self._capability_id = capability_id
        self._attr_unique_id = f"{entry_id}_{capability_id}"

    @property
    def available(self) -> bool:
        """Return True if the capability has a value."""
        return (
            super().available
            and self.coordinator.store.get_value(self._capability_id) is not None
        )

    @property
    def device_info(self):
        """Return device information."""
        return {
            "identifiers": {(DOMAIN, self._entry_id)},
            "name": f"Alfen Eve {self.coordinator.settings.address}",
            "manufacturer": MANUFACTURER,
            "configuration_url": self.coordinator.settings.base_url,
        }
