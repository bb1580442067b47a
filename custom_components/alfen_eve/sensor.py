"""Support for Alfen Eve sensors."""
import logging

from homeassistant.components.sensor import (
    SensorDeviceClass,
    SensorEntity,
    SensorEntityDescription,
    SensorStateClass,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .const import CAPABILITY_SENSORS, DOMAIN
from .coordinator import AlfenDataUpdateCoordinator
from .entity import AlfenEntity

_LOGGER = logging.getLogger(__name__)

SENSOR_DESCRIPTIONS = {
    capability_id: SensorEntityDescription(
        key=capability_id,
        name=name,
        device_class=SensorDeviceClass(device_class),
        native_unit_of_measurement=unit,
        state_class=SensorStateClass(state_class),
    )
    for capability_id, (name, device_class, unit, state_class) in CAPABILITY_SENSORS.items()
}


async def async_setup_entry(
    hass: HomeAssistant,
    config_entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the Alfen Eve sensors."""
    coordinator: AlfenDataUpdateCoordinator = hass.data[DOMAIN][config_entry.entry_id]["coordinator"]

    @callback
    def _async_add_capability(capability_id: str) -> None:
        description = SENSOR_DESCRIPTIONS.get(capability_id)
        if description is None:
            _LOGGER.warning("No sensor known for capability %s", capability_id)
            return
        async_add_entities(
            [AlfenSensor(coordinator, config_entry.entry_id, description)]
        )

    for capability_id in coordinator.store.capabilities:
        _async_add_capability(capability_id)

    config_entry.async_on_unload(
        coordinator.store.add_capability_listener(_async_add_capability)
    )


class AlfenSensor(AlfenEntity, SensorEntity):
    """Representation of one Alfen Eve capability."""

    def __init__(
        self,
        coordinator: AlfenDataUpdateCoordinator,
        entry_id: str,
        description: SensorEntityDescription,
    ) -> None:
        """Initialize the sensor."""
        super().__init__(coordinator, entry_id, description.key)
        self.entity_description = description

    @property
    def native_value(self):
        """Return the state of the sensor."""
        return self.coordinator.store.get_value(self._capability_id)
