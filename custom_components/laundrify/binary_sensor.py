"""Binary sensor entities for laundrify."""
from __future__ import annotations

from homeassistant.components.binary_sensor import (
    BinarySensorDeviceClass,
    BinarySensorEntity,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .api.models import LaundrifyMachine
from .const import DOMAIN
from .coordinator import LaundrifyCoordinator
from .entity import LaundrifyEntity


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up binary sensors from config entry."""
    coordinator: LaundrifyCoordinator = hass.data[DOMAIN][entry.entry_id]

    async_add_entities(
        LaundrifyMachineRunningBinarySensor(coordinator, machine)
        for machine in (coordinator.data or {}).values()
    )


class LaundrifyMachineRunningBinarySensor(LaundrifyEntity, BinarySensorEntity):
    """Binary sensor that is on while the machine is running."""

    _attr_device_class = BinarySensorDeviceClass.RUNNING
    _attr_name = None

    def __init__(self, coordinator: LaundrifyCoordinator, machine: LaundrifyMachine) -> None:
        """Initialize sensor."""
        super().__init__(coordinator, machine)
        self._attr_unique_id = machine.id

    @property
    def is_on(self) -> bool | None:
        """Return True if the machine reports ON."""
        machine = self.machine
        return machine.is_running if machine else None

    @property
    def icon(self) -> str:
        """Return icon based on state."""
        if self.is_on:
            return "mdi:washing-machine"
        return "mdi:washing-machine-off"
