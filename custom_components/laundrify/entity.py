"""Base entity for laundrify."""
from __future__ import annotations

from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .api.models import LaundrifyMachine
from .const import DOMAIN, MANUFACTURER, MODEL
from .coordinator import LaundrifyCoordinator


class LaundrifyEntity(CoordinatorEntity[LaundrifyCoordinator]):
    """Base entity for a laundrify machine."""

    _attr_has_entity_name = True

    def __init__(
        self,
        coordinator: LaundrifyCoordinator,
        machine: LaundrifyMachine,
    ) -> None:
        """Initialize entity."""
        super().__init__(coordinator)
        self._machine_id = machine.id
        self._attr_device_info = DeviceInfo(
            identifiers={(DOMAIN, machine.id)},
            name=machine.name,
            manufacturer=MANUFACTURER,
            model=MODEL,
            serial_number=machine.mac or "n/a",
            sw_version=machine.firmware_version or "n/a",
        )

    @property
    def machine(self) -> LaundrifyMachine | None:
        """Get current machine state from coordinator."""
        return self.coordinator.get_machine(self._machine_id)

    @property
    def available(self) -> bool:
        """Return False while the machine could not be polled."""
        return super().available and self.machine is not None
