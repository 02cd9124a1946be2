"""Data coordinator for laundrify."""
from __future__ import annotations

import asyncio
from datetime import timedelta
import logging

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers import device_registry as dr
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed

from .api.client import LaundrifyApiClient
from .api.exceptions import LaundrifyApiError, LaundrifyAuthError
from .api.models import LaundrifyMachine
from .const import DEFAULT_SCAN_INTERVAL, DOMAIN

_LOGGER = logging.getLogger(__name__)


class LaundrifyCoordinator(DataUpdateCoordinator[dict[str, LaundrifyMachine]]):
    """Coordinator polling the machines of a laundrify account.

    The first refresh discovers the machines and drops devices the account no
    longer has. Later refreshes poll each known machine on its own; machines
    added to the account afterwards show up once the entry is reloaded.
    A machine whose poll failed is left out of the data, which shows its
    entities as unavailable.
    """

    def __init__(
        self,
        hass: HomeAssistant,
        client: LaundrifyApiClient,
        config_entry: ConfigEntry | None = None,
        scan_interval: int = DEFAULT_SCAN_INTERVAL,
    ) -> None:
        """Initialize the coordinator."""
        super().__init__(
            hass,
            _LOGGER,
            config_entry=config_entry,
            name=DOMAIN,
            update_interval=timedelta(seconds=scan_interval),
        )
        self.client = client
        self._machine_ids: list[str] = []
        self._discovered = False

    @property
    def machine_ids(self) -> list[str]:
        """Return the ids of the discovered machines."""
        return self._machine_ids

    async def _async_update_data(self) -> dict[str, LaundrifyMachine]:
        """Fetch machine states from the API."""
        if not self._discovered:
            return await self._async_discover()
        if not self._machine_ids:
            return {}

        results = await asyncio.gather(
            *(self.client.async_get_machine(machine_id) for machine_id in self._machine_ids),
            return_exceptions=True,
        )

        machines: dict[str, LaundrifyMachine] = {}
        errors: list[Exception] = []
        for machine_id, result in zip(self._machine_ids, results):
            if isinstance(result, LaundrifyApiError):
                _LOGGER.error("Error while loading machine %s: %s", machine_id, result)
                errors.append(result)
                continue
            if isinstance(result, BaseException):
                raise result
            machines[machine_id] = result

        if not machines and errors:
            if any(isinstance(err, LaundrifyAuthError) for err in errors):
                raise UpdateFailed(f"Authentication failed: {errors[0]}") from errors[0]
            raise UpdateFailed(f"API error: {errors[0]}") from errors[0]

        return machines

    async def _async_discover(self) -> dict[str, LaundrifyMachine]:
        """List the machines of the account."""
        try:
            machines = await self.client.async_get_machines()
        except LaundrifyApiError as err:
            raise UpdateFailed(f"Error while loading machines: {err}") from err

        _LOGGER.info("Retrieved %d machines from backend", len(machines))
        self._machine_ids = [machine.id for machine in machines]
        self._discovered = True
        self._remove_obsolete_devices()
        return {machine.id: machine for machine in machines}

    def get_machine(self, machine_id: str) -> LaundrifyMachine | None:
        """Get the latest state of a machine."""
        if self.data:
            return self.data.get(machine_id)
        return None

    def _remove_obsolete_devices(self) -> None:
        """Remove devices of machines the backend did not return."""
        if self.config_entry is None:
            return

        registry = dr.async_get(self.hass)
        for device in dr.async_entries_for_config_entry(registry, self.config_entry.entry_id):
            machine_ids = {
                identifier for domain, identifier in device.identifiers if domain == DOMAIN
            }
            if machine_ids and machine_ids.isdisjoint(self._machine_ids):
                _LOGGER.warning(
                    "Removing machine %s since it hasn't been returned from backend",
                    ", ".join(sorted(machine_ids)),
                )
                registry.async_update_device(
                    device.id, remove_config_entry_id=self.config_entry.entry_id
                )
