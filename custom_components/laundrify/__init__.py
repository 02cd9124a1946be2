"""The laundrify integration."""
from __future__ import annotations

import logging

from homeassistant.config_entries import ConfigEntry
from homeassistant.const import CONF_SCAN_INTERVAL, Platform
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import ConfigEntryError
from homeassistant.helpers.aiohttp_client import async_get_clientsession
from homeassistant.helpers.storage import STORAGE_DIR

from .api.client import LaundrifyApiClient
from .api.gate import InitState
from .const import CONF_AUTH_CODE, CONF_BASE_URL, DEFAULT_SCAN_INTERVAL, DOMAIN
from .coordinator import LaundrifyCoordinator

_LOGGER = logging.getLogger(__name__)

PLATFORMS: list[Platform] = [
    Platform.BINARY_SENSOR,
]


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up laundrify from a config entry."""
    hass.data.setdefault(DOMAIN, {})

    client = LaundrifyApiClient(
        session=async_get_clientsession(hass),
        auth_code=entry.data.get(CONF_AUTH_CODE),
        storage_dir=hass.config.path(STORAGE_DIR),
        base_url=entry.data.get(CONF_BASE_URL),
    )

    # A failed registration is final until the entry is reloaded.
    if not await client.async_initialize():
        if client.state == InitState.NO_AUTH_CODE_CONFIGURED:
            raise ConfigEntryError("AuthCode has not been configured")
        raise ConfigEntryError(f"Registration failed: {client.init_error}")

    coordinator = LaundrifyCoordinator(
        hass=hass,
        client=client,
        config_entry=entry,
        scan_interval=entry.data.get(CONF_SCAN_INTERVAL, DEFAULT_SCAN_INTERVAL),
    )

    # Discover machines
    await coordinator.async_config_entry_first_refresh()

    hass.data[DOMAIN][entry.entry_id] = coordinator

    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)

    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)

    if unload_ok:
        hass.data[DOMAIN].pop(entry.entry_id)

    return unload_ok
