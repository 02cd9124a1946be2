"""Config flow for laundrify integration."""

from __future__ import annotations

import logging
from typing import Any

import voluptuous as vol

from homeassistant.config_entries import ConfigFlow, ConfigFlowResult
from homeassistant.const import CONF_SCAN_INTERVAL

from .api.auth import validate_auth_code
from .const import CONF_AUTH_CODE, CONF_BASE_URL, DEFAULT_SCAN_INTERVAL, DOMAIN

_LOGGER = logging.getLogger(__name__)

STEP_USER_DATA_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_AUTH_CODE): str,
        vol.Optional(CONF_SCAN_INTERVAL, default=DEFAULT_SCAN_INTERVAL): vol.All(
            vol.Coerce(int), vol.Range(min=5)
        ),
        vol.Optional(CONF_BASE_URL): str,
    }
)


class LaundrifyConfigFlow(ConfigFlow, domain=DOMAIN):
    """Handle a config flow for laundrify.

    The pairing code is only checked for its format here. It is exchanged for
    an access token once, when the entry is set up.
    """

    VERSION = 1

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Handle the initial step: enter the pairing code."""
        errors: dict[str, str] = {}

        if user_input is not None:
            auth_code = user_input[CONF_AUTH_CODE].strip()

            # A single laundrify account per installation
            await self.async_set_unique_id(DOMAIN)
            self._abort_if_unique_id_configured()

            if not validate_auth_code(auth_code):
                _LOGGER.debug("Rejected malformed AuthCode %s", auth_code)
                errors[CONF_AUTH_CODE] = "invalid_auth_code"
            else:
                data = {
                    CONF_AUTH_CODE: auth_code,
                    CONF_SCAN_INTERVAL: user_input.get(
                        CONF_SCAN_INTERVAL, DEFAULT_SCAN_INTERVAL
                    ),
                }
                if user_input.get(CONF_BASE_URL):
                    data[CONF_BASE_URL] = user_input[CONF_BASE_URL]

                return self.async_create_entry(title="laundrify", data=data)

        return self.async_show_form(
            step_id="user",
            data_schema=STEP_USER_DATA_SCHEMA,
            errors=errors,
        )
