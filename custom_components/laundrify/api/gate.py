"""One-shot readiness computation for the laundrify API client."""
from __future__ import annotations

import asyncio
from enum import Enum
import logging

from ..const import CREDENTIALS_SCHEMA_VERSION
from .auth import LaundrifyRegistration
from .exceptions import LaundrifyApiError, LaundrifyConfigNotFoundError, LaundrifyConfigReadError
from .models import CredentialRecord
from .request import LaundrifyAuth
from .storage import CredentialStore

_LOGGER = logging.getLogger(__name__)


class InitState(str, Enum):
    """Readiness of the client."""

    PENDING = "pending"
    NO_AUTH_CODE_CONFIGURED = "no_auth_code_configured"
    LOADING_CREDENTIAL = "loading_credential"
    REGISTERING = "registering"
    READY = "ready"
    REGISTRATION_FAILED = "registration_failed"


class InitializationGate:
    """Decides once whether the client holds a usable access token.

    Loading the stored credentials, registering if needed and installing the
    credential happen in a single task. Every caller of ``async_wait_ready``
    awaits that same task, and the result never changes afterwards, even when
    the token is rejected later on.
    """

    def __init__(
        self,
        auth_code: str | None,
        store: CredentialStore,
        registration: LaundrifyRegistration,
        auth: LaundrifyAuth,
    ) -> None:
        """Initialize the gate."""
        self._auth_code = auth_code
        self._store = store
        self._registration = registration
        self._auth = auth
        self._state = InitState.PENDING
        self._error: Exception | None = None
        self._task: asyncio.Task[bool] | None = None

    @property
    def state(self) -> InitState:
        """Return the current state."""
        return self._state

    @property
    def error(self) -> Exception | None:
        """Return the reason the gate ended unready, if any."""
        return self._error

    @property
    def is_ready(self) -> bool:
        """Return True once the gate resolved to READY."""
        return self._state == InitState.READY

    async def async_wait_ready(self) -> bool:
        """Run the initialization once and return whether the client is usable."""
        if self._task is None:
            self._task = asyncio.ensure_future(self._async_initialize())
        return await asyncio.shield(self._task)

    async def _async_initialize(self) -> bool:
        if not self._auth_code:
            _LOGGER.warning("AuthCode has not been configured yet. Please update your config")
            self._state = InitState.NO_AUTH_CODE_CONFIGURED
            return False

        self._state = InitState.LOADING_CREDENTIAL
        record = await self._async_load_record()

        if record.schema_version != CREDENTIALS_SCHEMA_VERSION:
            await self._async_migrate(record)

        if record.auth_code != self._auth_code:
            _LOGGER.info("The configured AuthCode changed, going to update the credentials")
            record.auth_code = self._auth_code
            record.access_token = ""
            await self._store.async_save()

        if not record.access_token:
            _LOGGER.info("Not registered at the laundrify API yet. Going to register now")
            self._state = InitState.REGISTERING
            result = await self._registration.async_register(self._auth_code)
            if not result.ok:
                self._error = result.error
                self._state = InitState.REGISTRATION_FAILED
                return False

        self._auth.install(self._store.record.access_token)
        self._state = InitState.READY
        _LOGGER.debug("laundrify API client is ready")
        return True

    async def _async_load_record(self) -> CredentialRecord:
        """Load the stored record; a missing or broken file means no token."""
        try:
            return await self._store.async_load()
        except LaundrifyConfigNotFoundError:
            return self._store.record
        except LaundrifyConfigReadError as err:
            _LOGGER.warning("Ignoring unreadable credentials, registering again: %s", err)
            return self._store.record

    async def _async_migrate(self, record: CredentialRecord) -> None:
        """Bring a record written by another client version up to date."""
        _LOGGER.debug(
            "Stored credentials version (%s) doesn't match the current version (%s)",
            record.schema_version,
            CREDENTIALS_SCHEMA_VERSION,
        )
        if record.schema_version == "":
            _LOGGER.debug("Stored credentials are empty, most likely a new installation")
        elif record.schema_version is None:
            # Legacy records did not store the pairing code they were issued for.
            _LOGGER.debug("Stored credentials predate version tracking")
            record.auth_code = self._auth_code or ""

        record.schema_version = CREDENTIALS_SCHEMA_VERSION
        await self._store.async_save()
