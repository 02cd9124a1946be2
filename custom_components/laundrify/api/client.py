"""API client for laundrify."""
from __future__ import annotations

import logging
import os

import aiohttp

from ..const import MACHINE_TIMEOUT, MACHINES_PATH
from .auth import LaundrifyRegistration
from .exceptions import LaundrifyAuthError, LaundrifyInvalidResponseError
from .gate import InitializationGate, InitState
from .models import LaundrifyMachine
from .request import LaundrifyAuth, LaundrifyRequestClient
from .storage import CredentialStore

_LOGGER = logging.getLogger(__name__)


class LaundrifyApiClient:
    """Async API client for the laundrify service."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        auth_code: str | None,
        storage_dir: str | os.PathLike,
        base_url: str | None = None,
    ) -> None:
        """Initialize the API client."""
        self._auth_code = auth_code
        self._store = CredentialStore(storage_dir)
        self._auth = LaundrifyAuth()
        self._requests = LaundrifyRequestClient(
            session, self._store, auth=self._auth, base_url=base_url
        )
        self._registration = LaundrifyRegistration(self._requests, self._store)
        self._gate = InitializationGate(
            auth_code, self._store, self._registration, self._auth
        )

    @property
    def auth_code(self) -> str | None:
        """Get the configured pairing code."""
        return self._auth_code

    @property
    def access_token(self) -> str:
        """Get the current access token, empty if not registered."""
        return self._store.record.access_token

    @property
    def state(self) -> InitState:
        """Get the initialization state."""
        return self._gate.state

    @property
    def init_error(self) -> Exception | None:
        """Get the reason initialization failed, if it did."""
        return self._gate.error

    @property
    def is_ready(self) -> bool:
        """Return True once initialization succeeded."""
        return self._gate.is_ready

    async def async_initialize(self) -> bool:
        """Load or obtain the access token. Runs only once per client."""
        return await self._gate.async_wait_ready()

    async def async_get_machines(self) -> list[LaundrifyMachine]:
        """Get all machines of the account.

        Returns an empty list while the client is not usable.
        """
        if not await self._gate.async_wait_ready():
            _LOGGER.warning(
                "Cannot load machines since the laundrify API is not initialized (%s)",
                self._gate.state.value,
            )
            return []

        data = await self._requests.async_request("GET", MACHINES_PATH)
        if not isinstance(data, list):
            raise LaundrifyInvalidResponseError(
                "Machines response is not a list", payload=data
            )
        machines = [LaundrifyMachine.from_dict(item) for item in data if isinstance(item, dict)]
        _LOGGER.debug(
            "Retrieved %d machines (%s) from backend",
            len(machines),
            ", ".join(machine.id for machine in machines),
        )
        return machines

    async def async_get_machine(self, machine_id: str) -> LaundrifyMachine:
        """Get the current state of a single machine."""
        if not await self._gate.async_wait_ready() or not self._auth.is_installed:
            raise LaundrifyAuthError("AccessToken is missing")

        data = await self._requests.async_request(
            "GET", f"{MACHINES_PATH}/{machine_id}", timeout=MACHINE_TIMEOUT
        )
        if not isinstance(data, dict):
            raise LaundrifyInvalidResponseError(
                f"Machine {machine_id} response is not an object", payload=data
            )
        machine = LaundrifyMachine.from_dict(data)
        _LOGGER.debug("Machine %s is currently %s", machine.id, machine.status.value)
        return machine
