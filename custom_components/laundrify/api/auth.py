"""Pairing-code registration for the laundrify API."""

from __future__ import annotations

import logging
import re

from ..const import AUTH_CODE_PATTERN, REGISTRATION_PATH
from .exceptions import (
    LaundrifyApiError,
    LaundrifyAuthCodeNotFoundError,
    LaundrifyInvalidAuthCodeError,
    LaundrifyInvalidResponseError,
    LaundrifyRegistrationError,
)
from .models import RegistrationResult
from .request import LaundrifyRequestClient
from .storage import CredentialStore

_LOGGER = logging.getLogger(__name__)

_AUTH_CODE_RE = re.compile(AUTH_CODE_PATTERN)


def validate_auth_code(auth_code: str | None) -> bool:
    """Return True if the pairing code looks like ``123-456``."""
    return bool(auth_code) and _AUTH_CODE_RE.fullmatch(auth_code) is not None


class LaundrifyRegistration:
    """Exchanges a pairing code for an access token."""

    def __init__(self, client: LaundrifyRequestClient, store: CredentialStore) -> None:
        """Initialize the registration flow."""
        self._client = client
        self._store = store

    async def async_register(self, auth_code: str) -> RegistrationResult:
        """Register this installation at the laundrify backend.

        Failures are logged and reported through the result, they are never
        raised. A successful token is written to the credential store.

        Args:
            auth_code: The pairing code shown in the laundrify app.

        Returns:
            RegistrationResult with the token, or the classified error.
        """
        if not validate_auth_code(auth_code):
            _LOGGER.error(
                "The configured AuthCode %s doesn't match the expected pattern (xxx-xxx)",
                auth_code,
            )
            return RegistrationResult(
                ok=False,
                error=LaundrifyInvalidAuthCodeError(
                    f"AuthCode {auth_code} doesn't match the pattern xxx-xxx"
                ),
            )

        try:
            data = await self._client.async_request(
                "POST",
                REGISTRATION_PATH,
                data={"authCode": auth_code},
                authenticated=False,
            )
        except LaundrifyApiError as err:
            if err.status_code == 404:
                _LOGGER.error(
                    "Registration failed: AuthCode %s not found. Please check your config",
                    auth_code,
                )
                error: LaundrifyApiError = LaundrifyAuthCodeNotFoundError(
                    f"AuthCode {auth_code} not found"
                )
            else:
                _LOGGER.error("Registration failed: %s", err)
                error = LaundrifyRegistrationError(f"Registration failed: {err}")
            error.__cause__ = err
            return RegistrationResult(ok=False, error=error)

        token = data.get("token") if isinstance(data, dict) else None
        if not token or not isinstance(token, str):
            _LOGGER.error("Invalid registration response: couldn't find token property")
            _LOGGER.debug("Registration response: %s", data)
            return RegistrationResult(
                ok=False,
                error=LaundrifyInvalidResponseError(
                    "Registration response has no token", payload=data
                ),
            )

        _LOGGER.info("Registration successful")
        record = self._store.record
        record.auth_code = auth_code
        record.access_token = token
        await self._store.async_save()

        return RegistrationResult(ok=True, token=token)
