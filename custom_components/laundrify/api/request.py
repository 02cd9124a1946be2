"""HTTP transport with retries and unauthorized handling for the laundrify API."""
from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp

from ..const import (
    API_BASE_URL,
    AUTH_HEADER_PREFIX,
    BACKOFF_BASE,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT,
)
from .exceptions import LaundrifyApiError, LaundrifyAuthError, LaundrifyRequestError
from .storage import CredentialStore

_LOGGER = logging.getLogger(__name__)


def backoff_delay(retry: int) -> float:
    """Return the wait in seconds before the given (0-indexed) retry."""
    return BACKOFF_BASE * 2**retry


class LaundrifyAuth:
    """Authorization credential shared by every request of a client.

    The credential is installed once, when the client becomes ready, and is
    only ever cleared afterwards. Swapping the single attribute is atomic on
    the event loop, so every request sees either the token or nothing.
    """

    def __init__(self) -> None:
        """Initialize without a credential."""
        self._token: str | None = None

    @property
    def is_installed(self) -> bool:
        """Return True if a credential is installed."""
        return bool(self._token)

    @property
    def authorization(self) -> str | None:
        """Return the Authorization header value, if any."""
        if not self._token:
            return None
        return f"{AUTH_HEADER_PREFIX}{self._token}"

    def install(self, token: str) -> None:
        """Install the access token as default credential."""
        self._token = token

    def clear(self) -> None:
        """Drop the credential."""
        self._token = None


class LaundrifyRequestClient:
    """Issues requests against the laundrify backend."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        store: CredentialStore,
        auth: LaundrifyAuth | None = None,
        base_url: str | None = None,
    ) -> None:
        """Initialize the request client."""
        self._session = session
        self._store = store
        self._auth = auth or LaundrifyAuth()
        self._base_url = (base_url or API_BASE_URL).rstrip("/")

    @property
    def auth(self) -> LaundrifyAuth:
        """Return the shared authorization credential."""
        return self._auth

    @property
    def base_url(self) -> str:
        """Return the backend base URL."""
        return self._base_url

    def _get_headers(self, authenticated: bool) -> dict[str, str]:
        """Get standard headers for API requests."""
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if authenticated:
            authorization = self._auth.authorization
            if authorization is None:
                raise LaundrifyAuthError("AccessToken is missing")
            headers["Authorization"] = authorization
        return headers

    async def async_request(
        self,
        method: str,
        path: str,
        *,
        data: dict[str, Any] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        authenticated: bool = True,
        max_retries: int = DEFAULT_MAX_RETRIES,
    ) -> Any:
        """Make an HTTP request, retrying failures other than 401.

        Raises:
            LaundrifyAuthError: The backend rejected the access token, or no
                credential is installed for an authenticated request.
            LaundrifyRequestError: All attempts failed.
        """
        max_retries = max(0, max_retries)
        last_error: LaundrifyApiError | None = None

        for attempt in range(max_retries + 1):
            if attempt:
                delay = backoff_delay(attempt - 1)
                _LOGGER.debug(
                    "Retrying %s %s in %.1fs (retry %d/%d) after: %s",
                    method,
                    path,
                    delay,
                    attempt,
                    max_retries,
                    last_error,
                )
                await asyncio.sleep(delay)

            # Headers are rebuilt per attempt so a cleared credential is never resent.
            headers = self._get_headers(authenticated)
            try:
                return await self._async_send(method, path, headers, data, timeout)
            except LaundrifyAuthError:
                raise
            except LaundrifyApiError as err:
                last_error = err

        raise LaundrifyRequestError(
            f"{method} {path} failed after {max_retries + 1} attempts: {last_error}",
            last_error=last_error,
        ) from last_error

    async def _async_send(
        self,
        method: str,
        path: str,
        headers: dict[str, str],
        data: dict[str, Any] | None,
        timeout: float,
    ) -> Any:
        """Perform a single attempt."""
        url = f"{self._base_url}{path}"

        _LOGGER.debug("Making %s request to %s", method, url)

        try:
            async with self._session.request(
                method,
                url,
                headers=headers,
                json=data,
                timeout=aiohttp.ClientTimeout(total=timeout),
            ) as response:
                if response.status == 401:
                    _LOGGER.debug("Response status: 401")
                    await self._async_handle_unauthorized()
                    raise LaundrifyAuthError("AccessToken has been rejected")

                try:
                    response_text = await response.text()
                except UnicodeDecodeError as err:
                    raise LaundrifyApiError(
                        f"Invalid response body: {err}", status_code=response.status
                    ) from err

                _LOGGER.debug(
                    "Response status: %s, body: %s",
                    response.status,
                    response_text[:500] if response_text else "empty",
                )

                if response.status >= 400:
                    raise LaundrifyApiError(
                        f"API error: {response_text}", status_code=response.status
                    )

                if not response_text:
                    return None
                try:
                    return await response.json(content_type=None)
                except ValueError as err:
                    raise LaundrifyApiError(
                        f"Invalid JSON response: {err}", status_code=response.status
                    ) from err

        except aiohttp.ClientError as err:
            _LOGGER.debug("HTTP request failed: %s", err)
            raise LaundrifyApiError(f"Connection error: {err}") from err
        except TimeoutError as err:
            _LOGGER.debug("Request timeout: %s", err)
            raise LaundrifyApiError(f"Request timeout: {err}") from err

    async def _async_handle_unauthorized(self) -> None:
        """Forget the rejected token for every caller and persist that."""
        _LOGGER.warning("AccessToken seems to be invalid, going to remove it")
        self._auth.clear()
        self._store.record.access_token = ""
        await self._store.async_save()
