"""Custom exceptions for the laundrify API."""
from __future__ import annotations

from typing import Any


class LaundrifyApiError(Exception):
    """Base exception for laundrify API errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Error message.
            status_code: HTTP status code if applicable.
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        """Return string representation."""
        if self.status_code:
            return f"[{self.status_code}] {self.message}"
        return self.message


class LaundrifyConfigNotFoundError(LaundrifyApiError):
    """The credentials file does not exist yet."""


class LaundrifyConfigReadError(LaundrifyApiError):
    """The credentials file exists but could not be read or parsed."""


class LaundrifyInvalidAuthCodeError(LaundrifyApiError):
    """The configured pairing code does not look like xxx-xxx."""


class LaundrifyAuthCodeNotFoundError(LaundrifyApiError):
    """The backend does not know the pairing code."""

    def __init__(self, message: str = "AuthCode not found") -> None:
        super().__init__(message, status_code=404)


class LaundrifyRegistrationError(LaundrifyApiError):
    """Registration failed for any other reason."""


class LaundrifyInvalidResponseError(LaundrifyApiError):
    """The backend answered with an unexpected payload."""

    def __init__(self, message: str, payload: Any = None) -> None:
        super().__init__(message)
        self.payload = payload


class LaundrifyAuthError(LaundrifyApiError):
    """Exception for rejected or missing access tokens."""

    def __init__(self, message: str = "Authentication failed") -> None:
        """Initialize the authentication exception.

        Args:
            message: Error message.
        """
        super().__init__(message, status_code=401)


class LaundrifyRequestError(LaundrifyApiError):
    """A request kept failing after all retries."""

    def __init__(self, message: str, last_error: LaundrifyApiError) -> None:
        super().__init__(message, status_code=last_error.status_code)
        self.last_error = last_error
