"""API module for laundrify."""
from .auth import LaundrifyRegistration, validate_auth_code
from .client import LaundrifyApiClient
from .exceptions import (
    LaundrifyApiError,
    LaundrifyAuthCodeNotFoundError,
    LaundrifyAuthError,
    LaundrifyConfigNotFoundError,
    LaundrifyConfigReadError,
    LaundrifyInvalidAuthCodeError,
    LaundrifyInvalidResponseError,
    LaundrifyRegistrationError,
    LaundrifyRequestError,
)
from .gate import InitializationGate, InitState
from .models import CredentialRecord, LaundrifyMachine, MachineStatus, RegistrationResult
from .request import LaundrifyAuth, LaundrifyRequestClient, backoff_delay
from .storage import CredentialStore

__all__ = [
    "LaundrifyApiClient",
    "LaundrifyRegistration",
    "validate_auth_code",
    "LaundrifyApiError",
    "LaundrifyAuthCodeNotFoundError",
    "LaundrifyAuthError",
    "LaundrifyConfigNotFoundError",
    "LaundrifyConfigReadError",
    "LaundrifyInvalidAuthCodeError",
    "LaundrifyInvalidResponseError",
    "LaundrifyRegistrationError",
    "LaundrifyRequestError",
    "InitializationGate",
    "InitState",
    "CredentialRecord",
    "LaundrifyMachine",
    "MachineStatus",
    "RegistrationResult",
    "LaundrifyAuth",
    "LaundrifyRequestClient",
    "backoff_delay",
    "CredentialStore",
]
