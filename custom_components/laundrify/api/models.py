"""Data models for the laundrify API."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class MachineStatus(str, Enum):
    """Machine status enumeration."""

    ON = "ON"
    OFF = "OFF"
    UNKNOWN = "UNKNOWN"


@dataclass
class LaundrifyMachine:
    """Represents a laundrify WLAN adapter attached to a machine."""

    id: str
    name: str
    status: MachineStatus
    mac: str | None = None
    firmware_version: str | None = None
    model: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LaundrifyMachine:
        """Create a LaundrifyMachine from API response dictionary.

        Args:
            data: Dictionary containing machine data from API.

        Returns:
            LaundrifyMachine instance.
        """
        try:
            status = MachineStatus(data.get("status"))
        except ValueError:
            status = MachineStatus.UNKNOWN

        machine_id = str(data.get("_id", data.get("id", "")))
        return cls(
            id=machine_id,
            name=data.get("name") or machine_id,
            status=status,
            mac=data.get("mac"),
            firmware_version=data.get("firmwareVersion"),
            model=data.get("model"),
            raw=data,
        )

    @property
    def is_running(self) -> bool:
        """Return True while the machine reports power draw."""
        return self.status == MachineStatus.ON


@dataclass
class CredentialRecord:
    """Pairing state persisted between restarts."""

    auth_code: str = ""
    access_token: str = ""
    updated_at: datetime | None = None
    # None: written by a client that did not track the version yet
    schema_version: str | None = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CredentialRecord:
        """Deserialize a record read from disk.

        Raises:
            ValueError: A field holds something other than a string.
        """
        for key in ("updatedAt", "authCode", "accessToken", "schemaVersion", "pluginVersion"):
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"{key} must be a string, got {type(value).__name__}")

        updated_at = None
        updated_at_str = data.get("updatedAt")
        if updated_at_str:
            try:
                updated_at = datetime.fromisoformat(
                    updated_at_str.replace("Z", "+00:00")
                )
            except ValueError:
                updated_at = None

        return cls(
            auth_code=data.get("authCode") or "",
            access_token=data.get("accessToken") or "",
            updated_at=updated_at,
            schema_version=data.get("schemaVersion", data.get("pluginVersion")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize the record for disk."""
        return {
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
            "schemaVersion": self.schema_version,
            "authCode": self.auth_code,
            "accessToken": self.access_token,
        }


@dataclass
class RegistrationResult:
    """Outcome of exchanging a pairing code for an access token."""

    ok: bool
    token: str | None = None
    error: Exception | None = None
