"""Persistent credential storage for the laundrify API."""
from __future__ import annotations

import asyncio
from datetime import datetime, timezone
import json
import logging
import os
from pathlib import Path
import tempfile

from ..const import CREDENTIALS_FILE
from .exceptions import LaundrifyConfigNotFoundError, LaundrifyConfigReadError
from .models import CredentialRecord

_LOGGER = logging.getLogger(__name__)


class CredentialStore:
    """Reads and writes the pairing state to a single JSON file.

    The store owns the in-memory CredentialRecord. Other components go through
    ``record``, ``async_load`` and ``async_save`` instead of keeping copies.
    """

    def __init__(self, storage_dir: str | os.PathLike, filename: str = CREDENTIALS_FILE) -> None:
        """Initialize the store."""
        self._path = Path(storage_dir) / filename
        self._record = CredentialRecord()

    @property
    def path(self) -> Path:
        """Return the credentials file path."""
        return self._path

    @property
    def record(self) -> CredentialRecord:
        """Return the current credential record."""
        return self._record

    async def async_load(self) -> CredentialRecord:
        """Load the record from disk.

        Raises:
            LaundrifyConfigNotFoundError: The file does not exist yet.
            LaundrifyConfigReadError: The file could not be read or parsed.
        """
        loop = asyncio.get_running_loop()
        record = await loop.run_in_executor(None, self._read)
        _LOGGER.debug(
            "Read credentials from %s (updated at %s)", self._path, record.updated_at
        )
        self._record = record
        return record

    def _read(self) -> CredentialRecord:
        try:
            content = self._path.read_text(encoding="utf-8")
            data = json.loads(content)
        except FileNotFoundError as err:
            _LOGGER.debug(
                "Credentials file %s doesn't exist yet, it will be created on setup",
                self._path,
            )
            raise LaundrifyConfigNotFoundError(
                f"Credentials file {self._path} not found"
            ) from err
        except (OSError, ValueError) as err:
            _LOGGER.error("Error while reading %s: %s", self._path, err)
            raise LaundrifyConfigReadError(
                f"Cannot read credentials file {self._path}: {err}"
            ) from err

        if not isinstance(data, dict):
            _LOGGER.error("Error while reading %s: not a JSON object", self._path)
            raise LaundrifyConfigReadError(
                f"Credentials file {self._path} does not contain a JSON object"
            )

        try:
            return CredentialRecord.from_dict(data)
        except (AttributeError, TypeError, ValueError) as err:
            _LOGGER.error("Error while reading %s: %s", self._path, err)
            raise LaundrifyConfigReadError(
                f"Credentials file {self._path} is malformed: {err}"
            ) from err

    async def async_save(self, record: CredentialRecord | None = None) -> bool:
        """Persist the record, best effort.

        Returns False if the file could not be written. The in-memory record
        stays valid either way.
        """
        if record is not None:
            self._record = record
        self._record.updated_at = datetime.now(timezone.utc)
        payload = json.dumps(self._record.to_dict(), indent="\t")

        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, self._write, payload)
        except OSError as err:
            _LOGGER.error("Error while writing %s: %s", self._path, err)
            return False

        _LOGGER.debug("Credentials have been written to %s", self._path)
        return True

    def _write(self, payload: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp_file:
                tmp_file.write(payload)
            os.replace(tmp_path, self._path)
        except OSError:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
