"""
Credential storage for the login token and username.

The file store keeps a small JSON object at ~/.tlearn/credentials.json,
readable only by the owner.
"""

from __future__ import annotations

import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from tlearn.core.exceptions import CredentialStoreError

logger = logging.getLogger(__name__)

TOKEN_KEY = "t_learn_token"
USERNAME_KEY = "t_learn_username"


class CredentialStore(ABC):
    """Key-value store for persisted credentials."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value.

        Raises:
            CredentialStoreError: If the value cannot be persisted.
        """

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete a key; a missing key is not an error.

        Raises:
            CredentialStoreError: If the change cannot be persisted.
        """


class MemoryCredentialStore(CredentialStore):
    """Credentials kept for the lifetime of the process only."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class FileCredentialStore(CredentialStore):
    """Credentials persisted to a JSON file."""

    CREDENTIALS_FILE = Path.home() / ".tlearn" / "credentials.json"

    def __init__(self, path: Path | None = None):
        self.path = path or self.CREDENTIALS_FILE

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Ignoring unreadable credentials file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed credentials file {self.path}")
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w") as f:
                f.write(json.dumps(data, indent=2) + "\n")
        except OSError as e:
            raise CredentialStoreError(f"Could not write {self.path}: {e}") from e

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)
