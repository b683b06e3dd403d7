"""File-backed store for the single device credential.

The record is a small JSON object ``{"address": ..., "token": ...}``.
Reads fail soft (anything unusable means "no credential"); writes are
atomic and raise StorageError.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from vizmote.domain.errors import StorageError
from vizmote.domain.models import Credential

logger = logging.getLogger(__name__)

MASK_CHAR = "●"


def mask_token(token: str | None) -> str:
    """Redact a token for display.

    Tokens of four characters or fewer are fully masked; longer ones
    keep their first and last two characters.
    """
    if not token:
        return ""
    if len(token) <= 4:
        return MASK_CHAR * len(token)
    return token[:2] + MASK_CHAR * (len(token) - 4) + token[-2:]


class CredentialStore:
    """Persists one Credential to a JSON file."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Credential | None:
        """Read the stored credential, or None if there is no usable one."""
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning("Cannot read credentials at %s: %s", self._path, e)
            return None

        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Ignoring malformed credentials file %s", self._path)
            return None
        if not isinstance(data, dict):
            return None

        address = data.get("address")
        token = data.get("token")
        if not isinstance(address, str) or not isinstance(token, str):
            return None
        try:
            return Credential(address=address, token=token)
        except PydanticValidationError:
            return None

    def has_credential(self) -> bool:
        return self.load() is not None

    def save(self, credential: Credential) -> Path:
        """Write ``credential``, replacing any previous record.

        Returns:
            The path written.

        Raises:
            StorageError: If the directory or file cannot be written.
        """
        content = json.dumps(
            {"address": credential.address, "token": credential.token}, indent=2
        )
        tmp_name = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.chmod(tmp_name, 0o600)
            os.replace(tmp_name, self._path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Cannot save credentials to {self._path}: {e.strerror or e}") from e

        logger.info(
            "Saved credentials for %s (token %s) to %s",
            credential.address, mask_token(credential.token), self._path,
        )
        return self._path

    def bootstrap(self, override: Credential | None) -> Credential | None:
        """Resolve the startup credential.

        A trusted override wins over the stored record and is written
        through when it differs. If writing fails the override is still
        returned so the process can run with it.
        """
        if override is None:
            return self.load()

        existing = self.load()
        if existing != override:
            try:
                self.save(override)
            except StorageError as e:
                logger.warning("Using credential override without persisting it: %s", e)
        return override
