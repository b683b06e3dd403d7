"""Core domain models for vizmote.

These models represent the data flowing through the system: the stored
credential, the pairing handshake, the fixed key and app tables of the
SmartCast protocol, and the results handed back to front ends.
"""

from __future__ import annotations

import enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class PairingState(str, enum.Enum):
    """Position of the pairing handshake."""

    IDLE = "idle"
    INITIATING = "initiating"
    AWAITING_PIN = "awaiting_pin"
    COMMITTING = "committing"
    PAIRED = "paired"
    FAILED = "failed"


class RemoteKey(enum.Enum):
    """Remote-control keys as SmartCast ``(codeset, code)`` pairs."""

    UP = (3, 8)
    DOWN = (3, 0)
    LEFT = (3, 1)
    RIGHT = (3, 7)
    OK = (3, 2)
    BACK = (4, 0)
    MENU = (4, 8)
    VOLUME_DOWN = (5, 0)
    VOLUME_UP = (5, 1)
    INPUT_CYCLE = (7, 1)
    POWER_OFF = (11, 0)
    POWER_ON = (11, 1)

    def __init__(self, codeset: int, code: int) -> None:
        self.codeset = codeset
        self.code = code


class AppTarget(enum.Enum):
    """Launchable apps, each a fixed ``(name_space, app_id, message)`` triple."""

    HOME = ("Home", 4, "1", "")
    YOUTUBE = ("YouTube", 5, "1", "")
    HULU = ("Hulu", 2, "3", "")
    NETFLIX = ("Netflix", 3, "1", "")
    PLEX = ("Plex", 2, "9", "")
    DISNEY = ("Disney+", 2, "75", "")
    TUBI = ("Tubi", 2, "61", "")

    def __init__(self, label: str, name_space: int, app_id: str, message: str) -> None:
        self.label = label
        self.name_space = name_space
        self.app_id = app_id
        self.message = message


# ---------------------------------------------------------------------------
# Credential / Session Models
# ---------------------------------------------------------------------------


class Credential(BaseModel):
    """Device address plus the auth token it issued during pairing."""

    model_config = ConfigDict(frozen=True)

    address: str = Field(min_length=1, description="Display host or host:port")
    token: str = Field(min_length=1, description="Auth token issued by the display")

    @field_validator("address", "token", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    def __repr__(self) -> str:
        return f"Credential(address={self.address!r}, token=<redacted>)"

    __str__ = __repr__


class SessionDescription(BaseModel):
    """Display-safe view of the active session."""

    model_config = ConfigDict(frozen=True)

    address: str
    masked_token: str


class StatusReport(BaseModel):
    paired: bool
    address: str | None = None
    has_stored_credential: bool = False


class CommandResult(BaseModel):
    """Outcome of a single dispatched command.

    Every command resolves to this shape; ``error`` is set iff ``ok``
    is false.
    """

    ok: bool
    description: str
    error: str | None = None
    error_type: str | None = None
    data: dict[str, Any] | None = None

    @classmethod
    def success(cls, description: str, data: dict[str, Any] | None = None) -> CommandResult:
        return cls(ok=True, description=description, data=data)

    @classmethod
    def failure(cls, description: str, error: Exception) -> CommandResult:
        return cls(
            ok=False,
            description=description,
            error=str(error) or type(error).__name__,
            error_type=type(error).__name__,
        )


# ---------------------------------------------------------------------------
# SmartCast Wire Schemas
# ---------------------------------------------------------------------------


class SmartCastStatus(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    result: str = Field(default="", alias="RESULT")
    detail: str | None = Field(default=None, alias="DETAIL")

    @property
    def succeeded(self) -> bool:
        return self.result.upper() == "SUCCESS"


class PairingChallenge(BaseModel):
    """Live handle of a started pairing, as returned by ``/pairing/start``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    challenge_type: int = Field(default=1, alias="CHALLENGE_TYPE")
    request_token: int = Field(alias="PAIRING_REQ_TOKEN")


class PairingStartResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    status: SmartCastStatus | None = Field(default=None, alias="STATUS")
    item: PairingChallenge | None = Field(default=None, alias="ITEM")


class PairingTokenItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    auth_token: str | None = Field(default=None, alias="AUTH_TOKEN")


class PairingCommitResponse(BaseModel):
    """Response of ``/pairing/pair``; the token is optional on the wire."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    status: SmartCastStatus | None = Field(default=None, alias="STATUS")
    item: PairingTokenItem | None = Field(default=None, alias="ITEM")

    @property
    def auth_token(self) -> str | None:
        if self.item is None or not self.item.auth_token:
            return None
        return self.item.auth_token
