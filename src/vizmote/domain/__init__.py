"""Domain models for vizmote.

This package contains the core data structures, enumerations, and the
error taxonomy used throughout the system. All models use Pydantic v2
for validation and serialization.
"""

from vizmote.domain.errors import (
    InvalidStateError,
    NotPairedError,
    ProtocolError,
    RemoteError,
    StorageError,
    ValidationError,
    VizmoteError,
)
from vizmote.domain.models import (
    AppTarget,
    CommandResult,
    Credential,
    PairingChallenge,
    PairingCommitResponse,
    PairingState,
    RemoteKey,
    SessionDescription,
    StatusReport,
)

__all__ = [
    "AppTarget",
    "CommandResult",
    "Credential",
    "InvalidStateError",
    "NotPairedError",
    "PairingChallenge",
    "PairingCommitResponse",
    "PairingState",
    "ProtocolError",
    "RemoteError",
    "RemoteKey",
    "SessionDescription",
    "StatusReport",
    "StorageError",
    "ValidationError",
    "VizmoteError",
]
