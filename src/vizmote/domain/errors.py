"""Error taxonomy shared by the core and both front ends.

Every failure that can reach a front end is one of these. Front ends
only ever show ``str(error)``; the class tells them how to react.
"""

from __future__ import annotations


class VizmoteError(Exception):
    """Base class for all vizmote errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(VizmoteError):
    """A required input (address, PIN) was empty or missing."""


class InvalidStateError(VizmoteError):
    """A pairing step was attempted out of order."""


class ProtocolError(VizmoteError):
    """The device answered, but the response was malformed or incomplete."""


class RemoteError(VizmoteError):
    """The device call itself failed (unreachable, rejected, busy)."""

    def __init__(self, message: str, result: str | None = None) -> None:
        super().__init__(message)
        self.result = result


class StorageError(VizmoteError):
    """The credential could not be persisted."""


class NotPairedError(VizmoteError):
    """A command was attempted with no active session."""

    def __init__(self, message: str = "Not paired") -> None:
        super().__init__(message)
