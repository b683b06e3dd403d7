"""Abstract base class for the remote display capability.

The pairing state machine, the session and the dispatcher talk to a
display only through this interface, so tests and alternative
transports can stand in for the SmartCast HTTP client.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Protocol

from vizmote.domain.models import (
    AppTarget,
    PairingChallenge,
    PairingCommitResponse,
    RemoteKey,
)

logger = logging.getLogger(__name__)


class DeviceClient(ABC):
    """Remote control capability for one display at a fixed address.

    A client created without an auth token can only run the pairing
    calls; control calls need the token the display issued.

    Example usage::

        async with SmartCastClient("10.0.0.5", auth_token=token) as tv:
            await tv.send_key(RemoteKey.VOLUME_UP)
            await tv.launch_app(AppTarget.NETFLIX)
    """

    @property
    @abstractmethod
    def address(self) -> str:
        ...

    @abstractmethod
    async def begin_pairing(self, device_name: str, device_id: str) -> PairingChallenge:
        """Ask the display to show a PIN for this client.

        Raises:
            RemoteError: If the display refuses or cannot be reached.
            ProtocolError: If the answer carries no challenge.
        """
        ...

    @abstractmethod
    async def complete_pairing(
        self, device_id: str, challenge: PairingChallenge, pin: str
    ) -> PairingCommitResponse:
        """Answer the challenge with the PIN read off the screen.

        The returned response may lack a token; callers decide what
        that means.

        Raises:
            RemoteError: If the display rejects the PIN or is unreachable.
        """
        ...

    @abstractmethod
    async def cancel_pairing(self, device_id: str, challenge: PairingChallenge) -> None:
        """Tell the display to drop an unfinished pairing."""
        ...

    @abstractmethod
    async def send_key(self, key: RemoteKey) -> None:
        """Press a single remote key."""
        ...

    @abstractmethod
    async def launch_app(self, target: AppTarget) -> None:
        """Launch one of the fixed catalog apps."""
        ...

    @abstractmethod
    async def get_device_info(self) -> dict[str, Any]:
        """Fetch the display's device-info payload."""
        ...

    @abstractmethod
    async def aclose(self) -> None:
        """Release transport resources. Safe to call more than once."""
        ...

    async def __aenter__(self) -> DeviceClient:
        return self

    async def __aexit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        await self.aclose()


class DeviceFactory(Protocol):
    """Builds a client for ``address``, optionally bound to a token."""

    def __call__(self, address: str, auth_token: str | None = None) -> DeviceClient:
        ...
