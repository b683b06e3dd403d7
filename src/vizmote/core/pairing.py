"""PIN pairing handshake with a display.

Pairing is two-phase across a human gap: ``initiate`` makes the display
show a PIN, ``commit`` answers with the PIN the user read off the
screen. All transitions are serialized by one lock, so a commit always
answers the most recent initiate and a second commit finds nothing
pending.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from vizmote.core.credentials import CredentialStore, mask_token
from vizmote.core.session import Session
from vizmote.device.base import DeviceClient, DeviceFactory
from vizmote.domain.errors import (
    InvalidStateError,
    ProtocolError,
    RemoteError,
    StorageError,
    ValidationError,
    VizmoteError,
)
from vizmote.domain.models import Credential, PairingChallenge, PairingState

logger = logging.getLogger(__name__)

CLIENT_NAME = "VizMote"
CLIENT_ID = "9727"


@dataclass
class PendingPairing:
    """A started, uncommitted handshake."""

    address: str
    client: DeviceClient
    challenge: PairingChallenge


class PairingStateMachine:
    """Drives initiate -> PIN -> commit and produces one Credential.

    Args:
        store: Where a committed credential is persisted.
        session: Rebound to the new credential on success.
        device_factory: Builds the unauthenticated client used for the
                        handshake.
    """

    def __init__(
        self,
        store: CredentialStore,
        session: Session,
        device_factory: DeviceFactory,
    ) -> None:
        self._store = store
        self._session = session
        self._device_factory = device_factory
        self._state = PairingState.IDLE
        self._pending: PendingPairing | None = None
        self._last_error: VizmoteError | None = None
        self._lock = asyncio.Lock()

    @property
    def state(self) -> PairingState:
        return self._state

    @property
    def pending_address(self) -> str | None:
        return self._pending.address if self._pending else None

    @property
    def last_error(self) -> VizmoteError | None:
        return self._last_error

    async def initiate(self, address: str) -> str:
        """Start a handshake with ``address``; supersedes any pending one.

        Returns:
            The normalized address the display is now showing a PIN for.

        Raises:
            ValidationError: If ``address`` is empty or not a usable host.
            RemoteError: If the display could not start pairing.
            ProtocolError: If the display's answer was unusable.
        """
        address = (address or "").strip()
        if not address:
            raise ValidationError("IP is required")

        async with self._lock:
            await self._drop_pending()
            self._state = PairingState.INITIATING
            self._last_error = None

            client: DeviceClient | None = None
            try:
                client = self._device_factory(address)
                challenge = await client.begin_pairing(CLIENT_NAME, CLIENT_ID)
            except Exception as e:
                if client is not None:
                    await client.aclose()
                raise self._fail(e, f"Failed to initiate pairing at {address}")

            self._pending = PendingPairing(address=address, client=client, challenge=challenge)
            self._state = PairingState.AWAITING_PIN
            logger.info("Pairing initiated with %s, awaiting PIN", address)
            return address

    async def commit(self, pin: str) -> Credential:
        """Answer the pending challenge with ``pin``.

        Returns:
            The new credential, already saved and bound to the session.

        Raises:
            ValidationError: If ``pin`` is empty.
            InvalidStateError: If no handshake is awaiting a PIN.
            RemoteError: If the display rejected the PIN or failed.
            ProtocolError: If pairing returned no auth token.
            StorageError: If the credential could not be saved.
        """
        pin = (pin or "").strip()

        async with self._lock:
            pending = self._pending
            if self._state is not PairingState.AWAITING_PIN or pending is None:
                raise InvalidStateError("No pairing session in progress")
            if not pin:
                raise ValidationError("PIN is required")

            self._state = PairingState.COMMITTING
            self._pending = None
            try:
                response = await pending.client.complete_pairing(
                    CLIENT_ID, pending.challenge, pin
                )
                token = (response.auth_token or "").strip()
                if not token:
                    raise ProtocolError("Pairing did not return an auth token")
                credential = Credential(address=pending.address, token=token)
                self._store.save(credential)
            except Exception as e:
                raise self._fail(e, "Failed to complete pairing")
            finally:
                await pending.client.aclose()

            await self._session.bind(credential)
            self._state = PairingState.PAIRED
            logger.info(
                "Paired with %s (token %s)", credential.address, mask_token(credential.token)
            )
            return credential

    async def abandon(self) -> None:
        """Drop any pending handshake and return to IDLE."""
        async with self._lock:
            await self._drop_pending(cancel=True)
            self._state = PairingState.IDLE
            self._last_error = None

    async def _drop_pending(self, cancel: bool = False) -> None:
        pending, self._pending = self._pending, None
        if pending is None:
            return
        logger.info("Discarding pending pairing with %s", pending.address)
        if cancel:
            try:
                await pending.client.cancel_pairing(CLIENT_ID, pending.challenge)
            except VizmoteError as e:
                logger.warning("Display did not acknowledge pairing cancel: %s", e)
        await pending.client.aclose()

    def _fail(self, error: Exception, context: str) -> VizmoteError:
        """Record a terminal failure and return the taxonomy error to raise."""
        if isinstance(error, (RemoteError, ProtocolError, StorageError, ValidationError)):
            failure: VizmoteError = error
        else:
            failure = RemoteError(f"{context}: {error}")
        self._state = PairingState.FAILED
        self._last_error = failure
        logger.warning("%s: %s", context, failure)
        return failure
