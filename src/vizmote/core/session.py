"""The active device binding shared by every front end."""

from __future__ import annotations

import logging

from vizmote.core.credentials import CredentialStore, mask_token
from vizmote.device.base import DeviceClient, DeviceFactory
from vizmote.domain.errors import NotPairedError, VizmoteError
from vizmote.domain.models import Credential, SessionDescription

logger = logging.getLogger(__name__)


class Session:
    """Holds the current credential and the client bound to it, or neither.

    The pair is always replaced together. Binding makes no network
    call; an unreachable display surfaces on the first command.
    """

    def __init__(self, device_factory: DeviceFactory) -> None:
        self._device_factory = device_factory
        self._credential: Credential | None = None
        self._device: DeviceClient | None = None

    @classmethod
    def from_store(
        cls,
        store: CredentialStore,
        device_factory: DeviceFactory,
        credential: Credential | None = None,
    ) -> Session:
        """Build a session from ``credential`` or, failing that, the store."""
        session = cls(device_factory)
        credential = credential or store.load()
        if credential is not None:
            try:
                session._attach(credential)
            except VizmoteError as e:
                logger.warning("Cannot restore session for %s: %s", credential.address, e)
            else:
                logger.info("Session restored for %s", credential.address)
        return session

    @property
    def is_active(self) -> bool:
        return self._credential is not None and self._device is not None

    @property
    def credential(self) -> Credential | None:
        return self._credential

    @property
    def device(self) -> DeviceClient:
        if self._device is None:
            raise NotPairedError()
        return self._device

    async def bind(self, credential: Credential) -> Session:
        """Replace any binding with a fresh client for ``credential``."""
        previous = self._device
        self._attach(credential)
        if previous is not None:
            await previous.aclose()
        logger.info("Session bound to %s", credential.address)
        return self

    def describe(self) -> SessionDescription | None:
        if self._credential is None:
            return None
        return SessionDescription(
            address=self._credential.address,
            masked_token=mask_token(self._credential.token),
        )

    async def close(self) -> None:
        device, self._device = self._device, None
        self._credential = None
        if device is not None:
            await device.aclose()

    def _attach(self, credential: Credential) -> None:
        self._device = self._device_factory(credential.address, auth_token=credential.token)
        self._credential = credential
