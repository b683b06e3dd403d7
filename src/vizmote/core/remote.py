"""Per-process wiring of store, session, pairing and dispatcher."""

from __future__ import annotations

import logging
from functools import partial

from vizmote.config.settings import Settings
from vizmote.core.credentials import CredentialStore
from vizmote.core.dispatcher import CommandDispatcher
from vizmote.core.pairing import PairingStateMachine
from vizmote.core.session import Session
from vizmote.device.base import DeviceFactory
from vizmote.domain.models import Credential, StatusReport

logger = logging.getLogger(__name__)


class RemoteControl:
    """Everything a front end needs, owned by one object.

    Front ends hold a RemoteControl instead of module-level state, so
    several can coexist in one process (tests do this).
    """

    def __init__(
        self,
        store: CredentialStore,
        device_factory: DeviceFactory,
        initial: Credential | None = None,
    ) -> None:
        self.store = store
        self.session = Session.from_store(store, device_factory, credential=initial)
        self.pairing = PairingStateMachine(store, self.session, device_factory)
        self.dispatcher = CommandDispatcher(self.session)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        device_factory: DeviceFactory | None = None,
    ) -> RemoteControl:
        """Build from settings, applying the VIZIO_IP/VIZIO_TOKEN override."""
        if device_factory is None:
            from vizmote.device.smartcast import SmartCastClient

            device_factory = partial(
                SmartCastClient,
                port=settings.device.port,
                timeout=settings.device.timeout,
                verify_tls=settings.device.verify_tls,
            )

        store = CredentialStore(settings.credentials.path)
        override = None
        token = settings.device.token.get_secret_value()
        if settings.device.address and token:
            override = Credential(address=settings.device.address, token=token)
        return cls(store, device_factory, initial=store.bootstrap(override))

    def status(self) -> StatusReport:
        stored = self.store.load()
        active = self.session.credential
        address = active.address if active else (stored.address if stored else None)
        return StatusReport(
            paired=self.session.is_active,
            address=address,
            has_stored_credential=stored is not None,
        )

    async def close(self) -> None:
        await self.pairing.abandon()
        await self.session.close()
