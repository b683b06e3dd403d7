"""Shared test fixtures for the vizmote test suite.

Provides a fake device factory handing out AsyncMock display clients,
a credential store in a temp directory, and a wired RemoteControl.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable
from unittest.mock import AsyncMock

import pytest

from vizmote.core.credentials import CredentialStore
from vizmote.core.remote import RemoteControl
from vizmote.device.base import DeviceClient
from vizmote.domain.models import Credential, PairingChallenge, PairingCommitResponse


# ---------------------------------------------------------------------------
# Device Fixtures
# ---------------------------------------------------------------------------


def make_device(address: str = "10.0.0.5", token: str = "tok-abc") -> AsyncMock:
    """An AsyncMock display client whose pairing succeeds with ``token``."""
    device = AsyncMock(spec=DeviceClient)
    device.address = address
    device.begin_pairing.return_value = PairingChallenge(challenge_type=1, request_token=42)
    device.complete_pairing.return_value = PairingCommitResponse.model_validate(
        {"STATUS": {"RESULT": "SUCCESS"}, "ITEM": {"AUTH_TOKEN": token}}
    )
    device.get_device_info.return_value = {"name": "Living Room", "model": "M55-F0"}
    return device


class FakeDeviceFactory:
    """DeviceFactory that records every client it builds.

    ``setup`` runs on each new client so a test can script failures.
    """

    def __init__(self) -> None:
        self.created: list[tuple[str, str | None, AsyncMock]] = []
        self.setup: Callable[[AsyncMock, str | None], None] | None = None

    def __call__(self, address: str, auth_token: str | None = None) -> AsyncMock:
        device = make_device(address)
        if self.setup is not None:
            self.setup(device, auth_token)
        self.created.append((address, auth_token, device))
        return device

    @property
    def devices(self) -> list[AsyncMock]:
        return [device for _, _, device in self.created]

    @property
    def last(self) -> AsyncMock:
        return self.created[-1][2]


@pytest.fixture
def device_factory() -> FakeDeviceFactory:
    return FakeDeviceFactory()


# ---------------------------------------------------------------------------
# Store / Remote Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def credentials_path(tmp_path: Path) -> Path:
    return tmp_path / "vizmote" / "credentials.json"


@pytest.fixture
def store(credentials_path: Path) -> CredentialStore:
    """An empty credential store in a temp directory."""
    return CredentialStore(credentials_path)


@pytest.fixture
def sample_credential() -> Credential:
    return Credential(address="10.0.0.5", token="tok-abc")


@pytest.fixture
def paired_store(store: CredentialStore, sample_credential: Credential) -> CredentialStore:
    """A credential store that already holds ``sample_credential``."""
    store.save(sample_credential)
    return store


@pytest.fixture
def remote(store: CredentialStore, device_factory: FakeDeviceFactory) -> RemoteControl:
    """A RemoteControl with no credential."""
    return RemoteControl(store, device_factory)


@pytest.fixture
def paired_remote(
    paired_store: CredentialStore, device_factory: FakeDeviceFactory
) -> RemoteControl:
    """A RemoteControl restored from a stored credential."""
    return RemoteControl(paired_store, device_factory)
