"""Tests for the browser remote HTTP API."""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from vizmote.core.credentials import CredentialStore
from vizmote.core.remote import RemoteControl
from vizmote.domain.errors import RemoteError
from vizmote.domain.models import Credential, PairingCommitResponse, RemoteKey
from vizmote.web.server import create_app


@pytest.fixture
def client(remote: RemoteControl) -> TestClient:
    """A test client around an unpaired RemoteControl."""
    return TestClient(create_app(remote=remote))


@pytest.fixture
def paired_client(paired_remote: RemoteControl) -> TestClient:
    return TestClient(create_app(remote=paired_remote))


class TestIndex:
    def test_serves_page(self, client: TestClient) -> None:
        resp = client.get("/")
        assert resp.status_code == 200
        assert "text/html" in resp.headers["content-type"]
        assert "/api/pair/initiate" in resp.text


class TestStatus:
    def test_unpaired(self, client: TestClient) -> None:
        resp = client.get("/api/status")
        assert resp.status_code == 200
        assert resp.json() == {
            "ok": True,
            "paired": False,
            "address": None,
            "has_stored_credential": False,
            "pairing_state": "idle",
        }

    def test_paired(self, paired_client: TestClient) -> None:
        data = paired_client.get("/api/status").json()
        assert data["paired"] is True
        assert data["address"] == "10.0.0.5"
        assert data["has_stored_credential"] is True

    def test_ping(self, paired_client: TestClient) -> None:
        assert paired_client.get("/api/ping").json() == {"ok": True, "address": "10.0.0.5"}


class TestStartup:
    def test_builds_remote_from_config_file(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        creds = tmp_path / "creds.json"
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "vizmote.yaml").write_text(f"credentials:\n  path: {creds}\n")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("VIZIO_IP", "10.0.0.9")
        monkeypatch.setenv("VIZIO_TOKEN", "env-token")

        with TestClient(create_app()) as client:
            data = client.get("/api/status").json()
        assert data["paired"] is True
        assert data["address"] == "10.0.0.9"
        assert creds.exists()


class TestPairing:
    def test_full_flow(self, client: TestClient, store: CredentialStore) -> None:
        resp = client.post("/api/pair/initiate", json={"address": "10.0.0.5"})
        assert resp.status_code == 200
        assert resp.json() == {"ok": True, "address": "10.0.0.5", "state": "awaiting_pin"}

        resp = client.post("/api/pair/commit", json={"pin": "1234"})
        assert resp.status_code == 200
        assert resp.json()["address"] == "10.0.0.5"
        assert store.load() == Credential(address="10.0.0.5", token="tok-abc")
        assert client.get("/api/status").json()["paired"] is True

    def test_legacy_ip_field(self, client: TestClient) -> None:
        resp = client.post("/api/pair/initiate", json={"ip": "10.0.0.5"})
        assert resp.status_code == 200

    def test_missing_address(self, client: TestClient) -> None:
        resp = client.post("/api/pair/initiate", json={})
        assert resp.status_code == 400
        assert resp.json() == {"ok": False, "error": "IP is required"}

    def test_already_paired(self, paired_client: TestClient) -> None:
        resp = paired_client.post("/api/pair/initiate", json={"address": "10.0.0.6"})
        assert resp.status_code == 409
        assert resp.json()["error"] == "Already paired"

    def test_commit_without_initiate(self, client: TestClient) -> None:
        resp = client.post("/api/pair/commit", json={"pin": "1234"})
        assert resp.status_code == 409
        assert resp.json() == {"ok": False, "error": "No pairing session in progress"}

    def test_missing_pin(self, client: TestClient) -> None:
        client.post("/api/pair/initiate", json={"address": "10.0.0.5"})
        resp = client.post("/api/pair/commit", json={})
        assert resp.status_code == 400
        assert resp.json()["error"] == "PIN is required"

    def test_initiate_unreachable(self, client: TestClient, device_factory) -> None:  # type: ignore[no-untyped-def]
        device_factory.setup = lambda d, _: setattr(
            d.begin_pairing, "side_effect", RemoteError("Request to 10.0.0.5 failed: timed out")
        )
        resp = client.post("/api/pair/initiate", json={"address": "10.0.0.5"})
        assert resp.status_code == 502
        assert resp.json() == {"ok": False, "error": "Request to 10.0.0.5 failed: timed out"}

    def test_commit_without_token(self, client: TestClient, device_factory, store: CredentialStore) -> None:  # type: ignore[no-untyped-def]
        client.post("/api/pair/initiate", json={"address": "10.0.0.5"})
        device_factory.last.complete_pairing.return_value = PairingCommitResponse()
        resp = client.post("/api/pair/commit", json={"pin": "1234"})
        assert resp.status_code == 502
        assert resp.json()["error"] == "Pairing did not return an auth token"
        assert store.load() is None

    def test_cancel(self, client: TestClient) -> None:
        client.post("/api/pair/initiate", json={"address": "10.0.0.5"})
        resp = client.post("/api/pair/cancel")
        assert resp.json() == {"ok": True, "state": "idle"}
        assert client.post("/api/pair/commit", json={"pin": "1234"}).status_code == 409


class TestCommands:
    def test_not_paired(self, client: TestClient) -> None:
        resp = client.post("/api/power/on")
        assert resp.status_code == 400
        assert resp.json() == {
            "ok": False,
            "description": "Power On",
            "error": "Not paired",
            "error_type": "NotPairedError",
        }

    @pytest.mark.parametrize(
        "path, key",
        [
            ("/api/nav/up", RemoteKey.UP),
            ("/api/nav/select", RemoteKey.OK),
            ("/api/menu", RemoteKey.MENU),
            ("/api/volume/down", RemoteKey.VOLUME_DOWN),
            ("/api/power/off", RemoteKey.POWER_OFF),
            ("/api/input/cycle", RemoteKey.INPUT_CYCLE),
        ],
    )
    def test_key_routes(self, paired_client: TestClient, device_factory, path: str, key: RemoteKey) -> None:  # type: ignore[no-untyped-def]
        resp = paired_client.post(path)
        assert resp.status_code == 200
        assert resp.json()["ok"] is True
        device_factory.last.send_key.assert_awaited_once_with(key)

    def test_app_route(self, paired_client: TestClient) -> None:
        resp = paired_client.post("/api/app/youtube")
        assert resp.json() == {"ok": True, "description": "YouTube"}

    def test_info(self, paired_client: TestClient) -> None:
        resp = paired_client.get("/api/info")
        assert resp.status_code == 200
        assert resp.json()["data"] == {"name": "Living Room", "model": "M55-F0"}

    def test_info_not_paired(self, client: TestClient) -> None:
        resp = client.get("/api/info")
        assert resp.status_code == 400
        assert resp.json()["error"] == "Not paired"

    def test_remote_failure(self, paired_client: TestClient, device_factory) -> None:  # type: ignore[no-untyped-def]
        device_factory.last.send_key.side_effect = RemoteError("Key command failed: BUSY")
        resp = paired_client.post("/api/nav/left")
        assert resp.status_code == 502
        assert resp.json()["error"] == "Key command failed: BUSY"
        assert paired_client.get("/api/status").json()["paired"] is True

    def test_commands_are_post_only(self, paired_client: TestClient) -> None:
        assert paired_client.get("/api/power/on").status_code == 405
