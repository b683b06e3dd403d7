"""Tests for the file-backed credential store."""

from __future__ import annotations

import json
import stat
from pathlib import Path
from unittest.mock import patch

import pytest

from vizmote.core.credentials import CredentialStore, mask_token
from vizmote.domain.errors import StorageError
from vizmote.domain.models import Credential


class TestMaskToken:
    def test_short_token_fully_masked(self) -> None:
        assert mask_token("ab") == "●●"

    def test_four_chars_fully_masked(self) -> None:
        assert mask_token("abcd") == "●●●●"

    def test_long_token_keeps_edges(self) -> None:
        assert mask_token("abcdef") == "ab●●ef"

    def test_empty_token(self) -> None:
        assert mask_token("") == ""
        assert mask_token(None) == ""


class TestLoad:
    def test_missing_file(self, store: CredentialStore) -> None:
        assert store.load() is None
        assert not store.has_credential()

    @pytest.mark.parametrize(
        "content",
        [
            "",
            "not json",
            "[1, 2]",
            "null",
            '{"address": "10.0.0.5"}',
            '{"token": "tok"}',
            '{"address": "", "token": "tok"}',
            '{"address": "10.0.0.5", "token": "  "}',
            '{"address": 5, "token": "tok"}',
        ],
    )
    def test_unusable_content_is_absent(self, store: CredentialStore, content: str) -> None:
        store.path.parent.mkdir(parents=True)
        store.path.write_text(content)
        assert store.load() is None

    def test_unreadable_path_is_absent(self, tmp_path: Path) -> None:
        # A directory where the file should be
        (tmp_path / "creds.json").mkdir()
        assert CredentialStore(tmp_path / "creds.json").load() is None

    def test_extra_fields_ignored(self, store: CredentialStore) -> None:
        store.path.parent.mkdir(parents=True)
        store.path.write_text('{"address": "10.0.0.5", "token": "tok", "ip": "x"}')
        assert store.load() == Credential(address="10.0.0.5", token="tok")


class TestSave:
    def test_round_trip(self, store: CredentialStore, sample_credential: Credential) -> None:
        path = store.save(sample_credential)
        assert path == store.path
        assert store.load() == sample_credential

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        store = CredentialStore(tmp_path / "a" / "b" / "creds.json")
        store.save(Credential(address="10.0.0.5", token="tok"))
        assert store.path.exists()

    def test_file_format(self, store: CredentialStore) -> None:
        store.save(Credential(address="10.0.0.5", token="tok-abc"))
        assert json.loads(store.path.read_text()) == {"address": "10.0.0.5", "token": "tok-abc"}

    def test_file_is_private(self, store: CredentialStore, sample_credential: Credential) -> None:
        store.save(sample_credential)
        assert stat.S_IMODE(store.path.stat().st_mode) == 0o600

    def test_last_write_wins(self, store: CredentialStore) -> None:
        store.save(Credential(address="10.0.0.5", token="first"))
        store.save(Credential(address="10.0.0.6", token="second"))
        assert store.load() == Credential(address="10.0.0.6", token="second")
        assert [p.name for p in store.path.parent.iterdir()] == [store.path.name]

    def test_unwritable_location_raises(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        store = CredentialStore(blocker / "creds.json")
        with pytest.raises(StorageError, match="Cannot save credentials"):
            store.save(Credential(address="10.0.0.5", token="tok"))


class TestBootstrap:
    def test_no_override_loads_stored(
        self, paired_store: CredentialStore, sample_credential: Credential
    ) -> None:
        assert paired_store.bootstrap(None) == sample_credential

    def test_no_override_empty_store(self, store: CredentialStore) -> None:
        assert store.bootstrap(None) is None

    def test_override_written_when_different(
        self, paired_store: CredentialStore
    ) -> None:
        override = Credential(address="10.0.0.9", token="env-token")
        assert paired_store.bootstrap(override) == override
        assert paired_store.load() == override

    def test_override_not_rewritten_when_same(
        self, paired_store: CredentialStore, sample_credential: Credential
    ) -> None:
        with patch.object(paired_store, "save") as save:
            assert paired_store.bootstrap(sample_credential) == sample_credential
        save.assert_not_called()

    def test_override_survives_storage_failure(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        store = CredentialStore(blocker / "creds.json")
        override = Credential(address="10.0.0.9", token="env-token")
        assert store.bootstrap(override) == override
