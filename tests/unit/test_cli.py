"""Tests for command-line argument parsing."""

from __future__ import annotations

import pytest

from vizmote.cli import parse_args


class TestParseArgs:
    def test_pair(self) -> None:
        args = parse_args(["pair", "--address", "10.0.0.5", "--pin", "1234"])
        assert (args.command, args.address, args.pin) == ("pair", "10.0.0.5", "1234")

    def test_send(self) -> None:
        args = parse_args(["-v", "send", "volume-up"])
        assert args.verbose
        assert args.name == "volume-up"

    def test_send_rejects_unknown_command(self) -> None:
        with pytest.raises(SystemExit):
            parse_args(["send", "self-destruct"])

    def test_web_overrides(self) -> None:
        args = parse_args(["web", "--port", "8081"])
        assert args.port == 8081
        assert args.host is None
