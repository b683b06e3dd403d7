"""Pairing and command-dispatch core for vizmote.

Public API:
    CredentialStore -- File-backed credential persistence
    PairingStateMachine -- Two-phase PIN handshake
    Session -- Active device binding
    Command / CommandDispatcher -- Fixed command vocabulary and executor
    RemoteControl -- Per-process wiring of the above
"""

from vizmote.core.commands import COMMANDS, Command, CommandSpec, get_spec
from vizmote.core.credentials import CredentialStore, mask_token
from vizmote.core.dispatcher import CommandDispatcher
from vizmote.core.pairing import PairingStateMachine
from vizmote.core.remote import RemoteControl
from vizmote.core.session import Session

__all__ = [
    "COMMANDS",
    "Command",
    "CommandDispatcher",
    "CommandSpec",
    "CredentialStore",
    "PairingStateMachine",
    "RemoteControl",
    "Session",
    "get_spec",
    "mask_token",
]
