"""Executes vocabulary commands against the active session."""

from __future__ import annotations

import logging

from vizmote.core.commands import Command, get_spec
from vizmote.core.session import Session
from vizmote.domain.errors import NotPairedError, ValidationError, VizmoteError
from vizmote.domain.models import CommandResult

logger = logging.getLogger(__name__)


class CommandDispatcher:
    """Runs one command, one device call, one CommandResult.

    Never raises past ``execute`` and never retries; front ends only
    display what comes back. Commands are not serialized against each
    other.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        return self._session

    async def execute(self, command: Command | str) -> CommandResult:
        try:
            spec = get_spec(command)
        except ValueError:
            logger.warning("Unknown command %r", command)
            return CommandResult.failure(str(command), ValidationError(f"Unknown command: {command}"))
        if not self._session.is_active:
            logger.debug("%s rejected: not paired", spec.description)
            return CommandResult.failure(spec.description, NotPairedError())

        device = self._session.device
        try:
            data = await spec.invoke(device)
        except VizmoteError as e:
            logger.warning("%s failed: %s", spec.description, e)
            return CommandResult.failure(spec.description, e)
        except Exception as e:
            logger.exception("%s failed unexpectedly", spec.description)
            return CommandResult.failure(spec.description, e)

        logger.info("%s ok", spec.description)
        return CommandResult.success(spec.description, data=data)
