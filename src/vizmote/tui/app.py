"""Terminal remote.

Renders a header, a key map and a scrolling log with rich, and turns
single key presses into dispatcher commands. With no session it walks
the user through PIN pairing first.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from vizmote.core.commands import Command, get_spec
from vizmote.core.remote import RemoteControl
from vizmote.domain.errors import VizmoteError
from vizmote.domain.models import CommandResult
from vizmote.tui.keys import RawTerminal, read_key

logger = logging.getLogger(__name__)

KEY_BINDINGS: dict[str, Command] = {
    "up": Command.NAV_UP,
    "down": Command.NAV_DOWN,
    "left": Command.NAV_LEFT,
    "right": Command.NAV_RIGHT,
    "space": Command.NAV_SELECT,
    "x": Command.NAV_BACK,
    "escape": Command.MENU,
    "+": Command.VOLUME_UP,
    "=": Command.VOLUME_UP,
    "-": Command.VOLUME_DOWN,
    "s": Command.INPUT_CYCLE,
    "i": Command.INFO,
    "h": Command.APP_HOME,
    "1": Command.APP_YOUTUBE,
    "2": Command.APP_HULU,
    "3": Command.APP_NETFLIX,
    "4": Command.APP_PLEX,
    "5": Command.APP_DISNEY,
    "6": Command.APP_TUBI,
}

POWER_KEY = "p"
QUIT_KEYS = frozenset({"q", "ctrl-c", "ctrl-d"})
INFO_SUMMARY_CHARS = 300

HELP_TEXT = """\
 Power [P]                                   [S] Input
               [H] Home     [I] Info

                      ▲ [Up]
         ◀ [Left]    [Space] OK    ▶ [Right]
                      ▼ [Down]

 Settings [Esc]                           Vol + [+]
 Back [X]                                 Vol - [-]

 Apps: [1] YouTube [2] Hulu [3] Netflix [4] Plex [5] Disney+ [6] Tubi
 Quit [Q]"""


class RemoteTui:
    """Key-driven remote on top of a RemoteControl."""

    def __init__(self, remote: RemoteControl, console: Console | None = None) -> None:
        self._remote = remote
        self._console = console or Console()
        # Last power command sent from this UI; the display is never queried.
        self._power_on: bool | None = None
        self._tasks: set[asyncio.Task] = set()

    def command_for_key(self, key: str) -> Command | None:
        """Map a key name to a command; ``p`` alternates power on/off."""
        if key == POWER_KEY:
            if self._power_on is True:
                self._power_on = False
                return Command.POWER_OFF
            self._power_on = True
            return Command.POWER_ON
        return KEY_BINDINGS.get(key)

    async def run_command(self, command: Command) -> CommandResult:
        description = get_spec(command).description
        self._log(f"→ {description}...", "white")
        result = await self._remote.dispatcher.execute(command)
        if not result.ok:
            self._log(f"✗ {description} failed: {result.error}", "red")
            return result
        self._log(f"✓ {description}", "green")
        if result.data is not None:
            for line in json.dumps(result.data, indent=2, default=str).splitlines():
                self._log(line, "white")
        return result

    async def pair_interactive(self) -> bool:
        """Prompt for address and PIN until paired; False if the user gives up."""
        pairing = self._remote.pairing
        self._console.print("[yellow]No saved display credential found.[/yellow]")
        address = (await self._ask("Enter the IP address of your display: ")).strip()
        try:
            await pairing.initiate(address)
        except VizmoteError as e:
            self._console.print(f"[red]Failed to initiate pairing: {e}[/red]")
            return False

        pin = (await self._ask("Enter the PIN shown on your display: ")).strip()
        try:
            credential = await pairing.commit(pin)
        except VizmoteError as e:
            self._console.print(f"[red]Failed to complete pairing: {e}[/red]")
            await pairing.abandon()
            return False

        self._console.print(
            f"[green]Your display is paired! Token saved to {self._remote.store.path}.[/green]"
        )
        logger.info("Paired interactively with %s", credential.address)
        return True

    async def run(self, fd: int | None = None) -> int:
        """Run until a quit key; returns a process exit code."""
        if not self._remote.session.is_active and not await self.pair_interactive():
            return 1

        fd = sys.stdin.fileno() if fd is None else fd
        self._render_header()
        self._log("Ready. Press Q to quit.", "green")
        self._spawn(self._startup_info())

        with RawTerminal(fd):
            while True:
                key = await asyncio.to_thread(read_key, fd)
                if key in QUIT_KEYS:
                    self._log("Quitting...", "yellow")
                    break
                command = self.command_for_key(key)
                if command is not None:
                    self._spawn(self.run_command(command))

        for task in list(self._tasks):
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        return 0

    async def _startup_info(self) -> None:
        result = await self._remote.dispatcher.execute(Command.INFO)
        if not result.ok:
            self._log(f"✗ Fetching device info failed: {result.error}", "red")
            return
        summary = json.dumps(result.data, default=str)
        suffix = "…" if len(summary) > INFO_SUMMARY_CHARS else ""
        self._log(f"Info: {summary[:INFO_SUMMARY_CHARS]}{suffix}", "white")

    def _render_header(self) -> None:
        description = self._remote.session.describe()
        address = description.address if description else "-"
        token = description.masked_token if description else "none"
        title = Text.assemble(("SmartCast Remote", "bold"), f"  |  IP: {address}  |  Token: {token}")
        self._console.print(Panel(title, style="white on blue"))
        self._console.print(Panel(HELP_TEXT, title="Remote Keys", border_style="grey50"))

    def _log(self, message: str, style: str) -> None:
        self._console.print(Text(message, style=style))

    async def _ask(self, prompt: str) -> str:
        return await asyncio.to_thread(self._console.input, prompt)

    def _spawn(self, coro) -> None:  # type: ignore[no-untyped-def]
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
