"""The fixed command vocabulary.

Each Command maps to exactly one device operation with arguments fixed
here, never supplied by a caller.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

from vizmote.device.base import DeviceClient
from vizmote.domain.models import AppTarget, RemoteKey


class Command(str, enum.Enum):
    NAV_UP = "nav-up"
    NAV_DOWN = "nav-down"
    NAV_LEFT = "nav-left"
    NAV_RIGHT = "nav-right"
    NAV_SELECT = "nav-select"
    NAV_BACK = "nav-back"
    MENU = "menu"
    VOLUME_UP = "volume-up"
    VOLUME_DOWN = "volume-down"
    POWER_ON = "power-on"
    POWER_OFF = "power-off"
    INPUT_CYCLE = "input-cycle"
    INFO = "info"
    APP_HOME = "app-home"
    APP_YOUTUBE = "app-youtube"
    APP_HULU = "app-hulu"
    APP_NETFLIX = "app-netflix"
    APP_PLEX = "app-plex"
    APP_DISNEY = "app-disney"
    APP_TUBI = "app-tubi"


@dataclass(frozen=True)
class CommandSpec:
    """Binding of a command to its single device operation.

    Exactly one of ``key`` / ``app`` is set, or neither for the info
    query.
    """

    command: Command
    description: str
    path: str
    key: RemoteKey | None = None
    app: AppTarget | None = None

    @property
    def is_query(self) -> bool:
        return self.key is None and self.app is None

    async def invoke(self, device: DeviceClient) -> dict[str, Any] | None:
        if self.key is not None:
            await device.send_key(self.key)
            return None
        if self.app is not None:
            await device.launch_app(self.app)
            return None
        return await device.get_device_info()


def _key(command: Command, description: str, path: str, key: RemoteKey) -> CommandSpec:
    return CommandSpec(command=command, description=description, path=path, key=key)


def _app(command: Command, app: AppTarget) -> CommandSpec:
    return CommandSpec(
        command=command,
        description=app.label,
        path=f"/app/{app.name.lower()}",
        app=app,
    )


COMMANDS: dict[Command, CommandSpec] = {
    spec.command: spec
    for spec in (
        _key(Command.NAV_UP, "Navigate Up", "/nav/up", RemoteKey.UP),
        _key(Command.NAV_DOWN, "Navigate Down", "/nav/down", RemoteKey.DOWN),
        _key(Command.NAV_LEFT, "Navigate Left", "/nav/left", RemoteKey.LEFT),
        _key(Command.NAV_RIGHT, "Navigate Right", "/nav/right", RemoteKey.RIGHT),
        _key(Command.NAV_SELECT, "OK", "/nav/select", RemoteKey.OK),
        _key(Command.NAV_BACK, "Back", "/nav/back", RemoteKey.BACK),
        _key(Command.MENU, "Settings", "/menu", RemoteKey.MENU),
        _key(Command.VOLUME_UP, "Volume Up", "/volume/up", RemoteKey.VOLUME_UP),
        _key(Command.VOLUME_DOWN, "Volume Down", "/volume/down", RemoteKey.VOLUME_DOWN),
        _key(Command.POWER_ON, "Power On", "/power/on", RemoteKey.POWER_ON),
        _key(Command.POWER_OFF, "Power Off", "/power/off", RemoteKey.POWER_OFF),
        _key(Command.INPUT_CYCLE, "Input Cycle", "/input/cycle", RemoteKey.INPUT_CYCLE),
        CommandSpec(command=Command.INFO, description="Info", path="/info"),
        _app(Command.APP_HOME, AppTarget.HOME),
        _app(Command.APP_YOUTUBE, AppTarget.YOUTUBE),
        _app(Command.APP_HULU, AppTarget.HULU),
        _app(Command.APP_NETFLIX, AppTarget.NETFLIX),
        _app(Command.APP_PLEX, AppTarget.PLEX),
        _app(Command.APP_DISNEY, AppTarget.DISNEY),
        _app(Command.APP_TUBI, AppTarget.TUBI),
    )
}


def get_spec(command: Command | str) -> CommandSpec:
    """Look up a command by enum member or name (e.g. ``"nav-up"``).

    Raises:
        ValueError: If the name is not in the vocabulary.
    """
    return COMMANDS[Command(command)]
