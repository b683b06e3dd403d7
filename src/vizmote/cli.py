"""Command-line interface for vizmote.

Provides the main entry point for the terminal remote, the browser
remote server, and one-shot pairing/status/command subcommands.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from vizmote.core.commands import Command

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="vizmote",
        description="Remote control for SmartCast displays",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: config/vizmote.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("tui", help="Run the terminal remote")

    web_parser = subparsers.add_parser("web", help="Start the browser remote server")
    web_parser.add_argument("--host", type=str, default=None, help="Bind address")
    web_parser.add_argument("--port", type=int, default=None, help="Listen port")

    pair_parser = subparsers.add_parser("pair", help="Pair with a display")
    pair_parser.add_argument(
        "--address", type=str, required=True,
        help="Display IP address or host:port",
    )
    pair_parser.add_argument(
        "--pin", type=str, default=None,
        help="PIN shown on the display (prompted for when omitted)",
    )

    subparsers.add_parser("status", help="Show pairing status")
    subparsers.add_parser("info", help="Print the display's device info")

    send_parser = subparsers.add_parser("send", help="Send one remote command")
    send_parser.add_argument(
        "name",
        choices=[c.value for c in Command],
        help="Command to send",
    )

    return parser.parse_args(argv)


async def _pair(settings, args) -> int:
    """Run the two pairing steps from the command line."""
    from vizmote.core.remote import RemoteControl
    from vizmote.domain.errors import VizmoteError

    remote = RemoteControl.from_settings(settings)
    try:
        address = await remote.pairing.initiate(args.address)
        print(f"Pairing initiated with {address}.")
        pin = args.pin
        if pin is None:
            pin = await asyncio.to_thread(input, "Enter the PIN shown on your display: ")
        credential = await remote.pairing.commit(pin)
    except VizmoteError as e:
        print(f"Pairing failed: {e}", file=sys.stderr)
        return 1
    finally:
        await remote.close()

    print(f"Paired with {credential.address}. Token saved to {remote.store.path}.")
    return 0


async def _status(settings) -> int:
    from vizmote.core.remote import RemoteControl

    remote = RemoteControl.from_settings(settings)
    try:
        status = remote.status()
        description = remote.session.describe()
    finally:
        await remote.close()

    print(f"Paired:            {'yes' if status.paired else 'no'}")
    print(f"Address:           {status.address or '-'}")
    print(f"Stored credential: {'yes' if status.has_stored_credential else 'no'}")
    if description is not None:
        print(f"Token:             {description.masked_token}")
    print(f"Credentials file:  {remote.store.path}")
    return 0


async def _send(settings, name: str) -> int:
    """Execute a single command and print its result."""
    from vizmote.core.remote import RemoteControl

    remote = RemoteControl.from_settings(settings)
    try:
        result = await remote.dispatcher.execute(name)
    finally:
        await remote.close()

    if not result.ok:
        print(f"{result.description} failed: {result.error}", file=sys.stderr)
        return 1
    if result.data is not None:
        print(json.dumps(result.data, indent=2, default=str))
    else:
        print(f"{result.description}: ok")
    return 0


async def _tui(settings) -> int:
    from vizmote.core.remote import RemoteControl
    from vizmote.tui.app import RemoteTui

    remote = RemoteControl.from_settings(settings)
    try:
        return await RemoteTui(remote).run()
    finally:
        await remote.close()


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the vizmote CLI."""
    args = parse_args(argv)

    if args.command is None:
        parse_args(["--help"])
        return

    from vizmote.config.settings import load_settings
    from vizmote.utils.logging import setup_logging

    settings = load_settings(args.config)

    if args.verbose:
        settings.logging.level = "DEBUG"

    # The terminal remote owns the screen; only log to a file there.
    setup_logging(settings.logging, console=args.command != "tui")

    exit_code = 0
    if args.command == "tui":
        exit_code = asyncio.run(_tui(settings))

    elif args.command == "web":
        logger.info("Starting browser remote")
        from vizmote.web.server import create_app
        import uvicorn
        web = settings.web
        uvicorn.run(
            create_app(settings=settings),
            host=args.host or web.host,
            port=args.port or web.port,
        )

    elif args.command == "pair":
        exit_code = asyncio.run(_pair(settings, args))

    elif args.command == "status":
        exit_code = asyncio.run(_status(settings))

    elif args.command == "info":
        exit_code = asyncio.run(_send(settings, Command.INFO.value))

    elif args.command == "send":
        exit_code = asyncio.run(_send(settings, args.name))

    if exit_code:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
