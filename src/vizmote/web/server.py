"""FastAPI server for the browser remote.

One endpoint per operation: GET for status and info, POST for pairing
steps and commands. Every failure body is ``{"ok": false, "error": ...}``.

    GET  /api/status        -> {"paired", "address", "has_stored_credential"}
    GET  /api/ping          -> {"ok": true, "address": ...}
    POST /api/pair/initiate <- {"address": "10.0.0.5"}
    POST /api/pair/commit   <- {"pin": "1234"}
    POST /api/pair/cancel
    GET  /api/info
    POST /api/nav/{up,down,left,right,select,back}, /api/menu,
         /api/volume/{up,down}, /api/power/{on,off}, /api/input/cycle,
         /api/app/{home,youtube,hulu,netflix,plex,disney,tubi}
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import AliasChoices, BaseModel, Field

from vizmote.config.settings import Settings, load_settings
from vizmote.core.commands import COMMANDS, Command, CommandSpec
from vizmote.core.remote import RemoteControl
from vizmote.domain.errors import (
    InvalidStateError,
    NotPairedError,
    ProtocolError,
    RemoteError,
    StorageError,
    ValidationError,
    VizmoteError,
)
from vizmote.domain.models import CommandResult, StatusReport
from vizmote.web.page import INDEX_HTML

logger = logging.getLogger(__name__)

API_PREFIX = "/api"

ERROR_STATUS: dict[type[VizmoteError], int] = {
    ValidationError: 400,
    NotPairedError: 400,
    InvalidStateError: 409,
    RemoteError: 502,
    ProtocolError: 502,
    StorageError: 500,
}


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------

class PairInitiateRequest(BaseModel):
    address: str = Field(
        default="",
        validation_alias=AliasChoices("address", "ip"),
        description="Display IP address or host:port",
    )


class PairCommitRequest(BaseModel):
    pin: str = Field(default="", description="PIN shown on the display")


class PairResponse(BaseModel):
    ok: bool = True
    address: str
    state: str


class StatusResponse(StatusReport):
    ok: bool = True
    pairing_state: str


def status_for(error: VizmoteError) -> int:
    for cls in type(error).__mro__:
        if cls in ERROR_STATUS:
            return ERROR_STATUS[cls]
    return 500


def status_for_result(result: CommandResult) -> int:
    if result.ok:
        return 200
    if result.error_type == NotPairedError.__name__:
        return 400
    return 502


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------

def create_app(
    remote: RemoteControl | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Create the browser remote application.

    Args:
        remote: Optional pre-built RemoteControl (for testing). When
                omitted one is built from ``settings`` at startup.
        settings: Settings used to build the RemoteControl.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        r = app.state.remote
        if r is None:
            r = RemoteControl.from_settings(settings or load_settings())
            app.state.remote = r
        status = r.status()
        if status.paired:
            logger.info("Web UI ready (paired, display %s)", status.address)
        else:
            logger.info("Web UI ready (not paired, open the Web UI to pair)")
        yield
        await r.close()
        logger.info("Web UI stopped")

    app = FastAPI(
        title="vizmote",
        description="Browser remote for SmartCast displays",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.remote = remote

    def _remote() -> RemoteControl:
        return app.state.remote

    @app.exception_handler(VizmoteError)
    async def handle_vizmote_error(request: Request, exc: VizmoteError) -> JSONResponse:
        return JSONResponse(
            status_code=status_for(exc),
            content={"ok": False, "error": str(exc)},
        )

    @app.get("/", response_class=HTMLResponse)
    async def index() -> str:
        return INDEX_HTML

    @app.get(f"{API_PREFIX}/status")
    async def status() -> StatusResponse:
        r = _remote()
        return StatusResponse(
            **r.status().model_dump(),
            pairing_state=r.pairing.state.value,
        )

    @app.get(f"{API_PREFIX}/ping")
    async def ping() -> dict[str, Any]:
        credential = _remote().session.credential
        return {"ok": True, "address": credential.address if credential else None}

    # -------------------------------------------------------------------
    # Pairing endpoints
    # -------------------------------------------------------------------

    @app.post(f"{API_PREFIX}/pair/initiate")
    async def pair_initiate(request: PairInitiateRequest) -> PairResponse:
        r = _remote()
        if r.session.is_active:
            raise InvalidStateError("Already paired")
        address = await r.pairing.initiate(request.address)
        return PairResponse(address=address, state=r.pairing.state.value)

    @app.post(f"{API_PREFIX}/pair/commit")
    async def pair_commit(request: PairCommitRequest) -> PairResponse:
        r = _remote()
        credential = await r.pairing.commit(request.pin)
        return PairResponse(address=credential.address, state=r.pairing.state.value)

    @app.post(f"{API_PREFIX}/pair/cancel")
    async def pair_cancel() -> dict[str, Any]:
        r = _remote()
        await r.pairing.abandon()
        return {"ok": True, "state": r.pairing.state.value}

    # -------------------------------------------------------------------
    # Command endpoints
    # -------------------------------------------------------------------

    def _command_route(spec: CommandSpec) -> Callable[[], Awaitable[JSONResponse]]:
        async def run_command() -> JSONResponse:
            result = await _remote().dispatcher.execute(spec.command)
            return JSONResponse(
                status_code=status_for_result(result),
                content=result.model_dump(exclude_none=True),
            )

        run_command.__name__ = f"command_{spec.command.name.lower()}"
        return run_command

    for spec in COMMANDS.values():
        method = "GET" if spec.command is Command.INFO else "POST"
        app.add_api_route(
            f"{API_PREFIX}{spec.path}",
            _command_route(spec),
            methods=[method],
            summary=spec.description,
        )

    return app


# ---------------------------------------------------------------------------
# Standalone entry point
# ---------------------------------------------------------------------------

def main(settings: Settings | None = None) -> None:
    """Run the browser remote."""
    settings = settings or load_settings()
    app = create_app(settings=settings)
    uvicorn.run(app, host=settings.web.host, port=settings.web.port)


if __name__ == "__main__":
    main()
