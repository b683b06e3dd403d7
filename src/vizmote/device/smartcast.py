"""SmartCast REST client.

Speaks the display's local HTTPS API with ``httpx``. Displays ship a
self-signed certificate, so verification is off unless configured.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from vizmote.device.base import DeviceClient
from vizmote.domain.errors import ProtocolError, RemoteError, ValidationError
from vizmote.domain.models import (
    AppTarget,
    PairingChallenge,
    PairingCommitResponse,
    PairingStartResponse,
    RemoteKey,
    SmartCastStatus,
)

logger = logging.getLogger(__name__)

DEFAULT_PORT = 7345
DEFAULT_TIMEOUT = 10.0


def base_url_for(address: str, port: int = DEFAULT_PORT) -> str:
    """Build the API root for ``address``, honouring an explicit ``host:port``."""
    host = address.strip()
    for prefix in ("https://", "http://"):
        if host.startswith(prefix):
            host = host[len(prefix):]
    host = host.rstrip("/")
    if host.startswith("["):
        if "]:" not in host:
            host = f"{host}:{port}"
    elif host.count(":") > 1:
        host = f"[{host}]:{port}"
    elif ":" not in host:
        host = f"{host}:{port}"
    return f"https://{host}"


class SmartCastClient(DeviceClient):
    """Sends pairing, key, app and info requests to a SmartCast display."""

    def __init__(
        self,
        address: str,
        auth_token: str | None = None,
        port: int = DEFAULT_PORT,
        timeout: float = DEFAULT_TIMEOUT,
        verify_tls: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._address = address
        self._auth_token = auth_token
        self._base_url = base_url_for(address, port)
        try:
            httpx.URL(self._base_url)
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=timeout,
                verify=verify_tls,
                transport=transport,
            )
        except httpx.InvalidURL as e:
            raise ValidationError(f"Invalid display address {address!r}: {e}") from e

    @property
    def address(self) -> str:
        return self._address

    @property
    def base_url(self) -> str:
        return self._base_url

    async def begin_pairing(self, device_name: str, device_id: str) -> PairingChallenge:
        payload = await self._put(
            "/pairing/start",
            {"DEVICE_ID": device_id, "DEVICE_NAME": device_name},
        )
        response = self._parse(PairingStartResponse, payload, "/pairing/start")
        self._check_status(response.status, "Pairing start")
        if response.item is None:
            raise ProtocolError("Pairing start did not return a challenge")
        logger.info("Pairing started with %s", self._address)
        return response.item

    async def complete_pairing(
        self, device_id: str, challenge: PairingChallenge, pin: str
    ) -> PairingCommitResponse:
        payload = await self._put(
            "/pairing/pair",
            {
                "DEVICE_ID": device_id,
                "CHALLENGE_TYPE": challenge.challenge_type,
                "RESPONSE_VALUE": pin,
                "PAIRING_REQ_TOKEN": challenge.request_token,
            },
        )
        response = self._parse(PairingCommitResponse, payload, "/pairing/pair")
        self._check_status(response.status, "Pairing")
        return response

    async def cancel_pairing(self, device_id: str, challenge: PairingChallenge) -> None:
        await self._put(
            "/pairing/cancel",
            {
                "DEVICE_ID": device_id,
                "CHALLENGE_TYPE": challenge.challenge_type,
                "RESPONSE_VALUE": "1111",
                "PAIRING_REQ_TOKEN": challenge.request_token,
            },
        )
        logger.info("Pairing cancelled on %s", self._address)

    async def send_key(self, key: RemoteKey) -> None:
        payload = await self._put(
            "/key_command/",
            {"KEYLIST": [{"CODESET": key.codeset, "CODE": key.code, "ACTION": "KEYPRESS"}]},
            authenticated=True,
        )
        self._check_payload(payload, key.name)
        logger.debug("Sent key %s", key.name)

    async def launch_app(self, target: AppTarget) -> None:
        payload = await self._put(
            "/app/launch",
            {
                "VALUE": {
                    "MESSAGE": target.message or None,
                    "NAME_SPACE": target.name_space,
                    "APP_ID": target.app_id,
                }
            },
            authenticated=True,
        )
        self._check_payload(payload, f"Launch {target.label}")
        logger.debug("Launched %s", target.label)

    async def get_device_info(self) -> dict[str, Any]:
        payload = await self._request("GET", "/state/device/deviceinfo", authenticated=True)
        self._check_payload(payload, "Device info")
        items = payload.get("ITEMS")
        if isinstance(items, list) and items and isinstance(items[0], dict):
            value = items[0].get("VALUE")
            return value if isinstance(value, dict) else items[0]
        return {k: v for k, v in payload.items() if k != "STATUS"}

    async def aclose(self) -> None:
        if not self._client.is_closed:
            await self._client.aclose()

    async def _put(self, path: str, body: dict, authenticated: bool = False) -> dict[str, Any]:
        return await self._request("PUT", path, json=body, authenticated=authenticated)

    async def _request(
        self,
        method: str,
        path: str,
        json: dict | None = None,
        authenticated: bool = False,
    ) -> dict[str, Any]:
        """Send one request and return the decoded JSON object."""
        headers = {}
        if authenticated:
            if not self._auth_token:
                raise RemoteError("No auth token for this display")
            headers["AUTH"] = self._auth_token
        try:
            resp = await self._client.request(method, path, json=json, headers=headers)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise RemoteError(
                f"{path} returned HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise RemoteError(
                f"Request to {self._address} failed: {str(e) or type(e).__name__}"
            ) from e
        try:
            payload = resp.json()
        except ValueError as e:
            raise ProtocolError(f"{path} returned a non-JSON body") from e
        if not isinstance(payload, dict):
            raise ProtocolError(f"{path} returned an unexpected body")
        return payload

    @staticmethod
    def _parse(model: type, payload: dict[str, Any], path: str) -> Any:
        try:
            return model.model_validate(payload)
        except PydanticValidationError as e:
            raise ProtocolError(f"{path} returned a malformed response") from e

    def _check_payload(self, payload: dict[str, Any], action: str) -> None:
        status = payload.get("STATUS")
        if not isinstance(status, dict):
            return
        self._check_status(SmartCastStatus.model_validate(status), action)

    @staticmethod
    def _check_status(status: SmartCastStatus | None, action: str) -> None:
        if status is None or status.succeeded:
            return
        reason = status.detail or status.result or "unknown error"
        raise RemoteError(f"{action} failed: {reason}", result=status.result or None)
