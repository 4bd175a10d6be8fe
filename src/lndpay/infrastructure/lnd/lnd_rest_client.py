"""LND REST gateway client implementing ``LightningNodeProtocol``."""

from __future__ import annotations

import base64
import binascii
import logging
import ssl
from typing import Any, Dict, Mapping, Optional, Type, Union
from types import TracebackType
from urllib.parse import quote

import httpx

from ...domain.errors import NodeClientError
from ..http.http_client import AsyncHttpClient

logger = logging.getLogger(__name__)

MACAROON_HEADER = "Grpc-Metadata-macaroon"

# Byte fields LND's REST gateway carries as base64 strings
_RESPONSE_BYTE_FIELDS = ("payment_preimage", "payment_hash")


def _b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode("utf-8")


def _decode_bytes(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        return value


def _route_to_rest(route: Mapping[str, Any]) -> Dict[str, Any]:
    rest_route = dict(route)
    rest_route["hops"] = [
        {key: value for key, value in hop.items() if value is not None}
        for hop in route.get("hops", [])
    ]
    return rest_route


def _normalize_send_response(body: Mapping[str, Any]) -> Dict[str, Any]:
    response = dict(body)
    for field in _RESPONSE_BYTE_FIELDS:
        if field in response:
            response[field] = _decode_bytes(response[field])
    return response


class AsyncLndRestClient:
    """Asynchronous client for the payment endpoints of LND's REST gateway.

    Byte fields are base64 on the wire and ``bytes`` at this boundary. Any
    transport or HTTP status failure is raised as ``NodeClientError``.
    """

    def __init__(
        self,
        base_url: str,
        macaroon_hex: str,
        *,
        tls_cert_path: Optional[str] = None,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        verify: Union[bool, ssl.SSLContext] = True
        if tls_cert_path:
            ctx = ssl.create_default_context()
            ctx.load_verify_locations(tls_cert_path)
            verify = ctx

        self._http = AsyncHttpClient(
            base_url,
            timeout=timeout,
            headers={MACAROON_HEADER: macaroon_hex},
            verify=verify,
            transport=transport,
        )

    async def _call(
        self, method: str, path: str, json: Optional[Dict[str, Any]] = None
    ) -> Optional[Dict[str, Any]]:
        try:
            if method == "GET":
                resp = await self._http.get(path)
            else:
                resp = await self._http.post(path, json=json)
        except httpx.HTTPStatusError as e:
            try:
                message = e.response.json().get("message") or e.response.text
            except ValueError:
                message = e.response.text
            raise NodeClientError(
                f"LND returned {e.response.status_code}: {message}",
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            raise NodeClientError(f"Could not connect to LND: {e}") from e

        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise NodeClientError(f"Invalid JSON from LND: {e}") from e

    async def decode_pay_req(self, pay_req: str) -> Optional[Dict[str, Any]]:
        return await self._call("GET", f"/v1/payreq/{quote(pay_req, safe='')}")

    async def send_to_route_sync(
        self, request: Mapping[str, Any]
    ) -> Optional[Dict[str, Any]]:
        routes = request.get("routes") or []
        if len(routes) > 1:
            logger.debug(
                "LND takes one route per send, submitting the first of %d", len(routes)
            )

        body: Dict[str, Any] = {
            "payment_hash": _b64encode(request["payment_hash"]),
            "route": _route_to_rest(routes[0]) if routes else None,
        }
        result = await self._call("POST", "/v1/channels/transactions/route", body)
        return _normalize_send_response(result) if result is not None else None

    async def send_payment_sync(
        self, request: Mapping[str, Any]
    ) -> Optional[Dict[str, Any]]:
        body = {key: value for key, value in request.items() if value is not None}
        result = await self._call("POST", "/v1/channels/transactions", body)
        return _normalize_send_response(result) if result is not None else None

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "AsyncLndRestClient":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        await self.aclose()
