"""Tests for the LND REST client against a mocked transport."""

from __future__ import annotations

import base64
import json
from typing import Any, Callable, Dict, List

import httpx
import pytest

from lndpay.domain.errors import NodeClientError
from lndpay.infrastructure.lnd.lnd_rest_client import (
    MACAROON_HEADER,
    AsyncLndRestClient,
)

Handler = Callable[[httpx.Request], httpx.Response]


def make_client(handler: Handler) -> AsyncLndRestClient:
    return AsyncLndRestClient(
        "https://lnd.test:8080/",
        "0201",
        transport=httpx.MockTransport(handler),
    )


def _route(total_fees: str) -> Dict[str, Any]:
    return {
        "hops": [
            {
                "amt_to_forward": "1000",
                "chan_id": "109951163433986",
                "expiry": 600000,
                "pub_key": None,
            }
        ],
        "total_amt": "1010",
        "total_fees": total_fees,
        "total_time_lock": 600040,
    }


@pytest.mark.asyncio
async def test_decode_sends_macaroon_and_quotes_request() -> None:
    seen: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"destination": "03aa", "num_satoshis": "5"})

    async with make_client(handler) as client:
        body = await client.decode_pay_req("lnbc1/x")

    assert body == {"destination": "03aa", "num_satoshis": "5"}
    (request,) = seen
    assert request.method == "GET"
    assert request.headers[MACAROON_HEADER] == "0201"
    assert request.url.raw_path == b"/v1/payreq/lnbc1%2Fx"


@pytest.mark.asyncio
async def test_send_to_route_submits_first_route_and_decodes_preimage() -> None:
    preimage = bytes(range(32))
    payment_hash = bytes.fromhex("ab" * 32)
    seen: List[Dict[str, Any]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/v1/channels/transactions/route"
        seen.append(json.loads(request.content))
        return httpx.Response(
            200,
            json={
                "payment_error": "",
                "payment_preimage": base64.b64encode(preimage).decode(),
                "payment_route": _route("10"),
            },
        )

    async with make_client(handler) as client:
        response = await client.send_to_route_sync(
            {
                "payment_hash": payment_hash,
                "payment_hash_string": payment_hash.hex(),
                "routes": [_route("10"), _route("50")],
            }
        )

    assert response is not None
    assert response["payment_preimage"] == preimage
    (body,) = seen
    assert base64.b64decode(body["payment_hash"]) == payment_hash
    assert body["route"]["total_fees"] == "10"
    assert "pub_key" not in body["route"]["hops"][0]


@pytest.mark.asyncio
async def test_send_payment_drops_unset_fields() -> None:
    seen: List[Dict[str, Any]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/v1/channels/transactions"
        seen.append(json.loads(request.content))
        return httpx.Response(200, json={"payment_error": "unable to find a path"})

    async with make_client(handler) as client:
        response = await client.send_payment_sync(
            {"payment_request": "lnbc1", "amt": None, "fee_limit": {"fixed": "5"}}
        )

    assert response == {"payment_error": "unable to find a path"}
    assert seen == [{"payment_request": "lnbc1", "fee_limit": {"fixed": "5"}}]


@pytest.mark.asyncio
async def test_http_error_raises_node_client_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"message": "invalid payment request"})

    async with make_client(handler) as client:
        with pytest.raises(NodeClientError, match="invalid payment request") as info:
            await client.decode_pay_req("garbage")

    assert info.value.status_code == 500


@pytest.mark.asyncio
async def test_connection_error_raises_node_client_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with make_client(handler) as client:
        with pytest.raises(NodeClientError, match="Could not connect"):
            await client.send_payment_sync({"payment_request": "lnbc1"})


@pytest.mark.asyncio
async def test_empty_body_is_none() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200)

    async with make_client(handler) as client:
        assert await client.send_payment_sync({"payment_request": "lnbc1"}) is None
