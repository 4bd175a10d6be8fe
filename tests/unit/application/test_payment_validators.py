"""Unit tests for payment validators and request builders (pure functions)."""

from __future__ import annotations

from typing import Callable

import pytest

from lndpay.application.use_cases.payment_validators import (
    build_send_payment_request,
    build_send_to_route_request,
    filter_routes_by_max_fee,
    validate_route_channel_ids,
)
from lndpay.domain.entities import PaymentRoute
from lndpay.domain.errors import InvalidChannelIdError
from tests.fixtures import channel_number

RouteFactory = Callable[..., PaymentRoute]


class TestValidateRouteChannelIds:
    """Test validate_route_channel_ids function."""

    def test_valid_channels(self, make_route: RouteFactory) -> None:
        validate_route_channel_ids(
            [make_route(), make_route(channel="1x2x3"), make_route(channel="1:2:3")]
        )
        # Should not raise

    def test_malformed_channel_raises(self, make_route: RouteFactory) -> None:
        with pytest.raises(InvalidChannelIdError, match="Malformed channel id"):
            validate_route_channel_ids([make_route(), make_route(channel="1-2-3")])


class TestFilterRoutesByMaxFee:
    """Test filter_routes_by_max_fee function."""

    def test_routes_above_max_fee_are_dropped(self, make_route: RouteFactory) -> None:
        routes = [make_route(fee=10), make_route(fee=50)]
        assert filter_routes_by_max_fee(routes, 20) == [routes[0]]

    def test_fee_equal_to_max_is_kept(self, make_route: RouteFactory) -> None:
        routes = [make_route(fee=20)]
        assert filter_routes_by_max_fee(routes, 20) == routes

    def test_no_max_keeps_all(self, make_route: RouteFactory) -> None:
        routes = [make_route(fee=10), make_route(fee=50)]
        assert filter_routes_by_max_fee(routes, None) == routes

    def test_zero_max_fee_is_a_limit(self, make_route: RouteFactory) -> None:
        routes = [make_route(fee=0), make_route(fee=1)]
        assert filter_routes_by_max_fee(routes, 0) == [routes[0]]


class TestBuildSendToRouteRequest:
    """Test build_send_to_route_request function."""

    def test_wire_shape(self, make_route: RouteFactory, payment_hash: str) -> None:
        request = build_send_to_route_request(payment_hash, [make_route(fee=10)])

        assert request["payment_hash"] == bytes.fromhex(payment_hash)
        assert request["payment_hash_string"] == payment_hash

        (route,) = request["routes"]
        assert route["total_amt"] == "1010"
        assert route["total_amt_msat"] == "1010000"
        assert route["total_fees"] == "10"
        assert route["total_fees_msat"] == "10000"
        assert route["total_time_lock"] == 600040

        (hop,) = route["hops"]
        assert hop == {
            "amt_to_forward": "1000",
            "amt_to_forward_msat": "1000000",
            "chan_id": channel_number(100, 5, 2),
            "chan_capacity": "500000",
            "expiry": 600000,
            "fee": "10",
            "fee_msat": "10000",
            "pub_key": "02" + "11" * 32,
        }

    def test_non_hex_payment_hash_raises(self, make_route: RouteFactory) -> None:
        with pytest.raises(ValueError):
            build_send_to_route_request("not-hex", [make_route()])


class TestBuildSendPaymentRequest:
    """Test build_send_payment_request function."""

    def test_request_only(self) -> None:
        assert build_send_payment_request("lnbc1") == {"payment_request": "lnbc1"}

    def test_all_options(self) -> None:
        request = build_send_payment_request(
            "lnbc1", tokens=100, max_fee=5, out="100x5x2"
        )
        assert request == {
            "payment_request": "lnbc1",
            "amt": "100",
            "fee_limit": {"fixed": "5"},
            "outgoing_chan_id": channel_number(100, 5, 2),
        }

    def test_invalid_outgoing_channel_raises(self) -> None:
        with pytest.raises(InvalidChannelIdError):
            build_send_payment_request("lnbc1", out="bogus")
