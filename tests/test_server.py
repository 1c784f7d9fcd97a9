"""Tests for the HTTP endpoints."""
from __future__ import annotations

import datetime
import logging
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest
from aiohttp.test_utils import TestClient, TestServer

from tempo_rates.api.auth import RTETempoAuth
from tempo_rates.api.client import RTETempoClient
from tempo_rates.api.exceptions import (
    RTETempoAuthError,
    RTETempoClientError,
    RTETempoConnectionError,
    RTETempoServerError,
)
from tempo_rates.const import FRANCE_TZ
from tempo_rates.server import APP_ENDPOINT, RateEndpoint, create_app

from .conftest import make_calendar_payload, make_entry, make_record, make_response

NOW = datetime.datetime(2024, 1, 15, 12, 0, tzinfo=datetime.timezone.utc)


@pytest.fixture
def mock_auth(token):
    auth = MagicMock(spec=RTETempoAuth)
    auth.async_get_token = AsyncMock(return_value=token)
    return auth


@pytest.fixture
def mock_client():
    client = MagicMock(spec=RTETempoClient)
    client.async_get_calendar = AsyncMock(
        return_value=[
            make_record(2024, 1, 15, "RED"),
            make_record(2024, 1, 14, "BLUE"),
            make_record(2024, 1, 16, "PURPLE"),
        ]
    )
    return client


@pytest.fixture
def endpoint(mock_auth, mock_client, price_table):
    return RateEndpoint(mock_auth, mock_client, price_table, FRANCE_TZ, now=lambda: NOW)


class TestRateEndpoint:
    """Tests for RateEndpoint.async_get_rates."""

    @pytest.mark.asyncio
    async def test_pipeline(self, endpoint, mock_client, token):
        rates = await endpoint.async_get_rates()
        assert [r.value for r in rates] == [0.1609, 0.1296, 0.7562, 0.1369]
        mock_client.async_get_calendar.assert_awaited_once_with(
            token,
            datetime.datetime(2024, 1, 14, tzinfo=FRANCE_TZ),
            datetime.datetime(2024, 1, 17, tzinfo=FRANCE_TZ),
        )

    @pytest.mark.asyncio
    async def test_token_failure_skips_calendar(self, endpoint, mock_auth, mock_client, caplog):
        mock_auth.async_get_token.side_effect = RTETempoAuthError("Invalid client credentials")
        with caplog.at_level(logging.ERROR):
            assert await endpoint.async_get_rates() == []
        mock_client.async_get_calendar.assert_not_called()
        assert "Error retrieving RTE token" in caplog.text

    @pytest.mark.parametrize(
        "err",
        [
            RTETempoServerError(503, "Service Unavailable"),
            RTETempoClientError(404, "Not Found"),
            RTETempoConnectionError("offline"),
        ],
    )
    @pytest.mark.asyncio
    async def test_calendar_failure_yields_empty(self, endpoint, mock_client, err, caplog):
        mock_client.async_get_calendar.side_effect = err
        with caplog.at_level(logging.ERROR):
            assert await endpoint.async_get_rates() == []
        assert "Error retrieving tempo calendar" in caplog.text

    def test_from_config(self, config):
        session = MagicMock(spec=aiohttp.ClientSession)
        endpoint = RateEndpoint.from_config(config, session)
        assert isinstance(endpoint, RateEndpoint)


class TestHttpSurface:
    """Tests for the /ping and /prices routes."""

    @pytest.mark.asyncio
    async def test_ping(self, config, endpoint):
        async with TestClient(TestServer(create_app(config, endpoint))) as client:
            resp = await client.get("/ping")
            assert resp.status == 200
            assert await resp.json() == {"message": "pong"}

    @pytest.mark.asyncio
    async def test_ping_with_upstream_down(self, config, endpoint, mock_auth):
        mock_auth.async_get_token.side_effect = RTETempoAuthError("offline")
        async with TestClient(TestServer(create_app(config, endpoint))) as client:
            assert (await client.get("/prices")).status == 200
            resp = await client.get("/ping")
            assert resp.status == 200

    @pytest.mark.asyncio
    async def test_prices(self, config, endpoint):
        async with TestClient(TestServer(create_app(config, endpoint))) as client:
            resp = await client.get("/prices")
            assert resp.status == 200
            assert resp.content_type == "application/json"
            body = await resp.json()
        assert body[:2] == [
            {"start": "2024-01-14T05:00:00Z", "end": "2024-01-14T21:00:00Z", "value": 0.1609},
            {"start": "2024-01-14T21:00:00Z", "end": "2024-01-15T05:00:00Z", "value": 0.1296},
        ]
        assert body[2:] == [
            {"start": "2024-01-15T05:00:00Z", "end": "2024-01-15T21:00:00Z", "value": 0.7562},
            {"start": "2024-01-15T21:00:00Z", "end": "2024-01-16T05:00:00Z", "value": 0.1369},
        ]

    @pytest.mark.asyncio
    async def test_prices_unreachable_upstream(self, config, endpoint, mock_client):
        mock_client.async_get_calendar.side_effect = RTETempoConnectionError("offline")
        async with TestClient(TestServer(create_app(config, endpoint))) as client:
            resp = await client.get("/prices")
            assert resp.status == 200
            assert await resp.json() == []

    @pytest.mark.asyncio
    async def test_endpoint_created_on_startup(self, config):
        app = create_app(config)
        async with TestClient(TestServer(app)) as client:
            assert isinstance(app[APP_ENDPOINT], RateEndpoint)
            assert (await client.get("/ping")).status == 200


class TestEndToEnd:
    """Full pipeline over a mocked upstream session."""

    @pytest.mark.asyncio
    async def test_red_day(self, config, token):
        session = MagicMock(spec=aiohttp.ClientSession)
        session.post.return_value = make_response(200, {"access_token": "test_token"})
        session.get.return_value = make_response(
            200, make_calendar_payload([make_entry("2024-01-15", "RED")])
        )
        endpoint = RateEndpoint.from_config(config, session)
        rates = await endpoint.async_get_rates()
        assert [rate.as_dict() for rate in rates] == [
            {"start": "2024-01-15T05:00:00Z", "end": "2024-01-15T21:00:00Z", "value": 0.7562},
            {"start": "2024-01-15T21:00:00Z", "end": "2024-01-16T05:00:00Z", "value": 0.1369},
        ]
        assert session.post.call_args[0][0] == "https://rte.example/token/oauth/"
        assert session.get.call_args[1]["headers"]["Authorization"] == "Bearer test_token"
