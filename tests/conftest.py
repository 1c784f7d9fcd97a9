"""Fixtures for Tempo rates tests."""
from __future__ import annotations

import datetime
from unittest.mock import AsyncMock

import pytest

from tempo_rates.api.models import DayType, DayTypeRecord, Token
from tempo_rates.config import Config
from tempo_rates.const import FRANCE_TZ
from tempo_rates.prices import PriceEntry, PriceTable


@pytest.fixture
def price_table() -> PriceTable:
    """Price table with 2024 regulated Tempo prices."""
    return PriceTable(
        {
            DayType.BLUE: PriceEntry(peak=0.1609, off_peak=0.1296),
            DayType.WHITE: PriceEntry(peak=0.1894, off_peak=0.1486),
            DayType.RED: PriceEntry(peak=0.7562, off_peak=0.1369),
        }
    )


@pytest.fixture
def config(price_table: PriceTable) -> Config:
    """Service configuration pointing at a fake upstream."""
    return Config(
        client_id="my_id",
        client_secret="my_secret",
        prices=price_table,
        timezone=FRANCE_TZ,
        api_url="https://rte.example",
    )


def make_record(year: int, month: int, day: int, value: str) -> DayTypeRecord:
    """Create a calendar record starting at local midnight."""
    start = datetime.datetime(year, month, day, tzinfo=FRANCE_TZ)
    end = datetime.datetime.combine(
        start.date() + datetime.timedelta(days=1), datetime.time(tzinfo=FRANCE_TZ)
    )
    return DayTypeRecord(start=start, end=end, value=value)


def make_calendar_payload(values: list[dict]) -> dict:
    """Wrap raw entries the way the calendar endpoint does."""
    return {"tempo_like_calendars": {"values": values}}


def make_entry(date: str, value: str, offset: str = "+01:00") -> dict:
    """Raw calendar entry for a YYYY-MM-DD date."""
    start = datetime.date.fromisoformat(date)
    end = start + datetime.timedelta(days=1)
    return {
        "start_date": f"{start.isoformat()}T00:00:00{offset}",
        "end_date": f"{end.isoformat()}T00:00:00{offset}",
        "value": value,
    }


def make_response(status=200, json_data=None, headers=None, text="error"):
    """Create a mock context manager for session.get / session.post."""
    resp = AsyncMock()
    resp.status = status
    resp.reason = "OK" if status == 200 else "Error"
    resp.json = AsyncMock(return_value=json_data if json_data is not None else {})
    resp.text = AsyncMock(return_value=text)
    resp.headers = headers or {}
    ctx = AsyncMock()
    ctx.__aenter__ = AsyncMock(return_value=resp)
    ctx.__aexit__ = AsyncMock(return_value=False)
    return ctx


@pytest.fixture
def token() -> Token:
    """A bearer token as returned by the token endpoint."""
    return Token(access_token="test_token", token_type="Bearer", expires_in=7200)
