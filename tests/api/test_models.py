"""Tests for the data models."""

from __future__ import annotations

import dataclasses
import datetime

import pytest

from tempo_rates.api.models import DayType, DayTypeRecord, Token
from tempo_rates.const import FRANCE_TZ


class TestDayType:
    """Tests for DayType."""

    def test_exactly_three_colours(self):
        assert [d.value for d in DayType] == ["BLUE", "WHITE", "RED"]

    def test_from_upstream_value(self):
        assert DayType("RED") is DayType.RED

    def test_unknown_value(self):
        with pytest.raises(ValueError):
            DayType("GREEN")

    def test_case_sensitive(self):
        with pytest.raises(ValueError):
            DayType("red")


class TestDayTypeRecord:
    """Tests for DayTypeRecord dataclass."""

    def test_frozen(self):
        record = DayTypeRecord(
            start=datetime.datetime(2024, 1, 15, tzinfo=FRANCE_TZ),
            end=datetime.datetime(2024, 1, 16, tzinfo=FRANCE_TZ),
            value="WHITE",
        )
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.value = "BLUE"  # type: ignore[misc]


class TestToken:
    """Tests for Token dataclass."""

    def test_defaults(self):
        token = Token(access_token="abc")
        assert token.token_type == "Bearer"
        assert token.expires_in is None
