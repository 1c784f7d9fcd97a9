"""Expansion of tempo calendar days into priced time intervals."""

from __future__ import annotations

import datetime
import logging
from collections.abc import Iterable
from dataclasses import dataclass

from .api.models import DayType, DayTypeRecord
from .const import HOUR_OF_CHANGE, OFF_PEAK_END, OFF_PEAK_START
from .prices import PriceTable

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RateInterval:
    """A price valid over [start, end), both in UTC."""

    start: datetime.datetime
    end: datetime.datetime
    value: float

    def as_dict(self) -> dict[str, str | float]:
        """Serialize for the JSON response."""
        return {
            "start": _format_utc(self.start),
            "end": _format_utc(self.end),
            "value": self.value,
        }


def _format_utc(instant: datetime.datetime) -> str:
    return instant.astimezone(datetime.timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def local_day_offset(
    day_start: datetime.datetime, hours: int, tz: datetime.tzinfo
) -> datetime.datetime:
    """Return day_start moved to `hours` on the local wall clock, in UTC.

    The addition happens in local time, so 6 h after midnight stays 06:00
    local on daylight saving transition days.
    """
    local = day_start.astimezone(tz) + datetime.timedelta(hours=hours)
    return local.astimezone(datetime.timezone.utc)


def parse_day_type(value: str) -> DayType | None:
    """Return the DayType for a raw upstream value, None if unknown."""
    try:
        return DayType(value)
    except ValueError:
        return None


def expand(
    record: DayTypeRecord, prices: PriceTable, tz: datetime.tzinfo
) -> list[RateInterval]:
    """Split a calendar day into its peak and off-peak intervals."""
    day_type = parse_day_type(record.value)
    if day_type is None:
        _LOGGER.debug("Ignoring unknown tempo value %r for %s", record.value, record.start)
        return []
    price = prices.lookup(day_type)
    peak_start = local_day_offset(record.start, HOUR_OF_CHANGE, tz)
    off_peak_start = local_day_offset(record.start, OFF_PEAK_START, tz)
    off_peak_end = local_day_offset(record.start, OFF_PEAK_END, tz)
    return [
        RateInterval(start=peak_start, end=off_peak_start, value=price.peak),
        RateInterval(start=off_peak_start, end=off_peak_end, value=price.off_peak),
    ]


def sort_rates(intervals: Iterable[RateInterval]) -> list[RateInterval]:
    """Order intervals by start; equal starts keep their input order."""
    return sorted(intervals, key=lambda rate: rate.start)


def build_rates(
    records: Iterable[DayTypeRecord], prices: PriceTable, tz: datetime.tzinfo
) -> list[RateInterval]:
    """Expand every record and return the sorted result."""
    rates: list[RateInterval] = []
    for record in records:
        rates.extend(expand(record, prices, tz))
    return sort_rates(rates)
