"""Peak and off-peak prices per tempo day colour."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from .api.models import DayType
from .const import CONFIG_OFF_PEAK, CONFIG_PEAK


@dataclass(frozen=True, slots=True)
class PriceEntry:
    """Prices for one day colour."""

    peak: float
    off_peak: float

    def __post_init__(self) -> None:
        """Reject negative prices."""
        if self.peak < 0 or self.off_peak < 0:
            raise ValueError(f"negative price in {self!r}")


class PriceTable:
    """Read-only mapping from day colour to its prices.

    Built once at startup. Construction fails if any colour is missing, so
    lookup() never fails afterwards.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[DayType, PriceEntry]) -> None:
        """Initialize from one entry per day colour."""
        missing = [day_type.value for day_type in DayType if day_type not in entries]
        if missing:
            raise ValueError(f"missing prices for {', '.join(missing)}")
        self._entries = MappingProxyType(dict(entries))

    @classmethod
    def from_config(cls, prices: Mapping[str, Mapping[str, float]]) -> PriceTable:
        """Build from the `prices` section of the configuration file."""
        return cls(
            {
                DayType(colour.upper()): PriceEntry(
                    peak=entry[CONFIG_PEAK],
                    off_peak=entry[CONFIG_OFF_PEAK],
                )
                for colour, entry in prices.items()
            }
        )

    def lookup(self, day_type: DayType) -> PriceEntry:
        """Return the prices for a day colour."""
        return self._entries[day_type]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PriceTable):
            return NotImplemented
        return dict(self._entries) == dict(other._entries)

    def __repr__(self) -> str:
        items = ", ".join(f"{k.value}={v}" for k, v in self._entries.items())
        return f"PriceTable({items})"
