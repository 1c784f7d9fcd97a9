"""Data models for the RTE Tempo API."""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from enum import Enum


class DayType(str, Enum):
    """Tempo day colours."""

    BLUE = "BLUE"
    WHITE = "WHITE"
    RED = "RED"


@dataclass(frozen=True, slots=True)
class Token:
    """OAuth2 bearer token, valid for a single request."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int | None = None


@dataclass(frozen=True, slots=True)
class DayTypeRecord:
    """Represents a single calendar entry as returned by RTE."""

    start: datetime.datetime
    end: datetime.datetime
    value: str  # raw upstream value, usually "RED" | "WHITE" | "BLUE"
