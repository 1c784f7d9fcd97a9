"""RTE Tempo API client package."""

from .auth import RTETempoAuth
from .client import (
    RTETempoClient,
    backoff_intervals,
    calendar_window,
    is_permanent_error,
    parse_rte_api_datetime,
)
from .exceptions import (
    RTETempoAuthError,
    RTETempoClientError,
    RTETempoConnectionError,
    RTETempoError,
    RTETempoResponseError,
    RTETempoServerError,
)
from .models import DayType, DayTypeRecord, Token

__all__ = [
    "DayType",
    "DayTypeRecord",
    "RTETempoAuth",
    "RTETempoClient",
    "RTETempoAuthError",
    "RTETempoClientError",
    "RTETempoConnectionError",
    "RTETempoError",
    "RTETempoResponseError",
    "RTETempoServerError",
    "Token",
    "backoff_intervals",
    "calendar_window",
    "is_permanent_error",
    "parse_rte_api_datetime",
]
