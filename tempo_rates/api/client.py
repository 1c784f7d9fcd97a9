"""Async RTE Tempo calendar client with exponential backoff."""

from __future__ import annotations

import asyncio
import datetime
import logging
import random
import time
from collections.abc import Iterator

import aiohttp

from ..const import (
    API_DEFAULT_TIMEOUT,
    API_KEY_END,
    API_KEY_RESULTS,
    API_KEY_START,
    API_KEY_VALUE,
    API_KEY_VALUES,
    API_TEMPO_PATH,
    API_URL,
    USER_AGENT,
    WINDOW_DAYS_AFTER,
    WINDOW_DAYS_BEFORE,
)
from .exceptions import (
    RTETempoAuthError,
    RTETempoClientError,
    RTETempoConnectionError,
    RTETempoError,
    RTETempoResponseError,
    RTETempoServerError,
)
from .models import DayTypeRecord, Token

_LOGGER = logging.getLogger(__name__)

# Backoff configuration (seconds)
_BACKOFF_INITIAL_INTERVAL = 1.0
_BACKOFF_MULTIPLIER = 1.5
_BACKOFF_RANDOMIZATION = 0.5
_BACKOFF_MAX_INTERVAL = 60.0
_BACKOFF_MAX_ELAPSED = 60.0


def is_permanent_error(err: Exception) -> bool:
    """Return True when retrying cannot help.

    Rejected credentials and every other 4xx answer are permanent. Server
    errors, transport failures and bodies of the wrong shape are retried.
    """
    return isinstance(err, (RTETempoAuthError, RTETempoClientError))


def backoff_intervals(
    initial: float = _BACKOFF_INITIAL_INTERVAL,
    multiplier: float = _BACKOFF_MULTIPLIER,
    randomization: float = _BACKOFF_RANDOMIZATION,
    max_interval: float = _BACKOFF_MAX_INTERVAL,
) -> Iterator[float]:
    """Yield randomized, exponentially growing wait times."""
    current = initial
    while True:
        delta = randomization * current
        yield random.uniform(current - delta, current + delta)
        current = min(current * multiplier, max_interval)


def calendar_window(
    now: datetime.datetime, tz: datetime.tzinfo
) -> tuple[datetime.datetime, datetime.datetime]:
    """Return the (yesterday, day after tomorrow) local midnights around now."""
    localized_date = datetime.datetime.combine(
        now.astimezone(tz).date(), datetime.time(tzinfo=tz)
    )
    start = localized_date - datetime.timedelta(days=WINDOW_DAYS_BEFORE)
    end = localized_date + datetime.timedelta(days=WINDOW_DAYS_AFTER)
    return start, end


class RTETempoClient:
    """Async client for the RTE Tempo calendar endpoint."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        base_url: str = API_URL,
        max_elapsed_time: float = _BACKOFF_MAX_ELAPSED,
    ) -> None:
        """Initialize the client."""
        self._session = session
        self._calendar_url = base_url.rstrip("/") + API_TEMPO_PATH
        self._max_elapsed_time = max_elapsed_time

    async def async_get_calendar(
        self,
        token: Token,
        start: datetime.datetime,
        end: datetime.datetime,
    ) -> list[DayTypeRecord]:
        """Fetch and parse the tempo calendar, retrying transient failures."""
        started = time.monotonic()
        intervals = backoff_intervals()
        attempt = 0
        while True:
            attempt += 1
            try:
                payload = await self._async_fetch(token, start, end)
                return _parse_response(payload)
            except RTETempoError as err:
                if is_permanent_error(err):
                    _LOGGER.debug("Permanent error on attempt %d: %s", attempt, err)
                    raise
                wait = next(intervals)
                elapsed = time.monotonic() - started
                if elapsed + wait > self._max_elapsed_time:
                    _LOGGER.debug(
                        "Giving up after %d attempts (%.1fs elapsed): %s",
                        attempt,
                        elapsed,
                        err,
                    )
                    raise
                _LOGGER.debug(
                    "Retryable error (attempt %d), waiting %.1fs: %s",
                    attempt,
                    wait,
                    err,
                )
                await asyncio.sleep(wait)

    async def _async_fetch(
        self,
        token: Token,
        start: datetime.datetime,
        end: datetime.datetime,
    ) -> dict:
        """Perform the actual HTTP request."""
        params = {
            "start_date": start.isoformat(timespec="seconds"),
            "end_date": end.isoformat(timespec="seconds"),
            "fallback_status": "true",
        }
        headers = {
            "Authorization": f"Bearer {token.access_token}",
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        }
        _LOGGER.debug(
            "Calling %s with start_date=%s, end_date=%s",
            self._calendar_url,
            params["start_date"],
            params["end_date"],
        )
        try:
            async with self._session.get(
                self._calendar_url,
                params=params,
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=API_DEFAULT_TIMEOUT),
            ) as resp:
                self._check_response_status(resp)
                return await resp.json()
        except aiohttp.ClientError as err:
            raise RTETempoConnectionError(
                f"Connection error: {err}"
            ) from err
        except TimeoutError as err:
            raise RTETempoConnectionError(
                f"Request timeout: {err}"
            ) from err
        except ValueError as err:
            raise RTETempoConnectionError(
                f"Undecodable response body: {err}"
            ) from err

    @staticmethod
    def _check_response_status(resp: aiohttp.ClientResponse) -> None:
        """Map HTTP status codes to typed exceptions."""
        status = resp.status
        if 200 <= status < 300:
            return
        reason = resp.reason or "Unknown"
        if status == 401:
            raise RTETempoAuthError(f"Unauthorized (HTTP 401): {reason}")
        if 400 <= status < 500:
            raise RTETempoClientError(status, reason)
        if status >= 500:
            raise RTETempoServerError(status, reason)
        raise RTETempoError(f"Unexpected HTTP {status}: {reason}")


# ── Parsing helpers ──────────────────────────────────────────────────


def parse_rte_api_datetime(date: str) -> datetime.datetime:
    """Parse an RTE API timestamp such as 2024-01-15T00:00:00+01:00."""
    parsed = datetime.datetime.fromisoformat(date)
    if parsed.tzinfo is None:
        raise ValueError(f"timestamp without offset: {date}")
    return parsed


def _parse_response(payload: dict) -> list[DayTypeRecord]:
    """Parse an API JSON response into day-type records."""
    try:
        values = payload[API_KEY_RESULTS][API_KEY_VALUES]
    except (KeyError, TypeError) as err:
        raise RTETempoResponseError(
            f"Calendar values missing from response: {err!r}"
        ) from err
    if not isinstance(values, list):
        raise RTETempoResponseError(
            f"Calendar values is not a list: {type(values).__name__}"
        )

    records: list[DayTypeRecord] = []
    for entry in values:
        try:
            records.append(
                DayTypeRecord(
                    start=parse_rte_api_datetime(entry[API_KEY_START]),
                    end=parse_rte_api_datetime(entry[API_KEY_END]),
                    value=entry[API_KEY_VALUE],
                )
            )
        except (KeyError, TypeError, ValueError) as err:
            _LOGGER.warning(
                "Day entry skipped due to %s: %s",
                repr(err),
                entry,
            )
    return records
