"""HTTP endpoints serving tempo rates."""

from __future__ import annotations

import datetime
import logging
from collections.abc import AsyncIterator, Callable

import aiohttp
from aiohttp import web

from .api.auth import RTETempoAuth
from .api.client import RTETempoClient, calendar_window
from .api.exceptions import RTETempoAuthError, RTETempoError
from .config import Config
from .prices import PriceTable
from .rates import RateInterval, build_rates

_LOGGER = logging.getLogger(__name__)


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class RateEndpoint:
    """Fetch the calendar and turn it into rates, once per request."""

    def __init__(
        self,
        auth: RTETempoAuth,
        client: RTETempoClient,
        prices: PriceTable,
        tz: datetime.tzinfo,
        now: Callable[[], datetime.datetime] = _utcnow,
    ) -> None:
        """Initialize the endpoint."""
        self._auth = auth
        self._client = client
        self._prices = prices
        self._tz = tz
        self._now = now

    @classmethod
    def from_config(cls, config: Config, session: aiohttp.ClientSession) -> RateEndpoint:
        """Wire the upstream client from the service configuration."""
        auth = RTETempoAuth(
            session, config.client_id, config.client_secret, base_url=config.api_url
        )
        client = RTETempoClient(session, base_url=config.api_url)
        return cls(auth, client, config.prices, config.timezone)

    async def async_get_rates(self) -> list[RateInterval]:
        """Return sorted rates, or an empty list when upstream fails."""
        _LOGGER.debug("Retrieving token")
        try:
            token = await self._auth.async_get_token()
        except RTETempoAuthError as err:
            _LOGGER.error("Error retrieving RTE token: %s", err)
            return []
        _LOGGER.debug("Retrieved token")

        start, end = calendar_window(self._now(), self._tz)
        try:
            records = await self._client.async_get_calendar(token, start, end)
        except RTETempoError as err:
            _LOGGER.error("Error retrieving tempo calendar: %s", err)
            return []

        rates = build_rates(records, self._prices, self._tz)
        _LOGGER.debug("Built %d rates from %d calendar days", len(rates), len(records))
        return rates

    async def handle_prices(self, request: web.Request) -> web.Response:
        """GET /prices."""
        rates = await self.async_get_rates()
        return web.json_response([rate.as_dict() for rate in rates])


async def handle_ping(request: web.Request) -> web.Response:
    """GET /ping."""
    return web.json_response({"message": "pong"})


APP_CONFIG = web.AppKey("config", Config)
APP_ENDPOINT = web.AppKey("endpoint", RateEndpoint)


async def _handle_prices(request: web.Request) -> web.Response:
    return await request.app[APP_ENDPOINT].handle_prices(request)


async def _client_session_ctx(app: web.Application) -> AsyncIterator[None]:
    """Own the upstream connection pool for the application lifetime."""
    async with aiohttp.ClientSession() as session:
        app[APP_ENDPOINT] = RateEndpoint.from_config(app[APP_CONFIG], session)
        yield


def create_app(config: Config, endpoint: RateEndpoint | None = None) -> web.Application:
    """Build the web application.

    When no endpoint is given, one is created on startup around a shared
    aiohttp session that is closed on cleanup.
    """
    app = web.Application()
    app[APP_CONFIG] = config
    if endpoint is None:
        app.cleanup_ctx.append(_client_session_ctx)
    else:
        app[APP_ENDPOINT] = endpoint
    app.router.add_get("/ping", handle_ping)
    app.router.add_get("/prices", _handle_prices)
    return app
