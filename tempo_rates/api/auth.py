"""Async OAuth2 client credentials exchange for the RTE API."""

from __future__ import annotations

import logging

import aiohttp

from ..const import API_DEFAULT_TIMEOUT, API_TOKEN_PATH, API_URL, USER_AGENT
from .exceptions import RTETempoAuthError
from .models import Token

_LOGGER = logging.getLogger(__name__)


class RTETempoAuth:
    """Exchange client credentials for a bearer token.

    Tokens are not cached: every call performs a fresh exchange, so a
    rejected credential is reported on the request that used it.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        client_id: str,
        client_secret: str,
        base_url: str = API_URL,
    ) -> None:
        """Initialize the auth manager."""
        self._session = session
        self._client_id = client_id
        self._client_secret = client_secret
        self._token_url = base_url.rstrip("/") + API_TOKEN_PATH

    @property
    def basic_auth(self) -> aiohttp.BasicAuth:
        """Basic credentials sent to the token endpoint."""
        return aiohttp.BasicAuth(self._client_id, self._client_secret)

    async def async_get_token(self) -> Token:
        """Fetch a new OAuth2 token via client credentials grant."""
        _LOGGER.debug("Requesting new OAuth2 access token")
        try:
            async with self._session.post(
                self._token_url,
                auth=self.basic_auth,
                data={"grant_type": "client_credentials"},
                headers={"Accept": "application/json", "User-Agent": USER_AGENT},
                timeout=aiohttp.ClientTimeout(total=API_DEFAULT_TIMEOUT),
            ) as resp:
                if resp.status == 401:
                    raise RTETempoAuthError("Invalid client credentials (HTTP 401)")
                if not 200 <= resp.status < 300:
                    text = await resp.text()
                    raise RTETempoAuthError(
                        f"Token request failed (HTTP {resp.status}): {text}"
                    )
                data = await resp.json()
        except aiohttp.ClientError as err:
            raise RTETempoAuthError(
                f"Connection error during token request: {err}"
            ) from err
        except TimeoutError as err:
            raise RTETempoAuthError(
                f"Timeout during token request: {err}"
            ) from err
        except ValueError as err:
            raise RTETempoAuthError(
                f"Invalid token response: {err}"
            ) from err

        try:
            token = Token(
                access_token=data["access_token"],
                token_type=data.get("token_type", "Bearer"),
                expires_in=int(data.get("expires_in", 3600)),
            )
        except (KeyError, TypeError, ValueError) as err:
            raise RTETempoAuthError(
                f"Invalid token response: {err!r}"
            ) from err

        if not token.access_token:
            raise RTETempoAuthError("Invalid token response: empty access_token")

        _LOGGER.debug("OAuth2 token acquired, expires in %ds", token.expires_in)
        return token
