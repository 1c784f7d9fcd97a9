"""Configuration file loading and validation."""

from __future__ import annotations

import datetime
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import voluptuous as vol
import yaml

from .api.models import DayType
from .const import (
    API_URL,
    CONFIG_API_URL,
    CONFIG_CLIENT_ID,
    CONFIG_CLIENT_SECRET,
    CONFIG_FILE_ENV,
    CONFIG_HOST,
    CONFIG_LOG_LEVEL,
    CONFIG_OFF_PEAK,
    CONFIG_PEAK,
    CONFIG_PORT,
    CONFIG_PRICES,
    CONFIG_TIMEZONE,
    DEFAULT_CONFIG_FILE,
    DEFAULT_HOST,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PORT,
    FRANCE_TZ,
)
from .prices import PriceTable

_LOGGER = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    """Configuration file is missing, unreadable or invalid."""


def _timezone(value: object) -> datetime.tzinfo:
    """Validate an IANA time zone name."""
    try:
        return ZoneInfo(str(value))
    except (ZoneInfoNotFoundError, ValueError) as err:
        raise vol.Invalid(f"unknown time zone: {value}") from err


_PRICE = vol.All(vol.Coerce(float), vol.Range(min=0))

PRICE_SCHEMA = vol.Schema(
    {
        vol.Required(CONFIG_PEAK): _PRICE,
        vol.Required(CONFIG_OFF_PEAK): _PRICE,
    }
)

CONFIG_SCHEMA = vol.Schema(
    {
        vol.Required(CONFIG_CLIENT_ID): vol.All(str, vol.Length(min=1)),
        vol.Required(CONFIG_CLIENT_SECRET): vol.All(str, vol.Length(min=1)),
        vol.Required(CONFIG_PRICES): vol.Schema(
            {vol.Required(day_type.value.lower()): PRICE_SCHEMA for day_type in DayType}
        ),
        vol.Optional(CONFIG_TIMEZONE, default=str(FRANCE_TZ)): _timezone,
        vol.Optional(CONFIG_HOST, default=DEFAULT_HOST): str,
        vol.Optional(CONFIG_PORT, default=DEFAULT_PORT): vol.All(
            vol.Coerce(int), vol.Range(min=1, max=65535)
        ),
        vol.Optional(CONFIG_API_URL, default=API_URL): vol.Url(),
        vol.Optional(CONFIG_LOG_LEVEL, default=DEFAULT_LOG_LEVEL): vol.All(
            str, vol.Upper, vol.In(_LOG_LEVELS)
        ),
    },
    extra=vol.REMOVE_EXTRA,
)


@dataclass(frozen=True, slots=True)
class Config:
    """Validated service configuration."""

    client_id: str
    client_secret: str = field(repr=False)
    prices: PriceTable
    timezone: datetime.tzinfo = FRANCE_TZ
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    api_url: str = API_URL
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_dict(cls, data: object) -> Config:
        """Validate a decoded configuration document."""
        try:
            conf = CONFIG_SCHEMA(data)
        except vol.Invalid as err:
            raise ConfigError(f"Invalid configuration: {err}") from err
        return cls(
            client_id=conf[CONFIG_CLIENT_ID],
            client_secret=conf[CONFIG_CLIENT_SECRET],
            prices=PriceTable.from_config(conf[CONFIG_PRICES]),
            timezone=conf[CONFIG_TIMEZONE],
            host=conf[CONFIG_HOST],
            port=conf[CONFIG_PORT],
            api_url=conf[CONFIG_API_URL],
            log_level=conf[CONFIG_LOG_LEVEL],
        )


def config_path() -> Path:
    """Return the configuration file location."""
    return Path(os.environ.get(CONFIG_FILE_ENV, DEFAULT_CONFIG_FILE))


def load_config(path: Path | str | None = None) -> Config:
    """Read and validate the YAML configuration file."""
    path = Path(path) if path is not None else config_path()
    _LOGGER.debug("Loading configuration from %s", path)
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as err:
        raise ConfigError(f"Cannot read {path}: {err}") from err
    except yaml.YAMLError as err:
        raise ConfigError(f"In file {str(path)!r}: {err}") from err
    try:
        return Config.from_dict(data)
    except ConfigError as err:
        raise ConfigError(f"In file {str(path)!r}: {err}") from err
