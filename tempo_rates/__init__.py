"""Tempo tariff calendar exposed as time-bounded electricity rates."""

from .config import Config, ConfigError, load_config
from .prices import PriceEntry, PriceTable
from .rates import RateInterval, build_rates, expand, local_day_offset, sort_rates
from .server import RateEndpoint, create_app

__all__ = [
    "Config",
    "ConfigError",
    "PriceEntry",
    "PriceTable",
    "RateEndpoint",
    "RateInterval",
    "build_rates",
    "create_app",
    "expand",
    "load_config",
    "local_day_offset",
    "sort_rates",
]
