"""Run the tempo rates service."""

from __future__ import annotations

import logging
import sys

import aiohttp
from aiohttp import web

from .config import ConfigError, load_config
from .log import setup_logging
from .server import create_app

_LOGGER = logging.getLogger(__name__)


def main() -> int:
    """Load the configuration and serve until interrupted."""
    try:
        config = load_config()
    except ConfigError as err:
        setup_logging("INFO")
        _LOGGER.critical("%s", err)
        return 1

    basic = aiohttp.BasicAuth(config.client_id, config.client_secret).encode()
    setup_logging(config.log_level, secrets=(config.client_secret, basic.split(" ", 1)[1]))
    _LOGGER.info("Configuration loaded: %r", config)

    web.run_app(create_app(config), host=config.host, port=config.port, print=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
