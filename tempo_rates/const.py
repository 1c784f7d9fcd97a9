"""Constants for the Tempo rates service."""

from __future__ import annotations

from zoneinfo import ZoneInfo

NAME = "tempo-rates"
VERSION = "1.0.0"
USER_AGENT = f"{NAME}/{VERSION}"

# Configuration
CONFIG_FILE_ENV = "CONFIG_FILE"
DEFAULT_CONFIG_FILE = "/etc/evcc-tempo/evcc-tempo.yaml"
CONFIG_CLIENT_ID = "clientid"
CONFIG_CLIENT_SECRET = "clientsecret"
CONFIG_PRICES = "prices"
CONFIG_PEAK = "peak"
CONFIG_OFF_PEAK = "off-peak"
CONFIG_TIMEZONE = "timezone"
CONFIG_HOST = "host"
CONFIG_PORT = "port"
CONFIG_API_URL = "api_url"
CONFIG_LOG_LEVEL = "log_level"

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080
DEFAULT_LOG_LEVEL = "INFO"
FRANCE_TZ = ZoneInfo("Europe/Paris")

# RTE API
API_DOMAIN = "digital.iservices.rte-france.com"
API_URL = f"https://{API_DOMAIN}"
API_TOKEN_PATH = "/token/oauth/"
API_TEMPO_PATH = "/open_api/tempo_like_supply_contract/v1/tempo_like_calendars"
API_DEFAULT_TIMEOUT = 10  # seconds, per attempt
API_KEY_RESULTS = "tempo_like_calendars"
API_KEY_VALUES = "values"
API_KEY_START = "start_date"
API_KEY_END = "end_date"
API_KEY_VALUE = "value"

# Tempo day layout, hours after local midnight
HOUR_OF_CHANGE = 6
OFF_PEAK_START = 22
OFF_PEAK_END = 24 + HOUR_OF_CHANGE

# Calendar window, in days around local midnight
WINDOW_DAYS_BEFORE = 1
WINDOW_DAYS_AFTER = 2
