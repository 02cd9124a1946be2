"""Constants for the laundrify integration."""

DOMAIN = "laundrify"
MANUFACTURER = "laundrify"
MODEL = "WLAN-Adapter"

API_BASE_URL = "https://api.laundrify.de"
AUTH_HEADER_PREFIX = "Bearer hb|"

# Endpoints
REGISTRATION_PATH = "/auth/homebridge/token"
MACHINES_PATH = "/api/machines"

DEFAULT_TIMEOUT = 30  # seconds
MACHINE_TIMEOUT = 5  # seconds
DEFAULT_MAX_RETRIES = 3
BACKOFF_BASE = 0.2  # seconds, doubled on every retry

DEFAULT_SCAN_INTERVAL = 10  # seconds

# Persisted credentials
CREDENTIALS_FILE = "laundrify-official.json"
CREDENTIALS_SCHEMA_VERSION = "1"

# Config entry keys
CONF_AUTH_CODE = "auth_code"
CONF_BASE_URL = "base_url"

AUTH_CODE_PATTERN = r"\d{3}-\d{3}"
