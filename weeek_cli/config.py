"""
weeek-cli configuration, constants, and .env loading.
Standalone module, no imports from other project files.
"""

import os
from dataclasses import dataclass, replace

# ---------------------------------------------------------------------------
# .env helpers
# ---------------------------------------------------------------------------


def env_path():
    """Path of the .env file in the current working directory."""
    return os.path.join(os.getcwd(), ".env")


def load_env(path=None):
    """Parse KEY=VALUE lines from a .env file. Missing file yields {}."""
    path = path or env_path()
    env = {}
    if os.path.exists(path):
        with open(path, encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, val = line.split("=", 1)
                    val = val.strip()
                    if len(val) >= 2 and val[0] == val[-1] and val[0] in "\"'":
                        val = val[1:-1]
                    env[key.strip()] = val
    return env


def _env_bool(env, key, default=False):
    """Parse common boolean env formats."""
    raw = env.get(key)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(env, key, default):
    """Parse integer env values with fallback."""
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(env, key, default):
    """Parse float env values with fallback."""
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

VERSION = "0.3.0"
CONTRACT_SCHEMA_VERSION = "1.0"

DEFAULT_API_URL = "https://api.weeek.net/public/v1"
DEFAULT_SPEC_FILENAME = "weeek_spec.json"

VALID_PRIORITIES = {0, 1, 2, 3}
PRIORITY_LABELS = {0: "Low", 1: "Medium", 2: "High", 3: "Hold"}
VALID_METHODS = {"GET", "POST", "PUT", "DELETE"}
VALID_FORMATS = ("json", "table")


# ---------------------------------------------------------------------------
# Client configuration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ClientConfig:
    """Immutable settings handed to WeeekClient at construction."""

    api_key: str = ""
    api_url: str = DEFAULT_API_URL
    timeout_seconds: int = 30
    max_response_bytes: int = 5_000_000
    http_log_enabled: bool = False
    http_log_sample_rate: float = 1.0
    spec_path: str = ""

    @classmethod
    def from_env(cls, environ=None, dotenv_path=None):
        """Build a config from the .env file overlaid with process environment."""
        env = load_env(dotenv_path)
        env.update(os.environ if environ is None else environ)
        return cls(
            api_key=env.get("WEEEK_API_KEY", "").strip(),
            api_url=(env.get("WEEEK_API_URL") or DEFAULT_API_URL).rstrip("/"),
            timeout_seconds=max(1, _env_int(env, "WEEEK_HTTP_TIMEOUT_SECONDS", 30)),
            max_response_bytes=_env_int(env, "WEEEK_HTTP_MAX_RESPONSE_BYTES", 5_000_000),
            http_log_enabled=_env_bool(env, "WEEEK_HTTP_LOG", False),
            http_log_sample_rate=min(
                1.0, max(0.0, _env_float(env, "WEEEK_HTTP_LOG_SAMPLE_RATE", 1.0))
            ),
            spec_path=env.get("WEEEK_SPEC_PATH")
            or os.path.join(os.getcwd(), DEFAULT_SPEC_FILENAME),
        )

    def with_overrides(self, **changes):
        return replace(self, **changes)
