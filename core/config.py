# =============================================================================
# core/config.py  —  Process-wide Settings
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reads the handful of knobs this server has from the environment (and from
#   a .env file, if one exists) into a frozen EverythingSettings value.
#
#   EVERYTHING_URL            Base URL of Everything's HTTP server
#                             (default http://127.0.0.1:8011)
#   EVERYTHING_TIMEOUT        Request timeout in seconds (default 10)
#   EVERYTHING_RATE_LIMIT_MS  Delay before each request in ms (default 100)
#   EVERYTHING_DEFAULT_SCOPE  Scope used when the caller gives none (default C:)
#
# Settings are read once at startup and handed to the client and the tool
# server explicitly.  Nothing reads os.environ after that.
# =============================================================================

import os
from dataclasses import dataclass

from dotenv import load_dotenv


DEFAULT_BASE_URL = "http://127.0.0.1:8011"
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_RATE_LIMIT_MS = 100
DEFAULT_SCOPE = "C:"


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value >= 0 else default


def _normalize_base_url(url: str) -> str:
    # "127.0.0.1:8011" is how Everything's own UI shows the address
    url = url.strip().rstrip("/")
    if "://" not in url:
        url = f"http://{url}"
    return url


@dataclass(frozen=True)
class EverythingSettings:
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    rate_limit_ms: int = DEFAULT_RATE_LIMIT_MS
    default_scope: str = DEFAULT_SCOPE

    @property
    def rate_limit_seconds(self) -> float:
        return self.rate_limit_ms / 1000

    @staticmethod
    def from_env() -> "EverythingSettings":
        """Build settings from environment variables (after loading .env).

        Unparseable or negative numbers fall back to their defaults, and a
        zero timeout is treated as unset.
        """
        load_dotenv()

        timeout = _float_env("EVERYTHING_TIMEOUT", DEFAULT_TIMEOUT_SECONDS)
        if timeout == 0:
            timeout = DEFAULT_TIMEOUT_SECONDS

        return EverythingSettings(
            base_url=_normalize_base_url(os.getenv("EVERYTHING_URL") or DEFAULT_BASE_URL),
            timeout=timeout,
            rate_limit_ms=int(_float_env("EVERYTHING_RATE_LIMIT_MS", DEFAULT_RATE_LIMIT_MS)),
            default_scope=os.getenv("EVERYTHING_DEFAULT_SCOPE", DEFAULT_SCOPE),
        )
