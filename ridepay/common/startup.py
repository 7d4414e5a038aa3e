"""Startup-time helpers for safe config logging."""

from ridepay.common.config import settings
from ridepay.common.logging import logger


SECRET_MARKERS = ("KEY", "SECRET", "PASSWORD", "TOKEN", "DSN")


def resolved_config(service_name: str, keys: list[str]) -> dict:
    """Map env-style keys to their resolved settings values, redacting secrets.

    Values come from `settings`, so defaults and `.env` entries are reported
    the same way as real environment variables.
    """

    config = {"service": service_name}
    for key in keys:
        value = getattr(settings, key.lower(), None)
        if value is None:
            config[key] = "<unset>"
        elif any(marker in key.upper() for marker in SECRET_MARKERS):
            config[key] = "<redacted>"
        else:
            config[key] = str(value)
    return config


def log_startup_config(service_name: str, keys: list[str]) -> None:
    """Log selected startup config keys for quick troubleshooting."""

    logger.info("startup_config=%s", resolved_config(service_name, keys))
