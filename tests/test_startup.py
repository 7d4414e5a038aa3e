"""Startup config logging must never print credentials."""

from ridepay.common.config import settings
from ridepay.common.startup import resolved_config


def test_dsn_is_redacted():
    config = resolved_config("payments", ["POSTGRES_DSN", "PORT"])

    assert config["service"] == "payments"
    assert config["POSTGRES_DSN"] == "<redacted>"
    assert config["PORT"] == str(settings.port)


def test_unknown_key_is_reported_unset():
    assert resolved_config("payments", ["NOT_A_SETTING"])["NOT_A_SETTING"] == "<unset>"
