"""Environment-driven settings for the payment service.

Loaded once at import time. Every value can be overridden through an
environment variable of the same name (upper case) or a local `.env` file.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class CommonSettings(BaseSettings):
    """Typed view of runtime configuration from environment variables."""

    service_name: str = "payments"
    log_level: str = "INFO"
    environment: str = "development"
    port: int = 3002
    postgres_dsn: str
    db_pool_size: int = 20
    db_connect_timeout_seconds: int = 5
    db_pool_recycle_seconds: int = 30
    frontend_url: str = "http://localhost:8080"
    tracing_enabled: bool = True
    otel_exporter_otlp_endpoint: str = "http://otel-collector:4318/v1/traces"
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


settings = CommonSettings()
