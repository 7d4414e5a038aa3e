"""Process bootstrap for the payment service.

Run with `uvicorn ridepay.services.payments.main:app` or the
`ridepay-payments` console script.
"""

import uvicorn

from ridepay.common.config import settings
from ridepay.common.db import SessionLocal
from ridepay.common.logging import configure_logging, logger
from ridepay.common.startup import log_startup_config
from ridepay.common.tracing import instrument_app, setup_tracing
from ridepay.services.payments.api import create_app
from ridepay.services.payments.store import PaymentStore

configure_logging()
setup_tracing(settings.service_name)
log_startup_config(
    settings.service_name,
    ["SERVICE_NAME", "ENVIRONMENT", "PORT", "POSTGRES_DSN", "DB_POOL_SIZE", "FRONTEND_URL"],
)
app = create_app(PaymentStore(SessionLocal))
instrument_app(app)


def run() -> None:
    """Console-script entrypoint."""

    logger.info(
        "payment_service_starting port=%s environment=%s cors_origin=%s",
        settings.port,
        settings.environment,
        settings.frontend_url,
    )
    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
