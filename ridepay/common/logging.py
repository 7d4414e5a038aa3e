"""JSON log output for the payment service.

Each line carries the service name, the id of the HTTP request being handled
and, once an insert has succeeded, the id of the recorded payment.
"""

import logging
import sys
from contextvars import ContextVar

from pythonjsonlogger.json import JsonFormatter

from ridepay.common.config import settings


request_id_ctx: ContextVar[str] = ContextVar("request_id", default="")
payment_id_ctx: ContextVar[str] = ContextVar("payment_id", default="")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(service_name)s %(request_id)s %(payment_id)s %(message)s"


class ContextFilter(logging.Filter):
    """Stamp records with the current request and payment ids."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.service_name = settings.service_name
        record.request_id = request_id_ctx.get()
        record.payment_id = payment_id_ctx.get()
        return True


def configure_logging() -> None:
    """Send every logger, uvicorn's included, through one stdout JSON handler."""

    context_filter = ContextFilter()
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(context_filter)
    handler.setFormatter(JsonFormatter(LOG_FORMAT))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(settings.log_level)

    # uvicorn installs its own handlers unless told otherwise; route them to root.
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers = []
        uvicorn_logger.propagate = True


logger = logging.getLogger("ridepay")
