"""Payment recording pipeline: probe, validate, persist.

Each stage is terminal on failure. Nothing is retried and a payment is
written in exactly one insert, so submitting the same body twice records two
payments.
"""

from ridepay.common.config import settings
from ridepay.common.logging import logger, payment_id_ctx
from ridepay.common.metrics import (
    db_probe_failures_total,
    payment_failure_total,
    payment_rejected_total,
    payment_requests_total,
    payment_success_total,
)
from ridepay.services.payments.errors import PaymentValidationError, ServiceUnavailable, StoreError
from ridepay.services.payments.schemas import PaymentRecord, PaymentSubmission
from ridepay.services.payments.validation import validate_submission


def receipt_url(payment_id: int) -> str:
    return f"/payments/{payment_id}/receipt"


class PaymentService:
    """Runs submissions through validation and the store gateway."""

    def __init__(self, store, service_name: str = settings.service_name) -> None:
        self.store = store
        self.service_name = service_name

    def probe(self) -> None:
        """One availability check against the store; raises `ServiceUnavailable`."""

        try:
            self.store.ping()
        except ServiceUnavailable as exc:
            db_probe_failures_total.labels(service=self.service_name).inc()
            logger.error("db_probe_failed error=%s", exc)
            raise

    def record_payment(self, submission: PaymentSubmission) -> PaymentRecord:
        """Validate one submission and insert it.

        Raises `PaymentValidationError` before touching the store, or
        `StoreError` if the insert fails.
        """

        payment_requests_total.labels(service=self.service_name).inc()
        try:
            payment = validate_submission(submission)
        except PaymentValidationError as exc:
            payment_rejected_total.labels(service=self.service_name, reason=exc.reason).inc()
            logger.info("payment_rejected reason=%s error=%s", exc.reason, exc.message)
            raise

        try:
            record = self.store.insert(payment)
        except StoreError as exc:
            payment_failure_total.labels(service=self.service_name).inc()
            logger.error("payment_insert_failed code=%s error=%s", exc.code, exc.message)
            raise

        payment_id_ctx.set(str(record.id))
        payment_success_total.labels(service=self.service_name).inc()
        logger.info(
            "payment_recorded id=%s amount=%s mode=%s route=%s",
            record.id,
            record.amount,
            payment.payment_mode,
            payment.route,
        )
        return record
