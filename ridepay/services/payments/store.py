"""Payment store gateway.

The only component that talks to the database. It exposes the two single-shot
operations the HTTP layer needs (an availability probe and the insert) plus
the clock query used by the startup check. Errors are surfaced, never retried.
"""

from datetime import datetime

from sqlalchemy import func, insert, select, text
from sqlalchemy.exc import SQLAlchemyError

from ridepay.services.payments.errors import ServiceUnavailable, StoreError
from ridepay.services.payments.models import PAYMENT_STATUS_COMPLETED, Payment
from ridepay.services.payments.schemas import NormalizedPayment, PaymentRecord


def _native_error(exc: SQLAlchemyError) -> StoreError:
    """Unwrap the DBAPI error so the caller sees the driver's own message/code."""

    orig = getattr(exc, "orig", None)
    if orig is None:
        return StoreError(str(exc))
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    return StoreError(str(orig), code=code)


class PaymentStore:
    """Executes payment queries through an injected session factory."""

    def __init__(self, session_factory) -> None:
        self.session_factory = session_factory

    def ping(self) -> None:
        """Raise `ServiceUnavailable` unless a trivial query succeeds."""

        try:
            with self.session_factory() as db:
                db.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            raise ServiceUnavailable(str(exc)) from exc

    def now(self) -> datetime:
        """Return the database clock; used as a connectivity check at startup."""

        try:
            with self.session_factory() as db:
                return db.execute(select(func.now())).scalar_one()
        except SQLAlchemyError as exc:
            raise ServiceUnavailable(str(exc)) from exc

    def insert(self, payment: NormalizedPayment) -> PaymentRecord:
        """Insert one payment and return the store-generated columns."""

        stmt = (
            insert(Payment)
            .values(
                amount=payment.amount,
                payment_mode=payment.payment_mode,
                client_email=payment.client_email,
                client_name=payment.client_name,
                route=payment.route,
                card_last4=payment.card_last4,
                card_brand=payment.card_brand,
                status=PAYMENT_STATUS_COMPLETED,
            )
            .returning(Payment.id, Payment.amount, Payment.status, Payment.created_at)
        )
        try:
            with self.session_factory() as db:
                row = db.execute(stmt).one()
                db.commit()
        except SQLAlchemyError as exc:
            raise _native_error(exc) from exc
        return PaymentRecord(id=row.id, amount=row.amount, status=row.status, created_at=row.created_at)
