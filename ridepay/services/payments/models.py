"""Payment service database models."""

from datetime import datetime

from sqlalchemy import DateTime, Float, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from ridepay.common.db import Base


PAYMENT_STATUS_COMPLETED = "completed"


class Payment(Base):
    """One recorded payment. Rows are append-only."""

    __tablename__ = "payments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    payment_mode: Mapped[str] = mapped_column(String(16), nullable=False)
    client_email: Mapped[str] = mapped_column(String, nullable=False, index=True)
    client_name: Mapped[str] = mapped_column(String, nullable=False)
    route: Mapped[str] = mapped_column(String, nullable=False)
    card_last4: Mapped[str | None] = mapped_column(String(4), nullable=True)
    card_brand: Mapped[str | None] = mapped_column(String, nullable=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default=PAYMENT_STATUS_COMPLETED)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
