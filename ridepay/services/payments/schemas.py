"""Request/response shapes for the payment endpoints."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class PaymentSubmission(BaseModel):
    """Raw `POST /payments` body.

    Every field is loosely typed on purpose: nothing here is trusted until
    `validate_submission` has run.
    """

    model_config = ConfigDict(extra="ignore")

    amount: Any = None
    payment_mode: Any = Field(default=None, alias="paymentMode")
    client_email: Any = Field(default=None, alias="clientEmail")
    client_name: Any = Field(default=None, alias="clientName")
    route: Any = None
    card_last4: Any = Field(default=None, alias="cardLast4")
    card_brand: Any = Field(default=None, alias="cardBrand")


class NormalizedPayment(BaseModel):
    """A submission that passed validation, ready for insert."""

    amount: float
    payment_mode: Literal["credit", "debit"]
    client_email: str
    client_name: str
    route: str
    card_last4: str | None = None
    card_brand: str | None = None


class PaymentRecord(BaseModel):
    """Columns returned by the store after insert."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    amount: float
    status: str
    created_at: datetime = Field(alias="createdAt")


class PaymentCreatedResponse(BaseModel):
    """201 body for a recorded payment."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    payment: PaymentRecord
    receipt_url: str = Field(alias="receiptUrl")


class HealthResponse(BaseModel):
    status: str = "OK"
    timestamp: str
    database: str = "Connected"
