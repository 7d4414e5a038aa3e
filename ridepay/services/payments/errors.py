"""Failure taxonomy for the payment pipeline.

Validation failures are client errors and carry the `error`/`details` pair
returned in the 400 body. Store failures keep the driver's native message and
SQLSTATE code untouched; the HTTP layer decides how much of it to expose.
"""


class PaymentValidationError(ValueError):
    """Base class for submissions rejected before persistence."""

    reason = "invalid"

    def __init__(self, message: str, details: str) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class MissingField(PaymentValidationError):
    reason = "missing_field"

    def __init__(self, field: str, expected: str) -> None:
        super().__init__(f"Missing field: {field}", f"Expected type: {expected}")
        self.field = field


class InvalidAmount(PaymentValidationError):
    reason = "invalid_amount"

    def __init__(self, received_type: str) -> None:
        super().__init__("Amount must be a number", f"Received: {received_type}")
        self.received_type = received_type


class InvalidPaymentMode(PaymentValidationError):
    reason = "invalid_payment_mode"

    def __init__(self) -> None:
        super().__init__("Invalid payment mode", 'Must be "credit" or "debit"')


class ServiceUnavailable(Exception):
    """The availability probe could not reach the store."""


class StoreError(Exception):
    """A store operation failed; `code` is the driver's SQLSTATE when known."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
