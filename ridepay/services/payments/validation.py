"""Submission validation for `POST /payments`.

Pure functions only: no I/O, no logging. The checks run in a fixed order and
stop at the first failure:

1. every required field is present and non-blank,
2. `amount` parses to a finite number,
3. `paymentMode` is one of the accepted modes.
"""

import math
import re
from typing import Any

from ridepay.services.payments.errors import InvalidAmount, InvalidPaymentMode, MissingField
from ridepay.services.payments.schemas import NormalizedPayment, PaymentSubmission


PAYMENT_MODES = ("credit", "debit")

# (attribute, wire name, expected type shown to the client)
REQUIRED_FIELDS: tuple[tuple[str, str, str], ...] = (
    ("amount", "amount", "number"),
    ("payment_mode", "paymentMode", "['credit','debit']"),
    ("client_email", "clientEmail", "string"),
    ("client_name", "clientName", "string"),
    ("route", "route", "string"),
)

_DECIMAL_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
_PREFIXED_INT_RE = re.compile(r"^0([xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)$")
_NON_DIGITS_RE = re.compile(r"\D")


def json_type_name(value: Any) -> str:
    """Name a decoded JSON value the way a client would describe it."""

    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    return "object"


def is_blank(value: Any) -> bool:
    """Presence check. Numeric zero counts as present."""

    if value is None or value is False:
        return True
    if isinstance(value, (str, list, tuple, dict)):
        return len(value) == 0
    return False


def coerce_amount(value: Any) -> float | None:
    """Loose numeric parse. Returns None when `value` is not a finite number."""

    if isinstance(value, bool):
        return None
    try:
        if isinstance(value, (int, float)):
            number = float(value)
        elif isinstance(value, str):
            text = value.strip()
            if _DECIMAL_RE.match(text):
                number = float(text)
            elif _PREFIXED_INT_RE.match(text):
                number = float(int(text, 0))
            else:
                return None
        else:
            return None
    except OverflowError:
        # Integers beyond the float range.
        return None
    if not math.isfinite(number):
        return None
    return number


def normalize_card_last4(value: Any) -> str | None:
    """Keep only digits and return the last four, or None if nothing is left."""

    if value is None:
        return None
    digits = _NON_DIGITS_RE.sub("", str(value))
    return digits[-4:] or None


def validate_submission(submission: PaymentSubmission) -> NormalizedPayment:
    """Return the normalized payment or raise a `PaymentValidationError`."""

    for attribute, wire_name, expected in REQUIRED_FIELDS:
        if is_blank(getattr(submission, attribute)):
            raise MissingField(wire_name, expected)

    amount = coerce_amount(submission.amount)
    if amount is None:
        raise InvalidAmount(json_type_name(submission.amount))

    if submission.payment_mode not in PAYMENT_MODES:
        raise InvalidPaymentMode()

    return NormalizedPayment(
        amount=amount,
        payment_mode=submission.payment_mode,
        client_email=str(submission.client_email),
        client_name=str(submission.client_name),
        route=str(submission.route),
        card_last4=normalize_card_last4(submission.card_last4),
        card_brand=str(submission.card_brand) if submission.card_brand else None,
    )
