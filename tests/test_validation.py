"""Unit tests for submission validation and normalization."""

import pytest

from ridepay.services.payments.errors import InvalidAmount, InvalidPaymentMode, MissingField
from ridepay.services.payments.schemas import PaymentSubmission
from ridepay.services.payments.validation import coerce_amount, normalize_card_last4, validate_submission


def _submission(**overrides) -> PaymentSubmission:
    body = {
        "amount": 100,
        "paymentMode": "credit",
        "clientEmail": "test@example.com",
        "clientName": "Test User",
        "route": "Paris-Lyon",
    }
    body.update(overrides)
    return PaymentSubmission.model_validate(body)


def test_valid_submission_is_normalized():
    """A complete body comes back typed, with optional card fields defaulted."""

    payment = validate_submission(_submission())

    assert payment.amount == 100.0
    assert isinstance(payment.amount, float)
    assert payment.payment_mode == "credit"
    assert payment.route == "Paris-Lyon"
    assert payment.card_last4 is None
    assert payment.card_brand is None


@pytest.mark.parametrize(
    "field,expected",
    [
        ("amount", "number"),
        ("paymentMode", "['credit','debit']"),
        ("clientEmail", "string"),
        ("clientName", "string"),
        ("route", "string"),
    ],
)
def test_missing_required_field(field, expected):
    """Each required field is named in the error along with its expected type."""

    with pytest.raises(MissingField) as exc_info:
        validate_submission(_submission(**{field: None}))

    assert exc_info.value.field == field
    assert exc_info.value.message == f"Missing field: {field}"
    assert exc_info.value.details == f"Expected type: {expected}"


def test_empty_string_counts_as_missing():
    with pytest.raises(MissingField) as exc_info:
        validate_submission(_submission(clientName=""))

    assert exc_info.value.field == "clientName"


def test_presence_is_checked_before_amount():
    """Checks short-circuit in order: a missing route wins over a bad amount."""

    with pytest.raises(MissingField):
        validate_submission(_submission(amount="abc", route=None))


def test_zero_amount_is_present():
    """Zero is not treated as a missing value."""

    payment = validate_submission(_submission(amount=0))

    assert payment.amount == 0.0


@pytest.mark.parametrize("raw,received", [("abc", "string"), (True, "boolean"), ([1], "array"), ({"v": 1}, "object")])
def test_non_numeric_amount(raw, received):
    with pytest.raises(InvalidAmount) as exc_info:
        validate_submission(_submission(amount=raw))

    assert exc_info.value.message == "Amount must be a number"
    assert exc_info.value.details == f"Received: {received}"


@pytest.mark.parametrize(
    "raw,expected",
    [("42", 42.0), (" 12.50 ", 12.5), ("1e3", 1000.0), (".5", 0.5), ("0x10", 16.0), (7, 7.0), (3.25, 3.25)],
)
def test_loose_numeric_parse(raw, expected):
    assert coerce_amount(raw) == expected


@pytest.mark.parametrize(
    "raw",
    ["Infinity", "inf", "nan", "NaN", "1_000", "12abc", "", "1e400", float("inf"), float("nan"), 10**400, "0x" + "f" * 300],
)
def test_non_finite_or_malformed_amounts_rejected(raw):
    assert coerce_amount(raw) is None


@pytest.mark.parametrize("mode", ["cash", "CREDIT", "Debit", 1])
def test_unknown_payment_mode(mode):
    with pytest.raises(InvalidPaymentMode) as exc_info:
        validate_submission(_submission(paymentMode=mode))

    assert exc_info.value.details == 'Must be "credit" or "debit"'


def test_card_fields_are_normalized():
    """Card digits are stripped to the last four; brand passes through."""

    payment = validate_submission(_submission(cardLast4="4111 1111-1111 1234", cardBrand="visa", paymentMode="debit"))

    assert payment.card_last4 == "1234"
    assert payment.card_brand == "visa"
    assert payment.payment_mode == "debit"


@pytest.mark.parametrize("raw,expected", [("12", "12"), ("ab", None), ("", None), (None, None), (987654, "7654")])
def test_card_last4_normalization(raw, expected):
    assert normalize_card_last4(raw) == expected
