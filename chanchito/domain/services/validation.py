"""Domain validation helpers.

Each helper raises ``ValidationError`` with a message safe to show to the
user, and returns the normalized value otherwise.
"""

from datetime import date
from decimal import Decimal, InvalidOperation

from chanchito.domain.constants import (
    ASSET_TYPES,
    CREDIT,
    CURRENCIES,
    PAYMENT_METHOD_TYPES,
    TRANSACTION_TYPES,
)
from chanchito.domain.errors import ValidationError
from chanchito.domain.services.normalization import normalize_ticker
from chanchito.utils.date_utils import coerce_date


def validate_amount(value, field_name: str = "amount") -> Decimal:
    """Return ``value`` as a strictly positive Decimal."""
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field_name} must be a number") from None
    if not amount.is_finite() or amount <= 0:
        raise ValidationError(f"{field_name} must be positive")
    return amount


def validate_description(value: str | None, min_length: int = 3) -> str:
    """Return a trimmed description of at least ``min_length`` characters."""
    description = (value or "").strip()
    if len(description) < min_length:
        raise ValidationError(
            f"description must have at least {min_length} characters"
        )
    return description


def validate_choice(value: str | None, choices, field_name: str) -> str:
    """Return ``value`` lower-cased when it is one of ``choices``."""
    normalized = (value or "").strip().lower()
    if normalized not in choices:
        raise ValidationError(
            f"{field_name} must be one of: {', '.join(choices)}"
        )
    return normalized


def validate_transaction_type(value: str | None) -> str:
    return validate_choice(value, TRANSACTION_TYPES, "type")


def validate_date(value, field_name: str = "date") -> date:
    """Return ``value`` as a calendar date."""
    try:
        parsed = coerce_date(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an ISO date") from None
    if parsed is None:
        raise ValidationError(f"{field_name} is required")
    return parsed


def validate_installments_count(value) -> int:
    """Return the installment count as an integer of at least 1."""
    if isinstance(value, bool):
        raise ValidationError("installments_count must be an integer")
    try:
        count = int(value)
    except (TypeError, ValueError):
        raise ValidationError("installments_count must be an integer") from None
    if isinstance(value, float) and value != count:
        raise ValidationError("installments_count must be an integer")
    if count < 1:
        raise ValidationError("installments_count must be at least 1")
    return count


def validate_day_of_month(value, field_name: str) -> int | None:
    """Return a day of month between 1 and 31, or None when unset."""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field_name} must be an integer")
    if not 1 <= value <= 31:
        raise ValidationError(f"{field_name} must be between 1 and 31")
    return value


def validate_payment_method(
    name: str | None,
    method_type: str | None,
    closing_day,
    payment_day,
) -> tuple[str, str, int | None, int | None]:
    """Validate a payment method definition.

    Closing and payment days are only kept for credit cards.

    Returns:
        tuple: Normalized name, type, closing day and payment day.
    """
    cleaned_name = (name or "").strip()
    if not cleaned_name or len(cleaned_name) > 50:
        raise ValidationError("name must have between 1 and 50 characters")
    normalized_type = validate_choice(method_type, PAYMENT_METHOD_TYPES, "type")
    closing = validate_day_of_month(closing_day, "default_closing_day")
    payment = validate_day_of_month(payment_day, "default_payment_day")
    if normalized_type != CREDIT:
        return cleaned_name, normalized_type, None, None
    return cleaned_name, normalized_type, closing, payment


def validate_ticker(value: str | None) -> str:
    """Return an upper-cased ticker of at most 20 characters."""
    ticker = normalize_ticker(value)
    if not ticker or len(ticker) > 20:
        raise ValidationError("ticker must have between 1 and 20 characters")
    return ticker


def validate_asset_type(value: str | None) -> str:
    return validate_choice(value, ASSET_TYPES, "type")


def validate_currency(value: str | None) -> str:
    """Return an upper-cased supported currency code."""
    currency = (value or "").strip().upper()
    if currency not in CURRENCIES:
        raise ValidationError(f"currency must be one of: {', '.join(CURRENCIES)}")
    return currency


def validate_optional_price(value) -> Decimal | None:
    """Return a non-negative price, or None when unset."""
    if value is None or value == "":
        return None
    try:
        price = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError("avg_buy_price must be a number") from None
    if not price.is_finite() or price < 0:
        raise ValidationError("avg_buy_price must not be negative")
    return price


__all__ = [
    "validate_amount",
    "validate_description",
    "validate_choice",
    "validate_transaction_type",
    "validate_date",
    "validate_installments_count",
    "validate_day_of_month",
    "validate_payment_method",
    "validate_ticker",
    "validate_asset_type",
    "validate_currency",
    "validate_optional_price",
]
