"""Domain models for persisted finance records."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from chanchito.domain.constants import CREDIT, INCOME


def to_signed_amount(transaction_type: str, amount: Decimal) -> Decimal:
    """Return the amount signed by its transaction type.

    Income is positive and anything else is an expense.
    """
    magnitude = abs(amount)
    return magnitude if transaction_type == INCOME else -magnitude


@dataclass(frozen=True)
class Transaction:
    """A dated income or expense.

    Attributes:
        amount: Unsigned amount; the sign comes from ``type``.
        installment_plan_id: Owning installment plan, if any.
        recurring_plan_id: Recurring plan that produced it, if any.
    """

    id: str
    user_id: str
    description: str
    amount: Decimal
    type: str
    date: date
    category_id: str | None = None
    payment_method_id: str | None = None
    installment_plan_id: str | None = None
    recurring_plan_id: str | None = None

    @property
    def signed_amount(self) -> Decimal:
        """Return the amount with its income/expense sign applied."""
        return to_signed_amount(self.type, self.amount)

    @property
    def is_installment(self) -> bool:
        return self.installment_plan_id is not None


@dataclass(frozen=True)
class InstallmentPlan:
    """A purchase split into equal monthly installments."""

    id: str
    user_id: str
    description: str
    total_amount: Decimal
    installments_count: int
    purchase_date: date
    category_id: str | None = None
    payment_method_id: str | None = None

    @property
    def installment_amount(self) -> Decimal:
        """Return the constant per-installment value."""
        if self.installments_count <= 0:
            return Decimal("0")
        return self.total_amount / self.installments_count


@dataclass(frozen=True)
class RecurringPlan:
    """A fixed monthly obligation such as a subscription."""

    id: str
    user_id: str
    description: str
    amount: Decimal
    is_active: bool = True
    category_id: str | None = None
    payment_method_id: str | None = None


@dataclass(frozen=True)
class PaymentMethod:
    """A card, account or cash wallet transactions are paid with."""

    id: str
    user_id: str
    name: str
    type: str
    default_closing_day: int | None = None
    default_payment_day: int | None = None
    is_personal: bool = False

    @property
    def has_billing_cycle(self) -> bool:
        """Return True for credit cards with closing and payment days."""
        return (
            self.type == CREDIT
            and bool(self.default_closing_day)
            and bool(self.default_payment_day)
        )


@dataclass(frozen=True)
class Category:
    """User-defined spending category."""

    id: str
    user_id: str
    name: str
    emoji: str | None = None


@dataclass(frozen=True)
class Investment:
    """A single portfolio holding."""

    id: str
    user_id: str
    ticker: str
    name: str
    type: str
    quantity: Decimal
    currency: str
    avg_buy_price: Decimal | None = None
    data_source_url: str | None = None


@dataclass(frozen=True)
class MarketPrice:
    """Latest known price for a ticker."""

    ticker: str
    last_price: Decimal
    last_update: datetime


@dataclass(frozen=True)
class Saving:
    """A cash savings entry."""

    id: str
    user_id: str
    amount: Decimal
    currency: str
    date: date


@dataclass(frozen=True)
class FxQuote:
    """Informal USD/ARS quote (dolar blue)."""

    buy: Decimal
    sell: Decimal
    updated_at: datetime | None = None


__all__ = [
    "to_signed_amount",
    "Transaction",
    "InstallmentPlan",
    "RecurringPlan",
    "PaymentMethod",
    "Category",
    "Investment",
    "MarketPrice",
    "Saving",
    "FxQuote",
]
