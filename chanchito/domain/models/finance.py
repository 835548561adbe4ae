"""Domain models for derived finance figures."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from chanchito.domain.models.records import Investment


class AmortizationPolicy(str, Enum):
    """Strategy used to decide how much of an installment plan is paid."""

    CALENDAR = "calendar"
    LEDGER = "ledger"


@dataclass(frozen=True)
class BillingCycle:
    """A credit card billing cycle.

    Attributes:
        start_date: First day included in the cycle.
        closing_date: Day the statement closes.
        payment_date: Day the statement balance is due.
    """

    start_date: date
    closing_date: date
    payment_date: date


@dataclass(frozen=True)
class InstallmentScheduleItem:
    """One scheduled installment of a plan."""

    number: int
    due_date: date
    amount: Decimal


@dataclass(frozen=True)
class InstallmentStatus:
    """Amortization progress of an installment plan."""

    plan_id: str
    policy: AmortizationPolicy
    installment_amount: Decimal
    paid_amount: Decimal
    remaining_amount: Decimal
    progress_percent: Decimal
    installments_paid: int
    remaining_installments: int
    current_installment: int
    is_finished: bool


@dataclass(frozen=True)
class PaymentMethodStatus:
    """Cycle consumption and fixed-cost load of a payment method.

    Attributes:
        cycle_net: Signed sum of the transactions in scope.
        cycle_spent: Sum of expense amounts in scope.
        fixed_costs: Active recurring plans charged to the method.
        current_consumption: ``cycle_net`` minus ``fixed_costs``.
        projected_total: Alias of ``current_consumption``.
        projected_spend: ``cycle_spent`` plus ``fixed_costs``.
        is_cycle_scoped: False when the all-time fallback was used.
    """

    method_id: str
    cycle_net: Decimal
    cycle_spent: Decimal
    fixed_costs: Decimal
    current_consumption: Decimal
    projected_total: Decimal
    projected_spend: Decimal
    is_cycle_scoped: bool
    next_closing_date: date | None = None
    next_payment_date: date | None = None


@dataclass(frozen=True)
class HoldingValuation:
    """Valuation of a single holding at its last known price."""

    investment: Investment
    last_price: Decimal | None
    last_update: datetime | None
    current_value: Decimal
    cost_basis: Decimal
    profit: Decimal
    profit_percent: Decimal

    @property
    def is_priced(self) -> bool:
        return self.last_price is not None


@dataclass(frozen=True)
class CurrencyTotals:
    """Portfolio totals for one currency bucket."""

    currency: str
    balance: Decimal = Decimal("0")
    profit: Decimal = Decimal("0")
    last_update: datetime | None = None


@dataclass(frozen=True)
class PortfolioStatus:
    """Valued holdings with totals split by currency."""

    holdings: list[HoldingValuation]
    totals: dict[str, CurrencyTotals]
    last_update: datetime | None = None

    def balance(self, currency: str) -> Decimal:
        totals = self.totals.get(currency)
        return totals.balance if totals else Decimal("0")

    def profit(self, currency: str) -> Decimal:
        totals = self.totals.get(currency)
        return totals.profit if totals else Decimal("0")


@dataclass(frozen=True)
class PatrimonySummary:
    """Total patrimony expressed in ARS and USD.

    Attributes:
        fx_rate: Blue sell rate used, or None when totals are unconverted.
    """

    investments_ars: Decimal
    investments_usd: Decimal
    savings_ars: Decimal
    savings_usd: Decimal
    total_ars: Decimal
    total_usd: Decimal
    fx_rate: Decimal | None = None

    @property
    def is_converted(self) -> bool:
        return self.fx_rate is not None


@dataclass(frozen=True)
class DashboardSummary:
    """Home dashboard figures."""

    global_balance: Decimal
    global_income: Decimal
    effective_expenses: Decimal
    monthly_burn_rate: Decimal
    current_month_installments_total: Decimal
    expenses_by_category: dict[str, Decimal] = field(default_factory=dict)


@dataclass(frozen=True)
class MarketPriceRefreshResult:
    """Outcome of a batch market price refresh."""

    requested: int
    updated: int
    failed_tickers: list[str] = field(default_factory=list)


__all__ = [
    "AmortizationPolicy",
    "BillingCycle",
    "InstallmentScheduleItem",
    "InstallmentStatus",
    "PaymentMethodStatus",
    "HoldingValuation",
    "CurrencyTotals",
    "PortfolioStatus",
    "PatrimonySummary",
    "DashboardSummary",
    "MarketPriceRefreshResult",
]
