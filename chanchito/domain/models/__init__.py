"""Domain models package."""

from .finance import (
    AmortizationPolicy,
    BillingCycle,
    CurrencyTotals,
    DashboardSummary,
    HoldingValuation,
    InstallmentScheduleItem,
    InstallmentStatus,
    MarketPriceRefreshResult,
    PatrimonySummary,
    PaymentMethodStatus,
    PortfolioStatus,
)
from .records import (
    Category,
    FxQuote,
    InstallmentPlan,
    Investment,
    MarketPrice,
    PaymentMethod,
    RecurringPlan,
    Saving,
    Transaction,
    to_signed_amount,
)

__all__ = [
    "AmortizationPolicy",
    "BillingCycle",
    "Category",
    "CurrencyTotals",
    "DashboardSummary",
    "FxQuote",
    "HoldingValuation",
    "InstallmentPlan",
    "InstallmentScheduleItem",
    "InstallmentStatus",
    "Investment",
    "MarketPrice",
    "MarketPriceRefreshResult",
    "PatrimonySummary",
    "PaymentMethod",
    "PaymentMethodStatus",
    "PortfolioStatus",
    "RecurringPlan",
    "Saving",
    "Transaction",
    "to_signed_amount",
]
