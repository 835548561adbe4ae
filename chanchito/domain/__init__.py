"""Domain package for business rules and core models."""

from .errors import (
    ChanchitoError,
    PersistenceError,
    ReferentialIntegrityError,
    ValidationError,
)
from .models import (
    AmortizationPolicy,
    Category,
    FxQuote,
    InstallmentPlan,
    Investment,
    MarketPrice,
    PaymentMethod,
    RecurringPlan,
    Saving,
    Transaction,
)

__all__ = [
    "AmortizationPolicy",
    "Category",
    "ChanchitoError",
    "FxQuote",
    "InstallmentPlan",
    "Investment",
    "MarketPrice",
    "PaymentMethod",
    "PersistenceError",
    "RecurringPlan",
    "ReferentialIntegrityError",
    "Saving",
    "Transaction",
    "ValidationError",
]
