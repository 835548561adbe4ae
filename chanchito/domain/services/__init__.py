"""Domain services package."""

from .billing_cycle import (
    add_months,
    billing_cycle_for,
    clamp_day,
    cycle_adjusted_date,
    cycle_closing_in_month,
    months_between,
    statement_period_date,
)
from .dashboard import build_dashboard_summary, expenses_by_category
from .movements import period_date, transactions_for_month
from .installments import (
    build_installment_schedule,
    calendar_installment_status,
    compute_installment_status,
    installment_value,
    ledger_installment_status,
)
from .normalization import normalize_currency, normalize_ticker
from .payment_methods import compute_payment_method_status
from .portfolio import (
    allocation_by_type,
    compute_patrimony,
    savings_totals,
    summarize_portfolio,
    value_holding,
)
from .pricing import (
    build_data_source_url,
    coerce_price,
    parse_localized_price,
    price_source_for,
)
from .recurring import (
    active_recurring_plans,
    fixed_costs_for_method,
    monthly_burn_rate,
)

__all__ = [
    "add_months",
    "billing_cycle_for",
    "clamp_day",
    "cycle_adjusted_date",
    "cycle_closing_in_month",
    "months_between",
    "statement_period_date",
    "build_dashboard_summary",
    "expenses_by_category",
    "build_installment_schedule",
    "calendar_installment_status",
    "compute_installment_status",
    "installment_value",
    "ledger_installment_status",
    "period_date",
    "transactions_for_month",
    "normalize_currency",
    "normalize_ticker",
    "compute_payment_method_status",
    "allocation_by_type",
    "compute_patrimony",
    "savings_totals",
    "summarize_portfolio",
    "value_holding",
    "build_data_source_url",
    "coerce_price",
    "parse_localized_price",
    "price_source_for",
    "active_recurring_plans",
    "fixed_costs_for_method",
    "monthly_burn_rate",
]
