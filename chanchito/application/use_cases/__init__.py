"""Application use cases package."""

from .load_finance_state import FinanceState, LoadFinanceStateUseCase
from .get_dashboard_summary import GetDashboardSummaryUseCase
from .get_payment_method_statuses import GetPaymentMethodStatusesUseCase
from .get_installment_statuses import GetInstallmentStatusesUseCase
from .get_monthly_transactions import GetMonthlyTransactionsUseCase
from .get_portfolio_summary import GetPortfolioSummaryUseCase, PortfolioSummary
from .price_dispatcher import PriceResolutionDispatcher
from .refresh_market_prices import RefreshMarketPricesUseCase
from .manage_transactions import (
    CreateTransactionUseCase,
    DeleteTransactionUseCase,
    UpdateTransactionUseCase,
)
from .manage_installment_plans import (
    CreateInstallmentPlanUseCase,
    DeleteInstallmentPlanUseCase,
    UpdateInstallmentPlanUseCase,
)
from .manage_recurring_plans import (
    CreateRecurringPlanUseCase,
    DeleteRecurringPlanUseCase,
    ToggleRecurringPlanUseCase,
    UpdateRecurringPlanUseCase,
)
from .manage_payment_methods import (
    CreateCategoryUseCase,
    CreatePaymentMethodUseCase,
    DeletePaymentMethodUseCase,
)
from .manage_portfolio import (
    CreateInvestmentUseCase,
    CreateSavingUseCase,
    DeleteInvestmentUseCase,
    DeleteSavingUseCase,
)

__all__ = [
    "FinanceState",
    "LoadFinanceStateUseCase",
    "GetDashboardSummaryUseCase",
    "GetPaymentMethodStatusesUseCase",
    "GetInstallmentStatusesUseCase",
    "GetMonthlyTransactionsUseCase",
    "GetPortfolioSummaryUseCase",
    "PortfolioSummary",
    "PriceResolutionDispatcher",
    "RefreshMarketPricesUseCase",
    "CreateTransactionUseCase",
    "UpdateTransactionUseCase",
    "DeleteTransactionUseCase",
    "CreateInstallmentPlanUseCase",
    "UpdateInstallmentPlanUseCase",
    "DeleteInstallmentPlanUseCase",
    "CreateRecurringPlanUseCase",
    "UpdateRecurringPlanUseCase",
    "ToggleRecurringPlanUseCase",
    "DeleteRecurringPlanUseCase",
    "CreatePaymentMethodUseCase",
    "DeletePaymentMethodUseCase",
    "CreateCategoryUseCase",
    "CreateInvestmentUseCase",
    "DeleteInvestmentUseCase",
    "CreateSavingUseCase",
    "DeleteSavingUseCase",
]
