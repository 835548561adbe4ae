"""Composition root for wiring infrastructure adapters."""

from chanchito.application.ports.database import DatabaseEnginePort
from chanchito.application.ports.ledger_repository import LedgerRepositoryPort
from chanchito.application.ports.portfolio_repository import (
    PortfolioRepositoryPort,
)
from chanchito.application.ports.pricing import FxRateProviderPort
from chanchito.application.use_cases.get_monthly_transactions import (
    GetMonthlyTransactionsUseCase,
)
from chanchito.application.use_cases.load_finance_state import (
    LoadFinanceStateUseCase,
)
from chanchito.application.use_cases.manage_installment_plans import (
    CreateInstallmentPlanUseCase,
    DeleteInstallmentPlanUseCase,
    UpdateInstallmentPlanUseCase,
)
from chanchito.application.use_cases.manage_payment_methods import (
    CreateCategoryUseCase,
    CreatePaymentMethodUseCase,
    DeletePaymentMethodUseCase,
)
from chanchito.application.use_cases.manage_portfolio import (
    CreateInvestmentUseCase,
    CreateSavingUseCase,
    DeleteInvestmentUseCase,
    DeleteSavingUseCase,
)
from chanchito.application.use_cases.manage_recurring_plans import (
    CreateRecurringPlanUseCase,
    DeleteRecurringPlanUseCase,
    ToggleRecurringPlanUseCase,
    UpdateRecurringPlanUseCase,
)
from chanchito.application.use_cases.manage_transactions import (
    CreateTransactionUseCase,
    DeleteTransactionUseCase,
    UpdateTransactionUseCase,
)
from chanchito.application.use_cases.price_dispatcher import (
    PriceResolutionDispatcher,
)
from chanchito.application.use_cases.refresh_market_prices import (
    RefreshMarketPricesUseCase,
)
from chanchito.domain.services.pricing import (
    BROKER_SOURCE,
    CRYPTO_SOURCE,
    EQUITIES_SOURCE,
)
from chanchito.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from chanchito.infrastructure.fx_rates import DolarApiFxRateProvider
from chanchito.infrastructure.ledger_repository import SqlAlchemyLedgerRepository
from chanchito.infrastructure.logging.logger import get_app_logger
from chanchito.infrastructure.portfolio_repository import (
    SqlAlchemyPortfolioRepository,
)
from chanchito.infrastructure.price_sources import (
    CoinGeckoPriceSource,
    InvertirOnlinePriceSource,
    YahooFinancePriceSource,
)
from chanchito.infrastructure.settings import AppSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_ledger_repository(
    db_port: DatabaseEnginePort | None = None,
) -> LedgerRepositoryPort:
    """Return the ledger repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyLedgerRepository(resolved_db)


def build_portfolio_repository(
    db_port: DatabaseEnginePort | None = None,
) -> PortfolioRepositoryPort:
    """Return the portfolio repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyPortfolioRepository(resolved_db)


def build_state_loader(
    db_port: DatabaseEnginePort | None = None,
) -> LoadFinanceStateUseCase:
    """Return the use case loading a user's finance snapshot."""
    resolved_db = db_port or build_database_adapter()
    return LoadFinanceStateUseCase(
        build_ledger_repository(resolved_db),
        build_portfolio_repository(resolved_db),
    )


def build_price_dispatcher(
    settings: AppSettings | None = None,
) -> PriceResolutionDispatcher:
    """Return a dispatcher wired to every HTTP price source."""
    resolved = settings or AppSettings.from_env()
    logger = get_app_logger()
    timeout = resolved.price_fetch_timeout
    return PriceResolutionDispatcher(
        {
            EQUITIES_SOURCE: YahooFinancePriceSource(timeout, logger=logger),
            CRYPTO_SOURCE: CoinGeckoPriceSource(timeout, logger=logger),
            BROKER_SOURCE: InvertirOnlinePriceSource(timeout, logger=logger),
        },
        logger=logger,
    )


def build_fx_provider(settings: AppSettings | None = None) -> FxRateProviderPort:
    """Return the dolar blue quote provider."""
    resolved = settings or AppSettings.from_env()
    return DolarApiFxRateProvider(
        url=resolved.fx_rate_url,
        timeout=resolved.price_fetch_timeout,
    )


def build_refresh_market_prices(
    db_port: DatabaseEnginePort | None = None,
    settings: AppSettings | None = None,
) -> RefreshMarketPricesUseCase:
    """Return the batch market price refresh use case."""
    resolved = settings or AppSettings.from_env()
    return RefreshMarketPricesUseCase(
        build_portfolio_repository(db_port),
        build_price_dispatcher(resolved),
        batch_size=resolved.price_batch_size,
    )


def build_monthly_transactions(
    db_port: DatabaseEnginePort | None = None,
) -> GetMonthlyTransactionsUseCase:
    """Return the use case listing a month of transactions."""
    return GetMonthlyTransactionsUseCase(build_state_loader(db_port))


def build_create_transaction(
    db_port: DatabaseEnginePort | None = None,
) -> CreateTransactionUseCase:
    return CreateTransactionUseCase(build_ledger_repository(db_port))


def build_update_transaction(
    db_port: DatabaseEnginePort | None = None,
) -> UpdateTransactionUseCase:
    return UpdateTransactionUseCase(build_ledger_repository(db_port))


def build_delete_transaction(
    db_port: DatabaseEnginePort | None = None,
) -> DeleteTransactionUseCase:
    return DeleteTransactionUseCase(build_ledger_repository(db_port))


def build_create_installment_plan(
    db_port: DatabaseEnginePort | None = None,
) -> CreateInstallmentPlanUseCase:
    """Return the use case creating a plan with its installments."""
    return CreateInstallmentPlanUseCase(build_ledger_repository(db_port))


def build_update_installment_plan(
    db_port: DatabaseEnginePort | None = None,
) -> UpdateInstallmentPlanUseCase:
    return UpdateInstallmentPlanUseCase(build_ledger_repository(db_port))


def build_delete_installment_plan(
    db_port: DatabaseEnginePort | None = None,
) -> DeleteInstallmentPlanUseCase:
    return DeleteInstallmentPlanUseCase(build_ledger_repository(db_port))


def build_create_recurring_plan(
    db_port: DatabaseEnginePort | None = None,
) -> CreateRecurringPlanUseCase:
    return CreateRecurringPlanUseCase(build_ledger_repository(db_port))


def build_update_recurring_plan(
    db_port: DatabaseEnginePort | None = None,
) -> UpdateRecurringPlanUseCase:
    return UpdateRecurringPlanUseCase(build_ledger_repository(db_port))


def build_toggle_recurring_plan(
    db_port: DatabaseEnginePort | None = None,
) -> ToggleRecurringPlanUseCase:
    return ToggleRecurringPlanUseCase(build_ledger_repository(db_port))


def build_delete_recurring_plan(
    db_port: DatabaseEnginePort | None = None,
) -> DeleteRecurringPlanUseCase:
    return DeleteRecurringPlanUseCase(build_ledger_repository(db_port))


def build_create_payment_method(
    db_port: DatabaseEnginePort | None = None,
) -> CreatePaymentMethodUseCase:
    return CreatePaymentMethodUseCase(build_ledger_repository(db_port))


def build_delete_payment_method(
    db_port: DatabaseEnginePort | None = None,
) -> DeletePaymentMethodUseCase:
    return DeletePaymentMethodUseCase(build_ledger_repository(db_port))


def build_create_category(
    db_port: DatabaseEnginePort | None = None,
) -> CreateCategoryUseCase:
    return CreateCategoryUseCase(build_ledger_repository(db_port))


def build_create_investment(
    db_port: DatabaseEnginePort | None = None,
    settings: AppSettings | None = None,
) -> CreateInvestmentUseCase:
    """Return the use case registering a holding and seeding its price."""
    return CreateInvestmentUseCase(
        build_portfolio_repository(db_port),
        build_price_dispatcher(settings),
    )


def build_delete_investment(
    db_port: DatabaseEnginePort | None = None,
) -> DeleteInvestmentUseCase:
    return DeleteInvestmentUseCase(build_portfolio_repository(db_port))


def build_create_saving(
    db_port: DatabaseEnginePort | None = None,
) -> CreateSavingUseCase:
    return CreateSavingUseCase(build_portfolio_repository(db_port))


def build_delete_saving(
    db_port: DatabaseEnginePort | None = None,
) -> DeleteSavingUseCase:
    return DeleteSavingUseCase(build_portfolio_repository(db_port))


__all__ = [
    "build_database_adapter",
    "build_ledger_repository",
    "build_portfolio_repository",
    "build_state_loader",
    "build_price_dispatcher",
    "build_fx_provider",
    "build_refresh_market_prices",
    "build_monthly_transactions",
    "build_create_transaction",
    "build_update_transaction",
    "build_delete_transaction",
    "build_create_installment_plan",
    "build_update_installment_plan",
    "build_delete_installment_plan",
    "build_create_recurring_plan",
    "build_update_recurring_plan",
    "build_toggle_recurring_plan",
    "build_delete_recurring_plan",
    "build_create_payment_method",
    "build_delete_payment_method",
    "build_create_category",
    "build_create_investment",
    "build_delete_investment",
    "build_create_saving",
    "build_delete_saving",
]
