"""Load one user's finance records into an in-memory snapshot."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from chanchito.application.ports.ledger_repository import LedgerRepositoryPort
from chanchito.application.ports.portfolio_repository import (
    PortfolioRepositoryPort,
)
from chanchito.domain.models import (
    AmortizationPolicy,
    Category,
    DashboardSummary,
    InstallmentPlan,
    InstallmentStatus,
    Investment,
    MarketPrice,
    PaymentMethod,
    PaymentMethodStatus,
    PortfolioStatus,
    RecurringPlan,
    Saving,
    Transaction,
)
from chanchito.domain.services.dashboard import (
    CURRENT_MONTH_SCOPE,
    build_dashboard_summary,
)
from chanchito.domain.services.installments import compute_installment_status
from chanchito.domain.services.movements import transactions_for_month
from chanchito.domain.services.payment_methods import (
    compute_payment_method_status,
)
from chanchito.domain.services.portfolio import summarize_portfolio
from chanchito.domain.services.recurring import monthly_burn_rate
from chanchito.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class FinanceState:
    """Snapshot of a user's records evaluated at ``today``.

    Derived figures are computed on demand from the collections, so a state
    built in a test behaves exactly like one loaded from the database.
    """

    user_id: str
    today: date
    transactions: list[Transaction] = field(default_factory=list)
    installment_plans: list[InstallmentPlan] = field(default_factory=list)
    recurring_plans: list[RecurringPlan] = field(default_factory=list)
    payment_methods: list[PaymentMethod] = field(default_factory=list)
    categories: list[Category] = field(default_factory=list)
    investments: list[Investment] = field(default_factory=list)
    market_prices: list[MarketPrice] = field(default_factory=list)
    savings: list[Saving] = field(default_factory=list)

    def payment_method(self, method_id: str | None) -> PaymentMethod | None:
        for method in self.payment_methods:
            if method.id == method_id:
                return method
        return None

    def installment_status(
        self,
        plan: InstallmentPlan,
        policy: AmortizationPolicy = AmortizationPolicy.LEDGER,
    ) -> InstallmentStatus:
        return compute_installment_status(
            plan,
            self.transactions,
            self.today,
            policy=policy,
            payment_method=self.payment_method(plan.payment_method_id),
        )

    def payment_method_status(self, method: PaymentMethod) -> PaymentMethodStatus:
        return compute_payment_method_status(
            method,
            self.transactions,
            self.recurring_plans,
            self.today,
        )

    def transactions_for_month(
        self,
        year: int,
        month: int,
        payment_method_id: str | None = None,
    ) -> list[Transaction]:
        return transactions_for_month(
            self.transactions,
            self.payment_methods,
            year,
            month,
            payment_method_id=payment_method_id,
        )

    def portfolio_status(self, logger=None) -> PortfolioStatus:
        return summarize_portfolio(self.investments, self.market_prices, logger)

    def monthly_burn_rate(self) -> Decimal:
        return monthly_burn_rate(self.recurring_plans)

    def dashboard_summary(self, scope: str = CURRENT_MONTH_SCOPE) -> DashboardSummary:
        return build_dashboard_summary(
            self.transactions,
            self.payment_methods,
            self.recurring_plans,
            self.categories,
            self.today,
            scope=scope,
        )


class LoadFinanceStateUseCase:
    """Read every collection of a user through the repositories."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        portfolio_repository: PortfolioRepositoryPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger_repository: Port for transactions, plans and methods.
            portfolio_repository: Port for holdings, savings and prices.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._ledger = ledger_repository
        self._portfolio = portfolio_repository
        self._logger = logger or get_app_logger()

    def execute(self, user_id: str, today: date | None = None) -> FinanceState:
        """Return the finance snapshot of ``user_id``.

        Args:
            user_id: User whose records are loaded.
            today: Optional reference date; defaults to the current date.

        Returns:
            FinanceState: Loaded collections.

        Raises:
            PersistenceError: If any collection cannot be read.
        """
        investments = self._portfolio.fetch_investments(user_id)
        tickers = sorted({investment.ticker for investment in investments})
        state = FinanceState(
            user_id=user_id,
            today=today or date.today(),
            transactions=self._ledger.fetch_transactions(user_id),
            installment_plans=self._ledger.fetch_installment_plans(user_id),
            recurring_plans=self._ledger.fetch_recurring_plans(user_id),
            payment_methods=self._ledger.fetch_payment_methods(user_id),
            categories=self._ledger.fetch_categories(user_id),
            investments=investments,
            market_prices=(
                self._portfolio.fetch_market_prices(tickers) if tickers else []
            ),
            savings=self._portfolio.fetch_savings(user_id),
        )
        self._logger.info(
            f"Finance state loaded for {user_id}: "
            f"{len(state.transactions)} transactions, "
            f"{len(state.investments)} holdings"
        )
        return state


__all__ = ["FinanceState", "LoadFinanceStateUseCase"]
