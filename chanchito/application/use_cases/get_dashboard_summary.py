"""Use case to compute the home dashboard figures."""

from datetime import date

from chanchito.application.use_cases.load_finance_state import (
    LoadFinanceStateUseCase,
)
from chanchito.domain.models import DashboardSummary
from chanchito.domain.services.dashboard import CURRENT_MONTH_SCOPE
from chanchito.infrastructure.logging.logger import get_app_logger


class GetDashboardSummaryUseCase:
    """Compute balance, income, effective expenses and category totals."""

    def __init__(
        self,
        state_loader: LoadFinanceStateUseCase,
        logger=None,
    ) -> None:
        self._state_loader = state_loader
        self._logger = logger or get_app_logger()

    def execute(
        self,
        user_id: str,
        today: date | None = None,
        scope: str = CURRENT_MONTH_SCOPE,
    ) -> DashboardSummary:
        """Return the dashboard summary of ``user_id``.

        Args:
            user_id: User whose records are summarized.
            today: Optional reference date.
            scope: Category breakdown scope (``global`` or ``current_month``).

        Returns:
            DashboardSummary: Home dashboard figures.
        """
        state = self._state_loader.execute(user_id, today=today)
        summary = state.dashboard_summary(scope=scope)
        self._logger.info(
            f"Dashboard computed: balance={summary.global_balance}, "
            f"burn_rate={summary.monthly_burn_rate}"
        )
        return summary


__all__ = ["GetDashboardSummaryUseCase"]
