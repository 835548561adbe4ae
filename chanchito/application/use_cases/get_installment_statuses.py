"""Use case to compute amortization progress of installment plans."""

from datetime import date

from chanchito.application.use_cases.load_finance_state import (
    LoadFinanceStateUseCase,
)
from chanchito.domain.models import (
    AmortizationPolicy,
    InstallmentPlan,
    InstallmentStatus,
)
from chanchito.infrastructure.logging.logger import get_app_logger


class GetInstallmentStatusesUseCase:
    """Compute progress for every installment plan of a user."""

    def __init__(
        self,
        state_loader: LoadFinanceStateUseCase,
        logger=None,
        policy: AmortizationPolicy = AmortizationPolicy.LEDGER,
    ) -> None:
        """Initialize the use case.

        Args:
            state_loader: Use case loading the user's records.
            logger: Optional logger compatible with logging.Logger-like API.
            policy: Amortization policy applied to every plan.
        """
        self._state_loader = state_loader
        self._logger = logger or get_app_logger()
        self._policy = AmortizationPolicy(policy)

    def execute(
        self,
        user_id: str,
        today: date | None = None,
        include_finished: bool = True,
    ) -> list[tuple[InstallmentPlan, InstallmentStatus]]:
        """Return each plan paired with its status.

        Args:
            user_id: User whose plans are evaluated.
            today: Optional reference date.
            include_finished: Whether finished plans are returned.

        Returns:
            list[tuple[InstallmentPlan, InstallmentStatus]]: Plans with their
            computed progress.
        """
        state = self._state_loader.execute(user_id, today=today)
        statuses = []
        for plan in state.installment_plans:
            status = state.installment_status(plan, policy=self._policy)
            if status.is_finished and not include_finished:
                continue
            statuses.append((plan, status))
        self._logger.info(
            f"Installment statuses computed ({self._policy.value}): "
            f"{len(statuses)}"
        )
        return statuses


__all__ = ["GetInstallmentStatusesUseCase"]
