"""Use case to compute cycle consumption per payment method."""

from datetime import date

from chanchito.application.use_cases.load_finance_state import (
    LoadFinanceStateUseCase,
)
from chanchito.domain.models import PaymentMethod, PaymentMethodStatus
from chanchito.infrastructure.logging.logger import get_app_logger


class GetPaymentMethodStatusesUseCase:
    """Compute a status for every payment method of a user."""

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
    ) -> list[tuple[PaymentMethod, PaymentMethodStatus]]:
        """Return each payment method paired with its status.

        Args:
            user_id: User whose methods are evaluated.
            today: Optional reference date.

        Returns:
            list[tuple[PaymentMethod, PaymentMethodStatus]]: Methods in
            repository order with their computed status.
        """
        state = self._state_loader.execute(user_id, today=today)
        statuses = [
            (method, state.payment_method_status(method))
            for method in state.payment_methods
        ]
        self._logger.info(f"Payment method statuses computed: {len(statuses)}")
        return statuses


__all__ = ["GetPaymentMethodStatusesUseCase"]
