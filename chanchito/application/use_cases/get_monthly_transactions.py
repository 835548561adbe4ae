"""Use case to list the transactions shown under one month."""

from datetime import date

from chanchito.application.use_cases.load_finance_state import (
    LoadFinanceStateUseCase,
)
from chanchito.domain.errors import ValidationError
from chanchito.domain.models import Transaction
from chanchito.infrastructure.logging.logger import get_app_logger


class GetMonthlyTransactionsUseCase:
    """List a user's movements for a statement month."""

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
        year: int,
        month: int,
        payment_method_id: str | None = None,
        today: date | None = None,
    ) -> list[Transaction]:
        """Return the transactions listed under ``year``/``month``.

        Credit card charges are placed by statement: a charge made up to two
        days after the card's payment day still counts for the previous month.

        Args:
            user_id: User whose transactions are listed.
            year: Year of the month shown.
            month: Month shown (1-12).
            payment_method_id: Optional payment method filter.
            today: Optional reference date for the loaded snapshot.

        Returns:
            list[Transaction]: Matching transactions, newest first.

        Raises:
            ValidationError: If ``month`` is outside 1-12.
        """
        if not 1 <= int(month) <= 12:
            raise ValidationError(f"Invalid month: {month}")
        state = self._state_loader.execute(user_id, today=today)
        transactions = state.transactions_for_month(
            int(year),
            int(month),
            payment_method_id=payment_method_id or None,
        )
        self._logger.info(
            f"Monthly transactions for {year}-{int(month):02d}: {len(transactions)}"
        )
        return transactions


__all__ = ["GetMonthlyTransactionsUseCase"]
