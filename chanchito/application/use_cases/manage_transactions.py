"""Use cases to create, edit and delete single transactions."""

from datetime import date
from uuid import uuid4

from chanchito.application.ports.ledger_repository import LedgerRepositoryPort
from chanchito.domain.models import Transaction
from chanchito.domain.services.validation import (
    validate_amount,
    validate_date,
    validate_description,
    validate_transaction_type,
)
from chanchito.infrastructure.logging.logger import get_app_logger


class CreateTransactionUseCase:
    """Validate and store a one-off income or expense."""

    def __init__(self, ledger_repository: LedgerRepositoryPort, logger=None) -> None:
        self._repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        user_id: str,
        description: str,
        amount,
        transaction_type: str,
        transaction_date: date | str,
        category_id: str | None = None,
        payment_method_id: str | None = None,
    ) -> Transaction:
        """Create a transaction.

        Args:
            user_id: Owner of the transaction.
            description: Free text of at least three characters.
            amount: Positive amount; the sign comes from the type.
            transaction_type: ``income`` or ``expense``.
            transaction_date: Date of the transaction.
            category_id: Optional category.
            payment_method_id: Optional payment method.

        Returns:
            Transaction: Stored transaction.

        Raises:
            ValidationError: If any field is invalid.
            PersistenceError: If the transaction cannot be stored.
        """
        transaction = Transaction(
            id=uuid4().hex,
            user_id=user_id,
            description=validate_description(description),
            amount=validate_amount(amount),
            type=validate_transaction_type(transaction_type),
            date=validate_date(transaction_date),
            category_id=category_id or None,
            payment_method_id=payment_method_id or None,
        )
        self._repository.insert_transactions([transaction])
        self._logger.info(
            f"Transaction created: {transaction.id} ({transaction.type})"
        )
        return transaction


class UpdateTransactionUseCase:
    """Edit the description, date and category of a transaction.

    Amount and type are fixed once recorded: installment transactions must
    keep their plan's per-installment value.
    """

    def __init__(self, ledger_repository: LedgerRepositoryPort, logger=None) -> None:
        self._repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        user_id: str,
        transaction_id: str,
        description: str,
        transaction_date: date | str,
        category_id: str | None = None,
    ) -> bool:
        """Update a transaction; return False when it does not exist."""
        updated = self._repository.update_transaction(
            user_id,
            transaction_id,
            description=validate_description(description),
            transaction_date=validate_date(transaction_date),
            category_id=category_id or None,
        )
        if updated:
            self._logger.info(f"Transaction updated: {transaction_id}")
        else:
            self._logger.warning(f"Transaction not found: {transaction_id}")
        return updated


class DeleteTransactionUseCase:
    def __init__(self, ledger_repository: LedgerRepositoryPort, logger=None) -> None:
        self._repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(self, user_id: str, transaction_id: str) -> bool:
        deleted = self._repository.delete_transaction(user_id, transaction_id)
        if deleted:
            self._logger.info(f"Transaction deleted: {transaction_id}")
        else:
            self._logger.warning(f"Transaction not found: {transaction_id}")
        return deleted


__all__ = [
    "CreateTransactionUseCase",
    "UpdateTransactionUseCase",
    "DeleteTransactionUseCase",
]
