"""Use cases to manage payment methods and categories."""

from uuid import uuid4

from chanchito.application.ports.ledger_repository import LedgerRepositoryPort
from chanchito.domain.errors import ValidationError
from chanchito.domain.models import Category, PaymentMethod
from chanchito.domain.services.validation import validate_payment_method
from chanchito.infrastructure.logging.logger import get_app_logger


class CreatePaymentMethodUseCase:
    """Store a card, account or cash wallet."""

    def __init__(self, ledger_repository: LedgerRepositoryPort, logger=None) -> None:
        self._repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        user_id: str,
        name: str,
        method_type: str,
        default_closing_day: int | None = None,
        default_payment_day: int | None = None,
        is_personal: bool = False,
    ) -> PaymentMethod:
        """Create a payment method.

        Closing and payment days are stored for credit cards only; they
        are dropped for debit and cash.

        Raises:
            ValidationError: If the name, type or days are invalid.
            PersistenceError: If the method cannot be stored.
        """
        cleaned_name, normalized_type, closing, payment = validate_payment_method(
            name,
            method_type,
            default_closing_day,
            default_payment_day,
        )
        method = PaymentMethod(
            id=uuid4().hex,
            user_id=user_id,
            name=cleaned_name,
            type=normalized_type,
            default_closing_day=closing,
            default_payment_day=payment,
            is_personal=bool(is_personal),
        )
        self._repository.insert_payment_method(method)
        self._logger.info(f"Payment method created: {method.id} ({method.type})")
        return method


class DeletePaymentMethodUseCase:
    def __init__(self, ledger_repository: LedgerRepositoryPort, logger=None) -> None:
        self._repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(self, user_id: str, method_id: str) -> bool:
        deleted = self._repository.delete_payment_method(user_id, method_id)
        if deleted:
            self._logger.info(f"Payment method deleted: {method_id}")
        else:
            self._logger.warning(f"Payment method not found: {method_id}")
        return deleted


class CreateCategoryUseCase:
    def __init__(self, ledger_repository: LedgerRepositoryPort, logger=None) -> None:
        self._repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(self, user_id: str, name: str, emoji: str | None = None) -> Category:
        cleaned = (name or "").strip()
        if not cleaned or len(cleaned) > 50:
            raise ValidationError("name must have between 1 and 50 characters")
        category = Category(
            id=uuid4().hex,
            user_id=user_id,
            name=cleaned,
            emoji=(emoji or "").strip() or None,
        )
        self._repository.insert_category(category)
        self._logger.info(f"Category created: {category.id}")
        return category


__all__ = [
    "CreatePaymentMethodUseCase",
    "DeletePaymentMethodUseCase",
    "CreateCategoryUseCase",
]
