"""Use cases to manage recurring plans (subscriptions and fixed costs)."""

from dataclasses import replace
from uuid import uuid4

from chanchito.application.ports.ledger_repository import LedgerRepositoryPort
from chanchito.domain.models import RecurringPlan
from chanchito.domain.services.validation import (
    validate_amount,
    validate_description,
)
from chanchito.infrastructure.logging.logger import get_app_logger


class CreateRecurringPlanUseCase:
    def __init__(self, ledger_repository: LedgerRepositoryPort, logger=None) -> None:
        self._repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        user_id: str,
        description: str,
        amount,
        category_id: str | None = None,
        payment_method_id: str | None = None,
        is_active: bool = True,
    ) -> RecurringPlan:
        """Create a recurring plan.

        Raises:
            ValidationError: If the description or amount is invalid.
            PersistenceError: If the plan cannot be stored.
        """
        plan = RecurringPlan(
            id=uuid4().hex,
            user_id=user_id,
            description=validate_description(description),
            amount=validate_amount(amount),
            is_active=bool(is_active),
            category_id=category_id or None,
            payment_method_id=payment_method_id or None,
        )
        self._repository.insert_recurring_plan(plan)
        self._logger.info(f"Recurring plan created: {plan.id}")
        return plan


class UpdateRecurringPlanUseCase:
    def __init__(self, ledger_repository: LedgerRepositoryPort, logger=None) -> None:
        self._repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        plan: RecurringPlan,
        description: str,
        amount,
        category_id: str | None = None,
        payment_method_id: str | None = None,
    ) -> RecurringPlan | None:
        """Update an existing plan; return None when it no longer exists."""
        updated_plan = replace(
            plan,
            description=validate_description(description),
            amount=validate_amount(amount),
            category_id=category_id or None,
            payment_method_id=payment_method_id or None,
        )
        if not self._repository.update_recurring_plan(updated_plan):
            self._logger.warning(f"Recurring plan not found: {plan.id}")
            return None
        self._logger.info(f"Recurring plan updated: {plan.id}")
        return updated_plan


class ToggleRecurringPlanUseCase:
    """Activate or pause a recurring plan."""

    def __init__(self, ledger_repository: LedgerRepositoryPort, logger=None) -> None:
        self._repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        plan: RecurringPlan,
        is_active: bool | None = None,
    ) -> RecurringPlan | None:
        """Set ``is_active``, flipping the current value when omitted."""
        target = (not plan.is_active) if is_active is None else bool(is_active)
        updated_plan = replace(plan, is_active=target)
        if not self._repository.update_recurring_plan(updated_plan):
            self._logger.warning(f"Recurring plan not found: {plan.id}")
            return None
        state = "activated" if target else "paused"
        self._logger.info(f"Recurring plan {state}: {plan.id}")
        return updated_plan


class DeleteRecurringPlanUseCase:
    def __init__(self, ledger_repository: LedgerRepositoryPort, logger=None) -> None:
        self._repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(self, user_id: str, plan_id: str) -> bool:
        deleted = self._repository.delete_recurring_plan(user_id, plan_id)
        if deleted:
            self._logger.info(f"Recurring plan deleted: {plan_id}")
        else:
            self._logger.warning(f"Recurring plan not found: {plan_id}")
        return deleted


__all__ = [
    "CreateRecurringPlanUseCase",
    "UpdateRecurringPlanUseCase",
    "ToggleRecurringPlanUseCase",
    "DeleteRecurringPlanUseCase",
]
