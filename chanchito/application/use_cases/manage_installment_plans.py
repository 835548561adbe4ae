"""Use cases to create, edit and delete installment plans.

A plan owns one expense transaction per installment. Creating a plan writes
the parent and its children together; deleting it removes both.
"""

from datetime import date
from uuid import uuid4

from chanchito.application.ports.ledger_repository import LedgerRepositoryPort
from chanchito.domain.constants import EXPENSE
from chanchito.domain.errors import PersistenceError, ReferentialIntegrityError
from chanchito.domain.models import InstallmentPlan, Transaction
from chanchito.domain.services.installments import build_installment_schedule
from chanchito.domain.services.validation import (
    validate_amount,
    validate_date,
    validate_description,
    validate_installments_count,
)
from chanchito.infrastructure.logging.logger import get_app_logger


def build_plan_transactions(plan: InstallmentPlan) -> list[Transaction]:
    """Return the child expense transactions of ``plan``.

    Child ``i`` of ``N`` is dated ``i - 1`` months after the purchase and
    described as ``"<description> (i/N)"``.
    """
    return [
        Transaction(
            id=uuid4().hex,
            user_id=plan.user_id,
            description=f"{plan.description} ({item.number}/{plan.installments_count})",
            amount=item.amount,
            type=EXPENSE,
            date=item.due_date,
            category_id=plan.category_id,
            payment_method_id=plan.payment_method_id,
            installment_plan_id=plan.id,
        )
        for item in build_installment_schedule(
            plan.total_amount,
            plan.installments_count,
            plan.purchase_date,
        )
    ]


class CreateInstallmentPlanUseCase:
    """Store a plan and its installment transactions as one unit."""

    def __init__(self, ledger_repository: LedgerRepositoryPort, logger=None) -> None:
        self._repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        user_id: str,
        description: str,
        total_amount,
        installments_count,
        purchase_date: date | str,
        category_id: str | None = None,
        payment_method_id: str | None = None,
    ) -> InstallmentPlan:
        """Create an installment plan.

        Args:
            user_id: Owner of the plan.
            description: Purchase description.
            total_amount: Positive purchase total.
            installments_count: Number of monthly installments (>= 1).
            purchase_date: Date of the first installment.
            category_id: Optional category applied to every installment.
            payment_method_id: Optional payment method.

        Returns:
            InstallmentPlan: Stored plan.

        Raises:
            ValidationError: If any field is invalid.
            PersistenceError: If the plan or its installments cannot be
                stored. The parent row is removed again when the children
                fail, so no plan is left without installments.
        """
        plan = InstallmentPlan(
            id=uuid4().hex,
            user_id=user_id,
            description=validate_description(description),
            total_amount=validate_amount(total_amount, "total_amount"),
            installments_count=validate_installments_count(installments_count),
            purchase_date=validate_date(purchase_date, "purchase_date"),
            category_id=category_id or None,
            payment_method_id=payment_method_id or None,
        )
        children = build_plan_transactions(plan)

        self._repository.insert_installment_plan(plan)
        try:
            self._repository.insert_transactions(children)
        except PersistenceError as exc:
            self._logger.error(
                f"Installments for plan {plan.id} failed, rolling back: {exc}"
            )
            self._rollback(plan)
            raise PersistenceError(
                f"Could not create installments for plan {plan.id}"
            ) from exc

        self._logger.info(
            f"Installment plan created: {plan.id} "
            f"({plan.installments_count} installments)"
        )
        return plan

    def _rollback(self, plan: InstallmentPlan) -> None:
        try:
            self._repository.delete_installment_plan(plan.user_id, plan.id)
        except PersistenceError as exc:
            self._logger.critical(f"Orphan installment plan {plan.id}: {exc}")


class UpdateInstallmentPlanUseCase:
    """Edit the description and category of a plan.

    Amounts, counts and dates are fixed once the installments exist.
    """

    def __init__(self, ledger_repository: LedgerRepositoryPort, logger=None) -> None:
        self._repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        user_id: str,
        plan_id: str,
        description: str,
        category_id: str | None = None,
    ) -> bool:
        updated = self._repository.update_installment_plan(
            user_id,
            plan_id,
            description=validate_description(description),
            category_id=category_id or None,
        )
        if updated:
            self._logger.info(f"Installment plan updated: {plan_id}")
        else:
            self._logger.warning(f"Installment plan not found: {plan_id}")
        return updated


class DeleteInstallmentPlanUseCase:
    """Delete a plan together with its installment transactions."""

    def __init__(self, ledger_repository: LedgerRepositoryPort, logger=None) -> None:
        self._repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(self, user_id: str, plan_id: str) -> bool:
        """Delete a plan.

        The store normally cascades the delete to the children. When a
        foreign key still blocks it, the children are deleted explicitly
        and the plan delete is retried once.

        Returns:
            bool: True when the plan existed and was deleted.

        Raises:
            PersistenceError: If the plan cannot be deleted.
        """
        try:
            deleted = self._repository.delete_installment_plan(user_id, plan_id)
        except ReferentialIntegrityError as exc:
            self._logger.warning(
                f"Cascade delete blocked for plan {plan_id}, "
                f"deleting installments first: {exc}"
            )
            removed = self._repository.delete_plan_transactions(user_id, plan_id)
            self._logger.info(f"Deleted {removed} installments of plan {plan_id}")
            deleted = self._repository.delete_installment_plan(user_id, plan_id)

        if deleted:
            self._logger.info(f"Installment plan deleted: {plan_id}")
        else:
            self._logger.warning(f"Installment plan not found: {plan_id}")
        return deleted


__all__ = [
    "build_plan_transactions",
    "CreateInstallmentPlanUseCase",
    "UpdateInstallmentPlanUseCase",
    "DeleteInstallmentPlanUseCase",
]
