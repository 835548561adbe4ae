"""Port for user-scoped ledger records."""

from datetime import date
from typing import Protocol

from chanchito.domain.models import (
    Category,
    InstallmentPlan,
    PaymentMethod,
    RecurringPlan,
    Transaction,
)


class LedgerRepositoryPort(Protocol):
    """Port exposing transactions, plans, payment methods and categories.

    Every method is scoped by ``user_id``. Failures raise
    ``PersistenceError`` (``ReferentialIntegrityError`` when a foreign key
    blocks a delete).
    """

    def fetch_transactions(self, user_id: str) -> list[Transaction]:
        """Return the user's transactions, newest first."""

    def fetch_installment_plans(self, user_id: str) -> list[InstallmentPlan]:
        """Return the user's installment plans."""

    def fetch_recurring_plans(self, user_id: str) -> list[RecurringPlan]:
        """Return the user's recurring plans."""

    def fetch_payment_methods(self, user_id: str) -> list[PaymentMethod]:
        """Return the user's payment methods."""

    def fetch_categories(self, user_id: str) -> list[Category]:
        """Return the user's categories ordered by name."""

    def insert_transactions(self, transactions: list[Transaction]) -> None:
        """Insert transactions in a single database transaction."""

    def update_transaction(
        self,
        user_id: str,
        transaction_id: str,
        *,
        description: str,
        transaction_date: date,
        category_id: str | None,
    ) -> bool:
        """Update description, date and category; return False if not found."""

    def delete_transaction(self, user_id: str, transaction_id: str) -> bool:
        """Delete one transaction; return False if not found."""

    def delete_plan_transactions(self, user_id: str, plan_id: str) -> int:
        """Delete the transactions owned by an installment plan."""

    def insert_installment_plan(self, plan: InstallmentPlan) -> None:
        """Insert an installment plan."""

    def update_installment_plan(
        self,
        user_id: str,
        plan_id: str,
        *,
        description: str,
        category_id: str | None,
    ) -> bool:
        """Update the description and category of a plan."""

    def delete_installment_plan(self, user_id: str, plan_id: str) -> bool:
        """Delete an installment plan."""

    def insert_recurring_plan(self, plan: RecurringPlan) -> None:
        """Insert a recurring plan."""

    def update_recurring_plan(self, plan: RecurringPlan) -> bool:
        """Replace the editable fields of a recurring plan."""

    def delete_recurring_plan(self, user_id: str, plan_id: str) -> bool:
        """Delete a recurring plan."""

    def insert_payment_method(self, method: PaymentMethod) -> None:
        """Insert a payment method."""

    def delete_payment_method(self, user_id: str, method_id: str) -> bool:
        """Delete a payment method."""

    def insert_category(self, category: Category) -> None:
        """Insert a category."""


__all__ = ["LedgerRepositoryPort"]
