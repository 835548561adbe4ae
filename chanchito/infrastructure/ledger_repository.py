"""SQLAlchemy-backed repository for ledger records."""

from datetime import date
from decimal import Decimal

from sqlalchemy import text

from chanchito.application.ports.database import DatabaseEnginePort
from chanchito.application.ports.ledger_repository import LedgerRepositoryPort
from chanchito.domain.models import (
    Category,
    InstallmentPlan,
    PaymentMethod,
    RecurringPlan,
    Transaction,
)
from chanchito.infrastructure.repository_errors import translate_db_errors
from chanchito.utils.date_utils import coerce_date
from chanchito.utils.decimal_utils import coerce_decimal


def _to_db_amount(value: Decimal) -> str:
    return str(value)


def _to_db_date(value: date) -> str:
    return value.isoformat()


class SqlAlchemyLedgerRepository(LedgerRepositoryPort):
    """Repository for transactions, plans, payment methods and categories.

    Amounts and dates are bound as strings so the same statements run on
    PostgreSQL and SQLite; rows are normalized back on read.
    """

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the finance engine.
        """
        self._db_port = db_port

    def _read(self, action: str, query, params: dict):
        with translate_db_errors(action):
            with self._db_port.get_engine().connect() as conn:
                return conn.execute(query, params).all()

    def _write(self, action: str, query, params) -> int:
        with translate_db_errors(action):
            with self._db_port.get_engine().begin() as conn:
                result = conn.execute(query, params)
                return result.rowcount

    def fetch_transactions(self, user_id: str) -> list[Transaction]:
        query = text(
            """
            SELECT id, user_id, description, amount, type, date, category_id,
                   payment_method_id, installment_plan_id, recurring_plan_id
            FROM transactions
            WHERE user_id = :user_id
            ORDER BY date DESC, id
            """
        )
        rows = self._read("fetch transactions", query, {"user_id": user_id})
        return [
            Transaction(
                id=row.id,
                user_id=row.user_id,
                description=row.description,
                amount=coerce_decimal(row.amount),
                type=row.type,
                date=coerce_date(row.date),
                category_id=row.category_id,
                payment_method_id=row.payment_method_id,
                installment_plan_id=row.installment_plan_id,
                recurring_plan_id=row.recurring_plan_id,
            )
            for row in rows
        ]

    def fetch_installment_plans(self, user_id: str) -> list[InstallmentPlan]:
        query = text(
            """
            SELECT id, user_id, description, total_amount, installments_count,
                   purchase_date, category_id, payment_method_id
            FROM installment_plans
            WHERE user_id = :user_id
            ORDER BY purchase_date DESC, id
            """
        )
        rows = self._read("fetch installment plans", query, {"user_id": user_id})
        return [
            InstallmentPlan(
                id=row.id,
                user_id=row.user_id,
                description=row.description,
                total_amount=coerce_decimal(row.total_amount),
                installments_count=int(row.installments_count),
                purchase_date=coerce_date(row.purchase_date),
                category_id=row.category_id,
                payment_method_id=row.payment_method_id,
            )
            for row in rows
        ]

    def fetch_recurring_plans(self, user_id: str) -> list[RecurringPlan]:
        query = text(
            """
            SELECT id, user_id, description, amount, is_active, category_id,
                   payment_method_id
            FROM recurring_plans
            WHERE user_id = :user_id
            ORDER BY description
            """
        )
        rows = self._read("fetch recurring plans", query, {"user_id": user_id})
        return [
            RecurringPlan(
                id=row.id,
                user_id=row.user_id,
                description=row.description,
                amount=coerce_decimal(row.amount),
                is_active=bool(row.is_active),
                category_id=row.category_id,
                payment_method_id=row.payment_method_id,
            )
            for row in rows
        ]

    def fetch_payment_methods(self, user_id: str) -> list[PaymentMethod]:
        query = text(
            """
            SELECT id, user_id, name, type, default_closing_day,
                   default_payment_day, is_personal
            FROM payment_methods
            WHERE user_id = :user_id
            ORDER BY name
            """
        )
        rows = self._read("fetch payment methods", query, {"user_id": user_id})
        return [
            PaymentMethod(
                id=row.id,
                user_id=row.user_id,
                name=row.name,
                type=row.type,
                default_closing_day=row.default_closing_day,
                default_payment_day=row.default_payment_day,
                is_personal=bool(row.is_personal),
            )
            for row in rows
        ]

    def fetch_categories(self, user_id: str) -> list[Category]:
        query = text(
            """
            SELECT id, user_id, name, emoji
            FROM categories
            WHERE user_id = :user_id
            ORDER BY name
            """
        )
        rows = self._read("fetch categories", query, {"user_id": user_id})
        return [
            Category(
                id=row.id,
                user_id=row.user_id,
                name=row.name,
                emoji=row.emoji,
            )
            for row in rows
        ]

    def insert_transactions(self, transactions: list[Transaction]) -> None:
        if not transactions:
            return
        query = text(
            """
            INSERT INTO transactions (
                id, user_id, description, amount, type, date, category_id,
                payment_method_id, installment_plan_id, recurring_plan_id
            ) VALUES (
                :id, :user_id, :description, :amount, :type, :date,
                :category_id, :payment_method_id, :installment_plan_id,
                :recurring_plan_id
            )
            """
        )
        params = [
            {
                "id": item.id,
                "user_id": item.user_id,
                "description": item.description,
                "amount": _to_db_amount(item.amount),
                "type": item.type,
                "date": _to_db_date(item.date),
                "category_id": item.category_id,
                "payment_method_id": item.payment_method_id,
                "installment_plan_id": item.installment_plan_id,
                "recurring_plan_id": item.recurring_plan_id,
            }
            for item in transactions
        ]
        self._write("insert transactions", query, params)

    def update_transaction(
        self,
        user_id: str,
        transaction_id: str,
        *,
        description: str,
        transaction_date: date,
        category_id: str | None,
    ) -> bool:
        query = text(
            """
            UPDATE transactions
            SET description = :description,
                date = :date,
                category_id = :category_id
            WHERE id = :id AND user_id = :user_id
            """
        )
        params = {
            "id": transaction_id,
            "user_id": user_id,
            "description": description,
            "date": _to_db_date(transaction_date),
            "category_id": category_id,
        }
        return self._write("update transaction", query, params) > 0

    def delete_transaction(self, user_id: str, transaction_id: str) -> bool:
        query = text(
            "DELETE FROM transactions WHERE id = :id AND user_id = :user_id"
        )
        params = {"id": transaction_id, "user_id": user_id}
        return self._write("delete transaction", query, params) > 0

    def delete_plan_transactions(self, user_id: str, plan_id: str) -> int:
        query = text(
            """
            DELETE FROM transactions
            WHERE installment_plan_id = :plan_id AND user_id = :user_id
            """
        )
        params = {"plan_id": plan_id, "user_id": user_id}
        return self._write("delete plan transactions", query, params)

    def insert_installment_plan(self, plan: InstallmentPlan) -> None:
        query = text(
            """
            INSERT INTO installment_plans (
                id, user_id, description, total_amount, installments_count,
                purchase_date, category_id, payment_method_id
            ) VALUES (
                :id, :user_id, :description, :total_amount,
                :installments_count, :purchase_date, :category_id,
                :payment_method_id
            )
            """
        )
        params = {
            "id": plan.id,
            "user_id": plan.user_id,
            "description": plan.description,
            "total_amount": _to_db_amount(plan.total_amount),
            "installments_count": plan.installments_count,
            "purchase_date": _to_db_date(plan.purchase_date),
            "category_id": plan.category_id,
            "payment_method_id": plan.payment_method_id,
        }
        self._write("insert installment plan", query, params)

    def update_installment_plan(
        self,
        user_id: str,
        plan_id: str,
        *,
        description: str,
        category_id: str | None,
    ) -> bool:
        query = text(
            """
            UPDATE installment_plans
            SET description = :description, category_id = :category_id
            WHERE id = :id AND user_id = :user_id
            """
        )
        params = {
            "id": plan_id,
            "user_id": user_id,
            "description": description,
            "category_id": category_id,
        }
        return self._write("update installment plan", query, params) > 0

    def delete_installment_plan(self, user_id: str, plan_id: str) -> bool:
        query = text(
            "DELETE FROM installment_plans WHERE id = :id AND user_id = :user_id"
        )
        params = {"id": plan_id, "user_id": user_id}
        return self._write("delete installment plan", query, params) > 0

    def insert_recurring_plan(self, plan: RecurringPlan) -> None:
        query = text(
            """
            INSERT INTO recurring_plans (
                id, user_id, description, amount, is_active, category_id,
                payment_method_id
            ) VALUES (
                :id, :user_id, :description, :amount, :is_active,
                :category_id, :payment_method_id
            )
            """
        )
        self._write("insert recurring plan", query, self._recurring_params(plan))

    def update_recurring_plan(self, plan: RecurringPlan) -> bool:
        query = text(
            """
            UPDATE recurring_plans
            SET description = :description,
                amount = :amount,
                is_active = :is_active,
                category_id = :category_id,
                payment_method_id = :payment_method_id
            WHERE id = :id AND user_id = :user_id
            """
        )
        params = self._recurring_params(plan)
        return self._write("update recurring plan", query, params) > 0

    def delete_recurring_plan(self, user_id: str, plan_id: str) -> bool:
        query = text(
            "DELETE FROM recurring_plans WHERE id = :id AND user_id = :user_id"
        )
        params = {"id": plan_id, "user_id": user_id}
        return self._write("delete recurring plan", query, params) > 0

    def insert_payment_method(self, method: PaymentMethod) -> None:
        query = text(
            """
            INSERT INTO payment_methods (
                id, user_id, name, type, default_closing_day,
                default_payment_day, is_personal
            ) VALUES (
                :id, :user_id, :name, :type, :default_closing_day,
                :default_payment_day, :is_personal
            )
            """
        )
        params = {
            "id": method.id,
            "user_id": method.user_id,
            "name": method.name,
            "type": method.type,
            "default_closing_day": method.default_closing_day,
            "default_payment_day": method.default_payment_day,
            "is_personal": method.is_personal,
        }
        self._write("insert payment method", query, params)

    def delete_payment_method(self, user_id: str, method_id: str) -> bool:
        query = text(
            "DELETE FROM payment_methods WHERE id = :id AND user_id = :user_id"
        )
        params = {"id": method_id, "user_id": user_id}
        return self._write("delete payment method", query, params) > 0

    def insert_category(self, category: Category) -> None:
        query = text(
            """
            INSERT INTO categories (id, user_id, name, emoji)
            VALUES (:id, :user_id, :name, :emoji)
            """
        )
        params = {
            "id": category.id,
            "user_id": category.user_id,
            "name": category.name,
            "emoji": category.emoji,
        }
        self._write("insert category", query, params)

    @staticmethod
    def _recurring_params(plan: RecurringPlan) -> dict:
        return {
            "id": plan.id,
            "user_id": plan.user_id,
            "description": plan.description,
            "amount": _to_db_amount(plan.amount),
            "is_active": plan.is_active,
            "category_id": plan.category_id,
            "payment_method_id": plan.payment_method_id,
        }


__all__ = ["SqlAlchemyLedgerRepository"]
