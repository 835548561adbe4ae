"""Streamlit forms that record, edit and delete finance records."""

from collections.abc import Callable, Sequence
from datetime import date

import streamlit as st

from chanchito.domain.constants import (
    ASSET_TYPES,
    CREDIT,
    CURRENCIES,
    EXPENSE,
    PAYMENT_METHOD_TYPES,
    TRANSACTION_TYPES,
)
from chanchito.domain.errors import ChanchitoError
from chanchito.domain.models import (
    Category,
    InstallmentPlan,
    Investment,
    PaymentMethod,
    RecurringPlan,
    Saving,
    Transaction,
)
from chanchito.infrastructure.container import (
    build_create_category,
    build_create_installment_plan,
    build_create_investment,
    build_create_payment_method,
    build_create_recurring_plan,
    build_create_saving,
    build_create_transaction,
    build_delete_installment_plan,
    build_delete_investment,
    build_delete_payment_method,
    build_delete_recurring_plan,
    build_delete_saving,
    build_delete_transaction,
    build_toggle_recurring_plan,
    build_update_installment_plan,
    build_update_recurring_plan,
    build_update_transaction,
)
from chanchito.infrastructure.logging.logger import get_usage_logger


def run_command(action: Callable[[], object], success_message: str) -> bool:
    """Run a write use case and report the outcome in the page.

    Args:
        action: Callable executing the use case.
        success_message: Text shown when the action succeeds.

    Returns:
        bool: True when the action completed.
    """
    try:
        action()
    except ChanchitoError as exc:
        st.error(str(exc))
        return False
    st.cache_data.clear()
    get_usage_logger().info(f"Record changed: {success_message}")
    st.success(success_message)
    return True


def _optional_select(
    label: str,
    records: Sequence[Category | PaymentMethod],
    key: str,
    index: int = 0,
) -> str | None:
    labels = {record.id: record.name for record in records}
    options = [None, *labels]
    return st.selectbox(
        label,
        options,
        index=index,
        format_func=lambda item: labels.get(item, "-"),
        key=key,
    )


def _pick(label: str, records: Sequence, describe: Callable, key: str):
    by_id = {record.id: record for record in records}
    selected = st.selectbox(
        label,
        list(by_id),
        format_func=lambda item: describe(by_id[item]),
        key=key,
    )
    return by_id.get(selected)


def _optional_day(label: str, key: str) -> int | None:
    day = st.number_input(label, min_value=0, max_value=31, value=0, key=key)
    return int(day) or None


def render_transaction_form(
    user_id: str,
    categories: Sequence[Category],
    methods: Sequence[PaymentMethod],
    today: date,
) -> None:
    with st.form("new_transaction", clear_on_submit=True):
        description = st.text_input("Description", key="tx_description")
        amount = st.number_input("Amount", min_value=0.0, step=100.0, key="tx_amount")
        transaction_type = st.selectbox(
            "Type",
            TRANSACTION_TYPES,
            index=TRANSACTION_TYPES.index(EXPENSE),
            key="tx_type",
        )
        transaction_date = st.date_input("Date", value=today, key="tx_date")
        category_id = _optional_select("Category", categories, "tx_category")
        method_id = _optional_select("Payment method", methods, "tx_method")
        submitted = st.form_submit_button("Add transaction")
    if submitted:
        run_command(
            lambda: build_create_transaction().execute(
                user_id,
                description,
                str(amount),
                transaction_type,
                transaction_date,
                category_id=category_id,
                payment_method_id=method_id,
            ),
            "Transaction saved.",
        )


def render_transaction_editor(
    user_id: str,
    transactions: Sequence[Transaction],
    categories: Sequence[Category],
) -> None:
    """Edit or delete one transaction of the listed month.

    Only description, date and category are editable.
    """
    if not transactions:
        return
    transaction = _pick(
        "Transaction",
        transactions,
        lambda item: f"{item.date:%d/%m} {item.description} ({item.amount:,.2f})",
        "edit_tx",
    )
    category_ids = [None, *(category.id for category in categories)]
    current = (
        category_ids.index(transaction.category_id)
        if transaction.category_id in category_ids
        else 0
    )
    with st.form("edit_transaction"):
        description = st.text_input(
            "Description",
            value=transaction.description,
            key="edit_tx_description",
        )
        transaction_date = st.date_input(
            "Date",
            value=transaction.date,
            key="edit_tx_date",
        )
        category_id = _optional_select(
            "Category",
            categories,
            "edit_tx_category",
            index=current,
        )
        save = st.form_submit_button("Save")
    if save:
        run_command(
            lambda: build_update_transaction().execute(
                user_id,
                transaction.id,
                description,
                transaction_date,
                category_id=category_id,
            ),
            "Transaction updated.",
        )
    if st.button("Delete transaction", key="delete_tx"):
        run_command(
            lambda: build_delete_transaction().execute(user_id, transaction.id),
            "Transaction deleted.",
        )


def render_installment_plan_form(
    user_id: str,
    categories: Sequence[Category],
    methods: Sequence[PaymentMethod],
    today: date,
) -> None:
    with st.form("new_installment_plan", clear_on_submit=True):
        description = st.text_input("Description", key="plan_description")
        total_amount = st.number_input(
            "Total amount",
            min_value=0.0,
            step=1000.0,
            key="plan_total",
        )
        installments_count = st.number_input(
            "Installments",
            min_value=1,
            max_value=120,
            value=3,
            key="plan_count",
        )
        purchase_date = st.date_input("Purchase date", value=today, key="plan_date")
        category_id = _optional_select("Category", categories, "plan_category")
        method_id = _optional_select("Payment method", methods, "plan_method")
        submitted = st.form_submit_button("Add plan")
    if submitted:
        run_command(
            lambda: build_create_installment_plan().execute(
                user_id,
                description,
                str(total_amount),
                int(installments_count),
                purchase_date,
                category_id=category_id,
                payment_method_id=method_id,
            ),
            "Installment plan saved.",
        )


def render_installment_plan_actions(
    user_id: str,
    plans: Sequence[InstallmentPlan],
) -> None:
    """Rename or delete a plan; deleting removes its installments too."""
    if not plans:
        return
    plan = _pick("Plan", plans, lambda item: item.description, "edit_plan")
    with st.form("edit_installment_plan"):
        description = st.text_input(
            "Description",
            value=plan.description,
            key="edit_plan_description",
        )
        save = st.form_submit_button("Rename")
    if save:
        run_command(
            lambda: build_update_installment_plan().execute(
                user_id,
                plan.id,
                description,
                category_id=plan.category_id,
            ),
            "Installment plan updated.",
        )
    if st.button("Delete plan", key="delete_plan"):
        run_command(
            lambda: build_delete_installment_plan().execute(user_id, plan.id),
            "Installment plan deleted.",
        )


def render_recurring_plan_form(
    user_id: str,
    categories: Sequence[Category],
    methods: Sequence[PaymentMethod],
) -> None:
    with st.form("new_recurring_plan", clear_on_submit=True):
        description = st.text_input("Description", key="sub_description")
        amount = st.number_input(
            "Monthly amount",
            min_value=0.0,
            step=100.0,
            key="sub_amount",
        )
        category_id = _optional_select("Category", categories, "sub_category")
        method_id = _optional_select("Payment method", methods, "sub_method")
        submitted = st.form_submit_button("Add subscription")
    if submitted:
        run_command(
            lambda: build_create_recurring_plan().execute(
                user_id,
                description,
                str(amount),
                category_id=category_id,
                payment_method_id=method_id,
            ),
            "Subscription saved.",
        )


def render_recurring_plan_actions(
    user_id: str,
    plans: Sequence[RecurringPlan],
) -> None:
    if not plans:
        return
    plan = _pick("Subscription", plans, lambda item: item.description, "edit_sub")
    with st.form("edit_recurring_plan"):
        description = st.text_input(
            "Description",
            value=plan.description,
            key="edit_sub_description",
        )
        amount = st.number_input(
            "Monthly amount",
            min_value=0.0,
            value=float(plan.amount),
            step=100.0,
            key="edit_sub_amount",
        )
        save = st.form_submit_button("Save")
    if save:
        run_command(
            lambda: build_update_recurring_plan().execute(
                plan,
                description,
                str(amount),
                category_id=plan.category_id,
                payment_method_id=plan.payment_method_id,
            ),
            "Subscription updated.",
        )
    toggle_label = "Pause" if plan.is_active else "Resume"
    if st.button(toggle_label, key="toggle_sub"):
        run_command(
            lambda: build_toggle_recurring_plan().execute(plan),
            f"Subscription {'paused' if plan.is_active else 'resumed'}.",
        )
    if st.button("Delete subscription", key="delete_sub"):
        run_command(
            lambda: build_delete_recurring_plan().execute(user_id, plan.id),
            "Subscription deleted.",
        )


def render_payment_method_form(user_id: str) -> None:
    """Add a payment method; closing and payment days apply to credit cards."""
    with st.form("new_payment_method", clear_on_submit=True):
        name = st.text_input("Name", key="method_name")
        method_type = st.selectbox(
            "Type",
            PAYMENT_METHOD_TYPES,
            index=PAYMENT_METHOD_TYPES.index(CREDIT),
            key="method_type",
        )
        closing_day = _optional_day("Closing day (0 = none)", "method_closing")
        payment_day = _optional_day("Payment day (0 = none)", "method_payment")
        is_personal = st.checkbox("Personal debt", value=False, key="method_personal")
        submitted = st.form_submit_button("Add payment method")
    if submitted:
        run_command(
            lambda: build_create_payment_method().execute(
                user_id,
                name,
                method_type,
                default_closing_day=closing_day,
                default_payment_day=payment_day,
                is_personal=is_personal,
            ),
            "Payment method saved.",
        )


def render_payment_method_actions(
    user_id: str,
    methods: Sequence[PaymentMethod],
) -> None:
    if not methods:
        return
    method = _pick("Payment method", methods, lambda item: item.name, "edit_method")
    if st.button("Delete payment method", key="delete_method"):
        run_command(
            lambda: build_delete_payment_method().execute(user_id, method.id),
            "Payment method deleted.",
        )


def render_category_form(user_id: str) -> None:
    with st.form("new_category", clear_on_submit=True):
        name = st.text_input("Category", key="category_name")
        emoji = st.text_input("Emoji", key="category_emoji")
        submitted = st.form_submit_button("Add category")
    if submitted:
        run_command(
            lambda: build_create_category().execute(user_id, name, emoji=emoji),
            "Category saved.",
        )


def render_investment_form(user_id: str) -> None:
    """Add a holding; its first price is looked up right away."""
    with st.form("new_investment", clear_on_submit=True):
        ticker = st.text_input("Ticker", key="inv_ticker")
        name = st.text_input("Name", key="inv_name")
        asset_type = st.selectbox("Type", ASSET_TYPES, key="inv_type")
        quantity = st.number_input("Quantity", min_value=0.0, key="inv_quantity")
        currency = st.selectbox("Currency", CURRENCIES, key="inv_currency")
        avg_buy_price = st.number_input(
            "Average buy price (0 = unknown)",
            min_value=0.0,
            key="inv_avg_price",
        )
        data_source_url = st.text_input("Price source URL", key="inv_source")
        submitted = st.form_submit_button("Add investment")
    if submitted:
        run_command(
            lambda: build_create_investment().execute(
                user_id,
                ticker,
                name,
                asset_type,
                str(quantity),
                currency=currency,
                avg_buy_price=str(avg_buy_price) if avg_buy_price else None,
                data_source_url=data_source_url or None,
            ),
            "Investment saved.",
        )


def render_saving_form(user_id: str, today: date) -> None:
    with st.form("new_saving", clear_on_submit=True):
        amount = st.number_input("Amount", min_value=0.0, key="saving_amount")
        currency = st.selectbox("Currency", CURRENCIES, key="saving_currency")
        saving_date = st.date_input("Date", value=today, key="saving_date")
        submitted = st.form_submit_button("Add saving")
    if submitted:
        run_command(
            lambda: build_create_saving().execute(
                user_id,
                str(amount),
                currency=currency,
                saving_date=saving_date,
            ),
            "Saving saved.",
        )


def render_portfolio_actions(
    user_id: str,
    investments: Sequence[Investment],
    savings: Sequence[Saving],
) -> None:
    if investments:
        investment = _pick(
            "Investment",
            investments,
            lambda item: f"{item.ticker} ({item.name})",
            "delete_inv_pick",
        )
        if st.button("Delete investment", key="delete_inv"):
            run_command(
                lambda: build_delete_investment().execute(user_id, investment.id),
                "Investment deleted.",
            )
    if savings:
        saving = _pick(
            "Saving",
            savings,
            lambda item: f"{item.date:%d/%m/%Y} {item.currency} {item.amount:,.2f}",
            "delete_saving_pick",
        )
        if st.button("Delete saving", key="delete_saving"):
            run_command(
                lambda: build_delete_saving().execute(user_id, saving.id),
                "Saving deleted.",
            )


__all__ = [
    "run_command",
    "render_transaction_form",
    "render_transaction_editor",
    "render_installment_plan_form",
    "render_installment_plan_actions",
    "render_recurring_plan_form",
    "render_recurring_plan_actions",
    "render_payment_method_form",
    "render_payment_method_actions",
    "render_category_form",
    "render_investment_form",
    "render_saving_form",
    "render_portfolio_actions",
]
