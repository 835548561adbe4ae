"""Streamlit dashboard entry point."""

from collections.abc import Mapping, Sequence
from datetime import date
from decimal import Decimal

import streamlit as st
import altair as alt

from chanchito.adapters.interface.streamlit import forms
from chanchito.application.use_cases.get_dashboard_summary import (
    GetDashboardSummaryUseCase,
)
from chanchito.application.use_cases.get_installment_statuses import (
    GetInstallmentStatusesUseCase,
)
from chanchito.application.use_cases.get_payment_method_statuses import (
    GetPaymentMethodStatusesUseCase,
)
from chanchito.application.use_cases.get_portfolio_summary import (
    GetPortfolioSummaryUseCase,
    PortfolioSummary,
)
from chanchito.domain.constants import ARS, INCOME, USD
from chanchito.domain.models import (
    Category,
    DashboardSummary,
    InstallmentPlan,
    InstallmentStatus,
    MarketPriceRefreshResult,
    PaymentMethod,
    PaymentMethodStatus,
    RecurringPlan,
    Saving,
    Transaction,
)
from chanchito.domain.services.dashboard import CURRENT_MONTH_SCOPE, GLOBAL_SCOPE
from chanchito.domain.services.recurring import monthly_burn_rate
from chanchito.infrastructure.container import (
    build_fx_provider,
    build_ledger_repository,
    build_monthly_transactions,
    build_portfolio_repository,
    build_refresh_market_prices,
    build_state_loader,
)
from chanchito.infrastructure.logging.logger import get_usage_logger
from chanchito.infrastructure.settings import AppSettings

PAGES = [
    "Summary",
    "Movements",
    "Payment methods",
    "Installments",
    "Subscriptions",
    "Investments",
]
SCOPE_LABELS = {"This month": CURRENT_MONTH_SCOPE, "All time": GLOBAL_SCOPE}
MONTHS = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]


def _fetch_dashboard_summary(user_id: str, today: date, scope: str) -> DashboardSummary:
    """Fetch the home dashboard figures."""
    use_case = GetDashboardSummaryUseCase(build_state_loader())
    return use_case.execute(user_id, today=today, scope=scope)


@st.cache_data(show_spinner=False)
def _load_dashboard_summary(user_id: str, today: date, scope: str) -> DashboardSummary:
    """Cached wrapper around _fetch_dashboard_summary."""
    return _fetch_dashboard_summary(user_id, today, scope)


def _fetch_payment_method_statuses(
    user_id: str,
    today: date,
) -> list[tuple[PaymentMethod, PaymentMethodStatus]]:
    use_case = GetPaymentMethodStatusesUseCase(build_state_loader())
    return use_case.execute(user_id, today=today)


@st.cache_data(show_spinner=False)
def _load_payment_method_statuses(
    user_id: str,
    today: date,
) -> list[tuple[PaymentMethod, PaymentMethodStatus]]:
    """Cached wrapper around _fetch_payment_method_statuses."""
    return _fetch_payment_method_statuses(user_id, today)


def _fetch_installment_statuses(
    user_id: str,
    today: date,
) -> list[tuple[InstallmentPlan, InstallmentStatus]]:
    settings = AppSettings.from_env()
    use_case = GetInstallmentStatusesUseCase(
        build_state_loader(),
        policy=settings.amortization_policy,
    )
    return use_case.execute(user_id, today=today)


@st.cache_data(show_spinner=False)
def _load_installment_statuses(
    user_id: str,
    today: date,
) -> list[tuple[InstallmentPlan, InstallmentStatus]]:
    """Cached wrapper around _fetch_installment_statuses."""
    return _fetch_installment_statuses(user_id, today)


def _fetch_recurring_plans(user_id: str) -> list[RecurringPlan]:
    return build_ledger_repository().fetch_recurring_plans(user_id)


@st.cache_data(show_spinner=False)
def _load_recurring_plans(user_id: str) -> list[RecurringPlan]:
    """Cached wrapper around _fetch_recurring_plans."""
    return _fetch_recurring_plans(user_id)


def _fetch_categories(user_id: str) -> list[Category]:
    return build_ledger_repository().fetch_categories(user_id)


@st.cache_data(show_spinner=False)
def _load_categories(user_id: str) -> list[Category]:
    """Cached wrapper around _fetch_categories."""
    return _fetch_categories(user_id)


def _fetch_payment_methods(user_id: str) -> list[PaymentMethod]:
    return build_ledger_repository().fetch_payment_methods(user_id)


@st.cache_data(show_spinner=False)
def _load_payment_methods(user_id: str) -> list[PaymentMethod]:
    """Cached wrapper around _fetch_payment_methods."""
    return _fetch_payment_methods(user_id)


def _fetch_savings(user_id: str) -> list[Saving]:
    return build_portfolio_repository().fetch_savings(user_id)


@st.cache_data(show_spinner=False)
def _load_savings(user_id: str) -> list[Saving]:
    """Cached wrapper around _fetch_savings."""
    return _fetch_savings(user_id)


def _fetch_monthly_transactions(
    user_id: str,
    year: int,
    month: int,
    payment_method_id: str | None,
    today: date,
) -> list[Transaction]:
    """Fetch the transactions listed under one statement month."""
    return build_monthly_transactions().execute(
        user_id,
        year,
        month,
        payment_method_id=payment_method_id,
        today=today,
    )


@st.cache_data(show_spinner=False)
def _load_monthly_transactions(
    user_id: str,
    year: int,
    month: int,
    payment_method_id: str | None,
    today: date,
) -> list[Transaction]:
    """Cached wrapper around _fetch_monthly_transactions."""
    return _fetch_monthly_transactions(user_id, year, month, payment_method_id, today)


def _fetch_portfolio_summary(user_id: str, today: date) -> PortfolioSummary:
    """Fetch holdings, savings and patrimony with the current FX quote."""
    use_case = GetPortfolioSummaryUseCase(
        build_state_loader(),
        fx_provider=build_fx_provider(),
    )
    return use_case.execute(user_id, today=today)


@st.cache_data(show_spinner=False, ttl=300)
def _load_portfolio_summary(user_id: str, today: date) -> PortfolioSummary:
    """Cached wrapper around _fetch_portfolio_summary."""
    return _fetch_portfolio_summary(user_id, today)


def _refresh_market_prices(user_id: str) -> MarketPriceRefreshResult:
    return build_refresh_market_prices().execute(user_id)


def _format_currency(value: Decimal, currency_code: str = ARS) -> str:
    """Format currency values for display."""
    symbol = "US$" if currency_code == USD else "$"
    return f"{symbol} {value:,.2f}"


def _format_date(value: date | None) -> str:
    return value.strftime("%d/%m/%Y") if value else "-"


def _prepare_donut_chart_data(
    amounts: Mapping[str, Decimal],
    currency_code: str = ARS,
    max_categories: int = 6,
) -> tuple[list[dict[str, str | float]], Decimal]:
    """Prepare donut chart data with a Top-N + Other grouping.

    Args:
        amounts: Amount per slice label.
        currency_code: Currency used for the amount labels.
        max_categories: Maximum slices to keep before grouping into Other.

    Returns:
        Tuple with Altair-ready chart data and the total amount.
    """
    sorted_items = sorted(
        ((label, amount) for label, amount in amounts.items() if amount > 0),
        key=lambda item: item[1],
        reverse=True,
    )
    top_items = sorted_items[:max_categories]
    other_amount = sum(
        (amount for _, amount in sorted_items[max_categories:]),
        start=Decimal("0"),
    )
    if other_amount != 0:
        top_items = [*top_items, ("Other", other_amount)]
    total_amount = sum((amount for _, amount in sorted_items), start=Decimal("0"))
    data: list[dict[str, str | float]] = []
    for label, amount in top_items:
        share = (amount / total_amount) * Decimal("100") if total_amount else Decimal("0")
        data.append(
            {
                "category": label,
                "amount": float(amount),
                "amount_label": _format_currency(amount, currency_code),
                "share_label": f"{share:.1f}%",
            }
        )
    return data, total_amount


def _render_donut_chart(
    amounts: Mapping[str, Decimal],
    title: str,
    currency_code: str = ARS,
    max_categories: int = 6,
    chart_size: int = 320,
    palette: Sequence[str] | None = None,
) -> None:
    """Render a donut chart of amounts by label.

    Args:
        amounts: Amount per slice label.
        title: Chart title to display above the donut.
        currency_code: Currency used for the amount labels.
        max_categories: Maximum slices before grouping into Other.
        chart_size: Width/height for the chart canvas.
        palette: Optional color palette override.
    """
    data, _ = _prepare_donut_chart_data(
        amounts,
        currency_code=currency_code,
        max_categories=max_categories,
    )
    st.subheader(title)
    if not data:
        st.info("Nothing to chart yet.")
        return

    palette_scale = list(
        palette
        or [
            "#3b82f6",
            "#a855f7",
            "#22c55e",
            "#f59e0b",
            "#ef4444",
            "#14b8a6",
            "#ec4899",
        ]
    )
    hover = alt.selection_point(
        name="hover",
        fields=["category"],
        on="view:mouseover",
        clear="view:mouseout",
        empty=False,
    )
    base = alt.Chart(alt.Data(values=data)).mark_arc(
        innerRadius=chart_size * 0.4,
        cornerRadius=8,
        padAngle=0.02,
    ).encode(
        theta=alt.Theta("amount:Q"),
        color=alt.Color(
            "category:N",
            scale=alt.Scale(range=palette_scale),
            legend=alt.Legend(orient="bottom", title=None, columns=3),
        ),
        opacity=alt.condition(hover, alt.value(1.0), alt.value(0.6)),
        order=alt.Order("amount:Q", sort="descending"),
        tooltip=[
            alt.Tooltip("category:N"),
            alt.Tooltip("amount_label:N"),
            alt.Tooltip("share_label:N"),
        ],
    )
    hover_text = alt.Chart(alt.Data(values=data)).transform_filter(
        hover
    ).mark_text(
        align="center",
        baseline="middle",
        fontSize=16,
        fontWeight="bold",
    ).encode(text="amount_label:N")
    chart = alt.layer(base, hover_text).add_params(hover).properties(
        width=chart_size,
        height=chart_size,
    ).configure_view(stroke=None)
    st.altair_chart(chart, width="stretch")


def _render_summary(user_id: str, today: date) -> None:
    scope_label = st.sidebar.selectbox("Categories", list(SCOPE_LABELS))
    summary = _load_dashboard_summary(user_id, today, SCOPE_LABELS[scope_label])

    balance_col, income_col, expenses_col = st.columns(3)
    balance_col.metric("Balance", _format_currency(summary.global_balance))
    income_col.metric("Income", _format_currency(summary.global_income))
    expenses_col.metric(
        "Effective expenses",
        _format_currency(summary.effective_expenses),
    )
    burn_col, installments_col = st.columns(2)
    burn_col.metric("Fixed costs / month", _format_currency(summary.monthly_burn_rate))
    installments_col.metric(
        "Installments this month",
        _format_currency(summary.current_month_installments_total),
    )
    _render_donut_chart(summary.expenses_by_category, "Expenses by category")


def _render_movements(user_id: str, today: date) -> None:
    month_name = st.sidebar.selectbox("Month", MONTHS, index=today.month - 1)
    year = st.sidebar.number_input(
        "Year",
        min_value=2000,
        max_value=2100,
        value=today.year,
    )
    methods = _load_payment_methods(user_id)
    method_names = {method.id: method.name for method in methods}
    method_id = st.sidebar.selectbox(
        "Payment method",
        [None, *method_names],
        format_func=lambda item: method_names.get(item, "All"),
    )
    categories = _load_categories(user_id)
    category_names = {category.id: category.name for category in categories}
    transactions = _load_monthly_transactions(
        user_id,
        int(year),
        MONTHS.index(month_name) + 1,
        method_id,
        today,
    )

    income = sum(
        (item.amount for item in transactions if item.type == INCOME),
        start=Decimal("0"),
    )
    expenses = sum(
        (item.amount for item in transactions if item.type != INCOME),
        start=Decimal("0"),
    )
    income_col, expenses_col = st.columns(2)
    income_col.metric("Income", _format_currency(income))
    expenses_col.metric("Expenses", _format_currency(expenses))
    if transactions:
        data = [
            {
                "Date": _format_date(item.date),
                "Description": item.description,
                "Category": category_names.get(item.category_id, "-"),
                "Method": method_names.get(item.payment_method_id, "-"),
                "Amount": _format_currency(
                    item.amount if item.type == INCOME else -item.amount
                ),
            }
            for item in transactions
        ]
        st.dataframe(data, width="stretch", hide_index=True)
    else:
        st.info(f"No movements in {month_name} {int(year)}.")

    st.subheader("New transaction")
    forms.render_transaction_form(user_id, categories, methods, today)
    st.subheader("Edit transaction")
    forms.render_transaction_editor(user_id, transactions, categories)


def _personal_balance(status: PaymentMethodStatus) -> str:
    """Label a personal debt account by who owes whom."""
    amount = _format_currency(abs(status.current_consumption))
    if status.current_consumption < 0:
        return f"You owe {amount}"
    return f"In your favor {amount}"


def _render_payment_methods(user_id: str, today: date) -> None:
    statuses = _load_payment_method_statuses(user_id, today)
    if statuses:
        data = [
            {
                "Name": method.name,
                "Type": method.type,
                "Consumption": _format_currency(status.current_consumption),
                "Fixed costs": _format_currency(status.fixed_costs),
                "Projected spend": _format_currency(status.projected_spend),
                "Closes": _format_date(status.next_closing_date),
                "Due": _format_date(status.next_payment_date),
                "Scope": "cycle" if status.is_cycle_scoped else "all time",
                "Personal": (
                    _personal_balance(status) if method.is_personal else "-"
                ),
            }
            for method, status in statuses
        ]
        st.dataframe(data, width="stretch", hide_index=True)
    else:
        st.warning("No payment methods yet.")

    st.subheader("New payment method")
    forms.render_payment_method_form(user_id)
    forms.render_payment_method_actions(
        user_id,
        [method for method, _ in statuses],
    )
    st.subheader("New category")
    forms.render_category_form(user_id)


def _render_installments(user_id: str, today: date) -> None:
    statuses = _load_installment_statuses(user_id, today)
    if statuses:
        show_finished = st.sidebar.checkbox("Show finished plans", value=False)
        for plan, status in statuses:
            if status.is_finished and not show_finished:
                continue
            st.markdown(f"**{plan.description}**")
            st.progress(float(status.progress_percent) / 100)
            st.caption(
                f"Installment {status.current_installment}/{plan.installments_count} · "
                f"remaining {_format_currency(status.remaining_amount)} of "
                f"{_format_currency(plan.total_amount)}"
            )
    else:
        st.warning("No installment plans yet.")

    st.subheader("New installment plan")
    forms.render_installment_plan_form(
        user_id,
        _load_categories(user_id),
        _load_payment_methods(user_id),
        today,
    )
    forms.render_installment_plan_actions(user_id, [plan for plan, _ in statuses])


def _render_subscriptions(user_id: str) -> None:
    plans = _load_recurring_plans(user_id)
    if plans:
        st.metric("Monthly fixed costs", _format_currency(monthly_burn_rate(plans)))
        data = [
            {
                "Description": plan.description,
                "Amount": _format_currency(plan.amount),
                "Active": "yes" if plan.is_active else "no",
            }
            for plan in plans
        ]
        st.dataframe(data, width="stretch", hide_index=True)
    else:
        st.warning("No subscriptions yet.")

    st.subheader("New subscription")
    forms.render_recurring_plan_form(
        user_id,
        _load_categories(user_id),
        _load_payment_methods(user_id),
    )
    forms.render_recurring_plan_actions(user_id, plans)


def _render_investments(user_id: str, today: date) -> None:
    if st.sidebar.button("Refresh prices"):
        get_usage_logger().info(f"Price refresh from dashboard for {user_id}")
        result = _refresh_market_prices(user_id)
        st.cache_data.clear()
        st.success(f"Updated {result.updated} of {result.requested} prices.")
        if result.failed_tickers:
            st.warning(f"Without price: {', '.join(result.failed_tickers)}")

    summary = _load_portfolio_summary(user_id, today)
    patrimony = summary.patrimony
    ars_col, usd_col = st.columns(2)
    ars_col.metric("Total patrimony", _format_currency(patrimony.total_ars, ARS))
    usd_col.metric("Total patrimony", _format_currency(patrimony.total_usd, USD))
    if patrimony.is_converted:
        st.caption(f"Dolar blue: {_format_currency(patrimony.fx_rate, ARS)}")
    else:
        st.caption("FX quote unavailable: totals are not converted.")

    holdings = [
        {
            "Ticker": holding.investment.ticker,
            "Type": holding.investment.type,
            "Quantity": f"{holding.investment.quantity:,}",
            "Price": (
                _format_currency(holding.last_price, holding.investment.currency)
                if holding.is_priced
                else "-"
            ),
            "Value": _format_currency(
                holding.current_value,
                holding.investment.currency,
            ),
            "Profit": f"{holding.profit_percent:.2f}%",
        }
        for holding in summary.portfolio.holdings
    ]
    if holdings:
        st.dataframe(holdings, width="stretch", hide_index=True)
    chart_left, chart_right = st.columns(2)
    with chart_left:
        _render_donut_chart(summary.allocation.get(ARS, {}), "Allocation (ARS)", ARS)
    with chart_right:
        _render_donut_chart(summary.allocation.get(USD, {}), "Allocation (USD)", USD)

    st.subheader("New investment")
    forms.render_investment_form(user_id)
    st.subheader("New saving")
    forms.render_saving_form(user_id, today)
    forms.render_portfolio_actions(
        user_id,
        [holding.investment for holding in summary.portfolio.holdings],
        _load_savings(user_id),
    )


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Chanchito", layout="wide")
    st.title("Chanchito")

    settings = AppSettings.from_env()
    if not settings.user_id:
        st.warning("Set CHANCHITO_USER_ID to choose whose finances to show.")
        return
    user_id = settings.user_id
    today = date.today()

    page = st.sidebar.selectbox("Page", PAGES)
    get_usage_logger().info(f"Page viewed: {page}")

    if page == "Summary":
        _render_summary(user_id, today)
    elif page == "Movements":
        _render_movements(user_id, today)
    elif page == "Payment methods":
        _render_payment_methods(user_id, today)
    elif page == "Installments":
        _render_installments(user_id, today)
    elif page == "Subscriptions":
        _render_subscriptions(user_id)
    else:
        _render_investments(user_id, today)


if __name__ == "__main__":  # pragma: no cover
    main()
