"""Tests for the Streamlit app module."""

from datetime import date
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

from chanchito.adapters.interface.streamlit import app, forms
from chanchito.domain.errors import ValidationError
from chanchito.domain.models import (
    DashboardSummary,
    PaymentMethod,
    RecurringPlan,
    Transaction,
)
from chanchito.infrastructure.settings import AppSettings

TODAY = date(2024, 3, 10)


class _Block:
    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False


class _FakeColumn(_Block):
    def __init__(self, owner) -> None:
        self._owner = owner

    def metric(self, label, value):
        self._owner.metrics.append((label, value))


class _FakeSidebar:
    def __init__(self, page: str) -> None:
        self.page = page

    def selectbox(self, label, options, index=0, **kwargs):
        return self.page if label == "Page" else list(options)[index]

    def number_input(self, label, value=0, **kwargs):
        return value

    def checkbox(self, label, value=False):
        return value

    def button(self, label):
        return False


class _FakeStreamlit:
    def __init__(self, page: str = "Summary", submit: bool = False) -> None:
        self.sidebar = _FakeSidebar(page)
        self.cache_data = MagicMock()
        self.submit = submit
        self.config_kwargs = None
        self.title_text = None
        self.warnings: list[str] = []
        self.captions: list[str] = []
        self.metrics: list[tuple[str, str]] = []
        self.subheaders: list[str] = []
        self.errors: list[str] = []
        self.successes: list[str] = []
        self.forms: list[str] = []
        self.dataframe_payload = None
        self.charts = []

    def set_page_config(self, **kwargs):
        self.config_kwargs = kwargs

    def title(self, text: str):
        self.title_text = text

    def warning(self, text: str):
        self.warnings.append(text)

    def error(self, text: str):
        self.errors.append(text)

    def success(self, text: str):
        self.successes.append(text)

    def caption(self, text: str):
        self.captions.append(text)

    def info(self, text: str):
        self.captions.append(text)

    def subheader(self, text: str):
        self.subheaders.append(text)

    def columns(self, count: int):
        return [_FakeColumn(self) for _ in range(count)]

    def metric(self, label, value):
        self.metrics.append((label, value))

    def dataframe(self, data, **kwargs):
        self.dataframe_payload = (data, kwargs)

    def altair_chart(self, chart, **kwargs):
        self.charts.append(chart)

    def form(self, key, **kwargs):
        self.forms.append(key)
        return _Block()

    def form_submit_button(self, label):
        return self.submit

    def button(self, label, **kwargs):
        return False

    def text_input(self, label, value="", **kwargs):
        return value

    def number_input(self, label, value=0.0, **kwargs):
        return value

    def date_input(self, label, value=None, **kwargs):
        return value

    def checkbox(self, label, value=False, **kwargs):
        return value

    def selectbox(self, label, options, index=0, **kwargs):
        return list(options)[index]


def _use(monkeypatch, fake_st) -> None:
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(forms, "st", fake_st)
    monkeypatch.setattr(forms, "get_usage_logger", lambda: MagicMock())
    monkeypatch.setattr(app, "_load_categories", lambda user_id: [])
    monkeypatch.setattr(app, "_load_payment_methods", lambda user_id: [])
    monkeypatch.setattr(app, "_load_savings", lambda user_id: [])


def _settings(monkeypatch, user_id="u1") -> None:
    monkeypatch.setattr(
        app.AppSettings,
        "from_env",
        classmethod(lambda cls: AppSettings(user_id=user_id)),
    )
    monkeypatch.setattr(app, "get_usage_logger", lambda: MagicMock())


def test_fetch_dashboard_summary_invokes_use_case(monkeypatch):
    """_fetch_dashboard_summary should wire the loader into the use case."""
    captured = {}

    class _FakeUseCase:
        def __init__(self, state_loader):
            captured["loader"] = state_loader

        def execute(self, user_id, today=None, scope=None):
            captured["args"] = (user_id, today, scope)
            return "summary"

    monkeypatch.setattr(app, "build_state_loader", lambda: "loader")
    monkeypatch.setattr(app, "GetDashboardSummaryUseCase", _FakeUseCase)

    result = app._fetch_dashboard_summary("u1", TODAY, "global")

    assert result == "summary"
    assert captured == {"loader": "loader", "args": ("u1", TODAY, "global")}


def test_load_recurring_plans_uses_fetch(monkeypatch):
    """The cached loader should delegate to _fetch_recurring_plans."""
    monkeypatch.setattr(app, "_fetch_recurring_plans", lambda user_id: ["cached"])

    assert app._load_recurring_plans("u-cache-test") == ["cached"]


def test_prepare_donut_chart_data_groups_other():
    amounts = {
        "Food": Decimal("500"),
        "Rent": Decimal("1000"),
        "Fun": Decimal("100"),
        "Gifts": Decimal("50"),
        "Refund": Decimal("-20"),
    }

    data, total = app._prepare_donut_chart_data(amounts, max_categories=2)

    assert total == Decimal("1650")
    assert [row["category"] for row in data] == ["Rent", "Food", "Other"]
    assert data[2]["amount"] == 150.0
    assert data[0]["amount_label"] == "$ 1,000.00"
    assert data[0]["share_label"] == "60.6%"


def test_format_currency_uses_symbol():
    assert app._format_currency(Decimal("1234.5"), "USD") == "US$ 1,234.50"
    assert app._format_currency(Decimal("10")) == "$ 10.00"


def test_main_warns_without_user(monkeypatch):
    """main should stop with a warning when no user is configured."""
    fake_st = _FakeStreamlit()
    _use(monkeypatch, fake_st)
    _settings(monkeypatch, user_id=None)

    app.main()

    assert fake_st.config_kwargs["page_title"] == "Chanchito"
    assert fake_st.warnings
    assert fake_st.metrics == []


def test_main_renders_summary(monkeypatch):
    """main should render dashboard metrics for the configured user."""
    fake_st = _FakeStreamlit("Summary")
    _use(monkeypatch, fake_st)
    _settings(monkeypatch)
    monkeypatch.setattr(
        app,
        "_load_dashboard_summary",
        lambda user_id, today, scope: DashboardSummary(
            global_balance=Decimal("4000"),
            global_income=Decimal("5000"),
            effective_expenses=Decimal("1000"),
            monthly_burn_rate=Decimal("1000"),
            current_month_installments_total=Decimal("0"),
            expenses_by_category={},
        ),
    )

    app.main()

    assert ("Balance", "$ 4,000.00") in fake_st.metrics
    assert "Expenses by category" in fake_st.subheaders
    assert fake_st.charts == []


def test_main_renders_subscriptions(monkeypatch):
    """The subscriptions page should total only active plans."""
    fake_st = _FakeStreamlit("Subscriptions")
    _use(monkeypatch, fake_st)
    _settings(monkeypatch)
    plans = [
        RecurringPlan(id="r1", user_id="u1", description="Gym", amount=Decimal("100")),
        RecurringPlan(
            id="r2",
            user_id="u1",
            description="Old",
            amount=Decimal("50"),
            is_active=False,
        ),
    ]
    monkeypatch.setattr(app, "_load_recurring_plans", lambda user_id: plans)

    app.main()

    assert fake_st.metrics == [("Monthly fixed costs", "$ 100.00")]
    table_data, kwargs = fake_st.dataframe_payload
    assert [row["Active"] for row in table_data] == ["yes", "no"]
    assert kwargs["hide_index"] is True


def test_main_warns_without_payment_methods(monkeypatch):
    fake_st = _FakeStreamlit("Payment methods")
    _use(monkeypatch, fake_st)
    _settings(monkeypatch)
    monkeypatch.setattr(
        app,
        "_load_payment_method_statuses",
        lambda user_id, today: [],
    )

    app.main()

    assert fake_st.warnings == ["No payment methods yet."]
    assert fake_st.dataframe_payload is None


def test_installments_page_hides_finished(monkeypatch):
    fake_st = _FakeStreamlit("Installments")
    fake_st.markdowns = []
    fake_st.markdown = fake_st.markdowns.append
    fake_st.progress = lambda value: None
    _use(monkeypatch, fake_st)
    _settings(monkeypatch)
    plan = SimpleNamespace(
        id="p1",
        description="TV",
        installments_count=3,
        total_amount=Decimal("300"),
    )
    finished = SimpleNamespace(
        is_finished=True,
        progress_percent=Decimal("100"),
        current_installment=3,
        remaining_amount=Decimal("0"),
    )
    monkeypatch.setattr(
        app,
        "_load_installment_statuses",
        lambda user_id, today: [(plan, finished)],
    )

    app.main()

    assert fake_st.markdowns == []


def _method_status(consumption: str) -> SimpleNamespace:
    return SimpleNamespace(
        current_consumption=Decimal(consumption),
        fixed_costs=Decimal("0"),
        projected_spend=Decimal("0"),
        next_closing_date=None,
        next_payment_date=None,
        is_cycle_scoped=False,
    )


def test_payment_methods_label_personal_balances(monkeypatch):
    """Personal accounts show who owes whom from the consumption sign."""
    fake_st = _FakeStreamlit("Payment methods")
    _use(monkeypatch, fake_st)
    _settings(monkeypatch)
    lent = PaymentMethod(
        id="juan",
        user_id="u1",
        name="Juan",
        type="cash",
        is_personal=True,
    )
    owed = PaymentMethod(
        id="ana",
        user_id="u1",
        name="Ana",
        type="cash",
        is_personal=True,
    )
    debit = PaymentMethod(id="debit", user_id="u1", name="Debit", type="debit")
    monkeypatch.setattr(
        app,
        "_load_payment_method_statuses",
        lambda user_id, today: [
            (lent, _method_status("-1500")),
            (owed, _method_status("200")),
            (debit, _method_status("-80")),
        ],
    )

    app.main()

    table_data, _ = fake_st.dataframe_payload
    assert [row["Personal"] for row in table_data] == [
        "You owe $ 1,500.00",
        "In your favor $ 200.00",
        "-",
    ]
    assert "new_payment_method" in fake_st.forms
    assert "new_category" in fake_st.forms


def test_movements_page_lists_selected_month(monkeypatch):
    fake_st = _FakeStreamlit("Movements")
    _use(monkeypatch, fake_st)
    _settings(monkeypatch)
    captured = {}
    transactions = [
        Transaction(
            id="t2",
            user_id="u1",
            description="Supermarket",
            amount=Decimal("300"),
            type="expense",
            date=date(2024, 3, 20),
        ),
        Transaction(
            id="t1",
            user_id="u1",
            description="Salary",
            amount=Decimal("1000"),
            type="income",
            date=date(2024, 3, 1),
        ),
    ]

    def _fake_load(user_id, year, month, payment_method_id, today):
        captured["args"] = (user_id, year, month, payment_method_id)
        return transactions

    monkeypatch.setattr(app, "_load_monthly_transactions", _fake_load)

    app.main()

    assert captured["args"][0] == "u1"
    assert captured["args"][3] is None
    assert ("Income", "$ 1,000.00") in fake_st.metrics
    assert ("Expenses", "$ 300.00") in fake_st.metrics
    table_data, _ = fake_st.dataframe_payload
    assert [row["Amount"] for row in table_data] == ["$ -300.00", "$ 1,000.00"]
    assert fake_st.forms == ["new_transaction", "edit_transaction"]


def test_run_command_reports_validation_errors(monkeypatch):
    fake_st = _FakeStreamlit()
    _use(monkeypatch, fake_st)

    def _reject():
        raise ValidationError("amount must be positive")

    assert forms.run_command(_reject, "Saved.") is False
    assert fake_st.errors == ["amount must be positive"]
    fake_st.cache_data.clear.assert_not_called()

    assert forms.run_command(lambda: None, "Saved.") is True
    assert fake_st.successes == ["Saved."]
    fake_st.cache_data.clear.assert_called_once_with()


def test_transaction_form_submits_create_use_case(monkeypatch):
    fake_st = _FakeStreamlit(submit=True)
    _use(monkeypatch, fake_st)
    use_case = MagicMock()
    monkeypatch.setattr(forms, "build_create_transaction", lambda: use_case)

    forms.render_transaction_form("u1", [], [], TODAY)

    use_case.execute.assert_called_once_with(
        "u1",
        "",
        "0.0",
        "expense",
        TODAY,
        category_id=None,
        payment_method_id=None,
    )
    assert fake_st.successes == ["Transaction saved."]


def test_recurring_plan_toggle_is_wired(monkeypatch):
    fake_st = _FakeStreamlit()
    fake_st.button = lambda label, **kwargs: label == "Pause"
    _use(monkeypatch, fake_st)
    use_case = MagicMock()
    monkeypatch.setattr(forms, "build_toggle_recurring_plan", lambda: use_case)
    plan = RecurringPlan(id="r1", user_id="u1", description="Gym", amount=Decimal("100"))

    forms.render_recurring_plan_actions("u1", [plan])

    use_case.execute.assert_called_once_with(plan)
    assert fake_st.successes == ["Subscription paused."]
