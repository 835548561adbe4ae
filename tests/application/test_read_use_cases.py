"""Tests for the finance state loader and the read use cases."""

from datetime import date, datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from chanchito.application.use_cases.get_dashboard_summary import (
    GetDashboardSummaryUseCase,
)
from chanchito.application.use_cases.get_installment_statuses import (
    GetInstallmentStatusesUseCase,
)
from chanchito.application.use_cases.get_monthly_transactions import (
    GetMonthlyTransactionsUseCase,
)
from chanchito.application.use_cases.get_payment_method_statuses import (
    GetPaymentMethodStatusesUseCase,
)
from chanchito.application.use_cases.get_portfolio_summary import (
    GetPortfolioSummaryUseCase,
)
from chanchito.application.use_cases.load_finance_state import (
    FinanceState,
    LoadFinanceStateUseCase,
)
from chanchito.domain.errors import ValidationError
from chanchito.domain.models import (
    AmortizationPolicy,
    FxQuote,
    InstallmentPlan,
    Investment,
    MarketPrice,
    PaymentMethod,
    RecurringPlan,
    Saving,
    Transaction,
)

TODAY = date(2024, 3, 10)
PRICED_AT = datetime(2024, 3, 9, tzinfo=timezone.utc)


def _plan() -> InstallmentPlan:
    return InstallmentPlan(
        id="p1",
        user_id="u1",
        description="Notebook",
        total_amount=Decimal("1200"),
        installments_count=6,
        purchase_date=date(2024, 1, 10),
    )


def _ledger() -> MagicMock:
    ledger = MagicMock()
    ledger.fetch_transactions.return_value = [
        Transaction(
            id="salary",
            user_id="u1",
            description="Salary",
            amount=Decimal("5000"),
            type="income",
            date=date(2024, 3, 1),
        ),
        Transaction(
            id="c1",
            user_id="u1",
            description="Notebook (1/6)",
            amount=Decimal("200"),
            type="expense",
            date=date(2024, 1, 10),
            installment_plan_id="p1",
        ),
    ]
    ledger.fetch_installment_plans.return_value = [_plan()]
    ledger.fetch_recurring_plans.return_value = [
        RecurringPlan(
            id="r1",
            user_id="u1",
            description="Rent",
            amount=Decimal("1000"),
            payment_method_id="debit",
        )
    ]
    ledger.fetch_payment_methods.return_value = [
        PaymentMethod(id="debit", user_id="u1", name="Debit", type="debit")
    ]
    ledger.fetch_categories.return_value = []
    return ledger


def _portfolio() -> MagicMock:
    portfolio = MagicMock()
    portfolio.fetch_investments.return_value = [
        Investment(
            id="i1",
            user_id="u1",
            ticker="GGAL",
            name="Galicia",
            type="stock",
            quantity=Decimal("10"),
            currency="ARS",
            avg_buy_price=Decimal("400"),
        )
    ]
    portfolio.fetch_market_prices.return_value = [
        MarketPrice(ticker="GGAL", last_price=Decimal("500"), last_update=PRICED_AT)
    ]
    portfolio.fetch_savings.return_value = [
        Saving(
            id="s1",
            user_id="u1",
            amount=Decimal("10"),
            currency="USD",
            date=date(2024, 1, 1),
        )
    ]
    return portfolio


def _loader(portfolio: MagicMock | None = None) -> LoadFinanceStateUseCase:
    return LoadFinanceStateUseCase(
        _ledger(),
        portfolio or _portfolio(),
        logger=MagicMock(),
    )


def test_load_finance_state_reads_every_collection() -> None:
    portfolio = _portfolio()

    state = _loader(portfolio).execute("u1", today=TODAY)

    assert isinstance(state, FinanceState)
    assert state.today == TODAY
    assert len(state.transactions) == 2
    assert len(state.investments) == 1
    portfolio.fetch_market_prices.assert_called_once_with(["GGAL"])


def test_load_finance_state_skips_prices_without_holdings() -> None:
    portfolio = _portfolio()
    portfolio.fetch_investments.return_value = []

    state = _loader(portfolio).execute("u1", today=TODAY)

    assert state.market_prices == []
    portfolio.fetch_market_prices.assert_not_called()


def test_finance_state_methods_delegate_to_domain() -> None:
    state = FinanceState(user_id="u1", today=TODAY, installment_plans=[_plan()])

    calendar = state.installment_status(_plan(), AmortizationPolicy.CALENDAR)

    assert calendar.remaining_amount == Decimal("800")
    assert state.monthly_burn_rate() == Decimal("0")
    assert state.portfolio_status().holdings == []


def test_dashboard_summary_use_case() -> None:
    summary = GetDashboardSummaryUseCase(_loader(), logger=MagicMock()).execute(
        "u1",
        today=TODAY,
    )

    assert summary.global_income == Decimal("5000")
    assert summary.monthly_burn_rate == Decimal("1000")
    assert summary.global_balance == Decimal("4000")


def test_payment_method_statuses_use_case() -> None:
    statuses = GetPaymentMethodStatusesUseCase(_loader(), logger=MagicMock()).execute(
        "u1",
        today=TODAY,
    )

    method, status = statuses[0]
    assert method.id == "debit"
    assert status.fixed_costs == Decimal("1000")
    assert status.is_cycle_scoped is False


def test_installment_statuses_use_case_honours_policy() -> None:
    ledger_statuses = GetInstallmentStatusesUseCase(
        _loader(),
        logger=MagicMock(),
    ).execute("u1", today=TODAY)
    calendar_statuses = GetInstallmentStatusesUseCase(
        _loader(),
        logger=MagicMock(),
        policy="calendar",
    ).execute("u1", today=TODAY)

    assert ledger_statuses[0][1].paid_amount == Decimal("200")
    assert calendar_statuses[0][1].paid_amount == Decimal("400")


def test_portfolio_summary_converts_with_quote() -> None:
    fx_provider = MagicMock()
    fx_provider.fetch_quote.return_value = FxQuote(
        buy=Decimal("990"),
        sell=Decimal("1000"),
    )

    summary = GetPortfolioSummaryUseCase(
        _loader(),
        fx_provider=fx_provider,
        logger=MagicMock(),
    ).execute("u1", today=TODAY)

    assert summary.portfolio.balance("ARS") == Decimal("5000")
    assert summary.patrimony.total_ars == Decimal("15000")
    assert summary.patrimony.total_usd == Decimal("15")
    assert summary.allocation["ARS"] == {"stock": Decimal("5000")}


def test_portfolio_summary_falls_back_when_fx_fails() -> None:
    fx_provider = MagicMock()
    fx_provider.fetch_quote.side_effect = RuntimeError("offline")
    logger = MagicMock()

    summary = GetPortfolioSummaryUseCase(
        _loader(),
        fx_provider=fx_provider,
        logger=logger,
    ).execute("u1", today=TODAY)

    assert summary.patrimony.is_converted is False
    assert summary.patrimony.total_ars == Decimal("5000")
    assert summary.patrimony.total_usd == Decimal("10")
    logger.warning.assert_called_once()


def test_monthly_transactions_use_case_lists_month() -> None:
    use_case = GetMonthlyTransactionsUseCase(_loader(), logger=MagicMock())

    march = use_case.execute("u1", 2024, 3, today=TODAY)
    january = use_case.execute("u1", 2024, 1, payment_method_id="debit")

    assert [item.id for item in march] == ["salary"]
    assert january == []


def test_monthly_transactions_use_case_rejects_bad_month() -> None:
    loader = MagicMock()
    use_case = GetMonthlyTransactionsUseCase(loader, logger=MagicMock())

    with pytest.raises(ValidationError):
        use_case.execute("u1", 2024, 13)

    loader.execute.assert_not_called()
