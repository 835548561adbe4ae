"""Portfolio valuation and patrimony totals."""

from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal
from logging import Logger

from chanchito.domain.constants import ARS, CURRENCIES, USD
from chanchito.domain.models import (
    CurrencyTotals,
    FxQuote,
    HoldingValuation,
    Investment,
    MarketPrice,
    PatrimonySummary,
    PortfolioStatus,
    Saving,
)
from chanchito.domain.services.normalization import (
    normalize_currency,
    normalize_ticker,
)
from chanchito.utils.decimal_utils import coerce_decimal, safe_divide

HUNDRED = Decimal("100")


def value_holding(
    investment: Investment,
    market_price: MarketPrice | None,
) -> HoldingValuation:
    """Value a holding at its last known market price.

    Holdings that were never priced report no price, a zero current value and
    a zero profit instead of a loss equal to their cost basis.

    Args:
        investment: Holding to value.
        market_price: Latest price for the ticker, if fetched.

    Returns:
        HoldingValuation: Current value, cost basis and profit figures.
    """
    quantity = coerce_decimal(investment.quantity)
    cost_basis = quantity * coerce_decimal(investment.avg_buy_price)
    if market_price is None:
        return HoldingValuation(
            investment=investment,
            last_price=None,
            last_update=None,
            current_value=Decimal("0"),
            cost_basis=cost_basis,
            profit=Decimal("0"),
            profit_percent=Decimal("0"),
        )
    last_price = coerce_decimal(market_price.last_price)
    current_value = quantity * last_price
    profit = current_value - cost_basis
    return HoldingValuation(
        investment=investment,
        last_price=last_price,
        last_update=market_price.last_update,
        current_value=current_value,
        cost_basis=cost_basis,
        profit=profit,
        profit_percent=safe_divide(profit, cost_basis) * HUNDRED,
    )


def summarize_portfolio(
    investments: Iterable[Investment],
    market_prices: Iterable[MarketPrice],
    logger: Logger | None = None,
) -> PortfolioStatus:
    """Value every holding and total them per currency.

    ARS and USD buckets are never mixed here; conversion only happens in
    ``compute_patrimony``.

    Args:
        investments: Holdings of the user.
        market_prices: Latest known prices.
        logger: Optional logger used to report unpriced holdings.

    Returns:
        PortfolioStatus: Holding valuations and per-currency totals.
    """
    prices = {normalize_ticker(price.ticker): price for price in market_prices}
    holdings: list[HoldingValuation] = []
    balances = {currency: Decimal("0") for currency in CURRENCIES}
    profits = {currency: Decimal("0") for currency in CURRENCIES}
    updates: dict[str, datetime | None] = {currency: None for currency in CURRENCIES}

    for investment in investments:
        valuation = value_holding(
            investment,
            prices.get(normalize_ticker(investment.ticker)),
        )
        if not valuation.is_priced and logger is not None:
            logger.warning(f"No market price for {investment.ticker}")
        currency = normalize_currency(investment.currency)
        balances[currency] += valuation.current_value
        profits[currency] += valuation.profit
        if valuation.last_update is not None and (
            updates[currency] is None or valuation.last_update > updates[currency]
        ):
            updates[currency] = valuation.last_update
        holdings.append(valuation)

    totals = {
        currency: CurrencyTotals(
            currency=currency,
            balance=balances[currency],
            profit=profits[currency],
            last_update=updates[currency],
        )
        for currency in CURRENCIES
    }
    known_updates = [value for value in updates.values() if value is not None]
    return PortfolioStatus(
        holdings=holdings,
        totals=totals,
        last_update=max(known_updates) if known_updates else None,
    )


def allocation_by_type(status: PortfolioStatus) -> dict[str, dict[str, Decimal]]:
    """Return current value per asset type, split by currency."""
    allocation: dict[str, dict[str, Decimal]] = {
        currency: {} for currency in CURRENCIES
    }
    for holding in status.holdings:
        if holding.current_value == 0:
            continue
        bucket = allocation[normalize_currency(holding.investment.currency)]
        asset_type = holding.investment.type
        bucket[asset_type] = bucket.get(asset_type, Decimal("0")) + holding.current_value
    return allocation


def savings_totals(savings: Iterable[Saving]) -> dict[str, Decimal]:
    """Return the savings balance per currency."""
    totals = {currency: Decimal("0") for currency in CURRENCIES}
    for saving in savings:
        totals[normalize_currency(saving.currency)] += coerce_decimal(saving.amount)
    return totals


def compute_patrimony(
    portfolio: PortfolioStatus,
    savings: Iterable[Saving],
    fx_quote: FxQuote | None,
) -> PatrimonySummary:
    """Combine investments and savings into ARS and USD totals.

    The USD total is the ARS total divided by the blue sell rate, so both
    figures always describe the same amount. Without a usable rate the raw
    per-currency sums are reported instead.
    """
    saved = savings_totals(savings)
    investments_ars = portfolio.balance(ARS)
    investments_usd = portfolio.balance(USD)
    rate = coerce_decimal(fx_quote.sell) if fx_quote is not None else Decimal("0")

    if rate > 0:
        total_ars = (
            investments_ars
            + investments_usd * rate
            + saved[ARS]
            + saved[USD] * rate
        )
        total_usd = safe_divide(total_ars, rate)
        fx_rate = rate
    else:
        total_ars = investments_ars + saved[ARS]
        total_usd = investments_usd + saved[USD]
        fx_rate = None

    return PatrimonySummary(
        investments_ars=investments_ars,
        investments_usd=investments_usd,
        savings_ars=saved[ARS],
        savings_usd=saved[USD],
        total_ars=total_ars,
        total_usd=total_usd,
        fx_rate=fx_rate,
    )


__all__ = [
    "value_holding",
    "summarize_portfolio",
    "allocation_by_type",
    "savings_totals",
    "compute_patrimony",
]
