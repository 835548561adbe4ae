"""Use case to value the portfolio and compute total patrimony."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from chanchito.application.ports.pricing import FxRateProviderPort
from chanchito.application.use_cases.load_finance_state import (
    LoadFinanceStateUseCase,
)
from chanchito.domain.models import FxQuote, PatrimonySummary, PortfolioStatus
from chanchito.domain.services.portfolio import (
    allocation_by_type,
    compute_patrimony,
)
from chanchito.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class PortfolioSummary:
    """Portfolio valuation bundled with patrimony and allocation.

    Attributes:
        portfolio: Valued holdings and per-currency totals.
        patrimony: Investments plus savings in ARS and USD.
        allocation: Current value per asset type, keyed by currency.
        fx_quote: Quote used for conversion, if any.
    """

    portfolio: PortfolioStatus
    patrimony: PatrimonySummary
    allocation: dict[str, dict[str, Decimal]]
    fx_quote: FxQuote | None = None


class GetPortfolioSummaryUseCase:
    """Combine holdings, savings and the FX quote into one summary."""

    def __init__(
        self,
        state_loader: LoadFinanceStateUseCase,
        fx_provider: FxRateProviderPort | None = None,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            state_loader: Use case loading the user's records.
            fx_provider: Optional provider of the USD/ARS quote.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._state_loader = state_loader
        self._fx_provider = fx_provider
        self._logger = logger or get_app_logger()

    def execute(self, user_id: str, today: date | None = None) -> PortfolioSummary:
        """Return the portfolio summary of ``user_id``.

        An unavailable quote never fails the summary: totals are reported
        unconverted instead.
        """
        state = self._state_loader.execute(user_id, today=today)
        portfolio = state.portfolio_status(logger=self._logger)
        quote = self._fetch_quote()
        patrimony = compute_patrimony(portfolio, state.savings, quote)
        self._logger.info(
            f"Portfolio summary: total_ars={patrimony.total_ars}, "
            f"converted={patrimony.is_converted}"
        )
        return PortfolioSummary(
            portfolio=portfolio,
            patrimony=patrimony,
            allocation=allocation_by_type(portfolio),
            fx_quote=quote,
        )

    def _fetch_quote(self) -> FxQuote | None:
        if self._fx_provider is None:
            return None
        try:
            quote = self._fx_provider.fetch_quote()
        except Exception as exc:
            self._logger.warning(f"FX quote unavailable: {exc}")
            return None
        if quote is None:
            self._logger.warning("FX quote unavailable; totals not converted")
        return quote


__all__ = ["PortfolioSummary", "GetPortfolioSummaryUseCase"]
