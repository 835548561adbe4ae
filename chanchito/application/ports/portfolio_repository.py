"""Port for investments, savings and market prices."""

from datetime import datetime
from decimal import Decimal
from typing import Protocol

from chanchito.domain.models import Investment, MarketPrice, Saving


class PortfolioRepositoryPort(Protocol):
    """Port exposing portfolio records.

    Investments and savings are scoped by ``user_id``; market prices are
    shared and keyed by ticker.
    """

    def fetch_investments(self, user_id: str) -> list[Investment]:
        """Return the user's holdings."""

    def insert_investment(self, investment: Investment) -> None:
        """Insert a holding."""

    def delete_investment(self, user_id: str, investment_id: str) -> bool:
        """Delete a holding."""

    def fetch_savings(self, user_id: str) -> list[Saving]:
        """Return the user's savings entries."""

    def insert_saving(self, saving: Saving) -> None:
        """Insert a savings entry."""

    def delete_saving(self, user_id: str, saving_id: str) -> bool:
        """Delete a savings entry."""

    def fetch_market_prices(self, tickers: list[str] | None = None) -> list[MarketPrice]:
        """Return latest prices, optionally restricted to ``tickers``."""

    def fetch_market_price(self, ticker: str) -> MarketPrice | None:
        """Return the latest price of one ticker."""

    def upsert_market_price(
        self,
        ticker: str,
        price: Decimal,
        updated_at: datetime,
    ) -> None:
        """Insert or replace the latest price of a ticker."""


__all__ = ["PortfolioRepositoryPort"]
