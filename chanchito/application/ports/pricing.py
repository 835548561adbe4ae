"""Ports for external market data."""

from decimal import Decimal
from typing import Protocol

from chanchito.domain.models import FxQuote


class PriceSourcePort(Protocol):
    """Port for one external price source.

    Implementations return None instead of raising when no price is
    available.
    """

    def fetch_price(
        self,
        ticker: str,
        asset_type: str,
        source_url: str | None = None,
    ) -> Decimal | None:
        """Return the latest price of ``ticker`` or None."""


class FxRateProviderPort(Protocol):
    """Port returning the latest informal USD/ARS quote."""

    def fetch_quote(self) -> FxQuote | None:
        """Return the latest quote or None when unavailable."""


__all__ = ["PriceSourcePort", "FxRateProviderPort"]
