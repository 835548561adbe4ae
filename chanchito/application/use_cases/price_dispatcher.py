"""Route each holding to the price source that quotes its asset type."""

from collections.abc import Mapping
from decimal import Decimal

from chanchito.application.ports.pricing import PriceSourcePort
from chanchito.domain.services.normalization import normalize_ticker
from chanchito.domain.services.pricing import (
    BROKER_SOURCE,
    build_data_source_url,
    price_source_for,
)
from chanchito.infrastructure.logging.logger import get_app_logger


class PriceResolutionDispatcher:
    """Select exactly one price source per asset type.

    Stocks and CEDEARs go to the equities source, crypto to the crypto
    source, and bonds, ONs and FCIs to the broker quote page.
    """

    def __init__(
        self,
        sources: Mapping[str, PriceSourcePort],
        logger=None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            sources: Price sources keyed by source name (equities, crypto,
                broker).
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._sources = dict(sources)
        self._logger = logger or get_app_logger()

    def resolve(
        self,
        ticker: str,
        asset_type: str,
        source_url: str | None = None,
    ) -> Decimal | None:
        """Return the latest price for a holding, or None.

        Never raises: any error from a source is logged and reported as no
        price, so a batch refresh degrades one holding at a time.

        Args:
            ticker: Instrument ticker.
            asset_type: Asset type used to pick the source.
            source_url: Optional pre-built quote page URL.

        Returns:
            Decimal | None: Normalized price or None.
        """
        source_key = price_source_for(asset_type)
        source = self._sources.get(source_key) if source_key else None
        if source is None:
            self._logger.warning(
                f"No price source for {ticker} (type: {asset_type})"
            )
            return None
        symbol = normalize_ticker(ticker)
        url = source_url
        if source_key == BROKER_SOURCE and not url:
            url = build_data_source_url(symbol, asset_type)
        try:
            price = source.fetch_price(symbol, asset_type, url)
        except Exception as exc:
            self._logger.error(
                f"Price source {source_key} failed for {symbol}: {exc}"
            )
            return None
        if price is None:
            self._logger.info(f"No price available for {symbol} ({source_key})")
        return price


__all__ = ["PriceResolutionDispatcher"]
