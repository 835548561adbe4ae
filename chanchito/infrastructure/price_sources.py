"""HTTP price sources for equities, crypto and broker-quoted instruments.

Every source returns None instead of raising. Failures are logged with the
ticker so a batch refresh can report which holdings were skipped.
"""

from decimal import Decimal

import requests
from bs4 import BeautifulSoup

from chanchito.application.ports.pricing import PriceSourcePort
from chanchito.domain.constants import DEFAULT_PRICE_TIMEOUT_SECONDS
from chanchito.domain.services.pricing import (
    build_data_source_url,
    coerce_price,
    parse_localized_price,
)
from chanchito.infrastructure.logging.logger import get_app_logger

YAHOO_CHART_URL = "https://query1.finance.yahoo.com/v8/finance/chart/{symbol}"
COINGECKO_PRICE_URL = "https://api.coingecko.com/api/v3/simple/price"
BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class _HttpPriceSource(PriceSourcePort):
    """Shared request handling for HTTP price sources."""

    name = "http"

    def __init__(
        self,
        timeout: float = DEFAULT_PRICE_TIMEOUT_SECONDS,
        logger=None,
    ) -> None:
        """Initialize the source.

        Args:
            timeout: Seconds before a request is abandoned.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._timeout = timeout
        self._logger = logger or get_app_logger()

    def _get(self, url: str, ticker: str, **kwargs) -> requests.Response | None:
        try:
            response = requests.get(url, timeout=self._timeout, **kwargs)
        except requests.RequestException as exc:
            self._logger.error(f"{self.name} request failed for {ticker}: {exc}")
            return None
        if response.status_code != 200:
            self._logger.warning(
                f"{self.name} returned HTTP {response.status_code} for {ticker}"
            )
            return None
        return response

    def _get_json(self, url: str, ticker: str, **kwargs):
        response = self._get(url, ticker, **kwargs)
        if response is None:
            return None
        try:
            return response.json()
        except ValueError as exc:
            self._logger.error(f"{self.name} sent invalid JSON for {ticker}: {exc}")
            return None


class YahooFinancePriceSource(_HttpPriceSource):
    """Quotes for stocks and CEDEARs listed on BYMA (``<TICKER>.BA``)."""

    name = "yahoo"

    def fetch_price(
        self,
        ticker: str,
        asset_type: str,
        source_url: str | None = None,
    ) -> Decimal | None:
        symbol = f"{ticker.strip().upper()}.BA"
        payload = self._get_json(
            YAHOO_CHART_URL.format(symbol=symbol),
            ticker,
            headers={"User-Agent": "Mozilla/5.0"},
        )
        try:
            raw = payload["chart"]["result"][0]["meta"]["regularMarketPrice"]
        except (KeyError, IndexError, TypeError):
            if payload is not None:
                self._logger.warning(f"yahoo payload without price for {ticker}")
            return None
        return coerce_price(raw)


class CoinGeckoPriceSource(_HttpPriceSource):
    """USD quotes for crypto assets; the ticker is the CoinGecko coin id."""

    name = "coingecko"

    def fetch_price(
        self,
        ticker: str,
        asset_type: str,
        source_url: str | None = None,
    ) -> Decimal | None:
        coin_id = ticker.strip().lower()
        payload = self._get_json(
            COINGECKO_PRICE_URL,
            ticker,
            params={"ids": coin_id, "vs_currencies": "usd"},
        )
        try:
            raw = payload[coin_id]["usd"]
        except (KeyError, TypeError):
            if payload is not None:
                self._logger.warning(f"coingecko payload without price for {ticker}")
            return None
        return coerce_price(raw)


class InvertirOnlinePriceSource(_HttpPriceSource):
    """Scrape the last price from an InvertirOnline quote page.

    Used for bonds, negotiable obligations and mutual funds, which have no
    free JSON feed.
    """

    name = "invertironline"

    def fetch_price(
        self,
        ticker: str,
        asset_type: str,
        source_url: str | None = None,
    ) -> Decimal | None:
        url = source_url or build_data_source_url(ticker, asset_type)
        response = self._get(
            url,
            ticker,
            headers={
                "User-Agent": BROWSER_USER_AGENT,
                "Accept": "text/html,application/xhtml+xml",
            },
        )
        if response is None:
            return None
        price_text = self._extract_price_text(response.text)
        if not price_text:
            self._logger.warning(f"No price element on quote page for {ticker}")
            return None
        price = parse_localized_price(price_text)
        if price is None:
            self._logger.warning(
                f"Unparsable price '{price_text}' for {ticker}"
            )
        return price

    @staticmethod
    def _extract_price_text(html: str) -> str:
        soup = BeautifulSoup(html, "html.parser")
        for selector in ('span[data-field="UltimoPrecio"]', "#IdPrecio"):
            element = soup.select_one(selector)
            if element is not None:
                value = element.get_text(strip=True)
                if value:
                    return value
        return ""


__all__ = [
    "YahooFinancePriceSource",
    "CoinGeckoPriceSource",
    "InvertirOnlinePriceSource",
]
