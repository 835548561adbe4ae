"""Price source selection and price normalization."""

import math
import re
from decimal import Decimal, InvalidOperation

from chanchito.domain.constants import (
    BOND,
    CEDEAR,
    CRYPTO,
    FCI,
    NEGOTIABLE_OBLIGATION,
    STOCK,
)
from chanchito.domain.services.normalization import normalize_ticker

EQUITIES_SOURCE = "equities"
CRYPTO_SOURCE = "crypto"
BROKER_SOURCE = "broker"

PRICE_SOURCE_BY_ASSET_TYPE = {
    STOCK: EQUITIES_SOURCE,
    CEDEAR: EQUITIES_SOURCE,
    CRYPTO: CRYPTO_SOURCE,
    NEGOTIABLE_OBLIGATION: BROKER_SOURCE,
    BOND: BROKER_SOURCE,
    FCI: BROKER_SOURCE,
}

BROKER_QUOTE_URL = "https://iol.invertironline.com/titulo/cotizacion/{market}/{ticker}/1"

_PRICE_NOISE = re.compile(r"[$\s]")


def price_source_for(asset_type: str | None) -> str | None:
    """Return the price source key for an asset type, or None if unknown."""
    if not asset_type:
        return None
    return PRICE_SOURCE_BY_ASSET_TYPE.get(asset_type.strip().lower())


def build_data_source_url(ticker: str, asset_type: str | None) -> str:
    """Build the broker quote page URL for a ticker.

    Args:
        ticker: Instrument ticker.
        asset_type: Asset type; crypto quotes live on a separate market.

    Returns:
        str: Quote page URL.
    """
    market = "CRIPTO" if (asset_type or "").lower() == CRYPTO else "BCBA"
    return BROKER_QUOTE_URL.format(market=market, ticker=normalize_ticker(ticker))


def parse_localized_price(text: str | None) -> Decimal | None:
    """Parse a price written with Argentine number formatting.

    ``"$ 1.234,56"`` becomes ``Decimal("1234.56")``. Thousands separators are
    dots and the decimal separator is a comma.

    Args:
        text: Raw price text scraped from a quote page.

    Returns:
        Decimal | None: Parsed price, or None when the text is not a number.
    """
    if not text:
        return None
    cleaned = _PRICE_NOISE.sub("", text).replace(".", "").replace(",", ".", 1)
    if not cleaned:
        return None
    try:
        price = Decimal(cleaned)
    except InvalidOperation:
        return None
    if not price.is_finite() or price < 0:
        return None
    return price


def coerce_price(value) -> Decimal | None:
    """Normalize a numeric price field from a JSON payload.

    Booleans, strings and non-finite numbers are rejected.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return None
    if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
        return None
    price = Decimal(str(value))
    if not price.is_finite() or price < 0:
        return None
    return price


__all__ = [
    "EQUITIES_SOURCE",
    "CRYPTO_SOURCE",
    "BROKER_SOURCE",
    "PRICE_SOURCE_BY_ASSET_TYPE",
    "price_source_for",
    "build_data_source_url",
    "parse_localized_price",
    "coerce_price",
]
