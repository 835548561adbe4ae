"""Domain normalization helpers."""

from chanchito.domain.constants import ARS, USD


def normalize_ticker(ticker: str | None) -> str:
    """Normalize ticker symbols.

    Args:
        ticker: Raw ticker typed by the user or read from storage.

    Returns:
        str: Upper-cased ticker without surrounding whitespace.
    """
    if not ticker:
        return ""
    return ticker.strip().upper()


def normalize_currency(currency: str | None) -> str:
    """Normalize currency codes, defaulting to ARS.

    Args:
        currency: Raw currency code.

    Returns:
        str: ``USD`` for dollar holdings, ``ARS`` otherwise.
    """
    if currency and currency.strip().upper() == USD:
        return USD
    return ARS


__all__ = ["normalize_ticker", "normalize_currency"]
