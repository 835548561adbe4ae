"""Tests for price source selection and price parsing."""

from decimal import Decimal

import pytest

from chanchito.domain.services.pricing import (
    BROKER_SOURCE,
    CRYPTO_SOURCE,
    EQUITIES_SOURCE,
    build_data_source_url,
    coerce_price,
    parse_localized_price,
    price_source_for,
)


@pytest.mark.parametrize(
    ("asset_type", "expected"),
    [
        ("stock", EQUITIES_SOURCE),
        ("cedear", EQUITIES_SOURCE),
        ("crypto", CRYPTO_SOURCE),
        ("on", BROKER_SOURCE),
        ("bond", BROKER_SOURCE),
        ("fci", BROKER_SOURCE),
        (" Stock ", EQUITIES_SOURCE),
        ("option", None),
        (None, None),
    ],
)
def test_price_source_for(asset_type, expected) -> None:
    assert price_source_for(asset_type) == expected


def test_build_data_source_url_uses_market_by_type() -> None:
    assert build_data_source_url("al30", "bond") == (
        "https://iol.invertironline.com/titulo/cotizacion/BCBA/AL30/1"
    )
    assert build_data_source_url("btc", "crypto") == (
        "https://iol.invertironline.com/titulo/cotizacion/CRIPTO/BTC/1"
    )


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("$ 1.234,56", Decimal("1234.56")),
        ("1.234.567,8", Decimal("1234567.8")),
        ("72,5", Decimal("72.5")),
        ("980", Decimal("980")),
        ("", None),
        (None, None),
        ("N/D", None),
        ("-5,00", None),
    ],
)
def test_parse_localized_price(text, expected) -> None:
    assert parse_localized_price(text) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (1250.5, Decimal("1250.5")),
        (42, Decimal("42")),
        (Decimal("3.14"), Decimal("3.14")),
        (0, Decimal("0")),
        (float("nan"), None),
        (float("inf"), None),
        (-1, None),
        ("100", None),
        (True, None),
        (None, None),
    ],
)
def test_coerce_price(value, expected) -> None:
    assert coerce_price(value) == expected
