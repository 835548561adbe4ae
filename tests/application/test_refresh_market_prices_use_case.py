"""Tests for the RefreshMarketPricesUseCase."""

import threading
import time
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from chanchito.application.use_cases.refresh_market_prices import (
    RefreshMarketPricesUseCase,
)
from chanchito.domain.errors import PersistenceError
from chanchito.domain.models import Investment

NOW = datetime(2024, 3, 10, 15, tzinfo=timezone.utc)


def _investment(index: int, ticker: str | None = None) -> Investment:
    return Investment(
        id=f"i{index}",
        user_id="u1",
        ticker=ticker or f"tk{index}",
        name=f"Holding {index}",
        type="stock",
        quantity=Decimal("1"),
        currency="ARS",
    )


class _FakeDispatcher:
    def __init__(self, failing: set[str] | None = None, missing: set[str] | None = None):
        self._failing = failing or set()
        self._missing = missing or set()
        self._lock = threading.Lock()
        self.in_flight = 0
        self.max_in_flight = 0
        self.calls: list[str] = []

    def resolve(self, ticker, asset_type, source_url=None):
        with self._lock:
            self.calls.append(ticker)
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            time.sleep(0.01)
            if ticker in self._failing:
                raise RuntimeError("boom")
            if ticker in self._missing:
                return None
            return Decimal("100")
        finally:
            with self._lock:
                self.in_flight -= 1


def _repository(investments: list[Investment]) -> MagicMock:
    repository = MagicMock()
    repository.fetch_investments.return_value = investments
    return repository


def test_one_failure_in_seven_still_upserts_six() -> None:
    investments = [_investment(i) for i in range(7)]
    repository = _repository(investments)
    dispatcher = _FakeDispatcher(failing={"tk3"})

    use_case = RefreshMarketPricesUseCase(
        repository,
        dispatcher,
        logger=MagicMock(),
        batch_size=5,
        clock=lambda: NOW,
    )

    result = use_case.execute("u1")

    assert result.requested == 7
    assert result.updated == 6
    assert result.failed_tickers == ["TK3"]
    assert repository.upsert_market_price.call_count == 6
    repository.upsert_market_price.assert_any_call("TK0", Decimal("100"), NOW)
    assert sorted(dispatcher.calls) == sorted(f"tk{i}" for i in range(7))


def test_batches_bound_concurrent_fetches() -> None:
    investments = [_investment(i) for i in range(12)]
    dispatcher = _FakeDispatcher()

    use_case = RefreshMarketPricesUseCase(
        _repository(investments),
        dispatcher,
        logger=MagicMock(),
        batch_size=5,
    )

    result = use_case.execute("u1")

    assert result.updated == 12
    assert dispatcher.max_in_flight <= 5


def test_missing_prices_are_reported_not_upserted() -> None:
    repository = _repository([_investment(1), _investment(2)])
    dispatcher = _FakeDispatcher(missing={"tk2"})

    result = RefreshMarketPricesUseCase(
        repository,
        dispatcher,
        logger=MagicMock(),
    ).execute("u1")

    assert result.updated == 1
    assert result.failed_tickers == ["TK2"]


def test_storage_failure_is_not_counted() -> None:
    repository = _repository([_investment(1), _investment(2)])
    repository.upsert_market_price.side_effect = [None, PersistenceError("down")]
    logger = MagicMock()

    result = RefreshMarketPricesUseCase(
        repository,
        _FakeDispatcher(),
        logger=logger,
    ).execute("u1")

    assert result.updated == 1
    assert result.failed_tickers == ["TK2"]
    logger.error.assert_called_once()


def test_empty_portfolio_refreshes_nothing() -> None:
    repository = _repository([])

    result = RefreshMarketPricesUseCase(
        repository,
        _FakeDispatcher(),
        logger=MagicMock(),
    ).execute("u1")

    assert result.requested == 0
    assert result.updated == 0
    repository.upsert_market_price.assert_not_called()


def test_reading_holdings_failure_propagates() -> None:
    repository = MagicMock()
    repository.fetch_investments.side_effect = PersistenceError("down")

    use_case = RefreshMarketPricesUseCase(
        repository,
        _FakeDispatcher(),
        logger=MagicMock(),
    )

    with pytest.raises(PersistenceError):
        use_case.execute("u1")


def test_batch_size_must_be_positive() -> None:
    with pytest.raises(ValueError):
        RefreshMarketPricesUseCase(MagicMock(), _FakeDispatcher(), logger=MagicMock(), batch_size=0)
