"""Use case to refresh the market prices of a user's holdings."""

import asyncio
from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from decimal import Decimal

from chanchito.application.ports.portfolio_repository import (
    PortfolioRepositoryPort,
)
from chanchito.application.use_cases.price_dispatcher import (
    PriceResolutionDispatcher,
)
from chanchito.domain.constants import DEFAULT_PRICE_BATCH_SIZE
from chanchito.domain.errors import PersistenceError
from chanchito.domain.models import Investment, MarketPriceRefreshResult
from chanchito.domain.services.normalization import normalize_ticker
from chanchito.infrastructure.logging.logger import get_app_logger


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RefreshMarketPricesUseCase:
    """Fetch fresh prices for every holding and upsert them.

    Holdings are processed in fixed-size batches. Fetches inside a batch run
    concurrently and are joined before the next batch starts, which bounds
    the number of outbound requests in flight.
    """

    def __init__(
        self,
        portfolio_repository: PortfolioRepositoryPort,
        dispatcher: PriceResolutionDispatcher,
        logger=None,
        batch_size: int = DEFAULT_PRICE_BATCH_SIZE,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            portfolio_repository: Port providing holdings and price storage.
            dispatcher: Dispatcher resolving one price per holding.
            logger: Optional logger compatible with logging.Logger-like API.
            batch_size: Number of concurrent fetches per batch.
            clock: Optional callable returning the update timestamp.
        """
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self._repository = portfolio_repository
        self._dispatcher = dispatcher
        self._logger = logger or get_app_logger()
        self._batch_size = batch_size
        self._clock = clock or _utc_now

    def execute(self, user_id: str) -> MarketPriceRefreshResult:
        """Refresh prices for all holdings of ``user_id``.

        Args:
            user_id: Authenticated user whose holdings are refreshed.

        Returns:
            MarketPriceRefreshResult: Requested and successfully updated
            counts, plus tickers without a price.

        Raises:
            PersistenceError: If the holdings cannot be read.
        """
        investments = self._repository.fetch_investments(user_id)
        return asyncio.run(self._refresh(investments))

    async def _refresh(
        self,
        investments: Sequence[Investment],
    ) -> MarketPriceRefreshResult:
        updated = 0
        failed: list[str] = []
        for start in range(0, len(investments), self._batch_size):
            batch = investments[start:start + self._batch_size]
            results = await asyncio.gather(
                *(
                    asyncio.to_thread(
                        self._dispatcher.resolve,
                        investment.ticker,
                        investment.type,
                        investment.data_source_url,
                    )
                    for investment in batch
                ),
                return_exceptions=True,
            )
            for investment, result in zip(batch, results):
                ticker = normalize_ticker(investment.ticker)
                if isinstance(result, BaseException) or result is None:
                    if isinstance(result, BaseException):
                        self._logger.error(
                            f"Price fetch raised for {ticker}: {result}"
                        )
                    failed.append(ticker)
                    continue
                if self._store(ticker, result):
                    updated += 1
                else:
                    failed.append(ticker)

        self._logger.info(
            f"Market prices refreshed: {updated}/{len(investments)} updated"
        )
        return MarketPriceRefreshResult(
            requested=len(investments),
            updated=updated,
            failed_tickers=failed,
        )

    def _store(self, ticker: str, price: Decimal) -> bool:
        try:
            self._repository.upsert_market_price(ticker, price, self._clock())
        except PersistenceError as exc:
            self._logger.error(f"Could not store price for {ticker}: {exc}")
            return False
        return True


__all__ = ["RefreshMarketPricesUseCase"]
