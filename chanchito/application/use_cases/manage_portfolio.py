"""Use cases to manage holdings and savings."""

from collections.abc import Callable
from datetime import date, datetime, timezone
from uuid import uuid4

from chanchito.application.ports.portfolio_repository import (
    PortfolioRepositoryPort,
)
from chanchito.application.use_cases.price_dispatcher import (
    PriceResolutionDispatcher,
)
from chanchito.domain.constants import ARS
from chanchito.domain.errors import PersistenceError
from chanchito.domain.models import Investment, Saving
from chanchito.domain.services.pricing import build_data_source_url
from chanchito.domain.services.validation import (
    validate_amount,
    validate_asset_type,
    validate_currency,
    validate_date,
    validate_optional_price,
    validate_ticker,
)
from chanchito.infrastructure.logging.logger import get_app_logger


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CreateInvestmentUseCase:
    """Store a holding and seed its market price when none is known."""

    def __init__(
        self,
        portfolio_repository: PortfolioRepositoryPort,
        dispatcher: PriceResolutionDispatcher | None = None,
        logger=None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            portfolio_repository: Port providing holdings and price storage.
            dispatcher: Optional dispatcher used for the initial price.
            logger: Optional logger compatible with logging.Logger-like API.
            clock: Optional callable returning the price timestamp.
        """
        self._repository = portfolio_repository
        self._dispatcher = dispatcher
        self._logger = logger or get_app_logger()
        self._clock = clock or _utc_now

    def execute(
        self,
        user_id: str,
        ticker: str,
        name: str,
        asset_type: str,
        quantity,
        currency: str | None = None,
        avg_buy_price=None,
        data_source_url: str | None = None,
    ) -> Investment:
        """Create a holding.

        Args:
            user_id: Owner of the holding.
            ticker: Instrument ticker; stored upper-cased.
            name: Display name; the ticker is used when empty.
            asset_type: One of the supported asset types.
            quantity: Positive quantity held.
            currency: ``ARS`` (default) or ``USD``.
            avg_buy_price: Optional non-negative average purchase price.
            data_source_url: Optional quote page; built when missing.

        Returns:
            Investment: Stored holding.

        Raises:
            ValidationError: If any field is invalid.
            PersistenceError: If the holding cannot be stored. Failures while
                seeding the initial price are logged only.
        """
        symbol = validate_ticker(ticker)
        normalized_type = validate_asset_type(asset_type)
        investment = Investment(
            id=uuid4().hex,
            user_id=user_id,
            ticker=symbol,
            name=(name or "").strip() or symbol,
            type=normalized_type,
            quantity=validate_amount(quantity, "quantity"),
            currency=validate_currency(currency or ARS),
            avg_buy_price=validate_optional_price(avg_buy_price),
            data_source_url=(
                (data_source_url or "").strip()
                or build_data_source_url(symbol, normalized_type)
            ),
        )
        self._repository.insert_investment(investment)
        self._logger.info(f"Investment created: {investment.id} ({symbol})")
        self._seed_price(investment)
        return investment

    def _seed_price(self, investment: Investment) -> None:
        if self._dispatcher is None:
            return
        try:
            if self._repository.fetch_market_price(investment.ticker) is not None:
                return
            price = self._dispatcher.resolve(
                investment.ticker,
                investment.type,
                investment.data_source_url,
            )
            if price is None:
                self._logger.warning(
                    f"No initial price found for {investment.ticker}"
                )
                return
            self._repository.upsert_market_price(
                investment.ticker,
                price,
                self._clock(),
            )
            self._logger.info(f"Initial price stored for {investment.ticker}")
        except PersistenceError as exc:
            self._logger.error(
                f"Could not seed price for {investment.ticker}: {exc}"
            )


class DeleteInvestmentUseCase:
    def __init__(self, portfolio_repository: PortfolioRepositoryPort, logger=None) -> None:
        self._repository = portfolio_repository
        self._logger = logger or get_app_logger()

    def execute(self, user_id: str, investment_id: str) -> bool:
        deleted = self._repository.delete_investment(user_id, investment_id)
        if deleted:
            self._logger.info(f"Investment deleted: {investment_id}")
        else:
            self._logger.warning(f"Investment not found: {investment_id}")
        return deleted


class CreateSavingUseCase:
    def __init__(self, portfolio_repository: PortfolioRepositoryPort, logger=None) -> None:
        self._repository = portfolio_repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        user_id: str,
        amount,
        currency: str | None = None,
        saving_date: date | str | None = None,
    ) -> Saving:
        """Create a savings entry; the date defaults to today."""
        saving = Saving(
            id=uuid4().hex,
            user_id=user_id,
            amount=validate_amount(amount),
            currency=validate_currency(currency or ARS),
            date=validate_date(saving_date) if saving_date else date.today(),
        )
        self._repository.insert_saving(saving)
        self._logger.info(f"Saving created: {saving.id} ({saving.currency})")
        return saving


class DeleteSavingUseCase:
    def __init__(self, portfolio_repository: PortfolioRepositoryPort, logger=None) -> None:
        self._repository = portfolio_repository
        self._logger = logger or get_app_logger()

    def execute(self, user_id: str, saving_id: str) -> bool:
        deleted = self._repository.delete_saving(user_id, saving_id)
        if deleted:
            self._logger.info(f"Saving deleted: {saving_id}")
        else:
            self._logger.warning(f"Saving not found: {saving_id}")
        return deleted


__all__ = [
    "CreateInvestmentUseCase",
    "DeleteInvestmentUseCase",
    "CreateSavingUseCase",
    "DeleteSavingUseCase",
]
