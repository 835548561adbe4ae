"""SQLAlchemy-backed repository for holdings, savings and prices."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import bindparam, text

from chanchito.application.ports.database import DatabaseEnginePort
from chanchito.application.ports.portfolio_repository import (
    PortfolioRepositoryPort,
)
from chanchito.domain.models import Investment, MarketPrice, Saving
from chanchito.domain.services.normalization import normalize_ticker
from chanchito.infrastructure.repository_errors import translate_db_errors
from chanchito.utils.date_utils import coerce_date, coerce_datetime
from chanchito.utils.decimal_utils import coerce_decimal


class SqlAlchemyPortfolioRepository(PortfolioRepositoryPort):
    """Repository backed by SQLAlchemy for portfolio records."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the finance engine.
        """
        self._db_port = db_port

    def _read(self, action: str, query, params: dict):
        with translate_db_errors(action):
            with self._db_port.get_engine().connect() as conn:
                return conn.execute(query, params).all()

    def _write(self, action: str, query, params: dict) -> int:
        with translate_db_errors(action):
            with self._db_port.get_engine().begin() as conn:
                return conn.execute(query, params).rowcount

    def fetch_investments(self, user_id: str) -> list[Investment]:
        query = text(
            """
            SELECT id, user_id, ticker, name, type, quantity, currency,
                   avg_buy_price, data_source_url
            FROM investments
            WHERE user_id = :user_id
            ORDER BY ticker
            """
        )
        rows = self._read("fetch investments", query, {"user_id": user_id})
        return [
            Investment(
                id=row.id,
                user_id=row.user_id,
                ticker=row.ticker,
                name=row.name,
                type=row.type,
                quantity=coerce_decimal(row.quantity),
                currency=row.currency,
                avg_buy_price=(
                    None
                    if row.avg_buy_price is None
                    else coerce_decimal(row.avg_buy_price)
                ),
                data_source_url=row.data_source_url,
            )
            for row in rows
        ]

    def insert_investment(self, investment: Investment) -> None:
        query = text(
            """
            INSERT INTO investments (
                id, user_id, ticker, name, type, quantity, currency,
                avg_buy_price, data_source_url
            ) VALUES (
                :id, :user_id, :ticker, :name, :type, :quantity, :currency,
                :avg_buy_price, :data_source_url
            )
            """
        )
        params = {
            "id": investment.id,
            "user_id": investment.user_id,
            "ticker": investment.ticker,
            "name": investment.name,
            "type": investment.type,
            "quantity": str(investment.quantity),
            "currency": investment.currency,
            "avg_buy_price": (
                None
                if investment.avg_buy_price is None
                else str(investment.avg_buy_price)
            ),
            "data_source_url": investment.data_source_url,
        }
        self._write("insert investment", query, params)

    def delete_investment(self, user_id: str, investment_id: str) -> bool:
        query = text("DELETE FROM investments WHERE id = :id AND user_id = :user_id")
        params = {"id": investment_id, "user_id": user_id}
        return self._write("delete investment", query, params) > 0

    def fetch_savings(self, user_id: str) -> list[Saving]:
        query = text(
            """
            SELECT id, user_id, amount, currency, date
            FROM savings
            WHERE user_id = :user_id
            ORDER BY date DESC, id
            """
        )
        rows = self._read("fetch savings", query, {"user_id": user_id})
        return [
            Saving(
                id=row.id,
                user_id=row.user_id,
                amount=coerce_decimal(row.amount),
                currency=row.currency,
                date=coerce_date(row.date),
            )
            for row in rows
        ]

    def insert_saving(self, saving: Saving) -> None:
        query = text(
            """
            INSERT INTO savings (id, user_id, amount, currency, date)
            VALUES (:id, :user_id, :amount, :currency, :date)
            """
        )
        params = {
            "id": saving.id,
            "user_id": saving.user_id,
            "amount": str(saving.amount),
            "currency": saving.currency,
            "date": saving.date.isoformat(),
        }
        self._write("insert saving", query, params)

    def delete_saving(self, user_id: str, saving_id: str) -> bool:
        query = text("DELETE FROM savings WHERE id = :id AND user_id = :user_id")
        params = {"id": saving_id, "user_id": user_id}
        return self._write("delete saving", query, params) > 0

    def fetch_market_prices(
        self,
        tickers: list[str] | None = None,
    ) -> list[MarketPrice]:
        """Return latest prices, optionally restricted to ``tickers``."""
        if tickers is None:
            query = text(
                "SELECT ticker, last_price, last_update FROM market_prices "
                "ORDER BY ticker"
            )
            params: dict = {}
        else:
            normalized = sorted({normalize_ticker(t) for t in tickers if t})
            if not normalized:
                return []
            query = text(
                "SELECT ticker, last_price, last_update FROM market_prices "
                "WHERE ticker IN :tickers ORDER BY ticker"
            ).bindparams(bindparam("tickers", expanding=True))
            params = {"tickers": normalized}
        rows = self._read("fetch market prices", query, params)
        return [self._to_market_price(row) for row in rows]

    def fetch_market_price(self, ticker: str) -> MarketPrice | None:
        query = text(
            "SELECT ticker, last_price, last_update FROM market_prices "
            "WHERE ticker = :ticker"
        )
        rows = self._read(
            "fetch market price",
            query,
            {"ticker": normalize_ticker(ticker)},
        )
        return self._to_market_price(rows[0]) if rows else None

    def upsert_market_price(
        self,
        ticker: str,
        price: Decimal,
        updated_at: datetime,
    ) -> None:
        """Insert or replace the latest price of a ticker.

        Repeating the call with the same values leaves a single row.
        """
        query = text(
            """
            INSERT INTO market_prices (ticker, last_price, last_update)
            VALUES (:ticker, :last_price, :last_update)
            ON CONFLICT (ticker) DO UPDATE
            SET last_price = excluded.last_price,
                last_update = excluded.last_update
            """
        )
        params = {
            "ticker": normalize_ticker(ticker),
            "last_price": str(price),
            "last_update": coerce_datetime(updated_at).isoformat(),
        }
        self._write("upsert market price", query, params)

    @staticmethod
    def _to_market_price(row) -> MarketPrice:
        return MarketPrice(
            ticker=row.ticker,
            last_price=coerce_decimal(row.last_price),
            last_update=coerce_datetime(row.last_update),
        )


__all__ = ["SqlAlchemyPortfolioRepository"]
