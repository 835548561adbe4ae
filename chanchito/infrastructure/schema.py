"""Table definitions for the finance store.

Statements are plain SQL understood by both PostgreSQL and SQLite. Child
rows reference their owner with ``ON DELETE CASCADE`` so deleting a plan
removes its installments.
"""

from sqlalchemy import text
from sqlalchemy.engine import Engine

from chanchito.infrastructure.logging.logger import get_app_logger

SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS categories (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        name TEXT NOT NULL,
        emoji TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS payment_methods (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        name TEXT NOT NULL,
        type TEXT NOT NULL,
        default_closing_day INTEGER,
        default_payment_day INTEGER,
        is_personal BOOLEAN NOT NULL DEFAULT FALSE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS installment_plans (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        description TEXT NOT NULL,
        total_amount NUMERIC(18, 6) NOT NULL,
        installments_count INTEGER NOT NULL,
        purchase_date DATE NOT NULL,
        category_id TEXT REFERENCES categories (id) ON DELETE SET NULL,
        payment_method_id TEXT
            REFERENCES payment_methods (id) ON DELETE SET NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS recurring_plans (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        description TEXT NOT NULL,
        amount NUMERIC(18, 6) NOT NULL,
        is_active BOOLEAN NOT NULL DEFAULT TRUE,
        category_id TEXT REFERENCES categories (id) ON DELETE SET NULL,
        payment_method_id TEXT
            REFERENCES payment_methods (id) ON DELETE SET NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS transactions (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        description TEXT NOT NULL,
        amount NUMERIC(18, 6) NOT NULL,
        type TEXT NOT NULL,
        date DATE NOT NULL,
        category_id TEXT REFERENCES categories (id) ON DELETE SET NULL,
        payment_method_id TEXT
            REFERENCES payment_methods (id) ON DELETE SET NULL,
        installment_plan_id TEXT
            REFERENCES installment_plans (id) ON DELETE CASCADE,
        recurring_plan_id TEXT
            REFERENCES recurring_plans (id) ON DELETE SET NULL
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS ix_transactions_user_date
        ON transactions (user_id, date)
    """,
    """
    CREATE TABLE IF NOT EXISTS investments (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        ticker TEXT NOT NULL,
        name TEXT NOT NULL,
        type TEXT NOT NULL,
        quantity NUMERIC(24, 8) NOT NULL,
        currency TEXT NOT NULL DEFAULT 'ARS',
        avg_buy_price NUMERIC(18, 6),
        data_source_url TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS market_prices (
        ticker TEXT PRIMARY KEY,
        last_price NUMERIC(18, 6) NOT NULL,
        last_update TIMESTAMP WITH TIME ZONE NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS savings (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        amount NUMERIC(18, 6) NOT NULL,
        currency TEXT NOT NULL DEFAULT 'ARS',
        date DATE NOT NULL
    )
    """,
)

TABLE_NAMES = (
    "categories",
    "payment_methods",
    "installment_plans",
    "recurring_plans",
    "transactions",
    "investments",
    "market_prices",
    "savings",
)


def ensure_schema(engine: Engine, logger=None) -> None:
    """Create every missing table and index.

    Args:
        engine: Engine connected to the finance store.
        logger: Optional logger compatible with logging.Logger-like API.
    """
    logger = logger or get_app_logger()
    with engine.begin() as conn:
        for statement in SCHEMA_STATEMENTS:
            conn.execute(text(statement))
    logger.info(f"Schema ensured ({len(TABLE_NAMES)} tables)")


__all__ = ["SCHEMA_STATEMENTS", "TABLE_NAMES", "ensure_schema"]
