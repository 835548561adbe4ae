"""CLI adapter to create the finance tables.

Safe to run repeatedly: existing tables are left untouched.
"""

from chanchito.infrastructure.container import build_database_adapter
from chanchito.infrastructure.logging.logger import get_app_logger
from chanchito.infrastructure.schema import TABLE_NAMES, ensure_schema


def main() -> None:
    """Create any missing table in the configured database."""
    logger = get_app_logger()
    engine = build_database_adapter().get_engine()

    ensure_schema(engine, logger=logger)

    print(f"Schema ready: {', '.join(TABLE_NAMES)}.")


if __name__ == "__main__":  # pragma: no cover
    main()
