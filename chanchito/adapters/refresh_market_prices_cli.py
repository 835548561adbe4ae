"""CLI adapter to refresh the market prices of a user's holdings.

The user comes from the first argument or ``CHANCHITO_USER_ID``.
"""

import sys

from chanchito.infrastructure.container import build_refresh_market_prices
from chanchito.infrastructure.logging.logger import get_usage_logger
from chanchito.infrastructure.settings import AppSettings


def main(argv: list[str] | None = None) -> int:
    """Run the market price refresh use case.

    Args:
        argv: Optional argument list; defaults to ``sys.argv[1:]``.

    Returns:
        int: Process exit code.
    """
    args = sys.argv[1:] if argv is None else argv
    settings = AppSettings.from_env()
    user_id = args[0] if args else settings.user_id
    if not user_id:
        print("Usage: refresh_market_prices_cli <user_id> (or set CHANCHITO_USER_ID)")
        return 2

    get_usage_logger().info(f"Price refresh requested for {user_id}")
    use_case = build_refresh_market_prices(settings=settings)
    result = use_case.execute(user_id)

    print(f"Updated {result.updated} of {result.requested} market prices.")
    if result.failed_tickers:
        print(f"Without price: {', '.join(result.failed_tickers)}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
