"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os

import dotenv

from chanchito.domain.constants import (
    DEFAULT_PRICE_BATCH_SIZE,
    DEFAULT_PRICE_TIMEOUT_SECONDS,
)
from chanchito.domain.models import AmortizationPolicy
from chanchito.infrastructure.fx_rates import DEFAULT_FX_RATE_URL
from chanchito.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class AppSettings:
    """Runtime settings for the finance tracker.

    Attributes:
        user_id: User whose records the dashboard and CLIs operate on.
        price_fetch_timeout: Seconds before a price request is abandoned.
        price_batch_size: Concurrent price fetches per refresh batch.
        amortization_policy: Policy used for installment progress.
        fx_rate_url: Endpoint returning the dolar blue quote.
    """

    user_id: str | None = None
    price_fetch_timeout: float = DEFAULT_PRICE_TIMEOUT_SECONDS
    price_batch_size: int = DEFAULT_PRICE_BATCH_SIZE
    amortization_policy: AmortizationPolicy = AmortizationPolicy.LEDGER
    fx_rate_url: str = DEFAULT_FX_RATE_URL

    @classmethod
    def from_env(cls) -> "AppSettings":
        """Build settings from environment variables.

        Values in a ``.env`` file are loaded first. Invalid values are
        logged and replaced by their defaults.

        Returns:
            AppSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        user_id = os.getenv("CHANCHITO_USER_ID", "").strip() or None
        timeout = cls._parse_number(
            "PRICE_FETCH_TIMEOUT",
            float,
            DEFAULT_PRICE_TIMEOUT_SECONDS,
            logger,
        )
        batch_size = cls._parse_number(
            "PRICE_BATCH_SIZE",
            int,
            DEFAULT_PRICE_BATCH_SIZE,
            logger,
        )
        raw_policy = os.getenv("AMORTIZATION_POLICY", "").strip().lower()
        policy = AmortizationPolicy.LEDGER
        if raw_policy:
            try:
                policy = AmortizationPolicy(raw_policy)
            except ValueError:
                logger.warning(
                    f"Unknown AMORTIZATION_POLICY '{raw_policy}', using ledger"
                )
        fx_rate_url = os.getenv("FX_RATE_URL", "").strip() or DEFAULT_FX_RATE_URL
        return cls(
            user_id=user_id,
            price_fetch_timeout=timeout,
            price_batch_size=batch_size,
            amortization_policy=policy,
            fx_rate_url=fx_rate_url,
        )

    @staticmethod
    def _parse_number(name: str, cast, default, logger):
        """Read a positive number from the environment.

        Args:
            name: Environment variable name.
            cast: ``int`` or ``float``.
            default: Value used when unset or invalid.
            logger: Logger used for warnings.
        """
        raw = os.getenv(name, "").strip()
        if not raw:
            return default
        try:
            value = cast(raw)
        except ValueError:
            logger.warning(f"Invalid {name} '{raw}', using {default}")
            return default
        if value <= 0:
            logger.warning(f"{name} must be positive, using {default}")
            return default
        return value


__all__ = ["AppSettings"]
