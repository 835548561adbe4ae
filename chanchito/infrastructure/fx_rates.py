"""Informal USD/ARS quote provider."""

import requests

from chanchito.application.ports.pricing import FxRateProviderPort
from chanchito.domain.constants import DEFAULT_PRICE_TIMEOUT_SECONDS
from chanchito.domain.models import FxQuote
from chanchito.domain.services.pricing import coerce_price
from chanchito.infrastructure.logging.logger import get_app_logger
from chanchito.utils.date_utils import coerce_datetime

DEFAULT_FX_RATE_URL = "https://dolarapi.com/v1/dolares/blue"


class DolarApiFxRateProvider(FxRateProviderPort):
    """Read the dolar blue quote from a dolarapi-compatible endpoint.

    The payload carries ``compra`` (buy), ``venta`` (sell) and
    ``fechaActualizacion``.
    """

    def __init__(
        self,
        url: str = DEFAULT_FX_RATE_URL,
        timeout: float = DEFAULT_PRICE_TIMEOUT_SECONDS,
        logger=None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._logger = logger or get_app_logger()

    def fetch_quote(self) -> FxQuote | None:
        """Return the latest quote, or None when it cannot be read."""
        try:
            response = requests.get(self._url, timeout=self._timeout)
        except requests.RequestException as exc:
            self._logger.error(f"FX request failed: {exc}")
            return None
        if response.status_code != 200:
            self._logger.warning(f"FX endpoint returned HTTP {response.status_code}")
            return None
        try:
            payload = response.json()
        except ValueError as exc:
            self._logger.error(f"FX endpoint sent invalid JSON: {exc}")
            return None
        if not isinstance(payload, dict):
            self._logger.warning("FX payload is not an object")
            return None

        buy = coerce_price(payload.get("compra"))
        sell = coerce_price(payload.get("venta"))
        if buy is None or sell is None:
            self._logger.warning("FX payload without buy/sell quotes")
            return None
        try:
            updated_at = coerce_datetime(payload.get("fechaActualizacion"))
        except (TypeError, ValueError):
            updated_at = None
        return FxQuote(buy=buy, sell=sell, updated_at=updated_at)


__all__ = ["DEFAULT_FX_RATE_URL", "DolarApiFxRateProvider"]
