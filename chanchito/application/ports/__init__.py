"""Application ports package."""

from .database import DatabaseEnginePort
from .ledger_repository import LedgerRepositoryPort
from .portfolio_repository import PortfolioRepositoryPort
from .pricing import FxRateProviderPort, PriceSourcePort

__all__ = [
    "DatabaseEnginePort",
    "LedgerRepositoryPort",
    "PortfolioRepositoryPort",
    "FxRateProviderPort",
    "PriceSourcePort",
]
