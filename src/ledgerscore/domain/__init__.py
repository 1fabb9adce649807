"""Domain layer for ledgerscore application."""

from ledgerscore.domain.analysis import LedgerAnalysisService
from ledgerscore.domain.ledger_import import LedgerImportService
from ledgerscore.domain.portfolio import PortfolioService

__all__ = [
    "LedgerAnalysisService",
    "LedgerImportService",
    "PortfolioService",
]
