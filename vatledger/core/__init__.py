"""Core building blocks for the vatledger package."""
from vatledger.core.config import Settings, get_settings
from vatledger.core.errors import RecognitionError, VatLedgerError
from vatledger.core.logging import configure_logging
from vatledger.core.models import TAX_FIELD_LABELS, Category, LedgerRecord, Status, TaxField

__all__ = [
    "TAX_FIELD_LABELS",
    "Category",
    "LedgerRecord",
    "RecognitionError",
    "Settings",
    "Status",
    "TaxField",
    "VatLedgerError",
    "configure_logging",
    "get_settings",
]
