"""In-memory ledger storage."""
from vatledger.ledger.store import STATUS_FILTERS, LedgerStore

__all__ = ["STATUS_FILTERS", "LedgerStore"]
