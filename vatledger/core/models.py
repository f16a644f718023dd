"""Data models for ledger records produced from scanned invoices."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum, IntEnum
from typing import Any, Dict, Optional


class Status(str, Enum):
    """Review lifecycle of a ledger record."""

    PENDING = "PENDING"
    NEEDS_REVIEW = "NEEDS_REVIEW"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class Category(str, Enum):
    """Expense category used for VAT deductibility."""

    BUSINESS = "BUSINESS"
    PERSONAL = "PERSONAL"
    MIXED = "MIXED"
    UNDETERMINED = "UNDETERMINED"


class TaxField(IntEnum):
    """Periodic VAT return fields an expense can be booked against."""

    INVENTORY_6 = 20
    INVENTORY_13 = 21
    INVENTORY_23 = 22
    OTHER_GOODS_SERVICES = 23
    FIXED_ASSETS = 24


TAX_FIELD_LABELS: Dict[TaxField, str] = {
    TaxField.INVENTORY_6: "Field 20 - Inventory 6%",
    TaxField.INVENTORY_13: "Field 21 - Inventory 13%",
    TaxField.INVENTORY_23: "Field 22 - Inventory 23%",
    TaxField.OTHER_GOODS_SERVICES: "Field 23 - Other goods and services",
    TaxField.FIXED_ASSETS: "Field 24 - Fixed assets",
}

PENDING_STATUSES = frozenset({Status.PENDING, Status.NEEDS_REVIEW})


@dataclass
class LedgerRecord:
    """A single invoice booked into the VAT ledger."""

    id: str
    issuer_tax_id: str
    issuer_name: str
    date: str
    gross_total: float
    estimated_tax: float
    document_code: str
    status: Status = Status.NEEDS_REVIEW
    category: Category = Category.UNDETERMINED
    tax_field: Optional[TaxField] = None
    confidence: float = 0.0
    justification: str = ""
    items_summary: str = ""
    period: str = ""

    def __post_init__(self) -> None:
        if not 0 <= self.confidence <= 1:
            raise ValueError(f"confidence must be within [0, 1], got {self.confidence}")
        if self.gross_total < 0 or self.estimated_tax < 0:
            raise ValueError("amounts must be non-negative")
        if self.category == Category.PERSONAL and self.tax_field is not None:
            raise ValueError("personal expenses cannot carry a tax field")

    @property
    def is_pending(self) -> bool:
        return self.status in PENDING_STATUSES

    def to_dict(self) -> Dict[str, Any]:
        """Return a plain dictionary with enum members flattened to their values."""

        row = asdict(self)
        row["status"] = self.status.value
        row["category"] = self.category.value
        row["tax_field"] = int(self.tax_field) if self.tax_field is not None else None
        return row
