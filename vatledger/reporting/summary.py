"""Aggregates shown on the ledger overview."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable

from vatledger.core.models import Category, LedgerRecord


@dataclass
class LedgerSummary:
    total_documents: int = 0
    total_value: float = 0.0
    deductible_vat: float = 0.0
    pending_review: int = 0
    category_counts: Dict[str, int] = field(
        default_factory=lambda: {"business": 0, "personal": 0, "other": 0}
    )
    vat_by_tax_field: Dict[str, float] = field(default_factory=dict)


def summarize_ledger(records: Iterable[LedgerRecord]) -> LedgerSummary:
    """Compute totals, deductible VAT and per-field VAT for a set of records.

    Only BUSINESS records count towards deductible VAT. MIXED and
    UNDETERMINED records are grouped together as "other".
    """

    summary = LedgerSummary()
    for record in records:
        summary.total_documents += 1
        summary.total_value += record.gross_total
        if record.is_pending:
            summary.pending_review += 1

        if record.category == Category.BUSINESS:
            summary.category_counts["business"] += 1
            summary.deductible_vat += record.estimated_tax
            if record.tax_field is not None:
                key = f"C{int(record.tax_field)}"
                summary.vat_by_tax_field[key] = (
                    summary.vat_by_tax_field.get(key, 0.0) + record.estimated_tax
                )
        elif record.category == Category.PERSONAL:
            summary.category_counts["personal"] += 1
        else:
            summary.category_counts["other"] += 1
    return summary
