"""Review helpers for confirming or correcting automatically built records."""
from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Iterable, List, Optional

from vatledger.core.models import TAX_FIELD_LABELS, Category, LedgerRecord, Status, TaxField

_UNSET: Any = object()


def apply_edits(
    record: LedgerRecord,
    category: Optional[Category] = None,
    tax_field: Optional[TaxField] = _UNSET,
) -> LedgerRecord:
    """Save a reviewer's corrections and approve the record.

    Saving always approves, even if other fields still hold OCR placeholders:
    the reviewer is trusted. Switching to PERSONAL clears the tax field.
    """

    new_category = Category(category) if category is not None else record.category
    if tax_field is _UNSET:
        new_tax_field = record.tax_field
    else:
        new_tax_field = TaxField(tax_field) if tax_field is not None else None

    if new_category == Category.PERSONAL:
        if tax_field is not _UNSET and tax_field is not None:
            raise ValueError("Personal expenses cannot be booked against a tax field")
        new_tax_field = None

    return replace(
        record,
        category=new_category,
        tax_field=new_tax_field,
        status=Status.APPROVED,
    )


def mark_status(record: LedgerRecord, status: Status, note: str | None = None) -> LedgerRecord:
    """Move a record to a new status and optionally append a note to its justification."""

    merged_note = f"{record.justification} {note}".strip() if note else record.justification
    return replace(record, status=Status(status), justification=merged_note)


def records_to_rows(records: Iterable[LedgerRecord]) -> List[Dict[str, Any]]:
    """Convert records to dictionaries for tabular rendering."""

    def _sanitize(value: Any) -> Any:
        if isinstance(value, str):
            return " ".join(value.split())
        return value

    sanitized_rows = []
    for record in records:
        row = record.to_dict()
        row["tax_field_label"] = TAX_FIELD_LABELS.get(record.tax_field, "")
        sanitized_rows.append({key: _sanitize(value) for key, value in row.items()})
    return sanitized_rows
