"""Mapping utilities to align ledger records with the export layout."""
from typing import Dict, Iterable, List

from vatledger.core.models import LedgerRecord


EXPORT_HEADERS = [
    "ID",
    "Date",
    "Issuer",
    "TaxID",
    "Total",
    "VAT",
    "Category",
    "TaxField",
    "Status",
]


def _format_amount(value: float) -> str:
    """Two decimals with a comma separator, as spreadsheets in PT locale expect."""

    return f"{value:.2f}".replace(".", ",")


def _quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def record_to_export_row(record: LedgerRecord) -> Dict[str, str]:
    """Convert a LedgerRecord into the export column dictionary."""

    return {
        "ID": record.id,
        "Date": record.date,
        "Issuer": _quote(record.issuer_name),
        "TaxID": record.issuer_tax_id,
        "Total": _format_amount(record.gross_total),
        "VAT": _format_amount(record.estimated_tax),
        "Category": record.category.value,
        "TaxField": str(int(record.tax_field)) if record.tax_field is not None else "",
        "Status": record.status.value,
    }


def records_to_export_rows(records: Iterable[LedgerRecord]) -> List[Dict[str, str]]:
    """Convert an iterable of LedgerRecord objects into export-aligned rows."""

    return [record_to_export_row(record) for record in records]
