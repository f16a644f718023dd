"""Helper sinks for exporting ledger records beyond CSV output."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List

from vatledger.core.models import LedgerRecord
from vatledger.reporting.csv_export import ensure_output_dir
from vatledger.reporting.templates import EXPORT_HEADERS


def records_to_sheet_rows(records: Iterable[LedgerRecord]) -> List[Dict[str, Any]]:
    """Typed cell values for spreadsheet sinks (numbers stay numbers)."""

    rows = []
    for record in records:
        rows.append(
            {
                "ID": record.id,
                "Date": record.date,
                "Issuer": record.issuer_name,
                "TaxID": record.issuer_tax_id,
                "Total": round(record.gross_total, 2),
                "VAT": round(record.estimated_tax, 2),
                "Category": record.category.value,
                "TaxField": int(record.tax_field) if record.tax_field is not None else "",
                "Status": record.status.value,
            }
        )
    return rows


def push_to_google_sheets(
    rows: Iterable[Dict[str, Any]],
    spreadsheet_id: str,
    worksheet_title: str = "Sheet1",
    service_account_path: Path | None = None,
) -> None:
    """Upload rows to a Google Sheets worksheet using a service account."""

    rows = list(rows)
    if not rows:
        return

    try:
        import gspread
    except ImportError as exc:  # pragma: no cover - optional dependency
        raise ImportError("gspread is required for Google Sheets sinks") from exc

    client = (
        gspread.service_account(filename=str(service_account_path))
        if service_account_path
        else gspread.service_account()
    )
    worksheet = client.open_by_key(spreadsheet_id).worksheet(worksheet_title)
    worksheet.clear()
    worksheet.append_rows(
        [EXPORT_HEADERS] + [[row.get(h, "") for h in EXPORT_HEADERS] for row in rows]
    )


def write_excel(rows: Iterable[Dict[str, Any]], output_path: Path) -> None:
    """Write rows to an Excel workbook using openpyxl."""

    rows = list(rows)
    if not rows:
        return

    try:
        from openpyxl import Workbook
    except ImportError as exc:  # pragma: no cover - optional dependency
        raise ImportError("openpyxl is required for Excel sinks") from exc

    ensure_output_dir(output_path)
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "vat_ledger"
    sheet.append(EXPORT_HEADERS)
    for row in rows:
        sheet.append([row.get(header, "") for header in EXPORT_HEADERS])
    workbook.save(output_path)
