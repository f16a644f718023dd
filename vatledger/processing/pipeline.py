"""Pipeline orchestration: receipts in, reviewed-ready ledger and exports out."""
from __future__ import annotations

import logging
import os
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional

from vatledger.core.config import Settings
from vatledger.core.models import LedgerRecord
from vatledger.ingestion.loader import load_receipts
from vatledger.ingestion.ocr import ProgressCallback, TextRecognizer
from vatledger.ledger.store import LedgerStore
from vatledger.processing.builder import build_record
from vatledger.reporting.csv_export import write_csv
from vatledger.reporting.sinks import push_to_google_sheets, records_to_sheet_rows, write_excel

DEFAULT_SERVICE_ACCOUNT_PATHS = [
    Path("secrets/service_account.json"),
    Path("credentials/service_account.json"),
]

logger = logging.getLogger(__name__)


def ingest_text(
    store: LedgerStore,
    text: str,
    today: Optional[date] = None,
    settings: Optional[Settings] = None,
) -> LedgerRecord:
    """Build a record from recognized text and add it to the ledger."""

    record = build_record(
        text,
        today=today,
        sequence=store.next_sequence(),
        settings=settings,
    )
    return store.append(record)


def ingest_image(
    store: LedgerStore,
    image: Any,
    recognizer: TextRecognizer,
    today: Optional[date] = None,
    settings: Optional[Settings] = None,
    progress: Optional[ProgressCallback] = None,
) -> LedgerRecord:
    """Recognize an invoice image and book the result for review.

    Recognition failures propagate as ``RecognitionError`` before anything is
    added to the ledger.
    """

    text = recognizer.recognize(image, progress=progress)
    return ingest_text(store, text, today=today, settings=settings)


def _default_service_account_path() -> Optional[Path]:
    for candidate in DEFAULT_SERVICE_ACCOUNT_PATHS:
        if candidate.exists():
            return candidate
    return None


def _resolve_sheets_target(
    spreadsheet_id: Optional[str],
    worksheet_title: str,
    explicit_account_path: Optional[Path],
) -> Dict[str, Any]:
    spreadsheet_id = spreadsheet_id or os.getenv("GOOGLE_SHEETS_SPREADSHEET_ID")
    if not spreadsheet_id:
        raise ValueError("spreadsheet_id is required when sink='sheets'")

    account_path = explicit_account_path or _default_service_account_path()
    if not account_path:
        raise ValueError(
            "Provide --service-account pointing to your Google credentials or place a file at "
            f"{DEFAULT_SERVICE_ACCOUNT_PATHS[0]}"
        )

    return {
        "spreadsheet_id": spreadsheet_id,
        "worksheet_title": worksheet_title,
        "service_account_path": account_path,
    }


def run_pipeline(
    data_dir: Path,
    output_path: Path,
    sink: str = "csv",
    status_filter: str = "all",
    search: str = "",
    recognizer: Optional[TextRecognizer] = None,
    today: Optional[date] = None,
    settings: Optional[Settings] = None,
    spreadsheet_id: str | None = None,
    worksheet_title: str = "Sheet1",
    service_account_path: Path | None = None,
    excel_path: Path | None = None,
) -> LedgerStore:
    """Load receipts, book them for review, and export the filtered ledger."""

    logger.info("Pipeline starting for data dir %s", data_dir)
    receipts = load_receipts(data_dir, recognizer=recognizer)
    if not receipts:
        message = (
            f"No receipts found under {data_dir}. "
            "Verify the directory exists and includes images or .txt OCR dumps."
        )
        logger.error(message)
        raise ValueError(message)

    store = LedgerStore()
    for receipt in receipts:
        record = ingest_text(store, receipt.text, today=today, settings=settings)
        logger.debug("Booked %s as record %s", receipt.source_name, record.id)
    logger.info("Booked %d records, %d pending review", len(store), store.pending_count())

    records = store.query(status_filter=status_filter, search=search)
    write_csv(records, output_path)

    if sink == "excel":
        excel_target = excel_path or output_path.with_suffix(".xlsx")
        write_excel(records_to_sheet_rows(records), excel_target)
        logger.info("Wrote Excel output to %s", excel_target)
    elif sink == "sheets":
        target = _resolve_sheets_target(
            spreadsheet_id=spreadsheet_id,
            worksheet_title=worksheet_title,
            explicit_account_path=service_account_path,
        )
        rows = records_to_sheet_rows(records)
        push_to_google_sheets(rows, **target)
        logger.info(
            "Pushed %d rows to Google Sheets document %s (worksheet %s)",
            len(rows),
            target["spreadsheet_id"],
            target["worksheet_title"],
        )
    return store
