"""Semicolon-separated ledger export that spreadsheets open without an import wizard."""
from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Iterable

from vatledger.core.models import LedgerRecord
from vatledger.reporting.templates import EXPORT_HEADERS, records_to_export_rows

logger = logging.getLogger(__name__)

BOM = "\ufeff"
DELIMITER = ";"


def ensure_output_dir(output_path: Path) -> None:
    """Create the parent directory for the output file when missing."""

    output_path.parent.mkdir(parents=True, exist_ok=True)


def export_csv(records: Iterable[LedgerRecord]) -> str:
    """Render records as the ledger CSV text.

    The issuer column is always quoted and every other column is written
    raw; the BOM lets Excel detect UTF-8. Output must stay byte-for-byte
    stable for existing exports.
    """

    lines = [DELIMITER.join(EXPORT_HEADERS)]
    for row in records_to_export_rows(records):
        lines.append(DELIMITER.join(row[header] for header in EXPORT_HEADERS))
    return BOM + "\n".join(lines)


def export_filename(today: date | None = None) -> str:
    return f"vat_ledger_export_{(today or date.today()).isoformat()}.csv"


def write_csv(records: Iterable[LedgerRecord], output_path: Path) -> Path:
    """Write the ledger CSV to disk and return its path."""

    ensure_output_dir(output_path)
    content = export_csv(records)
    # newline="" keeps "\n" separators identical on every platform.
    with output_path.open("w", encoding="utf-8", newline="") as handle:
        handle.write(content)
    logger.info("Wrote CSV output to %s", output_path)
    return output_path
