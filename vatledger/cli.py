"""Simple CLI to book a folder of scanned receipts and export the ledger."""
import argparse
from dataclasses import replace
from pathlib import Path

from vatledger.core.config import get_settings
from vatledger.core.logging import configure_logging
from vatledger.ingestion.loader import get_ingestion_alerts
from vatledger.ingestion.ocr import TesseractRecognizer
from vatledger.ledger.store import STATUS_FILTERS
from vatledger.processing.pipeline import run_pipeline
from vatledger.reporting.csv_export import export_filename
from vatledger.reporting.summary import summarize_ledger


def build_parser() -> argparse.ArgumentParser:
    """Create a small argument parser for the CLI entry point."""

    parser = argparse.ArgumentParser(description="Extract VAT ledger records from scanned invoices")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=Path("dummy_data/receipts"),
        help="Folder with invoice images or .txt OCR dumps",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="CSV file to write the ledger export to (default: output/vat_ledger_export_<date>.csv)",
    )
    parser.add_argument(
        "--sink",
        choices=["csv", "sheets", "excel"],
        default="csv",
        help="Where to forward ledger rows after writing the CSV",
    )
    parser.add_argument(
        "--status",
        choices=STATUS_FILTERS,
        default="all",
        help="Only export records in this review state",
    )
    parser.add_argument(
        "--search",
        default="",
        help="Only export records whose issuer, tax ID or document code contains this text",
    )
    parser.add_argument(
        "--lang",
        help="Tesseract language code (defaults to TESSERACT_LANG or 'por')",
    )
    parser.add_argument(
        "--spreadsheet-id",
        help="Google Sheets spreadsheet ID for the sheets sink",
    )
    parser.add_argument(
        "--worksheet",
        default="Sheet1",
        help="Worksheet title inside the Google Sheets document",
    )
    parser.add_argument(
        "--service-account",
        type=Path,
        help="Path to a Google service account JSON key used for Sheets pushes",
    )
    parser.add_argument(
        "--excel-output",
        type=Path,
        default=Path("output/vat_ledger.xlsx"),
        help="Excel file to write when --sink=excel",
    )
    return parser


def main() -> None:
    """Entrypoint for running the pipeline from the command line."""

    configure_logging()
    args = build_parser().parse_args()
    if args.output is None:
        args.output = Path("output") / export_filename()
    settings = get_settings()
    if args.lang:
        settings = replace(settings, ocr_language=args.lang)

    store = run_pipeline(
        args.data_dir,
        args.output,
        sink=args.sink,
        status_filter=args.status,
        search=args.search,
        recognizer=TesseractRecognizer(settings),
        settings=settings,
        spreadsheet_id=args.spreadsheet_id,
        worksheet_title=args.worksheet,
        service_account_path=args.service_account,
        excel_path=args.excel_output,
    )
    summary = summarize_ledger(store.records())
    for alert in get_ingestion_alerts():
        print(f"Warning: {alert}")
    print(
        f"Wrote {args.output}: {summary.total_documents} records, "
        f"{summary.pending_review} pending review, "
        f"deductible VAT {summary.deductible_vat:.2f}"
    )


if __name__ == "__main__":
    main()
