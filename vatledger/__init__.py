"""VAT ledger bookkeeping from scanned invoices."""
from vatledger.core import (
    Category,
    LedgerRecord,
    Settings,
    Status,
    TaxField,
    configure_logging,
    get_settings,
)
from vatledger.ingestion import (
    ExtractedFields,
    TesseractRecognizer,
    TextRecognizer,
    extract_fields,
    get_ingestion_alerts,
    load_receipts,
)
from vatledger.ledger import LedgerStore
from vatledger.processing import (
    build_record,
    classify,
    estimate_vat,
    ingest_image,
    ingest_text,
    run_pipeline,
)
from vatledger.reporting import export_csv, summarize_ledger, write_csv
from vatledger.review import apply_edits, mark_status, records_to_rows

__all__ = [
    "Category",
    "ExtractedFields",
    "LedgerRecord",
    "LedgerStore",
    "Settings",
    "Status",
    "TaxField",
    "TesseractRecognizer",
    "TextRecognizer",
    "apply_edits",
    "build_record",
    "classify",
    "configure_logging",
    "estimate_vat",
    "export_csv",
    "extract_fields",
    "get_ingestion_alerts",
    "get_settings",
    "ingest_image",
    "ingest_text",
    "load_receipts",
    "mark_status",
    "records_to_rows",
    "run_pipeline",
    "summarize_ledger",
    "write_csv",
]
