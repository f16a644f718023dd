"""Export destinations and overview aggregates for the ledger."""
from vatledger.reporting.csv_export import export_csv, export_filename, write_csv
from vatledger.reporting.sinks import push_to_google_sheets, records_to_sheet_rows, write_excel
from vatledger.reporting.summary import LedgerSummary, summarize_ledger

__all__ = [
    "LedgerSummary",
    "export_csv",
    "export_filename",
    "push_to_google_sheets",
    "records_to_sheet_rows",
    "summarize_ledger",
    "write_csv",
    "write_excel",
]
