"""Review utilities for human-in-the-loop workflows."""
from vatledger.review.workflow import apply_edits, mark_status, records_to_rows

__all__ = ["apply_edits", "mark_status", "records_to_rows"]
