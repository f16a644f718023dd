"""In-memory ledger of records awaiting review or already booked."""
from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, Iterable, List, Optional

from vatledger.core.models import LedgerRecord, Status

logger = logging.getLogger(__name__)

STATUS_FILTERS = ("all", "pending", "approved")


def matches_filters(record: LedgerRecord, status_filter: str = "all", search: str = "") -> bool:
    """Apply the ledger's search box and status dropdown to one record."""

    term = search.lower()
    matches_search = (
        term in record.issuer_name.lower()
        or search in record.issuer_tax_id
        or term in record.document_code.lower()
    )
    if status_filter == "pending":
        return matches_search and record.is_pending
    if status_filter == "approved":
        return matches_search and record.status == Status.APPROVED
    return matches_search


class LedgerStore:
    """Thread-safe collection of ledger records, newest first.

    Appends only take the store lock. Updates also take a lock per record id
    so two edits of the same record apply one after the other.
    """

    def __init__(self, records: Iterable[LedgerRecord] = ()) -> None:
        self._lock = threading.Lock()
        self._record_locks: Dict[str, threading.Lock] = {}
        self._records: List[LedgerRecord] = []
        self._sequence = 0
        for record in records:
            self.append(record)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def next_sequence(self) -> int:
        """Reserve the sequence number for the next record id.

        Each call hands out a new number, so concurrent callers never share one.
        """

        with self._lock:
            self._sequence = max(self._sequence, len(self._records)) + 1
            return self._sequence

    def append(self, record: LedgerRecord) -> LedgerRecord:
        with self._lock:
            if any(existing.id == record.id for existing in self._records):
                raise ValueError(f"Record {record.id} is already in the ledger")
            self._records.insert(0, record)
        logger.info("Added record %s (%s) to the ledger", record.id, record.issuer_name)
        return record

    def get(self, record_id: str) -> LedgerRecord:
        with self._lock:
            for record in self._records:
                if record.id == record_id:
                    return record
        raise KeyError(record_id)

    def update(
        self, record_id: str, change: Callable[[LedgerRecord], LedgerRecord]
    ) -> LedgerRecord:
        """Replace a record with ``change(current)`` under its identity lock."""

        self.get(record_id)
        with self._lock:
            record_lock = self._record_locks.setdefault(record_id, threading.Lock())
        with record_lock:
            current = self.get(record_id)
            updated = change(current)
            if updated.id != record_id:
                raise ValueError("An update cannot change the record id")
            with self._lock:
                index = next(i for i, rec in enumerate(self._records) if rec.id == record_id)
                self._records[index] = updated
        logger.info("Updated record %s (status %s)", record_id, updated.status.value)
        return updated

    def records(self) -> List[LedgerRecord]:
        with self._lock:
            return list(self._records)

    def query(self, status_filter: str = "all", search: Optional[str] = None) -> List[LedgerRecord]:
        """Return records matching the status filter and search term."""

        if status_filter not in STATUS_FILTERS:
            raise ValueError(
                f"Unknown status filter {status_filter!r}; expected one of {', '.join(STATUS_FILTERS)}"
            )
        return [
            record
            for record in self.records()
            if matches_filters(record, status_filter, search or "")
        ]

    def pending_count(self) -> int:
        return sum(1 for record in self.records() if record.is_pending)
