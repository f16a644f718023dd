"""Assemble extracted fields, VAT estimate and classification into a ledger record."""
from __future__ import annotations

import logging
import random
import re
import uuid
from datetime import date as date_type
from typing import Optional

from vatledger.core.config import Settings, get_settings
from vatledger.core.models import LedgerRecord, Status
from vatledger.ingestion.fields import extract_fields
from vatledger.processing.classifier import classify
from vatledger.processing.vat import estimate_vat

logger = logging.getLogger(__name__)

UNKNOWN_TAX_ID = "999999990"
UNKNOWN_ISSUER = "Unknown (OCR)"
DOCUMENT_CODE_PREFIX = "AT-OCR-"
REVIEW_NOTE = (
    "Data extracted via OCR. Manual review required to confirm amounts and category."
)
SUMMARY_LENGTH = 100

_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-\d{2}$")
_DAY_FIRST_DATE = re.compile(r"^\d{2}-(\d{2})-(\d{4})$")


def fiscal_period(raw_date: str, fallback: date_type) -> str:
    """Return the ``Q<n>_<year>`` label for a date string.

    Extracted dates are not calendar-checked, so anything without a real
    month (1-12) falls back to the quarter of ``fallback``.
    """

    year = month = None
    iso = _ISO_DATE.match(raw_date)
    day_first = _DAY_FIRST_DATE.match(raw_date)
    if iso:
        year, month = int(iso.group(1)), int(iso.group(2))
    elif day_first:
        month, year = int(day_first.group(1)), int(day_first.group(2))

    if month is None or not 1 <= month <= 12:
        year, month = fallback.year, fallback.month
    return f"Q{(month - 1) // 3 + 1}_{year}"


def summarize_text(text: str) -> str:
    return text[:SUMMARY_LENGTH].replace("\n", " ") + "..."


def build_record(
    text: str,
    today: Optional[date_type] = None,
    sequence: Optional[int] = None,
    settings: Optional[Settings] = None,
    rng: Optional[random.Random] = None,
) -> LedgerRecord:
    """Turn raw OCR text into a ledger record awaiting human review.

    Never raises for bad input: missing fields become placeholders, and the
    fixed low confidence plus ``NEEDS_REVIEW`` status flag the result.
    ``sequence`` only feeds the record id; without it a random id is used.
    """

    settings = settings or get_settings()
    today = today or date_type.today()
    rng = rng or random

    fields = extract_fields(text)
    classification = classify(text)
    record_date = fields.date or today.isoformat()

    missing = [
        name
        for name, value in (
            ("tax id", fields.tax_id),
            ("issuer name", fields.name),
            ("date", fields.date),
            ("document code", fields.document_code),
        )
        if value is None
    ]
    if missing:
        logger.info("OCR text lacks %s; using placeholders", ", ".join(missing))

    return LedgerRecord(
        id=f"100{sequence}" if sequence is not None else uuid.uuid4().hex,
        issuer_tax_id=fields.tax_id or UNKNOWN_TAX_ID,
        issuer_name=fields.name or UNKNOWN_ISSUER,
        date=record_date,
        gross_total=fields.total,
        estimated_tax=estimate_vat(fields.total, rate=settings.vat_rate),
        document_code=fields.document_code
        or f"{DOCUMENT_CODE_PREFIX}{rng.randrange(1000)}",
        status=Status.NEEDS_REVIEW,
        category=classification.category,
        tax_field=classification.tax_field,
        confidence=settings.ocr_confidence,
        justification=f"{REVIEW_NOTE} {classification.justification}",
        items_summary=summarize_text(text),
        period=fiscal_period(record_date, today),
    )
