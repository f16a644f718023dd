"""Pattern rules that pull invoice fields out of raw OCR text.

Each field has its own named rule so it can be tested in isolation. Rules
never raise: a field that is not found comes back as ``None`` (or ``0.0`` for
the total), and the record builder decides how to fill the gap.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

# Nine ASCII digits not glued to another digit (letters may touch, e.g. "PT").
TAX_ID_RULE = re.compile(r"(?<!\d)\d{9}(?!\d)", re.ASCII)
DATE_RULE = re.compile(r"(\d{4}-\d{2}-\d{2})|(\d{2}[/-]\d{2}[/-]\d{4})", re.ASCII)
TOTAL_RULE = re.compile(r"Total[:\s]*([0-9]+[.,][0-9]{2})", re.IGNORECASE)
DOCUMENT_CODE_RULE = re.compile(r"AT[A-Z0-9]+-[0-9]+")

NAME_MAX_LENGTH = 50


@dataclass(frozen=True)
class ExtractedFields:
    """Partial result of field extraction; every field is independently optional."""

    tax_id: Optional[str] = None
    date: Optional[str] = None
    total: float = 0.0
    document_code: Optional[str] = None
    name: Optional[str] = None


def extract_tax_id(text: str) -> Optional[str]:
    match = TAX_ID_RULE.search(text)
    return match.group(0) if match else None


def extract_date(text: str) -> Optional[str]:
    """Return the first date-looking token with ``/`` separators turned into ``-``.

    Day/month values are not checked against the calendar; ``99-99-9999`` is
    returned as-is.
    """

    match = DATE_RULE.search(text)
    return match.group(0).replace("/", "-") if match else None


def extract_total(text: str) -> float:
    """Parse the amount that follows the first ``Total`` label, or ``0.0``."""

    match = TOTAL_RULE.search(text)
    if not match:
        return 0.0
    return float(match.group(1).replace(",", "."))


def extract_document_code(text: str) -> Optional[str]:
    match = DOCUMENT_CODE_RULE.search(text)
    return match.group(0) if match else None


def extract_name(text: str) -> Optional[str]:
    """Use the first non-blank line as the issuer name."""

    for line in text.split("\n"):
        if line.strip():
            return line[:NAME_MAX_LENGTH].strip()
    return None


def extract_fields(text: str) -> ExtractedFields:
    """Run every field rule over the text."""

    return ExtractedFields(
        tax_id=extract_tax_id(text),
        date=extract_date(text),
        total=extract_total(text),
        document_code=extract_document_code(text),
        name=extract_name(text),
    )
