"""Aggregate loader that turns a folder of scanned receipts into raw text."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from vatledger.core.errors import RecognitionError
from vatledger.core.utils import read_file
from vatledger.ingestion.ocr import (
    SUPPORTED_IMAGE_EXTENSIONS,
    ProgressCallback,
    TesseractRecognizer,
    TextRecognizer,
)

logger = logging.getLogger(__name__)

TEXT_EXTENSIONS = {".txt"}

_INGESTION_ALERTS: list[str] = []


@dataclass(frozen=True)
class RecognizedReceipt:
    source_name: str
    text: str


def _receipt_paths(data_dir: Path) -> List[Path]:
    if not data_dir.is_dir():
        return []
    supported = SUPPORTED_IMAGE_EXTENSIONS | TEXT_EXTENSIONS
    return sorted(path for path in data_dir.iterdir() if path.suffix.lower() in supported)


def load_receipts(
    data_dir: Path,
    recognizer: Optional[TextRecognizer] = None,
    progress: Optional[ProgressCallback] = None,
) -> List[RecognizedReceipt]:
    """Read every receipt under ``data_dir``.

    ``.txt`` files are treated as text that was already recognized; images go
    through ``recognizer`` (Tesseract unless another one is injected). A
    receipt that cannot be read is logged and reported through
    :func:`get_ingestion_alerts` without stopping the others.
    """

    global _INGESTION_ALERTS
    _INGESTION_ALERTS = []

    receipts: List[RecognizedReceipt] = []
    logger.info("Loading receipts from %s", data_dir)

    for path in _receipt_paths(data_dir):
        try:
            if path.suffix.lower() in TEXT_EXTENSIONS:
                text = read_file(path)
            else:
                if recognizer is None:
                    recognizer = TesseractRecognizer()
                text = recognizer.recognize(path, progress=progress)
        except (RecognitionError, OSError, UnicodeDecodeError):
            logger.exception("Failed to recognize receipt %s", path)
            _INGESTION_ALERTS.append(f"Failed to recognize receipt {path.name}")
            continue
        receipts.append(RecognizedReceipt(source_name=path.name, text=text))

    logger.info("Loaded %d receipts", len(receipts))
    return receipts


def get_ingestion_alerts() -> List[str]:
    """Return a copy of the alerts recorded during ``load_receipts``."""

    return list(_INGESTION_ALERTS)
