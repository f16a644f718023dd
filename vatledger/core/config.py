"""Runtime settings for extraction heuristics and the OCR engine."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from vatledger.core.utils import get_config_value, load_env_file

logger = logging.getLogger(__name__)

DEFAULT_ENV_FILE = Path("secrets/vatledger.env")

# Share of VAT inside a gross amount. A rough proxy, not a statutory rate.
VAT_ESTIMATE_RATE = 0.187
# Reliability assigned to unverified OCR extraction.
OCR_CONFIDENCE = 0.65


def _float_value(key: str, default: float) -> float:
    raw = get_config_value(key)
    if not raw:
        return default
    try:
        return float(raw.replace(",", "."))
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r, using %s", key, raw, default)
        return default


@dataclass(frozen=True)
class Settings:
    """Tunable constants for the extraction pipeline and recognizer."""

    vat_rate: float = VAT_ESTIMATE_RATE
    ocr_confidence: float = OCR_CONFIDENCE
    ocr_language: str = "por"
    tesseract_cmd: Optional[str] = None
    ocr_timeout: float = 0

    def __post_init__(self) -> None:
        if not 0 <= self.ocr_confidence <= 1:
            raise ValueError("ocr_confidence must be within [0, 1]")
        if self.vat_rate < 0:
            raise ValueError("vat_rate must be non-negative")

    @classmethod
    def from_env(cls, env_file: Path | None = None) -> "Settings":
        """Build settings from environment variables and an optional env file."""

        load_env_file(env_file or Path(os.getenv("VATLEDGER_ENV_FILE", DEFAULT_ENV_FILE)))
        return cls(
            vat_rate=_float_value("VAT_ESTIMATE_RATE", VAT_ESTIMATE_RATE),
            ocr_confidence=_float_value("OCR_CONFIDENCE", OCR_CONFIDENCE),
            ocr_language=get_config_value("TESSERACT_LANG", "por"),
            tesseract_cmd=get_config_value("TESSERACT_CMD") or None,
            ocr_timeout=_float_value("TESSERACT_TIMEOUT", 0),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return process-wide settings, read once from the environment."""

    return Settings.from_env()
