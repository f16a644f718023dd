"""Text recognition backends that turn invoice images into raw text.

The extraction pipeline only ever sees text. Anything that can read an image
plugs in through :class:`TextRecognizer`, which keeps Tesseract (or a test
double) out of the parsing code.
"""
from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import Callable, Optional, Protocol, Union

import pytesseract
from PIL import Image, UnidentifiedImageError

from vatledger.core.config import Settings, get_settings
from vatledger.core.errors import RecognitionError

logger = logging.getLogger(__name__)

ImageInput = Union[str, Path, bytes, Image.Image]
ProgressCallback = Callable[[str, float], None]

SUPPORTED_IMAGE_EXTENSIONS = {
    ".png", ".jpg", ".jpeg", ".jfif",
    ".tiff", ".tif", ".bmp", ".gif", ".webp",
}


class TextRecognizer(Protocol):
    """Anything that can read the text printed on an invoice image."""

    def recognize(self, image: ImageInput, progress: Optional[ProgressCallback] = None) -> str:
        ...


def _report(progress: Optional[ProgressCallback], status: str, fraction: float) -> None:
    if progress is not None:
        progress(status, fraction)


def _open_image(image: ImageInput) -> Image.Image:
    if isinstance(image, Image.Image):
        return image
    if isinstance(image, bytes):
        loaded = Image.open(BytesIO(image))
    else:
        loaded = Image.open(str(image))
    # Some formats are lazy-loaded; force the read while the source is open.
    loaded.load()
    return loaded


def _normalize_mode(image: Image.Image) -> Image.Image:
    """Flatten transparency and palettes into something Tesseract reads well."""

    if image.mode in ("RGB", "L", "1"):
        return image
    if image.mode == "RGBA":
        background = Image.new("RGB", image.size, (255, 255, 255))
        background.paste(image, mask=image.split()[3])
        return background
    return image.convert("RGB")


class TesseractRecognizer:
    """Recognize invoice text with the local Tesseract engine."""

    def __init__(self, settings: Settings | None = None, language: str | None = None) -> None:
        self.settings = settings or get_settings()
        self.language = language or self.settings.ocr_language
        if self.settings.tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = self.settings.tesseract_cmd

    def recognize(self, image: ImageInput, progress: Optional[ProgressCallback] = None) -> str:
        _report(progress, "loading image", 0.0)
        try:
            picture = _normalize_mode(_open_image(image))
        except (OSError, UnidentifiedImageError) as exc:
            raise RecognitionError(f"Could not open image: {exc}") from exc

        _report(progress, "recognizing text", 0.1)
        try:
            text = pytesseract.image_to_string(
                picture,
                lang=self.language,
                timeout=self.settings.ocr_timeout,
            )
        except pytesseract.TesseractNotFoundError as exc:
            raise RecognitionError(
                "Tesseract OCR is not installed or not found in PATH. "
                "Set TESSERACT_CMD to the tesseract binary."
            ) from exc
        except (pytesseract.TesseractError, RuntimeError) as exc:
            # pytesseract signals timeouts with RuntimeError.
            raise RecognitionError(f"OCR recognition failed: {exc}") from exc

        _report(progress, "done", 1.0)
        if not text.strip():
            logger.warning("OCR produced empty text; the image may be blank or unreadable")
        logger.debug("OCR result: %r", text)
        return text
