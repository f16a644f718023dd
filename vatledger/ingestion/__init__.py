"""Turning invoice images and OCR text into extracted fields."""
from vatledger.ingestion.fields import ExtractedFields, extract_fields
from vatledger.ingestion.loader import RecognizedReceipt, get_ingestion_alerts, load_receipts
from vatledger.ingestion.ocr import TesseractRecognizer, TextRecognizer

__all__ = [
    "ExtractedFields",
    "RecognizedReceipt",
    "TesseractRecognizer",
    "TextRecognizer",
    "extract_fields",
    "get_ingestion_alerts",
    "load_receipts",
]
