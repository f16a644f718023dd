"""Estimation, classification and record assembly."""
from vatledger.processing.builder import build_record
from vatledger.processing.classifier import CLASSIFICATION_RULES, Classification, classify
from vatledger.processing.pipeline import ingest_image, ingest_text, run_pipeline
from vatledger.processing.vat import estimate_vat

__all__ = [
    "CLASSIFICATION_RULES",
    "Classification",
    "build_record",
    "classify",
    "estimate_vat",
    "ingest_image",
    "ingest_text",
    "run_pipeline",
]
