"""End-to-end runs from a folder of receipts to the exported ledger."""
from datetime import date
from pathlib import Path

import pytest

import vatledger.ingestion.loader as loader
import vatledger.processing.pipeline as pipeline
from vatledger.core.errors import RecognitionError
from vatledger.core.models import Category, Status, TaxField
from vatledger.ingestion.loader import get_ingestion_alerts, load_receipts
from vatledger.processing.pipeline import run_pipeline

TODAY = date(2025, 4, 10)
HEADER = "ID;Date;Issuer;TaxID;Total;VAT;Category;TaxField;Status"


def _read_rows(path: Path) -> list[list[str]]:
    lines = path.read_text(encoding="utf-8-sig").split("\n")
    assert lines[0] == HEADER
    return [line.split(";") for line in lines[1:]]


def test_load_receipts_reads_text_dumps(receipts_dir: Path, fake_recognizer):
    receipts = load_receipts(receipts_dir, recognizer=fake_recognizer)

    assert [receipt.source_name for receipt in receipts] == sorted(
        path.name for path in receipts_dir.glob("*.txt")
    )
    assert fake_recognizer.calls == []
    assert receipts[0].text.startswith("Restaurante Sol")


def test_load_receipts_recognizes_images(tmp_path: Path, fake_recognizer):
    (tmp_path / "scan.png").write_bytes(b"\x89PNG fake")
    (tmp_path / "notes.md").write_text("ignored", encoding="utf-8")
    fake_recognizer.texts = {"scan.png": "Galp\nTotal 10,00"}

    receipts = load_receipts(tmp_path, recognizer=fake_recognizer)

    assert [receipt.text for receipt in receipts] == ["Galp\nTotal 10,00"]
    assert len(fake_recognizer.calls) == 1


def test_load_receipts_logs_and_continues(tmp_path: Path, caplog):
    """Recognition failures are logged and reported without stopping the run."""

    (tmp_path / "bad.jpg").write_bytes(b"broken")
    (tmp_path / "good.txt").write_text("Worten\nTotal: 5,00", encoding="utf-8")

    class FailingRecognizer:
        def recognize(self, image, progress=None):
            raise RecognitionError("unreadable")

    caplog.set_level("ERROR")
    receipts = load_receipts(tmp_path, recognizer=FailingRecognizer())

    assert [receipt.source_name for receipt in receipts] == ["good.txt"]
    assert "bad.jpg" in caplog.text
    assert get_ingestion_alerts() == ["Failed to recognize receipt bad.jpg"]


def test_run_pipeline_books_sample_receipts(tmp_path: Path, receipts_dir: Path, fake_recognizer):
    output_path = tmp_path / "ledger.csv"

    store = run_pipeline(receipts_dir, output_path, recognizer=fake_recognizer, today=TODAY)

    records = {record.issuer_name: record for record in store.records()}
    assert len(records) == 5
    assert all(record.status == Status.NEEDS_REVIEW for record in records.values())

    restaurant = records["Restaurante Sol"]
    assert restaurant.category == Category.PERSONAL
    assert restaurant.issuer_tax_id == "501234567"
    assert restaurant.document_code == "AT1234X-99"
    assert restaurant.period == "Q1_2025"

    fuel = records["GALP Energia"]
    assert fuel.date == "03-01-2025"
    assert fuel.gross_total == pytest.approx(61.50)
    assert fuel.tax_field == TaxField.OTHER_GOODS_SERVICES

    assert records["Worten - Equipamentos"].tax_field == TaxField.FIXED_ASSETS
    assert records["Worten - Equipamentos"].period == "Q2_2025"

    unknown = records["Mercearia Central"]
    assert unknown.category == Category.UNDETERMINED
    assert unknown.issuer_tax_id == "999999990"
    assert unknown.date == "2025-04-10"

    rows = _read_rows(output_path)
    assert len(rows) == 5
    office = next(row for row in rows if row[2] == '"Staples Portugal, S.A."')
    assert office[4:] == ["30,00", "5,61", "BUSINESS", "23", "NEEDS_REVIEW"]


def test_run_pipeline_applies_filters(tmp_path: Path, receipts_dir: Path, fake_recognizer):
    output_path = tmp_path / "ledger.csv"

    run_pipeline(
        receipts_dir,
        output_path,
        search="galp",
        recognizer=fake_recognizer,
        today=TODAY,
    )
    rows = _read_rows(output_path)
    assert [row[2] for row in rows] == ['"GALP Energia"']

    run_pipeline(receipts_dir, output_path, status_filter="approved", today=TODAY)
    assert output_path.read_text(encoding="utf-8-sig") == HEADER


def test_run_pipeline_errors_when_no_receipts(tmp_path: Path) -> None:
    missing_dir = tmp_path / "missing"
    output_path = tmp_path / "ledger.csv"

    with pytest.raises(ValueError, match="No receipts found"):
        run_pipeline(missing_dir, output_path)

    assert not output_path.exists()


def test_run_pipeline_logs_summary(tmp_path: Path, receipts_dir: Path, caplog):
    caplog.set_level("INFO")

    run_pipeline(receipts_dir, tmp_path / "ledger.csv", today=TODAY)

    assert any("Wrote CSV output" in message for message in caplog.messages)
    assert any("5 pending review" in message for message in caplog.messages)


def test_sheets_sink_requires_spreadsheet(tmp_path: Path, receipts_dir: Path, monkeypatch):
    monkeypatch.delenv("GOOGLE_SHEETS_SPREADSHEET_ID", raising=False)
    with pytest.raises(ValueError, match="spreadsheet_id"):
        run_pipeline(receipts_dir, tmp_path / "ledger.csv", sink="sheets", today=TODAY)


def test_loader_module_keeps_alerts_per_run(tmp_path: Path, receipts_dir: Path):
    (tmp_path / "broken.txt").write_bytes(b"\xff\xfe\xfa")
    load_receipts(tmp_path)
    assert loader.get_ingestion_alerts() == ["Failed to recognize receipt broken.txt"]

    load_receipts(receipts_dir)
    assert loader.get_ingestion_alerts() == []
    assert pipeline.load_receipts is loader.load_receipts
