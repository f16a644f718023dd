"""Integration-style tests that exercise the CLI pipeline entrypoint."""
import sys
from pathlib import Path

import pytest
from openpyxl import load_workbook

from vatledger.processing import pipeline
from vatledger.reporting.csv_export import export_filename


@pytest.fixture(autouse=True)
def _reset_argv(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure sys.argv starts clean for each CLI invocation."""

    monkeypatch.setattr(sys, "argv", ["vatledger.cli"])


def test_cli_writes_csv_output(tmp_path: Path, receipts_dir: Path, run_cli, capsys) -> None:
    csv_output = tmp_path / "ledger.csv"

    run_cli(["--data-dir", str(receipts_dir), "--output", str(csv_output)])

    lines = csv_output.read_text(encoding="utf-8-sig").split("\n")
    assert len(lines) == 1 + 5
    assert "5 records, 5 pending review" in capsys.readouterr().out


def test_cli_defaults_to_dated_export_name(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, receipts_dir: Path, run_cli
) -> None:
    monkeypatch.chdir(tmp_path)

    run_cli(["--data-dir", str(receipts_dir)])

    assert (tmp_path / "output" / export_filename()).exists()


def test_cli_status_filter(tmp_path: Path, receipts_dir: Path, run_cli) -> None:
    csv_output = tmp_path / "ledger.csv"

    run_cli(
        ["--data-dir", str(receipts_dir), "--output", str(csv_output), "--status", "pending", "--search", "Worten"]
    )

    lines = csv_output.read_text(encoding="utf-8-sig").split("\n")
    assert len(lines) == 2
    assert '"Worten - Equipamentos"' in lines[1]


def test_cli_writes_excel_output(tmp_path: Path, receipts_dir: Path, run_cli) -> None:
    csv_output = tmp_path / "ledger.csv"
    excel_output = tmp_path / "ledger.xlsx"

    run_cli(
        [
            "--data-dir",
            str(receipts_dir),
            "--output",
            str(csv_output),
            "--sink",
            "excel",
            "--excel-output",
            str(excel_output),
        ]
    )

    sheet = load_workbook(excel_output).active
    assert sheet.title == "vat_ledger"
    assert sheet.max_row - 1 == 5


def test_cli_sheets_sink_uses_pipeline(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    receipts_dir: Path,
    fake_service_account_file: Path,
    run_cli,
) -> None:
    csv_output = tmp_path / "ledger.csv"
    captured: dict = {"rows": None}

    def fake_push(rows, **kwargs):
        captured["rows"] = list(rows)
        captured.update(kwargs)

    monkeypatch.setattr(pipeline, "push_to_google_sheets", fake_push)

    run_cli(
        [
            "--data-dir",
            str(receipts_dir),
            "--output",
            str(csv_output),
            "--sink",
            "sheets",
            "--spreadsheet-id",
            "dummy",
            "--service-account",
            str(fake_service_account_file),
        ]
    )

    assert len(captured["rows"] or []) == 5
    assert captured["spreadsheet_id"] == "dummy"
    assert captured["service_account_path"] == fake_service_account_file
