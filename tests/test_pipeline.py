"""
Tests for the end-to-end intake pipeline and the command-line entry point.
"""

import json

import pytest

from invoice_intake.input_handler import AcquiredText, InputHandler
from invoice_intake.output_handler import InvoiceStore
from invoice_intake.pipeline import IntakePipeline
from invoice_intake.utils.exceptions import CorruptedFileError, FileNotFoundError
from main import main, run_intake


class FakePDFProcessor:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error

    def extract_text(self, source, name=None):
        if self.error:
            raise self.error
        return AcquiredText(text=self.text, page_count=1, used_ocr=True)


@pytest.fixture
def store(store_path):
    return InvoiceStore(store_path)


def test_process_text_without_store(sample_text):
    outcome = IntakePipeline(store=None).process_text(sample_text, filename="acme.pdf")

    assert outcome.success
    assert outcome.parsed.invoice_number == "INV-1003"
    assert outcome.form.amount == "435.00"
    assert outcome.form.status == "Parsed ✓ acme.pdf"
    assert outcome.record_id is None


def test_process_file_stores_record(sample_txt_file, store):
    outcome = IntakePipeline(store=store).process_file(sample_txt_file)

    assert outcome.record_id is not None
    assert store.count() == 1
    stored = store.all()[0]
    assert stored['source_file'] == "acme.txt"
    assert stored['invoice']['vendor'] == "Acme Supply Co"


def test_scanned_pdf_upload(sample_text, store):
    handler = InputHandler(pdf_processor=FakePDFProcessor(text=sample_text))
    outcome = IntakePipeline(input_handler=handler, store=store).process_bytes(b"%PDF", "scan.pdf")

    assert outcome.input.used_ocr is True
    assert outcome.parsed.due_date == "2024-04-13"
    assert store.count() == 1


def test_unreadable_document_is_not_stored(store):
    handler = InputHandler(pdf_processor=FakePDFProcessor(error=CorruptedFileError("x.pdf", "bad")))
    outcome = IntakePipeline(input_handler=handler, store=store).process_bytes(b"%PDF", "x.pdf")

    assert not outcome.success
    assert outcome.parsed.is_empty()
    assert outcome.form.amount == "0.00"
    assert outcome.record_id is None
    assert store.count() == 0


def test_process_directory(tmp_path, sample_txt_file):
    (tmp_path / "second.txt").write_text("Globex\nInvoice #77\nTotal: $9.00", encoding="utf-8")

    outcomes = IntakePipeline(store=None).process(tmp_path)

    assert [o.parsed.invoice_number for o in outcomes] == ["INV-1003", "77"]


def test_process_missing_path(tmp_path):
    with pytest.raises(FileNotFoundError):
        IntakePipeline(store=None).process(tmp_path / "missing")


def test_outcome_to_dict(sample_text):
    data = IntakePipeline(store=None).process_text(sample_text, filename="acme.pdf").to_dict()

    assert data['source_file'] == "acme.pdf"
    assert data['success'] is True
    assert data['invoice']['amount_due'] == "$435.00"
    assert data['form']['status'] == "Parsed ✓ acme.pdf"
    json.dumps(data)


def test_run_intake_writes_results(tmp_path, sample_txt_file, store_path):
    output = tmp_path / "out" / "results.json"

    results = run_intake(str(sample_txt_file), output_path=str(output), store_path=store_path)

    assert results[0]['invoice']['invoice_number'] == "INV-1003"
    assert json.loads(output.read_text(encoding="utf-8")) == results
    assert InvoiceStore(store_path).count() == 1


def test_run_intake_without_store(sample_txt_file, store_path):
    run_intake(str(sample_txt_file), store=False, store_path=store_path)

    assert InvoiceStore(store_path).count() == 0


def test_cli_list_and_clear(sample_txt_file, store_path, capsys):
    assert main(["--input", str(sample_txt_file), "--store-path", store_path, "--quiet"]) == 0
    printed = json.loads(capsys.readouterr().out)
    assert printed[0]['vendor'] == "Acme Supply Co"

    assert main(["--list", "--store-path", store_path, "--quiet"]) == 0
    listed = json.loads(capsys.readouterr().out)
    assert listed[0]['invoice']['invoice_number'] == "INV-1003"

    assert main(["--clear", "--store-path", store_path, "--quiet"]) == 0
    assert InvoiceStore(store_path).count() == 0


def test_cli_missing_input(tmp_path, capsys):
    assert main(["--input", str(tmp_path / "missing.pdf"), "--no-store", "--quiet"]) == 1
    assert "File not found" in capsys.readouterr().err


def test_cli_requires_an_action():
    with pytest.raises(SystemExit):
        main([])
