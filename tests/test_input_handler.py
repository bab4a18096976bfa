"""
Tests for text acquisition from uploaded documents.

PDF parsing and OCR are replaced with fakes so that the tests do not
depend on real PDF files or a Tesseract install.
"""

import pytest
from PIL import Image

from invoice_intake.input_handler import AcquiredText, InputHandler, PDFProcessor
from invoice_intake.ocr_engine import OCREngine
from invoice_intake.utils.exceptions import (
    CorruptedFileError,
    FileNotFoundError,
    UnsupportedFileTypeError,
)


class FakePDFProcessor:
    """Stands in for PDFProcessor and records what it was asked to read"""

    def __init__(self, text="Acme\nInvoice #1\nTotal: $5.00", used_ocr=False, error=None):
        self.text = text
        self.used_ocr = used_ocr
        self.error = error
        self.calls = []

    def extract_text(self, source, name=None):
        self.calls.append((source, name))
        if self.error:
            raise self.error
        return AcquiredText(text=self.text, page_count=1, used_ocr=self.used_ocr)


class FakeBackend:
    def __init__(self, text="Scanned Invoice   #42"):
        self.text = text

    def extract_text(self, image):
        return self.text


@pytest.fixture
def pdf_file(tmp_path):
    path = tmp_path / "scan.pdf"
    path.write_bytes(b"%PDF-1.4 placeholder")
    return path


def test_detect_file_type():
    handler = InputHandler()

    assert handler.detect_file_type("a.PDF") == "pdf"
    assert handler.detect_file_type("a.txt") == "text"
    with pytest.raises(UnsupportedFileTypeError):
        handler.detect_file_type("a.docx")


def test_validate_file_errors(tmp_path):
    handler = InputHandler()
    empty = tmp_path / "empty.pdf"
    empty.write_bytes(b"")

    with pytest.raises(FileNotFoundError):
        handler.validate_file(tmp_path / "missing.pdf")
    with pytest.raises(CorruptedFileError):
        handler.validate_file(empty)


def test_text_file_is_read_and_normalized(tmp_path):
    path = tmp_path / "dump.txt"
    path.write_text("Acme Supply   Co\n\nInvoice #1\n", encoding="utf-8")

    result = InputHandler().load(path)

    assert result.success
    assert result.file_type == "text"
    assert result.filename == "dump.txt"
    assert result.text == "Acme Supply Co\nInvoice #1"


def test_pdf_goes_through_processor(pdf_file):
    processor = FakePDFProcessor(used_ocr=True)
    result = InputHandler(pdf_processor=processor).load(pdf_file)

    assert result.success
    assert result.file_type == "pdf"
    assert result.used_ocr is True
    assert result.text == processor.text
    assert processor.calls[0][1] == "scan.pdf"


def test_failures_are_reported_not_raised(tmp_path, pdf_file):
    handler = InputHandler(pdf_processor=FakePDFProcessor(error=CorruptedFileError("scan.pdf", "bad xref")))

    missing = handler.load(tmp_path / "missing.pdf")
    corrupted = handler.load(pdf_file)
    unsupported = handler.load_bytes(b"data", "notes.docx")

    assert not missing.success
    assert not corrupted.success
    assert "bad xref" in corrupted.error
    assert not unsupported.success
    assert corrupted.text == ""


def test_load_bytes(pdf_file):
    processor = FakePDFProcessor()
    handler = InputHandler(pdf_processor=processor)

    pdf_result = handler.load_bytes(b"%PDF-1.4", "upload.pdf")
    text_result = handler.load_bytes("Invoice #9".encode("utf-8"), "upload.txt")
    empty_result = handler.load_bytes(b"", "upload.pdf")

    assert pdf_result.success and processor.calls[0] == (b"%PDF-1.4", "upload.pdf")
    assert text_result.text == "Invoice #9"
    assert not empty_result.success


def test_load_batch(tmp_path, sample_txt_file):
    (tmp_path / "notes.md").write_text("ignored", encoding="utf-8")
    (tmp_path / "b.txt").write_text("Invoice #2", encoding="utf-8")

    results = InputHandler().load_batch(tmp_path)

    assert [r.filename for r in results] == ["acme.txt", "b.txt"]
    assert all(r.success for r in results)


def test_load_batch_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        InputHandler().load_batch(tmp_path / "nowhere")


def test_short_embedded_text_falls_back_to_ocr(monkeypatch):
    """Test that scanned PDFs are rendered and OCRed"""
    processor = PDFProcessor(ocr_engine=OCREngine(backend_factory=FakeBackend))
    monkeypatch.setattr(processor, "extract_embedded_text", lambda source, name="pdf": ["  "])
    monkeypatch.setattr(
        processor, "render_pages",
        lambda source, name="pdf": [Image.new("RGB", (8, 8)), Image.new("RGB", (8, 8))]
    )

    acquired = processor.extract_text(b"%PDF-1.4")

    assert acquired.used_ocr is True
    assert acquired.page_count == 2
    assert acquired.text == "Scanned Invoice #42\nScanned Invoice #42"
    assert acquired.embedded_length == 0


def test_embedded_text_skips_ocr(monkeypatch):
    def fail_render(source, name="pdf"):
        raise AssertionError("OCR should not run")

    processor = PDFProcessor(ocr_engine=OCREngine(backend_factory=FakeBackend))
    page = "Acme Supply Co\nInvoice #INV-1003\nAmount Due: $1,234.56"
    monkeypatch.setattr(processor, "extract_embedded_text", lambda source, name="pdf": [page])
    monkeypatch.setattr(processor, "render_pages", fail_render)

    acquired = processor.extract_text("invoice.pdf")

    assert acquired.used_ocr is False
    assert acquired.text == page
    assert processor.ocr_engine.is_loaded is False


def test_unreadable_pdf_raises_corrupted_file_error():
    processor = PDFProcessor(ocr_engine=OCREngine(backend_factory=FakeBackend))

    with pytest.raises(CorruptedFileError):
        processor.extract_embedded_text(b"definitely not a pdf", "junk.pdf")
