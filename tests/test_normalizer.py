"""
Tests for text normalization ahead of field extraction.
"""

from invoice_intake.extraction.normalizer import normalize_text


def test_empty_and_none_give_empty_string():
    assert normalize_text(None) == ""
    assert normalize_text("") == ""


def test_non_breaking_spaces_become_plain_spaces():
    assert normalize_text("ACME\u00a0Corp") == "ACME Corp"
    assert normalize_text("Total\u202f\u00a0$5.00") == "Total $5.00"


def test_horizontal_whitespace_collapses_but_lines_survive():
    """Test that runs of spaces collapse while line breaks are kept"""
    text = "  Acme   Supply\t\tCo  \n\n\n  Invoice   #12  "

    assert normalize_text(text) == "Acme Supply Co\nInvoice #12"


def test_single_line_mode_collapses_everything():
    assert normalize_text("Acme\n  Supply\r\nCo", keep_lines=False) == "Acme Supply Co"


def test_ocr_split_anchor_is_rejoined_with_case_kept():
    assert normalize_text("Inv oice #12") == "Invoice #12"
    assert normalize_text("INV  OICE") == "INVOICE"


def test_normalization_is_idempotent(sample_text):
    once = normalize_text(sample_text)

    assert normalize_text(once) == once
