"""
Tests for the invoice number heuristic.
"""

import pytest

from invoice_intake.extraction.invoice_number import InvoiceNumberExtractor


@pytest.fixture
def extractor():
    return InvoiceNumberExtractor()


def test_hash_label_on_same_line(extractor):
    outcome = extractor.extract("Invoice #INV-1003 Date: 01/02/2024")

    assert outcome.value == "INV-1003"
    assert outcome.strategy == "labeled"


@pytest.mark.parametrize("text, expected", [
    ("Invoice No. 55-A", "55-A"),
    ("Invoice Number: 12345", "12345"),
    ("INVOICE: 2024/0007", "2024/0007"),
])
def test_label_variants(extractor, text, expected):
    assert extractor(text) == expected


def test_identifier_without_digit_is_rejected(extractor):
    """Test that a labeled token needs at least one digit"""
    outcome = extractor.extract("Invoice Date\nNothing here")

    assert outcome.value == ""
    assert outcome.matched is False


def test_later_labeled_occurrence_is_used(extractor, sample_text):
    assert extractor(sample_text) == "INV-1003"


def test_token_on_following_line(extractor):
    """Test that a number printed under the heading is found"""
    outcome = extractor.extract("Acme\nInvoice\n#A-778\nDate: 01/02/2024")

    assert outcome.value == "A-778"
    assert outcome.strategy == "following_lines"


def test_inv_prefix(extractor):
    outcome = extractor.extract("Invoice for services\nref INV 8812 attached")

    assert outcome.value == "8812"
    assert outcome.strategy == "inv_prefix"


def test_token_scan_fallback(extractor):
    outcome = extractor.extract("Invoice for the month of March, ref 4471")

    assert outcome.value == "4471"
    assert outcome.strategy == "token_scan"


def test_no_anchor_gives_empty(extractor):
    assert extractor("Receipt #12345") == ""


def test_window_bounds_the_search():
    text = "Invoice" + (" pending" * 10) + " 9999"

    assert InvoiceNumberExtractor()(text) == "9999"
    assert InvoiceNumberExtractor(window=40)(text) == ""


def test_hash_token_fallback(extractor):
    """Test that a '#' token later on the line is used when no label matches"""
    outcome = extractor.extract("Invoice Date 01/02/2024 Ref #A123")

    assert outcome.value == "A123"
    assert outcome.strategy == "hash_token"
