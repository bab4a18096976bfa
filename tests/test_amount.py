"""
Tests for the amount due heuristic and amount normalization.
"""

import pytest

from invoice_intake.extraction.amount import AmountExtractor, find_amounts
from invoice_intake.postprocessor.normalizers import AmountNormalizer, guess_currency
from invoice_intake.utils.helpers import money_to_float


def test_amount_due_label_beats_larger_unlabeled_amounts():
    outcome = AmountExtractor().extract(
        "Subtotal $45.00\nShipping $9,999.00\nAmount Due: $1,234.56"
    )

    assert outcome.value == "$1,234.56"
    assert outcome.strategy == "amount_due"


def test_label_priority_order():
    """Test that 'amount due' wins over 'total' wherever they appear"""
    text = "Total: $500.00\nAmount Due: $250.00"

    assert AmountExtractor()(text) == "$250.00"


@pytest.mark.parametrize("text, expected, strategy", [
    ("Total Due $80.00", "$80.00", "total_due"),
    ("Invoice Total: 1,020.10", "1,020.10", "invoice_total"),
    ("TOTAL $ 12.00", "$ 12.00", "total"),
])
def test_each_label(text, expected, strategy):
    outcome = AmountExtractor().extract(text)

    assert outcome.value == expected
    assert outcome.strategy == strategy


def test_subtotal_is_not_a_total_label():
    outcome = AmountExtractor().extract("Subtotal $45.00 then $60.00")

    assert outcome.value == "$60.00"
    assert outcome.strategy == "largest_amount"


def test_largest_unlabeled_amount():
    assert AmountExtractor()("$45.00 $900.00 $12.50") == "$900.00"


def test_plain_thousands_are_compared_numerically():
    assert AmountExtractor()("$999.99 and 1234.56 and $1,000.00") == "1234.56"


def test_no_amount_gives_empty():
    outcome = AmountExtractor().extract("Invoice #12 for 3 widgets")

    assert outcome.value == ""
    assert outcome.matched is False


def test_find_amounts_requires_two_decimals():
    assert find_amounts("$5 $5.0 $5.00 12.345 7.50") == ["$5.00", "7.50"]


def test_money_to_float():
    assert money_to_float("$1,234.56") == 1234.56
    assert money_to_float("") == 0.0
    assert money_to_float(None) == 0.0
    assert money_to_float("1.2.3") == 0.0


def test_amount_normalizer():
    normalizer = AmountNormalizer()

    assert normalizer.normalize("$1,234.56") == "1234.56"
    assert normalizer.normalize("") == "0.00"
    assert normalizer.multiply(3, "$45.00") == "135.00"


def test_guess_currency():
    assert guess_currency("$5.00") == "USD"
    assert guess_currency("€ 90.00") == "EUR"
    assert guess_currency("£12.00") == "GBP"
    assert guess_currency("12.00") == "USD"
    assert guess_currency(None) == "USD"
