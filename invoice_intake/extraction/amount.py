"""
Amount Due Extractor.

Labeled totals win in a fixed order; without any label the largest
currency amount in the document is taken as the grand total.
"""

import re
from typing import List

from invoice_intake.utils.helpers import money_to_float
from .base import Extractor, Strategy
from .patterns import AMOUNT_PATTERN

LABELED_AMOUNT = r'[:\s]*(?P<amount>\$?\s?\d[\d,]*\.\d{2})'

# (strategy name, label) in priority order
AMOUNT_LABELS = [
    ("amount_due", r'amount\s*due'),
    ("total_due", r'total\s*due'),
    ("invoice_total", r'invoice\s*total'),
    ("total", r'\btotal\b'),
]
LABEL_PATTERNS = [
    (name, re.compile(label + LABELED_AMOUNT, re.IGNORECASE))
    for name, label in AMOUNT_LABELS
]


def find_amounts(text: str) -> List[str]:
    """Every currency-amount token in the text, in order."""
    return [m.group(0).strip() for m in AMOUNT_PATTERN.finditer(text)]


class AmountExtractor(Extractor):
    """
    Extracts the amount due as matched text.

    Example:
        >>> AmountExtractor()("Subtotal $45.00 Amount Due: $1,234.56")
        '$1,234.56'
        >>> AmountExtractor()("$45.00 $900.00 $12.50")
        '$900.00'
    """

    field_name = "amount_due"

    def strategies(self) -> List[Strategy]:
        labeled = [
            Strategy(name, self._labeled(pattern))
            for name, pattern in LABEL_PATTERNS
        ]
        return labeled + [Strategy("largest_amount", self._largest_amount)]

    @staticmethod
    def _labeled(pattern: re.Pattern):
        def strategy(text: str) -> str:
            match = pattern.search(text)
            return match.group('amount').strip() if match else ""
        return strategy

    @staticmethod
    def _largest_amount(text: str) -> str:
        amounts = find_amounts(text)
        if not amounts:
            return ""
        # max() keeps the first of equal values
        return max(amounts, key=money_to_float)

