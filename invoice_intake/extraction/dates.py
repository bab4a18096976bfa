"""
Date Extractors.

A labeled date is searched for in a window starting at the earliest label
occurrence: first on the label's own line, then on the two lines after it.
The matched token is converted to YYYY-MM-DD by DateNormalizer.
"""

import re
from typing import List, Optional, Sequence

from config import get_config
from invoice_intake.postprocessor.normalizers import DateNormalizer
from .base import Extractor, Strategy
from .patterns import DATE_PATTERN, window_lines

INVOICE_DATE_LABELS = (
    r'invoice\s*date',
    r'date\s*of\s*invoice',
    r'issued\s*date',
    r'\bdate\b',
)

DUE_DATE_LABELS = (
    r'due\s*date',
    r'payment\s*due',
    r'due\s*on',
    r'pay\s*by',
)


def find_date_token(text: str) -> str:
    """First date-shaped token in the text, or ""."""
    match = DATE_PATTERN.search(text)
    return match.group(1) if match else ""


class LabeledDateExtractor(Extractor):
    """
    Extracts a date that follows one of a set of label synonyms.

    Strategies, in order:
        1. same_line: date token on the label's line
        2. following_lines: date token on one of the next two lines

    The returned value is already canonical (YYYY-MM-DD). A raw token that
    cannot be read as a date falls through to the next strategy.

    Only the leftmost occurrence of any label is used. The invoice date
    labels include a bare "date", so a "Due Date: ..." line printed above
    "Invoice Date: ..." is taken as the invoice date too.
    """

    field_name = "date"
    labels: Sequence[str] = ()

    def __init__(
        self,
        labels: Optional[Sequence[str]] = None,
        window: Optional[int] = None,
        normalizer: Optional[DateNormalizer] = None
    ) -> None:
        if labels is not None:
            self.labels = tuple(labels)
        self.window = window or get_config("extraction.dates.window", 220)
        self.normalizer = normalizer or DateNormalizer()
        self.label_pattern = re.compile(
            r'(' + '|'.join(self.labels) + r')\b', re.IGNORECASE
        )

    def prepare(self, text: str) -> Optional[List[str]]:
        match = self.label_pattern.search(text)
        if match is None:
            return None
        window = text[match.start():match.start() + self.window]
        return window_lines(window)

    def strategies(self) -> List[Strategy]:
        return [
            Strategy("same_line", self._same_line),
            Strategy("following_lines", self._following_lines),
        ]

    def _same_line(self, lines: List[str]) -> str:
        if not lines:
            return ""
        return self.normalizer.normalize(find_date_token(lines[0]))

    def _following_lines(self, lines: List[str]) -> str:
        for line in lines[1:3]:
            value = self.normalizer.normalize(find_date_token(line))
            if value:
                return value
        return ""


class InvoiceDateExtractor(LabeledDateExtractor):
    """
    Invoice issue date.

    Example:
        >>> InvoiceDateExtractor()("Invoice Date: 03/14/2024")
        '2024-03-14'
    """

    field_name = "invoice_date"
    labels = INVOICE_DATE_LABELS


class DueDateExtractor(LabeledDateExtractor):
    """
    Payment due date.

    Example:
        >>> DueDateExtractor()("Payment due Jan 2, 2025")
        '2025-01-02'
    """

    field_name = "due_date"
    labels = DUE_DATE_LABELS
