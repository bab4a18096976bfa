"""
Shared Regular Expressions.

Patterns used by more than one field extractor live here so that the
amount, line-item and date heuristics agree on what a token looks like.
"""

import re

# Anchor keyword used as positional reference for windowed searches
ANCHOR_PATTERN = re.compile(r'invoice', re.IGNORECASE)
ANCHOR_WORD_PATTERN = re.compile(r'invoice\b', re.IGNORECASE)

# Currency amount with exactly two fraction digits: "$1,234.56", "45.00"
AMOUNT_TOKEN = r'\$?\s?(?<![\d,])(?:\d{1,3}(?:,\d{3})+|\d+)\.\d{2}(?!\d)'
AMOUNT_PATTERN = re.compile(AMOUNT_TOKEN)

MONTH_NAMES = r'(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Sept|Oct|Nov|Dec)[a-z]*'

DATE_PATTERN = re.compile(
    r'(\b\d{1,2}[/\-]\d{1,2}[/\-]\d{2,4}\b'
    r'|\b' + MONTH_NAMES + r'\s+\d{1,2},\s*\d{4}\b'
    r'|\b\d{4}-\d{2}-\d{2}\b)',
    re.IGNORECASE
)

DIGIT_PATTERN = re.compile(r'\d')


def has_digit(value: str) -> bool:
    """True when the value contains at least one digit."""
    return bool(value) and DIGIT_PATTERN.search(value) is not None


def window_lines(window: str) -> list:
    """Split a window into trimmed, non-empty lines."""
    return [line.strip() for line in re.split(r'\r?\n', window) if line.strip()]
