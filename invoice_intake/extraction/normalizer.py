"""
Text Normalizer.

Cleans text coming out of the PDF reader or the OCR engine before any field
heuristic sees it.
"""

import re
from typing import Optional

NBSP_PATTERN = re.compile(r'[\u00a0\u2007\u202f]')
HORIZONTAL_SPACE_PATTERN = re.compile(r'[ \t\f\v]+')
ANY_SPACE_PATTERN = re.compile(r'\s+')

# Keywords OCR tends to split with a stray space, e.g. "Inv oice"
OCR_SPLIT_FIXES = [
    re.compile(r'inv\s+oice', re.IGNORECASE),
]


def _rejoin(match: re.Match) -> str:
    return ANY_SPACE_PATTERN.sub('', match.group(0))


def normalize_text(text: Optional[str], keep_lines: bool = True) -> str:
    """
    Normalize raw extracted text.

    Non-breaking spaces become plain spaces, runs of spaces and tabs collapse
    to one, lines are trimmed and blank lines dropped, and known OCR
    splits are rejoined. With ``keep_lines=False`` the result is a single
    line.

    Args:
        text: Raw text, possibly None.
        keep_lines: Keep line breaks so line-aware heuristics can use them.

    Returns:
        Normalized text; "" for empty input.

    Example:
        >>> normalize_text("ACME\\u00a0Corp\\n\\n  Inv oice  #12")
        'ACME Corp\\nInvoice #12'
        >>> normalize_text("a\\n b", keep_lines=False)
        'a b'
    """
    if not text:
        return ""

    text = NBSP_PATTERN.sub(' ', str(text))

    if keep_lines:
        lines = (HORIZONTAL_SPACE_PATTERN.sub(' ', line).strip()
                 for line in text.splitlines())
        text = '\n'.join(line for line in lines if line)
    else:
        text = ANY_SPACE_PATTERN.sub(' ', text).strip()

    for pattern in OCR_SPLIT_FIXES:
        text = pattern.sub(_rejoin, text)

    return text
