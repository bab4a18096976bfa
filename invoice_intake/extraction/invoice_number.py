"""
Invoice Number Extractor.

Looks in a short window starting at the first "invoice" anchor for an
identifier that contains at least one digit.
"""

import re
from typing import List, Optional

from config import get_config
from .base import Extractor, Strategy
from .patterns import ANCHOR_PATTERN, has_digit, window_lines

IDENTIFIER = r'[A-Z0-9][A-Z0-9\-/.]+'

LABELED_PATTERN = re.compile(
    r'invoice[ \t]*(?:no\.?|number|#)?[ \t]*[:#]?[ \t]*(' + IDENTIFIER + r')',
    re.IGNORECASE
)
LINE_TOKEN_PATTERN = re.compile(r'[A-Z0-9#][A-Z0-9\-/.]*', re.IGNORECASE)
HASH_PATTERN = re.compile(r'#[ \t]*(' + IDENTIFIER + r')', re.IGNORECASE)
INV_PREFIX_PATTERN = re.compile(r'\bINV[\- ]?(' + IDENTIFIER + r')\b', re.IGNORECASE)
TOKEN_SPLIT_PATTERN = re.compile(r'[\s,]+')
TOKEN_PATTERN = re.compile(r'[A-Z0-9#][A-Z0-9\-/.]*', re.IGNORECASE)


def _is_identifier(token: Optional[str]) -> bool:
    return bool(token) and has_digit(token) and token.lower() != "invoice"


class InvoiceNumberExtractor(Extractor):
    """
    Extracts the invoice identifier.

    Strategies, in order:
        1. labeled: "Invoice No. X", "Invoice # X", "Invoice: X" on one line
        2. following_lines: first token with a digit on the next two lines
        3. hash_token: token right after a "#"
        4. inv_prefix: token after an "INV" prefix
        5. token_scan: first identifier-like token with a digit among the
           tokens after the anchor

    A leading "#" is stripped from the result.

    Example:
        >>> InvoiceNumberExtractor()("Invoice #INV-1003 Date: 01/02/2024")
        'INV-1003'
    """

    field_name = "invoice_number"

    def __init__(self, window: Optional[int] = None, token_scan: Optional[int] = None) -> None:
        self.window = window or get_config("extraction.invoice_number.window", 300)
        self.token_scan = token_scan or get_config("extraction.invoice_number.token_scan", 15)

    def prepare(self, text: str) -> Optional[str]:
        match = ANCHOR_PATTERN.search(text)
        if match is None:
            return None
        return text[match.start():match.start() + self.window]

    def strategies(self) -> List[Strategy]:
        return [
            Strategy("labeled", self._labeled),
            Strategy("following_lines", self._following_lines),
            Strategy("hash_token", self._hash_token),
            Strategy("inv_prefix", self._inv_prefix),
            Strategy("token_scan", self._token_scan),
        ]

    @staticmethod
    def _labeled(window: str) -> str:
        for match in LABELED_PATTERN.finditer(window):
            if _is_identifier(match.group(1)):
                return match.group(1)
        return ""

    @staticmethod
    def _following_lines(window: str) -> str:
        for line in window_lines(window)[1:3]:
            match = LINE_TOKEN_PATTERN.search(line)
            if match and _is_identifier(match.group(0)):
                return match.group(0).lstrip('#')
        return ""

    @staticmethod
    def _hash_token(window: str) -> str:
        for match in HASH_PATTERN.finditer(window):
            if has_digit(match.group(1)):
                return match.group(1)
        return ""

    @staticmethod
    def _inv_prefix(window: str) -> str:
        # The anchor itself starts with "Inv", so walk every occurrence
        for match in INV_PREFIX_PATTERN.finditer(window):
            if has_digit(match.group(1)):
                return match.group(1)
        return ""

    def _token_scan(self, window: str) -> str:
        tokens = [t for t in TOKEN_SPLIT_PATTERN.split(window) if t][:self.token_scan]
        for token in tokens:
            if has_digit(token) and TOKEN_PATTERN.fullmatch(token):
                return token.lstrip('#')
        return ""
