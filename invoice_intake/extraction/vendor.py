"""
Vendor Name Extractor.

The vendor name is guessed positionally: invoices usually print the
seller's letterhead just above the "Invoice" heading, so the text before the
first anchor occurrence is split into segments and the address and contact
lines are filtered out.
"""

import re
from typing import List, Optional

from config import get_config
from .base import Extractor, Strategy
from .patterns import ANCHOR_WORD_PATTERN, has_digit

CONTACT_KEYWORDS = r'phone|tel|fax|email|website|vat|tax\s*id|ein'

STREET_NUMBER_PATTERN = re.compile(r'\d{1,6}\s+\w+')
ADDRESS_TOKEN_PATTERN = re.compile(
    r'\b(?:st|ave|rd|blvd|dr|ln|ct|ter|pkwy|wy|hwy|pl|cir|way|suite|ste|unit|apt'
    r'|bldg|floor|fl|po box|p\.?o\.?\s?box)\b',
    re.IGNORECASE
)
# Case-sensitive on purpose: two capital letters followed by a ZIP code
STATE_ZIP_PATTERN = re.compile(r'\b[A-Z]{2}\s*\d{5}(?:-\d{4})?\b')
CONTACT_PATTERN = re.compile(r'\b(?:' + CONTACT_KEYWORDS + r')\b|www\.', re.IGNORECASE)

ADDRESS_TAIL_PATTERN = re.compile(
    r'\s+(?:\d{1,6}\s+\w+|(?:' + CONTACT_KEYWORDS + r')\b|www\.).*$',
    re.IGNORECASE
)
STATE_ZIP_TAIL_PATTERN = re.compile(r',\s*[A-Z]{2}\s*\d{5}(?:-\d{4})?$', re.IGNORECASE)

SEGMENT_BREAK_PATTERN = re.compile(r' {2,}')


def looks_like_address(segment: str) -> bool:
    """
    Whether a segment reads like a postal address or contact detail.

    Example:
        >>> looks_like_address("123 Main St")
        True
        >>> looks_like_address("Phone: 555-0100")
        True
        >>> looks_like_address("Acme Supply Co")
        False
    """
    return bool(
        STREET_NUMBER_PATTERN.search(segment)
        or ADDRESS_TOKEN_PATTERN.search(segment)
        or STATE_ZIP_PATTERN.search(segment)
        or CONTACT_PATTERN.search(segment)
    )


def trim_address_tail(segment: str) -> str:
    """
    Cut an address or contact tail off a segment.

    Example:
        >>> trim_address_tail("Acme Supply 42 Harbor Rd, Cheyenne, WY 82001")
        'Acme Supply'
        >>> trim_address_tail("Acme Supply, WY 82001")
        'Acme Supply'
    """
    trimmed = ADDRESS_TAIL_PATTERN.sub('', segment)
    trimmed = STATE_ZIP_TAIL_PATTERN.sub('', trimmed)
    return trimmed.strip()


class VendorExtractor(Extractor):
    """
    Guesses the vendor from the segments preceding the invoice heading.

    Strategies, in order:
        1. plain_line: first segment with no digits and no address tokens
        2. first_line_trimmed: first segment with its address tail cut
        3. longest_line_trimmed: longest non-address segment, tail cut

    Example:
        >>> VendorExtractor()("Acme Supply Co\\n123 Main St\\nINVOICE #100")
        'Acme Supply Co'
    """

    field_name = "vendor"

    def __init__(self, window: Optional[int] = None) -> None:
        self.window = window or get_config("extraction.vendor.window", 600)

    def prepare(self, text: str) -> Optional[List[str]]:
        match = ANCHOR_WORD_PATTERN.search(text)
        if match is None or match.start() == 0:
            return None

        before = text[max(0, match.start() - self.window):match.start()]
        return self.split_segments(before)

    @staticmethod
    def split_segments(window: str) -> List[str]:
        """Split by real line breaks, then by column gaps of 2+ spaces."""
        segments = []
        for line in re.split(r'\r?\n', window):
            for part in SEGMENT_BREAK_PATTERN.split(line):
                part = part.strip()
                if part:
                    segments.append(part)
        return segments

    def strategies(self) -> List[Strategy]:
        return [
            Strategy("plain_line", self._plain_line),
            Strategy("first_line_trimmed", self._first_line_trimmed),
            Strategy("longest_line_trimmed", self._longest_line_trimmed),
        ]

    @staticmethod
    def _plain_line(segments: List[str]) -> str:
        for segment in segments:
            if not has_digit(segment) and not looks_like_address(segment):
                return trim_address_tail(segment)
        return ""

    @staticmethod
    def _first_line_trimmed(segments: List[str]) -> str:
        return trim_address_tail(segments[0]) if segments else ""

    @staticmethod
    def _longest_line_trimmed(segments: List[str]) -> str:
        candidates = [s for s in segments if not looks_like_address(s)]
        if not candidates:
            return ""
        return trim_address_tail(max(candidates, key=len))
