"""
Line Item Extractor.

The text is cut into chunks at line breaks, column gaps and digit-space-digit
boundaries. A chunk becomes a line item when it carries a quantity, a price
and enough non-digit text to be a description.
"""

import re
from typing import List, Optional, Tuple

from config import get_config
from .base import Extractor, Strategy
from .parsed_invoice import LineItem
from .patterns import AMOUNT_PATTERN, AMOUNT_TOKEN

CHUNK_SPLIT_PATTERN = re.compile(r'\r?\n|\s{2,}|(?<=\d)\s(?=\d)')

QTY_LABEL_PATTERN = re.compile(r'\bqty[:\s]*(\d{1,3})\b', re.IGNORECASE)
MULTIPLIER_PATTERN = re.compile(r'\b(\d{1,3})\s*(?:x\b|×)', re.IGNORECASE)
PRICE_PATTERN = AMOUNT_PATTERN

# At least 4 consecutive non-digits, so pure numeric noise is skipped
DESCRIPTION_GATE_PATTERN = re.compile(r'\D{4,}')

STRIP_PATTERN = re.compile(
    r'qty[:\s]*\d{1,3}|\d{1,3}\s*(?:x\b|×)|' + AMOUNT_TOKEN,
    re.IGNORECASE
)


def parse_chunk(chunk: str) -> Optional[LineItem]:
    """
    Read one chunk as a line item.

    Example:
        >>> parse_chunk("Widget Assembly qty: 3 $45.00")
        LineItem(description='Widget Assembly', quantity=3, unit_price='$45.00')
        >>> parse_chunk("12345") is None
        True
    """
    qty = QTY_LABEL_PATTERN.search(chunk) or MULTIPLIER_PATTERN.search(chunk)
    price = PRICE_PATTERN.search(chunk)

    if not (qty and price and DESCRIPTION_GATE_PATTERN.search(chunk)):
        return None

    description = ' '.join(STRIP_PATTERN.sub(' ', chunk).split())
    return LineItem(
        description=description,
        quantity=int(qty.group(1)),
        unit_price=price.group(0).strip()
    )


class LineItemExtractor(Extractor):
    """
    Extracts up to ``max_items`` line items in order of appearance.

    Example:
        >>> items = LineItemExtractor()("2 x Consulting Hours $150.00")
        >>> items[0].quantity, items[0].unit_price
        (2, '$150.00')
    """

    field_name = "line_items"
    empty_value: Tuple[LineItem, ...] = ()

    def __init__(self, max_items: Optional[int] = None) -> None:
        self.max_items = max_items or get_config("extraction.line_items.max_items", 5)

    def prepare(self, text: str) -> List[str]:
        return [c.strip() for c in CHUNK_SPLIT_PATTERN.split(text) if c and c.strip()]

    def strategies(self) -> List[Strategy]:
        return [Strategy("chunk_scan", self._chunk_scan)]

    def _chunk_scan(self, chunks: List[str]) -> Tuple[LineItem, ...]:
        items = []
        for chunk in chunks:
            item = parse_chunk(chunk)
            if item is not None:
                items.append(item)
            if len(items) >= self.max_items:
                break
        return tuple(items)
