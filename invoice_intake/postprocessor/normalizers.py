"""
Data Normalizers Module.

Converts raw matched tokens into the representations used downstream:
    - Date tokens to canonical YYYY-MM-DD
    - Currency strings to two-decimal numeric strings
    - Currency symbol to a currency code

None of these raise on bad input; unparseable values become empty.
"""

import re
from datetime import date
from typing import Optional

from dateutil import parser as date_parser

from invoice_intake.utils.helpers import money_to_float
from invoice_intake.utils.logger import get_logger

logger = get_logger(__name__)


class DateNormalizer:
    """
    Normalizes recognized date tokens to YYYY-MM-DD.

    Rules, in order:
        1. ISO "yyyy-mm-dd" passes through unchanged.
        2. "mm/dd/yy" and "mm/dd/yyyy" (slash or dash) are read month first;
           two-digit years are taken as 20yy.
        3. Anything else goes through dateutil's parser.
        4. Whatever fails all of the above yields "".

    Example:
        >>> normalizer = DateNormalizer()
        >>> normalizer.normalize("03/14/2024")
        "2024-03-14"
        >>> normalizer.normalize("01/05/23")
        "2023-01-05"
        >>> normalizer.normalize("Jan 2, 2025")
        "2025-01-02"
    """

    ISO_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')
    NUMERIC_PATTERN = re.compile(r'^(\d{1,2})[/\-](\d{1,2})[/\-](\d{2,4})$')

    def normalize(self, date_str: Optional[str]) -> str:
        """
        Normalize a date token.

        Args:
            date_str: Raw date token as matched in the text.

        Returns:
            Canonical date string, or "" if the token cannot be read.
        """
        if not date_str:
            return ""

        date_str = date_str.strip()

        if self.ISO_PATTERN.match(date_str):
            return date_str

        parsed = self._try_month_first(date_str)
        if parsed is None:
            parsed = self._try_dateutil_parser(date_str)

        if parsed is None:
            logger.debug(f"Could not parse date: {date_str}")
            return ""

        return self._format(parsed)

    def _try_month_first(self, date_str: str) -> Optional[date]:
        match = self.NUMERIC_PATTERN.match(date_str)
        if not match:
            return None

        month, day, year = match.groups()
        full_year = 2000 + int(year) if len(year) == 2 else int(year)

        try:
            return date(full_year, int(month), int(day))
        except ValueError:
            # e.g. day-first tokens like 31/12/2024; let dateutil try
            return None

    def _try_dateutil_parser(self, date_str: str) -> Optional[date]:
        try:
            return date_parser.parse(date_str).date()
        except (ValueError, OverflowError):
            return None

    @staticmethod
    def _format(value: date) -> str:
        return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"

    def is_valid_date(self, date_str: str) -> bool:
        return self.normalize(date_str) != ""


class AmountNormalizer:
    """
    Normalizes matched currency text for numeric form fields.

    Example:
        >>> normalizer = AmountNormalizer()
        >>> normalizer.normalize("$1,234.56")
        "1234.56"
        >>> normalizer.normalize("")
        "0.00"
    """

    def normalize(self, amount_str: Optional[str]) -> str:
        """Two-decimal string of the amount; unreadable input gives "0.00"."""
        return f"{self.to_float(amount_str):.2f}"

    def to_float(self, amount_str: Optional[str]) -> float:
        return money_to_float(amount_str)

    def multiply(self, quantity: int, amount_str: Optional[str]) -> str:
        """Line total of quantity times unit price, two decimals."""
        return f"{quantity * self.to_float(amount_str):.2f}"


CURRENCY_SYMBOLS = {
    '$': 'USD',
    '€': 'EUR',
    '£': 'GBP',
}
DEFAULT_CURRENCY = 'USD'


def guess_currency(amount_str: Optional[str]) -> str:
    """
    Currency code implied by the symbol in a matched amount.

    Example:
        >>> guess_currency("€ 90.00")
        "EUR"
        >>> guess_currency("90.00")
        "USD"
    """
    for symbol, code in CURRENCY_SYMBOLS.items():
        if symbol in (amount_str or ''):
            return code
    return DEFAULT_CURRENCY
