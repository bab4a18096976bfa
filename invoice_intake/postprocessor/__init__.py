"""
Post-Processing Module for Invoice Intake.

Normalizers applied to raw matched tokens:
    - Date tokens to canonical YYYY-MM-DD
    - Amounts to two-decimal numeric strings
    - Currency guessing from amount symbols
"""

from .normalizers import DateNormalizer, AmountNormalizer, guess_currency

__all__ = [
    'DateNormalizer',
    'AmountNormalizer',
    'guess_currency'
]
