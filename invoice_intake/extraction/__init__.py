"""
Extraction Module for Invoice Intake.

Heuristic text-to-fields engine:
    - Text normalization
    - Vendor, invoice number, date, amount and line-item extractors
    - InvoiceExtractor composing them into a ParsedInvoice

Every extractor is a pure function of the normalized text and never
raises; fields it cannot find come back empty.
"""

from .base import Extractor, ExtractionOutcome, Strategy
from .normalizer import normalize_text
from .vendor import VendorExtractor
from .invoice_number import InvoiceNumberExtractor
from .dates import InvoiceDateExtractor, DueDateExtractor, LabeledDateExtractor
from .amount import AmountExtractor
from .line_items import LineItemExtractor
from .parsed_invoice import ParsedInvoice, LineItem
from .extractor import InvoiceExtractor, RULESET_VERSION

__all__ = [
    'Extractor',
    'ExtractionOutcome',
    'Strategy',
    'normalize_text',
    'VendorExtractor',
    'InvoiceNumberExtractor',
    'InvoiceDateExtractor',
    'DueDateExtractor',
    'LabeledDateExtractor',
    'AmountExtractor',
    'LineItemExtractor',
    'ParsedInvoice',
    'LineItem',
    'InvoiceExtractor',
    'RULESET_VERSION'
]
