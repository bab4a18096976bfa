"""
Invoice Extractor Module.

Runs every field extractor over one normalized text and assembles a
ParsedInvoice.

Approach:
    Each field has its own Extractor holding an ordered list of strategies.
    Extractors only read the shared text, so they are independent of one
    another and their order here does not matter. The strategy order inside
    each extractor is the extraction ruleset, versioned by RULESET_VERSION.

Usage:
    from invoice_intake.extraction import InvoiceExtractor

    extractor = InvoiceExtractor()
    parsed = extractor.extract(text)
    print(parsed.invoice_number, parsed.amount_due)
"""

import time
from typing import Dict, Optional, Tuple

from config import get_config
from invoice_intake.utils.logger import get_logger
from .amount import AmountExtractor
from .base import Extractor, ExtractionOutcome
from .dates import DueDateExtractor, InvoiceDateExtractor
from .invoice_number import InvoiceNumberExtractor
from .line_items import LineItemExtractor
from .normalizer import normalize_text
from .parsed_invoice import ParsedInvoice
from .vendor import VendorExtractor

logger = get_logger(__name__)

# Bump whenever a window size, label list or strategy order changes
RULESET_VERSION = "2"


def default_extractors() -> Dict[str, Extractor]:
    """Field name to extractor, using configured window sizes and caps."""
    return {
        'vendor': VendorExtractor(),
        'invoice_number': InvoiceNumberExtractor(),
        'invoice_date': InvoiceDateExtractor(),
        'due_date': DueDateExtractor(),
        'amount_due': AmountExtractor(),
        'line_items': LineItemExtractor(),
    }


class InvoiceExtractor:
    """
    Heuristic invoice field extractor.

    Attributes:
        extractors: Mapping of ParsedInvoice field name to Extractor.
        normalize: Whether extract() normalizes its input first.

    Example:
        >>> extractor = InvoiceExtractor()
        >>> parsed = extractor.extract("ACME Corp\\nInvoice #INV-1003\\nTotal: $90.00")
        >>> parsed.vendor, parsed.invoice_number, parsed.amount_due
        ('ACME Corp', 'INV-1003', '$90.00')
    """

    def __init__(
        self,
        extractors: Optional[Dict[str, Extractor]] = None,
        normalize: Optional[bool] = None
    ) -> None:
        self.extractors = extractors if extractors is not None else default_extractors()
        self.normalize = normalize if normalize is not None else \
            get_config("extraction.normalize_input", True)

        unknown = set(self.extractors) - set(ParsedInvoice().fields)
        if unknown:
            raise ValueError(f"No ParsedInvoice field for extractors: {sorted(unknown)}")

        logger.debug(
            f"InvoiceExtractor initialized (ruleset v{RULESET_VERSION}, "
            f"fields={list(self.extractors)})"
        )

    def extract(self, text: Optional[str]) -> ParsedInvoice:
        """
        Extract all fields from invoice text.

        Never raises for string input; fields no heuristic can fill are
        left empty.

        Args:
            text: Invoice text as produced by the acquisition stage.

        Returns:
            ParsedInvoice for this text.
        """
        parsed, _ = self.extract_with_report(text)
        return parsed

    def extract_with_report(
        self,
        text: Optional[str]
    ) -> Tuple[ParsedInvoice, Dict[str, ExtractionOutcome]]:
        """
        Extract all fields and report which strategy filled each one.

        Returns:
            Tuple of (ParsedInvoice, field name to ExtractionOutcome).
        """
        start_time = time.time()

        if self.normalize:
            text = normalize_text(text)
        text = text or ""

        outcomes = {
            field_name: extractor.extract(text)
            for field_name, extractor in self.extractors.items()
        }
        parsed = ParsedInvoice(**{name: o.value for name, o in outcomes.items()})

        logger.info(
            f"Extraction complete: {len(parsed.extracted_fields)}/{len(parsed.fields)} fields, "
            f"time: {time.time() - start_time:.3f}s"
        )
        return parsed, outcomes

    def get_ruleset_info(self) -> Dict[str, object]:
        """Strategy order per field, for logging and diagnostics."""
        return {
            'version': RULESET_VERSION,
            'normalize': self.normalize,
            'fields': {
                name: extractor.strategy_names
                for name, extractor in self.extractors.items()
            }
        }
