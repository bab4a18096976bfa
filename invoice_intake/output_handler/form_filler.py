"""
Form Filler Module.

Maps a ParsedInvoice onto the values of the editable invoice entry form.
Dates and identifiers are copied as they are; amounts become two-decimal
numeric strings and only the first few line items get a form row.
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional

from config import get_config
from invoice_intake.extraction.parsed_invoice import ParsedInvoice
from invoice_intake.postprocessor.normalizers import AmountNormalizer
from invoice_intake.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class FormLine:
    """One editable line row of the invoice form."""
    description: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass
class InvoiceForm:
    """
    Editable invoice form values.

    Attributes:
        vendor: Vendor name
        invoice_number: Invoice identifier
        invoice_date: YYYY-MM-DD or ""
        due_date: YYYY-MM-DD or ""
        amount: Two-decimal amount due
        currency: Currency code guessed from the amount
        lines: Prefilled line rows; empty means keep the form's own rows
        status: Message shown next to the file chooser
    """
    vendor: str = ""
    invoice_number: str = ""
    invoice_date: str = ""
    due_date: str = ""
    amount: str = "0.00"
    currency: str = "USD"
    lines: List[FormLine] = field(default_factory=list)
    status: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class FormFiller:
    """
    Populates InvoiceForm values from a ParsedInvoice.

    Example:
        >>> filler = FormFiller()
        >>> form = filler.fill(parsed, filename="acme.pdf")
        >>> form.amount
        '1234.56'
        >>> form.status
        'Parsed ✓ acme.pdf'
    """

    def __init__(self, max_lines: Optional[int] = None) -> None:
        self.max_lines = max_lines or get_config("output.form.max_lines", 3)
        self.amount_normalizer = AmountNormalizer()

    def fill(self, parsed: ParsedInvoice, filename: Optional[str] = None) -> InvoiceForm:
        """
        Build form values for one parsed invoice.

        Args:
            parsed: Extraction result.
            filename: Source file name for the status message.

        Returns:
            InvoiceForm ready to be shown for review.
        """
        form = InvoiceForm(
            vendor=parsed.vendor or "",
            invoice_number=parsed.invoice_number or "",
            invoice_date=parsed.invoice_date or "",
            due_date=parsed.due_date or "",
            amount=self.amount_normalizer.normalize(parsed.amount_due),
            currency=parsed.currency,
            lines=[self._line(item) for item in parsed.line_items[:self.max_lines]],
            status=f"Parsed ✓ {filename}" if filename else ""
        )

        logger.debug(f"Form filled for {filename or 'upload'}: {len(form.lines)} line(s)")
        return form

    def _line(self, item) -> FormLine:
        quantity = int(item.quantity) or 1
        return FormLine(
            description=item.description,
            quantity=quantity,
            unit_price=self.amount_normalizer.normalize(item.unit_price),
            line_total=self.amount_normalizer.multiply(quantity, item.unit_price)
        )
