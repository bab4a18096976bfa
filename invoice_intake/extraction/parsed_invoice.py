"""
Parsed Invoice Data Classes.

The transient record produced by one extraction call. Every field is
independently optional: absence is an empty string or an empty tuple.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from invoice_intake.postprocessor.normalizers import guess_currency


@dataclass(frozen=True)
class LineItem:
    """
    One guessed invoice line.

    Attributes:
        description: Chunk text with quantity and price tokens removed.
        quantity: Quantity read from a "qty:" or "N x" token.
        unit_price: Price token exactly as matched (e.g. "$45.00").
    """
    description: str
    quantity: int
    unit_price: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'description': self.description,
            'quantity': self.quantity,
            'unit_price': self.unit_price
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LineItem':
        return cls(
            description=str(data.get('description') or ''),
            quantity=int(data.get('quantity') or 0),
            unit_price=str(data.get('unit_price') or '')
        )


@dataclass(frozen=True)
class ParsedInvoice:
    """
    Structured fields guessed from one invoice's text.

    Attributes:
        vendor: Best-guess organization name.
        invoice_number: Identifier containing at least one digit.
        invoice_date: Canonical YYYY-MM-DD date.
        due_date: Canonical YYYY-MM-DD date.
        amount_due: Currency amount as matched text.
        line_items: Up to the configured cap, in order of appearance.

    Example:
        >>> invoice = ParsedInvoice(vendor="Acme Supply", amount_due="$90.00")
        >>> invoice.currency
        'USD'
        >>> invoice.missing_fields
        ['invoice_number', 'invoice_date', 'due_date', 'line_items']
    """
    vendor: str = ""
    invoice_number: str = ""
    invoice_date: str = ""
    due_date: str = ""
    amount_due: str = ""
    line_items: Tuple[LineItem, ...] = field(default_factory=tuple)

    @property
    def currency(self) -> str:
        return guess_currency(self.amount_due)

    @property
    def fields(self) -> Dict[str, Any]:
        """All extracted fields keyed by name."""
        return {
            'vendor': self.vendor,
            'invoice_number': self.invoice_number,
            'invoice_date': self.invoice_date,
            'due_date': self.due_date,
            'amount_due': self.amount_due,
            'line_items': self.line_items
        }

    @property
    def missing_fields(self) -> list:
        return [k for k, v in self.fields.items() if not v]

    @property
    def extracted_fields(self) -> Dict[str, Any]:
        return {k: v for k, v in self.fields.items() if v}

    @property
    def extraction_rate(self) -> float:
        """Percentage of fields that were found (0-100)."""
        total = len(self.fields)
        return (len(self.extracted_fields) / total) * 100 if total > 0 else 0

    def is_empty(self) -> bool:
        return not self.extracted_fields

    def to_dict(self) -> Dict[str, Any]:
        return {
            'vendor': self.vendor,
            'invoice_number': self.invoice_number,
            'invoice_date': self.invoice_date,
            'due_date': self.due_date,
            'amount_due': self.amount_due,
            'currency': self.currency,
            'line_items': [item.to_dict() for item in self.line_items]
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ParsedInvoice':
        """
        Rebuild a record from its dictionary form.

        Missing or null values become empty, so records written by older
        versions still load.
        """
        return cls(
            vendor=data.get('vendor') or '',
            invoice_number=data.get('invoice_number') or '',
            invoice_date=data.get('invoice_date') or '',
            due_date=data.get('due_date') or '',
            amount_due=data.get('amount_due') or '',
            line_items=tuple(
                LineItem.from_dict(item) for item in data.get('line_items') or []
            )
        )

    def __repr__(self) -> str:
        return (
            f"ParsedInvoice("
            f"vendor={self.vendor!r}, "
            f"invoice={self.invoice_number!r}, "
            f"amount={self.amount_due!r}, "
            f"items={len(self.line_items)}, "
            f"rate={self.extraction_rate:.0f}%)"
        )
