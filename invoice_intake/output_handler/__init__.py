"""
Output Handler Module for Invoice Intake.

Hands a parsed invoice to its two consumers:
    - FormFiller: values for the editable review form
    - InvoiceStore: local persistent list of parsed invoices
"""

from .form_filler import FormFiller, InvoiceForm, FormLine
from .invoice_store import InvoiceStore

__all__ = ['FormFiller', 'InvoiceForm', 'FormLine', 'InvoiceStore']
