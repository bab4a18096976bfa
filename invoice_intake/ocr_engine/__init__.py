"""
OCR Engine Module for Invoice Intake.

Optical character recognition for scanned invoices whose PDFs carry no
usable embedded text. Tesseract (via pytesseract) is the backend.
"""

from .engine import OCREngine
from .tesseract_backend import TesseractBackend

__all__ = ['OCREngine', 'TesseractBackend']
