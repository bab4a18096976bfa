"""
Input Handler Module for Invoice Intake.

Acquires normalized text from uploaded documents:
    - PDF embedded text (pdfplumber)
    - OCR fallback for scanned PDFs (PyMuPDF rendering + Tesseract)
    - Plain-text dumps

Supported formats: PDF, TXT
"""

from .handler import InputHandler, InputResult
from .pdf_processor import PDFProcessor, AcquiredText

__all__ = ['InputHandler', 'InputResult', 'PDFProcessor', 'AcquiredText']
