"""
Invoice Intake - Source Package.

Turns uploaded invoice documents into editable, stored invoice records.

Modules:
    - input_handler: PDF/text acquisition with OCR fallback
    - ocr_engine: Tesseract OCR handle
    - extraction: Heuristic field extraction engine
    - postprocessor: Date and amount normalization
    - output_handler: Form values and local invoice store
    - pipeline: End-to-end orchestration
    - utils: Logging, exceptions, helpers

Architecture:
    Input -> (OCR) -> Normalize -> Extract -> Form -> Store
"""

__version__ = "1.0.0"

__all__ = [
    'input_handler',
    'ocr_engine',
    'extraction',
    'postprocessor',
    'output_handler',
    'pipeline',
    'utils'
]
