"""
Intake Pipeline Module.

Runs one document through every stage:
    acquire text -> extract fields -> fill form -> store

Usage:
    from invoice_intake.pipeline import IntakePipeline

    pipeline = IntakePipeline()
    outcome = pipeline.process_file("invoice.pdf")
    print(outcome.parsed.amount_due)
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from invoice_intake.extraction import InvoiceExtractor, ParsedInvoice
from invoice_intake.input_handler import InputHandler, InputResult
from invoice_intake.output_handler import FormFiller, InvoiceForm, InvoiceStore
from invoice_intake.utils.logger import get_logger
from invoice_intake.utils.exceptions import InputError, FileNotFoundError

logger = get_logger(__name__)


@dataclass
class IntakeOutcome:
    """
    Everything produced for one document.

    Attributes:
        input: Acquisition result
        parsed: Extracted fields (all empty when acquisition failed)
        form: Form values for review
        record_id: Store row id, None when not stored
    """
    input: InputResult
    parsed: ParsedInvoice
    form: InvoiceForm
    record_id: Optional[int] = None

    @property
    def success(self) -> bool:
        return self.input.success

    def to_dict(self) -> Dict[str, Any]:
        return {
            'source_file': self.input.filename,
            'success': self.input.success,
            'error': self.input.error,
            'used_ocr': self.input.used_ocr,
            'invoice': self.parsed.to_dict(),
            'form': self.form.to_dict(),
            'record_id': self.record_id
        }


class IntakePipeline:
    """
    Invoice intake pipeline.

    Collaborators are injected so callers (and tests) can swap the PDF/OCR
    stage or the store.

    Attributes:
        input_handler: Text acquisition
        extractor: Field extraction
        form_filler: Form value mapping
        store: Persistence, None to skip storing

    Example:
        >>> pipeline = IntakePipeline(store=None)
        >>> outcomes = pipeline.process("./invoices/")
    """

    def __init__(
        self,
        input_handler: Optional[InputHandler] = None,
        extractor: Optional[InvoiceExtractor] = None,
        form_filler: Optional[FormFiller] = None,
        store: Optional[InvoiceStore] = None
    ) -> None:
        self.input_handler = input_handler or InputHandler()
        self.extractor = extractor or InvoiceExtractor()
        self.form_filler = form_filler or FormFiller()
        self.store = store

    def process_text(self, text: str, filename: Optional[str] = None) -> IntakeOutcome:
        """Run extraction, form filling and storage on already acquired text."""
        input_result = InputResult(
            filepath=filename or "",
            filename=filename or "",
            file_type='text',
            text=text or "",
            page_count=1
        )
        return self._finish(input_result)

    def process_file(self, filepath: Union[str, Path]) -> IntakeOutcome:
        """
        Process one document on disk.

        A document whose text cannot be acquired yields an empty record
        that is not stored.
        """
        return self._finish(self.input_handler.load(filepath))

    def process_bytes(self, data: bytes, filename: str) -> IntakeOutcome:
        """Process one uploaded document."""
        return self._finish(self.input_handler.load_bytes(data, filename))

    def process(self, input_path: Union[str, Path]) -> List[IntakeOutcome]:
        """
        Process a file or every supported file in a directory.

        Raises:
            FileNotFoundError: If the path doesn't exist.
        """
        path = Path(input_path)

        if not path.exists():
            raise FileNotFoundError(str(path))

        if path.is_file():
            files = [path]
        elif path.is_dir():
            files = self.input_handler.list_supported_files(path)
        else:
            raise InputError(f"Invalid input path: {path}")

        logger.info(f"Processing {len(files)} file(s)")
        return [self.process_file(f) for f in files]

    def _finish(self, input_result: InputResult) -> IntakeOutcome:
        if not input_result.success:
            logger.warning(f"Skipping {input_result.filename}: {input_result.error}")
            parsed = ParsedInvoice()
            return IntakeOutcome(
                input=input_result,
                parsed=parsed,
                form=self.form_filler.fill(parsed)
            )

        parsed = self.extractor.extract(input_result.text)
        form = self.form_filler.fill(parsed, filename=input_result.filename or None)

        record_id = None
        if self.store is not None:
            record_id = self.store.add(parsed, source_file=input_result.filename)

        logger.info(
            f"{input_result.filename or 'text'}: invoice #{parsed.invoice_number or 'N/A'}, "
            f"amount {parsed.amount_due or 'N/A'}, {len(parsed.line_items)} line item(s)"
        )
        return IntakeOutcome(input=input_result, parsed=parsed, form=form, record_id=record_id)
