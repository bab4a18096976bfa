"""
Main Input Handler Module.

InputHandler is the entry point of the acquisition stage: it validates an
uploaded document and hands back its normalized text, delegating PDFs to
PDFProcessor and reading plain-text dumps directly.

Usage:
    from invoice_intake.input_handler import InputHandler

    handler = InputHandler()
    result = handler.load("invoice.pdf")
    if result.success:
        print(result.text)
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from config import get_config
from invoice_intake.extraction.normalizer import normalize_text
from invoice_intake.ocr_engine import OCREngine
from invoice_intake.utils.logger import get_logger
from invoice_intake.utils.helpers import get_file_extension
from invoice_intake.utils.exceptions import (
    InputError,
    UnsupportedFileTypeError,
    FileNotFoundError,
    CorruptedFileError,
    OCRError
)
from .pdf_processor import PDFProcessor

logger = get_logger(__name__)


@dataclass
class InputResult:
    """
    Result of acquiring the text of one document.

    Attributes:
        filepath: Original file path (or upload name)
        filename: Original filename
        file_type: 'pdf', 'text' or 'unknown'
        text: Normalized document text
        page_count: Number of pages processed
        used_ocr: Whether OCR produced the text
        metadata: Additional details about the acquisition
        success: Whether acquisition succeeded
        error: Error message if acquisition failed
    """
    filepath: str
    filename: str
    file_type: str
    text: str = ""
    page_count: int = 0
    used_ocr: bool = False
    metadata: Dict[str, Any] = field(default_factory=dict)
    success: bool = True
    error: Optional[str] = None

    def __repr__(self) -> str:
        return (
            f"InputResult(filename='{self.filename}', "
            f"type='{self.file_type}', "
            f"chars={len(self.text)}, "
            f"ocr={self.used_ocr}, "
            f"success={self.success})"
        )


class InputHandler:
    """
    Input handler for invoice documents.

    Attributes:
        supported_extensions: Set of accepted file extensions
        pdf_processor: PDFProcessor used for PDF documents

    Example:
        >>> handler = InputHandler()
        >>> result = handler.load("invoice.pdf")
        >>> results = handler.load_batch("./invoices/")
    """

    PDF_EXTENSIONS = {'.pdf'}
    TEXT_EXTENSIONS = {'.txt'}

    def __init__(
        self,
        pdf_processor: Optional[PDFProcessor] = None,
        ocr_engine: Optional[OCREngine] = None
    ) -> None:
        """
        Initialize the InputHandler.

        Args:
            pdf_processor: PDF processor to use. Built on demand if omitted.
            ocr_engine: OCR handle for the PDF processor built on demand.
        """
        self.supported_extensions = {
            ext.lower() for ext in get_config(
                "input.supported_extensions",
                list(self.PDF_EXTENSIONS | self.TEXT_EXTENSIONS)
            )
        }
        self._pdf_processor = pdf_processor
        self._ocr_engine = ocr_engine

        logger.debug(f"InputHandler initialized with extensions: {self.supported_extensions}")

    @property
    def pdf_processor(self) -> PDFProcessor:
        if self._pdf_processor is None:
            self._pdf_processor = PDFProcessor(ocr_engine=self._ocr_engine)
        return self._pdf_processor

    def detect_file_type(self, filepath: Union[str, Path]) -> str:
        """
        Detect the type of an input file from its extension.

        Returns:
            'pdf' or 'text'.

        Raises:
            UnsupportedFileTypeError: If the type is not supported.
        """
        extension = get_file_extension(filepath)

        if extension in self.supported_extensions:
            if extension in self.PDF_EXTENSIONS:
                return 'pdf'
            if extension in self.TEXT_EXTENSIONS:
                return 'text'

        raise UnsupportedFileTypeError(extension, sorted(self.supported_extensions))

    def validate_file(self, filepath: Union[str, Path]) -> Path:
        """
        Validate that a file exists, is supported and is not empty.

        Raises:
            FileNotFoundError: If file doesn't exist.
            UnsupportedFileTypeError: If file type is not supported.
            CorruptedFileError: If the file is empty.
        """
        path = Path(filepath)

        if not path.exists():
            raise FileNotFoundError(str(filepath))

        if not path.is_file():
            raise InputError(f"Path is not a file: {filepath}")

        self.detect_file_type(path)

        if path.stat().st_size == 0:
            raise CorruptedFileError(str(filepath), "File is empty")

        return path

    def load(self, filepath: Union[str, Path]) -> InputResult:
        """
        Acquire the text of a document on disk.

        Input and OCR problems are reported through the result instead of
        being raised.

        Args:
            filepath: Path to the invoice file.

        Returns:
            InputResult with the normalized text.
        """
        filepath = str(filepath)
        logger.info(f"Loading file: {filepath}")

        try:
            path = self.validate_file(filepath)
            file_type = self.detect_file_type(path)

            if file_type == 'pdf':
                return self._from_pdf(path, filepath, path.name)

            text = normalize_text(path.read_text(encoding='utf-8', errors='replace'))
            return InputResult(
                filepath=filepath,
                filename=path.name,
                file_type=file_type,
                text=text,
                page_count=1
            )

        except (InputError, OCRError) as e:
            logger.error(f"Input error for {filepath}: {e}")
            return self._failed(filepath, str(e))

    def load_bytes(self, data: bytes, filename: str) -> InputResult:
        """
        Acquire the text of an uploaded document.

        Args:
            data: Raw document bytes.
            filename: Upload name, used for type detection.

        Returns:
            InputResult with the normalized text.
        """
        logger.info(f"Reading upload: {filename}")

        try:
            file_type = self.detect_file_type(filename)

            if not data:
                raise CorruptedFileError(filename, "File is empty")

            if file_type == 'pdf':
                return self._from_pdf(data, filename, Path(filename).name)

            return InputResult(
                filepath=filename,
                filename=Path(filename).name,
                file_type=file_type,
                text=normalize_text(data.decode('utf-8', errors='replace')),
                page_count=1
            )

        except (InputError, OCRError) as e:
            logger.error(f"Input error for {filename}: {e}")
            return self._failed(filename, str(e))

    def load_batch(self, directory: Union[str, Path]) -> List[InputResult]:
        """
        Acquire the text of every supported file in a directory.

        Raises:
            FileNotFoundError: If the directory doesn't exist.
            InputError: If the path is not a directory.
        """
        directory = Path(directory)

        if not directory.exists():
            raise FileNotFoundError(str(directory))

        if not directory.is_dir():
            raise InputError(f"Path is not a directory: {directory}")

        files = self.list_supported_files(directory)
        logger.info(f"Found {len(files)} files to process in {directory}")

        results = [self.load(path) for path in files]

        successful = sum(1 for r in results if r.success)
        logger.info(f"Batch complete: {successful} successful, {len(results) - successful} failed")
        return results

    def list_supported_files(self, directory: Union[str, Path]) -> List[Path]:
        """Supported files directly inside a directory, sorted by name."""
        return sorted(
            p for p in Path(directory).iterdir()
            if p.is_file() and p.suffix.lower() in self.supported_extensions
        )

    def _from_pdf(self, source, filepath: str, filename: str) -> InputResult:
        acquired = self.pdf_processor.extract_text(source, name=filename)
        return InputResult(
            filepath=filepath,
            filename=filename,
            file_type='pdf',
            text=acquired.text,
            page_count=acquired.page_count,
            used_ocr=acquired.used_ocr,
            metadata={'embedded_length': acquired.embedded_length}
        )

    @staticmethod
    def _failed(filepath: str, error: str) -> InputResult:
        return InputResult(
            filepath=filepath,
            filename=Path(filepath).name,
            file_type='unknown',
            success=False,
            error=error
        )
