"""
PDF Processor Module.

Turns a PDF into plain text:
    - Embedded text is read with pdfplumber
    - When the embedded text is missing or too short (scanned documents),
      pages are rendered with PyMuPDF and run through the OCR engine

Text from both paths is normalized before it is returned.
"""

import io
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

import fitz  # PyMuPDF
import pdfplumber
from PIL import Image

from config import get_config
from invoice_intake.extraction.normalizer import normalize_text
from invoice_intake.ocr_engine import OCREngine
from invoice_intake.utils.logger import get_logger
from invoice_intake.utils.exceptions import CorruptedFileError

logger = get_logger(__name__)

PdfSource = Union[bytes, str, Path]


@dataclass
class AcquiredText:
    """
    Text recovered from one PDF.

    Attributes:
        text: Normalized text of all processed pages
        page_count: Number of pages processed
        used_ocr: Whether the text came from OCR
        embedded_length: Length of the normalized embedded text
    """
    text: str
    page_count: int
    used_ocr: bool = False
    embedded_length: int = 0


class PDFProcessor:
    """
    Processor for PDF files.

    Attributes:
        ocr_engine: OCR handle used for scanned documents
        min_text_length: Embedded text shorter than this triggers OCR
        render_scale: Zoom factor for page rendering before OCR
        max_pages: Maximum number of pages to process

    Example:
        >>> processor = PDFProcessor()
        >>> acquired = processor.extract_text("invoice.pdf")
        >>> acquired.used_ocr
        False
    """

    def __init__(self, ocr_engine: Optional[OCREngine] = None) -> None:
        self.ocr_engine = ocr_engine or OCREngine()
        self.min_text_length = get_config("input.pdf.min_text_length", 30)
        self.render_scale = get_config("input.pdf.render_scale", 1.5)
        self.max_pages = get_config("input.pdf.max_pages", 10)

        logger.debug(
            f"PDFProcessor initialized (min_text_length={self.min_text_length}, "
            f"render_scale={self.render_scale})"
        )

    def extract_text(self, source: PdfSource, name: Optional[str] = None) -> AcquiredText:
        """
        Extract text from a PDF, falling back to OCR for scanned pages.

        Args:
            source: PDF bytes or a path to a PDF file.
            name: Label for log messages and errors.

        Returns:
            AcquiredText with the normalized text.

        Raises:
            CorruptedFileError: If the PDF cannot be opened or rendered.
        """
        name = name or self._source_name(source)

        pages = self.extract_embedded_text(source, name)
        text = normalize_text("\n".join(pages))

        if len(text) >= self.min_text_length:
            logger.info(f"Read {len(text)} chars of embedded text from {name}")
            return AcquiredText(text=text, page_count=len(pages), embedded_length=len(text))

        logger.info(
            f"Embedded text too short in {name} ({len(text)} chars), running OCR"
        )
        images = self.render_pages(source, name)
        ocr_text = normalize_text("\n".join(self.ocr_engine.extract_batch(images)))

        return AcquiredText(
            text=ocr_text,
            page_count=len(images),
            used_ocr=True,
            embedded_length=len(text)
        )

    def extract_embedded_text(self, source: PdfSource, name: str = "pdf") -> List[str]:
        """
        Read the embedded text of each page with pdfplumber.

        Returns:
            One string per processed page.
        """
        try:
            with pdfplumber.open(self._as_stream(source)) as pdf:
                pages = pdf.pages[:self.max_pages]
                if len(pdf.pages) > self.max_pages:
                    logger.warning(
                        f"PDF has {len(pdf.pages)} pages, limiting to {self.max_pages}"
                    )
                return [page.extract_text() or "" for page in pages]
        except Exception as e:
            logger.error(f"pdfplumber could not read {name}: {e}")
            raise CorruptedFileError(name, str(e))

    def render_pages(self, source: PdfSource, name: str = "pdf") -> List[Image.Image]:
        """
        Render pages to RGB images with PyMuPDF.

        Returns:
            One PIL Image per processed page.
        """
        images = []

        try:
            if isinstance(source, bytes):
                doc = fitz.open(stream=source, filetype="pdf")
            else:
                doc = fitz.open(str(source))

            try:
                matrix = fitz.Matrix(self.render_scale, self.render_scale)
                for page_num in range(min(len(doc), self.max_pages)):
                    pix = doc.load_page(page_num).get_pixmap(matrix=matrix)
                    image = Image.open(io.BytesIO(pix.tobytes("png")))

                    if image.mode != 'RGB':
                        image = image.convert('RGB')

                    images.append(image)
            finally:
                doc.close()

        except Exception as e:
            logger.error(f"PyMuPDF rendering failed for {name}: {e}")
            raise CorruptedFileError(name, str(e))

        return images

    @staticmethod
    def _as_stream(source: PdfSource):
        if isinstance(source, bytes):
            return io.BytesIO(source)
        return str(source)

    @staticmethod
    def _source_name(source: PdfSource) -> str:
        if isinstance(source, bytes):
            return "<bytes>"
        return Path(source).name
