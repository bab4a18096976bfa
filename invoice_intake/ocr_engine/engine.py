"""
Main OCR Engine Module.

OCREngine is the handle the acquisition stage holds on to for optical
character recognition. The backend is expensive to create (it probes the
Tesseract binary), so it is created on first use and then reused for the
lifetime of the engine.

Usage:
    from invoice_intake.ocr_engine import OCREngine

    engine = OCREngine()
    text = engine.extract_text(image)
"""

import time
from typing import Callable, List, Optional

from PIL import Image

from invoice_intake.utils.logger import get_logger
from invoice_intake.utils.exceptions import OCRProcessingError
from .tesseract_backend import TesseractBackend

logger = get_logger(__name__)


class OCREngine:
    """
    Lazily-initialized OCR handle.

    Attributes:
        backend_factory: Callable creating the backend on first use.

    Example:
        >>> engine = OCREngine()
        >>> engine.is_loaded
        False
        >>> text = engine.extract_text(image)   # backend created here
        >>> engine.is_loaded
        True
    """

    def __init__(self, backend_factory: Optional[Callable[[], object]] = None) -> None:
        self.backend_factory = backend_factory or TesseractBackend
        self._backend = None

    @property
    def backend(self):
        """The OCR backend, created on first access."""
        if self._backend is None:
            logger.info("Loading OCR backend")
            self._backend = self.backend_factory()
        return self._backend

    @property
    def is_loaded(self) -> bool:
        return self._backend is not None

    def extract_text(self, image: Image.Image) -> str:
        """
        Recognize the text in one image.

        Args:
            image: PIL Image of a rendered page.

        Returns:
            Recognized text.

        Raises:
            OCRProcessingError: If the input is not an image or OCR fails.
        """
        if not isinstance(image, Image.Image):
            raise OCRProcessingError("unknown", "Invalid image input")

        start_time = time.time()
        text = self.backend.extract_text(image)
        logger.debug(f"OCR recognized {len(text)} chars in {time.time() - start_time:.2f}s")
        return text

    def extract_batch(self, images: List[Image.Image]) -> List[str]:
        """
        Recognize several page images.

        A page that fails is logged and contributes an empty string.
        """
        results = []

        for i, image in enumerate(images):
            logger.info(f"OCR page {i + 1}/{len(images)}")
            try:
                results.append(self.extract_text(image))
            except OCRProcessingError as e:
                logger.error(f"Failed to OCR page {i + 1}: {e}")
                results.append("")

        return results

    def close(self) -> None:
        """Drop the backend; the next call creates a fresh one."""
        self._backend = None
