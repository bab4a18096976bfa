"""
Tesseract OCR Backend.

Recognizes text in rendered page images with pytesseract.

Requirements:
    - Tesseract OCR installed on the system
    - pytesseract Python package
"""

from PIL import Image

from config import get_config
from invoice_intake.utils.logger import get_logger
from invoice_intake.utils.exceptions import OCREngineNotAvailableError, OCRProcessingError

logger = get_logger(__name__)


class TesseractBackend:
    """
    Tesseract OCR backend implementation.

    Attributes:
        language: Tesseract language code (e.g., "eng")
        psm: Page Segmentation Mode (1-13)
        oem: OCR Engine Mode (0-3)
        extra_config: Additional Tesseract command-line options

    Example:
        >>> backend = TesseractBackend()
        >>> text = backend.extract_text(image)
    """

    def __init__(self) -> None:
        """Initialize the Tesseract backend with configuration."""
        self.language = get_config("ocr.tesseract.lang", "eng")
        self.psm = get_config("ocr.tesseract.psm", 3)
        self.oem = get_config("ocr.tesseract.oem", 3)
        self.extra_config = get_config("ocr.tesseract.config", "")

        self._check_dependencies()

        logger.debug(
            f"TesseractBackend initialized (lang={self.language}, "
            f"psm={self.psm}, oem={self.oem})"
        )

    def _check_dependencies(self) -> None:
        """
        Check that pytesseract and the Tesseract binary are available.

        Raises:
            OCREngineNotAvailableError: If Tesseract cannot be used.
        """
        try:
            import pytesseract
            self._pytesseract = pytesseract

            version = pytesseract.get_tesseract_version()
            logger.info(f"Tesseract version: {version}")

        except ImportError:
            raise OCREngineNotAvailableError(
                "pytesseract (install with: pip install pytesseract)"
            )
        except Exception as e:
            raise OCREngineNotAvailableError(
                f"Tesseract OCR (not installed or not in PATH): {e}"
            )

    def _build_config(self) -> str:
        """Build the Tesseract configuration string."""
        config_parts = [
            f"--psm {self.psm}",
            f"--oem {self.oem}"
        ]

        if self.extra_config:
            config_parts.append(self.extra_config)

        return ' '.join(config_parts)

    def extract_text(self, image: Image.Image) -> str:
        """
        Recognize the text of one page image.

        Args:
            image: PIL Image to process.

        Returns:
            Recognized text (may be empty).

        Raises:
            OCRProcessingError: If Tesseract fails on the image.
        """
        if image.mode not in ('RGB', 'L'):
            image = image.convert('RGB')

        try:
            return self._pytesseract.image_to_string(
                image,
                lang=self.language,
                config=self._build_config()
            ) or ""
        except Exception as e:
            raise OCRProcessingError("page image", str(e))
