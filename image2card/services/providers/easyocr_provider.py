"""Local OCR via EasyOCR (optional dependency)."""

import logging

from image2card.exceptions import OCRError

logger = logging.getLogger(__name__)


class EasyOCRProvider:
    """Extract text with EasyOCR.

    Implements OCRProvider protocol. easyocr is imported lazily in
    initialize() so the package works without it installed.
    """

    def __init__(self, languages: list[str] | None = None, gpu: bool = False):
        self._languages = list(languages or ["ja", "en"])
        self._gpu = gpu
        self._reader = None

    @property
    def id(self) -> str:
        return "easyocr"

    @property
    def name(self) -> str:
        return "EasyOCR (Local)"

    def initialize(self) -> bool:
        """Load the EasyOCR reader.

        Returns:
            True if the reader was created
        """
        try:
            import easyocr
        except ImportError:
            logger.warning("easyocr is not installed. Install it with: pip install image2card[easyocr]")
            return False

        try:
            self._reader = easyocr.Reader(self._languages, gpu=self._gpu, verbose=False)
        except Exception as e:
            logger.error(f"Failed to create EasyOCR reader: {e}")
            self._reader = None
            return False

        logger.info(f"EasyOCR initialized ({', '.join(self._languages)})")
        return True

    def is_initialized(self) -> bool:
        return self._reader is not None

    def extract_text(self, image_bytes: bytes) -> str:
        """Extract text from an encoded image.

        Raises:
            OCRError: If the reader is not ready or recognition fails
        """
        if self._reader is None:
            raise OCRError("EasyOCR is not initialized")
        if not image_bytes:
            raise OCRError("Image buffer is empty")

        try:
            lines = self._reader.readtext(image_bytes, detail=0, paragraph=True)
        except Exception as e:
            raise OCRError(f"EasyOCR failed: {e}") from e

        return "\n".join(lines)
