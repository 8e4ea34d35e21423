"""Local OCR via the Tesseract engine."""

import io
import logging

import pytesseract
from PIL import Image, UnidentifiedImageError

from image2card.exceptions import OCRError

logger = logging.getLogger(__name__)

# Page segmentation modes: 3 = fully automatic, 5 = single block of vertical text
_PAGE_SEGMENTATION = {"horizontal": 3, "vertical": 5}


class TesseractOCRProvider:
    """Extract text with a locally installed Tesseract binary.

    Implements OCRProvider protocol. Call initialize() before extract_text().
    """

    def __init__(self, language: str = "jpn", orientation: str = "horizontal"):
        """Initialize the provider.

        Args:
            language: Tesseract language pack (e.g., "jpn")
            orientation: "horizontal" or "vertical"
        """
        self._language = language
        self._orientation = "horizontal"
        self._initialized = False
        self.set_orientation(orientation)

    @property
    def id(self) -> str:
        return "tesseract"

    @property
    def name(self) -> str:
        return "Tesseract (Local)"

    @property
    def orientation(self) -> str:
        return self._orientation

    def set_orientation(self, orientation: str) -> None:
        """Select horizontal or vertical text layout."""
        if orientation not in _PAGE_SEGMENTATION:
            raise ValueError(f"Unknown text orientation: {orientation}")
        self._orientation = orientation

    def initialize(self) -> bool:
        """Check that Tesseract and its language pack are installed.

        Returns:
            True if the engine is ready
        """
        try:
            version = pytesseract.get_tesseract_version()
            languages = pytesseract.get_languages(config="")
        except (pytesseract.TesseractNotFoundError, OSError) as e:
            logger.error(f"Tesseract is not available: {e}")
            self._initialized = False
            return False

        if self._language not in languages:
            logger.error(f"Tesseract language pack '{self._language}' is not installed")
            self._initialized = False
            return False

        logger.info(f"Tesseract {version} initialized ({self._language})")
        self._initialized = True
        return True

    def is_initialized(self) -> bool:
        return self._initialized

    def extract_text(self, image_bytes: bytes) -> str:
        """Extract text from an encoded image.

        Raises:
            OCRError: If the engine is not ready, the image cannot be decoded,
                or Tesseract fails
        """
        if not self._initialized:
            raise OCRError("Tesseract is not initialized")
        if not image_bytes:
            raise OCRError("Image buffer is empty")

        try:
            image = Image.open(io.BytesIO(image_bytes))
            image.load()
        except (UnidentifiedImageError, OSError) as e:
            raise OCRError(f"Failed to load image: {e}") from e

        config = f"--psm {_PAGE_SEGMENTATION[self._orientation]}"
        try:
            text = pytesseract.image_to_string(image, lang=self._language, config=config)
        except pytesseract.TesseractError as e:
            raise OCRError(f"Tesseract failed: {e}") from e

        logger.debug(f"Tesseract extracted {len(text)} characters")
        return text
