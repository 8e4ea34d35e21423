"""Protocol for OCR providers."""

from typing import Protocol


class OCRProvider(Protocol):
    """Interface for a text extraction backend."""

    @property
    def id(self) -> str:
        """Engine identifier (e.g., 'tesseract')."""
        ...

    @property
    def name(self) -> str:
        """Human-readable name (e.g., 'Tesseract (Local)')."""
        ...

    def is_initialized(self) -> bool:
        """Check if the engine is ready to extract text."""
        ...

    def extract_text(self, image_bytes: bytes) -> str:
        """Extract text from an encoded image.

        Args:
            image_bytes: PNG/JPEG/WebP encoded image

        Returns:
            Extracted text (may be empty)

        Raises:
            OCRError: If extraction fails
        """
        ...
