"""OCR through a vision-capable remote language model."""

import logging

from image2card.exceptions import OCRError, ProviderError

from .remote_model_client import RemoteModelClient

logger = logging.getLogger(__name__)

_PROMPT = (
    "Transcribe all {language} text in this image exactly as written. "
    "Reply with the text only, without commentary or translation."
)


class VisionOCRProvider:
    """Extract text by asking a remote vision model to transcribe the image.

    Implements OCRProvider and ModelConfigurable protocols.
    """

    def __init__(self, client: RemoteModelClient, language_name: str = "Japanese"):
        self._client = client
        self._prompt = _PROMPT.format(language=language_name)

    @property
    def id(self) -> str:
        return "vision"

    @property
    def name(self) -> str:
        return f"{self._client.name} Vision"

    @property
    def model(self) -> str:
        return self._client.model

    def set_model(self, model_label: str) -> None:
        self._client.set_model(model_label)

    def is_initialized(self) -> bool:
        return self._client.is_available()

    def extract_text(self, image_bytes: bytes) -> str:
        """Send the image to the remote model and return its transcription.

        Raises:
            OCRError: If the image is empty or the request fails
        """
        if not image_bytes:
            raise OCRError("Image buffer is empty")

        try:
            return self._client.complete(self._prompt, image_bytes=image_bytes)
        except ProviderError as e:
            raise OCRError(f"Vision OCR failed: {e}") from e
