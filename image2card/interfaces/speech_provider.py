"""Protocol for speech synthesis providers."""

from typing import Protocol

from image2card.models import Voice


class SpeechProvider(Protocol):
    """Interface for a text-to-speech backend."""

    @property
    def id(self) -> str:
        """Provider identifier (e.g., 'elevenlabs')."""
        ...

    @property
    def name(self) -> str:
        """Human-readable name."""
        ...

    @property
    def voices(self) -> list[Voice]:
        """Voices known to this provider (populated by load_voices)."""
        ...

    def is_available(self) -> bool:
        """Check if the provider has the credentials it needs."""
        ...

    def load_voices(self) -> list[Voice]:
        """Refresh the voice list from the remote service.

        Raises:
            SynthesisError: If the voice list cannot be fetched
        """
        ...

    def audio_extension(self, audio_format: str) -> str:
        """File extension of audio returned for the requested format."""
        ...

    def synthesize(
        self,
        text: str,
        voice_id: str = "",
        language_code: str = "",
        audio_format: str = "mp3",
    ) -> bytes:
        """Synthesize speech for text.

        Raises:
            SynthesisError: If synthesis fails
        """
        ...
