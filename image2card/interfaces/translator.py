"""Protocol for translation providers."""

from typing import Protocol


class Translator(Protocol):
    """Interface for a sentence translator."""

    @property
    def id(self) -> str:
        """Translator identifier used for preference lookup (e.g., 'deepl')."""
        ...

    @property
    def name(self) -> str:
        """Human-readable name."""
        ...

    def is_available(self) -> bool:
        """Check if the translator can serve requests."""
        ...

    def translate(self, text: str) -> str:
        """Translate text.

        Raises:
            TranslationError: If the request fails
        """
        ...
