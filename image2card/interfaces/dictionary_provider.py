"""Protocol for the definition sources behind DefinitionService."""

from typing import Protocol

from image2card.models import DictionaryEntry


class DictionaryProvider(Protocol):
    """A source of English glosses for Japanese dictionary forms.

    DefinitionService asks its providers in order and keeps the first hit,
    so an offline source usually comes before an online one.
    """

    @property
    def name(self) -> str:
        """Display name used in log messages."""
        ...

    def is_available(self) -> bool:
        """True once the provider can answer lookups."""
        ...

    def load(self) -> bool:
        """Prepare the provider's data.

        Raises:
            SetupError: If a local data file is missing or unreadable.
        """
        ...

    def lookup(self, word: str) -> DictionaryEntry | None:
        """Look up a dictionary form or its kana reading.

        Returns None when the word is unknown. Online providers raise
        DictionaryLookupError when the service cannot be reached.
        """
        ...
