"""Service for fetching word definitions from pluggable dictionary providers."""

import logging

from image2card.interfaces import DictionaryProvider
from image2card.models import DictionaryEntry

logger = logging.getLogger(__name__)


class DefinitionService:
    """Look up definitions across providers in priority order (offline first)."""

    def __init__(self, providers: list[DictionaryProvider]):
        """Initialize the definition service.

        Args:
            providers: Dictionary providers, highest priority first
        """
        self.providers = providers

    def lookup(self, surface: str, dictionary_form: str = "") -> DictionaryEntry:
        """Look up a word, trying its dictionary form before its surface form.

        Provider errors propagate so the caller can treat the stage as failed.

        Args:
            surface: Word as it appears in the sentence
            dictionary_form: Lemma of the word (optional)

        Returns:
            The first entry found, or an entry with an empty definition
        """
        candidates = [w for w in dict.fromkeys([dictionary_form, surface]) if w]
        for provider in self.providers:
            if not provider.is_available():
                continue
            for word in candidates:
                entry = provider.lookup(word)
                if entry and entry.has_definition:
                    logger.debug(f"Definition for '{word}' from {provider.name}")
                    return entry

        headword = dictionary_form or surface
        logger.info(f"No definition found for '{headword}'")
        return DictionaryEntry(headword=headword)
