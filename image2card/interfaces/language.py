"""Protocols for the language collaborators used by sentence analysis."""

from typing import Protocol

from image2card.models import DictionaryEntry, PitchAccentEntry, Token


class Tokenizer(Protocol):
    """Morphological analyzer."""

    def analyze(self, sentence: str) -> list[Token]:
        """Split a sentence into ordered tokens with part-of-speech tags."""
        ...

    def dictionary_form(self, word: str) -> str:
        """Return the lemma of a (possibly inflected) word."""
        ...

    def reading(self, word: str) -> str:
        """Return the hiragana reading of a word."""
        ...


class AnnotationGenerator(Protocol):
    """Phonetic annotation (furigana) generator."""

    def generate(self, sentence: str) -> str:
        """Annotate a whole sentence with inline base[reading] runs."""
        ...

    def generate_for_word(self, word: str) -> str:
        """Annotate a single word."""
        ...


class Dictionary(Protocol):
    """Definition lookup keyed by surface and dictionary form."""

    def lookup(self, surface: str, dictionary_form: str = "") -> DictionaryEntry:
        """Look up a word, preferring its dictionary form."""
        ...


class PitchAccentStore(Protocol):
    """Pitch accent lookup and formatting."""

    def lookup(self, headword: str, reading: str = "") -> list[PitchAccentEntry]:
        """Return pitch accent entries for a headword/reading pair."""
        ...

    def format_as_markup(self, entries: list[PitchAccentEntry]) -> str:
        """Render entries as HTML markup."""
        ...
