"""Furigana annotation generator."""

from image2card.utils import generate_furigana


class FuriganaGenerator:
    """Produce Anki-style "base[reading]" annotations with a shared MeCab tagger."""

    def __init__(self, tagger):
        """Initialize with the tagger used by the morphology analyzer.

        Args:
            tagger: A fugashi.Tagger instance
        """
        self.tagger = tagger

    def generate(self, sentence: str) -> str:
        return generate_furigana(sentence, self.tagger)

    def generate_for_word(self, word: str) -> str:
        # A lone word never gets the leading run separator
        return generate_furigana(word, self.tagger).lstrip(" ")
