"""Morphological analysis backed by MeCab (fugashi + UniDic)."""

import logging

import fugashi

from image2card.models import Token
from image2card.utils import katakana_to_hiragana

logger = logging.getLogger(__name__)

# Tokens that may follow a content word without changing its dictionary form
_INFLECTION_POS = {"助動詞", "助詞", "接尾辞"}


class MorphologyAnalyzer:
    """Tokenize Japanese text and resolve lemmas and readings."""

    def __init__(self, tagger=None):
        """Initialize the analyzer.

        Args:
            tagger: Optional fugashi.Tagger; a default UniDic tagger is created if omitted
        """
        self.tagger = tagger if tagger is not None else fugashi.Tagger()

    def analyze(self, sentence: str) -> list[Token]:
        """Split a sentence into ordered tokens.

        Args:
            sentence: Japanese sentence

        Returns:
            List of Token with surface, main POS, lemma and hiragana reading
        """
        return [
            Token(
                surface=word.surface,
                part_of_speech=self._extract_pos(word),
                lemma=self._extract_lemma(word),
                reading=self._extract_reading(word),
            )
            for word in self.tagger(sentence)
        ]

    def dictionary_form(self, word: str) -> str:
        """Return the dictionary form of a (possibly inflected) word.

        "読んだ" tokenizes as 読ん + だ; the head token's lemma 読む is returned
        when everything after it is an auxiliary, particle or suffix.
        Compound words are returned unchanged.
        """
        tokens = self.analyze(word)
        if not tokens:
            return word
        head, rest = tokens[0], tokens[1:]
        if all(token.part_of_speech in _INFLECTION_POS for token in rest):
            return head.lemma or word
        return word

    def reading(self, word: str) -> str:
        """Return the hiragana reading of a word (all tokens concatenated)."""
        return "".join(token.reading for token in self.analyze(word))

    def _extract_lemma(self, word_token) -> str:
        try:
            lemma = word_token.feature.lemma or word_token.surface
        except AttributeError:
            lemma = word_token.surface

        # UniDic appends glosses to loanword lemmas, e.g. "スクランブル-scramble"
        if "-" in lemma:
            lemma = lemma.split("-")[0]

        return str(lemma)

    def _extract_reading(self, word_token) -> str:
        try:
            kana = word_token.feature.kana or word_token.surface
        except AttributeError:
            kana = word_token.surface
        return katakana_to_hiragana(str(kana))

    def _extract_pos(self, word_token) -> str:
        try:
            return str(word_token.feature.pos1 or "")
        except AttributeError:
            return ""
