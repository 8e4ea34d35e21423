"""Locate and highlight a target word inside furigana-annotated text."""

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

_OPEN_BRACKET = ord("[")
_CLOSE_BRACKET = ord("]")
_WHITESPACE = frozenset(b" \t\r\n")


@dataclass(frozen=True)
class AlignmentSpan:
    """A byte range in UTF-8 encoded annotated text and the characters it covers."""

    start: int  # Byte offset of the first byte
    end: int  # Byte offset just past the last byte
    text: str

    @property
    def length(self) -> int:
        return self.end - self.start


def utf8_char_length(lead_byte: int) -> int:
    """Byte length of a UTF-8 character from the high bits of its first byte."""
    if lead_byte & 0xE0 == 0xC0:
        return 2
    if lead_byte & 0xF0 == 0xE0:
        return 3
    if lead_byte & 0xF8 == 0xF0:
        return 4
    return 1


def decode_characters(data: bytes) -> list[AlignmentSpan]:
    """Split UTF-8 bytes into one span per character."""
    spans = []
    i = 0
    while i < len(data):
        length = utf8_char_length(data[i])
        spans.append(AlignmentSpan(i, i + length, data[i : i + length].decode("utf-8")))
        i += length
    return spans


def build_character_map(data: bytes) -> list[AlignmentSpan]:
    """Map every base character of annotated text to its byte offset.

    Bracketed readings ("[...]") and whitespace separators are skipped, so
    "本[ほん] を 読[よ]む" maps to the characters 本, を, 読, む.

    Args:
        data: UTF-8 encoded annotated text

    Returns:
        Spans in left-to-right order
    """
    spans = []
    i = 0
    while i < len(data):
        byte = data[i]
        if byte == _OPEN_BRACKET:
            close = data.find(b"]", i)
            i = len(data) if close == -1 else close + 1
            continue
        if byte in _WHITESPACE:
            i += 1
            continue
        length = utf8_char_length(byte)
        spans.append(AlignmentSpan(i, i + length, data[i : i + length].decode("utf-8")))
        i += length
    return spans


class AlignmentEngine:
    """Find one logical word in annotated text and wrap it in a highlight marker.

    Matching is exact text only and the first occurrence wins. When the word
    cannot be located the text is returned unchanged.
    """

    def __init__(self, color: str = "green"):
        """Initialize the engine.

        Args:
            color: CSS colour of the highlight marker
        """
        self.open_tag = f'<b style="color: {color};">'
        self.close_tag = "</b>"

    def locate(self, annotated_text: str, target_word: str) -> AlignmentSpan | None:
        """Find the byte span of target_word in annotated_text.

        Args:
            annotated_text: Plain or furigana-annotated text
            target_word: Word to find

        Returns:
            The matched span (including a trailing reading bracket of the last
            character, if any), or None if there is no match
        """
        if not annotated_text or not target_word:
            return None

        data = annotated_text.encode("utf-8")
        target = target_word.encode("utf-8")

        # Verbatim occurrence, e.g. kana-only words with no annotation
        direct = data.find(target)
        if direct != -1:
            return AlignmentSpan(direct, direct + len(target), target_word)

        char_map = build_character_map(data)
        target_chars = [span.text for span in decode_characters(target)]
        match = self._find_sequence(char_map, target_chars)
        if match is None:
            logger.debug(f"'{target_word}' not found in annotated text")
            return None

        start = char_map[match].start
        end = char_map[match + len(target_chars) - 1].end
        end = self._extend_through_reading(data, end)
        return AlignmentSpan(start, end, data[start:end].decode("utf-8"))

    def highlight(self, annotated_text: str, target_word: str) -> str:
        """Wrap the first occurrence of target_word in the highlight marker.

        Args:
            annotated_text: Plain or furigana-annotated text
            target_word: Word to highlight

        Returns:
            Highlighted text, or annotated_text unchanged if the word is not found
        """
        span = self.locate(annotated_text, target_word)
        if span is None:
            return annotated_text

        data = annotated_text.encode("utf-8")
        highlighted = (
            data[: span.start]
            + self.open_tag.encode("utf-8")
            + data[span.start : span.end]
            + self.close_tag.encode("utf-8")
            + data[span.end :]
        )
        return highlighted.decode("utf-8")

    @staticmethod
    def _find_sequence(char_map: list[AlignmentSpan], target_chars: list[str]) -> int | None:
        """Index of the first contiguous run in char_map equal to target_chars."""
        count = len(target_chars)
        for i in range(len(char_map) - count + 1):
            if all(char_map[i + k].text == target_chars[k] for k in range(count)):
                return i
        return None

    @staticmethod
    def _extend_through_reading(data: bytes, end: int) -> int:
        """Move end past a "]" that closes the last character's reading.

        Scanning stops at the next whitespace; a closing bracket found before
        it belongs to the matched run.
        """
        scan = end
        while scan < len(data) and data[scan] not in _WHITESPACE:
            if data[scan] == _CLOSE_BRACKET:
                return scan + 1
            scan += 1
        return end
