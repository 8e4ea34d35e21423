"""Japanese text processing utilities."""

import re

# Kana, kanji, CJK punctuation and full-width forms
_JAPANESE_RANGES = "\u3000-\u303f\u3040-\u309f\u30a0-\u30ff\u4e00-\u9fff\uff00-\uffef"
_JAPANESE_GAP = re.compile(rf"(?<=[{_JAPANESE_RANGES}])\s+(?=[{_JAPANESE_RANGES}])")


def is_kanji(char: str) -> bool:
    """Check if a character is a CJK unified ideograph (or the 々 repeater)."""
    return "\u4e00" <= char <= "\u9fff" or char == "\u3005"


def has_kanji(text: str) -> bool:
    """Check if text contains at least one kanji."""
    return any(is_kanji(c) for c in text)


def katakana_to_hiragana(text: str) -> str:
    """Convert katakana characters to hiragana.

    Args:
        text: Text potentially containing katakana

    Returns:
        Text with katakana converted to hiragana
    """
    result = []
    for ch in text:
        if "\u30a1" <= ch <= "\u30f6":
            result.append(chr(ord(ch) - 0x60))
        else:
            result.append(ch)
    return "".join(result)


def clean_ocr_text(text: str) -> str:
    """Normalize OCR output for Japanese.

    OCR engines insert spaces and line breaks between characters of
    vertical or tightly set text. Whitespace between two Japanese
    characters is removed; other runs of whitespace collapse to one space.

    Args:
        text: Raw OCR output

    Returns:
        Cleaned single-line text
    """
    text = _JAPANESE_GAP.sub("", text)
    text = " ".join(text.split())
    return text.strip()


def split_okurigana(surface: str, reading: str) -> tuple[str, str, str, str]:
    """Split a token into leading kana, kanji base, base reading and trailing kana.

    Example:
        split_okurigana("食べる", "たべる") -> ("", "食", "た", "べる")

    Args:
        surface: Token surface containing kanji
        reading: Hiragana reading of the whole token

    Returns:
        (prefix, base, base_reading, suffix). When the kana cannot be
        matched against the reading, the whole surface is the base.
    """
    start = 0
    while (
        start < len(surface)
        and start < len(reading)
        and not is_kanji(surface[start])
        and katakana_to_hiragana(surface[start]) == reading[start]
    ):
        start += 1

    end_surface, end_reading = len(surface), len(reading)
    while (
        end_surface > start
        and end_reading > start
        and not is_kanji(surface[end_surface - 1])
        and katakana_to_hiragana(surface[end_surface - 1]) == reading[end_reading - 1]
    ):
        end_surface -= 1
        end_reading -= 1

    base = surface[start:end_surface]
    base_reading = reading[start:end_reading]
    if not base or not base_reading:
        return "", surface, reading, ""
    return surface[:start], base, base_reading, surface[end_surface:]


def generate_furigana(text: str, tagger) -> str:
    """Generate furigana-annotated text using MeCab tokenization.

    Tokenizes the text and adds bracketed readings to kanji-containing tokens.
    Uses the standard Anki furigana format: kanji[reading], with okurigana
    left outside the brackets and a space before each annotated run that
    follows other text.

    Args:
        text: Japanese text to annotate
        tagger: A fugashi.Tagger instance

    Returns:
        Furigana-annotated string, e.g. "本[ほん]を 読[よ]む"
    """
    result = []
    for token in tagger(text):
        surface = token.surface
        if not has_kanji(surface):
            result.append(surface)
            continue
        try:
            kana = token.feature.kana
            if not kana:
                result.append(surface)
                continue
        except AttributeError:
            result.append(surface)
            continue
        hiragana = katakana_to_hiragana(kana)
        if hiragana == surface:
            result.append(surface)
            continue
        prefix, base, base_reading, suffix = split_okurigana(surface, hiragana)
        separator = " " if (result or prefix) else ""
        result.append(f"{prefix}{separator}{base}[{base_reading}]{suffix}")
    return "".join(result)
