"""Utility functions for Image2Card."""

from .file_utils import ensure_directory, safe_filename
from .text_utils import (
    clean_ocr_text,
    generate_furigana,
    has_kanji,
    is_kanji,
    katakana_to_hiragana,
    split_okurigana,
)

__all__ = [
    "ensure_directory",
    "safe_filename",
    "clean_ocr_text",
    "generate_furigana",
    "has_kanji",
    "is_kanji",
    "katakana_to_hiragana",
    "split_okurigana",
]
