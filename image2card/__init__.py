"""
Image2Card - Japanese Sentence Card Builder

Turns a captured image of Japanese text into an annotated flashcard record:
OCR, sentence analysis (furigana, definition, pitch accent, translation)
and pronunciation audio.
"""

__version__ = "1.0.0"
__author__ = "Image2Card Contributors"
