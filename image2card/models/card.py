"""Data models for scan results and flashcard records."""

from dataclasses import dataclass


@dataclass
class ScanResult:
    """Text extracted from a captured image."""

    text: str
    engine: str
    image: bytes = b""

    @property
    def has_text(self) -> bool:
        return bool(self.text.strip())


@dataclass
class FlashcardRecord:
    """A fully annotated, audio-enriched flashcard."""

    sentence: str  # Highlighted plain sentence
    sentence_furigana: str  # Highlighted annotated sentence
    translation: str
    target_word: str
    target_word_furigana: str
    pitch_accent: str
    definition: str
    image: bytes = b""
    image_filename: str = ""
    vocab_audio: bytes = b""
    vocab_audio_filename: str = ""
    sentence_audio: bytes = b""
    sentence_audio_filename: str = ""

    @property
    def has_audio(self) -> bool:
        """Check if either audio field was filled."""
        return bool(self.vocab_audio) or bool(self.sentence_audio)

    def to_fields(self) -> dict[str, str]:
        """Text fields and media file names, keyed by card field name."""
        return {
            "sentence": self.sentence,
            "sentence_furigana": self.sentence_furigana,
            "translation": self.translation,
            "target_word": self.target_word,
            "target_word_furigana": self.target_word_furigana,
            "pitch_accent": self.pitch_accent,
            "definition": self.definition,
            "image": self.image_filename,
            "vocab_audio": self.vocab_audio_filename,
            "sentence_audio": self.sentence_audio_filename,
        }

    def __str__(self) -> str:
        return f"{self.target_word}: {self.definition[:50] if self.definition else 'No definition'}"
