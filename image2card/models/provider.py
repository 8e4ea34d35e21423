"""Data models for capability providers."""

from dataclasses import dataclass
from enum import Enum


class OCREngine(str, Enum):
    """Selectable OCR engines. There is no implicit fallback between them."""

    TESSERACT = "tesseract"
    EASYOCR = "easyocr"
    VISION = "vision"


@dataclass(frozen=True)
class Voice:
    """A speech synthesis voice."""

    id: str
    name: str
    category: str = ""

    def __str__(self) -> str:
        return f"{self.name} ({self.id})"


@dataclass(frozen=True)
class CommunityPronunciation:
    """A community-recorded pronunciation search hit."""

    word: str
    url: str
    filename: str
    username: str = ""


@dataclass(frozen=True)
class PronunciationAudio:
    """Downloaded or synthesized pronunciation audio."""

    data: bytes
    filename: str
    source: str  # "community" or the speech provider id

    @property
    def size(self) -> int:
        return len(self.data)
