"""Data models for sentence analysis."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Token:
    """A morphological token of an analyzed sentence."""

    surface: str  # Surface form (as it appears in text)
    part_of_speech: str  # Main POS tag, e.g. "名詞"
    lemma: str = ""  # Dictionary form
    reading: str = ""  # Hiragana reading


@dataclass(frozen=True)
class DictionaryEntry:
    """A dictionary lookup result."""

    headword: str
    definition: str = ""
    part_of_speech: str = ""
    reading: str = ""  # Kana reading reported by the dictionary, if any

    @property
    def has_definition(self) -> bool:
        return bool(self.definition)


@dataclass(frozen=True)
class PitchAccentEntry:
    """One pitch accent pattern for a headword/reading pair."""

    headword: str
    reading: str  # Hiragana
    pattern: int  # Downstep position, 0 = heiban

    def __str__(self) -> str:
        return f"{self.headword}[{self.reading}] {self.pattern}"


@dataclass
class StageResult:
    """Outcome of one analysis stage: either a value or an error message."""

    ok: bool
    value: Any = None
    error: str = ""

    @classmethod
    def success(cls, value: Any) -> "StageResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str, default: Any = None) -> "StageResult":
        return cls(ok=False, value=default, error=error)


@dataclass
class AnalysisResult:
    """Result of analyzing one sentence.

    Either ``error`` is set (input error, no stage ran) or the text fields
    carry the merged stage outputs. Degraded stages leave their field empty
    and record a message in ``stage_errors``.
    """

    highlighted_sentence: str = ""
    translation: str = ""
    target_word: str = ""
    target_word_annotation: str = ""
    highlighted_annotated_sentence: str = ""
    definition: str = ""
    pitch_accent_markup: str = ""
    error: str | None = None
    stage_errors: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_error(cls, message: str) -> "AnalysisResult":
        return cls(error=message)

    @property
    def success(self) -> bool:
        """Check if the analysis produced a result (possibly degraded)."""
        return self.error is None

    @property
    def degraded(self) -> bool:
        """Check if any stage fell back to its default."""
        return bool(self.stage_errors)

    def __str__(self) -> str:
        if self.error:
            return f"AnalysisResult(error='{self.error}')"
        return (
            f"AnalysisResult(target='{self.target_word}', "
            f"degraded={sorted(self.stage_errors)})"
        )
