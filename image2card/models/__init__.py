"""Data models for Image2Card."""

from .analysis import AnalysisResult, DictionaryEntry, PitchAccentEntry, StageResult, Token
from .card import FlashcardRecord, ScanResult
from .provider import CommunityPronunciation, OCREngine, PronunciationAudio, Voice
from .task import Task, TaskState

__all__ = [
    "AnalysisResult",
    "DictionaryEntry",
    "PitchAccentEntry",
    "StageResult",
    "Token",
    "FlashcardRecord",
    "ScanResult",
    "CommunityPronunciation",
    "OCREngine",
    "PronunciationAudio",
    "Voice",
    "Task",
    "TaskState",
]
