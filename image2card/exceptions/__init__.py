"""Custom exceptions for Image2Card."""

from .base import AnalysisError, Image2CardException, TaskCancelledError
from .provider import (
    DictionaryLookupError,
    OCRError,
    ProviderError,
    ProviderUnavailableError,
    SynthesisError,
    TranslationError,
)
from .validation import SetupError, ValidationError

__all__ = [
    "Image2CardException",
    "AnalysisError",
    "TaskCancelledError",
    "ValidationError",
    "SetupError",
    "ProviderError",
    "ProviderUnavailableError",
    "OCRError",
    "SynthesisError",
    "TranslationError",
    "DictionaryLookupError",
]
