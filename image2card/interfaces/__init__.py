"""Interface protocols for Image2Card."""

from .configurable import ModelConfigurable
from .dictionary_provider import DictionaryProvider
from .language import AnnotationGenerator, Dictionary, PitchAccentStore, Tokenizer
from .ocr_provider import OCRProvider
from .presenter import PresenterProtocol
from .speech_provider import SpeechProvider
from .translator import Translator

__all__ = [
    "AnnotationGenerator",
    "Dictionary",
    "DictionaryProvider",
    "ModelConfigurable",
    "OCRProvider",
    "PitchAccentStore",
    "PresenterProtocol",
    "SpeechProvider",
    "Tokenizer",
    "Translator",
]
