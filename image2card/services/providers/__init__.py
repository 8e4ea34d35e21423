"""Capability provider implementations."""

from .deepl_translator import DeepLTranslator
from .easyocr_provider import EasyOCRProvider
from .elevenlabs_provider import ElevenLabsSpeechProvider
from .forvo_client import ForvoClient
from .jisho_provider import JishoProvider
from .jmdict_provider import JMdictProvider
from .minimax_provider import MiniMaxSpeechProvider
from .model_translator import ModelTranslator
from .none_translator import NoneTranslator
from .remote_model_client import RemoteModelClient, guess_image_mime
from .tesseract_provider import TesseractOCRProvider
from .vision_provider import VisionOCRProvider

__all__ = [
    "DeepLTranslator",
    "EasyOCRProvider",
    "ElevenLabsSpeechProvider",
    "ForvoClient",
    "JMdictProvider",
    "JishoProvider",
    "MiniMaxSpeechProvider",
    "ModelTranslator",
    "NoneTranslator",
    "RemoteModelClient",
    "TesseractOCRProvider",
    "VisionOCRProvider",
    "guess_image_mime",
]
