"""Business logic services for Image2Card."""

from .alignment import AlignmentEngine, AlignmentSpan
from .definition_service import DefinitionService
from .export_service import ExportService
from .furigana import FuriganaGenerator
from .morphology import MorphologyAnalyzer
from .pitch_accent_service import PitchAccentService
from .provider_registry import ProviderRegistry
from .providers import JishoProvider, JMdictProvider
from .sentence_analyzer import SentenceAnalyzer

__all__ = [
    "AlignmentEngine",
    "AlignmentSpan",
    "DefinitionService",
    "ExportService",
    "FuriganaGenerator",
    "MorphologyAnalyzer",
    "PitchAccentService",
    "ProviderRegistry",
    "SentenceAnalyzer",
    "JMdictProvider",
    "JishoProvider",
]
