"""Build the service graph from configuration."""

import logging

from image2card.config import Image2CardConfig
from image2card.exceptions import SetupError
from image2card.interfaces import DictionaryProvider, PresenterProtocol
from image2card.services.alignment import AlignmentEngine
from image2card.services.definition_service import DefinitionService
from image2card.services.furigana import FuriganaGenerator
from image2card.services.morphology import MorphologyAnalyzer
from image2card.services.pitch_accent_service import PitchAccentService
from image2card.services.provider_registry import ProviderRegistry
from image2card.services.providers import (
    DeepLTranslator,
    EasyOCRProvider,
    ElevenLabsSpeechProvider,
    ForvoClient,
    JishoProvider,
    JMdictProvider,
    MiniMaxSpeechProvider,
    ModelTranslator,
    NoneTranslator,
    RemoteModelClient,
    TesseractOCRProvider,
    VisionOCRProvider,
)
from image2card.services.sentence_analyzer import SentenceAnalyzer

from .card_processor import CardProcessor
from .task_orchestrator import TaskOrchestrator

logger = logging.getLogger(__name__)


def _remote_client(config: Image2CardConfig, model: str) -> RemoteModelClient:
    return RemoteModelClient(
        provider_id="remote",
        name=model.split("/", 1)[0] if "/" in model else "Remote model",
        api_url=config.remote_api_url,
        api_key=config.remote_api_key,
        model=model,
        timeout=config.remote_timeout,
    )


def create_registry(config: Image2CardConfig) -> ProviderRegistry:
    """Register every provider the configuration can use.

    Only the configured local OCR engine is initialized, since loading
    Tesseract or EasyOCR models is slow.
    """
    registry = ProviderRegistry()

    if config.ocr_engine == "tesseract":
        tesseract = TesseractOCRProvider(config.tesseract_language, config.tesseract_orientation)
        tesseract.initialize()
        registry.register_ocr(tesseract)
    elif config.ocr_engine == "easyocr":
        easyocr = EasyOCRProvider(config.easyocr_languages)
        easyocr.initialize()
        registry.register_ocr(easyocr)
    registry.register_ocr(VisionOCRProvider(_remote_client(config, config.vision_model)))

    # Registration order is the translator fallback order
    registry.register_translator(
        DeepLTranslator(
            config.deepl_api_key,
            use_free_api=config.deepl_use_free_api,
            source_lang=config.deepl_source_lang,
            target_lang=config.deepl_target_lang,
        )
    )
    registry.register_translator(
        ModelTranslator(_remote_client(config, config.translation_model))
    )
    registry.register_translator(NoneTranslator())

    registry.register_speech(
        ElevenLabsSpeechProvider(
            config.elevenlabs_api_key,
            voice_id=config.elevenlabs_voice_id,
            model=config.elevenlabs_model,
            timeout=config.remote_timeout,
        )
    )
    registry.register_speech(
        MiniMaxSpeechProvider(
            config.minimax_api_key,
            voice_id=config.minimax_voice_id,
            model=config.minimax_model,
            timeout=config.remote_timeout,
        )
    )
    registry.select_speech(config.audio_provider)

    registry.set_community_audio(
        ForvoClient(config.forvo_api_key, language=config.language_code, timeout=config.forvo_timeout)
    )
    return registry


def create_analyzer(
    config: Image2CardConfig,
    registry: ProviderRegistry,
    presenter: PresenterProtocol,
) -> SentenceAnalyzer:
    """Create the sentence analyzer and load its optional data files.

    A missing MeCab dictionary leaves the analyzer not ready; missing
    dictionary or pitch accent files only disable those lookups.
    """
    tokenizer = None
    annotator = None
    try:
        tokenizer = MorphologyAnalyzer()
        annotator = FuriganaGenerator(tokenizer.tagger)
    except RuntimeError as e:
        presenter.show_error(f"Could not initialize MeCab: {e}")

    providers: list[DictionaryProvider] = []
    if config.use_offline_dict:
        jmdict = JMdictProvider(config.jmdict_path)
        try:
            presenter.show_info("Loading offline dictionary...")
            jmdict.load()
            presenter.show_success("Offline dictionary loaded")
            providers.append(jmdict)
        except SetupError as e:
            presenter.show_warning(f"Could not load offline dictionary: {e}")
            presenter.show_info("Falling back to Jisho API")
    providers.append(JishoProvider(config.jisho_api_url, config.jisho_delay))

    pitch_accent = None
    if config.use_pitch_accent:
        pitch_accent = PitchAccentService(config.pitch_accent_path)
        try:
            presenter.show_info("Loading pitch accent data...")
            pitch_accent.load()
            presenter.show_success("Pitch accent data loaded")
        except SetupError as e:
            presenter.show_warning(f"Could not load pitch accent data: {e}")
            pitch_accent = None

    return SentenceAnalyzer(
        tokenizer=tokenizer,
        annotator=annotator,
        registry=registry,
        dictionary=DefinitionService(providers),
        pitch_accent=pitch_accent,
        alignment=AlignmentEngine(config.highlight_color),
        preferred_translator=config.preferred_translator,
        translation_model=config.translation_model,
    )


def create_card_processor(
    config: Image2CardConfig,
    presenter: PresenterProtocol,
) -> CardProcessor:
    """Wire the orchestrator, providers and analyzer into a CardProcessor."""
    registry = create_registry(config)
    analyzer = create_analyzer(config, registry, presenter)
    logger.info(
        f"Card processor ready (OCR: {config.ocr_engine}, "
        f"translator: {config.preferred_translator}, speech: {config.audio_provider})"
    )
    return CardProcessor(
        config=config,
        orchestrator=TaskOrchestrator(),
        registry=registry,
        analyzer=analyzer,
        presenter=presenter,
    )
