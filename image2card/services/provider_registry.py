"""Registry of capability providers and the rules for choosing among them."""

import logging

from image2card.exceptions import ProviderUnavailableError
from image2card.interfaces import ModelConfigurable, OCRProvider, SpeechProvider, Translator
from image2card.models import OCREngine, PronunciationAudio

from .providers import ForvoClient

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """Hold OCR, translation and speech providers and select one per request.

    Selection rules:
    - OCR: the engine is chosen explicitly; an unusable engine is an error,
      never a silent switch to another engine.
    - Translation: the preferred translator if available, otherwise the first
      available one in registration order, otherwise none.
    - Pronunciation: community recordings first, speech synthesis second.
    """

    def __init__(self):
        self._ocr: dict[str, OCRProvider] = {}
        self._translators: list[Translator] = []
        self._speech: dict[str, SpeechProvider] = {}
        self._speech_id = ""
        self._community: ForvoClient | None = None

    # OCR

    def register_ocr(self, provider: OCRProvider) -> None:
        self._ocr[provider.id] = provider

    @property
    def ocr_engines(self) -> list[str]:
        return list(self._ocr)

    def select_ocr(self, engine: str | OCREngine, model: str = "") -> OCRProvider:
        """Return the OCR provider for an engine.

        Args:
            engine: Engine id ("tesseract", "easyocr", "vision")
            model: Remote model label applied to configurable engines

        Returns:
            The initialized provider

        Raises:
            ProviderUnavailableError: If the engine is unknown, unregistered or
                not initialized
        """
        try:
            engine_id = OCREngine(engine).value
        except ValueError as e:
            raise ProviderUnavailableError(f"Unknown OCR engine: {engine}") from e

        provider = self._ocr.get(engine_id)
        if provider is None:
            raise ProviderUnavailableError(f"OCR engine '{engine_id}' is not registered")
        if not provider.is_initialized():
            raise ProviderUnavailableError(f"{provider.name} is not initialized")

        if model and isinstance(provider, ModelConfigurable):
            provider.set_model(model)

        logger.debug(f"Using {provider.name} for OCR")
        return provider

    # Translation

    def register_translator(self, translator: Translator) -> None:
        self._translators = [t for t in self._translators if t.id != translator.id]
        self._translators.append(translator)

    @property
    def translators(self) -> list[Translator]:
        return list(self._translators)

    def select_translator(self, preferred_id: str = "", model: str = "") -> Translator | None:
        """Pick a translator.

        Args:
            preferred_id: Id of the preferred translator
            model: Remote model label applied to a configurable translator

        Returns:
            The preferred translator if available, else the first available
            translator in registration order, else None
        """
        selected = None
        for translator in self._translators:
            if translator.id == preferred_id and translator.is_available():
                selected = translator
                break

        if selected is None:
            selected = next((t for t in self._translators if t.is_available()), None)
            if selected is not None and preferred_id:
                logger.info(f"Translator '{preferred_id}' unavailable, using {selected.name}")

        if selected is not None and model and isinstance(selected, ModelConfigurable):
            selected.set_model(model)

        return selected

    # Speech

    def register_speech(self, provider: SpeechProvider, select: bool = False) -> None:
        self._speech[provider.id] = provider
        if select or not self._speech_id:
            self._speech_id = provider.id

    def select_speech(self, provider_id: str) -> SpeechProvider:
        """Make a registered speech provider the active one.

        Raises:
            ProviderUnavailableError: If provider_id is not registered
        """
        if provider_id not in self._speech:
            raise ProviderUnavailableError(f"Speech provider '{provider_id}' is not registered")
        self._speech_id = provider_id
        return self._speech[provider_id]

    @property
    def speech_provider(self) -> SpeechProvider | None:
        return self._speech.get(self._speech_id)

    def set_community_audio(self, client: ForvoClient | None) -> None:
        self._community = client

    def fetch_pronunciation(
        self,
        word: str,
        voice_id: str = "",
        language_code: str = "",
        audio_format: str = "mp3",
    ) -> PronunciationAudio | None:
        """Get pronunciation audio for a word.

        Community recordings are tried first. Any community failure or an
        empty result falls through to exactly one synthesis call.

        Returns:
            The audio, or None if neither tier produced any

        Raises:
            SynthesisError: If the synthesis call fails
        """
        audio = self._fetch_community(word)
        if audio is not None:
            return audio

        speech = self.speech_provider
        if speech is None:
            logger.warning("No speech provider configured for pronunciation audio")
            return None

        logger.info(f"Using {speech.name} for vocab audio generation")
        data = speech.synthesize(word, voice_id, language_code, audio_format)
        if not data:
            return None
        return PronunciationAudio(data, f"vocab.{speech.audio_extension(audio_format)}", speech.id)

    def _fetch_community(self, word: str) -> PronunciationAudio | None:
        if self._community is None or not self._community.is_available():
            return None

        logger.info("Searching community audio")
        try:
            hits = self._community.search(word)
            if not hits:
                return None
            data = self._community.download(hits[0].url)
        except Exception as e:
            logger.warning(f"Community audio search failed: {e}, falling back to speech synthesis")
            return None

        if not data:
            return None
        logger.info(f"Downloaded vocab audio: {hits[0].filename} ({len(data)} bytes)")
        return PronunciationAudio(data, hits[0].filename, "community")
