"""Scan and process workflow that turns an image into a flashcard."""

import logging
from collections.abc import Callable

from image2card.config import Image2CardConfig
from image2card.exceptions import AnalysisError, OCRError, ProviderError, ProviderUnavailableError
from image2card.interfaces import PresenterProtocol
from image2card.models import FlashcardRecord, OCREngine, ScanResult, Task, Voice
from image2card.services.provider_registry import ProviderRegistry
from image2card.services.providers import guess_image_mime
from image2card.services.sentence_analyzer import SentenceAnalyzer
from image2card.utils import clean_ocr_text

from .task_orchestrator import OrchestratorState, TaskOrchestrator

logger = logging.getLogger(__name__)

SCAN_TASK = "OCR Image Processing"
PROCESS_TASK = "Scan Processing"
VOICES_TASK = "Voice List Refresh"


class CardProcessor:
    """Run scans and card processing as orchestrated background tasks.

    At most one scan and one processing task are active at a time; the
    busy flags live in the orchestrator's OrchestratorState and are cleared
    by the task callbacks and by shutdown().
    """

    def __init__(
        self,
        config: Image2CardConfig,
        orchestrator: TaskOrchestrator,
        registry: ProviderRegistry,
        analyzer: SentenceAnalyzer,
        presenter: PresenterProtocol,
    ):
        """Initialize the card processor.

        Args:
            config: Configuration
            orchestrator: Task orchestrator that runs the work
            registry: Provider registry for OCR, translation and speech
            analyzer: Sentence analyzer
            presenter: Presenter for user-facing messages
        """
        self.config = config
        self.orchestrator = orchestrator
        self.registry = registry
        self.analyzer = analyzer
        self.presenter = presenter

    @property
    def state(self) -> OrchestratorState:
        return self.orchestrator.state

    @property
    def default_voice_id(self) -> str:
        if self.config.audio_provider == "minimax":
            return self.config.minimax_voice_id
        return self.config.elevenlabs_voice_id

    def scan(
        self,
        image_bytes: bytes,
        on_done: Callable[[ScanResult], None] | None = None,
        on_failed: Callable[[str], None] | None = None,
    ) -> Task | None:
        """Extract text from an image in the background.

        Returns:
            The submitted task, or None if a scan is already running or the
            image is empty
        """
        if self.state.scanning:
            logger.warning("Scan already in progress, ignoring request")
            self.presenter.show_warning("Scan already in progress.")
            return None
        if not image_bytes:
            self.presenter.show_error("No image selected.")
            return None

        engine = self.config.ocr_engine
        model = self.config.vision_model if engine == OCREngine.VISION.value else ""

        def work(state: OrchestratorState) -> ScanResult:
            state.check_cancelled(SCAN_TASK)
            provider = self.registry.select_ocr(engine, model=model)
            logger.info(f"Using {provider.name} for OCR")
            text = clean_ocr_text(provider.extract_text(image_bytes))
            if not text:
                raise OCRError("OCR returned no text")
            logger.info(f"OCR Result: {text}")
            return ScanResult(text=text, engine=provider.id, image=image_bytes)

        def complete(result: ScanResult) -> None:
            self.state.scanning = False
            self.presenter.show_scan_result(result)
            if on_done:
                on_done(result)

        def failed(message: str) -> None:
            self.state.scanning = False
            self.presenter.show_error(message)
            if on_failed:
                on_failed(message)

        self.state.scanning = True
        logger.info(f"Starting scan of {len(image_bytes)} byte image")
        return self.orchestrator.submit(SCAN_TASK, work, complete, failed)

    def process(
        self,
        sentence: str,
        target_word: str = "",
        voice_id: str = "",
        image_bytes: bytes = b"",
        on_done: Callable[[FlashcardRecord], None] | None = None,
        on_failed: Callable[[str], None] | None = None,
    ) -> Task | None:
        """Analyze a sentence and generate audio in the background.

        Args:
            sentence: Sentence to turn into a card
            target_word: Word to focus on (chosen automatically when empty)
            voice_id: Speech voice (defaults to the configured provider's voice)
            image_bytes: Optional image attached to the card
            on_done: Called with the FlashcardRecord
            on_failed: Called with an error message

        Returns:
            The submitted task, or None if processing is already running
        """
        if self.state.processing:
            logger.warning("Processing already in progress, ignoring request")
            self.presenter.show_warning("Processing already in progress.")
            return None

        voice = voice_id or self.default_voice_id

        def work(state: OrchestratorState) -> FlashcardRecord:
            return self._build_record(state, sentence, target_word, voice, image_bytes)

        def complete(record: FlashcardRecord) -> None:
            self.state.processing = False
            self.presenter.show_flashcard(record)
            if on_done:
                on_done(record)

        def failed(message: str) -> None:
            self.state.processing = False
            self.presenter.show_error(message)
            if on_failed:
                on_failed(message)

        self.state.processing = True
        logger.info(f"Processing sentence '{sentence}', target word '{target_word}'")
        return self.orchestrator.submit(PROCESS_TASK, work, complete, failed)

    def _build_record(
        self,
        state: OrchestratorState,
        sentence: str,
        target_word: str,
        voice_id: str,
        image_bytes: bytes,
    ) -> FlashcardRecord:
        """Task body of process(); runs on the worker thread."""
        state.check_cancelled(PROCESS_TASK)
        analysis = self.analyzer.analyze_sentence(
            sentence, target_word, cancelled_check=lambda: state.cancel_requested
        )
        if not analysis.success:
            raise AnalysisError(analysis.error)
        if analysis.degraded:
            logger.warning(f"Analysis degraded: {', '.join(sorted(analysis.stage_errors))}")

        record = FlashcardRecord(
            sentence=analysis.highlighted_sentence,
            sentence_furigana=analysis.highlighted_annotated_sentence,
            translation=analysis.translation,
            target_word=analysis.target_word,
            target_word_furigana=analysis.target_word_annotation,
            pitch_accent=analysis.pitch_accent_markup,
            definition=analysis.definition,
        )
        if image_bytes:
            record.image = image_bytes
            record.image_filename = f"image.{guess_image_mime(image_bytes).split('/')[1]}"

        language = self.config.language_code
        audio_format = self.config.audio_format

        if record.target_word:
            state.check_cancelled(PROCESS_TASK)
            logger.info(f"Generating vocab audio for: {record.target_word}")
            try:
                audio = self.registry.fetch_pronunciation(
                    record.target_word, voice_id, language, audio_format
                )
            except ProviderError as e:
                logger.warning(f"Vocab audio failed: {e}")
                audio = None
            if audio is not None:
                record.vocab_audio = audio.data
                record.vocab_audio_filename = audio.filename

        speech = self.registry.speech_provider
        if speech is not None:
            state.check_cancelled(PROCESS_TASK)
            logger.info(f"Generating sentence audio for: {sentence}")
            try:
                record.sentence_audio = speech.synthesize(sentence, voice_id, language, audio_format)
            except ProviderError as e:
                logger.warning(f"Sentence audio failed: {e}")
            if record.sentence_audio:
                record.sentence_audio_filename = f"sentence.{speech.audio_extension(audio_format)}"

        logger.info("Processing complete")
        return record

    def refresh_voices(
        self,
        on_done: Callable[[list[Voice]], None] | None = None,
        on_failed: Callable[[str], None] | None = None,
    ) -> Task:
        """Reload the active speech provider's voice list as a tracked task."""

        def work(state: OrchestratorState) -> list[Voice]:
            state.check_cancelled(VOICES_TASK)
            speech = self.registry.speech_provider
            if speech is None:
                raise ProviderUnavailableError("No speech provider configured")
            return speech.load_voices()

        def complete(voices: list[Voice]) -> None:
            self.presenter.show_voices(voices)
            if on_done:
                on_done(voices)

        def failed(message: str) -> None:
            self.presenter.show_error(message)
            if on_failed:
                on_failed(message)

        return self.orchestrator.submit(VOICES_TASK, work, complete, failed)

    def shutdown(self) -> int:
        """Cancel outstanding work, waiting a bounded time per task.

        Returns:
            Number of abandoned tasks
        """
        return self.orchestrator.cancel_all(self.config.task_cancel_timeout)
