"""Multi-stage sentence analysis for flashcard generation."""

import logging
from collections.abc import Callable
from typing import Any

from image2card.exceptions import TaskCancelledError
from image2card.interfaces import AnnotationGenerator, Dictionary, PitchAccentStore, Tokenizer
from image2card.models import AnalysisResult, StageResult

from .alignment import AlignmentEngine
from .provider_registry import ProviderRegistry

logger = logging.getLogger(__name__)

# Parts of speech preferred when choosing a target word
CONTENT_POS = ("名詞", "動詞", "形容詞")

# Target word used when the sentence yields no token at all
FALLBACK_WORD = "詞"


class SentenceAnalyzer:
    """Analyze a sentence into the text fields of a flashcard.

    Stages run in order: target word selection, sentence annotation,
    dictionary form and reading resolution, target word annotation,
    definition lookup, translation, pitch accent lookup and highlighting.
    Each stage yields a StageResult; a failed stage degrades only its own
    field and the rest of the analysis continues.

    The tokenizer and annotation generator are required. The dictionary,
    pitch accent store and translator registry are optional.
    """

    def __init__(
        self,
        tokenizer: Tokenizer | None,
        annotator: AnnotationGenerator | None,
        registry: ProviderRegistry | None = None,
        dictionary: Dictionary | None = None,
        pitch_accent: PitchAccentStore | None = None,
        alignment: AlignmentEngine | None = None,
        preferred_translator: str = "",
        translation_model: str = "",
    ):
        self.tokenizer = tokenizer
        self.annotator = annotator
        self.registry = registry
        self.dictionary = dictionary
        self.pitch_accent = pitch_accent
        self.alignment = alignment or AlignmentEngine()
        self.preferred_translator = preferred_translator
        self.translation_model = translation_model

    def is_ready(self) -> bool:
        return self.tokenizer is not None and self.annotator is not None

    def analyze_sentence(
        self,
        sentence: str,
        target_word: str = "",
        cancelled_check: Callable[[], bool] | None = None,
    ) -> AnalysisResult:
        """Analyze a sentence.

        Args:
            sentence: Plain sentence text
            target_word: Word to focus on; chosen automatically when empty
            cancelled_check: Polled before remote calls; returning True aborts

        Returns:
            AnalysisResult. Input errors (empty sentence, analyzer not ready)
            are reported in its ``error`` field and no stage runs.

        Raises:
            TaskCancelledError: If cancelled_check reports cancellation
        """
        if not sentence:
            return AnalysisResult.from_error("Sentence cannot be empty")
        if not self.is_ready():
            return AnalysisResult.from_error("Analyzer not initialized")

        stages: dict[str, StageResult] = {}

        focus_word = target_word
        if not focus_word:
            stages["target_word"] = self._run_stage(
                "target_word", lambda: self._select_target_word(sentence), ""
            )
            focus_word = stages["target_word"].value
        if not focus_word:
            logger.warning(f"Could not determine target word for sentence: {sentence}")
            focus_word = FALLBACK_WORD

        stages["annotation"] = self._run_stage(
            "annotation", lambda: self.annotator.generate(sentence), sentence
        )
        annotated = stages["annotation"].value

        stages["dictionary_form"] = self._run_stage(
            "dictionary_form", lambda: self.tokenizer.dictionary_form(focus_word), focus_word
        )
        dictionary_form = stages["dictionary_form"].value or focus_word

        # Read the lemma rather than the inflected surface (よむ, not よんだ) so
        # the pitch accent lookup gets a (headword, reading) pair that exists
        stages["reading"] = self._run_stage(
            "reading", lambda: self.tokenizer.reading(dictionary_form), focus_word
        )
        reading = stages["reading"].value

        stages["word_annotation"] = self._run_stage(
            "word_annotation",
            lambda: self._annotate_word(dictionary_form, reading),
            dictionary_form,
        )

        self._check_cancelled(cancelled_check)
        stages["definition"] = self._run_stage(
            "definition", lambda: self._lookup_definition(focus_word, dictionary_form), ""
        )

        self._check_cancelled(cancelled_check)
        stages["translation"] = self._run_stage(
            "translation", lambda: self._translate(sentence), ""
        )

        stages["pitch_accent"] = self._run_stage(
            "pitch_accent", lambda: self._lookup_pitch_accent(dictionary_form, reading), ""
        )

        result = AnalysisResult(
            highlighted_sentence=self.alignment.highlight(sentence, focus_word),
            translation=stages["translation"].value,
            target_word=dictionary_form,
            target_word_annotation=stages["word_annotation"].value,
            highlighted_annotated_sentence=self.alignment.highlight(annotated, focus_word),
            definition=stages["definition"].value,
            pitch_accent_markup=stages["pitch_accent"].value,
            stage_errors={name: stage.error for name, stage in stages.items() if not stage.ok},
        )
        logger.debug(f"Analysis complete for sentence: {sentence}")
        return result

    def _run_stage(self, name: str, func: Callable[[], Any], default: Any) -> StageResult:
        try:
            return StageResult.success(func())
        except TaskCancelledError:
            raise
        except Exception as e:
            logger.warning(f"Stage '{name}' failed: {e}")
            return StageResult.failure(str(e) or type(e).__name__, default)

    @staticmethod
    def _check_cancelled(cancelled_check: Callable[[], bool] | None) -> None:
        if cancelled_check is not None and cancelled_check():
            raise TaskCancelledError("Analysis cancelled")

    def _select_target_word(self, sentence: str) -> str:
        """First content word, else the first non-empty token, else ""."""
        tokens = [t for t in self.tokenizer.analyze(sentence) if t.surface]
        for token in tokens:
            if token.part_of_speech in CONTENT_POS:
                return token.surface
        return tokens[0].surface if tokens else ""

    def _annotate_word(self, word: str, reading: str) -> str:
        if not reading:
            return word
        return self.annotator.generate_for_word(word)

    def _lookup_definition(self, surface: str, dictionary_form: str) -> str:
        if self.dictionary is None:
            return ""
        return self.dictionary.lookup(surface, dictionary_form).definition

    def _translate(self, sentence: str) -> str:
        if self.registry is None:
            return ""
        translator = self.registry.select_translator(
            self.preferred_translator, model=self.translation_model
        )
        if translator is None:
            logger.warning("No available translators, skipping translation")
            return ""
        logger.info(f"Translating with {translator.name}")
        return translator.translate(sentence)

    def _lookup_pitch_accent(self, headword: str, reading: str) -> str:
        if self.pitch_accent is None:
            return ""
        entries = self.pitch_accent.lookup(headword, reading)
        if not entries and reading:
            entries = self.pitch_accent.lookup(reading, reading)
        return self.pitch_accent.format_as_markup(entries)
