"""Tests for CardProcessor."""

import threading
from dataclasses import replace
from unittest.mock import MagicMock

import pytest

from image2card.exceptions import OCRError, ProviderUnavailableError, SynthesisError
from image2card.models import AnalysisResult, PronunciationAudio, Voice
from image2card.orchestration.card_processor import CardProcessor
from image2card.orchestration.task_orchestrator import TaskOrchestrator

PNG = b"\x89PNG\r\n\x1a\nimage"


@pytest.fixture
def ocr_provider():
    provider = MagicMock()
    provider.id = "tesseract"
    provider.name = "Tesseract (Local)"
    provider.extract_text.return_value = "本 を\n読 ん だ"
    return provider


@pytest.fixture
def speech():
    provider = MagicMock()
    provider.id = "elevenlabs"
    provider.name = "ElevenLabs"
    provider.synthesize.return_value = b"sentence-audio"
    provider.audio_extension.return_value = "mp3"
    return provider


@pytest.fixture
def registry(ocr_provider, speech):
    registry = MagicMock()
    registry.select_ocr.return_value = ocr_provider
    registry.speech_provider = speech
    registry.fetch_pronunciation.return_value = PronunciationAudio(b"vocab-audio", "vocab.mp3", "elevenlabs")
    return registry


@pytest.fixture
def analyzer():
    analyzer = MagicMock()
    analyzer.analyze_sentence.return_value = AnalysisResult(
        highlighted_sentence="本を<b>読ん</b>だ",
        translation="I read a book.",
        target_word="読む",
        target_word_annotation="読[よ]む",
        highlighted_annotated_sentence="本[ほん]を <b>読[よ]ん</b>だ",
        definition="1. to read",
        pitch_accent_markup="よむ [1]",
    )
    return analyzer


@pytest.fixture
def presenter():
    return MagicMock()


@pytest.fixture
def processor(test_config, registry, analyzer, presenter):
    return CardProcessor(test_config, TaskOrchestrator(), registry, analyzer, presenter)


class TestScan:
    """Tests for CardProcessor.scan()."""

    def test_scan_cleans_ocr_text(self, processor, registry, presenter, drain):
        results = []

        task = processor.scan(PNG, on_done=results.append)
        assert processor.state.scanning is True
        drain(processor.orchestrator)

        assert task is not None
        assert results[0].text == "本を読んだ"
        assert results[0].engine == "tesseract"
        assert results[0].image == PNG
        assert processor.state.scanning is False
        registry.select_ocr.assert_called_once_with("tesseract", model="")
        presenter.show_scan_result.assert_called_once_with(results[0])

    def test_vision_engine_gets_model(self, test_config, registry, analyzer, presenter, drain):
        config = replace(test_config, ocr_engine="vision", vision_model="xAI/grok-2-vision-1212")
        processor = CardProcessor(config, TaskOrchestrator(), registry, analyzer, presenter)

        processor.scan(PNG)
        drain(processor.orchestrator)

        registry.select_ocr.assert_called_once_with("vision", model="xAI/grok-2-vision-1212")

    def test_empty_ocr_result_fails(self, processor, ocr_provider, presenter, drain):
        ocr_provider.extract_text.return_value = " \n "
        errors = []

        processor.scan(PNG, on_failed=errors.append)
        drain(processor.orchestrator)

        assert errors == ["OCR Image Processing failed: OCR returned no text"]
        assert processor.state.scanning is False
        presenter.show_error.assert_called_once_with(errors[0])

    def test_unavailable_engine_fails_without_fallback(self, processor, registry, drain):
        registry.select_ocr.side_effect = ProviderUnavailableError("Tesseract (Local) is not initialized")
        errors = []

        processor.scan(PNG, on_failed=errors.append)
        drain(processor.orchestrator)

        assert errors == ["OCR Image Processing failed: Tesseract (Local) is not initialized"]
        assert registry.select_ocr.call_count == 1

    def test_ocr_error_is_reported(self, processor, ocr_provider, drain):
        ocr_provider.extract_text.side_effect = OCRError("Failed to load image: bad data")
        errors = []

        processor.scan(PNG, on_failed=errors.append)
        drain(processor.orchestrator)

        assert errors == ["OCR Image Processing failed: Failed to load image: bad data"]

    def test_empty_image_is_refused(self, processor, presenter):
        assert processor.scan(b"") is None
        assert processor.orchestrator.is_idle()
        presenter.show_error.assert_called_once()

    def test_second_scan_refused_while_busy(self, processor, ocr_provider, presenter, drain):
        release = threading.Event()
        ocr_provider.extract_text.side_effect = lambda image: (release.wait(5), "猫")[1]

        first = processor.scan(PNG)
        second = processor.scan(PNG)
        release.set()
        drain(processor.orchestrator)

        assert first is not None
        assert second is None
        presenter.show_warning.assert_called_once()

    def test_cancelled_before_start(self, processor, ocr_provider, drain):
        errors = []
        processor.state.request_cancel()

        processor.scan(PNG, on_failed=errors.append)
        drain(processor.orchestrator)

        assert errors == ["OCR Image Processing cancelled"]
        ocr_provider.extract_text.assert_not_called()


class TestProcess:
    """Tests for CardProcessor.process()."""

    def test_builds_record_with_audio(self, processor, analyzer, registry, speech, drain):
        records = []

        processor.process("本を読んだ", "読んだ", image_bytes=PNG, on_done=records.append)
        assert processor.state.processing is True
        drain(processor.orchestrator)

        record = records[0]
        assert record.target_word == "読む"
        assert record.sentence == "本を<b>読ん</b>だ"
        assert record.sentence_furigana == "本[ほん]を <b>読[よ]ん</b>だ"
        assert record.translation == "I read a book."
        assert record.pitch_accent == "よむ [1]"
        assert record.vocab_audio == b"vocab-audio"
        assert record.vocab_audio_filename == "vocab.mp3"
        assert record.sentence_audio == b"sentence-audio"
        assert record.sentence_audio_filename == "sentence.mp3"
        assert record.image == PNG
        assert record.image_filename == "image.png"
        assert processor.state.processing is False

        assert analyzer.analyze_sentence.call_args.args == ("本を読んだ", "読んだ")
        registry.fetch_pronunciation.assert_called_once_with("読む", "", "ja", "mp3")
        speech.synthesize.assert_called_once_with("本を読んだ", "", "ja", "mp3")

    def test_voice_override(self, processor, registry, speech, drain):
        processor.process("本を読んだ", voice_id="voice-9")
        drain(processor.orchestrator)

        assert registry.fetch_pronunciation.call_args.args[1] == "voice-9"
        assert speech.synthesize.call_args.args[1] == "voice-9"

    def test_default_voice_follows_audio_provider(self, test_config, registry, analyzer, presenter):
        config = replace(test_config, audio_provider="minimax", minimax_voice_id="Japanese_CalmLady")
        processor = CardProcessor(config, TaskOrchestrator(), registry, analyzer, presenter)
        assert processor.default_voice_id == "Japanese_CalmLady"

    def test_analysis_error_fails_task(self, processor, analyzer, registry, presenter, drain):
        analyzer.analyze_sentence.return_value = AnalysisResult.from_error("Sentence cannot be empty")
        errors = []

        processor.process("", on_failed=errors.append)
        drain(processor.orchestrator)

        assert errors == ["Scan Processing failed: Sentence cannot be empty"]
        registry.fetch_pronunciation.assert_not_called()
        assert processor.state.processing is False

    def test_audio_failures_leave_fields_empty(self, processor, registry, speech, drain):
        registry.fetch_pronunciation.side_effect = SynthesisError("ElevenLabs returned HTTP 401")
        speech.synthesize.side_effect = SynthesisError("ElevenLabs returned HTTP 401")
        records = []

        processor.process("本を読んだ", on_done=records.append)
        drain(processor.orchestrator)

        assert records[0].vocab_audio == b""
        assert records[0].sentence_audio_filename == ""
        assert records[0].definition == "1. to read"

    def test_no_speech_provider(self, processor, registry, drain):
        registry.speech_provider = None
        registry.fetch_pronunciation.return_value = None
        records = []

        processor.process("本を読んだ", on_done=records.append)
        drain(processor.orchestrator)

        assert records[0].has_audio is False

    def test_second_process_refused_while_busy(self, processor, analyzer, drain):
        release = threading.Event()
        result = analyzer.analyze_sentence.return_value
        analyzer.analyze_sentence.side_effect = lambda *a, **k: (release.wait(5), result)[1]

        assert processor.process("本を読んだ") is not None
        assert processor.process("本を読んだ") is None
        release.set()
        drain(processor.orchestrator)

    def test_cancellation_during_analysis(self, processor, analyzer, registry, drain):
        def analyze(sentence, target_word, cancelled_check):
            processor.state.request_cancel()
            assert cancelled_check() is True
            return analyzer.analyze_sentence.return_value

        analyzer.analyze_sentence.side_effect = analyze
        errors = []

        processor.process("本を読んだ", on_failed=errors.append)
        drain(processor.orchestrator)

        assert errors == ["Scan Processing cancelled"]
        registry.fetch_pronunciation.assert_not_called()


class TestRefreshVoicesAndShutdown:
    def test_refresh_voices(self, processor, speech, presenter, drain):
        speech.load_voices.return_value = [Voice("v1", "Akira")]
        loaded = []

        processor.refresh_voices(on_done=loaded.append)
        drain(processor.orchestrator)

        assert loaded == [[Voice("v1", "Akira")]]
        presenter.show_voices.assert_called_once_with([Voice("v1", "Akira")])

    def test_refresh_voices_without_provider(self, processor, registry, drain):
        registry.speech_provider = None
        errors = []

        processor.refresh_voices(on_failed=errors.append)
        drain(processor.orchestrator)

        assert errors == ["Voice List Refresh failed: No speech provider configured"]

    def test_shutdown_resets_busy_flags(self, processor, ocr_provider):
        release = threading.Event()
        ocr_provider.extract_text.side_effect = lambda image: (release.wait(5), "猫")[1]
        processor.scan(PNG)

        abandoned = processor.shutdown()

        assert abandoned == 1
        assert processor.state.scanning is False
        assert processor.orchestrator.is_idle()
        release.set()
