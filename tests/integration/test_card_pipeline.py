"""Integration tests for the image -> flashcard pipeline."""

import argparse
import io
import json
from unittest.mock import patch

import pytest
from PIL import Image

from image2card.cli import main as cli_main
from image2card.cli.commands import analyze, scan
from image2card.config import API_KEY_ENV
from image2card.orchestration import CardProcessor, TaskOrchestrator
from image2card.presenters import NullPresenter
from image2card.services import (
    AlignmentEngine,
    DefinitionService,
    ExportService,
    JMdictProvider,
    PitchAccentService,
    ProviderRegistry,
    SentenceAnalyzer,
)
from image2card.services.providers import NoneTranslator

JMDICT_XML = """<?xml version="1.0" encoding="UTF-8"?>
<JMdict>
<entry>
<k_ele><keb>読む</keb></k_ele>
<r_ele><reb>よむ</reb></r_ele>
<sense><pos>Godan verb</pos><gloss>to read</gloss></sense>
<sense><gloss>to recite</gloss></sense>
</entry>
</JMdict>"""

OPEN = '<b style="color: green;">'
CLOSE = "</b>"


class FakeOCR:
    id = "tesseract"
    name = "Fake OCR"

    def __init__(self, text):
        self.text = text

    def is_initialized(self):
        return True

    def extract_text(self, image_bytes):
        return self.text


class FakeTranslator:
    id = "deepl"
    name = "Fake DeepL"

    def is_available(self):
        return True

    def translate(self, text):
        return "I read a book."


class FakeSpeech:
    id = "elevenlabs"
    name = "Fake ElevenLabs"

    def __init__(self):
        self.spoken = []

    def synthesize(self, text, voice_id="", language_code="", audio_format="mp3"):
        self.spoken.append(text)
        return b"ID3" + text.encode("utf-8")

    def audio_extension(self, audio_format):
        return "mp3"

    def load_voices(self):
        return []


@pytest.fixture
def png_file(tmp_path):
    path = tmp_path / "page.png"
    buffer = io.BytesIO()
    Image.new("RGB", (16, 16), "white").save(buffer, format="PNG")
    path.write_bytes(buffer.getvalue())
    return path


@pytest.fixture
def speech():
    return FakeSpeech()


@pytest.fixture
def processor(tmp_path, test_config, yomu_tokenizer, yomu_annotator, speech):
    """A CardProcessor wired with real services and fake remote providers."""
    jmdict_path = tmp_path / "JMdict_e"
    jmdict_path.write_text(JMDICT_XML, encoding="utf-8")
    jmdict = JMdictProvider(jmdict_path)
    jmdict.load()

    pitch_path = tmp_path / "pitch.csv"
    pitch_path.write_text("よむ,読む,1\n", encoding="utf-8")
    pitch_accent = PitchAccentService(pitch_path)
    pitch_accent.load()

    registry = ProviderRegistry()
    registry.register_ocr(FakeOCR("本 を\n読 ん だ"))
    registry.register_translator(FakeTranslator())
    registry.register_translator(NoneTranslator())
    registry.register_speech(speech)

    analyzer = SentenceAnalyzer(
        tokenizer=yomu_tokenizer,
        annotator=yomu_annotator,
        registry=registry,
        dictionary=DefinitionService([jmdict]),
        pitch_accent=pitch_accent,
        alignment=AlignmentEngine(test_config.highlight_color),
        preferred_translator="deepl",
    )
    return CardProcessor(test_config, TaskOrchestrator(), registry, analyzer, NullPresenter())


class TestCardPipeline:
    """Scan -> process -> export with real services and fake remote providers."""

    def test_image_to_exported_card(self, processor, png_file, speech, test_config, drain):
        image = png_file.read_bytes()
        records = []

        def on_scanned(result):
            processor.process(result.text, "読んだ", image_bytes=image, on_done=records.append)

        processor.scan(image, on_done=on_scanned)
        drain(processor.orchestrator)

        record = records[0]
        assert record.sentence == f"本を{OPEN}読んだ{CLOSE}"
        assert record.sentence_furigana == f"本[ほん]を {OPEN}読[よ]んだ{CLOSE}"
        assert record.target_word == "読む"
        assert record.target_word_furigana == "読[よ]む"
        assert record.definition == "1. to read<br>2. to recite"
        assert record.translation == "I read a book."
        assert record.pitch_accent.endswith("[1]")
        assert "ꜜ" in record.pitch_accent
        assert speech.spoken == ["読む", "本を読んだ"]

        card_dir = ExportService(test_config).export_record(record, name="card")
        fields = json.loads((card_dir / "card.json").read_text(encoding="utf-8"))
        assert fields["vocab_audio"] == "vocab.mp3"
        assert fields["sentence_audio"] == "sentence.mp3"
        assert fields["image"] == "image.png"
        assert (card_dir / "vocab.mp3").read_bytes() == "ID3読む".encode()
        assert (card_dir / "image.png").read_bytes() == image

    def test_automatic_target_word(self, processor, drain):
        records = []

        processor.process("本を読んだ", on_done=records.append)
        drain(processor.orchestrator)

        # First content word of the sentence
        assert records[0].target_word == "本"
        assert records[0].sentence == f"{OPEN}本{CLOSE}を読んだ"
        assert records[0].target_word_furigana == "本[ほん]"

    def test_translation_switched_off(self, processor, drain):
        processor.analyzer.preferred_translator = "none"
        records = []

        processor.process("本を読んだ", "読んだ", on_done=records.append)
        drain(processor.orchestrator)

        assert records[0].translation == ""
        assert records[0].definition.startswith("1. to read")

    def test_shutdown_after_work_is_clean(self, processor, drain):
        processor.process("本を読んだ", "読んだ")
        drain(processor.orchestrator)

        assert processor.shutdown() == 0
        assert processor.state.cancel_requested is False


class TestCli:
    """CLI commands driven end to end with the wired processor."""

    @pytest.fixture(autouse=True)
    def no_api_keys(self, monkeypatch):
        for name in API_KEY_ENV.values():
            monkeypatch.delenv(name, raising=False)

    def _args(self, tmp_path, **extra):
        values = {
            "word": "読んだ",
            "voice": None,
            "preferred_translator": None,
            "audio_provider": None,
            "audio_format": None,
            "output_dir": str(tmp_path / "cards"),
        }
        values.update(extra)
        return argparse.Namespace(**values)

    def test_analyze_command_exports_card(self, processor, tmp_path):
        args = self._args(tmp_path, sentence="本を読んだ")

        with patch.object(analyze, "create_card_processor", return_value=processor):
            assert analyze.analyze_command(args) == 0

        cards = list((tmp_path / "cards").glob("*/card.json"))
        assert len(cards) == 1
        assert json.loads(cards[0].read_text(encoding="utf-8"))["target_word"] == "読む"

    def test_analyze_command_rejects_blank_sentence(self, tmp_path, capsys):
        assert analyze.analyze_command(self._args(tmp_path, sentence="   ")) == 1
        assert "Sentence cannot be empty" in capsys.readouterr().out

    def test_scan_command(self, processor, png_file, tmp_path):
        args = self._args(tmp_path, image=str(png_file), ocr_engine=None, vertical=False, ocr_only=False)

        with patch.object(scan, "create_card_processor", return_value=processor):
            assert scan.scan_command(args) == 0

        card = next((tmp_path / "cards").glob("*/card.json"))
        fields = json.loads(card.read_text(encoding="utf-8"))
        assert fields["image"] == "image.png"
        assert fields["sentence"] == f"本を{OPEN}読んだ{CLOSE}"

    def test_scan_command_ocr_only(self, processor, png_file, tmp_path, capsys):
        args = self._args(tmp_path, image=str(png_file), ocr_engine=None, vertical=False, ocr_only=True)

        with patch.object(scan, "create_card_processor", return_value=processor):
            assert scan.scan_command(args) == 0

        assert not (tmp_path / "cards").exists()

    def test_scan_command_missing_image(self, tmp_path, capsys):
        args = self._args(tmp_path, image=str(tmp_path / "missing.png"), ocr_engine=None, vertical=False, ocr_only=False)

        assert scan.scan_command(args) == 1
        assert "Image file not found" in capsys.readouterr().out

    def test_main_dispatches_analyze(self, processor, tmp_path):
        argv = ["image2card", "analyze", "本を読んだ", "--word", "読んだ", "--output-dir", str(tmp_path / "cards")]

        with (
            patch("sys.argv", argv),
            patch.object(analyze, "create_card_processor", return_value=processor),
        ):
            assert cli_main.main() == 0

    def test_main_without_command_prints_help(self, capsys):
        with patch("sys.argv", ["image2card"]):
            assert cli_main.main() == 1
        assert "usage: image2card" in capsys.readouterr().out
