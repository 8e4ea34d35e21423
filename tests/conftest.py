"""Pytest configuration and shared fixtures."""

import time
from unittest.mock import MagicMock

import pytest

from image2card.config import Image2CardConfig
from image2card.models import FlashcardRecord, PitchAccentEntry, Token
from image2card.presenters import NullPresenter


@pytest.fixture
def temp_dir(tmp_path):
    """Provide a temporary directory for test files."""
    return tmp_path


@pytest.fixture
def test_config(temp_dir):
    """Provide a test configuration with temporary paths and no credentials."""
    return Image2CardConfig(
        jmdict_path=temp_dir / "JMdict_e",
        pitch_accent_path=temp_dir / "pitch_accent.csv",
        output_dir=temp_dir / "output",
        jisho_delay=0,
        task_cancel_timeout=1.0,
        poll_interval=0.001,
    )


@pytest.fixture
def null_presenter():
    """Provide a null presenter for testing (no output)."""
    return NullPresenter()


class FakeTokenizer:
    """Tokenizer with canned answers, keyed by input text."""

    def __init__(self, tokens=None, lemmas=None, readings=None):
        self.tokens = tokens or {}
        self.lemmas = lemmas or {}
        self.readings = readings or {}

    def analyze(self, sentence):
        return self.tokens.get(sentence, [])

    def dictionary_form(self, word):
        return self.lemmas.get(word, word)

    def reading(self, word):
        return self.readings.get(word, "")


class FakeAnnotator:
    """Annotation generator returning canned annotations."""

    def __init__(self, sentences=None, words=None):
        self.sentences = sentences or {}
        self.words = words or {}

    def generate(self, sentence):
        return self.sentences.get(sentence, sentence)

    def generate_for_word(self, word):
        return self.words.get(word, word)


class FakePitchAccent:
    """Pitch accent store backed by a dict keyed on (headword, reading)."""

    def __init__(self, entries=None):
        self.entries = entries or {}
        self.calls = []

    def lookup(self, headword, reading=""):
        self.calls.append((headword, reading))
        return self.entries.get((headword, reading), [])

    def format_as_markup(self, entries):
        return "<br>".join(f"{e.reading} [{e.pattern}]" for e in entries)


@pytest.fixture
def yomu_tokenizer():
    """Tokenizer for the sentence "本を読んだ" (target 読んだ -> 読む)."""
    return FakeTokenizer(
        tokens={
            "本を読んだ": [
                Token("本", "名詞", "本", "ほん"),
                Token("を", "助詞", "を", "を"),
                Token("読ん", "動詞", "読む", "よん"),
                Token("だ", "助動詞", "だ", "だ"),
            ]
        },
        lemmas={"読んだ": "読む", "本": "本"},
        readings={"読む": "よむ", "本": "ほん"},
    )


@pytest.fixture
def yomu_annotator():
    """Annotator for the sentence "本を読んだ"."""
    return FakeAnnotator(
        sentences={"本を読んだ": "本[ほん]を 読[よ]んだ"},
        words={"読む": "読[よ]む", "本": "本[ほん]"},
    )


@pytest.fixture
def yomu_pitch_accent():
    return FakePitchAccent({("読む", "よむ"): [PitchAccentEntry("読む", "よむ", 1)]})


@pytest.fixture
def make_mock_token():
    """Factory fixture for mock fugashi word tokens."""

    def _make(surface, kana=None, pos1="名詞", lemma=None):
        token = MagicMock()
        token.surface = surface
        token.feature.kana = kana
        token.feature.pos1 = pos1
        token.feature.lemma = lemma if lemma is not None else surface
        return token

    return _make


@pytest.fixture
def drain():
    """Poll an orchestrator until every task has delivered its callback."""

    def _drain(orchestrator, timeout=5.0):
        deadline = time.monotonic() + timeout
        while not orchestrator.is_idle():
            if time.monotonic() > deadline:
                raise AssertionError(f"{orchestrator.pending} task(s) still pending")
            orchestrator.poll()
            time.sleep(0.001)

    return _drain


@pytest.fixture
def make_record():
    """Factory fixture for FlashcardRecord instances with sensible defaults."""

    def _make(**overrides):
        fields = {
            "sentence": '本を<b style="color: green;">読ん</b>だ',
            "sentence_furigana": '本[ほん]を <b style="color: green;">読[よ]ん</b>だ',
            "translation": "I read a book.",
            "target_word": "読む",
            "target_word_furigana": "読[よ]む",
            "pitch_accent": "よむ [1]",
            "definition": "1. to read",
        }
        fields.update(overrides)
        return FlashcardRecord(**fields)

    return _make
