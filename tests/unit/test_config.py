"""Tests for configuration defaults and validation."""

from pathlib import Path

import pytest

from image2card.config import Image2CardConfig, create_default_config
from image2card.exceptions import ValidationError


class TestImage2CardConfig:
    """Tests for Image2CardConfig."""

    def test_defaults(self):
        config = Image2CardConfig()
        assert config.ocr_engine == "tesseract"
        assert config.preferred_translator == "deepl"
        assert config.audio_provider == "elevenlabs"
        assert config.audio_format == "mp3"
        assert config.highlight_color == "green"

    def test_string_paths_converted(self):
        config = Image2CardConfig(jmdict_path="/tmp/JMdict_e", output_dir="/tmp/cards")
        assert config.jmdict_path == Path("/tmp/JMdict_e")
        assert isinstance(config.output_dir, Path)

    def test_frozen(self):
        config = Image2CardConfig()
        with pytest.raises(AttributeError):
            config.ocr_engine = "vision"

    @pytest.mark.parametrize(
        "option, value",
        [
            ("ocr_engine", "paper"),
            ("tesseract_orientation", "diagonal"),
            ("preferred_translator", "google"),
            ("audio_provider", "espeak"),
            ("audio_format", "wav"),
        ],
    )
    def test_invalid_choice(self, option, value):
        with pytest.raises(ValidationError, match=f"Invalid {option} '{value}'"):
            Image2CardConfig(**{option: value})

    def test_invalid_poll_interval(self):
        with pytest.raises(ValidationError, match="poll_interval"):
            Image2CardConfig(poll_interval=0)


class TestCreateDefaultConfig:
    """Tests for create_default_config()."""

    def test_overrides(self):
        config = create_default_config(environ={}, ocr_engine="vision")
        assert config.ocr_engine == "vision"

    def test_api_keys_read_from_environment(self):
        environ = {"DEEPL_API_KEY": "deepl-key", "MINIMAX_API_KEY": "mm-key", "FORVO_API_KEY": ""}

        config = create_default_config(environ=environ)

        assert config.deepl_api_key == "deepl-key"
        assert config.minimax_api_key == "mm-key"
        assert config.forvo_api_key == ""

    def test_explicit_key_wins_over_environment(self):
        config = create_default_config(environ={"DEEPL_API_KEY": "env"}, deepl_api_key="explicit")
        assert config.deepl_api_key == "explicit"

    def test_reads_os_environ_by_default(self, monkeypatch):
        monkeypatch.setenv("ELEVENLABS_API_KEY", "xi-key")
        assert create_default_config().elevenlabs_api_key == "xi-key"
