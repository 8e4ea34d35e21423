"""Configuration classes for Image2Card."""

from dataclasses import dataclass, field
from pathlib import Path

from image2card.exceptions import ValidationError

# Accepted values of the enumerated options
CHOICES = {
    "ocr_engine": ("tesseract", "easyocr", "vision"),
    "tesseract_orientation": ("horizontal", "vertical"),
    "preferred_translator": ("deepl", "model", "none"),
    "audio_provider": ("elevenlabs", "minimax"),
    "audio_format": ("mp3", "opus"),
}


@dataclass(frozen=True)
class Image2CardConfig:
    """Immutable configuration for scanning and card processing.

    All configuration is frozen (immutable) so it can be shared with
    worker threads without copying.
    """

    # Language settings
    language_code: str = "ja"

    # OCR settings
    ocr_engine: str = "tesseract"  # "tesseract", "easyocr" or "vision"
    tesseract_language: str = "jpn"
    tesseract_orientation: str = "horizontal"  # "horizontal" or "vertical"
    easyocr_languages: list[str] = field(default_factory=lambda: ["ja", "en"])

    # Remote model settings (OpenAI-compatible chat completions endpoint)
    remote_api_url: str = "https://api.x.ai/v1"
    remote_api_key: str = ""
    vision_model: str = "xAI/grok-2-vision-1212"  # "Provider/model" label
    translation_model: str = "xAI/grok-3-mini"
    remote_timeout: float = 120.0

    # Translation settings
    preferred_translator: str = "deepl"  # "deepl", "model" or "none"
    deepl_api_key: str = ""
    deepl_use_free_api: bool = True
    deepl_source_lang: str = "JA"
    deepl_target_lang: str = "EN"

    # Speech synthesis settings
    audio_provider: str = "elevenlabs"  # "elevenlabs" or "minimax"
    audio_format: str = "mp3"  # "mp3" or "opus"
    elevenlabs_api_key: str = ""
    elevenlabs_voice_id: str = ""
    elevenlabs_model: str = "eleven_multilingual_v2"
    minimax_api_key: str = ""
    minimax_voice_id: str = "Japanese_GentleButler"
    minimax_model: str = "speech-2.6-hd"

    # Community pronunciation audio
    forvo_api_key: str = ""
    forvo_timeout: float = 10.0

    # Dictionary settings
    jmdict_path: Path = field(default_factory=lambda: Path.home() / ".image2card" / "JMdict_e")
    use_offline_dict: bool = True
    jisho_api_url: str = "https://jisho.org/api/v1/search/words"
    jisho_delay: float = 0.5  # Seconds between API calls

    # Pitch accent settings
    pitch_accent_path: Path = field(
        default_factory=lambda: Path.home() / ".image2card" / "pitch_accent.csv"
    )
    use_pitch_accent: bool = True

    # Highlighting
    highlight_color: str = "green"

    # Task orchestration
    task_cancel_timeout: float = 5.0  # Seconds to wait per task at shutdown
    poll_interval: float = 0.05  # Seconds between control-loop ticks

    # Output
    output_dir: Path = field(default_factory=lambda: Path.cwd() / "image2card_output")

    def __post_init__(self):
        """Convert string paths to Path objects and check enumerated options.

        Raises:
            ValidationError: If an option has an unsupported value
        """
        for option, allowed in CHOICES.items():
            value = getattr(self, option)
            if value not in allowed:
                raise ValidationError(
                    f"Invalid {option} '{value}' (expected one of: {', '.join(allowed)})"
                )
        if self.task_cancel_timeout < 0 or self.poll_interval <= 0:
            raise ValidationError("task_cancel_timeout must be >= 0 and poll_interval > 0")

        if isinstance(self.jmdict_path, str):
            object.__setattr__(self, "jmdict_path", Path(self.jmdict_path))
        if isinstance(self.pitch_accent_path, str):
            object.__setattr__(self, "pitch_accent_path", Path(self.pitch_accent_path))
        if isinstance(self.output_dir, str):
            object.__setattr__(self, "output_dir", Path(self.output_dir))
