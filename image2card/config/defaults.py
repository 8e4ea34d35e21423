"""Default configuration values for Image2Card."""

import os
from collections.abc import Mapping

from .config import Image2CardConfig

# Config field -> environment variable holding its secret
API_KEY_ENV = {
    "remote_api_key": "IMAGE2CARD_API_KEY",
    "deepl_api_key": "DEEPL_API_KEY",
    "elevenlabs_api_key": "ELEVENLABS_API_KEY",
    "minimax_api_key": "MINIMAX_API_KEY",
    "forvo_api_key": "FORVO_API_KEY",
}


def create_default_config(environ: Mapping[str, str] | None = None, **overrides) -> Image2CardConfig:
    """Create a default configuration with optional overrides.

    API keys are never stored in files; any key not given as an override
    is read from its environment variable (see API_KEY_ENV).

    Args:
        environ: Mapping to read API keys from (defaults to os.environ)
        **overrides: Keyword arguments to override default values

    Returns:
        Image2CardConfig with defaults, environment keys and overrides applied

    Raises:
        ValidationError: If an option has an unsupported value

    Example:
        config = create_default_config(
            ocr_engine="vision",
            vision_model="xAI/grok-2-vision-1212",
        )
    """
    environ = os.environ if environ is None else environ
    for field_name, env_name in API_KEY_ENV.items():
        value = environ.get(env_name)
        if value:
            overrides.setdefault(field_name, value)
    return Image2CardConfig(**overrides)
