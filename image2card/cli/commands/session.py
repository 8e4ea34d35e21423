"""Shared setup and control loop for CLI commands."""

import logging
import time

from image2card.config import Image2CardConfig, create_default_config
from image2card.orchestration import CardProcessor

logger = logging.getLogger(__name__)

# argparse dest names copied into the configuration when given
CONFIG_OPTIONS = ("ocr_engine", "preferred_translator", "audio_provider", "audio_format", "output_dir")


def build_config(args, **overrides) -> Image2CardConfig:
    """Create the configuration from CLI options and environment API keys."""
    for option in CONFIG_OPTIONS:
        value = getattr(args, option, None)
        if value:
            overrides[option] = value

    return create_default_config(**overrides)


def run_until_idle(processor: CardProcessor, poll_interval: float) -> bool:
    """Drive the orchestrator until every submitted task has delivered its callback.

    Callbacks may submit follow-up tasks; the loop keeps going until the
    queue drains. Ctrl+C cancels outstanding work.

    Returns:
        False if interrupted
    """
    orchestrator = processor.orchestrator
    try:
        while not orchestrator.is_idle():
            orchestrator.poll()
            time.sleep(poll_interval)
    except KeyboardInterrupt:
        logger.info("Interrupted, cancelling tasks")
        processor.shutdown()
        return False
    return True
