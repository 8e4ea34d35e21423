"""CLI command for listing speech synthesis voices."""

from image2card.orchestration import create_registry
from image2card.orchestration.card_processor import CardProcessor
from image2card.orchestration.task_orchestrator import TaskOrchestrator
from image2card.presenters import ConsolePresenter
from image2card.services import SentenceAnalyzer

from .session import build_config, run_until_idle


def voices_command(args) -> int:
    """Execute the voices subcommand.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 = success, 1 = failure)
    """
    config = build_config(args)
    presenter = ConsolePresenter()

    # Voice listing needs no language analysis, so MeCab and dictionaries are not loaded
    registry = create_registry(config)
    processor = CardProcessor(
        config=config,
        orchestrator=TaskOrchestrator(),
        registry=registry,
        analyzer=SentenceAnalyzer(tokenizer=None, annotator=None),
        presenter=presenter,
    )

    failures = []
    processor.refresh_voices(on_failed=failures.append)

    if not run_until_idle(processor, config.poll_interval):
        return 1
    return 1 if failures else 0
