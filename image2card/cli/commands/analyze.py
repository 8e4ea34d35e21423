"""CLI command for turning a sentence into a flashcard."""

from image2card.orchestration import create_card_processor
from image2card.presenters import ConsolePresenter
from image2card.services import ExportService

from .session import build_config, run_until_idle


def analyze_command(args) -> int:
    """Execute the analyze subcommand.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 = success, 1 = failure)
    """
    config = build_config(args)
    presenter = ConsolePresenter()

    sentence = args.sentence.strip()
    if not sentence:
        presenter.show_error("Sentence cannot be empty")
        return 1

    processor = create_card_processor(config, presenter)
    exporter = ExportService(config)
    exported = []

    def export(record):
        card_dir = exporter.export_record(record)
        exported.append(card_dir)
        presenter.show_success(f"Card saved to {card_dir}")

    processor.process(sentence, target_word=args.word or "", voice_id=args.voice or "", on_done=export)

    if not run_until_idle(processor, config.poll_interval):
        presenter.show_warning("Cancelled")
        return 1
    return 0 if exported else 1
