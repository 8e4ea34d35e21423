"""CLI command for scanning an image and turning its text into a flashcard."""

from pathlib import Path

from image2card.orchestration import create_card_processor
from image2card.presenters import ConsolePresenter
from image2card.services import ExportService

from .session import build_config, run_until_idle


def scan_command(args) -> int:
    """Execute the scan subcommand.

    Runs OCR on the image, then processes the recognized text as the card
    sentence unless --ocr-only is given.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 = success, 1 = failure)
    """
    overrides = {}
    if args.vertical:
        overrides["tesseract_orientation"] = "vertical"
    config = build_config(args, **overrides)
    presenter = ConsolePresenter()

    image_file = Path(args.image)
    if not image_file.exists():
        presenter.show_error(f"Image file not found: {image_file}")
        return 1
    image_bytes = image_file.read_bytes()

    processor = create_card_processor(config, presenter)
    exporter = ExportService(config)
    exported = []

    def export(record):
        card_dir = exporter.export_record(record)
        exported.append(card_dir)
        presenter.show_success(f"Card saved to {card_dir}")

    def process(scan_result):
        if args.ocr_only:
            return
        processor.process(
            scan_result.text,
            target_word=args.word or "",
            voice_id=args.voice or "",
            image_bytes=image_bytes,
            on_done=export,
        )

    presenter.show_info(f"Scanning {image_file.name}...")
    if processor.scan(image_bytes, on_done=process) is None:
        return 1

    if not run_until_idle(processor, config.poll_interval):
        presenter.show_warning("Cancelled")
        return 1
    if args.ocr_only:
        return 0
    return 0 if exported else 1
