"""Main CLI entry point for image2card."""

import argparse
import logging
import sys

from image2card import __version__
from image2card.cli.commands import analyze, scan, voices


def _add_provider_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--word", help="Target word (chosen automatically if omitted)")
    parser.add_argument("--voice", help="Speech voice ID (defaults to the configured voice)")
    parser.add_argument(
        "--translator",
        dest="preferred_translator",
        choices=["deepl", "model", "none"],
        help="Preferred translator",
    )
    parser.add_argument(
        "--audio-provider",
        choices=["elevenlabs", "minimax"],
        help="Speech synthesis provider",
    )
    parser.add_argument("--audio-format", choices=["mp3", "opus"], help="Audio format")
    parser.add_argument("--output-dir", help="Directory for exported cards")


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="image2card",
        description="Turn Japanese text in images into annotated, voiced flashcards",
        epilog="Use 'image2card <command> --help' for command-specific help",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # image2card scan <image>
    scan_parser = subparsers.add_parser(
        "scan",
        help="Create a card from an image",
        description="Extract text from an image with OCR and turn it into a flashcard",
    )
    scan_parser.add_argument("image", help="Path to image file (.png, .jpg, .webp)")
    scan_parser.add_argument(
        "--ocr",
        dest="ocr_engine",
        choices=["tesseract", "easyocr", "vision"],
        help="OCR engine",
    )
    scan_parser.add_argument(
        "--vertical",
        action="store_true",
        help="Image contains vertical text (Tesseract only)",
    )
    scan_parser.add_argument(
        "--ocr-only",
        action="store_true",
        help="Print the recognized text without creating a card",
    )
    _add_provider_options(scan_parser)

    # image2card analyze <sentence>
    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Create a card from a sentence",
        description="Analyze a Japanese sentence and turn it into a flashcard",
    )
    analyze_parser.add_argument("sentence", help="Japanese sentence")
    _add_provider_options(analyze_parser)

    # image2card voices
    voices_parser = subparsers.add_parser(
        "voices",
        help="List speech synthesis voices",
        description="Fetch the voice list of the configured speech provider",
    )
    voices_parser.add_argument(
        "--audio-provider",
        choices=["elevenlabs", "minimax"],
        help="Speech synthesis provider",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Dispatch to appropriate command
    if args.command == "scan":
        return scan.scan_command(args)
    elif args.command == "analyze":
        return analyze.analyze_command(args)
    elif args.command == "voices":
        return voices.voices_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
