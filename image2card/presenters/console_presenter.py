"""Console presenter for CLI output."""

import re

from image2card.models import FlashcardRecord, ScanResult, Voice

_TAG = re.compile(r"<[^>]+>")


def _plain(html: str) -> str:
    """Strip markup for terminal display; line breaks become " / "."""
    return _TAG.sub("", html.replace("<br>", " / "))


class ConsolePresenter:
    """Present output to console (CLI implementation)."""

    def show_info(self, message: str) -> None:
        """Display an informational message."""
        print(message)

    def show_success(self, message: str) -> None:
        """Display a success message."""
        print(f"[OK] {message}")

    def show_warning(self, message: str) -> None:
        """Display a warning message."""
        print(f"[WARN] {message}")

    def show_error(self, message: str) -> None:
        """Display an error message."""
        print(f"[ERROR] {message}")

    def show_scan_result(self, result: ScanResult) -> None:
        """Display the text extracted from an image."""
        print(f"\nScan Result ({result.engine}):")
        print(f"  {result.text}")

    def show_flashcard(self, record: FlashcardRecord) -> None:
        """Display a processed flashcard."""
        print("\nFlashcard:")
        print("=" * 60)
        print(f"  Word:         {_plain(record.target_word)}")
        print(f"  Furigana:     {_plain(record.target_word_furigana)}")
        print(f"  Sentence:     {_plain(record.sentence)}")
        print(f"  Annotated:    {_plain(record.sentence_furigana)}")
        print(f"  Translation:  {record.translation or '-'}")
        print(f"  Definition:   {_plain(record.definition) or '-'}")
        print(f"  Pitch accent: {_plain(record.pitch_accent) or '-'}")

        media = [
            name
            for name in (
                record.image_filename,
                record.vocab_audio_filename,
                record.sentence_audio_filename,
            )
            if name
        ]
        if media:
            print(f"  Media:        {', '.join(media)}")

    def show_voices(self, voices: list[Voice]) -> None:
        """Display available speech synthesis voices."""
        print(f"\nVoices ({len(voices)}):")
        for voice in voices:
            category = f" [{voice.category}]" if voice.category else ""
            print(f"  {voice.id:30s} {voice.name}{category}")
