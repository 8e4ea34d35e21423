"""Null presenter for testing (no output)."""

from image2card.models import FlashcardRecord, ScanResult, Voice


class NullPresenter:
    """Present output to nowhere (testing implementation)."""

    def show_info(self, message: str) -> None:
        """Display an informational message (no-op)."""
        pass

    def show_success(self, message: str) -> None:
        """Display a success message (no-op)."""
        pass

    def show_warning(self, message: str) -> None:
        """Display a warning message (no-op)."""
        pass

    def show_error(self, message: str) -> None:
        """Display an error message (no-op)."""
        pass

    def show_scan_result(self, result: ScanResult) -> None:
        """Display the text extracted from an image (no-op)."""
        pass

    def show_flashcard(self, record: FlashcardRecord) -> None:
        """Display a processed flashcard (no-op)."""
        pass

    def show_voices(self, voices: list[Voice]) -> None:
        """Display available speech synthesis voices (no-op)."""
        pass
