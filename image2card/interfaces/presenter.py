"""Presenter protocol for output abstraction."""

from typing import Protocol

from image2card.models import FlashcardRecord, ScanResult, Voice


class PresenterProtocol(Protocol):
    """Interface for presenting output to user (CLI, GUI, etc).

    This protocol abstracts all output operations, allowing the same
    workflow to drive different presentation layers.
    """

    def show_info(self, message: str) -> None:
        """Display an informational message."""
        ...

    def show_success(self, message: str) -> None:
        """Display a success message."""
        ...

    def show_warning(self, message: str) -> None:
        """Display a warning message."""
        ...

    def show_error(self, message: str) -> None:
        """Display an error message."""
        ...

    def show_scan_result(self, result: ScanResult) -> None:
        """Display the text extracted from an image.

        Args:
            result: The scan result to display
        """
        ...

    def show_flashcard(self, record: FlashcardRecord) -> None:
        """Display a processed flashcard.

        Args:
            record: The flashcard record to display
        """
        ...

    def show_voices(self, voices: list[Voice]) -> None:
        """Display available speech synthesis voices."""
        ...
