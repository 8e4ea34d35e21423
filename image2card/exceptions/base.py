"""Base exception classes for Image2Card."""


class Image2CardException(Exception):
    """Base exception for all Image2Card errors.

    All custom exceptions in the image2card package should inherit
    from this base class for consistent error handling.
    """

    pass


class AnalysisError(Image2CardException):
    """Raised when sentence analysis returns an error result."""

    pass


class TaskCancelledError(Image2CardException):
    """Raised by task work that observed a cancellation request."""

    pass
