"""Configuration and setup exceptions."""

from .base import Image2CardException


class ValidationError(Image2CardException):
    """Raised when a configuration option or user input is out of range."""

    pass


class SetupError(Image2CardException):
    """Raised when a local resource cannot be prepared.

    Covers missing or unreadable data files (JMdict, pitch accent CSV) and
    OCR engines that fail to initialize.
    """

    pass
