"""Capability provider exceptions."""

from .base import Image2CardException


class ProviderError(Image2CardException):
    """Raised when a capability provider call fails."""

    pass


class ProviderUnavailableError(ProviderError):
    """Raised when the requested provider is not registered or not initialized."""

    pass


class OCRError(ProviderError):
    """Raised when text extraction fails."""

    pass


class SynthesisError(ProviderError):
    """Raised when speech synthesis or voice loading fails."""

    pass


class TranslationError(ProviderError):
    """Raised when a translation request fails."""

    pass


class DictionaryLookupError(ProviderError):
    """Raised when a dictionary lookup fails."""

    pass
