"""Configuration management for Image2Card."""

from .config import CHOICES, Image2CardConfig
from .defaults import API_KEY_ENV, create_default_config

__all__ = ["API_KEY_ENV", "CHOICES", "Image2CardConfig", "create_default_config"]
