"""Common utilities for the link shortener."""

from .validators import is_valid_url, is_valid_custom_code
from .url_builder import build_short_url, last_path_segment
from .logging_config import setup_logging

__all__ = [
    "is_valid_url",
    "is_valid_custom_code",
    "build_short_url",
    "last_path_segment",
    "setup_logging",
]
