"""Validation utilities for the link shortener."""

import re
from typing import Tuple

CUSTOM_CODE_PATTERN = re.compile(r'^[A-Za-z0-9_~-]+$')
CUSTOM_CODE_MAX_LENGTH = 64


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate a long URL.

    Only presence is checked; the target is redirected to unchanged.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"
    return True, ""


def is_valid_custom_code(
    code: str,
    min_length: int = 8,
    max_length: int = CUSTOM_CODE_MAX_LENGTH,
) -> Tuple[bool, str]:
    """Validate a caller-supplied short code.

    Args:
        code: The short code to validate
        min_length: Minimum length for custom codes
        max_length: Maximum length for custom codes

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not code or not isinstance(code, str):
        return False, "Short code is required"

    if len(code) < min_length:
        return False, f"Short code must be at least {min_length} characters"

    if len(code) > max_length:
        return False, f"Short code must be at most {max_length} characters"

    if not CUSTOM_CODE_PATTERN.match(code):
        return False, "Short code can only contain letters, numbers, '-', '_' and '~'"

    return True, ""
