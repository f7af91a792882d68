"""Utility functions for reading raw input records."""

import re

import pandas as pd

CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")


def safe_int(value, default: int = 0) -> int:
    """Safely convert a value to integer.

    Args:
        value: Value to convert
        default: Default value if conversion fails

    Returns:
        Integer value
    """
    if value is None or _is_missing(value):
        return default
    try:
        return int(float(value))
    except (ValueError, TypeError):
        return default


def safe_str(value, default: str = "") -> str:
    """Safely convert a value to string.

    Args:
        value: Value to convert
        default: Default value if the value is missing

    Returns:
        String value
    """
    if value is None or _is_missing(value):
        return default
    return str(value).strip()


def parse_yes_no(value) -> bool:
    """Read a yes/no flag cell ('yes', 'y', 'true', '1' are truthy)."""
    return safe_str(value).lower() in ("yes", "y", "true", "1", "ya")


def split_codes(value) -> list[str]:
    """Split a comma-separated code list, dropping blanks."""
    return [code.strip() for code in safe_str(value).split(",") if code.strip()]


def snake_case(key: str) -> str:
    """Convert a camelCase key to snake_case (snake_case keys pass through)."""
    return CAMEL_BOUNDARY.sub(r"_\1", key).lower()


def _is_missing(value) -> bool:
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        # Sequences and other containers are never a missing scalar
        return False
