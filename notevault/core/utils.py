"""
Core Utilities.

Shared utility functions used across the backend.
"""

from datetime import datetime, timezone
from typing import Any


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    All datetime values in the application are timezone-naive and
    assumed to be UTC.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_int(value: Any) -> int | None:
    """
    Parse an untrusted value as an integer.

    Accepts ints and numeric strings (surrounding whitespace allowed).
    Returns None for anything else, including booleans and floats.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None
