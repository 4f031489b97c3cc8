"""Utility functions for turning typed quantity text into integers."""

import math
from typing import Any


def coerce_entry(raw: str | None) -> int | None:
    """
    Coerces user-typed quantity text into a positive whole number.

    Integer text is read exactly, however long. Other text float() accepts
    ("2.7", "1e1") is truncated toward zero. Returns None for blank,
    unparseable, non-finite or non-positive input. Never raises: callers
    treat None as "nothing entered yet".
    """
    if raw is None:
        return None
    text = str(raw).strip()
    if not text:
        return None
    try:
        whole = int(text)
    except ValueError:
        try:
            number = float(text)
        except ValueError:
            return None
        if not math.isfinite(number):
            return None
        whole = int(number)  # truncates toward zero
    if whole <= 0:
        return None
    return whole


def as_count(value) -> int:
    """Reads a stored counter field, treating missing or junk values as 0."""
    if value is None:
        return 0
    try:
        return max(0, int(value))
    except (ValueError, TypeError):
        return 0


def as_exact_int(value: Any) -> Any:
    """
    Returns value as an int when it is exactly a whole number ("6", 6.0),
    otherwise returns it unchanged so the caller's own validation rejects it.
    """
    if isinstance(value, int):  # bool included, left for the caller to reject
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return value
    return value
