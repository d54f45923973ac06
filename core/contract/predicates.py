"""
Field Predicates - Narrow Semantic Checks on Raw Values

Pure functions answering one question each about a loosely typed value
taken from a scraped record. None of them raise; every one returns a bool
or, for the accessor, the MISSING sentinel when a field is absent.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import Any, Final


class _Missing:
    """Sentinel for a field that is absent (as opposed to explicitly null)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Final = _Missing()

ABSOLUTE_URL_REGEX: Final = re.compile(r"^https?://.+")

YES_MARKERS: Final[frozenset[str]] = frozenset({"Y", "y"})


# =============================================================================
# Safe Navigation
# =============================================================================


def get_path(obj: Any, *keys: str) -> Any:
    """
    Read a nested field without faulting.

    Returns MISSING when any hop is absent or is not a mapping, so callers
    can tell "not there" apart from an explicit None.

    Example:
        get_path(record, "payload", "price", "deposit")
    """
    current = obj
    for key in keys:
        if not isinstance(current, Mapping) or key not in current:
            return MISSING
        current = current[key]
    return current


def as_mapping(value: Any) -> Mapping:
    """Return value if it is a mapping, otherwise an empty dict."""
    return value if isinstance(value, Mapping) else {}


def as_list(value: Any) -> list:
    """Return value if it is a list, otherwise an empty list."""
    return value if isinstance(value, list) else []


# =============================================================================
# Predicates
# =============================================================================


def is_non_empty_string(value: Any) -> bool:
    """True for a str with at least one character."""
    return isinstance(value, str) and len(value) > 0


def is_absolute_url(value: Any) -> bool:
    """True for an http(s) URL string with a non-empty remainder."""
    if not isinstance(value, str):
        return False
    return bool(ABSOLUTE_URL_REGEX.match(value))


def is_parseable_datetime(value: Any) -> bool:
    """
    True for a string that parses as a calendar date or date/time.

    Accepts ISO-8601 (including a trailing 'Z') and RFC 2822 forms.
    """
    if not isinstance(value, str) or not value.strip():
        return False
    text = value.strip()
    iso = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        datetime.fromisoformat(iso)
        return True
    except ValueError:
        pass
    try:
        return parsedate_to_datetime(text) is not None
    except (TypeError, ValueError, IndexError):
        return False


def is_number(value: Any) -> bool:
    """True for int or float. Booleans are not numbers here."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_number_or_null(value: Any) -> bool:
    return value is None or is_number(value)


def parses_as_number(value: Any) -> bool:
    """True for a finite number or a string holding one ("1200", " 35.5 ")."""
    if is_number(value):
        try:
            return math.isfinite(value)
        except OverflowError:
            # int beyond float range
            return False
    if isinstance(value, str) and value.strip():
        try:
            return math.isfinite(float(value.strip()))
        except (ValueError, OverflowError):
            return False
    return False


def is_truthy(value: Any) -> bool:
    """
    Truthiness for sample flags.

    None, False, 0, empty string and NaN are falsy. Containers count as set
    even when empty since a present violation list is still a violation.
    """
    if value is None or value is MISSING:
        return False
    if isinstance(value, float) and math.isnan(value):
        return False
    if isinstance(value, (list, tuple, dict)):
        return True
    return bool(value)


def is_yes_marker(value: Any) -> bool:
    """True for boolean True or the literal markers 'Y' / 'y'."""
    if value is True:
        return True
    return isinstance(value, str) and value in YES_MARKERS
