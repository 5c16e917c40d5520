"""String manipulation utility functions."""

from __future__ import annotations

from collections import OrderedDict, abc
from typing import TypeVar


_T = TypeVar("_T")


def canonical_name(name: str) -> str:
    """Return the canonical (lowercase, stripped) form of a channel name."""
    return str(name).strip().lower()


def deduplicate(iterable: abc.Iterable[_T]) -> list[_T]:
    """Remove duplicates from an iterable while preserving order."""
    return list(OrderedDict.fromkeys(iterable).keys())


def format_count(number: int) -> str:
    """Format a number with thousands separators, ex. 12345 -> '12,345'."""
    return f"{number:,}"
