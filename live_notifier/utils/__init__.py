"""Utility modules for the live notifier."""

from __future__ import annotations

# Async helpers
from .async_helpers import task_wrapper

# Backoff
from .backoff import ExponentialBackoff

# JSON utilities
from .json_utils import (
    SERIALIZE_ENV,
    json_load,
    json_save,
    merge_json,
)

# Rate limiting
from .rate_limiter import RateLimiter

# String utilities
from .string_utils import (
    canonical_name,
    deduplicate,
    format_count,
)


__all__ = [
    # String utilities
    "canonical_name",
    "deduplicate",
    "format_count",
    # JSON utilities
    "json_load",
    "json_save",
    "merge_json",
    "SERIALIZE_ENV",
    # Async helpers
    "task_wrapper",
    # Rate limiting
    "RateLimiter",
    # Backoff
    "ExponentialBackoff",
]
