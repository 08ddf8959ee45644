"""Utility helpers for sequence handling and URL validation."""

from __future__ import annotations

from typing import List, Sequence, TypeVar
from urllib.parse import urlparse

T = TypeVar("T")


def chunked(items: Sequence[T], size: int) -> List[List[T]]:
    """Partition ``items`` into contiguous groups of at most ``size``."""
    if size < 1:
        raise ValueError(f"Chunk size must be positive, got {size}")
    return [list(items[start:start + size]) for start in range(0, len(items), size)]


def is_absolute_url(value: str) -> bool:
    """Return True when ``value`` has both a scheme and a host."""
    parsed = urlparse(value)
    return bool(parsed.scheme and parsed.netloc)
