"""Registry module - Concurrent in-memory store of parsed networks."""

from .rwlock import ReadWriteLock
from .store import NetworkRegistry, suffix_filter

__all__ = [
    "ReadWriteLock",
    "NetworkRegistry",
    "suffix_filter",
]
