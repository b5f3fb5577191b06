"""Runtime support: the read-through translation file cache.

Python 3.13+.
"""

from .cache import CacheEntry, CacheStats, FileCache

__all__ = ["CacheEntry", "CacheStats", "FileCache"]
