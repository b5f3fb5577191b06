"""Core utilities shared across runtime and localization layers.

Exports:
    DepthGuard: Context manager for recursion depth limiting
    DepthLimitExceededError: Exception raised when depth limit exceeded
    deep_merge: Recursive merge of two translation documents
    merge_chain: Fold of documents from least to most specific

Python 3.13+.
"""

from .depth_guard import DepthGuard, DepthLimitExceededError
from .merge import deep_merge, merge_chain

__all__ = ["DepthGuard", "DepthLimitExceededError", "deep_merge", "merge_chain"]
