"""Diagnostic system: error codes, message templates and exceptions.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    BrokenFallbackChainError,
    CyclicFallbackChainError,
    FallbackChainError,
    LocaleFileError,
    LocaleMergeError,
)
from .templates import ErrorTemplate

__all__ = [
    "BrokenFallbackChainError",
    "CyclicFallbackChainError",
    "Diagnostic",
    "DiagnosticCode",
    "ErrorTemplate",
    "FallbackChainError",
    "LocaleFileError",
    "LocaleMergeError",
]
