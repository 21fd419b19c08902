"""
Domain Services Package

Architectural Intent:
- Contains domain services for CPI error handling
- Registry and translator are stateless after construction
"""

from cpiwire.domain.services.error_registry import (
    DEFAULT_REGISTRY,
    ErrorKind,
    ErrorRegistry,
)
from cpiwire.domain.services.error_translator import (
    UNKNOWN_ERROR_MESSAGE,
    ErrorTranslator,
)

__all__ = [
    "DEFAULT_REGISTRY",
    "ErrorKind",
    "ErrorRegistry",
    "UNKNOWN_ERROR_MESSAGE",
    "ErrorTranslator",
]
