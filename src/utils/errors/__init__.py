"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    InvalidLengthError,
    PhoneNormalizationError,
    VerificationUnavailableError,
)

__all__ = [
    "InvalidLengthError",
    "PhoneNormalizationError",
    "VerificationUnavailableError",
]
