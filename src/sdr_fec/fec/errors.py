"""
Exceptions raised by the FEC codecs.

Uncorrectable codewords are not errors; they are reported through
CorrectionStatus on the normal return path.
"""

from .polynomial import PolynomialOverflowError


class BCHError(ValueError):
    """Base class for BCH codec errors."""

    pass


class CodeConfigurationError(BCHError):
    """Raised when code parameters are inconsistent."""

    pass


class FieldPolynomialError(CodeConfigurationError):
    """Raised when a check polynomial cannot define GF(2^m)."""

    pass


class WordWidthError(BCHError):
    """Raised when a message or codeword is wider than its declared length."""

    pass


__all__ = [
    "BCHError",
    "CodeConfigurationError",
    "FieldPolynomialError",
    "WordWidthError",
    "PolynomialOverflowError",
]
