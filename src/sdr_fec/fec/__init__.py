"""
FEC module - Binary polynomial arithmetic and BCH codes.
"""

from .polynomial import DEFAULT_WIDTH, Polynomial, PolynomialOverflowError
from .field import GaloisField, find_primitive_polynomial, is_primitive_polynomial
from .errors import (
    BCHError,
    CodeConfigurationError,
    FieldPolynomialError,
    WordWidthError,
)
from .bch import (
    MAX_CODEWORD_LENGTH,
    BCHCode,
    BCHConfig,
    CorrectionResult,
    CorrectionStatus,
    DecodeResult,
    EncodingType,
    error_patterns,
)

__all__ = [
    "DEFAULT_WIDTH",
    "Polynomial",
    "PolynomialOverflowError",
    "GaloisField",
    "find_primitive_polynomial",
    "is_primitive_polynomial",
    "BCHError",
    "CodeConfigurationError",
    "FieldPolynomialError",
    "WordWidthError",
    "MAX_CODEWORD_LENGTH",
    "BCHCode",
    "BCHConfig",
    "CorrectionResult",
    "CorrectionStatus",
    "DecodeResult",
    "EncodingType",
    "error_patterns",
]
