"""
SDR FEC Module - Forward error correction for digital radio modes

Binary BCH encoding, bounded-distance error correction, and message
extraction for bitstreams recovered by an SDR demodulator.

Components:
    - Polynomial: GF(2) polynomial arithmetic on integer bit-vectors
    - GaloisField: GF(2^m) tables for power-sum syndromes
    - BCHCode: Systematic and non-systematic BCH encode/decode/correct
    - POCSAG: Pager codeword layer on top of BCH(31,21)

Presets:
    pocsag, pocsag_factor, bch_7_4, bch_15_7, bch_15_5
"""

__version__ = "0.1.0"
__author__ = "SDR Module Team"

from .fec import (
    BCHCode,
    BCHConfig,
    BCHError,
    CodeConfigurationError,
    CorrectionResult,
    CorrectionStatus,
    DecodeResult,
    EncodingType,
    GaloisField,
    Polynomial,
    PolynomialOverflowError,
    WordWidthError,
)
from .core.config import CodeConfig, FECConfig, get_preset, list_presets
from .protocols.pocsag import POCSAGDecoder, POCSAGEncoder, POCSAGMessage, POCSAGPage

__all__ = [
    # FEC
    "BCHCode",
    "BCHConfig",
    "BCHError",
    "CodeConfigurationError",
    "CorrectionResult",
    "CorrectionStatus",
    "DecodeResult",
    "EncodingType",
    "GaloisField",
    "Polynomial",
    "PolynomialOverflowError",
    "WordWidthError",
    # Configuration
    "CodeConfig",
    "FECConfig",
    "get_preset",
    "list_presets",
    # POCSAG
    "POCSAGDecoder",
    "POCSAGEncoder",
    "POCSAGMessage",
    "POCSAGPage",
    # Version
    "__version__",
]
