"""
Utility functions and helpers.
"""

from .bits import (
    bits_to_int,
    bits_to_words,
    even_parity,
    flip_bits,
    hamming_distance,
    hamming_weight,
    int_to_bits,
    random_error_pattern,
    words_to_bits,
)

__all__ = [
    "bits_to_int",
    "int_to_bits",
    "bits_to_words",
    "words_to_bits",
    "hamming_weight",
    "hamming_distance",
    "even_parity",
    "flip_bits",
    "random_error_pattern",
]
