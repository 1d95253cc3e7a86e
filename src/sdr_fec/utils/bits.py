"""
Bit-vector helpers for hard-decision bit streams.

Bits are numpy uint8 arrays of 0/1 values, most significant bit first,
as produced by a bit slicer after demodulation.
"""

from typing import Iterable, List, Optional, Sequence, Union

import numpy as np

BitsLike = Union[np.ndarray, Sequence[int]]


def bits_to_int(bits: BitsLike) -> int:
    """
    Pack bits (MSB first) into an integer.

    Args:
        bits: Sequence of 0/1 values

    Returns:
        Integer value
    """
    value = 0
    for bit in np.asarray(bits, dtype=np.uint8):
        value = (value << 1) | int(bit & 1)
    return value


def int_to_bits(value: int, width: int) -> np.ndarray:
    """
    Unpack an integer into width bits (MSB first).

    Raises:
        ValueError: If value does not fit in width bits
    """
    if value < 0 or value >= (1 << width):
        raise ValueError(f"Value {value:#x} does not fit in {width} bits")
    return np.array(
        [(value >> shift) & 1 for shift in range(width - 1, -1, -1)], dtype=np.uint8
    )


def bits_to_words(bits: BitsLike, width: int = 32) -> List[int]:
    """
    Split a bit stream into consecutive width-bit words.

    Trailing bits that do not fill a whole word are ignored.
    """
    array = np.asarray(bits, dtype=np.uint8)
    count = len(array) // width
    rows = array[: count * width].reshape(count, width)
    return [bits_to_int(row) for row in rows]


def words_to_bits(words: Iterable[int], width: int = 32) -> np.ndarray:
    """Concatenate width-bit words into a bit stream."""
    chunks = [int_to_bits(word, width) for word in words]
    if not chunks:
        return np.zeros(0, dtype=np.uint8)
    return np.concatenate(chunks)


def hamming_weight(value: int) -> int:
    """Number of set bits."""
    return bin(value).count("1")


def hamming_distance(a: int, b: int) -> int:
    """Number of differing bits between two values."""
    return hamming_weight(a ^ b)


def even_parity(value: int) -> int:
    """Parity bit that makes the total number of ones even."""
    return hamming_weight(value) & 1


def flip_bits(value: int, positions: Iterable[int]) -> int:
    """Toggle the given bit positions (bit 0 = LSB)."""
    for position in positions:
        value ^= 1 << position
    return value


def random_error_pattern(
    length: int, weight: int, rng: Optional[np.random.Generator] = None
) -> int:
    """
    Random error mask with exactly weight bits set.

    Args:
        length: Word length in bits
        weight: Number of bit errors
        rng: Random generator (a fresh default_rng() when None)

    Returns:
        Integer mask
    """
    if not (0 <= weight <= length):
        raise ValueError(f"weight must be between 0 and {length}, got {weight}")
    if rng is None:
        rng = np.random.default_rng()
    positions = rng.choice(length, size=weight, replace=False)
    return flip_bits(0, (int(p) for p in positions))
