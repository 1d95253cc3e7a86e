"""Tests for bit-vector helpers."""

import numpy as np
import pytest

from sdr_fec.utils.bits import (
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


class TestPacking:
    """Tests for bit packing and unpacking."""

    def test_bits_to_int(self):
        """Test MSB-first packing."""
        assert bits_to_int([1, 0, 1, 1]) == 0b1011
        assert bits_to_int(np.array([0, 0, 1], dtype=np.uint8)) == 1
        assert bits_to_int([]) == 0

    def test_int_to_bits(self):
        """Test MSB-first unpacking with zero padding."""
        bits = int_to_bits(0b1011, 6)
        assert bits.dtype == np.uint8
        assert bits.tolist() == [0, 0, 1, 0, 1, 1]

    def test_int_to_bits_overflow(self):
        """Test values wider than the width are rejected."""
        with pytest.raises(ValueError):
            int_to_bits(0b10000, 4)
        with pytest.raises(ValueError):
            int_to_bits(-1, 4)

    def test_words(self):
        """Test splitting a stream into words."""
        stream = words_to_bits([0x7CD215D8, 0x7A89C197])
        assert len(stream) == 64
        assert bits_to_words(stream) == [0x7CD215D8, 0x7A89C197]

    def test_trailing_bits_ignored(self):
        """Test a partial trailing word is dropped."""
        stream = np.concatenate([int_to_bits(0xA5, 8), np.ones(5, dtype=np.uint8)])
        assert bits_to_words(stream, width=8) == [0xA5]

    def test_no_words(self):
        """Test empty input."""
        assert len(words_to_bits([])) == 0
        assert bits_to_words([]) == []


class TestWeights:
    """Tests for weight, distance and parity."""

    def test_hamming_weight(self):
        """Test counting set bits."""
        assert hamming_weight(0) == 0
        assert hamming_weight(0b1011) == 3
        assert hamming_weight(0x7CD215D8) == 16

    def test_hamming_distance(self):
        """Test counting differing bits."""
        assert hamming_distance(0b1010, 0b0101) == 4
        assert hamming_distance(0x7CD215D8, 0x7CD215D8) == 0

    def test_even_parity(self):
        """Test parity bit makes the total even."""
        assert even_parity(0b1011) == 1
        assert even_parity(0b11) == 0

    def test_flip_bits(self):
        """Test toggling positions."""
        assert flip_bits(0, [0, 3]) == 0b1001
        assert flip_bits(0b1001, (0, 3)) == 0


class TestRandomErrorPattern:
    """Tests for random error masks."""

    def test_exact_weight(self):
        """Test the mask has exactly the requested weight."""
        rng = np.random.default_rng(42)
        for weight in range(6):
            mask = random_error_pattern(31, weight, rng)
            assert hamming_weight(mask) == weight
            assert mask < (1 << 31)

    def test_reproducible(self):
        """Test seeded generators give the same mask."""
        a = random_error_pattern(31, 3, np.random.default_rng(5))
        b = random_error_pattern(31, 3, np.random.default_rng(5))
        assert a == b

    def test_invalid_weight(self):
        """Test weights outside 0..length are rejected."""
        with pytest.raises(ValueError):
            random_error_pattern(8, 9)
        with pytest.raises(ValueError):
            random_error_pattern(8, -1)
