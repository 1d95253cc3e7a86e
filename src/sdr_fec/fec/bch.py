"""
Binary BCH codec.

Encodes k-bit messages into n-bit codewords that are multiples of the
generator polynomial g(x), corrects up to t bit errors in received
codewords, and extracts messages from (corrected) codewords.

Two encodings are supported:
- NON_SYSTEMATIC ("factor"): codeword = message * g
- SYSTEMATIC ("prefix"): codeword = message * x^r + (message * x^r mod g),
  so the top k bits of the codeword are the message itself

Correction is a bounded-distance search over error patterns of weight
1..t. The worst case grows as O(n^t): 496 candidates for BCH(31,21) with
t=2, but tens of thousands for t=4 at the same length.

Example:
    >>> code = BCHCode(BCHConfig(EncodingType.SYSTEMATIC, 0x769, 0x25, 31, 21, 2))
    >>> codeword = code.encode_message(0x1ABCD)
    >>> code.decode_message(code.correct_codeword(codeword ^ 0b101))
    109517
"""

import logging
from dataclasses import dataclass
from enum import Enum
from itertools import combinations
from math import comb
from typing import Callable, Dict, Iterator, Optional, Tuple

from .errors import CodeConfigurationError, FieldPolynomialError, WordWidthError
from .field import GaloisField, find_primitive_polynomial
from .polynomial import DEFAULT_WIDTH, Polynomial

logger = logging.getLogger(__name__)

# Largest codeword length the codec accepts.
MAX_CODEWORD_LENGTH = DEFAULT_WIDTH


class EncodingType(Enum):
    """Codeword construction variant."""

    NON_SYSTEMATIC = "factor"
    SYSTEMATIC = "prefix"


class CorrectionStatus(Enum):
    """Outcome of codeword correction."""

    VALID = "valid"  # Zero syndrome, nothing changed
    CORRECTED = "corrected"
    UNCORRECTABLE = "uncorrectable"  # More than t errors


@dataclass(frozen=True)
class CorrectionResult:
    """Result of correcting one received codeword."""

    codeword: int
    status: CorrectionStatus
    error_positions: Tuple[int, ...] = ()

    @property
    def error_count(self) -> int:
        return len(self.error_positions)

    @property
    def error_pattern(self) -> int:
        """Bit mask of the flipped positions."""
        pattern = 0
        for position in self.error_positions:
            pattern |= 1 << position
        return pattern

    @property
    def ok(self) -> bool:
        """True when the returned codeword is valid."""
        return self.status is not CorrectionStatus.UNCORRECTABLE


@dataclass(frozen=True)
class DecodeResult:
    """Message recovered from a received codeword."""

    message: Optional[int]  # None when the codeword was uncorrectable
    status: CorrectionStatus
    error_count: int = 0


@dataclass(frozen=True)
class BCHConfig:
    """
    Immutable BCH code definition.

    Attributes:
        encoding: Encoding variant (EncodingType or its string value)
        generator: Generator polynomial bit pattern, degree n - k
        check_polynomial: Primitive polynomial of GF(2^m) used for
            power-sum syndromes; searched for when None
        n: Codeword length in bits
        k: Message length in bits
        t: Number of bit errors the code is guaranteed to correct
    """

    encoding: EncodingType
    generator: int
    check_polynomial: Optional[int]
    n: int
    k: int
    t: int

    def __post_init__(self) -> None:
        if not isinstance(self.encoding, EncodingType):
            try:
                object.__setattr__(self, "encoding", EncodingType(self.encoding))
            except ValueError:
                raise CodeConfigurationError(
                    f"Invalid encoding: {self.encoding}. Must be 'factor' or 'prefix'"
                ) from None
        self._validate()

    def _validate(self) -> None:
        if not (1 <= self.n <= MAX_CODEWORD_LENGTH):
            raise CodeConfigurationError(
                f"n must be between 1 and {MAX_CODEWORD_LENGTH}, got {self.n}"
            )
        if not (1 <= self.k <= self.n):
            raise CodeConfigurationError(
                f"k must be between 1 and n ({self.n}), got {self.k}"
            )
        if self.t < 0:
            raise CodeConfigurationError(f"t must be non-negative, got {self.t}")
        if self.generator <= 0:
            raise CodeConfigurationError("generator must be a non-zero polynomial")

        generator_degree = self.generator.bit_length() - 1
        if generator_degree != self.n - self.k:
            raise CodeConfigurationError(
                f"generator degree {generator_degree} does not match "
                f"n - k = {self.n - self.k}"
            )

        if self.check_polynomial is not None:
            check_degree = self.check_polynomial.bit_length() - 1
            if check_degree != self.field_degree:
                raise FieldPolynomialError(
                    f"check polynomial degree {check_degree} does not match "
                    f"field degree {self.field_degree} for n = {self.n}"
                )
            # Raises FieldPolynomialError when not primitive
            GaloisField(self.check_polynomial)

    @property
    def parity_bits(self) -> int:
        """Number of parity bits r = n - k."""
        return self.n - self.k

    @property
    def field_degree(self) -> int:
        """Degree m of GF(2^m) with 2^m - 1 >= n."""
        return self.n.bit_length()


def error_patterns(
    length: int, max_weight: int, min_weight: int = 1
) -> Iterator[Tuple[int, ...]]:
    """
    Enumerate candidate error positions in a fixed order.

    Patterns are produced by ascending weight, and within one weight in
    lexicographically ascending order of bit positions.

    Args:
        length: Number of bit positions (codeword length)
        max_weight: Largest pattern weight
        min_weight: Smallest pattern weight

    Yields:
        Tuples of distinct ascending bit positions
    """
    for weight in range(min_weight, max_weight + 1):
        yield from combinations(range(length), weight)


# Encoding strategies: (message, generator, parity_bits) -> codeword and back.
def _encode_non_systematic(
    message: Polynomial, generator: Polynomial, parity_bits: int
) -> Polynomial:
    return message * generator


def _decode_non_systematic(
    codeword: Polynomial, generator: Polynomial, parity_bits: int
) -> Polynomial:
    return codeword // generator


def _encode_systematic(
    message: Polynomial, generator: Polynomial, parity_bits: int
) -> Polynomial:
    shifted = Polynomial(message.coefficients << parity_bits, message.width)
    return shifted + shifted % generator


def _decode_systematic(
    codeword: Polynomial, generator: Polynomial, parity_bits: int
) -> Polynomial:
    return Polynomial(codeword.coefficients >> parity_bits, codeword.width)


_Strategy = Callable[[Polynomial, Polynomial, int], Polynomial]

_STRATEGIES: Dict[EncodingType, Tuple[_Strategy, _Strategy]] = {
    EncodingType.NON_SYSTEMATIC: (_encode_non_systematic, _decode_non_systematic),
    EncodingType.SYSTEMATIC: (_encode_systematic, _decode_systematic),
}


class BCHCode:
    """
    BCH encoder/decoder for one fixed configuration.

    Instances hold only immutable state and may be shared between threads.
    """

    def __init__(self, config: BCHConfig):
        """
        Initialize the codec.

        Args:
            config: Code definition
        """
        self._config = config
        self._generator = Polynomial(config.generator, config.n)
        self._encoder, self._decoder = _STRATEGIES[config.encoding]

        # Syndrome of each single-bit error; remainder is linear over GF(2).
        self._bit_syndromes: Tuple[int, ...] = tuple(
            (Polynomial(1 << i, config.n) % self._generator).coefficients
            for i in range(config.n)
        )

        check = config.check_polynomial
        if check is None:
            check = find_primitive_polynomial(config.field_degree)
        self._field = GaloisField(check)
        self._designed_capacity = self._compute_designed_capacity()

        if self._designed_capacity < config.t:
            logger.warning(
                f"Generator {config.generator:#x} has designed capacity "
                f"{self._designed_capacity} < t = {config.t}; correction of "
                f"{config.t} errors is not guaranteed"
            )

        cyclic_modulus = Polynomial((1 << config.n) | 1, config.n + 1)
        if not (cyclic_modulus % self._generator).is_zero:
            logger.warning(
                f"Generator {config.generator:#x} does not divide x^{config.n} + 1; "
                "code is not cyclic"
            )

        logger.info(
            f"BCH({config.n},{config.k}) t={config.t} {config.encoding.value} "
            f"code ready, worst-case search {self.search_space} patterns"
        )

    def _compute_designed_capacity(self) -> int:
        """Largest d such that alpha^1 .. alpha^2d are roots of g."""
        exponent = 1
        while exponent <= self._field.order and (
            self._field.evaluate(self._generator, exponent) == 0
        ):
            exponent += 1
        return (exponent - 1) // 2

    @property
    def config(self) -> BCHConfig:
        return self._config

    @property
    def n(self) -> int:
        return self._config.n

    @property
    def k(self) -> int:
        return self._config.k

    @property
    def t(self) -> int:
        return self._config.t

    @property
    def encoding(self) -> EncodingType:
        return self._config.encoding

    @property
    def generator(self) -> Polynomial:
        return self._generator

    @property
    def field(self) -> GaloisField:
        """GF(2^m) used for power-sum syndromes."""
        return self._field

    @property
    def designed_capacity(self) -> int:
        """Error-correction capacity guaranteed by the BCH bound."""
        return self._designed_capacity

    @property
    def search_space(self) -> int:
        """Worst-case number of error patterns tried by correct()."""
        return sum(comb(self.n, weight) for weight in range(1, self.t + 1))

    def _check_message(self, message: int) -> None:
        if not (0 <= message < (1 << self.k)):
            raise WordWidthError(
                f"Message {message:#x} does not fit in {self.k} bits"
            )

    def _check_codeword(self, codeword: int) -> None:
        if not (0 <= codeword < (1 << self.n)):
            raise WordWidthError(
                f"Codeword {codeword:#x} does not fit in {self.n} bits"
            )

    def encode_message(self, message: int) -> int:
        """
        Encode a message into a codeword.

        Args:
            message: k-bit message

        Returns:
            n-bit codeword divisible by the generator

        Raises:
            WordWidthError: If message is negative or wider than k bits
        """
        self._check_message(message)
        encoded = self._encoder(
            Polynomial(message, self.n), self._generator, self._config.parity_bits
        )
        return encoded.coefficients

    def decode_message(self, codeword: int) -> int:
        """
        Extract the message from an error-free codeword.

        Args:
            codeword: n-bit valid (or already corrected) codeword

        Returns:
            k-bit message
        """
        self._check_codeword(codeword)
        decoded = self._decoder(
            Polynomial(codeword, self.n), self._generator, self._config.parity_bits
        )
        return decoded.coefficients

    def syndrome(self, received: int) -> int:
        """Remainder of the received word divided by the generator."""
        self._check_codeword(received)
        return (Polynomial(received, self.n) % self._generator).coefficients

    def is_valid(self, codeword: int) -> bool:
        """True if codeword is a multiple of the generator."""
        return self.syndrome(codeword) == 0

    def power_syndromes(self, received: int) -> Tuple[int, ...]:
        """
        Power-sum syndromes S_i = r(alpha^i) for i = 1..2t.

        All are zero for a valid codeword of a narrow-sense code.
        """
        self._check_codeword(received)
        word = Polynomial(received, self.n)
        return tuple(
            self._field.evaluate(word, i) for i in range(1, 2 * self.t + 1)
        )

    def correct(self, received: int) -> CorrectionResult:
        """
        Correct up to t bit errors.

        Searches error patterns by ascending weight and returns the first
        one that zeroes the syndrome. If the received word is more than t
        errors away from every codeword the outcome is UNCORRECTABLE, or
        occasionally a different codeword that happens to be within t.

        Args:
            received: n-bit received word

        Returns:
            CorrectionResult with the corrected (or unchanged) codeword
        """
        syndrome = self.syndrome(received)
        if syndrome == 0:
            return CorrectionResult(received, CorrectionStatus.VALID)

        bit_syndromes = self._bit_syndromes
        for positions in error_patterns(self.n, self.t):
            candidate = 0
            for position in positions:
                candidate ^= bit_syndromes[position]
            if candidate == syndrome:
                corrected = received
                for position in positions:
                    corrected ^= 1 << position
                logger.debug(
                    f"Corrected {len(positions)} error(s) at bit(s) "
                    f"{list(positions)}: {received:#x} -> {corrected:#x}"
                )
                return CorrectionResult(
                    corrected, CorrectionStatus.CORRECTED, positions
                )

        logger.debug(f"Too many errors, unable to correct {received:#x}")
        return CorrectionResult(received, CorrectionStatus.UNCORRECTABLE)

    def correct_codeword(self, received: int) -> int:
        """Corrected codeword, or received unchanged when uncorrectable."""
        return self.correct(received).codeword

    def decode(self, received: int) -> DecodeResult:
        """Correct a received word and extract its message."""
        result = self.correct(received)
        if not result.ok:
            return DecodeResult(None, result.status)
        return DecodeResult(
            self.decode_message(result.codeword), result.status, result.error_count
        )

    def __repr__(self) -> str:
        return (
            f"BCHCode(n={self.n}, k={self.k}, t={self.t}, "
            f"generator={self._config.generator:#x}, "
            f"encoding={self.encoding.value})"
        )
