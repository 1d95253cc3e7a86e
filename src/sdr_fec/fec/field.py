"""
GF(2^m) arithmetic for BCH syndrome evaluation.

The field is built with the galois library from a primitive binary
polynomial p(x) of degree m; alpha = x is a primitive element, so every
non-zero element is a power alpha^i with 0 <= i < 2^m - 1. Elements are
exchanged as m-bit integers.
"""

import logging

import galois

from .errors import FieldPolynomialError
from .polynomial import Polynomial, PolynomialLike

logger = logging.getLogger(__name__)


def is_primitive_polynomial(polynomial: int) -> bool:
    """True if the binary polynomial is primitive over GF(2)."""
    if polynomial.bit_length() < 2:
        return False
    return galois.Poly.Int(polynomial).is_primitive()


def find_primitive_polynomial(degree: int) -> int:
    """
    Find the smallest primitive polynomial of the given degree.

    Args:
        degree: Field extension degree m (>= 1)

    Returns:
        Polynomial bit pattern with bit m set
    """
    if degree < 1:
        raise FieldPolynomialError(f"Field degree must be positive, got {degree}")

    candidate = int(galois.primitive_poly(2, degree, method="min"))
    logger.debug(f"Using primitive polynomial {candidate:#x} for degree {degree}")
    return candidate


class GaloisField:
    """
    Finite field GF(2^m) over a given primitive polynomial.

    Example:
        >>> field = GaloisField(0b100101)   # x^5 + x^2 + 1
        >>> field.order
        31
    """

    def __init__(self, polynomial: PolynomialLike):
        """
        Initialize the field.

        Args:
            polynomial: Primitive polynomial defining the field

        Raises:
            FieldPolynomialError: If the polynomial is not primitive
        """
        value = int(polynomial)
        if not is_primitive_polynomial(value):
            raise FieldPolynomialError(
                f"Field polynomial {value:#x} is not primitive"
            )

        self._polynomial = value
        self._degree = value.bit_length() - 1
        self._order = (1 << self._degree) - 1
        if self._degree > 1:
            self._gf = galois.GF(2 ** self._degree, irreducible_poly=value)
        else:
            self._gf = galois.GF(2)
        # x itself; primitive because the defining polynomial is
        self._alpha = self._gf(2) if self._degree > 1 else self._gf(1)

    @property
    def polynomial(self) -> int:
        """Field-defining polynomial."""
        return self._polynomial

    @property
    def degree(self) -> int:
        """Extension degree m."""
        return self._degree

    @property
    def order(self) -> int:
        """Number of non-zero elements (2^m - 1)."""
        return self._order

    @property
    def gf(self):
        """Underlying galois FieldArray class."""
        return self._gf

    def exp(self, exponent: int) -> int:
        """alpha^exponent (exponent may be any integer)."""
        return int(self._alpha ** (exponent % self._order))

    def log(self, element: int) -> int:
        """Discrete logarithm of a non-zero element."""
        if element <= 0 or element > self._order:
            raise ValueError(f"No logarithm for element {element}")
        return int(self._gf(element).log(self._alpha))

    def multiply(self, a: int, b: int) -> int:
        return int(self._gf(a) * self._gf(b))

    def power(self, element: int, exponent: int) -> int:
        if element == 0:
            return 0 if exponent > 0 else 1
        return int(self._gf(element) ** exponent)

    def inverse(self, element: int) -> int:
        if element == 0:
            raise ZeroDivisionError("Zero has no multiplicative inverse")
        return int(self._gf(element) ** -1)

    def evaluate(self, polynomial: PolynomialLike, exponent: int) -> int:
        """Evaluate a binary polynomial at alpha^exponent."""
        if isinstance(polynomial, int):
            polynomial = Polynomial(polynomial, max(polynomial.bit_length(), 1))

        terms = polynomial.exponents()
        if not terms:
            return 0
        poly = galois.Poly.Degrees(terms, field=self._gf)
        return int(poly(self._alpha ** (exponent % self._order)))

    def __repr__(self) -> str:
        return f"GaloisField(2^{self._degree}, polynomial={self._polynomial:#x})"
