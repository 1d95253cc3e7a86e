"""
Binary polynomial arithmetic over GF(2).

Polynomials are stored as integer bit-vectors: bit i holds the
coefficient of x^i. Addition and subtraction are XOR, multiplication is
carryless, and division is GF(2) long division.

Every polynomial carries a width (number of representable coefficients).
Values that do not fit the width are rejected instead of truncated.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Tuple, Union

# Largest supported codeword length; matches a 64-bit coefficient store.
DEFAULT_WIDTH = 64

PolynomialLike = Union["Polynomial", int]


class PolynomialOverflowError(OverflowError):
    """Raised when a polynomial's degree exceeds its representation width."""

    pass


def _degree_of(coefficients: int) -> int:
    return coefficients.bit_length() - 1


@dataclass(frozen=True)
class Polynomial:
    """
    Immutable polynomial with coefficients in {0, 1}.

    Attributes:
        coefficients: Bit-vector of coefficients (bit i = coefficient of x^i)
        width: Number of coefficients the representation can hold
    """

    coefficients: int = 0
    width: int = field(default=DEFAULT_WIDTH, compare=False)

    def __post_init__(self) -> None:
        if self.width < 1:
            raise ValueError(f"width must be positive, got {self.width}")
        if self.coefficients < 0:
            raise ValueError(
                f"coefficients must be non-negative, got {self.coefficients}"
            )
        if self.coefficients.bit_length() > self.width:
            raise PolynomialOverflowError(
                f"Polynomial of degree {_degree_of(self.coefficients)} "
                f"does not fit width {self.width}"
            )

    @classmethod
    def from_exponents(
        cls, exponents: Iterable[int], width: int = DEFAULT_WIDTH
    ) -> "Polynomial":
        """Build a polynomial from the exponents of its non-zero terms."""
        coefficients = 0
        for exponent in exponents:
            coefficients ^= 1 << exponent
        return cls(coefficients, width)

    @property
    def degree(self) -> int:
        """Index of the highest set coefficient, -1 for the zero polynomial."""
        return _degree_of(self.coefficients)

    @property
    def is_zero(self) -> bool:
        return self.coefficients == 0

    def exponents(self) -> List[int]:
        """Exponents of the non-zero terms in ascending order."""
        result = []
        value = self.coefficients
        exponent = 0
        while value:
            if value & 1:
                result.append(exponent)
            value >>= 1
            exponent += 1
        return result

    def _coerce(self, other: PolynomialLike) -> "Polynomial":
        if isinstance(other, Polynomial):
            return other
        if isinstance(other, int):
            return Polynomial(other, max(self.width, other.bit_length(), 1))
        raise TypeError(f"Cannot use {type(other).__name__} as a polynomial")

    def add(self, other: PolynomialLike) -> "Polynomial":
        """Add two polynomials (coefficient-wise XOR)."""
        other = self._coerce(other)
        return Polynomial(
            self.coefficients ^ other.coefficients, max(self.width, other.width)
        )

    # Coefficients are taken mod 2, so subtraction and addition coincide.
    subtract = add

    def multiply(self, other: PolynomialLike) -> "Polynomial":
        """
        Carryless multiplication.

        Raises:
            PolynomialOverflowError: If the product does not fit the width
        """
        other = self._coerce(other)
        width = max(self.width, other.width)
        if self.is_zero or other.is_zero:
            return Polynomial(0, width)

        if self.degree + other.degree >= width:
            raise PolynomialOverflowError(
                f"Product of degree {self.degree + other.degree} "
                f"does not fit width {width}"
            )

        result = 0
        multiplicand = self.coefficients
        multiplier = other.coefficients
        while multiplier:
            if multiplier & 1:
                result ^= multiplicand
            multiplicand <<= 1
            multiplier >>= 1
        return Polynomial(result, width)

    def divmod(self, divisor: PolynomialLike) -> Tuple["Polynomial", "Polynomial"]:
        """
        GF(2) long division.

        Args:
            divisor: Non-zero divisor polynomial

        Returns:
            (quotient, remainder) with degree(remainder) < degree(divisor)
        """
        divisor = self._coerce(divisor)
        if divisor.is_zero:
            raise ZeroDivisionError("Polynomial division by zero")

        width = max(self.width, divisor.width)
        remainder = self.coefficients
        quotient = 0
        divisor_degree = divisor.degree

        shift = _degree_of(remainder) - divisor_degree
        while shift >= 0:
            quotient |= 1 << shift
            remainder ^= divisor.coefficients << shift
            shift = _degree_of(remainder) - divisor_degree

        return Polynomial(quotient, width), Polynomial(remainder, width)

    def remainder(self, divisor: PolynomialLike) -> "Polynomial":
        """Remainder of division by divisor."""
        return self.divmod(divisor)[1]

    def divide(self, divisor: PolynomialLike) -> "Polynomial":
        """Quotient of division by divisor, remainder discarded."""
        return self.divmod(divisor)[0]

    __add__ = add
    __radd__ = add
    __sub__ = add
    __rsub__ = add
    __mul__ = multiply
    __rmul__ = multiply
    __mod__ = remainder
    __floordiv__ = divide
    __divmod__ = divmod

    def __bool__(self) -> bool:
        return not self.is_zero

    def __int__(self) -> int:
        return self.coefficients

    def __index__(self) -> int:
        return self.coefficients

    def __str__(self) -> str:
        if self.is_zero:
            return "0"

        terms = []
        for exponent in reversed(self.exponents()):
            if exponent == 0:
                terms.append("1")
            elif exponent == 1:
                terms.append("x")
            else:
                terms.append(f"x^{exponent}")
        return " + ".join(terms)
