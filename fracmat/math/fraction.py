"""
Generic exact rational number.

A Fraction stores a (numerator, denominator) pair over any underlying numeric
type supporting ``+ - * /``. The pair is kept in reduced form after every
constructor and operator:
- integer pairs are divided by their smallest common divisor until none remains
  (searched on magnitudes, signs stay in place), and zero is stored as 0/1
- pairs of fractions (nested rationals) collapse one level into
  ``numerator / denominator`` over the identity element
- any other pair (floats, matrices) is stored as given

Equality between two fractions is structural (pairwise on the stored fields),
equality against a bare value compares the evaluated result.
"""

import numbers
from fractions import Fraction as _ExactFraction
from typing import Any

from .math_operations import (common_divisor, convert, identity_element, is_element_of, is_fraction_like, is_zero,
                              power)


class Fraction:
    """
    Rational number over a generic underlying type.

    Fractions are values: every operator returns a new reduced instance and the
    stored fields are never modified after construction.
    """

    __slots__ = ('_numerator', '_denominator')

    # numpy scalars on the left defer to our reflected operators
    __array_ufunc__ = None

    def __init__(self, numerator: Any = 0, denominator: Any = None):
        """
        Constructor matching both rational forms.

        Args:
            numerator: Numerator value, or the whole value if no denominator is given
            denominator: Optional denominator (identity element of the numerator's type if omitted)
        """
        if denominator is None:
            # Single value: no reduction needed
            self._numerator = numerator
            self._denominator = identity_element(type(numerator))
        elif is_fraction_like(numerator) or is_fraction_like(denominator):
            self._collapse(numerator / denominator)
        else:
            self._numerator = numerator
            self._denominator = denominator
            self._reduce()

    def _collapse(self, division: Any) -> None:
        self._numerator = division
        self._denominator = identity_element(type(division))

    def _reduce(self) -> None:
        if not (isinstance(self._numerator, numbers.Integral)
                and isinstance(self._denominator, numbers.Integral)):
            return
        if self._numerator == 0 and self._denominator != 0:
            self._denominator = 1
            return
        # signs stay where they are, the divisor search runs on magnitudes
        while True:
            divisor = common_divisor(abs(self._numerator), abs(self._denominator))
            if divisor is None:
                break
            self._numerator //= divisor
            self._denominator //= divisor

    @property
    def numerator(self) -> Any:
        return self._numerator

    @property
    def denominator(self) -> Any:
        return self._denominator

    @property
    def depth(self) -> int:
        """Nesting level: 1 for a fraction of plain values, 2 for a fraction of fractions, ..."""
        if is_fraction_like(self._numerator):
            return self._numerator.depth + 1
        return 1

    def result(self) -> Any:
        """Evaluate numerator / denominator in the underlying type's arithmetic"""
        return self._numerator / self._denominator

    def is_zero(self) -> bool:
        """Check if fraction is zero, whatever its denominator"""
        return is_zero(self._numerator)

    def inverse(self) -> 'Fraction':
        """Return the multiplicative inverse (numerator and denominator swapped)"""
        return Fraction(self._denominator, self._numerator)

    def increment(self) -> 'Fraction':
        """Return this fraction plus one"""
        return self + identity_element(type(self._denominator))

    def decrement(self) -> 'Fraction':
        """Return this fraction minus one"""
        return self - identity_element(type(self._denominator))

    def convert(self, target: type) -> Any:
        """
        Narrowing/widening conversion into another arithmetic type.

        Numerator and denominator are reinterpreted as target values and the
        quotient is evaluated in the target's arithmetic.
        """
        return target(Fraction(convert(self._numerator, target), convert(self._denominator, target)).result())

    def _as_fraction(self, other: Any):
        """
        Interpret the right operand of a binary operator.

        Same-level fractions are used as they are, bare values of the underlying
        type are wrapped into a fraction. Deeper fractions are left to their own
        reflected operator, and so are matrices of fractions.
        """
        if is_element_of(self, other):
            return NotImplemented
        if isinstance(other, Fraction):
            if other.depth > self.depth:
                return NotImplemented
            if other.depth == self.depth:
                return other
        return Fraction(other)

    # Arithmetic
    def __add__(self, other):
        other = self._as_fraction(other)
        if other is NotImplemented:
            return NotImplemented
        if self._denominator == other._denominator:
            return Fraction(self._numerator + other._numerator, self._denominator)
        common_denominator = self._denominator * other._denominator
        corresponding_numerator = self._numerator * other._denominator + other._numerator * self._denominator
        return Fraction(corresponding_numerator, common_denominator)

    def __radd__(self, other):
        return self + other

    def __neg__(self):
        return Fraction(-self._numerator, self._denominator)

    def __pos__(self):
        return self

    def __sub__(self, other):
        other = self._as_fraction(other)
        if other is NotImplemented:
            return NotImplemented
        return self + -other

    def __rsub__(self, other):
        return Fraction(other) - self

    def __mul__(self, other):
        if is_element_of(self, other):
            return NotImplemented
        if not isinstance(other, Fraction) or other.depth < self.depth:
            return Fraction(self._numerator * other, self._denominator)
        if other.depth > self.depth:
            return NotImplemented
        return Fraction(self._numerator * other._numerator, self._denominator * other._denominator)

    def __rmul__(self, other):
        return self * other

    def __truediv__(self, other):
        if is_element_of(self, other):
            return NotImplemented
        if not isinstance(other, Fraction) or other.depth < self.depth:
            return Fraction(self._numerator, self._denominator * other)
        if other.depth > self.depth:
            return NotImplemented
        return self * other.inverse()

    def __rtruediv__(self, other):
        return Fraction(other) / self

    def __pow__(self, exponent: int):
        return Fraction(power(self._numerator, exponent), power(self._denominator, exponent))

    # The ^ operator is the historical spelling of exponentiation for these types
    __xor__ = __pow__

    # Augmented assignment rebinds the name to a fresh reduced fraction
    def __iadd__(self, other):
        return self + other

    def __isub__(self, other):
        return self - other

    def __imul__(self, other):
        return self * other

    def __itruediv__(self, other):
        return self / other

    def __ipow__(self, exponent: int):
        return self ** exponent

    __ixor__ = __ipow__

    # Comparison
    def __eq__(self, other) -> bool:
        if isinstance(other, Fraction) and other.depth == self.depth:
            return self._numerator == other._numerator and self._denominator == other._denominator
        if isinstance(other, Fraction) and other.depth > self.depth:
            return NotImplemented
        return self.result() == other

    def __ne__(self, other) -> bool:
        equal = self.__eq__(other)
        if equal is NotImplemented:
            return NotImplemented
        return not equal

    def _value_of(self, other: Any) -> Any:
        return other.result() if isinstance(other, Fraction) else other

    def __lt__(self, other) -> bool:
        return self.result() < self._value_of(other)

    def __le__(self, other) -> bool:
        return self.result() <= self._value_of(other)

    def __gt__(self, other) -> bool:
        return self.result() > self._value_of(other)

    def __ge__(self, other) -> bool:
        return self.result() >= self._value_of(other)

    def __hash__(self) -> int:
        # equal to the hash of the bare value this fraction compares equal to
        numerator, denominator = self._numerator, self._denominator
        if isinstance(numerator, numbers.Integral) and isinstance(denominator, numbers.Integral) and denominator != 0:
            return hash(_ExactFraction(int(numerator), int(denominator)))
        if isinstance(numerator, numbers.Real) and isinstance(denominator, numbers.Real) and denominator != 0:
            return hash(numerator / denominator)
        if denominator == identity_element(type(denominator)):
            return hash(numerator)
        return hash((numerator, denominator))

    # Conversion
    def __float__(self) -> float:
        return self.convert(float)

    def __int__(self) -> int:
        if isinstance(self._numerator, numbers.Integral) and isinstance(self._denominator, numbers.Integral):
            # Exact truncation, no detour through floating point
            return int(_ExactFraction(int(self._numerator), int(self._denominator)))
        return self.convert(int)

    def __bool__(self) -> bool:
        return not self.is_zero()

    # Output
    def __str__(self) -> str:
        if self._denominator != 1 and self._numerator != 0:
            return f"{self._numerator}/{self._denominator}"
        return str(self._numerator)

    def __repr__(self) -> str:
        return f"Fraction({self._numerator!r}, {self._denominator!r})"
