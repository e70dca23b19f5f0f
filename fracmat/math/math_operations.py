"""
Numeric kernel shared by Fraction and Matrix.

This module provides the helper operations usable by any arithmetic-like type:
- Exponentiation by repeated multiplication, starting from the identity element
  of the value's own type (the identity matrix for matrices, 1 otherwise)
- Smallest common divisor search used to reduce fractions of integers
- Element-type helpers (identity element, zero element, conversion)
"""

import numbers
from typing import Any, Optional

import numpy as np

from ..names import EXTENDED_PRECISION


def identity_element(number_class: type) -> Any:
    """
    Return the multiplicative identity of a number class.

    Classes exposing an ``identity()`` operation (square matrices) provide their
    own identity element, every other class is asked for ``1``.
    """
    identity = getattr(number_class, 'identity', None)
    if identity is not None:
        return identity()
    return number_class(1)


def zero_element(number_class: type) -> Any:
    """Return the additive identity of a number class"""
    if getattr(number_class, 'identity', None) is not None:
        # Square matrices are zero-filled by their default constructor
        return number_class()
    return number_class(0)


def power(value: Any, exponent: int) -> Any:
    """
    Raise value to a non-negative integer power by repeated multiplication.

    The base case (exponent 0) is the identity element of the value's type, so
    power(M, 0) is the identity matrix for any square matrix M, including the
    zero matrix.

    Args:
        value: Any value supporting ``*``
        exponent: Non-negative integer exponent

    Returns:
        value * value * ... * identity (exponent factors of value)
    """
    if not isinstance(exponent, numbers.Integral):
        raise TypeError(f"Exponent must be an integer, got {type(exponent).__name__}")
    if exponent < 0:
        raise ValueError(f"Exponent must be non-negative, got {exponent}")

    result = identity_element(type(value))
    while exponent > 0:
        result = value * result
        exponent -= 1
    return result


def common_divisor(first: int, second: int) -> Optional[int]:
    """
    Return the smallest integer in 2..min(first, second) dividing both values.

    Returns None when no such divisor exists, i.e. when the values are already
    coprime or when one of them is lower than 2 (negative values included).
    """
    for divisor in range(2, int(min(first, second)) + 1):
        if first % divisor == 0 and second % divisor == 0:
            return divisor
    return None


def is_fraction_like(value: Any) -> bool:
    """Check whether value is one of our fractions (nested rational level)"""
    from .fraction import Fraction
    return isinstance(value, Fraction)


def is_element_of(value: Any, container: Any) -> bool:
    """Check whether value belongs to the element type of a matrix container"""
    from .matrix import Matrix
    if not isinstance(container, Matrix):
        return False
    return isinstance(container.dtype, type) and isinstance(value, container.dtype)


def convert(value: Any, target: type) -> Any:
    """
    Convert value into an instance of target.

    Values providing their own ``convert`` (fractions) are asked to perform the
    conversion, which evaluates them in the target's arithmetic.
    """
    if isinstance(value, target):
        return value
    converter = getattr(value, 'convert', None)
    if converter is not None:
        return converter(target)
    return target(value)


def to_extended(value: Any):
    """Convert value to the highest available floating precision"""
    if isinstance(value, (numbers.Real, np.generic)):
        return EXTENDED_PRECISION(value)
    if is_fraction_like(value):
        # fields are widened separately, then divided
        return to_extended(value.numerator) / to_extended(value.denominator)
    return EXTENDED_PRECISION(float(value))


def is_zero(value: Any) -> bool:
    """
    Check whether value is the additive identity.

    Composite values (fractions, matrices) answer for themselves so that zero
    fractions with any denominator, e.g. 0/3, are recognized.
    """
    checker = getattr(value, 'is_zero', None)
    if callable(checker):
        return checker()
    return value == 0
