"""
Mathematical Infrastructure Module

This module provides the generic value types of the package:
- Numeric kernel (exponentiation, smallest common divisor, element helpers)
- Fraction with automatic reduction, nestable into fractions of fractions
- Fixed-dimension square matrices over any of these element types

Determinants and inverses keep the element type's own arithmetic, except for
the final division of the inverse, done in extended floating precision.
"""

from .math_operations import common_divisor, convert, identity_element, is_zero, power, zero_element
from .fraction import Fraction
from .matrix import Matrix, identity_matrix

__all__ = [
    'Fraction',
    'Matrix',
    'common_divisor',
    'convert',
    'identity_element',
    'identity_matrix',
    'is_zero',
    'power',
    'zero_element',
]
