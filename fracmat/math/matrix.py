"""
Generic fixed-dimension square matrix.

A matrix is specialized by element type and dimension through subscription,
``Matrix[int, 3]``, and stores its N*N coefficients as one flat list in
row-major order (index = line * N + column).

Determinant and inverse use cofactor expansion, which keeps every intermediate
value in the element type's own arithmetic (exact for fractions and nested
matrices). The cost is exponential in N: det() of an N x N matrix evaluates N!
products, so matrices are expected to stay small.
"""

import functools
import io
import logging
from collections.abc import Iterable
from typing import Any, Callable, Iterator, List, Optional, Tuple

from .math_operations import convert, identity_element, is_element_of, is_zero, power, to_extended, zero_element
from ..names import EXTENDED_PRECISION, NILPOTENCY_DEPTH_DEFAULT


@functools.lru_cache(maxsize=None)
def _specialize(dtype: type, size: int) -> type:
    """Create (once) the matrix class for a given element type and dimension"""
    name = f"Matrix[{getattr(dtype, '__name__', dtype)}, {size}]"
    return type(name, (Matrix,), {'dtype': dtype, 'size': size, '__slots__': ()})


@functools.lru_cache(maxsize=None)
def _identity_coefficients(dtype: type, size: int) -> Tuple[Any, ...]:
    one = identity_element(dtype)
    zero = zero_element(dtype)
    return tuple(one if index % (size + 1) == 0 else zero for index in range(size * size))


def _by_value(coef: Any) -> Any:
    """Own copy of a mutable coefficient (nested matrices), fractions and numbers are shared"""
    return coef.copy() if isinstance(coef, Matrix) else coef


def identity_matrix(dtype: type, size: int) -> 'Matrix':
    """
    Identity matrix of the given element type and dimension.

    The coefficients are computed once per (dtype, size) pair; every call returns
    a fresh matrix so callers may modify it in place.
    """
    coefs = _identity_coefficients(dtype, size)
    return Matrix[dtype, size](coefs)


class Matrix:
    """
    Square matrix of fixed dimension over a generic element type.

    Use a specialization (``Matrix[float, 2]``) to create instances:
    - ``Matrix[float, 2]()`` zero matrix
    - ``Matrix[float, 2](value)`` every coefficient set to value
    - ``Matrix[float, 2]([a, b, c, d])`` flat row-major coefficients
    - ``Matrix[float, 2].from_rows([[a, b], [c, d]])``
    """

    __slots__ = ('_coefs',)

    dtype: Optional[type] = None
    size: Optional[int] = None

    # numpy scalars on the left defer to our reflected operators
    __array_ufunc__ = None

    def __class_getitem__(cls, params) -> type:
        if not isinstance(params, tuple) or len(params) != 2:
            raise TypeError("Matrix must be specialized as Matrix[dtype, size]")
        dtype, size = params
        if not isinstance(size, int) or isinstance(size, bool):
            raise TypeError(f"Matrix size must be an integer, got {size!r}")
        if size < 1:
            raise ValueError(f"Matrix size must be at least 1, got {size}")
        return _specialize(dtype, size)

    def __init__(self, value: Any = None):
        if self.size is None:
            raise TypeError("Matrix must be specialized before instantiation, e.g. Matrix[int, 2]")
        count = self.size * self.size
        if value is None:
            self._coefs = [zero_element(self.dtype) for _ in range(count)]
        elif isinstance(value, Matrix) or not isinstance(value, Iterable):
            self._coefs = [_by_value(value) for _ in range(count)]
        else:
            coefs = list(value)
            if len(coefs) != count:
                raise ValueError(f"expected {count} coefficients, but found {len(coefs)}")
            self._coefs = [_by_value(coef) for coef in coefs]

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[Any]]) -> 'Matrix':
        """Create matrix from nested rows"""
        rows = [list(row) for row in rows]
        if len(rows) != cls.size or any(len(row) != cls.size for row in rows):
            raise ValueError(f"expected {cls.size} rows of {cls.size} values")
        return cls([value for row in rows for value in row])

    @classmethod
    def identity(cls) -> 'Matrix':
        """Identity matrix of this specialization"""
        if cls.size is None:
            raise TypeError("identity() requires a specialized matrix class")
        return identity_matrix(cls.dtype, cls.size)

    @classmethod
    def accessor(cls, line: int, column: int) -> Callable[['Matrix'], Any]:
        """
        Return a reader for a fixed position.

        The position is checked once against the class dimension; the returned
        callable reads the coefficient without further bounds checks.
        """
        cls._check_position(line, column)
        index = line * cls.size + column
        return lambda matrix: matrix._coefs[index]

    @classmethod
    def _check_position(cls, line: int, column: int) -> None:
        if not 0 <= line < cls.size:
            raise IndexError(f"line {line} out of range for {cls.size}x{cls.size} matrix")
        if not 0 <= column < cls.size:
            raise IndexError(f"column {column} out of range for {cls.size}x{cls.size} matrix")

    def _flat_index(self, line: int, column: Optional[int] = None) -> int:
        if column is not None:
            self._check_position(line, column)
            return line * self.size + column
        if not 0 <= line < len(self._coefs):
            raise IndexError(f"index {line} out of range for {self.size}x{self.size} matrix")
        return line

    # Element access
    def at(self, line: int, column: Optional[int] = None) -> Any:
        """Get the coefficient at (line, column), or at a flat row-major index"""
        return self._coefs[self._flat_index(line, column)]

    def __getitem__(self, position):
        if isinstance(position, tuple):
            return self.at(*position)
        return self.at(position)

    def __setitem__(self, position, value) -> None:
        if isinstance(position, tuple):
            self._coefs[self._flat_index(*position)] = _by_value(value)
        else:
            self._coefs[self._flat_index(position)] = _by_value(value)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._coefs)

    def __len__(self) -> int:
        return len(self._coefs)

    def to_rows(self) -> List[List[Any]]:
        """Get all rows as a 2D list"""
        return [self._coefs[line * self.size:(line + 1) * self.size] for line in range(self.size)]

    # In-place elementwise operations
    def fill_with(self, value: Any) -> None:
        self._coefs = [_by_value(value) for _ in self._coefs]

    def increase_all_coefs(self, value: Any) -> None:
        self._coefs = [coef + value for coef in self._coefs]

    def decrease_all_coefs(self, value: Any) -> None:
        self._coefs = [coef - value for coef in self._coefs]

    # Reductions
    def line_sum(self, line: int) -> Any:
        total = zero_element(self.dtype)
        for column in range(self.size):
            total = total + self.at(line, column)
        return total

    def column_sum(self, column: int) -> Any:
        total = zero_element(self.dtype)
        for line in range(self.size):
            total = total + self.at(line, column)
        return total

    def sum(self) -> Any:
        total = zero_element(self.dtype)
        for coef in self._coefs:
            total = total + coef
        return total

    # Linear algebra
    def resized(self, new_size: int) -> 'Matrix':
        """
        Return a copy with another dimension.

        The overlapping top-left block is copied, any extra coefficient of an
        enlarged matrix is zero.
        """
        if new_size == self.size:
            return self.copy()
        result = Matrix[self.dtype, new_size]()
        smallest_size = min(self.size, new_size)
        for line in range(smallest_size):
            for column in range(smallest_size):
                result[line, column] = self._coefs[line * self.size + column]
        return result

    def copy(self) -> 'Matrix':
        return type(self)(self._coefs)

    def transpose(self) -> 'Matrix':
        new_coefs = [None] * len(self._coefs)
        for line in range(self.size):
            for column in range(self.size):
                new_coefs[column * self.size + line] = self._coefs[line * self.size + column]
        return type(self)(new_coefs)

    def _sub_matrix(self, line_to_erase: int, column_to_erase: int) -> 'Matrix':
        """Minor matrix with one line and one column removed"""
        sub_coefs = [
            self._coefs[line * self.size + column]
            for line in range(self.size) if line != line_to_erase
            for column in range(self.size) if column != column_to_erase
        ]
        return Matrix[self.dtype, self.size - 1](sub_coefs)

    def det(self) -> Any:
        """
        Determinant by cofactor expansion along the first line.

        Exponential in the dimension, kept so that determinants of fraction or
        nested matrix coefficients stay exact.
        """
        if self.size == 1:
            return self._coefs[0]
        if self.size == 2:
            # | a  b |
            # | c  d |  = ad - bc
            return self._coefs[3] * self._coefs[0] - self._coefs[1] * self._coefs[2]
        determinant = zero_element(self.dtype)
        for i in range(self.size):
            sub_matrix_det = self._sub_matrix(0, i).det()
            if i % 2 == 0:
                determinant = determinant + self._coefs[i] * sub_matrix_det
            else:
                determinant = determinant - self._coefs[i] * sub_matrix_det
        return determinant

    def is_invertible(self) -> bool:
        return not is_zero(self.det())

    def inverse(self) -> 'Matrix':
        """
        Inverse matrix.

        A 1x1 matrix returns the reciprocal in its own element type. Larger
        matrices return the adjugate divided by the determinant, computed in
        extended floating precision regardless of the element type. A singular
        matrix is not rejected: its coefficients follow floating point division
        by zero (inf/nan).
        """
        if self.size == 1:
            return type(self)([identity_element(self.dtype) / self._coefs[0]]).convert_to(self.dtype)

        determinant = self.det()
        if is_zero(determinant):
            logging.warning(f"Inverting singular {self.size}x{self.size} matrix, coefficients will be inf/nan.")
        factor = EXTENDED_PRECISION(1) / to_extended(determinant)
        comatrix = [None] * len(self._coefs)
        for line in range(self.size):
            for column in range(self.size):
                cofactor = to_extended(self._sub_matrix(line, column).det())
                comatrix[line * self.size + column] = cofactor if (line + column) % 2 == 0 else -cofactor
        return Matrix[EXTENDED_PRECISION, self.size](comatrix).transpose() * factor

    def is_nilpotent(self, depth: Optional[int] = NILPOTENCY_DEPTH_DEFAULT) -> bool:
        """
        Check whether repeated squaring reaches the zero matrix.

        Args:
            depth: Number of squaring steps allowed (defaults to the dimension);
                   the highest power reached is self ** (2 ** depth)
        """
        if depth is None:
            depth = self.size
        matrix = self
        for step in range(depth + 1):
            if matrix.is_zero():
                logging.debug(f"Matrix vanished after {step} squaring step(s).")
                return True
            if step < depth:
                matrix = matrix * matrix
        logging.debug(f"Matrix did not vanish within {depth} squaring step(s).")
        return False

    def is_zero(self) -> bool:
        return all(is_zero(coef) for coef in self._coefs)

    def convert_to(self, target: type) -> 'Matrix':
        """Elementwise conversion into a matrix of another element type"""
        return Matrix[target, self.size]([convert(coef, target) for coef in self._coefs])

    # Operators
    def _is_scalar(self, other: Any) -> bool:
        if isinstance(self.dtype, type) and isinstance(other, self.dtype):
            return True
        return not isinstance(other, Matrix)

    def _is_same_size(self, other: Any) -> bool:
        return isinstance(other, Matrix) and other.size == self.size and not is_element_of(self, other)

    def __neg__(self) -> 'Matrix':
        return type(self)([-coef for coef in self._coefs])

    def __pos__(self) -> 'Matrix':
        return self.copy()

    def __add__(self, other):
        if self._is_scalar(other) or not self._is_same_size(other):
            return NotImplemented
        return type(self)([first + second for first, second in zip(self._coefs, other._coefs)])

    def __sub__(self, other):
        if self._is_scalar(other) or not self._is_same_size(other):
            return NotImplemented
        return self + -other

    def __mul__(self, other):
        if self._is_scalar(other):
            return type(self)([coef * other for coef in self._coefs])
        if not self._is_same_size(other):
            return NotImplemented
        size = self.size
        product_coefs = []
        for line in range(size):
            for column in range(size):
                # line of the first matrix multiplied by column of the second one
                value = zero_element(self.dtype)
                for i in range(size):
                    value = value + self._coefs[line * size + i] * other._coefs[i * size + column]
                product_coefs.append(value)
        return type(self)(product_coefs)

    def __rmul__(self, other):
        if not self._is_scalar(other):
            return NotImplemented
        return type(self)([other * coef for coef in self._coefs])

    def __pow__(self, exponent: int) -> 'Matrix':
        return power(self, exponent)

    # The ^ operator is the historical spelling of exponentiation for these types
    __xor__ = __pow__

    def __eq__(self, other) -> bool:
        if not self._is_same_size(other):
            return NotImplemented
        return all(first == second for first, second in zip(self._coefs, other._coefs))

    def __ne__(self, other) -> bool:
        equal = self.__eq__(other)
        if equal is NotImplemented:
            return NotImplemented
        return not equal

    __hash__ = None

    # Output
    def __str__(self) -> str:
        result = []
        for index, coef in enumerate(self._coefs, start=1):
            result.append(f"{coef} ")
            result.append("\n" if index % self.size == 0 else " ")
        return ''.join(result)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._coefs!r})"

    def write_to(self, writer: io.TextIOBase) -> None:
        """Write the multi-line representation to a text writer"""
        writer.write(str(self))
