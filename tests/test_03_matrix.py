"""Test square matrix construction, access and linear algebra."""
import io
import logging
import numpy as np
import pytest
from sympy import Matrix as SympyMatrix
import fracmat
from fracmat import Fraction, Matrix, identity_matrix
from fracmat.names import EXTENDED_PRECISION


def test_specialization_is_cached():
    assert Matrix[int, 3] is Matrix[int, 3]
    assert Matrix[int, 3] is not Matrix[float, 3]
    assert Matrix[int, 3].size == 3
    assert Matrix[int, 3].dtype is int


def test_specialization_rejects_bad_sizes():
    with pytest.raises(ValueError):
        Matrix[int, 0]
    with pytest.raises(TypeError):
        Matrix[int, 2.0]
    with pytest.raises(TypeError):
        Matrix()


def test_constructors():
    assert list(Matrix[int, 2]()) == [0, 0, 0, 0]
    assert list(Matrix[int, 2](3)) == [3, 3, 3, 3]
    assert list(Matrix[int, 2]([1, 2, 3, 4])) == [1, 2, 3, 4]
    assert Matrix[int, 2].from_rows([[1, 2], [3, 4]]) == Matrix[int, 2]([1, 2, 3, 4])
    with pytest.raises(ValueError):
        Matrix[int, 2]([1, 2, 3])
    with pytest.raises(ValueError):
        Matrix[int, 2].from_rows([[1, 2, 3], [4, 5, 6]])


def test_identity(size):
    identity = Matrix[int, size].identity()
    for line in range(size):
        for column in range(size):
            assert identity.at(line, column) == (1 if line == column else 0)
    assert identity_matrix(int, size) == identity


def test_identity_matrix_returns_independent_copies():
    first = identity_matrix(int, 2)
    first.fill_with(9)
    assert identity_matrix(int, 2) == Matrix[int, 2]([1, 0, 0, 1])


def test_element_access():
    m = Matrix[int, 3](list(range(9)))
    assert m.at(1, 2) == 5
    assert m.at(7) == 7
    assert m[2, 0] == 6
    assert m[4] == 4
    m[0, 1] = 10
    m[8] = 80
    assert m.at(0, 1) == 10
    assert m.at(2, 2) == 80
    assert m.to_rows() == [[0, 10, 2], [3, 4, 5], [6, 7, 80]]


def test_bounds_check(size):
    m = Matrix[int, size]()
    with pytest.raises(IndexError):
        m.at(size, 0)
    with pytest.raises(IndexError):
        m.at(0, size)
    with pytest.raises(IndexError):
        m.at(size * size)
    with pytest.raises(IndexError):
        m.at(-1, 0)
    with pytest.raises(IndexError):
        m[size, 0] = 1
    with pytest.raises(IndexError):
        Matrix[int, size].accessor(size, 0)


def test_accessor():
    read_center = Matrix[int, 3].accessor(1, 1)
    assert read_center(Matrix[int, 3](list(range(9)))) == 4


def test_in_place_operations():
    m = Matrix[int, 2]([1, 2, 3, 4])
    assert m.increase_all_coefs(2) is None
    assert list(m) == [3, 4, 5, 6]
    m.decrease_all_coefs(1)
    assert list(m) == [2, 3, 4, 5]
    m.fill_with(7)
    assert list(m) == [7, 7, 7, 7]


def test_sums():
    m = Matrix[int, 3](list(range(1, 10)))
    assert m.line_sum(0) == 6
    assert m.line_sum(2) == 24
    assert m.column_sum(0) == 12
    assert m.column_sum(2) == 18
    assert m.sum() == 45
    with pytest.raises(IndexError):
        m.line_sum(3)


def test_transpose_is_involution(sample_matrix):
    assert sample_matrix.transpose().transpose() == sample_matrix


def test_transpose():
    assert Matrix[int, 2]([1, 2, 3, 4]).transpose() == Matrix[int, 2]([1, 3, 2, 4])


def test_identity_law(sample_matrix):
    identity = type(sample_matrix).identity()
    assert sample_matrix * identity == sample_matrix
    assert identity * sample_matrix == sample_matrix
    assert identity == sample_matrix ** 0


def test_arithmetic():
    a = Matrix[int, 2]([1, 2, 3, 4])
    b = Matrix[int, 2]([5, 6, 7, 8])
    assert a + b == Matrix[int, 2]([6, 8, 10, 12])
    assert b - a == Matrix[int, 2]([4, 4, 4, 4])
    assert -a == Matrix[int, 2]([-1, -2, -3, -4])
    assert a * 2 == Matrix[int, 2]([2, 4, 6, 8])
    assert 2 * a == Matrix[int, 2]([2, 4, 6, 8])
    assert a * b == Matrix[int, 2]([19, 22, 43, 50])
    assert a ** 2 == a * a
    assert a ^ 3 == a * a * a


def test_dimension_mismatch_is_rejected():
    with pytest.raises(TypeError):
        Matrix[int, 2]() + Matrix[int, 3]()
    with pytest.raises(TypeError):
        Matrix[int, 2]() * Matrix[int, 3]()


def test_det_2x2():
    assert Matrix[int, 2]([2, 0, 0, 3]).det() == 6
    assert Matrix[int, 2]([1, 2, 3, 4]).det() == -2


@pytest.mark.timeout(15)
def test_det_matches_sympy(sample_matrix):
    # every sample coefficient is integral, so sympy computes the exact determinant
    expected = SympyMatrix([[int(v) for v in row] for row in sample_matrix.to_rows()]).det()
    assert float(sample_matrix.det()) == pytest.approx(float(expected))


@pytest.mark.timeout(15)
def test_det_of_5x5():
    m = Matrix[int, 5]([
        0, 0, 1, 1, 1,
        1, 0, 0, 1, 1,
        0, 1, 1, 0, 0,
        0, 0, 0, 1, 1,
        1, 1, 0, 1, 0,
    ])
    assert m.det() == SympyMatrix(m.to_rows()).det()


def test_inverse_of_1x1():
    inverse = Matrix[Fraction, 1]([Fraction(2, 3)]).inverse()
    assert inverse == Matrix[Fraction, 1]([Fraction(3, 2)])
    assert Matrix[float, 1]([4.0]).inverse() == Matrix[float, 1]([0.25])


@pytest.mark.parametrize("coefs", [
    [2, 0, 0, 3],
    [4, 7, 2, 6],
    [1, 2, 3, 0, 1, 4, 5, 6, 0],
    [2, -1, 0, 0, -1, 2, -1, 0, 0, -1, 2, -1, 0, 0, -1, 2],
])
def test_inverse_round_trip(coefs):
    size = int(len(coefs) ** 0.5)
    m = Matrix[int, size](coefs)
    inverse = m.inverse()
    assert inverse.dtype is EXTENDED_PRECISION
    product = m.convert_to(EXTENDED_PRECISION) * inverse
    np.testing.assert_allclose(np.array(list(product), dtype=float),
                               np.array(list(Matrix[int, size].identity()), dtype=float),
                               atol=1e-12)


def test_inverse_of_fraction_matrix():
    m = Matrix[Fraction, 2]([Fraction(1, 2), Fraction(1, 3), Fraction(1, 4), Fraction(1, 5)])
    inverse = m.inverse()
    expected = np.linalg.inv(np.array([[1 / 2, 1 / 3], [1 / 4, 1 / 5]]))
    np.testing.assert_allclose(np.array(inverse.to_rows(), dtype=float), expected, rtol=1e-12)


def test_inverse_of_fraction_matrix_keeps_extended_precision():
    m = Matrix[Fraction, 2]([Fraction(1, 3), Fraction(0), Fraction(0), Fraction(1)])
    inverse = m.inverse()
    assert inverse.dtype is EXTENDED_PRECISION
    assert inverse.at(0, 0) == EXTENDED_PRECISION(1) / (EXTENDED_PRECISION(1) / EXTENDED_PRECISION(3))


def test_singular_inverse_is_not_rejected(caplog):
    m = Matrix[int, 2]([1, 2, 2, 4])
    assert not m.is_invertible()
    with caplog.at_level(logging.WARNING), np.errstate(divide='ignore', invalid='ignore'):
        inverse = m.inverse()
    assert "singular" in caplog.text
    assert not np.isfinite(np.array(list(inverse), dtype=float)).any()


def test_singular_inverse_without_logging(caplog):
    m = Matrix[int, 2]([0, 0, 0, 0])
    with fracmat.DisableLogger(), np.errstate(divide='ignore', invalid='ignore'):
        m.inverse()
    assert caplog.text == ""


def test_is_invertible():
    assert Matrix[int, 2]([2, 0, 0, 3]).is_invertible()
    assert not Matrix[float, 2]().is_invertible()


def test_strictly_upper_triangular_is_nilpotent(upper_triangular):
    assert upper_triangular.is_nilpotent()


def test_identity_is_not_nilpotent(size):
    assert not Matrix[int, size].identity().is_nilpotent()


def test_nilpotency_depth_budget():
    m = Matrix[int, 4]([0, 1, 0, 0, 0, 0, 1, 0, 0, 0, 0, 1, 0, 0, 0, 0])
    # m ** 4 is zero: two squarings reach it, one only reaches m ** 2
    assert not m.is_nilpotent(1)
    assert m.is_nilpotent(2)
    assert Matrix[int, 4]().is_nilpotent(0)
    assert not m.is_nilpotent(0)


def test_resized_same_size_is_copy(sample_matrix):
    resized = sample_matrix.resized(sample_matrix.size)
    assert resized == sample_matrix
    assert resized is not sample_matrix


def test_resized_round_trip(sample_matrix):
    size = sample_matrix.size
    enlarged = sample_matrix.resized(size + 2)
    assert enlarged.size == size + 2
    assert enlarged.at(size + 1, size + 1) == 0
    assert enlarged.at(0, size) == 0
    assert enlarged.resized(size) == sample_matrix


def test_resized_shrink():
    m = Matrix[int, 3](list(range(9)))
    assert m.resized(2) == Matrix[int, 2]([0, 1, 3, 4])


def test_convert_to():
    m = Matrix[int, 2]([1, 2, 3, 4]).convert_to(float)
    assert m.dtype is float
    assert all(isinstance(coef, float) for coef in m)
    fractions = Matrix[int, 2]([1, 2, 3, 4]).convert_to(Fraction)
    assert fractions == Matrix[Fraction, 2]([Fraction(1), Fraction(2), Fraction(3), Fraction(4)])
    halves = Matrix[Fraction, 2](Fraction(1, 2)).convert_to(float)
    assert list(halves) == [0.5, 0.5, 0.5, 0.5]


def test_formatting():
    assert str(Matrix[int, 2].identity()) == "1  0 \n0  1 \n"
    assert str(Matrix[Fraction, 1]([Fraction(1, 2)])) == "1/2 \n"
    assert repr(Matrix[int, 2]([1, 2, 3, 4])) == "Matrix[int, 2]([1, 2, 3, 4])"
    writer = io.StringIO()
    Matrix[int, 2]([1, 2, 3, 4]).write_to(writer)
    assert writer.getvalue() == "1  2 \n3  4 \n"
