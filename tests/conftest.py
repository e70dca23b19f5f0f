import pytest
from fracmat import Fraction, Matrix


@pytest.fixture(params=[1, 2, 3, 4], scope="session")
def size(request: pytest.FixtureRequest) -> int:
    """Provide session-level fixture for parametrized matrix dimensions."""
    return request.param


@pytest.fixture(params=[int, float, Fraction], scope="session")
def dtype(request: pytest.FixtureRequest) -> type:
    """Provide session-level fixture for parametrized matrix element types."""
    return request.param


@pytest.fixture
def sample_matrix(size, dtype):
    """Matrix with varied coefficients for every dimension and element type."""
    coefs = []
    for line in range(size):
        for column in range(size):
            value = (line + 1) * (column + 2) % 7 + (5 if line == column else 0)
            coefs.append(dtype(value))
    return Matrix[dtype, size](coefs)


@pytest.fixture
def upper_triangular(size):
    """Strictly upper-triangular integer matrix (nilpotent)."""
    coefs = [column - line if column > line else 0 for line in range(size) for column in range(size)]
    return Matrix[int, size](coefs)
