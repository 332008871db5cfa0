"""High-Level Matrix Operations.

Allocating counterparts of the in-place Matrix methods. Every function
returns a new, independently owned Matrix and leaves its inputs untouched:

- Elementwise: add, subtract, hadamard
- Scalar: add, subtract, multiply
- Product: cross
- Shape: transpose
- Copy & conversion: clone, from_numpy, to_numpy

Example:
    >>> from matrices import Matrix, add, cross
    >>> a = Matrix.from_grid([[1, 2], [3, 4]])
    >>> b = Matrix.from_grid([[5, 6], [7, 8]])
    >>> add(a, b).to_list()
    [[6.0, 8.0], [10.0, 12.0]]
    >>> cross(a, b).shape
    (2, 2)
"""

from typing import Union

import numpy as np

from ._buffer import Buffer
from ._errors import check_cross_shape, check_same_shape
from ._kernel import (
    apply_elementwise_into,
    apply_scalar_into,
    cross_into,
    transpose_into,
)
from ._matrix import Matrix
from ._typing import Scalar, is_scalar

__all__ = [
    # Elementwise / scalar
    'add',
    'subtract',
    'multiply',
    'hadamard',

    # Product & shape
    'cross',
    'transpose',

    # Copy & conversion
    'clone',
    'from_numpy',
    'to_numpy',
]


def _require_matrix(value, op: str) -> Matrix:
    if not isinstance(value, Matrix):
        raise TypeError(f"{op}() expected a Matrix, got '{type(value).__name__}'")
    return value


def _binary(a: Matrix, b: Union[Matrix, Scalar], op: str) -> Matrix:
    """Shared allocation path for matrix-matrix and matrix-scalar operations."""
    result = Buffer(a.size)
    if isinstance(b, Matrix):
        check_same_shape(op, a.shape, b.shape)
        apply_elementwise_into(a._buffer, b._buffer, result, op)
    elif is_scalar(b):
        apply_scalar_into(a._buffer, result, b, op)
    else:
        raise TypeError(f"unsupported operand type for {op}: '{type(b).__name__}'")
    return Matrix._from_buffer(a.columns, a.rows, result)


# =============================================================================
# Elementwise & Scalar Operations
# =============================================================================

def add(a: Union[Matrix, Scalar], b: Union[Matrix, Scalar]) -> Matrix:
    """Sum of two matrices, or a matrix with a scalar added to every entry.

    Scalar addition is commutative: add(m, s) and add(s, m) are identical.

    Args:
        a: Matrix or scalar.
        b: Matrix or scalar; at least one operand must be a Matrix.

    Returns:
        New Matrix.

    Raises:
        DimensionMismatchError: If both are matrices of different shapes.
    """
    if is_scalar(a) and isinstance(b, Matrix):
        a, b = b, a
    return _binary(_require_matrix(a, "add"), b, "add")


def subtract(a: Matrix, b: Union[Matrix, Scalar]) -> Matrix:
    """a - b, elementwise for a matrix b or per entry for a scalar b.

    Raises:
        DimensionMismatchError: If both are matrices of different shapes.
    """
    return _binary(_require_matrix(a, "subtract"), b, "subtract")


def multiply(a: Union[Matrix, Scalar], value: Union[Matrix, Scalar]) -> Matrix:
    """Every entry multiplied by a scalar; either argument order is accepted."""
    if is_scalar(a) and isinstance(value, Matrix):
        a, value = value, a
    a = _require_matrix(a, "multiply")
    if not is_scalar(value):
        raise TypeError(
            f"multiply() takes a scalar, got '{type(value).__name__}'; "
            "use hadamard() or cross() for matrices"
        )
    return _binary(a, value, "multiply")


def hadamard(a: Matrix, b: Matrix) -> Matrix:
    """Elementwise (Hadamard) product.

    Raises:
        DimensionMismatchError: If the shapes differ.
    """
    _require_matrix(a, "hadamard")
    return _binary(a, _require_matrix(b, "hadamard"), "hadamard")


# =============================================================================
# Product & Shape
# =============================================================================

def cross(a: Matrix, b: Matrix) -> Matrix:
    """Matrix product a x b.

    Requires a.columns == b.rows. The result has b.columns columns and
    a.rows rows. Not commutative.

    Args:
        a: Left operand.
        b: Right operand.

    Returns:
        New Matrix of shape (b.columns, a.rows).

    Raises:
        DimensionMismatchError: If a.columns != b.rows; the message carries
            both full shapes.

    Example:
        >>> a = Matrix(3, 2)   # 3 columns, 2 rows
        >>> b = Matrix(4, 3)   # 4 columns, 3 rows
        >>> cross(a, b).shape
        (4, 2)
    """
    _require_matrix(a, "cross")
    _require_matrix(b, "cross")
    check_cross_shape(a.shape, b.shape)

    result = Buffer(b.columns * a.rows)
    cross_into(a._buffer, a.columns, a.rows, b._buffer, b.columns, result)
    return Matrix._from_buffer(b.columns, a.rows, result)


def transpose(a: Matrix) -> Matrix:
    """Transposed copy: shape (a.rows, a.columns), result[j, i] == a[i, j]."""
    _require_matrix(a, "transpose")
    result = Buffer(a.size)
    transpose_into(a._buffer, a.columns, a.rows, result)
    return Matrix._from_buffer(a.rows, a.columns, result)


# =============================================================================
# Copy & Conversion
# =============================================================================

def clone(a: Matrix) -> Matrix:
    """Independent deep copy of a."""
    return _require_matrix(a, "clone").clone()


def from_numpy(array: np.ndarray) -> Matrix:
    """Create a Matrix from a 1-D or 2-D ndarray (see Matrix.from_numpy)."""
    return Matrix.from_numpy(array)


def to_numpy(a: Matrix) -> np.ndarray:
    """(columns, rows) float32 ndarray copy of a."""
    return _require_matrix(a, "to_numpy").to_numpy()
