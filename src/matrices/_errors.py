"""
Error handling for matrices.

Every failure is raised immediately to the caller. Nothing in the package
catches, clips, or pads around these errors.
"""

from __future__ import annotations

from typing import Optional, Tuple


# =============================================================================
# Error Codes
# =============================================================================

MATRIX_OK = 0

# Argument errors (10-19)
MATRIX_ERROR_INVALID_DIMENSION = 10
MATRIX_ERROR_DIMENSION_MISMATCH = 11
MATRIX_ERROR_INDEX_OUT_OF_BOUNDS = 14


_ERROR_MESSAGES = {
    MATRIX_OK: "Success",
    MATRIX_ERROR_INVALID_DIMENSION: "Invalid dimension",
    MATRIX_ERROR_DIMENSION_MISMATCH: "Dimension mismatch",
    MATRIX_ERROR_INDEX_OUT_OF_BOUNDS: "Index out of bounds",
}


Shape = Tuple[int, int]


# =============================================================================
# Exception Classes
# =============================================================================

class MatrixError(Exception):
    """
    Base exception for all matrix errors.

    Attributes:
        code: Numeric error code (one of the MATRIX_ERROR_* constants)
        message: Human-readable detail
    """

    OK = MATRIX_OK
    ERROR_INVALID_DIMENSION = MATRIX_ERROR_INVALID_DIMENSION
    ERROR_DIMENSION_MISMATCH = MATRIX_ERROR_DIMENSION_MISMATCH
    ERROR_INDEX_OUT_OF_BOUNDS = MATRIX_ERROR_INDEX_OUT_OF_BOUNDS

    code: int = MATRIX_OK

    def __init__(self, message: Optional[str] = None, code: Optional[int] = None):
        if code is not None:
            self.code = code
        if message is None:
            message = _ERROR_MESSAGES.get(self.code, f"Unknown error (code={self.code})")
        self.message = message
        super().__init__(f"Matrix Error {self.code}: {message}")


class InvalidDimensionError(MatrixError, ValueError):
    """A constructor was given a negative or non-integer size."""

    code = MATRIX_ERROR_INVALID_DIMENSION


class DimensionMismatchError(MatrixError, ValueError):
    """
    Operand shapes violate an operation's precondition.

    Attributes:
        operation: Name of the failing operation ("add", "cross", ...)
        left: (columns, rows) of the left operand / receiver
        right: (columns, rows) of the right operand, or None
    """

    code = MATRIX_ERROR_DIMENSION_MISMATCH

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        left: Optional[Shape] = None,
        right: Optional[Shape] = None,
    ):
        self.operation = operation
        self.left = left
        self.right = right
        super().__init__(message)


class IndexOutOfBoundsError(MatrixError, IndexError):
    """An element or column index is outside the matrix."""

    code = MATRIX_ERROR_INDEX_OUT_OF_BOUNDS


# =============================================================================
# Guard Functions
# =============================================================================

def _fmt(shape: Shape) -> str:
    return f"{shape[0]}x{shape[1]}"


def check_dimension(value, name: str) -> int:
    """
    Validate a constructor dimension.

    Args:
        value: Candidate size
        name: Argument name for the error message

    Returns:
        value as int

    Raises:
        InvalidDimensionError: If value is not a non-negative integer
    """
    # bool is an int subclass but never a meaningful size
    if isinstance(value, bool) or not hasattr(value, '__index__'):
        raise InvalidDimensionError(
            f"{name} must be an integer, got {type(value).__name__}"
        )
    value = value.__index__()
    if value < 0:
        raise InvalidDimensionError(f"{name} must be non-negative, got {value}")
    return value


def check_same_shape(operation: str, left: Shape, right: Shape) -> None:
    """
    Require identical shapes for an elementwise operation.

    Raises:
        DimensionMismatchError: If the shapes differ
    """
    if left != right:
        raise DimensionMismatchError(
            f"{operation}: the dimensions of both matrices must be equal "
            f"(left is {_fmt(left)}, right is {_fmt(right)})",
            operation=operation,
            left=left,
            right=right,
        )


def check_cross_shape(left: Shape, right: Shape) -> None:
    """
    Require left.columns == right.rows for a matrix product.

    Raises:
        DimensionMismatchError: If the inner dimensions differ
    """
    if left[0] != right[1]:
        raise DimensionMismatchError(
            "cross: the number of columns in the left matrix must equal "
            "the number of rows in the right matrix "
            f"(left is {_fmt(left)}, right is {_fmt(right)})",
            operation="cross",
            left=left,
            right=right,
        )


def check_index(index, bound: int, axis: str) -> int:
    """
    Validate an index against [0, bound).

    Negative indices are rejected rather than wrapped.

    Raises:
        IndexOutOfBoundsError: If index is outside [0, bound)
        TypeError: If index is not an integer
    """
    if isinstance(index, bool) or not hasattr(index, '__index__'):
        raise TypeError(f"{axis} index must be an integer, got {type(index).__name__}")
    index = index.__index__()
    if index < 0 or index >= bound:
        raise IndexOutOfBoundsError(f"{axis} index {index} out of bounds [0, {bound})")
    return index
