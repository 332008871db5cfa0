"""
Type definitions and protocols for matrices.

Example:
    >>> from matrices._typing import GridLike
    >>>
    >>> def build(values: GridLike) -> "Matrix":
    ...     return Matrix.from_grid(values)
"""

from __future__ import annotations

from numbers import Real
from typing import (
    TYPE_CHECKING,
    Any,
    Protocol,
    Sequence,
    Union,
    runtime_checkable,
)

if TYPE_CHECKING:
    import numpy as np


# =============================================================================
# Type Aliases
# =============================================================================

Scalar = Union[int, float]
"""A plain number usable as the scalar operand of add/subtract/multiply."""

VectorLike = Sequence[Scalar]
"""Flat input for Matrix.from_vector."""

GridLike = Sequence[Sequence[Scalar]]
"""Nested input for Matrix.from_grid, columns first."""


# =============================================================================
# Protocol Definitions
# =============================================================================

@runtime_checkable
class RandomSource(Protocol):
    """Protocol for random sources accepted by Matrix.randomize.

    numpy.random.Generator satisfies it. Implementations must return
    uniform draws from [0, 1) with the requested dtype.
    """

    def random(self, size: Any = None, dtype: Any = ...) -> "np.ndarray":
        """Draw uniform samples from [0, 1)."""
        ...


# =============================================================================
# Type Checking Utilities
# =============================================================================

def is_scalar(value: Any) -> bool:
    """Check whether value is a real number (bool excluded)."""
    return isinstance(value, Real) and not isinstance(value, bool)
