"""
Dense Float32 Matrix

The Matrix type addressed by (column, row). The first coordinate selects a
column, which is a dense run of `rows` values; storage is a single flat
Buffer with stride `rows`:

    offset(c, r) = c * rows + r

Every binary operation exists twice:

    m.add(other)              # in place, returns None
    matrices.add(m, other)    # allocates, inputs untouched

and the arithmetic operators map onto both forms (`a + b` allocates,
`a += b` mutates `a`).

Example:
    >>> from matrices import Matrix
    >>> a = Matrix.from_grid([[1, 2], [3, 4]])
    >>> b = Matrix.from_grid([[5, 6], [7, 8]])
    >>> (a + b).to_list()
    [[6.0, 8.0], [10.0, 12.0]]
    >>> a.cross(b)            # a becomes a x b
    >>> print(a)
    23 34
    31 46
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Any, Iterator, List, Optional, Tuple, Union

import numpy as np

from ._buffer import Buffer
from ._config import get_random_source
from ._errors import (
    DimensionMismatchError,
    InvalidDimensionError,
    check_cross_shape,
    check_dimension,
    check_index,
    check_same_shape,
)
from ._kernel import (
    apply_elementwise,
    apply_scalar,
    cross_into,
    fill_uniform,
    transpose_into,
)
from ._typing import is_scalar

if TYPE_CHECKING:
    from ._typing import GridLike, RandomSource, Scalar, VectorLike

__all__ = ['Matrix']

logger = logging.getLogger("matrices.matrix")

_REPR_MAX_COLUMNS = 6

_LARGEST_DRAW = np.nextafter(np.float32(1.0), np.float32(0.0))


def _format_value(value: float) -> str:
    """Shortest decimal that round-trips as float32."""
    v = np.float32(value)
    mag = abs(float(v))
    if mag != 0.0 and (mag < 1e-4 or mag >= 1e15):
        return np.format_float_scientific(v, unique=True, trim='-')
    return np.format_float_positional(v, unique=True, trim='-')


class Matrix:
    """
    Fixed-size mutable grid of float32 values.

    Attributes:
        columns (int): Number of columns (outer dimension)
        rows (int): Number of rows in every column
        shape (tuple): (columns, rows)

    Equality is structural: two matrices are equal when their shapes match
    and every entry compares equal. Matrices are mutable and therefore not
    hashable.
    """

    __slots__ = ('_columns', '_rows', '_buffer')

    __hash__ = None

    # Opt out of numpy ufuncs so `np.float32(s) + m` reaches __radd__
    __array_ufunc__ = None

    def __init__(self, columns: int, rows: int):
        """
        Create a zero-filled matrix.

        Args:
            columns: Number of columns (>= 0)
            rows: Number of rows (>= 0)

        Raises:
            InvalidDimensionError: If either size is negative or not an integer
        """
        columns = check_dimension(columns, "columns")
        rows = check_dimension(rows, "rows")
        self._columns = columns
        self._rows = rows
        self._buffer = Buffer(columns * rows)

    @classmethod
    def _from_buffer(cls, columns: int, rows: int, buffer: Buffer) -> "Matrix":
        """Internal: adopt a buffer already laid out as (columns, rows)."""
        mat = cls.__new__(cls)
        mat._columns = columns
        mat._rows = rows
        mat._buffer = buffer
        return mat

    # =========================================================================
    # Factory Methods
    # =========================================================================

    @classmethod
    def from_vector(cls, values: "VectorLike", is_column: bool = False) -> "Matrix":
        """
        Build a vector-shaped matrix.

        Args:
            values: Flat sequence of numbers
            is_column: False gives a 1 x n matrix (one column holding every
                value); True gives n x 1 (each value in its own column)

        Example:
            >>> Matrix.from_vector([1, 2, 3]).shape
            (1, 3)
            >>> Matrix.from_vector([1, 2, 3], is_column=True).shape
            (3, 1)
        """
        values = list(values)
        n = len(values)
        # Both orientations share the same flat order: offset i holds values[i]
        buffer = Buffer.from_list(values, n)
        if is_column:
            return cls._from_buffer(n, 1, buffer)
        return cls._from_buffer(1, n, buffer)

    @classmethod
    def from_grid(cls, values: "GridLike") -> "Matrix":
        """
        Build a matrix from nested sequences, columns first.

        values[c][r] becomes entry (c, r). Every inner sequence must have
        the same length.

        Raises:
            DimensionMismatchError: If the grid is not rectangular
        """
        grid = [list(column) for column in values]
        columns = len(grid)
        rows = len(grid[0]) if columns else 0

        for c, column in enumerate(grid):
            if len(column) != rows:
                raise DimensionMismatchError(
                    f"from_grid: column {c} has {len(column)} rows, "
                    f"expected {rows} like column 0",
                    operation="from_grid",
                )

        buffer = Buffer.from_list(
            (value for column in grid for value in column), columns * rows
        )
        return cls._from_buffer(columns, rows, buffer)

    @classmethod
    def from_numpy(cls, array: np.ndarray) -> "Matrix":
        """
        Copy an ndarray into a new matrix.

        A 1-D array becomes a 1 x n matrix, as from_vector(values) would
        build it. A 2-D array maps axis 0 to columns and axis 1 to rows.
        Values are converted to float32.

        Raises:
            InvalidDimensionError: If the array is not 1-D or 2-D
        """
        array = np.asarray(array)
        if array.ndim == 1:
            columns, rows = 1, array.shape[0]
        elif array.ndim == 2:
            columns, rows = array.shape
        else:
            raise InvalidDimensionError(f"Expected 1D or 2D array, got {array.ndim}D")
        return cls._from_buffer(columns, rows, Buffer.from_numpy(array))

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def columns(self) -> int:
        """Number of columns."""
        return self._columns

    @property
    def rows(self) -> int:
        """Number of rows."""
        return self._rows

    @property
    def shape(self) -> Tuple[int, int]:
        """(columns, rows)."""
        return (self._columns, self._rows)

    @property
    def size(self) -> int:
        """Total number of entries."""
        return self._buffer.size

    @property
    def T(self) -> "Matrix":
        """Transposed copy (see matrices.transpose)."""
        from ._ops import transpose
        return transpose(self)

    # =========================================================================
    # Element & Column Access
    # =========================================================================

    def __getitem__(self, key) -> Union[float, List[float]]:
        """
        m[c, r] returns one entry; m[c] returns a copy of column c.

        Raises:
            IndexOutOfBoundsError: If an index is outside the matrix
        """
        if isinstance(key, tuple):
            return self._buffer.data[self._offset(key)]

        c = check_index(key, self._columns, "column")
        if self._rows == 0:
            return []
        start = c * self._rows
        return self._buffer[start:start + self._rows]

    def __setitem__(self, key, value) -> None:
        """
        m[c, r] = x sets one entry; m[c] = seq replaces column c.

        Raises:
            IndexOutOfBoundsError: If an index is outside the matrix
            DimensionMismatchError: If a replacement column has the wrong length
        """
        if isinstance(key, tuple):
            offset = self._offset(key)
            if not is_scalar(value):
                raise TypeError(f"Matrix entries must be numbers, got {type(value).__name__}")
            self._buffer.data[offset] = float(value)
            return

        c = check_index(key, self._columns, "column")
        column = list(value)
        if len(column) != self._rows:
            raise DimensionMismatchError(
                f"set column: length of the replacement ({len(column)}) "
                f"must match the number of rows ({self._rows})",
                operation="set column",
                left=self.shape,
            )
        for v in column:
            if not is_scalar(v):
                raise TypeError(f"Matrix entries must be numbers, got {type(v).__name__}")
        if self._rows:
            start = c * self._rows
            self._buffer[start:start + self._rows] = column

    def _offset(self, key: tuple) -> int:
        if len(key) != 2:
            raise TypeError("Index must be (column, row) tuple")
        c = check_index(key[0], self._columns, "column")
        r = check_index(key[1], self._rows, "row")
        return c * self._rows + r

    def __len__(self) -> int:
        return self._columns

    def __iter__(self) -> Iterator[List[float]]:
        """Iterate over column copies."""
        for c in range(self._columns):
            yield self[c]

    # =========================================================================
    # Conversion
    # =========================================================================

    def to_list(self) -> List[List[float]]:
        """Nested lists, columns first (inverse of from_grid)."""
        return list(self)

    def to_numpy(self) -> np.ndarray:
        """Copy into a (columns, rows) float32 ndarray."""
        return self._buffer.to_numpy().reshape(self._columns, self._rows)

    # =========================================================================
    # In-place Arithmetic
    # =========================================================================

    def _apply(self, other: Any, op: str) -> None:
        if isinstance(other, Matrix):
            check_same_shape(op, self.shape, other.shape)
            apply_elementwise(self._buffer, other._buffer, op)
        elif is_scalar(other):
            apply_scalar(self._buffer, other, op)
        else:
            raise TypeError(
                f"unsupported operand type for {op}: '{type(other).__name__}'"
            )

    def add(self, other: Union["Matrix", "Scalar"]) -> None:
        """
        Add a matrix (elementwise) or a scalar (to every entry) in place.

        Raises:
            DimensionMismatchError: If other is a matrix of a different shape
        """
        self._apply(other, "add")

    def subtract(self, other: Union["Matrix", "Scalar"]) -> None:
        """Subtract a matrix (elementwise) or a scalar (from every entry) in place."""
        self._apply(other, "subtract")

    def multiply(self, value: "Scalar") -> None:
        """
        Multiply every entry by a scalar in place.

        Use hadamard() for the elementwise product and cross() for the
        matrix product.
        """
        if not is_scalar(value):
            raise TypeError(
                f"multiply() takes a scalar, got '{type(value).__name__}'; "
                "use hadamard() or cross() for matrices"
            )
        apply_scalar(self._buffer, value, "multiply")

    def hadamard(self, other: "Matrix") -> None:
        """
        Multiply elementwise by other in place.

        Raises:
            DimensionMismatchError: If the shapes differ
        """
        if not isinstance(other, Matrix):
            raise TypeError(f"hadamard() takes a Matrix, got '{type(other).__name__}'")
        check_same_shape("hadamard", self.shape, other.shape)
        apply_elementwise(self._buffer, other._buffer, "hadamard")

    def cross(self, other: "Matrix") -> None:
        """
        Replace this matrix with the product self x other.

        The receiver takes the result's shape (other.columns, self.rows).
        On failure the receiver is left unchanged.

        Raises:
            DimensionMismatchError: If self.columns != other.rows
        """
        if not isinstance(other, Matrix):
            raise TypeError(f"cross() takes a Matrix, got '{type(other).__name__}'")
        check_cross_shape(self.shape, other.shape)

        result = Buffer(other._columns * self._rows)
        cross_into(
            self._buffer, self._columns, self._rows,
            other._buffer, other._columns,
            result,
        )
        logger.debug(
            "In-place cross %dx%d -> %dx%d",
            self._columns, self._rows, other._columns, self._rows,
        )
        self._buffer = result
        self._columns = other._columns

    def transpose(self) -> None:
        """Swap columns and rows in place."""
        result = Buffer(self._buffer.size)
        transpose_into(self._buffer, self._columns, self._rows, result)
        logger.debug(
            "In-place transpose %dx%d -> %dx%d",
            self._columns, self._rows, self._rows, self._columns,
        )
        self._buffer = result
        self._columns, self._rows = self._rows, self._columns

    def randomize(self, rng: Optional["RandomSource"] = None) -> None:
        """
        Fill every entry with a uniform value from [-1.0, 1.0).

        Args:
            rng: Random source such as numpy.random.Generator. Defaults to
                the process-wide source from matrices.get_random_source().

        Example:
            >>> m = Matrix(4, 4)
            >>> m.randomize(np.random.default_rng(0))
        """
        if rng is None:
            rng = get_random_source()
        draws = np.asarray(rng.random(self._buffer.size, dtype=np.float32), dtype=np.float32)
        # Sources that ignore dtype may round up to 1.0 on conversion
        draws = np.minimum(draws, _LARGEST_DRAW)
        fill_uniform(self._buffer, self._columns, self._rows, draws)

    # =========================================================================
    # Copy & Comparison
    # =========================================================================

    def clone(self) -> "Matrix":
        """Independent deep copy."""
        return Matrix._from_buffer(self._columns, self._rows, self._buffer.copy())

    def __copy__(self) -> "Matrix":
        return self.clone()

    def __deepcopy__(self, memo) -> "Matrix":
        return self.clone()

    def __eq__(self, other: object):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and self._buffer.tolist() == other._buffer.tolist()

    def allclose(self, other: "Matrix", rtol: float = 1e-5, atol: float = 1e-8) -> bool:
        """
        Tolerance comparison of two matrices.

        Returns False (rather than raising) when the shapes differ.
        """
        if not isinstance(other, Matrix):
            raise TypeError(f"allclose() takes a Matrix, got '{type(other).__name__}'")
        if self.shape != other.shape:
            return False
        return bool(np.allclose(self.to_numpy(), other.to_numpy(), rtol=rtol, atol=atol))

    # =========================================================================
    # Operators
    # =========================================================================

    def __add__(self, other):
        if isinstance(other, Matrix) or is_scalar(other):
            from ._ops import add
            return add(self, other)
        return NotImplemented

    def __radd__(self, other):
        if is_scalar(other):
            from ._ops import add
            return add(other, self)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Matrix) or is_scalar(other):
            from ._ops import subtract
            return subtract(self, other)
        return NotImplemented

    def __mul__(self, other):
        if isinstance(other, Matrix):
            from ._ops import cross
            return cross(self, other)
        if is_scalar(other):
            from ._ops import multiply
            return multiply(self, other)
        return NotImplemented

    def __rmul__(self, other):
        if is_scalar(other):
            from ._ops import multiply
            return multiply(other, self)
        return NotImplemented

    def __matmul__(self, other):
        if isinstance(other, Matrix):
            from ._ops import cross
            return cross(self, other)
        return NotImplemented

    def __xor__(self, other):
        if isinstance(other, Matrix):
            from ._ops import hadamard
            return hadamard(self, other)
        return NotImplemented

    def __neg__(self):
        from ._ops import multiply
        return multiply(self, -1.0)

    def __iadd__(self, other):
        if isinstance(other, Matrix) or is_scalar(other):
            self.add(other)
            return self
        return NotImplemented

    def __isub__(self, other):
        if isinstance(other, Matrix) or is_scalar(other):
            self.subtract(other)
            return self
        return NotImplemented

    def __imul__(self, other):
        if isinstance(other, Matrix):
            self.cross(other)
            return self
        if is_scalar(other):
            self.multiply(other)
            return self
        return NotImplemented

    def __imatmul__(self, other):
        if isinstance(other, Matrix):
            self.cross(other)
            return self
        return NotImplemented

    def __ixor__(self, other):
        if isinstance(other, Matrix):
            self.hadamard(other)
            return self
        return NotImplemented

    # =========================================================================
    # Representation
    # =========================================================================

    def __str__(self) -> str:
        """
        Text grid: one line per column, values separated by spaces.

        Lines are joined with os.linesep and there is no trailing newline.
        Display only; not meant to be parsed back.
        """
        return os.linesep.join(
            " ".join(_format_value(v) for v in column) for column in self
        )

    def __repr__(self) -> str:
        columns = [str(column) for column in self]
        if len(columns) > _REPR_MAX_COLUMNS:
            columns = columns[:3] + ['...'] + columns[-3:]
        return (
            f"Matrix(columns={self._columns}, rows={self._rows}, "
            f"data=[{', '.join(columns)}])"
        )
