"""
matrices - Dense Float32 Matrices

A small dense matrix type with the standard linear-algebra operation set:

Matrix:
    Fixed-size mutable grid of float32 values addressed by (column, row),
    stored in one flat aligned buffer.

Operations (each in two forms):
    m.add(x) / add(m, x)              elementwise or scalar addition
    m.subtract(x) / subtract(m, x)    elementwise or scalar subtraction
    m.multiply(s) / multiply(m, s)    scalar multiplication
    m.hadamard(b) / hadamard(m, b)    elementwise product
    m.cross(b) / cross(m, b)          matrix product
    m.transpose() / transpose(m)      axis swap

    The method form mutates m and returns None; the function form returns
    a new Matrix.

Usage:
    >>> import matrices
    >>> from matrices import Matrix
    >>> a = Matrix.from_grid([[1, 2], [3, 4]])
    >>> b = Matrix.from_vector([1, 1])
    >>> (a * b).shape        # matrix product
    (1, 2)
    >>> matrices.seed(42)
    >>> a.randomize()        # reproducible uniform values in [-1, 1)
"""

__version__ = "0.1.0"

from ._matrix import Matrix
from ._ops import (
    add,
    subtract,
    multiply,
    hadamard,
    cross,
    transpose,
    clone,
    from_numpy,
    to_numpy,
)
from ._errors import (
    MatrixError,
    InvalidDimensionError,
    DimensionMismatchError,
    IndexOutOfBoundsError,
)
from ._config import (
    get_config,
    get_random_source,
    set_random_source,
    seed,
)

__all__ = [
    # Version
    "__version__",
    # Core type
    "Matrix",
    # Operations
    "add",
    "subtract",
    "multiply",
    "hadamard",
    "cross",
    "transpose",
    "clone",
    "from_numpy",
    "to_numpy",
    # Errors
    "MatrixError",
    "InvalidDimensionError",
    "DimensionMismatchError",
    "IndexOutOfBoundsError",
    # Configuration
    "get_config",
    "get_random_source",
    "set_random_source",
    "seed",
]
