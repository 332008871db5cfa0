"""
Numeric kernels on flat float32 buffers.

Layout contract shared with Matrix: a (columns, rows) matrix stores entry
(c, r) at offset c * rows + r.

All arithmetic is single precision. Operands are float32 values held in
Python floats; a single +, - or * of two float32 values is exact enough in
double precision that rounding the result back to float32 yields the
correctly rounded float32 answer. Stores into a Buffer perform that
rounding, and the product kernel rounds each partial sum explicitly.
"""

import operator
from typing import Callable, Dict

from ._buffer import Buffer, to_real

__all__ = [
    'BINARY_OPS',
    'apply_scalar',
    'apply_scalar_into',
    'apply_elementwise',
    'apply_elementwise_into',
    'cross_into',
    'transpose_into',
    'fill_uniform',
]


BINARY_OPS: Dict[str, Callable[[float, float], float]] = {
    'add': operator.add,
    'subtract': operator.sub,
    'multiply': operator.mul,
    'hadamard': operator.mul,
}


# =============================================================================
# Elementwise Kernels
# =============================================================================

def apply_scalar(dst: Buffer, value: float, op: str) -> None:
    """dst[i] = op(dst[i], value) for every element."""
    data = dst.data
    if data is None:
        return
    f = BINARY_OPS[op]
    value = to_real(value)
    for i in range(dst.size):
        data[i] = f(data[i], value)


def apply_scalar_into(src: Buffer, dst: Buffer, value: float, op: str) -> None:
    """dst[i] = op(src[i], value); src is left untouched."""
    s, d = src.data, dst.data
    if s is None:
        return
    f = BINARY_OPS[op]
    value = to_real(value)
    for i in range(src.size):
        d[i] = f(s[i], value)


def apply_elementwise(dst: Buffer, other: Buffer, op: str) -> None:
    """dst[i] = op(dst[i], other[i]). Caller guarantees equal sizes."""
    d, o = dst.data, other.data
    if d is None:
        return
    f = BINARY_OPS[op]
    for i in range(dst.size):
        d[i] = f(d[i], o[i])


def apply_elementwise_into(a: Buffer, b: Buffer, dst: Buffer, op: str) -> None:
    """dst[i] = op(a[i], b[i]). Caller guarantees equal sizes."""
    x, y, d = a.data, b.data, dst.data
    if d is None:
        return
    f = BINARY_OPS[op]
    for i in range(dst.size):
        d[i] = f(x[i], y[i])


# =============================================================================
# Product & Transpose
# =============================================================================

def cross_into(
    a: Buffer, a_columns: int, a_rows: int,
    b: Buffer, b_columns: int,
    dst: Buffer,
) -> None:
    """
    Matrix product dst = a x b.

    a is (a_columns, a_rows), b is (b_columns, a_columns) and dst must be a
    zeroed (b_columns, a_rows) buffer. For each output row i and output
    column j the dot product runs over k in order, rounding every product
    and every partial sum to float32, so results are reproducible.
    """
    x, y, d = a.data, b.data, dst.data
    if d is None:
        return
    b_rows = a_columns
    for i in range(a_rows):
        for j in range(b_columns):
            acc = 0.0
            col = j * b_rows
            for k in range(a_columns):
                acc = to_real(acc + to_real(x[k * a_rows + i] * y[col + k]))
            d[j * a_rows + i] = acc


def transpose_into(src: Buffer, columns: int, rows: int, dst: Buffer) -> None:
    """dst (rows, columns) receives src (columns, rows) with axes swapped."""
    s, d = src.data, dst.data
    if s is None:
        return
    for i in range(columns):
        base = i * rows
        for j in range(rows):
            d[j * columns + i] = s[base + j]


# =============================================================================
# Random Fill
# =============================================================================

def fill_uniform(dst: Buffer, columns: int, rows: int, draws) -> None:
    """
    Write uniform draws mapped to [-1, 1) into dst.

    draws holds columns * rows float32 samples from [0, 1), consumed row by
    row across columns. 2 * u - 1 is exact in float32 for such u, so the
    largest possible entry is 1 - 2**-23.
    """
    d = dst.data
    if d is None:
        return
    n = 0
    for i in range(rows):
        for j in range(columns):
            d[j * rows + i] = float(draws[n]) * 2.0 - 1.0
            n += 1
