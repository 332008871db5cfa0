"""
Flat Float32 Buffer

Contiguous ctypes storage backing every Matrix. A matrix with C columns and
R rows keeps its C * R entries in one Buffer, column after column, so entry
(c, r) lives at offset c * R + r. Because there is exactly one allocation of
exactly C * R values, columns can never drift to different lengths.

Every store goes through a ctypes.c_float slot, so values written into a
Buffer are rounded to IEEE single precision.
"""

import ctypes
from typing import Any, Iterable, List, Union

import numpy as np

__all__ = ['Buffer', 'to_real', 'ITEMSIZE']


_CTYPE = ctypes.c_float
ITEMSIZE = ctypes.sizeof(_CTYPE)


def to_real(value: float) -> float:
    """Round a Python float to the nearest float32 value."""
    return _CTYPE(value).value


# =============================================================================
# Buffer Class
# =============================================================================

class Buffer:
    """
    Fixed-size contiguous float32 array with C-compatible memory layout.

    Features:
    - Memory-aligned allocation (64-byte)
    - Zero-initialized on construction
    - Bulk copy via memmove
    - numpy conversion without per-element Python loops

    Attributes:
        size (int): Number of elements
        nbytes (int): Total bytes

    Example:
        >>> buf = Buffer(6)
        >>> buf[4] = 0.1
        >>> buf[4]
        0.10000000149011612
    """

    __slots__ = ('_size', '_align', '_nbytes', '_data', '_owner')

    def __init__(self, size: int, align: int = 64):
        """
        Allocate a zero-filled buffer.

        Args:
            size: Number of float32 elements
            align: Memory alignment in bytes
        """
        if size < 0:
            raise ValueError(f"Buffer size must be non-negative, got {size}")

        self._size = size
        self._align = align
        self._nbytes = size * ITEMSIZE

        if size == 0:
            self._data = None
            self._owner = None
        else:
            # ctypes arrays are zero-initialized; over-allocate to align
            raw = (ctypes.c_uint8 * (align + self._nbytes))()
            addr = ctypes.addressof(raw)
            aligned_addr = (addr + align - 1) & ~(align - 1)

            self._data = (_CTYPE * size).from_address(aligned_addr)
            self._owner = raw  # Keep reference to prevent GC

    @property
    def size(self) -> int:
        """Number of elements."""
        return self._size

    @property
    def nbytes(self) -> int:
        """Total bytes."""
        return self._nbytes

    @property
    def ptr(self) -> int:
        """Address of the first element (0 for an empty buffer)."""
        if self._data is None:
            return 0
        return ctypes.addressof(self._data)

    # -------------------------------------------------------------------------
    # Construction Helpers
    # -------------------------------------------------------------------------

    @classmethod
    def from_list(cls, data: Iterable[float], size: int = -1) -> 'Buffer':
        """
        Create a buffer from an iterable of numbers.

        Args:
            data: Values in storage order
            size: Expected element count; inferred from data when negative

        Raises:
            ValueError: If data does not hold exactly size values
        """
        if size < 0:
            data = list(data)
            size = len(data)
        buf = cls(size)
        count = 0
        for val in data:
            if count >= size:
                raise ValueError(f"Expected {size} values, got more")
            buf._data[count] = val
            count += 1
        if count != size:
            raise ValueError(f"Expected {size} values, got {count}")
        return buf

    @classmethod
    def from_numpy(cls, array: np.ndarray) -> 'Buffer':
        """Copy an ndarray (flattened in C order) into a new buffer."""
        flat = np.ascontiguousarray(array, dtype=np.float32).reshape(-1)
        buf = cls(flat.size)
        if buf._data is not None:
            ctypes.memmove(buf.ptr, flat.ctypes.data, buf.nbytes)
        return buf

    # -------------------------------------------------------------------------
    # Element Access
    # -------------------------------------------------------------------------

    def __getitem__(self, idx: Union[int, slice]):
        """Get element(s) by offset."""
        if self._data is None:
            raise IndexError("Empty buffer")

        if isinstance(idx, slice):
            return self._data[idx]
        if idx < 0 or idx >= self._size:
            raise IndexError(f"Offset {idx} out of bounds [0, {self._size})")
        return self._data[idx]

    def __setitem__(self, idx: Union[int, slice], value: Any):
        """Set element(s) by offset."""
        if self._data is None:
            raise IndexError("Empty buffer")

        if isinstance(idx, slice):
            start, stop, step = idx.indices(self._size)
            for i, v in zip(range(start, stop, step), value):
                self._data[i] = v
        else:
            if idx < 0 or idx >= self._size:
                raise IndexError(f"Offset {idx} out of bounds [0, {self._size})")
            self._data[idx] = value

    def __len__(self) -> int:
        return self._size

    @property
    def data(self):
        """
        Raw ctypes array for kernels.

        Kernels index this directly to skip bounds checks; callers must
        stay within [0, size). None for an empty buffer.
        """
        return self._data

    # -------------------------------------------------------------------------
    # Conversion & Copy
    # -------------------------------------------------------------------------

    def tobytes(self) -> bytes:
        """Convert to bytes."""
        if self._data is None:
            return b''
        return bytes(self._data)

    def tolist(self) -> List[float]:
        """Convert to Python list."""
        if self._data is None:
            return []
        return list(self._data)

    def to_numpy(self) -> np.ndarray:
        """Copy into a 1-D float32 ndarray."""
        if self._data is None:
            return np.array([], dtype=np.float32)
        return np.frombuffer(self.tobytes(), dtype=np.float32).copy()

    def copy(self) -> 'Buffer':
        """Create a deep copy."""
        new = Buffer(self._size, self._align)
        if self._data is not None:
            ctypes.memmove(new.ptr, self.ptr, self._nbytes)
        return new

    def __repr__(self) -> str:
        if self._size == 0:
            return "Buffer([])"
        values = self.tolist()
        if self._size <= 6:
            data_str = str(values)
        else:
            data_str = str(values[:3] + ['...'] + values[-3:])
        return f"Buffer({data_str})"
