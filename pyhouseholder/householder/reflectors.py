"""
Storage for Householder reflection vectors.

Vector i has length m - i, so the n vectors form a ragged, triangular
collection. They are kept in one flat float64 buffer and addressed by
offset arithmetic; each vector is handed out as a contiguous view into
that buffer, which is what lets the reducer fill them without allocating.

    offset(i) = i*m - i*(i-1)/2
    total     = n*m - n*(n-1)/2
"""

from __future__ import annotations

from typing import Iterator

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyhouseholder.core.exceptions import DimensionError, ValidationError
from pyhouseholder.core.validation import check_array, check_dimensions, check_finite
from pyhouseholder.core.compute.vector import dot


class ReflectorStorage:
    """
    Ragged container for the n reflection vectors of an m x n reduction.

    The vectors represent Q implicitly: Q = H_0 H_1 ... H_{n-1} with
    H_i = I - 2 v_i v_iᵗ acting on rows i..m-1. They are not the columns
    of Q.

    Construct with ReflectorStorage.allocate(m, n) before the reduction.
    """

    def __init__(self, m: int, n: int, buffer: NDArray[np.float64] | None = None):
        check_dimensions(m, n)
        size = _storage_size(m, n)
        if buffer is None:
            buffer = np.zeros(size, dtype=np.float64)
        elif buffer.dtype != np.float64 or buffer.ndim != 1 or not buffer.flags.c_contiguous:
            raise ValidationError(
                "reflector buffer must be a contiguous 1D float64 array"
            )
        elif buffer.shape[0] != size:
            raise DimensionError(
                f"reflector buffer for m={m}, n={n} needs {size} entries, "
                f"got {buffer.shape[0]}"
            )
        self._m = m
        self._n = n
        self._buffer = buffer

    @classmethod
    def allocate(cls, m: int, n: int) -> ReflectorStorage:
        """Allocate zeroed storage for an m x n reduction."""
        return cls(m, n)

    # === Layout ===

    @property
    def m(self) -> int:
        """Number of rows of the factorized matrix (length of v_0)."""
        return self._m

    @property
    def n(self) -> int:
        """Number of reflection vectors."""
        return self._n

    @property
    def buffer(self) -> NDArray[np.float64]:
        """The flat backing buffer."""
        return self._buffer

    def offset(self, i: int) -> int:
        """Start of vector i in the flat buffer."""
        return i * self._m - i * (i - 1) // 2

    def length(self, i: int) -> int:
        """Length of vector i."""
        return self._m - i

    def __len__(self) -> int:
        return self._n

    def __getitem__(self, i: int) -> NDArray[np.float64]:
        if i < 0:
            i += self._n
        if not 0 <= i < self._n:
            raise IndexError(f"reflector index out of range for n={self._n}")
        start = self.offset(i)
        return self._buffer[start:start + self._m - i]

    def __iter__(self) -> Iterator[NDArray[np.float64]]:
        for i in range(self._n):
            yield self[i]

    def __repr__(self) -> str:
        return f"ReflectorStorage(m={self._m}, n={self._n})"

    # === Diagnostics ===

    def squared_norms(self) -> NDArray[np.float64]:
        """vᵢᵗvᵢ for every vector; all 1 after a successful reduction."""
        return np.array([dot(v, v, v.shape[0]) for v in self], dtype=np.float64)

    def norms(self) -> NDArray[np.float64]:
        """Euclidean norm of every vector."""
        return np.sqrt(self.squared_norms())

    # === Applying Q ===

    def apply_qt(self, B: ArrayLike) -> NDArray[np.float64]:
        """
        Compute Qᵗ B = H_{n-1} ... H_0 B.

        Args:
            B: Vector of length m or matrix with m rows

        Returns:
            New array with the same shape as B
        """
        X, squeeze = self._prepare(B)
        for i in range(self._n):
            _reflect_rows(self[i], X, i)
        return X[:, 0] if squeeze else X

    def apply_q(self, B: ArrayLike) -> NDArray[np.float64]:
        """
        Compute Q B = H_0 ... H_{n-1} B.

        Passing R from the same reduction reconstructs the original matrix.

        Args:
            B: Vector of length m or matrix with m rows

        Returns:
            New array with the same shape as B
        """
        X, squeeze = self._prepare(B)
        for i in reversed(range(self._n)):
            _reflect_rows(self[i], X, i)
        return X[:, 0] if squeeze else X

    def _prepare(self, B: ArrayLike) -> tuple[NDArray[np.float64], bool]:
        X = check_array(B, 'B')
        check_finite(X, 'B')
        if X.ndim == 1:
            X = X.reshape(-1, 1)
            squeeze = True
        elif X.ndim == 2:
            squeeze = False
        else:
            raise DimensionError(
                f"B: expected 1D or 2D array, got {X.ndim}D with shape {X.shape}"
            )
        if X.shape[0] != self._m:
            raise DimensionError(
                f"B: expected {self._m} rows, got {X.shape[0]}"
            )
        return np.array(X, dtype=np.float64, order='F'), squeeze


def _reflect_rows(v: NDArray[np.float64], X: NDArray[np.float64], i: int) -> None:
    """Apply H = I - 2vvᵗ to rows i..m-1 of X in place."""
    tail = X[i:, :]
    tail -= 2.0 * np.outer(v, v @ tail)


def _storage_size(m: int, n: int) -> int:
    return n * m - n * (n - 1) // 2
