"""
Householder reduction design.

The design holds the two buffers a reduction works in: the column-major
matrix that is overwritten by R, and the reflector storage that receives
the reflection vectors. Building a design is where validation happens;
backends trust it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyhouseholder.core.exceptions import DimensionError, ValidationError
from pyhouseholder.core.validation import (
    check_array,
    check_2d,
    check_column_major,
    check_dimensions,
    check_finite,
)
from pyhouseholder.householder.reflectors import ReflectorStorage


@dataclass(frozen=True)
class HouseholderDesign:
    """
    Validated input of a Householder reduction.

    The dataclass is frozen but the buffers it points to are not:
    running a backend on a design overwrites matrix with R and fills
    reflectors.

    Construction:
        HouseholderDesign.from_array(A)                  # copies A
        HouseholderDesign.wrap(A)                        # A is overwritten
        HouseholderDesign.wrap(A, reflectors=storage)    # caller-owned storage
    """
    _matrix: NDArray[np.float64]
    _reflectors: ReflectorStorage
    _m: int
    _n: int
    _copied: bool

    @classmethod
    def from_array(cls, A: ArrayLike) -> HouseholderDesign:
        """
        Build a design from any real array-like, leaving it untouched.

        A column vector may be given as 1D; it is treated as m x 1.
        """
        arr = check_array(A, 'A')
        if arr.ndim == 1:
            arr = arr.reshape(-1, 1)
        check_2d(arr, 'A')
        m, n = arr.shape
        check_dimensions(m, n)
        check_finite(arr, 'A')

        matrix = np.array(arr, dtype=np.float64, order='F', copy=True)
        return cls(
            _matrix=matrix,
            _reflectors=ReflectorStorage.allocate(m, n),
            _m=m,
            _n=n,
            _copied=True,
        )

    @classmethod
    def wrap(
        cls,
        A: NDArray[np.float64],
        reflectors: ReflectorStorage | None = None,
    ) -> HouseholderDesign:
        """
        Build a design that reduces A in place.

        Args:
            A: float64, Fortran-contiguous m x n array; destroyed by the
               reduction and replaced by R
            reflectors: Storage sized for (m, n); allocated when None

        Raises:
            ValidationError: If A is not a writeable column-major float64 array
            InvalidDimensionError: If n > m or a dimension is zero
            DimensionError: If reflectors were sized for another shape
        """
        check_column_major(A, 'A')
        check_2d(A, 'A')
        m, n = A.shape
        check_dimensions(m, n)
        check_finite(A, 'A')

        if reflectors is None:
            reflectors = ReflectorStorage.allocate(m, n)
        elif not isinstance(reflectors, ReflectorStorage):
            raise ValidationError(
                f"reflectors: expected ReflectorStorage, got {type(reflectors).__name__}"
            )
        elif (reflectors.m, reflectors.n) != (m, n):
            raise DimensionError(
                f"reflectors: sized for m={reflectors.m}, n={reflectors.n}, "
                f"matrix is m={m}, n={n}"
            )

        return cls(_matrix=A, _reflectors=reflectors, _m=m, _n=n, _copied=False)

    # === Properties ===

    @property
    def matrix(self) -> NDArray[np.float64]:
        """The m x n working buffer (A before the reduction, R after)."""
        return self._matrix

    @property
    def reflectors(self) -> ReflectorStorage:
        """Storage for the n reflection vectors."""
        return self._reflectors

    @property
    def m(self) -> int:
        """Number of rows."""
        return self._m

    @property
    def n(self) -> int:
        """Number of columns."""
        return self._n

    @property
    def copied(self) -> bool:
        """True if the working buffer is a private copy of the caller's data."""
        return self._copied

    @property
    def flops(self) -> int:
        """Approximate flop count of the reduction, 2mn² - (2/3)n³."""
        m, n = self._m, self._n
        return int(round(2 * m * n * n - (2.0 / 3.0) * n ** 3))

    def column(self, j: int) -> NDArray[np.float64]:
        """Contiguous view of column j."""
        return self._matrix[:, j]

    def metadata(self) -> dict[str, Any]:
        return {'m': self._m, 'n': self._n, 'copied': self._copied}
