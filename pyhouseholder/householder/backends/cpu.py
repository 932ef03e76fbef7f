"""
CPU reference backend for the Householder reduction.

Column-by-column Householder QR written against the level-1 primitives
in core.compute.vector. This is the reference numerics: every other
backend is validated against it.
"""

import math
from contextlib import nullcontext
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from pyhouseholder.core.result import Result
from pyhouseholder.core.exceptions import NumericalError, ZeroNormError
from pyhouseholder.core.compute.timing import Timer
from pyhouseholder.core.compute.vector import (
    max_abs,
    partial_copy,
    partial_dot,
    partial_scaled_subtract,
    scalar_divide,
    sub_dot,
)
from pyhouseholder.householder.design import HouseholderDesign
from pyhouseholder.householder.reflectors import ReflectorStorage
from pyhouseholder.householder.solution import HouseholderParams
from pyhouseholder.householder._common import finish, info_dict, reflection_sign


def householder_reduce(
    a: Sequence[NDArray[np.float64]],
    v: ReflectorStorage,
    m: int,
    n: int,
    timer: Timer | None = None,
) -> None:
    """
    Reduce an m x n matrix to upper triangular form in place.

    On return the columns a[0..n-1] hold R and v[i] holds the unit
    reflection vector of step i (length m - i). No array whose size
    depends on m or n is allocated.

    Args:
        a: The n columns of the matrix, each a contiguous float64 array
           of length m; overwritten by the columns of R
        v: Reflector storage sized for (m, n)
        m: Number of rows
        n: Number of columns, n <= m (not re-checked here)
        timer: Optional timer; accumulates 'reflector' and 'update' sections

    Raises:
        ZeroNormError: If the active sub-column of some column i is entirely
            zero. Columns i+1.. are untouched; earlier columns and reflectors
            keep their partially computed values.
        NumericalError: If applying a reflection overflows float64, i.e.
            some column of R is too large to represent.
    """
    for i in range(n):
        length = m - i
        v_i = v[i]

        with _section(timer, 'reflector'):
            partial_copy(a[i], v_i, length, i)

            scale = max_abs(v_i, length)
            if scale == 0.0:
                raise ZeroNormError(
                    f"Reflection vector {i} has zero norm: column {i} is zero "
                    f"from row {i} down, so the matrix is rank-deficient.",
                    column=i,
                    m=m,
                    n=n,
                )
            # Work on v_i / max|v_i| so the squares below neither overflow
            # nor underflow; the unit vector it normalizes to is the same.
            scalar_divide(v_i, scale, length, v_i)

            # ||v_i||^2 without the first entry, which is about to change
            tail_norm_sq = partial_dot(v_i, v_i, length, 1)

            v_i[0] += reflection_sign(v_i[0]) * math.sqrt(v_i[0] * v_i[0] + tail_norm_sq)

            norm = math.sqrt(v_i[0] * v_i[0] + tail_norm_sq)
            scalar_divide(v_i, norm, length, v_i)

        with _section(timer, 'update'):
            for j in range(i, n):
                coef = 2.0 * sub_dot(a[j], v_i, length, i)
                if not math.isfinite(coef):
                    raise NumericalError(
                        f"Reflection {i} overflows float64 on column {j}; "
                        f"entries of R would exceed {np.finfo(np.float64).max:.3g}."
                    )
                partial_scaled_subtract(v_i, coef, i, a[j])


def _section(timer: Timer | None, name: str):
    return nullcontext() if timer is None else timer.section(name)


class CPUHouseholderBackend:
    """
    CPU backend using the column-oriented Householder loop.

    Implements the Backend protocol for HouseholderDesign -> HouseholderParams.
    """

    def __init__(self, zero_subdiagonal: bool = False):
        """
        Args:
            zero_subdiagonal: If True, force entries below the diagonal of R
                to exactly 0.0 after the reduction. If False (default) they
                keep the rounding residue the reflections leave behind.
        """
        self.zero_subdiagonal = zero_subdiagonal

    @property
    def name(self) -> str:
        return 'cpu_householder'

    def solve(self, design: HouseholderDesign) -> Result[HouseholderParams]:
        """
        Run the reduction on the design's buffers.

        Raises:
            ZeroNormError: If a pivot sub-column is entirely zero
            NumericalError: If a column of R overflows float64
        """
        timer = Timer()
        timer.start()

        columns = [design.column(j) for j in range(design.n)]
        householder_reduce(
            columns, design.reflectors, design.m, design.n, timer=timer
        )

        with timer.section('finish'):
            diagonal, rank = finish(design, self.zero_subdiagonal)

        timer.stop()

        params = HouseholderParams(
            R=design.matrix,
            reflectors=design.reflectors,
            rank=rank,
            diagonal=diagonal,
        )

        return Result(
            params=params,
            info=info_dict(design, rank, self.zero_subdiagonal),
            timing=timer.result(),
            backend_name=self.name,
            warnings=(),
        )
