"""
Shared helpers for the Householder backends.
"""

import numpy as np
from numpy.typing import NDArray

from pyhouseholder.core.exceptions import NumericalError
from pyhouseholder.core.compute.tolerances import rank_tolerance
from pyhouseholder.householder.design import HouseholderDesign


def reflection_sign(x: float) -> float:
    """-1 for negative x, +1 otherwise (zero counts as positive)."""
    return -1.0 if x < 0 else 1.0


def numerical_rank(diagonal: NDArray[np.float64], m: int, n: int) -> int:
    """Count diagonal entries of R above the rank tolerance."""
    abs_diag = np.abs(diagonal)
    if abs_diag.size == 0 or abs_diag.max() == 0:
        return 0
    tol = rank_tolerance(m, n, float(abs_diag.max()))
    return int(np.sum(abs_diag > tol))


def zero_below_diagonal(R: NDArray[np.float64]) -> None:
    """Set entries with row > column to exactly 0.0, in place."""
    m, n = R.shape
    for j in range(n):
        R[j + 1:, j] = 0.0


def finish(design: HouseholderDesign, zero_subdiagonal: bool) -> tuple[NDArray[np.float64], int]:
    """
    Post-process a completed reduction.

    Returns:
        (diagonal of R, numerical rank)

    Raises:
        NumericalError: If R holds inf or NaN after the reduction
    """
    R = design.matrix
    if not np.isfinite(R).all():
        raise NumericalError(
            "R contains non-finite entries: the reduction overflowed float64."
        )
    if zero_subdiagonal:
        zero_below_diagonal(R)
    diagonal = np.diagonal(R).copy()
    return diagonal, numerical_rank(diagonal, design.m, design.n)


def info_dict(design: HouseholderDesign, rank: int, zero_subdiagonal: bool) -> dict:
    info = {
        'method': 'householder',
        'rank': rank,
        'flops': design.flops,
        'zero_subdiagonal': zero_subdiagonal,
    }
    info.update(design.metadata())
    return info
