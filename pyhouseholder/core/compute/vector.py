"""
Level-1 vector primitives used by the Householder reducer.

Every function works on contiguous ranges of 1-D float64 arrays and writes
its output in place. None of them allocates an array whose size depends on
the range length: slices are views, reductions return scalars, and the
scaled subtraction goes through BLAS daxpy, which updates its target
in place.

Ranges are zero-indexed and given as an explicit (length, offset) pair,
matching how the reducer walks the active tail of each column.
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy.linalg import blas


def dot(
    u: NDArray[np.floating[Any]],
    v: NDArray[np.floating[Any]],
    length: int,
) -> float:
    """Inner product of u[0:length] and v[0:length]."""
    return float(np.dot(u[:length], v[:length]))


def partial_dot(
    u: NDArray[np.floating[Any]],
    w: NDArray[np.floating[Any]],
    length: int,
    skip: int,
) -> float:
    """
    Inner product over the sub-range [skip, length).

    Passing the same vector twice with skip=1 gives the squared norm of a vector minus
    the square of its first entry.
    """
    return float(np.dot(u[skip:length], w[skip:length]))


def sub_dot(
    u: NDArray[np.floating[Any]],
    v: NDArray[np.floating[Any]],
    length: int,
    offset: int,
) -> float:
    """Inner product of u[offset:offset+length] with v[0:length]."""
    return float(np.dot(u[offset:offset + length], v[:length]))


def max_abs(v: NDArray[np.floating[Any]], length: int) -> float:
    """
    Largest magnitude in v[0:length]; 0.0 for an empty range.

    Taken from max and min so no array of absolute values is built.
    """
    if length == 0:
        return 0.0
    head = v[:length]
    return max(float(head.max()), -float(head.min()))


def partial_copy(
    src: NDArray[np.floating[Any]],
    dst: NDArray[np.floating[Any]],
    length: int,
    offset: int,
) -> None:
    """Copy src[offset:offset+length] into dst[0:length]."""
    np.copyto(dst[:length], src[offset:offset + length])


def scalar_divide(
    v: NDArray[np.floating[Any]],
    scalar: float,
    length: int,
    out: NDArray[np.floating[Any]],
) -> None:
    """
    out[k] = v[k] / scalar for k in [0, length).

    out may be v itself. A true division is used rather than a multiply
    by the reciprocal so the rounding matches dividing entry by entry.
    """
    np.divide(v[:length], scalar, out=out[:length])


def partial_scaled_subtract(
    v: NDArray[np.floating[Any]],
    coef: float,
    offset: int,
    inout: NDArray[np.floating[Any]],
) -> None:
    """
    inout[offset+k] -= coef * v[k] for k in [0, len(v)).

    Both arrays must be contiguous float64 for daxpy to update the
    target without a copy.
    """
    length = v.shape[0]
    target = inout[offset:offset + length]
    updated = blas.daxpy(v, target, a=-coef)
    if not np.may_share_memory(updated, target):
        # f2py handed back a copy; write it through
        np.copyto(target, updated)
