"""
Input validation utilities for PyHouseholder.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pyhouseholder.core.exceptions import (
    ValidationError,
    DimensionError,
    InvalidDimensionError,
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating mixed types or non-numeric data)
    and complex inputs, which the real-valued factorization does not handle.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with floating dtype

    Raises:
        ValidationError: If input cannot be converted to a real numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if np.issubdtype(result.dtype, np.complexfloating):
        raise ValidationError(
            f"{name}: complex dtype {result.dtype}, expected real data"
        )

    if not np.issubdtype(result.dtype, np.floating):
        result = result.astype(np.float64)

    return result


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Args:
        array: Array to check
        ndim: Required number of dimensions
        name: Parameter name for error messages

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_dimensions(m: int, n: int) -> None:
    """
    Verify (m, n) is a shape the factorization accepts.

    Requires m >= 1, n >= 1 and n <= m. A wide matrix is rejected,
    never repaired.

    Args:
        m: Number of rows
        n: Number of columns

    Raises:
        InvalidDimensionError: If either dimension is non-positive or n > m
    """
    if m < 1 or n < 1:
        raise InvalidDimensionError(
            f"dimensions must be positive, got m={m}, n={n}",
            m=m,
            n=n,
        )
    if n > m:
        raise InvalidDimensionError(
            f"factorization requires n <= m, got m={m}, n={n}",
            m=m,
            n=n,
        )


def check_column_major(array: NDArray[Any], name: str) -> None:
    """
    Verify array is a float64, Fortran-contiguous, writeable buffer.

    The in-place reducer works on contiguous column views and writes
    R back into the caller's memory, so it cannot accept a copy.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If the array cannot be mutated column by column in place
    """
    if not isinstance(array, np.ndarray):
        raise ValidationError(
            f"{name}: in-place factorization requires a numpy.ndarray, "
            f"got {type(array).__name__}"
        )
    if array.dtype != np.float64:
        raise ValidationError(
            f"{name}: in-place factorization requires float64, got {array.dtype}"
        )
    if not array.flags.f_contiguous:
        raise ValidationError(
            f"{name}: in-place factorization requires a column-major "
            f"(Fortran-contiguous) array; use np.asfortranarray or factorize()"
        )
    if not array.flags.writeable:
        raise ValidationError(f"{name}: array is read-only")
