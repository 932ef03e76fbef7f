"""
Exception hierarchy for PyHouseholder.

All exceptions inherit from PyHouseholderError to allow catching any
library-specific error.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyHouseholderError(Exception):
    """Base exception for all PyHouseholder errors."""
    pass


class ValidationError(PyHouseholderError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions or
    when multiple arrays have inconsistent shapes.
    """
    pass


class InvalidDimensionError(DimensionError):
    """
    Matrix dimensions are outside what the factorization accepts.

    Raised when n > m (more columns than rows) or when either
    dimension is not positive. This is a usage contract: the reducer
    itself assumes it holds and the public API checks it up front.

    Attributes:
        m: Number of rows that was supplied
        n: Number of columns that was supplied
    """

    def __init__(
        self,
        message: str,
        m: int | None = None,
        n: int | None = None
    ):
        super().__init__(message)
        self.m = m
        self.n = n


class NumericalError(PyHouseholderError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class ZeroNormError(NumericalError):
    """
    A reflection vector has zero norm.

    Raised by the reducer when the active sub-column at some pivot step
    is entirely zero, which leaves the Householder reflection undefined.
    The matrix and reflector storage are left in the state they had when
    the error was detected and must not be treated as a valid result.

    Attributes:
        column: Index of the pivot column whose reflection failed
        m: Number of rows of the matrix
        n: Number of columns of the matrix
    """

    def __init__(
        self,
        message: str,
        column: int | None = None,
        m: int | None = None,
        n: int | None = None
    ):
        super().__init__(message)
        self.column = column
        self.m = m
        self.n = n


# The same failure seen from the caller's side: the input is rank-deficient.
RankDeficientInputError = ZeroNormError
