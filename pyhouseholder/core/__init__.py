"""
Core infrastructure for PyHouseholder.

Key components:
    protocols: Backend protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Hardware detection, timing, tolerances, vector primitives
"""

from pyhouseholder.core.protocols import Backend
from pyhouseholder.core.result import Result
from pyhouseholder.core.exceptions import (
    PyHouseholderError,
    ValidationError,
    DimensionError,
    InvalidDimensionError,
    NumericalError,
    ZeroNormError,
    RankDeficientInputError,
)

__all__ = [
    # Protocols
    "Backend",
    # Result
    "Result",
    # Exceptions
    "PyHouseholderError",
    "ValidationError",
    "DimensionError",
    "InvalidDimensionError",
    "NumericalError",
    "ZeroNormError",
    "RankDeficientInputError",
]
