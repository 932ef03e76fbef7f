"""
PyHouseholder: Householder QR factorization for Python.

Reduces a dense real m x n matrix (n <= m) to upper triangular R in
place and returns the n unit reflection vectors that represent Q
implicitly.

Submodules:
    householder: factorize(), factorize_inplace(), ReflectorStorage
    core: exceptions, validation, result envelope, compute primitives
    cli: demo driver (python -m pyhouseholder)
"""

__version__ = "0.1.0"

from pyhouseholder.core.exceptions import (
    PyHouseholderError,
    InvalidDimensionError,
    NumericalError,
    ZeroNormError,
    RankDeficientInputError,
)
from pyhouseholder.householder import (
    factorize,
    factorize_inplace,
    ReflectorStorage,
    HouseholderSolution,
)

__all__ = [
    "__version__",
    "factorize",
    "factorize_inplace",
    "ReflectorStorage",
    "HouseholderSolution",
    "PyHouseholderError",
    "InvalidDimensionError",
    "NumericalError",
    "ZeroNormError",
    "RankDeficientInputError",
]
