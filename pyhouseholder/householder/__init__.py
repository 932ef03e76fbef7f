"""
Householder QR factorization.

Public API:
    factorize(A, ...) -> HouseholderSolution
    factorize_inplace(A, reflectors=None, ...) -> HouseholderSolution

Both entry points handle input validation, backend selection and
result wrapping. factorize() works on a copy; factorize_inplace()
overwrites A with R.

Example:
    >>> from pyhouseholder.householder import factorize
    >>> sol = factorize(A)
    >>> sol.R            # m x n, upper triangular
    >>> sol.reflectors   # n unit vectors of lengths m, m-1, ...
    >>> sol.apply_qt(b)  # Qᵗ b
"""

from pyhouseholder.householder.design import HouseholderDesign
from pyhouseholder.householder.reflectors import ReflectorStorage
from pyhouseholder.householder.solution import HouseholderSolution, HouseholderParams
from pyhouseholder.householder.solvers import factorize, factorize_inplace

__all__ = [
    "factorize",
    "factorize_inplace",
    "HouseholderDesign",
    "ReflectorStorage",
    "HouseholderSolution",
    "HouseholderParams",
]
