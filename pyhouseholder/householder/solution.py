"""
Householder solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyhouseholder.core.result import Result
from pyhouseholder.core.compute.tolerances import ToleranceTier, select_tolerance
from pyhouseholder.householder.reflectors import ReflectorStorage

if TYPE_CHECKING:
    from pyhouseholder.householder.design import HouseholderDesign


@dataclass(frozen=True)
class HouseholderParams:
    """
    Parameter payload for a Householder reduction.

    R is the design's working buffer, not a copy: for an in-place
    reduction it is the caller's own array.
    """
    R: NDArray[np.float64]
    reflectors: ReflectorStorage
    rank: int
    diagonal: NDArray[np.float64]


@dataclass
class HouseholderSolution:
    """
    User-facing factorization results.

    Wraps the backend Result and provides R, the reflection vectors,
    products with the implicit Q, and self checks.
    """
    _result: Result[HouseholderParams]
    _design: 'HouseholderDesign'

    @property
    def R(self) -> NDArray[np.float64]:
        """The full m x n buffer holding R."""
        return self._result.params.R

    @property
    def R_upper(self) -> NDArray[np.float64]:
        """Leading n x n block of R, rows below it dropped."""
        return self._result.params.R[:self.n, :]

    @property
    def reflectors(self) -> ReflectorStorage:
        return self._result.params.reflectors

    @property
    def diagonal(self) -> NDArray[np.float64]:
        return self._result.params.diagonal

    @property
    def m(self) -> int:
        return self._design.m

    @property
    def n(self) -> int:
        return self._design.n

    @property
    def rank(self) -> int:
        """Numerical rank estimated from |diag(R)|."""
        return self._result.params.rank

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def apply_qt(self, B: ArrayLike) -> NDArray[np.float64]:
        """Qᵗ B for a vector or matrix with m rows."""
        return self.reflectors.apply_qt(B)

    def apply_q(self, B: ArrayLike) -> NDArray[np.float64]:
        """Q B for a vector or matrix with m rows."""
        return self.reflectors.apply_q(B)

    def reflector_norms(self) -> NDArray[np.float64]:
        return self.reflectors.norms()

    def check_normalized(self, tolerance: ToleranceTier | None = None) -> bool:
        """
        True if every reflection vector has unit norm.

        Args:
            tolerance: Tier to compare with; defaults to the tier of the
                       backend that produced this solution, loosened to the
                       ill-conditioned tier when R is numerically rank-deficient
        """
        if tolerance is None:
            tolerance = select_tolerance(
                self.backend_name, is_ill_conditioned=self.rank < self.n
            )
        return bool(np.allclose(
            self.reflector_norms(), 1.0, rtol=tolerance.rtol, atol=tolerance.atol
        ))

    def summary(self) -> str:
        """Plain-text report of the factorization."""
        lines = [
            "Householder QR Factorization",
            "=" * 60,
            f"Rows (m): {self.m}",
            f"Columns (n): {self.n}",
            f"Numerical rank: {self.rank}",
            f"Approx. flops: {self.info.get('flops', 0)}",
            f"Sub-diagonal zeroed: {self.info.get('zero_subdiagonal', False)}",
            "",
            "Diagonal of R:",
            "-" * 60,
        ]
        norms = self.reflector_norms()
        for i, (d, v_norm) in enumerate(zip(self.diagonal, norms)):
            lines.append(f"  R[{i},{i}]: {d:14.6g}   ||v[{i}]|| = {v_norm:.15g}")
        lines.append("-" * 60)
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        for w in self.warnings:
            lines.append(f"Warning: {w}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"HouseholderSolution(m={self.m}, n={self.n}, "
            f"rank={self.rank}, backend={self.backend_name!r})"
        )
