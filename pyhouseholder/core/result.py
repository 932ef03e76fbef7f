"""
Generic result container for PyHouseholder computations.

Backends return a Result envelope around their parameter payload so timing,
diagnostics and non-fatal warnings travel with the numbers that produced them.

Design decisions:
    - Generic over parameter payload P
    - info dict for flexible metadata (method, flop count, rank)
    - timing is optional (don't burden unit tests)
    - The envelope is frozen; the payload may hold mutable buffers
      (the factorization is in place by contract)
"""

from dataclasses import dataclass, field, replace
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope.

    Type Parameters:
        P: The domain-specific parameter payload type

    Attributes:
        params: Domain-specific payload (R buffer, reflection vectors, ...)
        info: Structured metadata (method, dimensions, diagnostics)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=HouseholderParams(...),
        ...     info={'method': 'householder', 'm': 3, 'n': 2},
        ...     timing={'total_seconds': 0.001},
        ...     backend_name='cpu_householder'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)

    def with_warning(self, message: str) -> 'Result[P]':
        """Return a copy of this result with one more warning attached."""
        return replace(self, warnings=self.warnings + (message,))
