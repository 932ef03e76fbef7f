"""
Tolerance tiers for numerical validation.

Defines how closely a factorization must satisfy its identities
(unit reflectors, Q·R = A, QᵗQ = I) on each compute path. Used by
HouseholderSolution.check_normalized(), the demo driver and the test suite.
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# CPU reference, float64 throughout
CPU_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='cpu_fp64',
    description='CPU double precision reference',
)

# CPU reference, ill-conditioned inputs (cond > 1e8)
CPU_FP64_ILL_CONDITIONED = ToleranceTier(
    rtol=1e-6,
    atol=1e-8,
    name='cpu_fp64_ill_conditioned',
    description='CPU double precision, ill-conditioned (cond > 1e8)',
)

# GPU with FP64; summation order differs from the CPU loop
GPU_FP64 = ToleranceTier(
    rtol=1e-9,
    atol=1e-11,
    name='gpu_fp64',
    description='GPU double precision, matches CPU reference',
)

# Reconstruction (Q·R ≈ A) scenarios quoted as an absolute bound
RECONSTRUCTION_ATOL = 1e-9


def select_tolerance(
    backend_name: str,
    is_ill_conditioned: bool = False,
) -> ToleranceTier:
    """Select appropriate tolerance tier for a given backend."""
    if 'gpu' in backend_name:
        return GPU_FP64
    if is_ill_conditioned:
        return CPU_FP64_ILL_CONDITIONED
    return CPU_FP64


def rank_tolerance(m: int, n: int, max_abs_diagonal: float) -> float:
    """
    Threshold below which a diagonal entry of R counts as zero.

    max(m, n) · eps · max|diag(R)|, the rule LAPACK-based rank
    estimates use.
    """
    return max(m, n) * float(np.finfo(np.float64).eps) * max_abs_diagonal
