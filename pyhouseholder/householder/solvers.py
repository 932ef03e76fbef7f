"""
Solver dispatch for the Householder reduction.

This module provides factorize() and factorize_inplace() (public API)
and backend selection.
"""

from typing import Literal
import warnings

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyhouseholder.core.compute.device import select_device
from pyhouseholder.householder.design import HouseholderDesign
from pyhouseholder.householder.reflectors import ReflectorStorage
from pyhouseholder.householder.solution import HouseholderSolution
from pyhouseholder.householder.backends.cpu import CPUHouseholderBackend


BackendChoice = Literal['auto', 'cpu', 'gpu', 'cpu_householder', 'gpu_householder']


def factorize(
    A: ArrayLike,
    *,
    backend: BackendChoice = 'auto',
    zero_subdiagonal: bool = False,
) -> HouseholderSolution:
    """
    Householder QR factorization of a tall-or-square real matrix.

    Computes R and the reflection vectors of A = QR without modifying A:
    the data is first copied into a column-major float64 buffer, which
    the reduction then overwrites with R.

    Args:
        A: Matrix (m x n, n <= m). Any real array-like; a 1D input is a
           single column.
        backend: Computational backend to use:
            - 'auto': CPU reference loop
            - 'cpu': CPU reference loop
            - 'gpu': PyTorch float64 on CUDA
        zero_subdiagonal: If True, entries of R below the diagonal are set
            to exactly 0.0. If False they keep their rounding residue.

    Returns:
        HouseholderSolution with R, the reflection vectors and checks

    Raises:
        ValidationError: If A is not a finite real numeric array
        InvalidDimensionError: If n > m or A is empty
        ZeroNormError: If some active sub-column is entirely zero
        NumericalError: If a column of R overflows float64

    Example:
        >>> import numpy as np
        >>> from pyhouseholder import factorize
        >>> A = np.array([[1., 4.], [2., 5.], [3., 6.]])
        >>> sol = factorize(A)
        >>> np.allclose(sol.apply_q(sol.R), A)
        True
    """
    # This is the boundary - validate here, trust everywhere else
    design = HouseholderDesign.from_array(A)
    return _run(design, backend, zero_subdiagonal)


def factorize_inplace(
    A: NDArray[np.float64],
    reflectors: ReflectorStorage | None = None,
    *,
    backend: BackendChoice = 'auto',
    zero_subdiagonal: bool = False,
) -> HouseholderSolution:
    """
    Householder QR factorization that overwrites A with R.

    Nothing proportional to the matrix size is allocated beyond A and
    the reflector storage (on the CPU backend).

    Args:
        A: float64, Fortran-contiguous m x n array (n <= m). Its original
           values are destroyed.
        reflectors: Storage from ReflectorStorage.allocate(m, n); allocated
            here when None
        backend: See factorize()
        zero_subdiagonal: See factorize()

    Returns:
        HouseholderSolution whose R is A itself

    Raises:
        ValidationError: If A is not a writeable column-major float64 array
        InvalidDimensionError: If n > m or A is empty
        DimensionError: If reflectors are sized for a different shape
        ZeroNormError: If some active sub-column is entirely zero. A and the
            reflectors then hold a partial result and must not be used.
        NumericalError: If a column of R overflows float64
    """
    design = HouseholderDesign.wrap(A, reflectors)
    return _run(design, backend, zero_subdiagonal)


def _run(
    design: HouseholderDesign,
    backend: BackendChoice,
    zero_subdiagonal: bool,
) -> HouseholderSolution:
    backend_impl = _get_backend(backend, zero_subdiagonal)
    result = backend_impl.solve(design)

    rank = result.params.rank
    if rank < design.n:
        message = (
            f"R is numerically rank-deficient: rank={rank}, expected={design.n}. "
            f"Some columns are (nearly) linear combinations of earlier ones."
        )
        warnings.warn(message, RuntimeWarning, stacklevel=3)
        result = result.with_warning(message)

    return HouseholderSolution(_result=result, _design=design)


def _get_backend(choice: BackendChoice, zero_subdiagonal: bool):
    """
    Select and instantiate the appropriate backend.

    Raises:
        ValueError: If unknown backend specified
        RuntimeError: If GPU requested but unavailable
    """
    if choice in ('auto', 'cpu', 'cpu_householder'):
        # 'auto' stays on the CPU: select_device only hands out a GPU on request
        return CPUHouseholderBackend(zero_subdiagonal=zero_subdiagonal)

    elif choice in ('gpu', 'gpu_householder'):
        device = select_device('gpu')
        from pyhouseholder.householder.backends.gpu import GPUHouseholderBackend
        index = '' if device.device_index is None else f':{device.device_index}'
        return GPUHouseholderBackend(
            device=f'cuda{index}', zero_subdiagonal=zero_subdiagonal
        )

    else:
        raise ValueError(f"Unknown backend: {choice!r}")
