"""
GPU tests for the Householder reduction.

Validates the PyTorch float64 backend against the CPU reference.
Skipped automatically when no CUDA device is available.
"""

import numpy as np
import pytest

from pyhouseholder.householder import ReflectorStorage, factorize, factorize_inplace
from pyhouseholder.core.compute.tolerances import GPU_FP64, RECONSTRUCTION_ATOL
from pyhouseholder.core.exceptions import ZeroNormError


def _cuda_available():
    try:
        import torch
        return torch.cuda.is_available()
    except ImportError:
        return False


pytestmark = pytest.mark.skipif(
    not _cuda_available(), reason="No CUDA GPU available"
)


@pytest.fixture
def matrix():
    rng = np.random.default_rng(7)
    A = rng.standard_normal((40, 25))
    A[:25, :25] += 5.0 * np.eye(25)
    return A


class TestGPUMatchesCPU:

    def test_r_matches(self, matrix):
        cpu = factorize(matrix, backend='cpu')
        gpu = factorize(matrix, backend='gpu')
        np.testing.assert_allclose(gpu.R_upper, cpu.R_upper, rtol=GPU_FP64.rtol, atol=1e-10)

    def test_reflectors_match(self, matrix):
        cpu = factorize(matrix, backend='cpu')
        gpu = factorize(matrix, backend='gpu')
        np.testing.assert_allclose(
            gpu.reflectors.buffer, cpu.reflectors.buffer, rtol=GPU_FP64.rtol, atol=1e-10
        )

    def test_reconstruction(self, matrix):
        gpu = factorize(matrix, backend='gpu')
        np.testing.assert_allclose(gpu.apply_q(gpu.R), matrix, atol=RECONSTRUCTION_ATOL)
        assert gpu.check_normalized()
        assert gpu.backend_name == 'gpu_householder'

    def test_inplace_writes_back(self, matrix):
        A = np.asfortranarray(matrix.copy())
        sol = factorize_inplace(A, backend='gpu')
        assert sol.R is A
        np.testing.assert_allclose(sol.apply_q(A), matrix, atol=RECONSTRUCTION_ATOL)

    def test_zero_column(self):
        with pytest.raises(ZeroNormError) as exc_info:
            factorize(np.zeros((4, 2)), backend='gpu')
        assert exc_info.value.column == 0

    def test_zero_column_leaves_later_slots_like_cpu(self):
        A = np.array([
            [1.0, 5.0, 1.0],
            [0.0, 0.0, 2.0],
            [0.0, 0.0, 3.0],
            [0.0, 0.0, 4.0],
        ])
        buffers = {}
        for backend in ('cpu', 'gpu'):
            storage = ReflectorStorage.allocate(4, 3)
            storage.buffer[:] = 7.0
            with pytest.raises(ZeroNormError):
                factorize_inplace(np.asfortranarray(A.copy()), storage, backend=backend)
            buffers[backend] = storage.buffer
        np.testing.assert_array_equal(buffers['gpu'], buffers['cpu'])

    def test_extreme_scales(self):
        for scale in (1e-170, 1e200):
            A = scale * np.array([[1.0, 1.0], [1.0, 2.0], [0.0, 3.0]])
            sol = factorize(A, backend='gpu')
            assert np.all(np.isfinite(sol.R))
            assert sol.rank == 2
            assert sol.check_normalized()
