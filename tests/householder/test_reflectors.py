"""
Tests for ReflectorStorage.

Validates the triangular layout of the flat buffer, that vectors are
views into it, and the Q / Qᵗ products.
"""

import numpy as np
import pytest

from pyhouseholder.householder import ReflectorStorage, factorize
from pyhouseholder.core.exceptions import (
    DimensionError,
    InvalidDimensionError,
    ValidationError,
)


class TestLayout:

    def test_buffer_size(self):
        storage = ReflectorStorage.allocate(5, 3)
        assert storage.buffer.shape == (5 + 4 + 3,)

    def test_offsets_and_lengths(self):
        storage = ReflectorStorage.allocate(5, 3)
        assert [storage.offset(i) for i in range(3)] == [0, 5, 9]
        assert [storage.length(i) for i in range(3)] == [5, 4, 3]

    def test_square_layout(self):
        storage = ReflectorStorage.allocate(4, 4)
        assert storage.buffer.shape == (10,)
        assert storage[3].shape == (1,)

    def test_vectors_are_views(self):
        storage = ReflectorStorage.allocate(5, 3)
        storage[1][:] = 7.0
        np.testing.assert_array_equal(storage.buffer[5:9], 7.0)
        assert storage.buffer[4] == 0.0
        assert storage.buffer[9] == 0.0

    def test_len_and_iteration(self):
        storage = ReflectorStorage.allocate(6, 4)
        assert len(storage) == 4
        assert [v.shape[0] for v in storage] == [6, 5, 4, 3]

    def test_negative_index(self):
        storage = ReflectorStorage.allocate(6, 4)
        assert storage[-1].shape == (3,)

    def test_index_out_of_range(self):
        storage = ReflectorStorage.allocate(6, 4)
        with pytest.raises(IndexError):
            storage[4]

    def test_repr(self):
        assert repr(ReflectorStorage.allocate(3, 2)) == "ReflectorStorage(m=3, n=2)"


class TestConstruction:

    def test_caller_buffer_is_used(self):
        buf = np.zeros(12)
        storage = ReflectorStorage(5, 3, buffer=buf)
        assert storage.buffer is buf

    def test_wrong_buffer_size(self):
        with pytest.raises(DimensionError, match="needs 12 entries"):
            ReflectorStorage(5, 3, buffer=np.zeros(15))

    def test_wrong_buffer_dtype(self):
        with pytest.raises(ValidationError, match="float64"):
            ReflectorStorage(5, 3, buffer=np.zeros(12, dtype=np.float32))

    def test_wide_shape_rejected(self):
        with pytest.raises(InvalidDimensionError):
            ReflectorStorage.allocate(2, 3)


class TestApplyQ:

    @pytest.fixture
    def solution(self, tall_matrix):
        return factorize(tall_matrix)

    def test_round_trip_vector(self, solution, rng):
        b = rng.standard_normal(solution.m)
        np.testing.assert_allclose(
            solution.reflectors.apply_q(solution.reflectors.apply_qt(b)), b, atol=1e-12
        )

    def test_round_trip_matrix(self, solution, rng):
        B = rng.standard_normal((solution.m, 3))
        np.testing.assert_allclose(solution.apply_qt(solution.apply_q(B)), B, atol=1e-12)

    def test_vector_shape_preserved(self, solution):
        assert solution.apply_qt(np.ones(solution.m)).shape == (solution.m,)

    def test_input_not_modified(self, solution):
        B = np.ones((solution.m, 2))
        solution.apply_q(B)
        np.testing.assert_array_equal(B, 1.0)

    def test_preserves_norm(self, solution, rng):
        b = rng.standard_normal(solution.m)
        assert np.linalg.norm(solution.apply_qt(b)) == pytest.approx(np.linalg.norm(b))

    def test_wrong_row_count(self, solution):
        with pytest.raises(DimensionError, match="expected 8 rows"):
            solution.apply_qt(np.ones(3))

    def test_3d_rejected(self, solution):
        with pytest.raises(DimensionError, match="1D or 2D"):
            solution.apply_q(np.ones((8, 2, 2)))

    def test_squared_norms(self, solution):
        np.testing.assert_allclose(solution.reflectors.squared_norms(), 1.0, rtol=1e-12)

    def test_squared_norms_of_raw_buffer(self):
        storage = ReflectorStorage(3, 2, buffer=np.array([1.0, 2.0, 2.0, 3.0, 4.0]))
        np.testing.assert_array_equal(storage.squared_norms(), [9.0, 25.0])
        np.testing.assert_array_equal(storage.norms(), [3.0, 5.0])
