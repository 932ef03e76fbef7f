"""
Tests for the level-1 vector primitives.

Each primitive is checked against its range contract and, where it
writes, that it writes into the caller's memory and nowhere else.
"""

import numpy as np
import pytest

from pyhouseholder.core.compute.vector import (
    dot,
    max_abs,
    partial_copy,
    partial_dot,
    partial_scaled_subtract,
    scalar_divide,
    sub_dot,
)


@pytest.fixture
def u():
    return np.array([1.0, 2.0, 3.0, 4.0, 5.0])


@pytest.fixture
def w():
    return np.array([2.0, -1.0, 0.5, 1.0, 3.0])


class TestDot:

    def test_full_length(self, u, w):
        assert dot(u, w, 5) == pytest.approx(float(u @ w))

    def test_prefix_only(self, u, w):
        assert dot(u, w, 2) == pytest.approx(1.0 * 2.0 + 2.0 * -1.0)

    def test_returns_python_float(self, u, w):
        assert isinstance(dot(u, w, 3), float)


class TestPartialDot:

    def test_skips_leading_entries(self, u, w):
        expected = 3.0 * 0.5 + 4.0 * 1.0 + 5.0 * 3.0
        assert partial_dot(u, w, 5, 2) == pytest.approx(expected)

    def test_squared_norm_without_first(self, u):
        assert partial_dot(u, u, 5, 1) == pytest.approx(4 + 9 + 16 + 25)

    def test_empty_range_is_zero(self, u):
        assert partial_dot(u, u, 1, 1) == 0.0


class TestSubDot:

    def test_offset_into_first_argument(self, u):
        v = np.array([1.0, 1.0, 1.0])
        assert sub_dot(u, v, 3, 2) == pytest.approx(3.0 + 4.0 + 5.0)

    def test_zero_offset_matches_dot(self, u, w):
        assert sub_dot(u, w, 4, 0) == pytest.approx(dot(u, w, 4))


class TestMaxAbs:

    def test_negative_entry_wins(self):
        assert max_abs(np.array([1.0, -4.0, 3.0]), 3) == 4.0

    def test_prefix_only(self, u):
        assert max_abs(u, 2) == 2.0

    def test_zero_vector(self):
        assert max_abs(np.zeros(4), 4) == 0.0

    def test_empty_range(self, u):
        assert max_abs(u, 0) == 0.0

    def test_tiny_entries_kept(self):
        assert max_abs(np.array([1e-170, -3e-170]), 2) == 3e-170


class TestPartialCopy:

    def test_copies_offset_range(self, u):
        dst = np.zeros(3)
        partial_copy(u, dst, 3, 2)
        np.testing.assert_array_equal(dst, [3.0, 4.0, 5.0])

    def test_leaves_rest_of_destination(self, u):
        dst = np.full(4, -1.0)
        partial_copy(u, dst, 2, 1)
        np.testing.assert_array_equal(dst, [2.0, 3.0, -1.0, -1.0])

    def test_source_unchanged(self, u):
        before = u.copy()
        partial_copy(u, np.zeros(5), 5, 0)
        np.testing.assert_array_equal(u, before)


class TestScalarDivide:

    def test_into_separate_output(self, u):
        out = np.zeros(5)
        scalar_divide(u, 2.0, 5, out)
        np.testing.assert_array_equal(out, u / 2.0)

    def test_in_place(self, u):
        expected = u / 3.0
        scalar_divide(u, 3.0, 5, u)
        np.testing.assert_array_equal(u, expected)

    def test_prefix_only(self, u):
        scalar_divide(u, 2.0, 2, u)
        np.testing.assert_array_equal(u, [0.5, 1.0, 3.0, 4.0, 5.0])


class TestPartialScaledSubtract:

    def test_updates_offset_range(self):
        inout = np.array([10.0, 10.0, 10.0, 10.0])
        v = np.array([1.0, 2.0])
        partial_scaled_subtract(v, 3.0, 1, inout)
        np.testing.assert_allclose(inout, [10.0, 7.0, 4.0, 10.0])

    def test_writes_through_column_view(self):
        """The reducer passes column views of a Fortran array."""
        A = np.asfortranarray(np.ones((4, 2)))
        v = np.array([1.0, 1.0, 1.0])
        partial_scaled_subtract(v, 0.5, 1, A[:, 1])
        np.testing.assert_allclose(A[:, 1], [1.0, 0.5, 0.5, 0.5])
        np.testing.assert_array_equal(A[:, 0], np.ones(4))

    def test_negative_coefficient_adds(self):
        inout = np.zeros(3)
        partial_scaled_subtract(np.array([1.0, 2.0, 3.0]), -2.0, 0, inout)
        np.testing.assert_allclose(inout, [2.0, 4.0, 6.0])
