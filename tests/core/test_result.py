"""
Tests for the Result[P] envelope.

Validates:
    - Generic payload
    - Frozen immutability
    - has_warning() and with_warning()
"""

from dataclasses import FrozenInstanceError, dataclass

import pytest

from pyhouseholder.core.result import Result


@dataclass(frozen=True)
class FakeParams:
    """Minimal payload for testing."""
    value: float


def _make(**overrides):
    kwargs = dict(
        params=FakeParams(value=1.0),
        info={"method": "householder"},
        timing={"total_seconds": 0.01},
        backend_name="cpu_householder",
    )
    kwargs.update(overrides)
    return Result(**kwargs)


class TestResultConstruction:

    def test_basic_creation(self):
        result = _make()
        assert result.params.value == 1.0
        assert result.info["method"] == "householder"
        assert result.timing["total_seconds"] == 0.01
        assert result.backend_name == "cpu_householder"

    def test_warnings_default_empty(self):
        assert _make().warnings == ()

    def test_timing_optional(self):
        assert _make(timing=None).timing is None


class TestResultImmutability:

    def test_cannot_reassign_field(self):
        result = _make()
        with pytest.raises(FrozenInstanceError):
            result.backend_name = "gpu_householder"


class TestWarnings:

    def test_has_warning_substring(self):
        result = _make(warnings=("R is numerically rank-deficient",))
        assert result.has_warning("rank-deficient")
        assert not result.has_warning("converge")

    def test_with_warning_returns_new_result(self):
        result = _make()
        updated = result.with_warning("first")
        assert result.warnings == ()
        assert updated.warnings == ("first",)
        assert updated.params is result.params

    def test_with_warning_appends(self):
        updated = _make(warnings=("a",)).with_warning("b")
        assert updated.warnings == ("a", "b")
