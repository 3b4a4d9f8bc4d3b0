"""
Tests for the Result[P] envelope.
"""

from dataclasses import FrozenInstanceError, dataclass

import pytest

from pylinsys.core.result import Result


@dataclass(frozen=True)
class FakeParams:
    """Minimal payload for testing."""
    value: float


def _make(**overrides):
    kwargs = dict(
        params=FakeParams(value=1.0),
        info={'method': 'crout', 'n': 2},
        timing={'total_seconds': 0.01},
        backend_name='cpu_crout',
    )
    kwargs.update(overrides)
    return Result(**kwargs)


class TestResult:

    def test_fields(self):
        r = _make()
        assert r.params.value == 1.0
        assert r.info['method'] == 'crout'
        assert r.backend_name == 'cpu_crout'

    def test_warnings_default_empty(self):
        assert _make().warnings == ()

    def test_timing_may_be_none(self):
        assert _make(timing=None).timing is None

    def test_frozen(self):
        r = _make()
        with pytest.raises(FrozenInstanceError):
            r.backend_name = 'other'

    def test_has_warning(self):
        r = _make(warnings=("LU pivots in columns [1] clamped to 2.220e-16",))
        assert r.has_warning("clamped")
        assert not r.has_warning("singular row")

    def test_has_warning_empty(self):
        assert not _make().has_warning("clamped")
