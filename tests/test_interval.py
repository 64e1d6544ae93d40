"""Tests for Interval — window bounds with optional open ends."""

import math

import pytest

from strip_engine.errors import InvalidIntervalError
from strip_engine.interval import UNBOUNDED, Interval


class TestInterval:

    def test_closed_contains(self):
        win = Interval(1.0, 5.0)
        assert win.contains(1.0)
        assert win.contains(3.0)
        assert win.contains(5.0)
        assert not win.contains(0.999)
        assert not win.contains(5.001)

    def test_open_lower(self):
        win = Interval(None, 5.0)
        assert win.contains(-1e12)
        assert not win.contains(6.0)

    def test_open_upper(self):
        win = Interval(2.0, None)
        assert win.contains(1e12)
        assert not win.contains(1.0)

    def test_unbounded(self):
        assert UNBOUNDED.contains(0.0)
        assert not UNBOUNDED.is_bounded
        assert UNBOUNDED.minmax() == (None, None)
        assert UNBOUNDED.lower == -math.inf
        assert UNBOUNDED.upper == math.inf

    def test_exclusive_edges(self):
        win = Interval(1.0, 5.0, inc_min=False, inc_max=False)
        assert not win.contains(1.0)
        assert not win.contains(5.0)
        assert win.contains(1.5)

    def test_in_operator(self):
        assert 3 in Interval(1, 5)

    def test_minmax(self):
        assert Interval(1, 5).minmax() == (1.0, 5.0)
        assert Interval(None, 5).minmax() == (None, 5.0)

    def test_infinite_bounds_mean_unbounded(self):
        win = Interval(-math.inf, math.inf)
        assert win == UNBOUNDED

    def test_value_equality(self):
        assert Interval(1, 2) == Interval(1.0, 2.0)
        assert Interval(1, 2) != Interval(1, 3)
        assert Interval(1, 2) != Interval(1, 2, inc_max=False)

    def test_single_point(self):
        win = Interval(3, 3)
        assert win.contains(3)
        assert not win.contains(3.1)

    def test_reversed_bounds_raise(self):
        with pytest.raises(InvalidIntervalError):
            Interval(5, 1)

    @pytest.mark.parametrize("bound", ["1", True, float("nan"), [1]])
    def test_bad_bound_raises(self, bound):
        with pytest.raises(InvalidIntervalError):
            Interval(bound, None)

    def test_str(self):
        assert str(Interval(1, 2)) == "[1, 2]"
        assert str(Interval(1, 2, inc_min=False, inc_max=False)) == "(1, 2)"
        assert str(Interval(None, 2)) == "<= 2"
        assert str(Interval(1, None)) == ">= 1"
        assert str(UNBOUNDED) == "<unbounded>"
