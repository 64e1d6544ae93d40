"""Interval — the visible time range applied to a time series.

Either bound may be left open (``None``), meaning -inf / +inf.  Bounds are
inclusive by default; ``inc_min`` / ``inc_max`` make them exclusive.
Intervals compare by value, so two windows with the same limits are
interchangeable.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Optional, Tuple

from .errors import InvalidIntervalError


def _check_bound(name: str, value) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidIntervalError(
            f"Interval {name} must be a number or None, got {value!r}"
        )
    value = float(value)
    if math.isnan(value):
        raise InvalidIntervalError(f"Interval {name} can not be NaN")
    if math.isinf(value):
        # infinite limits are the same as no limit
        return None
    return value


@dataclass(frozen=True)
class Interval:
    """Numeric interval with optional open ends.

    Parameters
    ----------
    min, max : float or None
        Lower and upper limits.  ``None`` leaves that side unbounded.
    inc_min, inc_max : bool
        Whether the limit itself lies inside the interval (default True).
    """

    min: Optional[float] = None
    max: Optional[float] = None
    inc_min: bool = True
    inc_max: bool = True

    def __post_init__(self) -> None:
        lo = _check_bound("min", self.min)
        hi = _check_bound("max", self.max)
        if lo is not None and hi is not None and lo > hi:
            raise InvalidIntervalError(
                f"Interval lower bound {lo} is greater than upper bound {hi}"
            )
        object.__setattr__(self, "min", lo)
        object.__setattr__(self, "max", hi)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def contains(self, t: float) -> bool:
        """Return True if *t* lies inside the interval."""
        if self.min is not None:
            if t < self.min or (t == self.min and not self.inc_min):
                return False
        if self.max is not None:
            if t > self.max or (t == self.max and not self.inc_max):
                return False
        return True

    def __contains__(self, t: float) -> bool:
        return self.contains(t)

    def minmax(self) -> Tuple[Optional[float], Optional[float]]:
        """Return ``(min, max)``; ``None`` marks an unbounded side."""
        return self.min, self.max

    @property
    def lower(self) -> float:
        return -math.inf if self.min is None else self.min

    @property
    def upper(self) -> float:
        return math.inf if self.max is None else self.max

    @property
    def is_bounded(self) -> bool:
        """True if at least one side has a limit."""
        return self.min is not None or self.max is not None

    def __str__(self) -> str:
        if self.min is None and self.max is None:
            return "<unbounded>"
        if self.min is None:
            return f"{'<=' if self.inc_max else '<'} {self.max:g}"
        if self.max is None:
            return f"{'>=' if self.inc_min else '>'} {self.min:g}"
        left = "[" if self.inc_min else "("
        right = "]" if self.inc_max else ")"
        return f"{left}{self.min:g}, {self.max:g}{right}"


UNBOUNDED = Interval()
