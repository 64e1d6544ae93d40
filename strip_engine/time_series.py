"""Time-ordered store of (t, y) samples for one monitored signal.

Architecture notes:
- Samples live in two parallel float lists kept strictly ascending in t.
  Window edges are located with ``bisect`` so windowed queries cost
  O(log N + K) rather than a scan of the whole history.
- New data normally arrive newer than anything stored.  That case is a
  plain append and the full-range bounds cache is extended from the new
  batch alone.  Anything else is merged by time key.
- A y value of ``None`` removes the stored sample at that time.
- Two bounds caches: one for the full series, one for the current window.
  The windowed cache is dropped on every add and every window change.
"""

from __future__ import annotations

import math
import numbers
import threading
from bisect import bisect_left, bisect_right
from typing import Iterable, List, NamedTuple, Optional, Tuple

import numpy as np

from .errors import EmptySeriesError, InvalidSampleError
from .interval import UNBOUNDED, Interval


Sample = Tuple[float, float]


class Bounds(NamedTuple):
    """Data limits of a series (or of its current window)."""

    tmin: float
    tmax: float
    ymin: float
    ymax: float


def _as_time(t) -> float:
    if isinstance(t, bool) or not isinstance(t, numbers.Real):
        raise InvalidSampleError(f"Sample time must be numeric, got {t!r}")
    t = float(t)
    if math.isnan(t):
        raise InvalidSampleError("Sample time can not be NaN")
    return t


def _as_value(y) -> Optional[float]:
    if y is None:
        return None
    if isinstance(y, bool) or not isinstance(y, numbers.Real):
        raise InvalidSampleError(f"Sample value must be numeric or None, got {y!r}")
    return float(y)


def _normalise_batch(samples: Iterable) -> List[Tuple[float, Optional[float]]]:
    """Validate *samples*, collapse duplicate times (last wins), sort by t."""
    merged = {}
    for sample in samples:
        try:
            t, y = sample
        except (TypeError, ValueError):
            raise InvalidSampleError(
                f"Sample must be a (time, value) pair, got {sample!r}"
            ) from None
        merged[_as_time(t)] = _as_value(y)
    return sorted(merged.items())


class TimeSeries:
    """Time series of scalar samples for one signal.

    Parameters
    ----------
    id : str
        Identifier of the signal (normally the monitor id).  Used for
        bookkeeping only; it can not be changed.
    """

    def __init__(self, id: str) -> None:
        self._id = id
        self._t: List[float] = []
        self._y: List[float] = []
        self._window: Interval = UNBOUNDED
        self._bounds_cache: Optional[Bounds] = None
        self._wbounds_cache: Optional[Bounds] = None
        self._lock = threading.RLock()

    @property
    def id(self) -> str:
        return self._id

    # ------------------------------------------------------------------
    # Adding data
    # ------------------------------------------------------------------

    def add_data(self, samples: Iterable) -> None:
        """Merge new samples into the series.

        Parameters
        ----------
        samples : iterable of (t, y)
            ``t`` is a numeric time (MJD).  ``y`` is the value, or ``None``
            to delete any stored sample at ``t``.  A time already present
            is overwritten by the new value.

        Raises
        ------
        InvalidSampleError
            If any sample is not a numeric (t, y) pair.  The series is left
            untouched in that case.
        """
        batch = _normalise_batch(samples)
        if not batch:
            return

        with self._lock:
            first_t = batch[0][0]
            if not self._t or first_t > self._t[-1]:
                self._append(batch)
            elif first_t == self._t[-1]:
                # overwrite of the newest point: values may shrink as well
                # as grow so the full cache can not be patched
                self._t.pop()
                self._y.pop()
                self._append(batch, extend_cache=False)
                self._bounds_cache = None
            else:
                self._merge(batch)
                self._bounds_cache = None

            self._wbounds_cache = None

    def _append(self, batch, extend_cache: bool = True) -> None:
        """Append a batch known to be newer than every stored sample."""
        kept = [(t, y) for t, y in batch if y is not None]
        if not kept:
            return

        new_t = [t for t, _ in kept]
        new_y = [y for _, y in kept]
        self._t.extend(new_t)
        self._y.extend(new_y)

        cache = self._bounds_cache
        if extend_cache and cache is not None:
            self._bounds_cache = Bounds(
                tmin=cache.tmin,
                tmax=new_t[-1],
                ymin=min(cache.ymin, min(new_y)),
                ymax=max(cache.ymax, max(new_y)),
            )

    def _merge(self, batch) -> None:
        """Merge a batch that overlaps or precedes the stored samples.

        Stored samples older than the oldest new time can not change, so
        only the tail from that point onwards is re-keyed.
        """
        start = bisect_left(self._t, batch[0][0])
        merged = dict(zip(self._t[start:], self._y[start:]))
        merged.update(batch)

        tail = [(t, y) for t, y in sorted(merged.items()) if y is not None]
        del self._t[start:]
        del self._y[start:]
        self._t.extend(t for t, _ in tail)
        self._y.extend(y for _, y in tail)

    # ------------------------------------------------------------------
    # Window
    # ------------------------------------------------------------------

    def window(self, *args) -> Interval:
        """Get or set the current window.

        ::

            ts.window()                 # current Interval
            ts.window(tmin, tmax)       # inclusive window, None = open
            ts.window(Interval(...))    # install an Interval
            ts.window(None)             # back to unbounded

        Setting a window clears the windowed bounds cache.  Stored data are
        never touched.
        """
        with self._lock:
            if len(args) == 1:
                interval = args[0]
                if interval is None:
                    interval = UNBOUNDED
                elif not isinstance(interval, Interval):
                    raise TypeError(
                        f"Window must be an Interval, got {type(interval).__name__}"
                    )
                self._window = interval
                self._wbounds_cache = None
            elif len(args) == 2:
                self._window = Interval(args[0], args[1])
                self._wbounds_cache = None
            elif args:
                raise TypeError(
                    f"window() takes 0, 1 or 2 arguments ({len(args)} given)"
                )
            return self._window

    def _window_slice(self, outside: bool = False) -> Tuple[int, int]:
        """Return ``(first, stop)`` indices of the windowed data."""
        n = len(self._t)
        win = self._window
        if win.min is None:
            first = 0
        elif win.inc_min:
            first = bisect_left(self._t, win.min)
        else:
            first = bisect_right(self._t, win.min)

        if win.max is None:
            stop = n
        elif win.inc_max:
            stop = bisect_right(self._t, win.max)
        else:
            stop = bisect_left(self._t, win.max)
        stop = max(stop, first)

        if outside:
            # one extra point either side, unless a sample already sits on
            # the edge and anchors the line by itself
            if win.min is not None and first > 0:
                if first == n or self._t[first] != win.min:
                    first -= 1
            if win.max is not None and stop < n:
                if stop == 0 or self._t[stop - 1] != win.max:
                    stop += 1
        return first, stop

    # ------------------------------------------------------------------
    # Retrieval
    # ------------------------------------------------------------------

    def data(self, outside: bool = False, xyarr: bool = False):
        """Samples lying inside the current window, in time order.

        Parameters
        ----------
        outside : bool
            Also return the nearest sample beyond each bounded window
            edge so lines leave the plot in the right direction.
        xyarr : bool
            Return ``(t, y)`` numpy arrays instead of a list of pairs.
        """
        with self._lock:
            first, stop = self._window_slice(outside)
            return self._slice(first, stop, xyarr)

    def alldata(self, xyarr: bool = False):
        """Every stored sample, ignoring the window."""
        with self._lock:
            return self._slice(0, len(self._t), xyarr)

    def _slice(self, first: int, stop: int, xyarr: bool):
        t = self._t[first:stop]
        y = self._y[first:stop]
        if xyarr:
            return np.asarray(t, dtype=np.float64), np.asarray(y, dtype=np.float64)
        return list(zip(t, y))

    def bounds(self, full: bool = False) -> Bounds:
        """Return ``(tmin, tmax, ymin, ymax)`` for the window or full series.

        Raises
        ------
        EmptySeriesError
            If there are no samples in the requested scope.
        """
        with self._lock:
            cache = self._bounds_cache if full else self._wbounds_cache
            if cache is not None:
                return cache

            if full:
                first, stop = 0, len(self._t)
            else:
                first, stop = self._window_slice()
            if stop <= first:
                scope = "series" if full else f"window {self._window}"
                raise EmptySeriesError(
                    f"Time series '{self._id}' has no data in {scope}"
                )

            ydata = self._y[first:stop]
            result = Bounds(
                tmin=self._t[first],
                tmax=self._t[stop - 1],
                ymin=min(ydata),
                ymax=max(ydata),
            )
            if full:
                self._bounds_cache = result
            else:
                self._wbounds_cache = result
            return result

    def npts(self, outside: bool = False, full: bool = False) -> int:
        """Number of points ``data()`` (or ``alldata()`` if *full*) returns."""
        with self._lock:
            if full:
                return len(self._t)
            first, stop = self._window_slice(outside)
            return stop - first

    def prevdata(self, t_reference) -> Optional[Sample]:
        """Sample immediately before *t_reference*, ignoring the window.

        Returns ``None`` if no earlier sample exists or no reference was given.
        """
        if t_reference is None:
            return None
        t_reference = _as_time(t_reference)
        with self._lock:
            idx = bisect_left(self._t, t_reference)
            if idx == 0:
                return None
            return self._t[idx - 1], self._y[idx - 1]

    # ------------------------------------------------------------------
    # Utilities
    # ------------------------------------------------------------------

    @property
    def newest_timestamp(self) -> Optional[float]:
        """Time of the most recent sample, or ``None``."""
        with self._lock:
            return self._t[-1] if self._t else None

    @property
    def oldest_timestamp(self) -> Optional[float]:
        """Time of the oldest sample, or ``None``."""
        with self._lock:
            return self._t[0] if self._t else None

    def __len__(self) -> int:
        return len(self._t)

    def __repr__(self) -> str:
        return (
            f"TimeSeries(id={self._id!r}, "
            f"stored={len(self)}, "
            f"window={self._window})"
        )
