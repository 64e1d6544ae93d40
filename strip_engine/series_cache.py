"""Per-sink registry of time series, keyed by signal (monitor) id."""

from __future__ import annotations

import threading
from typing import Dict, Iterator

from .time_series import TimeSeries


class TimeSeriesCache:
    """Maps signal ids to the ``TimeSeries`` holding their data.

    Series are created on first reference and live as long as the cache.
    A cache belongs to exactly one sink; series are never shared.
    """

    def __init__(self) -> None:
        self._series: Dict[str, TimeSeries] = {}
        self._lock = threading.Lock()

    def get(self, signal_id: str) -> TimeSeries:
        """Return the series for *signal_id*, creating an empty one if needed."""
        with self._lock:
            series = self._series.get(signal_id)
            if series is None:
                series = TimeSeries(signal_id)
                self._series[signal_id] = series
            return series

    def put(self, signal_id: str, series: TimeSeries) -> None:
        """Register *series* under *signal_id*, replacing any existing entry."""
        if not isinstance(series, TimeSeries):
            raise TypeError(
                f"Expected a TimeSeries for '{signal_id}', got {type(series).__name__}"
            )
        with self._lock:
            self._series[signal_id] = series

    def all(self) -> Dict[str, TimeSeries]:
        """Snapshot of every registered ``signal_id -> TimeSeries``."""
        with self._lock:
            return dict(self._series)

    def __contains__(self, signal_id: str) -> bool:
        return signal_id in self._series

    def __len__(self) -> int:
        return len(self._series)

    def __iter__(self) -> Iterator[str]:
        return iter(self.all())

    def __repr__(self) -> str:
        return f"TimeSeriesCache(series={sorted(self._series)})"
