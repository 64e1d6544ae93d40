"""Monitor interface and a buffered base class for data sources.

A monitor is anything with a ``monitor_id`` and a
``get_data(chart_id)`` method returning the (time MJD, value) samples
that arrived since the previous call for that chart id.  The monitor,
not the chart, keeps track of what each chart has already seen.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Protocol, Sequence, Tuple, runtime_checkable


Sample = Tuple[float, Optional[float]]


@runtime_checkable
class Monitor(Protocol):
    """Protocol for a strip chart data source."""

    monitor_id: str

    def get_data(self, chart_id: str) -> Sequence[Sample]:
        """Return samples new to *chart_id* since its last call."""
        ...


class BufferedMonitor:
    """Base monitor that keeps a sample history and one cursor per chart.

    Subclasses implement ``_poll()`` and hand new samples to ``_ingest()``.
    The first ``get_data()`` for a chart id returns the whole retained
    history; later calls return only what arrived since.

    Parameters
    ----------
    monitor_id : str
        Name of the monitored quantity (also used as a plot legend).
    max_history : int or None
        Keep at most this many samples.  ``None`` keeps everything.
    """

    def __init__(self, monitor_id: str, max_history: Optional[int] = None) -> None:
        if max_history is not None and max_history < 1:
            raise ValueError(f"max_history must be positive, got {max_history}")
        self.monitor_id = monitor_id
        self.max_history = max_history
        self._history: List[Sample] = []
        self._dropped = 0  # samples trimmed from the front of _history
        self._cursors: Dict[str, int] = {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get_data(self, chart_id: str) -> List[Sample]:
        """Poll the source and return the samples new to *chart_id*."""
        self._poll()
        start = max(self._cursors.get(chart_id, 0) - self._dropped, 0)
        new = self._history[start:]
        self._cursors[chart_id] = self._dropped + len(self._history)
        return new

    def __len__(self) -> int:
        return len(self._history)

    # ------------------------------------------------------------------
    # Subclass hooks
    # ------------------------------------------------------------------

    def _poll(self) -> None:
        """Fetch new samples from the source.  Override in subclasses."""
        raise NotImplementedError

    def _ingest(self, samples) -> None:
        """Append new samples to the history, trimming if needed."""
        self._history.extend((float(t), y) for t, y in samples)
        if self.max_history is not None and len(self._history) > self.max_history:
            excess = len(self._history) - self.max_history
            del self._history[:excess]
            self._dropped += excess
