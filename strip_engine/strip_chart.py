"""StripChart — drives a set of charts from a periodic poll loop.

Architecture notes:
- One poll thread calls ``update()`` every ``poll_interval`` seconds
  (default 750 ms).  Each update asks every chart to pull from its
  monitors and push to its sinks.
- Sinks read their time series from other threads (e.g. a GUI); each
  TimeSeries carries its own lock so a reader never sees half a merge.
- An optional callback runs at the start of every update so callers can
  adjust sink settings between ticks.

Data flow:
  Monitor.get_data → Chart.update → Sink.put_data → TimeSeries.add_data
"""

from __future__ import annotations

import threading
import time
from typing import Callable, Dict, Iterable, List, Optional

from loguru import logger

from .chart import Chart


# Interval between updates (seconds).
POLL_INTERVAL = 0.750


class StripChart:
    """Poll loop over a collection of charts.

    Usage::

        strip = StripChart([chart1, chart2])
        strip.start()          # background thread
        ...
        strip.stop()

    or, blocking in the calling thread::

        strip.run_forever()

    Parameters
    ----------
    charts : iterable of Chart
        Charts to update on every tick.
    poll_interval : float
        Seconds between updates.
    callback : callable or None
        Called with no arguments at the start of every update.
    """

    def __init__(
        self,
        charts: Iterable[Chart] = (),
        poll_interval: float = POLL_INTERVAL,
        callback: Optional[Callable[[], None]] = None,
    ) -> None:
        if poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive, got {poll_interval}")
        if callback is not None and not callable(callback):
            raise TypeError("callback must be callable")

        self.charts: List[Chart] = list(charts)
        self.poll_interval = poll_interval
        self.callback = callback

        self._thread: Optional[threading.Thread] = None
        self._running = threading.Event()
        self._tick = 0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def update(self) -> None:
        """Run the callback, then update every chart once."""
        if self.callback is not None:
            try:
                self.callback()
            except Exception:
                logger.exception("Update callback failed")

        for chart in self.charts:
            chart.update()
        self._tick += 1

    def start(self) -> None:
        """Start the poll loop on a background thread."""
        if self._running.is_set():
            return
        self._running.set()
        self._thread = threading.Thread(
            target=self._poll_loop, name="stripchart-poll", daemon=True
        )
        self._thread.start()
        logger.info(
            f"Strip chart started: {len(self.charts)} chart(s), "
            f"polling every {self.poll_interval:.3f} s"
        )

    def stop(self) -> None:
        """Signal the poll loop to stop and wait for it to finish."""
        self._running.clear()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout=2.0 + self.poll_interval)
        self._thread = None
        logger.info(f"Strip chart stopped after {self._tick} update(s)")

    def run_forever(self) -> None:
        """Poll in the calling thread until ``stop()`` or Ctrl-C."""
        self._running.set()
        try:
            self._poll_loop()
        except KeyboardInterrupt:
            logger.info("Interrupted")
        finally:
            self._running.clear()

    @property
    def is_running(self) -> bool:
        return self._running.is_set()

    @property
    def ticks(self) -> int:
        """Number of completed updates."""
        return self._tick

    # ------------------------------------------------------------------
    # Poll loop
    # ------------------------------------------------------------------

    def _poll_loop(self) -> None:
        while self._running.is_set():
            t_start = time.perf_counter()
            self.update()
            elapsed = time.perf_counter() - t_start
            if elapsed > self.poll_interval:
                logger.warning(
                    f"Update took {elapsed:.3f} s, longer than the "
                    f"{self.poll_interval:.3f} s poll interval"
                )
            time.sleep(max(0.0, self.poll_interval - elapsed))

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def status(self) -> Dict[str, dict]:
        """Return per-chart diagnostic info."""
        status = {}
        for chart in self.charts:
            sinks = {}
            for sink in chart.sinks:
                sinks[repr(sink)] = {
                    series_id: {
                        "npts": series.npts(full=True),
                        "window_npts": series.npts(),
                        "newest_ts": series.newest_timestamp,
                        "window": str(series.window()),
                    }
                    for series_id, series in sink.cache.all().items()
                }
            status[chart.chart_id] = {
                "monitors": [m.monitor_id for m in chart.monitors],
                "sinks": sinks,
            }
        return status
