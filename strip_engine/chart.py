"""Chart — binds data monitors to rendering sinks.

Each ``update()`` is one pull-and-push cycle: ask every monitor for the
samples that are new for this chart, then hand them to every sink.  A
monitor or sink that raises is logged and skipped; the rest of the cycle
still runs.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional

from loguru import logger

from .attrs import PlotAttrs


class Chart:
    """One strip chart: a set of monitors drawn on a set of sinks.

    Parameters
    ----------
    chart_id : str
        Unique chart identifier (e.g. ``"chart1"``).  Monitors use it to
        track which samples this chart has already received.
    monitors : iterable
        Objects with a ``monitor_id`` attribute and a
        ``get_data(chart_id)`` method.
    sinks : iterable
        Objects with ``init(attrs)``, ``put_data(...)`` and an ``updated``
        flag (see ``sinks.sink.Sink``).
    attrs : mapping of str to PlotAttrs, optional
        Plot attributes per monitor id.  Missing monitors get defaults.
    """

    def __init__(
        self,
        chart_id: str,
        monitors: Iterable = (),
        sinks: Iterable = (),
        attrs: Optional[Mapping[str, PlotAttrs]] = None,
    ) -> None:
        self.chart_id = chart_id
        self._monitors: List = []
        self._sinks: List = []
        self._attrs: Dict[str, PlotAttrs] = dict(attrs or {})

        for monitor in monitors:
            self.add_monitor(monitor)
        for sink in sinks:
            self.add_sink(sink)

    # ------------------------------------------------------------------
    # Wiring
    # ------------------------------------------------------------------

    def add_monitor(self, monitor, attrs: Optional[PlotAttrs] = None) -> None:
        """Attach a monitor, optionally with its plot attributes."""
        if not callable(getattr(monitor, "get_data", None)):
            raise TypeError(f"{monitor!r} has no get_data() method")
        self._monitors.append(monitor)
        if attrs is not None:
            self._attrs[monitor.monitor_id] = attrs
        for sink in self._sinks:
            sink.init(self.all_attrs())

    def add_sink(self, sink) -> None:
        """Attach a sink and initialise it with the monitor attributes."""
        self._sinks.append(sink)
        sink.init(self.all_attrs())

    @property
    def monitors(self) -> List:
        return list(self._monitors)

    @property
    def sinks(self) -> List:
        return list(self._sinks)

    def monitor_attrs(self, monitor_id: str) -> PlotAttrs:
        """Plot attributes for *monitor_id* (defaults if none configured)."""
        attrs = self._attrs.get(monitor_id)
        if attrs is None:
            attrs = PlotAttrs()
            self._attrs[monitor_id] = attrs
        return attrs

    def all_attrs(self) -> Dict[str, PlotAttrs]:
        """Plot attributes for every attached monitor."""
        return {m.monitor_id: self.monitor_attrs(m.monitor_id) for m in self._monitors}

    # ------------------------------------------------------------------
    # Update cycle
    # ------------------------------------------------------------------

    def update(self) -> Dict[str, int]:
        """Pull new samples from every monitor and push them to every sink.

        Returns
        -------
        dict
            Number of samples received per monitor id (0 when the monitor
            had nothing new or failed).
        """
        received: Dict[str, int] = {}
        # put_data clears the flag, so read it once for the whole cycle
        redraw = {id(sink): sink.updated for sink in self._sinks}
        for monitor in self._monitors:
            monid = monitor.monitor_id
            try:
                samples = list(monitor.get_data(self.chart_id))
            except Exception:
                logger.exception(f"Chart {self.chart_id}: monitor '{monid}' failed")
                received[monid] = 0
                continue

            received[monid] = len(samples)
            attrs = self.monitor_attrs(monid)
            for sink in self._sinks:
                # an updated sink redraws even without new data
                if not samples and not redraw[id(sink)]:
                    continue
                try:
                    sink.put_data(self.chart_id, monid, attrs, samples)
                except Exception:
                    logger.exception(
                        f"Chart {self.chart_id}: sink {sink!r} failed on monitor '{monid}'"
                    )

        if any(received.values()):
            logger.debug(f"Chart {self.chart_id}: received {received}")
        return received

    def __repr__(self) -> str:
        return (
            f"Chart(id={self.chart_id!r}, "
            f"monitors={[m.monitor_id for m in self._monitors]}, "
            f"sinks={len(self._sinks)})"
        )
