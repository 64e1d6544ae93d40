"""Sink — base class for chart renderers.

A sink keeps one ``TimeSeries`` per monitor in its own cache.  On every
``put_data()`` it merges the new samples, moves the series window
according to its ``SinkConfig`` and asks the subclass to ``render()``.

Window policy:
- ``growt`` (or no window size): the window is unbounded and the time axis
  grows with the data.
- otherwise: a moving window ``window_hours`` wide ending at the newest
  sample.
"""

from __future__ import annotations

from dataclasses import fields, replace
from typing import Dict, Mapping, Optional, Sequence, Tuple

from loguru import logger

from strip_engine.attrs import PlotAttrs, SinkConfig
from strip_engine.errors import ConfigError
from strip_engine.series_cache import TimeSeriesCache
from strip_engine.time_map import TimeMap
from strip_engine.time_series import TimeSeries


# Fractional padding added around autoscaled plot limits.
_PAD = 0.1


def _widen(value: float) -> Tuple[float, float]:
    """Range around *value* for data with no extent on an axis."""
    half = _PAD * abs(value) if value else _PAD
    return value - half, value + half


class Sink:
    """Base sink.  Subclasses implement ``render()``.

    Parameters
    ----------
    config : SinkConfig, optional
        Display settings.  Defaults to ``SinkConfig()``.
    name : str
        Label used in log messages.
    """

    def __init__(self, config: Optional[SinkConfig] = None, name: str = "") -> None:
        self.config = config if config is not None else SinkConfig()
        self.name = name or type(self).__name__
        self.cache = TimeSeriesCache()
        self.time_map = TimeMap(self.config.tunits, self.config.refdate)
        self.attrs: Dict[str, PlotAttrs] = {}
        self.updated = False

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def init(self, attrs: Mapping[str, PlotAttrs]) -> None:
        """Store the plot attributes of the monitors this sink will draw."""
        self.attrs = dict(attrs)

    def configure(self, **changes) -> None:
        """Change display settings.  A real change sets ``updated``.

        Raises
        ------
        ConfigError
            On an unknown setting or an invalid value.
        """
        known = {f.name for f in fields(SinkConfig)}
        unknown = set(changes) - known
        if unknown:
            raise ConfigError(f"Unknown sink setting(s): {', '.join(sorted(unknown))}")

        new_config = replace(self.config, **changes)
        if new_config != self.config:
            self.config = new_config
            self.time_map = TimeMap(new_config.tunits, new_config.refdate)
            self.updated = True
            logger.debug(f"{self.name}: settings changed {changes}")

    # ------------------------------------------------------------------
    # Data
    # ------------------------------------------------------------------

    def put_data(
        self,
        chart_id: str,
        monitor_id: str,
        attrs: PlotAttrs,
        samples: Sequence[Tuple[float, Optional[float]]],
    ) -> None:
        """Merge *samples* for *monitor_id* and redraw.

        May be called with no samples when ``updated`` is set, so the
        sink can redraw after a settings change.
        """
        series = self.cache.get(monitor_id)
        if samples:
            series.add_data(samples)
        self.updated = False
        if not len(series):
            return

        self.apply_window(series)
        self.render(chart_id, monitor_id, attrs, series, samples)

    def apply_window(self, series: TimeSeries) -> None:
        """Set the window of *series* from the sink settings."""
        cfg = self.config
        if cfg.growt or cfg.window_hours <= 0:
            series.window(None, None)
            return

        tmax = series.bounds(full=True).tmax
        series.window(tmax - cfg.window_hours / 24.0, tmax)

    def plot_limits(self, series: TimeSeries) -> Tuple[float, float, float, float]:
        """Return ``(xmin, xmax, ymin, ymax)`` for drawing *series*.

        X limits are in display units (see ``time_map``) with room left on
        the right for new data.  Y limits follow ``autoscale`` / ``yscale``.
        """
        tmin, tmax, ymin, ymax = series.bounds()
        wmin, wmax = series.window().minmax()
        if wmin is not None:
            tmin = wmin
        if wmax is not None:
            tmax = wmax

        xmin, xmax = (float(x) for x in self.time_map.do_map([tmin, tmax]))
        dx = xmax - xmin
        if dx > 0:
            xmax += _PAD * dx
        else:
            # single sample or zero-width window
            xmin, xmax = _widen(xmin)

        if self.config.autoscale:
            dy = ymax - ymin
            if dy > 0:
                ymin -= _PAD * dy
                ymax += _PAD * dy
            else:
                ymin, ymax = _widen(ymin)
        else:
            ymin, ymax = self.config.yscale
        return xmin, xmax, ymin, ymax

    # ------------------------------------------------------------------
    # Protected
    # ------------------------------------------------------------------

    def render(
        self,
        chart_id: str,
        monitor_id: str,
        attrs: PlotAttrs,
        series: TimeSeries,
        new_samples: Sequence[Tuple[float, Optional[float]]],
    ) -> None:
        """Draw *series*.  Must be overridden by subclasses."""
        raise NotImplementedError(f"{type(self).__name__} does not implement render()")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, series={len(self.cache)})"
