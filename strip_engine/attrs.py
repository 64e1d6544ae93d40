"""Plot attributes and sink settings.

Both are plain dataclasses listing every recognised field.  Values coming
from a loosely typed source (an INI section, a dict) go through
``from_mapping()``, which only looks at the known keys.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping, Tuple

from loguru import logger

from .errors import ConfigError
from .time_map import TimeMap


@dataclass
class PlotAttrs:
    """How one monitor's data should look on a chart."""

    linecol: str = "yellow"
    linestyle: str = "solid"
    symcol: str = "green"
    symbol: str = "circle"

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "PlotAttrs":
        """Build from a mapping; keys are case-insensitive, unknown keys ignored."""
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in values.items():
            name = key.lower()
            if name in known:
                kwargs[name] = str(value)
            else:
                logger.warning(f"Ignoring unknown plot attribute '{key}'")
        return cls(**kwargs)


@dataclass
class SinkConfig:
    """Display settings for one sink.

    Parameters
    ----------
    growt : bool
        If True the time axis grows to hold all data.  If False the chart
        is a moving window ``window_hours`` wide.
    window_hours : float
        Width of the moving window (hours).  0 disables the window.
    autoscale : bool
        Scale the Y axis to the data; otherwise use ``yscale``.
    yscale : tuple of float
        Fixed Y limits when ``autoscale`` is False.
    yunits, ylabel, plottitle : str
        Labels passed through to the renderer.
    tunits : str
        Time axis output units, see ``TimeMap``.
    refdate : float
        Reference MJD for ``tunits`` other than ``"unit"``.
    timescale : str
        Display timescale label (e.g. ``"UTC"``).  Display only.
    """

    growt: bool = True
    window_hours: float = 0.0
    autoscale: bool = True
    yscale: Tuple[float, float] = (0.0, 1.0)
    yunits: str = " "
    ylabel: str = "Flux"
    plottitle: str = ""
    tunits: str = "unit"
    refdate: float = 0.0
    timescale: str = "UTC"

    def __post_init__(self) -> None:
        self.growt = _as_bool(self.growt)
        self.autoscale = _as_bool(self.autoscale)
        try:
            self.window_hours = float(self.window_hours)
        except (TypeError, ValueError):
            raise ConfigError(f"Window size must be a number, got {self.window_hours!r}") from None
        if self.window_hours < 0:
            raise ConfigError(f"Window size can not be negative ({self.window_hours})")
        self.yscale = _as_yscale(self.yscale)
        try:
            self.refdate = float(self.refdate)
        except (TypeError, ValueError):
            raise ConfigError(f"Reference date must be a number, got {self.refdate!r}") from None
        # validates tunits
        TimeMap(self.tunits)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "SinkConfig":
        """Build from a mapping of recognised keys (``window`` = ``window_hours``)."""
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in values.items():
            name = key.lower()
            if name == "window":
                name = "window_hours"
            if name not in known:
                raise ConfigError(f"Unknown sink setting '{key}'")
            kwargs[name] = value
        return cls(**kwargs)


def _as_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def _as_yscale(value) -> Tuple[float, float]:
    if isinstance(value, str):
        value = value.split(",")
    try:
        lo, hi = (float(v) for v in value)
    except (TypeError, ValueError):
        raise ConfigError(f"Y scale must be two numbers, got {value!r}") from None
    return lo, hi
