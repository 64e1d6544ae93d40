"""TimeMap — converts stored MJD times into the units shown on a time axis.

Supported outputs:
    unit     no change (reference date is not subtracted)
    days     days since the reference date
    hours    decimal hours since the reference date
    radians  radians since the reference date (one day = 2 pi)
"""

from __future__ import annotations

from typing import Iterable, List, Tuple

import numpy as np

from .errors import ConfigError


# MJD of the Unix epoch (1970-01-01T00:00:00).
MJD_UNIX_EPOCH = 40587.0
SECONDS_PER_DAY = 86400.0

_SCALES = {
    "days": 1.0,
    "hours": 24.0,
    "radians": 2.0 * np.pi,
}


def unix_to_mjd(seconds):
    """Convert Unix seconds (scalar or array) to Modified Julian Date."""
    return np.asarray(seconds, dtype=np.float64) / SECONDS_PER_DAY + MJD_UNIX_EPOCH


class TimeMap:
    """Maps MJD times to display units and back.

    Parameters
    ----------
    output : str
        One of ``"unit"``, ``"days"``, ``"hours"``, ``"radians"``.
    refdate : float
        Reference MJD subtracted before scaling.  Ignored for ``"unit"``.
    """

    OUTPUTS = ("unit", "days", "hours", "radians")

    def __init__(self, output: str = "unit", refdate: float = 0.0) -> None:
        self._output = "unit"
        self.output = output
        self.refdate = float(refdate)

    @property
    def output(self) -> str:
        return self._output

    @output.setter
    def output(self, value: str) -> None:
        value = str(value).lower()
        if value not in self.OUTPUTS:
            raise ConfigError(f"Unsupported time map output: {value!r}")
        self._output = value

    def do_map(self, times) -> np.ndarray:
        """Convert MJD *times* to output units."""
        times = np.asarray(times, dtype=np.float64)
        if self._output == "unit":
            return times
        return (times - self.refdate) * _SCALES[self._output]

    def do_inverse(self, values) -> np.ndarray:
        """Convert output-unit *values* back to MJD."""
        values = np.asarray(values, dtype=np.float64)
        if self._output == "unit":
            return values
        return values / _SCALES[self._output] + self.refdate

    def map_samples(self, samples: Iterable[Tuple[float, float]]) -> List[Tuple[float, float]]:
        """Map the time of each ``(t, y)`` pair, leaving values alone."""
        samples = list(samples)
        if not samples:
            return []
        mapped = self.do_map([t for t, _ in samples])
        return [(float(t), y) for t, (_, y) in zip(mapped, samples)]

    def __repr__(self) -> str:
        return f"TimeMap(output={self._output!r}, refdate={self.refdate})"
