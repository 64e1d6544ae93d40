"""LSL monitor — one channel of a Lab Streaming Layer stream as a strip chart source.

Architecture notes:
- Pulls whatever the inlet has buffered with ``timeout=0.0`` so a chart
  update never blocks on the network.
- ``time_correction()`` is applied at pull time (0.0 on the same machine).
- LSL timestamps are in the ``local_clock()`` domain.  They are moved to
  wall-clock time with an offset measured when the monitor is created and
  then converted to MJD.
"""

from __future__ import annotations

import time
from typing import Optional

from loguru import logger

try:
    import pylsl
except ImportError:
    pylsl = None  # allow import for testing without pylsl installed

from strip_engine.time_map import unix_to_mjd

from .monitor import BufferedMonitor


class LslMonitor(BufferedMonitor):
    """Reads one channel of an LSL inlet.

    Parameters
    ----------
    monitor_id : str
        Name of the monitored quantity.
    inlet : pylsl.StreamInlet
        Open inlet.  Anything with ``pull_chunk(timeout=...)`` and
        ``time_correction(timeout=...)`` works.
    channel : int
        Index of the channel to chart.
    clock_offset : float or None
        Seconds to add to an LSL timestamp to get Unix time.  Measured
        from ``pylsl.local_clock()`` when not given.
    max_history : int or None
        See ``BufferedMonitor``.
    """

    def __init__(
        self,
        monitor_id: str,
        inlet,
        channel: int = 0,
        clock_offset: Optional[float] = None,
        max_history: Optional[int] = None,
    ) -> None:
        super().__init__(monitor_id, max_history=max_history)
        if channel < 0:
            raise ValueError(f"channel must be >= 0, got {channel}")
        if clock_offset is None:
            if pylsl is None:
                raise RuntimeError(
                    "pylsl is not installed.  Install with: pip install pylsl"
                )
            clock_offset = time.time() - pylsl.local_clock()

        self.inlet = inlet
        self.channel = channel
        self.clock_offset = clock_offset

    @classmethod
    def resolve(
        cls,
        monitor_id: str,
        lsl_type: str,
        lsl_name: Optional[str] = None,
        channel: int = 0,
        timeout: float = 5.0,
        max_history: Optional[int] = None,
    ) -> "LslMonitor":
        """Discover a stream via LSL multicast and open an inlet on it.

        Raises
        ------
        RuntimeError
            If pylsl is missing or no matching stream answers in time.
        """
        if pylsl is None:
            raise RuntimeError(
                "pylsl is not installed.  Install with: pip install pylsl"
            )

        pred = f"type='{lsl_type}'"
        if lsl_name:
            pred += f" and name='{lsl_name}'"

        results = pylsl.resolve_bypred(pred, minimum=1, timeout=timeout)
        if not results:
            raise RuntimeError(f"LSL stream for '{monitor_id}' not found (pred={pred})")

        inlet = pylsl.StreamInlet(results[0], max_chunklen=0)
        inlet.open_stream(timeout=timeout)
        logger.info(f"Connected: {monitor_id} ({pred}, channel {channel})")
        return cls(monitor_id, inlet, channel=channel, max_history=max_history)

    def close(self) -> None:
        """Close the underlying inlet."""
        if self.inlet is not None:
            self.inlet.close_stream()
            self.inlet = None

    # ------------------------------------------------------------------
    # Polling
    # ------------------------------------------------------------------

    def _poll(self) -> None:
        """Pull all available samples from the inlet."""
        if self.inlet is None:
            return

        samples, timestamps = self.inlet.pull_chunk(timeout=0.0)
        if not timestamps:
            return

        try:
            correction = self.inlet.time_correction(timeout=0.0)
        except Exception as e:
            logger.warning(f"{self.monitor_id}: time correction unavailable ({e}), using 0.0")
            correction = 0.0

        offset = correction + self.clock_offset
        mjd = unix_to_mjd([ts + offset for ts in timestamps])
        values = [float(sample[self.channel]) for sample in samples]
        self._ingest(zip(mjd, values))
