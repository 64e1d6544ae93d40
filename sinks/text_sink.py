"""Text sink — writes new samples to a text stream.

Useful for logging a strip chart to a file or watching it on a terminal
without a plotting backend.
"""

from __future__ import annotations

import sys
from typing import Optional, Sequence, TextIO, Tuple

from strip_engine.attrs import PlotAttrs, SinkConfig
from strip_engine.time_series import TimeSeries

from .sink import Sink


class TextSink(Sink):
    """Prints each batch of new samples, one ``time<TAB>value`` per line.

    Times are converted with the sink's ``TimeMap``.  Deletions (samples
    with no value) are not printed.
    """

    def __init__(
        self,
        config: Optional[SinkConfig] = None,
        name: str = "",
        stream: Optional[TextIO] = None,
    ) -> None:
        super().__init__(config, name)
        self.stream = stream if stream is not None else sys.stdout

    def render(
        self,
        chart_id: str,
        monitor_id: str,
        attrs: PlotAttrs,
        series: TimeSeries,
        new_samples: Sequence[Tuple[float, Optional[float]]],
    ) -> None:
        rows = [(t, y) for t, y in new_samples if y is not None]
        if not rows:
            return
        self.stream.write(f"# Data trigger for Chart {chart_id} Monitor {monitor_id}\n")
        for t, y in self.time_map.map_samples(rows):
            self.stream.write(f"{t!r}  \t{y!r}\n")
        self.stream.flush()
