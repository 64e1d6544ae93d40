"""Tests for BufferedMonitor bookkeeping and the LSL monitor (fake inlet)."""

import pytest

from monitors.lsl_monitor import LslMonitor
from monitors.monitor import BufferedMonitor, Monitor
from tests.simulators.fake_inlet import FakeInlet


class QueueMonitor(BufferedMonitor):
    """Buffered monitor fed from a list of pending batches."""

    def __init__(self, monitor_id="queue", max_history=None):
        super().__init__(monitor_id, max_history=max_history)
        self.pending = []

    def _poll(self):
        while self.pending:
            self._ingest(self.pending.pop(0))


class TestBufferedMonitor:

    def test_chart_receives_each_sample_once(self):
        mon = QueueMonitor()
        mon.pending.append([(1.0, 1.0), (2.0, 2.0)])
        assert mon.get_data("chart1") == [(1.0, 1.0), (2.0, 2.0)]
        assert mon.get_data("chart1") == []
        mon.pending.append([(3.0, 3.0)])
        assert mon.get_data("chart1") == [(3.0, 3.0)]

    def test_new_chart_gets_history(self):
        mon = QueueMonitor()
        mon.pending.append([(1.0, 1.0)])
        mon.get_data("chart1")
        mon.pending.append([(2.0, 2.0)])
        assert mon.get_data("chart2") == [(1.0, 1.0), (2.0, 2.0)]
        assert mon.get_data("chart1") == [(2.0, 2.0)]

    def test_max_history(self):
        mon = QueueMonitor(max_history=3)
        mon.pending.append([(1.0, 1.0), (2.0, 2.0)])
        assert len(mon.get_data("chart1")) == 2
        mon.pending.append([(float(t), float(t)) for t in range(3, 7)])
        assert len(mon) == 3
        # chart1 missed nothing that is still retained
        assert mon.get_data("chart1") == [(4.0, 4.0), (5.0, 5.0), (6.0, 6.0)]
        assert mon.get_data("chart2") == [(4.0, 4.0), (5.0, 5.0), (6.0, 6.0)]

    def test_bad_max_history(self):
        with pytest.raises(ValueError):
            QueueMonitor(max_history=0)

    def test_base_poll_not_implemented(self):
        with pytest.raises(NotImplementedError):
            BufferedMonitor("raw").get_data("chart1")

    def test_satisfies_protocol(self):
        assert isinstance(QueueMonitor(), Monitor)


class TestLslMonitor:

    def test_pulls_channel_as_mjd(self):
        inlet = FakeInlet(num_channels=2)
        inlet.queue_ramp(start=0.0, n=3, rate=1.0)
        mon = LslMonitor("emg", inlet, channel=1, clock_offset=0.0)

        data = mon.get_data("chart1")

        assert [y for _, y in data] == [0.0, 2.0, 4.0]
        assert [t for t, _ in data] == pytest.approx(
            [40587.0, 40587.0 + 1 / 86400.0, 40587.0 + 2 / 86400.0]
        )

    def test_applies_offset_and_correction(self):
        inlet = FakeInlet(num_channels=1, correction=100.0)
        inlet.queue_ramp(start=0.0, n=1)
        mon = LslMonitor("emg", inlet, clock_offset=86300.0)
        ((t, _),) = mon.get_data("chart1")
        assert t == pytest.approx(40588.0)

    def test_failed_time_correction_uses_zero(self):
        inlet = FakeInlet(num_channels=1, correction=None)
        inlet.queue_ramp(start=0.0, n=2)
        mon = LslMonitor("emg", inlet, clock_offset=0.0)
        data = mon.get_data("chart1")
        assert data[0][0] == pytest.approx(40587.0)

    def test_empty_pull(self):
        mon = LslMonitor("emg", FakeInlet(), clock_offset=0.0)
        assert mon.get_data("chart1") == []

    def test_chunks_accumulate_per_chart(self):
        inlet = FakeInlet(num_channels=1)
        mon = LslMonitor("emg", inlet, clock_offset=0.0)
        inlet.queue_ramp(start=0.0, n=2)
        assert len(mon.get_data("chart1")) == 2
        inlet.queue_ramp(start=10.0, n=3)
        assert len(mon.get_data("chart1")) == 3
        assert len(mon.get_data("chart2")) == 5

    def test_close(self):
        inlet = FakeInlet()
        mon = LslMonitor("emg", inlet, clock_offset=0.0)
        mon.close()
        assert inlet.closed
        assert mon.get_data("chart1") == []

    def test_bad_channel(self):
        with pytest.raises(ValueError):
            LslMonitor("emg", FakeInlet(), channel=-1, clock_offset=0.0)
