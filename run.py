from monitors.lsl_monitor import LslMonitor
from sinks.text_sink import TextSink
from strip_engine.attrs import PlotAttrs, SinkConfig
from strip_engine.chart import Chart
from strip_engine.log import configure_logging
from strip_engine.strip_chart import StripChart

configure_logging("INFO")

# 1. Connect to the LSL streams to chart (one channel each)
emg = LslMonitor.resolve("EMG-Quad", lsl_type="EMG", channel=0, max_history=20000)
imu = LslMonitor.resolve("IMU-az", lsl_type="IMU", channel=6, max_history=20000)

# 2. One chart, printed to stdout as a 6-minute moving window in hours
chart = Chart(
    "chart1",
    monitors=[emg, imu],
    sinks=[TextSink(SinkConfig(growt=False, window_hours=0.1, tunits="hours"))],
    attrs={"EMG-Quad": PlotAttrs(linecol="yellow"), "IMU-az": PlotAttrs(linecol="green")},
)

# 3. Poll until Ctrl-C
strip = StripChart([chart])
try:
    strip.run_forever()
finally:
    emg.close()
    imu.close()
