"""Tests for TimeMap — MJD to time-axis units."""

import math

import numpy as np
import pytest

from strip_engine.errors import ConfigError
from strip_engine.time_map import TimeMap, unix_to_mjd


class TestTimeMap:

    def test_unit_is_identity(self):
        tm = TimeMap(refdate=50000.0)
        np.testing.assert_allclose(tm.do_map([50000.5, 50001.0]), [50000.5, 50001.0])

    def test_days(self):
        tm = TimeMap("days", refdate=50000.0)
        np.testing.assert_allclose(tm.do_map([50000.5]), [0.5])

    def test_hours(self):
        tm = TimeMap("hours", refdate=50000.0)
        np.testing.assert_allclose(tm.do_map([50000.5, 50001.0]), [12.0, 24.0])

    def test_radians(self):
        tm = TimeMap("radians", refdate=50000.0)
        np.testing.assert_allclose(tm.do_map([50000.25]), [math.pi / 2])

    def test_output_case_insensitive(self):
        assert TimeMap("HOURS").output == "hours"

    @pytest.mark.parametrize("output", ["unit", "days", "hours", "radians"])
    def test_inverse(self, output):
        tm = TimeMap(output, refdate=59000.0)
        mjd = np.array([59000.1, 59000.75, 59001.2])
        np.testing.assert_allclose(tm.do_inverse(tm.do_map(mjd)), mjd)

    def test_unsupported_output(self):
        with pytest.raises(ConfigError):
            TimeMap("fortnights")

    def test_map_samples_keeps_values(self):
        tm = TimeMap("hours", refdate=100.0)
        assert tm.map_samples([(100.5, 7.0), (101.0, None)]) == [(12.0, 7.0), (24.0, None)]
        assert tm.map_samples([]) == []

    def test_unix_to_mjd(self):
        assert unix_to_mjd(0.0) == pytest.approx(40587.0)
        assert unix_to_mjd(86400.0 * 2) == pytest.approx(40589.0)
