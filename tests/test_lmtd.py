import math

import numpy as np
import pytest

from heat_transfer.errors import InvalidTemperatureDifferenceError
from heat_transfer.lmtd import log_mean_temperature_difference, temperature_profile, terminal_differences


class TestLogMean:
    def test_counterflow_reference_case(self):
        # dt1 = 80 - 40 = 40, dt2 = 50 - 20 = 30
        lmtd = log_mean_temperature_difference(80.0, 20.0, 50.0, 40.0, "counter")
        assert lmtd == pytest.approx(34.76, abs=0.01)
        assert lmtd == pytest.approx(10 / math.log(4 / 3))

    def test_parallel(self):
        # dt1 = 80, dt2 = 20
        lmtd = log_mean_temperature_difference(100.0, 20.0, 60.0, 40.0, "parallel")
        assert lmtd == pytest.approx(60 / math.log(4))

    def test_shell_tube_uses_counterflow_differences(self):
        assert terminal_differences(80.0, 20.0, 50.0, 40.0, "shell-tube") == terminal_differences(
            80.0, 20.0, 50.0, 40.0, "counter"
        )

    def test_equal_differences_collapse_to_dt(self):
        # balanced counterflow: dt1 = dt2 = 40
        assert log_mean_temperature_difference(100.0, 20.0, 60.0, 60.0, "counter") == pytest.approx(40.0)

    def test_nearly_equal_differences(self):
        lmtd = log_mean_temperature_difference(100.0, 20.0, 60.0 + 5e-7, 60.0, "counter")
        assert lmtd == pytest.approx(40.0)

    @pytest.mark.parametrize(
        "temps,arrangement",
        [
            ((100.0, 20.0, 40.0, 60.0), "parallel"),  # Th_out < Tc_out
            ((80.0, 20.0, 60.0, 90.0), "counter"),  # Th_in < Tc_out
        ],
    )
    def test_non_positive_difference_raises(self, temps, arrangement):
        with pytest.raises(InvalidTemperatureDifferenceError) as excinfo:
            log_mean_temperature_difference(*temps, arrangement)
        assert min(excinfo.value.dt1, excinfo.value.dt2) <= 0
        assert excinfo.value.arrangement == arrangement


class TestTemperatureProfile:
    def test_counterflow_profile(self):
        x, T_hot, T_cold = temperature_profile(80.0, 20.0, 50.0, 40.0, "counter")
        assert x.shape == T_hot.shape == T_cold.shape == (101,)
        assert (T_hot[0], T_hot[-1]) == pytest.approx((80.0, 50.0))
        # cold stream enters where the hot stream leaves
        assert (T_cold[0], T_cold[-1]) == pytest.approx((40.0, 20.0))

    def test_parallel_profile(self):
        _, _, T_cold = temperature_profile(80.0, 20.0, 50.0, 40.0, "parallel", n_points=11)
        assert T_cold.size == 11
        assert (T_cold[0], T_cold[-1]) == pytest.approx((20.0, 40.0))
        assert np.all(np.diff(T_cold) > 0)
