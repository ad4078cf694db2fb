import numpy as np
import pytest

from heat_transfer.epsilon_ntu import epsilon_ntu, ntu


class TestEpsilonNtu:
    """Closed-form effectiveness for single pass exchangers."""

    def test_counterflow_balanced(self):
        assert epsilon_ntu(1.0, 1.0, "counter") == pytest.approx(0.5)

    def test_counterflow_general(self):
        # NTU = 3 ln(4/3), C_r = 2/3 -> epsilon = 0.5 exactly
        assert epsilon_ntu(3 * np.log(4 / 3), 2 / 3, "counter") == pytest.approx(0.5)

    def test_parallel_asymptote(self):
        assert epsilon_ntu(50.0, 1.0, "parallel") == pytest.approx(0.5)

    @pytest.mark.parametrize("arrangement", ["counter", "parallel"])
    def test_zero_capacity_ratio(self, arrangement):
        assert epsilon_ntu(2.0, 0.0, arrangement) == pytest.approx(1 - np.exp(-2.0))

    def test_counter_beats_parallel(self):
        assert epsilon_ntu(2.0, 0.8, "counter") > epsilon_ntu(2.0, 0.8, "parallel")

    def test_array_input(self):
        eps = epsilon_ntu(np.linspace(0, 5, 20), 0.5, "counter")
        assert eps.shape == (20,)
        assert np.all((eps >= 0) & (eps <= 1))

    def test_no_closed_form_for_shell_tube(self):
        assert epsilon_ntu(1.0, 0.5, "shell-tube") is None

    def test_ntu(self):
        assert ntu(500.0, 4.0, 2000.0) == pytest.approx(1.0)
