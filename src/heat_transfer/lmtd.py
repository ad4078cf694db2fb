"""
lmtd.py

Log-mean temperature difference and the linear axial temperature profile used for
plotting the hot and cold streams along the exchanger.
"""

from __future__ import annotations

import numpy as np

from heat_transfer.errors import InvalidTemperatureDifferenceError
from heat_transfer.parameters import FlowArrangement


def terminal_differences(
    Th_in: float, Tc_in: float, Th_out: float, Tc_out: float, arrangement=FlowArrangement.COUNTER
) -> tuple[float, float]:
    """Temperature differences at the two ends. Shell-and-tube is referenced to counter flow."""
    if FlowArrangement.parse(arrangement) is FlowArrangement.PARALLEL:
        return Th_in - Tc_in, Th_out - Tc_out
    return Th_in - Tc_out, Th_out - Tc_in


def log_mean_temperature_difference(
    Th_in: float,
    Tc_in: float,
    Th_out: float,
    Tc_out: float,
    arrangement=FlowArrangement.COUNTER,
    equal_tol: float = 1e-6,
) -> float:
    """
    Uncorrected LMTD for the given flow arrangement.

    Args:
        Th_in, Tc_in, Th_out, Tc_out: Boundary temperatures (°C or K)
        arrangement: Flow arrangement; shell-and-tube uses the counter-flow differences
        equal_tol: Below this |dt1 - dt2| the log-mean collapses to dt1

    Returns:
        float: LMTD (K)

    Raises:
        InvalidTemperatureDifferenceError: if either end difference is not positive
    """
    arrangement = FlowArrangement.parse(arrangement)
    dt1, dt2 = terminal_differences(Th_in, Tc_in, Th_out, Tc_out, arrangement)
    if abs(dt1 - dt2) < equal_tol:
        return float(dt1)
    if dt1 <= 0 or dt2 <= 0:
        raise InvalidTemperatureDifferenceError(dt1, dt2, arrangement.value)
    return float((dt1 - dt2) / np.log(dt1 / dt2))


def temperature_profile(
    Th_in: float,
    Tc_in: float,
    Th_out: float,
    Tc_out: float,
    arrangement=FlowArrangement.COUNTER,
    n_points: int = 101,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Linear stream temperatures along the exchanger, hot stream entering at x=0.

    Returns:
        tuple: (x, T_hot, T_cold) with x the position fraction in [0, 1]
    """
    x = np.linspace(0.0, 1.0, n_points)
    T_hot = Th_in - (Th_in - Th_out) * x
    if FlowArrangement.parse(arrangement) is FlowArrangement.PARALLEL:
        T_cold = Tc_in + (Tc_out - Tc_in) * x
    else:
        T_cold = Tc_out - (Tc_out - Tc_in) * x
    return x, T_hot, T_cold


__all__ = ["log_mean_temperature_difference", "temperature_profile", "terminal_differences"]
