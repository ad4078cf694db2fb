"""
correction_factor.py

LMTD correction factor F for shell-and-tube exchangers.

    P = (Tc_out - Tc_in) / (Th_in - Tc_in)      thermal effectiveness of the cold stream
    R = (Th_in - Th_out) / (Tc_out - Tc_in)     capacity rate ratio C_c / C_h

Every configuration uses the same generalised Bowman form

    S = sqrt(R^2 + 1) / (R - 1)
    W = ((1 - P) / (1 - P R))^(1 / exponent)
    F = S ln(W) / (divisor * ln[(1 + W - S + S W) / (1 + W + S - S W)])

with (exponent, divisor) set by the pass layout. Anything outside the
correlation's domain, or any non-finite intermediate, gives F = 1.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from heat_transfer.parameters import FlowArrangement, ShellTubeConfig

logger = logging.getLogger(__name__)

UNITY_TOL = 1e-6
SQRT2 = np.sqrt(2.0)


@dataclass(frozen=True)
class PassLayout:
    exponent: int  # root taken of W
    divisor: float  # scales the log in the denominator


PASS_LAYOUTS: dict[ShellTubeConfig, PassLayout] = {
    ShellTubeConfig.ONE_TWO: PassLayout(exponent=2, divisor=1.0),
    ShellTubeConfig.TWO_FOUR: PassLayout(exponent=4, divisor=1.0),
    ShellTubeConfig.ONE_FOUR: PassLayout(exponent=4, divisor=2.0),
    ShellTubeConfig.ONE_SIX: PassLayout(exponent=6, divisor=3.0),
}


def _guarded(F) -> float:
    if not np.isfinite(F) or F <= 0:
        logger.debug("Correction factor %s is not usable, falling back to F=1", F)
        return 1.0
    return float(F)


def _one_two_unity_ratio(P) -> float:
    """Limit of the 1-2 correlation as R -> 1 (removes the 0/0 in S)."""
    arg = (2.0 - P * (2.0 - SQRT2)) / (2.0 - P * (2.0 + SQRT2))
    if not np.isfinite(arg) or arg <= 0:
        return 1.0
    return _guarded(SQRT2 * P / (1.0 - P) / np.log(arg))


def _bowman(P, R, layout: PassLayout) -> float:
    S = np.sqrt(R * R + 1.0) / (R - 1.0)
    W = ((1.0 - P) / (1.0 - P * R)) ** (1.0 / layout.exponent)
    if not np.isfinite(W) or W <= 0 or abs(W - 1.0) < UNITY_TOL:
        return 1.0
    arg = (1.0 + W - S + S * W) / (1.0 + W + S - S * W)
    if not np.isfinite(arg) or arg <= 0:
        return 1.0
    return _guarded(S * np.log(W) / (layout.divisor * np.log(arg)))


def two_four_transition(R) -> float:
    """P below which the 2-4 layout behaves like a single 1-2 shell."""
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        root = np.sqrt(np.float64(R) ** 2 + 1.0)
        return float(2.0 / R * (1.0 - root / np.tanh(root / 2.0)))


def correction_factor(P: float, R: float, config: ShellTubeConfig | FlowArrangement | str) -> float:
    """
    LMTD correction factor for the given shell-and-tube pass layout.

    Parameters
    ----------
    P : float
        Cold-stream temperature effectiveness.
    R : float
        Heat capacity rate ratio.
    config : ShellTubeConfig, FlowArrangement or str
        Pass layout ("1-2", "2-4", "1-4", "1-6"). Parallel and counter flow
        always give 1. ``FlowArrangement.SHELL_TUBE`` names no pass layout
        and is rejected like any other unknown configuration.

    Returns
    -------
    F : float
        Dimensionless factor in (0, 1] for in-domain inputs, 1 otherwise.

    Raises
    ------
    ValueError
        If ``config`` is not a pass layout, "parallel" or "counter". Numeric
        inputs never raise.
    """
    if config in (FlowArrangement.PARALLEL, FlowArrangement.COUNTER):
        return 1.0
    config = ShellTubeConfig.parse(config)

    P = np.float64(P)
    R = np.float64(R)
    if not (np.isfinite(P) and np.isfinite(R)) or P <= 0 or P >= 1 or R <= 0:
        return 1.0

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        if config is ShellTubeConfig.TWO_FOUR:
            if P <= two_four_transition(R):
                return correction_factor(P, R, ShellTubeConfig.ONE_TWO)
            if abs(R - 1.0) < UNITY_TOL:
                return _one_two_unity_ratio(P / 2.0)
        elif config is ShellTubeConfig.ONE_TWO and abs(R - 1.0) < UNITY_TOL:
            return _one_two_unity_ratio(P)
        return _bowman(P, R, PASS_LAYOUTS[config])


def p_r_ratios(Th_in: float, Tc_in: float, Th_out: float, Tc_out: float) -> tuple[float, float]:
    """Return (P, R) from the four boundary temperatures; degenerate spans give non-finite values."""
    with np.errstate(divide="ignore", invalid="ignore"):
        P = np.float64(Tc_out - Tc_in) / np.float64(Th_in - Tc_in)
        R = np.float64(Th_in - Th_out) / np.float64(Tc_out - Tc_in)
    return float(P), float(R)


__all__ = ["PASS_LAYOUTS", "PassLayout", "UNITY_TOL", "correction_factor", "p_r_ratios", "two_four_transition"]
