from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from heat_transfer.parameters import label

if TYPE_CHECKING:  # pragma: no cover
    from heat_transfer.hex_solver import SolvedResult


class HeatTransferError(Exception):
    """Base class for every failure reported by the heat-exchanger solver."""

    retryable = False


class InsufficientKnownsError(HeatTransferError):
    def __init__(self, unresolved: Iterable[str] = ()):
        self.unresolved = tuple(unresolved)
        if self.unresolved:
            names = ", ".join(label(p) for p in self.unresolved)
            message = f"Not enough known parameters to determine: {names}"
        else:
            message = "No valid known parameters provided."
        super().__init__(message)


class NoUnknownsSelectedError(HeatTransferError):
    def __init__(self):
        super().__init__("Select at least one unknown parameter.")


class MissingValueError(HeatTransferError):
    def __init__(self, parameter: str, value: object = None):
        self.parameter = parameter
        self.value = value
        super().__init__(f"Missing or invalid value for {label(parameter)} ({parameter}={value!r})")


class InvalidTemperatureDifferenceError(HeatTransferError):
    def __init__(self, dt1: float, dt2: float, arrangement: str):
        self.dt1 = dt1
        self.dt2 = dt2
        self.arrangement = arrangement
        super().__init__(
            f"Invalid temperature differences for {arrangement} flow (dt1={dt1:.4g}, dt2={dt2:.4g}): "
            "ensure Th_in > Tc_out and Th_out > Tc_in for the given flow type."
        )


class PhysicallyInvalidResultError(HeatTransferError):
    def __init__(self, message: str, temperatures: Mapping[str, float]):
        self.temperatures = dict(temperatures)
        snapshot = ", ".join(f"{k}={v:.4g}" for k, v in self.temperatures.items())
        super().__init__(f"Invalid result: {message} ({snapshot})")


class ConvergenceFailureError(HeatTransferError):
    def __init__(self, iterations: int, last_guess: float, last_calculated: float):
        self.iterations = iterations
        self.last_guess = last_guess
        self.last_calculated = last_calculated
        super().__init__(
            f"Iteration failed to converge for heat transfer rate after {iterations} iterations "
            f"(Q_guess={last_guess:.6g} W, Q_calc={last_calculated:.6g} W). "
            "Check input values and configuration."
        )


@dataclass(frozen=True)
class SolveOutcome:
    """Either a solved result or the error that stopped the solve."""

    result: SolvedResult | None = None
    error: HeatTransferError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def retryable(self) -> bool:
        return self.error is not None and self.error.retryable

    def unwrap(self) -> SolvedResult:
        if self.error is not None:
            raise self.error
        assert self.result is not None
        return self.result


__all__ = [
    "ConvergenceFailureError",
    "HeatTransferError",
    "InsufficientKnownsError",
    "InvalidTemperatureDifferenceError",
    "MissingValueError",
    "NoUnknownsSelectedError",
    "PhysicallyInvalidResultError",
    "SolveOutcome",
]
