__all__ = [
    "FlowArrangement",
    "ShellTubeConfig",
    "solve_heat_exchanger",
    "solve_network",
    "correction_factor",
]  # the entry points most callers need


from heat_transfer.correction_factor import correction_factor
from heat_transfer.epsilon_ntu import epsilon_ntu
from heat_transfer.errors import (
    ConvergenceFailureError,
    HeatTransferError,
    InsufficientKnownsError,
    InvalidTemperatureDifferenceError,
    MissingValueError,
    NoUnknownsSelectedError,
    PhysicallyInvalidResultError,
    SolveOutcome,
)
from heat_transfer.hex_solver import (
    PerformanceMetrics,
    SolvedResult,
    SolverOptions,
    compare_arrangements,
    evaluate_performance,
    required_knowns,
    solve_heat_exchanger,
    try_solve_heat_exchanger,
)
from heat_transfer.lmtd import log_mean_temperature_difference, temperature_profile
from heat_transfer.parameters import PARAMETERS, FlowArrangement, ShellTubeConfig
from heat_transfer.resistance_network import Geometry, Layer, NetworkResult, ResistanceNetwork, solve_network
from heat_transfer.units import UnitSystem, from_si, to_si
