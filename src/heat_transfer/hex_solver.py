"""
hex_solver.py

Derives the unknown operating parameters of a two-stream heat exchanger from a
caller-chosen subset of the eleven registry quantities (see ``parameters.py``).

Which formula fires is driven by ``DEPENDENCY_TABLE``: every derivable parameter
maps to an ordered list of alternative routes, each with the prerequisites it
needs. The table is swept in order, repeatedly, against the known + derived set
until nothing new can be derived. If both outlet temperatures are still missing
at that point the coupled outlet problem is solved with the effectiveness-NTU
closed forms (parallel / counter) or a bounded fixed-point iteration on the duty
(shell-and-tube), and the sweep resumes.

All quantities are canonical SI: temperatures in °C (or K), flows in kg/s,
specific heats in J/(kg·K), area in m², U in W/(m²·K), duty in W.
"""

# ruff: noqa: N802, N806, N815 (allow the usual heat-transfer symbols)
from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType

from heat_transfer.correction_factor import correction_factor, p_r_ratios
from heat_transfer.epsilon_ntu import epsilon_ntu, ntu
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
from heat_transfer.lmtd import log_mean_temperature_difference, terminal_differences
from heat_transfer.parameters import REGISTRY, TEMPERATURE_IDS, FlowArrangement, ShellTubeConfig, parameter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SolverOptions:
    """Numerical tolerances for the heat-exchanger solver."""

    max_iterations: int = 100
    convergence_tol: float = 0.01  # W, absolute
    equal_dt_tol: float = 1e-6  # K, below this the log-mean collapses to dt1
    initial_duty_fraction: float = 0.5  # of C_min (Th_in - Tc_in)


DEFAULT_OPTIONS = SolverOptions()


@dataclass(frozen=True)
class _Context:
    arrangement: FlowArrangement
    shell_config: ShellTubeConfig
    options: SolverOptions


# ---------------------------------------------------------------------------
# Immutable solve state threaded through the derivation steps
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Derivation:
    parameter: str
    route: str
    value: float


@dataclass(frozen=True)
class SolveState:
    values: Mapping[str, float]
    trace: tuple[Derivation, ...] = ()

    @classmethod
    def from_knowns(cls, known: Mapping[str, float]) -> SolveState:
        return cls(values=MappingProxyType(dict(known)))

    def has(self, *param_ids: str) -> bool:
        return all(p in self.values for p in param_ids)

    def with_value(self, param_id: str, value: float, route: str) -> SolveState:
        logger.debug("Derived %s = %.6g via %s", param_id, value, route)
        return replace(
            self,
            values=MappingProxyType({**self.values, param_id: float(value)}),
            trace=self.trace + (Derivation(param_id, route, float(value)),),
        )


# ---------------------------------------------------------------------------
# Dependency table
# ---------------------------------------------------------------------------


def _div(num: float, den: float) -> float | None:
    return None if den == 0 else num / den


def _C_h(v: Mapping[str, float]) -> float:
    return v["m_h"] * v["cp_h"]


def _C_c(v: Mapping[str, float]) -> float:
    return v["m_c"] * v["cp_c"]


def effective_lmtd(v: Mapping[str, float], arrangement, shell_config, options: SolverOptions = DEFAULT_OPTIONS) -> float:
    """LMTD with the shell-and-tube correction applied; must be positive to size an exchanger."""
    arrangement = FlowArrangement.parse(arrangement)
    temps = [v[p] for p in TEMPERATURE_IDS]
    lmtd = log_mean_temperature_difference(*temps, arrangement, equal_tol=options.equal_dt_tol)
    F = 1.0
    if arrangement is FlowArrangement.SHELL_TUBE:
        F = correction_factor(*p_r_ratios(*temps), shell_config)
    lmtd_eff = F * lmtd
    if lmtd_eff <= 0:
        raise InvalidTemperatureDifferenceError(*terminal_differences(*temps, arrangement), arrangement.value)
    return lmtd_eff


def _lmtd_eff(v: Mapping[str, float], ctx: _Context) -> float:
    check_physical_validity(v, ctx.arrangement)
    return effective_lmtd(v, ctx.arrangement, ctx.shell_config, ctx.options)


@dataclass(frozen=True)
class Route:
    name: str
    requires: tuple[str, ...]
    formula: Callable[[Mapping[str, float], _Context], float | None]


def _add(a: float, b: float | None) -> float | None:
    return None if b is None else a + b


def _sub(a: float, b: float | None) -> float | None:
    return None if b is None else a - b


HOT = ("m_h", "cp_h")
COLD = ("m_c", "cp_c")
ALL_TEMPERATURES = TEMPERATURE_IDS

# Swept top to bottom; the first route whose prerequisites are available wins.
DEPENDENCY_TABLE: dict[str, tuple[Route, ...]] = {
    # 1. heat duty, hot side preferred
    "Q": (
        Route(
            "hot-side energy balance",
            ("Th_in", "Th_out", *HOT),
            lambda v, c: _C_h(v) * (v["Th_in"] - v["Th_out"]),
        ),
        Route(
            "cold-side energy balance",
            ("Tc_in", "Tc_out", *COLD),
            lambda v, c: _C_c(v) * (v["Tc_out"] - v["Tc_in"]),
        ),
        Route(
            "rate equation",
            ("U", "A", *ALL_TEMPERATURES),
            lambda v, c: v["U"] * v["A"] * _lmtd_eff(v, c),
        ),
    ),
    # 2. outlet temperatures
    "Th_out": (
        Route(
            "hot-side energy balance",
            ("Q", "Th_in", *HOT),
            lambda v, c: _sub(v["Th_in"], _div(v["Q"], _C_h(v))),
        ),
    ),
    "Tc_out": (
        Route(
            "cold-side energy balance",
            ("Q", "Tc_in", *COLD),
            lambda v, c: _add(v["Tc_in"], _div(v["Q"], _C_c(v))),
        ),
    ),
    # 3. flow rates and specific heats
    "m_h": (
        Route(
            "hot-side energy balance",
            ("Q", "Th_in", "Th_out", "cp_h"),
            lambda v, c: _div(v["Q"], v["cp_h"] * (v["Th_in"] - v["Th_out"])),
        ),
    ),
    "cp_h": (
        Route(
            "hot-side energy balance",
            ("Q", "Th_in", "Th_out", "m_h"),
            lambda v, c: _div(v["Q"], v["m_h"] * (v["Th_in"] - v["Th_out"])),
        ),
    ),
    "m_c": (
        Route(
            "cold-side energy balance",
            ("Q", "Tc_in", "Tc_out", "cp_c"),
            lambda v, c: _div(v["Q"], v["cp_c"] * (v["Tc_out"] - v["Tc_in"])),
        ),
    ),
    "cp_c": (
        Route(
            "cold-side energy balance",
            ("Q", "Tc_in", "Tc_out", "m_c"),
            lambda v, c: _div(v["Q"], v["m_c"] * (v["Tc_out"] - v["Tc_in"])),
        ),
    ),
    # 4. inlet temperatures
    "Th_in": (
        Route(
            "hot-side energy balance",
            ("Q", "Th_out", *HOT),
            lambda v, c: _add(v["Th_out"], _div(v["Q"], _C_h(v))),
        ),
    ),
    "Tc_in": (
        Route(
            "cold-side energy balance",
            ("Q", "Tc_out", *COLD),
            lambda v, c: _sub(v["Tc_out"], _div(v["Q"], _C_c(v))),
        ),
    ),
    # 5. sizing, Q = U A LMTD_eff
    "A": (
        Route(
            "rate equation",
            ("Q", "U", *ALL_TEMPERATURES),
            lambda v, c: _div(v["Q"], v["U"] * _lmtd_eff(v, c)),
        ),
    ),
    "U": (
        Route(
            "rate equation",
            ("Q", "A", *ALL_TEMPERATURES),
            lambda v, c: _div(v["Q"], v["A"] * _lmtd_eff(v, c)),
        ),
    ),
}

# Prerequisites of the coupled outlet solve (both outlets unknown, no duty available)
COUPLED_OUTLET_REQUIRES = ("Th_in", "Tc_in", *HOT, *COLD, "U", "A")


def required_knowns(unknowns: Iterable[str]) -> set[str]:
    """
    Parameters a caller has to supply for the given unknowns.

    Mirrors the solver sweep: every parameter outside ``unknowns`` is assumed
    available, and an unknown becomes available once the first route whose
    prerequisites are all available fires. Outlets that no route reaches fall
    back to the coupled solve's prerequisites.
    """
    unknowns = {parameter(u).id for u in unknowns}
    available = set(REGISTRY) - unknowns
    required: set[str] = set()
    progressed = True
    while progressed:
        progressed = False
        for param_id, routes in DEPENDENCY_TABLE.items():
            if param_id in available:
                continue
            route = next((r for r in routes if available.issuperset(r.requires)), None)
            if route is not None:
                required.update(route.requires)
                available.add(param_id)
                progressed = True
        if not progressed and not available & {"Th_out", "Tc_out"} and {"Th_out", "Tc_out"} <= unknowns:
            required.update(COUPLED_OUTLET_REQUIRES)
            available.update(("Th_out", "Tc_out", "Q"))
            progressed = True
    return required - unknowns


# ---------------------------------------------------------------------------
# Coupled outlet solve
# ---------------------------------------------------------------------------


def iterate_duty(
    Th_in: float,
    Tc_in: float,
    C_h: float,
    C_c: float,
    U: float,
    A: float,
    shell_config=ShellTubeConfig.ONE_TWO,
    options: SolverOptions = DEFAULT_OPTIONS,
) -> tuple[float, int]:
    """
    Fixed-point iteration Q <- U A F LMTD(Q) for a shell-and-tube exchanger with both outlets unknown.

    Returns:
        tuple: (Q, iterations)

    Raises:
        ConvergenceFailureError: if |Q_calc - Q_guess| is still above tolerance after max_iterations
        InvalidTemperatureDifferenceError: if a candidate duty drives a terminal difference to zero or
            below. Plain substitution overshoots once U A is large against C_min, so an exchanger that
            is big for its streams usually ends here on the second iteration rather than in
            ConvergenceFailureError.
    """
    C_min = min(C_h, C_c)
    Q_guess = options.initial_duty_fraction * C_min * (Th_in - Tc_in)
    Q_calc = Q_guess
    for iteration in range(1, options.max_iterations + 1):
        Th_out = Th_in - Q_guess / C_h
        Tc_out = Tc_in + Q_guess / C_c
        lmtd = log_mean_temperature_difference(
            Th_in, Tc_in, Th_out, Tc_out, FlowArrangement.SHELL_TUBE, equal_tol=options.equal_dt_tol
        )
        F = correction_factor(*p_r_ratios(Th_in, Tc_in, Th_out, Tc_out), shell_config)
        Q_calc = U * A * lmtd * F
        logger.debug("Iteration %d: Q_guess=%.6g W, Q_calc=%.6g W, F=%.4f", iteration, Q_guess, Q_calc, F)
        if abs(Q_calc - Q_guess) < options.convergence_tol:
            return Q_calc, iteration
        if iteration < options.max_iterations:
            Q_guess = Q_calc

    logger.warning(
        "Duty iteration did not converge in %d iterations (last Q=%.6g W)", options.max_iterations, Q_calc
    )
    raise ConvergenceFailureError(options.max_iterations, Q_guess, Q_calc)


def _solve_coupled_outlets(state: SolveState, ctx: _Context) -> SolveState:
    v = state.values
    C_h, C_c = _C_h(v), _C_c(v)
    C_min, C_max = min(C_h, C_c), max(C_h, C_c)
    dT_max = v["Th_in"] - v["Tc_in"]

    epsilon = None
    if ctx.arrangement is not FlowArrangement.SHELL_TUBE:
        epsilon = epsilon_ntu(ntu(v["U"], v["A"], C_min), C_min / C_max, ctx.arrangement)

    if epsilon is not None:
        Q = float(epsilon) * C_min * dT_max
        route = "effectiveness-NTU"
    else:
        Q, iterations = iterate_duty(v["Th_in"], v["Tc_in"], C_h, C_c, v["U"], v["A"], ctx.shell_config, ctx.options)
        route = f"duty iteration ({iterations} it.)"

    state = state.with_value("Q", Q, route)
    state = state.with_value("Th_out", v["Th_in"] - Q / C_h, route)
    return state.with_value("Tc_out", v["Tc_in"] + Q / C_c, route)


def _sweep(state: SolveState, ctx: _Context) -> SolveState:
    while True:
        progressed = False
        for param_id, routes in DEPENDENCY_TABLE.items():
            if state.has(param_id):
                continue
            for route in routes:
                if not state.has(*route.requires):
                    continue
                value = route.formula(state.values, ctx)
                if value is None or not math.isfinite(value):
                    logger.debug("Route %r for %s is undefined for these inputs", route.name, param_id)
                    continue
                state = state.with_value(param_id, value, route.name)
                progressed = True
                break
        if progressed:
            continue
        if _coupled_outlets_solvable(state):
            state = _solve_coupled_outlets(state, ctx)
            continue
        return state


def _coupled_outlets_solvable(state: SolveState) -> bool:
    if state.has("Th_out") or state.has("Tc_out") or not state.has(*COUPLED_OUTLET_REQUIRES):
        return False
    return _C_h(state.values) > 0 and _C_c(state.values) > 0


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PerformanceMetrics:
    """Derived performance fields. Fields stay None when their inputs are unavailable."""

    C_min: float | None = None
    C_max: float | None = None
    Cr: float | None = None
    Qmax: float | None = None
    epsilon: float | None = None
    thermal_efficiency: float | None = None  # %
    NTU: float | None = None
    LMTD_uncorrected: float | None = None
    correction_factor: float | None = None
    LMTD: float | None = None

    def as_dict(self) -> dict[str, float]:
        keys = {
            "C_min": "C_min",
            "C_max": "C_max",
            "Cr": "Cr",
            "Qmax": "Qmax",
            "epsilon": "epsilon",
            "thermal_efficiency": "thermalEfficiency",
            "NTU": "NTU",
            "LMTD_uncorrected": "LMTD_uncorrected",
            "correction_factor": "correctionFactor",
            "LMTD": "LMTD",
        }
        return {out: getattr(self, attr) for attr, out in keys.items() if getattr(self, attr) is not None}


@dataclass(frozen=True)
class SolvedResult:
    values: Mapping[str, float]
    known: frozenset[str]
    arrangement: FlowArrangement
    shell_config: ShellTubeConfig
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)
    trace: tuple[Derivation, ...] = ()

    def __getitem__(self, param_id: str) -> float:
        return self.values[param_id]

    def __contains__(self, param_id: object) -> bool:
        return param_id in self.values

    def get(self, param_id: str, default=None):
        return self.values.get(param_id, default)

    @property
    def derived(self) -> dict[str, float]:
        return {p: self.values[p] for p in self.values if p not in self.known}

    def as_dict(self) -> dict[str, float]:
        """Parameter values and performance fields in one flat map."""
        return {**self.values, **self.performance.as_dict()}


def performance_metrics(
    values: Mapping[str, float],
    arrangement=FlowArrangement.COUNTER,
    shell_config=ShellTubeConfig.ONE_TWO,
    options: SolverOptions = DEFAULT_OPTIONS,
) -> PerformanceMetrics:
    """Compute every performance field the available values allow."""
    arrangement = FlowArrangement.parse(arrangement)
    v = values
    metrics: dict[str, float] = {}

    C_h = _C_h(v) if "m_h" in v and "cp_h" in v else None
    C_c = _C_c(v) if "m_c" in v and "cp_c" in v else None
    if C_h is not None and C_c is not None:
        C_min, C_max = min(C_h, C_c), max(C_h, C_c)
        metrics.update(C_min=C_min, C_max=C_max)
        if C_max != 0:
            metrics["Cr"] = C_min / C_max
        if "Th_in" in v and "Tc_in" in v:
            # Not guarded against Tc_in > Th_in: a negative Qmax flips the sign of epsilon.
            Qmax = C_min * (v["Th_in"] - v["Tc_in"])
            metrics["Qmax"] = Qmax
            if "Q" in v and Qmax != 0:
                metrics["epsilon"] = v["Q"] / Qmax
                metrics["thermal_efficiency"] = 100.0 * metrics["epsilon"]
        if "U" in v and "A" in v and C_min != 0:
            metrics["NTU"] = ntu(v["U"], v["A"], C_min)

    if all(p in v for p in TEMPERATURE_IDS):
        temps = [v[p] for p in TEMPERATURE_IDS]
        lmtd = log_mean_temperature_difference(*temps, arrangement, equal_tol=options.equal_dt_tol)
        F = 1.0
        if arrangement is FlowArrangement.SHELL_TUBE:
            F = correction_factor(*p_r_ratios(*temps), ShellTubeConfig.parse(shell_config))
        metrics.update(LMTD_uncorrected=lmtd, correction_factor=F, LMTD=F * lmtd)

    return PerformanceMetrics(**metrics)


def check_physical_validity(values: Mapping[str, float], arrangement) -> None:
    """Reject outlet temperatures the declared flow direction cannot produce."""
    arrangement = FlowArrangement.parse(arrangement)
    if not all(p in values for p in TEMPERATURE_IDS):
        return
    temps = {p: values[p] for p in TEMPERATURE_IDS}
    if arrangement is FlowArrangement.PARALLEL and not temps["Th_out"] > temps["Tc_out"]:
        raise PhysicallyInvalidResultError("Th_out must be greater than Tc_out in parallel flow.", temps)
    if arrangement is FlowArrangement.COUNTER and not temps["Th_out"] > temps["Tc_in"]:
        raise PhysicallyInvalidResultError("Th_out must be greater than Tc_in in counter flow.", temps)


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


def _validated_knowns(known: Mapping[str, float | None]) -> dict[str, float]:
    if not known:
        raise InsufficientKnownsError()
    values: dict[str, float] = {}
    for param_id, value in known.items():
        parameter(param_id)
        try:
            number = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            raise MissingValueError(param_id, value) from None
        if not math.isfinite(number):
            raise MissingValueError(param_id, value)
        values[param_id] = number
    return values


def _context(arrangement, shell_config, options: SolverOptions | None) -> _Context:
    return _Context(
        arrangement=FlowArrangement.parse(arrangement),
        shell_config=ShellTubeConfig.parse(shell_config),
        options=options or DEFAULT_OPTIONS,
    )


def solve_heat_exchanger(
    known: Mapping[str, float | None],
    unknowns: Iterable[str],
    arrangement=FlowArrangement.COUNTER,
    shell_config=ShellTubeConfig.ONE_TWO,
    options: SolverOptions | None = None,
) -> SolvedResult:
    """
    Solve for the requested unknown parameters.

    Args:
        known: Parameter id -> SI value for every quantity the caller knows
        unknowns: Parameter ids to solve for (disjoint from ``known``)
        arrangement: "parallel", "counter" or "shell-tube"
        shell_config: Pass layout, only used for shell-and-tube
        options: Numerical tolerances

    Returns:
        SolvedResult: knowns, derived values and performance metrics

    Raises:
        InsufficientKnownsError, NoUnknownsSelectedError, MissingValueError,
        InvalidTemperatureDifferenceError, PhysicallyInvalidResultError,
        ConvergenceFailureError
    """
    unknowns = tuple(dict.fromkeys(unknowns))
    if not known:
        raise InsufficientKnownsError()
    if not unknowns:
        raise NoUnknownsSelectedError()
    for param_id in unknowns:
        parameter(param_id)
    overlap = set(known).intersection(unknowns)
    if overlap:
        raise ValueError(f"Parameters cannot be both known and unknown: {sorted(overlap)}")

    values = _validated_knowns(known)
    ctx = _context(arrangement, shell_config, options)
    logger.debug(
        "Solving %s exchanger for %s from %s", ctx.arrangement.value, list(unknowns), sorted(values)
    )

    state = _sweep(SolveState.from_knowns(values), ctx)
    unresolved = [p for p in unknowns if not state.has(p)]
    if unresolved:
        raise InsufficientKnownsError(unresolved)

    check_physical_validity(state.values, ctx.arrangement)
    metrics = performance_metrics(state.values, ctx.arrangement, ctx.shell_config, ctx.options)
    return SolvedResult(
        values=MappingProxyType({p: state.values[p] for p in REGISTRY if p in state.values}),
        known=frozenset(values),
        arrangement=ctx.arrangement,
        shell_config=ctx.shell_config,
        performance=metrics,
        trace=state.trace,
    )


def try_solve_heat_exchanger(*args, **kwargs) -> SolveOutcome:
    """Same as ``solve_heat_exchanger`` but returns the error instead of raising it."""
    try:
        return SolveOutcome(result=solve_heat_exchanger(*args, **kwargs))
    except HeatTransferError as exc:
        return SolveOutcome(error=exc)


def evaluate_performance(
    known: Mapping[str, float | None],
    arrangement=FlowArrangement.COUNTER,
    shell_config=ShellTubeConfig.ONE_TWO,
    options: SolverOptions | None = None,
) -> SolvedResult:
    """Performance metrics for a fully specified exchanger (all four boundary temperatures)."""
    values = _validated_knowns(known)
    ctx = _context(arrangement, shell_config, options)
    state = _sweep(SolveState.from_knowns(values), ctx)
    missing = [p for p in TEMPERATURE_IDS if not state.has(p)]
    if missing:
        raise InsufficientKnownsError(missing)

    check_physical_validity(state.values, ctx.arrangement)
    return SolvedResult(
        values=MappingProxyType({p: state.values[p] for p in REGISTRY if p in state.values}),
        known=frozenset(values),
        arrangement=ctx.arrangement,
        shell_config=ctx.shell_config,
        performance=performance_metrics(state.values, ctx.arrangement, ctx.shell_config, ctx.options),
        trace=state.trace,
    )


def compare_arrangements(
    known: Mapping[str, float | None],
    shell_config=ShellTubeConfig.ONE_TWO,
    options: SolverOptions | None = None,
) -> dict[FlowArrangement, SolveOutcome]:
    """Report the same inputs under parallel, counter and shell-and-tube arrangements."""
    outcomes: dict[FlowArrangement, SolveOutcome] = {}
    for arrangement in FlowArrangement:
        try:
            outcomes[arrangement] = SolveOutcome(result=evaluate_performance(known, arrangement, shell_config, options))
        except HeatTransferError as exc:
            logger.debug("%s arrangement not feasible: %s", arrangement.value, exc)
            outcomes[arrangement] = SolveOutcome(error=exc)
    return outcomes


__all__ = [
    "COUPLED_OUTLET_REQUIRES",
    "DEPENDENCY_TABLE",
    "Derivation",
    "PerformanceMetrics",
    "Route",
    "SolveState",
    "SolvedResult",
    "SolverOptions",
    "check_physical_validity",
    "compare_arrangements",
    "effective_lmtd",
    "evaluate_performance",
    "iterate_duty",
    "performance_metrics",
    "required_knowns",
    "solve_heat_exchanger",
    "try_solve_heat_exchanger",
]
