"""
parameters.py

Registry of the eleven heat-exchanger quantities the solver works with, plus the
flow arrangement and shell-and-tube pass layout enums.

All values handed to the solver are canonical SI (temperatures in °C, since only
differences enter the formulas).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    TEMPERATURE = "temperature"
    MASS_FLOW = "mass_flow"
    SPECIFIC_HEAT = "specific_heat"
    AREA = "area"
    COEFFICIENT = "coefficient"
    RATE = "rate"


@dataclass(frozen=True)
class ParameterSpec:
    """Metadata for one registry entry."""

    id: str
    label: str
    role: Role
    si_unit: str
    imperial_unit: str
    side: str | None = None  # "hot", "cold" or None for exchanger-wide quantities


PARAMETERS: tuple[ParameterSpec, ...] = (
    ParameterSpec("Th_in", "Hot Inlet Temperature", Role.TEMPERATURE, "°C", "°F", "hot"),
    ParameterSpec("Tc_in", "Cold Inlet Temperature", Role.TEMPERATURE, "°C", "°F", "cold"),
    ParameterSpec("Th_out", "Hot Outlet Temperature", Role.TEMPERATURE, "°C", "°F", "hot"),
    ParameterSpec("Tc_out", "Cold Outlet Temperature", Role.TEMPERATURE, "°C", "°F", "cold"),
    ParameterSpec("m_h", "Hot Mass Flow Rate", Role.MASS_FLOW, "kg/s", "lb/s", "hot"),
    ParameterSpec("m_c", "Cold Mass Flow Rate", Role.MASS_FLOW, "kg/s", "lb/s", "cold"),
    ParameterSpec("cp_h", "Hot Specific Heat", Role.SPECIFIC_HEAT, "J/kg·K", "BTU/lb·°F", "hot"),
    ParameterSpec("cp_c", "Cold Specific Heat", Role.SPECIFIC_HEAT, "J/kg·K", "BTU/lb·°F", "cold"),
    ParameterSpec("A", "Heat Transfer Area", Role.AREA, "m²", "ft²"),
    ParameterSpec("U", "Overall Heat Transfer Coefficient", Role.COEFFICIENT, "W/m²·K", "BTU/hr·ft²·°F"),
    ParameterSpec("Q", "Heat Transfer Rate", Role.RATE, "W", "BTU/hr"),
)

REGISTRY: dict[str, ParameterSpec] = {p.id: p for p in PARAMETERS}
PARAMETER_IDS: tuple[str, ...] = tuple(REGISTRY)

TEMPERATURE_IDS = ("Th_in", "Tc_in", "Th_out", "Tc_out")


def parameter(param_id: str) -> ParameterSpec:
    try:
        return REGISTRY[param_id]
    except KeyError:
        raise ValueError(f"Unknown parameter {param_id!r}. Must be one of {list(PARAMETER_IDS)}") from None


def label(param_id: str) -> str:
    """Human readable label, falling back to the identifier itself."""
    spec = REGISTRY.get(param_id)
    return spec.label if spec is not None else param_id


class FlowArrangement(str, Enum):
    PARALLEL = "parallel"
    COUNTER = "counter"
    SHELL_TUBE = "shell-tube"

    @classmethod
    def parse(cls, value: FlowArrangement | str) -> FlowArrangement:
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Invalid flow arrangement {value!r}. Must be one of {[m.value for m in cls]}") from None


class ShellTubeConfig(str, Enum):
    """Shell passes - tube passes."""

    ONE_TWO = "1-2"
    TWO_FOUR = "2-4"
    ONE_FOUR = "1-4"
    ONE_SIX = "1-6"

    @classmethod
    def parse(cls, value: ShellTubeConfig | str) -> ShellTubeConfig:
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Invalid shell-tube configuration {value!r}. Must be one of {[m.value for m in cls]}") from None

    @property
    def shell_passes(self) -> int:
        return int(self.value.split("-")[0])

    @property
    def tube_passes(self) -> int:
        return int(self.value.split("-")[1])


__all__ = [
    "FlowArrangement",
    "PARAMETERS",
    "PARAMETER_IDS",
    "ParameterSpec",
    "REGISTRY",
    "Role",
    "ShellTubeConfig",
    "TEMPERATURE_IDS",
    "label",
    "parameter",
]
