"""
units.py

Conversion between display units and the SI values the solvers work with.

Usage:
    value_si = to_si(value, "U", UnitSystem.IMPERIAL)
    value_display = from_si(value_si, "U", UnitSystem.IMPERIAL)
"""

from __future__ import annotations

from enum import Enum

from heat_transfer.parameters import Role, parameter


class UnitSystem(str, Enum):
    SI = "SI"
    IMPERIAL = "Imperial"


class TemperatureUnit(str, Enum):
    CELSIUS = "C"
    KELVIN = "K"
    FAHRENHEIT = "F"


class Units:
    """Multiply an Imperial value by these factors to get SI."""

    FEET_TO_METER = 0.3048
    MM_TO_METER = 1e-3
    SQFT_TO_SQM = 0.09290304
    LB_TO_KG = 0.45359237

    BTU_PER_LB_F_TO_J_PER_KG_K = 4186.8
    BTU_PER_HR_TO_WATT = 0.29307107
    BTU_PER_HR_FT2_F_TO_W_PER_M2_K = 5.678263  # film / overall coefficient
    BTU_PER_HR_FT_F_TO_W_PER_M_K = 1.730735  # conductivity
    HR_F_PER_BTU_TO_K_PER_W = 1.895634  # thermal resistance

    ZERO_CELSIUS_IN_KELVIN = 273.15


_ROLE_FACTORS = {
    Role.MASS_FLOW: Units.LB_TO_KG,
    Role.SPECIFIC_HEAT: Units.BTU_PER_LB_F_TO_J_PER_KG_K,
    Role.AREA: Units.SQFT_TO_SQM,
    Role.COEFFICIENT: Units.BTU_PER_HR_FT2_F_TO_W_PER_M2_K,
    Role.RATE: Units.BTU_PER_HR_TO_WATT,
}


def temperature_to_celsius(value: float, unit: TemperatureUnit | str) -> float:
    unit = TemperatureUnit(unit)
    if unit is TemperatureUnit.KELVIN:
        return value - Units.ZERO_CELSIUS_IN_KELVIN
    if unit is TemperatureUnit.FAHRENHEIT:
        return (value - 32.0) * 5.0 / 9.0
    return value


def temperature_from_celsius(value: float, unit: TemperatureUnit | str) -> float:
    unit = TemperatureUnit(unit)
    if unit is TemperatureUnit.KELVIN:
        return value + Units.ZERO_CELSIUS_IN_KELVIN
    if unit is TemperatureUnit.FAHRENHEIT:
        return value * 9.0 / 5.0 + 32.0
    return value


def to_si(value: float | None, param_id: str, system: UnitSystem | str = UnitSystem.SI) -> float | None:
    """Convert a registry parameter from ``system`` to SI (°C for temperatures)."""
    if value is None or UnitSystem(system) is UnitSystem.SI:
        return value
    role = parameter(param_id).role
    if role is Role.TEMPERATURE:
        return temperature_to_celsius(value, TemperatureUnit.FAHRENHEIT)
    return value * _ROLE_FACTORS[role]


def from_si(value: float | None, param_id: str, system: UnitSystem | str = UnitSystem.SI) -> float | None:
    """Inverse of ``to_si``."""
    if value is None or UnitSystem(system) is UnitSystem.SI:
        return value
    role = parameter(param_id).role
    if role is Role.TEMPERATURE:
        return temperature_from_celsius(value, TemperatureUnit.FAHRENHEIT)
    return value / _ROLE_FACTORS[role]


def length_to_si(value: float, unit: str = "m") -> float:
    factors = {"m": 1.0, "mm": Units.MM_TO_METER, "ft": Units.FEET_TO_METER}
    try:
        return value * factors[unit]
    except KeyError:
        raise ValueError(f"Invalid length unit {unit!r}. Must be one of {list(factors)}") from None


def area_to_si(value: float, unit: str = "m") -> float:
    """Area given in square ``unit``."""
    return value * length_to_si(1.0, unit) ** 2


__all__ = [
    "TemperatureUnit",
    "UnitSystem",
    "Units",
    "area_to_si",
    "from_si",
    "length_to_si",
    "temperature_from_celsius",
    "temperature_to_celsius",
    "to_si",
]
