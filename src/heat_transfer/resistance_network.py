"""
resistance_network.py

One-dimensional steady-state conduction through a composite planar wall or a set
of concentric cylindrical shells, with optional convection on either face.

The thermal circuit is a plain series chain

    [1 / (h_in A_in)] + R_layer_1 + ... + R_layer_n + [1 / (h_out A_out)]

where a boundary with h = 0 is left out of the chain altogether (it is not
treated as an infinite resistance). Interface temperatures follow from a linear
split of the overall temperature difference over the cumulative resistance.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

import numpy as np

logger = logging.getLogger(__name__)


class Geometry(str, Enum):
    PLANAR = "planar"
    CYLINDRICAL = "cylindrical"


@dataclass(frozen=True)
class Layer:
    """One conduction layer. Planar layers use ``thickness``, cylindrical ones ``outer_radius``."""

    k: float  # W/(m·K)
    thickness: float | None = None  # m
    outer_radius: float | None = None  # m


@dataclass(frozen=True)
class ResistanceNetwork:
    """Inputs of the network, all SI (temperatures in °C or K)."""

    geometry: Geometry
    layers: tuple[Layer, ...]
    t_hot: float
    t_cold: float
    h_inside: float = 0.0  # W/(m²·K), 0 = boundary not modelled
    h_outside: float = 0.0
    area: float | None = None  # m², planar reference area
    inner_radius: float | None = None  # m, cylindrical
    length: float | None = None  # m, cylindrical axial length

    def __post_init__(self):
        object.__setattr__(self, "geometry", Geometry(self.geometry))
        object.__setattr__(self, "layers", tuple(self.layers))

    @classmethod
    def planar(cls, layers: Sequence[Layer], area: float, t_hot: float, t_cold: float, h_inside=0.0, h_outside=0.0):
        return cls(Geometry.PLANAR, tuple(layers), t_hot, t_cold, h_inside, h_outside, area=area)

    @classmethod
    def cylindrical(
        cls,
        layers: Sequence[Layer],
        inner_radius: float,
        length: float,
        t_hot: float,
        t_cold: float,
        h_inside=0.0,
        h_outside=0.0,
    ):
        return cls(
            Geometry.CYLINDRICAL,
            tuple(layers),
            t_hot,
            t_cold,
            h_inside,
            h_outside,
            inner_radius=inner_radius,
            length=length,
        )

    def surface_area(self, radius: float) -> float:
        """Area seen by a convective boundary: the reference area, or 2 pi r L at that radius."""
        if self.geometry is Geometry.PLANAR:
            return self.area
        return 2 * np.pi * radius * self.length

    @property
    def outer_radius(self) -> float:
        return self.layers[-1].outer_radius if self.layers else self.inner_radius

    def layer_radii(self) -> list[tuple[float, float]]:
        """(r_inner, r_outer) for each cylindrical layer."""
        radii = []
        r_inner = self.inner_radius
        for layer in self.layers:
            radii.append((r_inner, layer.outer_radius))
            r_inner = layer.outer_radius
        return radii


@dataclass(frozen=True)
class Resistance:
    label: str
    value: float  # K/W


@dataclass(frozen=True)
class InterfaceTemperature:
    label: str
    temperature: float


@dataclass(frozen=True)
class NetworkResult:
    resistances: tuple[Resistance, ...]
    total_resistance: float  # K/W
    heat_rate: float  # W
    overall_coefficient: float  # W/(m²·K), referenced to the inner / reference area
    interface_temperatures: tuple[InterfaceTemperature, ...]
    critical_radius: float | None = None  # m, cylindrical only

    @property
    def layer_resistances(self) -> list[float]:
        return [r.value for r in self.resistances if r.label.startswith("Layer")]


def _safe_div(num, den) -> float:
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(num) / np.float64(den))


def planar_layer_resistance(thickness: float, k: float, area: float) -> float:
    return _safe_div(thickness, k * area)


def cylindrical_layer_resistance(r_inner: float, r_outer: float, k: float, length: float) -> float:
    with np.errstate(divide="ignore", invalid="ignore"):
        return _safe_div(np.log(np.float64(r_outer) / r_inner), 2 * np.pi * k * length)


def convection_resistance(h: float, area: float) -> float:
    return _safe_div(1.0, h * area)


def critical_radius(k: float, h: float) -> float:
    """Critical insulation radius r_cr = k / h; 0 when undefined."""
    r_cr = _safe_div(k, h)
    return r_cr if np.isfinite(r_cr) else 0.0


def series_resistances(network: ResistanceNetwork) -> list[Resistance]:
    """Resistances of the thermal circuit, inside face first."""
    chain: list[Resistance] = []
    is_planar = network.geometry is Geometry.PLANAR

    if network.h_inside > 0:
        area_in = network.surface_area(network.inner_radius)
        chain.append(Resistance("Inside Convection", convection_resistance(network.h_inside, area_in)))

    if is_planar:
        for i, layer in enumerate(network.layers, start=1):
            chain.append(Resistance(f"Layer {i}", planar_layer_resistance(layer.thickness, layer.k, network.area)))
    else:
        for i, (layer, (r_in, r_out)) in enumerate(zip(network.layers, network.layer_radii()), start=1):
            if not r_out > r_in:
                logger.warning("Layer %d outer radius %.4g m is not larger than its inner radius %.4g m", i, r_out, r_in)
            chain.append(Resistance(f"Layer {i}", cylindrical_layer_resistance(r_in, r_out, layer.k, network.length)))

    if network.h_outside > 0:
        area_out = network.surface_area(network.outer_radius)
        chain.append(Resistance("Outside Convection", convection_resistance(network.h_outside, area_out)))

    return chain


def solve_network(network: ResistanceNetwork) -> NetworkResult:
    """
    Heat rate, overall coefficient and interface temperatures of a resistance network.

    Args:
        network: Geometry, layers, boundary coefficients and temperatures (SI)

    Returns:
        NetworkResult: resistances in circuit order, totals and interface temperatures.
        Never raises; degenerate inputs give non-finite values except for the
        critical radius, which falls back to 0.
    """
    chain = series_resistances(network)
    total_R = float(sum(r.value for r in chain))
    dT = network.t_hot - network.t_cold

    temperatures = []
    if network.h_inside <= 0:
        temperatures.append(InterfaceTemperature("Start", float(network.t_hot)))
    cumulative_R = 0.0
    for r in chain:
        cumulative_R += r.value
        T = network.t_hot - dT * _safe_div(cumulative_R, total_R)
        temperatures.append(InterfaceTemperature(f"After {r.label}", T))

    reference_area = network.surface_area(network.inner_radius)
    heat_rate = _safe_div(dT, total_R)
    U = _safe_div(1.0, total_R * reference_area)

    r_cr = None
    if network.geometry is Geometry.CYLINDRICAL:
        k_last = network.layers[-1].k if network.layers else float("nan")
        r_cr = critical_radius(k_last, network.h_outside)

    logger.debug("Network total R=%.6g K/W, Q=%.6g W, U=%.6g W/m2K", total_R, heat_rate, U)
    return NetworkResult(
        resistances=tuple(chain),
        total_resistance=total_R,
        heat_rate=heat_rate,
        overall_coefficient=U,
        interface_temperatures=tuple(temperatures),
        critical_radius=r_cr,
    )


__all__ = [
    "Geometry",
    "InterfaceTemperature",
    "Layer",
    "NetworkResult",
    "Resistance",
    "ResistanceNetwork",
    "convection_resistance",
    "critical_radius",
    "cylindrical_layer_resistance",
    "planar_layer_resistance",
    "series_resistances",
    "solve_network",
]
