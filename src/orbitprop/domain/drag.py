# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Atmospheric drag acceleration.

a = -½ (Cd·A/m) ρ |v_rel|² v̂_rel, with v_rel measured against an
atmosphere co-rotating with the Earth (v - ω⊕ × r).
"""
from dataclasses import dataclass
from typing import Optional

import numpy as np

from orbitprop.domain.atmosphere import ExponentialAtmosphere, atmospheric_density
from orbitprop.domain.bodies import Earth
from orbitprop.domain.linalg import Vector3, vec_cross, vec_sub
from orbitprop.domain.time_systems import EpochUTC


@dataclass(frozen=True)
class DragConfig:
    """Drag configuration for a satellite.

    cd: drag coefficient (dimensionless, typically 2.0-2.5)
    area_m2: cross-sectional area (m²)
    mass_kg: satellite mass (kg)
    """
    cd: float
    area_m2: float
    mass_kg: float

    def __post_init__(self) -> None:
        if self.mass_kg <= 0:
            raise ValueError(f"mass_kg must be positive, got {self.mass_kg}")
        if self.area_m2 < 0:
            raise ValueError(f"area_m2 must be non-negative, got {self.area_m2}")
        if self.cd < 0:
            raise ValueError(f"cd must be non-negative, got {self.cd}")

    @property
    def ballistic_coefficient(self) -> float:
        """Ballistic coefficient B_c = C_d * A / m (m²/kg)."""
        return self.cd * self.area_m2 / self.mass_kg


class AtmosphericDragForce:
    """Atmospheric drag acceleration with co-rotating atmosphere.

    a = -0.5 * rho * Cd * (A/m) * |v_rel| * v_rel
    where v_rel accounts for atmosphere co-rotation.
    """

    def __init__(
        self,
        config: DragConfig,
        atmosphere: Optional[ExponentialAtmosphere] = None,
    ) -> None:
        self._config = config
        self._atmosphere = atmosphere

    @property
    def config(self) -> DragConfig:
        return self._config

    def acceleration(
        self,
        epoch: EpochUTC,
        position: Vector3,
        velocity: Vector3,
    ) -> Vector3:
        r = np.asarray(position, dtype=float)
        altitude = float(np.linalg.norm(r)) - Earth.RADIUS_EQUATOR
        rho = atmospheric_density(altitude, self._atmosphere)

        v_rel = np.asarray(
            vec_sub(velocity, vec_cross(Earth.rotation(), position)), dtype=float,
        ) * 1000.0  # m/s
        v_mag = float(np.linalg.norm(v_rel))
        if v_mag == 0.0:
            return (0.0, 0.0, 0.0)

        a_mag = -0.5 * self._config.ballistic_coefficient * rho * v_mag * v_mag
        acc = v_rel / v_mag * a_mag / 1000.0  # km/s²
        return (float(acc[0]), float(acc[1]), float(acc[2]))
