# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Solar radiation pressure with a binary Earth shadow.

Cannonball model: a = P☉ Cr A/m (AU/d)² along the Sun→satellite
direction, zero when the satellite is in the Earth's shadow. Penumbra is
not graded.
"""
from dataclasses import dataclass
from typing import Optional

import numpy as np

from orbitprop.domain.bodies import ASTRONOMICAL_UNIT, Sun
from orbitprop.domain.earth_orientation import EOPTable
from orbitprop.domain.linalg import Vector3
from orbitprop.domain.solar import in_shadow, sun_position
from orbitprop.domain.time_systems import EpochUTC


@dataclass(frozen=True)
class SRPConfig:
    """Radiation pressure configuration.

    cr: reflectivity coefficient (1.0 absorbing, 2.0 specular)
    area_m2: Sun-facing area (m²)
    mass_kg: satellite mass (kg)
    """
    cr: float
    area_m2: float
    mass_kg: float

    def __post_init__(self) -> None:
        if self.mass_kg <= 0:
            raise ValueError(f"mass_kg must be positive, got {self.mass_kg}")
        if self.area_m2 < 0:
            raise ValueError(f"area_m2 must be non-negative, got {self.area_m2}")
        if self.cr < 0:
            raise ValueError(f"cr must be non-negative, got {self.cr}")

    @property
    def area_to_mass(self) -> float:
        """A/m (m²/kg)."""
        return self.area_m2 / self.mass_kg


class SolarRadiationPressureForce:
    """Solar radiation pressure (cannonball model, binary shadow)."""

    def __init__(self, config: SRPConfig, eop: Optional[EOPTable] = None) -> None:
        self._config = config
        self._eop = eop

    @property
    def config(self) -> SRPConfig:
        return self._config

    def acceleration(
        self,
        epoch: EpochUTC,
        position: Vector3,
        velocity: Vector3,
    ) -> Vector3:
        sun = sun_position(epoch, self._eop)
        if in_shadow(position, sun):
            return (0.0, 0.0, 0.0)

        # Sun → satellite
        d = np.asarray(position, dtype=float) - np.asarray(sun, dtype=float)
        dist = float(np.linalg.norm(d))
        scale = (ASTRONOMICAL_UNIT / dist) ** 2
        # N/m² · m²/kg = m/s², then km/s²
        a_mag = Sun.SOLAR_PRESSURE * self._config.cr * self._config.area_to_mass * scale / 1000.0
        acc = d / dist * a_mag
        return (float(acc[0]), float(acc[1]), float(acc[2]))
