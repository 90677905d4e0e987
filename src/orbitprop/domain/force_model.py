# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Composable force model.

A ``ForceModel`` holds named acceleration contributors in insertion
order. The total acceleration is their vector sum, always accumulated in
that order so repeated runs give identical floating-point results.

Gravity occupies a single slot: every gravity setter replaces whatever
gravity model was there before.
"""
import logging
from typing import Optional, Protocol, runtime_checkable

from orbitprop.domain.drag import AtmosphericDragForce, DragConfig
from orbitprop.domain.earth_orientation import EOPTable
from orbitprop.domain.gravity import (
    GravityCoefficients,
    SphericalHarmonicGravity,
    TwoBodyGravity,
    ZonalHarmonicGravity,
)
from orbitprop.domain.linalg import Vector3, Vector6
from orbitprop.domain.radiation_pressure import SRPConfig, SolarRadiationPressureForce
from orbitprop.domain.third_body import LunarThirdBodyForce, SolarThirdBodyForce
from orbitprop.domain.time_systems import EpochUTC

logger = logging.getLogger(__name__)

GRAVITY = "gravity"
MOON = "moon_gravity"
SUN = "sun_gravity"
DRAG = "atmospheric_drag"
SRP = "solar_radiation_pressure"


@runtime_checkable
class ForceContributor(Protocol):
    """Structural typing port for pluggable force contributors."""

    def acceleration(
        self,
        epoch: EpochUTC,
        position: Vector3,
        velocity: Vector3,
    ) -> Vector3: ...


class ForceModel:
    """Ordered, named collection of force contributors.

    An empty model produces zero acceleration; ``with_two_body()`` is the
    usual starting point.
    """

    def __init__(self, eop: Optional[EOPTable] = None) -> None:
        self._contributors: dict[str, ForceContributor] = {}
        self._eop = eop

    @classmethod
    def with_two_body(cls, eop: Optional[EOPTable] = None) -> "ForceModel":
        model = cls(eop)
        model.set_earth_gravity(0, 0)
        return model

    def __len__(self) -> int:
        return len(self._contributors)

    def __contains__(self, name: object) -> bool:
        return name in self._contributors

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._contributors)

    def get(self, name: str) -> Optional[ForceContributor]:
        return self._contributors.get(name)

    # --- Builders ---

    def add(self, name: str, contributor: ForceContributor) -> "ForceModel":
        """Add or replace a named contributor.

        A replaced contributor keeps its original position in the order.
        """
        if not isinstance(contributor, ForceContributor):
            raise ValueError(
                f"{type(contributor).__name__} has no acceleration(epoch, position, velocity)"
            )
        self._contributors[name] = contributor
        logger.debug("Force model: %s -> %s", name, type(contributor).__name__)
        return self

    def remove(self, name: str) -> "ForceModel":
        self._contributors.pop(name, None)
        return self

    def clear(self) -> "ForceModel":
        self._contributors.clear()
        return self

    def set_earth_gravity(
        self,
        degree: int,
        order: int,
        coefficients: Optional[GravityCoefficients] = None,
    ) -> "ForceModel":
        """Point mass for degree < 2, spherical harmonics otherwise.

        ``coefficients`` replaces the bundled degree-8 table, e.g. with a
        model read by ``load_icgem_coefficients``.
        """
        if degree < 2:
            return self.add(GRAVITY, TwoBodyGravity())
        return self.add(
            GRAVITY,
            SphericalHarmonicGravity(
                degree, min(order, degree), coefficients=coefficients, eop=self._eop,
            ),
        )

    def set_zonal_gravity(
        self, j2: bool = True, j3: bool = True, j4: bool = True,
    ) -> "ForceModel":
        return self.add(GRAVITY, ZonalHarmonicGravity(j2=j2, j3=j3, j4=j4))

    def set_third_body(self, moon: bool = True, sun: bool = True) -> "ForceModel":
        if moon:
            self.add(MOON, LunarThirdBodyForce(self._eop))
        else:
            self.remove(MOON)
        if sun:
            self.add(SUN, SolarThirdBodyForce(self._eop))
        else:
            self.remove(SUN)
        return self

    def set_atmospheric_drag(
        self, mass_kg: float, area_m2: float, cd: float = 2.2,
    ) -> "ForceModel":
        config = DragConfig(cd=cd, area_m2=area_m2, mass_kg=mass_kg)
        return self.add(DRAG, AtmosphericDragForce(config))

    def set_solar_radiation_pressure(
        self, mass_kg: float, area_m2: float, cr: float = 1.2,
    ) -> "ForceModel":
        config = SRPConfig(cr=cr, area_m2=area_m2, mass_kg=mass_kg)
        return self.add(SRP, SolarRadiationPressureForce(config, self._eop))

    # --- Evaluation ---

    def accelerations(
        self,
        epoch: EpochUTC,
        position: Vector3,
        velocity: Vector3,
    ) -> dict[str, Vector3]:
        """Per-contributor accelerations (km/s²), in model order."""
        return {
            name: contributor.acceleration(epoch, position, velocity)
            for name, contributor in self._contributors.items()
        }

    def acceleration(
        self,
        epoch: EpochUTC,
        position: Vector3,
        velocity: Vector3,
    ) -> Vector3:
        ax_total, ay_total, az_total = 0.0, 0.0, 0.0
        for contributor in self._contributors.values():
            ax, ay, az = contributor.acceleration(epoch, position, velocity)
            ax_total += ax
            ay_total += ay
            az_total += az
        return (ax_total, ay_total, az_total)

    def derivative(self, epoch: EpochUTC, state: Vector6) -> Vector6:
        """d/dt of (x, y, z, vx, vy, vz)."""
        p = (state[0], state[1], state[2])
        v = (state[3], state[4], state[5])
        ax, ay, az = self.acceleration(epoch, p, v)
        return (v[0], v[1], v[2], ax, ay, az)
