# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Physical constants for the Earth, Sun and Moon (km, s, rad)."""
import math
from dataclasses import dataclass, field

SPEED_OF_LIGHT: float = 299792.458  # km/s
ASTRONOMICAL_UNIT: float = 149597870.0  # km


@dataclass(frozen=True)
class _EarthBody:
    """WGS-84 ellipsoid, EGM-96 gravity and IERS rotation constants."""
    MU: float = 398600.4418                  # km³/s²
    RADIUS_EQUATOR: float = 6378.137         # km
    FLATTENING: float = 1.0 / 298.257223563
    ROTATION_RATE: float = 7.2921158553e-5   # rad/s
    J2: float = 0.001082627
    J3: float = -0.000002532
    J4: float = -0.00000162
    RADIUS_POLAR: float = field(init=False)
    RADIUS_MEAN: float = field(init=False)
    ECCENTRICITY_SQUARED: float = field(init=False)

    def __post_init__(self) -> None:
        polar = self.RADIUS_EQUATOR * (1.0 - self.FLATTENING)
        object.__setattr__(self, "RADIUS_POLAR", polar)
        object.__setattr__(self, "RADIUS_MEAN", (2.0 * self.RADIUS_EQUATOR + polar) / 3.0)
        object.__setattr__(
            self, "ECCENTRICITY_SQUARED", self.FLATTENING * (2.0 - self.FLATTENING),
        )

    def rotation(self, lod: float = 0.0) -> tuple[float, float, float]:
        """Earth angular velocity vector, optionally reduced by excess LOD (s)."""
        return (0.0, 0.0, self.ROTATION_RATE * (1.0 - lod / 86400.0))

    def mean_motion(self, semimajor_axis: float) -> float:
        """Two-body mean motion (rad/s) for a semimajor axis in km."""
        return math.sqrt(self.MU / semimajor_axis ** 3)


@dataclass(frozen=True)
class _SunBody:
    MU: float = 132712440017.987             # km³/s²
    SOLAR_FLUX: float = 1353.0               # W/m²
    SOLAR_PRESSURE: float = 1353.0 / (SPEED_OF_LIGHT * 1000.0)  # N/m²
    UMBRA_ANGLE: float = math.radians(0.26411888)
    PENUMBRA_ANGLE: float = math.radians(0.26900424)


@dataclass(frozen=True)
class _MoonBody:
    MU: float = 4902.801                     # km³/s²


Earth: _EarthBody = _EarthBody()
Sun: _SunBody = _SunBody()
Moon: _MoonBody = _MoonBody()
