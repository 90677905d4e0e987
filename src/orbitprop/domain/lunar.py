# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Analytical lunar ephemeris.

Truncated ecliptic longitude, latitude and horizontal parallax series from
the Astronomical Almanac (Vallado Algorithm 31). Accuracy ~0.3° in
direction and a few hundred km in range.
"""
import math
from typing import Optional

from orbitprop.domain.bodies import Earth
from orbitprop.domain.earth_orientation import EOPTable
from orbitprop.domain.linalg import Vector3
from orbitprop.domain.time_systems import EpochUTC

_DEG = math.pi / 180.0

# (amplitude deg, phase deg, rate deg/century)
_LONGITUDE_TERMS = (
    (6.29, 134.9, 477198.85),
    (-1.27, 259.2, -413335.38),
    (0.66, 235.7, 890534.23),
    (0.21, 269.9, 954397.7),
    (-0.19, 357.5, 35999.05),
    (-0.11, 186.6, 966404.05),
)

_LATITUDE_TERMS = (
    (5.13, 93.3, 483202.03),
    (0.28, 228.2, 960400.87),
    (-0.28, 318.3, 6003.18),
    (-0.17, 217.6, -407332.2),
)

_PARALLAX_TERMS = (
    (0.0518, 134.9, 477198.85),
    (0.0095, 259.2, -413335.38),
    (0.0078, 235.7, 890534.23),
    (0.0028, 269.9, 954397.7),
)


def moon_position(epoch: EpochUTC, eop: Optional[EOPTable] = None) -> Vector3:
    """Geocentric J2000 position of the Moon (km)."""
    jc = epoch.to_ut1(eop).julian_centuries()

    lam = 218.32 + 481267.883 * jc + sum(
        a * math.sin((p + r * jc) * _DEG) for a, p, r in _LONGITUDE_TERMS
    )
    phi = sum(a * math.sin((p + r * jc) * _DEG) for a, p, r in _LATITUDE_TERMS)
    parallax = 0.9508 + sum(
        a * math.cos((p + r * jc) * _DEG) for a, p, r in _PARALLAX_TERMS
    )
    obliquity = (23.439291 - 0.0130042 * jc) * _DEG

    lam *= _DEG
    phi *= _DEG
    r_km = Earth.RADIUS_EQUATOR / math.sin(parallax * _DEG)

    cos_e, sin_e = math.cos(obliquity), math.sin(obliquity)
    cos_phi, sin_phi = math.cos(phi), math.sin(phi)
    return (
        r_km * cos_phi * math.cos(lam),
        r_km * (cos_e * cos_phi * math.sin(lam) - sin_e * sin_phi),
        r_km * (sin_e * cos_phi * math.sin(lam) + cos_e * sin_phi),
    )
