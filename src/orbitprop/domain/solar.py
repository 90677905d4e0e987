# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Analytical solar ephemeris and Earth shadow test.

Low-precision Sun position from the Astronomical Almanac series as given in
Vallado Algorithm 29. Accuracy ~0.01°, sufficient for third-body gravity
and radiation pressure. Output is the geocentric J2000 position in km.
"""
import math
from typing import Optional, Sequence

import numpy as np

from orbitprop.domain.bodies import ASTRONOMICAL_UNIT, Earth, Sun
from orbitprop.domain.earth_orientation import EOPTable
from orbitprop.domain.linalg import Vector3, vec_angle, vec_dot, vec_negate, vec_norm
from orbitprop.domain.time_systems import EpochUTC


def sun_position(epoch: EpochUTC, eop: Optional[EOPTable] = None) -> Vector3:
    """Geocentric J2000 position of the Sun (km).

    Args:
        epoch: UTC epoch; the series is evaluated in UT1 Julian centuries.
        eop: Optional EOP table for UT1-UTC.

    Returns:
        (x, y, z) in km.
    """
    jc = epoch.to_ut1(eop).julian_centuries()

    lam_sun = 280.46 + 36000.77 * jc
    m_sun = float(np.radians(357.5277233 + 35999.05034 * jc))
    lam_ecl = float(np.radians(
        lam_sun
        + 1.914666471 * math.sin(m_sun)
        + 0.019994643 * math.sin(2.0 * m_sun)
    ))
    obliquity = float(np.radians(23.439291 - 0.0130042 * jc))
    r_au = (
        1.000140612
        - 0.016708617 * math.cos(m_sun)
        - 0.000139589 * math.cos(2.0 * m_sun)
    )

    r_km = r_au * ASTRONOMICAL_UNIT
    return (
        r_km * math.cos(lam_ecl),
        r_km * math.cos(obliquity) * math.sin(lam_ecl),
        r_km * math.sin(obliquity) * math.sin(lam_ecl),
    )


def in_shadow(
    position: Sequence[float],
    sun: Sequence[float],
) -> bool:
    """Binary cylindrical-cone shadow test (Vallado Algorithm 34).

    The satellite is shadowed only when it is on the night side of the
    Earth and its distance from the anti-solar axis is within the penumbra
    cone radius at its along-axis distance. No partial illumination.
    """
    if vec_dot(sun, position) >= 0.0:
        return False
    anti_sun = vec_negate(sun)
    angle = vec_angle(anti_sun, position)
    r = vec_norm(position)
    sat_horiz = r * math.cos(angle)
    sat_vert = r * math.sin(angle)
    pen_vert = Earth.RADIUS_EQUATOR + math.tan(Sun.PENUMBRA_ANGLE) * sat_horiz
    return sat_vert <= pen_vert


def sun_shadow(
    epoch: EpochUTC,
    position: Sequence[float],
    eop: Optional[EOPTable] = None,
) -> bool:
    """Whether a J2000 position is in Earth's shadow at ``epoch``."""
    return in_shadow(position, sun_position(epoch, eop))
