# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Third-body gravitational perturbations from the Sun and Moon.

Direct minus indirect term, using the low-precision analytic ephemerides
in ``solar`` and ``lunar``.

References:
    Montenbruck & Gill, Satellite Orbits, §3.3.
"""
from typing import Optional

import numpy as np

from orbitprop.domain.bodies import Moon, Sun
from orbitprop.domain.earth_orientation import EOPTable
from orbitprop.domain.linalg import Vector3
from orbitprop.domain.lunar import moon_position
from orbitprop.domain.solar import sun_position
from orbitprop.domain.time_systems import EpochUTC


def third_body_acceleration(
    mu_body: float,
    r_body: Vector3,
    r_sat: Vector3,
) -> Vector3:
    """Third-body tidal acceleration.

    a = μ · (d/|d|³ − r_body/|r_body|³)
    where d = r_body − r_sat

    Args:
        mu_body: Gravitational parameter of perturbing body (km³/s²).
        r_body: Geocentric position of perturbing body (km).
        r_sat: Geocentric position of satellite (km).

    Returns:
        Acceleration vector (km/s²).
    """
    rb = np.array(r_body, dtype=np.float64)
    rs = np.array(r_sat, dtype=np.float64)
    d_vec = rb - rs

    d_mag = float(np.linalg.norm(d_vec))
    rb_mag = float(np.linalg.norm(rb))

    a_vec = mu_body * (d_vec / d_mag ** 3 - rb / rb_mag ** 3)
    return (float(a_vec[0]), float(a_vec[1]), float(a_vec[2]))


class SolarThirdBodyForce:
    """Solar third-body gravitational perturbation."""

    def __init__(self, eop: Optional[EOPTable] = None) -> None:
        self._eop = eop

    def acceleration(
        self,
        epoch: EpochUTC,
        position: Vector3,
        velocity: Vector3,
    ) -> Vector3:
        return third_body_acceleration(Sun.MU, sun_position(epoch, self._eop), position)


class LunarThirdBodyForce:
    """Lunar third-body gravitational perturbation."""

    def __init__(self, eop: Optional[EOPTable] = None) -> None:
        self._eop = eop

    def acceleration(
        self,
        epoch: EpochUTC,
        position: Vector3,
        velocity: Vector3,
    ) -> Vector3:
        return third_body_acceleration(Moon.MU, moon_position(epoch, self._eop), position)
