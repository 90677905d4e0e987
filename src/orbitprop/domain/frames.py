# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""FK5 reduction chain between inertial and Earth-fixed frames.

    J2000 ──precession──▶ MOD ──nutation──▶ TOD ──sidereal──▶ PEF ──polar──▶ ITRF

Each step is a sequence of elementary frame rotations applied in a fixed
order; the inverse applies the negated angles in reverse order. Rotations
do not commute, so the order below is part of the contract.

TEME (true equator, mean equinox) has its own nutation-only path from the
mean-of-date frame and does not go through the sidereal or polar motion
steps.

All functions take and return ``(position, velocity)`` tuples in km and
km/s. Only the TOD ⇄ PEF step alters velocity beyond rotation, adding or
removing the ``ω⊕ × r`` transport term.

References:
    Vallado, Fundamentals of Astrodynamics and Applications, §3.7.
"""
import math
from typing import Optional

from orbitprop.domain.bodies import Earth
from orbitprop.domain.earth_orientation import EOPTable, resolve_eop
from orbitprop.domain.linalg import (
    Vector3,
    rot1,
    rot2,
    rot3,
    vec_add,
    vec_cross,
    vec_sub,
)
from orbitprop.domain.precession_nutation import (
    NutationAngles,
    NutationSeries,
    PrecessionAngles,
    apparent_sidereal_angle,
    nutation_angles,
    precession_angles,
)
from orbitprop.domain.time_systems import EpochUTC

StatePair = tuple[Vector3, Vector3]


# --------------------------------------------------------------------------- #
# Precession: J2000 ⇄ mean of date
# --------------------------------------------------------------------------- #


def _precess(v: Vector3, p: PrecessionAngles) -> Vector3:
    return rot3(rot2(rot3(v, -p.zeta), p.theta), -p.zed)


def _unprecess(v: Vector3, p: PrecessionAngles) -> Vector3:
    return rot3(rot2(rot3(v, p.zed), -p.theta), p.zeta)


def j2000_to_mod(
    epoch: EpochUTC,
    position: Vector3,
    velocity: Vector3,
    precession: Optional[PrecessionAngles] = None,
) -> StatePair:
    p = precession if precession is not None else precession_angles(epoch)
    return _precess(position, p), _precess(velocity, p)


def mod_to_j2000(
    epoch: EpochUTC,
    position: Vector3,
    velocity: Vector3,
    precession: Optional[PrecessionAngles] = None,
) -> StatePair:
    p = precession if precession is not None else precession_angles(epoch)
    return _unprecess(position, p), _unprecess(velocity, p)


# --------------------------------------------------------------------------- #
# Nutation: mean of date ⇄ true of date
# --------------------------------------------------------------------------- #


def _nutate(v: Vector3, n: NutationAngles) -> Vector3:
    return rot1(rot3(rot1(v, n.mean_eps), -n.d_psi), -n.true_eps)


def _unnutate(v: Vector3, n: NutationAngles) -> Vector3:
    return rot1(rot3(rot1(v, n.true_eps), n.d_psi), -n.mean_eps)


def mod_to_tod(
    epoch: EpochUTC,
    position: Vector3,
    velocity: Vector3,
    nutation: Optional[NutationAngles] = None,
) -> StatePair:
    n = nutation if nutation is not None else nutation_angles(epoch)
    return _nutate(position, n), _nutate(velocity, n)


def tod_to_mod(
    epoch: EpochUTC,
    position: Vector3,
    velocity: Vector3,
    nutation: Optional[NutationAngles] = None,
) -> StatePair:
    n = nutation if nutation is not None else nutation_angles(epoch)
    return _unnutate(position, n), _unnutate(velocity, n)


# --------------------------------------------------------------------------- #
# Sidereal rotation: true of date ⇄ pseudo Earth fixed
# --------------------------------------------------------------------------- #


def tod_to_pef(
    epoch: EpochUTC,
    position: Vector3,
    velocity: Vector3,
    nutation: Optional[NutationAngles] = None,
    eop: Optional[EOPTable] = None,
) -> StatePair:
    """Rotate by the apparent sidereal angle and remove Earth's rotation."""
    table = resolve_eop(eop)
    ast = apparent_sidereal_angle(epoch, nutation, table)
    omega = Earth.rotation(table.lookup(epoch.modified_julian_date()).lod)
    r_pef = rot3(position, ast)
    v_pef = vec_sub(rot3(velocity, ast), vec_cross(omega, r_pef))
    return r_pef, v_pef


def pef_to_tod(
    epoch: EpochUTC,
    position: Vector3,
    velocity: Vector3,
    nutation: Optional[NutationAngles] = None,
    eop: Optional[EOPTable] = None,
) -> StatePair:
    table = resolve_eop(eop)
    ast = apparent_sidereal_angle(epoch, nutation, table)
    omega = Earth.rotation(table.lookup(epoch.modified_julian_date()).lod)
    r_tod = rot3(position, -ast)
    v_tod = rot3(vec_add(velocity, vec_cross(omega, position)), -ast)
    return r_tod, v_tod


# --------------------------------------------------------------------------- #
# Polar motion: pseudo Earth fixed ⇄ ITRF
# --------------------------------------------------------------------------- #


def pef_to_itrf(
    epoch: EpochUTC,
    position: Vector3,
    velocity: Vector3,
    eop: Optional[EOPTable] = None,
) -> StatePair:
    entry = resolve_eop(eop).lookup(epoch.modified_julian_date())
    return (
        rot2(rot1(position, -entry.pm_y), -entry.pm_x),
        rot2(rot1(velocity, -entry.pm_y), -entry.pm_x),
    )


def itrf_to_pef(
    epoch: EpochUTC,
    position: Vector3,
    velocity: Vector3,
    eop: Optional[EOPTable] = None,
) -> StatePair:
    entry = resolve_eop(eop).lookup(epoch.modified_julian_date())
    return (
        rot1(rot2(position, entry.pm_x), entry.pm_y),
        rot1(rot2(velocity, entry.pm_x), entry.pm_y),
    )


# --------------------------------------------------------------------------- #
# Composite chains
# --------------------------------------------------------------------------- #


def j2000_to_itrf(
    epoch: EpochUTC,
    position: Vector3,
    velocity: Vector3,
    eop: Optional[EOPTable] = None,
    series: Optional[NutationSeries] = None,
) -> StatePair:
    """J2000 inertial → ITRF Earth-fixed through the full FK5 chain."""
    table = resolve_eop(eop)
    nut = nutation_angles(epoch, series)
    r, v = j2000_to_mod(epoch, position, velocity)
    r, v = mod_to_tod(epoch, r, v, nut)
    r, v = tod_to_pef(epoch, r, v, nut, table)
    return pef_to_itrf(epoch, r, v, table)


def itrf_to_j2000(
    epoch: EpochUTC,
    position: Vector3,
    velocity: Vector3,
    eop: Optional[EOPTable] = None,
    series: Optional[NutationSeries] = None,
) -> StatePair:
    """ITRF Earth-fixed → J2000 inertial, exact inverse of ``j2000_to_itrf``."""
    table = resolve_eop(eop)
    nut = nutation_angles(epoch, series)
    r, v = itrf_to_pef(epoch, position, velocity, table)
    r, v = pef_to_tod(epoch, r, v, nut, table)
    r, v = tod_to_mod(epoch, r, v, nut)
    return mod_to_j2000(epoch, r, v)


def j2000_to_teme(
    epoch: EpochUTC,
    position: Vector3,
    velocity: Vector3,
    series: Optional[NutationSeries] = None,
) -> StatePair:
    """J2000 → TEME: precession, nutation, then back out the equation of equinoxes."""
    p = precession_angles(epoch)
    n = nutation_angles(epoch, series)
    eq_eq = n.d_psi * math.cos(n.true_eps)

    def forward(v: Vector3) -> Vector3:
        mod = rot3(rot2(rot3(v, -p.zeta), p.theta), -p.zed)
        tod = rot1(rot3(rot1(mod, n.mean_eps), -n.d_psi), -n.true_eps)
        return rot3(tod, eq_eq)

    return forward(position), forward(velocity)


def teme_to_j2000(
    epoch: EpochUTC,
    position: Vector3,
    velocity: Vector3,
    series: Optional[NutationSeries] = None,
) -> StatePair:
    p = precession_angles(epoch)
    n = nutation_angles(epoch, series)
    eq_eq = n.d_psi * math.cos(n.true_eps)

    def backward(v: Vector3) -> Vector3:
        tod = rot3(v, -eq_eq)
        mod = rot1(rot3(rot1(tod, n.true_eps), n.d_psi), -n.mean_eps)
        return rot3(rot2(rot3(mod, p.zed), -p.theta), p.zeta)

    return backward(position), backward(velocity)