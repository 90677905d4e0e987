# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Earth gravity models.

Three interchangeable models, each returning the total Earth gravity
acceleration including the central term:

- ``TwoBodyGravity``: point mass, a = -μ r / |r|³.
- ``ZonalHarmonicGravity``: point mass plus closed-form J2, J3, J4.
- ``SphericalHarmonicGravity``: point mass plus the full tesseral
  expansion to a chosen degree and order, evaluated in the Earth-fixed
  frame and rotated back to J2000.

The spherical harmonic model uses unnormalized associated Legendre
functions (no Condon-Shortley phase) with denormalized coefficients, as
in Vallado §8.6.1. The Legendre table is rebuilt on every evaluation.
The bundled table stops at degree 8; higher-degree models can be read
from ICGEM .gfc files with ``load_icgem_coefficients``.

References:
    Vallado, Fundamentals of Astrodynamics and Applications, §8.6.
    Montenbruck & Gill, Satellite Orbits, §3.2.
"""
import json
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import numpy as np

from orbitprop.domain.bodies import Earth
from orbitprop.domain.earth_orientation import EOPTable, resolve_eop
from orbitprop.domain.frames import (
    itrf_to_pef,
    j2000_to_mod,
    mod_to_j2000,
    mod_to_tod,
    pef_to_itrf,
    pef_to_tod,
    tod_to_mod,
    tod_to_pef,
)
from orbitprop.domain.linalg import ZERO, Vector3, factorial
from orbitprop.domain.precession_nutation import nutation_angles, precession_angles
from orbitprop.domain.time_systems import EpochUTC

logger = logging.getLogger(__name__)


# --------------------------------------------------------------------------- #
# Coefficient table
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, eq=False)
class GravityCoefficients:
    """Denormalized geopotential coefficients indexed ``[degree, order]``."""

    max_degree: int
    c: np.ndarray
    s: np.ndarray

    def coefficient(self, degree: int, order: int) -> tuple[float, float]:
        """Return (C_lm, S_lm); zero for unknown entries."""
        if degree > self.max_degree or order > degree:
            return (0.0, 0.0)
        return (float(self.c[degree, order]), float(self.s[degree, order]))


_CACHED_COEFFICIENTS: Optional[GravityCoefficients] = None


def load_gravity_coefficients(path: Optional[str] = None) -> GravityCoefficients:
    """Load geopotential coefficients from bundled JSON or a custom path."""
    global _CACHED_COEFFICIENTS

    if path is None and _CACHED_COEFFICIENTS is not None:
        return _CACHED_COEFFICIENTS

    data_path = (
        Path(__file__).parent.parent / "data" / "gravity_coefficients.json"
        if path is None else Path(path)
    )
    with open(data_path) as f:
        data = json.load(f)

    try:
        entries = data["entries"]
        max_degree = int(data.get("max_degree", max(int(e["degree"]) for e in entries)))
        c = np.zeros((max_degree + 1, max_degree + 1))
        s = np.zeros((max_degree + 1, max_degree + 1))
        for e in entries:
            n, m = int(e["degree"]), int(e["order"])
            if n <= max_degree and m <= n:
                c[n, m] = float(e["c"])
                s[n, m] = float(e["s"])
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Malformed gravity coefficient table {data_path}: {exc}") from exc

    table = GravityCoefficients(max_degree=max_degree, c=c, s=s)
    logger.info("Loaded degree-%d gravity coefficients from %s", max_degree, data_path)

    if path is None:
        _CACHED_COEFFICIENTS = table
    return table


def _icgem_float(token: str) -> float:
    return float(token.replace("D", "E").replace("d", "e"))


def normalization_factor(degree: int, order: int) -> float:
    """N_lm such that the unnormalized C_lm = N_lm * normalized C_lm."""
    delta = 1.0 if order == 0 else 0.0
    return math.sqrt(
        (2.0 - delta) * (2 * degree + 1)
        * factorial(degree - order) / factorial(degree + order)
    )


def load_icgem_coefficients(
    path: str, max_degree: Optional[int] = None,
) -> GravityCoefficients:
    """Read a fully normalized ICGEM ``.gfc`` model into a denormalized table.

    Only ``gfc`` rows are used; time-variable terms are ignored. When
    ``max_degree`` is given, rows above it are skipped. The header's
    gravity constant and radius are logged but not applied: the
    expansion always uses ``Earth.MU`` and ``Earth.RADIUS_EQUATOR``.
    """
    data_path = Path(path)
    rows: list[tuple[int, int, float, float]] = []
    header: dict[str, float] = {}
    with open(data_path) as f:
        for line in f:
            parts = line.split()
            if not parts:
                continue
            if parts[0] == "end_of_head":
                break
            if parts[0] in ("earth_gravity_constant", "radius") and len(parts) > 1:
                header[parts[0]] = _icgem_float(parts[1])
        for line in f:
            parts = line.split()
            if len(parts) < 5 or parts[0] != "gfc":
                continue
            try:
                n, m = int(parts[1]), int(parts[2])
                c_bar, s_bar = _icgem_float(parts[3]), _icgem_float(parts[4])
            except ValueError as exc:
                raise ValueError(f"Malformed ICGEM row in {data_path}: {line.strip()}") from exc
            if max_degree is not None and n > max_degree:
                continue
            rows.append((n, m, c_bar, s_bar))

    if not rows:
        raise ValueError(f"No gfc coefficients found in {data_path}")

    top = max(n for n, _, _, _ in rows) if max_degree is None else max_degree
    c = np.zeros((top + 1, top + 1))
    s = np.zeros((top + 1, top + 1))
    for n, m, c_bar, s_bar in rows:
        if m > n:
            continue
        factor = normalization_factor(n, m)
        c[n, m] = factor * c_bar
        s[n, m] = factor * s_bar

    logger.info(
        "Loaded degree-%d ICGEM coefficients from %s (GM=%s, R=%s)",
        top, data_path, header.get("earth_gravity_constant"), header.get("radius"),
    )
    return GravityCoefficients(max_degree=top, c=c, s=s)


# --------------------------------------------------------------------------- #
# Point mass and zonal models
# --------------------------------------------------------------------------- #


class TwoBodyGravity:
    """Central body gravitational acceleration: a = -mu * r / |r|^3."""

    def __init__(self, mu: float = Earth.MU) -> None:
        self._mu = mu

    def acceleration(
        self,
        epoch: EpochUTC,
        position: Vector3,
        velocity: Vector3,
    ) -> Vector3:
        pos = np.array(position, dtype=float)
        r = float(np.linalg.norm(pos))
        a = -self._mu / (r * r * r) * pos
        return (float(a[0]), float(a[1]), float(a[2]))


def j2_acceleration(position: Vector3) -> Vector3:
    x, y, z = position
    r2 = x * x + y * y + z * z
    r = math.sqrt(r2)
    re = Earth.RADIUS_EQUATOR
    pre = -3.0 * Earth.J2 * Earth.MU * re * re / (2.0 * r2 * r2 * r)
    z2_r2 = z * z / r2
    return (
        pre * x * (1.0 - 5.0 * z2_r2),
        pre * y * (1.0 - 5.0 * z2_r2),
        pre * z * (3.0 - 5.0 * z2_r2),
    )


def j3_acceleration(position: Vector3) -> Vector3:
    x, y, z = position
    r2 = x * x + y * y + z * z
    r = math.sqrt(r2)
    re = Earth.RADIUS_EQUATOR
    pre = -5.0 * Earth.J3 * Earth.MU * re ** 3 / (2.0 * r ** 7)
    xy_term = 3.0 * z - 7.0 * z ** 3 / r2
    return (
        pre * x * xy_term,
        pre * y * xy_term,
        pre * (6.0 * z * z - 7.0 * z ** 4 / r2 - 0.6 * r2),
    )


def j4_acceleration(position: Vector3) -> Vector3:
    x, y, z = position
    r2 = x * x + y * y + z * z
    r = math.sqrt(r2)
    re = Earth.RADIUS_EQUATOR
    pre = 15.0 * Earth.J4 * Earth.MU * re ** 4 / (8.0 * r ** 7)
    z2_r2 = z * z / r2
    z4_r4 = z2_r2 * z2_r2
    xy_term = 1.0 - 14.0 * z2_r2 + 21.0 * z4_r4
    return (
        pre * x * xy_term,
        pre * y * xy_term,
        pre * z * (5.0 - 70.0 / 3.0 * z2_r2 + 21.0 * z4_r4),
    )


class ZonalHarmonicGravity:
    """Point mass plus closed-form J2/J3/J4 zonal terms.

    Zonal terms are axisymmetric, so they are evaluated directly on the
    J2000 position without an Earth-fixed rotation.
    """

    def __init__(self, j2: bool = True, j3: bool = True, j4: bool = True) -> None:
        self._central = TwoBodyGravity()
        self._terms = tuple(
            fn for flag, fn in (
                (j2, j2_acceleration),
                (j3, j3_acceleration),
                (j4, j4_acceleration),
            ) if flag
        )

    def acceleration(
        self,
        epoch: EpochUTC,
        position: Vector3,
        velocity: Vector3,
    ) -> Vector3:
        ax, ay, az = self._central.acceleration(epoch, position, velocity)
        for term in self._terms:
            dx, dy, dz = term(position)
            ax += dx
            ay += dy
            az += dz
        return (ax, ay, az)


# --------------------------------------------------------------------------- #
# Spherical harmonics
# --------------------------------------------------------------------------- #


def legendre_table(degree: int, phi: float) -> np.ndarray:
    """Unnormalized associated Legendre functions P[l, m] of sin(phi).

    The table has one spare column so ``P[l, l + 1]`` reads as zero.
    """
    p = np.zeros((degree + 1, degree + 2))
    s_phi = math.sin(phi)
    c_phi = math.cos(phi)
    p[0, 0] = 1.0
    if degree >= 1:
        p[1, 0] = s_phi
        p[1, 1] = c_phi
    for l in range(2, degree + 1):
        p[l, 0] = ((2 * l - 1) * s_phi * p[l - 1, 0] - (l - 1) * p[l - 2, 0]) / l
        for m in range(1, l):
            p[l, m] = p[l - 2, m] + (2 * l - 1) * c_phi * p[l - 1, m - 1]
        p[l, l] = (2 * l - 1) * c_phi * p[l - 1, l - 1]
    return p


class SphericalHarmonicGravity:
    """Point mass plus spherical harmonic geopotential to (degree, order).

    The aspherical gradient is computed from the geocentric latitude and
    longitude of the ITRF position, converted to an Earth-fixed Cartesian
    acceleration, and rotated back to J2000 with the same FK5 chain used
    for state conversion.
    """

    def __init__(
        self,
        degree: int,
        order: int,
        coefficients: Optional[GravityCoefficients] = None,
        eop: Optional[EOPTable] = None,
    ) -> None:
        table = coefficients if coefficients is not None else load_gravity_coefficients()
        if degree < 2 or degree > table.max_degree:
            raise ValueError(
                f"degree must be 2-{table.max_degree}, got {degree}"
            )
        if order < 0 or order > degree:
            raise ValueError(f"order must be 0-{degree}, got {order}")
        self._degree = degree
        self._order = order
        self._coefficients = table
        self._eop = eop
        self._central = TwoBodyGravity()

    @property
    def degree(self) -> int:
        return self._degree

    @property
    def order(self) -> int:
        return self._order

    def _gradient(self, phi: float, lam: float, r: float) -> tuple[float, float, float]:
        """Partial derivatives of the disturbing potential (∂U/∂r, ∂U/∂φ, ∂U/∂λ)."""
        p = legendre_table(self._degree, phi)
        c, s = self._coefficients.c, self._coefficients.s
        tan_phi = math.tan(phi)
        ratio = Earth.RADIUS_EQUATOR / r

        sum_r = sum_phi = sum_lam = 0.0
        for l in range(2, self._degree + 1):
            scale = ratio ** l
            for m in range(0, min(l, self._order) + 1):
                sm, cm = math.sin(m * lam), math.cos(m * lam)
                clm, slm = c[l, m], s[l, m]
                b = clm * cm + slm * sm
                sum_r += scale * (l + 1) * p[l, m] * b
                sum_phi += scale * (p[l, m + 1] - m * tan_phi * p[l, m]) * b
                sum_lam += scale * m * p[l, m] * (slm * cm - clm * sm)

        return (
            -(Earth.MU / (r * r)) * sum_r,
            (Earth.MU / r) * sum_phi,
            (Earth.MU / r) * sum_lam,
        )

    def aspherical_acceleration(self, epoch: EpochUTC, position: Vector3) -> Vector3:
        """Non-central part of the geopotential acceleration in J2000 (km/s²)."""
        table = resolve_eop(self._eop)
        prec = precession_angles(epoch)
        nut = nutation_angles(epoch)

        r_mod, _ = j2000_to_mod(epoch, position, ZERO, prec)
        r_tod, _ = mod_to_tod(epoch, r_mod, ZERO, nut)
        r_pef, _ = tod_to_pef(epoch, r_tod, ZERO, nut, table)
        (ri, rj, rk), _ = pef_to_itrf(epoch, r_pef, ZERO, table)

        rho2 = ri * ri + rj * rj
        rho = math.sqrt(rho2)
        r2 = rho2 + rk * rk
        r = math.sqrt(r2)
        phi = math.atan2(rk, rho)
        lam = math.atan2(rj, ri)

        d_r, d_phi, d_lam = self._gradient(phi, lam, r)
        if rho == 0.0:
            p1, p2 = d_r / r, 0.0
        else:
            p1 = d_r / r - rk / (r2 * rho) * d_phi
            p2 = d_lam / rho2
        acc_itrf = (
            p1 * ri - p2 * rj,
            p1 * rj + p2 * ri,
            d_r * rk / r + rho / r2 * d_phi,
        )

        # Zero velocity in, so only the rotation applies to the acceleration.
        a_pef, _ = itrf_to_pef(epoch, acc_itrf, ZERO, table)
        a_tod, _ = pef_to_tod(epoch, a_pef, ZERO, nut, table)
        a_mod, _ = tod_to_mod(epoch, a_tod, ZERO, nut)
        a_j2k, _ = mod_to_j2000(epoch, a_mod, ZERO, prec)
        return a_j2k

    def acceleration(
        self,
        epoch: EpochUTC,
        position: Vector3,
        velocity: Vector3,
    ) -> Vector3:
        ax, ay, az = self._central.acceleration(epoch, position, velocity)
        dx, dy, dz = self.aspherical_acceleration(epoch, position)
        return (ax + dx, ay + dy, az + dz)
