# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""State vector types, one per reference frame.

Each frame is its own frozen dataclass. Conversions are methods that
return a new object; nothing is mutated in place.

    J2000  ⇄  ITRF  →  Geodetic
    J2000  ⇄  TEME
    J2000  ⇄  ClassicalElements
    J2000  ⇄  RIC (relative to a reference J2000 state)

Classical elements are undefined for circular (e = 0) or equatorial
(i = 0) orbits. Those angles come out as NaN and propagate through any
further arithmetic; no exception is raised.
"""
import math
from dataclasses import dataclass
from typing import Optional

from orbitprop.domain.bodies import Earth
from orbitprop.domain.earth_orientation import EOPTable
from orbitprop.domain.frames import (
    itrf_to_j2000,
    j2000_to_itrf,
    j2000_to_teme,
    teme_to_j2000,
)
from orbitprop.domain.linalg import (
    Matrix3,
    Vector3,
    Vector6,
    Z_AXIS,
    join_state,
    mat_transpose,
    mat_vec,
    match_half_plane,
    rot1,
    rot3,
    vec_add,
    vec_cross,
    vec_dot,
    vec_norm,
    vec_scale,
    vec_sub,
    vec_unit,
)
from orbitprop.domain.time_systems import EpochUTC

_TWO_PI = 2.0 * math.pi

# Fixed latitude refinement passes for ITRF → geodetic.
GEODETIC_ITERATIONS: int = 6


def _acos_ratio(num: float, den: float) -> float:
    """acos(num / den), NaN for a zero denominator, clamped for round-off."""
    if den == 0.0 or math.isnan(den) or math.isnan(num):
        return math.nan
    return math.acos(max(-1.0, min(1.0, num / den)))


def _format_vector(v: Vector3) -> str:
    return "[" + ", ".join(f"{x:+.9f}" for x in v) + "]"


# --------------------------------------------------------------------------- #
# Inertial and Earth-fixed Cartesian states
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class J2000:
    """Inertial state on the J2000 mean equator and equinox (km, km/s)."""

    epoch: EpochUTC
    position: Vector3
    velocity: Vector3 = (0.0, 0.0, 0.0)

    def __str__(self) -> str:
        return "\n".join([
            "[J2000]",
            f"  Epoch:     {self.epoch}",
            f"  Position:  {_format_vector(self.position)} km",
            f"  Velocity:  {_format_vector(self.velocity)} km/s",
        ])

    @property
    def state_vector(self) -> Vector6:
        return join_state(self.position, self.velocity)

    def mechanical_energy(self, mu: float = Earth.MU) -> float:
        """Specific orbital energy (km²/s²)."""
        r = vec_norm(self.position)
        v = vec_norm(self.velocity)
        return v * v / 2.0 - mu / r

    def period(self, mu: float = Earth.MU) -> float:
        """Two-body orbital period (s); NaN for unbound orbits."""
        a = -mu / (2.0 * self.mechanical_energy(mu))
        if a <= 0.0:
            return math.nan
        return _TWO_PI * math.sqrt(a ** 3 / mu)

    def to_itrf(self, eop: Optional[EOPTable] = None) -> "ITRF":
        r, v = j2000_to_itrf(self.epoch, self.position, self.velocity, eop)
        return ITRF(self.epoch, r, v)

    def to_teme(self) -> "TEME":
        r, v = j2000_to_teme(self.epoch, self.position, self.velocity)
        return TEME(self.epoch, r, v)

    def to_classical(self, mu: float = Earth.MU) -> "ClassicalElements":
        """Osculating classical elements (Vallado Algorithm 9)."""
        pos, vel = self.position, self.velocity
        r = vec_norm(pos)
        v = vec_norm(vel)
        energy = v * v / 2.0 - mu / r
        a = -mu / (2.0 * energy)

        e_vec = vec_scale(
            vec_sub(vec_scale(pos, v * v - mu / r), vec_scale(vel, vec_dot(pos, vel))),
            1.0 / mu,
        )
        e = vec_norm(e_vec)
        h = vec_cross(pos, vel)
        n = vec_cross(Z_AXIS, h)
        n_mag = vec_norm(n)

        i = _acos_ratio(h[2], vec_norm(h))
        raan = _acos_ratio(n[0], n_mag)
        if n[1] < 0.0:
            raan = _TWO_PI - raan
        argp = _acos_ratio(vec_dot(n, e_vec), n_mag * e)
        if e_vec[2] < 0.0:
            argp = _TWO_PI - argp
        nu = _acos_ratio(vec_dot(e_vec, pos), e * r)
        if vec_dot(pos, vel) < 0.0:
            nu = _TWO_PI - nu

        return ClassicalElements(
            epoch=self.epoch,
            semimajor_axis=a,
            eccentricity=e,
            inclination=i,
            right_ascension=raan,
            argument_of_perigee=argp,
            true_anomaly=nu,
            mu=mu,
        )

    def to_ric(self, reference: "J2000") -> "RIC":
        return RIC.from_j2000(self, reference)

    def maneuver(self, radial: float, intrack: float, crosstrack: float) -> "J2000":
        """Apply an impulsive delta-v (km/s) expressed in this state's own RIC frame."""
        return self.to_ric(self).add_velocity(radial, intrack, crosstrack).to_j2000()


@dataclass(frozen=True)
class TEME:
    """True equator, mean equinox state (km, km/s)."""

    epoch: EpochUTC
    position: Vector3
    velocity: Vector3 = (0.0, 0.0, 0.0)

    def to_j2000(self) -> J2000:
        r, v = teme_to_j2000(self.epoch, self.position, self.velocity)
        return J2000(self.epoch, r, v)


@dataclass(frozen=True)
class ITRF:
    """Earth-fixed state in the International Terrestrial Reference Frame."""

    epoch: EpochUTC
    position: Vector3
    velocity: Vector3 = (0.0, 0.0, 0.0)

    def to_j2000(self, eop: Optional[EOPTable] = None) -> J2000:
        r, v = itrf_to_j2000(self.epoch, self.position, self.velocity, eop)
        return J2000(self.epoch, r, v)

    def to_geodetic(self) -> "Geodetic":
        """Geodetic latitude, longitude and altitude on the WGS-84 ellipsoid.

        Latitude is refined a fixed ``GEODETIC_ITERATIONS`` times rather
        than to a convergence tolerance.
        """
        x, y, z = self.position
        sma = Earth.RADIUS_EQUATOR
        esq = Earth.ECCENTRICITY_SQUARED
        lon = math.atan2(y, x)
        r = math.sqrt(x * x + y * y)
        lat = math.atan2(z, r)
        c = 1.0
        for _ in range(GEODETIC_ITERATIONS):
            slat = math.sin(lat)
            c = 1.0 / math.sqrt(1.0 - esq * slat * slat)
            lat = math.atan2(z + sma * c * esq * slat, r)
        alt = r / math.cos(lat) - sma * c
        return Geodetic(latitude=lat, longitude=lon, altitude=alt)


@dataclass(frozen=True)
class Geodetic:
    """Geodetic coordinates: latitude/longitude in radians, altitude in km."""

    latitude: float
    longitude: float
    altitude: float

    @staticmethod
    def from_degrees(lat_deg: float, lon_deg: float, alt_km: float) -> "Geodetic":
        return Geodetic(math.radians(lat_deg), math.radians(lon_deg), alt_km)

    @property
    def latitude_deg(self) -> float:
        return math.degrees(self.latitude)

    @property
    def longitude_deg(self) -> float:
        return math.degrees(self.longitude)

    def to_itrf(self, epoch: EpochUTC) -> ITRF:
        sma = Earth.RADIUS_EQUATOR
        esq = Earth.ECCENTRICITY_SQUARED
        sin_lat = math.sin(self.latitude)
        cos_lat = math.cos(self.latitude)
        n = sma / math.sqrt(1.0 - esq * sin_lat * sin_lat)
        h = self.altitude
        return ITRF(
            epoch,
            (
                (n + h) * cos_lat * math.cos(self.longitude),
                (n + h) * cos_lat * math.sin(self.longitude),
                (n * (1.0 - esq) + h) * sin_lat,
            ),
        )


# --------------------------------------------------------------------------- #
# Classical orbital elements
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class ClassicalElements:
    """Osculating Keplerian elements (km, radians) at an epoch."""

    epoch: EpochUTC
    semimajor_axis: float
    eccentricity: float
    inclination: float
    right_ascension: float
    argument_of_perigee: float
    true_anomaly: float
    mu: float = Earth.MU

    def __str__(self) -> str:
        return "\n".join([
            "[ClassicalElements]",
            f"  Epoch:                {self.epoch}",
            f"  Semimajor Axis:       {self.semimajor_axis:.4f} km",
            f"  Eccentricity:         {self.eccentricity:.7f}",
            f"  Inclination:          {math.degrees(self.inclination):.4f}°",
            f"  Right Ascension:      {math.degrees(self.right_ascension):.4f}°",
            f"  Argument of Perigee:  {math.degrees(self.argument_of_perigee):.4f}°",
            f"  True Anomaly:         {math.degrees(self.true_anomaly):.4f}°",
        ])

    @property
    def mean_motion(self) -> float:
        """Mean motion (rad/s)."""
        return math.sqrt(self.mu / self.semimajor_axis ** 3)

    @property
    def period(self) -> float:
        """Orbital period (s)."""
        return _TWO_PI / self.mean_motion

    @property
    def apogee(self) -> float:
        """Apoapsis radius (km)."""
        return self.semimajor_axis * (1.0 + self.eccentricity)

    @property
    def perigee(self) -> float:
        """Periapsis radius (km)."""
        return self.semimajor_axis * (1.0 - self.eccentricity)

    @property
    def eccentric_anomaly(self) -> float:
        e, nu = self.eccentricity, self.true_anomaly
        ecc = _acos_ratio(e + math.cos(nu), 1.0 + e * math.cos(nu))
        return match_half_plane(ecc, nu)

    @property
    def mean_anomaly(self) -> float:
        ecc = self.eccentric_anomaly
        return match_half_plane(ecc - self.eccentricity * math.sin(ecc), ecc)

    def to_j2000(self) -> J2000:
        """Perifocal position/velocity rotated by ω, i, Ω into J2000."""
        a, e, nu = self.semimajor_axis, self.eccentricity, self.true_anomaly
        p = a * (1.0 - e * e)
        cos_nu, sin_nu = math.cos(nu), math.sin(nu)
        r_pqw = vec_scale((cos_nu, sin_nu, 0.0), p / (1.0 + e * cos_nu))
        v_pqw = vec_scale((-sin_nu, e + cos_nu, 0.0), math.sqrt(self.mu / p))

        def to_inertial(v: Vector3) -> Vector3:
            return rot3(
                rot1(rot3(v, -self.argument_of_perigee), -self.inclination),
                -self.right_ascension,
            )

        return J2000(self.epoch, to_inertial(r_pqw), to_inertial(v_pqw))


# --------------------------------------------------------------------------- #
# Relative motion
# --------------------------------------------------------------------------- #


def _ric_matrix(reference: J2000) -> Matrix3:
    ru = vec_unit(reference.position)
    cu = vec_unit(vec_cross(reference.position, reference.velocity))
    iu = vec_unit(vec_cross(cu, ru))
    return (ru, iu, cu)


@dataclass(frozen=True)
class RIC:
    """Radial, in-track, cross-track offset from a reference J2000 state."""

    position: Vector3
    velocity: Vector3
    reference: J2000

    @property
    def epoch(self) -> EpochUTC:
        return self.reference.epoch

    @staticmethod
    def from_j2000(state: J2000, reference: J2000) -> "RIC":
        m = _ric_matrix(reference)
        dp = vec_sub(state.position, reference.position)
        dv = vec_sub(state.velocity, reference.velocity)
        return RIC(mat_vec(m, dp), mat_vec(m, dv), reference)

    def add_velocity(self, radial: float, intrack: float, crosstrack: float) -> "RIC":
        return RIC(
            self.position,
            vec_add(self.velocity, (radial, intrack, crosstrack)),
            self.reference,
        )

    def range(self) -> float:
        return vec_norm(self.position)

    def to_j2000(self) -> J2000:
        mt = mat_transpose(_ric_matrix(self.reference))
        return J2000(
            self.reference.epoch,
            vec_add(self.reference.position, mat_vec(mt, self.position)),
            vec_add(self.reference.velocity, mat_vec(mt, self.velocity)),
        )
