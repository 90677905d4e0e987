# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""IAU 1976 precession, IAU 1980 nutation and sidereal time.

Angles for the FK5 reduction chain linking the J2000 mean equator and
equinox to the true equator and equinox of date. Precession and nutation
are evaluated in TT Julian centuries since J2000.0.

NumPy vectorized: the nutation series is summed with array operations over
all terms of the injected table in one pass.

References:
    Lieske et al. (1977), precession angles.
    Seidelmann (1982), 1980 IAU theory of nutation.
    Vallado, Fundamentals of Astrodynamics and Applications, §3.7.
"""

import json
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import numpy as np

from orbitprop.domain.earth_orientation import EOPTable
from orbitprop.domain.linalg import eval_poly
from orbitprop.domain.time_systems import EpochUTC

logger = logging.getLogger(__name__)

# --------------------------------------------------------------------------- #
# Constants
# --------------------------------------------------------------------------- #

_DEG_TO_RAD: float = math.pi / 180.0
_ARCSEC_TO_RAD: float = math.pi / (180.0 * 3600.0)
_SERIES_UNIT_TO_RAD: float = 1e-4 * _ARCSEC_TO_RAD
_REV: float = 360.0

# Precession polynomials in degrees (Lieske 1977)
_ZETA_POLY = (0.0, 0.6406161, 0.0000839, 5.0e-6)
_THETA_POLY = (0.0, 0.556753, -0.0001185, -1.16e-5)
_ZED_POLY = (0.0, 0.6406161, 0.0003041, 5.1e-6)

# Mean obliquity of the ecliptic in degrees
_OBLIQUITY_POLY = (23.439291, -0.013004, -1.64e-7, 5.04e-7)

# Delaunay arguments in degrees (Vallado Eq. 3-82)
_MOON_ANOMALY_POLY = (134.96340251, 1325.0 * _REV + 198.8675605, 0.0088553, 1.4343e-5)
_SUN_ANOMALY_POLY = (357.52910918, 99.0 * _REV + 359.0502911, -0.0001537, 3.8e-8)
_MOON_LATITUDE_POLY = (93.27209062, 1342.0 * _REV + 82.0174577, -0.003542, -2.88e-7)
_SUN_ELONGATION_POLY = (297.85019547, 1236.0 * _REV + 307.1114469, -0.0017696, 1.831e-6)
_MOON_NODE_POLY = (125.04455501, -(5.0 * _REV + 134.1361851), 0.0020756, 2.139e-6)

# --------------------------------------------------------------------------- #
# Data structures
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class PrecessionAngles:
    """Equatorial precession angles (radians)."""

    zeta: float
    theta: float
    zed: float


@dataclass(frozen=True)
class NutationAngles:
    """Nutation in longitude and obliquity plus mean obliquity (radians)."""

    d_psi: float
    d_eps: float
    mean_eps: float

    @property
    def true_eps(self) -> float:
        """True obliquity of the ecliptic."""
        return self.mean_eps + self.d_eps

    @property
    def equation_of_equinoxes(self) -> float:
        return self.d_psi * math.cos(self.true_eps)


@dataclass(frozen=True, eq=False)
class NutationSeries:
    """Nutation series table.

    ``multipliers`` is an (N, 5) array of integer multipliers of
    (l, l', F, D, Ω); ``coefficients`` is (N, 4) holding A, B, C, D in
    0.0001 arcsec so that Δψ += (A + Bt) sin(arg), Δε += (C + Dt) cos(arg).
    """

    multipliers: np.ndarray
    coefficients: np.ndarray

    def __len__(self) -> int:
        return int(self.multipliers.shape[0])

    @staticmethod
    def from_rows(rows) -> "NutationSeries":
        arr = np.asarray(rows, dtype=np.float64)
        if arr.ndim != 2 or arr.shape[1] != 9:
            raise ValueError(
                f"Nutation rows must have 9 columns, got shape {arr.shape}"
            )
        return NutationSeries(
            multipliers=arr[:, :5].copy(),
            coefficients=arr[:, 5:].copy(),
        )


_NUTATION_CACHE: Optional[NutationSeries] = None


def load_nutation_series(path: Optional[str] = None) -> NutationSeries:
    """Load the IAU 1980 nutation series from bundled JSON or a custom path."""
    global _NUTATION_CACHE

    if path is None and _NUTATION_CACHE is not None:
        return _NUTATION_CACHE

    data_path = (
        Path(__file__).parent.parent / "data" / "iau1980_nutation.json"
        if path is None else Path(path)
    )
    with open(data_path) as f:
        data = json.load(f)

    try:
        series = NutationSeries.from_rows(data["terms"])
    except KeyError as exc:
        raise ValueError(f"Nutation table {data_path} has no 'terms'") from exc
    logger.info("Loaded %d nutation terms from %s", len(series), data_path)

    if path is None:
        _NUTATION_CACHE = series
    return series


# --------------------------------------------------------------------------- #
# Angles
# --------------------------------------------------------------------------- #


def fundamental_arguments(t_tt: float) -> tuple[float, float, float, float, float]:
    """Delaunay arguments (l, l', F, D, Ω) in radians at TT centuries ``t_tt``.

    l  = Mean anomaly of the Moon
    l' = Mean anomaly of the Sun
    F  = Mean argument of latitude of the Moon
    D  = Mean elongation of the Moon from the Sun
    Ω  = Mean longitude of the ascending node of the Moon
    """
    return (
        eval_poly(t_tt, _MOON_ANOMALY_POLY) * _DEG_TO_RAD,
        eval_poly(t_tt, _SUN_ANOMALY_POLY) * _DEG_TO_RAD,
        eval_poly(t_tt, _MOON_LATITUDE_POLY) * _DEG_TO_RAD,
        eval_poly(t_tt, _SUN_ELONGATION_POLY) * _DEG_TO_RAD,
        eval_poly(t_tt, _MOON_NODE_POLY) * _DEG_TO_RAD,
    )


def mean_obliquity(t_tt: float) -> float:
    """Mean obliquity of the ecliptic (radians)."""
    return eval_poly(t_tt, _OBLIQUITY_POLY) * _DEG_TO_RAD


def precession_angles(epoch: EpochUTC) -> PrecessionAngles:
    """IAU 1976 precession angles ζ, θ, z at ``epoch``."""
    t = epoch.to_tt().julian_centuries()
    return PrecessionAngles(
        zeta=eval_poly(t, _ZETA_POLY) * _DEG_TO_RAD,
        theta=eval_poly(t, _THETA_POLY) * _DEG_TO_RAD,
        zed=eval_poly(t, _ZED_POLY) * _DEG_TO_RAD,
    )


def nutation_angles(
    epoch: EpochUTC,
    series: Optional[NutationSeries] = None,
) -> NutationAngles:
    """IAU 1980 nutation angles Δψ, Δε and mean obliquity at ``epoch``.

    Args:
        epoch: UTC epoch, converted to TT for the series argument.
        series: Nutation table; the bundled table is used when omitted.

    Returns:
        NutationAngles in radians.
    """
    table = series if series is not None else load_nutation_series()
    t = epoch.to_tt().julian_centuries()

    args = np.array(fundamental_arguments(t))
    phase = table.multipliers @ args
    c = table.coefficients
    d_psi = float(np.sum((c[:, 0] + c[:, 1] * t) * np.sin(phase)))
    d_eps = float(np.sum((c[:, 2] + c[:, 3] * t) * np.cos(phase)))

    return NutationAngles(
        d_psi=d_psi * _SERIES_UNIT_TO_RAD,
        d_eps=d_eps * _SERIES_UNIT_TO_RAD,
        mean_eps=mean_obliquity(t),
    )


def apparent_sidereal_angle(
    epoch: EpochUTC,
    nutation: Optional[NutationAngles] = None,
    eop: Optional[EOPTable] = None,
) -> float:
    """Greenwich apparent sidereal angle: GMST plus the equation of equinoxes."""
    nut = nutation if nutation is not None else nutation_angles(epoch)
    return epoch.gmst_angle(eop) + nut.equation_of_equinoxes
