# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Orbitprop

Orbit propagation engine: UTC/TAI/TT/TDB/UT1 time scales, the FK5
J2000/MOD/TOD/PEF/ITRF frame chain plus TEME, geodetic and classical
element conversions, a composable force model (point-mass, zonal and
spherical harmonic gravity, Sun/Moon third-body, exponential-atmosphere
drag, solar radiation pressure with Earth shadow), and RK4, Kepler and
interpolating propagators.
"""

from orbitprop.domain.time_systems import (
    TimeScale,
    LeapSecondTable,
    load_leap_seconds,
    Epoch,
    EpochUTC,
    EpochTAI,
    EpochTT,
    EpochTDB,
    EpochUT1,
)
from orbitprop.domain.earth_orientation import (
    EOPEntry,
    EOPTable,
    parse_finals,
    load_eop,
    install_default_eop,
    default_eop,
)
from orbitprop.domain.bodies import (
    Earth,
    Sun,
    Moon,
    ASTRONOMICAL_UNIT,
    SPEED_OF_LIGHT,
)
from orbitprop.domain.solar import (
    sun_position,
    in_shadow,
    sun_shadow,
)
from orbitprop.domain.lunar import moon_position
from orbitprop.domain.precession_nutation import (
    PrecessionAngles,
    NutationAngles,
    NutationSeries,
    load_nutation_series,
    precession_angles,
    nutation_angles,
    apparent_sidereal_angle,
)
from orbitprop.domain.frames import (
    j2000_to_itrf,
    itrf_to_j2000,
    j2000_to_teme,
    teme_to_j2000,
)
from orbitprop.domain.coordinates import (
    J2000,
    ITRF,
    TEME,
    Geodetic,
    ClassicalElements,
    RIC,
)
from orbitprop.domain.atmosphere import (
    AtmosphereBand,
    ExponentialAtmosphere,
    load_atmosphere,
    atmospheric_density,
)
from orbitprop.domain.gravity import (
    GravityCoefficients,
    load_gravity_coefficients,
    load_icgem_coefficients,
    TwoBodyGravity,
    ZonalHarmonicGravity,
    SphericalHarmonicGravity,
)
from orbitprop.domain.third_body import (
    third_body_acceleration,
    SolarThirdBodyForce,
    LunarThirdBodyForce,
)
from orbitprop.domain.drag import (
    DragConfig,
    AtmosphericDragForce,
)
from orbitprop.domain.radiation_pressure import (
    SRPConfig,
    SolarRadiationPressureForce,
)
from orbitprop.domain.force_model import (
    ForceContributor,
    ForceModel,
)
from orbitprop.domain.propagator import Propagator
from orbitprop.domain.numerical_propagation import (
    rk4_step,
    RungeKutta4Propagator,
)
from orbitprop.domain.kepler_propagation import (
    solve_kepler,
    KeplerPropagator,
)
from orbitprop.domain.interpolation import (
    InterpolationMethod,
    InterpolationRangeError,
    InterpolatorPropagator,
)

__all__ = [
    "TimeScale",
    "LeapSecondTable",
    "load_leap_seconds",
    "Epoch",
    "EpochUTC",
    "EpochTAI",
    "EpochTT",
    "EpochTDB",
    "EpochUT1",
    "EOPEntry",
    "EOPTable",
    "parse_finals",
    "load_eop",
    "install_default_eop",
    "default_eop",
    "Earth",
    "Sun",
    "Moon",
    "ASTRONOMICAL_UNIT",
    "SPEED_OF_LIGHT",
    "sun_position",
    "in_shadow",
    "sun_shadow",
    "moon_position",
    "PrecessionAngles",
    "NutationAngles",
    "NutationSeries",
    "load_nutation_series",
    "precession_angles",
    "nutation_angles",
    "apparent_sidereal_angle",
    "j2000_to_itrf",
    "itrf_to_j2000",
    "j2000_to_teme",
    "teme_to_j2000",
    "J2000",
    "ITRF",
    "TEME",
    "Geodetic",
    "ClassicalElements",
    "RIC",
    "AtmosphereBand",
    "ExponentialAtmosphere",
    "load_atmosphere",
    "atmospheric_density",
    "GravityCoefficients",
    "load_gravity_coefficients",
    "load_icgem_coefficients",
    "TwoBodyGravity",
    "ZonalHarmonicGravity",
    "SphericalHarmonicGravity",
    "third_body_acceleration",
    "SolarThirdBodyForce",
    "LunarThirdBodyForce",
    "DragConfig",
    "AtmosphericDragForce",
    "SRPConfig",
    "SolarRadiationPressureForce",
    "ForceContributor",
    "ForceModel",
    "Propagator",
    "rk4_step",
    "RungeKutta4Propagator",
    "solve_kepler",
    "KeplerPropagator",
    "InterpolationMethod",
    "InterpolationRangeError",
    "InterpolatorPropagator",
]
