# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Two-body analytic propagation.

Advances the mean anomaly linearly and inverts Kepler's equation by
fixed-point iteration. Every acos along the way is resolved into the
correct half plane against the angle it was derived from.

The iteration count is capped; when the cap is hit the last iterate is
used as-is. That only happens for near-parabolic orbits, which this
propagator does not target.

References:
    Vallado, Fundamentals of Astrodynamics and Applications, §2.2-2.3.
"""
import logging
import math
from dataclasses import replace

from orbitprop.domain.coordinates import J2000, ClassicalElements
from orbitprop.domain.linalg import match_half_plane
from orbitprop.domain.propagator import Propagator
from orbitprop.domain.time_systems import EpochUTC

logger = logging.getLogger(__name__)

_TWO_PI = 2.0 * math.pi

KEPLER_MAX_ITERATIONS = 32
KEPLER_TOLERANCE = 1e-12


def solve_kepler(
    mean_anomaly: float,
    eccentricity: float,
    max_iterations: int = KEPLER_MAX_ITERATIONS,
    tolerance: float = KEPLER_TOLERANCE,
) -> float:
    """Eccentric anomaly from mean anomaly, E = M + e sin E.

    Returns the last iterate if ``tolerance`` is not reached within
    ``max_iterations``.
    """
    e_anom = mean_anomaly
    for _ in range(max_iterations):
        e_next = mean_anomaly + eccentricity * math.sin(e_anom)
        if abs(e_next - e_anom) < tolerance:
            return e_anom
        e_anom = e_next
    logger.debug(
        "Kepler iteration hit %d iterations (M=%.6f, e=%.6f)",
        max_iterations, mean_anomaly, eccentricity,
    )
    return e_anom


class KeplerPropagator(Propagator):
    """Closed-form two-body propagator over a fixed element set."""

    def __init__(self, elements: ClassicalElements) -> None:
        self._elements = elements
        self._initial = elements.to_j2000()
        self._cache = self._initial

    @classmethod
    def from_state(cls, state: J2000) -> "KeplerPropagator":
        return cls(state.to_classical())

    @property
    def elements(self) -> ClassicalElements:
        return self._elements

    @property
    def state(self) -> J2000:
        return self._cache

    def elements_at(self, epoch: EpochUTC) -> ClassicalElements:
        """Osculating elements at ``epoch``; only the true anomaly changes."""
        el = self._elements
        e = el.eccentricity
        dt = epoch.difference(el.epoch)

        cos_nu0 = math.cos(el.true_anomaly)
        e0 = match_half_plane(
            math.acos(_clamp((e + cos_nu0) / (1.0 + e * cos_nu0))), el.true_anomaly,
        )
        m0 = match_half_plane(e0 - e * math.sin(e0), e0)

        m = (m0 + el.mean_motion * dt) % _TWO_PI
        e_anom = solve_kepler(m, e)

        cos_e = math.cos(e_anom)
        nu = match_half_plane(
            math.acos(_clamp((cos_e - e) / (1.0 - e * cos_e))), e_anom,
        )
        return replace(el, epoch=epoch, true_anomaly=nu)

    def propagate(self, epoch: EpochUTC) -> J2000:
        if epoch.difference(self._elements.epoch) == 0.0:
            self._cache = self._initial
        else:
            self._cache = self.elements_at(epoch).to_j2000()
        return self._cache

    def reset(self) -> None:
        self._cache = self._initial


def _clamp(x: float) -> float:
    return max(-1.0, min(1.0, x))
