# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Ephemeris interpolation over a cache of pre-computed J2000 states.

Two methods:

- LINEAR: per-component straight-line interpolation between the two
  cached states bracketing the query epoch.
- RK4: restart a Runge-Kutta 4 propagator from the cached state nearest
  the query epoch (default 60 s steps, two-body force model unless one
  is supplied).

Queries are valid on the closed interval [first epoch, last epoch];
anything outside raises ``InterpolationRangeError``.
"""
import bisect
import logging
from enum import Enum
from typing import Optional, Sequence

from orbitprop.domain.coordinates import J2000
from orbitprop.domain.force_model import ForceModel
from orbitprop.domain.linalg import linear_interpolate
from orbitprop.domain.numerical_propagation import RungeKutta4Propagator
from orbitprop.domain.propagator import Propagator
from orbitprop.domain.time_systems import EpochUTC

logger = logging.getLogger(__name__)

DEFAULT_STEP_SIZE = 60.0


class InterpolationMethod(Enum):
    LINEAR = "linear"
    RK4 = "rk4"


class InterpolationRangeError(ValueError):
    """Query epoch outside the cached span."""

    def __init__(self, epoch: EpochUTC, start: EpochUTC, end: EpochUTC) -> None:
        self.epoch = epoch
        self.start = start
        self.end = end
        super().__init__(f"Epoch {epoch} outside valid range: {start} -> {end}")


class InterpolatorPropagator(Propagator):
    """Resample an epoch-sorted cache of states."""

    def __init__(
        self,
        states: Sequence[J2000],
        method: InterpolationMethod = InterpolationMethod.LINEAR,
        step_size: float = DEFAULT_STEP_SIZE,
        force_model: Optional[ForceModel] = None,
    ) -> None:
        if not states:
            raise ValueError("Interpolation cache needs at least one state")
        if not step_size > 0.0:
            raise ValueError(f"step_size must be positive, got {step_size}")
        self._states = tuple(sorted(states, key=lambda s: s.epoch.seconds))
        self._seconds = [s.epoch.seconds for s in self._states]
        self._method = method
        self._step_size = float(step_size)
        self._force_model = force_model or ForceModel.with_two_body()
        self._cache = self._states[0]

    @property
    def state(self) -> J2000:
        return self._cache

    @property
    def method(self) -> InterpolationMethod:
        return self._method

    @property
    def step_size(self) -> float:
        return self._step_size

    @property
    def force_model(self) -> ForceModel:
        return self._force_model

    @property
    def states(self) -> tuple[J2000, ...]:
        return self._states

    @property
    def epoch_range(self) -> tuple[EpochUTC, EpochUTC]:
        return (self._states[0].epoch, self._states[-1].epoch)

    def in_range(self, epoch: EpochUTC) -> bool:
        return self._seconds[0] <= epoch.seconds <= self._seconds[-1]

    def reset(self) -> None:
        self._cache = self._states[0]

    def propagate(self, epoch: EpochUTC) -> J2000:
        if not self.in_range(epoch):
            start, end = self.epoch_range
            raise InterpolationRangeError(epoch, start, end)
        if self._method is InterpolationMethod.RK4:
            self._cache = self._integrated(epoch)
        else:
            self._cache = self._linear(epoch)
        return self._cache

    # --- Methods ---

    def _linear(self, epoch: EpochUTC) -> J2000:
        t = epoch.seconds
        idx = bisect.bisect_left(self._seconds, t)
        if idx < len(self._seconds) and self._seconds[idx] == t:
            s = self._states[idx]
            return J2000(epoch, s.position, s.velocity)

        a, b = self._states[idx - 1], self._states[idx]
        t0, t1 = a.epoch.seconds, b.epoch.seconds
        sv0, sv1 = a.state_vector, b.state_vector
        sv = [linear_interpolate(t, t0, x0, t1, x1) for x0, x1 in zip(sv0, sv1)]
        return J2000(epoch, (sv[0], sv[1], sv[2]), (sv[3], sv[4], sv[5]))

    def _nearest(self, epoch: EpochUTC) -> J2000:
        t = epoch.seconds
        idx = bisect.bisect_left(self._seconds, t)
        if idx == 0:
            return self._states[0]
        if idx == len(self._seconds):
            return self._states[-1]
        before, after = self._states[idx - 1], self._states[idx]
        if after.epoch.seconds - t < t - before.epoch.seconds:
            return after
        return before

    def _integrated(self, epoch: EpochUTC) -> J2000:
        start = self._nearest(epoch)
        logger.debug("RK4 from cached state at %s to %s", start.epoch, epoch)
        rk4 = RungeKutta4Propagator(start, self._force_model, self._step_size)
        return rk4.propagate(epoch)
