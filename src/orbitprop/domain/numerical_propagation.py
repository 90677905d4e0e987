# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Numerical orbit propagation with RK4 and a composable force model.

Fixed-step 4th-order Runge-Kutta integrator. Each propagate call walks
from the cached epoch to the target in steps of at most ``step_size``
seconds; the last step is shortened so the target is hit exactly and
never overshot. Propagation may run backwards.
"""
import logging
from typing import Callable, Optional

import numpy as np

from orbitprop.domain.coordinates import J2000
from orbitprop.domain.force_model import ForceModel
from orbitprop.domain.linalg import Vector6, sign, split_state
from orbitprop.domain.propagator import Propagator
from orbitprop.domain.time_systems import EpochUTC

logger = logging.getLogger(__name__)

DEFAULT_STEP_SIZE = 15.0


def rk4_step(
    t_s: float,
    state: tuple[float, ...],
    h: float,
    deriv_fn: Callable[[float, tuple[float, ...]], tuple[float, ...]],
) -> tuple[float, tuple[float, ...]]:
    """Single 4th-order Runge-Kutta integration step.

    Args:
        t_s: Current time (seconds).
        state: Current state vector.
        h: Step size (seconds).
        deriv_fn: Derivative function f(t, state) -> d(state)/dt.

    Returns:
        (t_new, state_new)
    """
    sv = np.array(state)
    k1 = np.array(deriv_fn(t_s, state))
    s1 = tuple((sv + 0.5 * h * k1).tolist())

    k2 = np.array(deriv_fn(t_s + 0.5 * h, s1))
    s2 = tuple((sv + 0.5 * h * k2).tolist())

    k3 = np.array(deriv_fn(t_s + 0.5 * h, s2))
    s3 = tuple((sv + h * k3).tolist())

    k4 = np.array(deriv_fn(t_s + h, s3))

    state_new_arr = sv + (h / 6.0) * (k1 + 2.0 * k2 + 2.0 * k3 + k4)
    state_new = tuple(float(x) for x in state_new_arr)
    return (t_s + h, state_new)


class RungeKutta4Propagator(Propagator):
    """Fixed-step RK4 propagator driven by a ``ForceModel``.

    Time inside the integrator is seconds since the cached epoch, so
    epoch arithmetic happens once per derivative evaluation.
    """

    def __init__(
        self,
        initial: J2000,
        force_model: Optional[ForceModel] = None,
        step_size: float = DEFAULT_STEP_SIZE,
    ) -> None:
        self._initial = initial
        self._cache = initial
        self._force_model = force_model if force_model is not None else ForceModel.with_two_body()
        self._step_size = 0.0
        self.set_step_size(step_size)

    @property
    def state(self) -> J2000:
        return self._cache

    @property
    def force_model(self) -> ForceModel:
        return self._force_model

    @property
    def step_size(self) -> float:
        return self._step_size

    def set_step_size(self, seconds: float) -> None:
        if not seconds > 0.0:
            raise ValueError(f"step_size must be positive, got {seconds}")
        self._step_size = float(seconds)

    def reset(self) -> None:
        self._cache = self._initial

    def _integrate(self, state: J2000, h: float) -> J2000:
        epoch = state.epoch

        def deriv_fn(t_s: float, sv: Vector6) -> Vector6:
            return self._force_model.derivative(epoch.roll(t_s), sv)

        t_new, sv_new = rk4_step(0.0, state.state_vector, h, deriv_fn)
        position, velocity = split_state(sv_new)
        return J2000(epoch.roll(t_new), position, velocity)

    def propagate(self, epoch: EpochUTC) -> J2000:
        steps = 0
        delta = epoch.difference(self._cache.epoch)
        while delta != 0.0:
            h = sign(delta) * min(abs(delta), self._step_size)
            state = self._integrate(self._cache, h)
            if abs(delta) <= self._step_size:
                # Final partial step: pin the epoch to the target.
                state = J2000(epoch, state.position, state.velocity)
            self._cache = state
            delta = epoch.difference(self._cache.epoch)
            steps += 1
        if steps:
            logger.debug("RK4: %d steps to %s", steps, epoch)
        return self._cache
