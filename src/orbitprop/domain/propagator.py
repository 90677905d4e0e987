# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Common propagator interface.

A propagator owns one initial J2000 state and a cached current state.
``propagate`` replaces the cached state; ``reset`` restores the initial
one. Instances are not safe for concurrent use.
"""
from abc import ABC, abstractmethod

from orbitprop.domain.coordinates import J2000
from orbitprop.domain.time_systems import EpochUTC


class Propagator(ABC):
    """Base class for J2000 state propagators."""

    @property
    @abstractmethod
    def state(self) -> J2000:
        """Cached state from the last propagation (or the initial state)."""
        ...

    @abstractmethod
    def propagate(self, epoch: EpochUTC) -> J2000:
        """Move the cached state to ``epoch`` and return it."""
        ...

    @abstractmethod
    def reset(self) -> None:
        """Restore the cached state to the initial condition."""
        ...

    def step(self, start: EpochUTC, interval: float, count: int) -> list[J2000]:
        """Propagate to ``start + k * interval`` for k = 0..count.

        Returns ``count + 1`` states; the cached state ends at the last one.
        """
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        return [self.propagate(start.roll(k * interval)) for k in range(count + 1)]
