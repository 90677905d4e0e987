# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interfaces for external Earth orientation data.

Adapters implement these to load EOP tables from different sources.
"""
from abc import ABC, abstractmethod

from orbitprop.domain.earth_orientation import EOPTable


class EarthOrientationSource(ABC):
    """Port for loading an Earth orientation parameter table."""

    @abstractmethod
    def load(self) -> EOPTable:
        """Read and parse the source into an EOP table."""
        ...
