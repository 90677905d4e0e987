# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Exponential atmospheric density model.

Piecewise exponential density with altitude-dependent scale height
(Vallado Table 8-4), 0-1000 km. Outside the table the nearest band's
base density and scale height keep being used, so the lookup never
raises for a finite altitude.
"""
import bisect
import json
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AtmosphereBand:
    """One row of the exponential atmosphere table."""
    base_altitude_km: float
    base_density: float  # kg/m³
    scale_height_km: float


@dataclass(frozen=True)
class ExponentialAtmosphere:
    """Ordered density bands, lowest base altitude first."""

    bands: tuple[AtmosphereBand, ...]

    def __post_init__(self) -> None:
        if not self.bands:
            raise ValueError("Exponential atmosphere needs at least one band")

    def band(self, altitude_km: float) -> AtmosphereBand:
        """Band whose base altitude is the largest not above ``altitude_km``."""
        bases = [b.base_altitude_km for b in self.bands]
        idx = bisect.bisect_right(bases, altitude_km) - 1
        return self.bands[min(max(idx, 0), len(self.bands) - 1)]

    def density(self, altitude_km: float) -> float:
        """Density in kg/m³: ρ = ρ₀ exp(-(h - h₀) / H)."""
        b = self.band(altitude_km)
        return b.base_density * math.exp(
            -(altitude_km - b.base_altitude_km) / b.scale_height_km
        )


_CACHED_ATMOSPHERE: Optional[ExponentialAtmosphere] = None


def load_atmosphere(path: Optional[str] = None) -> ExponentialAtmosphere:
    """Load the exponential atmosphere table from bundled JSON or a custom path."""
    global _CACHED_ATMOSPHERE

    if path is None and _CACHED_ATMOSPHERE is not None:
        return _CACHED_ATMOSPHERE

    data_path = (
        Path(__file__).parent.parent / "data" / "exponential_atmosphere.json"
        if path is None else Path(path)
    )
    with open(data_path) as f:
        data = json.load(f)

    try:
        bands = tuple(sorted(
            (
                AtmosphereBand(
                    base_altitude_km=float(e["altitude_km"]),
                    base_density=float(e["density"]),
                    scale_height_km=float(e["scale_height_km"]),
                )
                for e in data["entries"]
            ),
            key=lambda b: b.base_altitude_km,
        ))
    except (KeyError, TypeError) as exc:
        raise ValueError(f"Malformed atmosphere table {data_path}: {exc}") from exc

    model = ExponentialAtmosphere(bands=bands)
    logger.info("Loaded %d atmosphere bands from %s", len(bands), data_path)

    if path is None:
        _CACHED_ATMOSPHERE = model
    return model


def atmospheric_density(
    altitude_km: float,
    atmosphere: Optional[ExponentialAtmosphere] = None,
) -> float:
    """Atmospheric density (kg/m³) at a geometric altitude above the equatorial radius.

    Args:
        altitude_km: Altitude in km.
        atmosphere: Density table; the bundled table is used when omitted.

    Returns:
        Density in kg/m³.
    """
    model = atmosphere if atmosphere is not None else load_atmosphere()
    return model.density(altitude_km)
