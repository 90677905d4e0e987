# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Astronomical time systems: epoch value objects tagged by time scale.

An epoch is a single continuous count of seconds since 1970-01-01T00:00:00
read on its own clock. ``EpochUTC`` is the entry point; the other scales
are one-way functions of a UTC epoch:

    TAI = UTC + ΔAT            (leap-second table)
    TT  = TAI + 32.184 s
    TDB = TT + 0.001658 sin M + 0.00001385 sin 2M
    UT1 = UTC + ΔUT1           (EOP table)

Epochs are immutable; ``roll`` and the conversions return new objects.

References:
    Vallado, Fundamentals of Astrodynamics and Applications, 4th ed., §3.5.
    Astronomical Almanac, Section B.
"""

import bisect
import json
import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import ClassVar, Optional

from orbitprop.domain.earth_orientation import EOPTable, resolve_eop

logger = logging.getLogger(__name__)

# --------------------------------------------------------------------------- #
# Constants
# --------------------------------------------------------------------------- #

_TT_TAI_OFFSET: float = 32.184
"""TT = TAI + 32.184 s (exact, IAU 1991)."""

_J2000_JD: float = 2451545.0
_UNIX_EPOCH_JD: float = 2440587.5
_MJD_OFFSET: float = 2400000.5
_SECONDS_PER_DAY: float = 86400.0
_DAYS_PER_CENTURY: float = 36525.0
_TWO_PI: float = 2.0 * math.pi


class TimeScale(Enum):
    """Supported time scales."""

    UTC = "UTC"
    TAI = "TAI"
    TT = "TT"
    TDB = "TDB"
    UT1 = "UT1"


# --------------------------------------------------------------------------- #
# Leap second table
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class LeapSecondTable:
    """Cumulative TAI-UTC offsets, as (Julian Date, seconds) step pairs."""

    entries: tuple[tuple[float, float], ...]

    def offset(self, jd: float) -> float:
        """Return TAI-UTC in seconds at a UTC Julian Date.

        Step lookup, never interpolated. Dates before the first entry use
        the first offset; dates after the last entry use the last offset.
        """
        if not self.entries:
            return 0.0
        jds = [e[0] for e in self.entries]
        idx = bisect.bisect_right(jds, jd) - 1
        if idx < 0:
            logger.debug("JD %.1f precedes leap-second table, using first offset", jd)
            return self.entries[0][1]
        return self.entries[idx][1]


_LEAP_SECOND_TABLE: Optional[LeapSecondTable] = None


def load_leap_seconds(path: Optional[str] = None) -> LeapSecondTable:
    """Load the leap-second table from bundled JSON or a custom path.

    The bundled table is parsed once and cached; custom paths are read on
    every call.
    """
    global _LEAP_SECOND_TABLE

    if path is None and _LEAP_SECOND_TABLE is not None:
        return _LEAP_SECOND_TABLE

    data_path = (
        Path(__file__).parent.parent / "data" / "leap_seconds.json"
        if path is None else Path(path)
    )
    with open(data_path) as f:
        data = json.load(f)

    try:
        pairs = sorted(
            (float(e["jd"]), float(e["offset"])) for e in data["entries"]
        )
    except (KeyError, TypeError) as exc:
        raise ValueError(f"Malformed leap-second table {data_path}: {exc}") from exc

    table = LeapSecondTable(entries=tuple(pairs))
    logger.info("Loaded %d leap-second entries from %s", len(pairs), data_path)

    if path is None:
        _LEAP_SECOND_TABLE = table
    return table


# --------------------------------------------------------------------------- #
# Epoch value objects
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, order=True)
class Epoch:
    """Seconds since 1970-01-01T00:00:00 on this epoch's time scale.

    Epochs of different scales are distinct types: they compare unequal
    and cannot be ordered against each other.
    """

    seconds: float

    scale: ClassVar[TimeScale] = TimeScale.UTC

    def __str__(self) -> str:
        dt = self.to_datetime()
        return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"

    def __add__(self, seconds: float) -> "Epoch":
        if isinstance(seconds, Epoch):
            return NotImplemented
        return self.roll(seconds)

    def __sub__(self, other):
        if isinstance(other, Epoch):
            return self.difference(other)
        return self.roll(-other)

    def roll(self, seconds: float) -> "Epoch":
        """Return a new epoch of the same scale shifted by ``seconds``."""
        return type(self)(self.seconds + seconds)

    def difference(self, other: "Epoch") -> float:
        """Seconds from ``other`` to this epoch (positive if later)."""
        if type(other) is not type(self):
            raise TypeError(
                f"Cannot difference {type(self).__name__} and {type(other).__name__}"
            )
        return self.seconds - other.seconds

    def to_datetime(self) -> datetime:
        """Calendar reading of this clock as an aware datetime."""
        return datetime.fromtimestamp(self.seconds, tz=timezone.utc)

    def julian_date(self) -> float:
        return self.seconds / _SECONDS_PER_DAY + _UNIX_EPOCH_JD

    def modified_julian_date(self) -> float:
        return self.julian_date() - _MJD_OFFSET

    def julian_centuries(self) -> float:
        """Julian centuries since J2000.0 on this scale."""
        return (self.julian_date() - _J2000_JD) / _DAYS_PER_CENTURY


@dataclass(frozen=True, order=True)
class EpochTAI(Epoch):
    scale: ClassVar[TimeScale] = TimeScale.TAI


@dataclass(frozen=True, order=True)
class EpochTT(Epoch):
    scale: ClassVar[TimeScale] = TimeScale.TT


@dataclass(frozen=True, order=True)
class EpochTDB(Epoch):
    scale: ClassVar[TimeScale] = TimeScale.TDB


@dataclass(frozen=True, order=True)
class EpochUT1(Epoch):
    scale: ClassVar[TimeScale] = TimeScale.UT1


@dataclass(frozen=True, order=True)
class EpochUTC(Epoch):
    """Coordinated Universal Time epoch, the source of every conversion."""

    scale: ClassVar[TimeScale] = TimeScale.UTC

    # -- Construction ------------------------------------------------------- #

    @staticmethod
    def from_datetime(dt: datetime) -> "EpochUTC":
        """Create from a datetime. Naive datetimes are treated as UTC."""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return EpochUTC(dt.timestamp())

    @staticmethod
    def from_date(
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: float = 0.0,
    ) -> "EpochUTC":
        """Create from calendar components; ``second`` may be fractional."""
        base = datetime(year, month, day, hour, minute, tzinfo=timezone.utc)
        return EpochUTC(base.timestamp() + second)

    @staticmethod
    def from_iso(text: str) -> "EpochUTC":
        """Parse an ISO-8601 timestamp such as ``2018-02-07T12:00:00.000Z``."""
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(text)
        except ValueError as exc:
            raise ValueError(f"Invalid ISO-8601 timestamp: {text!r}") from exc
        return EpochUTC.from_datetime(dt)

    # -- Conversions -------------------------------------------------------- #

    def to_tai(self, table: Optional[LeapSecondTable] = None) -> EpochTAI:
        leap = table if table is not None else load_leap_seconds()
        return EpochTAI(self.seconds + leap.offset(self.julian_date()))

    def to_tt(self, table: Optional[LeapSecondTable] = None) -> EpochTT:
        return EpochTT(self.to_tai(table).seconds + _TT_TAI_OFFSET)

    def to_tdb(self, table: Optional[LeapSecondTable] = None) -> EpochTDB:
        """Barycentric Dynamical Time, periodic correction evaluated at TT."""
        tt = self.to_tt(table)
        t = tt.julian_centuries()
        m = math.radians(357.5277233 + 35999.05034 * t)
        correction = 0.001658 * math.sin(m) + 0.00001385 * math.sin(2.0 * m)
        return EpochTDB(tt.seconds + correction)

    def to_ut1(self, eop: Optional[EOPTable] = None) -> EpochUT1:
        entry = resolve_eop(eop).lookup(self.modified_julian_date())
        return EpochUT1(self.seconds + entry.dut1)

    def to_scale(
        self,
        scale: TimeScale,
        leap_seconds: Optional[LeapSecondTable] = None,
        eop: Optional[EOPTable] = None,
    ) -> Epoch:
        """Convert to any supported scale."""
        if scale is TimeScale.UTC:
            return self
        if scale is TimeScale.TAI:
            return self.to_tai(leap_seconds)
        if scale is TimeScale.TT:
            return self.to_tt(leap_seconds)
        if scale is TimeScale.TDB:
            return self.to_tdb(leap_seconds)
        if scale is TimeScale.UT1:
            return self.to_ut1(eop)
        raise ValueError(f"Unsupported time scale: {scale!r}")

    def gmst_angle(self, eop: Optional[EOPTable] = None) -> float:
        """Greenwich Mean Sidereal Time in radians, [0, 2π).

        IAU-1982 polynomial in UT1 Julian centuries (Vallado Eq. 3-47).
        """
        t = self.to_ut1(eop).julian_centuries()
        seconds = (
            67310.54841
            + (876600.0 * 3600.0 + 8640184.812866) * t
            + 0.093104 * t * t
            - 6.2e-6 * t * t * t
        )
        return (seconds % _SECONDS_PER_DAY) / _SECONDS_PER_DAY * _TWO_PI
