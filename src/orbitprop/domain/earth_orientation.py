# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Earth Orientation Parameters (EOP): polar motion, UT1-UTC, LOD.

Daily IERS values keyed by Modified Julian Date. Lookups floor the
requested MJD to the containing day and never interpolate. Days that are
missing from the table resolve to an all-zero entry, so UT1 degrades to
UTC and polar motion to identity.

The engine never fetches EOP data itself. A process installs its table
once at start-up with ``install_default_eop`` (or passes a table
explicitly to each conversion); until then the default table is empty.

References:
    IERS Conventions 2010, Chapter 5.
    IERS Rapid Service/Prediction Center, finals.all format notes.
"""

import bisect
import json
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

logger = logging.getLogger(__name__)

# --------------------------------------------------------------------------- #
# Constants
# --------------------------------------------------------------------------- #

_ARCSEC_TO_RAD: float = math.pi / (180.0 * 3600.0)

# finals.all fixed columns (0-based, end exclusive)
_MJD_COLS = slice(7, 15)
_PM_X_COLS = slice(18, 27)
_PM_Y_COLS = slice(37, 46)
_DUT1_COLS = slice(58, 68)
_LOD_COLS = slice(79, 86)
_DPSI_COLS = slice(97, 106)
_DEPS_COLS = slice(116, 125)

# --------------------------------------------------------------------------- #
# Data structures
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class EOPEntry:
    """One day of Earth orientation data."""

    mjd: int
    pm_x: float = 0.0  # polar motion x (radians)
    pm_y: float = 0.0  # polar motion y (radians)
    dut1: float = 0.0  # UT1-UTC (seconds)
    lod: float = 0.0  # excess length of day (seconds)
    d_psi: float = 0.0  # celestial pole offset in longitude (milliarcseconds)
    d_eps: float = 0.0  # celestial pole offset in obliquity (milliarcseconds)


@dataclass(frozen=True)
class EOPTable:
    """Read-only table of daily EOP entries sorted by MJD."""

    entries: tuple[EOPEntry, ...] = ()
    _mjds: tuple[int, ...] = field(default=(), init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        mjds = [e.mjd for e in self.entries]
        if mjds != sorted(mjds):
            object.__setattr__(
                self, "entries",
                tuple(sorted(self.entries, key=lambda e: e.mjd)),
            )
        object.__setattr__(self, "_mjds", tuple(e.mjd for e in self.entries))

    def __len__(self) -> int:
        return len(self.entries)

    def lookup(self, mjd: float) -> EOPEntry:
        """Return the entry for the day containing ``mjd``.

        Missing days and days outside the table give a zero entry.
        """
        day = math.floor(mjd)
        mjds = self._mjds
        idx = bisect.bisect_left(mjds, day)
        if idx < len(mjds) and mjds[idx] == day:
            return self.entries[idx]
        logger.debug("No EOP entry for MJD %d, using zero offsets", day)
        return EOPEntry(mjd=day)


# --------------------------------------------------------------------------- #
# Parsing
# --------------------------------------------------------------------------- #


def _field(line: str, cols: slice) -> float:
    text = line[cols].strip()
    return float(text) if text else 0.0


def parse_finals(lines: Iterable[str]) -> EOPTable:
    """Parse IERS ``finals.all`` / ``finals2000A.all`` records.

    Parameters
    ----------
    lines : iterable of str
        Raw fixed-width records. Records of 68 characters or fewer (no
        UT1-UTC value yet) are skipped.

    Returns
    -------
    EOPTable sorted by MJD.

    Raises
    ------
    ValueError
        If a record has a malformed numeric field.
    """
    entries: list[EOPEntry] = []
    for raw in lines:
        line = raw.rstrip("\r\n")
        if len(line) <= 68:
            continue
        try:
            mjd = int(float(line[_MJD_COLS]))
            pm_x = _field(line, _PM_X_COLS) * _ARCSEC_TO_RAD
            pm_y = _field(line, _PM_Y_COLS) * _ARCSEC_TO_RAD
            dut1 = _field(line, _DUT1_COLS)
            lod = _field(line, _LOD_COLS) * 1e-3 if len(line) >= 86 else 0.0
            d_psi = d_eps = 0.0
            if len(line) >= 125:
                d_psi = _field(line, _DPSI_COLS)
                d_eps = _field(line, _DEPS_COLS)
        except ValueError as exc:
            raise ValueError(f"Malformed finals record {line[:15]!r}: {exc}") from exc
        entries.append(EOPEntry(
            mjd=mjd, pm_x=pm_x, pm_y=pm_y, dut1=dut1,
            lod=lod, d_psi=d_psi, d_eps=d_eps,
        ))
    entries.sort(key=lambda e: e.mjd)
    return EOPTable(entries=tuple(entries))


# --------------------------------------------------------------------------- #
# Loading
# --------------------------------------------------------------------------- #

_DEFAULT_TABLE: EOPTable = EOPTable()


def load_eop(path: str) -> EOPTable:
    """Load an EOP table from JSON.

    The file holds ``{"entries": [{"mjd": ..., "pm_x_arcsec": ...,
    "pm_y_arcsec": ..., "dut1": ..., "lod": ...}, ...]}``. Polar motion is
    stored in arcseconds and converted to radians.
    """
    with open(Path(path)) as f:
        data = json.load(f)

    try:
        entries = tuple(
            EOPEntry(
                mjd=int(e["mjd"]),
                pm_x=float(e.get("pm_x_arcsec", 0.0)) * _ARCSEC_TO_RAD,
                pm_y=float(e.get("pm_y_arcsec", 0.0)) * _ARCSEC_TO_RAD,
                dut1=float(e.get("dut1", 0.0)),
                lod=float(e.get("lod", 0.0)),
                d_psi=float(e.get("d_psi", 0.0)),
                d_eps=float(e.get("d_eps", 0.0)),
            )
            for e in data["entries"]
        )
    except (KeyError, TypeError) as exc:
        raise ValueError(f"Malformed EOP table {path}: {exc}") from exc

    logger.info("Loaded %d EOP entries from %s", len(entries), path)
    return EOPTable(entries=entries)


def install_default_eop(table: EOPTable) -> None:
    """Install the process-wide EOP table used when none is passed."""
    global _DEFAULT_TABLE
    _DEFAULT_TABLE = table
    logger.info("Installed default EOP table with %d entries", len(table))


def default_eop() -> EOPTable:
    """Return the process-wide EOP table (empty unless installed)."""
    return _DEFAULT_TABLE


def resolve_eop(table: Optional[EOPTable]) -> EOPTable:
    """Return ``table`` if given, otherwise the process default."""
    return table if table is not None else _DEFAULT_TABLE
