# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Earth orientation file adapters.

FinalsFileSource reads IERS ``finals.all`` / ``finals2000A.all`` files
(fixed-column text). JsonEOPSource reads the JSON layout accepted by
``earth_orientation.load_eop``.
"""
import logging
from pathlib import Path

from orbitprop.domain.earth_orientation import EOPTable, load_eop, parse_finals
from orbitprop.ports import EarthOrientationSource

_log = logging.getLogger(__name__)


class FinalsFileSource(EarthOrientationSource):
    """Loads EOP data from an IERS finals file on disk."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> EOPTable:
        with open(self._path, encoding="utf-8") as f:
            table = parse_finals(f)
        if len(table) == 0:
            _log.warning("No EOP records parsed from %s", self._path)
        else:
            _log.info("Loaded %d EOP records from %s", len(table), self._path)
        return table


class JsonEOPSource(EarthOrientationSource):
    """Loads EOP data from a JSON table on disk."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> EOPTable:
        return load_eop(str(self._path))
