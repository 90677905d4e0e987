# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Shared fixtures: IERS finals records around 2004-04-06 and reference epochs."""

import pytest

FINALS_LINES = [
    " 4 4 5 53100.00 I -0.141198 0.000079  0.331215 0.000051  I-0.4384012 0.0000027  1.5611 0.0020  I   -52.007     .409    -4.039     .198 -0.141110  0.330940 -0.4383520   -52.100    -4.100",
    " 4 4 6 53101.00 I -0.140722 0.000071  0.333536 0.000057  I-0.4399498 0.0000028  1.5244 0.0019  I   -52.215     .380    -3.846     .166 -0.140720  0.333270 -0.4399620   -52.500    -4.000",
    " 4 4 7 53102.00 I -0.140160 0.000067  0.336396 0.000060  I-0.4414071 0.0000026  1.3591 0.0024  I   -52.703     .380    -3.878     .166 -0.140070  0.336140 -0.4414210   -52.700    -4.100",
]


@pytest.fixture
def finals_lines():
    return list(FINALS_LINES)


@pytest.fixture
def finals_table():
    from orbitprop.domain.earth_orientation import parse_finals
    return parse_finals(FINALS_LINES)


@pytest.fixture
def leo_state():
    """Polar LEO state at 2018-12-21T00:00:00Z."""
    from orbitprop.domain.coordinates import J2000
    from orbitprop.domain.time_systems import EpochUTC
    return J2000(
        EpochUTC.from_iso("2018-12-21T00:00:00.000Z"),
        (-1117.913276, 73.093299, -7000.018272),
        (3.531365461, 6.583914964, -0.495649656),
    )
