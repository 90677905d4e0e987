# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for body constants, the analytic Sun/Moon ephemerides and Earth shadow."""

import ast
import math

import pytest


def _angle_deg(a, b):
    from orbitprop.domain.linalg import vec_angle
    return math.degrees(vec_angle(a, b))


def _norm(v):
    return math.sqrt(sum(x * x for x in v))


class TestConstants:

    def test_earth_derived_values(self):
        from orbitprop.domain.bodies import Earth
        assert Earth.RADIUS_POLAR == pytest.approx(6356.752314, abs=1e-5)
        assert Earth.ECCENTRICITY_SQUARED == pytest.approx(0.00669437999, abs=1e-10)

    def test_earth_rotation_lod(self):
        from orbitprop.domain.bodies import Earth
        assert Earth.rotation() == (0.0, 0.0, Earth.ROTATION_RATE)
        slower = Earth.rotation(lod=0.001)
        assert slower[2] < Earth.ROTATION_RATE

    def test_solar_pressure_units(self):
        """~4.5e-6 N/m² at 1 AU."""
        from orbitprop.domain.bodies import Sun
        assert Sun.SOLAR_PRESSURE == pytest.approx(4.513e-6, rel=1e-3)

    def test_constants_frozen(self):
        from orbitprop.domain.bodies import Earth
        with pytest.raises(AttributeError):
            Earth.MU = 1.0


class TestSunPosition:

    def test_matches_reference(self, leo_state):
        from orbitprop.domain.solar import sun_position
        expected = (-3092558.657913523, -134994294.84136814, -58520244.455122419)
        actual = sun_position(leo_state.epoch)
        assert abs(_norm(expected) - _norm(actual)) <= 7000.0
        assert _angle_deg(expected, actual) <= 0.3


class TestMoonPosition:

    def test_matches_reference(self, leo_state):
        from orbitprop.domain.lunar import moon_position
        expected = (154366.09642497, 318375.615233499, 109213.672184026)
        actual = moon_position(leo_state.epoch)
        assert abs(_norm(expected) - _norm(actual)) <= 300.0
        assert _angle_deg(expected, actual) <= 0.25


class TestShadow:

    def test_behind_earth_is_shadowed(self):
        from orbitprop.domain.solar import in_shadow
        sun = (1.496e8, 0.0, 0.0)
        assert in_shadow((-7000.0, 0.0, 0.0), sun)

    def test_sunlit_side_is_lit(self):
        from orbitprop.domain.solar import in_shadow
        sun = (1.496e8, 0.0, 0.0)
        assert not in_shadow((7000.0, 0.0, 0.0), sun)

    def test_night_side_off_axis_is_lit(self):
        from orbitprop.domain.solar import in_shadow
        sun = (1.496e8, 0.0, 0.0)
        assert not in_shadow((-1000.0, 7000.0, 0.0), sun)

    def test_penumbra_cone_widens_behind_earth(self):
        from orbitprop.domain.solar import in_shadow
        sun = (1.496e8, 0.0, 0.0)
        # Just outside the Earth's radius, but inside the widening cone
        assert in_shadow((-20000.0, 6400.0, 0.0), sun)
        assert not in_shadow((-20000.0, 6500.0, 0.0), sun)

    def test_agrees_with_line_of_sight(self, leo_state):
        """Binary shadow and Sun line of sight disagree only near the terminator."""
        from orbitprop.domain.bodies import Earth
        from orbitprop.domain.force_model import ForceModel
        from orbitprop.domain.linalg import line_of_sight
        from orbitprop.domain.numerical_propagation import RungeKutta4Propagator
        from orbitprop.domain.solar import sun_position, sun_shadow

        rk4 = RungeKutta4Propagator(leo_state, ForceModel.with_two_body(), step_size=10.0)
        mismatches = 0
        epoch = leo_state.epoch
        for _ in range(1440):
            state = rk4.propagate(epoch)
            shadow = sun_shadow(epoch, state.position)
            sight = line_of_sight(state.position, sun_position(epoch), Earth.RADIUS_MEAN)
            if shadow == sight:
                mismatches += 1
            epoch = epoch.roll(60.0)
        assert mismatches <= 3


class TestDomainPurity:

    @pytest.mark.parametrize("module", ["bodies", "solar", "lunar"])
    def test_no_external_imports(self, module):
        import importlib
        _mod = importlib.import_module(f"orbitprop.domain.{module}")
        with open(_mod.__file__) as f:
            tree = ast.parse(f.read())
        allowed = {"math", "numpy", "dataclasses", "typing"}
        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                for alias in node.names:
                    top = alias.name.split(".")[0]
                    assert top in allowed or top == "orbitprop", \
                        f"Forbidden import: {alias.name}"
            elif isinstance(node, ast.ImportFrom) and node.module:
                top = node.module.split(".")[0]
                assert top in allowed or top == "orbitprop", \
                    f"Forbidden import from: {node.module}"
