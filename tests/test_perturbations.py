# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for atmosphere density, drag, solar radiation pressure and third-body forces."""

import ast
import math

import pytest


def _norm(v):
    return math.sqrt(sum(x * x for x in v))


def _unit(v):
    n = _norm(v)
    return tuple(x / n for x in v)


@pytest.fixture
def epoch():
    from orbitprop.domain.time_systems import EpochUTC
    return EpochUTC.from_iso("2018-12-21T00:00:00.000Z")


class TestAtmosphere:

    def test_table_base_value(self):
        from orbitprop.domain.atmosphere import atmospheric_density
        assert atmospheric_density(400.0) == pytest.approx(3.725e-12)

    def test_scale_height_decay(self):
        from orbitprop.domain.atmosphere import atmospheric_density
        expected = 3.725e-12 * math.exp(-50.0 / 58.515)
        assert atmospheric_density(450.0) == pytest.approx(expected)

    def test_monotonically_decreasing(self):
        from orbitprop.domain.atmosphere import atmospheric_density
        values = [atmospheric_density(h) for h in range(0, 1000, 25)]
        assert all(a > b for a, b in zip(values, values[1:]))

    def test_above_table_keeps_last_band(self):
        from orbitprop.domain.atmosphere import atmospheric_density
        expected = 3.019e-15 * math.exp(-500.0 / 268.0)
        assert atmospheric_density(1500.0) == pytest.approx(expected)

    def test_below_table_keeps_first_band(self):
        from orbitprop.domain.atmosphere import atmospheric_density
        assert atmospheric_density(-1.0) == pytest.approx(1.225 * math.exp(1.0 / 7.249))

    def test_custom_model(self):
        from orbitprop.domain.atmosphere import (
            AtmosphereBand, ExponentialAtmosphere, atmospheric_density,
        )
        model = ExponentialAtmosphere(bands=(AtmosphereBand(0.0, 1.0, 10.0),))
        assert atmospheric_density(10.0, model) == pytest.approx(math.exp(-1.0))

    def test_empty_model_raises(self):
        from orbitprop.domain.atmosphere import ExponentialAtmosphere
        with pytest.raises(ValueError):
            ExponentialAtmosphere(bands=())

    def test_malformed_table_raises(self, tmp_path):
        from orbitprop.domain.atmosphere import load_atmosphere
        path = tmp_path / "atm.json"
        path.write_text('{"entries": [{"altitude_km": 0}]}')
        with pytest.raises(ValueError):
            load_atmosphere(str(path))


class TestDrag:

    def test_config_validation(self):
        from orbitprop.domain.drag import DragConfig
        with pytest.raises(ValueError):
            DragConfig(cd=2.2, area_m2=10.0, mass_kg=0.0)
        with pytest.raises(ValueError):
            DragConfig(cd=2.2, area_m2=-1.0, mass_kg=100.0)
        with pytest.raises(ValueError):
            DragConfig(cd=-2.2, area_m2=1.0, mass_kg=100.0)

    def test_ballistic_coefficient(self):
        from orbitprop.domain.drag import DragConfig
        assert DragConfig(cd=2.2, area_m2=10.0, mass_kg=500.0).ballistic_coefficient == pytest.approx(0.044)

    def test_known_value(self, epoch):
        from orbitprop.domain.atmosphere import atmospheric_density
        from orbitprop.domain.bodies import Earth
        from orbitprop.domain.drag import AtmosphericDragForce, DragConfig
        r = Earth.RADIUS_EQUATOR + 400.0
        v = math.sqrt(Earth.MU / r)
        force = AtmosphericDragForce(DragConfig(cd=2.2, area_m2=10.0, mass_kg=500.0))
        acc = force.acceleration(epoch, (r, 0.0, 0.0), (0.0, v, 0.0))

        v_rel = (v - Earth.ROTATION_RATE * r) * 1000.0
        expected = -0.5 * 0.044 * atmospheric_density(400.0) * v_rel * v_rel / 1000.0
        assert acc[0] == pytest.approx(0.0, abs=1e-20)
        assert acc[1] == pytest.approx(expected, rel=1e-9)
        assert acc[2] == pytest.approx(0.0, abs=1e-20)

    def test_opposes_relative_velocity(self, epoch, leo_state):
        from orbitprop.domain.drag import AtmosphericDragForce, DragConfig
        force = AtmosphericDragForce(DragConfig(cd=2.2, area_m2=10.0, mass_kg=500.0))
        acc = force.acceleration(epoch, leo_state.position, leo_state.velocity)
        dot = sum(a * v for a, v in zip(acc, leo_state.velocity))
        assert dot < 0.0

    def test_co_rotating_point_has_no_drag(self, epoch):
        from orbitprop.domain.bodies import Earth
        from orbitprop.domain.drag import AtmosphericDragForce, DragConfig
        r = Earth.RADIUS_EQUATOR + 400.0
        force = AtmosphericDragForce(DragConfig(cd=2.2, area_m2=10.0, mass_kg=500.0))
        acc = force.acceleration(epoch, (r, 0.0, 0.0), (0.0, Earth.ROTATION_RATE * r, 0.0))
        assert acc == (0.0, 0.0, 0.0)


class TestSolarRadiationPressure:

    def test_config_validation(self):
        from orbitprop.domain.radiation_pressure import SRPConfig
        with pytest.raises(ValueError):
            SRPConfig(cr=1.2, area_m2=10.0, mass_kg=-5.0)

    def test_lit_magnitude_and_direction(self, epoch):
        from orbitprop.domain.bodies import ASTRONOMICAL_UNIT, Sun
        from orbitprop.domain.radiation_pressure import SRPConfig, SolarRadiationPressureForce
        from orbitprop.domain.solar import sun_position
        sun = sun_position(epoch)
        s = _unit(sun)
        side = _unit((s[1], -s[0], 0.0))
        position = tuple(7000.0 * x for x in side)

        force = SolarRadiationPressureForce(SRPConfig(cr=1.2, area_m2=10.0, mass_kg=500.0))
        acc = force.acceleration(epoch, position, (0.0, 0.0, 0.0))

        dist = _norm(tuple(p - q for p, q in zip(position, sun)))
        expected = Sun.SOLAR_PRESSURE * 1.2 * 0.02 * (ASTRONOMICAL_UNIT / dist) ** 2 / 1000.0
        assert _norm(acc) == pytest.approx(expected, rel=1e-9)
        # Pushed away from the Sun
        assert sum(a * b for a, b in zip(acc, s)) < 0.0

    def test_zero_in_shadow(self, epoch):
        from orbitprop.domain.radiation_pressure import SRPConfig, SolarRadiationPressureForce
        from orbitprop.domain.solar import sun_position
        s = _unit(sun_position(epoch))
        position = tuple(-7000.0 * x for x in s)
        force = SolarRadiationPressureForce(SRPConfig(cr=1.2, area_m2=10.0, mass_kg=500.0))
        assert force.acceleration(epoch, position, (0.0, 0.0, 0.0)) == (0.0, 0.0, 0.0)


class TestThirdBody:

    def test_zero_at_geocenter(self):
        from orbitprop.domain.third_body import third_body_acceleration
        acc = third_body_acceleration(4902.801, (384400.0, 0.0, 0.0), (0.0, 0.0, 0.0))
        assert _norm(acc) < 1e-20

    def test_tidal_stretch_along_axis(self):
        from orbitprop.domain.third_body import third_body_acceleration
        mu, d, r = 4902.801, 384400.0, 7000.0
        acc = third_body_acceleration(mu, (d, 0.0, 0.0), (r, 0.0, 0.0))
        # Sub-body point is pulled toward the body, ~2 mu r / d^3
        assert acc[0] == pytest.approx(2.0 * mu * r / d ** 3, rel=0.05)

    def test_magnitudes(self, epoch, leo_state):
        from orbitprop.domain.third_body import LunarThirdBodyForce, SolarThirdBodyForce
        moon = LunarThirdBodyForce().acceleration(epoch, leo_state.position, leo_state.velocity)
        sun = SolarThirdBodyForce().acceleration(epoch, leo_state.position, leo_state.velocity)
        assert 1e-10 < _norm(moon) < 1e-8
        assert 1e-11 < _norm(sun) < 5e-9


class TestDomainPurity:

    @pytest.mark.parametrize("module", [
        "atmosphere", "drag", "radiation_pressure", "third_body",
    ])
    def test_no_external_imports(self, module):
        import importlib
        _mod = importlib.import_module(f"orbitprop.domain.{module}")
        with open(_mod.__file__) as f:
            tree = ast.parse(f.read())
        allowed = {
            "math", "numpy", "dataclasses", "typing", "json", "pathlib",
            "bisect", "logging",
        }
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
