# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for two-body Kepler propagation."""

import ast
import math

import pytest


@pytest.fixture
def iss_elements():
    from orbitprop.domain.coordinates import ClassicalElements
    from orbitprop.domain.time_systems import EpochUTC
    return ClassicalElements(
        EpochUTC.from_iso("2018-02-07T12:00:00.000Z"),
        6787.23371,
        0.0008787,
        math.radians(51.34474),
        math.radians(304.51644),
        math.radians(54.44526),
        math.radians(279.68095),
    )


class TestSolveKepler:

    @pytest.mark.parametrize("m,e", [(0.0, 0.1), (1.0, 0.0), (2.5, 0.3), (5.9, 0.7)])
    def test_satisfies_equation(self, m, e):
        from orbitprop.domain.kepler_propagation import solve_kepler
        ecc = solve_kepler(m, e, max_iterations=200)
        assert ecc - e * math.sin(ecc) == pytest.approx(m, abs=1e-10)

    def test_iteration_cap_returns_last_iterate(self):
        from orbitprop.domain.kepler_propagation import solve_kepler
        one = solve_kepler(2.0, 0.5, max_iterations=1)
        assert one == pytest.approx(2.0 + 0.5 * math.sin(2.0))

    def test_converged_returns_accepted_iterate(self):
        from orbitprop.domain.kepler_propagation import solve_kepler
        # First update moves by ~0.45 rad, inside the tolerance
        assert solve_kepler(2.0, 0.5, tolerance=1.0) == 2.0


class TestKeplerPropagator:

    def test_one_hour_reference(self, iss_elements):
        from orbitprop.domain.kepler_propagation import KeplerPropagator
        prop = KeplerPropagator(iss_elements)
        state = prop.propagate(iss_elements.epoch.roll(3600.0))
        expected = (-5020.445, 3881.912, -2421.653)
        miss = math.sqrt(sum((g - w) ** 2 for g, w in zip(state.position, expected)))
        assert miss < 1e-3
        for got, want in zip(state.velocity, (-1.528, -5.29, -5.321)):
            assert got == pytest.approx(want, abs=1e-3)

    def test_only_true_anomaly_changes(self, iss_elements):
        from orbitprop.domain.kepler_propagation import KeplerPropagator
        el = KeplerPropagator(iss_elements).elements_at(iss_elements.epoch.roll(1234.0))
        assert el.semimajor_axis == iss_elements.semimajor_axis
        assert el.eccentricity == iss_elements.eccentricity
        assert el.inclination == iss_elements.inclination
        assert el.right_ascension == iss_elements.right_ascension
        assert el.argument_of_perigee == iss_elements.argument_of_perigee
        assert el.true_anomaly != iss_elements.true_anomaly

    def test_full_period_returns_to_start(self, iss_elements):
        from orbitprop.domain.kepler_propagation import KeplerPropagator
        prop = KeplerPropagator(iss_elements)
        start = prop.state
        end = prop.propagate(iss_elements.epoch.roll(iss_elements.period))
        for a, b in zip(start.position, end.position):
            assert a == pytest.approx(b, abs=1e-6)

    def test_backward(self, iss_elements):
        from orbitprop.domain.kepler_propagation import KeplerPropagator
        prop = KeplerPropagator(iss_elements)
        earlier = prop.propagate(iss_elements.epoch.roll(-1800.0))
        later = KeplerPropagator.from_state(earlier).propagate(iss_elements.epoch)
        for a, b in zip(later.position, iss_elements.to_j2000().position):
            assert a == pytest.approx(b, abs=1e-4)

    def test_eccentric_orbit_radius_bounds(self):
        from orbitprop.domain.coordinates import ClassicalElements
        from orbitprop.domain.kepler_propagation import KeplerPropagator
        from orbitprop.domain.time_systems import EpochUTC
        el = ClassicalElements(
            EpochUTC.from_iso("2020-01-01T00:00:00.000Z"),
            26600.0, 0.74, math.radians(63.4), 0.5, math.radians(270.0), 0.1,
        )
        prop = KeplerPropagator(el)
        for k in range(24):
            r = prop.propagate(el.epoch.roll(k * el.period / 24.0))
            radius = math.sqrt(sum(x * x for x in r.position))
            assert el.perigee - 1e-6 <= radius <= el.apogee + 1e-6

    def test_reset_and_state(self, iss_elements):
        from orbitprop.domain.kepler_propagation import KeplerPropagator
        prop = KeplerPropagator(iss_elements)
        initial = prop.state
        assert initial.epoch == iss_elements.epoch
        prop.propagate(iss_elements.epoch.roll(60.0))
        assert prop.state.epoch == iss_elements.epoch.roll(60.0)
        prop.reset()
        assert prop.state is initial
        assert prop.elements is iss_elements

    def test_reset_then_propagate_to_initial_epoch(self, iss_elements):
        from orbitprop.domain.kepler_propagation import KeplerPropagator
        prop = KeplerPropagator(iss_elements)
        initial = prop.state
        prop.propagate(iss_elements.epoch.roll(2700.0))
        prop.reset()
        got = prop.propagate(iss_elements.epoch)
        assert got.position == initial.position
        assert got.velocity == initial.velocity

    def test_step(self, iss_elements):
        from orbitprop.domain.kepler_propagation import KeplerPropagator
        states = KeplerPropagator(iss_elements).step(iss_elements.epoch, 60.0, 10)
        assert len(states) == 11
        assert states[-1].epoch == iss_elements.epoch.roll(600.0)


class TestKeplerPurity:

    def test_no_external_imports(self):
        import orbitprop.domain.kepler_propagation as _mod
        with open(_mod.__file__) as f:
            tree = ast.parse(f.read())
        allowed = {"math", "dataclasses", "typing", "logging"}
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
