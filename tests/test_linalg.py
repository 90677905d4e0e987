# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for vector, matrix and rotation primitives."""

import ast
import math

import pytest


def _close(a, b, tol=1e-12):
    return all(abs(x - y) <= tol for x, y in zip(a, b))


class TestScalarHelpers:

    def test_sign(self):
        from orbitprop.domain.linalg import sign
        assert sign(-3.0) == -1.0
        assert sign(2.5) == 1.0
        assert sign(0.0) == 1.0

    def test_factorial(self):
        from orbitprop.domain.linalg import factorial
        assert factorial(0) == 1
        assert factorial(5) == 120

    def test_eval_poly_ascending_coefficients(self):
        from orbitprop.domain.linalg import eval_poly
        assert eval_poly(2.0, (1.0, 2.0, 3.0)) == pytest.approx(17.0)

    def test_linear_interpolate_midpoint(self):
        from orbitprop.domain.linalg import linear_interpolate
        assert linear_interpolate(5.0, 0.0, 10.0, 10.0, 20.0) == pytest.approx(15.0)

    def test_wrap_two_pi(self):
        from orbitprop.domain.linalg import wrap_two_pi
        assert wrap_two_pi(-0.5) == pytest.approx(2.0 * math.pi - 0.5)
        assert wrap_two_pi(7.0) == pytest.approx(7.0 - 2.0 * math.pi)


class TestMatchHalfPlane:
    """acos results resolved against a reference angle."""

    def test_upper_half_kept(self):
        from orbitprop.domain.linalg import match_half_plane
        angle = math.acos(math.cos(1.2))
        assert match_half_plane(angle, 1.2) == pytest.approx(1.2)

    def test_lower_half_flipped(self):
        from orbitprop.domain.linalg import match_half_plane
        angle = math.acos(math.cos(5.0))
        assert match_half_plane(angle, 5.0) == pytest.approx(5.0)

    def test_reference_wraps_negative(self):
        from orbitprop.domain.linalg import match_half_plane
        angle = math.acos(math.cos(-0.3))
        assert match_half_plane(angle, -0.3) == pytest.approx(2.0 * math.pi - 0.3)


class TestVectors:

    def test_cross_product(self):
        from orbitprop.domain.linalg import vec_cross, X_AXIS, Y_AXIS, Z_AXIS
        assert vec_cross(X_AXIS, Y_AXIS) == Z_AXIS

    def test_unit_and_norm(self):
        from orbitprop.domain.linalg import vec_norm, vec_unit
        assert vec_norm((3.0, 4.0, 0.0)) == pytest.approx(5.0)
        assert _close(vec_unit((3.0, 4.0, 0.0)), (0.6, 0.8, 0.0))

    def test_negate(self):
        from orbitprop.domain.linalg import vec_negate
        assert vec_negate((1.0, -2.0, 0.5)) == (-1.0, 2.0, -0.5)

    def test_angle_clamped_for_parallel_vectors(self):
        from orbitprop.domain.linalg import vec_angle
        assert vec_angle((1.0, 1.0, 1.0), (2.0, 2.0, 2.0)) == pytest.approx(0.0, abs=1e-7)

    def test_angle_perpendicular(self):
        from orbitprop.domain.linalg import vec_angle
        assert vec_angle((1.0, 0.0, 0.0), (0.0, 5.0, 0.0)) == pytest.approx(math.pi / 2)

    def test_state_join_split(self):
        from orbitprop.domain.linalg import join_state, split_state
        sv = join_state((1.0, 2.0, 3.0), (4.0, 5.0, 6.0))
        assert sv == (1.0, 2.0, 3.0, 4.0, 5.0, 6.0)
        assert split_state(sv) == ((1.0, 2.0, 3.0), (4.0, 5.0, 6.0))


class TestLineOfSight:

    def test_blocked_through_earth(self):
        from orbitprop.domain.linalg import line_of_sight
        assert not line_of_sight((7000.0, 0.0, 0.0), (-7000.0, 0.0, 0.0), 6378.137)

    def test_clear_above_limb(self):
        from orbitprop.domain.linalg import line_of_sight
        assert line_of_sight((7000.0, 0.0, 0.0), (7000.0, 100.0, 0.0), 6378.137)

    def test_closest_point_outside_segment(self):
        from orbitprop.domain.linalg import line_of_sight
        assert line_of_sight((7000.0, 0.0, 0.0), (14000.0, 0.0, 0.0), 6378.137)


class TestRotations:
    """Frame rotations: coordinates of a fixed vector in a rotated frame."""

    def test_rot1(self):
        from orbitprop.domain.linalg import rot1
        assert _close(rot1((0.0, 1.0, 0.0), math.pi / 2), (0.0, 0.0, -1.0))

    def test_rot2(self):
        from orbitprop.domain.linalg import rot2
        assert _close(rot2((0.0, 0.0, 1.0), math.pi / 2), (-1.0, 0.0, 0.0))

    def test_rot3(self):
        from orbitprop.domain.linalg import rot3
        assert _close(rot3((1.0, 0.0, 0.0), math.pi / 2), (0.0, -1.0, 0.0))

    def test_rotation_inverse(self):
        from orbitprop.domain.linalg import rot1, rot2, rot3
        v = (1234.5, -678.9, 4321.0)
        for rot in (rot1, rot2, rot3):
            assert _close(rot(rot(v, 0.37), -0.37), v, 1e-9)

    def test_matrix_form_matches(self):
        from orbitprop.domain.linalg import mat_vec, r1_matrix, r2_matrix, r3_matrix, rot1, rot2, rot3
        v = (1.0, 2.0, 3.0)
        for rot, matrix in ((rot1, r1_matrix), (rot2, r2_matrix), (rot3, r3_matrix)):
            assert _close(mat_vec(matrix(0.8), v), rot(v, 0.8))

    def test_transpose_is_inverse(self):
        from orbitprop.domain.linalg import mat_identity, mat_mul, mat_transpose, r3_matrix
        m = r3_matrix(1.1)
        product = mat_mul(m, mat_transpose(m))
        for row, expected in zip(product, mat_identity()):
            assert _close(row, expected)


class TestCholesky:

    def test_known_factor(self):
        from orbitprop.domain.linalg import cholesky
        lower = cholesky([[4.0, 12.0, -16.0], [12.0, 37.0, -43.0], [-16.0, -43.0, 98.0]])
        expected = ((2.0, 0.0, 0.0), (6.0, 1.0, 0.0), (-8.0, 5.0, 3.0))
        for row, exp in zip(lower, expected):
            assert _close(row, exp, 1e-9)

    def test_not_positive_definite_raises(self):
        from orbitprop.domain.linalg import cholesky
        with pytest.raises(ValueError):
            cholesky([[1.0, 2.0], [2.0, 1.0]])

    def test_non_square_raises(self):
        from orbitprop.domain.linalg import cholesky
        with pytest.raises(ValueError):
            cholesky([[1.0, 2.0, 3.0]])


class TestDomainPurity:
    """linalg.py imports nothing beyond stdlib math and numpy."""

    def test_no_external_imports(self):
        import orbitprop.domain.linalg as _mod
        with open(_mod.__file__) as f:
            tree = ast.parse(f.read())
        allowed = {"math", "numpy", "typing", "dataclasses"}
        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                for alias in node.names:
                    assert alias.name.split(".")[0] in allowed, \
                        f"Forbidden import: {alias.name}"
            elif isinstance(node, ast.ImportFrom) and node.module:
                assert node.module.split(".")[0] in allowed, \
                    f"Forbidden import from: {node.module}"
