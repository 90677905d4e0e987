# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Vector and matrix primitives backed by NumPy.

Vectors are plain 3-tuples of floats, 6-vectors are 6-tuples, and 3x3
matrices are tuples of row tuples. Rotations follow the vector-frame
convention: ``rot3(v, theta)`` expresses ``v`` in a frame rotated by
``theta`` about the third axis.

External dependency: numpy (allowed in domain layer).
"""
import math
from typing import Sequence

import numpy as np

Vector3 = tuple[float, float, float]
Vector6 = tuple[float, float, float, float, float, float]
Matrix3 = tuple[Vector3, Vector3, Vector3]

_TWO_PI = 2.0 * math.pi

ZERO: Vector3 = (0.0, 0.0, 0.0)
X_AXIS: Vector3 = (1.0, 0.0, 0.0)
Y_AXIS: Vector3 = (0.0, 1.0, 0.0)
Z_AXIS: Vector3 = (0.0, 0.0, 1.0)


# --------------------------------------------------------------------------- #
# Scalar helpers
# --------------------------------------------------------------------------- #


def sign(x: float) -> float:
    """Return -1.0 for negative input, otherwise 1.0."""
    return -1.0 if x < 0 else 1.0


def factorial(n: int) -> int:
    """Factorial of a non-negative integer."""
    if n < 0:
        raise ValueError(f"factorial undefined for negative n, got {n}")
    return math.factorial(n)


def eval_poly(x: float, coeffs: Sequence[float]) -> float:
    """Evaluate ``coeffs[0] + coeffs[1]*x + coeffs[2]*x**2 + ...``."""
    result = 0.0
    for c in reversed(coeffs):
        result = result * x + c
    return result


def linear_interpolate(
    x: float, x0: float, y0: float, x1: float, y1: float,
) -> float:
    """Interpolate the value at ``x`` on the line through (x0, y0), (x1, y1)."""
    if x1 == x0:
        return y0
    return y0 + (x - x0) * (y1 - y0) / (x1 - x0)


def wrap_two_pi(angle: float) -> float:
    """Reduce an angle into [0, 2π)."""
    return angle % _TWO_PI


def match_half_plane(angle: float, match: float) -> float:
    """Resolve an ``acos`` ambiguity against a reference angle.

    ``acos`` only returns values in [0, π]. Of the two candidates
    ``angle`` and ``2π - angle``, return whichever lies closer to
    ``match`` in signed angular distance.
    """
    a1 = angle
    a2 = _TWO_PI - angle
    d1 = math.atan2(math.sin(a1 - match), math.cos(a1 - match))
    d2 = math.atan2(math.sin(a2 - match), math.cos(a2 - match))
    return a1 if abs(d1) < abs(d2) else a2


# --------------------------------------------------------------------------- #
# Vector operations
# --------------------------------------------------------------------------- #


def vec_add(a: Sequence[float], b: Sequence[float]) -> Vector3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def vec_sub(a: Sequence[float], b: Sequence[float]) -> Vector3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def vec_scale(a: Sequence[float], k: float) -> Vector3:
    return (a[0] * k, a[1] * k, a[2] * k)


def vec_negate(a: Sequence[float]) -> Vector3:
    return (-a[0], -a[1], -a[2])


def vec_dot(a: Sequence[float], b: Sequence[float]) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def vec_cross(a: Sequence[float], b: Sequence[float]) -> Vector3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def vec_norm(a: Sequence[float]) -> float:
    return float(np.linalg.norm(a))


def vec_unit(a: Sequence[float]) -> Vector3:
    """Unit vector along ``a``; the zero vector maps to itself."""
    n = vec_norm(a)
    if n == 0.0:
        return ZERO
    return (a[0] / n, a[1] / n, a[2] / n)


def vec_angle(a: Sequence[float], b: Sequence[float]) -> float:
    """Angle between two vectors in radians, in [0, π]."""
    denom = vec_norm(a) * vec_norm(b)
    if denom == 0.0:
        return 0.0
    cos_angle = max(-1.0, min(1.0, vec_dot(a, b) / denom))
    return math.acos(cos_angle)


def line_of_sight(
    a: Sequence[float], b: Sequence[float], radius: float,
) -> bool:
    """Whether the segment from ``a`` to ``b`` clears a sphere at the origin.

    The sphere of ``radius`` blocks the line of sight only if the point of
    closest approach lies strictly between the two endpoints and inside
    the sphere.
    """
    a_mag_sq = vec_dot(a, a)
    ab = vec_dot(a, b)
    denom = a_mag_sq + vec_dot(b, b) - 2.0 * ab
    if denom == 0.0:
        return True
    tau = (a_mag_sq - ab) / denom
    if tau < 0.0 or tau > 1.0:
        return True
    closest_sq = (1.0 - tau) * a_mag_sq + ab * tau
    return closest_sq >= radius * radius


# --------------------------------------------------------------------------- #
# 6-vector (state) helpers
# --------------------------------------------------------------------------- #


def join_state(position: Sequence[float], velocity: Sequence[float]) -> Vector6:
    """Concatenate position and velocity into a 6-vector."""
    return (
        float(position[0]), float(position[1]), float(position[2]),
        float(velocity[0]), float(velocity[1]), float(velocity[2]),
    )


def split_state(state: Sequence[float]) -> tuple[Vector3, Vector3]:
    """Split a 6-vector into (position, velocity)."""
    return (
        (float(state[0]), float(state[1]), float(state[2])),
        (float(state[3]), float(state[4]), float(state[5])),
    )


# --------------------------------------------------------------------------- #
# 3x3 matrices and rotations
# --------------------------------------------------------------------------- #


def mat_identity() -> Matrix3:
    return ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0))


def mat_mul(a: Matrix3, b: Matrix3) -> Matrix3:
    """Multiply two 3x3 matrices."""
    result = np.asarray(a, dtype=float) @ np.asarray(b, dtype=float)
    return tuple(tuple(float(x) for x in row) for row in result)


def mat_vec(m: Matrix3, v: Sequence[float]) -> Vector3:
    """Multiply a 3x3 matrix by a 3-vector."""
    return (
        m[0][0] * v[0] + m[0][1] * v[1] + m[0][2] * v[2],
        m[1][0] * v[0] + m[1][1] * v[1] + m[1][2] * v[2],
        m[2][0] * v[0] + m[2][1] * v[1] + m[2][2] * v[2],
    )


def mat_transpose(m: Matrix3) -> Matrix3:
    return (
        (m[0][0], m[1][0], m[2][0]),
        (m[0][1], m[1][1], m[2][1]),
        (m[0][2], m[1][2], m[2][2]),
    )


def r1_matrix(theta: float) -> Matrix3:
    """Frame rotation about the first axis."""
    c, s = math.cos(theta), math.sin(theta)
    return ((1.0, 0.0, 0.0), (0.0, c, s), (0.0, -s, c))


def r2_matrix(theta: float) -> Matrix3:
    """Frame rotation about the second axis."""
    c, s = math.cos(theta), math.sin(theta)
    return ((c, 0.0, -s), (0.0, 1.0, 0.0), (s, 0.0, c))


def r3_matrix(theta: float) -> Matrix3:
    """Frame rotation about the third axis."""
    c, s = math.cos(theta), math.sin(theta)
    return ((c, s, 0.0), (-s, c, 0.0), (0.0, 0.0, 1.0))


def rot1(v: Sequence[float], theta: float) -> Vector3:
    c, s = math.cos(theta), math.sin(theta)
    return (v[0], c * v[1] + s * v[2], -s * v[1] + c * v[2])


def rot2(v: Sequence[float], theta: float) -> Vector3:
    c, s = math.cos(theta), math.sin(theta)
    return (c * v[0] - s * v[2], v[1], s * v[0] + c * v[2])


def rot3(v: Sequence[float], theta: float) -> Vector3:
    c, s = math.cos(theta), math.sin(theta)
    return (c * v[0] + s * v[1], -s * v[0] + c * v[1], v[2])


def cholesky(matrix: Sequence[Sequence[float]]) -> tuple[tuple[float, ...], ...]:
    """Lower-triangular Cholesky factor L with ``L @ L.T == matrix``.

    Args:
        matrix: Symmetric positive-definite square matrix.

    Returns:
        Lower-triangular factor as a tuple of row tuples.

    Raises:
        ValueError: If the matrix is not square or not positive-definite.
    """
    arr = np.asarray(matrix, dtype=float)
    if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
        raise ValueError(f"cholesky requires a square matrix, got shape {arr.shape}")
    try:
        lower = np.linalg.cholesky(arr)
    except np.linalg.LinAlgError as exc:
        raise ValueError(f"matrix is not positive-definite: {exc}") from exc
    return tuple(tuple(float(x) for x in row) for row in lower)
