# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
3-vector primitives over plain float tuples.

normalize() of a (near-)zero vector returns the zero vector instead of
dividing by zero; callers treat a zero result as "undefined direction".
"""
import math

Vector3 = tuple[float, float, float]

ZERO: Vector3 = (0.0, 0.0, 0.0)
NORMALIZE_EPSILON = 1e-12


def dot(a: Vector3, b: Vector3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def cross(a: Vector3, b: Vector3) -> Vector3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def magnitude(v: Vector3) -> float:
    return math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])


def add(a: Vector3, b: Vector3) -> Vector3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def subtract(a: Vector3, b: Vector3) -> Vector3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def scale(v: Vector3, factor: float) -> Vector3:
    return (v[0] * factor, v[1] * factor, v[2] * factor)


def normalize(v: Vector3) -> Vector3:
    """Unit vector along v, or the zero vector when |v| is below NORMALIZE_EPSILON."""
    mag = magnitude(v)
    if not mag > NORMALIZE_EPSILON:
        return ZERO
    return (v[0] / mag, v[1] / mag, v[2] / mag)


def is_finite(v: Vector3) -> bool:
    return all(math.isfinite(c) for c in v)
