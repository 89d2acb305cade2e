# bezier.py
# Cubic Bezier math for a fixed four-point control polygon:
# - B(t)  = u^3 P0 + 3u^2 t P1 + 3u t^2 P2 + t^3 P3          (u = 1 - t)
# - B'(t) = 3u^2 (P1 - P0) + 6ut (P2 - P1) + 3t^2 (P3 - P2)
# Functions never mutate the control points they are given.

from __future__ import annotations
from dataclasses import dataclass
from typing import NamedTuple, Sequence
import math


class Point2D(NamedTuple):
    x: float
    y: float


# Directions and velocities use the same value type.
Vector2D = Point2D

ZERO = Point2D(0.0, 0.0)


class InvalidControlPointCount(ValueError):
    """Raised when a curve operation gets anything other than four control points."""

    def __init__(self, count: int):
        super().__init__(f"Cubic Bezier requires exactly 4 control points, got {count}")
        self.count = count


@dataclass(frozen=True)
class TangentSample:
    point: Point2D
    direction: Vector2D   # unit length, or ZERO where the curve is stationary


def add(a, b) -> Point2D:
    return Point2D(a[0] + b[0], a[1] + b[1])


def sub(a, b) -> Point2D:
    return Point2D(a[0] - b[0], a[1] - b[1])


def mul(a, s: float) -> Point2D:
    return Point2D(a[0] * s, a[1] * s)


def dist(a, b) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def _check(control_points: Sequence) -> None:
    if len(control_points) != 4:
        raise InvalidControlPointCount(len(control_points))


def evaluate(control_points: Sequence, t: float) -> Point2D:
    """Point on the curve at parameter ``t`` (any real t is accepted)."""
    _check(control_points)
    p0, p1, p2, p3 = control_points

    u = 1.0 - t
    b0 = u * u * u
    b1 = 3.0 * u * u * t
    b2 = 3.0 * u * t * t
    b3 = t * t * t

    x = b0 * p0[0] + b1 * p1[0] + b2 * p2[0] + b3 * p3[0]
    y = b0 * p0[1] + b1 * p1[1] + b2 * p2[1] + b3 * p3[1]
    return Point2D(float(x), float(y))


def derivative(control_points: Sequence, t: float) -> Vector2D:
    """Exact first derivative dB/dt at ``t``."""
    _check(control_points)
    p0, p1, p2, p3 = control_points

    u = 1.0 - t
    a = 3.0 * u * u
    b = 6.0 * u * t
    c = 3.0 * t * t

    dx = a * (p1[0] - p0[0]) + b * (p2[0] - p1[0]) + c * (p3[0] - p2[0])
    dy = a * (p1[1] - p0[1]) + b * (p2[1] - p1[1]) + c * (p3[1] - p2[1])
    return Point2D(float(dx), float(dy))


def normalized_derivative(control_points: Sequence, t: float) -> Vector2D:
    """
    Unit tangent at ``t``.

    Returns ZERO (not a division error) where the derivative vanishes; the
    direction is undefined there and callers draw nothing.
    """
    d = derivative(control_points, t)
    n = math.hypot(d.x, d.y)
    if n == 0.0:
        return ZERO
    return Point2D(d.x / n, d.y / n)


def sample(control_points: Sequence, count: int) -> list[Point2D]:
    """``count + 1`` points at t = i / count, i = 0..count."""
    _check(control_points)
    count = int(count)
    if count < 1:
        raise ValueError(f"sample count must be >= 1, got {count}")
    return [evaluate(control_points, i / count) for i in range(count + 1)]


def approximate_length(control_points: Sequence, count: int) -> float:
    """
    Polyline approximation of the arc length using ``count`` segments.

    This under-estimates the true arc length; the error shrinks as ``count``
    grows.
    """
    pts = sample(control_points, count)
    return float(sum(dist(pts[i - 1], pts[i]) for i in range(1, len(pts))))


def tangent_samples(control_points: Sequence, density: int) -> list[TangentSample]:
    """``density + 1`` evenly spaced (point, unit tangent) pairs for drawing."""
    _check(control_points)
    density = int(density)
    if density < 1:
        raise ValueError(f"tangent density must be >= 1, got {density}")
    out = []
    for i in range(density + 1):
        t = i / density
        out.append(TangentSample(evaluate(control_points, t), normalized_derivative(control_points, t)))
    return out


class CurveModel:
    """
    Curve bound to a live control point list.

    The list is shared with the scene (the spring simulator rewrites slots 1
    and 2 every tick); this object only reads it. ``curve_points`` caches the
    last polyline produced by :meth:`sample_curve_points`.
    """

    def __init__(self, control_points: list, sample_density: int = 200):
        self.control_points = control_points
        self.sample_density = int(sample_density)
        self.curve_points: list[Point2D] = []

    def point_at(self, t: float) -> Point2D:
        return evaluate(self.control_points, t)

    def tangent_at(self, t: float) -> Vector2D:
        return normalized_derivative(self.control_points, t)

    def sample_curve_points(self) -> list[Point2D]:
        self.curve_points = sample(self.control_points, self.sample_density)
        return self.curve_points

    def tangent_points(self, density: int) -> list[TangentSample]:
        return tangent_samples(self.control_points, density)

    def length(self) -> float:
        return approximate_length(self.control_points, self.sample_density)
