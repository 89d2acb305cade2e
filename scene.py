from __future__ import annotations
import logging

from bezier import CurveModel, InvalidControlPointCount, Point2D, TangentSample
from interaction import InteractionController
from params import Params
from spring import SpringSimulator

log = logging.getLogger(__name__)

MIN_TANGENT_DENSITY = 1
MAX_TANGENT_DENSITY = 64


def _clamp(x, a, b):
    return a if x < a else (b if x > b else x)


def default_layout(width: float, height: float) -> list[Point2D]:
    """Rest pose spread across a ``width`` x ``height`` surface."""
    w = float(width)
    h = float(height)
    return [
        Point2D(0.15 * w, 0.50 * h),
        Point2D(0.35 * w, 0.30 * h),
        Point2D(0.65 * w, 0.70 * h),
        Point2D(0.85 * w, 0.50 * h),
    ]


class CurveScene:
    """
    One spring-driven curve and everything that acts on it.

    Owns the control point list and hands the same list to the curve model
    (reader), the simulator (only writer of P1/P2) and the interaction
    controller (injects force only). The host calls :meth:`tick` once per
    frame; pointer events may arrive at any time between ticks and never
    step the simulation themselves.
    """

    def __init__(self, control_points, params: Params | None = None):
        self.params = params or Params()
        p = self.params

        self.points: list[Point2D] = []
        self.rest_pose: list[Point2D] = []

        self.simulator = SpringSimulator(p.spring_constant, p.damping, p.influence)
        self.curve = CurveModel(self.points, p.sample_density)
        self.controller = InteractionController(self.simulator, self.points, p.interaction_radius)

        self.tangent_density = MIN_TANGENT_DENSITY
        self.set_tangent_sample_density(p.tangent_density)
        self.frame = 0

        self.install(control_points)

    @classmethod
    def from_size(cls, width: float, height: float, params: Params | None = None) -> "CurveScene":
        return cls(default_layout(width, height), params)

    # ---------- lifecycle ----------
    def install(self, control_points) -> None:
        """Adopt a new control point set (copied) and reset all spring memory."""
        if len(control_points) != 4:
            raise InvalidControlPointCount(len(control_points))

        pts = [Point2D(float(q[0]), float(q[1])) for q in control_points]
        # keep the list object: curve/controller hold a reference to it
        self.points[:] = pts
        self.rest_pose = list(pts)
        self.controller.pointer_up()
        self.simulator.initialize(self.points)
        log.info("installed control points %s", [(round(q.x, 1), round(q.y, 1)) for q in pts])

    def reset(self) -> None:
        self.install(self.rest_pose)

    def tick(self) -> None:
        self.controller.reapply()
        self.simulator.step(self.points)
        self.frame += 1

    # ---------- read-only views ----------
    @property
    def control_points(self) -> tuple[Point2D, ...]:
        return tuple(self.points)

    def curve_points(self) -> list[Point2D]:
        return self.curve.sample_curve_points()

    def tangents(self) -> list[TangentSample]:
        return self.curve.tangent_points(self.tangent_density)

    def curve_length(self) -> float:
        return self.curve.length()

    # ---------- tunables (apply from the next tick on) ----------
    def set_spring_constant(self, k: float) -> None:
        self.simulator.set_spring_constant(k)

    def set_damping_factor(self, c: float) -> None:
        self.simulator.set_damping(c)

    def set_interaction_radius(self, r: float) -> None:
        self.controller.set_interaction_radius(r)

    def set_tangent_sample_density(self, n: int) -> None:
        self.tangent_density = int(_clamp(int(n), MIN_TANGENT_DENSITY, MAX_TANGENT_DENSITY))

    # ---------- pointer events ----------
    def pointer_move(self, x: float, y: float) -> None:
        self.controller.pointer_move(x, y)

    def pointer_down(self, x: float, y: float) -> None:
        self.controller.pointer_down(x, y)

    def pointer_up(self) -> None:
        self.controller.pointer_up()

    def pointer_leave(self) -> None:
        self.controller.pointer_leave()
