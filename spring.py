from __future__ import annotations
from dataclasses import dataclass, replace
import logging

from bezier import Point2D, ZERO, add, sub, mul

log = logging.getLogger(__name__)

DYNAMIC_INDICES = (1, 2)

# Per-step velocity multiplier applied after integration; guarantees settling.
VELOCITY_DECAY = 0.995
# Fraction of (target - position) added to velocity on each injection.
KICK_GAIN = 0.1
DEFAULT_INFLUENCE = 0.8

K_MIN, K_MAX = 0.01, 0.5
C_MIN, C_MAX = 0.7, 0.99


def _clamp(x, a, b):
    return a if x < a else (b if x > b else x)


@dataclass
class SpringState:
    velocity: Point2D = ZERO
    anchor: Point2D = ZERO


class SpringSimulator:
    """Unit-mass spring-damper for the two interior control points.

    Each dynamic point is pulled toward its *anchor*, not toward its original
    pose. Input moves the anchor (see :meth:`inject_force`), the spring then
    drags the point after it, which gives the rope-like lag and overshoot.

    Fixed step: one :meth:`step` call is one time unit, meant to run once per
    rendered frame. Bad indices are ignored rather than raised so a single
    malformed input never stops the frame loop.
    """

    def __init__(self, spring_constant: float = 0.15, damping: float = 0.88,
                 influence: float = DEFAULT_INFLUENCE):
        self._k = 0.15
        self._c = 0.88
        self.spring_constant = spring_constant
        self.damping = damping
        self.influence = float(influence)
        self._states: dict[int, SpringState] = {}

    # ---------- tunables ----------
    @property
    def spring_constant(self) -> float:
        return self._k

    @spring_constant.setter
    def spring_constant(self, k: float) -> None:
        self._k = float(_clamp(float(k), K_MIN, K_MAX))

    @property
    def damping(self) -> float:
        return self._c

    @damping.setter
    def damping(self, c: float) -> None:
        self._c = float(_clamp(float(c), C_MIN, C_MAX))

    def set_spring_constant(self, k: float) -> None:
        self.spring_constant = k
        log.debug("spring constant -> %.3f", self._k)

    def set_damping(self, c: float) -> None:
        self.damping = c
        log.debug("damping -> %.3f", self._c)

    # ---------- state ----------
    def initialize(self, control_points) -> None:
        self._states = {}
        for i in DYNAMIC_INDICES:
            if i >= len(control_points):
                continue
            p = control_points[i]
            self._states[i] = SpringState(velocity=ZERO, anchor=Point2D(float(p[0]), float(p[1])))

    def state(self, index: int) -> SpringState | None:
        s = self._states.get(index)
        return None if s is None else replace(s)

    def _tracked(self, index: int, control_points) -> SpringState | None:
        if index not in DYNAMIC_INDICES or index >= len(control_points):
            return None
        return self._states.get(index)

    # ---------- integration ----------
    def step(self, control_points) -> None:
        k = self._k
        c = self._c
        for i in DYNAMIC_INDICES:
            s = self._tracked(i, control_points)
            if s is None:
                continue

            p = control_points[i]
            displacement = sub(p, s.anchor)

            # F = -k d - c v, mass 1 so F is the acceleration
            accel = add(mul(displacement, -k), mul(s.velocity, -c))

            v = add(s.velocity, accel)
            control_points[i] = add(p, v)
            s.velocity = mul(v, VELOCITY_DECAY)

    def inject_force(self, index: int, target_x: float, target_y: float, control_points) -> None:
        s = self._tracked(index, control_points)
        if s is None:
            log.debug("inject_force ignored for index %r", index)
            return

        target = Point2D(float(target_x), float(target_y))

        # soft leash: anchor moves part of the way toward the target
        s.anchor = add(s.anchor, mul(sub(target, s.anchor), self.influence))

        # immediate kick so the first contact frame already responds
        s.velocity = add(s.velocity, mul(sub(target, control_points[index]), KICK_GAIN))

    def reset_velocity(self, index: int) -> None:
        s = self._states.get(index)
        if s is None:
            return
        s.velocity = ZERO
