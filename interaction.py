# interaction.py
# Pointer -> spring coupling:
# - pointer down within radius of P1/P2: start dragging that point (P1 wins ties)
# - while dragging: every move and every tick pushes the pointer into the spring anchor
# - pointer up / pointer leaves the surface: back to idle

from __future__ import annotations
from dataclasses import dataclass
import logging

from bezier import Point2D, ZERO, dist
from spring import DYNAMIC_INDICES, SpringSimulator

log = logging.getLogger(__name__)

MIN_RADIUS = 1.0
MAX_RADIUS = 400.0


def _clamp(x, a, b):
    return a if x < a else (b if x > b else x)


@dataclass
class InteractionState:
    active: bool = False
    target_index: int | None = None
    pointer: Point2D = ZERO


class InteractionController:
    IDLE = 0
    DRAGGING = 1

    def __init__(self, simulator: SpringSimulator, control_points: list, interaction_radius: float = 80.0):
        self.simulator = simulator
        self.control_points = control_points
        self.interaction_radius = 80.0
        self.set_interaction_radius(interaction_radius)

        self.mode = self.IDLE
        self._index: int | None = None
        self._pointer = ZERO

    # ---------- public API ----------
    @property
    def is_dragging(self) -> bool:
        return self.mode == self.DRAGGING

    @property
    def active_index(self) -> int | None:
        return self._index

    @property
    def pointer(self) -> Point2D:
        return self._pointer

    def set_interaction_radius(self, radius: float) -> None:
        self.interaction_radius = float(_clamp(float(radius), MIN_RADIUS, MAX_RADIUS))

    def state(self) -> InteractionState:
        return InteractionState(active=self.is_dragging, target_index=self._index, pointer=self._pointer)

    def hit_test(self, x: float, y: float) -> int | None:
        """First dynamic index strictly inside the radius, checked in index order."""
        p = (float(x), float(y))
        for i in DYNAMIC_INDICES:
            if i >= len(self.control_points):
                continue
            if dist(p, self.control_points[i]) < self.interaction_radius:
                return i
        return None

    def pointer_move(self, x: float, y: float) -> None:
        self._pointer = Point2D(float(x), float(y))
        if self.is_dragging:
            self._push()

    def pointer_down(self, x: float, y: float) -> None:
        self._pointer = Point2D(float(x), float(y))
        i = self.hit_test(x, y)
        if i is None:
            return
        self.mode = self.DRAGGING
        self._index = i
        log.debug("drag start P%d at (%.1f, %.1f)", i, self._pointer.x, self._pointer.y)
        self._push()

    def pointer_up(self) -> None:
        self._release()

    def pointer_leave(self) -> None:
        self._release()

    def reapply(self) -> None:
        """Per-tick: keep pulling toward a held (possibly stationary) pointer."""
        if self.is_dragging:
            self._push()

    # ---------- internals ----------
    def _push(self):
        self.simulator.inject_force(self._index, self._pointer.x, self._pointer.y, self.control_points)

    def _release(self):
        if self.is_dragging:
            log.debug("drag end P%d", self._index)
        self.mode = self.IDLE
        self._index = None
