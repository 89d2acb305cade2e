# predictor.py
from __future__ import annotations

from dataclasses import dataclass
import math


def _clamp(x: float, a: float, b: float) -> float:
    return a if x < a else b if x > b else x


@dataclass
class _State:
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    t: float = 0.0
    init: bool = False


class AlphaBetaPredictor:
    """
    Constant-velocity alpha-beta filter for a pointer in surface pixels.
    - Smooths fingertip jitter before it reaches the springs
    - Predicts slightly ahead (lead time) to hide tracking latency
    - Optionally raises its gains while the residual is large (fast motion)
    Output is kept inside the ``width`` x ``height`` surface.
    """

    def __init__(self, width: float, height: float, alpha: float = 0.85, beta: float = 0.02, adaptive: bool = True):
        self.width = float(width)
        self.height = float(height)
        self.alpha = float(alpha)
        self.beta = float(beta)
        self.adaptive = bool(adaptive)
        self.s = _State()

    @property
    def ready(self) -> bool:
        return self.s.init

    def reset(self) -> None:
        self.s = _State()

    def _bound(self, x: float, y: float) -> tuple[float, float]:
        return _clamp(x, 0.0, self.width - 1.0), _clamp(y, 0.0, self.height - 1.0)

    def update(self, pos: tuple[float, float], t: float) -> None:
        x_m = float(pos[0])
        y_m = float(pos[1])

        if not self.s.init:
            self.s.x, self.s.y = self._bound(x_m, y_m)
            self.s.vx, self.s.vy = 0.0, 0.0
            self.s.t = float(t)
            self.s.init = True
            return

        dt = float(t) - self.s.t
        if dt <= 1e-6:
            return

        x_p = self.s.x + self.s.vx * dt
        y_p = self.s.y + self.s.vy * dt
        rx = x_m - x_p
        ry = y_m - y_p

        a = self.alpha
        b = self.beta
        if self.adaptive:
            # residual relative to the surface diagonal so gains do not depend on resolution
            r = math.hypot(rx, ry) / max(1.0, math.hypot(self.width, self.height))
            a = min(0.95, max(0.60, self.alpha + 0.8 * r))
            b = min(0.25, max(0.01, self.beta + 0.6 * r))

        self.s.x, self.s.y = self._bound(x_p + a * rx, y_p + a * ry)
        self.s.vx += b * rx / dt
        self.s.vy += b * ry / dt
        self.s.t = float(t)

    def predict(self, t_future: float) -> tuple[float, float]:
        if not self.s.init:
            return (self.width * 0.5, self.height * 0.5)
        dt = float(t_future) - self.s.t
        return self._bound(self.s.x + self.s.vx * dt, self.s.y + self.s.vy * dt)

    def velocity(self) -> tuple[float, float]:
        return (self.s.vx, self.s.vy)
