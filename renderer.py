# renderer.py
# OpenCV drawing for the spring curve:
# - curve polyline with a soft glow
# - dashed control polygon + control points (red fixed, green dynamic) + labels
# - tangent arrows along the curve
# - hint ring around the pointer when a dynamic point is grabbable
# - glass HUD panel with the current tunables

from __future__ import annotations
import math
import cv2
import numpy as np

from bezier import Point2D


def _ipt(p):
    return (int(round(p[0])), int(round(p[1])))


class CurveRenderer:
    def __init__(self, params):
        self.params = params
        self.show_tangents = True
        self.show_hud = True

        # palette (BGR)
        self.col_curve = (247, 195, 79)
        self.col_glow = (160, 120, 50)
        self.col_hull = (120, 120, 120)
        self.col_fixed = (82, 82, 255)
        self.col_dynamic = (174, 240, 105)
        self.col_outline = (255, 255, 255)
        self.col_tangent = (0, 215, 255)
        self.col_text = (235, 245, 255)
        self.col_shadow = (25, 25, 25)
        self.col_hint = (200, 200, 200)

        self.panel_alpha = 0.55
        self.panel_col = (18, 18, 22)
        self.panel_edge = (90, 115, 135)

        self.font = cv2.FONT_HERSHEY_SIMPLEX

    def blank(self, width: int, height: int) -> np.ndarray:
        frame = np.zeros((int(height), int(width), 3), dtype=np.uint8)
        frame[:] = self.params.background
        return frame

    def render(self, frame, scene):
        pts = scene.control_points

        self._draw_curve(frame, scene.curve_points())
        self._draw_hull(frame, pts)
        self._draw_control_points(frame, pts)
        if self.show_tangents:
            self._draw_tangents(frame, scene.tangents())
        self._draw_labels(frame, pts)
        self._draw_hint(frame, scene.controller)
        if self.show_hud:
            self._draw_hud(frame, scene)
        return frame

    def handle_key(self, key: int) -> bool:
        """Returns True when the key was consumed."""
        if key == ord("t"):
            self.show_tangents = not self.show_tangents
        elif key == ord("h"):
            self.show_hud = not self.show_hud
        else:
            return False
        return True

    # ---------- layers ----------
    def _draw_curve(self, frame, curve_points):
        if len(curve_points) < 2:
            return
        poly = np.array([_ipt(p) for p in curve_points], dtype=np.int32)
        cv2.polylines(frame, [poly], False, self.col_glow, 8, cv2.LINE_AA)
        cv2.polylines(frame, [poly], False, self.col_curve, 3, cv2.LINE_AA)

    def _draw_hull(self, frame, pts):
        for a, b in zip(pts[:-1], pts[1:]):
            self._dashed_line(frame, a, b, self.col_hull, dash=5.0)

    def _dashed_line(self, frame, a, b, col, dash):
        length = math.hypot(b[0] - a[0], b[1] - a[1])
        if length <= 0.0:
            return
        n = int(length // dash)
        for i in range(0, n + 1, 2):
            t0 = (i * dash) / length
            t1 = min(1.0, ((i + 1) * dash) / length)
            p0 = (a[0] + (b[0] - a[0]) * t0, a[1] + (b[1] - a[1]) * t0)
            p1 = (a[0] + (b[0] - a[0]) * t1, a[1] + (b[1] - a[1]) * t1)
            cv2.line(frame, _ipt(p0), _ipt(p1), col, 1, cv2.LINE_AA)

    def _draw_control_points(self, frame, pts):
        r = int(self.params.control_point_radius)
        for i, p in enumerate(pts):
            col = self.col_fixed if i in (0, 3) else self.col_dynamic
            cv2.circle(frame, _ipt(p), r, col, -1, cv2.LINE_AA)
            cv2.circle(frame, _ipt(p), r, self.col_outline, 2, cv2.LINE_AA)

    def _draw_tangents(self, frame, tangents):
        length = float(self.params.tangent_length)
        for ts in tangents:
            d = ts.direction
            if d.x == 0.0 and d.y == 0.0:
                continue  # stationary point, no direction
            end = Point2D(ts.point.x + d.x * length, ts.point.y + d.y * length)
            cv2.circle(frame, _ipt(ts.point), 3, self.col_tangent, -1, cv2.LINE_AA)
            cv2.arrowedLine(frame, _ipt(ts.point), _ipt(end), self.col_tangent, 2, cv2.LINE_AA, 0, 0.15)

    def _draw_labels(self, frame, pts):
        for i, p in enumerate(pts):
            self._text(frame, f"P{i}", (int(p[0]) - 10, int(p[1]) - 16), 0.5)

    def _draw_hint(self, frame, controller):
        if controller.is_dragging:
            return
        ptr = controller.pointer
        if controller.hit_test(ptr.x, ptr.y) is None:
            return
        cv2.circle(frame, _ipt(ptr), int(controller.interaction_radius), self.col_hint, 1, cv2.LINE_AA)

    def _draw_hud(self, frame, scene):
        H, W = frame.shape[:2]
        pad = 12
        self._panel(frame, pad, pad, min(W - 2 * pad, 560), 58)

        sim = scene.simulator
        ctl = scene.controller
        drag = f"P{ctl.active_index}" if ctl.is_dragging else "-"
        msg1 = f"k {sim.spring_constant:.3f}   c {sim.damping:.3f}   radius {ctl.interaction_radius:.0f}px   tangents {scene.tangent_density}"
        msg2 = f"length {scene.curve_length():.1f}px   drag {drag}   frame {scene.frame}"
        self._text(frame, msg1, (pad + 12, pad + 24), 0.5)
        self._text(frame, msg2, (pad + 12, pad + 46), 0.45)

        hint = "Drag P1/P2   R reset   T tangents   H hud   [ ] density   ESC quit"
        self._text(frame, hint, (pad + 4, H - pad), 0.45)

    # ---------- primitives ----------
    def _panel(self, frame, x, y, w, h):
        x0 = max(0, int(x))
        y0 = max(0, int(y))
        x1 = min(frame.shape[1], int(x + w))
        y1 = min(frame.shape[0], int(y + h))
        if x1 <= x0 or y1 <= y0:
            return
        overlay = frame.copy()
        cv2.rectangle(overlay, (x0, y0), (x1, y1), self.panel_col, -1)
        cv2.addWeighted(overlay, self.panel_alpha, frame, 1.0 - self.panel_alpha, 0, frame)
        cv2.rectangle(frame, (x0, y0), (x1, y1), self.panel_edge, 1, cv2.LINE_AA)

    def _text(self, frame, s, org, scale):
        # subtle shadow
        cv2.putText(frame, s, (org[0] + 1, org[1] + 1), self.font, scale, self.col_shadow, 2, cv2.LINE_AA)
        cv2.putText(frame, s, org, self.font, scale, self.col_text, 1, cv2.LINE_AA)
