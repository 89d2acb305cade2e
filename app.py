# app.py - spring-loaded cubic Bezier playground
import argparse
import logging
import time

import cv2

from logging_config import setup_logging
from params import Params
from renderer import CurveRenderer
from scene import CurveScene

log = logging.getLogger(__name__)

FRAME_MS = 16          # ~60 ticks per second; one tick = one simulation step
SETTINGS_WINDOW = "Settings"


class MouseInput:
    """cv2 mouse callback -> scene pointer events (surface-local pixels)."""

    def __init__(self, scene, width, height):
        self.scene = scene
        self.width = int(width)
        self.height = int(height)
        self.inside = False

    def on_mouse(self, event, x, y, flags, param):
        if not (0 <= x < self.width and 0 <= y < self.height):
            if self.inside:
                self.scene.pointer_leave()
            self.inside = False
            return
        self.inside = True

        if event == cv2.EVENT_MOUSEMOVE:
            self.scene.pointer_move(x, y)
        elif event == cv2.EVENT_LBUTTONDOWN:
            self.scene.pointer_down(x, y)
        elif event == cv2.EVENT_LBUTTONUP:
            self.scene.pointer_up()


def _create_settings(scene):
    """Trackbars write through the scene setters (which clamp)."""
    cv2.namedWindow(SETTINGS_WINDOW, cv2.WINDOW_NORMAL)

    sim = scene.simulator
    ctl = scene.controller

    cv2.createTrackbar("k x1000", SETTINGS_WINDOW, int(round(sim.spring_constant * 1000)), 500,
                       lambda v: scene.set_spring_constant(v / 1000.0))
    cv2.createTrackbar("damping x100", SETTINGS_WINDOW, int(round(sim.damping * 100)), 99,
                       lambda v: scene.set_damping_factor(v / 100.0))
    cv2.createTrackbar("radius px", SETTINGS_WINDOW, int(ctl.interaction_radius), 400,
                       lambda v: scene.set_interaction_radius(v))
    cv2.createTrackbar("tangents", SETTINGS_WINDOW, scene.tangent_density, 64,
                       lambda v: scene.set_tangent_sample_density(v))
    cv2.setTrackbarMin("k x1000", SETTINGS_WINDOW, 10)
    cv2.setTrackbarMin("damping x100", SETTINGS_WINDOW, 70)
    cv2.setTrackbarMin("radius px", SETTINGS_WINDOW, 1)
    cv2.setTrackbarMin("tangents", SETTINGS_WINDOW, 1)


def _sync_settings(scene):
    cv2.setTrackbarPos("tangents", SETTINGS_WINDOW, scene.tangent_density)


def _init_hands(params, width, height):
    try:
        from hands import HandPointer, open_camera

        pointer = HandPointer(params, width, height)
        try:
            cap = open_camera(params.camera_max_index)
        except RuntimeError:
            pointer.close()
            raise
        print("✅ Hand pointer enabled (pinch to grab P1/P2)")
        return cap, pointer
    except (ImportError, AttributeError) as e:
        # AttributeError: mediapipe builds without the legacy ``solutions`` API
        print(f"⚠️  Hand tracking unavailable ({e}) - mouse only")
    except RuntimeError as e:
        print(f"⚠️  {e} - mouse only")
    return None, None


def handle_key(key, scene, renderer):
    if renderer.handle_key(key):
        return
    if key == ord("r"):
        scene.reset()
    elif key == ord("["):
        scene.set_tangent_sample_density(scene.tangent_density - 1)
        _sync_settings(scene)
    elif key == ord("]"):
        scene.set_tangent_sample_density(scene.tangent_density + 1)
        _sync_settings(scene)


def parse_args(argv=None):
    ap = argparse.ArgumentParser(description="Interactive cubic Bezier with spring-loaded control points")
    ap.add_argument("--width", type=int, default=None)
    ap.add_argument("--height", type=int, default=None)
    ap.add_argument("--hands", action="store_true", help="drive the pointer with a tracked index finger")
    ap.add_argument("--debug", action="store_true")
    ap.add_argument("--log-file", default=None)
    return ap.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.debug else logging.INFO, args.log_file)

    params = Params()
    W = args.width or params.width
    H = args.height or params.height

    scene = CurveScene.from_size(W, H, params)
    renderer = CurveRenderer(params)
    mouse = MouseInput(scene, W, H)

    cv2.namedWindow(params.window_name, cv2.WINDOW_AUTOSIZE)
    cv2.setMouseCallback(params.window_name, mouse.on_mouse)
    _create_settings(scene)

    cap, hand_pointer = (None, None)
    if args.hands:
        cap, hand_pointer = _init_hands(params, W, H)

    print("\n" + "=" * 60)
    print("SPRING BEZIER")
    print("=" * 60)
    print("   Drag P1 / P2 with the left mouse button")
    print("   R - Reset pose   T - Tangents   H - HUD")
    print("   [ / ] - Tangent density   ESC / Q - Exit")
    print("=" * 60 + "\n")

    prev = time.time()
    fps_smooth = 0.0

    try:
        while True:
            now = time.time()
            dt = max(1e-6, now - prev)
            prev = now
            fps = 1.0 / dt
            fps_smooth = fps if fps_smooth == 0 else 0.9 * fps_smooth + 0.1 * fps

            if hand_pointer is not None:
                ok, cam = cap.read()
                if ok:
                    hand_pointer.update(cv2.flip(cam, 1), scene, now)

            scene.tick()

            frame = renderer.blank(W, H)
            renderer.render(frame, scene)
            cv2.putText(frame, f"FPS: {fps_smooth:5.1f}", (W - 130, H - 12),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.5, (255, 255, 128), 1, cv2.LINE_AA)
            cv2.imshow(params.window_name, frame)

            key = cv2.waitKey(FRAME_MS) & 0xFF
            if key in (27, ord("q")):
                break
            if key != 255:
                handle_key(key, scene, renderer)

            if cv2.getWindowProperty(params.window_name, cv2.WND_PROP_VISIBLE) < 1:
                break
    finally:
        if cap is not None:
            cap.release()
        if hand_pointer is not None:
            hand_pointer.close()
        cv2.destroyAllWindows()

    log.info("shutdown after %d frames", scene.frame)


if __name__ == "__main__":
    main()
