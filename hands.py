import time

import cv2
import mediapipe as mp

from predictor import AlphaBetaPredictor

THUMB_TIP = 4
INDEX_TIP = 8


class Hands:
    """
    MediaPipe hands wrapper.

    ``process(frame_bgr)`` returns the landmarks of the first detected hand
    as [(x, y) * 21] pixel coords, or None.
    """

    def __init__(self, det_conf=0.5, track_conf=0.5):
        self.mp_hands = mp.solutions.hands
        self.hands = self.mp_hands.Hands(
            static_image_mode=False,
            max_num_hands=1,
            model_complexity=1,
            min_detection_confidence=float(det_conf),
            min_tracking_confidence=float(track_conf),
        )

    def process(self, frame_bgr):
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        res = self.hands.process(frame_rgb)
        if not res.multi_hand_landmarks:
            return None

        h, w = frame_bgr.shape[:2]
        return [(lm.x * w, lm.y * h) for lm in res.multi_hand_landmarks[0].landmark]

    def close(self):
        self.hands.close()


def pinch_amount(lms, w, h, open_dist=0.12):
    """0 = open hand, 1 = thumb and index tips touching (distance in frame-normalized units)."""
    ix, iy = lms[INDEX_TIP][0] / w, lms[INDEX_TIP][1] / h
    tx, ty = lms[THUMB_TIP][0] / w, lms[THUMB_TIP][1] / h
    d = ((ix - tx) ** 2 + (iy - ty) ** 2) ** 0.5
    return float(max(0.0, min(1.0, 1.0 - d / float(open_dist))))


class HandPointer:
    """
    Turns an index fingertip into pointer events for a scene:
      - fingertip (smoothed, mapped to the surface) -> pointer_move
      - pinch rising edge -> pointer_down, pinch release -> pointer_up
      - hand lost -> pointer_leave
    Pinch uses hysteresis so a half-closed hand does not flicker.
    """

    def __init__(self, params, surface_w, surface_h, tracker=None):
        self.params = params
        self.surface_w = int(surface_w)
        self.surface_h = int(surface_h)
        self.tracker = tracker if tracker is not None else Hands()
        self.pred = AlphaBetaPredictor(
            surface_w, surface_h,
            alpha=params.pred_alpha, beta=params.pred_beta, adaptive=params.pred_adaptive,
        )
        self.pinched = False
        self.present = False
        self.pinch = 0.0

    def update(self, camera_bgr, scene, t_now=None):
        t_now = time.time() if t_now is None else float(t_now)
        ch, cw = camera_bgr.shape[:2]
        lms = self.tracker.process(camera_bgr)

        if lms is None:
            if self.present:
                scene.pointer_leave()
            self.present = False
            self.pinched = False
            self.pred.reset()
            return

        self.present = True
        self.pinch = pinch_amount(lms, cw, ch, self.params.pinch_open_dist)

        # camera pixels -> surface pixels
        sx = lms[INDEX_TIP][0] / cw * self.surface_w
        sy = lms[INDEX_TIP][1] / ch * self.surface_h
        self.pred.update((sx, sy), t_now)
        if self.params.use_prediction:
            x, y = self.pred.predict(t_now + self.params.pred_lead_sec)
        else:
            x, y = sx, sy

        scene.pointer_move(x, y)

        p = self.params
        if self.pinched:
            if self.pinch < p.pinch_off:
                self.pinched = False
                scene.pointer_up()
        elif self.pinch > p.pinch_on:
            self.pinched = True
            scene.pointer_down(x, y)

    def close(self):
        self.tracker.close()


def open_camera(max_index=6):
    for i in range(max_index):
        cap = cv2.VideoCapture(i)
        if cap.isOpened():
            ok, _ = cap.read()
            if ok:
                return cap
        cap.release()
    raise RuntimeError(f"No working camera found (0-{max_index - 1}).")
