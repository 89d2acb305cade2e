"""
Tests for hands.py pointer translation with a fake tracker.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import numpy as np
import pytest

pytest.importorskip("mediapipe")

from hands import INDEX_TIP, THUMB_TIP, HandPointer, pinch_amount


def _landmarks(index_xy, thumb_xy):
    lms = [(0.0, 0.0)] * 21
    lms[INDEX_TIP] = index_xy
    lms[THUMB_TIP] = thumb_xy
    return lms


class FakeTracker:
    def __init__(self, results):
        self.results = list(results)

    def process(self, frame):
        return self.results.pop(0)

    def close(self):
        pass


@pytest.fixture
def camera():
    return np.zeros((100, 200, 3), dtype=np.uint8)


class TestPinch:
    """Test pinch_amount."""

    def test_touching(self):
        assert pinch_amount(_landmarks((50, 50), (50, 50)), 200, 100) == 1.0

    def test_open(self):
        assert pinch_amount(_landmarks((0, 0), (200, 100)), 200, 100) == 0.0


class TestHandPointer:
    """Test HandPointer event generation."""

    def test_pinch_drag_release(self, params, camera):
        params.use_prediction = False
        closed = _landmarks((100, 50), (100, 50))
        opened = _landmarks((100, 50), (180, 90))
        hp = HandPointer(params, 400, 200, tracker=FakeTracker([opened, closed, closed, opened]))
        scene = MagicMock()

        hp.update(camera, scene, 0.0)
        scene.pointer_down.assert_not_called()
        hp.update(camera, scene, 0.1)
        scene.pointer_down.assert_called_once()
        hp.update(camera, scene, 0.2)
        assert scene.pointer_down.call_count == 1
        hp.update(camera, scene, 0.3)
        scene.pointer_up.assert_called_once_with()
        # fingertip mapped from camera (100, 50) to surface (200, 100)
        scene.pointer_move.assert_called_with(200.0, 100.0)

    def test_lost_hand_leaves(self, params, camera):
        closed = _landmarks((100, 50), (100, 50))
        hp = HandPointer(params, 400, 200, tracker=FakeTracker([closed, None, None]))
        scene = MagicMock()
        hp.update(camera, scene, 0.0)
        hp.update(camera, scene, 0.1)
        hp.update(camera, scene, 0.2)
        scene.pointer_leave.assert_called_once_with()
        assert not hp.pinched
        assert not hp.pred.ready
