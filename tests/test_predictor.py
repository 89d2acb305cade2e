"""
Tests for predictor.py alpha-beta smoothing.
"""

from __future__ import annotations

import pytest

from predictor import AlphaBetaPredictor


class TestAlphaBetaPredictor:
    """Test AlphaBetaPredictor."""

    def test_uninitialized_predicts_center(self):
        pred = AlphaBetaPredictor(640, 480)
        assert not pred.ready
        assert pred.predict(1.0) == (320.0, 240.0)

    def test_first_update_snaps(self):
        pred = AlphaBetaPredictor(640, 480)
        pred.update((100.0, 200.0), 0.0)
        assert pred.ready
        assert pred.predict(0.0) == (100.0, 200.0)
        assert pred.velocity() == (0.0, 0.0)

    def test_tracks_constant_motion(self):
        pred = AlphaBetaPredictor(1000, 1000, adaptive=False)
        for i in range(240):
            t = i / 60.0
            pred.update((100.0 + 200.0 * t, 500.0), t)
        vx, vy = pred.velocity()
        assert vx == pytest.approx(200.0, rel=0.1)
        assert vy == pytest.approx(0.0, abs=1.0)

    def test_output_stays_on_surface(self):
        pred = AlphaBetaPredictor(200, 100)
        pred.update((-50.0, 500.0), 0.0)
        x, y = pred.predict(0.0)
        assert 0.0 <= x <= 199.0
        assert 0.0 <= y <= 99.0

    def test_ignores_non_advancing_time(self):
        pred = AlphaBetaPredictor(640, 480)
        pred.update((10.0, 10.0), 1.0)
        pred.update((300.0, 300.0), 1.0)
        assert pred.predict(1.0) == (10.0, 10.0)

    def test_reset(self):
        pred = AlphaBetaPredictor(640, 480)
        pred.update((10.0, 10.0), 0.0)
        pred.reset()
        assert not pred.ready
