"""
Pytest configuration and shared fixtures for the spring curve tests.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from bezier import Point2D
from interaction import InteractionController
from params import Params
from scene import CurveScene
from spring import SpringSimulator


@pytest.fixture
def reference_points() -> list:
    """Control polygon whose midpoint is (250, 100)."""
    return [
        Point2D(100.0, 100.0),
        Point2D(200.0, 50.0),
        Point2D(300.0, 150.0),
        Point2D(400.0, 100.0),
    ]


@pytest.fixture
def simulator(reference_points) -> SpringSimulator:
    """Default simulator initialized on the reference points."""
    sim = SpringSimulator()
    sim.initialize(reference_points)
    return sim


@pytest.fixture
def controller(simulator, reference_points) -> InteractionController:
    """Controller sharing the reference points with the simulator."""
    return InteractionController(simulator, reference_points, interaction_radius=80.0)


@pytest.fixture
def params() -> Params:
    return Params()


@pytest.fixture
def scene(reference_points, params) -> CurveScene:
    return CurveScene(reference_points, params)
