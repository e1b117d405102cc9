"""Pytest configuration and fixtures for zoompointer tests."""

import random

import pytest

from zoompointer.trial.geometry import Dimensions, Rect


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def full_dimensions():
    """The headless experiment's image size."""
    return Dimensions(2560, 1600)


@pytest.fixture
def unreachable_target():
    """A target no single zoom from the full 2560x1600 view can hit."""
    return Rect(0.0, 0.0, 1.0, 1.0)
