"""Shared test fixtures."""

import pytest

from fpcontrol import FirstPersonController, Transform, World


@pytest.fixture
def world():
    """Fresh World instance."""
    return World()


@pytest.fixture
def camera(world):
    """Camera entity with an identity orientation."""
    return world.spawn(Transform())


@pytest.fixture
def player(world, camera):
    """Controller with a rigid body, looking through `camera`."""
    return FirstPersonController.spawn(world, camera=camera)
