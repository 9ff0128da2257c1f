"""
Pytest fixtures and configuration for Planet Shaders tests.
"""

import numpy as np
import pytest
from planet_shaders import constants
from planet_shaders.core import Scene, create_scene
from planet_shaders.surfaces import Sphere, SurfaceKind


@pytest.fixture
def scene():
    """Create the standard four-body scene at a small frame size."""
    return create_scene(32, 20)


@pytest.fixture
def camera():
    """Standard camera position."""
    return np.array(constants.CAMERA_POSITION)


@pytest.fixture
def unit_sphere():
    """Unit sphere at the origin."""
    return Sphere(np.array([0.0, 0.0, 0.0]), 1.0, SurfaceKind.MOON)


@pytest.fixture
def shadow_bodies():
    """
    A light, a target body and an occluder on the line between them.

    Star at the origin, target centered at z=5 (its near pole at z=4),
    occluder centered at z=2.5.
    """
    light = Sphere(np.array([0.0, 0.0, 0.0]), 0.5, SurfaceKind.STAR, is_light=True)
    target = Sphere(np.array([0.0, 0.0, 5.0]), 1.0, SurfaceKind.MOON)
    occluder = Sphere(np.array([0.0, 0.0, 2.5]), 0.5, SurfaceKind.ROCKY)
    return light, target, occluder


@pytest.fixture
def make_scene():
    """Factory for scenes with an explicit body list."""
    def _make(spheres, width=16, height=10, **kwargs):
        return Scene(width, height, spheres=spheres, **kwargs)
    return _make

