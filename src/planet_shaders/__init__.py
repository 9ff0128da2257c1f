"""
Planet Shaders: a CPU ray tracer for a small animated solar system.
"""
from planet_shaders.core import Scene, create_scene, render
from planet_shaders.surfaces import Sphere, SurfaceKind

__all__ = ["Scene", "Sphere", "SurfaceKind", "create_scene", "render"]
