"""
Analytic surfaces and their procedural shaders.

Every body in the scene is a sphere tagged with a ``SurfaceKind``. The kind
selects one of four shading functions; shading is vectorized over batches
of hit points and returns ``(diffuse, emissive)`` color arrays.
"""
from dataclasses import dataclass
from enum import Enum

import numpy as np

from planet_shaders import constants
from planet_shaders.intersections import intersect_sphere
from planet_shaders.noise import fbm, noise3
from planet_shaders.utils import as_batch, unbatch
from planet_shaders.vector import normalize, vec3

UP = vec3(0.0, 1.0, 0.0)


class SurfaceKind(Enum):
    """Closed set of body types; each maps to exactly one shader."""
    STAR = "star"
    ROCKY = "rocky"
    GAS_GIANT = "gas_giant"
    MOON = "moon"


@dataclass
class Sphere:
    """
    A spherical body.

    Attributes:
        center: (3,) position; rewritten once per frame by the orbit update
        radius: Sphere radius (> 0)
        kind: Which procedural shader colors this body
        is_light: Whether the body illuminates the others
        phase: Per-body rotation phase
    """
    center: np.ndarray
    radius: float
    kind: SurfaceKind
    is_light: bool = False
    phase: float = 0.0

    def __post_init__(self):
        self.center = np.asarray(self.center, dtype=float)
        if not self.radius > 0:
            raise ValueError(f"radius must be positive, got {self.radius}")

    def intersect(self, ray):
        """Nearest valid ray parameter per ray (inf on miss)."""
        return intersect_sphere(ray.origin, ray.direction, self.center, self.radius)

    def normal_at(self, points):
        return normalize(np.asarray(points, dtype=float) - self.center)

    def shade(self, points, normals, time):
        """
        Evaluate this body's shader.

        Args:
            points: (3,) or (N, 3) surface points
            normals: Matching unit normals
            time: Animation time in seconds

        Returns:
            tuple: (diffuse, emissive) arrays shaped like ``points``
        """
        points, was_single = as_batch(points)
        normals, _ = as_batch(normals)
        shader = SHADERS[self.kind]
        diffuse, emissive = shader(self, points, normals, time)
        return unbatch((diffuse, emissive), was_single)

    def light_emission(self, time):
        """Emissive color this body radiates as a light, sampled at its center."""
        _, emissive = self.shade(self.center, UP, time)
        return emissive


def shade_star(sphere, p, n, time):
    offset = p - sphere.center
    r = np.sqrt(np.sum(offset**2, axis=1)) / sphere.radius
    glow = np.maximum(1.0 - r, 0.0) ** 1.5

    t = time * 0.8
    flicker_p = np.stack([p[:, 0] * 3.0 + t, p[:, 1] * 3.0, p[:, 2] * 3.0], axis=1)
    flicker = 0.8 + 0.4 * noise3(flicker_p)

    emissive = vec3(1.0, 0.85, 0.5) * (glow * flicker * 2.5)[:, None]
    diffuse = vec3(1.0, 0.9, 0.6) * (0.4 + 0.6 * glow)[:, None]
    return diffuse, emissive


def shade_rocky(sphere, p, n, time):
    local = normalize(p - sphere.center)
    lat = np.arcsin(np.clip(local[:, 1], -1.0, 1.0))
    lon = np.arctan2(local[:, 2], local[:, 0])

    # Slowly drifting color variation
    h = fbm(local * 3.0 + vec3(time * 0.05, 0.0, 0.0), 4) * 0.5
    base = vec3(0.32, 0.24, 0.18) + h[:, None] * vec3(0.15, 0.1, 0.05)

    # Continents
    band = (np.sin(lat * 6.0 + lon * 2.0 + time * 0.2) * 0.5 + 0.5) ** 1.3
    base = base * (0.7 + 0.6 * band)[:, None]

    # Craters
    crater_noise = noise3(local * 12.0)
    crater_mask = np.where(crater_noise > 0.7, (crater_noise - 0.7) / 0.3, 0.0)[:, None]
    color = base * (1.0 - crater_mask) + (base * 0.5) * crater_mask

    rim = (1.0 - np.abs(np.sum(n * UP, axis=1))) ** 3.0 * 0.2
    diffuse = color + vec3(0.05, 0.05, 0.06) * rim[:, None]
    return diffuse, np.zeros_like(diffuse)


def shade_gas_giant(sphere, p, n, time):
    local = normalize(p - sphere.center)
    lat = local[:, 1]

    band = 0.5 + 0.5 * np.sin(lat * 10.0 + time * 0.5)
    band_color = vec3(0.45, 0.55, 0.85) * (0.6 + 0.8 * band)[:, None]

    swirl = fbm(local * 6.0 + vec3(0.0, time * 0.3, 0.0), 5) * 0.25
    color = band_color + vec3(0.05, 0.08, 0.12) * swirl[:, None]

    # Ring bands measured from the rotation (Y) axis
    rp = p - sphere.center
    dist = np.sqrt(rp[:, 0]**2 + rp[:, 2]**2)
    inner = sphere.radius * constants.SURFACE_RING_INNER_FACTOR
    outer = sphere.radius * constants.SURFACE_RING_OUTER_FACTOR
    ring = np.where(
        (dist > inner) & (dist < outer),
        np.abs(np.sin((dist - inner) / (outer - inner) * constants.SURFACE_RING_BAND_COUNT)),
        0.0)

    diffuse = color + vec3(0.85, 0.8, 0.7) * (ring * 1.5)[:, None]
    return diffuse, np.zeros_like(diffuse)


def shade_moon(sphere, p, n, time):
    local = normalize(p - sphere.center)
    value = fbm(local * 10.0, 4)
    diffuse = vec3(0.7, 0.7, 0.75) * (0.6 + 0.6 * value)[:, None]
    return diffuse, np.zeros_like(diffuse)


# Every shader takes (sphere, points, normals, time); star and moon ignore the normals.
SHADERS = {
    SurfaceKind.STAR: shade_star,
    SurfaceKind.ROCKY: shade_rocky,
    SurfaceKind.GAS_GIANT: shade_gas_giant,
    SurfaceKind.MOON: shade_moon,
}
