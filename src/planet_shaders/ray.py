"""
Rays for the Planet Shaders renderer.
"""
from dataclasses import dataclass

import numpy as np

from planet_shaders.vector import normalize


@dataclass(frozen=True)
class Ray:
    """
    A ray (or a batch of rays) with unit-length direction.

    Attributes:
        origin: (3,) point shared by all rays, or (N, 3) per-ray origins
        direction: (3,) or (N, 3); normalized on construction
    """
    origin: np.ndarray
    direction: np.ndarray

    def __post_init__(self):
        origin = np.asarray(self.origin, dtype=float)
        direction = normalize(np.asarray(self.direction, dtype=float))
        if origin.shape[-1] != 3 or direction.shape[-1] != 3:
            raise ValueError(
                f"origin and direction must have a trailing axis of 3, "
                f"got {origin.shape} and {direction.shape}")
        object.__setattr__(self, "origin", origin)
        object.__setattr__(self, "direction", direction)

    @property
    def is_batch(self):
        return self.direction.ndim == 2

    def __len__(self):
        return self.direction.shape[0] if self.is_batch else 1

    def at(self, t):
        """Point(s) at parameter ``t`` (scalar or one value per ray)."""
        t = np.asarray(t, dtype=float)
        if t.ndim > 0:
            t = t[..., None]
        return self.origin + self.direction * t
