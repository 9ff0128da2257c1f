"""
Shadow rays for the Planet Shaders renderer.

This module decides, for batches of surface points, whether a light body is
visible or blocked by another body.
"""
import numpy as np

from planet_shaders.ray import Ray
from planet_shaders.vector import length, normalize


class ShadowModel:
    """
    Hard shadows cast by the scene's spheres.
    """

    def __init__(self, spheres):
        """
        Args:
            spheres: Ordered sequence of Sphere; lights are identified by index
        """
        self.spheres = spheres

    def light_direction(self, points, light_index):
        """
        Unit direction and distance from each point to a light's center.

        Returns:
            tuple: ((N, 3) directions, (N,) distances)
        """
        to_light = self.spheres[light_index].center - points
        return normalize(to_light), length(to_light)

    def is_occluded(self, points, offsets, light_index):
        """
        Vectorized shadow test.

        A shadow ray leaves each point (nudged by ``offsets`` to avoid
        self-intersection) toward the light. It is blocked when any sphere
        other than the light itself is hit strictly closer than the light's
        distance.

        Args:
            points: (N, 3) surface points
            offsets: (N, 3) or (3,) displacement applied to the shadow ray origin
            light_index: Index of the light in ``spheres``

        Returns:
            (N,) boolean array, True where the light is blocked
        """
        directions, distances = self.light_direction(points, light_index)
        shadow_ray = Ray(points + offsets, directions)

        occluded = np.zeros(points.shape[0], dtype=bool)
        for index, other in enumerate(self.spheres):
            if index == light_index:
                continue
            t = other.intersect(shadow_ray)
            occluded |= t < distances
        return occluded
