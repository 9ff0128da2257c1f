"""
Data structures and interfaces for the Planet Shaders rendering pipeline.
"""
from dataclasses import dataclass
from enum import Enum

import numpy as np

from planet_shaders import constants
from planet_shaders.intersections import intersect_ring
from planet_shaders.shadows import ShadowModel
from planet_shaders.vector import normalize


class HitType(Enum):
    """Enumeration of possible intersection types."""
    SPHERE = "sphere"
    RING = "ring"
    SKY = "sky"


@dataclass
class HitResult:
    """
    Result of ray intersection calculations.

    Attributes:
        distance: Distance to hit point (N,) shape array, inf for sky
        hit_type: Type of surface hit (N,) HitType enum values
        hit_point: 3D coordinates of hit point (N, 3) shape, NaN for sky
        surface_index: Index of the sphere hit (N,), -1 for ring and sky
        surface_normal: Unit normal at hit point (N, 3) shape
        ring_distance: Planar distance from the ringed body (N,), NaN off the ring
    """
    distance: np.ndarray
    hit_type: np.ndarray
    hit_point: np.ndarray
    surface_index: np.ndarray
    surface_normal: np.ndarray
    ring_distance: np.ndarray

    def __post_init__(self):
        """Validate array shapes and types."""
        if self.distance.ndim != 1:
            raise ValueError(f"distance must be 1D array, got shape {self.distance.shape}")
        n_rays = self.distance.shape[0]
        for name in ("hit_type", "surface_index", "ring_distance"):
            shape = getattr(self, name).shape
            if shape != (n_rays,):
                raise ValueError(f"{name} shape {shape} doesn't match distance shape {self.distance.shape}")
        for name in ("hit_point", "surface_normal"):
            shape = getattr(self, name).shape
            if shape != (n_rays, 3):
                raise ValueError(f"{name} must be ({n_rays},3) array, got shape {shape}")

        valid_types = {ht.value for ht in HitType}
        invalid_types = set(self.hit_type) - valid_types
        if invalid_types:
            raise ValueError(f"Invalid hit types: {invalid_types}. Valid types: {valid_types}")

    def mask(self, hit_type):
        return self.hit_type == hit_type.value


class HitSelector:
    """
    Responsible for determining which surface each ray hits first.

    Spheres compete on nearest distance (the lower index wins exact ties).
    The ring plane around the gas giant then overrides the sphere hit when it
    is strictly nearer and inside the ring band.
    """

    def __init__(self, scene):
        """
        Args:
            scene: Scene providing the ordered ``spheres`` list
        """
        self.scene = scene

    def select_primary(self, ray):
        """
        Find the primary intersection for each ray.

        Args:
            ray: Ray with a (3,) or (N, 3) origin and (N, 3) directions

        Returns:
            HitResult with primary intersections for all rays
        """
        directions = ray.direction
        n_rays = directions.shape[0]
        spheres = self.scene.spheres

        nearest_t = np.full(n_rays, np.inf)
        nearest_index = np.full(n_rays, -1, dtype=int)
        for index, sphere in enumerate(spheres):
            t = sphere.intersect(ray)
            closer = t < nearest_t
            nearest_t[closer] = t[closer]
            nearest_index[closer] = index

        t_ring = np.full(n_rays, np.inf)
        ring_r = np.full(n_rays, np.nan)
        if len(spheres) > constants.GAS_GIANT_INDEX:
            giant = spheres[constants.GAS_GIANT_INDEX]
            t_ring, ring_r = intersect_ring(ray.origin, directions, giant.center,
                                            giant.radius, max_t=nearest_t)
        ring_mask = np.isfinite(t_ring)
        sphere_mask = (nearest_index >= 0) & ~ring_mask

        hit_types = np.full(n_rays, HitType.SKY.value, dtype=object)
        hit_types[sphere_mask] = HitType.SPHERE.value
        hit_types[ring_mask] = HitType.RING.value

        distance = np.where(ring_mask, t_ring, nearest_t)
        surface_index = np.where(sphere_mask, nearest_index, -1)
        ring_r = np.where(ring_mask, ring_r, np.nan)

        hit_points = np.full((n_rays, 3), np.nan)
        normals = np.zeros((n_rays, 3))
        hit = sphere_mask | ring_mask
        if np.any(hit):
            origins = np.broadcast_to(ray.origin, directions.shape)
            hit_points[hit] = origins[hit] + distance[hit, None] * directions[hit]
        for index, sphere in enumerate(spheres):
            on_sphere = surface_index == index
            if np.any(on_sphere):
                normals[on_sphere] = sphere.normal_at(hit_points[on_sphere])
        normals[ring_mask] = constants.RING_PLANE_NORMAL

        return HitResult(
            distance=distance,
            hit_type=hit_types,
            hit_point=hit_points,
            surface_index=surface_index,
            surface_normal=normals,
            ring_distance=ring_r,
        )


class MaterialSystem:
    """
    Responsible for determining surface colors based on hit results.

    Sphere colors come from each body's procedural shader; the ring plane has
    its own banded material.
    """

    def __init__(self, scene):
        self.scene = scene

    def get_surface_color(self, hits, time):
        """
        Calculate diffuse and emissive colors for all hits.

        Args:
            hits: HitResult from intersection calculations
            time: Animation time in seconds

        Returns:
            tuple: ((N, 3) diffuse, (N, 3) emissive); zero for sky
        """
        n_rays = hits.distance.shape[0]
        diffuse = np.zeros((n_rays, 3))
        emissive = np.zeros((n_rays, 3))

        for index, sphere in enumerate(self.scene.spheres):
            on_sphere = hits.surface_index == index
            if np.any(on_sphere):
                diffuse[on_sphere], emissive[on_sphere] = sphere.shade(
                    hits.hit_point[on_sphere], hits.surface_normal[on_sphere], time)

        ring_mask = hits.mask(HitType.RING)
        if np.any(ring_mask):
            giant = self.scene.spheres[constants.GAS_GIANT_INDEX]
            diffuse[ring_mask] = self.ring_color(hits.ring_distance[ring_mask], giant.radius)

        return diffuse, emissive

    @staticmethod
    def ring_color(planar_r, radius):
        """Banded sand-colored ring material for planar distances inside the band."""
        inner = radius * constants.RING_INNER_FACTOR
        outer = radius * constants.RING_OUTER_FACTOR
        bands = np.abs(np.sin((planar_r - inner) / (outer - inner) * constants.RING_BAND_COUNT))
        band_mask = (0.5 + 0.5 * bands)[:, None]
        return (constants.RING_BASE_COLOR * (0.6 + 0.8 * band_mask)
                + constants.RING_DARK_COLOR * (0.25 * (1.0 - band_mask)))


class LightingModel:
    """
    Local illumination from the scene's light bodies with hard shadows.
    """

    def __init__(self, scene):
        self.scene = scene

    def direct_light(self, points, normals, time, shadow_offset, specular=True):
        """
        Sum the unshadowed light reaching each point.

        Each light contributes a Lambert term times ``1 / (0.5 + 0.1 d^2)``
        times its own emission, plus (for spheres) a white Blinn highlight.

        Args:
            points: (N, 3) surface points
            normals: (N, 3) unit normals
            time: Animation time in seconds
            shadow_offset: Distance the shadow ray origin is pushed along the normal
            specular: Whether to add the per-light highlight

        Returns:
            (N, 3) accumulated lighting
        """
        lighting = np.zeros_like(points)
        if points.shape[0] == 0:
            return lighting
        view = normalize(self.scene.camera_position - points)
        shadows = ShadowModel(self.scene.spheres)

        for index, light in enumerate(self.scene.spheres):
            if not light.is_light:
                continue
            light_dir, light_dist = shadows.light_direction(points, index)
            lit = ~shadows.is_occluded(points, normals * shadow_offset, index)
            if not np.any(lit):
                continue

            lambert = np.maximum(np.sum(normals * light_dir, axis=1), 0.0)
            attenuation = 1.0 / (constants.ATTENUATION_CONSTANT
                                 + constants.ATTENUATION_QUADRATIC * light_dist**2)
            contribution = light.light_emission(time) * (lambert * attenuation)[:, None]

            if specular:
                half = normalize(view + light_dir)
                spec = np.maximum(np.sum(normals * half, axis=1), 0.0) ** constants.SPECULAR_POWER
                contribution = contribution + (spec * constants.SPECULAR_STRENGTH * attenuation)[:, None]

            lighting[lit] += contribution[lit]
        return lighting

    def ring_specular(self, points, normals):
        """Fixed highlight toward the star, independent of shadowing."""
        star = self.scene.spheres[constants.STAR_INDEX]
        view = normalize(self.scene.camera_position - points)
        half = normalize(view + normalize(star.center - points))
        spec = np.maximum(np.sum(normals * half, axis=1), 0.0) ** constants.RING_SPECULAR_POWER
        return np.repeat((spec * constants.RING_SPECULAR_STRENGTH)[:, None], 3, axis=1)
