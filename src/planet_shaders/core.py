import logging
import os
import time as _time
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from planet_shaders import constants
from planet_shaders.color import pack_pixels, tone_map, unpack_pixels
from planet_shaders.ray import Ray
from planet_shaders.rendering import HitSelector, HitType, LightingModel, MaterialSystem
from planet_shaders.surfaces import Sphere, SurfaceKind
from planet_shaders.utils import as_batch, unbatch
from planet_shaders.vector import vec3

logger = logging.getLogger(__name__)


def default_bodies():
    """The four bodies in their fixed index order: star, rocky planet, moon, gas giant."""
    return [
        Sphere(vec3(*constants.STAR_CENTER), constants.STAR_RADIUS,
               SurfaceKind.STAR, is_light=True),
        Sphere(vec3(*constants.ROCKY_CENTER), constants.ROCKY_RADIUS,
               SurfaceKind.ROCKY, phase=constants.ROCKY_PHASE),
        Sphere(vec3(*constants.MOON_CENTER), constants.MOON_RADIUS,
               SurfaceKind.MOON, phase=constants.MOON_PHASE),
        Sphere(vec3(*constants.GAS_GIANT_CENTER), constants.GAS_GIANT_RADIUS,
               SurfaceKind.GAS_GIANT, phase=constants.GAS_GIANT_PHASE),
    ]


class Scene:
    def __init__(self, width, height, camera_position=None, fov=None,
                 spheres=None, workers=None):
        """
        Initialize the solar-system scene.

        Coordinate System:
        - Star at the origin; orbits lie in the X-Z plane.
        - Camera at ``camera_position`` looking down +Z with +Y up.
        - ``fov``: vertical field of view in radians.

        Args:
            width, height: Frame size in pixels; may be reassigned between frames
            camera_position: Optional camera override
            fov: Optional field of view override
            spheres: Optional body list (defaults to the four-body system)
            workers: Row-band worker threads for ``render`` (default: CPU count)
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"frame size must be positive, got {width}x{height}")
        self.width = width
        self.height = height

        cam = camera_position if camera_position is not None else constants.CAMERA_POSITION
        self.camera_position = np.asarray(cam, dtype=float)
        self.fov = fov if fov is not None else constants.FIELD_OF_VIEW
        self.spheres = spheres if spheres is not None else default_bodies()
        self.workers = workers or os.cpu_count() or 1

        self.hit_selector = HitSelector(self)
        self.materials = MaterialSystem(self)
        self.lighting = LightingModel(self)

    def update_orbits(self, time):
        """
        Move the bodies to their positions at ``time``.

        The rocky planet is placed before the moon, whose orbit is centered
        on the planet's new position.
        """
        if len(self.spheres) <= constants.GAS_GIANT_INDEX:
            return
        t = time * constants.TIME_SCALE
        sun = self.spheres[constants.STAR_INDEX].center

        rock_angle = t * constants.ROCKY_ORBIT_RATE
        rock = sun + constants.ROCKY_ORBIT_RADIUS * vec3(np.cos(rock_angle), 0.0, np.sin(rock_angle))
        self.spheres[constants.ROCKY_INDEX].center = rock

        ax, ay, az = constants.MOON_ORBIT_AXES
        moon_angle = t * constants.MOON_ORBIT_RATE
        wobble = t * constants.MOON_WOBBLE_RATE
        self.spheres[constants.MOON_INDEX].center = rock + vec3(
            ax * np.cos(moon_angle), ay * np.sin(wobble), az * np.sin(moon_angle))

        gas_angle = t * constants.GAS_GIANT_ORBIT_RATE
        radius = constants.GAS_GIANT_ORBIT_RADIUS
        self.spheres[constants.GAS_GIANT_INDEX].center = sun + vec3(
            radius * np.cos(gas_angle), constants.GAS_GIANT_Y_OFFSET, radius * np.sin(gas_angle))

    @staticmethod
    def sky_color(directions):
        """Vertical two-tone gradient for rays that miss everything."""
        tbg = 0.5 * (directions[..., 1] + 1.0)
        return (constants.SKY_BOTTOM * (1.0 - tbg)[..., None]
                + constants.SKY_TOP * tbg[..., None])

    def trace(self, ray, time):
        """
        Calculate the color seen along each ray.

        Args:
            ray: Ray with a single direction or a batch of directions
            time: Animation time in seconds (drives shaders, not positions)

        Returns:
            (3,) or (N, 3) colors in [0, 1]
        """
        directions, was_single = as_batch(ray.direction)
        if was_single:
            ray = Ray(ray.origin, directions)
        n_rays = directions.shape[0]

        hits = self.hit_selector.select_primary(ray)
        diffuse, emissive = self.materials.get_surface_color(hits, time)
        colors = np.zeros((n_rays, 3))

        # 1. Sky
        sky_mask = hits.mask(HitType.SKY)
        if np.any(sky_mask):
            colors[sky_mask] = self.sky_color(directions[sky_mask])

        # 2. Spheres
        sphere_mask = hits.mask(HitType.SPHERE)
        if np.any(sphere_mask):
            light = self.lighting.direct_light(
                hits.hit_point[sphere_mask], hits.surface_normal[sphere_mask], time,
                constants.SPHERE_SHADOW_OFFSET)
            shaded = diffuse[sphere_mask] * (constants.AMBIENT + light) + emissive[sphere_mask]
            colors[sphere_mask] = tone_map(shaded)

        # 3. Ring
        ring_mask = hits.mask(HitType.RING)
        if np.any(ring_mask):
            points = hits.hit_point[ring_mask]
            normals = hits.surface_normal[ring_mask]
            light = self.lighting.direct_light(
                points, normals, time, constants.RING_SHADOW_OFFSET, specular=False)
            shaded = diffuse[ring_mask] * (constants.RING_AMBIENT + light * constants.RING_LIGHT_GAIN)
            shaded = shaded + self.lighting.ring_specular(points, normals)
            colors[ring_mask] = tone_map(shaded)

        return unbatch(colors, was_single)

    def camera_rays(self, row_start=0, row_stop=None):
        """
        Pinhole camera rays for rows ``[row_start, row_stop)`` in row-major order.
        """
        row_stop = self.height if row_stop is None else row_stop
        aspect = self.width / self.height
        half_height = np.tan(self.fov / 2.0)
        half_width = aspect * half_height

        i = np.arange(self.width)
        j = np.arange(row_start, row_stop)
        px = (2.0 * ((i + 0.5) / self.width) - 1.0) * half_width
        py = (1.0 - 2.0 * ((j + 0.5) / self.height)) * half_height
        gx, gy = np.meshgrid(px, py)

        directions = np.stack([gx.ravel(), gy.ravel(), np.ones(gx.size)], axis=1)
        return Ray(self.camera_position, directions)

    def _render_rows(self, buffer, row_start, row_stop, time):
        if row_stop <= row_start:
            return
        colors = self.trace(self.camera_rays(row_start, row_stop), time)
        buffer[row_start * self.width:row_stop * self.width] = pack_pixels(colors)

    def render(self, buffer, time):
        """
        Render one frame into ``buffer``.

        Bodies are moved first, then row bands are traced concurrently; each
        band writes only its own slice of the buffer, and all bands finish
        before this returns.

        Args:
            buffer: Writable uint32 array of exactly width*height packed pixels
            time: Animation time in seconds
        """
        expected = self.width * self.height
        if buffer.shape != (expected,):
            raise ValueError(
                f"buffer must hold {expected} pixels for {self.width}x{self.height}, "
                f"got shape {buffer.shape}")

        start = _time.perf_counter()
        self.update_orbits(time)

        workers = max(1, min(self.workers, self.height))
        bands = np.linspace(0, self.height, workers + 1).astype(int)
        if workers == 1:
            self._render_rows(buffer, 0, self.height, time)
        else:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = [executor.submit(self._render_rows, buffer, lo, hi, time)
                           for lo, hi in zip(bands[:-1], bands[1:])]
                for future in futures:
                    future.result()

        logger.debug("Rendered %dx%d frame at t=%.3f in %.3fs with %d workers",
                     self.width, self.height, time, _time.perf_counter() - start, workers)

    def render_image(self, time):
        """Render a frame into a fresh buffer and return it as an (H, W, 3) uint8 image."""
        buffer = np.zeros(self.width * self.height, dtype=np.uint32)
        self.render(buffer, time)
        return unpack_pixels(buffer, self.width, self.height)


def create_scene(width, height):
    """Build the fixed four-body scene for a width x height frame."""
    return Scene(width, height)


def render(scene, buffer, time):
    """Render one frame of ``scene`` into ``buffer`` at ``time``."""
    scene.render(buffer, time)
