"""
Ray-geometry intersection calculations for the Planet Shaders renderer.

This module contains the intersection solvers for rays against the two
primitives in the scene: spheres (every body) and the tilted ring plane
through the gas giant.
"""
import numpy as np
from planet_shaders import constants


def solve_quadratic_vectorized(a, b, c):
    """
    Solve at^2 + bt + c = 0 for vectorized arrays.

    Args:
        a, b, c: Arrays of quadratic coefficients

    Returns:
        tuple: (t1, t2, valid_mask) where t1 <= t2 are roots and valid_mask indicates real solutions
    """
    a, b, c = np.broadcast_arrays(np.asarray(a, dtype=float),
                                  np.asarray(b, dtype=float),
                                  np.asarray(c, dtype=float))
    discriminant = b**2 - 4.0 * a * c
    valid_mask = (a > 1e-12) & (discriminant >= 0)

    t1 = np.full(a.shape, np.inf)
    t2 = np.full(a.shape, np.inf)

    if np.any(valid_mask):
        sqrt_disc = np.sqrt(discriminant[valid_mask])
        inv_2a = 0.5 / a[valid_mask]
        t1[valid_mask] = (-b[valid_mask] - sqrt_disc) * inv_2a
        t2[valid_mask] = (-b[valid_mask] + sqrt_disc) * inv_2a

    return t1, t2, valid_mask


def intersect_sphere(ray_origins, ray_directions, center, radius):
    """
    Vectorized intersection of rays and a sphere.

    The nearer root wins if it lies beyond ``HIT_EPSILON``, otherwise the
    farther root, otherwise there is no hit.

    Args:
        ray_origins: (3,) shared origin or (N, 3) per-ray origins
        ray_directions: (N, 3) array of ray directions
        center: (3,) sphere center
        radius: Sphere radius

    Returns:
        Array of intersection distances (inf where no intersection)
    """
    is_single = ray_directions.ndim == 1
    if is_single:
        ray_directions = ray_directions[None, :]

    oc = ray_origins - center

    # Quadratic equation coefficients
    a = np.sum(ray_directions**2, axis=1)
    b = 2.0 * np.sum(oc * ray_directions, axis=-1)
    c = np.sum(oc**2, axis=-1) - radius**2

    t1, t2, valid_mask = solve_quadratic_vectorized(a, b, c)

    t = np.full(ray_directions.shape[0], np.inf)

    if np.any(valid_mask):
        eps = constants.HIT_EPSILON
        t = np.where(t1 > eps, t1, np.where(t2 > eps, t2, np.inf))

    return t[0] if is_single else t


def intersect_plane(ray_origins, ray_directions, point, normal):
    """
    Vectorized intersection of rays and an infinite plane.

    Rays (nearly) parallel to the plane never hit. Negative parameters are
    returned as-is; callers decide which side counts.

    Returns:
        Array of plane parameters (inf where parallel)
    """
    is_single = ray_directions.ndim == 1
    if is_single:
        ray_directions = ray_directions[None, :]

    denom = np.sum(ray_directions * normal, axis=1)
    numer = np.sum((point - ray_origins) * normal, axis=-1)

    t = np.full(ray_directions.shape[0], np.inf)
    valid = np.abs(denom) > constants.PLANE_PARALLEL_EPSILON
    if np.any(valid):
        numer = np.broadcast_to(numer, denom.shape)
        t[valid] = numer[valid] / denom[valid]

    return t[0] if is_single else t


def planar_distance(points, center, normal):
    """Distance of ``points`` from ``center`` measured inside the plane with unit ``normal``."""
    v = np.asarray(points, dtype=float) - center
    along = np.sum(v * normal, axis=-1)[..., None]
    v_plane = v - normal * along
    return np.sqrt(np.sum(v_plane**2, axis=-1))


def in_ring_band(planar_r, radius):
    """Strict annulus test: boundaries at exactly the inner or outer radius are outside."""
    inner = radius * constants.RING_INNER_FACTOR
    outer = radius * constants.RING_OUTER_FACTOR
    return (planar_r > inner) & (planar_r < outer)


def intersect_ring(ray_origins, ray_directions, center, radius, max_t=None):
    """
    Vectorized intersection of rays and the ring annulus around a body.

    The ring lies in the plane through ``center`` with normal
    ``RING_PLANE_NORMAL``. A ray hits it when the plane parameter is
    positive, strictly below ``max_t`` and the planar distance from the
    center lies strictly between the inner and outer radius.

    Args:
        ray_origins: (3,) shared origin or (N, 3) per-ray origins
        ray_directions: (N, 3) array of ray directions
        center: (3,) center of the ringed body
        radius: Radius of the ringed body
        max_t: Optional (N,) cutoff, typically the nearest sphere hit

    Returns:
        tuple: (t, planar_r) arrays; t is inf where the ring is missed
    """
    is_single = ray_directions.ndim == 1
    if is_single:
        ray_directions = ray_directions[None, :]

    normal = constants.RING_PLANE_NORMAL
    t_plane = intersect_plane(ray_origins, ray_directions, center, normal)
    if max_t is None:
        max_t = np.inf

    candidates = np.isfinite(t_plane) & (t_plane > 0.0) & (t_plane < max_t)

    t = np.full(ray_directions.shape[0], np.inf)
    planar_r = np.full(ray_directions.shape[0], np.nan)

    if np.any(candidates):
        origins = np.broadcast_to(ray_origins, ray_directions.shape)[candidates]
        hit_p = origins + t_plane[candidates, None] * ray_directions[candidates]
        r = planar_distance(hit_p, center, normal)
        planar_r[candidates] = r

        in_band = np.zeros(ray_directions.shape[0], dtype=bool)
        in_band[candidates] = in_ring_band(r, radius)
        t[in_band] = t_plane[in_band]

    if is_single:
        return t[0], planar_r[0]
    return t, planar_r
