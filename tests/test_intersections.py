import numpy as np
import pytest
from planet_shaders import constants
from planet_shaders.intersections import (
    in_ring_band, intersect_plane, intersect_ring, intersect_sphere,
    planar_distance, solve_quadratic_vectorized)
from planet_shaders.ray import Ray
from planet_shaders.vector import length, normalize


def test_solve_quadratic_vectorized():
    t1, t2, valid = solve_quadratic_vectorized(
        np.array([1.0, 1.0, 1.0]), np.array([-3.0, 2.0, 0.0]), np.array([2.0, 1.0, 1.0]))
    np.testing.assert_array_equal(valid, [True, True, False])
    np.testing.assert_allclose(t1[:2], [1.0, -1.0])
    np.testing.assert_allclose(t2[:2], [2.0, -1.0])
    assert t1[2] == np.inf


def test_head_on_distance(unit_sphere):
    ray = Ray(np.array([0.0, 0.0, -5.0]), np.array([0.0, 0.0, 1.0]))
    assert unit_sphere.intersect(ray) == pytest.approx(4.0)


def test_head_on_distance_offset_center():
    center = np.array([1.0, 2.0, 3.0])
    origin = np.array([-4.0, 0.0, 8.0])
    direction = center - origin
    t = intersect_sphere(origin, normalize(direction), center, 0.75)
    assert t == pytest.approx(length(direction) - 0.75)


def test_hit_points_lie_on_sphere():
    rng = np.random.default_rng(7)
    center = np.array([0.5, -1.0, 2.0])
    radius = 1.3
    targets = center + rng.normal(size=(200, 3)) * 0.8
    origin = np.array([0.0, 0.0, -10.0])
    ray = Ray(origin, targets - origin)

    t = intersect_sphere(ray.origin, ray.direction, center, radius)
    hit = np.isfinite(t)
    assert np.any(hit)
    points = ray.origin + ray.direction[hit] * t[hit][:, None]
    np.testing.assert_allclose(length(points - center), radius, rtol=1e-9)
    assert np.all(t[hit] > constants.HIT_EPSILON)


def test_pointing_away_misses(unit_sphere):
    ray = Ray(np.array([0.0, 0.0, -5.0]), np.array([0.0, 0.0, -1.0]))
    assert unit_sphere.intersect(ray) == np.inf


def test_grazing_miss(unit_sphere):
    ray = Ray(np.array([0.0, 1.5, -5.0]), np.array([0.0, 0.0, 1.0]))
    assert unit_sphere.intersect(ray) == np.inf


def test_inside_uses_far_root(unit_sphere):
    ray = Ray(np.array([0.0, 0.0, 0.0]), np.array([1.0, 0.0, 0.0]))
    assert unit_sphere.intersect(ray) == pytest.approx(1.0)


def test_epsilon_suppresses_surface_origin(unit_sphere):
    # Leaving the surface outward: the near root is ~0 and must be ignored
    ray = Ray(np.array([0.0, 0.0, -1.0]), np.array([0.0, 0.0, -1.0]))
    assert unit_sphere.intersect(ray) == np.inf
    # Leaving the surface inward: the far side is found instead
    ray = Ray(np.array([0.0, 0.0, -1.0]), np.array([0.0, 0.0, 1.0]))
    assert unit_sphere.intersect(ray) == pytest.approx(2.0)


def test_intersect_plane_parallel_and_behind():
    normal = np.array([0.0, 1.0, 0.0])
    t = intersect_plane(np.array([0.0, 2.0, 0.0]),
                        np.array([[0.0, -1.0, 0.0], [1.0, 0.0, 0.0], [0.0, 1.0, 0.0]]),
                        np.zeros(3), normal)
    assert t[0] == pytest.approx(2.0)
    assert t[1] == np.inf
    assert t[2] == pytest.approx(-2.0)


def test_ring_band_boundaries_excluded():
    radius = 1.7
    inner = radius * constants.RING_INNER_FACTOR
    outer = radius * constants.RING_OUTER_FACTOR
    r = np.array([inner, outer, np.nextafter(inner, np.inf), np.nextafter(outer, 0.0),
                  0.5 * (inner + outer), inner * 0.9, outer * 1.1])
    np.testing.assert_array_equal(in_ring_band(r, radius),
                                  [False, False, True, True, True, False, False])


def _ring_ray(center, planar_r, height=5.0):
    normal = constants.RING_PLANE_NORMAL
    u = normalize(np.cross(normal, np.array([1.0, 0.0, 0.0])))
    target = center + planar_r * u
    return target + normal * height, -normal, target


def test_intersect_ring_inside_band():
    center = np.array([3.0, 0.5, 1.5])
    origin, direction, target = _ring_ray(center, 2.0)
    t, r = intersect_ring(origin, direction, center, 1.0)
    assert t == pytest.approx(5.0)
    assert r == pytest.approx(2.0)
    assert planar_distance(target, center, constants.RING_PLANE_NORMAL) == pytest.approx(2.0)


def test_intersect_ring_outside_band_and_cutoff():
    center = np.array([3.0, 0.5, 1.5])
    origin, direction, _ = _ring_ray(center, 3.0)
    t, r = intersect_ring(origin, direction, center, 1.0)
    assert t == np.inf
    assert r == pytest.approx(3.0)

    origin, direction, _ = _ring_ray(center, 2.0)
    t, _ = intersect_ring(origin, direction, center, 1.0, max_t=np.array([4.0]))
    assert t == np.inf, "A nearer sphere hit suppresses the ring"
