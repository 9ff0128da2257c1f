import numpy as np
import pytest
from planet_shaders import constants
from planet_shaders.tools.plot_orbits import create_visualization, sample_orbits


def test_rocky_planet_at_time_zero(scene):
    scene.update_orbits(0.0)
    star = scene.spheres[constants.STAR_INDEX].center
    rocky = scene.spheres[constants.ROCKY_INDEX].center
    np.testing.assert_allclose(rocky, star + np.array([3.0, 0.0, 0.0]))


def test_rocky_planet_quarter_orbit(scene):
    scene.update_orbits(np.pi / 1.8)
    star = scene.spheres[constants.STAR_INDEX].center
    rocky = scene.spheres[constants.ROCKY_INDEX].center
    assert rocky[0] == pytest.approx(star[0], abs=1e-12)
    assert rocky[1] == pytest.approx(star[1])
    assert rocky[2] - star[2] == pytest.approx(3.0)


def test_moon_follows_updated_planet(scene):
    for time in (0.0, 1.3, 7.9):
        scene.update_orbits(time)
        t = time * constants.TIME_SCALE
        rocky = scene.spheres[constants.ROCKY_INDEX].center
        moon = scene.spheres[constants.MOON_INDEX].center
        expected = rocky + np.array([1.4 * np.cos(t * 2.2), 0.65 * np.sin(t * 1.6), 0.9 * np.sin(t * 2.2)])
        np.testing.assert_allclose(moon, expected)


def test_gas_giant_orbit(scene):
    time = 4.2
    scene.update_orbits(time)
    t = time * constants.TIME_SCALE
    giant = scene.spheres[constants.GAS_GIANT_INDEX].center
    np.testing.assert_allclose(giant, [6.0 * np.cos(0.4 * t), -0.6, 6.0 * np.sin(0.4 * t)])


def test_orbits_leave_star_and_other_fields_alone(scene):
    before = [(s.radius, s.kind, s.is_light, s.phase) for s in scene.spheres]
    star_center = scene.spheres[constants.STAR_INDEX].center.copy()
    scene.update_orbits(12.5)
    after = [(s.radius, s.kind, s.is_light, s.phase) for s in scene.spheres]
    assert before == after
    np.testing.assert_array_equal(scene.spheres[constants.STAR_INDEX].center, star_center)


def test_render_applies_orbits_before_tracing(scene):
    buffer = np.zeros(scene.width * scene.height, dtype=np.uint32)
    scene.render(buffer, 2.0)
    t = 2.0 * constants.TIME_SCALE
    rocky = scene.spheres[constants.ROCKY_INDEX].center
    np.testing.assert_allclose(rocky, [3.0 * np.cos(t), 0.0, 3.0 * np.sin(t)])


def test_sample_orbits_paths(scene):
    times = np.linspace(0.0, 10.0, 25)
    paths = sample_orbits(scene, times)
    assert paths.shape == (25, 4, 3)
    radii = np.linalg.norm(paths[:, constants.ROCKY_INDEX] - paths[:, constants.STAR_INDEX], axis=1)
    np.testing.assert_allclose(radii, constants.ROCKY_ORBIT_RADIUS)


def test_visualization_saves_gif(tmp_path):
    create_visualization(duration=1.0, frames=2, out_dir=str(tmp_path))
    assert (tmp_path / "orbits.gif").stat().st_size > 0
