"""
Scene configuration for the Planet Shaders renderer.
"""
import numpy as np

# Surface layout (index-stable)
STAR_INDEX = 0
ROCKY_INDEX = 1
MOON_INDEX = 2
GAS_GIANT_INDEX = 3

# Initial bodies: (center, radius, is_light, phase)
STAR_CENTER = (0.0, 0.0, 0.0)
STAR_RADIUS = 1.4
ROCKY_CENTER = (-3.0, 0.0, 1.0)
ROCKY_RADIUS = 1.0
ROCKY_PHASE = 0.2
MOON_CENTER = (-2.2, 0.0, 1.6)
MOON_RADIUS = 0.28
MOON_PHASE = 0.9
GAS_GIANT_CENTER = (3.0, 0.5, 1.5)
GAS_GIANT_RADIUS = 1.0
GAS_GIANT_PHASE = 1.0

# Camera
CAMERA_POSITION = (0.0, 0.0, -9.0)
FIELD_OF_VIEW = 1.0  # radians

# Orbits
TIME_SCALE = 0.9
ROCKY_ORBIT_RADIUS = 3.0
ROCKY_ORBIT_RATE = 1.0
MOON_ORBIT_AXES = (1.4, 0.65, 0.9)  # x, y (wobble), z
MOON_ORBIT_RATE = 2.2
MOON_WOBBLE_RATE = 1.6
GAS_GIANT_ORBIT_RADIUS = 6.0
GAS_GIANT_ORBIT_RATE = 0.4
GAS_GIANT_Y_OFFSET = -0.6

# Intersection epsilons
HIT_EPSILON = 1e-3
PLANE_PARALLEL_EPSILON = 1e-6
SPHERE_SHADOW_OFFSET = 1e-3
RING_SHADOW_OFFSET = 5e-4

# Ring plane (separate from the gas giant's in-surface ring bands)
RING_PLANE_NORMAL = np.array([0.0, 2.0, 0.26]) / np.linalg.norm([0.0, 2.0, 0.26])
RING_INNER_FACTOR = 1.35
RING_OUTER_FACTOR = 2.6
RING_BAND_COUNT = 40.0
RING_BASE_COLOR = np.array([0.86, 0.82, 0.72])
RING_DARK_COLOR = np.array([0.35, 0.32, 0.30])
RING_AMBIENT = np.array([0.12, 0.12, 0.12])
RING_LIGHT_GAIN = 1.8
RING_SPECULAR_POWER = 8.0
RING_SPECULAR_STRENGTH = 0.25

# Gas giant in-surface ring bands
SURFACE_RING_INNER_FACTOR = 1.4
SURFACE_RING_OUTER_FACTOR = 2.4
SURFACE_RING_BAND_COUNT = 30.0

# Lighting
AMBIENT = np.array([0.06, 0.06, 0.07])
SPECULAR_POWER = 40.0
SPECULAR_STRENGTH = 0.2
ATTENUATION_CONSTANT = 0.5
ATTENUATION_QUADRATIC = 0.1

# Sky gradient (bottom, top)
SKY_BOTTOM = np.array([0.05, 0.05, 0.08])
SKY_TOP = np.array([0.02, 0.03, 0.06])
