"""
Deterministic cell noise and fractal sums for procedural shading.

All arithmetic on seeds wraps modulo 2**32, matching unsigned 32-bit
integers, so results are identical on every platform. Inputs may be single
points ``(3,)`` or batches ``(N, 3)``.
"""
import numpy as np

_MASK32 = 0xFFFFFFFF
_INT32_MIN = -2**31
_INT32_MAX = 2**31 - 1

# Per-axis coordinate scales and spatial hashing primes
_AXIS_SCALE = np.array([12.9898, 78.233, 37.719])
_PRIMES = (73856093, 19349663, 83492791)


def hash1(n):
    """
    Avalanche-mix 32-bit seeds into floats in [0, 1).

    Args:
        n: Integer seed or array of seeds (taken modulo 2**32)

    Returns:
        Float or float array, same shape as ``n``
    """
    n = np.asarray(n).astype(np.uint64) & _MASK32
    n = ((n ^ 61) + (n << 3)) & _MASK32
    n = n ^ (n >> 4)
    n = (n * 0x27d4eb2d) & _MASK32
    n = n ^ (n >> 15)
    return n.astype(np.float64) / 4294967296.0


def _truncate_to_uint32(values):
    """Truncate toward zero into int32 (saturating, NaN -> 0), then reinterpret as uint32."""
    values = np.nan_to_num(values, nan=0.0, posinf=_INT32_MAX, neginf=_INT32_MIN)
    ints = np.trunc(np.clip(values, _INT32_MIN, _INT32_MAX)).astype(np.int64)
    return (ints & _MASK32).astype(np.uint64)


def noise3(p):
    """
    Cell noise: hash the coarsely truncated, scaled coordinates of ``p``.

    Values jump at cell boundaries; there is no interpolation.
    """
    p = np.asarray(p, dtype=float)
    cells = _truncate_to_uint32(p * _AXIS_SCALE)
    xi, yi, zi = cells[..., 0], cells[..., 1], cells[..., 2]
    n = ((xi * _PRIMES[0]) & _MASK32) \
        ^ ((yi * _PRIMES[1]) & _MASK32) \
        ^ ((zi * _PRIMES[2]) & _MASK32)
    return hash1(n)


def fbm(p, octaves):
    """
    Fractal sum of ``noise3`` octaves.

    Frequency starts at 1 and doubles, amplitude starts at 1 and halves.
    The result is not normalized; with ``octaves`` terms it lies in
    [0, 2 - 2**(1 - octaves)).
    """
    p = np.asarray(p, dtype=float)
    total = np.zeros(p.shape[:-1])
    amplitude = 1.0
    frequency = 1.0
    for _ in range(octaves):
        total = total + noise3(p * frequency) * amplitude
        frequency *= 2.0
        amplitude *= 0.5
    return total
