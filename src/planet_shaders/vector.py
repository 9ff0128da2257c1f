"""
Vector math on numpy arrays.

A vector is any array whose last axis has length 3, so every helper here
works on a single ``(3,)`` vector and on a batch ``(N, 3)`` alike.
Arithmetic (add, subtract, component-wise multiply/divide, negation and
scalar scaling) is plain numpy operator broadcasting.
"""
import numpy as np


def vec3(x, y, z):
    """Build a single float vector."""
    return np.array([x, y, z], dtype=float)


def dot(a, b):
    return np.sum(np.asarray(a) * np.asarray(b), axis=-1)


def cross(a, b):
    return np.cross(a, b)


def length(v):
    return np.sqrt(dot(v, v))


def normalize(v):
    """
    Scale vectors to unit length.

    Rows with length exactly 0 are returned unchanged instead of dividing
    by zero.
    """
    v = np.asarray(v, dtype=float)
    lengths = length(v)[..., None]
    safe = np.where(lengths == 0.0, 1.0, lengths)
    return v / safe


def clamp(v, lo, hi):
    """Component-wise clamp; NaN components map to ``lo``."""
    return np.fmin(np.fmax(v, lo), hi)
