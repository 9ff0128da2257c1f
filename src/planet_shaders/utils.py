"""
Batch helpers shared by the intersection and shading code.

Public entry points accept either a single ``(3,)`` vector or an ``(N, 3)``
batch; internally everything runs on batches.
"""
import numpy as np


def as_batch(vectors):
    """
    Promote a single vector to a batch of one.

    Returns:
        tuple: (batch array of shape (N, 3), was_single flag)
    """
    arr = np.asarray(vectors, dtype=float)
    if arr.ndim == 1:
        return arr[None, :], True
    return arr, False


def unbatch(arrays, was_single):
    """Drop the batch axis again if the caller passed a single vector."""
    if not was_single:
        return arrays
    if isinstance(arrays, (list, tuple)):
        return type(arrays)(arr[0] for arr in arrays)
    return arrays[0]
