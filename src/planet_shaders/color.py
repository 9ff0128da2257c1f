"""
Tone mapping and pixel packing.

Pixels are 24-bit RGB packed into unsigned 32-bit integers as
``(R << 16) | (G << 8) | B``.
"""
import numpy as np

from planet_shaders.vector import clamp


def tone_map(colors):
    """Square-root gamma per channel, clamped to [0, 1] (NaN -> 0)."""
    with np.errstate(invalid='ignore'):
        return clamp(np.sqrt(colors), 0.0, 1.0)


def pack_pixels(colors):
    """
    Pack normalized RGB colors into integer pixels.

    Args:
        colors: (..., 3) float colors; clamped before conversion

    Returns:
        uint32 array of shape colors.shape[:-1]
    """
    channels = (clamp(np.asarray(colors, dtype=float), 0.0, 1.0) * 255.0).astype(np.uint32)
    return (channels[..., 0] << 16) | (channels[..., 1] << 8) | channels[..., 2]


def unpack_pixels(buffer, width, height):
    """Unpack a row-major packed buffer into an (height, width, 3) uint8 image."""
    pixels = np.asarray(buffer, dtype=np.uint32).reshape(height, width)
    image = np.empty((height, width, 3), dtype=np.uint8)
    image[:, :, 0] = (pixels >> 16) & 0xFF
    image[:, :, 1] = (pixels >> 8) & 0xFF
    image[:, :, 2] = pixels & 0xFF
    return image
