import logging
from typing import Sequence

import numpy as np

logging.basicConfig(level=logging.DEBUG)


def solid(width: int, height: int, color: Sequence[int]) -> np.ndarray:
    """Create an RGBA buffer of a single color."""
    buffer = np.empty((height, width, 4), dtype=np.uint8)
    buffer[:, :] = tuple(color)
    return buffer


def gradient(width: int, height: int) -> np.ndarray:
    """Create an opaque RGBA buffer where every pixel is distinct."""
    ys, xs = np.mgrid[0:height, 0:width]
    buffer = np.empty((height, width, 4), dtype=np.uint8)
    buffer[:, :, 0] = (xs * 7) % 256
    buffer[:, :, 1] = (ys * 13) % 256
    buffer[:, :, 2] = (xs + ys) % 256
    buffer[:, :, 3] = 255
    return buffer


def pixel(buffer: np.ndarray, x: int, y: int) -> tuple:
    """Return the pixel at ``(x, y)`` as a tuple of ints."""
    return tuple(int(v) for v in buffer[y, x])
