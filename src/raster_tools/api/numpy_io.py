"""
NumPy pixel buffer helpers.

A pixel buffer is an ``ndarray`` of shape ``(height, width, channels)``.
Engine operations work on RGBA ``uint8`` buffers; :py:func:`to_rgba`
normalizes the other layouts produced by the loader or by earlier
operations (gray, gray+alpha, RGB, 16-bit).
"""

import logging
from typing import Union

import numpy as np

from raster_tools.color import Color
from raster_tools.exceptions import InvalidDimensionsError, InvalidParameterError

logger = logging.getLogger(__name__)

# Luminance weights for R, G and B.
LUMA_WEIGHTS = (0.299, 0.587, 0.114)


def to_rgba(array: np.ndarray) -> np.ndarray:
    """
    Return a new RGBA ``uint8`` copy of the given buffer.

    2D arrays are treated as single channel. One channel is gray, two are
    gray and alpha, three are RGB and four are RGBA. 16-bit samples are
    narrowed with rounding.
    """
    array = np.asarray(array)
    if array.ndim == 2:
        array = array[:, :, np.newaxis]
    if array.ndim != 3:
        raise InvalidDimensionsError(
            "Expected a (height, width, channels) buffer, got shape %s"
            % (array.shape,)
        )
    array = _to_uint8(array)

    channels = array.shape[2]
    if channels == 4:
        return array.copy()
    if channels == 3:
        alpha = np.full(array.shape[:2] + (1,), 255, dtype=np.uint8)
        return np.concatenate((array, alpha), axis=2)
    if channels == 2:
        return np.concatenate(
            (np.repeat(array[:, :, :1], 3, axis=2), array[:, :, 1:2]), axis=2
        )
    if channels == 1:
        alpha = np.full(array.shape[:2] + (1,), 255, dtype=np.uint8)
        return np.concatenate((np.repeat(array, 3, axis=2), alpha), axis=2)
    raise InvalidDimensionsError("Unsupported number of channels: %d" % channels)


def _to_uint8(array: np.ndarray) -> np.ndarray:
    if array.dtype == np.uint8:
        return array
    if array.dtype == np.uint16:
        return ((array.astype(np.uint32) + 128) // 257).astype(np.uint8)
    if array.dtype == np.bool_:
        return array.astype(np.uint8) * 255
    raise InvalidParameterError("Unsupported buffer dtype: %s" % array.dtype)


def luminance(array: np.ndarray) -> np.ndarray:
    """
    Luminance of a buffer as a ``uint8`` array of shape ``(height, width)``.

    Computed as ``round(0.299 R + 0.587 G + 0.114 B)``; alpha is ignored.
    """
    rgba = to_rgba(array).astype(np.float64)
    weights = np.array(LUMA_WEIGHTS, dtype=np.float64)
    gray = rgba[:, :, :3] @ weights
    return np.clip(np.floor(gray + 0.5), 0, 255).astype(np.uint8)


def new_buffer(
    width: int, height: int, color: Union[Color, tuple[int, ...]]
) -> np.ndarray:
    """Create an RGBA buffer filled with a single color."""
    if width <= 0 or height <= 0:
        raise InvalidDimensionsError(
            "Buffer dimensions must be positive, got %dx%d" % (width, height)
        )
    buffer = np.empty((height, width, 4), dtype=np.uint8)
    buffer[:, :] = tuple(color)
    return buffer


def size(array: np.ndarray) -> tuple[int, int]:
    """Return ``(width, height)`` of a buffer."""
    return array.shape[1], array.shape[0]
