"""
Color conversions: grayscale, inversion and bit depth.

Example::

    from raster_tools.api.convert import change_depth, grayscale

    gray = grayscale(image, preserve_alpha=False)   # (h, w, 1)
    mono = change_depth(image, 1, dither=True)      # only 0 and 255
"""

import logging

import numpy as np

from raster_tools.api import numpy_io
from raster_tools.exceptions import InvalidParameterError

logger = logging.getLogger(__name__)

# Luminance level above which a pixel becomes white.
THRESHOLD = 127


def grayscale(buffer: np.ndarray, preserve_alpha: bool = True) -> np.ndarray:
    """
    Convert to grayscale with ``round(0.299 R + 0.587 G + 0.114 B)``.

    With ``preserve_alpha`` the result is RGBA ``(g, g, g, a)``; otherwise it
    is a single channel ``(h, w, 1)`` buffer.
    """
    rgba = numpy_io.to_rgba(buffer)
    gray = numpy_io.luminance(rgba)
    if not preserve_alpha:
        return gray[:, :, np.newaxis]
    rgba[:, :, :3] = gray[:, :, np.newaxis]
    return rgba


def invert(buffer: np.ndarray, invert_alpha: bool = False) -> np.ndarray:
    """Replace every color channel with ``255 - value``, alpha optionally."""
    result = numpy_io.to_rgba(buffer)
    channels = 4 if invert_alpha else 3
    result[:, :, :channels] = 255 - result[:, :, :channels]
    return result


def change_depth(buffer: np.ndarray, bits: int, dither: bool = False) -> np.ndarray:
    """
    Change the bit depth of a buffer.

    ===== ===============================================================
    bits  result
    ===== ===============================================================
    1     ``(h, w, 1)`` ``uint8`` of only 0 and 255, from luminance by
          thresholding or by Floyd-Steinberg error diffusion.
    8     RGBA ``uint8`` copy.
    16    RGBA ``uint16`` with every sample multiplied by 257.
    ===== ===============================================================

    :raises InvalidParameterError: for any other bit depth.
    """
    if bits not in (1, 8, 16):
        raise InvalidParameterError(
            "Unsupported bit depth: %s. Use 1, 8, or 16." % bits
        )

    if bits == 8:
        return numpy_io.to_rgba(buffer)
    if bits == 16:
        return numpy_io.to_rgba(buffer).astype(np.uint16) * 257

    gray = numpy_io.luminance(buffer)
    if dither:
        logger.debug("Reducing to 1 bit with error diffusion")
        mono = floyd_steinberg(gray)
    else:
        logger.debug("Reducing to 1 bit with threshold %d" % THRESHOLD)
        mono = np.where(gray > THRESHOLD, 255, 0).astype(np.uint8)
    return mono[:, :, np.newaxis]


def floyd_steinberg(gray: np.ndarray) -> np.ndarray:
    """
    Floyd-Steinberg dithering of a 2D ``uint8`` luminance array.

    The error buffer is a per-call list of rows of signed ints. Pixels are
    visited in row-major order and the quantization error is spread to the
    unvisited neighbours with weights 7/16, 3/16, 5/16 and 1/16, each share
    truncated toward zero.
    """
    height, width = gray.shape
    errors = gray.astype(np.int32).tolist()
    output = np.zeros((height, width), dtype=np.uint8)

    for y in range(height):
        row = errors[y]
        below = errors[y + 1] if y + 1 < height else None
        for x in range(width):
            old = min(max(row[x], 0), 255)
            new = 255 if old > THRESHOLD else 0
            output[y, x] = new
            error = old - new
            if error == 0:
                continue

            if x + 1 < width:
                row[x + 1] += _trunc_div(error * 7, 16)
            if below is not None:
                if x > 0:
                    below[x - 1] += _trunc_div(error * 3, 16)
                below[x] += _trunc_div(error * 5, 16)
                if x + 1 < width:
                    below[x + 1] += _trunc_div(error, 16)
    return output


def _trunc_div(a: int, b: int) -> int:
    if a < 0:
        return -(-a // b)
    return a // b
