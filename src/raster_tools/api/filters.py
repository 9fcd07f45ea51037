"""
Gaussian blur and unsharp mask.

Both filters use :py:func:`scipy.ndimage.gaussian_filter` with a sigma of a
third of the radius, so that the radius covers three standard deviations.
Edges are clamped.
"""

import logging

import numpy as np

from raster_tools.api import numpy_io
from raster_tools.api._compat import require_scipy
from raster_tools.composite.utils import EPSILON, to_uint8
from raster_tools.exceptions import InvalidParameterError

logger = logging.getLogger(__name__)


@require_scipy
def blur(buffer: np.ndarray, radius: float) -> np.ndarray:
    """
    Gaussian blur of all four channels.

    :param radius: blur radius in [0.1, 100].
    """
    if not 0.1 <= radius <= 100.0:
        raise InvalidParameterError(
            "Blur radius must be between 0.1 and 100.0, got %s" % radius
        )
    rgba = numpy_io.to_rgba(buffer)
    return to_uint8(_gaussian(rgba.astype(np.float64), radius))


@require_scipy
def sharpen(buffer: np.ndarray, amount: float = 1.0, radius: float = 1.0) -> np.ndarray:
    """
    Unsharp mask, ``orig + amount * (orig - blurred)`` on the color channels.

    Alpha is preserved.

    :param amount: strength in [0, 10].
    :param radius: radius of the blur in [0.1, 10].
    """
    if not 0.0 <= amount <= 10.0:
        raise InvalidParameterError(
            "Sharpen amount must be between 0.0 and 10.0, got %s" % amount
        )
    if not 0.1 <= radius <= 10.0:
        raise InvalidParameterError(
            "Sharpen radius must be between 0.1 and 10.0, got %s" % radius
        )
    result = numpy_io.to_rgba(buffer)
    if amount < EPSILON:
        logger.debug("Sharpen amount %s is negligible" % amount)
        return result

    color = result[:, :, :3].astype(np.float64)
    blurred = _gaussian(color, radius)
    result[:, :, :3] = to_uint8(color + amount * (color - blurred))
    return result


def _gaussian(values: np.ndarray, radius: float) -> np.ndarray:
    from scipy import ndimage  # type: ignore[import-untyped]

    sigma = radius / 3.0
    logger.debug("Gaussian filter with sigma %.4f" % sigma)
    return ndimage.gaussian_filter(values, sigma=(sigma, sigma, 0), mode="nearest")
