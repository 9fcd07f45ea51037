"""
Tone adjustments applied through per-channel lookup tables.

Each adjustment builds a 256-entry ``uint8`` table from its parameter and
maps the R, G and B channels through it. Alpha is never changed.
"""

import logging

import numpy as np

from raster_tools.api import numpy_io
from raster_tools.composite.utils import to_uint8
from raster_tools.exceptions import InvalidParameterError

logger = logging.getLogger(__name__)

_LEVELS = np.arange(256, dtype=np.float64)


def brightness(buffer: np.ndarray, value: int) -> np.ndarray:
    """
    Add ``value`` to every color channel.

    :param value: offset in [-255, 255].
    """
    _check_range("Brightness", value, -255, 255)
    return apply_lut(buffer, to_uint8(_LEVELS + value))


def contrast(buffer: np.ndarray, value: float) -> np.ndarray:
    """
    Scale color channels around the mid-gray level 128.

    :param value: factor in [0, 10]; 1 keeps the image unchanged.
    """
    _check_range("Contrast", value, 0.0, 10.0)
    return apply_lut(buffer, to_uint8((_LEVELS - 128.0) * value + 128.0))


def gamma(buffer: np.ndarray, value: float) -> np.ndarray:
    """
    Apply a power curve, ``255 * (in / 255) ** value``.

    :param value: exponent in [0.1, 10]; values above 1 darken.
    """
    _check_range("Gamma", value, 0.1, 10.0)
    return apply_lut(buffer, to_uint8(255.0 * np.power(_LEVELS / 255.0, value)))


def apply_lut(buffer: np.ndarray, lut: np.ndarray) -> np.ndarray:
    """Map the color channels of ``buffer`` through a 256-entry table."""
    logger.debug("Applying lookup table: 0 -> %d, 128 -> %d, 255 -> %d" % (
        lut[0], lut[128], lut[255]))
    result = numpy_io.to_rgba(buffer)
    result[:, :, :3] = lut[result[:, :, :3]]
    return result


def _check_range(name: str, value: float, minimum: float, maximum: float) -> None:
    if not minimum <= value <= maximum:
        raise InvalidParameterError(
            "%s must be between %s and %s, got %s" % (name, minimum, maximum, value)
        )
