"""
Geometric transforms: flip, rotate, resize and fit.

Mirroring and quarter turns are exact NumPy remaps. Arbitrary rotation and
resampling go through Pillow.
"""

import logging
import math
from typing import Optional, Union

import numpy as np
from PIL import Image

from raster_tools.api import numpy_io
from raster_tools.color import TRANSPARENT, Color
from raster_tools.composite.utils import EPSILON
from raster_tools.constants import ResizeFilter
from raster_tools.exceptions import InvalidDimensionsError, InvalidParameterError

logger = logging.getLogger(__name__)

RESAMPLING = {
    ResizeFilter.NEAREST: Image.Resampling.NEAREST,
    ResizeFilter.LINEAR: Image.Resampling.BILINEAR,
    ResizeFilter.CUBIC: Image.Resampling.BICUBIC,
    ResizeFilter.LANCZOS: Image.Resampling.LANCZOS,
}


def flip(
    buffer: np.ndarray, horizontal: bool = False, vertical: bool = False
) -> np.ndarray:
    """
    Mirror the image left-right and/or top-bottom.

    :raises InvalidParameterError: if neither direction is requested.
    """
    if not horizontal and not vertical:
        raise InvalidParameterError(
            "Must specify at least one of horizontal or vertical"
        )
    result = numpy_io.to_rgba(buffer)
    if horizontal:
        result = result[:, ::-1, :]
    if vertical:
        result = result[::-1, :, :]
    return np.ascontiguousarray(result)


def rotate(
    buffer: np.ndarray,
    degrees: float,
    expand: bool = False,
    background: Union[Color, tuple[int, ...]] = TRANSPARENT,
) -> np.ndarray:
    """
    Rotate counter-clockwise by ``degrees``.

    Multiples of 90 degrees are lossless and swap the dimensions for quarter
    turns. Other angles are resampled bilinearly about the center; with
    ``expand`` the canvas grows to hold the whole rotated image, otherwise
    the corners are clipped. Uncovered area is filled with ``background``.
    """
    normalized = math.fmod(math.fmod(degrees, 360.0) + 360.0, 360.0)
    rgba = numpy_io.to_rgba(buffer)

    for quarter in range(5):
        if abs(normalized - 90.0 * quarter) < EPSILON:
            logger.debug("Lossless rotation by %d quarter turns" % (quarter % 4))
            return np.ascontiguousarray(np.rot90(rgba, quarter % 4))

    logger.debug("Resampled rotation by %.3f degrees" % normalized)
    image = Image.fromarray(rgba)
    rotated = image.rotate(
        normalized,
        resample=Image.Resampling.BILINEAR,
        expand=expand,
        fillcolor=tuple(background),
    )
    return np.asarray(rotated.convert("RGBA")).copy()


def resize(
    buffer: np.ndarray,
    width: Optional[int] = None,
    height: Optional[int] = None,
    scale: Optional[float] = None,
    filter: Union[ResizeFilter, str] = ResizeFilter.LANCZOS,
) -> np.ndarray:
    """
    Resize to exact dimensions or by a scale factor.

    ``scale`` takes precedence. With only one of ``width`` and ``height`` the
    other follows the aspect ratio.

    :raises InvalidParameterError: for a non-positive scale or no target.
    :raises InvalidDimensionsError: for a zero target size.
    """
    rgba = numpy_io.to_rgba(buffer)
    img_width, img_height = numpy_io.size(rgba)

    if scale is not None:
        if scale <= 0:
            raise InvalidParameterError("Scale must be positive")
        target = (_round(img_width * scale), _round(img_height * scale))
        if 0 in target:
            raise InvalidDimensionsError("Scaled dimensions would be zero")
    elif width is not None and height is not None:
        if width <= 0 or height <= 0:
            raise InvalidDimensionsError("Width and height must be positive")
        target = (width, height)
    elif width is not None:
        if width <= 0:
            raise InvalidDimensionsError("Width must be positive")
        target = (width, max(1, _round(img_height * width / img_width)))
    elif height is not None:
        if height <= 0:
            raise InvalidDimensionsError("Height must be positive")
        target = (max(1, _round(img_width * height / img_height)), height)
    else:
        raise InvalidParameterError("Must specify width, height, or scale")

    return _resample(rgba, target, filter)


def fit(
    buffer: np.ndarray,
    max_width: Optional[int] = None,
    max_height: Optional[int] = None,
    upscale: bool = False,
    filter: Union[ResizeFilter, str] = ResizeFilter.LANCZOS,
) -> np.ndarray:
    """
    Scale to fit inside ``max_width`` x ``max_height`` keeping aspect ratio.

    Images already inside the bounds are left alone unless ``upscale``.
    """
    if max_width is None and max_height is None:
        raise InvalidParameterError(
            "Must specify at least one of max-width or max-height"
        )
    rgba = numpy_io.to_rgba(buffer)
    img_width, img_height = numpy_io.size(rgba)

    scales = []
    if max_width is not None:
        scales.append(max_width / img_width)
    if max_height is not None:
        scales.append(max_height / img_height)
    scale = min(scales)
    if not upscale and scale > 1.0:
        scale = 1.0

    if abs(scale - 1.0) < 0.0001:
        logger.debug("Image already fits, scale %.4f" % scale)
        return rgba

    target = (_round(img_width * scale), _round(img_height * scale))
    if 0 in target:
        raise InvalidDimensionsError("Resulting dimensions would be zero")
    return _resample(rgba, target, filter)


def _resample(
    rgba: np.ndarray, target: tuple[int, int], filter: Union[ResizeFilter, str]
) -> np.ndarray:
    try:
        resample = RESAMPLING[ResizeFilter(filter)]
    except ValueError:
        raise InvalidParameterError(
            "Unknown filter: %s. Use one of %s."
            % (filter, ", ".join(f.value for f in ResizeFilter))
        ) from None
    logger.debug("Resampling %s -> %s with %s" % (
        numpy_io.size(rgba), target, ResizeFilter(filter).value))
    image = Image.fromarray(rgba).resize(target, resample=resample)
    return np.asarray(image).copy()


def _round(value: float) -> int:
    return int(math.floor(value + 0.5))
