"""
Geometric placement: crop, pad and canvas resize.

All three are built on :py:func:`~raster_tools.composite.utils.anchor_offset`
and a bounds checked copy. Regions are validated before any pixel is
touched; nothing is clamped silently.

Example::

    from raster_tools.api.canvas import canvas_resize, crop, pad
    from raster_tools.color import parse_color

    thumb = crop(image, 0, 0, 200, 200, anchor="center")
    framed = pad(thumb, 10, 10, 10, 10, parse_color("white"))
    square = canvas_resize(framed, 300, 300, "center", parse_color("#0000"))
"""

import logging
from typing import Optional, Union

import numpy as np

from raster_tools.api import numpy_io
from raster_tools.color import TRANSPARENT, Color
from raster_tools.composite import utils
from raster_tools.constants import Anchor
from raster_tools.exceptions import (
    CropOutOfBoundsError,
    InvalidDimensionsError,
    InvalidParameterError,
)

logger = logging.getLogger(__name__)


def crop(
    buffer: np.ndarray,
    x: int,
    y: int,
    width: int,
    height: int,
    anchor: Union[Anchor, str] = Anchor.TOP_LEFT,
) -> np.ndarray:
    """
    Extract a ``width`` x ``height`` region.

    The region's origin is the anchor position of the region inside the
    image, shifted by ``(x, y)``.

    :raises InvalidDimensionsError: if the region is empty.
    :raises CropOutOfBoundsError: if the region is not inside the image.
    """
    if width <= 0 or height <= 0:
        raise InvalidDimensionsError(
            "Crop width and height must be greater than 0, got %dx%d"
            % (width, height)
        )

    rgba = numpy_io.to_rgba(buffer)
    img_width, img_height = numpy_io.size(rgba)
    anchor_x, anchor_y = utils.anchor_offset(
        (img_width, img_height), (width, height), anchor
    )
    left, top = anchor_x + x, anchor_y + y
    logger.debug("Crop origin (%d, %d) for anchor %s" % (left, top, Anchor(anchor).value))

    if left < 0 or top < 0 or left + width > img_width or top + height > img_height:
        raise CropOutOfBoundsError(
            "Crop region (%d, %d) + %dx%d exceeds image bounds %dx%d"
            % (left, top, width, height, img_width, img_height)
        )
    return rgba[top : top + height, left : left + width, :].copy()


def pad(
    buffer: np.ndarray,
    top: int,
    bottom: int,
    left: int,
    right: int,
    color: Union[Color, tuple[int, ...]] = TRANSPARENT,
) -> np.ndarray:
    """
    Add margins filled with ``color`` around the image.

    :raises InvalidDimensionsError: for negative margins or an empty result.
    """
    if min(top, bottom, left, right) < 0:
        raise InvalidDimensionsError(
            "Padding must not be negative, got top=%d bottom=%d left=%d right=%d"
            % (top, bottom, left, right)
        )
    rgba = numpy_io.to_rgba(buffer)
    orig_width, orig_height = numpy_io.size(rgba)
    new_width = orig_width + left + right
    new_height = orig_height + top + bottom
    if new_width == 0 or new_height == 0:
        raise InvalidDimensionsError("Resulting image dimensions would be zero")

    result = numpy_io.new_buffer(new_width, new_height, color)
    result[top : top + orig_height, left : left + orig_width, :] = rgba
    return result


def resolve_padding(
    all: Optional[int] = None,
    horizontal: Optional[int] = None,
    vertical: Optional[int] = None,
    top: Optional[int] = None,
    bottom: Optional[int] = None,
    left: Optional[int] = None,
    right: Optional[int] = None,
) -> tuple[int, int, int, int]:
    """
    Resolve padding options to ``(top, bottom, left, right)``.

    A side-specific value wins over the axis value, which wins over
    ``all``. Unset sides are 0.

    :raises InvalidParameterError: if no side gets any padding.
    """

    def _first(*values: Optional[int]) -> int:
        for value in values:
            if value is not None:
                return value
        return 0

    padding = (
        _first(top, vertical, all),
        _first(bottom, vertical, all),
        _first(left, horizontal, all),
        _first(right, horizontal, all),
    )
    if not any(padding):
        raise InvalidParameterError("At least one padding value must be specified")
    return padding


def canvas_resize(
    buffer: np.ndarray,
    width: int,
    height: int,
    anchor: Union[Anchor, str] = Anchor.CENTER,
    color: Union[Color, tuple[int, ...]] = TRANSPARENT,
) -> np.ndarray:
    """
    Place the image on a new ``width`` x ``height`` canvas.

    Content falling outside the canvas is dropped and uncovered canvas area
    is filled with ``color``. The image is not scaled.

    :raises InvalidDimensionsError: if the canvas is empty.
    """
    if width <= 0 or height <= 0:
        raise InvalidDimensionsError(
            "Canvas dimensions must be positive, got %dx%d" % (width, height)
        )
    rgba = numpy_io.to_rgba(buffer)
    orig_width, orig_height = numpy_io.size(rgba)
    offset_x, offset_y = utils.anchor_offset(
        (width, height), (orig_width, orig_height), anchor
    )
    logger.debug("Canvas offset (%d, %d)" % (offset_x, offset_y))

    background = np.array(tuple(color), dtype=np.uint8)
    bbox = (offset_x, offset_y, offset_x + orig_width, offset_y + orig_height)
    return utils.paste((0, 0, width, height), bbox, rgba, background)
