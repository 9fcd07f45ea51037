"""Utility functions for placement and composite operations."""

import logging
from typing import Union

import numpy as np
from numpy.typing import NDArray

from raster_tools.constants import Anchor
from raster_tools.exceptions import InvalidParameterError

logger = logging.getLogger(__name__)

# Alpha values below this are treated as fully transparent.
EPSILON = 0.001


def anchor_offset(
    container: tuple[int, int],
    content: tuple[int, int],
    anchor: Union[Anchor, str],
) -> tuple[int, int]:
    """
    Offset of the content's top-left corner inside the container.

    Both sizes are ``(width, height)``. With ``diff = container - content``
    the left/top edge maps to 0, the right/bottom edge to ``diff`` and the
    center to ``diff // 2``. The result is negative when the content is
    larger than the container; callers clip.

    Example::

        anchor_offset((20, 20), (10, 10), Anchor.BOTTOM_RIGHT)  # (10, 10)
        anchor_offset((10, 10), (15, 15), "center")             # (-3, -3)
    """
    try:
        anchor = Anchor(anchor)
    except ValueError:
        raise InvalidParameterError(
            "Unknown anchor: %s. Use one of %s."
            % (anchor, ", ".join(a.value for a in Anchor))
        ) from None
    diff_w = container[0] - content[0]
    diff_h = container[1] - content[1]

    horizontal, vertical = _ANCHOR_FACTORS[anchor]
    return _place(diff_w, horizontal), _place(diff_h, vertical)


# 0: left/top, 1: center, 2: right/bottom.
_ANCHOR_FACTORS = {
    Anchor.TOP_LEFT: (0, 0),
    Anchor.TOP_CENTER: (1, 0),
    Anchor.TOP_RIGHT: (2, 0),
    Anchor.CENTER_LEFT: (0, 1),
    Anchor.CENTER: (1, 1),
    Anchor.CENTER_RIGHT: (2, 1),
    Anchor.BOTTOM_LEFT: (0, 2),
    Anchor.BOTTOM_CENTER: (1, 2),
    Anchor.BOTTOM_RIGHT: (2, 2),
}


def _place(diff: int, factor: int) -> int:
    if factor == 0:
        return 0
    if factor == 1:
        return diff // 2
    return diff


def intersect(
    a: tuple[int, int, int, int], b: tuple[int, int, int, int]
) -> tuple[int, int, int, int]:
    """Calculate intersection of two bounding boxes."""
    inter = (max(a[0], b[0]), max(a[1], b[1]), min(a[2], b[2]), min(a[3], b[3]))
    if inter[0] >= inter[2] or inter[1] >= inter[3]:
        return (0, 0, 0, 0)
    return inter


def paste(
    viewport: tuple[int, int, int, int],
    bbox: tuple[int, int, int, int],
    values: np.ndarray,
    background: np.ndarray,
) -> np.ndarray:
    """
    Change to the specified viewport.

    ``values`` occupies ``bbox`` (left, top, right, bottom) in a shared
    coordinate space; the returned array covers ``viewport`` and holds
    ``background`` wherever ``values`` does not reach.
    """
    shape = (viewport[3] - viewport[1], viewport[2] - viewport[0], values.shape[2])
    view = np.empty(shape, dtype=values.dtype)
    view[:, :] = background
    inter = intersect(viewport, bbox)
    if inter == (0, 0, 0, 0):
        return view

    v = (
        inter[0] - viewport[0],
        inter[1] - viewport[1],
        inter[2] - viewport[0],
        inter[3] - viewport[1],
    )
    b = (inter[0] - bbox[0], inter[1] - bbox[1], inter[2] - bbox[0], inter[3] - bbox[1])
    view[v[1] : v[3], v[0] : v[2], :] = values[b[1] : b[3], b[0] : b[2], :]
    return view


def divide(a: NDArray[np.floating], b: NDArray[np.floating]) -> NDArray[np.floating]:
    """Safe division for color ops."""
    with np.errstate(divide="ignore", invalid="ignore"):
        c = np.true_divide(a, b)
        c[~np.isfinite(c)] = 0.0
    return c


def round_half_up(x: NDArray[np.floating]) -> NDArray[np.floating]:
    """Round non-negative values to the nearest integer, ties away from zero."""
    return np.floor(x + 0.5)


def to_uint8(x: NDArray[np.floating]) -> NDArray[np.uint8]:
    """Round and clip float channel values into ``uint8``."""
    return np.clip(round_half_up(x), 0, 255).astype(np.uint8)
