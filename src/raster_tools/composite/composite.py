"""Alpha compositing of one pixel buffer over another."""

import logging
from typing import Callable, Optional, Union

import numpy as np

from raster_tools.api import numpy_io
from raster_tools.composite import utils
from raster_tools.composite.blend import get_blend_func
from raster_tools.constants import Anchor, BlendMode
from raster_tools.exceptions import InvalidParameterError

logger = logging.getLogger(__name__)


def composite(
    base: np.ndarray,
    overlay: np.ndarray,
    x: int = 0,
    y: int = 0,
    anchor: Optional[Union[Anchor, str]] = None,
    opacity: float = 1.0,
    blend_mode: Union[BlendMode, str] = BlendMode.NORMAL,
) -> np.ndarray:
    """
    Composite ``overlay`` over ``base`` and return a new RGBA buffer.

    The overlay's top-left corner goes to ``(x, y)`` in base coordinates,
    unless ``anchor`` is given, in which case the anchor decides the
    position and ``x``, ``y`` are ignored. Overlay pixels falling outside
    the base are clipped. The result always has the size of the base.

    Per pixel, with backdrop ``B`` and source ``O``:

    1. ``a_s = O.a / 255 * opacity``; if it is ~0 the backdrop passes.
    2. ``M = blend(B.rgb, O.rgb)``.
    3. ``a_r = a_s + B.a / 255 * (1 - a_s)``, never below ``a_s``;
       ``rgb = lerp(B, M, a_s / a_r)`` and ``alpha = a_r * 255``, both
       rounded.

    Args:
        base: Backdrop buffer.
        overlay: Source buffer.
        x: Horizontal position of the overlay, may be negative.
        y: Vertical position of the overlay, may be negative.
        anchor: Optional :py:class:`~raster_tools.constants.Anchor`.
        opacity: Overlay opacity in [0, 1].
        blend_mode: :py:class:`~raster_tools.constants.BlendMode` or its name.

    Returns:
        RGBA ``uint8`` buffer of the base size.

    Raises:
        InvalidParameterError: opacity out of range or unknown blend mode.

    Example::

        from raster_tools.composite import composite

        result = composite(base, logo, anchor="bottom-right", opacity=0.5)
    """
    if not 0.0 <= opacity <= 1.0:
        raise InvalidParameterError(
            "Opacity must be between 0.0 and 1.0, got %s" % opacity
        )
    blend_fn = get_blend_func(blend_mode)

    result = numpy_io.to_rgba(base)
    source = numpy_io.to_rgba(overlay)
    base_w, base_h = numpy_io.size(result)
    overlay_w, overlay_h = numpy_io.size(source)

    if anchor is not None:
        x, y = utils.anchor_offset((base_w, base_h), (overlay_w, overlay_h), anchor)
        logger.debug("Overlay anchored at %s: (%d, %d)" % (Anchor(anchor).value, x, y))

    viewport = (0, 0, base_w, base_h)
    bbox = (x, y, x + overlay_w, y + overlay_h)
    inter = utils.intersect(viewport, bbox)
    if inter == (0, 0, 0, 0):
        logger.debug("Overlay %s is out of viewport %s" % (bbox, viewport))
        return result

    backdrop = result[inter[1] : inter[3], inter[0] : inter[2], :]
    source = source[inter[1] - y : inter[3] - y, inter[0] - x : inter[2] - x, :]
    result[inter[1] : inter[3], inter[0] : inter[2], :] = blend_pixels(
        backdrop, source, opacity, blend_fn
    )
    return result


def blend_pixels(
    backdrop: np.ndarray,
    source: np.ndarray,
    opacity: float,
    blend_fn: Callable[[np.ndarray, np.ndarray], np.ndarray],
) -> np.ndarray:
    """
    Blend two same-shaped RGBA ``uint8`` arrays with Porter-Duff "over".
    """
    color_b = backdrop[:, :, :3].astype(np.float64)
    color_s = source[:, :, :3].astype(np.float64)
    alpha_b = backdrop[:, :, 3:4].astype(np.float64) / 255.0
    alpha_s = source[:, :, 3:4].astype(np.float64) / 255.0 * opacity

    blended = blend_fn(color_b, color_s)
    alpha_r = alpha_s + alpha_b * (1.0 - alpha_s)
    t = utils.divide(alpha_s, alpha_r)

    color = utils.to_uint8(color_b + (blended - color_b) * t)
    alpha = utils.to_uint8(alpha_r * 255.0)
    pixels = np.concatenate((color, alpha), axis=2)

    passthrough = np.squeeze(alpha_s < utils.EPSILON, axis=2)
    pixels[passthrough] = backdrop[passthrough]
    return pixels
