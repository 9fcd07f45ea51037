"""
Color values and the color text parser.

Supported formats::

    black, white, red, green, blue, yellow, cyan, magenta, transparent
    #RGB  #RGBA  #RRGGBB  #RRGGBBAA
    rgb(R, G, B)  rgba(R, G, B, A)

Example::

    from raster_tools.color import parse_color

    parse_color("#f008")            # Color(r=255, g=0, b=0, a=136)
    parse_color(" RGB(1, 2, 3) ")   # Color(r=1, g=2, b=3, a=255)
"""

import logging
from typing import Iterator

import numpy as np
from attrs import astuple, define, field

from raster_tools.exceptions import InvalidColorError
from raster_tools.validators import range_

logger = logging.getLogger(__name__)


@define(frozen=True)
class Color:
    """
    8-bit RGBA color.

    .. py:attribute:: r
    .. py:attribute:: g
    .. py:attribute:: b
    .. py:attribute:: a

        Alpha, 255 is fully opaque.
    """

    r: int = field(default=0, validator=range_(0, 255))
    g: int = field(default=0, validator=range_(0, 255))
    b: int = field(default=0, validator=range_(0, 255))
    a: int = field(default=255, validator=range_(0, 255))

    def __iter__(self) -> Iterator[int]:
        return iter(astuple(self))

    def astuple(self) -> tuple[int, int, int, int]:
        return astuple(self)

    def numpy(self) -> np.ndarray:
        """Return the color as a ``uint8`` array of shape ``(4,)``."""
        return np.array(astuple(self), dtype=np.uint8)


BLACK = Color(0, 0, 0, 255)
WHITE = Color(255, 255, 255, 255)
TRANSPARENT = Color(0, 0, 0, 0)

NAMED_COLORS = {
    "black": BLACK,
    "white": WHITE,
    "red": Color(255, 0, 0, 255),
    "green": Color(0, 255, 0, 255),
    "blue": Color(0, 0, 255, 255),
    "yellow": Color(255, 255, 0, 255),
    "cyan": Color(0, 255, 255, 255),
    "magenta": Color(255, 0, 255, 255),
    "transparent": TRANSPARENT,
}

_HEX_DIGITS = frozenset("0123456789abcdef")


def parse_color(text: str) -> Color:
    """
    Parse a color specification.

    Matching is case-insensitive and surrounding whitespace is ignored.

    :param text: color text, see the module documentation.
    :return: :py:class:`Color`
    :raises InvalidColorError: if the text is not a recognized color.
    """
    value = text.strip().lower()

    color = NAMED_COLORS.get(value)
    if color is not None:
        return color

    if value.startswith("#"):
        return _parse_hex(value[1:])

    if value.startswith("rgb(") and value.endswith(")"):
        return _parse_components(value[4:-1], 3, "rgb()")

    if value.startswith("rgba(") and value.endswith(")"):
        return _parse_components(value[5:-1], 4, "rgba()")

    raise InvalidColorError("Unrecognized color format: %s" % value)


def _parse_hex(digits: str) -> Color:
    digits = digits.strip()
    if len(digits) not in (3, 4, 6, 8):
        raise InvalidColorError("Invalid hex color length: %s" % digits)
    for c in digits:
        if c not in _HEX_DIGITS:
            raise InvalidColorError("Invalid hex digit: %s" % c)

    if len(digits) in (3, 4):
        channels = [int(c, 16) * 17 for c in digits]
    else:
        channels = [int(digits[i : i + 2], 16) for i in range(0, len(digits), 2)]
    if len(channels) == 3:
        channels.append(255)
    return Color(*channels)


def _parse_components(inner: str, count: int, form: str) -> Color:
    parts = [part.strip() for part in inner.split(",")]
    if len(parts) != count:
        raise InvalidColorError(
            "%s requires %d values, got %d" % (form, count, len(parts))
        )
    channels = [_parse_component(part) for part in parts]
    if count == 3:
        channels.append(255)
    return Color(*channels)


def _parse_component(part: str) -> int:
    if not part.isdigit() or not part.isascii():
        raise InvalidColorError("Invalid color component: %s" % part)
    component = int(part)
    if component > 255:
        raise InvalidColorError("Invalid color component: %s" % part)
    return component
