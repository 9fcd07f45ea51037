"""
Various constants for raster_tools
"""

from enum import Enum


class Anchor(str, Enum):
    """
    Anchor positions on a 3x3 grid.

    The anchor decides where content is placed inside a container, see
    :py:func:`~raster_tools.composite.utils.anchor_offset`.
    """

    TOP_LEFT = "top-left"
    TOP_CENTER = "top-center"
    TOP_RIGHT = "top-right"
    CENTER_LEFT = "center-left"
    CENTER = "center"
    CENTER_RIGHT = "center-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_CENTER = "bottom-center"
    BOTTOM_RIGHT = "bottom-right"


class BlendMode(str, Enum):
    """
    Blend modes.
    """

    NORMAL = "normal"
    MULTIPLY = "multiply"
    SCREEN = "screen"
    OVERLAY = "overlay"


class ResizeFilter(str, Enum):
    """
    Resampling filters.
    """

    NEAREST = "nearest"
    LINEAR = "linear"
    CUBIC = "cubic"
    LANCZOS = "lanczos"


class ImageFormat(str, Enum):
    """
    Output formats understood by the saver.

    Values are Pillow format names.
    """

    PNG = "PNG"
    JPEG = "JPEG"
    GIF = "GIF"
    BMP = "BMP"
    TIFF = "TIFF"
    WEBP = "WEBP"
    ICO = "ICO"


class ExitCode(int, Enum):
    """
    Process exit codes of the command line tool.
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    INPUT_NOT_FOUND = 2
    OUTPUT_WRITE_FAILED = 3
    UNSUPPORTED_FORMAT = 4
    INVALID_PARAMETERS = 5
