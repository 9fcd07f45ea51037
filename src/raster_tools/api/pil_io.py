"""
PIL IO module.

Pillow is the codec layer: it decodes files into pixel buffers, encodes
buffers into files and reports file metadata.
"""

import logging
import os
from typing import Optional, Union

import numpy as np
from attrs import define, field
from PIL import Image, UnidentifiedImageError

from raster_tools.api import numpy_io
from raster_tools.constants import ImageFormat
from raster_tools.exceptions import (
    InputNotFoundError,
    InvalidParameterError,
    ReadError,
    UnsupportedFormatError,
    WriteError,
)
from raster_tools.validators import in_

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

EXTENSIONS = {
    "png": ImageFormat.PNG,
    "jpg": ImageFormat.JPEG,
    "jpeg": ImageFormat.JPEG,
    "gif": ImageFormat.GIF,
    "bmp": ImageFormat.BMP,
    "tif": ImageFormat.TIFF,
    "tiff": ImageFormat.TIFF,
    "webp": ImageFormat.WEBP,
    "ico": ImageFormat.ICO,
}

COLOR_TYPES = {
    "1": "Bitmap",
    "L": "Grayscale",
    "LA": "Grayscale+Alpha",
    "P": "Indexed",
    "RGB": "RGB",
    "RGBA": "RGBA",
    "CMYK": "CMYK",
    "I;16": "Grayscale16",
    "I;16B": "Grayscale16",
    "I;16L": "Grayscale16",
    "I": "Grayscale32",
    "F": "Grayscale32F",
}


@define
class ImageInfo:
    """
    Basic facts about an image file.

    .. py:attribute:: file
    .. py:attribute:: format

        Pillow format name, e.g. ``PNG``.

    .. py:attribute:: width
    .. py:attribute:: height
    .. py:attribute:: color_type
    .. py:attribute:: bit_depth

        Bits per channel.

    .. py:attribute:: file_size_bytes
    """

    file: str
    format: str
    width: int
    height: int
    color_type: str
    bit_depth: int = field(validator=in_((1, 8, 16, 32)))
    file_size_bytes: int

    def display(self) -> str:
        """Human readable multi-line description."""
        return "\n".join(
            [
                "File: %s" % self.file,
                "Format: %s" % self.format,
                "Dimensions: %dx%d" % (self.width, self.height),
                "Color Type: %s" % self.color_type,
                "Bit Depth: %d" % self.bit_depth,
                "File Size: %s" % format_file_size(self.file_size_bytes),
            ]
        )


def format_file_size(size: int) -> str:
    """Format a byte count as bytes, KB, MB or GB."""
    for unit, scale in (("GB", 1024**3), ("MB", 1024**2), ("KB", 1024)):
        if size >= scale:
            return "%.2f %s" % (size / scale, unit)
    return "%d bytes" % size


def get_bit_depth(mode: str) -> int:
    """Get the number of bits per channel for PIL modes."""
    if mode == "1":
        return 1
    if mode.startswith("I;16"):
        return 16
    if mode in ("I", "F"):
        return 32
    return 8


def to_pil(buffer: np.ndarray) -> Image.Image:
    """
    Convert a pixel buffer to a PIL image.

    Single channel buffers become ``L``, RGBA buffers ``RGBA``. 16-bit
    buffers are narrowed to 8 bits with a warning.
    """
    array = np.asarray(buffer)
    if array.dtype == np.uint16:
        logger.warning("Narrowing 16-bit buffer to 8 bits for encoding")
    if array.ndim == 3 and array.shape[2] == 1:
        gray = np.ascontiguousarray(numpy_io.to_rgba(array)[:, :, 0])
        return Image.fromarray(gray)
    return Image.fromarray(numpy_io.to_rgba(array))


def from_pil(image: Image.Image) -> np.ndarray:
    """Convert a PIL image to an RGBA ``uint8`` buffer."""
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    return np.asarray(image).copy()


def load_image(path: PathLike) -> np.ndarray:
    """
    Decode an image file into an RGBA ``uint8`` buffer.

    :raises InputNotFoundError: if the file does not exist.
    :raises ReadError: if the file cannot be decoded.
    """
    if not os.path.exists(path):
        raise InputNotFoundError(str(path))
    try:
        with Image.open(path) as image:
            logger.debug("Loading %s (%s, %s)" % (path, image.format, image.mode))
            return from_pil(image)
    except (UnidentifiedImageError, OSError) as e:
        raise ReadError(str(path), str(e)) from e


def determine_format(
    path: PathLike, explicit: Optional[Union[ImageFormat, str]] = None
) -> ImageFormat:
    """
    Pick the output format, from ``explicit`` or else the file extension.

    :raises UnsupportedFormatError: for an unknown or missing extension.
    """
    if explicit is not None:
        key = explicit.value if isinstance(explicit, ImageFormat) else explicit
        fmt = EXTENSIONS.get(key.lower())
        if fmt is None:
            raise UnsupportedFormatError("Unknown format: %s" % explicit)
        return fmt

    ext = os.path.splitext(os.fspath(path))[1].lstrip(".").lower()
    if not ext:
        raise UnsupportedFormatError("No file extension and no format specified")
    fmt = EXTENSIONS.get(ext)
    if fmt is None:
        raise UnsupportedFormatError("Unknown extension: .%s" % ext)
    return fmt


def save_image(
    buffer: np.ndarray,
    path: PathLike,
    format: Optional[Union[ImageFormat, str]] = None,
    quality: int = 90,
) -> None:
    """
    Encode a buffer to ``path``.

    JPEG drops alpha and honours ``quality`` (1-100); WebP is lossless.

    :raises UnsupportedFormatError: if no format can be determined.
    :raises WriteError: if encoding or writing fails.
    """
    fmt = determine_format(path, format)
    if not 1 <= quality <= 100:
        raise InvalidParameterError(
            "Quality must be between 1 and 100, got %s" % quality
        )

    image = to_pil(buffer)
    params: dict = {}
    if fmt == ImageFormat.JPEG:
        image = image.convert("RGB")
        params["quality"] = quality
    elif fmt == ImageFormat.WEBP:
        params["lossless"] = True

    logger.debug("Saving %s as %s (%s)" % (path, fmt.value, image.mode))
    try:
        image.save(path, format=fmt.value, **params)
    except (OSError, ValueError) as e:
        raise WriteError(str(path), str(e)) from e


def get_image_info(path: PathLike) -> ImageInfo:
    """
    Read basic facts about an image file without converting its pixels.

    :raises InputNotFoundError: if the file does not exist.
    :raises ReadError: if the file cannot be decoded.
    """
    if not os.path.exists(path):
        raise InputNotFoundError(str(path))
    try:
        with Image.open(path) as image:
            image.load()
            info = ImageInfo(
                file=str(path),
                format=image.format or "UNKNOWN",
                width=image.width,
                height=image.height,
                color_type=COLOR_TYPES.get(image.mode, image.mode),
                bit_depth=get_bit_depth(image.mode),
                file_size_bytes=os.path.getsize(path),
            )
    except (UnidentifiedImageError, OSError) as e:
        raise ReadError(str(path), str(e)) from e
    return info
