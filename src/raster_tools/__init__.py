"""
raster-tools: deterministic pixel transforms and compositing on NumPy buffers.

A pixel buffer is an ``ndarray`` of shape ``(height, width, channels)``.
Every operation takes a buffer and returns a new one; inputs are never
modified.

Basic usage::

    from raster_tools import composite, parse_color
    from raster_tools.api import canvas, pil_io

    base = pil_io.load_image('photo.png')
    logo = pil_io.load_image('logo.png')

    framed = canvas.pad(base, 10, 10, 10, 10, parse_color('#fff'))
    result = composite(framed, logo, anchor='bottom-right', opacity=0.5)
    pil_io.save_image(result, 'output.png')

Architecture:

- :py:mod:`raster_tools.api`: Geometric, tonal and filter operations plus IO
- :py:mod:`raster_tools.composite`: Anchor placement and blending engine
- :py:mod:`raster_tools.color`: Color values and parser
- :py:mod:`raster_tools.cli`: Command line tool
"""

from raster_tools.color import Color, parse_color
from raster_tools.composite import composite
from raster_tools.version import __version__

__all__ = ["Color", "composite", "parse_color", "__version__"]
