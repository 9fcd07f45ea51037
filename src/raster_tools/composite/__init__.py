"""
Composite module for placement and blending.

This subpackage provides the compositing engine that places one pixel
buffer over another. It implements anchor based placement, Porter-Duff
"over" alpha compositing and a small closed set of separable blend modes.

Key modules:

- :py:mod:`raster_tools.composite.composite`: Main compositing function
- :py:mod:`raster_tools.composite.blend`: Blend mode implementations
- :py:mod:`raster_tools.composite.utils`: Anchor offsets, bounding boxes and
  rounding helpers

Example usage::

    from raster_tools.api import pil_io
    from raster_tools.composite import composite

    base = pil_io.load_image('photo.png')
    logo = pil_io.load_image('logo.png')

    result = composite(base, logo, anchor='bottom-right', opacity=0.8,
                       blend_mode='multiply')
    pil_io.save_image(result, 'output.png')

The engine uses NumPy arrays for pixel manipulation. Every call returns a
new buffer of the base size; inputs are never modified.
"""

from raster_tools.composite.composite import composite

__all__ = [
    "composite",
]
