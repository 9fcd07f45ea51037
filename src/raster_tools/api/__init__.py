"""
High-level operations on pixel buffers.

- :py:mod:`raster_tools.api.canvas`: crop, pad and canvas resize
- :py:mod:`raster_tools.api.adjustments`: brightness, contrast and gamma
- :py:mod:`raster_tools.api.convert`: grayscale, inversion and bit depth
- :py:mod:`raster_tools.api.transform`: flip, rotate, resize and fit
- :py:mod:`raster_tools.api.filters`: blur and sharpen
- :py:mod:`raster_tools.api.pil_io`: loading, saving and image info
- :py:mod:`raster_tools.api.numpy_io`: buffer layout helpers
"""
