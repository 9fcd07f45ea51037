import logging

import numpy as np
import pytest

from raster_tools.composite import composite
from raster_tools.exceptions import InvalidParameterError

from ..utils import gradient, pixel, solid

logger = logging.getLogger(__name__)


def test_composite_opaque_normal():
    base = solid(10, 10, (0, 0, 255, 255))
    overlay = solid(4, 4, (255, 0, 0, 255))
    result = composite(base, overlay, x=2, y=3)
    assert result.shape == base.shape
    assert pixel(result, 2, 3) == (255, 0, 0, 255)
    assert pixel(result, 5, 6) == (255, 0, 0, 255)
    assert pixel(result, 6, 6) == (0, 0, 255, 255)
    assert pixel(result, 1, 3) == (0, 0, 255, 255)


def test_composite_half_opacity():
    base = solid(10, 10, (0, 0, 0, 255))
    overlay = solid(10, 10, (255, 255, 255, 255))
    result = composite(base, overlay, opacity=0.5)
    r, g, b, a = pixel(result, 5, 5)
    assert 100 < r < 200
    assert r == g == b == 128
    assert a == 255


def test_composite_zero_opacity_is_identity():
    base = gradient(8, 8)
    overlay = solid(8, 8, (255, 255, 255, 255))
    result = composite(base, overlay, opacity=0.0)
    assert np.array_equal(result, base)


def test_composite_transparent_overlay_is_identity():
    base = gradient(8, 8)
    overlay = solid(8, 8, (255, 0, 0, 0))
    for mode in ("normal", "multiply", "screen", "overlay"):
        assert np.array_equal(composite(base, overlay, blend_mode=mode), base)


def test_composite_both_transparent():
    base = solid(4, 4, (10, 20, 30, 0))
    overlay = solid(4, 4, (40, 50, 60, 0))
    result = composite(base, overlay)
    assert np.array_equal(result, base)


def test_composite_over_transparent_base():
    base = solid(4, 4, (0, 0, 0, 0))
    overlay = solid(4, 4, (200, 100, 50, 128))
    result = composite(base, overlay)
    assert pixel(result, 0, 0) == (200, 100, 50, 128)


@pytest.mark.parametrize(
    "mode, expected",
    [
        ("normal", (128, 128, 128, 255)),
        ("multiply", (100, 50, 0, 255)),
        ("screen", (228, 178, 128, 255)),
        ("overlay", (200, 100, 0, 255)),
    ],
)
def test_composite_blend_modes(mode, expected):
    base = solid(2, 2, (200, 100, 0, 255))
    overlay = solid(2, 2, (128, 128, 128, 255))
    result = composite(base, overlay, blend_mode=mode)
    actual = pixel(result, 0, 0)
    assert all(abs(a - e) <= 1 for a, e in zip(actual, expected))


def test_composite_clips_overlay():
    base = solid(10, 10, (0, 0, 0, 255))
    overlay = solid(6, 6, (255, 255, 255, 255))
    result = composite(base, overlay, x=-3, y=7)
    assert result.shape == (10, 10, 4)
    assert pixel(result, 0, 7) == (255, 255, 255, 255)
    assert pixel(result, 2, 9) == (255, 255, 255, 255)
    assert pixel(result, 3, 9) == (0, 0, 0, 255)
    assert pixel(result, 0, 6) == (0, 0, 0, 255)


def test_composite_outside_base():
    base = gradient(5, 5)
    overlay = solid(3, 3, (255, 255, 255, 255))
    result = composite(base, overlay, x=10, y=10)
    assert np.array_equal(result, base)
    result[0, 0] = 0
    assert not np.array_equal(result, base)


def test_composite_anchor_overrides_position():
    base = solid(10, 10, (0, 0, 0, 255))
    overlay = solid(2, 2, (255, 255, 255, 255))
    result = composite(base, overlay, x=0, y=0, anchor="bottom-right")
    assert pixel(result, 9, 9) == (255, 255, 255, 255)
    assert pixel(result, 8, 8) == (255, 255, 255, 255)
    assert pixel(result, 0, 0) == (0, 0, 0, 255)


def test_composite_does_not_modify_inputs():
    base = gradient(6, 6)
    overlay = solid(6, 6, (255, 255, 255, 200))
    base_copy, overlay_copy = base.copy(), overlay.copy()
    composite(base, overlay, opacity=0.7, blend_mode="screen")
    assert np.array_equal(base, base_copy)
    assert np.array_equal(overlay, overlay_copy)


def test_composite_accepts_rgb():
    base = np.zeros((4, 4, 3), dtype=np.uint8)
    overlay = np.full((2, 2, 3), 255, dtype=np.uint8)
    result = composite(base, overlay)
    assert result.shape == (4, 4, 4)
    assert pixel(result, 0, 0) == (255, 255, 255, 255)
    assert pixel(result, 3, 3) == (0, 0, 0, 255)


@pytest.mark.parametrize("opacity", [-0.1, 1.5])
def test_composite_invalid_opacity(opacity):
    base = solid(2, 2, (0, 0, 0, 255))
    with pytest.raises(InvalidParameterError):
        composite(base, base, opacity=opacity)


def test_composite_invalid_blend_mode():
    base = solid(2, 2, (0, 0, 0, 255))
    with pytest.raises(InvalidParameterError):
        composite(base, base, blend_mode="darken")
