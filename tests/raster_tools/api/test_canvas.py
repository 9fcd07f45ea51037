import logging

import numpy as np
import pytest

from raster_tools.api.canvas import canvas_resize, crop, pad, resolve_padding
from raster_tools.color import BLACK, TRANSPARENT, Color, parse_color
from raster_tools.exceptions import (
    CropOutOfBoundsError,
    InvalidDimensionsError,
    InvalidParameterError,
)

from ..utils import gradient, pixel, solid

logger = logging.getLogger(__name__)


def test_crop_top_left():
    image = gradient(20, 10)
    result = crop(image, 2, 3, 5, 4)
    assert result.shape == (4, 5, 4)
    assert np.array_equal(result, image[3:7, 2:7])


@pytest.mark.parametrize(
    "anchor, x, y, origin",
    [
        ("top-left", 0, 0, (0, 0)),
        ("center", 0, 0, (5, 3)),
        ("bottom-right", 0, 0, (10, 6)),
        ("bottom-right", -2, -1, (8, 5)),
        ("top-center", 1, 2, (6, 2)),
    ],
)
def test_crop_anchor(anchor, x, y, origin):
    image = gradient(20, 10)
    result = crop(image, x, y, 10, 4, anchor)
    left, top = origin
    assert np.array_equal(result, image[top : top + 4, left : left + 10])


def test_crop_full_image():
    image = gradient(8, 8)
    result = crop(image, 0, 0, 8, 8)
    assert np.array_equal(result, image)
    result[0, 0] = 0
    assert not np.array_equal(result, image)


@pytest.mark.parametrize(
    "x, y, width, height",
    [(60, 60, 50, 50), (0, 0, 101, 10), (-1, 0, 10, 10), (0, 95, 10, 10)],
)
def test_crop_out_of_bounds(x, y, width, height):
    image = solid(100, 100, BLACK)
    with pytest.raises(CropOutOfBoundsError):
        crop(image, x, y, width, height)


def test_crop_anchor_out_of_bounds():
    image = solid(100, 100, BLACK)
    with pytest.raises(CropOutOfBoundsError):
        crop(image, 1, 0, 10, 10, "top-right")


def test_crop_unknown_anchor():
    image = solid(100, 100, BLACK)
    with pytest.raises(InvalidParameterError):
        crop(image, 0, 0, 10, 10, "middle")


@pytest.mark.parametrize("width, height", [(0, 10), (10, 0), (-5, 10)])
def test_crop_invalid_dimensions(width, height):
    image = solid(100, 100, BLACK)
    with pytest.raises(InvalidDimensionsError):
        crop(image, 0, 0, width, height)


def test_pad():
    image = gradient(10, 10)
    result = pad(image, 5, 5, 5, 5, parse_color("red"))
    assert result.shape == (20, 20, 4)
    assert np.array_equal(result[5:15, 5:15], image)
    assert pixel(result, 0, 0) == (255, 0, 0, 255)
    assert pixel(result, 19, 19) == (255, 0, 0, 255)
    assert pixel(result, 4, 10) == (255, 0, 0, 255)


def test_pad_asymmetric():
    image = gradient(4, 3)
    result = pad(image, 1, 2, 3, 0, TRANSPARENT)
    assert result.shape == (6, 7, 4)
    assert np.array_equal(result[1:4, 3:7], image)
    assert pixel(result, 0, 5) == (0, 0, 0, 0)


def test_pad_negative():
    with pytest.raises(InvalidDimensionsError):
        pad(gradient(4, 4), -1, 0, 0, 0, BLACK)


def test_pad_does_not_modify_input():
    image = gradient(4, 4)
    copy = image.copy()
    pad(image, 1, 1, 1, 1, BLACK)
    assert np.array_equal(image, copy)


@pytest.mark.parametrize(
    "kwargs, expected",
    [
        (dict(all=5), (5, 5, 5, 5)),
        (dict(all=5, top=1), (1, 5, 5, 5)),
        (dict(all=5, horizontal=2), (5, 5, 2, 2)),
        (dict(all=5, vertical=3, bottom=0), (3, 0, 5, 5)),
        (dict(horizontal=2, left=7), (0, 0, 7, 2)),
        (dict(right=4), (0, 0, 0, 4)),
    ],
)
def test_resolve_padding(kwargs, expected):
    assert resolve_padding(**kwargs) == expected


@pytest.mark.parametrize("kwargs", [dict(), dict(all=0), dict(top=0, left=0)])
def test_resolve_padding_missing(kwargs):
    with pytest.raises(InvalidParameterError):
        resolve_padding(**kwargs)


def test_canvas_resize_bottom_right():
    image = solid(10, 10, parse_color("red"))
    result = canvas_resize(image, 20, 20, "bottom-right", BLACK)
    assert result.shape == (20, 20, 4)
    assert pixel(result, 15, 15) == (255, 0, 0, 255)
    assert pixel(result, 0, 0) == (0, 0, 0, 255)


def test_canvas_resize_default_center():
    image = solid(2, 2, parse_color("white"))
    result = canvas_resize(image, 4, 4)
    assert pixel(result, 0, 0) == (0, 0, 0, 0)
    assert pixel(result, 1, 1) == (255, 255, 255, 255)
    assert pixel(result, 2, 2) == (255, 255, 255, 255)
    assert pixel(result, 3, 3) == (0, 0, 0, 0)


def test_canvas_resize_shrink_drops_content():
    image = gradient(10, 10)
    result = canvas_resize(image, 4, 4, "top-left", Color(1, 2, 3))
    assert np.array_equal(result, image[:4, :4])
    result = canvas_resize(image, 4, 4, "center", Color(1, 2, 3))
    assert np.array_equal(result, image[3:7, 3:7])


@pytest.mark.parametrize("width, height", [(0, 10), (10, -1)])
def test_canvas_resize_invalid(width, height):
    with pytest.raises(InvalidDimensionsError):
        canvas_resize(gradient(4, 4), width, height)
