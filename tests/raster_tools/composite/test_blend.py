import logging

import numpy as np
import pytest

from raster_tools.composite import blend
from raster_tools.constants import BlendMode
from raster_tools.exceptions import InvalidParameterError

logger = logging.getLogger(__name__)


@pytest.mark.parametrize(
    "mode, backdrop, source, expected",
    [
        ("normal", 100.0, 200.0, 200.0),
        ("multiply", 255.0, 128.0, 128.0),
        ("multiply", 0.0, 128.0, 0.0),
        ("screen", 0.0, 128.0, 128.0),
        ("screen", 255.0, 10.0, 255.0),
        ("overlay", 64.0, 128.0, 2.0 * 64.0 * 128.0 / 255.0),
        ("overlay", 128.0, 128.0, 255.0 - 2.0 * 127.0 * 127.0 / 255.0),
        ("overlay", 255.0, 0.0, 255.0),
    ],
)
def test_blend_func(mode, backdrop, source, expected):
    func = blend.get_blend_func(mode)
    result = func(np.array([backdrop]), np.array([source]))
    assert result[0] == pytest.approx(expected)


def test_blend_table_is_closed():
    assert set(blend.BLEND_FUNC) == set(BlendMode)


def test_unknown_blend_mode():
    with pytest.raises(InvalidParameterError):
        blend.get_blend_func("dissolve")
