"""
Blend mode implementations.

Blend functions take the backdrop ``Cb`` and the source ``Cs`` as float
arrays of 0-255 channel values and return the blended color ``B`` in the
same range. Alpha is handled by the compositor, not here.
"""

import logging
from typing import Callable, Union

import numpy as np

from raster_tools.constants import BlendMode
from raster_tools.exceptions import InvalidParameterError

logger = logging.getLogger(__name__)


# Separable blend functions
def normal(Cb, Cs):
    return Cs


def multiply(Cb, Cs):
    return Cb * Cs / 255.0


def screen(Cb, Cs):
    return 255.0 - (255.0 - Cb) * (255.0 - Cs) / 255.0


def overlay(Cb, Cs):
    """
    Multiplies or screens the colors, depending on the backdrop color.

    The backdrop chooses the branch: dark backdrop channels (below 128) are
    multiplied, light ones are screened, both with doubled strength.
    """
    index = Cb >= 128
    B = 2.0 * Cb * Cs / 255.0
    B[index] = (255.0 - 2.0 * (255.0 - Cb) * (255.0 - Cs) / 255.0)[index]
    return B


BLEND_FUNC: dict[BlendMode, Callable[[np.ndarray, np.ndarray], np.ndarray]] = {
    BlendMode.NORMAL: normal,
    BlendMode.MULTIPLY: multiply,
    BlendMode.SCREEN: screen,
    BlendMode.OVERLAY: overlay,
}


def get_blend_func(
    blend_mode: Union[BlendMode, str],
) -> Callable[[np.ndarray, np.ndarray], np.ndarray]:
    """Look up the blend function for a mode or its name."""
    try:
        return BLEND_FUNC[BlendMode(blend_mode)]
    except ValueError:
        raise InvalidParameterError(
            "Unknown blend mode: %s. Use one of %s."
            % (blend_mode, ", ".join(mode.value for mode in BlendMode))
        ) from None
