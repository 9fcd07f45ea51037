import pytest

from raster_tools.constants import ExitCode
from raster_tools.exceptions import (
    CropOutOfBoundsError,
    InputNotFoundError,
    InvalidColorError,
    InvalidDimensionsError,
    InvalidParameterError,
    RasterToolsError,
    ReadError,
    UnsupportedFormatError,
    WriteError,
)


@pytest.mark.parametrize(
    "error, code, exit_code",
    [
        (InvalidDimensionsError("x"), "INVALID_DIMENSIONS", ExitCode.INVALID_PARAMETERS),
        (CropOutOfBoundsError("x"), "CROP_OUT_OF_BOUNDS", ExitCode.INVALID_PARAMETERS),
        (InvalidParameterError("x"), "INVALID_PARAMETER", ExitCode.INVALID_PARAMETERS),
        (InvalidColorError("x"), "INVALID_COLOR", ExitCode.INVALID_PARAMETERS),
        (InputNotFoundError("x"), "INPUT_NOT_FOUND", ExitCode.INPUT_NOT_FOUND),
        (ReadError("x", "y"), "READ_ERROR", ExitCode.INPUT_NOT_FOUND),
        (WriteError("x", "y"), "WRITE_ERROR", ExitCode.OUTPUT_WRITE_FAILED),
        (UnsupportedFormatError("x"), "UNSUPPORTED_FORMAT", ExitCode.UNSUPPORTED_FORMAT),
    ],
)
def test_error_codes(error, code, exit_code):
    assert isinstance(error, RasterToolsError)
    assert error.code == code
    assert error.exit_code == exit_code


def test_error_messages():
    assert str(InvalidParameterError("too big")) == "Invalid parameter: too big"
    assert str(InputNotFoundError("a.png")) == "Input file not found: a.png"
    error = WriteError("out.png", "disk full")
    assert error.path == "out.png"
    assert error.reason == "disk full"
    assert str(error) == "Failed to write image 'out.png': disk full"


@pytest.mark.parametrize(
    "cls",
    [InvalidDimensionsError, CropOutOfBoundsError, InvalidParameterError, InvalidColorError],
)
def test_engine_errors_are_value_errors(cls):
    assert issubclass(cls, ValueError)
