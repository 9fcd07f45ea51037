"""
Exceptions raised by raster_tools.

Every error carries a machine readable :py:attr:`~RasterToolsError.code`
and the :py:attr:`~RasterToolsError.exit_code` the command line tool exits
with. Errors about bad arguments also derive from :py:class:`ValueError`.
"""

from raster_tools.constants import ExitCode


class RasterToolsError(Exception):
    """Base class of all raster_tools errors."""

    code = "GENERAL_ERROR"
    exit_code = ExitCode.GENERAL_ERROR


class InvalidDimensionsError(RasterToolsError, ValueError):
    """Zero, negative or structurally impossible sizes."""

    code = "INVALID_DIMENSIONS"
    exit_code = ExitCode.INVALID_PARAMETERS

    def __str__(self) -> str:
        return "Invalid dimensions: %s" % super().__str__()


class CropOutOfBoundsError(RasterToolsError, ValueError):
    """A crop region that exceeds the source image."""

    code = "CROP_OUT_OF_BOUNDS"
    exit_code = ExitCode.INVALID_PARAMETERS

    def __str__(self) -> str:
        return "Crop region out of bounds: %s" % super().__str__()


class InvalidParameterError(RasterToolsError, ValueError):
    """A numeric value out of its documented range, or a missing option."""

    code = "INVALID_PARAMETER"
    exit_code = ExitCode.INVALID_PARAMETERS

    def __str__(self) -> str:
        return "Invalid parameter: %s" % super().__str__()


class InvalidColorError(RasterToolsError, ValueError):
    """Unparseable color text."""

    code = "INVALID_COLOR"
    exit_code = ExitCode.INVALID_PARAMETERS

    def __str__(self) -> str:
        return "Invalid color specification: %s" % super().__str__()


class InputNotFoundError(RasterToolsError):
    code = "INPUT_NOT_FOUND"
    exit_code = ExitCode.INPUT_NOT_FOUND

    def __str__(self) -> str:
        return "Input file not found: %s" % super().__str__()


class ReadError(RasterToolsError):
    code = "READ_ERROR"
    exit_code = ExitCode.INPUT_NOT_FOUND

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(path, reason)
        self.path = path
        self.reason = reason

    def __str__(self) -> str:
        return "Failed to read image '%s': %s" % (self.path, self.reason)


class WriteError(RasterToolsError):
    code = "WRITE_ERROR"
    exit_code = ExitCode.OUTPUT_WRITE_FAILED

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(path, reason)
        self.path = path
        self.reason = reason

    def __str__(self) -> str:
        return "Failed to write image '%s': %s" % (self.path, self.reason)


class UnsupportedFormatError(RasterToolsError):
    code = "UNSUPPORTED_FORMAT"
    exit_code = ExitCode.UNSUPPORTED_FORMAT

    def __str__(self) -> str:
        return "Unsupported format: %s" % super().__str__()
