import argparse
import json
import logging
import os
import sys
from typing import Any, Callable, Optional

import numpy as np

from raster_tools.api import (
    adjustments,
    canvas,
    convert,
    filters,
    numpy_io,
    pil_io,
    transform,
)
from raster_tools.color import parse_color
from raster_tools.composite import composite
from raster_tools.constants import Anchor, BlendMode, ExitCode, ImageFormat, ResizeFilter
from raster_tools.exceptions import RasterToolsError, WriteError
from raster_tools.version import __version__

logger = logging.getLogger(__name__)

ANCHORS = [anchor.value for anchor in Anchor]
BLEND_MODES = [mode.value for mode in BlendMode]
FILTERS = [f.value for f in ResizeFilter]
FORMATS = sorted(pil_io.EXTENSIONS)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="raster-tools", description="raster-tools command line utility."
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Be more verbose.")
    parser.add_argument("-j", "--json", action="store_true", help="Output JSON.")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress output.")
    parser.add_argument(
        "-y", "--overwrite", action="store_true", help="Overwrite existing output."
    )
    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", required=True)

    info_parser = subparsers.add_parser("info", help="Show image file information")
    info_parser.add_argument("input", help="Input image file")

    crop_parser = _add_command(subparsers, "crop", "Extract a rectangular region")
    crop_parser.add_argument("--x", type=int, default=0, help="X offset")
    crop_parser.add_argument("--y", type=int, default=0, help="Y offset")
    crop_parser.add_argument("--width", type=int, required=True)
    crop_parser.add_argument("--height", type=int, required=True)
    crop_parser.add_argument("--anchor", choices=ANCHORS, default="top-left")

    rotate_parser = _add_command(
        subparsers, "rotate", "Rotate counter-clockwise by degrees"
    )
    rotate_parser.add_argument("--degrees", type=float, required=True)
    rotate_parser.add_argument(
        "--expand", action="store_true", help="Grow the canvas to fit"
    )
    rotate_parser.add_argument("--background", default="transparent")

    flip_parser = _add_command(subparsers, "flip", "Mirror the image")
    flip_parser.add_argument("-H", "--horizontal", action="store_true")
    flip_parser.add_argument("-V", "--vertical", action="store_true")

    resize_parser = _add_command(subparsers, "resize", "Resize the image")
    resize_parser.add_argument("--width", type=int)
    resize_parser.add_argument("--height", type=int)
    resize_parser.add_argument("--scale", type=float)
    resize_parser.add_argument("--filter", choices=FILTERS, default="lanczos")

    fit_parser = _add_command(subparsers, "fit", "Fit the image into bounds")
    fit_parser.add_argument("--max-width", type=int)
    fit_parser.add_argument("--max-height", type=int)
    fit_parser.add_argument("--upscale", action="store_true")
    fit_parser.add_argument("--filter", choices=FILTERS, default="lanczos")

    convert_parser = _add_command(subparsers, "convert", "Convert between formats")
    convert_parser.add_argument("--format", choices=FORMATS)
    convert_parser.add_argument("--quality", type=int, default=90)

    grayscale_parser = _add_command(subparsers, "grayscale", "Convert to grayscale")
    grayscale_parser.add_argument("--no-preserve-alpha", action="store_true")

    depth_parser = _add_command(subparsers, "depth", "Change the bit depth")
    depth_parser.add_argument(
        "--bits",
        type=int,
        required=True,
        help="1, 8 or 16. 16-bit results are written as 8-bit files.",
    )
    depth_parser.add_argument("--dither", action="store_true")

    invert_parser = _add_command(subparsers, "invert", "Invert colors")
    invert_parser.add_argument("--invert-alpha", action="store_true")

    for name, help in (
        ("brightness", "Adjust brightness (-255 to 255)"),
        ("contrast", "Adjust contrast (0.0 to 10.0)"),
        ("gamma", "Apply gamma correction (0.1 to 10.0)"),
    ):
        adjust_parser = _add_command(subparsers, name, help)
        adjust_parser.add_argument(
            "--value", type=int if name == "brightness" else float, required=True
        )

    blur_parser = _add_command(subparsers, "blur", "Gaussian blur")
    blur_parser.add_argument("--radius", type=float, required=True)

    sharpen_parser = _add_command(subparsers, "sharpen", "Unsharp mask")
    sharpen_parser.add_argument("--amount", type=float, default=1.0)
    sharpen_parser.add_argument("--radius", type=float, default=1.0)

    pad_parser = _add_command(subparsers, "pad", "Add padding around the image")
    for side in ("all", "top", "bottom", "left", "right", "horizontal", "vertical"):
        pad_parser.add_argument("--" + side, type=int)
    pad_parser.add_argument("--color", default="transparent")

    canvas_parser = _add_command(subparsers, "canvas", "Resize the canvas")
    canvas_parser.add_argument("--width", type=int, required=True)
    canvas_parser.add_argument("--height", type=int, required=True)
    canvas_parser.add_argument("--anchor", choices=ANCHORS, default="center")
    canvas_parser.add_argument("--color", default="transparent")

    composite_parser = subparsers.add_parser(
        "composite", help="Overlay one image onto another"
    )
    composite_parser.add_argument("input", help="Base image file")
    composite_parser.add_argument("overlay", help="Overlay image file")
    composite_parser.add_argument("output", help="Output image file")
    composite_parser.add_argument("--x", type=int, default=0)
    composite_parser.add_argument("--y", type=int, default=0)
    composite_parser.add_argument("--anchor", choices=ANCHORS)
    composite_parser.add_argument("--opacity", type=float, default=1.0)
    composite_parser.add_argument("--blend", choices=BLEND_MODES, default="normal")

    return parser.parse_args(argv)


def _add_command(subparsers: Any, name: str, help: str) -> argparse.ArgumentParser:
    subparser = subparsers.add_parser(name, help=help)
    subparser.add_argument("input", help="Input image file")
    subparser.add_argument("output", help="Output image file")
    return subparser


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(level=logging.WARNING)
    package_logger = logging.getLogger("raster_tools")
    if args.verbose:
        package_logger.setLevel(logging.DEBUG)
    else:
        package_logger.setLevel(logging.INFO)

    try:
        if args.command == "info":
            return show_info(args)
        if args.command == "convert":
            return convert_format(args)
        return process(args, OPERATIONS[args.command])
    except RasterToolsError as e:
        print_error(args, str(e), e.code)
        return int(e.exit_code)
    except ImportError as e:
        logger.error(str(e))
        print_error(args, str(e), "GENERAL_ERROR")
        return int(ExitCode.GENERAL_ERROR)


def print_error(args: argparse.Namespace, message: str, code: str) -> None:
    if args.json:
        document = {
            "success": False,
            "command": args.command,
            "error": message,
            "code": code,
        }
        print(json.dumps(document, indent=2), file=sys.stderr)
    else:
        print("Error: %s" % message, file=sys.stderr)


def print_success(args: argparse.Namespace, text: str, **details: Any) -> None:
    if args.json:
        document: dict[str, Any] = {"success": True, "command": args.command}
        document["input"] = args.input
        if getattr(args, "output", None) is not None:
            document["output"] = args.output
        document["details"] = details
        print(json.dumps(document, indent=2))
    elif not args.quiet:
        print(text)


def check_output_overwrite(path: str, overwrite: bool) -> None:
    """Refuse to replace an existing file unless asked to."""
    if os.path.exists(path) and not overwrite:
        raise WriteError(path, "File exists. Use --overwrite (-y) to replace.")


def process(
    args: argparse.Namespace,
    operation: Callable[[argparse.Namespace, np.ndarray], np.ndarray],
) -> int:
    """Load the input, apply one operation and save the result."""
    check_output_overwrite(args.output, args.overwrite)
    image = pil_io.load_image(args.input)
    orig_width, orig_height = numpy_io.size(image)

    result = operation(args, image)
    pil_io.save_image(result, args.output)

    width, height = numpy_io.size(result)
    text = "Saved %s (%dx%d -> %dx%d)" % (
        args.output,
        orig_width,
        orig_height,
        width,
        height,
    )
    details: dict[str, Any] = {}
    if result.dtype == np.uint16:
        # The encoder has no 16-bit RGBA mode.
        text += " (16-bit result saved as 8-bit)"
        details["saved_bit_depth"] = 8
    print_success(
        args,
        text,
        original_width=orig_width,
        original_height=orig_height,
        result_width=width,
        result_height=height,
        **details,
    )
    return int(ExitCode.SUCCESS)


def show_info(args: argparse.Namespace) -> int:
    info = pil_io.get_image_info(args.input)
    print_success(
        args,
        info.display(),
        format=info.format,
        width=info.width,
        height=info.height,
        color_type=info.color_type,
        bit_depth=info.bit_depth,
        file_size_bytes=info.file_size_bytes,
    )
    return int(ExitCode.SUCCESS)


def convert_format(args: argparse.Namespace) -> int:
    check_output_overwrite(args.output, args.overwrite)
    image = pil_io.load_image(args.input)
    fmt = pil_io.determine_format(args.output, args.format)
    pil_io.save_image(image, args.output, fmt, args.quality)

    width, height = numpy_io.size(image)
    print_success(
        args,
        "Converted %s -> %s (%s)" % (args.input, args.output, fmt.value),
        original_width=width,
        original_height=height,
        result_width=width,
        result_height=height,
        format=fmt.value,
    )
    return int(ExitCode.SUCCESS)


def _pad(args: argparse.Namespace, image: np.ndarray) -> np.ndarray:
    top, bottom, left, right = canvas.resolve_padding(
        all=args.all,
        horizontal=args.horizontal,
        vertical=args.vertical,
        top=args.top,
        bottom=args.bottom,
        left=args.left,
        right=args.right,
    )
    return canvas.pad(image, top, bottom, left, right, parse_color(args.color))


def _composite(args: argparse.Namespace, image: np.ndarray) -> np.ndarray:
    overlay = pil_io.load_image(args.overlay)
    return composite(
        image,
        overlay,
        x=args.x,
        y=args.y,
        anchor=args.anchor,
        opacity=args.opacity,
        blend_mode=args.blend,
    )


OPERATIONS: dict[str, Callable[[argparse.Namespace, np.ndarray], np.ndarray]] = {
    "crop": lambda args, image: canvas.crop(
        image, args.x, args.y, args.width, args.height, args.anchor
    ),
    "rotate": lambda args, image: transform.rotate(
        image, args.degrees, args.expand, parse_color(args.background)
    ),
    "flip": lambda args, image: transform.flip(image, args.horizontal, args.vertical),
    "resize": lambda args, image: transform.resize(
        image, args.width, args.height, args.scale, args.filter
    ),
    "fit": lambda args, image: transform.fit(
        image, args.max_width, args.max_height, args.upscale, args.filter
    ),
    "grayscale": lambda args, image: convert.grayscale(
        image, not args.no_preserve_alpha
    ),
    "depth": lambda args, image: convert.change_depth(image, args.bits, args.dither),
    "invert": lambda args, image: convert.invert(image, args.invert_alpha),
    "brightness": lambda args, image: adjustments.brightness(image, args.value),
    "contrast": lambda args, image: adjustments.contrast(image, args.value),
    "gamma": lambda args, image: adjustments.gamma(image, args.value),
    "blur": lambda args, image: filters.blur(image, args.radius),
    "sharpen": lambda args, image: filters.sharpen(image, args.amount, args.radius),
    "pad": _pad,
    "canvas": lambda args, image: canvas.canvas_resize(
        image, args.width, args.height, args.anchor, parse_color(args.color)
    ),
    "composite": _composite,
}


if __name__ == "__main__":
    sys.exit(main())
