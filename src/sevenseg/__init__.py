"""
sevenseg - procedural seven-segment digit graphics

Generates the polygons of one seven-segment digit (chevron-ended bars,
decimal point, italic skew, viewbox) from a handful of sizes, and drives
which segments are lit from a digit 0-9 or a raw 8-bit mask.

Usage:
    # As a library
    from sevenseg import DEFAULT_SHAPE_PARAMS, SevenSegController, generate
    digit = generate(DEFAULT_SHAPE_PARAMS)
    controller = SevenSegController(digit.parts)
    controller.set_digit(7)

    # Command line
    sevenseg svg --digit 7 -o seven.svg
    sevenseg demo -o demo.gif
"""

from sevenseg.__version__ import __version__
from sevenseg.controller import (
    SevenSegController,
    mask_for_digit,
    mask_for_segments,
    segments_for_mask,
)
from sevenseg.core.models import (
    ALL_OFF,
    ALL_ON,
    DEFAULT_SHAPE_PARAMS,
    DIGITS,
    SEGMENT_ORDER,
    Bounds,
    CirclePart,
    DecimalPointParams,
    GeneratedDigit,
    PolygonPart,
    SegmentName,
    SegmentShapeParams,
    SegmentSize,
    SkewTransform,
)
from sevenseg.geometry import compute_bounds, generate, skew_transform
from sevenseg.svg_writer import to_svg_string, write_svg

__all__ = [
    # Version
    "__version__",
    # Model
    "ALL_OFF",
    "ALL_ON",
    "DEFAULT_SHAPE_PARAMS",
    "DIGITS",
    "SEGMENT_ORDER",
    "Bounds",
    "CirclePart",
    "DecimalPointParams",
    "GeneratedDigit",
    "PolygonPart",
    "SegmentName",
    "SegmentShapeParams",
    "SegmentSize",
    "SkewTransform",
    # Geometry
    "generate",
    "compute_bounds",
    "skew_transform",
    # Controller
    "SevenSegController",
    "mask_for_digit",
    "mask_for_segments",
    "segments_for_mask",
    # SVG
    "to_svg_string",
    "write_svg",
]
