"""
Seven-segment digit geometry generator.

Builds the chevron-ended bar polygons, the decimal point circle, the skew
transform and the viewbox for one digit from a ``SegmentShapeParams``.

Layout (unskewed, all parts share one coordinate space)::

    (0,0)
      .  ____a____
        |         |
        f         b
        |____g____|
        |         |
        e         c
        |____d____|  (dp)

Bars are hexagons whose ends come to a point, so neighbouring bars meet
along clean diagonals. The six bars are sheared by ``skewX`` to slant the
digit; the decimal point is drawn unskewed and pushed right to trail it.

Pure computation: nothing here raises for finite input.
"""

from __future__ import annotations

import logging
import math
from typing import Tuple

from .core.models import (
    Bounds,
    CirclePart,
    GeneratedDigit,
    Point,
    PolygonPart,
    RenderablePartSet,
    SegmentName,
    SegmentShapeParams,
    SkewTransform,
)

log = logging.getLogger(__name__)


# =========================================================================
# Primitive shapes
# =========================================================================

def horizontal_segment_points(x: float, y: float, width: float, height: float,
                              offset: float) -> Tuple[Point, ...]:
    """Hexagon for a horizontal bar, starting at the left point, clockwise.

    Args:
        x, y: Top-left corner of the bar's bounding box.
        width, height: Bar size.
        offset: How far the top/bottom edges are pulled in from each end.
    """
    return (
        (x, y + height / 2),
        (x + offset, y),
        (x + width - offset, y),
        (x + width, y + height / 2),
        (x + width - offset, y + height),
        (x + offset, y + height),
    )


def vertical_segment_points(x: float, y: float, width: float, height: float,
                            offset: float) -> Tuple[Point, ...]:
    """Hexagon for a vertical bar, starting at the top point, clockwise."""
    return (
        (x + width / 2, y),
        (x + width, y + offset),
        (x + width, y + height - offset),
        (x + width / 2, y + height),
        (x, y + height - offset),
        (x, y + offset),
    )


def decimal_point(x: float, y: float, diameter: float) -> Tuple[float, float, float]:
    """Circle whose bounding square has its top-left corner at (x, y).

    Returns:
        (cx, cy, r)
    """
    radius = diameter / 2
    return (x + radius, y + radius, radius)


# =========================================================================
# Digit-level computations
# =========================================================================

def skew_transform(params: SegmentShapeParams) -> SkewTransform:
    """Shear that moves the top of the digit by ``digit_skew_distance``.

    The angle is ``asin(distance / digit_height)`` so the slant is given as
    a horizontal distance rather than an angle. A compensating translation
    of ``max(0, -distance)`` keeps a left-leaning digit inside the viewbox.

    Ratios outside [-1, 1] are clamped; a zero-height digit gets 0 or
    +/-90 degrees depending on the sign of the distance.
    """
    distance = params.digit_skew_distance
    height = params.digit_height

    if height == 0:
        ratio = 0.0 if distance == 0 else math.copysign(1.0, distance)
    else:
        ratio = max(-1.0, min(1.0, distance / height))

    angle = math.degrees(math.asin(ratio))
    return SkewTransform(angle=angle, translate_x=max(0.0, -distance))


def compute_bounds(params: SegmentShapeParams) -> Bounds:
    """Viewbox size covering the skewed bars and the trailing decimal point.

    Exact for non-negative nudges; negative nudges may let geometry poke
    slightly outside the box.
    """
    horiz = params.horizontal_segment
    vert = params.vertical_segment
    dp = params.dp
    width = (horiz.width
             + vert.width
             + dp.nudge_x
             + abs(params.digit_skew_distance)
             + params.gap * 2
             + dp.diameter)
    height = (vert.height * 2
              + dp.nudge_y
              + params.gap * 4
              + max(horiz.height, dp.diameter))
    return Bounds(width=width, height=height)


def _bar_positions(params: SegmentShapeParams):
    """Top-left corner and orientation of each bar, keyed by segment."""
    hw = params.horizontal_segment.width
    hh = params.horizontal_segment.height
    vh = params.vertical_segment.height
    vw = params.vertical_segment.width
    gap = params.gap

    left = vw / 2 + gap       # x of horizontal bars
    right = hw + gap * 2      # x of right-hand vertical bars
    upper = hh / 2 + gap      # y of upper vertical bars
    lower = vh + hh / 2 + gap * 3

    return (
        (SegmentName.A, True, left, 0),
        (SegmentName.B, False, right, upper),
        (SegmentName.C, False, right, lower),
        (SegmentName.D, True, left, vh * 2 + gap * 4),
        (SegmentName.E, False, 0, lower),
        (SegmentName.F, False, 0, upper),
        (SegmentName.G, True, left, vh + gap * 2),
    )


def generate(params: SegmentShapeParams, include_dp: bool = True) -> GeneratedDigit:
    """Generate the renderable parts, skew transform and bounds for a digit.

    Args:
        params: Segment sizes, gap, decimal point and skew.
        include_dp: When False the part set has no ``dp`` entry.

    Returns:
        GeneratedDigit with one part per segment name.
    """
    horiz = params.horizontal_segment
    vert = params.vertical_segment

    parts: RenderablePartSet = {}
    for name, is_horizontal, x, y in _bar_positions(params):
        if is_horizontal:
            points = horizontal_segment_points(
                x, y, horiz.width, horiz.height, offset=vert.width / 2)
        else:
            points = vertical_segment_points(
                x, y, vert.width, vert.height, offset=horiz.height / 2)
        parts[name] = PolygonPart(name=name, points=points)

    if include_dp:
        dp = params.dp
        cx, cy, r = decimal_point(
            horiz.width + vert.width + abs(params.digit_skew_distance)
            + dp.nudge_x + params.gap * 2,
            vert.height * 2 + dp.nudge_y + params.gap * 4,
            dp.diameter,
        )
        parts[SegmentName.DP] = CirclePart(name=SegmentName.DP, cx=cx, cy=cy, r=r)

    transform = skew_transform(params)
    bounds = compute_bounds(params)
    log.debug("Generated digit: bounds=%sx%s skew=%.3f° translate=%s",
              bounds.width, bounds.height, transform.angle, transform.translate_x)

    return GeneratedDigit(parts=parts, transform=transform, bounds=bounds,
                          params=params)
