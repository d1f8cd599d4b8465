"""
sevenseg Models - Pure data classes with no renderer dependencies.

These models can be used by any renderer (SVG, Pillow, PyQt6, etc.)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Set, Tuple, Union

Point = Tuple[float, float]

# =============================================================================
# Segment names and encoding
# =============================================================================


class SegmentName(Enum):
    """One of the 7 bars (a-g) or the decimal point of a digit.

    Segment layout::

           _a_
          |   |
          f   b
          |_g_|
          |   |
          e   c
          |_d_|  .dp

    Declaration order is the bit order of a segment mask: ``a`` is the
    most significant of the 8 bits, ``dp`` the least significant.
    """
    A = "a"
    B = "b"
    C = "c"
    D = "d"
    E = "e"
    F = "f"
    G = "g"
    DP = "dp"

    @property
    def ordinal(self) -> int:
        return SEGMENT_ORDER.index(self)

    @property
    def bit(self) -> int:
        """Mask bit for this segment (0x80 for ``a`` ... 0x01 for ``dp``)."""
        return 0x80 >> self.ordinal


SEGMENT_ORDER: Tuple[SegmentName, ...] = tuple(SegmentName)

BAR_SEGMENTS: Tuple[SegmentName, ...] = SEGMENT_ORDER[:7]

# abcdefgD
DIGITS: Tuple[int, ...] = (
    0b11111100,  # 0
    0b01100000,  # 1
    0b11011010,  # 2
    0b11110010,  # 3
    0b01100110,  # 4
    0b10110110,  # 5
    0b10111110,  # 6
    0b11100000,  # 7
    0b11111110,  # 8
    0b11110110,  # 9
)

ALL_ON = 0xFF
ALL_OFF = 0x00

SegmentKey = Union[SegmentName, str]


# =============================================================================
# Shape parameters
# =============================================================================

@dataclass(frozen=True)
class SegmentSize:
    """Width and height of one bar orientation."""
    width: float
    height: float


@dataclass(frozen=True)
class DecimalPointParams:
    """Decimal point circle size and its offset from the digit's corner."""
    diameter: float
    nudge_x: float = 0.0
    nudge_y: float = 0.0


@dataclass(frozen=True)
class SegmentShapeParams:
    """
    Geometric configuration of a digit.

    ``digit_skew_distance`` is the signed horizontal displacement of the top
    of the digit relative to its bottom, in the same units as the sizes.
    Degenerate values (zero sizes) are allowed.
    """
    horizontal_segment: SegmentSize
    vertical_segment: SegmentSize
    dp: DecimalPointParams
    gap: float = 0.0
    digit_skew_distance: float = 0.0

    @property
    def digit_height(self) -> float:
        """Height of the six-bar glyph, top of ``a`` to bottom of ``d``."""
        return (self.vertical_segment.height * 2
                + self.gap * 4
                + self.horizontal_segment.height)

    def replace(self, **changes: Any) -> 'SegmentShapeParams':
        """Return a copy with the given top-level fields changed."""
        values = {
            'horizontal_segment': self.horizontal_segment,
            'vertical_segment': self.vertical_segment,
            'dp': self.dp,
            'gap': self.gap,
            'digit_skew_distance': self.digit_skew_distance,
        }
        values.update(changes)
        return SegmentShapeParams(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON shape used by the config file."""
        return {
            'horizontalSegment': {
                'width': self.horizontal_segment.width,
                'height': self.horizontal_segment.height,
            },
            'verticalSegment': {
                'width': self.vertical_segment.width,
                'height': self.vertical_segment.height,
            },
            'dp': {
                'diameter': self.dp.diameter,
                'nudgeX': self.dp.nudge_x,
                'nudgeY': self.dp.nudge_y,
            },
            'gap': self.gap,
            'digitSkewDistance': self.digit_skew_distance,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any],
                  defaults: Optional['SegmentShapeParams'] = None) -> 'SegmentShapeParams':
        """Build params from a (possibly partial) dict.

        Accepts both camelCase keys (``horizontalSegment``, ``nudgeX``,
        ``digitSkewDistance``) and snake_case keys. Missing keys fall back
        to ``defaults`` (``DEFAULT_SHAPE_PARAMS`` when omitted).

        Raises:
            ValueError: A value is not a finite number.
        """
        base = defaults or DEFAULT_SHAPE_PARAMS

        horiz = _section(data, 'horizontalSegment', 'horizontal_segment')
        vert = _section(data, 'verticalSegment', 'vertical_segment')
        dp = _section(data, 'dp')

        return cls(
            horizontal_segment=SegmentSize(
                width=_number(horiz, base.horizontal_segment.width, 'width'),
                height=_number(horiz, base.horizontal_segment.height, 'height'),
            ),
            vertical_segment=SegmentSize(
                width=_number(vert, base.vertical_segment.width, 'width'),
                height=_number(vert, base.vertical_segment.height, 'height'),
            ),
            dp=DecimalPointParams(
                diameter=_number(dp, base.dp.diameter, 'diameter'),
                nudge_x=_number(dp, base.dp.nudge_x, 'nudgeX', 'nudge_x'),
                nudge_y=_number(dp, base.dp.nudge_y, 'nudgeY', 'nudge_y'),
            ),
            gap=_number(data, base.gap, 'gap'),
            digit_skew_distance=_number(
                data, base.digit_skew_distance,
                'digitSkewDistance', 'digit_skew_distance'),
        )


def _pick(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


def _section(data: Mapping[str, Any], *keys: str) -> Mapping[str, Any]:
    value = _pick(data, *keys)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValueError(f"{keys[0]}: expected an object, got {value!r}")
    return value


def _number(data: Mapping[str, Any], default: float, *keys: str) -> float:
    value = _pick(data, *keys)
    if value is None:
        return default
    if isinstance(value, bool):
        raise ValueError(f"{keys[0]}: expected a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{keys[0]}: expected a number, got {value!r}") from None
    if not math.isfinite(number):
        raise ValueError(f"{keys[0]}: expected a finite number, got {value!r}")
    return number


# Parameters of the reference digit (slanted 6x2 / 2x7 segments)
DEFAULT_SHAPE_PARAMS = SegmentShapeParams(
    horizontal_segment=SegmentSize(width=6, height=2),
    vertical_segment=SegmentSize(width=2, height=7),
    dp=DecimalPointParams(diameter=2, nudge_x=-1, nudge_y=0),
    gap=0.25,
    digit_skew_distance=-2,
)


# =============================================================================
# Renderable parts
# =============================================================================

class _Styled:
    """Mixin giving a part a mutable set of style markers."""

    classes: Set[str]

    def toggle_class(self, name: str, state: bool) -> None:
        """Add ``name`` when ``state`` is true, remove it otherwise."""
        if state:
            self.classes.add(name)
        else:
            self.classes.discard(name)

    def has_class(self, name: str) -> bool:
        return name in self.classes


@dataclass(eq=False)
class PolygonPart(_Styled):
    """A bar segment: closed polygon in the digit's unskewed space."""
    name: SegmentName
    points: Tuple[Point, ...]
    classes: Set[str] = field(default_factory=set)


@dataclass(eq=False)
class CirclePart(_Styled):
    """The decimal point: circle drawn outside the skewed group."""
    name: SegmentName
    cx: float
    cy: float
    r: float
    classes: Set[str] = field(default_factory=set)


SegmentPart = Union[PolygonPart, CirclePart]
RenderablePartSet = Dict[SegmentName, SegmentPart]


# =============================================================================
# Generator output
# =============================================================================

@dataclass(frozen=True)
class SkewTransform:
    """Horizontal shear applied to the six bars.

    Equivalent to the SVG transform list ``skewX(angle) translate(tx)``:
    points are translated first, then sheared.
    """
    angle: float = 0.0        # degrees
    translate_x: float = 0.0

    @property
    def is_identity(self) -> bool:
        return self.angle == 0 and self.translate_x == 0

    def apply(self, x: float, y: float) -> Point:
        """Map a point from unskewed digit space to drawing space."""
        return (x + self.translate_x + math.tan(math.radians(self.angle)) * y, y)

    def to_svg(self) -> str:
        return f"skewX({format_number(self.angle)}) translate({format_number(self.translate_x)})"


@dataclass(frozen=True)
class Bounds:
    """Viewbox size."""
    width: float
    height: float


@dataclass
class GeneratedDigit:
    """Bundle returned by ``geometry.generate()``."""
    parts: RenderablePartSet
    transform: SkewTransform
    bounds: Bounds
    params: SegmentShapeParams

    @property
    def bars(self) -> Tuple[PolygonPart, ...]:
        return tuple(self.parts[name] for name in BAR_SEGMENTS
                     if isinstance(self.parts.get(name), PolygonPart))

    @property
    def decimal_point(self) -> Optional[CirclePart]:
        part = self.parts.get(SegmentName.DP)
        return part if isinstance(part, CirclePart) else None


def format_number(value: float) -> str:
    """Format a coordinate without a trailing ``.0``."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))
