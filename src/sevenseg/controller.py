"""Segment controller: projects a digit or raw mask onto a part set.

The controller never stores a "current digit". Every call fully decides
the on/off marker of every present part, so calls are idempotent and a
driver may stop between any two of them.
"""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional

from .core.models import (
    ALL_OFF,
    ALL_ON,
    DIGITS,
    SEGMENT_ORDER,
    SegmentKey,
    SegmentName,
    SegmentPart,
)

log = logging.getLogger(__name__)

DEFAULT_ON_CLASS = "seven-seg--on"
DEFAULT_OFF_CLASS = "seven-seg--off"


def mask_for_digit(value: int) -> int:
    """Segment mask for ``value`` wrapped into 0-9 (so -1 gives 9's glyph)."""
    return DIGITS[value % 10]


def segments_for_mask(mask: int) -> Dict[SegmentName, bool]:
    """Decode the low 8 bits of ``mask`` into per-segment on/off flags.

    | a | b | c | d | e | f | g | dp |
    |---|---|---|---|---|---|---|----|
    |0x80                       0x01 |
    """
    mask &= 0xFF
    return {name: bool(mask & name.bit) for name in SEGMENT_ORDER}


def mask_for_segments(segments: Mapping[SegmentKey, bool]) -> int:
    """Encode per-segment flags back into a mask. Missing segments are off."""
    mask = 0
    for key, lit in segments.items():
        if lit:
            mask |= SegmentName(key).bit
    return mask


class SevenSegController:
    """Turns segments of one digit on and off.

    Args:
        parts: Segment name (``SegmentName`` or its string value) to part.
            ``dp`` may be missing, in which case it is never touched.
        on_class: Marker applied to lit parts.
        off_class: Marker applied to unlit parts.
    """

    def __init__(
        self,
        parts: Mapping[SegmentKey, SegmentPart],
        on_class: str = DEFAULT_ON_CLASS,
        off_class: str = DEFAULT_OFF_CLASS,
    ):
        self._parts: Dict[SegmentName, SegmentPart] = {
            SegmentName(key): part for key, part in parts.items()
        }
        self._on_class = on_class
        self._off_class = off_class

    @property
    def parts(self) -> Dict[SegmentName, SegmentPart]:
        return dict(self._parts)

    @property
    def on_class(self) -> str:
        return self._on_class

    @property
    def off_class(self) -> str:
        return self._off_class

    def set_digit(self, digit: int) -> None:
        """Show ``digit % 10``; the decimal point is switched off."""
        self.set_segments(mask_for_digit(digit))

    def set_segments(self, encoded: int) -> None:
        """Set the on/off state of all segments at once.

        The input is an 'abcdefgDP'-encoded number: of its low 8 bits, bit 7
        drives ``a`` and bit 0 drives ``dp``. To light only ``a`` pass
        ``0b10000000``.
        """
        log.debug("set_segments 0b%s", format(encoded & 0xFF, '08b'))
        for name, lit in segments_for_mask(encoded).items():
            self._set_part(self._parts.get(name), lit)

    def on(self) -> None:
        """Turn on all parts of the display, decimal point included."""
        self.set_segments(ALL_ON)

    def off(self) -> None:
        """Turn off all parts of the display."""
        self.set_segments(ALL_OFF)

    def state(self) -> Dict[SegmentName, bool]:
        """Read back which present parts carry the on marker."""
        return {name: part.has_class(self._on_class)
                for name, part in self._parts.items()}

    def _set_part(self, part: Optional[SegmentPart], on: bool) -> None:
        if part is None:
            return
        part.toggle_class(self._on_class, on)
        part.toggle_class(self._off_class, not on)
