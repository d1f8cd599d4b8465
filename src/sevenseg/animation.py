"""
Demo animation sequences for a single digit.

Each sequence is a finite list of ``Frame`` steps (what to show and for
how long). Timing belongs to whoever plays them: the CLI turns them into
GIF frame durations, the preview widget into a QTimer interval.

One demo cycle::

    count 9 -> 0            300 ms per digit
    random segments         4000 ms, new mask every 100 ms
    count 0 -> 9            300 ms per digit
    random digits           2000 ms, new digit every 100 ms
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from .controller import SevenSegController

log = logging.getLogger(__name__)

COUNT_DELAY_MS = 300
RANDOM_DELAY_MS = 100

KIND_DIGIT = "digit"
KIND_SEGMENTS = "segments"


@dataclass(frozen=True)
class Frame:
    """One animation step: a digit or raw mask, held for ``delay`` ms."""
    kind: str
    value: int
    delay: int


def _clamp(value: int, low: int, high: int) -> int:
    return min(high, max(value, low))


def count(start: int, stop: int, delay: int = COUNT_DELAY_MS) -> List[Frame]:
    """Count from ``start`` to ``stop`` inclusive, both clamped to 0-9."""
    first = _clamp(start, 0, 9)
    last = _clamp(stop, 0, 9)
    step = 1 if first <= last else -1
    return [Frame(KIND_DIGIT, d, delay) for d in range(first, last + step, step)]


def random_segments(duration: int, delay: int = RANDOM_DELAY_MS,
                    rng: Optional[random.Random] = None) -> List[Frame]:
    """Random 8-bit masks, one every ``delay`` ms for ``duration`` ms."""
    rng = rng or random.Random()
    return [Frame(KIND_SEGMENTS, rng.randrange(256), delay)
            for _ in range(max(0, duration // delay))]


def random_digits(duration: int, delay: int = RANDOM_DELAY_MS,
                  rng: Optional[random.Random] = None) -> List[Frame]:
    """Random digits 0-9, one every ``delay`` ms for ``duration`` ms."""
    rng = rng or random.Random()
    return [Frame(KIND_DIGIT, rng.randrange(10), delay)
            for _ in range(max(0, duration // delay))]


def demo_sequence(rng: Optional[random.Random] = None) -> List[Frame]:
    """One full demo cycle."""
    rng = rng or random.Random()
    return (count(9, 0)
            + random_segments(4000, rng=rng)
            + count(0, 9)
            + random_digits(2000, rng=rng))


def apply_frame(controller: SevenSegController, frame: Frame) -> None:
    if frame.kind == KIND_DIGIT:
        controller.set_digit(frame.value)
    elif frame.kind == KIND_SEGMENTS:
        controller.set_segments(frame.value)
    else:
        raise ValueError(f"Unknown frame kind: {frame.kind!r}")


def play(controller: SevenSegController, frames: Iterable[Frame],
         on_frame: Optional[Callable[[Frame], None]] = None) -> int:
    """Apply each frame in turn, calling ``on_frame`` after each one.

    Returns:
        Number of frames played.
    """
    played = 0
    for frame in frames:
        apply_frame(controller, frame)
        if on_frame:
            on_frame(frame)
        played += 1
    log.debug("Played %d frames", played)
    return played
