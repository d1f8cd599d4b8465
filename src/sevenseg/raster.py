"""
Raster rendering of a generated digit with Pillow.

Bars are sheared with the digit's skew transform and scaled; the decimal
point is drawn unskewed. A part is painted ``on_color`` when it carries the
on marker, ``off_color`` otherwise.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from PIL import Image, ImageDraw

from .controller import DEFAULT_ON_CLASS
from .core.models import GeneratedDigit

log = logging.getLogger(__name__)

Color = Tuple[int, ...]

ON_COLOR: Color = (255, 42, 0, 255)
OFF_COLOR: Color = (42, 10, 5, 255)
BACKGROUND: Color = (0, 0, 0, 0)

DEFAULT_SCALE = 20.0


def parse_color(value: Union[str, Sequence[int]]) -> Color:
    """Convert ``'#rrggbb'``, ``'#rrggbbaa'``, ``'rrggbb'`` or an RGB(A) tuple.

    Raises:
        ValueError: Unrecognized color string.
    """
    if not isinstance(value, str):
        rgba = tuple(int(c) for c in value)
        return rgba if len(rgba) == 4 else rgba + (255,)

    hex_str = value.lstrip('#')
    if len(hex_str) not in (6, 8):
        raise ValueError(f"Invalid color: {value!r}")
    try:
        channels = tuple(int(hex_str[i:i + 2], 16) for i in range(0, len(hex_str), 2))
    except ValueError:
        raise ValueError(f"Invalid color: {value!r}") from None
    return channels if len(channels) == 4 else channels + (255,)


def image_size(digit: GeneratedDigit, scale: float = DEFAULT_SCALE) -> Tuple[int, int]:
    """Pixel size for ``digit`` at ``scale`` (at least 1x1)."""
    return (max(1, math.ceil(digit.bounds.width * scale)),
            max(1, math.ceil(digit.bounds.height * scale)))


def render_image(
    digit: GeneratedDigit,
    scale: float = DEFAULT_SCALE,
    on_color: Union[str, Sequence[int]] = ON_COLOR,
    off_color: Union[str, Sequence[int]] = OFF_COLOR,
    background: Union[str, Sequence[int]] = BACKGROUND,
    on_class: str = DEFAULT_ON_CLASS,
) -> Image.Image:
    """Render ``digit`` to an RGBA image.

    Args:
        digit: Output of ``geometry.generate()``.
        scale: Pixels per geometry unit.
        on_color, off_color: Fill for lit and unlit parts.
        background: Canvas color (transparent by default).
        on_class: Marker that identifies a lit part.
    """
    lit = parse_color(on_color)
    unlit = parse_color(off_color)
    img = Image.new('RGBA', image_size(digit, scale), parse_color(background))
    draw = ImageDraw.Draw(img)
    transform = digit.transform

    for part in digit.bars:
        points = [transform.apply(x, y) for x, y in part.points]
        draw.polygon([(x * scale, y * scale) for x, y in points],
                     fill=lit if part.has_class(on_class) else unlit)

    dp = digit.decimal_point
    if dp is not None and dp.r > 0:
        box = [(dp.cx - dp.r) * scale, (dp.cy - dp.r) * scale,
               (dp.cx + dp.r) * scale, (dp.cy + dp.r) * scale]
        draw.ellipse(box, fill=lit if dp.has_class(on_class) else unlit)

    return img


def save_png(img: Image.Image, path: Union[str, Path]) -> Path:
    """Save ``img`` as PNG, creating parent directories."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    img.save(p, 'PNG')
    log.info("Wrote PNG: %s (%dx%d)", p, img.width, img.height)
    return p


def save_gif(frames: List[Image.Image], path: Union[str, Path],
             durations: Optional[List[int]] = None, loop: int = 0) -> Path:
    """Write an animated GIF.

    Args:
        frames: Images in display order (at least one).
        path: Output file.
        durations: Per-frame display time in ms (100 ms each if omitted).
        loop: GIF loop count, 0 = forever.

    Raises:
        ValueError: No frames, or durations length mismatch.
    """
    if not frames:
        raise ValueError("No frames to write")
    if durations is None:
        durations = [100] * len(frames)
    if len(durations) != len(frames):
        raise ValueError(f"{len(durations)} durations for {len(frames)} frames")

    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    first, *rest = [f.convert('RGBA') for f in frames]
    first.save(
        p, 'GIF',
        save_all=True,
        append_images=rest,
        duration=durations,
        loop=loop,
        disposal=2,
    )
    log.info("Wrote GIF: %s (%d frames)", p, len(frames))
    return p
