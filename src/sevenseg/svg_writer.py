"""
SVG output for a generated digit.

Document layout::

    <svg viewBox="0 0 W H" width="W" height="H">
      <style>...</style>                      (optional)
      <g transform="skewX(..) translate(..)">
        <polygon data-segment="a" class="..." points="x,y x,y ..."/>
        ... b-g
      </g>
      <circle data-segment="dp" class="..." cx=".." cy=".." r=".."/>
    </svg>

Each element's ``class`` reflects the part's current markers, so a
document written after ``SevenSegController.set_digit()`` shows that digit
once a stylesheet gives the markers a fill.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union
from xml.etree.ElementTree import Element, SubElement, tostring

from .controller import DEFAULT_OFF_CLASS, DEFAULT_ON_CLASS
from .core.models import CirclePart, GeneratedDigit, PolygonPart, format_number

log = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"


def default_stylesheet(
    on_class: str = DEFAULT_ON_CLASS,
    off_class: str = DEFAULT_OFF_CLASS,
    on_color: str = "#ff2a00",
    off_color: str = "#2a0a05",
) -> str:
    """CSS giving lit and unlit parts their fill colors."""
    return (
        f".{on_class} {{ fill: {on_color}; }}\n"
        f".{off_class} {{ fill: {off_color}; }}\n"
    )


def _points_attr(part: PolygonPart) -> str:
    return " ".join(f"{format_number(x)},{format_number(y)}" for x, y in part.points)


def _part_attrs(part) -> dict:
    attrs = {"data-segment": part.name.value}
    if part.classes:
        attrs["class"] = " ".join(sorted(part.classes))
    return attrs


def build_svg(digit: GeneratedDigit, stylesheet: Optional[str] = None) -> Element:
    """Build the SVG element tree for ``digit``.

    Args:
        digit: Output of ``geometry.generate()``.
        stylesheet: CSS text placed in a ``<style>`` element, if given.
    """
    width = format_number(digit.bounds.width)
    height = format_number(digit.bounds.height)
    svg = Element(
        "svg",
        {
            "xmlns": SVG_NS,
            "viewBox": f"0 0 {width} {height}",
            "width": width,
            "height": height,
        },
    )

    if stylesheet:
        style = SubElement(svg, "style")
        style.text = stylesheet

    group = SubElement(svg, "g", {"transform": digit.transform.to_svg()})
    for part in digit.bars:
        attrs = _part_attrs(part)
        attrs["points"] = _points_attr(part)
        SubElement(group, "polygon", attrs)

    dp: Optional[CirclePart] = digit.decimal_point
    if dp is not None:
        attrs = _part_attrs(dp)
        attrs.update({
            "cx": format_number(dp.cx),
            "cy": format_number(dp.cy),
            "r": format_number(dp.r),
        })
        SubElement(svg, "circle", attrs)

    return svg


def to_svg_string(digit: GeneratedDigit, stylesheet: Optional[str] = None) -> str:
    """Serialize ``digit`` to SVG markup."""
    return tostring(build_svg(digit, stylesheet), encoding="unicode")


def write_svg(digit: GeneratedDigit, path: Union[str, Path],
              stylesheet: Optional[str] = None) -> Path:
    """Write ``digit`` to ``path`` (``.svg`` suffix enforced).

    Raises:
        OSError: The file could not be written.
    """
    p = Path(path)
    if p.suffix.lower() != ".svg":
        p = p.with_suffix(".svg")
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(to_svg_string(digit, stylesheet), encoding="utf-8")
    log.info("Wrote SVG: %s", p)
    return p
