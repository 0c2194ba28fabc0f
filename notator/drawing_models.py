"""Data models for the drawing primitives produced by the layout engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Union

from notator.glyphs import GlyphId


@dataclass(frozen=True)
class GlyphAt:
    """A font glyph placed with its origin at ``(x, y)``."""

    x: int
    y: int
    glyph_id: GlyphId


@dataclass(frozen=True)
class Rect:
    """A filled rectangle: stems, barlines, staff segments and the cursor highlight."""

    x: int
    y: int
    width: int
    height: int
    fill: str | None = None
    rx: int | None = None
    ry: int | None = None


@dataclass(frozen=True)
class Path:
    """Raw path data in SVG path syntax."""

    d: str


DrawingPrimitive = Union[GlyphAt, Rect, Path]


class MeasureLayout(NamedTuple):
    """Primitives of one measure, in the measure's own coordinate space, and its width."""

    primitives: list[DrawingPrimitive]
    width: int
