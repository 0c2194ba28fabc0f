"""Renderer implementations for laid out score lines."""

from __future__ import annotations

from abc import ABC, abstractmethod

from notator.drawing_models import DrawingPrimitive, GlyphAt, Path, Rect
from notator.glyphs import GlyphId
from notator.score_layout import ScoreLine


def _escape_html(text: str) -> str:
    """Escape the three characters that are unsafe in HTML text content."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def _escape_attr(text: str) -> str:
    return _escape_html(text).replace("'", "&#39;")


def render_primitive(primitive: DrawingPrimitive) -> str:
    """Serialize one drawing primitive as an SVG element."""
    if isinstance(primitive, GlyphAt):
        return f"<use x='{primitive.x}' y='{primitive.y}' xlink:href='#{primitive.glyph_id.ref}'/>"
    if isinstance(primitive, Rect):
        attrs = f"x='{primitive.x}' y='{primitive.y}' width='{primitive.width}' height='{primitive.height}'"
        if primitive.rx is not None:
            attrs += f" rx='{primitive.rx}'"
        if primitive.ry is not None:
            attrs += f" ry='{primitive.ry}'"
        if primitive.fill is not None:
            attrs += f" fill='{primitive.fill}'"
        return f"<rect {attrs}/>"
    if isinstance(primitive, Path):
        return f"<path d='{primitive.d}'/>"
    raise TypeError(f"Unknown drawing primitive: {primitive!r}")


class SheetRenderer(ABC):
    """Abstract sheet renderer."""

    @property
    @abstractmethod
    def default_extension(self) -> str:
        """Default filename extension for this renderer."""

    @abstractmethod
    def render(self, *, title: str, lines: list[ScoreLine]) -> str:
        """Render output into a file content string."""


class SvgRenderer(SheetRenderer):
    """Render score lines as one standalone SVG document, lines stacked top to bottom."""

    def __init__(self, font_family: str = "Bravura") -> None:
        """
        Args:
            font_family: SMuFL music font used to draw glyph definitions.
        """
        self.font_family = font_family

    @property
    def default_extension(self) -> str:
        return ".svg"

    def render(self, *, title: str, lines: list[ScoreLine]) -> str:
        if not lines:
            raise ValueError("At least one score line is required for SVG rendering.")
        if len(lines) == 1:
            return self.render_svg(lines[0])

        used: set[GlyphId] = set()
        bodies = []
        y = 0
        for line in lines:
            bodies.append(f"<g transform='translate(0 {y})'>{self._line_body(line, used)}</g>")
            y += line.height
        width = max(line.width for line in lines) + lines[0].staff.MARGIN_X
        return self._svg_element(width, y, self.build_defs(used) + "".join(bodies))

    def render_svg(self, line: ScoreLine) -> str:
        """
        Serialize one score line as an ``<svg>`` element.

        Each measure becomes a ``<g>`` translated to its x position; glyphs are
        ``<use>`` references into a ``<defs>`` block holding every glyph the
        line needs.
        """
        used: set[GlyphId] = set()
        body = self._line_body(line, used)
        width = line.width + line.staff.MARGIN_X
        return self._svg_element(width, line.height, self.build_defs(used) + body)

    def _line_body(self, line: ScoreLine, used: set[GlyphId]) -> str:
        groups = []
        for measure in line.measures:
            primitives = measure.layout.primitives
            used.update(p.glyph_id for p in primitives if isinstance(p, GlyphAt))
            body = "".join(render_primitive(p) for p in primitives)
            if measure.x != 0:
                groups.append(f"<g transform='translate({measure.x} 0)'>{body}</g>")
            else:
                groups.append(f"<g>{body}</g>")
        return "".join(groups)

    def _svg_element(self, width: int, height: int, content: str) -> str:
        return (
            "<svg xmlns='http://www.w3.org/2000/svg' "
            "xmlns:xlink='http://www.w3.org/1999/xlink' "
            f"viewBox='0 0 {width} {height}' width='{width}' height='{height}'>"
            f"{content}</svg>"
        )

    def build_defs(self, glyphs: set[GlyphId]) -> str:
        """Define each glyph as text in the music font, keyed by its hex codepoint."""
        family = _escape_attr(self.font_family)
        texts = "".join(
            f"<text id='{glyph.ref}' font-family='{family}' font-size='1000'>&#x{glyph.ref};</text>"
            for glyph in sorted(glyphs)
        )
        return f"<defs>{texts}</defs>"


class HtmlRenderer(SheetRenderer):
    """Render score lines into a self-contained HTML document with inline SVG."""

    def __init__(self, svg_renderer: SvgRenderer | None = None) -> None:
        self.svg_renderer = svg_renderer if svg_renderer is not None else SvgRenderer()

    @property
    def default_extension(self) -> str:
        return ".html"

    def render(self, *, title: str, lines: list[ScoreLine]) -> str:
        if not lines:
            raise ValueError("At least one score line is required for HTML rendering.")
        svgs = [self.svg_renderer.render_svg(line) for line in lines]
        return self.build_html(title, svgs)

    def build_html(self, title: str, svgs: list[str]) -> str:
        """
        Wrap a list of SVG strings in a self-contained HTML document.

        Each SVG is placed in its own scrollable ``.line`` div; print styles
        drop the page background.
        """
        title_safe = _escape_html(title)
        heading = f"  <h1>{title_safe}</h1>\n" if title else ""
        body = "\n".join(f'  <div class="line">{svg}</div>' for svg in svgs)

        return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1.0" />
  <title>{title_safe}</title>
  <style>
    body {{ margin: 0; padding: 1.5rem; background: #fafafa; }}
    h1 {{ font: 1.4rem sans-serif; margin: 0 0 1.5rem; }}
    .line {{ overflow-x: auto; margin-bottom: 2rem; }}
    .line svg {{ display: block; height: 8rem; width: auto; }}
    @media print {{
      body {{ background: none; padding: 0; }}
      .line {{ overflow: visible; }}
    }}
  </style>
</head>
<body>
{heading}{body}
</body>
</html>"""
