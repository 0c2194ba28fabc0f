"""SheetExporter: lays out a score file and writes it as SVG or HTML."""

from __future__ import annotations

from typing import Final

from notator.score_importer import ScoreImporter
from notator.score_layout import ScoreLine, layout_channel
from notator.score_models import Cursor, Score
from notator.sheet_renderers import HtmlRenderer, SheetRenderer, SvgRenderer
from notator.staff import Staff

SUPPORTED_FORMATS: Final[set[str]] = {"svg", "html"}


class SheetExporter:
    """
    Convert a score file into sheet output via a pluggable renderer.

    Supported formats:
    - ``svg``: one SVG document, glyphs referenced from a music font.
    - ``html``: the same SVG embedded in a self-contained HTML page.
    """

    def __init__(
        self,
        staff: Staff | None = None,
        output_format: str = "svg",
        title: str = "",
        draw_flags: bool = False,
    ) -> None:
        self.staff = staff if staff is not None else Staff()
        self.title = title
        self.draw_flags = draw_flags
        normalized = output_format.strip().lower()
        if normalized not in SUPPORTED_FORMATS:
            supported = ", ".join(sorted(SUPPORTED_FORMATS))
            raise ValueError(f"Unsupported output format '{output_format}'. Use one of: {supported}.")
        self.output_format = normalized
        self.renderer = self._build_renderer(normalized)
        self.importer = ScoreImporter()

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _build_renderer(self, output_format: str) -> SheetRenderer:
        if output_format == "html":
            return HtmlRenderer()
        return SvgRenderer()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def layout(self, score: Score, channel: int = 0, cursor: Cursor | None = None) -> ScoreLine:
        return layout_channel(self.staff, score, cursor, channel, draw_flags=self.draw_flags)

    def render(self, score: Score, channel: int = 0, cursor: Cursor | None = None) -> str:
        """Lay out one channel of *score* and render it to a string."""
        line = self.layout(score, channel, cursor)
        return self.renderer.render(title=self.title or score.title, lines=[line])

    def export(
        self,
        score_path: str,
        output_path: str,
        channel: int = 0,
        cursor: Cursor | None = None,
    ) -> Score:
        """
        Read a score file, render one channel and write it to disk.

        Returns:
            The imported score.

        Raises:
            ValueError: If the score cannot be read or has no such channel.
            OSError: If the output file cannot be written.
        """
        score = self.importer.load(score_path)
        content = self.render(score, channel, cursor)

        with open(output_path, "w", encoding="utf-8") as fh:
            fh.write(content)
        return score
