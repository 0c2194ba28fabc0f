"""Staff geometry: vertical coordinates derived from a staff configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Final

from notator.drawing_models import Path
from notator.glyphs import GlyphId

#: Thickness of barlines; staff lines match it.
BARLINE_WIDTH: Final[int] = 36

#: Reference-pitch offsets of the common clefs (middle C relative to the middle line).
TREBLE_STEPS: Final[int] = 6
ALTO_STEPS: Final[int] = 0
BASS_STEPS: Final[int] = -6


@dataclass(frozen=True)
class Staff:
    """
    A staff configuration.

    Attributes:
        lines: Number of staff lines.
        steps: Staff steps from the reference pitch (middle C) to the middle
               line. Positive values put middle C below the middle line.

    Coordinates grow downwards, as in SVG.
    """

    lines: int = 5
    steps: int = TREBLE_STEPS

    STEP_DY: ClassVar[int] = 125  # one staff step (line to adjacent space)
    MARGIN_X: ClassVar[int] = 96
    MARGIN_Y: ClassVar[int] = STEP_DY * 6
    LINE_WIDTH: ClassVar[int] = BARLINE_WIDTH

    def height(self) -> int:
        """Distance from the top line to the bottom line."""
        if self.lines <= 0:
            return 0
        return (self.lines - 1) * 2 * self.STEP_DY

    def virtual_height(self) -> int:
        """Height of the staff plus the room kept for glyphs above and below it."""
        return self.height() + self.MARGIN_Y * 2

    def middle(self) -> int:
        return self.MARGIN_Y + self.height() // 2

    def reference_pitch_y(self) -> int:
        """Y of the reference pitch (middle C)."""
        return self.middle() + self.STEP_DY * self.steps

    def y_for(self, visual_distance: int) -> int:
        """Y of a pitch *visual_distance* steps from the reference pitch."""
        return self.reference_pitch_y() + self.STEP_DY * visual_distance

    def stem_up(self, y: int) -> bool:
        """Stems point up for noteheads sitting lower on the page than the middle line."""
        return y > self.middle()

    def clef(self) -> GlyphId:
        if self.steps == TREBLE_STEPS:
            return GlyphId.CLEF_G
        if self.steps == BASS_STEPS:
            return GlyphId.CLEF_F
        return GlyphId.CLEF_C

    def path(self, width: int) -> Path:
        """Staff lines as one path of filled bars, *width* long, starting after the barline."""
        segments = []
        x = BARLINE_WIDTH
        for line in range(self.lines):
            y = self.MARGIN_Y + self.STEP_DY * (line * 2) - self.LINE_WIDTH // 2
            segments.append(
                f"M{x} {y}h{width}v{self.LINE_WIDTH}h-{width}v-{self.LINE_WIDTH}z"
            )
        return Path("".join(segments))
