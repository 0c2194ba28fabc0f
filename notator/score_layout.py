"""Line layout: a channel's measures placed side by side, signature first."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

from notator.drawing_models import DrawingPrimitive, GlyphAt, MeasureLayout
from notator.glyphs import time_signature_digits
from notator.measure_layout import layout_measure
from notator.score_models import Cursor, Score
from notator.staff import BARLINE_WIDTH, Staff

CLEF_WIDTH: Final[int] = 1000
TIME_SIG_WIDTH: Final[int] = 640
TIME_DIGIT_WIDTH: Final[int] = 470


@dataclass(frozen=True)
class PlacedMeasure:
    """A laid out measure and the x at which its local origin sits in the line."""

    x: int
    index: int
    layout: MeasureLayout

    @property
    def width(self) -> int:
        return self.layout.width


@dataclass
class ScoreLine:
    """All measures of one channel laid out on a single staff."""

    staff: Staff
    measures: list[PlacedMeasure] = field(default_factory=list)

    @property
    def width(self) -> int:
        return sum(measure.width for measure in self.measures)

    @property
    def height(self) -> int:
        return self.staff.virtual_height()


def signature_primitives(
    staff: Staff, time_signature: tuple[int, int]
) -> tuple[list[DrawingPrimitive], int]:
    """
    Place the clef and time signature at the start of a line.

    Returns:
        The signature glyphs and the width they take up.
    """
    primitives: list[DrawingPrimitive] = [GlyphAt(BARLINE_WIDTH, staff.middle(), staff.clef())]
    width = CLEF_WIDTH

    numerator, denominator = time_signature
    top = time_signature_digits(numerator)
    bottom = time_signature_digits(denominator)
    columns = max(len(top), len(bottom))
    for digits, y in (
        (top, staff.middle() - staff.STEP_DY * 2),
        (bottom, staff.middle() + staff.STEP_DY * 2),
    ):
        # Center the shorter number over the longer one.
        x = BARLINE_WIDTH + width + (columns - len(digits)) * TIME_DIGIT_WIDTH // 2
        for glyph in digits:
            primitives.append(GlyphAt(x, y, glyph))
            x += TIME_DIGIT_WIDTH

    width += TIME_SIG_WIDTH + (columns - 1) * TIME_DIGIT_WIDTH
    return primitives, width


def layout_channel(
    staff: Staff,
    score: Score,
    cursor: Cursor | None = None,
    channel: int = 0,
    *,
    draw_flags: bool = False,
) -> ScoreLine:
    """
    Lay out every measure of *channel* into one line.

    The first measure starts after the clef and time signature; every measure
    gets staff lines spanning its own width.

    Raises:
        ValueError: If the score has no such channel.
    """
    if not 0 <= channel < score.channel_count:
        raise ValueError(f"Score has no channel {channel} (it has {score.channel_count}).")

    line = ScoreLine(staff=staff)
    x = 0
    for measure_index in range(score.measure_count(channel)):
        primitives: list[DrawingPrimitive] = []
        origin = 0
        if measure_index == 0:
            primitives, origin = signature_primitives(staff, score.time_signature)

        measure = layout_measure(
            staff,
            score,
            cursor,
            channel,
            measure_index,
            origin,
            draw_flags=draw_flags,
        )
        primitives.extend(measure.primitives)
        primitives.append(staff.path(measure.width))

        line.measures.append(
            PlacedMeasure(
                x=x,
                index=measure_index,
                layout=MeasureLayout(primitives=primitives, width=measure.width),
            )
        )
        x += measure.width
    return line
