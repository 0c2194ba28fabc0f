"""Measure layout: places notation symbols, stems, barlines and the cursor highlight."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

from notator.decomposition import NotationSymbol, decompose
from notator.drawing_models import DrawingPrimitive, GlyphAt, MeasureLayout, Rect
from notator.duration import ZERO, Duration, DurationClass
from notator.glyphs import GlyphId, flag_for, notehead_for, rest_for
from notator.score_models import Cursor, Note, ScoreSource
from notator.staff import BARLINE_WIDTH, Staff

# ── Layout constants (font units) ──────────────────────────────────────────
BAR_WIDTH: Final[int] = 3200         # width of one whole note
NOTE_MARGIN: Final[int] = 250        # space before each symbol
CURSOR_COLOR: Final[str] = "#ff9af0"
WHOLE_REST_WIDTH: Final[int] = 230

STEM_WIDTH: Final[int] = 30
STEM_LENGTH: Final[int] = 7 * Staff.STEP_DY
HEAD_WIDTH: Final[int] = 263


@dataclass
class MeasureAccumulator:
    """
    Running state of one measure's layout.

    Attributes:
        staff:       Staff the measure is drawn on.
        origin:      X where the first marking starts (e.g. after a signature).
        elapsed:     Notated length so far, as a fraction of the bar width.
        primitives:  Primitives emitted so far, in paint order.
    """

    staff: Staff
    origin: int = 0
    elapsed: Duration = ZERO
    primitives: list[DrawingPrimitive] = field(default_factory=list)

    @property
    def width(self) -> int:
        return self.x_at(self.elapsed)

    def x_at(self, position: Duration) -> int:
        """X of a position inside the measure, given as a fraction of the bar width."""
        return self.origin + position.scale(BAR_WIDTH)

    def emit(self, primitive: DrawingPrimitive) -> None:
        self.primitives.append(primitive)

    def advance(self, duration: Duration) -> None:
        self.elapsed = self.elapsed + duration


def layout_measure(
    staff: Staff,
    score: ScoreSource,
    cursor: Cursor | None,
    channel: int,
    measure_index: int,
    horizontal_origin: int = 0,
    *,
    draw_flags: bool = False,
) -> MeasureLayout:
    """
    Lay out every marking of one measure.

    Markings are read from *score* until ``marking_at`` returns ``None``. A
    measure without markings is drawn as a centered whole-measure rest one
    bar wide; otherwise a barline closes the measure.

    Args:
        staff:             Staff configuration providing vertical coordinates.
        score:             Source of the measure's markings.
        cursor:            Edit cursor; the marking it points at is highlighted.
        channel:           Channel of the measure.
        measure_index:     Index of the measure within the channel.
        horizontal_origin: X at which the first marking starts.
        draw_flags:        Also place flag glyphs on stems of eighths and shorter.

    Returns:
        The primitives in paint order and the measure's final width.

    Raises:
        TypeError: If the score yields anything other than a ``Note``.
        ValueError: If a marking has a zero duration.
    """
    acc = MeasureAccumulator(staff=staff, origin=horizontal_origin)

    index = 0
    while (marking := score.marking_at(channel, measure_index, index)) is not None:
        if not isinstance(marking, Note):
            raise TypeError(
                f"Cannot lay out marking of type {type(marking).__name__} "
                f"at channel {channel}, measure {measure_index}, index {index}."
            )
        highlighted = cursor is not None and cursor == Cursor(channel, measure_index, index)
        _add_marking(acc, marking, highlighted, draw_flags)
        index += 1

    if index == 0:
        _add_whole_measure_rest(acc)
    else:
        _add_barline(acc)

    return MeasureLayout(primitives=acc.primitives, width=acc.width)


# ------------------------------------------------------------------
# Private helpers
# ------------------------------------------------------------------


def _add_marking(acc: MeasureAccumulator, note: Note, highlighted: bool, draw_flags: bool) -> None:
    start = acc.elapsed
    end = start + note.duration
    if highlighted:
        _add_cursor_rect(acc, acc.x_at(start), acc.x_at(end))

    for symbol in decompose(note.duration, note.visual_distance):
        x = acc.x_at(start + symbol.offset) + NOTE_MARGIN
        if symbol.visual_distance is None:
            _add_rest(acc, symbol, x)
        else:
            y = acc.staff.y_for(symbol.visual_distance)
            _add_pitch(acc, symbol, x, y, draw_flags)

    acc.advance(note.duration)


def _add_cursor_rect(acc: MeasureAccumulator, start_x: int, end_x: int) -> None:
    width = end_x - start_x - BARLINE_WIDTH
    if width <= 0:
        return
    acc.emit(
        Rect(
            x=start_x + BARLINE_WIDTH,
            y=0,
            width=width,
            height=acc.staff.virtual_height(),
            fill=CURSOR_COLOR,
        )
    )


def _add_pitch(
    acc: MeasureAccumulator, symbol: NotationSymbol, x: int, y: int, draw_flags: bool
) -> None:
    acc.emit(GlyphAt(x, y, notehead_for(symbol.duration_class)))
    if not symbol.has_stem:
        return

    stem_up = acc.staff.stem_up(y)
    if stem_up:
        stem_x, stem_y = x + HEAD_WIDTH, y - STEM_LENGTH
    else:
        stem_x, stem_y = x, y
    acc.emit(
        Rect(
            x=stem_x,
            y=stem_y,
            width=STEM_WIDTH,
            height=STEM_LENGTH,
            rx=STEM_WIDTH // 2,
            ry=STEM_WIDTH,
        )
    )

    if draw_flags:
        flag = flag_for(symbol.duration_class, stem_up)
        if flag is not None:
            flag_y = stem_y if stem_up else y + STEM_LENGTH
            acc.emit(GlyphAt(stem_x, flag_y, flag))


def _add_rest(acc: MeasureAccumulator, symbol: NotationSymbol, x: int) -> None:
    y = acc.staff.middle()
    # The whole rest hangs from the line above the middle.
    if symbol.duration_class is DurationClass.WHOLE:
        y -= acc.staff.STEP_DY * 2
    acc.emit(GlyphAt(x, y, rest_for(symbol.duration_class)))


def _add_whole_measure_rest(acc: MeasureAccumulator) -> None:
    x = acc.origin + (BAR_WIDTH - WHOLE_REST_WIDTH) // 2
    y = acc.staff.middle() - acc.staff.STEP_DY * 2
    acc.emit(GlyphAt(x, y, GlyphId.REST_1))
    acc.advance(Duration(1))


def _add_barline(acc: MeasureAccumulator) -> None:
    acc.emit(
        Rect(
            x=acc.width,
            y=acc.staff.MARGIN_Y,
            width=BARLINE_WIDTH,
            height=acc.staff.height(),
        )
    )
