"""Unit tests for single-measure layout."""

import pytest

from notator.drawing_models import DrawingPrimitive, GlyphAt, Rect
from notator.duration import Duration, DurationClass
from notator.glyphs import GlyphId
from notator.measure_layout import (
    BAR_WIDTH,
    CURSOR_COLOR,
    STEM_LENGTH,
    STEM_WIDTH,
    layout_measure,
)
from notator.score_models import Cursor, Note, Score
from notator.staff import Staff

STAFF = Staff(lines=5, steps=6)

MIDDLE_C = 0  # below a treble staff: stem up
D5 = -8       # above the middle line: stem down


def _score(*measures: list[Note]) -> Score:
    return Score(channels=[list(measures)])


def _stems(primitives: list[DrawingPrimitive]) -> list[Rect]:
    return [p for p in primitives if isinstance(p, Rect) and p.width == STEM_WIDTH]


def _highlights(primitives: list[DrawingPrimitive]) -> list[Rect]:
    return [p for p in primitives if isinstance(p, Rect) and p.fill == CURSOR_COLOR]


def _glyphs(primitives: list[DrawingPrimitive]) -> list[GlyphAt]:
    return [p for p in primitives if isinstance(p, GlyphAt)]


class _OtherMarking:
    pass


class _MixedSource:
    def marking_at(self, channel: int, measure: int, index: int) -> object | None:
        return _OtherMarking() if index == 0 else None


def test_quarter_note_with_stem_up_and_barline() -> None:
    score = _score([Note.pitched(Duration(1, 4), MIDDLE_C)])
    layout = layout_measure(STAFF, score, None, 0, 0)

    assert layout.width == 800
    assert layout.primitives == [
        GlyphAt(250, 2000, GlyphId.NOTEHEAD_FILL),
        Rect(x=513, y=1125, width=30, height=875, rx=15, ry=30),
        Rect(x=800, y=750, width=36, height=1000),
    ]


def test_stem_points_down_above_the_middle_line() -> None:
    score = _score([Note.pitched(Duration(1, 8), D5)])
    layout = layout_measure(STAFF, score, None, 0, 0)

    (stem,) = _stems(layout.primitives)
    assert (stem.x, stem.y, stem.height) == (250, 1000, STEM_LENGTH)


def test_whole_note_has_no_stem() -> None:
    score = _score([Note.pitched(Duration(1, 1), MIDDLE_C)])
    layout = layout_measure(STAFF, score, None, 0, 0)

    assert _stems(layout.primitives) == []
    assert _glyphs(layout.primitives) == [GlyphAt(250, 2000, GlyphId.NOTEHEAD_WHOLE)]
    assert layout.width == BAR_WIDTH


@pytest.mark.parametrize("duration_class", list(DurationClass))
def test_one_stem_per_symbol_except_whole(duration_class: DurationClass) -> None:
    score = _score([Note.pitched(duration_class.duration, MIDDLE_C)])
    layout = layout_measure(STAFF, score, None, 0, 0)

    expected = 0 if duration_class is DurationClass.WHOLE else 1
    assert len(_stems(layout.primitives)) == expected


def test_dotted_quarter_is_drawn_as_two_symbols() -> None:
    score = _score([Note.pitched(Duration(3, 8), MIDDLE_C)])
    layout = layout_measure(STAFF, score, None, 0, 0)

    noteheads = _glyphs(layout.primitives)
    assert [g.x for g in noteheads] == [250, 1050]
    assert len(_stems(layout.primitives)) == 2
    assert layout.width == 1200


def test_markings_advance_the_running_offset() -> None:
    score = _score(
        [
            Note.pitched(Duration(1, 2), MIDDLE_C),
            Note.rest(Duration(1, 4)),
            Note.pitched(Duration(1, 4), D5),
        ]
    )
    layout = layout_measure(STAFF, score, None, 0, 0)

    assert _glyphs(layout.primitives) == [
        GlyphAt(250, 2000, GlyphId.NOTEHEAD_HALF),
        GlyphAt(1850, 1250, GlyphId.REST_4),
        GlyphAt(2650, 1000, GlyphId.NOTEHEAD_FILL),
    ]
    assert layout.primitives[-1] == Rect(x=3200, y=750, width=36, height=1000)
    assert layout.width == 3200


def test_empty_measure_is_a_centered_whole_measure_rest() -> None:
    layout = layout_measure(STAFF, _score([]), None, 0, 0)

    assert layout.primitives == [GlyphAt(1485, 1000, GlyphId.REST_1)]
    assert layout.width == BAR_WIDTH


def test_layout_unpacks_into_primitives_and_width() -> None:
    primitives, width = layout_measure(STAFF, _score([Note.rest(Duration(1, 2))]), None, 0, 0)
    assert primitives[0] == GlyphAt(250, 1250, GlyphId.REST_2)
    assert width == 1600


def test_missing_measure_is_laid_out_as_empty() -> None:
    layout = layout_measure(STAFF, _score([]), None, 0, 5)
    assert layout.primitives == [GlyphAt(1485, 1000, GlyphId.REST_1)]


def test_whole_measure_rest_respects_the_origin() -> None:
    layout = layout_measure(STAFF, _score([]), None, 0, 0, horizontal_origin=1640)

    assert layout.primitives == [GlyphAt(3125, 1000, GlyphId.REST_1)]
    assert layout.width == 1640 + BAR_WIDTH


def test_whole_rest_marking_sits_at_the_running_offset() -> None:
    score = _score([Note.rest(Duration(1, 1))])
    layout = layout_measure(STAFF, score, None, 0, 0)

    assert _glyphs(layout.primitives) == [GlyphAt(250, 1000, GlyphId.REST_1)]
    assert layout.primitives[-1] == Rect(x=3200, y=750, width=36, height=1000)


def test_dotted_rest_decomposes() -> None:
    score = _score([Note.rest(Duration(3, 4))])
    layout = layout_measure(STAFF, score, None, 0, 0)

    assert _glyphs(layout.primitives) == [
        GlyphAt(250, 1250, GlyphId.REST_2),
        GlyphAt(1850, 1250, GlyphId.REST_4),
    ]
    assert _stems(layout.primitives) == []


def test_origin_shifts_every_marking() -> None:
    score = _score([Note.pitched(Duration(1, 4), MIDDLE_C)])
    layout = layout_measure(STAFF, score, None, 0, 0, horizontal_origin=1640)

    assert _glyphs(layout.primitives) == [GlyphAt(1890, 2000, GlyphId.NOTEHEAD_FILL)]
    assert layout.width == 2440


def test_cursor_highlights_the_matching_marking_beneath_it() -> None:
    score = _score([Note.pitched(Duration(1, 2), MIDDLE_C), Note.pitched(Duration(1, 4), MIDDLE_C)])
    layout = layout_measure(STAFF, score, Cursor(0, 0, 1), 0, 0)

    (highlight,) = _highlights(layout.primitives)
    assert highlight == Rect(x=1636, y=0, width=764, height=2500, fill=CURSOR_COLOR)

    second_head = GlyphAt(1850, 2000, GlyphId.NOTEHEAD_FILL)
    assert layout.primitives.index(highlight) < layout.primitives.index(second_head)
    assert layout.primitives.index(highlight) > layout.primitives.index(
        GlyphAt(250, 2000, GlyphId.NOTEHEAD_HALF)
    )


def test_cursor_highlight_spans_the_undecomposed_duration() -> None:
    score = _score([Note.pitched(Duration(3, 8), MIDDLE_C)])
    layout = layout_measure(STAFF, score, Cursor(0, 0, 0), 0, 0)

    (highlight,) = _highlights(layout.primitives)
    assert highlight.x == 36
    assert highlight.width == 1200 - 36
    assert layout.primitives[0] == highlight


@pytest.mark.parametrize(
    "cursor",
    [None, Cursor(1, 0, 0), Cursor(0, 1, 0), Cursor(0, 0, 3)],
)
def test_no_highlight_without_a_matching_cursor(cursor: Cursor | None) -> None:
    score = _score([Note.pitched(Duration(1, 4), MIDDLE_C)])
    layout = layout_measure(STAFF, score, cursor, 0, 0)
    assert _highlights(layout.primitives) == []


def test_degenerate_highlight_is_suppressed() -> None:
    score = _score([Note.pitched(Duration(1, 128), MIDDLE_C)])
    layout = layout_measure(STAFF, score, Cursor(0, 0, 0), 0, 0)

    assert _highlights(layout.primitives) == []
    assert _glyphs(layout.primitives) == [GlyphAt(250, 2000, GlyphId.NOTEHEAD_FILL)]


def test_empty_measure_draws_no_highlight() -> None:
    layout = layout_measure(STAFF, _score([]), Cursor(0, 0, 0), 0, 0)
    assert _highlights(layout.primitives) == []


def test_flags_are_opt_in() -> None:
    score = _score([Note.pitched(Duration(1, 8), MIDDLE_C)])
    plain = layout_measure(STAFF, score, None, 0, 0)
    flagged = layout_measure(STAFF, score, None, 0, 0, draw_flags=True)

    assert GlyphId.FLAG_UP_8 not in [g.glyph_id for g in _glyphs(plain.primitives)]
    assert GlyphAt(513, 1125, GlyphId.FLAG_UP_8) in flagged.primitives


def test_flag_hangs_from_a_down_stem() -> None:
    score = _score([Note.pitched(Duration(1, 16), D5)])
    layout = layout_measure(STAFF, score, None, 0, 0, draw_flags=True)
    assert GlyphAt(250, 1875, GlyphId.FLAG_DOWN_16) in layout.primitives


def test_quarter_gets_no_flag() -> None:
    score = _score([Note.pitched(Duration(1, 4), MIDDLE_C)])
    layout = layout_measure(STAFF, score, None, 0, 0, draw_flags=True)
    assert len(_glyphs(layout.primitives)) == 1


def test_unknown_marking_kind_is_a_type_error() -> None:
    with pytest.raises(TypeError):
        layout_measure(STAFF, _MixedSource(), None, 0, 0)


def test_zero_duration_marking_is_rejected() -> None:
    with pytest.raises(ValueError):
        layout_measure(STAFF, _score([Note.rest(Duration(0))]), None, 0, 0)


def test_measures_do_not_share_state() -> None:
    score = _score([Note.pitched(Duration(1, 4), MIDDLE_C)], [Note.rest(Duration(1, 2))])
    first = layout_measure(STAFF, score, None, 0, 0)
    second = layout_measure(STAFF, score, None, 0, 1)
    again = layout_measure(STAFF, score, None, 0, 0)

    assert first == again
    assert second.width == 1600
    assert _glyphs(second.primitives) == [GlyphAt(250, 1250, GlyphId.REST_2)]
