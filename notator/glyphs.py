"""SMuFL glyph identifiers and the duration-to-glyph lookup tables."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Final

from notator.duration import DurationClass


class GlyphId(IntEnum):
    """SMuFL codepoints of the glyphs the layout engine places."""

    # Noteheads
    NOTEHEAD_WHOLE = 0xE0A2
    NOTEHEAD_HALF = 0xE0A3
    NOTEHEAD_FILL = 0xE0A4
    NOTEHEAD_WHOLE_X = 0xE0A7
    NOTEHEAD_HALF_X = 0xE0A8
    NOTEHEAD_FILL_X = 0xE0A9
    NOTEHEAD_OUTLINE_SQUARE = 0xE0B8
    NOTEHEAD_SQUARE = 0xE0B9
    NOTEHEAD_LARGE_SQUARE = 0xE11A
    NOTEHEAD_OUTLINE_LARGE_SQUARE = 0xE11B

    # Flags
    FLAG_UP_8 = 0xE240
    FLAG_DOWN_8 = 0xE241
    FLAG_UP_16 = 0xE242
    FLAG_DOWN_16 = 0xE243
    FLAG_UP_32 = 0xE244
    FLAG_DOWN_32 = 0xE245
    FLAG_UP_64 = 0xE246
    FLAG_DOWN_64 = 0xE247
    FLAG_UP_128 = 0xE248
    FLAG_DOWN_128 = 0xE249

    # Rests
    REST_1 = 0xE4E3
    REST_2 = 0xE4E4
    REST_4 = 0xE4E5
    REST_8 = 0xE4E6
    REST_16 = 0xE4E7
    REST_32 = 0xE4E8
    REST_64 = 0xE4E9
    REST_128 = 0xE4EA

    # Clefs
    CLEF_G = 0xE050
    CLEF_C = 0xE05C
    CLEF_F = 0xE062

    # Time signature digits
    TIME_SIG_0 = 0xE080
    TIME_SIG_1 = 0xE081
    TIME_SIG_2 = 0xE082
    TIME_SIG_3 = 0xE083
    TIME_SIG_4 = 0xE084
    TIME_SIG_5 = 0xE085
    TIME_SIG_6 = 0xE086
    TIME_SIG_7 = 0xE087
    TIME_SIG_8 = 0xE088
    TIME_SIG_9 = 0xE089

    @property
    def ref(self) -> str:
        """Lower-case hex codepoint, used as the glyph's id in SVG output."""
        return f"{self.value:x}"


class NoteheadStyle(Enum):
    """Visual family of noteheads."""

    NORMAL = "normal"
    X = "x"
    SQUARE = "square"
    LARGE_SQUARE = "large-square"


# (whole, half, filled) per notehead family
_NOTEHEADS: Final[dict[NoteheadStyle, tuple[GlyphId, GlyphId, GlyphId]]] = {
    NoteheadStyle.NORMAL: (GlyphId.NOTEHEAD_WHOLE, GlyphId.NOTEHEAD_HALF, GlyphId.NOTEHEAD_FILL),
    NoteheadStyle.X: (GlyphId.NOTEHEAD_WHOLE_X, GlyphId.NOTEHEAD_HALF_X, GlyphId.NOTEHEAD_FILL_X),
    NoteheadStyle.SQUARE: (
        GlyphId.NOTEHEAD_OUTLINE_SQUARE,
        GlyphId.NOTEHEAD_OUTLINE_SQUARE,
        GlyphId.NOTEHEAD_SQUARE,
    ),
    NoteheadStyle.LARGE_SQUARE: (
        GlyphId.NOTEHEAD_OUTLINE_LARGE_SQUARE,
        GlyphId.NOTEHEAD_OUTLINE_LARGE_SQUARE,
        GlyphId.NOTEHEAD_LARGE_SQUARE,
    ),
}

_RESTS: Final[dict[DurationClass, GlyphId]] = {
    DurationClass.WHOLE: GlyphId.REST_1,
    DurationClass.HALF: GlyphId.REST_2,
    DurationClass.QUARTER: GlyphId.REST_4,
    DurationClass.EIGHTH: GlyphId.REST_8,
    DurationClass.SIXTEENTH: GlyphId.REST_16,
    DurationClass.THIRTY_SECOND: GlyphId.REST_32,
    DurationClass.SIXTY_FOURTH: GlyphId.REST_64,
    DurationClass.HUNDRED_TWENTY_EIGHTH: GlyphId.REST_128,
}

# (stem up, stem down)
_FLAGS: Final[dict[DurationClass, tuple[GlyphId, GlyphId]]] = {
    DurationClass.EIGHTH: (GlyphId.FLAG_UP_8, GlyphId.FLAG_DOWN_8),
    DurationClass.SIXTEENTH: (GlyphId.FLAG_UP_16, GlyphId.FLAG_DOWN_16),
    DurationClass.THIRTY_SECOND: (GlyphId.FLAG_UP_32, GlyphId.FLAG_DOWN_32),
    DurationClass.SIXTY_FOURTH: (GlyphId.FLAG_UP_64, GlyphId.FLAG_DOWN_64),
    DurationClass.HUNDRED_TWENTY_EIGHTH: (GlyphId.FLAG_UP_128, GlyphId.FLAG_DOWN_128),
}

_TIME_SIG_DIGITS: Final[tuple[GlyphId, ...]] = (
    GlyphId.TIME_SIG_0,
    GlyphId.TIME_SIG_1,
    GlyphId.TIME_SIG_2,
    GlyphId.TIME_SIG_3,
    GlyphId.TIME_SIG_4,
    GlyphId.TIME_SIG_5,
    GlyphId.TIME_SIG_6,
    GlyphId.TIME_SIG_7,
    GlyphId.TIME_SIG_8,
    GlyphId.TIME_SIG_9,
)


def _duration_class(value: int) -> DurationClass:
    try:
        return DurationClass(value)
    except ValueError:
        raise ValueError(f"{value} is not a notatable duration class.") from None


def notehead_for(
    duration_class: DurationClass | int,
    style: NoteheadStyle = NoteheadStyle.NORMAL,
) -> GlyphId:
    """
    Return the notehead glyph for a duration class.

    Whole and half notes get their hollow heads; a quarter and every finer
    class share the filled head.
    """
    whole, half, fill = _NOTEHEADS[style]
    cls = _duration_class(duration_class)
    if cls is DurationClass.WHOLE:
        return whole
    if cls is DurationClass.HALF:
        return half
    return fill


def rest_for(duration_class: DurationClass | int) -> GlyphId:
    """Return the rest glyph for a duration class."""
    return _RESTS[_duration_class(duration_class)]


def flag_for(duration_class: DurationClass | int, stem_up: bool) -> GlyphId | None:
    """Return the flag glyph for a stemmed note, or ``None`` for quarters and longer."""
    flags = _FLAGS.get(_duration_class(duration_class))
    if flags is None:
        return None
    up, down = flags
    return up if stem_up else down


def time_signature_digits(number: int) -> list[GlyphId]:
    """Return the digit glyphs spelling a time signature number, most significant first."""
    if number < 0:
        raise ValueError(f"Time signature numbers must not be negative, got {number}.")
    return [_TIME_SIG_DIGITS[int(digit)] for digit in str(number)]
