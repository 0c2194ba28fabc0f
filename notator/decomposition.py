"""Decomposition of arbitrary note durations into single-glyph notation symbols."""

from __future__ import annotations

from dataclasses import dataclass

from notator.duration import UNITS_PER_WHOLE, Duration, DurationClass

# Largest class first, so the greedy pass emits symbols in reading order.
_CLASSES_BY_SIZE: tuple[DurationClass, ...] = tuple(DurationClass)


@dataclass(frozen=True)
class NotationSymbol:
    """
    One renderable note or rest symbol.

    Attributes:
        duration_class:  The note value the symbol's glyph shows.
        offset:          Start of the symbol, as a fraction of the bar width,
                         relative to the start of the marking it belongs to.
        visual_distance: Staff steps from the reference pitch, ``None`` for rests.
    """

    duration_class: DurationClass
    offset: Duration
    visual_distance: int | None = None

    @property
    def is_pitched(self) -> bool:
        return self.visual_distance is not None

    @property
    def has_stem(self) -> bool:
        """Pitched symbols shorter than a whole note carry a stem."""
        return self.is_pitched and self.duration_class is not DurationClass.WHOLE

    @property
    def duration(self) -> Duration:
        return self.duration_class.duration


def decompose_units(units: int) -> list[DurationClass]:
    """
    Split a length in 128ths into duration classes, largest first.

    Each class is a power of two, so the greedy pass uses at most one symbol
    per set bit below a whole note, plus one whole per full whole note.
    """
    classes: list[DurationClass] = []
    for duration_class in _CLASSES_BY_SIZE:
        size = duration_class.units
        while units >= size:
            classes.append(duration_class)
            units -= size
    return classes


def decompose(duration: Duration, visual_distance: int | None = None) -> list[NotationSymbol]:
    """
    Decompose one marking's duration into notation symbols.

    A dotted quarter (3/8) becomes a quarter followed by an eighth. Lengths
    finer than a 128th note are dropped.

    Args:
        duration:        Length of the marking as a fraction of a whole note.
        visual_distance: Pitch position for notes, ``None`` for rests.

    Raises:
        ValueError: If *duration* is zero.
    """
    if duration.is_zero:
        raise ValueError("Cannot notate a zero-length marking.")

    symbols: list[NotationSymbol] = []
    elapsed = 0
    for duration_class in decompose_units(duration.to_units()):
        symbols.append(
            NotationSymbol(
                duration_class=duration_class,
                offset=Duration(elapsed, UNITS_PER_WHOLE),
                visual_distance=visual_distance,
            )
        )
        elapsed += duration_class.units
    return symbols
