"""Score document models consumed by the layout engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from notator.duration import Duration


@dataclass(frozen=True)
class Note:
    """
    A note or rest marking.

    Attributes:
        duration:        Exact length as a fraction of a whole note.
        visual_distance: Staff steps from the reference pitch (middle C),
                         negative upwards. ``None`` marks a rest.
    """

    duration: Duration
    visual_distance: int | None = None

    @property
    def is_rest(self) -> bool:
        return self.visual_distance is None

    @classmethod
    def rest(cls, duration: Duration) -> Note:
        return cls(duration=duration)

    @classmethod
    def pitched(cls, duration: Duration, visual_distance: int) -> Note:
        return cls(duration=duration, visual_distance=visual_distance)


@dataclass(frozen=True)
class Cursor:
    """Edit position: a marking index within a channel's measure."""

    channel: int = 0
    measure: int = 0
    index: int = 0


class ScoreSource(Protocol):
    """Read access to a score's markings."""

    def marking_at(self, channel: int, measure: int, index: int) -> object | None:
        """Return the marking at the position, or ``None`` past the end of the measure."""


@dataclass
class Score:
    """
    An in-memory score.

    ``channels[c][m]`` is the list of markings of measure ``m`` in channel ``c``.
    """

    channels: list[list[list[Note]]] = field(default_factory=list)
    time_signature: tuple[int, int] = (4, 4)
    title: str = ""

    def marking_at(self, channel: int, measure: int, index: int) -> Note | None:
        if index < 0 or not 0 <= channel < len(self.channels):
            return None
        measures = self.channels[channel]
        if not 0 <= measure < len(measures):
            return None
        markings = measures[measure]
        if index >= len(markings):
            return None
        return markings[index]

    def measure_count(self, channel: int) -> int:
        if not 0 <= channel < len(self.channels):
            return 0
        return len(self.channels[channel])

    @property
    def channel_count(self) -> int:
        return len(self.channels)
