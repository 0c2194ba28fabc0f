"""ScoreImporter: reads music21-supported score files into a layout Score."""

from __future__ import annotations

from fractions import Fraction
from typing import Any, Final

from notator.duration import Duration
from notator.score_models import Note, Score

#: music21 diatonic note number of middle C (C4).
MIDDLE_C_DIATONIC: Final[int] = 29

#: Quarter lengths are rounded to this resolution before becoming durations.
_MAX_DENOMINATOR: Final[int] = 1024


class ScoreImporter:
    """
    Build a ``Score`` from any file music21 can parse (MusicXML, MIDI, ABC, ...).

    Each part becomes a channel and each measure a list of ``Note`` markings.
    Only the first voice of a measure is read; chords are reduced to their
    highest pitch. Unpitched notes sit at their display position.
    """

    def load(self, path: str) -> Score:
        """
        Parse *path* and convert it.

        Raises:
            ValueError: If music21 cannot read the file.
        """
        from music21 import converter

        try:
            parsed = converter.parse(path)
        except Exception as exc:
            raise ValueError(f"Could not read score '{path}': {exc}") from exc
        return self.from_stream(parsed)

    def from_stream(self, stream: Any) -> Score:
        """Convert an already parsed music21 stream."""
        parts = list(getattr(stream, "parts", None) or []) or [stream]
        channels = [self._part_to_measures(part) for part in parts]
        return Score(
            channels=channels,
            time_signature=self._extract_time_signature(stream),
            title=self._extract_title(stream),
        )

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _part_to_measures(self, part: Any) -> list[list[Note]]:
        measures = list(part.getElementsByClass("Measure"))
        if not measures:
            measures = list(part.makeMeasures(inPlace=False).getElementsByClass("Measure"))
        return [self._measure_to_markings(measure) for measure in measures]

    def _measure_to_markings(self, measure: Any) -> list[Note]:
        voices = list(measure.voices)
        source = voices[0] if voices else measure

        markings: list[Note] = []
        kept: list[Any] = []
        for element in source.notesAndRests:
            duration = self._to_duration(element.duration.quarterLength)
            if duration.is_zero:
                # grace notes
                continue
            kept.append(element)
            if element.isRest:
                markings.append(Note.rest(duration))
                continue
            pitch = self._highest_pitch(element)
            if pitch is None:
                # nothing to place on the staff, keep the time
                markings.append(Note.rest(duration))
                continue
            markings.append(Note.pitched(duration, MIDDLE_C_DIATONIC - pitch.diatonicNoteNum))

        if (
            len(markings) == 1
            and kept[0].isRest
            and self._is_full_measure_rest(measure, kept[0])
        ):
            return []
        return markings

    def _is_full_measure_rest(self, measure: Any, rest: Any) -> bool:
        full = getattr(rest, "fullMeasure", "auto")
        if full in (True, "always"):
            return True
        if full in (False, "never"):
            return False
        bar = getattr(measure, "barDuration", None)
        return bar is not None and rest.duration.quarterLength == bar.quarterLength

    def _highest_pitch(self, element: Any) -> Any | None:
        if element.isChord:
            pitches = [self._staff_pitch(member) for member in getattr(element, "notes", ())]
            pitches = [pitch for pitch in pitches if pitch is not None]
            if not pitches:
                return None
            return max(pitches, key=lambda pitch: pitch.diatonicNoteNum)
        return self._staff_pitch(element)

    def _staff_pitch(self, element: Any) -> Any | None:
        """Sounding pitch of a note, or the display position of an unpitched one."""
        pitch = getattr(element, "pitch", None)
        if pitch is not None:
            return pitch
        display_pitch = getattr(element, "displayPitch", None)
        return display_pitch() if callable(display_pitch) else None

    def _to_duration(self, quarter_length: Any) -> Duration:
        quarters = Fraction(quarter_length).limit_denominator(_MAX_DENOMINATOR)
        return Duration.from_fraction(quarters / 4)

    def _extract_time_signature(self, stream: Any) -> tuple[int, int]:
        for ts in stream.recurse().getElementsByClass("TimeSignature"):
            numerator = getattr(ts, "numerator", None)
            denominator = getattr(ts, "denominator", None)
            if isinstance(numerator, int) and isinstance(denominator, int):
                return numerator, denominator
        return 4, 4

    def _extract_title(self, stream: Any) -> str:
        metadata = getattr(stream, "metadata", None)
        title = getattr(metadata, "title", None) if metadata is not None else None
        return title if isinstance(title, str) else ""
