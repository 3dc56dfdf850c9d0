"""Pause Synthesizer — make silences explicit on a note timeline."""

from __future__ import annotations

from collections.abc import Sequence

from .models import PAUSE_PITCH, Note


def make_pause(start_time: int, duration: int) -> Note:
    return Note(
        pitch=PAUSE_PITCH,
        start_time=start_time,
        duration=duration,
        velocity=0,
        pedal=False,
    )


def add_pauses(notes: Sequence[Note]) -> list[Note]:
    """Insert pause notes before the first note and into every gap.

    Input order is trusted (ascending start time); nothing is re-sorted.
    Overlapping or touching neighbours get no pause between them.

    Args:
        notes: Closed notes of one track.

    Returns:
        A new list; empty when ``notes`` is empty.
    """
    if not notes:
        return []

    timeline: list[Note] = []
    if notes[0].start_time > 0:
        timeline.append(make_pause(0, notes[0].start_time))

    for current, following in zip(notes, notes[1:]):
        timeline.append(current)
        gap = following.start_time - current.end_time
        if gap > 0:
            timeline.append(make_pause(current.end_time, gap))

    timeline.append(notes[-1])
    return timeline


def strip_pauses(notes: Sequence[Note]) -> list[Note]:
    """Return only the real notes of a timeline."""
    return [note for note in notes if not note.is_pause]
