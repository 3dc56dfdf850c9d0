"""Track Processor — walk one track and reconstruct its closed notes.

Walk state lives in a :class:`TrackState` record created per call and
advanced one event at a time by :func:`apply_event`. Nothing is shared
between tracks except the read-only tempo map, so two tracks can be
processed independently (or in parallel).

Policies:
    - A note-on with velocity > 0 opens a pending note at the current time,
      capturing the sustain-pedal state at that instant.
    - A note-off, or a note-on with velocity 0, closes the pending note for
      that pitch. Notes whose duration is not strictly positive are dropped.
    - A second note-on for a pitch that is already sounding replaces the
      earlier onset (see :class:`PendingNoteStore`).
    - Notes still pending at the end of the track are dropped, not closed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from .models import (
    CONTROL_CHANGE,
    NOTE_OFF,
    NOTE_ON,
    Note,
    PendingNote,
    TempoMapEntry,
    TrackEvent,
)
from .tempo_map import time_delta

logger = logging.getLogger(__name__)


SUSTAIN_CONTROLLER: int = 64
PEDAL_THRESHOLD: int = 64


class PendingNoteStore:
    """Per-pitch store holding at most one sounding note per pitch.

    Overwrite policy is *last onset wins*: opening a pitch that is already
    pending discards the earlier onset. There is no per-pitch stacking.
    """

    OVERWRITE_POLICY: str = "last_onset_wins"

    def __init__(self) -> None:
        self._by_pitch: dict[int, PendingNote] = {}

    def open(self, pitch: int, pending: PendingNote) -> PendingNote | None:
        """Start ``pitch``; returns the discarded earlier onset, if any."""
        replaced = self._by_pitch.get(pitch)
        self._by_pitch[pitch] = pending
        return replaced

    def close(self, pitch: int) -> PendingNote | None:
        """Stop ``pitch``; returns its pending record or ``None``."""
        return self._by_pitch.pop(pitch, None)

    def __len__(self) -> int:
        return len(self._by_pitch)

    def __contains__(self, pitch: object) -> bool:
        return pitch in self._by_pitch


@dataclass
class TrackState:
    """Mutable walk state for a single track."""

    current_time: int = 0
    last_tick: int = 0
    pedal_pressed: bool = False
    pending: PendingNoteStore = field(default_factory=PendingNoteStore)


def apply_event(
    state: TrackState,
    event: TrackEvent,
    resolution: int,
    tempo_map: Sequence[TempoMapEntry],
    sustain_controller: int = SUSTAIN_CONTROLLER,
    pedal_threshold: int = PEDAL_THRESHOLD,
) -> Note | None:
    """Advance ``state`` by one event.

    Every event, whatever its kind, moves the clock forward to its tick.

    Args:
        state: Walk state of the track being processed (updated in place).
        event: The next event of the track.
        resolution: Ticks per quarter note.
        tempo_map: Shared, read-only tempo map.
        sustain_controller: Controller number of the sustain pedal.
        pedal_threshold: Values at or above this mean "pedal down".

    Returns:
        The ``Note`` closed by this event, or ``None``.
    """
    state.current_time += time_delta(state.last_tick, event.tick, resolution, tempo_map)
    state.last_tick = event.tick

    if event.kind == NOTE_ON and (event.velocity or 0) > 0:
        replaced = state.pending.open(
            event.pitch,
            PendingNote(
                start_time=state.current_time,
                velocity=event.velocity,
                pedal=state.pedal_pressed,
            ),
        )
        if replaced is not None:
            logger.debug(
                "Pitch %d re-struck at %d ms; onset at %d ms discarded",
                event.pitch, state.current_time, replaced.start_time,
            )
        return None

    if event.kind in (NOTE_ON, NOTE_OFF):
        pending = state.pending.close(event.pitch)
        if pending is None:
            return None
        duration = state.current_time - pending.start_time
        if duration <= 0:
            logger.debug("Dropping zero-length note %d at %d ms", event.pitch, pending.start_time)
            return None
        return Note(
            pitch=event.pitch,
            start_time=pending.start_time,
            duration=duration,
            velocity=pending.velocity,
            pedal=pending.pedal,
        )

    if event.kind == CONTROL_CHANGE and event.controller == sustain_controller:
        state.pedal_pressed = (event.value or 0) >= pedal_threshold

    return None


def process_track(
    track: Iterable[TrackEvent],
    resolution: int,
    tempo_map: Sequence[TempoMapEntry],
    sustain_controller: int = SUSTAIN_CONTROLLER,
    pedal_threshold: int = PEDAL_THRESHOLD,
) -> list[Note]:
    """Extract the closed notes of one track, in the order they close.

    Args:
        track: Events with absolute, non-decreasing ticks. Not modified.
        resolution: Ticks per quarter note.
        tempo_map: Shared, read-only tempo map.
        sustain_controller: Controller number of the sustain pedal.
        pedal_threshold: Values at or above this mean "pedal down".

    Returns:
        List of ``Note`` (no pauses).
    """
    state = TrackState()
    notes: list[Note] = []

    for event in track:
        note = apply_event(
            state, event, resolution, tempo_map,
            sustain_controller=sustain_controller,
            pedal_threshold=pedal_threshold,
        )
        if note is not None:
            notes.append(note)

    if len(state.pending):
        logger.debug("%d note(s) still sounding at end of track dropped", len(state.pending))

    return notes
