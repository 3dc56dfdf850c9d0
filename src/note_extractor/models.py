"""Models — immutable value types shared by the extraction pipeline.

Types:
    TrackEvent     – one decoded event with an absolute tick
    TempoMapEntry  – a tempo change (tick → µs per quarter note)
    PendingNote    – a sounding note awaiting its note-off
    Note           – a closed note or a synthesized pause
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


# ── Event kinds (named after the mido message types) ──────────
NOTE_ON: str = "note_on"
NOTE_OFF: str = "note_off"
CONTROL_CHANGE: str = "control_change"
TEMPO_META: str = "set_tempo"
OTHER: str = "other"

# ── Pause sentinel ────────────────────────────────────────────
PAUSE_PITCH: int = -1

# 500 000 µs per quarter note = 120 BPM
DEFAULT_TEMPO: int = 500_000


class InvalidInputError(ValueError):
    """Raised when a decoded sequence cannot be extracted (e.g. < 2 tracks)."""


@dataclass(frozen=True)
class TrackEvent:
    """A decoded track event positioned at an absolute tick.

    Only the fields relevant to ``kind`` are populated:
        - note_on / note_off : ``pitch``, ``velocity``
        - control_change     : ``controller``, ``value``
        - set_tempo          : ``tempo`` (µs per quarter note)
    """

    tick: int
    kind: str
    pitch: int | None = None
    velocity: int | None = None
    controller: int | None = None
    value: int | None = None
    tempo: int | None = None


@dataclass(frozen=True)
class TempoMapEntry:
    tick: int
    tempo: int  # microseconds per quarter note


@dataclass(frozen=True)
class PendingNote:
    start_time: int
    velocity: int
    pedal: bool


@dataclass(frozen=True)
class Note:
    """A closed note on a hand timeline, or a pause when ``pitch == -1``.

    Times are integer milliseconds from the start of the sequence.
    """

    pitch: int
    start_time: int
    duration: int
    velocity: int
    pedal: bool = False

    @property
    def end_time(self) -> int:
        return self.start_time + self.duration

    @property
    def is_pause(self) -> bool:
        return self.pitch == PAUSE_PITCH

    def to_dict(self) -> dict[str, Any]:
        """Serialise with the field names used by the upload response."""
        return {
            "pitch": self.pitch,
            "startTime": self.start_time,
            "duration": self.duration,
            "velocity": self.velocity,
            "pedal": self.pedal,
        }
