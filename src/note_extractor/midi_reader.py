"""MIDI Reader — decode a Standard MIDI File into tracks of ``TrackEvent``.

Responsibilities:
    - Load a MIDI file via *mido* (container parsing stays in mido).
    - Accumulate each track's delta times into absolute ticks.
    - Map messages onto event kinds: note_on, note_off, control_change,
      set_tempo; everything else becomes ``other``.

Tracks are kept separate and in file order; no merging happens here.
"""

from __future__ import annotations

from pathlib import Path

import mido

from .models import (
    CONTROL_CHANGE,
    NOTE_OFF,
    NOTE_ON,
    OTHER,
    TEMPO_META,
    TrackEvent,
)


def load_midi(midi_path: str | Path) -> mido.MidiFile:
    """Load a MIDI file and return a ``mido.MidiFile``.

    Args:
        midi_path: Path to the ``.mid`` / ``.midi`` file.

    Raises:
        FileNotFoundError: If *midi_path* does not exist.
        ValueError: If the file cannot be parsed as MIDI.
    """
    path = Path(midi_path)
    if not path.exists():
        raise FileNotFoundError(f"MIDI file not found: {path}")

    try:
        midi_file = mido.MidiFile(str(path))
    except Exception as exc:
        raise ValueError(f"Failed to parse MIDI file '{path.name}': {exc}") from exc

    return midi_file


def to_event(message: mido.Message | mido.MetaMessage, tick: int) -> TrackEvent:
    """Convert one mido message positioned at ``tick``."""
    if message.type == NOTE_ON:
        return TrackEvent(tick=tick, kind=NOTE_ON, pitch=message.note, velocity=message.velocity)
    if message.type == NOTE_OFF:
        return TrackEvent(tick=tick, kind=NOTE_OFF, pitch=message.note, velocity=message.velocity)
    if message.type == CONTROL_CHANGE:
        return TrackEvent(
            tick=tick, kind=CONTROL_CHANGE, controller=message.control, value=message.value
        )
    if message.type == TEMPO_META:
        return TrackEvent(tick=tick, kind=TEMPO_META, tempo=message.tempo)
    return TrackEvent(tick=tick, kind=OTHER)


def extract_tracks(midi_file: mido.MidiFile) -> list[list[TrackEvent]]:
    """Convert every track to a list of events with absolute ticks."""
    tracks: list[list[TrackEvent]] = []
    for track in midi_file.tracks:
        tick = 0
        events: list[TrackEvent] = []
        for message in track:
            tick += message.time
            events.append(to_event(message, tick))
        tracks.append(events)
    return tracks


def read_sequence(midi_path: str | Path) -> tuple[int, list[list[TrackEvent]]]:
    """Convenience wrapper: load MIDI → ``(resolution, tracks)``."""
    midi_file = load_midi(midi_path)
    return midi_file.ticks_per_beat, extract_tracks(midi_file)
