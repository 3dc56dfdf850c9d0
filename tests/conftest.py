"""Shared fixtures: small MIDI files written with mido."""

import mido
import pytest


@pytest.fixture
def two_hand_midi(tmp_path):
    """Type-1 file: track 0 right hand (with tempo + pedal), track 1 left hand."""
    mid = mido.MidiFile(type=1, ticks_per_beat=480)

    right = mido.MidiTrack()
    right.append(mido.MetaMessage("set_tempo", tempo=500_000, time=0))
    right.append(mido.Message("control_change", control=64, value=127, time=0))
    right.append(mido.Message("note_on", note=60, velocity=80, time=0))
    right.append(mido.Message("note_off", note=60, velocity=0, time=240))
    right.append(mido.Message("control_change", control=64, value=0, time=0))
    right.append(mido.Message("note_on", note=64, velocity=90, time=240))
    right.append(mido.Message("note_off", note=64, velocity=0, time=480))
    mid.tracks.append(right)

    left = mido.MidiTrack()
    left.append(mido.Message("program_change", program=0, time=0))
    left.append(mido.Message("note_on", note=48, velocity=70, time=480))
    left.append(mido.Message("note_on", note=48, velocity=0, time=480))
    mid.tracks.append(left)

    path = tmp_path / "two hands, test.mid"
    mid.save(str(path))
    return path


@pytest.fixture
def single_track_midi(tmp_path):
    mid = mido.MidiFile(type=0, ticks_per_beat=480)
    track = mido.MidiTrack()
    track.append(mido.Message("note_on", note=60, velocity=80, time=0))
    track.append(mido.Message("note_off", note=60, velocity=0, time=480))
    mid.tracks.append(track)

    path = tmp_path / "single.mid"
    mid.save(str(path))
    return path
