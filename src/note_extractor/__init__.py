"""Note Extractor — tempo-aware hand timelines from MIDI performance events.

Sub-package containing:
    models           – Note, TrackEvent, TempoMapEntry and error types
    tempo_map        – tempo map builder and tick → millisecond conversion
    track_processor  – per-track note reconstruction with pedal capture
    pauses           – explicit silence entries between notes
    extractor        – right/left hand orchestration
    midi_reader      – MIDI file decoding via mido
    pipeline         – file-level pipeline, JSON payloads, MIDI export
"""
