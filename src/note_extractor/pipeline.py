"""Pipeline — run the extractor on a MIDI file and export the results.

Responsibilities:
    1. Read the MIDI file into ``(resolution, tracks)``.
    2. Extract the right- and left-hand timelines.
    3. Save ``<stem>_notes.json`` (default: ``data/notes/``).
    4. Optionally render both hands to ``<stem>_hands.mid`` (same folder).
    5. Build the JSON response payloads used by the upload UI.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pretty_midi

from ..config import load_config
from .extractor import extract_notes
from .midi_reader import read_sequence
from .models import Note
from .track_processor import SUSTAIN_CONTROLLER

logger = logging.getLogger(__name__)


ERROR_MESSAGE: str = "Error processing MIDI file"


def extract_file(
    midi_path: str | Path,
    output_dir: str | Path | None = None,
    config_path: str | Path | None = None,
    export_midi: bool = False,
) -> tuple[list[Note], list[Note]]:
    """Run the full extraction pipeline on a MIDI file.

    Args:
        midi_path: Path to the input ``.mid`` / ``.midi`` file.
        output_dir: Directory for output files.
            Defaults to ``data/notes/`` relative to the project root.
        config_path: Path to the extraction YAML.
            Defaults to ``configs/extraction.yaml``.
        export_midi: If ``True``, also render both hands to a MIDI file.

    Returns:
        ``(right_hand_notes, left_hand_notes)``, pauses included.
    """
    midi_path = Path(midi_path)

    if output_dir is None:
        output_dir = Path(__file__).resolve().parents[2] / "data" / "notes"
    else:
        output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    # ── Pipeline ──────────────────────────────────────────────
    config = load_config(config_path)
    resolution, tracks = read_sequence(midi_path)
    right, left = extract_notes(resolution, tracks, config=config)

    # ── Save notes.json ───────────────────────────────────────
    stem = midi_path.stem
    json_path = output_dir / f"{stem}_notes.json"
    json_path.write_bytes(notes_to_json_bytes(right, left))
    logger.info("Wrote %s", json_path)

    if export_midi:
        midi_out = _export_hands_midi(right, left, output_dir, stem)
        logger.info("Wrote %s", midi_out)

    return right, left


def build_response(right: Sequence[Note], left: Sequence[Note]) -> dict[str, Any]:
    """Success payload: both timelines as lists of note dicts."""
    return {
        "success": True,
        "rightHandNotes": [note.to_dict() for note in right],
        "leftHandNotes": [note.to_dict() for note in left],
    }


def build_error_response(message: str = ERROR_MESSAGE) -> dict[str, Any]:
    return {"success": False, "message": message}


def notes_to_json_bytes(right: Sequence[Note], left: Sequence[Note]) -> bytes:
    """Serialise the success payload to UTF-8 JSON bytes (for download buttons)."""
    return json.dumps(build_response(right, left), indent=2, ensure_ascii=False).encode("utf-8")


def render_hands(right: Sequence[Note], left: Sequence[Note]) -> pretty_midi.PrettyMIDI:
    """Render both timelines as a two-instrument piano MIDI.

    Pauses are skipped. A sustain-pedal control change is written at the
    onset of every note whose captured pedal state differs from the
    previous note's.
    """
    midi_data = pretty_midi.PrettyMIDI()
    for name, notes in (("Right Hand", right), ("Left Hand", left)):
        instrument = pretty_midi.Instrument(program=0, name=name)
        pedal_down = False
        for note in notes:
            if note.is_pause:
                continue
            start = note.start_time / 1000.0
            if note.pedal != pedal_down:
                pedal_down = note.pedal
                instrument.control_changes.append(
                    pretty_midi.ControlChange(
                        number=SUSTAIN_CONTROLLER, value=127 if pedal_down else 0, time=start
                    )
                )
            instrument.notes.append(
                pretty_midi.Note(
                    velocity=note.velocity,
                    pitch=note.pitch,
                    start=start,
                    end=note.end_time / 1000.0,
                )
            )
        midi_data.instruments.append(instrument)
    return midi_data


def _export_hands_midi(
    right: Sequence[Note],
    left: Sequence[Note],
    output_dir: Path,
    stem: str,
) -> Path:
    midi_out_path = output_dir / f"{stem}_hands.mid"
    render_hands(right, left).write(str(midi_out_path))
    return midi_out_path
