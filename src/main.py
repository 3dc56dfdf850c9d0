"""Note Extractor entry point.

Extracts right- and left-hand timelines from a MIDI file and writes them
as JSON. The Streamlit app lives in ``app/streamlit_app.py``.
"""

from __future__ import annotations

import argparse
import logging
import sys

from src.config import configure_logging
from src.note_extractor.pipeline import extract_file

logger = logging.getLogger(__name__)


def _summary(label: str, notes: list) -> str:
    pauses = sum(1 for n in notes if n.is_pause)
    return f"  {label:<11}: {len(notes) - pauses} notes, {pauses} pauses"


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, run the pipeline and print a per-hand summary."""
    ap = argparse.ArgumentParser(description="Extract hand timelines from a MIDI file.")
    ap.add_argument("midi_path", help="input .mid / .midi file")
    ap.add_argument("--output-dir", default=None, help="where to write <stem>_notes.json")
    ap.add_argument("--config", default=None, help="extraction YAML (default configs/extraction.yaml)")
    ap.add_argument("--export-midi", action="store_true", help="also write <stem>_hands.mid")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    args = ap.parse_args(argv)

    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        right, left = extract_file(
            args.midi_path,
            output_dir=args.output_dir,
            config_path=args.config,
            export_midi=args.export_midi,
        )
    except (OSError, ValueError) as exc:
        logger.error("Error processing MIDI file: %s", exc)
        return 1

    print(_summary("Right hand", right))
    print(_summary("Left hand", left))
    return 0


if __name__ == "__main__":
    sys.exit(main())
