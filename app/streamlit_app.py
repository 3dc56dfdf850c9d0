"""Note Extractor — Streamlit upload UI.

Minimal interactive application:
    1. Upload a MIDI file (.mid / .midi)
    2. Extract the right-hand (track 0) and left-hand (track 1) timelines
    3. View per-hand counts and note tables
    4. Download notes.json and/or the rendered two-hand MIDI

Constraints:
    - No plotting libraries
    - No audio playback
"""

from __future__ import annotations

import logging
import sys
import tempfile
from pathlib import Path

import pandas as pd
import streamlit as st

# Ensure the project root is importable
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from src.config import configure_logging  # noqa: E402
from src.note_extractor.pipeline import (  # noqa: E402
    build_error_response,
    extract_file,
    notes_to_json_bytes,
)

configure_logging()
logger = logging.getLogger(__name__)

# ── Page config ───────────────────────────────────────────────
st.set_page_config(
    page_title="Note Extractor — Hand Timelines",
    page_icon="🎹",
    layout="wide",
)

st.title("🎹 Note Extractor — Hand Timelines")
st.markdown(
    "Upload a two-track piano MIDI file. Track 1 is read as the right hand, "
    "track 2 as the left hand; silences appear as pauses (pitch −1)."
)
st.divider()

# ── File uploader ─────────────────────────────────────────────
uploaded_file = st.file_uploader(
    "Choose a MIDI file",
    type=["mid", "midi"],
    help="The file must contain at least two tracks.",
)


def _notes_frame(notes) -> pd.DataFrame:
    df = pd.DataFrame([n.to_dict() for n in notes], columns=["pitch", "startTime", "duration", "velocity", "pedal"])
    df.columns = ["Pitch", "Start (ms)", "Duration (ms)", "Velocity", "Pedal"]
    return df


if uploaded_file is not None:
    st.success(f"Loaded: **{uploaded_file.name}**")

    # Write the uploaded bytes to a temp file so mido can open it
    with tempfile.NamedTemporaryFile(suffix=".mid", delete=False) as tmp:
        tmp.write(uploaded_file.getvalue())
        tmp_path = Path(tmp.name)

    col_run, col_midi = st.columns([1, 1])
    export_midi: bool = col_midi.checkbox("Also export rendered MIDI", value=False)
    run_clicked: bool = col_run.button("▶  Extract Notes", type="primary")

    if run_clicked:
        with st.spinner("Extracting notes …"):
            with tempfile.TemporaryDirectory() as out_dir:
                try:
                    right, left = extract_file(
                        midi_path=tmp_path,
                        output_dir=out_dir,
                        export_midi=export_midi,
                    )
                except (OSError, ValueError) as exc:
                    logger.error("Extraction failed for %s: %s", uploaded_file.name, exc)
                    st.error(build_error_response()["message"])
                    st.caption(str(exc))
                    st.stop()

                # ── Summary stats ─────────────────────────────
                st.subheader("Summary")
                c1, c2, c3, c4 = st.columns(4)
                c1.metric("Right Hand Notes", sum(1 for n in right if not n.is_pause))
                c2.metric("Right Hand Pauses", sum(1 for n in right if n.is_pause))
                c3.metric("Left Hand Notes", sum(1 for n in left if not n.is_pause))
                c4.metric("Left Hand Pauses", sum(1 for n in left if n.is_pause))

                # ── Note tables ───────────────────────────────
                tab_right, tab_left = st.tabs(["Right Hand", "Left Hand"])
                tab_right.dataframe(_notes_frame(right), use_container_width=True, height=400)
                tab_left.dataframe(_notes_frame(left), use_container_width=True, height=400)

                # ── Downloads ─────────────────────────────────
                st.subheader("Downloads")
                stem = uploaded_file.name.rsplit(".", 1)[0]
                st.download_button(
                    label="⬇  Download notes.json",
                    data=notes_to_json_bytes(right, left),
                    file_name=f"{stem}_notes.json",
                    mime="application/json",
                )

                if export_midi:
                    midi_out = Path(out_dir) / f"{tmp_path.stem}_hands.mid"
                    if midi_out.exists():
                        st.download_button(
                            label="⬇  Download rendered MIDI",
                            data=midi_out.read_bytes(),
                            file_name=f"{stem}_hands.mid",
                            mime="audio/midi",
                        )

    # The temp file is kept because Streamlit may re-run the script.
