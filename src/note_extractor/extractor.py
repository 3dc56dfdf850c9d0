"""Extractor — turn a decoded sequence into right- and left-hand timelines.

Track 0 is the right hand and track 1 the left hand, unconditionally.
Tempo events are read from every track; the resulting map is shared,
read-only, by both hands.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..config import ExtractionConfig
from .models import InvalidInputError, Note, TrackEvent
from .pauses import add_pauses
from .tempo_map import build_tempo_map
from .track_processor import process_track

logger = logging.getLogger(__name__)


RIGHT_HAND_TRACK: int = 0
LEFT_HAND_TRACK: int = 1


def extract_notes(
    resolution: int,
    tracks: Sequence[Sequence[TrackEvent]],
    config: ExtractionConfig | None = None,
) -> tuple[list[Note], list[Note]]:
    """Extract both hand timelines, pauses included.

    Args:
        resolution: Ticks per quarter note for the whole sequence.
        tracks: Decoded tracks with absolute ticks. Never mutated.
        config: Extraction settings; defaults to :class:`ExtractionConfig`.

    Returns:
        ``(right_hand_notes, left_hand_notes)``.

    Raises:
        InvalidInputError: If fewer than two tracks are supplied or the
            resolution is not positive.
    """
    if len(tracks) < 2:
        raise InvalidInputError("MIDI file must contain at least two tracks")
    if resolution <= 0:
        raise InvalidInputError(f"Resolution must be positive, got {resolution}")

    cfg = config or ExtractionConfig()
    tempo_map = build_tempo_map(tracks, default_tempo=cfg.default_tempo)

    hands: list[list[Note]] = []
    for index in (RIGHT_HAND_TRACK, LEFT_HAND_TRACK):
        notes = process_track(
            tracks[index],
            resolution,
            tempo_map,
            sustain_controller=cfg.sustain_controller,
            pedal_threshold=cfg.pedal_threshold,
        )
        hands.append(add_pauses(notes))

    right, left = hands
    logger.info(
        "Extracted %d right-hand and %d left-hand entries (%d tempo change(s))",
        len(right), len(left), len(tempo_map),
    )
    return right, left
