"""Tempo Map — build the tick → tempo table and convert ticks to milliseconds.

Responsibilities:
    - Collect every tempo-meta event across **all** tracks, in encounter
      order (no sorting, no merging).
    - Convert ticks to absolute milliseconds against that piecewise table.
    - Compute the elapsed milliseconds between two ticks.

All arithmetic is integer and truncating, one tempo segment at a time.
The map is short, so every conversion simply re-walks it from the start.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from .models import DEFAULT_TEMPO, TEMPO_META, TempoMapEntry, TrackEvent

logger = logging.getLogger(__name__)


def build_tempo_map(
    tracks: Iterable[Iterable[TrackEvent]],
    default_tempo: int = DEFAULT_TEMPO,
) -> tuple[TempoMapEntry, ...]:
    """Scan every track for tempo changes.

    Args:
        tracks: Decoded tracks, each an ordered iterable of events.
        default_tempo: µs per quarter note used when no tempo event exists.

    Returns:
        A tuple of ``TempoMapEntry`` in encounter order. Never empty: a
        sequence without tempo events yields ``(TempoMapEntry(0, default_tempo),)``.
    """
    entries: list[TempoMapEntry] = []
    for track in tracks:
        for event in track:
            if event.kind == TEMPO_META and event.tempo is not None:
                entries.append(TempoMapEntry(tick=event.tick, tempo=event.tempo))

    if not entries:
        entries.append(TempoMapEntry(tick=0, tempo=default_tempo))

    logger.debug("Tempo map has %d entr%s", len(entries), "y" if len(entries) == 1 else "ies")
    return tuple(entries)


def _segment_ms(ticks: int, tempo: int, resolution: int) -> int:
    # Truncates toward zero so an out-of-order map cannot round asymmetrically.
    ms = abs(ticks) * tempo // (resolution * 1000)
    return ms if ticks >= 0 else -ms


def tick_to_ms(
    tick: int,
    resolution: int,
    tempo_map: Sequence[TempoMapEntry],
) -> int:
    """Absolute time of ``tick`` in milliseconds, measured from tick 0.

    The tempo of the first map entry is in force from tick 0 until the
    next entry; every entry below ``tick`` closes one segment.

    Args:
        tick: Absolute tick position.
        resolution: Ticks per quarter note (positive).
        tempo_map: Output of :func:`build_tempo_map`.

    Returns:
        Milliseconds (int).
    """
    elapsed = 0
    cursor = 0
    tempo = tempo_map[0].tempo

    for entry in tempo_map:
        if entry.tick >= tick:
            break
        elapsed += _segment_ms(entry.tick - cursor, tempo, resolution)
        cursor = entry.tick
        tempo = entry.tempo

    elapsed += _segment_ms(tick - cursor, tempo, resolution)
    return elapsed


def time_delta(
    last_tick: int,
    current_tick: int,
    resolution: int,
    tempo_map: Sequence[TempoMapEntry],
) -> int:
    """Elapsed milliseconds between two ticks, honouring tempo changes between them.

    The result is floored at zero, so inconsistent input
    (``current_tick < last_tick``) never moves the clock backwards.

    Args:
        last_tick: Tick of the previous event.
        current_tick: Tick of the current event.
        resolution: Ticks per quarter note (positive).
        tempo_map: Output of :func:`build_tempo_map`.

    Returns:
        Non-negative milliseconds (int).
    """
    delta = tick_to_ms(current_tick, resolution, tempo_map) - tick_to_ms(
        last_tick, resolution, tempo_map
    )
    return max(delta, 0)
