"""Tests for the tempo map builder and the tick → millisecond converter."""

import pytest

from midi_events import note_on, other, tempo
from src.note_extractor.models import TempoMapEntry
from src.note_extractor.tempo_map import build_tempo_map, tick_to_ms, time_delta

RESOLUTION = 480
DEFAULT_MAP = (TempoMapEntry(0, 500_000),)
CHANGING_MAP = (
    TempoMapEntry(0, 500_000),
    TempoMapEntry(480, 250_000),
    TempoMapEntry(960, 1_000_000),
)


# ── build_tempo_map ───────────────────────────────────────────


def test_no_tracks_yields_default_entry():
    assert build_tempo_map([]) == (TempoMapEntry(0, 500_000),)


def test_no_tempo_events_yields_default_entry():
    tracks = [[note_on(0, 60), other(10)], []]
    assert build_tempo_map(tracks) == (TempoMapEntry(0, 500_000),)


def test_custom_default_tempo():
    assert build_tempo_map([[]], default_tempo=600_000) == (TempoMapEntry(0, 600_000),)


def test_tempo_events_collected_from_every_track():
    tracks = [[note_on(0, 60)], [], [tempo(0, 400_000), tempo(960, 800_000)]]
    assert build_tempo_map(tracks) == (
        TempoMapEntry(0, 400_000),
        TempoMapEntry(960, 800_000),
    )


def test_encounter_order_is_kept_without_sorting():
    tracks = [[tempo(960, 300_000)], [tempo(0, 600_000)]]
    assert [e.tick for e in build_tempo_map(tracks)] == [960, 0]


# ── tick_to_ms ────────────────────────────────────────────────


def test_quarter_note_at_120_bpm_is_500_ms():
    assert tick_to_ms(480, RESOLUTION, DEFAULT_MAP) == 500


def test_tick_to_ms_across_tempo_changes():
    # 480 ticks at 500 000 + 480 at 250 000 + 480 at 1 000 000
    assert tick_to_ms(960, RESOLUTION, CHANGING_MAP) == 750
    assert tick_to_ms(1440, RESOLUTION, CHANGING_MAP) == 1750


def test_first_entry_tempo_applies_from_tick_zero():
    tempo_map = (TempoMapEntry(480, 1_000_000),)
    assert tick_to_ms(480, RESOLUTION, tempo_map) == 1000


def test_tick_to_ms_truncates():
    # 1 tick = 1.0416 ms at 120 BPM / 480 PPQ
    assert tick_to_ms(1, RESOLUTION, DEFAULT_MAP) == 1
    assert tick_to_ms(47, RESOLUTION, DEFAULT_MAP) == 48


# ── time_delta ────────────────────────────────────────────────


def test_half_quarter_is_250_ms():
    assert time_delta(0, 240, RESOLUTION, DEFAULT_MAP) == 250


@pytest.mark.parametrize("tick", [0, 1, 240, 480, 700, 960, 5000])
def test_delta_between_equal_ticks_is_zero(tick):
    assert time_delta(tick, tick, RESOLUTION, CHANGING_MAP) == 0


def test_delta_spans_tempo_changes():
    assert time_delta(480, 960, RESOLUTION, CHANGING_MAP) == 250
    assert time_delta(0, 1440, RESOLUTION, CHANGING_MAP) == 1750


def test_delta_after_last_change_uses_latest_tempo():
    assert time_delta(1440, 1920, RESOLUTION, CHANGING_MAP) == 1000


def test_delta_is_monotonic_in_end_tick():
    for start in (0, 100, 480, 1000):
        previous = 0
        for end in range(start, 3000, 7):
            delta = time_delta(start, end, RESOLUTION, CHANGING_MAP)
            assert delta >= previous
            previous = delta


def test_backwards_delta_is_clamped_to_zero():
    assert time_delta(480, 240, RESOLUTION, DEFAULT_MAP) == 0


def test_consecutive_deltas_sum_to_absolute_time():
    ticks = [0, 100, 240, 481, 700, 960, 1111, 2000]
    total = sum(
        time_delta(a, b, RESOLUTION, CHANGING_MAP) for a, b in zip(ticks, ticks[1:])
    )
    assert total == tick_to_ms(2000, RESOLUTION, CHANGING_MAP)
