"""Tests for the command-line entry point."""

import json

from src.main import main


def test_cli_writes_json_and_prints_summary(two_hand_midi, tmp_path, capsys):
    out_dir = tmp_path / "out"
    assert main([str(two_hand_midi), "--output-dir", str(out_dir)]) == 0

    out = capsys.readouterr().out
    assert "Right hand : 2 notes, 1 pauses" in out
    assert "Left hand  : 1 notes, 1 pauses" in out

    payload = json.loads((out_dir / "two hands, test_notes.json").read_text(encoding="utf-8"))
    assert payload["success"] is True


def test_cli_export_midi(two_hand_midi, tmp_path):
    assert main([str(two_hand_midi), "--output-dir", str(tmp_path), "--export-midi"]) == 0
    assert (tmp_path / "two hands, test_hands.mid").exists()


def test_cli_reports_failure_for_missing_file(tmp_path):
    assert main([str(tmp_path / "missing.mid"), "--output-dir", str(tmp_path)]) == 1


def test_cli_reports_failure_for_single_track(single_track_midi, tmp_path):
    assert main([str(single_track_midi), "--output-dir", str(tmp_path)]) == 1
