"""Tests for the command-line interface."""

import json
from datetime import datetime, timezone

from click.testing import CliRunner
from training_analytics.cli import align_timezone, cli
from training_analytics.config import Config
from training_analytics.models import Session

SNAPSHOT = {
    "settings": {"progression_enabled": True, "weight_unit": "kg"},
    "library": {
        "bench": {"primary_muscles": ["pectoralsMajor"], "secondary_muscles": ["tricepsLongHead"],
                  "equipment": "barbell", "name": "Bench Press"},
    },
    "plans": [{"id": "upper", "name": "Upper", "days": [
        {"id": "d1", "exercises": [{"template_id": "bench", "target_sets": 3}]},
        {"id": "d2", "exercises": []},
    ]}],
    "sessions": [
        {"id": "s1", "name": "Upper A", "start_time": "2024-04-01T07:00:00",
         "completed_at": "2024-04-01T08:00:00",
         "exercises": [{"template_id": "bench", "sets": [
             {"status": "completed", "weight": 100, "reps": 8, "rir": 2},
             {"status": "completed", "weight": 100, "reps": 8, "rir": 2},
         ]}]},
    ],
}


def write_snapshot(tmp_path, document=SNAPSHOT):
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(document))
    return str(path)


class TestVolumeCommand:
    def test_volume_table(self, tmp_path):
        runner = CliRunner()

        result = runner.invoke(cli, ["volume", write_snapshot(tmp_path), "--as-of", "2024-04-10"])

        assert result.exit_code == 0
        assert "Volume Analysis" in result.output

    def test_unknown_plan(self, tmp_path):
        runner = CliRunner()

        result = runner.invoke(cli, ["volume", write_snapshot(tmp_path), "--plan", "legs"])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_broken_snapshot(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("[1, 2")
        runner = CliRunner()

        result = runner.invoke(cli, ["volume", str(path)])

        assert result.exit_code == 1
        assert "Could not load snapshot" in result.output


class TestProgressCommand:
    def test_next_workout(self, tmp_path):
        runner = CliRunner()

        result = runner.invoke(cli, ["progress", write_snapshot(tmp_path), "bench"])

        assert result.exit_code == 0
        assert "Next workout" in result.output
        assert "102.5 kg x 5 @ RIR 2" in result.output

    def test_disabled(self, tmp_path):
        document = dict(SNAPSHOT, settings={"progression_enabled": False})
        runner = CliRunner()

        result = runner.invoke(cli, ["progress", write_snapshot(tmp_path, document), "bench"])

        assert result.exit_code == 0
        assert "Progression suggestions are disabled" in result.output


class TestRecordsCommand:
    def test_records(self, tmp_path):
        runner = CliRunner()

        result = runner.invoke(cli, ["records", write_snapshot(tmp_path), "bench"])

        assert result.exit_code == 0
        assert "Personal Records" in result.output

    def test_no_records(self, tmp_path):
        runner = CliRunner()

        result = runner.invoke(cli, ["records", write_snapshot(tmp_path), "squat"])

        assert result.exit_code == 0
        assert "No completed sets" in result.output


class TestConfigValidation:
    def test_invalid_config_is_reported(self, tmp_path, monkeypatch):
        monkeypatch.setattr(Config, "SECONDARY_VOLUME_WEIGHT", 2.0)
        runner = CliRunner()

        result = runner.invoke(cli, ["volume", write_snapshot(tmp_path)])

        assert result.exit_code == 1
        assert "Configuration Error" in result.output


class TestMalformedSnapshot:
    def test_non_numeric_reps(self, tmp_path):
        document = dict(SNAPSHOT, sessions=[
            {"id": "s1", "start_time": "2024-04-01T07:00:00", "completed_at": "2024-04-01T08:00:00",
             "exercises": [{"template_id": "bench", "sets": [
                 {"status": "completed", "weight": "heavy", "reps": "8"},
             ]}]},
        ])
        runner = CliRunner()

        result = runner.invoke(cli, ["progress", write_snapshot(tmp_path, document), "bench"])

        assert result.exit_code == 1
        assert "Could not load snapshot" in result.output


class TestAlignTimezone:
    def test_aware_history(self):
        sessions = [Session(id="a", start_time=datetime(2024, 1, 1, tzinfo=timezone.utc),
                            completed_at=datetime(2024, 1, 1, 1, tzinfo=timezone.utc))]

        aligned = align_timezone(datetime(2024, 1, 5), sessions)

        assert aligned.tzinfo == timezone.utc

    def test_naive_history(self):
        sessions = [Session(id="a", start_time=datetime(2024, 1, 1), completed_at=datetime(2024, 1, 1, 1))]

        aligned = align_timezone(datetime(2024, 1, 5, tzinfo=timezone.utc), sessions)

        assert aligned.tzinfo is None
        assert aligned == datetime(2024, 1, 5)
