"""Tests for performance history, progress and personal records."""

from datetime import datetime, timedelta

import pandas as pd
import pytest
from training_analytics.analysis.history import (
    completed_sessions,
    exercise_progress,
    find_last_performance,
    last_performance_bests,
    personal_records,
    progress_frame,
    recent_completed_sessions,
)
from training_analytics.models import ExerciseInstance, Session, SetStatus, WorkoutSet

START = datetime(2024, 3, 4, 7, 30)


def make_set(weight, reps, rir=0, status=SetStatus.COMPLETED, order=0):
    return WorkoutSet(order=order, status=status, weight=weight, reps=reps, rir=rir)


def make_session(session_id, days, exercises, completed=True, name=""):
    """Session `days` after START; exercises is a list of (template_id, sets)."""
    start = START + timedelta(days=days)
    return Session(
        id=session_id,
        name=name,
        start_time=start,
        completed_at=start + timedelta(hours=1) if completed else None,
        exercises=[ExerciseInstance(template_id=t, sets=sets) for t, sets in exercises],
    )


class TestFindLastPerformance:
    """Test the last-performance resolver."""

    def setup_method(self):
        self.sessions = [
            make_session("monday", 0, [("squat", [make_set(100, 5)])]),
            make_session("wednesday", 2, [("squat", [make_set(102.5, 5)])]),
            make_session("friday", 4, [("squat", [make_set(105, 5)])]),
            make_session("open", 6, [("squat", [make_set(110, 5)])], completed=False),
        ]

    def test_newest_completed_session_wins(self):
        performance = find_last_performance(self.sessions, "squat")

        assert performance.sets[0].weight == 105

    def test_input_order_does_not_matter(self):
        performance = find_last_performance(list(reversed(self.sessions)), "squat")

        assert performance.sets[0].weight == 105

    def test_excluded_session(self):
        performance = find_last_performance(self.sessions, "squat", exclude_session_id="friday")

        assert performance.sets[0].weight == 102.5

    def test_before_is_strict(self):
        cutoff = self.sessions[2].completed_at

        performance = find_last_performance(self.sessions, "squat", before=cutoff)

        assert performance.sets[0].weight == 102.5

    def test_instance_needs_a_completed_set(self):
        sessions = self.sessions + [
            make_session("saturday", 5, [("squat", [make_set(120, 5, status=SetStatus.SKIPPED)])]),
        ]

        performance = find_last_performance(sessions, "squat")

        assert performance.sets[0].weight == 105

    def test_not_found(self):
        assert find_last_performance(self.sessions, "deadlift") is None
        assert find_last_performance([], "squat") is None
        assert find_last_performance(self.sessions, "") is None

    def test_first_matching_instance_in_session(self):
        sessions = [make_session("double", 0, [
            ("squat", [make_set(80, 8)]),
            ("squat", [make_set(60, 10)]),
        ])]

        assert find_last_performance(sessions, "squat").sets[0].weight == 80


class TestSessionWindows:
    def test_completed_sessions_sorted(self):
        sessions = [
            make_session("b", 2, []),
            make_session("a", 0, []),
            make_session("open", 1, [], completed=False),
        ]

        assert [s.id for s in completed_sessions(sessions)] == ["a", "b"]
        assert [s.id for s in completed_sessions(sessions, newest_first=True)] == ["b", "a"]

    def test_recent_window(self):
        as_of = START + timedelta(days=30, hours=1)
        sessions = [make_session(str(d), d, []) for d in (0, 2, 10, 30, 31)]

        recent = recent_completed_sessions(sessions, as_of, 28)

        assert [s.id for s in recent] == ["10", "30"]


class TestLastPerformanceBests:
    def test_bests(self):
        performance = ExerciseInstance(template_id="bench", sets=[
            make_set(90, 8),
            make_set(100, 5),
            make_set(100, 3, status=SetStatus.SKIPPED),
        ])

        bests = last_performance_bests(performance)

        assert bests.best_1rm == pytest.approx(116.67, abs=0.01)
        assert bests.best_10rm == pytest.approx(87.5, abs=0.01)

    def test_rir_counts_toward_estimate(self):
        performance = ExerciseInstance(template_id="bench", sets=[make_set(100, 3, rir=2)])

        assert last_performance_bests(performance).best_1rm == pytest.approx(116.67, abs=0.01)

    def test_empty(self):
        assert last_performance_bests(None).best_1rm == 0
        empty = ExerciseInstance(template_id="bench", sets=[make_set(0, 10)])
        bests = last_performance_bests(empty)
        assert bests.best_1rm == 0
        assert bests.best_10rm == 0


class TestExerciseProgress:
    """Test per-session best-set history."""

    def setup_method(self):
        self.sessions = [
            make_session("s2", 7, [("bench", [make_set(100, 6), make_set(105, 3)])]),
            make_session("s1", 0, [("bench", [make_set(100, 5), make_set(90, 8)])]),
            make_session("s3", 14, [("row", [make_set(70, 10)])]),
            make_session("s4", 21, [("bench", [make_set(100, 4, status=SetStatus.SKIPPED)])]),
        ]

    def test_chronological_best_sets(self):
        progress = exercise_progress(self.sessions, "bench")

        assert [p.session_id for p in progress] == ["s1", "s2"]
        assert progress[0].weight == 100
        assert progress[0].reps == 5
        assert progress[0].e1rm == pytest.approx(116.7)
        assert progress[0].e10rm == pytest.approx(87.5)
        assert progress[1].e1rm == pytest.approx(120.0)

    def test_progress_frame(self):
        df = progress_frame(self.sessions, "bench")

        assert list(df.columns) == ["session_id", "weight", "reps", "rir", "e1rm", "e10rm", "best_e1rm_to_date"]
        assert df.index.name == "completed_at"
        assert len(df) == 2
        assert df["best_e1rm_to_date"].iloc[-1] == pytest.approx(120.0)

    def test_progress_frame_running_best(self):
        sessions = self.sessions + [make_session("s5", 28, [("bench", [make_set(90, 5)])])]

        df = progress_frame(sessions, "bench")

        assert df["e1rm"].iloc[-1] == pytest.approx(105.0)
        assert df["best_e1rm_to_date"].iloc[-1] == pytest.approx(120.0)

    def test_empty_progress_frame(self):
        df = progress_frame(self.sessions, "deadlift")

        assert df.empty
        assert isinstance(df.index, pd.DatetimeIndex)


class TestPersonalRecords:
    """Test PR detection across sessions."""

    def setup_method(self):
        self.first = make_set(100, 5)
        self.volume = make_set(80, 8)
        self.strength = make_set(100, 6)
        self.sessions = [
            make_session("s3", 14, [("bench", [self.strength, make_set(90, 6, order=1)])], name="Push C"),
            make_session("s1", 0, [("bench", [self.first])], name="Push A"),
            make_session("s2", 7, [("bench", [self.volume])], name="Push B"),
            make_session("open", 21, [("bench", [make_set(150, 5)])], completed=False),
        ]

    def test_newest_first(self):
        history = personal_records(self.sessions, "bench")

        assert [h.session_id for h in history] == ["s3", "s2", "s1"]
        assert history[0].session_name == "Push C"

    def test_first_session_sets_every_record(self):
        first = personal_records(self.sessions, "bench")[-1]

        assert first.total_prs == 3
        record = first.sets[0]
        assert record.set is self.first
        assert record.is_new_e1rm_pr and record.is_new_e10rm_pr and record.is_new_volume_pr

    def test_volume_only_record(self):
        """Test 80 x 8 beats 100 x 5 on volume but not on e1RM."""
        second = personal_records(self.sessions, "bench")[1]

        assert second.total_prs == 1
        assert second.sets[0].is_new_volume_pr
        assert not second.sets[0].is_new_e1rm_pr

    def test_strength_record_flags_best_set_only(self):
        third = personal_records(self.sessions, "bench")[0]

        assert third.total_prs == 2
        best, other = third.sets
        assert best.set is self.strength
        assert best.is_new_e1rm_pr and best.is_new_e10rm_pr
        assert not best.is_new_volume_pr
        assert not (other.is_new_e1rm_pr or other.is_new_e10rm_pr or other.is_new_volume_pr)

    def test_no_history(self):
        assert personal_records(self.sessions, "deadlift") == []
