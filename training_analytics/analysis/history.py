"""Performance history over completed sessions.

Finds the last time an exercise was performed, derives per-session strength
estimates and flags personal records. Sessions without a completion time are
in progress and never count as history.
"""

import logging
from dataclasses import dataclass, asdict
from datetime import datetime, timedelta
from typing import Iterable, List, Optional

import pandas as pd

from ..models import ExerciseInstance, Session, WorkoutSet
from ..units import round_half_up
from .strength import epley_1rm, estimate_10rm

logger = logging.getLogger(__name__)


@dataclass
class LastPerformanceBests:
    """Best strength estimates from a single exercise instance."""
    best_1rm: float = 0.0
    best_10rm: float = 0.0


@dataclass
class ProgressPoint:
    """The best set of one session, in kg."""
    session_id: str
    completed_at: datetime
    weight: float
    reps: int
    rir: Optional[int]
    e1rm: float
    e10rm: float


@dataclass
class RecordSet:
    """A strength set annotated with the records it set."""
    set: WorkoutSet
    is_new_e1rm_pr: bool = False
    is_new_e10rm_pr: bool = False
    is_new_volume_pr: bool = False


@dataclass
class SessionRecords:
    """Personal records achieved for one exercise in one session."""
    session_id: str
    session_name: str
    completed_at: datetime
    total_prs: int
    sets: List[RecordSet]


def completed_sessions(sessions: Iterable[Session], newest_first: bool = False) -> List[Session]:
    """Completed sessions ordered by completion time."""
    done = [s for s in sessions if s is not None and s.is_completed]
    return sorted(done, key=lambda s: s.completed_at, reverse=newest_first)


def recent_completed_sessions(sessions: Iterable[Session],
                              as_of: datetime,
                              window_days: int) -> List[Session]:
    """Completed sessions in the window (as_of - window_days, as_of]."""
    window_start = as_of - timedelta(days=window_days)
    return [
        s for s in completed_sessions(sessions)
        if window_start < s.completed_at <= as_of
    ]


def find_last_performance(sessions: Iterable[Session],
                          template_id: str,
                          exclude_session_id: Optional[str] = None,
                          before: Optional[datetime] = None) -> Optional[ExerciseInstance]:
    """Most recent prior performance of an exercise.

    Args:
        sessions: Full session history, in any order
        template_id: Exercise template to look for
        exclude_session_id: Session currently open, never its own history
        before: Only sessions completed strictly before this instant count

    Returns:
        The first matching exercise instance with at least one completed set,
        scanning from the newest completed session, or None
    """
    if not sessions or not template_id:
        return None

    candidates = [
        s for s in completed_sessions(sessions, newest_first=True)
        if s.id != exclude_session_id and (before is None or s.completed_at < before)
    ]

    for session in candidates:
        for exercise in session.exercises:
            if exercise is None:
                continue
            if exercise.template_id == template_id and exercise.has_completed_set():
                return exercise

    logger.debug(f"No prior performance found for template {template_id}")
    return None


def last_performance_bests(performance: Optional[ExerciseInstance]) -> LastPerformanceBests:
    """Best e1RM and the derived e10RM of a performance."""
    if performance is None:
        return LastPerformanceBests()

    best_1rm = 0.0
    for workout_set in performance.strength_sets():
        best_1rm = max(best_1rm, epley_1rm(workout_set.weight, workout_set.reps, workout_set.rir))

    best_10rm = estimate_10rm(best_1rm) if best_1rm > 0 else 0.0
    return LastPerformanceBests(best_1rm=best_1rm, best_10rm=best_10rm)


def _best_e1rm_set(strength_sets: List[WorkoutSet]):
    """Set with the highest e1RM (first one wins ties) and that e1RM."""
    best_set = None
    best_e1rm = 0.0
    for workout_set in strength_sets:
        e1rm = epley_1rm(workout_set.weight, workout_set.reps, workout_set.rir)
        if e1rm > best_e1rm:
            best_e1rm = e1rm
            best_set = workout_set
    return best_set, best_e1rm


def exercise_progress(sessions: Iterable[Session], template_id: str) -> List[ProgressPoint]:
    """Chronological best-set history of one exercise.

    Each completed session contributes its highest-e1RM set. Estimates are
    rounded to one decimal for charting.
    """
    progress = []
    for session in completed_sessions(sessions):
        instance = next(
            (ex for ex in session.exercises if ex is not None and ex.template_id == template_id and ex.sets),
            None,
        )
        if instance is None:
            continue

        best_set, best_e1rm = _best_e1rm_set(instance.strength_sets())
        if best_set is None or best_e1rm <= 0:
            continue

        progress.append(ProgressPoint(
            session_id=session.id,
            completed_at=session.completed_at,
            weight=best_set.weight,
            reps=best_set.reps,
            rir=best_set.rir,
            e1rm=round_half_up(best_e1rm, 1),
            e10rm=round_half_up(estimate_10rm(best_e1rm), 1),
        ))

    return progress


def progress_frame(sessions: Iterable[Session], template_id: str) -> pd.DataFrame:
    """Progress history as a DataFrame indexed by completion time.

    Adds ``best_e1rm_to_date``, the running maximum of the session e1RM.
    """
    columns = ["session_id", "weight", "reps", "rir", "e1rm", "e10rm", "best_e1rm_to_date"]
    points = exercise_progress(sessions, template_id)
    if not points:
        return pd.DataFrame(columns=columns, index=pd.DatetimeIndex([], name="completed_at"))

    df = pd.DataFrame([asdict(p) for p in points])
    df["rir"] = df["rir"].astype(float)
    df["best_e1rm_to_date"] = df["e1rm"].cummax()
    return df.set_index("completed_at")[columns]


def personal_records(sessions: Iterable[Session], template_id: str) -> List[SessionRecords]:
    """Flag e1RM, e10RM and single-set volume records session by session.

    Sessions are walked oldest first so every session is compared with the
    bests of the sessions before it. The result is newest first.
    """
    history = []
    best_e1rm_so_far = 0.0
    best_volume_so_far = 0.0

    for session in completed_sessions(sessions):
        instance = next(
            (ex for ex in session.exercises if ex is not None and ex.template_id == template_id),
            None,
        )
        if instance is None:
            continue

        strength_sets = instance.strength_sets()
        if not strength_sets:
            continue

        best_e1rm_set, session_best_e1rm = _best_e1rm_set(strength_sets)
        best_volume_set = None
        session_best_volume = 0.0
        for workout_set in strength_sets:
            volume = workout_set.weight * workout_set.reps
            if volume > session_best_volume:
                session_best_volume = volume
                best_volume_set = workout_set

        is_new_e1rm = session_best_e1rm > best_e1rm_so_far
        is_new_e10rm = estimate_10rm(session_best_e1rm) > estimate_10rm(best_e1rm_so_far)
        is_new_volume = session_best_volume > best_volume_so_far

        record_sets = [
            RecordSet(
                set=workout_set,
                is_new_e1rm_pr=is_new_e1rm and workout_set is best_e1rm_set,
                is_new_e10rm_pr=is_new_e10rm and workout_set is best_e1rm_set,
                is_new_volume_pr=is_new_volume and workout_set is best_volume_set,
            )
            for workout_set in strength_sets
        ]

        history.append(SessionRecords(
            session_id=session.id,
            session_name=session.name,
            completed_at=session.completed_at,
            total_prs=sum([is_new_e1rm, is_new_e10rm, is_new_volume]),
            sets=record_sets,
        ))

        if is_new_e1rm:
            best_e1rm_so_far = session_best_e1rm
        if is_new_volume:
            best_volume_so_far = session_best_volume

    history.reverse()
    return history
