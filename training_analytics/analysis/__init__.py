"""Analysis module for training volume, history and progression."""

from .strength import epley_1rm, weight_for_reps, estimate_10rm
from .history import find_last_performance, last_performance_bests, exercise_progress, personal_records
from .volume import analyze_plan_volume, MuscleGroupAnalysis, VolumeHeuristics
from .progression import analyze_exercise, generate_progression, Progression, ProgressionOutcome
from .carryover import prefill_sets

__all__ = [
    "epley_1rm",
    "weight_for_reps",
    "estimate_10rm",
    "find_last_performance",
    "last_performance_bests",
    "exercise_progress",
    "personal_records",
    "analyze_plan_volume",
    "MuscleGroupAnalysis",
    "VolumeHeuristics",
    "analyze_exercise",
    "generate_progression",
    "Progression",
    "ProgressionOutcome",
    "prefill_sets",
]
