"""Strength estimates shared by the history, volume and progression code."""

from typing import Optional

E10RM_REPS = 10


def epley_1rm(weight: Optional[float], reps: Optional[int], rir: Optional[int] = 0) -> float:
    """Estimate a one-rep max with the Epley formula.

    e1RM = weight * (1 + (reps + rir) / 30)

    Reps in reserve are added to the performed reps, so a set of 5 with 2 in
    the tank is treated as a 7-rep max effort.

    Args:
        weight: Load lifted
        reps: Repetitions performed
        rir: Reps in reserve (None counts as 0)

    Returns:
        Estimated 1RM, the raw weight for single-rep efforts, or 0 for
        non-positive input
    """
    if not weight or not reps or weight <= 0 or reps < 1:
        return 0
    effective_reps = reps + (rir or 0)
    if effective_reps <= 1:
        return weight
    return weight * (1 + effective_reps / 30)


def weight_for_reps(one_rep_max: Optional[float], reps: Optional[int]) -> float:
    """Invert Epley: the load that corresponds to a given rep max.

    Args:
        one_rep_max: Estimated 1RM
        reps: Target repetitions

    Returns:
        Weight for the rep target, or 0 for non-positive input
    """
    if not one_rep_max or not reps or one_rep_max <= 0 or reps <= 0:
        return 0
    return one_rep_max / (1 + reps / 30)


def estimate_10rm(one_rep_max: Optional[float]) -> float:
    """e10RM derived from an e1RM."""
    return weight_for_reps(one_rep_max, E10RM_REPS)
