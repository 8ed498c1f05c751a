"""Pre-fill the sets of a new session from the plan and the last performance."""

from typing import List, Optional

from ..models import ExerciseInstance, PlanExercise, Side, SideType, SetStatus, WorkoutSet


def side_for_set(side_type: SideType, index: int) -> Side:
    """Side of the index-th set for a plan entry's side type."""
    if side_type == SideType.UNILATERAL_LEFT:
        return Side.LEFT
    if side_type == SideType.UNILATERAL_RIGHT:
        return Side.RIGHT
    if side_type == SideType.UNILATERAL_ALTERNATING:
        return Side.LEFT if index % 2 == 0 else Side.RIGHT
    return Side.NONE


def prefill_sets(plan_exercise: PlanExercise,
                 last_performance: Optional[ExerciseInstance],
                 default_rir: Optional[int] = None) -> List[WorkoutSet]:
    """Build the todo sets for a plan entry in a new session.

    Weights carry over set by set from the last performance. When the plan
    asks for more sets than were done last time, the last set's weight is
    reused for the extra sets.

    A plan entry without a target gets one set; an explicit 0 gets none.

    Args:
        plan_exercise: Plan entry with target sets, reps and side type
        last_performance: Result of find_last_performance, if any
        default_rir: RIR pre-filled into every set

    Returns:
        New WorkoutSet objects with status todo; nothing is modified
    """
    set_count = plan_exercise.target_sets if plan_exercise.target_sets is not None else 1
    previous = [s for s in (last_performance.sets if last_performance else []) if s is not None]

    sets = []
    for i in range(set_count):
        weight = None
        if previous:
            weight = previous[i].weight if i < len(previous) else previous[-1].weight

        sets.append(WorkoutSet(
            order=i,
            status=SetStatus.TODO,
            reps=plan_exercise.target_reps,
            weight=weight,
            rir=default_rir,
            side=side_for_set(plan_exercise.side_type, i),
        ))

    return sets
