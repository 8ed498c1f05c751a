"""
Progressive Overload Engine

Double progression within a rep range:
- Add reps at the same weight until every set reaches the top of the range
- Then add weight and drop back to the bottom of the range
- Hold steady when the lifter ground out the reps closer to failure than planned
- Deload when the bottom of the range was missed

The last performance is evaluated as a whole: a condition holds only if it
holds for every set. Every prescribed set of the next workout is identical.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from ..config import config
from ..i18n import Translator, translate
from ..models import Session, Settings
from ..units import WeightUnit, kg_to_display, round_half_up
from .history import find_last_performance

logger = logging.getLogger(__name__)


class ProgressionOutcome(Enum):
    """Branch of the progression ladder that produced a recommendation."""
    FIRST_TIME = "first_time"
    MASTERED_WEIGHT = "mastered_weight"
    STANDARD_PROGRESS = "standard_progress"
    HIGH_EFFORT = "high_effort"
    PLATEAU = "plateau"

    @property
    def message_key(self) -> str:
        return f"progression.{self.value}"


# (equipment keywords, kg increment, lbs increment), first match wins
WEIGHT_INCREMENTS: List[Tuple[Tuple[str, ...], float, float]] = [
    (("barbell", "smith", "trap bar", "sled"), 2.5, 5.0),
    (("dumbbell", "kettlebell"), 1.25, 2.5),
    (("machine", "cable"), 2.5, 5.0),
]
DEFAULT_INCREMENT = (1.25, 2.5)


@dataclass
class PerformedSet:
    """A completed set in display units."""
    weight: float
    reps: int
    rir: Optional[int] = None


@dataclass
class ProgressionPlan:
    """Targets the last performance is judged against."""
    rep_range_min: int
    rep_range_max: int
    rir: int
    weight_increment: float


@dataclass
class SetPrescription:
    weight: float
    reps: int
    rir: int


@dataclass
class Progression:
    """Recommendation for the next workout of one exercise."""
    outcome: ProgressionOutcome
    suggestion: str
    next_workout_plan: List[SetPrescription] = field(default_factory=list)
    plan_unit: WeightUnit = WeightUnit.KG

    def to_dict(self):
        """Convert to dictionary for serialization."""
        return {
            'outcome': self.outcome.value,
            'suggestion': self.suggestion,
            'next_workout_plan': [
                {'weight': p.weight, 'reps': p.reps, 'rir': p.rir}
                for p in self.next_workout_plan
            ],
            'plan_unit': self.plan_unit.value,
        }


def weight_increment_for(equipment: Optional[str], unit: WeightUnit) -> float:
    """Smallest sensible jump in load for a piece of equipment.

    Args:
        equipment: Free-form equipment name, matched case-insensitively
        unit: Display unit the increment is expressed in

    Returns:
        Weight increment in the display unit
    """
    equipment_type = (equipment or "").lower()
    kg_step, lbs_step = DEFAULT_INCREMENT
    for keywords, kg_increment, lbs_increment in WEIGHT_INCREMENTS:
        if any(keyword in equipment_type for keyword in keywords):
            kg_step, lbs_step = kg_increment, lbs_increment
            break
    return lbs_step if unit == WeightUnit.LBS else kg_step


@dataclass(frozen=True)
class ProgressionDefaults:
    """Fallbacks used when there is no history or no equipment."""
    seed_weight_kg: float = 60.0
    seed_weight_lbs: float = 135.0
    set_count: int = 3
    equipment: str = "barbell"

    @classmethod
    def from_config(cls) -> "ProgressionDefaults":
        return cls(
            seed_weight_kg=config.SEED_WEIGHT_KG,
            seed_weight_lbs=config.SEED_WEIGHT_LBS,
            set_count=config.DEFAULT_SET_COUNT,
            equipment=config.DEFAULT_EQUIPMENT,
        )


DEFAULT_PROGRESSION_DEFAULTS = ProgressionDefaults.from_config()


def seed_weight(unit: WeightUnit, defaults: ProgressionDefaults = DEFAULT_PROGRESSION_DEFAULTS) -> float:
    """Starting weight for an exercise with no history."""
    return defaults.seed_weight_lbs if unit == WeightUnit.LBS else defaults.seed_weight_kg


@dataclass
class PerformanceFacts:
    """Whole-performance checks the ladder branches on."""
    all_met_min_reps: bool
    all_met_max_reps: bool
    all_met_target_rir: bool
    last_weight: float
    top_reps: int

    @classmethod
    def evaluate(cls, sets: Sequence[PerformedSet], plan: ProgressionPlan) -> "PerformanceFacts":
        return cls(
            all_met_min_reps=all(s.reps >= plan.rep_range_min for s in sets),
            all_met_max_reps=all(s.reps >= plan.rep_range_max for s in sets),
            # Unrecorded RIR is assumed to match the plan
            all_met_target_rir=all(
                (s.rir if s.rir is not None else plan.rir) >= plan.rir for s in sets
            ),
            last_weight=sets[0].weight,
            top_reps=max(s.reps for s in sets),
        )


# Each builder returns the (weight, reps) to prescribe
ProgressionRule = Tuple[
    Callable[[PerformanceFacts], bool],
    ProgressionOutcome,
    Callable[[PerformanceFacts, ProgressionPlan], Tuple[float, int]],
]

# Evaluated in order, first match wins. Max reps is checked before min reps.
PROGRESSION_RULES: List[ProgressionRule] = [
    (
        lambda f: f.all_met_max_reps and f.all_met_target_rir,
        ProgressionOutcome.MASTERED_WEIGHT,
        lambda f, p: (f.last_weight + p.weight_increment, p.rep_range_min),
    ),
    (
        lambda f: f.all_met_min_reps and f.all_met_target_rir,
        ProgressionOutcome.STANDARD_PROGRESS,
        lambda f, p: (f.last_weight, min(f.top_reps + 1, p.rep_range_max)),
    ),
    (
        lambda f: f.all_met_min_reps and not f.all_met_target_rir,
        ProgressionOutcome.HIGH_EFFORT,
        lambda f, p: (f.last_weight, f.top_reps),
    ),
    (
        lambda f: True,
        ProgressionOutcome.PLATEAU,
        lambda f, p: (
            max(0, f.last_weight - p.weight_increment),
            round_half_up((p.rep_range_min + p.rep_range_max) / 2),
        ),
    ),
]


def _prescribe(outcome: ProgressionOutcome,
               weight: float,
               reps: int,
               plan: ProgressionPlan,
               set_count: int,
               unit: WeightUnit,
               t: Translator) -> Progression:
    return Progression(
        outcome=outcome,
        suggestion=t(outcome.message_key, None),
        next_workout_plan=[SetPrescription(weight=weight, reps=reps, rir=plan.rir) for _ in range(set_count)],
        plan_unit=unit,
    )


def analyze_exercise(last_sets: Optional[Sequence[PerformedSet]],
                     plan: ProgressionPlan,
                     unit: WeightUnit,
                     t: Translator = translate,
                     defaults: ProgressionDefaults = DEFAULT_PROGRESSION_DEFAULTS) -> Progression:
    """Prescribe the next workout from the last performance.

    Args:
        last_sets: Completed sets of the last performance in display units,
            or None/empty when the exercise has never been done
        plan: Rep range, RIR target and weight increment
        unit: Display unit of the weights
        t: Translate function for the suggestion text
        defaults: Seed weights and set count for a first time

    Returns:
        Progression with one identical prescription per set of the last
        performance (the configured default count for a first time)
    """
    if not last_sets:
        return _prescribe(
            ProgressionOutcome.FIRST_TIME, seed_weight(unit, defaults), plan.rep_range_min,
            plan, defaults.set_count, unit, t,
        )

    facts = PerformanceFacts.evaluate(last_sets, plan)
    outcome, build = next(
        (outcome, build) for matches, outcome, build in PROGRESSION_RULES if matches(facts)
    )
    weight, reps = build(facts, plan)
    return _prescribe(outcome, weight, reps, plan, len(last_sets), unit, t)


def generate_progression(template_id: str,
                         equipment: Optional[str],
                         sessions: Iterable[Session],
                         settings: Settings,
                         exclude_session_id: Optional[str] = None,
                         before: Optional[datetime] = None,
                         t: Translator = translate,
                         defaults: ProgressionDefaults = DEFAULT_PROGRESSION_DEFAULTS) -> Optional[Progression]:
    """Progression recommendation for one exercise.

    Args:
        template_id: Exercise template
        equipment: Equipment name from the exercise library, None when unknown
        sessions: Full session history
        settings: User settings (enable flag, rep ranges, unit)
        exclude_session_id: Session currently open, ignored as history
        before: Only sessions completed strictly before this instant count
        t: Translate function
        defaults: Fallback equipment, seed weights and set count

    Returns:
        Progression in the user's display unit, or None when progression is
        disabled
    """
    if not settings.progression_enabled:
        return None

    if equipment is None:
        equipment = defaults.equipment

    unit = settings.weight_unit
    active = settings.progression_for(template_id)
    plan = ProgressionPlan(
        rep_range_min=active.rep_range_min,
        rep_range_max=active.rep_range_max,
        rir=active.rir,
        weight_increment=weight_increment_for(equipment, unit),
    )

    last_sets = None
    performance = find_last_performance(sessions, template_id, exclude_session_id, before)
    if performance is not None:
        last_sets = [
            PerformedSet(weight=kg_to_display(s.weight, unit), reps=s.reps, rir=s.rir)
            for s in performance.strength_sets()
        ]
        logger.debug(f"Template {template_id}: {len(last_sets)} strength sets in last performance")

    return analyze_exercise(last_sets, plan, unit, t, defaults)
