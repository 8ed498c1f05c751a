"""
Plan Volume Analysis

Turns a training plan into weekly set volume per muscle group, checks how
that volume is spread across the cycle and whether each group gets enough
rest between sessions, and picks one suggestion per group.

Volume counting:
- Primary muscle: every target set counts as one set
- Secondary muscle: every target set counts as a fraction (0.5 by default)
- An exercise contributes to a muscle group at most once
- Per-cycle totals are scaled to a 7-day week by 7 / cycle length

Frequency is measured from real completed sessions, not from the plan.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Set, Tuple

from ..config import config
from ..i18n import Translator, translate
from ..models import ExerciseLookup, Plan, Session
from ..units import round_half_up
from .history import recent_completed_sessions
from .muscles import EXCLUDED_GROUPS, all_groups, general_group, group_display_name, reported_groups

logger = logging.getLogger(__name__)


class SuggestionLevel(Enum):
    GOOD = "good"
    INFO = "info"
    WARNING = "warning"


class DistributionRating(Enum):
    """How concentrated a group's volume is in its biggest session."""
    GOOD = "good"
    CONCENTRATED = "concentrated"
    INEFFICIENT = "inefficient"


class RecoveryRating(Enum):
    GOOD = "good"
    AT_RISK = "at_risk"


@dataclass(frozen=True)
class VolumeHeuristics:
    """Tunable thresholds for the volume analysis.

    These are product calibrations, not derived values.
    """
    secondary_weight: float = 0.5
    # (min_sets, required_days), largest threshold first
    recovery_days_table: Tuple[Tuple[int, int], ...] = ((8, 4), (6, 3), (4, 2), (1, 1))
    frequency_window_days: int = 28
    trained_min_sets: float = 1.5
    session_overload_sets: int = 10
    low_frequency_per_week: float = 1.5
    low_weekly_sets: int = 8
    high_weekly_sets: int = 20
    concentrated_session_sets: int = 6
    inefficient_session_sets: int = 8

    @classmethod
    def from_config(cls) -> "VolumeHeuristics":
        return cls(
            secondary_weight=config.SECONDARY_VOLUME_WEIGHT,
            recovery_days_table=tuple(config.get_recovery_days_table()),
            frequency_window_days=config.FREQUENCY_WINDOW_DAYS,
            trained_min_sets=config.TRAINED_GROUP_MIN_SETS,
            session_overload_sets=config.SESSION_OVERLOAD_SETS,
            low_frequency_per_week=config.LOW_FREQUENCY_PER_WEEK,
            low_weekly_sets=config.LOW_WEEKLY_SETS,
            high_weekly_sets=config.HIGH_WEEKLY_SETS,
            concentrated_session_sets=config.CONCENTRATED_SESSION_SETS,
            inefficient_session_sets=config.INEFFICIENT_SESSION_SETS,
        )

    @property
    def frequency_window_weeks(self) -> float:
        return self.frequency_window_days / 7

    def required_recovery_days(self, sets: float) -> int:
        """Rest days needed after a session with this many sets for one group."""
        for min_sets, days in self.recovery_days_table:
            if sets >= min_sets:
                return days
        return 0


DEFAULT_HEURISTICS = VolumeHeuristics.from_config()


@dataclass
class DayVolume:
    """Sets one group receives on one plan day, per cycle."""
    primary: float = 0.0
    secondary_weighted: float = 0.0

    @property
    def total(self) -> float:
        return self.primary + self.secondary_weighted


@dataclass
class GroupVolume:
    """Per-cycle, unrounded volume accumulated for one muscle group."""
    primary_sets: float = 0.0
    secondary_sets_unweighted: float = 0.0
    secondary_sets_weighted: float = 0.0
    days: Dict[int, DayVolume] = field(default_factory=dict)
    specific_primary: Set[str] = field(default_factory=set)
    specific_secondary: Set[str] = field(default_factory=set)

    @property
    def total_sets(self) -> float:
        return self.primary_sets + self.secondary_sets_weighted


@dataclass
class SessionVolume:
    day_index: int
    total_sets: int


@dataclass
class RecoveryViolation:
    """First pair of sessions in the cycle with too little rest between them."""
    day_index: int
    sets: int
    required_days: int
    actual_days: int


@dataclass
class MuscleGroupAnalysis:
    """Reported analysis for one general muscle group. Set counts are weekly."""
    total_weekly_sets: int = 0
    primary_sets: int = 0
    secondary_sets_unweighted: int = 0
    secondary_sets_weighted: int = 0
    frequency: float = 0.0
    max_sets_in_one_session: int = 0
    sessions_in_cycle: List[SessionVolume] = field(default_factory=list)
    distribution_rating: DistributionRating = DistributionRating.GOOD
    recovery_rating: RecoveryRating = RecoveryRating.GOOD
    suggestion: str = ""
    suggestion_level: SuggestionLevel = SuggestionLevel.INFO
    specific_primary: List[str] = field(default_factory=list)
    specific_secondary: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'total_weekly_sets': self.total_weekly_sets,
            'primary_sets': self.primary_sets,
            'secondary_sets_unweighted': self.secondary_sets_unweighted,
            'secondary_sets_weighted': self.secondary_sets_weighted,
            'frequency': self.frequency,
            'max_sets_in_one_session': self.max_sets_in_one_session,
            'sessions_in_cycle': [
                {'day_index': s.day_index, 'total_sets': s.total_sets}
                for s in self.sessions_in_cycle
            ],
            'distribution_rating': self.distribution_rating.value,
            'recovery_rating': self.recovery_rating.value,
            'suggestion': self.suggestion,
            'suggestion_level': self.suggestion_level.value,
            'specific_primary': list(self.specific_primary),
            'specific_secondary': list(self.specific_secondary),
        }


PlanAnalysis = Dict[str, MuscleGroupAnalysis]


def accumulate_plan_volume(plan: Plan,
                           lookup: ExerciseLookup,
                           heuristics: VolumeHeuristics = DEFAULT_HEURISTICS) -> Dict[str, GroupVolume]:
    """Sum per-cycle set volume per general muscle group.

    Exercises without a template, without sets, or unknown to the library
    are skipped. Within one exercise a group is counted once: primary keys
    are processed before secondary ones, and later hits on an already counted
    group only extend the specific-muscle lists.

    Args:
        plan: Plan to scan
        lookup: Exercise library lookup
        heuristics: Secondary weighting and other thresholds

    Returns:
        Mapping of general group to its unrounded per-cycle volume
    """
    groups: Dict[str, GroupVolume] = {}

    for day_index, day in enumerate(plan.days):
        if day is None:
            continue

        for exercise in day.exercises:
            if exercise is None or not exercise.template_id:
                continue
            sets = exercise.target_sets or 0
            if sets <= 0:
                continue
            details = lookup(exercise.template_id)
            if details is None:
                logger.debug(f"Skipping unresolved template {exercise.template_id} on day {day_index}")
                continue

            counted_groups: Set[str] = set()
            hits = [(key, True) for key in details.primary_muscles]
            hits += [(key, False) for key in details.secondary_muscles]

            for muscle_key, is_primary in hits:
                group = general_group(muscle_key)
                if group is None or group in EXCLUDED_GROUPS:
                    continue

                volume = groups.setdefault(group, GroupVolume())
                day_volume = volume.days.setdefault(day_index, DayVolume())

                if is_primary:
                    volume.specific_primary.add(muscle_key)
                else:
                    volume.specific_secondary.add(muscle_key)

                if group in counted_groups:
                    continue
                counted_groups.add(group)

                if is_primary:
                    volume.primary_sets += sets
                    day_volume.primary += sets
                else:
                    weighted = sets * heuristics.secondary_weight
                    volume.secondary_sets_unweighted += sets
                    volume.secondary_sets_weighted += weighted
                    day_volume.secondary_weighted += weighted

    return groups


def measure_frequency(group: str,
                      sessions: Iterable[Session],
                      lookup: ExerciseLookup,
                      heuristics: VolumeHeuristics = DEFAULT_HEURISTICS) -> float:
    """Average sessions per week that hit a group as a primary mover.

    Args:
        group: General muscle group
        sessions: Completed sessions inside the frequency window
        lookup: Exercise library lookup
        heuristics: Provides the window length in weeks

    Returns:
        Sessions per week, rounded to one decimal
    """
    counting_sessions = set()
    for session in sessions:
        for exercise in session.exercises:
            if exercise is None or not exercise.template_id:
                continue
            details = lookup(exercise.template_id)
            if details is None:
                continue
            if any(general_group(key) == group for key in details.primary_muscles):
                counting_sessions.add(session.id)
                break

    return round_half_up(len(counting_sessions) / heuristics.frequency_window_weeks, 1)


def check_recovery(sessions_in_cycle: List[SessionVolume],
                   cycle_length: int,
                   heuristics: VolumeHeuristics = DEFAULT_HEURISTICS) -> Optional[RecoveryViolation]:
    """Find the first session followed too soon by the next one.

    The sessions form a ring: the gap after the last training day wraps
    around the cycle to the first one. Groups trained on a single day are
    not checked.

    Args:
        sessions_in_cycle: Per-day set totals sorted by day index
        cycle_length: Days in the plan cycle
        heuristics: Recovery lookup table

    Returns:
        The first violation found, or None
    """
    count = len(sessions_in_cycle)
    if count <= 1:
        return None

    for i in range(count):
        current = sessions_in_cycle[i]
        following = sessions_in_cycle[(i + 1) % count]
        if i == count - 1:
            days_between = (cycle_length - current.day_index) + following.day_index
        else:
            days_between = following.day_index - current.day_index

        required = heuristics.required_recovery_days(current.total_sets)
        if days_between < required:
            return RecoveryViolation(
                day_index=current.day_index,
                sets=current.total_sets,
                required_days=required,
                actual_days=days_between,
            )

    return None


def rate_distribution(max_sets_in_one_session: int,
                      heuristics: VolumeHeuristics = DEFAULT_HEURISTICS) -> DistributionRating:
    if max_sets_in_one_session >= heuristics.inefficient_session_sets:
        return DistributionRating.INEFFICIENT
    if max_sets_in_one_session >= heuristics.concentrated_session_sets:
        return DistributionRating.CONCENTRATED
    return DistributionRating.GOOD


@dataclass
class GroupFacts:
    """Everything the suggestion rules look at for one group."""
    group_name: str
    total_weekly_sets: int
    primary_sets: int
    secondary_sets_weighted: int
    max_sets_in_one_session: int
    frequency: float
    recovery_violation: Optional[RecoveryViolation]
    heuristics: VolumeHeuristics


Suggestion = Tuple[str, Dict[str, Any], SuggestionLevel]
SuggestionRule = Tuple[Callable[[GroupFacts], bool], Callable[[GroupFacts], Suggestion]]

# Evaluated in order, first match wins
SUGGESTION_RULES: List[SuggestionRule] = [
    (
        lambda f: f.recovery_violation is not None,
        lambda f: ("plan_analysis.recovery_warning", {
            "sets": f.recovery_violation.sets,
            "required": f.recovery_violation.required_days,
            "actual": f.recovery_violation.actual_days,
            "group_name": f.group_name,
        }, SuggestionLevel.WARNING),
    ),
    (
        lambda f: f.max_sets_in_one_session >= f.heuristics.session_overload_sets,
        lambda f: ("plan_analysis.high_session_volume", {
            "sets": f.max_sets_in_one_session,
            "group_name": f.group_name,
        }, SuggestionLevel.WARNING),
    ),
    (
        lambda f: (f.frequency < f.heuristics.low_frequency_per_week
                   and f.total_weekly_sets > f.heuristics.low_weekly_sets),
        lambda f: ("plan_analysis.low_frequency", {
            "freq": f.frequency,
            "group_name": f.group_name,
        }, SuggestionLevel.INFO),
    ),
    (
        lambda f: f.total_weekly_sets > f.heuristics.high_weekly_sets,
        lambda f: ("plan_analysis.high_weekly_volume", {
            "sets": f.total_weekly_sets,
            "group_name": f.group_name,
        }, SuggestionLevel.INFO),
    ),
    (
        lambda f: 0 < f.total_weekly_sets < f.heuristics.low_weekly_sets,
        lambda f: ("plan_analysis.low_weekly_volume", {
            "sets": f.total_weekly_sets,
            "group_name": f.group_name,
        }, SuggestionLevel.INFO),
    ),
    (
        lambda f: True,
        lambda f: ("plan_analysis.good_volume", {"group_name": f.group_name}, SuggestionLevel.GOOD),
    ),
]


def choose_suggestion(facts: GroupFacts) -> Suggestion:
    """Run the suggestion ladder and apply the indirect-work downgrade.

    Returns:
        (message key, message params, level)
    """
    key, params, level = next(build(facts) for matches, build in SUGGESTION_RULES if matches(facts))

    # A "good" group that only gets secondary work is still worth a note
    if level == SuggestionLevel.GOOD and facts.primary_sets == 0 and facts.secondary_sets_weighted > 0:
        return "plan_analysis.indirect_only", {"group_name": facts.group_name}, SuggestionLevel.INFO

    return key, params, level


def _untrained_analysis(group: str, t: Translator) -> MuscleGroupAnalysis:
    return MuscleGroupAnalysis(
        suggestion=t("plan_analysis.not_trained", {"group_name": group_display_name(group, t)}),
        suggestion_level=SuggestionLevel.INFO,
    )


def _analyze_group(group: str,
                   volume: GroupVolume,
                   week_multiplier: float,
                   cycle_length: int,
                   frequency: float,
                   t: Translator,
                   heuristics: VolumeHeuristics) -> MuscleGroupAnalysis:
    total_weekly_sets = round_half_up(volume.total_sets * week_multiplier)
    primary_sets = round_half_up(volume.primary_sets * week_multiplier)
    secondary_weighted = round_half_up(volume.secondary_sets_weighted * week_multiplier)
    secondary_unweighted = round_half_up(volume.secondary_sets_unweighted * week_multiplier)

    sessions_in_cycle = sorted(
        (SessionVolume(day_index=day_index, total_sets=round_half_up(day.total))
         for day_index, day in volume.days.items()),
        key=lambda s: s.day_index,
    )
    max_sets = max((s.total_sets for s in sessions_in_cycle), default=0)

    violation = check_recovery(sessions_in_cycle, cycle_length, heuristics)

    facts = GroupFacts(
        group_name=group_display_name(group, t),
        total_weekly_sets=total_weekly_sets,
        primary_sets=primary_sets,
        secondary_sets_weighted=secondary_weighted,
        max_sets_in_one_session=max_sets,
        frequency=frequency,
        recovery_violation=violation,
        heuristics=heuristics,
    )
    key, params, level = choose_suggestion(facts)

    return MuscleGroupAnalysis(
        total_weekly_sets=total_weekly_sets,
        primary_sets=primary_sets,
        secondary_sets_unweighted=secondary_unweighted,
        secondary_sets_weighted=secondary_weighted,
        frequency=frequency,
        max_sets_in_one_session=max_sets,
        sessions_in_cycle=sessions_in_cycle,
        distribution_rating=rate_distribution(max_sets, heuristics),
        recovery_rating=RecoveryRating.AT_RISK if violation else RecoveryRating.GOOD,
        suggestion=t(key, params),
        suggestion_level=level,
        specific_primary=sorted(volume.specific_primary),
        specific_secondary=sorted(volume.specific_secondary - volume.specific_primary),
    )


def analyze_plan_volume(plan: Plan,
                        lookup: ExerciseLookup,
                        sessions: Iterable[Session],
                        as_of: datetime,
                        t: Translator = translate,
                        heuristics: VolumeHeuristics = DEFAULT_HEURISTICS) -> PlanAnalysis:
    """Analyze weekly volume, frequency and recovery per muscle group.

    Args:
        plan: Plan whose days form one training cycle
        lookup: Exercise library lookup returning specific muscle keys
        sessions: Session history; only sessions completed inside the
            frequency window ending at ``as_of`` are used
        as_of: End of the frequency window
        t: Translate function for suggestion text
        heuristics: Thresholds and weights

    Returns:
        Analysis for every trained group plus every reported group, in
        taxonomy order
    """
    volumes = accumulate_plan_volume(plan, lookup, heuristics)
    recent = recent_completed_sessions(sessions, as_of, heuristics.frequency_window_days)
    week_multiplier = plan.week_multiplier
    cycle_length = max(plan.cycle_length, 1)

    trained: PlanAnalysis = {}
    for group, volume in volumes.items():
        if volume.total_sets < heuristics.trained_min_sets and volume.primary_sets == 0:
            continue
        frequency = measure_frequency(group, recent, lookup, heuristics)
        trained[group] = _analyze_group(
            group, volume, week_multiplier, cycle_length, frequency, t, heuristics
        )

    always_reported = set(reported_groups())
    analysis: PlanAnalysis = {}
    for group in all_groups():
        if group in trained:
            analysis[group] = trained[group]
        elif group in always_reported:
            analysis[group] = _untrained_analysis(group, t)

    logger.debug(f"Plan {plan.id}: {len(trained)} trained groups over a {plan.cycle_length}-day cycle")
    return analysis
