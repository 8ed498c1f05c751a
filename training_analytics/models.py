"""Snapshot data model for plans, sessions and settings.

All weights are stored in kilograms. The analysis code only reads these
objects; nothing in this package mutates them after construction.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, List, Optional

from .config import config
from .units import WeightUnit


class SetStatus(Enum):
    """Lifecycle of a single set."""
    TODO = "todo"
    COMPLETED = "completed"
    SKIPPED = "skipped"


class Side(Enum):
    """Which side a unilateral set was performed on."""
    LEFT = "left"
    RIGHT = "right"
    NONE = "none"


class SideType(Enum):
    """How a plan entry distributes sets across sides."""
    BILATERAL = "bilateral"
    UNILATERAL_LEFT = "unilateral_left"
    UNILATERAL_RIGHT = "unilateral_right"
    UNILATERAL_ALTERNATING = "unilateral_alternating"


@dataclass
class WorkoutSet:
    """One set inside an exercise instance."""
    order: int
    status: SetStatus = SetStatus.TODO
    reps: Optional[int] = None
    weight: Optional[float] = None  # kg
    duration: Optional[float] = None  # seconds
    distance: Optional[float] = None  # meters
    rir: Optional[int] = None
    side: Side = Side.NONE
    id: Optional[str] = None

    @property
    def is_completed(self) -> bool:
        return self.status == SetStatus.COMPLETED

    @property
    def is_strength_set(self) -> bool:
        """Completed with a positive load and rep count."""
        return (
            self.is_completed
            and self.weight is not None and self.weight > 0
            and self.reps is not None and self.reps > 0
        )


@dataclass
class ExerciseInstance:
    """An exercise as performed in a session."""
    template_id: Optional[str]
    name: str = ""
    sets: List[WorkoutSet] = field(default_factory=list)
    rest_seconds: Optional[int] = None
    weight_unit: Optional[WeightUnit] = None

    def strength_sets(self) -> List[WorkoutSet]:
        """Sets that take part in strength and volume math."""
        return [s for s in self.sets if s.is_strength_set]

    def has_completed_set(self) -> bool:
        return any(s.is_completed for s in self.sets)


@dataclass
class Session:
    """A workout occurrence. Sessions without completed_at are still in progress."""
    id: str
    start_time: datetime
    completed_at: Optional[datetime] = None
    name: str = ""
    plan_id: Optional[str] = None
    day_id: Optional[str] = None
    exercises: List[ExerciseInstance] = field(default_factory=list)

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None


@dataclass
class PlanExercise:
    """A planned exercise with its target set/rep prescription."""
    template_id: Optional[str]
    target_sets: Optional[int] = None
    target_reps: Optional[int] = None
    name: str = ""
    side_type: SideType = SideType.BILATERAL
    rest_seconds: Optional[int] = None
    weight_unit: Optional[WeightUnit] = None


@dataclass
class PlanDay:
    id: str
    name: str = ""
    exercises: List[PlanExercise] = field(default_factory=list)


@dataclass
class Plan:
    """A training cycle. Its length in days defines the week normalization."""
    id: str
    name: str = ""
    days: List[PlanDay] = field(default_factory=list)

    @property
    def cycle_length(self) -> int:
        return len(self.days)

    @property
    def week_multiplier(self) -> float:
        """Factor that scales per-cycle totals to a 7-day week."""
        return 7 / self.cycle_length if self.cycle_length > 0 else 1


@dataclass
class ExerciseDetails:
    """Exercise library metadata needed by the analyzers."""
    primary_muscles: List[str] = field(default_factory=list)
    secondary_muscles: List[str] = field(default_factory=list)
    equipment: Optional[str] = None
    name: str = ""


# Resolves a template id to its library entry, or None for unknown templates
ExerciseLookup = Callable[[str], Optional[ExerciseDetails]]


@dataclass
class ProgressionSettings:
    """Rep range and effort target for double progression."""
    rep_range_min: int
    rep_range_max: int
    rir: int

    def __post_init__(self):
        if self.rep_range_min < 1:
            raise ValueError(f"rep_range_min must be at least 1, got {self.rep_range_min}")
        if self.rep_range_min >= self.rep_range_max:
            raise ValueError(
                f"rep_range_min ({self.rep_range_min}) must be below rep_range_max ({self.rep_range_max})"
            )
        if self.rir < 0:
            raise ValueError(f"rir cannot be negative, got {self.rir}")


def _default_progression() -> ProgressionSettings:
    return ProgressionSettings(
        rep_range_min=config.DEFAULT_REP_RANGE_MIN,
        rep_range_max=config.DEFAULT_REP_RANGE_MAX,
        rir=config.DEFAULT_TARGET_RIR,
    )


@dataclass
class Settings:
    """User settings consumed by the progression engine and set pre-filling."""
    progression_enabled: bool = False
    default_progression: ProgressionSettings = field(default_factory=_default_progression)
    progression_overrides: Dict[str, ProgressionSettings] = field(default_factory=dict)
    weight_unit: WeightUnit = field(default_factory=lambda: WeightUnit.parse(config.DEFAULT_WEIGHT_UNIT))
    default_rir: Optional[int] = None

    def progression_for(self, template_id: str) -> ProgressionSettings:
        """Per-exercise override when present, otherwise the global default."""
        return self.progression_overrides.get(template_id, self.default_progression)
