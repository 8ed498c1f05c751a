"""Load plan/session/settings snapshots from JSON documents.

Expected layout::

    {
      "settings": {"progression_enabled": true, "weight_unit": "kg", ...},
      "library": {"<template id>": {"primary_muscles": [...], ...}},
      "plans": [{"id": "...", "days": [{"id": "...", "exercises": [...]}]}],
      "sessions": [{"id": "...", "start_time": "...", "completed_at": "...", ...}]
    }
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .models import (
    ExerciseDetails,
    ExerciseInstance,
    Plan,
    PlanDay,
    PlanExercise,
    ProgressionSettings,
    Session,
    SetStatus,
    Settings,
    Side,
    SideType,
    WorkoutSet,
)
from .units import WeightUnit

logger = logging.getLogger(__name__)


class SnapshotError(ValueError):
    """Raised when a snapshot document cannot be parsed."""


@dataclass
class Snapshot:
    """Everything the analyzers need, already loaded."""
    settings: Settings = field(default_factory=Settings)
    library: Dict[str, ExerciseDetails] = field(default_factory=dict)
    plans: List[Plan] = field(default_factory=list)
    sessions: List[Session] = field(default_factory=list)

    def lookup(self, template_id: str) -> Optional[ExerciseDetails]:
        """Exercise library lookup suitable for the analyzers."""
        return self.library.get(template_id)

    def get_plan(self, plan_id: Optional[str] = None) -> Optional[Plan]:
        """Plan by id, or the first plan when no id is given."""
        if plan_id is None:
            return self.plans[0] if self.plans else None
        return next((p for p in self.plans if p.id == plan_id), None)


def parse_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp, accepting a trailing 'Z'."""
    if value is None or value == "":
        return None
    try:
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text)
    except (AttributeError, ValueError):
        raise SnapshotError(f"Invalid timestamp '{value}'")


def _enum(enum_cls, value, default):
    if value is None:
        return default
    try:
        return enum_cls(value)
    except ValueError:
        raise SnapshotError(f"Invalid {enum_cls.__name__} value '{value}'")


def _unit(value) -> Optional[WeightUnit]:
    if value is None:
        return None
    try:
        return WeightUnit.parse(value)
    except ValueError as e:
        raise SnapshotError(str(e))


def _number(data: Dict[str, Any], key: str, cast, default=None):
    """Read an optional numeric field, converting it with `cast`."""
    value = data.get(key)
    if value is None:
        return default
    try:
        return cast(value)
    except (TypeError, ValueError):
        raise SnapshotError(f"Invalid {key} value '{value}'")


def _progression_settings(data: Dict[str, Any]) -> ProgressionSettings:
    try:
        return ProgressionSettings(
            rep_range_min=int(data["rep_range_min"]),
            rep_range_max=int(data["rep_range_max"]),
            rir=int(data["rir"]),
        )
    except KeyError as e:
        raise SnapshotError(f"Progression settings missing {e}")
    except (TypeError, ValueError) as e:
        raise SnapshotError(f"Invalid progression settings: {e}")


def parse_settings(data: Optional[Dict[str, Any]]) -> Settings:
    if not data:
        return Settings()

    settings = Settings(
        progression_enabled=bool(data.get("progression_enabled", False)),
        progression_overrides={
            template_id: _progression_settings(override)
            for template_id, override in (data.get("progression_overrides") or {}).items()
        },
        default_rir=_number(data, "default_rir", int),
    )
    if data.get("default_progression"):
        settings.default_progression = _progression_settings(data["default_progression"])
    if data.get("weight_unit"):
        settings.weight_unit = _unit(data["weight_unit"])
    return settings


def parse_library(data: Optional[Dict[str, Any]]) -> Dict[str, ExerciseDetails]:
    library = {}
    for template_id, entry in (data or {}).items():
        primary = entry.get("primary_muscles") or []
        secondary = entry.get("secondary_muscles") or []
        library[template_id] = ExerciseDetails(
            primary_muscles=[primary] if isinstance(primary, str) else list(primary),
            secondary_muscles=[secondary] if isinstance(secondary, str) else list(secondary),
            equipment=entry.get("equipment"),
            name=entry.get("name") or "",
        )
    return library


def parse_set(data: Dict[str, Any], index: int) -> WorkoutSet:
    return WorkoutSet(
        order=_number(data, "order", int, index),
        status=_enum(SetStatus, data.get("status"), SetStatus.TODO),
        reps=_number(data, "reps", int),
        weight=_number(data, "weight", float),
        duration=_number(data, "duration", float),
        distance=_number(data, "distance", float),
        rir=_number(data, "rir", int),
        side=_enum(Side, data.get("side"), Side.NONE),
        id=data.get("id"),
    )


def parse_session(data: Dict[str, Any]) -> Session:
    if "id" not in data or "start_time" not in data:
        raise SnapshotError("Session requires 'id' and 'start_time'")

    exercises = [
        ExerciseInstance(
            template_id=ex.get("template_id"),
            name=ex.get("name") or "",
            sets=[parse_set(s, i) for i, s in enumerate(ex.get("sets") or [])],
            rest_seconds=ex.get("rest_seconds"),
            weight_unit=_unit(ex.get("weight_unit")),
        )
        for ex in data.get("exercises") or []
    ]
    return Session(
        id=str(data["id"]),
        start_time=parse_datetime(data["start_time"]),
        completed_at=parse_datetime(data.get("completed_at")),
        name=data.get("name") or "",
        plan_id=data.get("plan_id"),
        day_id=data.get("day_id"),
        exercises=exercises,
    )


def parse_plan(data: Dict[str, Any]) -> Plan:
    if "id" not in data:
        raise SnapshotError("Plan requires an 'id'")

    days = []
    for day_index, day in enumerate(data.get("days") or []):
        exercises = [
            PlanExercise(
                template_id=ex.get("template_id"),
                target_sets=_number(ex, "target_sets", int),
                target_reps=_number(ex, "target_reps", int),
                name=ex.get("name") or "",
                side_type=_enum(SideType, ex.get("side_type"), SideType.BILATERAL),
                rest_seconds=ex.get("rest_seconds"),
                weight_unit=_unit(ex.get("weight_unit")),
            )
            for ex in day.get("exercises") or []
        ]
        days.append(PlanDay(id=str(day.get("id", day_index)), name=day.get("name") or "", exercises=exercises))

    return Plan(id=str(data["id"]), name=data.get("name") or "", days=days)


def parse_snapshot(data: Dict[str, Any]) -> Snapshot:
    """Build a Snapshot from an already decoded JSON document."""
    if not isinstance(data, dict):
        raise SnapshotError("Snapshot document must be a JSON object")

    snapshot = Snapshot(
        settings=parse_settings(data.get("settings")),
        library=parse_library(data.get("library")),
        plans=[parse_plan(p) for p in data.get("plans") or []],
        sessions=[parse_session(s) for s in data.get("sessions") or []],
    )
    logger.debug(
        f"Loaded snapshot: {len(snapshot.plans)} plans, {len(snapshot.sessions)} sessions, "
        f"{len(snapshot.library)} library entries"
    )
    return snapshot


def load_snapshot(path: Union[str, Path]) -> Snapshot:
    """Read and parse a snapshot file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise SnapshotError(f"Invalid JSON in {path}: {e}")
    return parse_snapshot(data)
