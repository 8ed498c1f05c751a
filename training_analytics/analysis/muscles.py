"""Muscle taxonomy: specific muscles mapped onto general muscle groups."""

from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional

from ..i18n import Translator, translate

SPECIFIC_TO_GENERAL: Mapping[str, str] = MappingProxyType({
    # Chest
    "pectoralsMajor": "chest",
    "pectoralsMinor": "chest",
    "serratusAnterior": "chest",
    # Back
    "latissimusDorsi": "lats",
    "teresMajor": "lats",
    "rhomboids": "upperBack",
    "teresMinor": "upperBack",
    "infraspinatus": "upperBack",
    "supraspinatus": "upperBack",
    "erectorSpinae": "lowerBack",
    # Shoulders and traps
    "deltoidAnterior": "shoulders",
    "deltoidLateral": "shoulders",
    "deltoidPosterior": "shoulders",
    "trapsUpper": "traps",
    "trapsMiddle": "traps",
    "trapsLower": "traps",
    # Arms
    "bicepsBrachii": "biceps",
    "brachialis": "biceps",
    "brachioradialis": "forearms",
    "tricepsLongHead": "triceps",
    "tricepsLateralHead": "triceps",
    "tricepsMedialHead": "triceps",
    "wristExtensors": "forearms",
    "wristFlexors": "forearms",
    # Trunk
    "rectusAbdominis": "abs",
    "obliques": "obliques",
    "transverseAbdominis": "core",
    "stabilizers": "core",
    # Hips and legs
    "gluteusMaximus": "glutes",
    "gluteusMedius": "glutes",
    "gluteusMinimus": "glutes",
    "quadricepsVasti": "quads",
    "rectusFemoris": "quads",
    "bicepsFemoris": "hamstrings",
    "semitendinosus": "hamstrings",
    "semimembranosus": "hamstrings",
    "hipAbductors": "hipAbductors",
    "hipAdductors": "hipAdductors",
    "hipFlexors": "hipFlexors",
    "gastrocnemius": "calves",
    "soleus": "calves",
    "tibialisAnterior": "calves",
    # Conditioning
    "cardio": "cardio",
})

# Groups never aggregated into volume
EXCLUDED_GROUPS = frozenset({"cardio"})

# Groups left out of the always-reported list
UNREPORTED_GROUPS = frozenset({"cardio", "core"})

# Informational only: muscles that respond well to training at long lengths
STRETCH_MEDIATED_HYPERTROPHY_MUSCLES = frozenset({
    "quadricepsVasti",
    "rectusFemoris",
    "bicepsFemoris",
    "semitendinosus",
    "semimembranosus",
    "gluteusMaximus",
    "pectoralsMajor",
    "soleus",
    "gastrocnemius",
})


def general_group(specific_key: str) -> Optional[str]:
    """General group for a specific muscle key, or None for unknown keys."""
    return SPECIFIC_TO_GENERAL.get(specific_key)


def all_groups() -> List[str]:
    """Every general group in taxonomy order, without duplicates."""
    return list(dict.fromkeys(SPECIFIC_TO_GENERAL.values()))


def reported_groups() -> List[str]:
    """Groups that always appear in a plan analysis."""
    return [group for group in all_groups() if group not in UNREPORTED_GROUPS]


def is_stretch_mediated(specific_key: str) -> bool:
    return specific_key in STRETCH_MEDIATED_HYPERTROPHY_MUSCLES


def group_display_name(group: str, t: Translator = translate) -> str:
    return t(f"general_muscles.{group}", None)


def display_muscle_names(specific_keys: Iterable[str],
                         detailed: bool,
                         t: Translator = translate) -> List[str]:
    """Translate muscle keys for display.

    Args:
        specific_keys: Specific muscle keys from the exercise library
        detailed: Show every specific muscle instead of collapsing to groups
        t: Translate function

    Returns:
        Display names, collapsed to unique general groups when not detailed
    """
    if not specific_keys:
        return []

    if detailed:
        return [t(f"muscles.{key}", None) for key in specific_keys]

    groups = dict.fromkeys(SPECIFIC_TO_GENERAL.get(key, key) for key in specific_keys)
    return [group_display_name(group, t) for group in groups]
