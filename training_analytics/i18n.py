"""English message catalog and the default translate function.

The analyzers never build display text themselves. They pick a message key
and pass parameters to a ``Translator``; applications inject their own
translator to localize.
"""

from typing import Any, Callable, Dict, Optional

Translator = Callable[[str, Optional[Dict[str, Any]]], str]

MESSAGES: Dict[str, str] = {
    # Plan analysis
    "plan_analysis.not_trained": "{group_name} is not trained in this plan.",
    "plan_analysis.recovery_warning": (
        "{group_name}: {sets} sets need {required} days of recovery, "
        "but the next session comes after {actual}."
    ),
    "plan_analysis.high_session_volume": (
        "{sets} sets for {group_name} in one session. Consider splitting them across more days."
    ),
    "plan_analysis.low_frequency": (
        "{group_name} was trained {freq}x per week recently. "
        "Spreading the volume over more sessions may help."
    ),
    "plan_analysis.high_weekly_volume": "{sets} weekly sets for {group_name} is a lot. Watch your recovery.",
    "plan_analysis.low_weekly_volume": "Only {sets} weekly sets for {group_name}. Consider adding volume.",
    "plan_analysis.good_volume": "{group_name} volume looks good.",
    "plan_analysis.indirect_only": "{group_name} only gets indirect work from other exercises.",

    # Progression
    "progression.first_time": "First time! Start with a comfortable weight.",
    "progression.mastered_weight": "You mastered this weight. Time to go heavier!",
    "progression.standard_progress": "Good work. Add a rep this time.",
    "progression.high_effort": "That was harder than planned. Repeat it with better reserve.",
    "progression.plateau": "Missed the rep target. Deload a bit and build back up.",

    # General muscle groups
    "general_muscles.abs": "Abs",
    "general_muscles.biceps": "Biceps",
    "general_muscles.calves": "Calves",
    "general_muscles.chest": "Chest",
    "general_muscles.core": "Core",
    "general_muscles.forearms": "Forearms",
    "general_muscles.glutes": "Glutes",
    "general_muscles.hamstrings": "Hamstrings",
    "general_muscles.hipAbductors": "Hip Abductors",
    "general_muscles.hipAdductors": "Hip Adductors",
    "general_muscles.hipFlexors": "Hip Flexors",
    "general_muscles.lats": "Lats",
    "general_muscles.lowerBack": "Lower Back",
    "general_muscles.obliques": "Obliques",
    "general_muscles.quads": "Quads",
    "general_muscles.shoulders": "Shoulders",
    "general_muscles.traps": "Traps",
    "general_muscles.triceps": "Triceps",
    "general_muscles.upperBack": "Upper Back",
    "general_muscles.cardio": "Cardio",

    # Specific muscles
    "muscles.pectoralsMajor": "Pectoralis Major",
    "muscles.pectoralsMinor": "Pectoralis Minor",
    "muscles.serratusAnterior": "Serratus Anterior",
    "muscles.latissimusDorsi": "Latissimus Dorsi",
    "muscles.teresMajor": "Teres Major",
    "muscles.teresMinor": "Teres Minor",
    "muscles.rhomboids": "Rhomboids",
    "muscles.infraspinatus": "Infraspinatus",
    "muscles.supraspinatus": "Supraspinatus",
    "muscles.erectorSpinae": "Erector Spinae",
    "muscles.deltoidAnterior": "Front Delts",
    "muscles.deltoidLateral": "Side Delts",
    "muscles.deltoidPosterior": "Rear Delts",
    "muscles.trapsUpper": "Upper Traps",
    "muscles.trapsMiddle": "Middle Traps",
    "muscles.trapsLower": "Lower Traps",
    "muscles.bicepsBrachii": "Biceps Brachii",
    "muscles.brachialis": "Brachialis",
    "muscles.brachioradialis": "Brachioradialis",
    "muscles.tricepsLongHead": "Triceps (Long Head)",
    "muscles.tricepsLateralHead": "Triceps (Lateral Head)",
    "muscles.tricepsMedialHead": "Triceps (Medial Head)",
    "muscles.wristExtensors": "Wrist Extensors",
    "muscles.wristFlexors": "Wrist Flexors",
    "muscles.rectusAbdominis": "Rectus Abdominis",
    "muscles.obliques": "Obliques",
    "muscles.transverseAbdominis": "Transverse Abdominis",
    "muscles.gluteusMaximus": "Gluteus Maximus",
    "muscles.gluteusMedius": "Gluteus Medius",
    "muscles.gluteusMinimus": "Gluteus Minimus",
    "muscles.quadricepsVasti": "Vasti (Quadriceps)",
    "muscles.rectusFemoris": "Rectus Femoris",
    "muscles.bicepsFemoris": "Biceps Femoris",
    "muscles.semitendinosus": "Semitendinosus",
    "muscles.semimembranosus": "Semimembranosus",
    "muscles.hipAbductors": "Hip Abductors",
    "muscles.hipAdductors": "Hip Adductors",
    "muscles.hipFlexors": "Hip Flexors",
    "muscles.gastrocnemius": "Gastrocnemius",
    "muscles.soleus": "Soleus",
    "muscles.tibialisAnterior": "Tibialis Anterior",
    "muscles.stabilizers": "Stabilizers",
    "muscles.cardio": "Cardio",
}


def translate(key: str, params: Optional[Dict[str, Any]] = None) -> str:
    """Look up an English message and interpolate its parameters.

    Unknown keys come back unchanged so a missing catalog entry is visible
    instead of fatal.
    """
    template = MESSAGES.get(key)
    if template is None:
        return key
    if not params:
        return template
    try:
        return template.format(**params)
    except (KeyError, IndexError):
        return template
