"""Tests for the muscle taxonomy and display helpers."""

from training_analytics.analysis.muscles import (
    SPECIFIC_TO_GENERAL,
    all_groups,
    display_muscle_names,
    general_group,
    group_display_name,
    is_stretch_mediated,
    reported_groups,
)
from training_analytics.i18n import MESSAGES, translate


class TestTaxonomy:
    def test_general_group(self):
        assert general_group("pectoralsMajor") == "chest"
        assert general_group("teresMajor") == "lats"
        assert general_group("stabilizers") == "core"
        assert general_group("notAMuscle") is None

    def test_all_groups_unique_and_ordered(self):
        groups = all_groups()

        assert len(groups) == len(set(groups))
        assert groups[0] == "chest"
        assert set(groups) == set(SPECIFIC_TO_GENERAL.values())

    def test_reported_groups(self):
        groups = reported_groups()

        assert "cardio" not in groups
        assert "core" not in groups
        assert "chest" in groups
        assert "hipFlexors" in groups

    def test_every_group_and_muscle_has_a_name(self):
        for group in all_groups():
            assert f"general_muscles.{group}" in MESSAGES
        for key in SPECIFIC_TO_GENERAL:
            assert f"muscles.{key}" in MESSAGES

    def test_stretch_mediated(self):
        assert is_stretch_mediated("rectusFemoris")
        assert not is_stretch_mediated("bicepsBrachii")


class TestDisplayNames:
    def test_group_display_name(self):
        assert group_display_name("upperBack") == "Upper Back"

    def test_collapsed_to_groups(self):
        names = display_muscle_names(["pectoralsMajor", "pectoralsMinor", "tricepsLongHead"], detailed=False)

        assert names == ["Chest", "Triceps"]

    def test_detailed(self):
        names = display_muscle_names(["pectoralsMajor", "deltoidAnterior"], detailed=True)

        assert names == ["Pectoralis Major", "Front Delts"]

    def test_empty(self):
        assert display_muscle_names([], detailed=True) == []

    def test_unknown_key_falls_through_translator(self):
        assert display_muscle_names(["mystery"], detailed=False) == ["general_muscles.mystery"]


class TestTranslate:
    def test_params(self):
        text = translate("plan_analysis.good_volume", {"group_name": "Quads"})

        assert text == "Quads volume looks good."

    def test_unknown_key(self):
        assert translate("nope.missing") == "nope.missing"

    def test_missing_param_keeps_template(self):
        assert translate("plan_analysis.good_volume", {"other": 1}) == MESSAGES["plan_analysis.good_volume"]
