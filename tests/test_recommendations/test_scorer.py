"""
Tests for eco_planner/recommendations/scorer.py.

What we test
------------
score_action():
  - Known catalog actions score as hand-computed for the reference profile.
  - Always an int in [0, 100].
  - Exactly 0 for each hard filter (garden, ownership, household size,
    vehicle, diet), regardless of every other attribute.

compute_score_components():
  - impact_efficiency capped at 20; max(difficulty, 1) guard.
  - willingness applies to diet / transport only.
  - Low time availability penalizes difficulty >= 4 (replaces the bonus).
  - Household bonus needs size >= 3 and money saved.
  - Grocery bill below 1000 is treated as 1000.
  - AC, commute and waste adjustments.

build_reasoning():
  - "Filtered out: ..." for filtered actions.
  - Signals appear for strong components.
"""

from __future__ import annotations

import pytest

from eco_planner.catalog.default_actions import DEFAULT_ACTIONS
from eco_planner.recommendations.scorer import (
    ScoreComponents,
    applicability_failure,
    build_reasoning,
    compute_score_components,
    score_action,
)
from eco_planner.taxonomy.action_taxonomy import (
    ActionCategory,
    ActionTag,
    DietaryPreference,
    HomeOwnership,
    TimeAvailability,
    VehicleType,
    WasteRecycling,
)


def _catalog(name: str):
    return next(a for a in DEFAULT_ACTIONS if a.name == name)


def _with(profile, **changes):
    return profile.model_copy(update=changes)


class TestKnownScores:
    def test_led_bulbs(self, sample_profile):
        # 50 + min(20, 15/1*2) + 5 (medium time) + 200/5000*100
        assert score_action(_catalog("Switch to LED bulbs"), sample_profile) == 79

    def test_ac_temperature_penalized_without_ac(self, sample_profile):
        # 50 + 20 + 5 + 10 - 20 (AC <= 1 h/day)
        assert score_action(_catalog("AC temperature to 24°C"), sample_profile) == 65

    def test_ac_temperature_bonus_with_heavy_ac(self, sample_profile):
        profile = _with(sample_profile, ac_usage_hours=6)
        assert score_action(_catalog("AC temperature to 24°C"), profile) == 95

    def test_scores_in_range_for_whole_catalog(self, sample_profile):
        for action in DEFAULT_ACTIONS:
            score = score_action(action, sample_profile)
            assert isinstance(score, int)
            assert 0 <= score <= 100


class TestHardFilters:
    def test_garden_filter_dominates(self, sample_profile, make_action):
        action = make_action(
            requires_garden=True,
            carbon_saved_kg=500.0,
            monthly_savings=100_000,
            category=ActionCategory.DIET,
        )
        for profile in (
            sample_profile,
            _with(sample_profile, willingness_change_diet=5, household_size=6),
            _with(sample_profile, time_availability=TimeAvailability.HIGH),
            _with(sample_profile, monthly_grocery_bill=0),
        ):
            assert score_action(action, profile) == 0
            assert compute_score_components(action, profile) is None

    def test_garden_filter_lifts_with_garden(self, sample_profile, make_action):
        action = make_action(requires_garden=True)
        assert score_action(action, _with(sample_profile, has_garden=True)) > 0

    def test_home_ownership(self, sample_profile, make_action):
        action = make_action(requires_home_ownership=True)
        assert score_action(action, sample_profile) == 0
        owner = _with(sample_profile, home_ownership=HomeOwnership.OWN)
        assert score_action(action, owner) > 0

    def test_min_household_size(self, sample_profile, make_action):
        action = make_action(min_household_size=2)
        assert score_action(action, sample_profile) == 0
        assert applicability_failure(action, sample_profile) == "requires a household of at least 2"

    def test_vehicle_set(self, sample_profile, make_action):
        action = make_action(applicable_vehicles=frozenset({VehicleType.BIKE}))
        assert score_action(action, sample_profile) == 0

    def test_empty_vehicle_set_means_any(self, sample_profile, make_action):
        action = make_action(applicable_vehicles=frozenset())
        assert score_action(action, sample_profile) > 0

    def test_diet_set(self, sample_profile, make_action):
        action = make_action(applicable_diets=frozenset({DietaryPreference.VEGAN}))
        assert score_action(action, sample_profile) == 0
        assert "non_vegetarian" in applicability_failure(action, sample_profile)


class TestComponents:
    def test_impact_efficiency_capped(self, sample_profile, make_action):
        c = compute_score_components(make_action(carbon_saved_kg=1000, difficulty=1), sample_profile)
        assert c.impact_efficiency == pytest.approx(20.0)

    def test_impact_efficiency_ratio(self, sample_profile, make_action):
        c = compute_score_components(make_action(carbon_saved_kg=9, difficulty=3), sample_profile)
        assert c.impact_efficiency == pytest.approx(6.0)

    def test_willingness_diet(self, sample_profile, make_action):
        profile = _with(sample_profile, willingness_change_diet=5)
        c = compute_score_components(make_action(category=ActionCategory.DIET), profile)
        assert c.willingness == pytest.approx(15.0)

    def test_willingness_transport(self, sample_profile, make_action):
        profile = _with(sample_profile, willingness_public_transport=1)
        c = compute_score_components(make_action(category=ActionCategory.TRANSPORT), profile)
        assert c.willingness == pytest.approx(3.0)

    def test_no_willingness_for_energy(self, sample_profile, make_action):
        c = compute_score_components(make_action(), sample_profile)
        assert c.willingness == 0.0

    def test_low_time_penalizes_hard_actions(self, sample_profile, make_action):
        profile = _with(sample_profile, time_availability=TimeAvailability.LOW)
        assert compute_score_components(make_action(difficulty=4), profile).time_fit == -15.0
        assert compute_score_components(make_action(difficulty=3), profile).time_fit == 0.0

    def test_high_time_bonus(self, sample_profile, make_action):
        profile = _with(sample_profile, time_availability=TimeAvailability.HIGH)
        assert compute_score_components(make_action(difficulty=5), profile).time_fit == 10.0

    def test_household_bonus_needs_savings(self, sample_profile, make_action):
        profile = _with(sample_profile, household_size=3)
        assert compute_score_components(make_action(monthly_savings=0), profile).household_bonus == 0.0
        assert compute_score_components(make_action(monthly_savings=50), profile).household_bonus == 5.0

    def test_grocery_floor(self, sample_profile, make_action):
        profile = _with(sample_profile, monthly_grocery_bill=400)
        c = compute_score_components(make_action(monthly_savings=50), profile)
        # 50 / max(400, 1000) * 100
        assert c.financial_efficiency == pytest.approx(5.0)

    def test_financial_efficiency_capped(self, sample_profile, make_action):
        c = compute_score_components(make_action(monthly_savings=5000), sample_profile)
        assert c.financial_efficiency == pytest.approx(10.0)

    def test_ac_adjustment_only_for_tagged_energy(self, sample_profile, make_action):
        heavy = _with(sample_profile, ac_usage_hours=8)
        tagged = make_action(tags=frozenset({ActionTag.AC_RELATED}))
        untagged = make_action()
        assert compute_score_components(tagged, heavy).ac_adjustment == 10.0
        assert compute_score_components(untagged, heavy).ac_adjustment == 0.0

    def test_ac_adjustment_neutral_band(self, sample_profile, make_action):
        moderate = _with(sample_profile, ac_usage_hours=3)
        tagged = make_action(tags=frozenset({ActionTag.AC_RELATED}))
        assert compute_score_components(tagged, moderate).ac_adjustment == 0.0

    def test_commute_adjustment(self, sample_profile, make_action):
        transport = make_action(category=ActionCategory.TRANSPORT)
        long = _with(sample_profile, commute_distance=25)
        short = _with(sample_profile, commute_distance=2)
        assert compute_score_components(transport, long).commute_adjustment == 10.0
        assert compute_score_components(transport, short).commute_adjustment == -10.0
        assert compute_score_components(transport, sample_profile).commute_adjustment == 0.0

    def test_waste_adjustment(self, sample_profile, make_action):
        waste = make_action(category=ActionCategory.WASTE)
        always = _with(sample_profile, waste_recycling=WasteRecycling.ALWAYS)
        assert compute_score_components(waste, always).waste_adjustment == -10.0
        assert compute_score_components(waste, sample_profile).waste_adjustment == 0.0


class TestScoreComponentsTotal:
    def test_clamped_high(self):
        c = ScoreComponents(impact_efficiency=20, willingness=15, time_fit=10,
                            household_bonus=5, financial_efficiency=10, ac_adjustment=10)
        assert c.raw_total == pytest.approx(120.0)
        assert c.total == 100

    def test_clamped_low(self):
        c = ScoreComponents(time_fit=-15, ac_adjustment=-20, commute_adjustment=-10,
                            waste_adjustment=-10)
        assert c.total == 0

    def test_rounds_half_up(self):
        c = ScoreComponents(impact_efficiency=2.5)
        assert c.total == 53


class TestBuildReasoning:
    def test_filtered(self, sample_profile, make_action):
        action = make_action(requires_garden=True)
        text = build_reasoning(action, sample_profile, None)
        assert text == "Filtered out: requires a garden"

    def test_signals(self, sample_profile):
        action = _catalog("AC temperature to 24°C")
        components = compute_score_components(action, sample_profile)
        text = build_reasoning(action, sample_profile, components)
        assert "High impact per effort" in text
        assert "Little AC use to cut" in text

    def test_never_empty(self, sample_profile, make_action):
        action = make_action(carbon_saved_kg=5, difficulty=1)
        components = compute_score_components(action, sample_profile)
        assert build_reasoning(action, sample_profile, components)
