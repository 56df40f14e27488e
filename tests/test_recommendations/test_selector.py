"""
Tests for eco_planner/recommendations/selector.py.

What we test
------------
score_catalog():
  - Drops inactive and hard-filtered actions; sorts by score descending.
  - Equal scores keep catalog order.

select_diverse_actions():
  - Never exceeds a category cap; no backfill once a category is full.

build_phases():
  - Always four phases in plan order; every action matches its phase.

select_plan():
  - Reference profile: category counts, tree and money invariants.
  - trees_reduced == total_co2_reduced / 22 and
    trees_remaining == max(0, trees_needed - trees_reduced) exactly.
  - Identical inputs give identical plans.
  - Empty catalog yields four empty phases and the full tree debt.
  - Impact flags follow the selected categories and tags.
"""

from __future__ import annotations

import math
from collections import Counter

import pytest

from eco_planner.catalog.default_actions import DEFAULT_ACTIONS
from eco_planner.models.plan import ScoredAction
from eco_planner.recommendations.selector import (
    CATEGORY_CAPS,
    COMMUNITY_ALWAYS,
    COST_PER_TREE,
    HEALTH_FALLBACK,
    PHASE_DETAILS,
    build_phases,
    derive_impact_flags,
    score_catalog,
    select_diverse_actions,
    select_plan,
)
from eco_planner.taxonomy.action_taxonomy import (
    PHASE_ORDER,
    ActionCategory,
    ActionTag,
    PlanPhase,
)


def _scored(action, score: int = 60) -> ScoredAction:
    return ScoredAction(action=action, personal_score=score)


class TestScoreCatalog:
    def test_filters_inactive_and_inapplicable(self, sample_profile, make_action):
        catalog = [
            make_action(name="kept"),
            make_action(name="retired", is_active=False),
            make_action(name="garden", requires_garden=True),
        ]
        names = [sa.action.name for sa in score_catalog(catalog, sample_profile)]
        assert names == ["kept"]

    def test_sorted_descending(self, sample_profile):
        scored = score_catalog(DEFAULT_ACTIONS, sample_profile)
        scores = [sa.personal_score for sa in scored]
        assert scores == sorted(scores, reverse=True)
        assert all(s > 0 for s in scores)

    def test_ties_keep_catalog_order(self, sample_profile, make_action):
        catalog = [make_action(name=f"a{i}") for i in range(5)]
        names = [sa.action.name for sa in score_catalog(catalog, sample_profile)]
        assert names == ["a0", "a1", "a2", "a3", "a4"]


class TestSelectDiverseActions:
    def test_respects_caps(self, make_action):
        scored = [_scored(make_action(name=f"e{i}")) for i in range(8)]
        selected = select_diverse_actions(scored)
        assert len(selected) == CATEGORY_CAPS[ActionCategory.ENERGY]
        assert [sa.action.name for sa in selected] == ["e0", "e1", "e2", "e3", "e4"]

    def test_no_backfill(self, make_action):
        scored = [
            _scored(make_action(name="w1", category=ActionCategory.WASTE), 90),
            _scored(make_action(name="w2", category=ActionCategory.WASTE), 80),
            _scored(make_action(name="d1", category=ActionCategory.DIET), 70),
        ]
        caps = {c: 1 for c in ActionCategory}
        selected = select_diverse_actions(scored, caps)
        assert [sa.action.name for sa in selected] == ["w1", "d1"]


class TestBuildPhases:
    def test_four_phases_in_order(self):
        phases = build_phases([])
        assert [p.phase for p in phases] == list(PHASE_ORDER)
        assert all(p.actions == [] for p in phases)
        assert phases[0].label == PHASE_DETAILS[PlanPhase.IMMEDIATE].label

    def test_actions_bucketed_and_sorted(self, make_action):
        selected = [
            _scored(make_action(name="later", phase=PlanPhase.LONG_TERM), 70),
            _scored(make_action(name="low", phase=PlanPhase.IMMEDIATE), 55),
            _scored(make_action(name="high", phase=PlanPhase.IMMEDIATE), 88),
        ]
        phases = {p.phase: p for p in build_phases(selected)}
        assert [sa.action.name for sa in phases[PlanPhase.IMMEDIATE].actions] == ["high", "low"]
        assert [sa.action.name for sa in phases[PlanPhase.LONG_TERM].actions] == ["later"]
        assert phases[PlanPhase.SHORT_TERM].actions == []

    def test_phase_totals(self, make_action):
        selected = [
            _scored(make_action(name="a", carbon_saved_kg=10, monthly_savings=100,
                                upfront_cost=50, trees_equivalent=0.1)),
            _scored(make_action(name="b", carbon_saved_kg=5, monthly_savings=20,
                                upfront_cost=0, trees_equivalent=0.2)),
        ]
        phase = build_phases(selected)[0]
        assert phase.monthly_savings == 120
        assert phase.upfront_cost == 50
        assert phase.annual_co2_reduced == pytest.approx(180.0)
        assert phase.trees_reduced == pytest.approx(0.3)


class TestSelectPlanReferenceProfile:
    def test_category_counts(self, sample_profile):
        plan = select_plan(DEFAULT_ACTIONS, sample_profile)
        counts = Counter(sa.action.category for sa in plan.all_actions())
        assert counts == {
            ActionCategory.ENERGY: 5,
            ActionCategory.TRANSPORT: 4,
            ActionCategory.DIET: 4,
            ActionCategory.WASTE: 3,
            ActionCategory.TREE_PLANTING: 2,
        }
        for category, n in counts.items():
            assert n <= CATEGORY_CAPS[category]

    def test_phase_consistency(self, sample_profile):
        plan = select_plan(DEFAULT_ACTIONS, sample_profile)
        assert len(plan.phases) == 4
        for phase in plan.phases:
            for sa in phase.actions:
                assert sa.action.phase == phase.phase

    def test_filtered_actions_never_selected(self, sample_profile):
        plan = select_plan(DEFAULT_ACTIONS, sample_profile)
        for sa in plan.all_actions():
            assert not sa.action.requires_garden
            assert not sa.action.requires_home_ownership

    def test_footprint_carried(self, sample_profile):
        plan = select_plan(DEFAULT_ACTIONS, sample_profile)
        assert plan.annual_co2_kg == pytest.approx(6041.6)
        assert plan.trees_needed == 275

    def test_tree_invariants_exact(self, sample_profile):
        plan = select_plan(DEFAULT_ACTIONS, sample_profile)
        assert plan.trees_reduced_by_actions == plan.total_co2_reduced / 22
        assert plan.trees_remaining == max(0.0, plan.trees_needed - plan.trees_reduced_by_actions)

    def test_money_invariants(self, sample_profile):
        plan = select_plan(DEFAULT_ACTIONS, sample_profile)
        actions = [sa.action for sa in plan.all_actions()]
        assert plan.total_monthly_savings == sum(a.monthly_savings for a in actions)
        assert plan.total_upfront_cost == sum(a.upfront_cost for a in actions)
        assert plan.total_yearly_savings == plan.total_monthly_savings * 12
        assert plan.sponsor_cost == math.floor(plan.trees_remaining * COST_PER_TREE + 0.5)
        assert plan.net_savings_year1 == (
            plan.total_yearly_savings - plan.total_upfront_cost - plan.sponsor_cost
        )

    def test_financial_summary(self, sample_profile):
        plan = select_plan(DEFAULT_ACTIONS, sample_profile)
        fin = plan.financial_summary
        assert fin.one_time_costs == plan.total_upfront_cost
        assert fin.total_year1_savings == plan.total_yearly_savings
        assert fin.trees_sponsored >= math.floor(plan.trees_remaining)
        assert fin.net_savings_year1 == plan.net_savings_year1

    def test_idempotent(self, sample_profile):
        first = select_plan(DEFAULT_ACTIONS, sample_profile)
        second = select_plan(DEFAULT_ACTIONS, sample_profile)
        assert first == second

    def test_community_flags(self, sample_profile):
        plan = select_plan(DEFAULT_ACTIONS, sample_profile)
        community = plan.impact_summary.community_impact
        assert "Reduced local waste sent to landfills" in community
        assert "More trees improve local air quality" in community
        assert community[-1] == COMMUNITY_ALWAYS
        assert "Better diet and nutrition" in plan.impact_summary.health_benefits


class TestSelectPlanEdgeCases:
    def test_empty_catalog(self, sample_profile):
        plan = select_plan([], sample_profile)
        assert plan.action_count() == 0
        assert len(plan.phases) == 4
        assert plan.trees_reduced_by_actions == 0.0
        assert plan.trees_remaining == pytest.approx(275.0)
        assert plan.sponsor_cost == 275 * COST_PER_TREE
        assert plan.impact_summary.health_benefits == [HEALTH_FALLBACK]
        assert plan.impact_summary.community_impact == [COMMUNITY_ALWAYS]

    def test_trees_remaining_floors_at_zero(self, sample_profile, make_action):
        big = make_action(name="offset everything", carbon_saved_kg=100_000)
        plan = select_plan([big], sample_profile)
        assert plan.trees_remaining == 0.0
        assert plan.sponsor_cost == 0
        assert plan.financial_summary.trees_sponsored == 0


class TestImpactFlags:
    def test_tag_driven_health_flags(self, make_action):
        selected = [
            _scored(make_action(name="walk", category=ActionCategory.TRANSPORT,
                                tags=frozenset({ActionTag.WALKING}))),
            _scored(make_action(name="ac", tags=frozenset({ActionTag.AC_RELATED}))),
        ]
        health, _ = derive_impact_flags(selected)
        assert health == [
            "More walking improves cardiovascular health",
            "Less AC dependency builds natural heat tolerance",
        ]

    def test_walking_tag_needs_transport_category(self, make_action):
        selected = [_scored(make_action(tags=frozenset({ActionTag.WALKING})))]
        health, _ = derive_impact_flags(selected)
        assert health == [HEALTH_FALLBACK]

    def test_names_do_not_drive_flags(self, make_action):
        selected = [_scored(make_action(name="Cycle with the AC off, walk home"))]
        health, community = derive_impact_flags(selected)
        assert health == [HEALTH_FALLBACK]
        assert community == [COMMUNITY_ALWAYS]
