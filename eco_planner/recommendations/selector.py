"""
Phased plan selector: turns a scored catalog into a diversified 12-month plan.

Usage flow
----------
1. score_catalog(catalog, profile)
   -> list[ScoredAction]  (active, applicable, score descending)

2. select_diverse_actions(scored)
   -> list[ScoredAction]  (greedy, per-category caps, no backfill)

3. build_phases(selected)
   -> list[PhasePlan]     (4 phases in plan order, per-phase totals)

4. select_plan(catalog, profile)
   -> GeneratedPlan       (steps 1–3 + tree debt, finances, impact flags)

Ordering and tie-breaks
-----------------------
Scores are sorted descending with Python's stable ``sorted``: equal scores
keep catalog order. The same rule applies when re-sorting inside each phase,
so the output is fully deterministic for a given catalog snapshot.

Diversity caps
--------------
An action is admitted only while its category count is below the cap
(energy 5, transport 4, diet 4, waste 3, tree planting 3). Once a category is
full, later actions of that category are skipped; nothing is promoted in
their place.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional

from eco_planner.footprint.estimator import CO2_PER_TREE_PER_YEAR, estimate_footprint
from eco_planner.models.action import CandidateAction
from eco_planner.models.plan import (
    FinancialSummary,
    GeneratedPlan,
    ImpactSummary,
    PhasePlan,
    ScoredAction,
)
from eco_planner.models.profile import LifestyleProfile
from eco_planner.recommendations.scorer import score_action
from eco_planner.taxonomy.action_taxonomy import (
    PHASE_ORDER,
    ActionCategory,
    ActionTag,
    PlanPhase,
    require_exhaustive,
)
from eco_planner.utils.numeric import round_half_up, round_int

logger = logging.getLogger(__name__)

COST_PER_TREE = 300  # ₹ to sponsor one tree, maintenance included

CATEGORY_CAPS: dict[ActionCategory, int] = {
    ActionCategory.ENERGY:        5,
    ActionCategory.TRANSPORT:     4,
    ActionCategory.DIET:          4,
    ActionCategory.WASTE:         3,
    ActionCategory.TREE_PLANTING: 3,
}
require_exhaustive(CATEGORY_CAPS, ActionCategory, "CATEGORY_CAPS")


@dataclass(frozen=True)
class PhaseDetails:
    label:       str
    months:      str
    description: str


PHASE_DETAILS: dict[PlanPhase, PhaseDetails] = {
    PlanPhase.IMMEDIATE: PhaseDetails(
        "Quick Wins", "Month 1-2",
        "Easy changes you can start today with zero or minimal cost",
    ),
    PlanPhase.SHORT_TERM: PhaseDetails(
        "Building Habits", "Month 3-6",
        "Sustainable changes that become second nature over time",
    ),
    PlanPhase.MEDIUM_TERM: PhaseDetails(
        "Growing Impact", "Month 7-9",
        "Bigger investments that pay back significantly",
    ),
    PlanPhase.LONG_TERM: PhaseDetails(
        "Full Transformation", "Month 10-12",
        "Major lifestyle upgrades for maximum long-term impact",
    ),
}
require_exhaustive(PHASE_DETAILS, PlanPhase, "PHASE_DETAILS")


# ── Impact flag rules ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ImpactRule:
    """A benefit message shown when any selected action matches.

    ``category`` and ``tag`` are both optional; ``None`` matches anything.
    """

    message:  str
    category: Optional[ActionCategory] = None
    tag:      Optional[ActionTag] = None

    def matches(self, action: CandidateAction) -> bool:
        if self.category is not None and action.category != self.category:
            return False
        if self.tag is not None and not action.has_tag(self.tag):
            return False
        return True


HEALTH_RULES: tuple[ImpactRule, ...] = (
    ImpactRule("Better diet and nutrition", category=ActionCategory.DIET),
    ImpactRule(
        "More walking improves cardiovascular health",
        category=ActionCategory.TRANSPORT, tag=ActionTag.WALKING,
    ),
    ImpactRule(
        "Cycling improves fitness and reduces stress",
        category=ActionCategory.TRANSPORT, tag=ActionTag.CYCLING,
    ),
    ImpactRule("Less AC dependency builds natural heat tolerance", tag=ActionTag.AC_RELATED),
)
HEALTH_FALLBACK = "Reduced stress through eco-conscious living"

COMMUNITY_RULES: tuple[ImpactRule, ...] = (
    ImpactRule("Reduced local waste sent to landfills", category=ActionCategory.WASTE),
    ImpactRule("More trees improve local air quality", category=ActionCategory.TREE_PLANTING),
)
COMMUNITY_ALWAYS = "Inspiring others through visible eco-actions"


def derive_impact_flags(selected: Iterable[ScoredAction]) -> tuple[list[str], list[str]]:
    """Return ``(health_benefits, community_impact)`` for a selection.

    Messages appear in rule-table order. Health benefits fall back to a
    generic message when no rule fires; the community list always ends with
    the "inspiring others" message.
    """
    actions = [sa.action for sa in selected]

    health = [r.message for r in HEALTH_RULES if any(r.matches(a) for a in actions)]
    if not health:
        health.append(HEALTH_FALLBACK)

    community = [r.message for r in COMMUNITY_RULES if any(r.matches(a) for a in actions)]
    community.append(COMMUNITY_ALWAYS)

    return health, community


# ── Selection steps ───────────────────────────────────────────────────────────


def score_catalog(
    catalog: Iterable[CandidateAction],
    profile: LifestyleProfile,
) -> list[ScoredAction]:
    """Score every active action and drop the inapplicable ones.

    Returns:
        ``ScoredAction`` list, score descending; ties keep catalog order.
    """
    scored: list[ScoredAction] = []
    for action in catalog:
        if not action.is_active:
            continue
        score = score_action(action, profile)
        if score > 0:
            scored.append(ScoredAction(action=action, personal_score=score))

    return sorted(scored, key=lambda sa: -sa.personal_score)


def select_diverse_actions(
    scored: list[ScoredAction],
    caps: dict[ActionCategory, int] | None = None,
) -> list[ScoredAction]:
    """Greedily admit actions in order while their category is under its cap.

    Args:
        scored: Actions in priority order (output of ``score_catalog``).
        caps:   Per-category maximum; defaults to ``CATEGORY_CAPS``.

    Returns:
        Admitted actions, in the input order.
    """
    limits = caps if caps is not None else CATEGORY_CAPS
    counts: Counter[ActionCategory] = Counter()
    selected: list[ScoredAction] = []

    for sa in scored:
        category = sa.action.category
        if counts[category] < limits[category]:
            selected.append(sa)
            counts[category] += 1

    return selected


def build_phases(selected: list[ScoredAction]) -> list[PhasePlan]:
    """Bucket selected actions into the four ordered phases with totals.

    Every phase is present, even when empty.
    """
    phases: list[PhasePlan] = []
    for phase in PHASE_ORDER:
        actions = sorted(
            (sa for sa in selected if sa.action.phase == phase),
            key=lambda sa: -sa.personal_score,
        )
        details = PHASE_DETAILS[phase]
        phases.append(
            PhasePlan(
                phase=phase,
                label=details.label,
                months=details.months,
                description=details.description,
                actions=actions,
                trees_reduced=round_half_up(sum(sa.action.trees_equivalent for sa in actions), 2),
                monthly_savings=sum(sa.action.monthly_savings for sa in actions),
                upfront_cost=sum(sa.action.upfront_cost for sa in actions),
                annual_co2_reduced=sum(sa.action.carbon_saved_kg * 12 for sa in actions),
            )
        )
    return phases


def select_plan(
    catalog: Iterable[CandidateAction],
    profile: LifestyleProfile,
) -> GeneratedPlan:
    """Build the full phased plan for ``profile`` from ``catalog``.

    Pure computation; persistence is the caller's concern. An empty catalog
    yields a plan with no actions and the whole tree debt left to sponsor.

    Args:
        catalog: Candidate actions (inactive ones are ignored).
        profile: Validated lifestyle profile.

    Returns:
        ``GeneratedPlan``.
    """
    footprint = estimate_footprint(profile)
    scored = score_catalog(catalog, profile)
    selected = select_diverse_actions(scored)
    phases = build_phases(selected)

    total_monthly_savings = sum(sa.action.monthly_savings for sa in selected)
    total_upfront_cost = sum(sa.action.upfront_cost for sa in selected)
    total_co2_reduced = sum(sa.action.carbon_saved_kg * 12 for sa in selected)

    trees_reduced = total_co2_reduced / CO2_PER_TREE_PER_YEAR
    trees_remaining = max(0.0, footprint.trees_needed - trees_reduced)
    sponsor_cost = round_int(trees_remaining * COST_PER_TREE)
    total_yearly_savings = total_monthly_savings * 12
    net_savings_year1 = total_yearly_savings - total_upfront_cost - sponsor_cost

    health, community = derive_impact_flags(selected)

    logger.debug(
        "Plan selection | scored=%d | selected=%d | trees_needed=%d | trees_reduced=%.2f",
        len(scored), len(selected), footprint.trees_needed, trees_reduced,
    )

    return GeneratedPlan(
        annual_co2_kg=footprint.annual_co2_kg,
        trees_needed=footprint.trees_needed,
        phases=phases,
        trees_reduced_by_actions=trees_reduced,
        trees_remaining=trees_remaining,
        total_monthly_savings=total_monthly_savings,
        total_upfront_cost=total_upfront_cost,
        total_yearly_savings=total_yearly_savings,
        total_co2_reduced=total_co2_reduced,
        sponsor_cost=sponsor_cost,
        net_savings_year1=net_savings_year1,
        impact_summary=ImpactSummary(
            co2_reduced_annually=round_int(total_co2_reduced),
            equivalent_trees=round_int(trees_reduced),
            money_saved=total_yearly_savings,
            health_benefits=health,
            community_impact=community,
        ),
        financial_summary=FinancialSummary(
            one_time_costs=total_upfront_cost,
            monthly_savings_start=total_monthly_savings,
            total_year1_savings=total_yearly_savings,
            trees_sponsored=math.ceil(round_half_up(trees_remaining, 2)),
            sponsor_cost=sponsor_cost,
            net_savings_year1=net_savings_year1,
        ),
    )
