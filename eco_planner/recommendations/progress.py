"""
Plan progress: completion percentage and the impact report with milestones.

Pure functions over already-loaded plan records; the plan repository supplies
the inputs and stores the recomputed percentage.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from eco_planner.models.action import CandidateAction
from eco_planner.models.plan import ImpactReport, Milestone, PlanActionRecord, StoredPlan
from eco_planner.utils.numeric import round_half_up, round_int

# (name, icon, completed-action threshold)
_COUNT_MILESTONES: tuple[tuple[str, str, int], ...] = (
    ("First Step",    "🌱", 1),
    ("Eco Starter",   "🌿", 5),
    ("Green Warrior", "🌳", 10),
)
# (name, icon, completion-percent threshold)
_PERCENT_MILESTONES: tuple[tuple[str, str, int], ...] = (
    ("Halfway Hero",  "⭐", 50),
    ("Eco Champion",  "🏆", 100),
)
# Milestones advertised as upcoming while not yet reached.
_UPCOMING = frozenset({"Eco Starter", "Green Warrior", "Halfway Hero"})


def completion_percent(completed: int, total: int) -> int:
    """``round(completed / total × 100)``; 0 for an empty plan."""
    if total <= 0:
        return 0
    return round_int(completed / total * 100)


def build_milestones(completed_count: int, percent: int) -> list[Milestone]:
    """Achieved milestones first, then the upcoming ones not yet reached."""
    achieved: list[Milestone] = []
    upcoming: list[Milestone] = []

    for name, icon, threshold in _COUNT_MILESTONES:
        if completed_count >= threshold:
            achieved.append(Milestone(name=name, icon=icon, achieved=True))
        elif name in _UPCOMING:
            upcoming.append(Milestone(name=name, icon=icon, achieved=False))

    for name, icon, threshold in _PERCENT_MILESTONES:
        if percent >= threshold:
            achieved.append(Milestone(name=name, icon=icon, achieved=True))
        elif name in _UPCOMING:
            upcoming.append(Milestone(name=name, icon=icon, achieved=False))

    return achieved + upcoming


def build_impact_report(
    plan: StoredPlan,
    records: Sequence[PlanActionRecord],
    actions_by_id: Mapping[int, CandidateAction],
) -> ImpactReport:
    """Summarize what the completed actions of ``plan`` have achieved.

    Args:
        plan:          The stored plan.
        records:       Its plan-action records.
        actions_by_id: Catalog actions keyed by ``action_id``.

    Returns:
        ``ImpactReport``.
    """
    done = [actions_by_id[r.action_id] for r in records if r.is_completed]

    co2_saved = sum(a.carbon_saved_kg * 12 for a in done)
    monthly_savings = sum(a.monthly_savings for a in done)
    trees_offset = sum(a.trees_equivalent for a in done)

    return ImpactReport(
        total_actions=len(records),
        completed_actions=len(done),
        completion_percent=plan.completion_percent,
        co2_saved_annually=round_int(co2_saved),
        monthly_savings=monthly_savings,
        trees_offset_by_actions=round_half_up(trees_offset, 2),
        trees_remaining=round_half_up(plan.plan.trees_remaining, 2),
        milestones=build_milestones(len(done), plan.completion_percent),
        plan_generated_at=plan.generated_at,
    )
