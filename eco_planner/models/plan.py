"""
Plan output models.

``GeneratedPlan`` is the pure output of the plan selector. It is built fresh
for every planning request and never mutated; persistence stores a JSON dump
of it alongside one ``PlanActionRecord`` per selected action.

``StoredPlan``, ``PlanActionRecord`` and ``CompletionUpdate`` describe the
persisted side (``user_eco_plans`` / ``user_plan_actions`` tables).
``PlanActionRecord`` is the only mutable-over-time record: its completion flag
is flipped by the user, but each update writes a new row state rather than
mutating the Python object.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from eco_planner.models.action import CandidateAction, QuickAction
from eco_planner.taxonomy.action_taxonomy import PlanPhase


class ScoredAction(BaseModel):
    """A catalog action paired with its personal relevance score for one profile."""

    model_config = ConfigDict(frozen=True)

    action: CandidateAction
    personal_score: int

    @field_validator("personal_score")
    @classmethod
    def validate_score(cls, v: int) -> int:
        if not 0 <= v <= 100:
            raise ValueError(f"personal_score must be in [0, 100], got {v}.")
        return v

    @property
    def phase(self) -> PlanPhase:
        return self.action.phase


class PhasePlan(BaseModel):
    """One time bucket of a plan with its selected actions and totals.

    Attributes:
        phase: Phase key; every action in ``actions`` has this phase.
        label: Short title, e.g. ``"Quick Wins"``.
        months: Month range, e.g. ``"Month 1-2"``.
        description: One-line summary of the phase.
        actions: Selected actions, score descending.
        trees_reduced: Sum of ``trees_equivalent`` (2dp).
        monthly_savings: Sum of ``monthly_savings`` (₹).
        upfront_cost: Sum of ``upfront_cost`` (₹).
        annual_co2_reduced: Sum of ``carbon_saved_kg × 12`` (kg).
    """

    model_config = ConfigDict(frozen=True)

    phase: PlanPhase
    label: str
    months: str
    description: str
    actions: list[ScoredAction] = []
    trees_reduced: float = 0.0
    monthly_savings: int = 0
    upfront_cost: int = 0
    annual_co2_reduced: float = 0.0


class ImpactSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    co2_reduced_annually: int
    equivalent_trees: int
    money_saved: int
    health_benefits: list[str]
    community_impact: list[str]


class FinancialSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    one_time_costs: int
    monthly_savings_start: int
    total_year1_savings: int
    trees_sponsored: int
    sponsor_cost: int
    net_savings_year1: int


class GeneratedPlan(BaseModel):
    """A complete 12-month phased plan for one profile.

    ``trees_reduced_by_actions`` and ``trees_remaining`` are kept unrounded so
    that ``trees_reduced_by_actions == total_co2_reduced / 22`` and
    ``trees_remaining == max(0, trees_needed - trees_reduced_by_actions)``
    hold exactly; round them only for display.

    Attributes:
        annual_co2_kg: Estimated annual footprint (kg CO₂).
        trees_needed: Tree debt from the footprint estimate.
        phases: Exactly four phases in plan order.
        trees_reduced_by_actions: Annual CO₂ reduced / 22.
        trees_remaining: Tree debt left after the plan's reductions.
        total_monthly_savings: ₹ per month across all selected actions.
        total_upfront_cost: One-time ₹ across all selected actions.
        total_yearly_savings: ``total_monthly_savings × 12``.
        total_co2_reduced: Annual kg CO₂ reduced by the selected actions.
        sponsor_cost: ₹ to sponsor trees for the remaining debt.
        net_savings_year1: Yearly savings − upfront cost − sponsor cost.
    """

    model_config = ConfigDict(frozen=True)

    annual_co2_kg: float
    trees_needed: int
    phases: list[PhasePlan]
    trees_reduced_by_actions: float
    trees_remaining: float
    total_monthly_savings: int
    total_upfront_cost: int
    total_yearly_savings: int
    total_co2_reduced: float
    sponsor_cost: int
    net_savings_year1: int
    impact_summary: ImpactSummary
    financial_summary: FinancialSummary

    def all_actions(self) -> list[ScoredAction]:
        """Selected actions across all phases, in plan order."""
        return [sa for phase in self.phases for sa in phase.actions]

    def action_count(self) -> int:
        return sum(len(p.actions) for p in self.phases)


# ── Persisted plan state ──────────────────────────────────────────────────────


class PlanActionRecord(BaseModel):
    """One selected action inside a stored plan, with its completion state."""

    model_config = ConfigDict(frozen=True)

    record_id: Optional[int] = None
    plan_id: int
    action_id: int
    phase: PlanPhase
    score: int
    is_completed: bool = False
    completed_at: Optional[datetime] = None


class StoredPlan(BaseModel):
    """A persisted plan row (``user_eco_plans``).

    Attributes:
        plan_id: Auto-assigned DB PK; ``None`` before insertion.
        user_id: Owner; at most one plan per user.
        plan: The full ``GeneratedPlan`` as generated.
        completion_percent: Share of plan actions completed (0–100).
        generated_at: When the plan was generated (UTC).
        expires_at: When the plan stops being current (UTC).
    """

    model_config = ConfigDict(frozen=True)

    plan_id: Optional[int] = None
    user_id: str
    plan: GeneratedPlan
    completion_percent: int = 0
    generated_at: datetime
    expires_at: datetime


class PlanOutcome(BaseModel):
    """Result of ``generate_and_save_plan``.

    ``is_existing`` is ``True`` when the caller got back a still-current plan
    instead of a freshly generated one.
    """

    model_config = ConfigDict(frozen=True)

    plan: StoredPlan
    actions: list[PlanActionRecord]
    is_existing: bool


class CompletionUpdate(BaseModel):
    model_config = ConfigDict(frozen=True)

    action: PlanActionRecord
    completion_percent: int
    completed_count: int
    total_count: int


class Milestone(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    icon: str
    achieved: bool


class ImpactReport(BaseModel):
    """Progress summary over the completed actions of a stored plan."""

    model_config = ConfigDict(frozen=True)

    total_actions: int
    completed_actions: int
    completion_percent: int
    co2_saved_annually: int
    monthly_savings: int
    trees_offset_by_actions: float
    trees_remaining: float
    milestones: list[Milestone]
    plan_generated_at: datetime


class KnapsackResult(BaseModel):
    """Best quick-action subset under an effort budget.

    Attributes:
        total_savings: kg CO₂ saved by the selection (2dp).
        difficulty_used: Sum of selected difficulties (≤ ``max_difficulty``).
        max_difficulty: The effort budget the optimizer ran with.
        actions: Selected actions in catalog order.
    """

    model_config = ConfigDict(frozen=True)

    total_savings: float
    difficulty_used: int
    max_difficulty: int
    actions: list[QuickAction]
