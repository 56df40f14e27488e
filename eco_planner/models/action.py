"""
Catalog action models.

``CandidateAction`` is an entry of the phased-plan catalog (seeded into the
``eco_actions`` table). ``QuickAction`` belongs to the separate, fixed
"carbon diet" list consumed by the knapsack optimizer; the two catalogs are
independent and never mixed.

Applicability predicates (garden, ownership, household size, vehicle and diet
sets) are hard filters evaluated by the scorer. An empty vehicle/diet set means
the action applies to everyone.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from eco_planner.taxonomy.action_taxonomy import (
    ActionCategory,
    ActionTag,
    DietaryPreference,
    PlanPhase,
    VehicleType,
)


class CandidateAction(BaseModel):
    """A lifestyle change that can be recommended in a phased plan.

    Attributes:
        action_id: Auto-assigned DB PK; ``None`` before insertion.
        name: Unique display name (also the seeding key).
        category: Action category; drives willingness bonuses and diversity caps.
        description: One-line description shown to the user.
        icon: Emoji shown in the client.
        tips: Practical advice text.
        carbon_saved_kg: kg CO₂ saved per month.
        monthly_savings: ₹ saved per month.
        upfront_cost: One-time ₹ cost.
        difficulty: 1 (trivial) – 5 (major change).
        phase: Plan phase this action is scheduled in.
        trees_equivalent: Trees whose absorption this action matches.
        requires_garden: Needs garden/terrace space.
        requires_home_ownership: Needs an owned home (installations).
        min_household_size: Minimum people in the household.
        applicable_vehicles: Vehicles the action applies to; empty = any.
        applicable_diets: Diets the action applies to; empty = any.
        tags: Behaviour tags (AC-related, walking, cycling).
        is_active: ``False`` retires the action without deleting it.
    """

    model_config = ConfigDict(frozen=True)

    action_id: Optional[int] = None
    name: str
    category: ActionCategory
    description: str = ""
    icon: str = ""
    tips: str = ""
    carbon_saved_kg: float
    monthly_savings: int = 0
    upfront_cost: int = 0
    difficulty: int
    phase: PlanPhase
    trees_equivalent: float = 0.0
    requires_garden: bool = False
    requires_home_ownership: bool = False
    min_household_size: int = 1
    applicable_vehicles: frozenset[VehicleType] = frozenset()
    applicable_diets: frozenset[DietaryPreference] = frozenset()
    tags: frozenset[ActionTag] = frozenset()
    is_active: bool = True

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("name must not be empty.")
        return v.strip()

    @field_validator("difficulty")
    @classmethod
    def validate_difficulty(cls, v: int) -> int:
        if not 1 <= v <= 5:
            raise ValueError(f"difficulty must be in [1, 5], got {v}.")
        return v

    @field_validator("carbon_saved_kg", "monthly_savings", "upfront_cost", "trees_equivalent")
    @classmethod
    def validate_non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"value must be non-negative, got {v}.")
        return v

    @field_validator("min_household_size")
    @classmethod
    def validate_min_household(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"min_household_size must be >= 1, got {v}.")
        return v

    def has_tag(self, tag: ActionTag) -> bool:
        return tag in self.tags


class QuickAction(BaseModel):
    """A small, repeatable action for the effort-budgeted "carbon diet".

    Attributes:
        name: Display name.
        carbon_saved: kg CO₂ saved each time the action is done.
        difficulty: Effort points (1–10 scale).
        icon: Emoji shown in the client.
        tip: One-line how-to.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    carbon_saved: float
    difficulty: int
    icon: str = ""
    tip: str = ""

    @field_validator("carbon_saved")
    @classmethod
    def validate_carbon(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"carbon_saved must be non-negative, got {v}.")
        return v

    @field_validator("difficulty")
    @classmethod
    def validate_difficulty(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"difficulty must be >= 1, got {v}.")
        return v
