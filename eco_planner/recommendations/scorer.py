"""
Personal relevance scoring: rates one catalog action against one lifestyle
profile on a 0–100 scale.

Hard filters (score is exactly 0, no partial credit)
-----------------------------------------------------
    1. action requires a garden          and profile has none
    2. action requires home ownership    and profile rents
    3. action.min_household_size         > profile.household_size
    4. action.applicable_vehicles        non-empty and excludes profile vehicle
    5. action.applicable_diets           non-empty and excludes profile diet

Additive score (base 50)
------------------------
impact_efficiency (0–20):
    carbon_saved_kg / max(difficulty, 1) × 2, capped at 20.

willingness (0–15):
    diet actions      → willingness_change_diet / 5 × 15
    transport actions → willingness_public_transport / 5 × 15

time_fit (−15 or 0/5/10):
    difficulty ≥ 4 with low availability → −15 (replaces the time bonus),
    otherwise {low: 0, medium: 5, high: 10}.

household_bonus (0 or 5):
    household_size ≥ 3 and the action saves money.

financial_efficiency (0–10):
    monthly_savings / max(grocery_bill, 1000) × 100, capped at 10.

ac_adjustment (+10 / −20 / 0):
    AC-tagged energy actions: +10 when AC > 4 h/day, −20 when AC ≤ 1 h/day.

commute_adjustment (+10 / −10 / 0):
    transport actions: +10 for commutes > 20 km, −10 for commutes < 5 km.

waste_adjustment (−10 / 0):
    waste actions for households that already always recycle.

The final score is clamped to [0, 100] and rounded half-up. The
``max(difficulty, 1)`` and ``max(grocery_bill, 1000)`` guards are part of the
formula: a ₹400 grocery bill is scored as if it were ₹1000.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from eco_planner.models.action import CandidateAction
from eco_planner.models.profile import LifestyleProfile
from eco_planner.taxonomy.action_taxonomy import (
    ActionCategory,
    ActionTag,
    HomeOwnership,
    TimeAvailability,
    WasteRecycling,
    require_exhaustive,
)
from eco_planner.utils.numeric import clamp, round_int

BASE_SCORE = 50.0

_TIME_BONUS: dict[TimeAvailability, float] = {
    TimeAvailability.LOW:    0.0,
    TimeAvailability.MEDIUM: 5.0,
    TimeAvailability.HIGH:  10.0,
}
require_exhaustive(_TIME_BONUS, TimeAvailability, "_TIME_BONUS")

_MIN_GROCERY_BILL = 1000.0


@dataclass
class ScoreComponents:
    """Itemized contributions to a personal score.

    Attributes:
        impact_efficiency:    0–20, carbon saved per unit of difficulty.
        willingness:          0–15, diet / public-transport willingness.
        time_fit:             −15, 0, 5 or 10.
        household_bonus:      0 or 5.
        financial_efficiency: 0–10, savings relative to the grocery bill.
        ac_adjustment:        +10, −20 or 0 for AC-tagged energy actions.
        commute_adjustment:   +10, −10 or 0 for transport actions.
        waste_adjustment:     −10 or 0 for waste actions.
    """

    impact_efficiency:    float = 0.0
    willingness:          float = 0.0
    time_fit:             float = 0.0
    household_bonus:      float = 0.0
    financial_efficiency: float = 0.0
    ac_adjustment:        float = 0.0
    commute_adjustment:   float = 0.0
    waste_adjustment:     float = 0.0

    @property
    def raw_total(self) -> float:
        """Unclamped, unrounded sum including the base score."""
        return (
            BASE_SCORE
            + self.impact_efficiency
            + self.willingness
            + self.time_fit
            + self.household_bonus
            + self.financial_efficiency
            + self.ac_adjustment
            + self.commute_adjustment
            + self.waste_adjustment
        )

    @property
    def total(self) -> int:
        """Final personal score in [0, 100]."""
        return round_int(clamp(self.raw_total, 0.0, 100.0))


def applicability_failure(
    action: CandidateAction,
    profile: LifestyleProfile,
) -> Optional[str]:
    """Name the first hard filter ``action`` fails for ``profile``.

    Returns:
        A short reason string, or ``None`` if the action is applicable.
    """
    if action.requires_garden and not profile.has_garden:
        return "requires a garden"
    if action.requires_home_ownership and profile.home_ownership != HomeOwnership.OWN:
        return "requires home ownership"
    if action.min_household_size > profile.household_size:
        return f"requires a household of at least {action.min_household_size}"
    if action.applicable_vehicles and profile.vehicle_type not in action.applicable_vehicles:
        return f"not applicable to vehicle '{profile.vehicle_type.value}'"
    if action.applicable_diets and profile.dietary_preference not in action.applicable_diets:
        return f"not applicable to diet '{profile.dietary_preference.value}'"
    return None


def compute_score_components(
    action: CandidateAction,
    profile: LifestyleProfile,
) -> Optional[ScoreComponents]:
    """Compute the itemized score, or ``None`` when a hard filter applies.

    Args:
        action:  Catalog action to rate.
        profile: Validated lifestyle profile.

    Returns:
        ``ScoreComponents`` for applicable actions; ``None`` otherwise.
    """
    if applicability_failure(action, profile) is not None:
        return None

    c = ScoreComponents()

    # ── Impact efficiency ─────────────────────────────────────────────────────
    impact_ratio = action.carbon_saved_kg / max(action.difficulty, 1)
    c.impact_efficiency = min(20.0, impact_ratio * 2)

    # ── Willingness alignment ─────────────────────────────────────────────────
    if action.category == ActionCategory.DIET:
        c.willingness = (profile.willingness_change_diet / 5) * 15
    elif action.category == ActionCategory.TRANSPORT:
        c.willingness = (profile.willingness_public_transport / 5) * 15

    # ── Time availability ─────────────────────────────────────────────────────
    if action.difficulty >= 4 and profile.time_availability == TimeAvailability.LOW:
        c.time_fit = -15.0
    else:
        c.time_fit = _TIME_BONUS[profile.time_availability]

    # ── Household and financial efficiency ────────────────────────────────────
    if action.monthly_savings > 0:
        if profile.household_size >= 3:
            c.household_bonus = 5.0
        savings_pct = (
            action.monthly_savings / max(profile.monthly_grocery_bill, _MIN_GROCERY_BILL)
        ) * 100
        c.financial_efficiency = min(10.0, savings_pct)

    # ── Category-specific adjustments ─────────────────────────────────────────
    if action.category == ActionCategory.ENERGY and action.has_tag(ActionTag.AC_RELATED):
        if profile.ac_usage_hours > 4:
            c.ac_adjustment = 10.0
        elif profile.ac_usage_hours <= 1:
            c.ac_adjustment = -20.0

    if action.category == ActionCategory.TRANSPORT:
        if profile.commute_distance > 20:
            c.commute_adjustment = 10.0
        elif profile.commute_distance < 5:
            c.commute_adjustment = -10.0

    if (
        action.category == ActionCategory.WASTE
        and profile.waste_recycling == WasteRecycling.ALWAYS
    ):
        c.waste_adjustment = -10.0

    return c


def score_action(action: CandidateAction, profile: LifestyleProfile) -> int:
    """Personal relevance score of ``action`` for ``profile``.

    Returns:
        Integer in [0, 100]; exactly 0 for hard-filtered actions.
    """
    components = compute_score_components(action, profile)
    if components is None:
        return 0
    return components.total


def build_reasoning(
    action: CandidateAction,
    profile: LifestyleProfile,
    components: Optional[ScoreComponents],
) -> str:
    """Assemble a human-readable explanation for an action's score.

    Returns a semicolon-separated list such as:
        "High impact per effort; Matches your public-transport willingness;
        Long commute makes transport changes count"
    """
    if components is None:
        reason = applicability_failure(action, profile) or "not applicable"
        return f"Filtered out: {reason}"

    reasons: list[str] = []

    if components.impact_efficiency >= 20.0:
        reasons.append("High impact per effort")
    elif components.impact_efficiency < 5.0:
        reasons.append("Low impact per effort")

    if components.willingness >= 12.0:
        reasons.append(f"Matches your {action.category.value} willingness")
    elif 0 < components.willingness <= 6.0:
        reasons.append(f"Low {action.category.value} willingness")

    if components.time_fit < 0:
        reasons.append("Demanding for your available time")

    if components.financial_efficiency >= 10.0:
        reasons.append("Strong savings relative to your grocery bill")

    if components.ac_adjustment > 0:
        reasons.append("Heavy AC use makes this valuable")
    elif components.ac_adjustment < 0:
        reasons.append("Little AC use to cut")

    if components.commute_adjustment > 0:
        reasons.append("Long commute makes transport changes count")
    elif components.commute_adjustment < 0:
        reasons.append("Short commute limits transport gains")

    if components.waste_adjustment < 0:
        reasons.append("You already recycle consistently")

    return "; ".join(reasons) or "No notable signals"
