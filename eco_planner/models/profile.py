"""
Lifestyle profile: the immutable input of every planning request.

``LifestyleProfile`` is frozen: a changed lifestyle produces a new profile
that supersedes the old one, it is never mutated in place.

Range checks live here (the validation boundary). The footprint estimator and
scorer assume a validated profile and never re-check ranges.

The model accepts both snake_case field names and the camelCase keys used by
the mobile client (``commuteDistance``, ``meatMealsPerWeek``, …)::

    LifestyleProfile.model_validate(json.loads(request_body))
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from eco_planner.taxonomy.action_taxonomy import (
    DietaryPreference,
    HomeOwnership,
    TimeAvailability,
    VehicleType,
    WasteRecycling,
)


class LifestyleProfile(BaseModel):
    """One user's lifestyle snapshot used to estimate and reduce their footprint.

    Attributes:
        commute_distance: Daily commute distance in km.
        vehicle_type: Primary commute vehicle.
        monthly_electricity: Household electricity use in kWh per month.
        age: Age in years.
        city: Free-text city name; informational only.
        dietary_preference: Self-reported diet.
        meat_meals_per_week: Meat meals per week (0–21).
        has_garden: Garden, terrace or balcony space available.
        home_ownership: ``own`` or ``rent``.
        household_size: People in the household (≥ 1).
        ac_usage_hours: Air-conditioner hours per day (0–24).
        waste_recycling: Recycling habit.
        monthly_grocery_bill: Monthly grocery spend in ₹.
        willingness_change_diet: 1 (unwilling) – 5 (very willing).
        willingness_public_transport: 1 (unwilling) – 5 (very willing).
        time_availability: Free time available for new habits.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    commute_distance: float
    vehicle_type: VehicleType
    monthly_electricity: float
    age: int
    city: str = ""
    dietary_preference: DietaryPreference
    meat_meals_per_week: int = 0
    has_garden: bool = False
    home_ownership: HomeOwnership
    household_size: int = 1
    ac_usage_hours: float = 0.0
    waste_recycling: WasteRecycling
    monthly_grocery_bill: float = 0.0
    willingness_change_diet: int = 3
    willingness_public_transport: int = 3
    time_availability: TimeAvailability = TimeAvailability.MEDIUM

    @field_validator("commute_distance", "monthly_electricity", "monthly_grocery_bill")
    @classmethod
    def validate_non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"value must be non-negative, got {v}.")
        return v

    @field_validator("age")
    @classmethod
    def validate_age(cls, v: int) -> int:
        if not 0 < v <= 120:
            raise ValueError(f"age must be in (0, 120], got {v}.")
        return v

    @field_validator("meat_meals_per_week")
    @classmethod
    def validate_meat_meals(cls, v: int) -> int:
        if not 0 <= v <= 21:
            raise ValueError(f"meat_meals_per_week must be in [0, 21], got {v}.")
        return v

    @field_validator("household_size")
    @classmethod
    def validate_household_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"household_size must be >= 1, got {v}.")
        return v

    @field_validator("ac_usage_hours")
    @classmethod
    def validate_ac_hours(cls, v: float) -> float:
        if not 0 <= v <= 24:
            raise ValueError(f"ac_usage_hours must be in [0, 24], got {v}.")
        return v

    @field_validator("willingness_change_diet", "willingness_public_transport")
    @classmethod
    def validate_willingness(cls, v: int) -> int:
        if not 1 <= v <= 5:
            raise ValueError(f"willingness must be in [1, 5], got {v}.")
        return v
