"""
Annual carbon footprint and tree-debt estimate from a lifestyle profile.

Additive model (kg CO₂ per year), each term derived independently::

    transport    = commute_km × vehicle_factor × 365
    electricity  = monthly_kwh × 0.85 × 12
    ac           = ac_hours × 1.5 kW × 30 days × 6 summer months × 0.85
    diet         = diet_baseline  (non-vegetarian scaled by meat_meals / 7)
    waste        = waste_per_person × household_size

    annual = (transport + electricity + ac + diet + waste)
             × (1 + (household_size − 1) × 0.3) / household_size

    trees_needed = ceil(annual / 22)

The household correction is applied to the whole total, including the waste
term that was already multiplied by household size. This reproduces the
reference figures exactly; changing it is a product decision.

Pure function, no I/O, no error conditions for a validated profile.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from eco_planner.models.profile import LifestyleProfile
from eco_planner.taxonomy.action_taxonomy import (
    DietaryPreference,
    VehicleType,
    WasteRecycling,
    require_exhaustive,
)

CO2_PER_TREE_PER_YEAR = 22.0  # kg CO₂ absorbed by one mature tree per year
GRID_FACTOR = 0.85            # kg CO₂ per kWh

AC_POWER_KW = 1.5
AC_DAYS_PER_MONTH = 30
AC_SUMMER_MONTHS = 6

HOUSEHOLD_SHARING_FACTOR = 0.3

VEHICLE_FACTORS: dict[VehicleType, float] = {
    VehicleType.CAR:              0.192,
    VehicleType.BIKE:             0.103,
    VehicleType.PUBLIC_TRANSPORT: 0.041,
    VehicleType.NONE:             0.0,
}

DIET_BASELINES: dict[DietaryPreference, float] = {
    DietaryPreference.NON_VEGETARIAN: 2500.0,
    DietaryPreference.FLEXITARIAN:    1800.0,
    DietaryPreference.VEGETARIAN:     1200.0,
    DietaryPreference.VEGAN:           900.0,
}

# Baseline non-vegetarian diet assumes one meat meal per day.
BASELINE_MEAT_MEALS_PER_WEEK = 7

WASTE_PER_PERSON: dict[WasteRecycling, float] = {
    WasteRecycling.ALWAYS:     50.0,
    WasteRecycling.SOMETIMES: 100.0,
    WasteRecycling.NEVER:     200.0,
}

require_exhaustive(VEHICLE_FACTORS, VehicleType, "VEHICLE_FACTORS")
require_exhaustive(DIET_BASELINES, DietaryPreference, "DIET_BASELINES")
require_exhaustive(WASTE_PER_PERSON, WasteRecycling, "WASTE_PER_PERSON")


@dataclass(frozen=True)
class FootprintEstimate:
    """Annual footprint with its per-term breakdown.

    Attributes:
        transport_kg:     Commute emissions before household correction.
        electricity_kg:   Grid electricity emissions before correction.
        ac_kg:            Air-conditioning emissions before correction.
        diet_kg:          Diet emissions before correction.
        waste_kg:         Household waste emissions before correction.
        household_factor: Multiplier applied to the summed terms.
        annual_co2_kg:    Corrected annual total (unrounded).
        trees_needed:     ``ceil(annual_co2_kg / 22)``.
    """

    transport_kg:     float
    electricity_kg:   float
    ac_kg:            float
    diet_kg:          float
    waste_kg:         float
    household_factor: float
    annual_co2_kg:    float
    trees_needed:     int

    @property
    def subtotal_kg(self) -> float:
        """Sum of the five terms before the household correction."""
        return (
            self.transport_kg
            + self.electricity_kg
            + self.ac_kg
            + self.diet_kg
            + self.waste_kg
        )


def estimate_footprint(profile: LifestyleProfile) -> FootprintEstimate:
    """Estimate annual CO₂ emissions and tree debt for ``profile``.

    Args:
        profile: Validated lifestyle profile.

    Returns:
        ``FootprintEstimate``; identical profiles always give identical results.
    """
    transport = profile.commute_distance * VEHICLE_FACTORS[profile.vehicle_type] * 365
    electricity = profile.monthly_electricity * GRID_FACTOR * 12
    ac = (
        profile.ac_usage_hours
        * AC_POWER_KW
        * AC_DAYS_PER_MONTH
        * AC_SUMMER_MONTHS
        * GRID_FACTOR
    )

    diet = DIET_BASELINES[profile.dietary_preference]
    if profile.dietary_preference == DietaryPreference.NON_VEGETARIAN:
        diet = diet * (profile.meat_meals_per_week / BASELINE_MEAT_MEALS_PER_WEEK)

    waste = WASTE_PER_PERSON[profile.waste_recycling] * profile.household_size

    household_factor = (
        1 + (profile.household_size - 1) * HOUSEHOLD_SHARING_FACTOR
    ) / profile.household_size

    annual = (transport + electricity + ac + diet + waste) * household_factor
    annual = max(0.0, annual)

    return FootprintEstimate(
        transport_kg=transport,
        electricity_kg=electricity,
        ac_kg=ac,
        diet_kg=diet,
        waste_kg=waste,
        household_factor=household_factor,
        annual_co2_kg=annual,
        trees_needed=trees_for_co2(annual),
    )


def trees_for_co2(annual_co2_kg: float) -> int:
    """Trees whose yearly absorption offsets ``annual_co2_kg`` (rounded up)."""
    return max(0, math.ceil(annual_co2_kg / CO2_PER_TREE_PER_YEAR))
