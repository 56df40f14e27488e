"""
Per-activity and per-bill carbon factors for daily activity logging.

``calculate_activity_carbon`` converts one logged activity (e.g. 12 km
``transport/drove_car``) into kg CO₂. Waste factors are negative: recycling
and composting offset emissions.

Unknown ``category/activity`` pairs raise ``UnknownActivityError``; there is
no fallback factor, because a missing factor means the client and the factor
table disagree (a data-integrity problem, not user error).
"""

from __future__ import annotations

from dataclasses import dataclass

from eco_planner.errors import UnknownActivityError
from eco_planner.utils.numeric import round_half_up

ACTIVITY_CARBON_FACTORS: dict[str, dict[str, float]] = {
    "transport": {
        "drove_car":        0.21,   # per km
        "public_transport": 0.05,   # per km
        "cycled_walked":    0.0,
        "motorbike":        0.11,   # per km
    },
    "food": {
        "meat_meal":        3.3,    # per meal
        "vegetarian_meal":  1.0,
        "vegan_meal":       0.5,
    },
    "energy": {
        "ac_usage":         1.5,    # per hour
        "geyser_usage":     2.0,    # per hour
        "washing_machine":  0.6,    # per load
    },
    "waste": {
        "recycled":        -0.5,    # per kg
        "composted":       -0.3,    # per kg
    },
}

CATEGORY_UNITS: dict[str, str] = {
    "transport": "km",
    "food":      "meals",
    "energy":    "hours",
    "waste":     "kg",
}

# kg CO₂ per unit on a utility bill
BILL_EMISSION_FACTORS: dict[str, float] = {
    "electricity": 0.85,   # per kWh
    "gas":         2.0,    # per therm
    "water":       0.36,   # per kL
}


@dataclass(frozen=True)
class ActivityOption:
    category:  str
    activity:  str
    factor:    float
    unit:      str
    is_offset: bool


def calculate_activity_carbon(category: str, activity: str, value: float) -> float:
    """Return kg CO₂ for ``value`` units of ``category/activity`` (2dp).

    Raises:
        UnknownActivityError: If the pair has no factor.
    """
    factor = ACTIVITY_CARBON_FACTORS.get(category, {}).get(activity)
    if factor is None:
        raise UnknownActivityError(category, activity)
    return round_half_up(value * factor, 2)


def calculate_bill_emission(total_units: float, bill_type: str) -> float:
    """Return kg CO₂ for a utility bill of ``total_units`` (2dp).

    Raises:
        UnknownActivityError: If ``bill_type`` has no emission factor.
    """
    factor = BILL_EMISSION_FACTORS.get(bill_type)
    if factor is None:
        raise UnknownActivityError(bill_type)
    return round_half_up(total_units * factor, 2)


def activity_options() -> list[ActivityOption]:
    """List every loggable activity with its factor and unit."""
    return [
        ActivityOption(
            category=category,
            activity=activity,
            factor=factor,
            unit=CATEGORY_UNITS[category],
            is_offset=factor < 0,
        )
        for category, activities in ACTIVITY_CARBON_FACTORS.items()
        for activity, factor in activities.items()
    ]
