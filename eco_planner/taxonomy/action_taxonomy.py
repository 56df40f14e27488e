"""
Closed taxonomies for lifestyle profiles and eco actions.

Every factor table in the planner (vehicle emission factors, diet baselines,
waste factors, time bonuses, category caps) is keyed by one of these enums and
must cover every member. ``require_exhaustive()`` enforces that at import time
of the module that owns the table, so adding a new ``VehicleType`` without a
factor fails immediately instead of silently falling back to a default.

Usage example::

    from eco_planner.taxonomy.action_taxonomy import ActionCategory, PlanPhase

    category = ActionCategory.ENERGY
    phase    = PlanPhase.IMMEDIATE

This module has NO imports from any other ``eco_planner`` package.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any


class VehicleType(StrEnum):
    """Primary vehicle used for the daily commute."""

    CAR = "car"
    BIKE = "bike"
    """Motorbike / scooter (not a bicycle)."""

    PUBLIC_TRANSPORT = "public_transport"
    NONE = "none"


class DietaryPreference(StrEnum):
    """Self-reported diet."""

    NON_VEGETARIAN = "non_vegetarian"
    VEGETARIAN = "vegetarian"
    VEGAN = "vegan"
    FLEXITARIAN = "flexitarian"


class HomeOwnership(StrEnum):
    OWN = "own"
    RENT = "rent"


class WasteRecycling(StrEnum):
    """How often household waste is segregated for recycling."""

    ALWAYS = "always"
    SOMETIMES = "sometimes"
    NEVER = "never"


class TimeAvailability(StrEnum):
    """Free time the user can invest in lifestyle changes."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ActionCategory(StrEnum):
    """Top-level grouping of catalog actions; drives diversity caps."""

    ENERGY = "energy"
    TRANSPORT = "transport"
    DIET = "diet"
    WASTE = "waste"
    TREE_PLANTING = "tree_planting"


class PlanPhase(StrEnum):
    """Sequential time bucket of a generated plan.

    Declaration order is plan order: immediate → short_term → medium_term → long_term.
    """

    IMMEDIATE = "immediate"
    SHORT_TERM = "short_term"
    MEDIUM_TERM = "medium_term"
    LONG_TERM = "long_term"


class ActionTag(StrEnum):
    """Behaviour tags assigned when a catalog action is authored.

    Tags drive scoring adjustments and health-benefit flags; display names
    are never inspected.
    """

    AC_RELATED = "ac_related"
    """Action changes air-conditioner usage (AC hour bonus/penalty applies)."""

    WALKING = "walking"
    CYCLING = "cycling"


PHASE_ORDER: tuple[PlanPhase, ...] = tuple(PlanPhase)


def require_exhaustive(table: Mapping[Any, Any], enum_cls: type[StrEnum], name: str) -> None:
    """Raise ``ValueError`` unless ``table`` has a key for every member of ``enum_cls``.

    Args:
        table:    Factor table keyed by enum members.
        enum_cls: The enum the table must cover.
        name:     Table name used in the error message.
    """
    missing = [m.value for m in enum_cls if m not in table]
    if missing:
        raise ValueError(f"{name} is missing entries for {enum_cls.__name__}: {missing}")
