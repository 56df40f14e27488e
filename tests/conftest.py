"""
Shared pytest fixtures for the Eco Planner test suite.

Provides:
  - ``in_memory_db``: A fresh in-memory SQLite connection with the full
    schema applied. Created anew for each test that requests it.
  - ``seeded_db``: ``in_memory_db`` with the default catalog seeded.
  - ``sample_profile``: the reference single-person car commuter
    (6041.6 kg CO2/yr, 275 trees).
  - ``sample_profile_json``: the same profile as camelCase JSON.
  - ``make_action``: factory for ad-hoc ``CandidateAction`` objects.
"""

from __future__ import annotations

import sqlite3
from typing import Callable, Generator

import pytest

from eco_planner.catalog.default_actions import DEFAULT_ACTIONS
from eco_planner.db.repositories.action_repo import ActionRepository
from eco_planner.db.schema import apply_schema
from eco_planner.models.action import CandidateAction
from eco_planner.models.profile import LifestyleProfile
from eco_planner.taxonomy.action_taxonomy import (
    ActionCategory,
    DietaryPreference,
    HomeOwnership,
    PlanPhase,
    TimeAvailability,
    VehicleType,
    WasteRecycling,
)


# ── Database fixtures ─────────────────────────────────────────────────────────

@pytest.fixture
def in_memory_db() -> Generator[sqlite3.Connection, None, None]:
    """Yield a fresh in-memory SQLite connection with the full schema applied.

    Foreign key enforcement is ON. Connection is closed after the test.
    """
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON;")
    apply_schema(conn)
    yield conn
    conn.close()


@pytest.fixture
def seeded_db(in_memory_db: sqlite3.Connection) -> sqlite3.Connection:
    """``in_memory_db`` with the default catalog seeded."""
    ActionRepository(in_memory_db).seed_if_empty(DEFAULT_ACTIONS)
    in_memory_db.commit()
    return in_memory_db


# ── Sample domain objects ─────────────────────────────────────────────────────

SAMPLE_PROFILE_JSON = {
    "commuteDistance": 20,
    "vehicleType": "car",
    "monthlyElectricity": 200,
    "age": 30,
    "city": "Pune",
    "dietaryPreference": "non_vegetarian",
    "meatMealsPerWeek": 7,
    "hasGarden": False,
    "homeOwnership": "rent",
    "householdSize": 1,
    "acUsageHours": 0,
    "wasteRecycling": "sometimes",
    "monthlyGroceryBill": 5000,
    "willingnessChangeDiet": 3,
    "willingnessPublicTransport": 3,
    "timeAvailability": "medium",
}


@pytest.fixture
def sample_profile_json() -> dict:
    """The reference profile as the camelCase JSON a client would send."""
    return dict(SAMPLE_PROFILE_JSON)


@pytest.fixture
def sample_profile() -> LifestyleProfile:
    """Single-person car commuter: 6041.6 kg CO2/yr, 275 trees."""
    return LifestyleProfile(
        commute_distance=20,
        vehicle_type=VehicleType.CAR,
        monthly_electricity=200,
        age=30,
        city="Pune",
        dietary_preference=DietaryPreference.NON_VEGETARIAN,
        meat_meals_per_week=7,
        has_garden=False,
        home_ownership=HomeOwnership.RENT,
        household_size=1,
        ac_usage_hours=0,
        waste_recycling=WasteRecycling.SOMETIMES,
        monthly_grocery_bill=5000,
        willingness_change_diet=3,
        willingness_public_transport=3,
        time_availability=TimeAvailability.MEDIUM,
    )


@pytest.fixture
def make_action() -> Callable[..., CandidateAction]:
    """Factory for a plain energy action; pass keyword overrides."""

    def _make(**overrides) -> CandidateAction:
        fields = dict(
            name="Test action",
            category=ActionCategory.ENERGY,
            carbon_saved_kg=10.0,
            monthly_savings=0,
            upfront_cost=0,
            difficulty=2,
            phase=PlanPhase.IMMEDIATE,
            trees_equivalent=0.1,
        )
        fields.update(overrides)
        return CandidateAction(**fields)

    return _make
