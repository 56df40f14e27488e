"""Tests for repository round-trip operations using in-memory SQLite."""

from __future__ import annotations

import sqlite3
from datetime import datetime, timedelta, timezone

import pytest

from eco_planner.catalog.default_actions import DEFAULT_ACTIONS
from eco_planner.db.repositories.action_repo import ActionRepository
from eco_planner.db.repositories.plan_repo import PlanRepository, ProfileRepository
from eco_planner.models.plan import PlanActionRecord, StoredPlan
from eco_planner.recommendations.selector import select_plan
from eco_planner.taxonomy.action_taxonomy import (
    ActionTag,
    DietaryPreference,
    PlanPhase,
    VehicleType,
)

_NOW = datetime(2026, 2, 1, 12, 0, tzinfo=timezone.utc)


# ── Helpers ────────────────────────────────────────────────────────────────────

def _insert_plan(conn, profile, user_id: str = "u1") -> int:
    actions = ActionRepository(conn).list_active_actions()
    stored = StoredPlan(
        user_id=user_id,
        plan=select_plan(actions, profile),
        generated_at=_NOW,
        expires_at=_NOW + timedelta(days=365),
    )
    return PlanRepository(conn).insert(stored)


def _insert_records(conn, plan_id: int, action_ids: list[int]) -> None:
    PlanRepository(conn).insert_actions(
        [
            PlanActionRecord(plan_id=plan_id, action_id=a, phase=PlanPhase.IMMEDIATE, score=60)
            for a in action_ids
        ]
    )


# ── ActionRepository ───────────────────────────────────────────────────────────

class TestActionRepository:
    def test_insert_and_get(self, in_memory_db, make_action):
        repo = ActionRepository(in_memory_db)
        action = make_action(
            name="Bike twice a week",
            applicable_vehicles=frozenset({VehicleType.CAR, VehicleType.BIKE}),
            applicable_diets=frozenset({DietaryPreference.VEGAN}),
            tags=frozenset({ActionTag.CYCLING}),
            requires_garden=True,
        )
        action_id = repo.insert(action)
        fetched = repo.get_by_id(action_id)

        assert fetched is not None
        assert fetched.action_id == action_id
        assert fetched == action.model_copy(update={"action_id": action_id})

    def test_duplicate_name_raises(self, in_memory_db, make_action):
        repo = ActionRepository(in_memory_db)
        repo.insert(make_action(name="Same"))
        with pytest.raises(sqlite3.IntegrityError):
            repo.insert(make_action(name="Same"))

    def test_get_missing(self, in_memory_db):
        repo = ActionRepository(in_memory_db)
        assert repo.get_by_id(404) is None
        assert repo.get_by_name("nope") is None

    def test_seed_if_empty(self, in_memory_db):
        repo = ActionRepository(in_memory_db)
        inserted = repo.seed_if_empty(DEFAULT_ACTIONS)
        assert inserted == len(DEFAULT_ACTIONS)
        assert repo.count() == len(DEFAULT_ACTIONS)

    def test_seed_twice_is_noop(self, seeded_db):
        repo = ActionRepository(seeded_db)
        assert repo.seed_if_empty(DEFAULT_ACTIONS) == 0
        assert repo.count() == len(DEFAULT_ACTIONS)

    def test_seed_skips_names_inserted_by_another_writer(
        self, in_memory_db, make_action, monkeypatch
    ):
        """A row that lands between the count check and the inserts is kept."""
        repo = ActionRepository(in_memory_db)
        repo.insert(make_action(name="Switch to LED bulbs", carbon_saved_kg=1.0))
        monkeypatch.setattr(repo, "count", lambda: 0)

        inserted = repo.seed_if_empty(DEFAULT_ACTIONS)

        assert inserted == len(DEFAULT_ACTIONS) - 1
        assert repo._count("eco_actions") == len(DEFAULT_ACTIONS)
        assert repo.get_by_name("Switch to LED bulbs").carbon_saved_kg == 1.0

    def test_seed_duplicate_names_in_defaults(self, in_memory_db, make_action):
        repo = ActionRepository(in_memory_db)
        defaults = [
            make_action(name="A"),
            make_action(name="A", carbon_saved_kg=99.0),
            make_action(name="B"),
        ]
        assert repo.seed_if_empty(defaults) == 2
        assert [a.name for a in repo.list_all()] == ["A", "B"]
        assert repo.get_by_name("A").carbon_saved_kg == 10.0

    def test_catalog_order_preserved(self, seeded_db):
        names = [a.name for a in ActionRepository(seeded_db).list_all()]
        assert names == [a.name for a in DEFAULT_ACTIONS]

    def test_set_active(self, seeded_db):
        repo = ActionRepository(seeded_db)
        first = repo.list_all()[0]
        assert repo.set_active(first.action_id, False) is True
        active = repo.list_active_actions()
        assert first.action_id not in {a.action_id for a in active}
        assert len(active) == len(DEFAULT_ACTIONS) - 1
        assert repo.set_active(9999, False) is False

    def test_get_by_ids(self, seeded_db):
        repo = ActionRepository(seeded_db)
        found = repo.get_by_ids([1, 2, 2, 9999])
        assert set(found) == {1, 2}
        assert repo.get_by_ids([]) == {}


# ── ProfileRepository ──────────────────────────────────────────────────────────

class TestProfileRepository:
    def test_upsert_round_trip(self, in_memory_db, sample_profile):
        repo = ProfileRepository(in_memory_db)
        repo.upsert("u1", sample_profile, _NOW)
        assert repo.get("u1") == sample_profile

    def test_upsert_replaces(self, in_memory_db, sample_profile):
        repo = ProfileRepository(in_memory_db)
        repo.upsert("u1", sample_profile, _NOW)
        changed = sample_profile.model_copy(update={"household_size": 4})
        repo.upsert("u1", changed, _NOW + timedelta(days=1))
        assert repo.get("u1").household_size == 4

    def test_missing(self, in_memory_db):
        assert ProfileRepository(in_memory_db).get("ghost") is None


# ── PlanRepository ─────────────────────────────────────────────────────────────

class TestPlanRepository:
    def test_insert_and_get(self, seeded_db, sample_profile):
        plan_id = _insert_plan(seeded_db, sample_profile)
        repo = PlanRepository(seeded_db)

        stored = repo.get_by_user("u1")
        assert stored is not None
        assert stored.plan_id == plan_id
        assert stored.generated_at == _NOW
        assert stored.plan.trees_needed == 275
        assert stored.plan == select_plan(
            ActionRepository(seeded_db).list_active_actions(), sample_profile
        )
        assert repo.get_by_id(plan_id) == stored

    def test_second_plan_for_user_raises(self, seeded_db, sample_profile):
        _insert_plan(seeded_db, sample_profile)
        with pytest.raises(sqlite3.IntegrityError):
            _insert_plan(seeded_db, sample_profile)

    def test_delete_cascades_actions(self, seeded_db, sample_profile):
        plan_id = _insert_plan(seeded_db, sample_profile)
        _insert_records(seeded_db, plan_id, [1, 2, 3])
        repo = PlanRepository(seeded_db)

        assert repo.delete_for_user("u1") == 1
        assert repo.get_by_user("u1") is None
        assert repo.list_actions(plan_id) == []
        n = seeded_db.execute("SELECT COUNT(*) FROM user_plan_actions;").fetchone()[0]
        assert n == 0

    def test_completion_round_trip(self, seeded_db, sample_profile):
        plan_id = _insert_plan(seeded_db, sample_profile)
        _insert_records(seeded_db, plan_id, [1, 2])
        repo = PlanRepository(seeded_db)

        record = repo.set_action_completion(plan_id, 2, True, _NOW)
        assert record.is_completed is True
        assert record.completed_at == _NOW
        assert repo.count_completion(plan_id) == (1, 2)

        record = repo.set_action_completion(plan_id, 2, False, None)
        assert record.is_completed is False
        assert record.completed_at is None
        assert repo.count_completion(plan_id) == (0, 2)

    def test_completion_unknown_action(self, seeded_db, sample_profile):
        plan_id = _insert_plan(seeded_db, sample_profile)
        _insert_records(seeded_db, plan_id, [1])
        assert PlanRepository(seeded_db).set_action_completion(plan_id, 7, True, _NOW) is None

    def test_count_completion_empty_plan(self, seeded_db, sample_profile):
        plan_id = _insert_plan(seeded_db, sample_profile)
        assert PlanRepository(seeded_db).count_completion(plan_id) == (0, 0)

    def test_update_completion_percent(self, seeded_db, sample_profile):
        plan_id = _insert_plan(seeded_db, sample_profile)
        repo = PlanRepository(seeded_db)
        repo.update_completion_percent(plan_id, 42)
        assert repo.get_by_id(plan_id).completion_percent == 42

    def test_list_actions_in_insert_order(self, seeded_db, sample_profile):
        plan_id = _insert_plan(seeded_db, sample_profile)
        _insert_records(seeded_db, plan_id, [5, 2, 9])
        ids = [r.action_id for r in PlanRepository(seeded_db).list_actions(plan_id)]
        assert ids == [5, 2, 9]

    def test_list_actions_keeps_phase_order_over_score(self, seeded_db, sample_profile):
        plan_id = _insert_plan(seeded_db, sample_profile)
        PlanRepository(seeded_db).insert_actions(
            [
                PlanActionRecord(plan_id=plan_id, action_id=1, phase=PlanPhase.IMMEDIATE, score=40),
                PlanActionRecord(plan_id=plan_id, action_id=2, phase=PlanPhase.LONG_TERM, score=95),
            ]
        )
        records = PlanRepository(seeded_db).list_actions(plan_id)
        assert [(r.action_id, r.score) for r in records] == [(1, 40), (2, 95)]
