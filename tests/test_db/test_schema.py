"""Tests for SQLite schema: idempotency, table/index creation, FK enforcement."""

from __future__ import annotations

import sqlite3

import pytest

from eco_planner.db.schema import (
    ALL_TABLE_NAMES,
    apply_schema,
    get_existing_indexes,
    get_existing_tables,
)


class TestApplySchema:
    def test_all_tables_created(self, in_memory_db):
        tables = get_existing_tables(in_memory_db)
        for expected_table in ALL_TABLE_NAMES:
            assert expected_table in tables, (
                f"Expected table '{expected_table}' not found in database. "
                f"Found: {tables}"
            )

    def test_no_internal_tables_listed(self, in_memory_db):
        tables = get_existing_tables(in_memory_db)
        assert sorted(tables) == sorted(ALL_TABLE_NAMES)

    def test_idempotent_double_apply(self, in_memory_db):
        """apply_schema() called twice must not raise errors."""
        apply_schema(in_memory_db)
        assert sorted(get_existing_tables(in_memory_db)) == sorted(ALL_TABLE_NAMES)

    def test_key_indexes_created(self, in_memory_db):
        indexes = get_existing_indexes(in_memory_db)
        assert indexes == ["idx_actions_active", "idx_plan_actions_plan"]


class TestConstraints:
    def test_fk_enforcement_is_on(self, in_memory_db):
        row = in_memory_db.execute("PRAGMA foreign_keys;").fetchone()
        assert row[0] == 1, "PRAGMA foreign_keys should be 1 (enabled)"

    def test_plan_action_needs_existing_plan(self, in_memory_db):
        with pytest.raises(sqlite3.IntegrityError):
            in_memory_db.execute(
                """
                INSERT INTO user_plan_actions (plan_id, action_id, phase, score)
                VALUES (999, 1, 'immediate', 50);
                """
            )

    def test_action_name_unique(self, in_memory_db):
        sql = (
            "INSERT INTO eco_actions (name, category, carbon_saved_kg, difficulty, phase) "
            "VALUES ('Dup', 'energy', 1.0, 1, 'immediate');"
        )
        in_memory_db.execute(sql)
        with pytest.raises(sqlite3.IntegrityError):
            in_memory_db.execute(sql)

    def test_one_plan_per_user(self, in_memory_db):
        sql = (
            "INSERT INTO user_eco_plans "
            "(user_id, plan_json, annual_co2_kg, trees_needed, generated_at, expires_at) "
            "VALUES ('u1', '{}', 1.0, 1, '2026-01-01', '2027-01-01');"
        )
        in_memory_db.execute(sql)
        with pytest.raises(sqlite3.IntegrityError):
            in_memory_db.execute(sql)


class TestTableStructure:
    def test_eco_actions_columns(self, in_memory_db):
        cols = [
            row[1]
            for row in in_memory_db.execute("PRAGMA table_info(eco_actions);").fetchall()
        ]
        for col in ("name", "category", "carbon_saved_kg", "phase", "tags", "is_active"):
            assert col in cols

    def test_user_plan_actions_columns(self, in_memory_db):
        cols = [
            row[1]
            for row in in_memory_db.execute("PRAGMA table_info(user_plan_actions);").fetchall()
        ]
        assert "is_completed" in cols
        assert "completed_at" in cols
