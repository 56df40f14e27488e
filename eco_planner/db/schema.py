"""
SQLite schema DDL: all CREATE TABLE and CREATE INDEX statements.

Every statement uses ``IF NOT EXISTS`` so ``apply_schema()`` is idempotent
(safe on restart and in tests).

Creation order follows foreign keys:
  1. eco_actions          (no FKs; UNIQUE name is the seeding key)
  2. lifestyle_profiles   (no FKs; one row per user)
  3. user_eco_plans       (no FKs; UNIQUE user_id, at most one plan per user)
  4. user_plan_actions    (→ user_eco_plans ON DELETE CASCADE, eco_actions)

Set-valued action attributes (vehicles, diets, tags) are stored as JSON
arrays of enum values, sorted for stable row content.
"""

from __future__ import annotations

import logging
import sqlite3

logger = logging.getLogger(__name__)

# ── DDL statements ─────────────────────────────────────────────────────────────

_DDL_ECO_ACTIONS = """
CREATE TABLE IF NOT EXISTS eco_actions (
    action_id               INTEGER PRIMARY KEY AUTOINCREMENT,
    name                    TEXT    NOT NULL UNIQUE,
    category                TEXT    NOT NULL,
    description             TEXT    NOT NULL DEFAULT '',
    icon                    TEXT    NOT NULL DEFAULT '',
    tips                    TEXT    NOT NULL DEFAULT '',
    carbon_saved_kg         REAL    NOT NULL,
    monthly_savings         INTEGER NOT NULL DEFAULT 0,
    upfront_cost            INTEGER NOT NULL DEFAULT 0,
    difficulty              INTEGER NOT NULL,
    phase                   TEXT    NOT NULL,
    trees_equivalent        REAL    NOT NULL DEFAULT 0,
    requires_garden         INTEGER NOT NULL DEFAULT 0,
    requires_home_ownership INTEGER NOT NULL DEFAULT 0,
    min_household_size      INTEGER NOT NULL DEFAULT 1,
    applicable_vehicles     TEXT    NOT NULL DEFAULT '[]',
    applicable_diets        TEXT    NOT NULL DEFAULT '[]',
    tags                    TEXT    NOT NULL DEFAULT '[]',
    is_active               INTEGER NOT NULL DEFAULT 1,
    created_at              TEXT    NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ', 'now'))
);
"""

_DDL_ECO_ACTIONS_INDEXES = """
CREATE INDEX IF NOT EXISTS idx_actions_active
    ON eco_actions(is_active);
"""

_DDL_LIFESTYLE_PROFILES = """
CREATE TABLE IF NOT EXISTS lifestyle_profiles (
    user_id      TEXT    PRIMARY KEY,
    profile_json TEXT    NOT NULL,
    updated_at   TEXT    NOT NULL
);
"""

_DDL_USER_ECO_PLANS = """
CREATE TABLE IF NOT EXISTS user_eco_plans (
    plan_id            INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id            TEXT    NOT NULL UNIQUE,
    plan_json          TEXT    NOT NULL,
    annual_co2_kg      REAL    NOT NULL,
    trees_needed       INTEGER NOT NULL,
    completion_percent INTEGER NOT NULL DEFAULT 0,
    generated_at       TEXT    NOT NULL,
    expires_at         TEXT    NOT NULL
);
"""

_DDL_USER_PLAN_ACTIONS = """
CREATE TABLE IF NOT EXISTS user_plan_actions (
    record_id    INTEGER PRIMARY KEY AUTOINCREMENT,
    plan_id      INTEGER NOT NULL REFERENCES user_eco_plans(plan_id) ON DELETE CASCADE,
    action_id    INTEGER NOT NULL REFERENCES eco_actions(action_id),
    phase        TEXT    NOT NULL,
    score        INTEGER NOT NULL,
    is_completed INTEGER NOT NULL DEFAULT 0,
    completed_at TEXT,
    UNIQUE(plan_id, action_id)
);
"""

_DDL_USER_PLAN_ACTIONS_INDEXES = """
CREATE INDEX IF NOT EXISTS idx_plan_actions_plan
    ON user_plan_actions(plan_id);
"""

# ── Ordered list of all DDL to apply ──────────────────────────────────────────

_ALL_DDL: list[str] = [
    _DDL_ECO_ACTIONS,
    _DDL_ECO_ACTIONS_INDEXES,
    _DDL_LIFESTYLE_PROFILES,
    _DDL_USER_ECO_PLANS,
    _DDL_USER_PLAN_ACTIONS,
    _DDL_USER_PLAN_ACTIONS_INDEXES,
]

# Table names for introspection / tests
ALL_TABLE_NAMES = [
    "eco_actions",
    "lifestyle_profiles",
    "user_eco_plans",
    "user_plan_actions",
]


def apply_schema(conn: sqlite3.Connection) -> None:
    """Apply all DDL statements to ``conn``.

    Idempotent; each statement carries an ``IF NOT EXISTS`` guard.

    Args:
        conn: An open ``sqlite3.Connection`` (FK enforcement should be ON).
    """
    logger.debug("Applying schema to database...")

    for ddl in _ALL_DDL:
        for statement in _split_ddl(ddl):
            conn.execute(statement)

    conn.commit()
    logger.info("Schema applied: %d tables, indexes created/verified.", len(ALL_TABLE_NAMES))


def _split_ddl(ddl: str) -> list[str]:
    """Split a multi-statement DDL block on semicolons."""
    return [s.strip() for s in ddl.split(";") if s.strip()]


def get_existing_tables(conn: sqlite3.Connection) -> list[str]:
    """Return table names present in the database, sorted alphabetically."""
    rows = conn.execute(
        "SELECT name FROM sqlite_master "
        "WHERE type='table' AND name NOT LIKE 'sqlite_%' ORDER BY name;"
    ).fetchall()
    return [row["name"] for row in rows]


def get_existing_indexes(conn: sqlite3.Connection) -> list[str]:
    """Return explicitly created index names, sorted alphabetically."""
    rows = conn.execute(
        "SELECT name FROM sqlite_master "
        "WHERE type='index' AND name LIKE 'idx_%' ORDER BY name;"
    ).fetchall()
    return [row["name"] for row in rows]
