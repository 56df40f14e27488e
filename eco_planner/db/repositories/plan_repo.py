"""
Repositories for lifestyle profiles and persisted plans.

  lifestyle_profiles  -- latest profile per user (JSON, camelCase keys)
  user_eco_plans      -- at most one plan per user (full GeneratedPlan JSON)
  user_plan_actions   -- one row per selected action with its completion flag

Cooldown and expiry policy is not enforced here; ``EcoPlanService`` decides
when a plan is replaced and wraps the replace in a single transaction.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from typing import Optional

from eco_planner.db.repositories.base import BaseRepository
from eco_planner.models.plan import GeneratedPlan, PlanActionRecord, StoredPlan
from eco_planner.models.profile import LifestyleProfile
from eco_planner.utils.time_utils import from_iso, to_iso

logger = logging.getLogger(__name__)


class ProfileRepository(BaseRepository):
    """Read/write access to the ``lifestyle_profiles`` table."""

    def upsert(self, user_id: str, profile: LifestyleProfile, updated_at: datetime) -> None:
        """Store ``profile`` as the user's current profile, replacing any previous one."""
        self.execute(
            """
            INSERT INTO lifestyle_profiles (user_id, profile_json, updated_at)
            VALUES (?, ?, ?)
            ON CONFLICT(user_id) DO UPDATE SET
                profile_json = excluded.profile_json,
                updated_at   = excluded.updated_at;
            """,
            (user_id, profile.model_dump_json(by_alias=True), to_iso(updated_at)),
        )

    def get(self, user_id: str) -> Optional[LifestyleProfile]:
        row = self.fetchone(
            "SELECT profile_json FROM lifestyle_profiles WHERE user_id = ?;", (user_id,)
        )
        return LifestyleProfile.model_validate_json(row["profile_json"]) if row else None


class PlanRepository(BaseRepository):
    """Read/write access to ``user_eco_plans`` and ``user_plan_actions``."""

    # ── Plans ─────────────────────────────────────────────────────────────────

    def insert(self, plan: StoredPlan) -> int:
        """Insert a plan row.

        Raises:
            sqlite3.IntegrityError: If the user already has a plan.

        Returns:
            The newly assigned ``plan_id``.
        """
        self.execute(
            """
            INSERT INTO user_eco_plans (
                user_id, plan_json, annual_co2_kg, trees_needed,
                completion_percent, generated_at, expires_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?);
            """,
            (
                plan.user_id,
                plan.plan.model_dump_json(),
                plan.plan.annual_co2_kg,
                plan.plan.trees_needed,
                plan.completion_percent,
                to_iso(plan.generated_at),
                to_iso(plan.expires_at),
            ),
        )
        return self.last_insert_rowid()

    def get_by_user(self, user_id: str) -> Optional[StoredPlan]:
        row = self.fetchone("SELECT * FROM user_eco_plans WHERE user_id = ?;", (user_id,))
        return _row_to_plan(row) if row else None

    def get_by_id(self, plan_id: int) -> Optional[StoredPlan]:
        row = self.fetchone("SELECT * FROM user_eco_plans WHERE plan_id = ?;", (plan_id,))
        return _row_to_plan(row) if row else None

    def delete_for_user(self, user_id: str) -> int:
        """Delete the user's plan; its action rows cascade. Returns rows deleted."""
        cur = self.execute("DELETE FROM user_eco_plans WHERE user_id = ?;", (user_id,))
        return cur.rowcount

    def update_completion_percent(self, plan_id: int, percent: int) -> None:
        self.execute(
            "UPDATE user_eco_plans SET completion_percent = ? WHERE plan_id = ?;",
            (percent, plan_id),
        )

    # ── Plan actions ──────────────────────────────────────────────────────────

    def insert_actions(self, records: list[PlanActionRecord]) -> None:
        """Insert the plan-action rows of a freshly created plan."""
        self.executemany(
            """
            INSERT INTO user_plan_actions (
                plan_id, action_id, phase, score, is_completed, completed_at
            ) VALUES (?, ?, ?, ?, ?, ?);
            """,
            [
                (
                    r.plan_id,
                    r.action_id,
                    r.phase.value,
                    r.score,
                    int(r.is_completed),
                    to_iso(r.completed_at),
                )
                for r in records
            ],
        )

    def list_actions(self, plan_id: int) -> list[PlanActionRecord]:
        """Plan-action rows in plan order (phase by phase, best score first
        within a phase), not globally by score."""
        rows = self.fetchall(
            "SELECT * FROM user_plan_actions WHERE plan_id = ? ORDER BY record_id;",
            (plan_id,),
        )
        return [_row_to_record(r) for r in rows]

    def get_action(self, plan_id: int, action_id: int) -> Optional[PlanActionRecord]:
        row = self.fetchone(
            "SELECT * FROM user_plan_actions WHERE plan_id = ? AND action_id = ?;",
            (plan_id, action_id),
        )
        return _row_to_record(row) if row else None

    def set_action_completion(
        self,
        plan_id: int,
        action_id: int,
        is_completed: bool,
        completed_at: Optional[datetime],
    ) -> Optional[PlanActionRecord]:
        """Set the completion flag and timestamp of one plan action.

        Returns:
            The updated record, or ``None`` if the action is not in the plan.
        """
        cur = self.execute(
            """
            UPDATE user_plan_actions
               SET is_completed = ?, completed_at = ?
             WHERE plan_id = ? AND action_id = ?;
            """,
            (int(is_completed), to_iso(completed_at), plan_id, action_id),
        )
        if cur.rowcount == 0:
            return None
        return self.get_action(plan_id, action_id)

    def count_completion(self, plan_id: int) -> tuple[int, int]:
        """Return ``(completed, total)`` plan-action counts."""
        row = self.fetchone(
            """
            SELECT COALESCE(SUM(is_completed), 0) AS done, COUNT(*) AS total
              FROM user_plan_actions
             WHERE plan_id = ?;
            """,
            (plan_id,),
        )
        assert row is not None
        return int(row["done"]), int(row["total"])


# ── Private helpers ────────────────────────────────────────────────────────────

def _row_to_plan(row: sqlite3.Row) -> StoredPlan:
    return StoredPlan(
        plan_id=row["plan_id"],
        user_id=row["user_id"],
        plan=GeneratedPlan.model_validate_json(row["plan_json"]),
        completion_percent=row["completion_percent"],
        generated_at=from_iso(row["generated_at"]),
        expires_at=from_iso(row["expires_at"]),
    )


def _row_to_record(row: sqlite3.Row) -> PlanActionRecord:
    return PlanActionRecord(
        record_id=row["record_id"],
        plan_id=row["plan_id"],
        action_id=row["action_id"],
        phase=row["phase"],
        score=row["score"],
        is_completed=bool(row["is_completed"]),
        completed_at=from_iso(row["completed_at"]),
    )
