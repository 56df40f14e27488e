"""
Repository for the eco-action catalog (``eco_actions``).
"""

from __future__ import annotations

import json
import logging
import sqlite3
from collections.abc import Iterable
from enum import StrEnum
from typing import Optional

from eco_planner.db.repositories.base import BaseRepository
from eco_planner.models.action import CandidateAction

logger = logging.getLogger(__name__)

_INSERT_SQL = """
INSERT INTO eco_actions (
    name, category, description, icon, tips,
    carbon_saved_kg, monthly_savings, upfront_cost, difficulty, phase,
    trees_equivalent, requires_garden, requires_home_ownership, min_household_size,
    applicable_vehicles, applicable_diets, tags, is_active
) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
"""


class ActionRepository(BaseRepository):
    """Read/write access to the ``eco_actions`` table.

    Catalog order is insertion order (``action_id`` ascending); the plan
    selector relies on it for tie-breaks between equal scores.
    """

    def insert(self, action: CandidateAction) -> int:
        """Insert a new catalog action.

        Args:
            action: The ``CandidateAction`` to persist (``action_id`` ignored).

        Returns:
            The newly assigned ``action_id``.

        Raises:
            sqlite3.IntegrityError: If an action with the same name exists.
        """
        self.execute(_INSERT_SQL + ";", _action_params(action))
        return self.last_insert_rowid()

    def seed_if_empty(self, defaults: Iterable[CandidateAction]) -> int:
        """Seed the catalog with ``defaults`` when it holds no actions.

        Each insert is ``ON CONFLICT(name) DO NOTHING``, so two processes
        seeding at once still end up with one row per name.

        Args:
            defaults: Actions to seed, in catalog order.

        Returns:
            Number of rows actually inserted (0 when already seeded).
        """
        if self.count() > 0:
            logger.debug("Catalog already seeded; skipping.")
            return 0

        inserted = 0
        for action in defaults:
            cur = self.execute(
                _INSERT_SQL + " ON CONFLICT(name) DO NOTHING;",
                _action_params(action),
            )
            inserted += cur.rowcount
        logger.info("Seeded eco_actions with %d actions.", inserted)
        return inserted

    def get_by_id(self, action_id: int) -> Optional[CandidateAction]:
        row = self.fetchone("SELECT * FROM eco_actions WHERE action_id = ?;", (action_id,))
        return _row_to_action(row) if row else None

    def get_by_name(self, name: str) -> Optional[CandidateAction]:
        row = self.fetchone("SELECT * FROM eco_actions WHERE name = ?;", (name,))
        return _row_to_action(row) if row else None

    def get_by_ids(self, action_ids: Iterable[int]) -> dict[int, CandidateAction]:
        """Fetch several actions at once, keyed by ``action_id``.

        Unknown IDs are simply absent from the result.
        """
        ids = sorted(set(action_ids))
        if not ids:
            return {}
        placeholders = ", ".join("?" for _ in ids)
        rows = self.fetchall(
            f"SELECT * FROM eco_actions WHERE action_id IN ({placeholders});",
            tuple(ids),
        )
        return {int(r["action_id"]): _row_to_action(r) for r in rows}

    def list_active_actions(self) -> list[CandidateAction]:
        """All active actions in catalog order."""
        rows = self.fetchall(
            "SELECT * FROM eco_actions WHERE is_active = 1 ORDER BY action_id;"
        )
        return [_row_to_action(r) for r in rows]

    def list_all(self) -> list[CandidateAction]:
        """All actions, retired ones included, in catalog order."""
        rows = self.fetchall("SELECT * FROM eco_actions ORDER BY action_id;")
        return [_row_to_action(r) for r in rows]

    def set_active(self, action_id: int, is_active: bool) -> bool:
        """Retire or reinstate an action. Returns ``False`` if it does not exist."""
        cur = self.execute(
            "UPDATE eco_actions SET is_active = ? WHERE action_id = ?;",
            (int(is_active), action_id),
        )
        return cur.rowcount > 0

    def count(self) -> int:
        """Return total number of catalog actions."""
        return self._count("eco_actions")


# ── Private helpers ────────────────────────────────────────────────────────────

def _dump_set(values: Iterable[StrEnum]) -> str:
    return json.dumps(sorted(v.value for v in values))


def _action_params(action: CandidateAction) -> tuple:
    return (
        action.name,
        action.category.value,
        action.description,
        action.icon,
        action.tips,
        action.carbon_saved_kg,
        action.monthly_savings,
        action.upfront_cost,
        action.difficulty,
        action.phase.value,
        action.trees_equivalent,
        int(action.requires_garden),
        int(action.requires_home_ownership),
        action.min_household_size,
        _dump_set(action.applicable_vehicles),
        _dump_set(action.applicable_diets),
        _dump_set(action.tags),
        int(action.is_active),
    )


def _row_to_action(row: sqlite3.Row) -> CandidateAction:
    return CandidateAction(
        action_id=row["action_id"],
        name=row["name"],
        category=row["category"],
        description=row["description"],
        icon=row["icon"],
        tips=row["tips"],
        carbon_saved_kg=row["carbon_saved_kg"],
        monthly_savings=row["monthly_savings"],
        upfront_cost=row["upfront_cost"],
        difficulty=row["difficulty"],
        phase=row["phase"],
        trees_equivalent=row["trees_equivalent"],
        requires_garden=bool(row["requires_garden"]),
        requires_home_ownership=bool(row["requires_home_ownership"]),
        min_household_size=row["min_household_size"],
        applicable_vehicles=frozenset(json.loads(row["applicable_vehicles"])),
        applicable_diets=frozenset(json.loads(row["applicable_diets"])),
        tags=frozenset(json.loads(row["tags"])),
        is_active=bool(row["is_active"]),
    )
