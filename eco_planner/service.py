"""
Plan state service: persistence policy around the pure planning core.

``EcoPlanService`` owns the decisions the algorithmic modules leave to their
caller:

  - catalog seeding as an explicit initialisation step,
  - plan reuse (a plan younger than the cooldown and not yet expired is
    returned unchanged) versus regeneration (delete, then insert fresh),
  - completion tracking and the recomputed completion percentage,
  - clamping of user-supplied effort budgets.

Regeneration and completion updates each run inside one ``BEGIN IMMEDIATE``
transaction, so two concurrent requests for the same user serialize instead
of both replacing the plan.

Usage::

    with get_connection(config.database.db_path) as conn:
        service = EcoPlanService(conn, config)
        service.initialize()
        outcome = service.generate_and_save_plan("user-42", profile)
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterable
from datetime import datetime
from typing import Optional

from eco_planner.catalog.default_actions import DEFAULT_ACTIONS
from eco_planner.config import AppConfig
from eco_planner.db.connection import immediate_transaction
from eco_planner.db.repositories.action_repo import ActionRepository
from eco_planner.db.repositories.plan_repo import PlanRepository, ProfileRepository
from eco_planner.db.schema import apply_schema
from eco_planner.errors import (
    ActionNotFoundError,
    PlanActionNotFoundError,
    PlanNotFoundError,
    ProfileNotFoundError,
)
from eco_planner.models.action import CandidateAction
from eco_planner.models.plan import (
    CompletionUpdate,
    GeneratedPlan,
    ImpactReport,
    KnapsackResult,
    PlanActionRecord,
    PlanOutcome,
    StoredPlan,
)
from eco_planner.models.profile import LifestyleProfile
from eco_planner.recommendations.knapsack import clamp_effort_budget, optimize_by_effort
from eco_planner.recommendations.progress import build_impact_report, completion_percent
from eco_planner.recommendations.selector import select_plan
from eco_planner.utils.time_utils import add_days, ensure_utc, utcnow, whole_days_between

logger = logging.getLogger(__name__)


class EcoPlanService:
    """Plan generation, storage and progress tracking over one connection.

    Args:
        conn:   Open connection; the caller owns it and its lifetime.
        config: Application config (plan policy and optimizer bounds).
    """

    def __init__(self, conn: sqlite3.Connection, config: Optional[AppConfig] = None) -> None:
        self.conn = conn
        self.config = config or AppConfig()
        self.actions = ActionRepository(conn)
        self.profiles = ProfileRepository(conn)
        self.plans = PlanRepository(conn)

    # ── Catalog ───────────────────────────────────────────────────────────────

    def initialize(self, defaults: Iterable[CandidateAction] = DEFAULT_ACTIONS) -> int:
        """Ensure the schema exists and the catalog is seeded.

        Returns:
            Number of catalog actions inserted (0 when already seeded).
        """
        apply_schema(self.conn)
        with immediate_transaction(self.conn):
            inserted = self.actions.seed_if_empty(defaults)
        return inserted

    def list_actions(self) -> list[CandidateAction]:
        """Active catalog actions in catalog order."""
        return self.actions.list_active_actions()

    def find_action(
        self,
        action_id: Optional[int] = None,
        name: Optional[str] = None,
    ) -> CandidateAction:
        """Look up one catalog action by ID or exact name.

        Raises:
            ActionNotFoundError: No action matches.
            ValueError: Neither or both of ``action_id`` and ``name`` given.
        """
        if (action_id is None) == (name is None):
            raise ValueError("Pass exactly one of action_id or name.")
        if action_id is not None:
            action = self.actions.get_by_id(action_id)
        else:
            action = self.actions.get_by_name(name)
        if action is None:
            raise ActionNotFoundError(action_id if action_id is not None else name)
        return action

    def set_action_active(self, action_id: int, is_active: bool) -> CandidateAction:
        """Retire an action from (or restore it to) future plans.

        Stored plans keep their rows; only plans generated afterwards see the
        change.

        Raises:
            ActionNotFoundError: ``action_id`` is not in the catalog.
        """
        with immediate_transaction(self.conn):
            if not self.actions.set_active(action_id, is_active):
                raise ActionNotFoundError(action_id)
            action = self.actions.get_by_id(action_id)
        logger.info(
            "Action %s | action_id=%d | name=%s",
            "restored" if is_active else "retired", action_id, action.name,
        )
        return action

    def get_profile(self, user_id: str) -> LifestyleProfile:
        """The last profile the user submitted.

        Raises:
            ProfileNotFoundError: The user never submitted one.
        """
        profile = self.profiles.get(user_id)
        if profile is None:
            raise ProfileNotFoundError(user_id)
        return profile

    # ── Plans ─────────────────────────────────────────────────────────────────

    def preview_plan(self, profile: LifestyleProfile) -> GeneratedPlan:
        """Generate a plan against the stored catalog without saving anything."""
        return select_plan(self.actions.list_active_actions(), profile)

    def generate_and_save_plan(
        self,
        user_id: str,
        profile: LifestyleProfile,
        now: Optional[datetime] = None,
    ) -> PlanOutcome:
        """Return the user's current plan, or generate and store a new one.

        The profile is always saved. An existing plan is returned unchanged
        (``is_existing=True``) while it is unexpired and younger than the
        regeneration cooldown; otherwise it is deleted together with its
        action rows and replaced.

        Args:
            user_id: Plan owner.
            profile: Current lifestyle profile.
            now:     Clock override (UTC); defaults to the current time.

        Returns:
            ``PlanOutcome`` with the stored plan and its action records.
        """
        now = ensure_utc(now) if now is not None else utcnow()
        policy = self.config.plans

        with immediate_transaction(self.conn):
            self.profiles.upsert(user_id, profile, now)

            existing = self.plans.get_by_user(user_id)
            if existing is not None:
                if self._is_reusable(existing, now):
                    logger.info(
                        "Returning existing plan | user=%s | plan_id=%s | generated_at=%s",
                        user_id, existing.plan_id, existing.generated_at.isoformat(),
                    )
                    return PlanOutcome(
                        plan=existing,
                        actions=self.plans.list_actions(existing.plan_id),
                        is_existing=True,
                    )
                self.plans.delete_for_user(user_id)
                logger.info("Replacing plan | user=%s | plan_id=%s", user_id, existing.plan_id)

            generated = select_plan(self.actions.list_active_actions(), profile)
            stored = StoredPlan(
                user_id=user_id,
                plan=generated,
                completion_percent=0,
                generated_at=now,
                expires_at=add_days(now, policy.expiry_days),
            )
            plan_id = self.plans.insert(stored)
            self.plans.insert_actions(
                [
                    PlanActionRecord(
                        plan_id=plan_id,
                        action_id=sa.action.action_id,
                        phase=sa.phase,
                        score=sa.personal_score,
                    )
                    for sa in generated.all_actions()
                ]
            )
            records = self.plans.list_actions(plan_id)
            saved = self.plans.get_by_id(plan_id)

        logger.info(
            "Generated plan | user=%s | plan_id=%d | actions=%d | co2=%.1f kg | trees=%d",
            user_id, plan_id, len(records), generated.annual_co2_kg, generated.trees_needed,
        )
        return PlanOutcome(
            plan=saved,
            actions=records,
            is_existing=False,
        )

    def get_current_plan(self, user_id: str) -> Optional[PlanOutcome]:
        """The user's stored plan with its action records, or ``None``."""
        existing = self.plans.get_by_user(user_id)
        if existing is None:
            return None
        return PlanOutcome(
            plan=existing,
            actions=self.plans.list_actions(existing.plan_id),
            is_existing=True,
        )

    def update_action_completion(
        self,
        user_id: str,
        action_id: int,
        is_completed: bool,
        now: Optional[datetime] = None,
    ) -> CompletionUpdate:
        """Mark one plan action done (or not done) and recompute progress.

        ``completed_at`` is set to ``now`` when completing and cleared when
        un-completing.

        Raises:
            PlanNotFoundError: The user has no plan.
            PlanActionNotFoundError: ``action_id`` is not in the user's plan.
        """
        now = ensure_utc(now) if now is not None else utcnow()

        with immediate_transaction(self.conn):
            plan = self.plans.get_by_user(user_id)
            if plan is None:
                raise PlanNotFoundError(user_id)

            record = self.plans.set_action_completion(
                plan.plan_id, action_id, is_completed, now if is_completed else None
            )
            if record is None:
                raise PlanActionNotFoundError(action_id)

            completed, total = self.plans.count_completion(plan.plan_id)
            percent = completion_percent(completed, total)
            self.plans.update_completion_percent(plan.plan_id, percent)

        logger.info(
            "Action %s | user=%s | action_id=%d | progress=%d/%d (%d%%)",
            "completed" if is_completed else "reopened",
            user_id, action_id, completed, total, percent,
        )
        return CompletionUpdate(
            action=record,
            completion_percent=percent,
            completed_count=completed,
            total_count=total,
        )

    def get_impact_report(self, user_id: str) -> ImpactReport:
        """Summarize progress on the user's plan.

        Raises:
            PlanNotFoundError: The user has no plan.
        """
        plan = self.plans.get_by_user(user_id)
        if plan is None:
            raise PlanNotFoundError(user_id)
        records = self.plans.list_actions(plan.plan_id)
        actions_by_id = self.actions.get_by_ids(r.action_id for r in records)
        return build_impact_report(plan, records, actions_by_id)

    # ── Carbon diet ───────────────────────────────────────────────────────────

    def optimize_by_effort(self, effort_budget: Optional[int] = None) -> KnapsackResult:
        """Run the quick-action optimizer with a budget clamped to config bounds."""
        bounds = self.config.optimizer
        budget = effort_budget if effort_budget is not None else bounds.default_budget
        clamped = clamp_effort_budget(budget, bounds.min_budget, bounds.max_budget)
        if clamped != budget:
            logger.debug("Effort budget %d clamped to %d", budget, clamped)
        return optimize_by_effort(clamped)

    # ── Private ───────────────────────────────────────────────────────────────

    def _is_reusable(self, plan: StoredPlan, now: datetime) -> bool:
        if plan.expires_at <= now:
            return False
        age_days = whole_days_between(plan.generated_at, now)
        return age_days < self.config.plans.regeneration_cooldown_days
