"""
Plan report writer: CSV and JSON output for generated plans.

All functions are pure I/O, no DB access. They consume an in-memory
``GeneratedPlan`` and write human-readable + machine-readable files.

Output files (written by the ``generate-plan`` command)
--------------------------------------------------------
  data/outputs/plans/
    plan_{user_id}_{date}.csv    -- one row per selected action
    plan_{user_id}_{date}.json   -- full plan, phases + summaries
"""

from __future__ import annotations

import csv
import json
import logging
import re
from datetime import date
from pathlib import Path

from eco_planner.models.plan import GeneratedPlan
from eco_planner.models.profile import LifestyleProfile
from eco_planner.recommendations.scorer import build_reasoning, compute_score_components
from eco_planner.utils.numeric import round_half_up

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "v1.0.0"

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


def safe_filename_part(user_id: str) -> str:
    """Map ``user_id`` to a single path component (no separators, no ``..``)."""
    part = _UNSAFE_FILENAME_CHARS.sub("_", user_id)
    return part.replace("..", "__") or "_"


def write_plan_csv(
    plan: GeneratedPlan,
    profile: LifestyleProfile,
    output_dir: Path,
    user_id: str,
    run_date: date | None = None,
) -> Path:
    """Write every selected action of ``plan`` to a CSV file.

    Columns: phase, rank, name, category, score, difficulty,
             monthly_co2_kg, monthly_savings, upfront_cost,
             trees_equivalent, reasoning.

    Args:
        plan:       The generated plan.
        profile:    Profile the plan was generated for (drives ``reasoning``).
        output_dir: Directory to write the file (created if missing).
        user_id:    Used in the filename (unsafe characters replaced).
        run_date:   Date label for the filename. Defaults to today.

    Returns:
        Path to the written CSV file.
    """
    if run_date is None:
        run_date = date.today()

    output_dir.mkdir(parents=True, exist_ok=True)
    csv_path = output_dir / f"plan_{safe_filename_part(user_id)}_{run_date}.csv"

    fieldnames = [
        "phase", "rank", "name", "category", "score", "difficulty",
        "monthly_co2_kg", "monthly_savings", "upfront_cost",
        "trees_equivalent", "reasoning",
    ]

    rows = 0
    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for phase in plan.phases:
            for rank, sa in enumerate(phase.actions, start=1):
                action = sa.action
                components = compute_score_components(action, profile)
                writer.writerow(
                    {
                        "phase":            phase.phase.value,
                        "rank":             rank,
                        "name":             action.name,
                        "category":         action.category.value,
                        "score":            sa.personal_score,
                        "difficulty":       action.difficulty,
                        "monthly_co2_kg":   action.carbon_saved_kg,
                        "monthly_savings":  action.monthly_savings,
                        "upfront_cost":     action.upfront_cost,
                        "trees_equivalent": action.trees_equivalent,
                        "reasoning":        build_reasoning(action, profile, components),
                    }
                )
                rows += 1

    logger.info("Plan CSV written: %s (%d rows)", csv_path, rows)
    return csv_path


def write_plan_json(
    plan: GeneratedPlan,
    output_dir: Path,
    user_id: str,
    run_date: date | None = None,
) -> Path:
    """Write ``plan`` to a structured JSON file.

    Tree figures are rounded to 2dp for display; the in-memory plan keeps
    them exact.

    Args:
        plan:       The generated plan.
        output_dir: Target directory.
        user_id:    Used in filename + metadata.
        run_date:   Date label. Defaults to today.

    Returns:
        Path to the written JSON file.
    """
    if run_date is None:
        run_date = date.today()

    output_dir.mkdir(parents=True, exist_ok=True)
    json_path = output_dir / f"plan_{safe_filename_part(user_id)}_{run_date}.json"

    payload: dict = {
        "schema_version":           SCHEMA_VERSION,
        "user_id":                  user_id,
        "generated_at":             run_date.isoformat(),
        "annual_co2_kg":            round_half_up(plan.annual_co2_kg, 2),
        "trees_needed":             plan.trees_needed,
        "trees_reduced_by_actions": round_half_up(plan.trees_reduced_by_actions, 2),
        "trees_remaining":          round_half_up(plan.trees_remaining, 2),
        "total_monthly_savings":    plan.total_monthly_savings,
        "total_upfront_cost":       plan.total_upfront_cost,
        "total_yearly_savings":     plan.total_yearly_savings,
        "sponsor_cost":             plan.sponsor_cost,
        "net_savings_year1":        plan.net_savings_year1,
        "phases":                   [],
        "impact_summary":           plan.impact_summary.model_dump(mode="json"),
        "financial_summary":        plan.financial_summary.model_dump(mode="json"),
    }

    for phase in plan.phases:
        payload["phases"].append(
            {
                "phase":              phase.phase.value,
                "label":              phase.label,
                "months":             phase.months,
                "trees_reduced":      phase.trees_reduced,
                "monthly_savings":    phase.monthly_savings,
                "upfront_cost":       phase.upfront_cost,
                "annual_co2_reduced": round_half_up(phase.annual_co2_reduced, 2),
                "actions": [
                    {
                        "name":           sa.action.name,
                        "category":       sa.action.category.value,
                        "score":          sa.personal_score,
                        "monthly_co2_kg": sa.action.carbon_saved_kg,
                        "tips":           sa.action.tips,
                    }
                    for sa in phase.actions
                ],
            }
        )

    with json_path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)

    logger.info("Plan JSON written: %s", json_path)
    return json_path
