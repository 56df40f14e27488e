"""
ASCII terminal formatters for CLI commands.

All formatters accept in-memory models and return plain multi-line strings
suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).

Plan status banners
-------------------
Plan output starts with a status banner so readers can tell whether they are
looking at a freshly generated plan or one returned from the cooldown window::

  [NEW] Generated 2026-10-17 (expires 2027-10-17)
  [EXISTING] Generated 2026-10-01 (expires 2027-10-01)
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from eco_planner.footprint.estimator import FootprintEstimate
from eco_planner.models.action import CandidateAction
from eco_planner.models.plan import GeneratedPlan, ImpactReport, KnapsackResult
from eco_planner.utils.numeric import round_half_up


# ── Plan status banner ───────────────────────────────────────────────────────


def format_plan_banner(
    is_existing: bool,
    generated_at: datetime | None,
    expires_at: datetime | None,
) -> str:
    """Return a one-line plan status indicator.

    Args:
        is_existing:  True when the plan was returned from the cooldown window.
        generated_at: Generation time (None = not persisted).
        expires_at:   Expiry time (None = not persisted).
    """
    if generated_at is None:
        return "  [PREVIEW] Not saved"

    tag = "[EXISTING]" if is_existing else "[NEW]"
    gen_str = generated_at.date().isoformat()
    exp_str = expires_at.date().isoformat() if expires_at is not None else "?"
    return f"  {tag} Generated {gen_str} (expires {exp_str})"


# ── Footprint ─────────────────────────────────────────────────────────────────


def format_footprint(estimate: FootprintEstimate) -> str:
    """Format a footprint estimate with its per-term breakdown.

    Terms are shown before the household correction; the total is after it.
    """
    lines: list[str] = []
    lines.append("")
    lines.append("=== Annual Carbon Footprint ===")
    lines.append(f"  {'Term':<14}  {'kg CO2/yr':>12}")
    lines.append("  " + "-" * 28)
    for label, value in (
        ("Transport",   estimate.transport_kg),
        ("Electricity", estimate.electricity_kg),
        ("AC",          estimate.ac_kg),
        ("Diet",        estimate.diet_kg),
        ("Waste",       estimate.waste_kg),
    ):
        lines.append(f"  {label:<14}  {value:>12.1f}")
    lines.append("  " + "-" * 28)
    lines.append(f"  {'Subtotal':<14}  {estimate.subtotal_kg:>12.1f}")
    lines.append(f"  {'Household x':<14}  {estimate.household_factor:>12.3f}")
    lines.append(f"  {'Total':<14}  {estimate.annual_co2_kg:>12.1f}")
    lines.append("")
    lines.append(f"  Trees needed to offset: {estimate.trees_needed}")
    return "\n".join(lines)


# ── Plan ──────────────────────────────────────────────────────────────────────


def format_plan(
    plan: GeneratedPlan,
    is_existing: bool = False,
    generated_at: datetime | None = None,
    expires_at: datetime | None = None,
) -> str:
    """Format a phased plan: one block per phase, then the summaries.

    Empty phases are shown with a placeholder line so the four-phase
    structure is always visible.
    """
    lines: list[str] = []
    lines.append("")
    lines.append("=== Your 12-Month Eco Plan ===")
    lines.append(format_plan_banner(is_existing, generated_at, expires_at))
    lines.append(
        f"  Footprint: {plan.annual_co2_kg:.1f} kg CO2/yr  "
        f"({plan.trees_needed} trees to offset)"
    )

    for phase in plan.phases:
        lines.append("")
        lines.append(f"  [{phase.label.upper()}] {phase.months}: {phase.description}")
        if not phase.actions:
            lines.append("    (no actions in this phase)")
            continue
        header = (
            f"    {'Score':>5}  {'Action':<40}  {'Category':<13}  "
            f"{'CO2/mo':>7}  {'Save/mo':>8}  {'Upfront':>8}"
        )
        lines.append(header)
        lines.append("    " + "-" * (len(header) - 4))
        for sa in phase.actions:
            a = sa.action
            lines.append(
                f"    {sa.personal_score:>5}  {a.name[:40]:<40}  {a.category.value:<13}  "
                f"{a.carbon_saved_kg:>7.1f}  {a.monthly_savings:>8}  {a.upfront_cost:>8}"
            )
        lines.append(
            f"    Phase totals: {phase.trees_reduced:.2f} trees, "
            f"Rs {phase.monthly_savings}/mo, Rs {phase.upfront_cost} upfront"
        )

    fin = plan.financial_summary
    lines.append("")
    lines.append("  --- Financial summary ---")
    lines.append(f"    One-time costs:       Rs {fin.one_time_costs}")
    lines.append(f"    Monthly savings:      Rs {fin.monthly_savings_start}")
    lines.append(f"    Year-1 savings:       Rs {fin.total_year1_savings}")
    lines.append(f"    Trees to sponsor:     {fin.trees_sponsored} (Rs {fin.sponsor_cost})")
    lines.append(f"    Net year-1 savings:   Rs {fin.net_savings_year1}")

    impact = plan.impact_summary
    lines.append("")
    lines.append("  --- Impact ---")
    lines.append(f"    CO2 reduced per year: {impact.co2_reduced_annually} kg")
    lines.append(
        f"    Trees: {round_half_up(plan.trees_reduced_by_actions, 2):.2f} reduced, "
        f"{round_half_up(plan.trees_remaining, 2):.2f} remaining"
    )
    for benefit in impact.health_benefits:
        lines.append(f"    + {benefit}")
    for item in impact.community_impact:
        lines.append(f"    * {item}")

    return "\n".join(lines)


# ── Catalog ───────────────────────────────────────────────────────────────────


def format_actions_table(actions: Sequence[CandidateAction]) -> str:
    """Format the catalog as a table ordered as given."""
    lines: list[str] = []
    lines.append("")
    lines.append(f"=== Eco Action Catalog ({len(actions)} actions) ===")

    if not actions:
        lines.append("")
        lines.append("  (catalog is empty -- run 'seed-catalog' first)")
        return "\n".join(lines)

    header = (
        f"  {'ID':>3}  {'Action':<40}  {'Category':<13}  {'Phase':<11}  "
        f"{'Diff':>4}  {'CO2/mo':>7}"
    )
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))
    for a in actions:
        action_id = a.action_id if a.action_id is not None else ""
        lines.append(
            f"  {action_id:>3}  {a.name[:40]:<40}  {a.category.value:<13}  "
            f"{a.phase.value:<11}  {a.difficulty:>4}  {a.carbon_saved_kg:>7.1f}"
        )
    return "\n".join(lines)


# ── Carbon diet ───────────────────────────────────────────────────────────────


def format_knapsack_result(result: KnapsackResult) -> str:
    """Format the effort-budget optimizer output."""
    lines: list[str] = []
    lines.append("")
    lines.append("=== Carbon Diet ===")
    lines.append(
        f"  Effort used: {result.difficulty_used}/{result.max_difficulty}  "
        f"CO2 saved: {result.total_savings:.2f} kg"
    )

    if not result.actions:
        lines.append("")
        lines.append("  (no action fits this effort budget)")
        return "\n".join(lines)

    lines.append("")
    header = f"  {'Action':<28}  {'CO2 kg':>7}  {'Effort':>6}"
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))
    for a in result.actions:
        lines.append(f"  {a.name[:28]:<28}  {a.carbon_saved:>7.2f}  {a.difficulty:>6}")
    return "\n".join(lines)


# ── Progress ──────────────────────────────────────────────────────────────────


def format_impact_report(report: ImpactReport) -> str:
    """Format a plan progress report with milestones."""
    lines: list[str] = []
    lines.append("")
    lines.append("=== Plan Progress ===")
    lines.append(f"  Generated at: {report.plan_generated_at.isoformat()}")
    lines.append(
        f"  Completed:    {report.completed_actions}/{report.total_actions} "
        f"({report.completion_percent}%)"
    )
    lines.append(f"  CO2 saved:    {report.co2_saved_annually} kg/yr")
    lines.append(f"  Money saved:  Rs {report.monthly_savings}/mo")
    lines.append(
        f"  Trees:        {report.trees_offset_by_actions:.2f} offset, "
        f"{report.trees_remaining:.2f} remaining"
    )

    if report.milestones:
        lines.append("")
        lines.append("  Milestones:")
        for m in report.milestones:
            mark = "[x]" if m.achieved else "[ ]"
            lines.append(f"    {mark} {m.icon} {m.name}")

    return "\n".join(lines)
