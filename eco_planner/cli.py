"""
Eco Planner CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Validate inputs (profile JSON through ``LifestyleProfile``).
  4. Execute the action against the SQLite store or the pure core.
  5. Report result to stdout; errors go to stderr with exit code 1.

Install and run::

    pip install -e .
    eco-planner --help
    eco-planner init-db
    eco-planner seed-catalog
    eco-planner footprint --profile profile.json
    eco-planner generate-plan --user alice --profile profile.json
    eco-planner complete-action --user alice --action-id 3
    eco-planner impact --user alice
    eco-planner optimize --budget 20
    eco-planner retire-action --name "Sponsor tree planting (5 trees)"
    eco-planner show-profile --user alice
    eco-planner log-activity transport drove_car 12
"""

from __future__ import annotations

import json
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

import typer

app = typer.Typer(
    name="eco-planner",
    help="Personal carbon footprint estimator and eco-action planner.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from eco_planner.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from eco_planner.utils.logging import configure_logging
    configure_logging(config.logging)


def _load_profile_or_exit(profile_path: str):
    """Read and validate a lifestyle profile JSON file (camelCase or snake_case keys)."""
    from pydantic import ValidationError

    from eco_planner.models.profile import LifestyleProfile

    path = Path(profile_path)
    if not path.exists():
        typer.echo(f"[ERROR] Profile file not found: {path}", err=True)
        raise typer.Exit(code=1)

    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except (json.JSONDecodeError, OSError) as exc:
        typer.echo(f"[ERROR] JSON parse error: {exc}", err=True)
        raise typer.Exit(code=1)

    try:
        return LifestyleProfile.model_validate(raw)
    except ValidationError as exc:
        typer.echo(f"[ERROR] Invalid profile ({exc.error_count()} error(s)):", err=True)
        for err in exc.errors()[:5]:
            loc = ".".join(str(p) for p in err["loc"])
            typer.echo(f"  {loc}: {err['msg']}", err=True)
        raise typer.Exit(code=1)


@contextmanager
def _open_service(config, db_path: Optional[str] = None) -> Generator:
    """Yield an initialized ``EcoPlanService`` over a managed connection."""
    from eco_planner.db.connection import get_connection
    from eco_planner.service import EcoPlanService

    with get_connection(
        db_path or config.database.db_path,
        wal_mode=config.database.wal_mode,
        busy_timeout_ms=config.database.busy_timeout_ms,
    ) as conn:
        service = EcoPlanService(conn, config)
        service.initialize()
        yield service


def _config_option():
    return typer.Option(None, "--config", help="Path to TOML config file.")


def _db_path_option():
    return typer.Option(None, "--db-path", help="Override DB path from config.")


# ── Setup commands ────────────────────────────────────────────────────────────

@app.command("init-db")
def init_db(
    db_path: Optional[str] = _db_path_option(),
    config_path: Optional[str] = _config_option(),
) -> None:
    """Initialize the SQLite database and apply the full schema.

    Safe to run multiple times; all DDL uses IF NOT EXISTS.
    """
    from eco_planner.db.connection import get_connection
    from eco_planner.db.schema import apply_schema, get_existing_indexes, get_existing_tables

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    target_path = db_path or config.database.db_path
    typer.echo(f"Initializing database at: {target_path}")

    with get_connection(
        target_path,
        wal_mode=config.database.wal_mode,
        busy_timeout_ms=config.database.busy_timeout_ms,
    ) as conn:
        apply_schema(conn)
        tables = get_existing_tables(conn)
        indexes = get_existing_indexes(conn)

    typer.echo(f"  Tables: {len(tables)} created/verified.")
    typer.echo(f"  Indexes: {len(indexes)}")
    typer.echo("[OK] Database ready.")


@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = _config_option(),
    show_full: bool = typer.Option(False, "--full", help="Print the full config as JSON."),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Database path:     {config.database.db_path}")
    typer.echo(f"  Plan cooldown:     {config.plans.regeneration_cooldown_days} days")
    typer.echo(f"  Plan expiry:       {config.plans.expiry_days} days")
    typer.echo(
        f"  Effort budget:     {config.optimizer.default_budget} "
        f"(range {config.optimizer.min_budget}-{config.optimizer.max_budget})"
    )
    typer.echo(f"  Reports dir:       {config.output.plans_dir}")
    typer.echo(f"  Log level:         {config.logging.level}")
    typer.echo(f"  Debug mode:        {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("seed-catalog")
def seed_catalog(
    db_path: Optional[str] = _db_path_option(),
    config_path: Optional[str] = _config_option(),
) -> None:
    """Seed the eco-action catalog with the default actions.

    Idempotent: an already-seeded catalog is left untouched.
    """
    from eco_planner.db.connection import get_connection
    from eco_planner.service import EcoPlanService

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    with get_connection(
        db_path or config.database.db_path,
        wal_mode=config.database.wal_mode,
        busy_timeout_ms=config.database.busy_timeout_ms,
    ) as conn:
        service = EcoPlanService(conn, config)
        inserted = service.initialize()
        total = service.actions.count()

    typer.echo(f"  Inserted: {inserted}")
    typer.echo(f"  Catalog actions: {total}")
    typer.echo("[OK] Catalog seeded.")


@app.command("list-actions")
def list_actions(
    include_retired: bool = typer.Option(False, "--all", help="Include retired actions."),
    db_path: Optional[str] = _db_path_option(),
    config_path: Optional[str] = _config_option(),
) -> None:
    """List the eco-action catalog."""
    from eco_planner.reporting.formatters import format_actions_table

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    with _open_service(config, db_path) as service:
        actions = service.actions.list_all() if include_retired else service.list_actions()

    typer.echo(format_actions_table(actions))


@app.command("retire-action")
def retire_action(
    action_id: Optional[int] = typer.Option(None, "--action-id", "-a", help="Catalog action ID."),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Exact catalog action name."),
    restore: bool = typer.Option(False, "--restore", help="Put a retired action back."),
    db_path: Optional[str] = _db_path_option(),
    config_path: Optional[str] = _config_option(),
) -> None:
    """Retire a catalog action so new plans skip it (or restore it).

    Plans already stored keep the action.
    """
    from eco_planner.errors import EcoPlannerError

    if (action_id is None) == (name is None):
        typer.echo("[ERROR] Pass exactly one of --action-id or --name.", err=True)
        raise typer.Exit(code=1)

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    try:
        with _open_service(config, db_path) as service:
            target = service.find_action(action_id=action_id, name=name)
            action = service.set_action_active(target.action_id, restore)
    except EcoPlannerError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    verb = "restored" if restore else "retired"
    typer.echo(f"[OK] Action {action.action_id} ({action.name}) {verb}.")


@app.command("show-profile")
def show_profile(
    user_id: str = typer.Option(..., "--user", "-u", help="Profile owner."),
    db_path: Optional[str] = _db_path_option(),
    config_path: Optional[str] = _config_option(),
) -> None:
    """Print the user's last submitted profile as camelCase JSON."""
    from eco_planner.errors import EcoPlannerError

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    try:
        with _open_service(config, db_path) as service:
            profile = service.get_profile(user_id)
    except EcoPlannerError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(json.dumps(profile.model_dump(mode="json", by_alias=True), indent=2))


# ── Planning commands ─────────────────────────────────────────────────────────

@app.command("footprint")
def footprint(
    profile_path: str = typer.Option(..., "--profile", "-p", help="Lifestyle profile JSON."),
    config_path: Optional[str] = _config_option(),
) -> None:
    """Estimate the annual carbon footprint and tree debt for a profile."""
    from eco_planner.footprint.estimator import estimate_footprint
    from eco_planner.reporting.formatters import format_footprint

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    profile = _load_profile_or_exit(profile_path)
    typer.echo(format_footprint(estimate_footprint(profile)))


@app.command("generate-plan")
def generate_plan(
    user_id: str = typer.Option(..., "--user", "-u", help="Plan owner."),
    profile_path: str = typer.Option(..., "--profile", "-p", help="Lifestyle profile JSON."),
    preview: bool = typer.Option(
        False, "--preview", help="Generate without saving (ignores any stored plan)."
    ),
    db_path: Optional[str] = _db_path_option(),
    config_path: Optional[str] = _config_option(),
) -> None:
    """Generate a 12-month phased plan, or return the user's current one.

    A stored plan younger than the regeneration cooldown is returned
    unchanged; older or expired plans are replaced.
    """
    from eco_planner.recommendations.reporter import write_plan_csv, write_plan_json
    from eco_planner.reporting.formatters import format_plan

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    profile = _load_profile_or_exit(profile_path)

    with _open_service(config, db_path) as service:
        if preview:
            plan = service.preview_plan(profile)
            typer.echo(format_plan(plan))
            return
        outcome = service.generate_and_save_plan(user_id, profile)

    stored = outcome.plan
    typer.echo(
        format_plan(
            stored.plan,
            is_existing=outcome.is_existing,
            generated_at=stored.generated_at,
            expires_at=stored.expires_at,
        )
    )

    if config.output.write_reports and not outcome.is_existing:
        out_dir = Path(config.output.plans_dir)
        try:
            csv_path = write_plan_csv(stored.plan, profile, out_dir, user_id)
            json_path = write_plan_json(stored.plan, out_dir, user_id)
        except OSError as exc:
            typer.echo(f"[ERROR] Plan saved but reports could not be written: {exc}", err=True)
            raise typer.Exit(code=1)
        typer.echo("")
        typer.echo(f"  CSV:  {csv_path}")
        typer.echo(f"  JSON: {json_path}")

    typer.echo("")
    status = "Existing plan returned" if outcome.is_existing else "Plan generated"
    typer.echo(f"[OK] {status}: {len(outcome.actions)} action(s).")


@app.command("show-plan")
def show_plan(
    user_id: str = typer.Option(..., "--user", "-u", help="Plan owner."),
    db_path: Optional[str] = _db_path_option(),
    config_path: Optional[str] = _config_option(),
) -> None:
    """Show the user's stored plan with per-action completion state."""
    from eco_planner.reporting.formatters import format_plan

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    with _open_service(config, db_path) as service:
        outcome = service.get_current_plan(user_id)
        if outcome is None:
            typer.echo(f"[ERROR] No eco plan found for user '{user_id}'.", err=True)
            raise typer.Exit(code=1)
        names = service.actions.get_by_ids(r.action_id for r in outcome.actions)

    stored = outcome.plan
    typer.echo(
        format_plan(
            stored.plan,
            is_existing=True,
            generated_at=stored.generated_at,
            expires_at=stored.expires_at,
        )
    )
    typer.echo("")
    typer.echo(f"  Progress: {stored.completion_percent}%")
    for record in outcome.actions:
        mark = "[x]" if record.is_completed else "[ ]"
        action = names.get(record.action_id)
        name = action.name if action is not None else "?"
        typer.echo(f"    {mark} #{record.action_id:<3} {name}")


@app.command("complete-action")
def complete_action(
    user_id: str = typer.Option(..., "--user", "-u", help="Plan owner."),
    action_id: int = typer.Option(..., "--action-id", "-a", help="Catalog action ID."),
    undo: bool = typer.Option(False, "--undo", help="Mark the action as not completed."),
    db_path: Optional[str] = _db_path_option(),
    config_path: Optional[str] = _config_option(),
) -> None:
    """Mark a plan action completed (or reopen it with --undo)."""
    from eco_planner.errors import EcoPlannerError

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    try:
        with _open_service(config, db_path) as service:
            update = service.update_action_completion(user_id, action_id, not undo)
    except EcoPlannerError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    verb = "reopened" if undo else "completed"
    typer.echo(
        f"[OK] Action {action_id} {verb}. Progress: "
        f"{update.completed_count}/{update.total_count} ({update.completion_percent}%)"
    )


@app.command("impact")
def impact(
    user_id: str = typer.Option(..., "--user", "-u", help="Plan owner."),
    db_path: Optional[str] = _db_path_option(),
    config_path: Optional[str] = _config_option(),
) -> None:
    """Show what the user's completed actions have achieved so far."""
    from eco_planner.errors import EcoPlannerError
    from eco_planner.reporting.formatters import format_impact_report

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    try:
        with _open_service(config, db_path) as service:
            report = service.get_impact_report(user_id)
    except EcoPlannerError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(format_impact_report(report))


@app.command("optimize")
def optimize(
    budget: Optional[int] = typer.Option(
        None, "--budget", "-b", help="Effort budget in difficulty points (clamped to config range)."
    ),
    config_path: Optional[str] = _config_option(),
) -> None:
    """Pick the quick actions that save the most CO2 within an effort budget."""
    from eco_planner.recommendations.knapsack import clamp_effort_budget, optimize_by_effort
    from eco_planner.reporting.formatters import format_knapsack_result

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    bounds = config.optimizer
    requested = budget if budget is not None else bounds.default_budget
    effective = clamp_effort_budget(requested, bounds.min_budget, bounds.max_budget)
    if effective != requested:
        typer.echo(
            f"  Budget {requested} outside [{bounds.min_budget}, {bounds.max_budget}]; "
            f"using {effective}."
        )

    typer.echo(format_knapsack_result(optimize_by_effort(effective)))


# ── Activity logging ──────────────────────────────────────────────────────────

@app.command("log-activity")
def log_activity(
    category: Optional[str] = typer.Argument(None, help="Activity category, e.g. transport."),
    activity: Optional[str] = typer.Argument(None, help="Activity key, e.g. drove_car."),
    value: float = typer.Argument(1.0, help="Quantity in the category's unit."),
    list_options: bool = typer.Option(False, "--list", help="List known activities."),
    config_path: Optional[str] = _config_option(),
) -> None:
    """Compute the carbon of one logged activity (nothing is stored)."""
    from eco_planner.errors import UnknownActivityError
    from eco_planner.footprint.activity import activity_options, calculate_activity_carbon

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    if list_options or category is None or activity is None:
        typer.echo(f"  {'Category':<10}  {'Activity':<18}  {'kg/unit':>8}  Unit")
        typer.echo("  " + "-" * 46)
        for opt in activity_options():
            typer.echo(
                f"  {opt.category:<10}  {opt.activity:<18}  {opt.factor:>8.2f}  {opt.unit}"
            )
        return

    try:
        carbon = calculate_activity_carbon(category, activity, value)
    except UnknownActivityError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"[OK] {category}/{activity} x {value:g}: {carbon:.2f} kg CO2")


@app.command("bill-emission")
def bill_emission(
    units: float = typer.Argument(..., help="Units on the bill (kWh, therms or kL)."),
    bill_type: str = typer.Option("electricity", "--type", "-t", help="electricity, gas or water."),
    config_path: Optional[str] = _config_option(),
) -> None:
    """Compute the carbon of a utility bill."""
    from eco_planner.errors import UnknownActivityError
    from eco_planner.footprint.activity import calculate_bill_emission

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    try:
        carbon = calculate_bill_emission(units, bill_type)
    except UnknownActivityError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"[OK] {bill_type} bill of {units:g} units: {carbon:.2f} kg CO2")


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
