"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      committed static defaults
  2. ``config/local.toml``        optional local overrides (gitignored)
  3. ``.env``                     local env overrides (gitignored)
  4. Environment variables        ``ECO_PLANNER_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The service and CLI commands receive an ``AppConfig`` instance, never raw
dicts or env var lookups scattered through the codebase.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

# ── Sub-config models ─────────────────────────────────────────────────────────


class DatabaseConfig(BaseModel):
    """SQLite database connection settings."""

    model_config = ConfigDict(frozen=True)

    db_path: str = "data/db/eco_planner.db"
    wal_mode: bool = True
    busy_timeout_ms: int = 5000


class PlanPolicyConfig(BaseModel):
    """When a stored plan is reused and when it stops being current.

    A request within ``regeneration_cooldown_days`` of generation returns the
    stored plan unchanged; a plan older than ``expiry_days`` is never reused.
    """

    model_config = ConfigDict(frozen=True)

    regeneration_cooldown_days: int = 30
    expiry_days: int = 365

    @field_validator("regeneration_cooldown_days", "expiry_days")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"day counts must be non-negative, got {v}.")
        return v


class OptimizerConfig(BaseModel):
    """Effort-budget bounds for the carbon-diet optimizer."""

    model_config = ConfigDict(frozen=True)

    min_budget: int = 5
    max_budget: int = 50
    default_budget: int = 15

    @model_validator(mode="after")
    def validate_bounds(self) -> "OptimizerConfig":
        if not 0 <= self.min_budget <= self.max_budget:
            raise ValueError(
                f"need 0 <= min_budget <= max_budget, got {self.min_budget}..{self.max_budget}."
            )
        if not self.min_budget <= self.default_budget <= self.max_budget:
            raise ValueError(
                f"default_budget {self.default_budget} outside "
                f"[{self.min_budget}, {self.max_budget}]."
            )
        return self


class OutputConfig(BaseModel):
    """Filesystem paths for written reports."""

    model_config = ConfigDict(frozen=True)

    plans_dir: str = "data/outputs/plans"
    write_reports: bool = True


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = "data/logs/eco_planner.log"
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration, built by ``load_config()``."""

    model_config = ConfigDict(frozen=True)

    database: DatabaseConfig = DatabaseConfig()
    plans: PlanPolicyConfig = PlanPolicyConfig()
    optimizer: OptimizerConfig = OptimizerConfig()
    output: OutputConfig = OutputConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the config file does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    load_dotenv(dotenv_path=root / ".env", override=False)

    if config_path is None:
        config_path = root / "config" / "default.toml"

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Create config/default.toml or pass --config."
        )

    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            raw = _deep_merge(raw, tomllib.load(f))

    raw = _apply_env_overrides(raw)
    return _build_app_config(raw)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply ECO_PLANNER_* env vars to the raw config dict.

    Supported overrides:
      ECO_PLANNER_DB_PATH    → raw["database"]["db_path"]
      ECO_PLANNER_LOG_LEVEL  → raw["logging"]["level"]
      ECO_PLANNER_DEBUG      → raw["debug"]
    """
    if db_path := os.environ.get("ECO_PLANNER_DB_PATH"):
        raw.setdefault("database", {})["db_path"] = db_path

    if log_level := os.environ.get("ECO_PLANNER_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if debug := os.environ.get("ECO_PLANNER_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    project = raw.pop("project", {})

    return AppConfig(
        database=DatabaseConfig(**raw.get("database", {})),
        plans=PlanPolicyConfig(**raw.get("plans", {})),
        optimizer=OptimizerConfig(**raw.get("optimizer", {})),
        output=OutputConfig(**raw.get("output", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
