"""
Tests for eco_planner/config.py.

What we test
------------
load_config():
  - The committed default.toml loads and matches model defaults.
  - local.toml next to the config file is deep-merged on top.
  - ECO_PLANNER_* env vars override file values.
  - Missing file raises FileNotFoundError.

Sub-config validation:
  - Optimizer bounds must be ordered; default inside bounds.
  - Negative plan-policy day counts rejected.
  - Log level normalised to upper case, unknown levels rejected.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from eco_planner.config import (
    AppConfig,
    LoggingConfig,
    OptimizerConfig,
    PlanPolicyConfig,
    _deep_merge,
    load_config,
)


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    for var in ("ECO_PLANNER_DB_PATH", "ECO_PLANNER_LOG_LEVEL", "ECO_PLANNER_DEBUG"):
        monkeypatch.delenv(var, raising=False)


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadConfig:
    def test_default_toml(self):
        config = load_config()
        assert config.database.db_path == "data/db/eco_planner.db"
        assert config.plans.regeneration_cooldown_days == 30
        assert config.plans.expiry_days == 365
        assert config.optimizer == OptimizerConfig()
        assert config.debug is False

    def test_partial_file_uses_defaults(self, tmp_path):
        path = _write(tmp_path / "cfg" / "app.toml", "[plans]\nexpiry_days = 90\n")
        config = load_config(path)
        assert config.plans.expiry_days == 90
        assert config.plans.regeneration_cooldown_days == 30
        assert config.output.plans_dir == "data/outputs/plans"

    def test_local_toml_merged(self, tmp_path):
        path = _write(
            tmp_path / "cfg" / "default.toml",
            "[optimizer]\nmin_budget = 5\nmax_budget = 50\ndefault_budget = 15\n",
        )
        _write(tmp_path / "cfg" / "local.toml", "[optimizer]\ndefault_budget = 20\n")
        config = load_config(path)
        assert config.optimizer.default_budget == 20
        assert config.optimizer.max_budget == 50

    def test_env_overrides(self, tmp_path, monkeypatch):
        path = _write(tmp_path / "app.toml", '[database]\ndb_path = "file.db"\n')
        monkeypatch.setenv("ECO_PLANNER_DB_PATH", "/tmp/env.db")
        monkeypatch.setenv("ECO_PLANNER_LOG_LEVEL", "debug")
        monkeypatch.setenv("ECO_PLANNER_DEBUG", "true")
        config = load_config(path)
        assert config.database.db_path == "/tmp/env.db"
        assert config.logging.level == "DEBUG"
        assert config.debug is True

    def test_project_debug_flag(self, tmp_path):
        path = _write(tmp_path / "app.toml", "[project]\ndebug = true\n")
        assert load_config(path).debug is True

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.toml")

    def test_invalid_values_raise(self, tmp_path):
        path = _write(tmp_path / "app.toml", "[optimizer]\nmin_budget = 60\n")
        with pytest.raises(ValidationError):
            load_config(path)


class TestSubConfigs:
    def test_optimizer_bounds_order(self):
        with pytest.raises(ValidationError):
            OptimizerConfig(min_budget=20, max_budget=10, default_budget=15)

    def test_optimizer_default_inside(self):
        with pytest.raises(ValidationError):
            OptimizerConfig(default_budget=80)

    def test_plan_policy_negative(self):
        with pytest.raises(ValidationError):
            PlanPolicyConfig(expiry_days=-1)

    def test_log_level_normalised(self):
        assert LoggingConfig(level="warning").level == "WARNING"

    def test_log_level_unknown(self):
        with pytest.raises(ValidationError):
            LoggingConfig(level="LOUD")

    def test_app_config_frozen(self):
        with pytest.raises(ValidationError):
            AppConfig().debug = True


class TestDeepMerge:
    def test_nested(self):
        merged = _deep_merge({"a": {"x": 1, "y": 2}, "b": 1}, {"a": {"y": 3}})
        assert merged == {"a": {"x": 1, "y": 3}, "b": 1}

    def test_does_not_mutate_base(self):
        base = {"a": {"x": 1}}
        _deep_merge(base, {"a": {"x": 2}})
        assert base == {"a": {"x": 1}}
