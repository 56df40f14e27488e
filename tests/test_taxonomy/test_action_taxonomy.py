"""Tests for the closed taxonomies and the exhaustive-table check."""

from __future__ import annotations

import pytest

from eco_planner.taxonomy.action_taxonomy import (
    PHASE_ORDER,
    ActionCategory,
    PlanPhase,
    VehicleType,
    require_exhaustive,
)


class TestEnums:
    def test_phase_order(self):
        assert PHASE_ORDER == (
            PlanPhase.IMMEDIATE,
            PlanPhase.SHORT_TERM,
            PlanPhase.MEDIUM_TERM,
            PlanPhase.LONG_TERM,
        )

    def test_values_are_strings(self):
        assert ActionCategory.TREE_PLANTING == "tree_planting"
        assert VehicleType("public_transport") is VehicleType.PUBLIC_TRANSPORT

    def test_unknown_value(self):
        with pytest.raises(ValueError):
            VehicleType("rocket")


class TestRequireExhaustive:
    def test_complete_table_passes(self):
        require_exhaustive({c: 1 for c in ActionCategory}, ActionCategory, "caps")

    def test_missing_member_raises(self):
        table = {c: 1 for c in ActionCategory if c is not ActionCategory.WASTE}
        with pytest.raises(ValueError, match="caps is missing entries.*waste"):
            require_exhaustive(table, ActionCategory, "caps")
