"""
eco_planner.reporting: ASCII formatting of plans, footprints and progress
for CLI display.

Modules:
  formatters -- terminal table formatters for Typer CLI commands.
"""
