"""
Recommendation engine: scores catalog actions against a lifestyle profile and
assembles them into a phased 12-month plan.

Modules
-------
scorer   : ScoreComponents dataclass + score_action() + build_reasoning()
           -- pure functions, no DB or I/O.
selector : score_catalog() + select_diverse_actions() + build_phases()
           + select_plan() -> GeneratedPlan.
knapsack : optimize_by_effort() -- 0/1 knapsack over the quick-action list.
progress : completion_percent() + build_impact_report() with milestones.
reporter : write_plan_csv() + write_plan_json() -- file output.
"""
