"""
Effort-budgeted "carbon diet": 0/1 knapsack over the quick-action list.

Items are ``QuickAction``s (value = ``carbon_saved``, weight = ``difficulty``);
the capacity is the user's effort budget in difficulty points.

    dp[i][w] = best carbon saved using the first i actions within budget w

    dp[i][w] = max(dp[i-1][w], carbon[i] + dp[i-1][w - difficulty[i]])   if difficulty[i] <= w
             = dp[i-1][w]                                                otherwise

The selection is recovered by walking back from ``dp[n][W]``: when
``dp[i][w] != dp[i-1][w]`` action ``i-1`` was taken and ``w`` drops by its
difficulty. Collected items are reversed into catalog order.

O(n·W) time and space; n ≈ 15 and W ≤ 50, so the full table is kept.
The budget is expected to be clamped by the caller (see ``clamp_effort_budget``).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from eco_planner.catalog.quick_actions import QUICK_ACTIONS
from eco_planner.models.action import QuickAction
from eco_planner.models.plan import KnapsackResult
from eco_planner.utils.numeric import round_half_up

logger = logging.getLogger(__name__)

MIN_EFFORT_BUDGET = 5
MAX_EFFORT_BUDGET = 50


def clamp_effort_budget(
    budget: int,
    lo: int = MIN_EFFORT_BUDGET,
    hi: int = MAX_EFFORT_BUDGET,
) -> int:
    """Clamp a user-supplied budget into ``[lo, hi]``."""
    return max(lo, min(hi, int(budget)))


def optimize_by_effort(
    effort_budget: int,
    actions: Sequence[QuickAction] = QUICK_ACTIONS,
) -> KnapsackResult:
    """Select the carbon-maximizing subset of ``actions`` within ``effort_budget``.

    Args:
        effort_budget: Maximum total difficulty (non-negative).
        actions:       Knapsack items; defaults to the fixed quick-action list.

    Returns:
        ``KnapsackResult`` with total savings (2dp), difficulty used, the
        budget, and the selected actions in catalog order.
    """
    n = len(actions)
    capacity = effort_budget

    dp: list[list[float]] = [[0.0] * (capacity + 1) for _ in range(n + 1)]

    for i in range(1, n + 1):
        action = actions[i - 1]
        for w in range(capacity + 1):
            if action.difficulty <= w:
                dp[i][w] = max(
                    action.carbon_saved + dp[i - 1][w - action.difficulty],
                    dp[i - 1][w],
                )
            else:
                dp[i][w] = dp[i - 1][w]

    w = capacity
    selected: list[QuickAction] = []
    for i in range(n, 0, -1):
        if dp[i][w] != dp[i - 1][w]:
            action = actions[i - 1]
            selected.append(action)
            w -= action.difficulty
    selected.reverse()

    logger.debug(
        "Knapsack | budget=%d | items=%d | selected=%d | best=%.2f",
        capacity, n, len(selected), dp[n][capacity],
    )

    return KnapsackResult(
        total_savings=round_half_up(dp[n][capacity], 2),
        difficulty_used=capacity - w,
        max_difficulty=capacity,
        actions=selected,
    )
