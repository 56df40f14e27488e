"""
Domain exceptions raised by the eco planner.

The algorithmic core (footprint, scorer, selector, knapsack) raises nothing for
valid inputs. These exceptions cover data-integrity failures and lookups
against persisted plans; the CLI maps them to ``[ERROR]`` messages.
"""

from __future__ import annotations


class EcoPlannerError(Exception):
    """Base class for all eco planner errors."""


class UnknownActivityError(EcoPlannerError, KeyError):
    """An activity or bill type has no configured carbon factor.

    Treated as a data-integrity error: callers must not fall back to a default
    factor.
    """

    def __init__(self, category: str, activity: str | None = None) -> None:
        self.category = category
        self.activity = activity
        key = f"{category}/{activity}" if activity is not None else category
        super().__init__(f"Unknown activity: {key}")

    def __str__(self) -> str:
        return self.args[0]


class PlanNotFoundError(EcoPlannerError):
    """The user has no stored eco plan."""

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__(f"No eco plan found for user '{user_id}'. Generate a plan first.")


class PlanActionNotFoundError(EcoPlannerError):
    """The requested action is not part of the user's current plan."""

    def __init__(self, action_id: int) -> None:
        self.action_id = action_id
        super().__init__(f"Action {action_id} not found in the current plan.")


class ActionNotFoundError(EcoPlannerError):
    """No catalog action has the requested ID or name."""

    def __init__(self, key: int | str) -> None:
        self.key = key
        label = f"'{key}'" if isinstance(key, str) else str(key)
        super().__init__(f"Catalog action {label} not found.")


class ProfileNotFoundError(EcoPlannerError):
    """The user has never submitted a lifestyle profile."""

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__(f"No lifestyle profile stored for user '{user_id}'.")
