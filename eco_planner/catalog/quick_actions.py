"""
Quick-action list for the effort-budgeted "carbon diet" optimizer.

These are the knapsack items: small repeatable actions with a one-off carbon
saving (kg CO₂) and an effort cost on a 1–10 scale. The list is fixed and
independent of the phased-plan catalog in ``default_actions``.
"""

from __future__ import annotations

from eco_planner.models.action import QuickAction

QUICK_ACTIONS: tuple[QuickAction, ...] = (
    QuickAction(name="Switch to LED Bulbs",     carbon_saved=0.5, difficulty=2, icon="💡",
                tip="Replace one incandescent bulb with LED"),
    QuickAction(name="Cold Water Wash",         carbon_saved=0.6, difficulty=1, icon="🧊",
                tip="Wash clothes in cold water instead of hot"),
    QuickAction(name="Meatless Monday",         carbon_saved=2.3, difficulty=5, icon="🥗",
                tip="Replace one meat meal with a vegetarian option"),
    QuickAction(name="Cycle to Work (5km)",     carbon_saved=1.1, difficulty=8, icon="🚲",
                tip="Bike instead of driving for your daily commute"),
    QuickAction(name="Air Dry Clothes",         carbon_saved=2.0, difficulty=3, icon="👕",
                tip="Skip the dryer and hang clothes to dry"),
    QuickAction(name="Turn off AC (2hrs)",      carbon_saved=3.0, difficulty=4, icon="❄️",
                tip="Use a fan instead of AC for 2 hours"),
    QuickAction(name="Unplug Idle Devices",     carbon_saved=0.3, difficulty=1, icon="🔌",
                tip="Unplug chargers and standby electronics"),
    QuickAction(name="Shorter Shower (-3min)",  carbon_saved=0.8, difficulty=3, icon="🚿",
                tip="Cut your shower time by 3 minutes"),
    QuickAction(name="Carry Reusable Bag",      carbon_saved=0.2, difficulty=1, icon="🛍️",
                tip="Say no to plastic bags when shopping"),
    QuickAction(name="Compost Food Scraps",     carbon_saved=1.5, difficulty=4, icon="🪱",
                tip="Start a small compost bin for kitchen waste"),
    QuickAction(name="Take Public Transport",   carbon_saved=1.6, difficulty=6, icon="🚌",
                tip="Bus or metro instead of driving for one trip"),
    QuickAction(name="Eat a Vegan Meal",        carbon_saved=2.8, difficulty=6, icon="🌱",
                tip="Go fully plant-based for one meal"),
    QuickAction(name="Plant a Sapling",         carbon_saved=0.5, difficulty=7, icon="🌳",
                tip="Plant a tree sapling in your garden or community"),
    QuickAction(name="Carpool to Work",         carbon_saved=1.3, difficulty=5, icon="🚗",
                tip="Share your ride with a colleague"),
    QuickAction(name="Use Stairs (not lift)",   carbon_saved=0.1, difficulty=2, icon="🏃",
                tip="Take the stairs instead of the elevator"),
)
