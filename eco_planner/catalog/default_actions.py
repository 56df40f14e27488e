"""
Default eco-action catalog: 30 actions across all five categories.

Seeded into the ``eco_actions`` table by ``ActionRepository.seed_if_empty()``
(explicit ``eco-planner seed-catalog`` step, or ``EcoPlanService.initialize()``).
Names are unique and act as the seeding key, so re-seeding is a no-op.

Costs and savings are in ₹; ``carbon_saved_kg`` is per month.
"""

from __future__ import annotations

from eco_planner.models.action import CandidateAction
from eco_planner.taxonomy.action_taxonomy import (
    ActionCategory as C,
    ActionTag as T,
    DietaryPreference as D,
    PlanPhase as P,
    VehicleType as V,
)

DEFAULT_ACTIONS: tuple[CandidateAction, ...] = (
    # ── Energy (10) ───────────────────────────────────────────────────────────
    CandidateAction(
        name="Switch to LED bulbs",
        category=C.ENERGY,
        description="Replace all incandescent/CFL bulbs with energy-efficient LEDs",
        icon="💡",
        carbon_saved_kg=15, monthly_savings=200, upfront_cost=1500,
        difficulty=1, phase=P.IMMEDIATE, trees_equivalent=0.17,
        tips="Start with the rooms you use most. LEDs last 15-25 years and use 75% less energy.",
    ),
    CandidateAction(
        name="AC temperature to 24°C",
        category=C.ENERGY,
        description="Set AC to 24°C instead of lower temperatures; each degree saves 6% energy",
        icon="❄️",
        carbon_saved_kg=25, monthly_savings=500, upfront_cost=0,
        difficulty=2, phase=P.IMMEDIATE, trees_equivalent=0.28,
        tips="Use a ceiling fan alongside AC. Clean AC filters monthly for 15% better efficiency.",
        tags=frozenset({T.AC_RELATED}),
    ),
    CandidateAction(
        name="Unplug idle electronics",
        category=C.ENERGY,
        description="Unplug chargers, TVs, and appliances when not in use to eliminate phantom load",
        icon="🔌",
        carbon_saved_kg=8, monthly_savings=150, upfront_cost=0,
        difficulty=1, phase=P.IMMEDIATE, trees_equivalent=0.09,
        tips="Use a power strip to easily switch off multiple devices at once.",
    ),
    CandidateAction(
        name="Install a smart thermostat",
        category=C.ENERGY,
        description="Use a programmable thermostat to optimize heating/cooling schedules",
        icon="🌡️",
        carbon_saved_kg=30, monthly_savings=600, upfront_cost=3000,
        difficulty=3, phase=P.SHORT_TERM, trees_equivalent=0.33,
        tips="Program to reduce cooling when you're away. Smart models learn your schedule automatically.",
        requires_home_ownership=True,
    ),
    CandidateAction(
        name="Switch to solar water heater",
        category=C.ENERGY,
        description="Install a solar water heater to eliminate gas/electric water heating",
        icon="☀️",
        carbon_saved_kg=50, monthly_savings=800, upfront_cost=15000,
        difficulty=4, phase=P.MEDIUM_TERM, trees_equivalent=0.56,
        tips="Government subsidies available. Pays for itself in 18 months. Works even on cloudy days.",
        requires_home_ownership=True,
        min_household_size=2,
    ),
    CandidateAction(
        name="Use natural ventilation",
        category=C.ENERGY,
        description="Open windows for cross-ventilation instead of using AC during mild weather",
        icon="🪟",
        carbon_saved_kg=20, monthly_savings=400, upfront_cost=0,
        difficulty=2, phase=P.IMMEDIATE, trees_equivalent=0.22,
        tips="Works best in early morning and evening. Use window screens to keep insects out.",
    ),
    CandidateAction(
        name="Cold water laundry",
        category=C.ENERGY,
        description="Wash clothes in cold water; 90% of washing machine energy goes to heating",
        icon="🧊",
        carbon_saved_kg=12, monthly_savings=180, upfront_cost=0,
        difficulty=1, phase=P.IMMEDIATE, trees_equivalent=0.13,
        tips="Modern detergents work equally well in cold water. Air-dry clothes for extra savings.",
    ),
    CandidateAction(
        name="Install rooftop solar panels",
        category=C.ENERGY,
        description="Generate your own clean electricity with rooftop solar installation",
        icon="🔆",
        carbon_saved_kg=150, monthly_savings=2000, upfront_cost=80000,
        difficulty=5, phase=P.LONG_TERM, trees_equivalent=1.67,
        tips="Government subsidies cover 30-40%. Net metering lets you sell excess power back.",
        requires_home_ownership=True,
    ),
    CandidateAction(
        name="Use energy-efficient appliances",
        category=C.ENERGY,
        description="Replace old appliances with BEE 5-star rated models when upgrading",
        icon="⭐",
        carbon_saved_kg=35, monthly_savings=500, upfront_cost=5000,
        difficulty=3, phase=P.MEDIUM_TERM, trees_equivalent=0.39,
        tips="Start with the fridge; it runs 24/7. A 5-star fridge saves 45% over old models.",
    ),
    CandidateAction(
        name="Reduce AC usage by 2 hours/day",
        category=C.ENERGY,
        description="Use fans or coolers instead of AC for part of the day",
        icon="🌀",
        carbon_saved_kg=40, monthly_savings=700, upfront_cost=0,
        difficulty=3, phase=P.SHORT_TERM, trees_equivalent=0.44,
        tips="A ceiling fan uses 75W vs AC's 1500W. Use AC only during peak heat hours.",
        tags=frozenset({T.AC_RELATED}),
    ),
    # ── Transport (7) ─────────────────────────────────────────────────────────
    CandidateAction(
        name="Switch to bus/metro commute",
        category=C.TRANSPORT,
        description="Use public transport for your daily commute instead of private vehicle",
        icon="🚌",
        carbon_saved_kg=80, monthly_savings=2000, upfront_cost=0,
        difficulty=4, phase=P.SHORT_TERM, trees_equivalent=0.89,
        tips="Get a monthly pass for 40% savings. Use travel time for reading or podcasts.",
        applicable_vehicles=frozenset({V.CAR, V.BIKE}),
    ),
    CandidateAction(
        name="Carpool to work",
        category=C.TRANSPORT,
        description="Share your commute with colleagues or neighbors going the same way",
        icon="🚗",
        carbon_saved_kg=50, monthly_savings=1500, upfront_cost=0,
        difficulty=3, phase=P.SHORT_TERM, trees_equivalent=0.56,
        tips="Apps like QuickRide help find carpool partners. Take turns driving to split costs.",
        applicable_vehicles=frozenset({V.CAR}),
    ),
    CandidateAction(
        name="Cycle for short trips (<5km)",
        category=C.TRANSPORT,
        description="Use a bicycle for errands and short-distance trips",
        icon="🚲",
        carbon_saved_kg=25, monthly_savings=800, upfront_cost=5000,
        difficulty=3, phase=P.SHORT_TERM, trees_equivalent=0.28,
        tips="Great exercise too! Electric bicycles make it easier in hot weather or hilly terrain.",
        applicable_vehicles=frozenset({V.CAR, V.BIKE}),
        tags=frozenset({T.CYCLING}),
    ),
    CandidateAction(
        name="Work from home 2 days/week",
        category=C.TRANSPORT,
        description="Negotiate remote work days to reduce commuting emissions",
        icon="🏠",
        carbon_saved_kg=35, monthly_savings=1200, upfront_cost=0,
        difficulty=3, phase=P.MEDIUM_TERM, trees_equivalent=0.39,
        tips="Present productivity data to your employer. Even 1 day/week makes a significant impact.",
        applicable_vehicles=frozenset({V.CAR, V.BIKE, V.PUBLIC_TRANSPORT}),
    ),
    CandidateAction(
        name="Maintain proper tire pressure",
        category=C.TRANSPORT,
        description="Keep tires inflated to recommended pressure; saves 3% fuel",
        icon="🛞",
        carbon_saved_kg=10, monthly_savings=300, upfront_cost=0,
        difficulty=1, phase=P.IMMEDIATE, trees_equivalent=0.11,
        tips="Check weekly at petrol stations. Under-inflated tires also wear out 25% faster.",
        applicable_vehicles=frozenset({V.CAR, V.BIKE}),
    ),
    CandidateAction(
        name="Switch to electric vehicle",
        category=C.TRANSPORT,
        description="Replace petrol/diesel vehicle with an electric vehicle for daily commute",
        icon="⚡",
        carbon_saved_kg=120, monthly_savings=3000, upfront_cost=200000,
        difficulty=5, phase=P.LONG_TERM, trees_equivalent=1.33,
        tips="Government subsidies available. Running cost is ₹1/km vs ₹5-8/km for petrol.",
        applicable_vehicles=frozenset({V.CAR, V.BIKE}),
    ),
    CandidateAction(
        name="Walk for trips under 2km",
        category=C.TRANSPORT,
        description="Walk instead of driving for very short trips; free and healthy",
        icon="🚶",
        carbon_saved_kg=15, monthly_savings=500, upfront_cost=0,
        difficulty=2, phase=P.IMMEDIATE, trees_equivalent=0.17,
        tips="A 2km walk takes about 25 minutes. Great for health; burns 100 calories per km.",
        applicable_vehicles=frozenset({V.CAR, V.BIKE}),
        tags=frozenset({T.WALKING}),
    ),
    # ── Diet (7) ──────────────────────────────────────────────────────────────
    CandidateAction(
        name="Meatless Mondays",
        category=C.DIET,
        description="Go vegetarian one day per week to reduce food-related emissions",
        icon="🥗",
        carbon_saved_kg=20, monthly_savings=500, upfront_cost=0,
        difficulty=2, phase=P.IMMEDIATE, trees_equivalent=0.22,
        tips="Try paneer tikka, dal makhani, or veggie biryani; delicious and protein-rich!",
        applicable_diets=frozenset({D.NON_VEGETARIAN, D.FLEXITARIAN}),
    ),
    CandidateAction(
        name="Reduce meat to 3 meals/week",
        category=C.DIET,
        description="Gradually replace meat meals with plant-based alternatives",
        icon="🌿",
        carbon_saved_kg=40, monthly_savings=800, upfront_cost=0,
        difficulty=3, phase=P.SHORT_TERM, trees_equivalent=0.44,
        tips="Replace red meat first (highest emissions). Chicken has 5x less impact than beef.",
        applicable_diets=frozenset({D.NON_VEGETARIAN, D.FLEXITARIAN}),
    ),
    CandidateAction(
        name="Buy local & seasonal produce",
        category=C.DIET,
        description="Shop at local farmers markets; reduces transport emissions and supports farmers",
        icon="🏪",
        carbon_saved_kg=15, monthly_savings=400, upfront_cost=0,
        difficulty=2, phase=P.IMMEDIATE, trees_equivalent=0.17,
        tips="Seasonal produce is 30% cheaper and fresher. Visit your local sabzi mandi weekly.",
    ),
    CandidateAction(
        name="Reduce food waste by 50%",
        category=C.DIET,
        description="Plan meals, use leftovers creatively, and store food properly",
        icon="🍽️",
        carbon_saved_kg=25, monthly_savings=600, upfront_cost=0,
        difficulty=2, phase=P.SHORT_TERM, trees_equivalent=0.28,
        tips="Make a weekly meal plan. Use the FIFO method (First In, First Out) for groceries.",
    ),
    CandidateAction(
        name="Grow herbs & greens at home",
        category=C.DIET,
        description="Grow basic herbs, spinach, and greens in pots on your balcony or garden",
        icon="🌱",
        carbon_saved_kg=5, monthly_savings=300, upfront_cost=500,
        difficulty=3, phase=P.SHORT_TERM, trees_equivalent=0.06,
        tips="Start with tulsi, mint, and coriander; they grow easily in Indian climate.",
        requires_garden=True,
    ),
    CandidateAction(
        name="Switch to plant-based milk",
        category=C.DIET,
        description="Replace dairy milk with soy, oat, or almond milk for some uses",
        icon="🥛",
        carbon_saved_kg=10, monthly_savings=0, upfront_cost=0,
        difficulty=3, phase=P.MEDIUM_TERM, trees_equivalent=0.11,
        tips="Soy milk has the closest nutritional profile to dairy. Great for smoothies and cereal.",
        applicable_diets=frozenset({D.FLEXITARIAN, D.VEGETARIAN}),
    ),
    CandidateAction(
        name="Carry your own water bottle",
        category=C.DIET,
        description="Use a reusable bottle to avoid single-use plastic water bottles",
        icon="🫗",
        carbon_saved_kg=3, monthly_savings=200, upfront_cost=500,
        difficulty=1, phase=P.IMMEDIATE, trees_equivalent=0.03,
        tips="A stainless steel bottle lasts years. Install a water filter at home for pure water.",
    ),
    # ── Waste (4) ─────────────────────────────────────────────────────────────
    CandidateAction(
        name="Start composting kitchen waste",
        category=C.WASTE,
        description="Compost vegetable peels, coffee grounds, and food scraps at home",
        icon="🪱",
        carbon_saved_kg=20, monthly_savings=300, upfront_cost=2000,
        difficulty=3, phase=P.SHORT_TERM, trees_equivalent=0.22,
        tips="A simple khamba composter works great on balconies. Produces free fertilizer!",
        requires_garden=True,
    ),
    CandidateAction(
        name="Segregate waste for recycling",
        category=C.WASTE,
        description="Separate dry, wet, and hazardous waste at source for proper recycling",
        icon="♻️",
        carbon_saved_kg=15, monthly_savings=100, upfront_cost=500,
        difficulty=2, phase=P.IMMEDIATE, trees_equivalent=0.17,
        tips="Use 3 bins: green (wet), blue (dry recyclable), red (hazardous). Sell dry waste to kabadiwala.",
    ),
    CandidateAction(
        name="Carry reusable bags & containers",
        category=C.WASTE,
        description="Replace single-use plastic bags with cloth bags for all shopping",
        icon="🛍️",
        carbon_saved_kg=5, monthly_savings=100, upfront_cost=300,
        difficulty=1, phase=P.IMMEDIATE, trees_equivalent=0.06,
        tips="Keep bags in your car/backpack so you always have them. Steel containers for takeaway food.",
    ),
    CandidateAction(
        name="Switch to bamboo/reusable products",
        category=C.WASTE,
        description="Replace disposable items with bamboo toothbrush, steel straws, cloth napkins",
        icon="🎋",
        carbon_saved_kg=8, monthly_savings=200, upfront_cost=1000,
        difficulty=2, phase=P.SHORT_TERM, trees_equivalent=0.09,
        tips="Bamboo products biodegrade in months vs plastic's centuries. Start with toothbrush and straws.",
    ),
    # ── Tree planting (4) ─────────────────────────────────────────────────────
    CandidateAction(
        name="Plant a tree in your garden",
        category=C.TREE_PLANTING,
        description="Plant a native tree species in your garden or society compound",
        icon="🌳",
        carbon_saved_kg=22, monthly_savings=0, upfront_cost=200,
        difficulty=3, phase=P.MEDIUM_TERM, trees_equivalent=1.0,
        tips="Neem and Peepal absorb the most CO₂. Plant during monsoon for best survival rates.",
        requires_garden=True,
    ),
    CandidateAction(
        name="Sponsor tree planting (5 trees)",
        category=C.TREE_PLANTING,
        description="Sponsor 5 trees through a verified NGO tree planting program",
        icon="🌲",
        carbon_saved_kg=110, monthly_savings=0, upfront_cost=1500,
        difficulty=1, phase=P.MEDIUM_TERM, trees_equivalent=5.0,
        tips="Organizations like SankalpTaru give GPS-tracked trees. ₹300 per tree with maintenance.",
    ),
    CandidateAction(
        name="Join community plantation drives",
        category=C.TREE_PLANTING,
        description="Participate in local tree planting events and plantation drives",
        icon="🤝",
        carbon_saved_kg=22, monthly_savings=0, upfront_cost=0,
        difficulty=2, phase=P.SHORT_TERM, trees_equivalent=1.0,
        tips="Check the events tab for upcoming drives near you. Great community activity!",
    ),
    CandidateAction(
        name="Maintain a kitchen garden",
        category=C.TREE_PLANTING,
        description="Grow vegetables, fruits, and medicinal plants in your garden or terrace",
        icon="🪴",
        carbon_saved_kg=10, monthly_savings=500, upfront_cost=2000,
        difficulty=4, phase=P.MEDIUM_TERM, trees_equivalent=0.11,
        tips="Start with tomatoes, chillies, and brinjal. Use compost from kitchen waste as fertilizer.",
        requires_garden=True,
    ),
)
