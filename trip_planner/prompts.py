"""Prompt builders for the three planning stages.

Each builder is a pure function of a small parameter dataclass, so the
exact text sent to the model can be tested without a model.
"""

from __future__ import annotations

import textwrap
from dataclasses import dataclass

BUDGET_CATEGORIES = (
    "transportation",
    "accommodation",
    "dining",
    "attractions",
    "shopping",
    "miscellaneous",
)


@dataclass(frozen=True, slots=True)
class BudgetPromptParams:
    total_budget: int
    days: int
    companions: int
    destination: str


@dataclass(frozen=True, slots=True)
class ItineraryPromptParams:
    destination: str
    start_date: str
    end_date: str
    days: int
    preferences: str
    daily_budget: int


@dataclass(frozen=True, slots=True)
class RecommendationPromptParams:
    destination: str
    preferences: str
    itinerary_summary: str


# ──────────────────────────────────────────────────────────────────────────────
# Budget estimation
# ──────────────────────────────────────────────────────────────────────────────
_BUDGET_TEMPLATE = textwrap.dedent(
    """\
    You are a professional travel budget planner. Draw up a detailed budget
    allocation for the following trip:

    Trip details:
    - Destination: {destination}
    - Length: {days} days
    - Travellers: {companions}
    - Total budget: {total_budget}

    Reply with JSON only, in exactly this shape:
    {{
      "dailyBudget": <daily budget as an integer>,
      "budgetAllocation": {{
        {allocation_lines}
      }},
      "costFactors": {{
        "destination": "assessment of local price levels",
        "season": "seasonal effect on prices",
        "groupSize": "effect of party size on cost"
      }},
      "recommendations": "budget optimisation advice"
    }}

    Guidelines:
    1. Base the allocation on the destination's cost of living.
    2. Transportation is usually 30-40% of the total.
    3. Accommodation is usually 25-35%.
    4. Dining is usually 20-30%.
    5. Attraction tickets are usually 10-20%.
    6. Shopping and miscellaneous share the remainder.
    7. Give concrete optimisation advice.
    """
)


def build_budget_prompt(params: BudgetPromptParams) -> str:
    """Return the budget estimation prompt."""
    allocation_lines = ",\n    ".join(
        f'"{name}": "share and amount for {name}"' for name in BUDGET_CATEGORIES
    )
    return _BUDGET_TEMPLATE.format(
        destination=params.destination,
        days=params.days,
        companions=params.companions,
        total_budget=params.total_budget,
        allocation_lines=allocation_lines,
    )


# ──────────────────────────────────────────────────────────────────────────────
# Itinerary planning
# ──────────────────────────────────────────────────────────────────────────────
_ITINERARY_TEMPLATE = textwrap.dedent(
    """\
    You are a professional travel planner. Create a detailed multi-day
    itinerary for the following trip:

    Trip details:
    - Destination: {destination}
    - Departure date: {start_date}
    - Return date: {end_date}
    - Length: {days} days
    - Preferences: {preferences}
    - Daily budget: {daily_budget}

    Reply with JSON only, in exactly this shape, with one entry in "days"
    per calendar day ({days} entries):
    {{
      "summary": "overview of the whole trip",
      "days": [
        {{
          "date": "YYYY-MM-DD",
          "title": "Day N: headline",
          "dailyBudget": <integer>,
          "activities": [
            {{
              "time": "time of day",
              "activity": "activity name",
              "desc": "detailed description",
              "location": "place",
              "cost": <estimated cost as an integer>,
              "category": "activity type"
            }}
          ]
        }}
      ]
    }}

    Guidelines:
    1. Plan 3-5 main activities per day and avoid overloading.
    2. Leave realistic time for transit and rest.
    3. Combine the traveller's preferences with local highlights.
    4. Mix culture, food, sightseeing and shopping.
    5. Account for arrival on the first day and departure on the last.
    6. Make descriptions specific and practical.
    7. Keep costs consistent with the daily budget.
    8. Consider local transport, weather and opening hours.
    """
)


def build_itinerary_prompt(params: ItineraryPromptParams) -> str:
    """Return the itinerary planning prompt."""
    return _ITINERARY_TEMPLATE.format(
        destination=params.destination,
        start_date=params.start_date,
        end_date=params.end_date,
        days=params.days,
        preferences=params.preferences,
        daily_budget=params.daily_budget,
    )


# ──────────────────────────────────────────────────────────────────────────────
# Recommendation extraction
# ──────────────────────────────────────────────────────────────────────────────
_RECOMMENDATION_TEMPLATE = textwrap.dedent(
    """\
    You are a professional travel advisor. Using the information below,
    give the traveller personalised recommendations.

    Trip details:
    - Destination: {destination}
    - Preferences: {preferences}
    - Itinerary: {itinerary_summary}

    Reply with JSON only, in exactly this shape, with 3-5 items per list:
    {{
      "restaurants": ["Restaurant name - signature dishes and why"],
      "attractions": ["Attraction name - highlights and best time to visit"],
      "tips": ["Practical tip - concrete advice and caveats"],
      "localInsights": ["Insight into local culture"]
    }}

    Guidelines:
    1. Restaurants should match the preferences and name specific dishes.
    2. Attractions should include highlights, best visiting time and
       practical information.
    3. Tips should be actionable: transport, language, culture, safety.
    4. Local insights should help the traveller fit in.
    """
)


def build_recommendation_prompt(params: RecommendationPromptParams) -> str:
    """Return the recommendation extraction prompt."""
    return _RECOMMENDATION_TEMPLATE.format(
        destination=params.destination,
        preferences=params.preferences,
        itinerary_summary=params.itinerary_summary or "not available",
    )
