"""Shared fixtures and deterministic language model doubles."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence, Union

import pytest

from trip_planner.config import reset_config
from trip_planner.domain.errors import LanguageModelError
from trip_planner.domain.models import TripRequest


@dataclass
class ScriptedLanguageModel:
    """Replays a fixed list of replies, one per call.

    An Exception in the script is raised instead of returned. Prompts and
    timeouts of every call are recorded.
    """

    replies: Sequence[Union[str, Exception]] = ()
    prompts: list[str] = field(default_factory=list)
    timeouts: list[Optional[float]] = field(default_factory=list)

    def generate(self, prompt: str, *, timeout: Optional[float] = None) -> str:
        index = len(self.prompts)
        self.prompts.append(prompt)
        self.timeouts.append(timeout)
        if index >= len(self.replies):
            raise LanguageModelError("Script exhausted", provider="scripted")
        reply = self.replies[index]
        if isinstance(reply, Exception):
            raise reply
        return reply

    @property
    def calls(self) -> int:
        return len(self.prompts)


BUDGET_REPLY = json.dumps(
    {
        "dailyBudget": 1500,
        "budgetAllocation": {
            "transportation": "30% - 1350",
            "accommodation": "30% - 1350",
            "dining": "20% - 900",
            "attractions": "10% - 450",
            "shopping": "5% - 225",
            "miscellaneous": "5% - 225",
        },
        "costFactors": {"destination": "moderate", "season": "spring peak"},
        "recommendations": "Use a regional rail pass",
    }
)

ITINERARY_REPLY = """```json
{
  "summary": "Three days of temples and food in Kyoto",
  "days": [
    {"date": "2025-04-01", "title": "Day 1: Higashiyama", "dailyBudget": 1500,
     "activities": [
       {"time": "09:00", "activity": "Kiyomizu-dera", "desc": "Temple on the hill",
        "location": "Higashiyama", "cost": 400, "category": "temple"},
       {"time": "13:00", "activity": "Nishiki Market", "desc": "Street food",
        "location": "Nakagyo", "cost": 300, "category": "food"}
     ]},
    {"date": "2025-04-02", "title": "Day 2: Arashiyama", "dailyBudget": 1500,
     "activities": [
       {"time": "08:00", "activity": "Bamboo grove", "desc": "Early walk",
        "location": "Arashiyama", "cost": 0, "category": "nature"}
     ]},
    {"date": "2025-04-03", "title": "Day 3: Fushimi", "dailyBudget": 1500,
     "activities": [
       {"time": "07:00", "activity": "Fushimi Inari", "desc": "Torii gates",
        "location": "Fushimi", "cost": 0, "category": "shrine"}
     ]}
  ]
}
```"""

RECOMMENDATION_REPLY = json.dumps(
    {
        "restaurants": ["Okonomiyaki Katsu - savoury pancakes", "Omen - udon"],
        "attractions": ["Kinkaku-ji - golden pavilion"],
        "tips": ["Buy an ICOCA card", "Start early to avoid crowds"],
        "localInsights": ["Do not eat while walking"],
    }
)


@pytest.fixture(autouse=True)
def _fresh_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def kyoto_request() -> TripRequest:
    return TripRequest(
        destination="Kyoto",
        start_date="2025-04-01",
        end_date="2025-04-03",
        budget=4500,
        companions=2,
        preferences="food and temples",
    )


@pytest.fixture
def failing_model() -> ScriptedLanguageModel:
    """Fails every call."""
    return ScriptedLanguageModel(
        replies=[LanguageModelError("connection refused", provider="scripted")] * 3
    )


@pytest.fixture
def happy_model() -> ScriptedLanguageModel:
    """Well-formed replies for budget, itinerary and recommendations."""
    return ScriptedLanguageModel(
        replies=[BUDGET_REPLY, ITINERARY_REPLY, RECOMMENDATION_REPLY]
    )


@pytest.fixture
def scripted():
    """Factory for ScriptedLanguageModel doubles."""
    return lambda *replies: ScriptedLanguageModel(replies=list(replies))


@pytest.fixture
def budget_reply() -> str:
    return BUDGET_REPLY


@pytest.fixture
def itinerary_reply() -> str:
    return ITINERARY_REPLY


@pytest.fixture
def recommendation_reply() -> str:
    return RECOMMENDATION_REPLY


@pytest.fixture(autouse=True)
def _detach_log_handlers():
    yield
    logger = logging.getLogger("trip_planner")
    for handler in list(logger.handlers):
        if getattr(handler, "_trip_planner", False):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
