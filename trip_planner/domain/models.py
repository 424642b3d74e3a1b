"""Immutable domain models for the Trip Planner.

All models are frozen dataclasses with slots. A fresh set of values is
built for every planning run, so nothing here is shared between requests.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Any, Generic, Mapping, Optional, TypeVar

from .errors import InvalidTripRequestError

T = TypeVar("T")

MIN_BUDGET = 100
MIN_COMPANIONS = 1
MAX_COMPANIONS = 10


@dataclass(frozen=True, slots=True)
class TripRequest:
    """A travel request as submitted by the user.

    Attributes:
        destination: Destination name (non-empty)
        start_date: First day of the trip, ISO format (YYYY-MM-DD)
        end_date: Last day of the trip, ISO format (YYYY-MM-DD)
        budget: Total budget for the whole party
        companions: Number of travellers (1-10)
        preferences: Optional free-text preferences
    """

    destination: str
    start_date: str
    end_date: str
    budget: int
    companions: int
    preferences: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate field ranges."""
        if not isinstance(self.destination, str) or not self.destination.strip():
            raise InvalidTripRequestError(
                "Destination must be a non-empty string", field_name="destination"
            )
        if not _is_int(self.budget) or self.budget < MIN_BUDGET:
            raise InvalidTripRequestError(
                f"Budget must be an integer >= {MIN_BUDGET}, got {self.budget!r}",
                field_name="budget",
            )
        if not _is_int(self.companions) or not (
            MIN_COMPANIONS <= self.companions <= MAX_COMPANIONS
        ):
            raise InvalidTripRequestError(
                f"Companions must be between {MIN_COMPANIONS} and {MAX_COMPANIONS}, "
                f"got {self.companions!r}",
                field_name="companions",
            )

    @property
    def preferences_text(self) -> str:
        """Preferences as prompt text, never empty."""
        if self.preferences and self.preferences.strip():
            return self.preferences.strip()
        return "no particular preferences"

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> TripRequest:
        """Build a request from its camelCase wire shape.

        Args:
            payload: Mapping with destination, startDate, endDate, budget,
                companions and optionally preferences.

        Returns:
            A validated TripRequest.

        Raises:
            InvalidTripRequestError: If a field is missing or malformed,
                or if startDate falls after endDate.
        """
        for key in ("destination", "startDate", "endDate", "budget", "companions"):
            if payload.get(key) is None:
                raise InvalidTripRequestError(
                    f"Missing required field {key!r}", field_name=key
                )

        dates = {}
        for key in ("startDate", "endDate"):
            try:
                dates[key] = dt.date.fromisoformat(str(payload[key]))
            except ValueError as e:
                raise InvalidTripRequestError(
                    f"{key} must be an ISO date (YYYY-MM-DD)",
                    field_name=key,
                    cause=e,
                )
        if dates["startDate"] > dates["endDate"]:
            raise InvalidTripRequestError(
                "startDate must not be after endDate", field_name="startDate"
            )

        preferences = payload.get("preferences")
        if preferences is not None and not isinstance(preferences, str):
            raise InvalidTripRequestError(
                "preferences must be a string", field_name="preferences"
            )

        return cls(
            destination=payload["destination"],
            start_date=dates["startDate"].isoformat(),
            end_date=dates["endDate"].isoformat(),
            budget=payload["budget"],
            companions=payload["companions"],
            preferences=preferences,
        )


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True, slots=True)
class BudgetPlan:
    """Budget breakdown produced by the budget estimation stage.

    Attributes:
        daily_budget: Budget per day for the whole party
        category_allocation: Category name -> share description
        recommendations: Budget optimisation advice
        cost_factors: Factor name -> assessment (destination, season, ...)
    """

    daily_budget: int
    category_allocation: Mapping[str, str] = field(default_factory=dict)
    recommendations: str = ""
    cost_factors: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Activity:
    """A single scheduled activity within a day."""

    time: str
    name: str
    description: str
    location: str = ""
    cost: Optional[int] = None
    category: str = ""


@dataclass(frozen=True, slots=True)
class DayPlan:
    """One day of an itinerary.

    Attributes:
        date: Calendar date, or None when the request dates were unreadable
        title: Short headline for the day
        daily_budget: Budget allotted to the day
        activities: Activities in schedule order
    """

    date: Optional[dt.date]
    title: str
    daily_budget: int
    activities: tuple[Activity, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class ItineraryPlan:
    """Day-by-day plan produced by the itinerary planning stage."""

    summary: str
    days: tuple[DayPlan, ...] = field(default_factory=tuple)

    @property
    def num_days(self) -> int:
        """Return the number of planned days."""
        return len(self.days)


@dataclass(frozen=True, slots=True)
class RecommendationSet:
    """Recommendations produced by the recommendation extraction stage."""

    restaurants: tuple[str, ...]
    tips: tuple[str, ...]
    attractions: tuple[str, ...] = field(default_factory=tuple)
    local_insights: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class StageResult(Generic[T]):
    """Outcome of one pipeline stage.

    Attributes:
        value: The stage output (generated or canned)
        used_fallback: True when the canned result was substituted
        reason: Why the fallback was used, if it was
        warnings: Non-fatal conditions observed on the generated path
    """

    value: T
    used_fallback: bool = False
    reason: Optional[str] = None
    warnings: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class ActivitySummary:
    """Activity as exposed in the response."""

    time: str
    activity: str
    desc: str

    def to_dict(self) -> dict[str, str]:
        return {"time": self.time, "activity": self.activity, "desc": self.desc}


@dataclass(frozen=True, slots=True)
class DayItinerary:
    """Day entry as exposed in the response, numbered from 1."""

    day: int
    title: str
    daily_budget: int
    activities: tuple[ActivitySummary, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "day": self.day,
            "title": self.title,
            "dailyBudget": self.daily_budget,
            "activities": [a.to_dict() for a in self.activities],
        }


@dataclass(frozen=True, slots=True)
class Recommendations:
    """Recommendations as exposed in the response.

    ``attractions`` and ``local_insights`` stay None unless the assembler
    is configured to expose them.
    """

    restaurants: tuple[str, ...]
    tips: tuple[str, ...]
    attractions: Optional[tuple[str, ...]] = None
    local_insights: Optional[tuple[str, ...]] = None

    def to_dict(self) -> dict[str, list[str]]:
        out = {"restaurants": list(self.restaurants), "tips": list(self.tips)}
        if self.attractions is not None:
            out["attractions"] = list(self.attractions)
        if self.local_insights is not None:
            out["localInsights"] = list(self.local_insights)
        return out


@dataclass(frozen=True, slots=True)
class TripResponse:
    """Final planning result.

    Attributes:
        total_budget: The budget from the original request
        days: Day entries numbered 1..N
        recommendations: Restaurant and tip recommendations
    """

    total_budget: int
    days: tuple[DayItinerary, ...]
    recommendations: Recommendations

    @property
    def num_days(self) -> int:
        return len(self.days)

    def to_dict(self) -> dict[str, Any]:
        """Render the camelCase wire shape."""
        return {
            "totalBudget": self.total_budget,
            "days": [d.to_dict() for d in self.days],
            "recommendations": self.recommendations.to_dict(),
        }
