"""Itinerary planning stage.

Turns the trip dates and the budget plan into a day-by-day plan. The
number of generated days is compared with the requested span; a mismatch
is logged and reported in ``StageResult.warnings`` but the generated days
are passed through unchanged.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from ..dates import compute_day_span, iter_trip_dates
from ..deadline import Deadline
from ..domain.models import Activity, BudgetPlan, DayPlan, ItineraryPlan, StageResult
from ..prompts import ItineraryPromptParams, build_itinerary_prompt
from ..replies import ItineraryReply, validate_reply
from .base import GenerationStage

FALLBACK_DAILY_BUDGET = 2000

_FALLBACK_ACTIVITIES = (
    Activity(
        time="Morning",
        name="City sightseeing",
        description="Visit the best-known local sights",
        location="City centre",
        cost=500,
        category="sightseeing",
    ),
    Activity(
        time="Afternoon",
        name="Local food tasting",
        description="Try the regional specialities",
        location="Local restaurant",
        cost=300,
        category="dining",
    ),
    Activity(
        time="Evening",
        name="Leisure time",
        description="Enjoy the local nightlife",
        location="Shopping district",
        cost=200,
        category="entertainment",
    ),
)


def default_itinerary(destination: str, start_date: str, end_date: str) -> ItineraryPlan:
    """Canned itinerary: three fixed activities on every day of the trip.

    Every day is budgeted at FALLBACK_DAILY_BUDGET whatever the request
    budget. If the dates are unreadable the default day count is used and
    the days carry no date.
    """
    try:
        dates: list[Optional[dt.date]] = list(iter_trip_dates(start_date, end_date))
    except (TypeError, ValueError):
        dates = [None] * compute_day_span(start_date, end_date).count

    days = tuple(
        DayPlan(
            date=day_date,
            title=f"Day {n}: exploring {destination}",
            daily_budget=FALLBACK_DAILY_BUDGET,
            activities=_FALLBACK_ACTIVITIES,
        )
        for n, day_date in enumerate(dates, start=1)
    )
    return ItineraryPlan(summary=f"Default itinerary for {destination}", days=days)


def _derive_date(first_date: Optional[dt.date], index: int) -> Optional[dt.date]:
    if first_date is None:
        return None
    try:
        return first_date + dt.timedelta(days=index)
    except OverflowError:
        return None


def parse_itinerary(
    text: str,
    start_date: str,
    default_daily_budget: int,
) -> ItineraryPlan:
    """Read an ItineraryPlan from generated text.

    Missing day dates are derived from ``start_date`` and the day's
    position; missing day budgets default to ``default_daily_budget``.

    Raises:
        PayloadError: If the reply is not an object with a ``days`` list
            of day objects whose ``activities`` are lists of objects.
    """
    reply = validate_reply(ItineraryReply, text)
    try:
        first_date: Optional[dt.date] = dt.date.fromisoformat(start_date)
    except (TypeError, ValueError):
        first_date = None

    days = tuple(
        DayPlan(
            date=day.date or _derive_date(first_date, index),
            title=day.title or f"Day {index + 1}",
            daily_budget=(
                day.daily_budget
                if day.daily_budget is not None
                else default_daily_budget
            ),
            activities=tuple(
                Activity(
                    time=activity.time,
                    name=activity.name,
                    description=activity.description,
                    location=activity.location,
                    cost=activity.cost,
                    category=activity.category,
                )
                for activity in day.activities
            ),
        )
        for index, day in enumerate(reply.days)
    )
    return ItineraryPlan(summary=reply.summary, days=days)


class ItineraryPlanningStage(GenerationStage):
    """Produces the day-by-day plan from the budget plan."""

    def plan(
        self,
        destination: str,
        start_date: str,
        end_date: str,
        budget_plan: BudgetPlan,
        preferences: Optional[str] = None,
        deadline: Optional[Deadline] = None,
    ) -> StageResult[ItineraryPlan]:
        expected_days = compute_day_span(start_date, end_date).count
        self._logger.info(
            "Planning itinerary",
            extra={
                "destination": destination,
                "start_date": start_date,
                "end_date": end_date,
                "days": expected_days,
            },
        )
        prompt = build_itinerary_prompt(
            ItineraryPromptParams(
                destination=destination,
                start_date=start_date,
                end_date=end_date,
                days=expected_days,
                preferences=preferences or "no particular preferences",
                daily_budget=budget_plan.daily_budget,
            )
        )

        def parse(text: str) -> StageResult[ItineraryPlan]:
            itinerary = parse_itinerary(text, start_date, budget_plan.daily_budget)
            warnings: tuple[str, ...] = ()
            if itinerary.num_days != expected_days:
                self._logger.warning(
                    "Itinerary day count mismatch",
                    extra={"expected": expected_days, "actual": itinerary.num_days},
                )
                warnings = (
                    f"Expected {expected_days} days, got {itinerary.num_days}",
                )
            return StageResult(itinerary, warnings=warnings)

        result = self._run(
            prompt,
            parse,
            lambda: default_itinerary(destination, start_date, end_date),
            deadline,
        )
        self._logger.info(
            "Itinerary planned",
            extra={"days": result.value.num_days, "used_fallback": result.used_fallback},
        )
        return result
