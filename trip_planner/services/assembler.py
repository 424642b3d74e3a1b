"""Response assembler - Merges stage outputs into a TripResponse."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..domain.errors import AssemblyError
from ..domain.models import (
    ActivitySummary,
    BudgetPlan,
    DayItinerary,
    ItineraryPlan,
    RecommendationSet,
    Recommendations,
    TripRequest,
    TripResponse,
)


@dataclass
class ResponseAssembler:
    """Builds the externally visible response.

    - ``total_budget`` is the request budget, not a stage-derived figure.
    - Days are numbered 1..N by position; dates play no part.
    - Activities keep only time, activity name and description.
    - Recommendations keep restaurants and tips. Attractions and local
      insights are added only when ``expose_extended_recommendations``
      is set.

    Attributes:
        expose_extended_recommendations: Include attractions and local
            insights in the response
    """

    expose_extended_recommendations: bool = False

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def assemble(
        self,
        request: TripRequest,
        budget: BudgetPlan,
        itinerary: ItineraryPlan,
        recommendations: RecommendationSet,
    ) -> TripResponse:
        """Merge the three stage outputs.

        Raises:
            AssemblyError: If a stage output lacks a field the response
                needs (no restaurants or tips, a day without a title).
        """
        if itinerary.days is None:
            raise AssemblyError("Itinerary has no days", field_name="days")

        days = []
        for position, day in enumerate(itinerary.days, start=1):
            if not isinstance(day.title, str):
                raise AssemblyError(
                    f"Day {position} has no title", field_name="days.title"
                )
            days.append(
                DayItinerary(
                    day=position,
                    title=day.title,
                    daily_budget=day.daily_budget,
                    activities=tuple(
                        ActivitySummary(
                            time=activity.time,
                            activity=activity.name,
                            desc=activity.description,
                        )
                        for activity in day.activities
                    ),
                )
            )

        if not recommendations.restaurants:
            raise AssemblyError(
                "Recommendations have no restaurants",
                field_name="recommendations.restaurants",
            )
        if not recommendations.tips:
            raise AssemblyError(
                "Recommendations have no tips", field_name="recommendations.tips"
            )

        exposed = Recommendations(
            restaurants=tuple(recommendations.restaurants),
            tips=tuple(recommendations.tips),
        )
        if self.expose_extended_recommendations:
            exposed = Recommendations(
                restaurants=exposed.restaurants,
                tips=exposed.tips,
                attractions=tuple(recommendations.attractions),
                local_insights=tuple(recommendations.local_insights),
            )

        self._logger.debug(
            "Response assembled",
            extra={
                "days": len(days),
                "planned_daily_budget": budget.daily_budget,
                "extended_recommendations": self.expose_extended_recommendations,
            },
        )
        return TripResponse(
            total_budget=request.budget,
            days=tuple(days),
            recommendations=exposed,
        )
