"""Trip planner service - Main orchestrator.

Runs the tool flow strictly in sequence:

    START -> DAYS_COMPUTED -> BUDGET_READY -> ITINERARY_READY
          -> RECOMMENDATIONS_READY -> ASSEMBLED -> DONE

Every stage returns a result (generated or canned), so each transition
fires as soon as the previous step returns. The only failure the caller
can see is a single PipelineError for anything that escapes a stage or
the assembler.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional

from ..dates import DaySpan, compute_day_span
from ..deadline import Deadline
from ..domain.errors import PipelineError
from ..domain.models import (
    BudgetPlan,
    ItineraryPlan,
    RecommendationSet,
    StageResult,
    TripRequest,
    TripResponse,
)
from ..ports.llm import LanguageModelPort
from ..stages import (
    BudgetEstimationStage,
    ItineraryPlanningStage,
    RecommendationExtractionStage,
)
from .assembler import ResponseAssembler


class PipelineState(Enum):
    """Progress of one planning run."""

    START = auto()
    DAYS_COMPUTED = auto()
    BUDGET_READY = auto()
    ITINERARY_READY = auto()
    RECOMMENDATIONS_READY = auto()
    ASSEMBLED = auto()
    DONE = auto()


@dataclass(frozen=True, slots=True)
class PipelineRun:
    """Everything one successful run produced.

    Attributes:
        response: The assembled response
        day_span: Inclusive day count used for the run
        budget: Budget stage result
        itinerary: Itinerary stage result
        recommendations: Recommendation stage result
        state: Final pipeline state (DONE)
    """

    response: TripResponse
    day_span: DaySpan
    budget: StageResult[BudgetPlan]
    itinerary: StageResult[ItineraryPlan]
    recommendations: StageResult[RecommendationSet]
    state: PipelineState = PipelineState.DONE

    @property
    def fallbacks(self) -> dict[str, bool]:
        """Which stages substituted their canned result."""
        return {
            "budget": self.budget.used_fallback,
            "itinerary": self.itinerary.used_fallback,
            "recommendations": self.recommendations.used_fallback,
        }


@dataclass
class TripPlannerService:
    """Main service for planning trips.

    Attributes:
        budget_stage: Estimates the daily budget and allocation
        itinerary_stage: Plans the days
        recommendation_stage: Extracts restaurants and tips
        assembler: Merges stage outputs into the response
        deadline_seconds: Time budget for all model calls of one run
    """

    budget_stage: BudgetEstimationStage
    itinerary_stage: ItineraryPlanningStage
    recommendation_stage: RecommendationExtractionStage
    assembler: ResponseAssembler = field(default_factory=ResponseAssembler)
    deadline_seconds: Optional[float] = None

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @classmethod
    def with_client(
        cls,
        client: LanguageModelPort,
        *,
        call_timeout_seconds: Optional[float] = None,
        deadline_seconds: Optional[float] = None,
        expose_extended_recommendations: bool = False,
    ) -> TripPlannerService:
        """Build a service whose three stages share one generator."""
        return cls(
            budget_stage=BudgetEstimationStage(client, call_timeout_seconds),
            itinerary_stage=ItineraryPlanningStage(client, call_timeout_seconds),
            recommendation_stage=RecommendationExtractionStage(
                client, call_timeout_seconds
            ),
            assembler=ResponseAssembler(
                expose_extended_recommendations=expose_extended_recommendations
            ),
            deadline_seconds=deadline_seconds,
        )

    def run(self, request: TripRequest) -> PipelineRun:
        """Run the full tool flow for one request.

        Args:
            request: The validated trip request.

        Returns:
            PipelineRun with the response and each stage's result.

        Raises:
            PipelineError: If anything escapes a stage or the assembler.
        """
        state = PipelineState.START
        deadline = Deadline.after(self.deadline_seconds)
        self._logger.info(
            "Starting trip planning",
            extra={
                "destination": request.destination,
                "start_date": request.start_date,
                "end_date": request.end_date,
                "budget": request.budget,
                "companions": request.companions,
            },
        )

        try:
            span = compute_day_span(request.start_date, request.end_date)
            state = self._advance(state, PipelineState.DAYS_COMPUTED, days=span.count)

            budget = self.budget_stage.estimate(
                request.budget,
                span.count,
                request.companions,
                request.destination,
                deadline=deadline,
            )
            state = self._advance(state, PipelineState.BUDGET_READY)

            itinerary = self.itinerary_stage.plan(
                request.destination,
                request.start_date,
                request.end_date,
                budget.value,
                request.preferences,
                deadline=deadline,
            )
            state = self._advance(state, PipelineState.ITINERARY_READY)

            recommendations = self.recommendation_stage.extract(
                request.destination,
                request.preferences,
                itinerary.value.summary,
                deadline=deadline,
            )
            state = self._advance(state, PipelineState.RECOMMENDATIONS_READY)

            response = self.assembler.assemble(
                request, budget.value, itinerary.value, recommendations.value
            )
            state = self._advance(state, PipelineState.ASSEMBLED)
        except Exception as e:
            self._logger.exception(
                "Trip planning failed", extra={"state": state.name}
            )
            raise PipelineError(
                f"Trip planning failed: {e}", cause=e, state=state.name
            ) from e

        state = self._advance(state, PipelineState.DONE, days=response.num_days)
        return PipelineRun(
            response=response,
            day_span=span,
            budget=budget,
            itinerary=itinerary,
            recommendations=recommendations,
            state=state,
        )

    def plan_trip(self, request: TripRequest) -> TripResponse:
        """Plan a trip and return only the response.

        Raises:
            PipelineError: If the pipeline fails.
        """
        return self.run(request).response

    def plan_trip_safe(
        self, request: TripRequest
    ) -> tuple[Optional[TripResponse], Optional[str]]:
        """Plan a trip, returning an error message instead of raising.

        Returns:
            Tuple of (TripResponse or None, error message or None).
        """
        try:
            return self.plan_trip(request), None
        except PipelineError as e:
            return None, e.message

    def _advance(
        self, current: PipelineState, target: PipelineState, **context: int
    ) -> PipelineState:
        self._logger.info(
            "Pipeline state changed",
            extra={"from_state": current.name, "to_state": target.name, **context},
        )
        return target
