"""Domain layer - Core business models and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    AssemblyError,
    ConfigurationError,
    InvalidTripRequestError,
    LanguageModelError,
    LanguageModelTimeoutError,
    PayloadError,
    PipelineError,
    TripPlannerError,
)
from .models import (
    Activity,
    ActivitySummary,
    BudgetPlan,
    DayItinerary,
    DayPlan,
    ItineraryPlan,
    RecommendationSet,
    Recommendations,
    StageResult,
    TripRequest,
    TripResponse,
)

__all__ = [
    # Models
    "TripRequest",
    "BudgetPlan",
    "Activity",
    "DayPlan",
    "ItineraryPlan",
    "RecommendationSet",
    "StageResult",
    "ActivitySummary",
    "DayItinerary",
    "Recommendations",
    "TripResponse",
    # Errors
    "TripPlannerError",
    "LanguageModelError",
    "LanguageModelTimeoutError",
    "PayloadError",
    "AssemblyError",
    "PipelineError",
    "InvalidTripRequestError",
    "ConfigurationError",
]
