"""Top-level package for the Trip Planner project.

The planner turns a travel request into a multi-day itinerary with a
budget breakdown and recommendations by running three language model
stages in sequence. Every stage degrades to a canned result when the
model misbehaves, so a run yields either a complete response or a single
PipelineError.
"""

from .domain import PipelineError, TripRequest, TripResponse
from .services import TripPlannerService

__all__ = ["TripRequest", "TripResponse", "TripPlannerService", "PipelineError"]
