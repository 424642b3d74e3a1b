"""Pipeline stages - One model-backed sub-task each.

Every stage issues a single model call, validates the reply, and returns
a StageResult. Failures never leave a stage; the canned result is
returned instead with ``used_fallback=True``.

Available stages:
- BudgetEstimationStage: daily budget and category allocation
- ItineraryPlanningStage: day-by-day plan
- RecommendationExtractionStage: restaurants, tips and more
"""

from .base import GenerationStage
from .budget import BudgetEstimationStage, default_budget_plan
from .itinerary import ItineraryPlanningStage, default_itinerary
from .recommendations import RecommendationExtractionStage, default_recommendations

__all__ = [
    "GenerationStage",
    "BudgetEstimationStage",
    "ItineraryPlanningStage",
    "RecommendationExtractionStage",
    "default_budget_plan",
    "default_itinerary",
    "default_recommendations",
]
