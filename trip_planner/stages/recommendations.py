"""Recommendation extraction stage.

Asks for restaurants, attractions, tips and local insights based on the
itinerary summary. Replies lacking restaurants or tips get a one-item
default list for the missing key; a failed call or unreadable reply gets
the canned recommendation set.
"""

from __future__ import annotations

from typing import Optional

from ..deadline import Deadline
from ..domain.models import RecommendationSet, StageResult
from ..prompts import RecommendationPromptParams, build_recommendation_prompt
from ..replies import RecommendationReply, validate_reply
from .base import GenerationStage

DEFAULT_RESTAURANTS = ("Local specialty restaurants",)
DEFAULT_TIPS = ("Learn about local culture and customs before you go",)


def default_recommendations(destination: str) -> RecommendationSet:
    return RecommendationSet(
        restaurants=(
            f"{destination} local specialty restaurant - taste authentic regional dishes",
            f"Popular {destination} food spot - experience the local food scene",
            f"Long-established {destination} eatery - traditional recipes with history",
        ),
        attractions=(
            f"{destination} landmark sights - the must-see highlights",
            "Cultural museum - learn about local history",
            "Natural scenery - enjoy the outdoors",
        ),
        tips=(
            "Book tickets for popular attractions in advance to skip the queues",
            "Check local transport options and install the relevant apps",
            "Pack common medicines and be careful with food hygiene",
            "Learn a few words of the local language",
            "Respect local customs and traditions",
        ),
        local_insights=(
            "Read up on the cultural background to blend in with local life",
            "Look out for local festivals and events",
            "Talk to locals for practical advice",
        ),
    )


def parse_recommendations(text: str) -> StageResult[RecommendationSet]:
    """Read a RecommendationSet from generated text.

    Raises:
        PayloadError: If the text is not a JSON object.
    """
    reply = validate_reply(RecommendationReply, text)
    warnings = []

    restaurants = reply.restaurants
    if not restaurants:
        warnings.append("No restaurants in reply, default substituted")
        restaurants = DEFAULT_RESTAURANTS

    tips = reply.tips
    if not tips:
        warnings.append("No tips in reply, default substituted")
        tips = DEFAULT_TIPS

    return StageResult(
        RecommendationSet(
            restaurants=restaurants,
            tips=tips,
            attractions=reply.attractions,
            local_insights=reply.local_insights,
        ),
        warnings=tuple(warnings),
    )


class RecommendationExtractionStage(GenerationStage):
    """Produces restaurants, attractions, tips and local insights."""

    def extract(
        self,
        destination: str,
        preferences: Optional[str],
        itinerary_summary: str,
        deadline: Optional[Deadline] = None,
    ) -> StageResult[RecommendationSet]:
        self._logger.info(
            "Extracting recommendations",
            extra={"destination": destination, "preferences": preferences},
        )
        prompt = build_recommendation_prompt(
            RecommendationPromptParams(
                destination=destination,
                preferences=preferences or "no particular preferences",
                itinerary_summary=itinerary_summary,
            )
        )
        result = self._run(
            prompt,
            parse_recommendations,
            lambda: default_recommendations(destination),
            deadline,
        )
        for warning in result.warnings:
            self._logger.warning(warning, extra={"stage": self.stage_name})
        self._logger.info(
            "Recommendations extracted",
            extra={
                "restaurants": len(result.value.restaurants),
                "tips": len(result.value.tips),
                "used_fallback": result.used_fallback,
            },
        )
        return result
