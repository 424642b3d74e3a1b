"""Tests for the recommendation extraction stage."""

import json

import pytest

from trip_planner.domain.errors import LanguageModelError
from trip_planner.stages import RecommendationExtractionStage, default_recommendations
from trip_planner.stages.recommendations import DEFAULT_RESTAURANTS, DEFAULT_TIPS


def test_default_recommendations_shape():
    recs = default_recommendations("Kyoto")
    assert len(recs.restaurants) == 3
    assert len(recs.attractions) == 3
    assert len(recs.tips) == 5
    assert len(recs.local_insights) == 3
    assert all("Kyoto" in r for r in recs.restaurants)


@pytest.mark.parametrize("preferences", [None, "", "nightlife", "x" * 500])
def test_fallback_independent_of_preferences(scripted, preferences):
    stage = RecommendationExtractionStage(scripted(LanguageModelError("down")))
    result = stage.extract("Oslo", preferences, "summary")
    assert result.used_fallback is True
    assert len(result.value.restaurants) == 3
    assert len(result.value.tips) == 5


def test_generated_recommendations(scripted, recommendation_reply):
    model = scripted(recommendation_reply)
    result = RecommendationExtractionStage(model).extract(
        "Kyoto", "food", "Temples and markets"
    )
    assert result.used_fallback is False
    assert result.value.restaurants[0].startswith("Okonomiyaki Katsu")
    assert result.value.tips == ("Buy an ICOCA card", "Start early to avoid crowds")
    assert result.value.attractions == ("Kinkaku-ji - golden pavilion",)
    assert result.value.local_insights == ("Do not eat while walking",)
    assert "Temples and markets" in model.prompts[0]


def test_missing_restaurants_and_tips_get_defaults(scripted):
    reply = "```json\n" + json.dumps({"attractions": ["Castle"]}) + "\n```"
    result = RecommendationExtractionStage(scripted(reply)).extract("Kyoto", None, "")
    assert result.used_fallback is False
    assert result.value.restaurants == DEFAULT_RESTAURANTS
    assert result.value.tips == DEFAULT_TIPS
    assert result.value.attractions == ("Castle",)
    assert result.value.local_insights == ()
    assert len(result.warnings) == 2


def test_optional_keys_left_empty(scripted):
    reply = json.dumps({"restaurants": ["A"], "tips": ["B"]})
    result = RecommendationExtractionStage(scripted(reply)).extract("Kyoto", None, "")
    assert result.value.attractions == ()
    assert result.value.local_insights == ()
    assert result.warnings == ()


def test_non_json_reply_falls_back_to_canned_set(scripted):
    result = RecommendationExtractionStage(scripted("no idea")).extract("Lima", None, "")
    assert result.used_fallback is True
    assert result.value == default_recommendations("Lima")
