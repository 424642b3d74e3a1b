"""Tests for the budget estimation stage."""

import json

import pytest

from trip_planner.deadline import Deadline
from trip_planner.domain.errors import LanguageModelError, LanguageModelTimeoutError
from trip_planner.stages import BudgetEstimationStage, default_budget_plan


class TestDefaultBudgetPlan:
    def test_daily_budget_truncates(self):
        assert default_budget_plan(3000, 5).daily_budget == 600
        assert default_budget_plan(1000, 3).daily_budget == 333

    def test_category_amounts(self):
        allocation = default_budget_plan(3000, 5).category_allocation
        assert allocation == {
            "transportation": "30% - 900.0",
            "accommodation": "25% - 750.0",
            "dining": "25% - 750.0",
            "attractions": "15% - 450.0",
            "shopping": "5% - 150.0",
        }

    def test_has_optimisation_tip(self):
        assert default_budget_plan(3000, 5).recommendations

    def test_zero_days_does_not_divide(self):
        assert default_budget_plan(3000, 0).daily_budget == 3000


class TestBudgetEstimationStage:
    def test_generated_plan(self, scripted, budget_reply):
        model = scripted(budget_reply)
        result = BudgetEstimationStage(model).estimate(4500, 3, 2, "Kyoto")

        assert result.used_fallback is False
        assert result.value.daily_budget == 1500
        assert result.value.category_allocation["miscellaneous"] == "5% - 225"
        assert result.value.cost_factors["season"] == "spring peak"
        assert result.value.recommendations == "Use a regional rail pass"
        assert model.calls == 1
        assert "Kyoto" in model.prompts[0]

    def test_transport_error_falls_back(self, scripted):
        model = scripted(LanguageModelError("boom"))
        result = BudgetEstimationStage(model).estimate(3000, 5, 2, "Rome")

        assert result.used_fallback is True
        assert "boom" in result.reason
        assert result.value == default_budget_plan(3000, 5)
        assert model.calls == 1

    @pytest.mark.parametrize(
        "reply",
        [
            "Sorry, I cannot produce a budget.",
            json.dumps({"budgetAllocation": {"dining": "20%"}}),
            json.dumps({"dailyBudget": "lots"}),
            json.dumps({"dailyBudget": -5}),
            json.dumps([1, 2, 3]),
        ],
    )
    def test_unusable_reply_falls_back(self, scripted, reply):
        result = BudgetEstimationStage(scripted(reply)).estimate(3000, 5, 2, "Rome")
        assert result.used_fallback is True
        assert result.value.daily_budget == 600

    def test_numeric_string_daily_budget_accepted(self, scripted):
        reply = json.dumps({"dailyBudget": "750.0"})
        result = BudgetEstimationStage(scripted(reply)).estimate(3000, 4, 1, "Rome")
        assert result.used_fallback is False
        assert result.value.daily_budget == 750
        assert result.value.category_allocation == {}

    def test_unexpected_client_error_is_absorbed(self, scripted):
        result = BudgetEstimationStage(scripted(KeyError("choices"))).estimate(
            3000, 5, 2, "Rome"
        )
        assert result.used_fallback is True
        assert "KeyError" in result.reason

    def test_expired_deadline_skips_call(self, scripted, budget_reply):
        model = scripted(budget_reply)
        deadline = Deadline(expires_at=0.0, clock=lambda: 1.0)
        result = BudgetEstimationStage(model).estimate(3000, 5, 2, "Rome", deadline=deadline)

        assert model.calls == 0
        assert result.used_fallback is True

    def test_call_timeout_is_passed_to_client(self, scripted, budget_reply):
        model = scripted(budget_reply)
        BudgetEstimationStage(model, call_timeout_seconds=12.0).estimate(3000, 5, 2, "Rome")
        assert model.timeouts == [12.0]

    def test_timeout_is_treated_like_transport_failure(self, scripted):
        model = scripted(LanguageModelTimeoutError("slow", timeout_seconds=1.0))
        result = BudgetEstimationStage(model).estimate(3000, 5, 2, "Rome")
        assert result.used_fallback is True
        assert result.value.daily_budget == 600
