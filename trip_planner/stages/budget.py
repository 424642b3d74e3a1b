"""Budget estimation stage.

Asks the model for a daily budget and a per-category allocation. When the
call fails or the reply has no usable ``dailyBudget``, a fixed-percentage
split of the total budget is returned instead.
"""

from __future__ import annotations

from typing import Optional

from ..deadline import Deadline
from ..domain.models import BudgetPlan, StageResult
from ..prompts import BudgetPromptParams, build_budget_prompt
from ..replies import BudgetReply, validate_reply
from .base import GenerationStage

# Category -> percent of the total budget.
FALLBACK_SHARES: tuple[tuple[str, int], ...] = (
    ("transportation", 30),
    ("accommodation", 25),
    ("dining", 25),
    ("attractions", 15),
    ("shopping", 5),
)
FALLBACK_TIP = "Book accommodation and transport early to get better prices"

def default_budget_plan(total_budget: int, days: int) -> BudgetPlan:
    """Fixed-percentage budget plan.

    The daily budget truncates ``total_budget / days``; each category label
    reads ``"<percent>% - <amount>"`` with the amount as a float.
    """
    daily = total_budget // days if days > 0 else total_budget
    allocation = {
        name: f"{share}% - {total_budget * share / 100}"
        for name, share in FALLBACK_SHARES
    }
    return BudgetPlan(
        daily_budget=daily,
        category_allocation=allocation,
        recommendations=FALLBACK_TIP,
    )

def parse_budget_plan(text: str) -> StageResult[BudgetPlan]:
    """Read a BudgetPlan from generated text.

    Raises:
        PayloadError: If the text is not a JSON object or lacks a
            non-negative ``dailyBudget``.
    """
    reply = validate_reply(BudgetReply, text)
    return StageResult(
        BudgetPlan(
            daily_budget=reply.daily_budget,
            category_allocation=reply.allocation,
            recommendations=reply.recommendations,
            cost_factors=reply.cost_factors,
        )
    )

class BudgetEstimationStage(GenerationStage):
    """Produces the trip's budget plan."""

    def estimate(
        self,
        total_budget: int,
        days: int,
        companions: int,
        destination: str,
        deadline: Optional[Deadline] = None,
    ) -> StageResult[BudgetPlan]:
        self._logger.info(
            "Estimating budget",
            extra={
                "total_budget": total_budget,
                "days": days,
                "companions": companions,
                "destination": destination,
            },
        )
        prompt = build_budget_prompt(
            BudgetPromptParams(
                total_budget=total_budget,
                days=days,
                companions=companions,
                destination=destination,
            )
        )
        result = self._run(
            prompt,
            parse_budget_plan,
            lambda: default_budget_plan(total_budget, days),
            deadline,
        )
        self._logger.info(
            "Budget estimated",
            extra={
                "daily_budget": result.value.daily_budget,
                "used_fallback": result.used_fallback,
            },
        )
        return result
