"""Pydantic schemas for generated replies.

Each stage decodes the reply with ``extract_json_payload`` and validates
it against one of these models. Models are lenient about how scalars are
written ("1,200 CNY", 75.5, a bare string for a list) and strict about
structure: a wrong container type or a missing required key fails
validation and becomes a PayloadError.
"""

from __future__ import annotations

import datetime as dt
import math
import re
from typing import Annotated, Any, Optional, TypeVar

from pydantic import (
    AliasChoices,
    BeforeValidator,
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeInt,
    ValidationError,
    field_validator,
)

from .domain.errors import PayloadError
from .parsing import SNIPPET_LENGTH, extract_json_payload

R = TypeVar("R", bound=BaseModel)

_NUMBER = re.compile(r"-?\d+(?:\.\d+)?")


def lenient_int(value: Any) -> Optional[int]:
    """Read an integer from a JSON number or a numeric string like "600 CNY".

    Floats are truncated toward zero. Unusable values give None.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _NUMBER.search(value.replace(",", ""))
        if match:
            return int(float(match.group(0)))
    return None


def lenient_text(value: Any) -> str:
    """Render a scalar as text; lists are joined with spaces."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return " ".join(lenient_text(v) for v in value if v is not None)
    return str(value)


def lenient_text_list(value: Any) -> tuple[str, ...]:
    """Read a list of non-blank strings; a bare string is a one-item list."""
    if isinstance(value, str):
        items = [value]
    elif isinstance(value, list):
        items = [lenient_text(v) for v in value if v is not None]
    else:
        return ()
    return tuple(item.strip() for item in items if item.strip())


def lenient_text_mapping(value: Any) -> dict[str, str]:
    """Read a flat ``{name: text}`` mapping, dropping empty entries."""
    if not isinstance(value, dict):
        return {}
    rendered = {str(key): lenient_text(item) for key, item in value.items()}
    return {key: text for key, text in rendered.items() if text}


LenientInt = Annotated[Optional[int], BeforeValidator(lenient_int)]
LenientText = Annotated[str, BeforeValidator(lenient_text)]
LenientTextList = Annotated[tuple[str, ...], BeforeValidator(lenient_text_list)]
LenientTextMapping = Annotated[dict[str, str], BeforeValidator(lenient_text_mapping)]


class ReplyModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class BudgetReply(ReplyModel):
    # An unreadable budget becomes None, which NonNegativeInt rejects.
    daily_budget: Annotated[NonNegativeInt, BeforeValidator(lenient_int)] = Field(
        validation_alias="dailyBudget"
    )
    allocation: LenientTextMapping = Field(
        default_factory=dict,
        validation_alias=AliasChoices("budgetAllocation", "categoryAllocation"),
    )
    cost_factors: LenientTextMapping = Field(
        default_factory=dict, validation_alias="costFactors"
    )
    recommendations: LenientText = ""


class ActivityReply(ReplyModel):
    time: LenientText = ""
    name: LenientText = Field(
        default="", validation_alias=AliasChoices("activity", "name")
    )
    description: LenientText = Field(
        default="", validation_alias=AliasChoices("desc", "description")
    )
    location: LenientText = ""
    cost: LenientInt = None
    category: LenientText = ""


class DayReply(ReplyModel):
    date: Optional[dt.date] = None
    title: LenientText = ""
    daily_budget: LenientInt = Field(default=None, validation_alias="dailyBudget")
    activities: list[ActivityReply] = Field(default_factory=list)

    @field_validator("date", mode="before")
    @classmethod
    def _date(cls, value: Any) -> Optional[dt.date]:
        if not isinstance(value, str):
            return None
        try:
            return dt.date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None

    @field_validator("activities", mode="before")
    @classmethod
    def _activities(cls, value: Any) -> Any:
        return [] if value is None else value


class ItineraryReply(ReplyModel):
    summary: LenientText = ""
    days: list[DayReply]


class RecommendationReply(ReplyModel):
    restaurants: LenientTextList = ()
    attractions: LenientTextList = ()
    tips: LenientTextList = ()
    local_insights: LenientTextList = Field(
        default=(), validation_alias=AliasChoices("localInsights", "local_insights")
    )


def validate_reply(model: type[R], text: Optional[str]) -> R:
    """Decode generated text and validate it against ``model``.

    Raises:
        PayloadError: If no JSON can be recovered or it does not match
            the model.
    """
    payload = extract_json_payload(text)
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise PayloadError(
            f"Reply does not match {model.__name__}: "
            f"{e.error_count()} validation error(s)",
            cause=e,
            snippet=str(payload)[:SNIPPET_LENGTH],
        )
