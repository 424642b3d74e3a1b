"""Typed domain errors for the Trip Planner.

Stage-level errors (language model, timeout, payload) are absorbed by the
stage that owns the call and turned into a fallback result. Only
``PipelineError`` is meant to reach the caller of the planner.

All errors inherit from TripPlannerError and can optionally wrap a root
cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class TripPlannerError(Exception):
    """Base error for the trip planner domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class LanguageModelError(TripPlannerError):
    """The language model call failed at the transport level.

    Attributes:
        provider: Name of the adapter that issued the call
    """

    provider: str = ""


@dataclass
class LanguageModelTimeoutError(LanguageModelError):
    """The language model call did not finish before its deadline.

    Attributes:
        timeout_seconds: The bound that elapsed
    """

    timeout_seconds: Optional[float] = None


@dataclass
class PayloadError(TripPlannerError):
    """Generated text could not be read as the expected structure.

    Attributes:
        snippet: Leading part of the offending text
    """

    snippet: str = ""


@dataclass
class AssemblyError(TripPlannerError):
    """Stage outputs could not be merged into a response.

    Attributes:
        field_name: The field that was missing or malformed
    """

    field_name: str = ""


@dataclass
class PipelineError(TripPlannerError):
    """The planning pipeline failed as a whole.

    Attributes:
        state: Last state the pipeline reached before failing
    """

    state: str = ""


@dataclass
class InvalidTripRequestError(TripPlannerError):
    """A trip request payload failed validation.

    Attributes:
        field_name: Name of the offending request field
    """

    field_name: str = ""


@dataclass
class ConfigurationError(TripPlannerError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None
