"""Shared call-and-fallback logic for generation-backed stages."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, TypeVar

from ..deadline import Deadline
from ..domain.errors import LanguageModelTimeoutError, TripPlannerError
from ..domain.models import StageResult
from ..ports.llm import LanguageModelPort

T = TypeVar("T")


@dataclass
class GenerationStage:
    """Base for a stage that makes one model call and never raises.

    Attributes:
        client: Text generator used for the stage's single call
        call_timeout_seconds: Upper bound for the call (None = unbounded)
    """

    client: LanguageModelPort
    call_timeout_seconds: Optional[float] = None

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(type(self).__module__)

    @property
    def stage_name(self) -> str:
        return type(self).__name__

    def _generate(self, prompt: str, deadline: Optional[Deadline]) -> str:
        """Issue the stage's model call within the run deadline."""
        deadline = deadline or Deadline()
        if deadline.expired:
            raise LanguageModelTimeoutError(
                "Pipeline deadline elapsed before the call was made",
                timeout_seconds=0.0,
            )
        timeout = deadline.call_timeout(self.call_timeout_seconds)
        self._logger.debug(
            "Calling language model",
            extra={
                "stage": self.stage_name,
                "prompt_length": len(prompt),
                "timeout": timeout,
            },
        )
        text = self.client.generate(prompt, timeout=timeout)
        self._logger.debug(
            "Language model replied",
            extra={"stage": self.stage_name, "response_length": len(text or "")},
        )
        return text

    def _run(
        self,
        prompt: str,
        parse: Callable[[str], StageResult[T]],
        fallback: Callable[[], T],
        deadline: Optional[Deadline],
    ) -> StageResult[T]:
        """Call the model once and parse the reply, or fall back.

        Every failure (transport, timeout, unreadable payload, or an
        unexpected error) ends in ``fallback()``.
        """
        try:
            text = self._generate(prompt, deadline)
            return parse(text)
        except TripPlannerError as e:
            self._logger.warning(
                "Stage failed, using fallback",
                extra={
                    "stage": self.stage_name,
                    "error_type": type(e).__name__,
                    "error": str(e),
                },
            )
            return StageResult(fallback(), used_fallback=True, reason=str(e))
        except Exception as e:
            self._logger.exception(
                "Unexpected stage error, using fallback",
                extra={"stage": self.stage_name, "error_type": type(e).__name__},
            )
            return StageResult(
                fallback(),
                used_fallback=True,
                reason=f"{type(e).__name__}: {e}",
            )
