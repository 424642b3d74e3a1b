"""Offline language model - Always fails.

Every stage falls back to its canned result when driven by this model,
which makes it useful for demos without credentials and for tests that
need the fallback path without patching anything.

Example:
    service = TripPlannerService.with_client(OfflineLanguageModel())
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ...domain.errors import LanguageModelError


@dataclass
class OfflineLanguageModel:
    """LanguageModelPort implementation that never produces text."""

    reason: str = "Language model is offline"

    def generate(self, prompt: str, *, timeout: Optional[float] = None) -> str:
        """Always raises.

        Raises:
            LanguageModelError: On every call.
        """
        raise LanguageModelError(self.reason, provider="offline")
