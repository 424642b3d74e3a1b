"""Anthropic messages adapter."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

import anthropic

from ...config import LLMConfig, get_config
from ...domain.errors import LanguageModelError, LanguageModelTimeoutError


@dataclass
class AnthropicMessagesAdapter:
    """Messages API adapter implementing LanguageModelPort.

    Attributes:
        config: Provider configuration (model, key, timeouts)
    """

    config: LLMConfig = field(default_factory=lambda: get_config().llm)

    _client: Optional[Any] = field(default=None, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def _get_client(self) -> Any:
        if self._client is None:
            self._logger.debug(
                "Initializing Anthropic client", extra={"model": self.config.model}
            )
            self._client = anthropic.Anthropic(
                api_key=self.config.api_key or None,
                timeout=self.config.request_timeout_seconds,
                max_retries=0,
            )
        return self._client

    def generate(self, prompt: str, *, timeout: Optional[float] = None) -> str:
        """Send one user message and return the concatenated text blocks.

        Raises:
            LanguageModelTimeoutError: If the request times out.
            LanguageModelError: On any other API failure or an empty reply.
        """
        effective_timeout = (
            timeout if timeout is not None else self.config.request_timeout_seconds
        )
        try:
            response = self._get_client().messages.create(
                model=self.config.model,
                max_tokens=self.config.max_tokens,
                temperature=self.config.temperature,
                messages=[{"role": "user", "content": prompt}],
                timeout=effective_timeout,
            )
        except anthropic.APITimeoutError as e:
            raise LanguageModelTimeoutError(
                "Anthropic request timed out",
                cause=e,
                provider="anthropic",
                timeout_seconds=effective_timeout,
            )
        except anthropic.AnthropicError as e:
            raise LanguageModelError(
                "Anthropic request failed", cause=e, provider="anthropic"
            )

        text = "".join(
            block.text for block in response.content if getattr(block, "type", "") == "text"
        )
        if not text.strip():
            raise LanguageModelError(
                "Anthropic returned an empty reply", provider="anthropic"
            )
        return text.strip()
