"""OpenAI chat completions adapter.

Works with the OpenAI API and with OpenAI-compatible endpoints through
``LLMConfig.base_url``. The SDK client is created lazily on first use.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

import openai

from ...config import LLMConfig, get_config
from ...domain.errors import LanguageModelError, LanguageModelTimeoutError


@dataclass
class OpenAIChatAdapter:
    """Chat completions adapter implementing LanguageModelPort.

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
                "Initializing OpenAI client",
                extra={"model": self.config.model, "base_url": self.config.base_url},
            )
            self._client = openai.OpenAI(
                api_key=self.config.api_key or None,
                base_url=self.config.base_url,
                timeout=self.config.request_timeout_seconds,
                max_retries=0,
            )
        return self._client

    def generate(self, prompt: str, *, timeout: Optional[float] = None) -> str:
        """Send one user message and return the reply text.

        Raises:
            LanguageModelTimeoutError: If the request times out.
            LanguageModelError: On any other API failure or an empty reply.
        """
        effective_timeout = (
            timeout if timeout is not None else self.config.request_timeout_seconds
        )
        try:
            response = self._get_client().chat.completions.create(
                model=self.config.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.config.temperature,
                max_tokens=self.config.max_tokens,
                timeout=effective_timeout,
            )
        except openai.APITimeoutError as e:
            raise LanguageModelTimeoutError(
                "OpenAI request timed out",
                cause=e,
                provider="openai",
                timeout_seconds=effective_timeout,
            )
        except openai.OpenAIError as e:
            raise LanguageModelError(
                "OpenAI request failed", cause=e, provider="openai"
            )

        if not response.choices:
            raise LanguageModelError("OpenAI returned no choices", provider="openai")
        content = response.choices[0].message.content
        if not content:
            raise LanguageModelError("OpenAI returned an empty reply", provider="openai")
        return content.strip()
