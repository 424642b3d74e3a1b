"""Language model port - Abstraction over text generation.

The planning stages only ever see this protocol. Concrete providers live
in adapters/llm and are handed to each stage at construction time.
"""

from __future__ import annotations

from typing import Optional, Protocol


class LanguageModelPort(Protocol):
    """Port for single-shot text generation.

    Implementations:
    - adapters/llm/openai_adapter.py (OpenAIChatAdapter)
    - adapters/llm/anthropic_adapter.py (AnthropicMessagesAdapter)
    - adapters/llm/offline.py (OfflineLanguageModel) - always fails
    - adapters/llm/timeout_guard.py (TimeoutBoundedLanguageModel) - wrapper
    """

    def generate(self, prompt: str, *, timeout: Optional[float] = None) -> str:
        """Generate text for a prompt.

        Args:
            prompt: The full instruction text.
            timeout: Upper bound in seconds for this call, if any.

        Returns:
            The generated text. It may be anything, including non-JSON.

        Raises:
            LanguageModelError: If the call fails at the transport level.
            LanguageModelTimeoutError: If the call exceeds ``timeout``.
        """
        ...
