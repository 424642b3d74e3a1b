"""Language model adapters - Implementations of LanguageModelPort.

Available implementations:
- OpenAIChatAdapter: OpenAI (or OpenAI-compatible) chat completions
- AnthropicMessagesAdapter: Anthropic messages API
- OfflineLanguageModel: Always fails, drives every stage to its fallback
- TimeoutBoundedLanguageModel: Hard per-call timeout around any adapter
"""

from .anthropic_adapter import AnthropicMessagesAdapter
from .offline import OfflineLanguageModel
from .openai_adapter import OpenAIChatAdapter
from .timeout_guard import TimeoutBoundedLanguageModel

__all__ = [
    "OpenAIChatAdapter",
    "AnthropicMessagesAdapter",
    "OfflineLanguageModel",
    "TimeoutBoundedLanguageModel",
]
