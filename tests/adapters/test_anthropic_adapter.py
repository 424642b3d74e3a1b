"""Tests for the Anthropic messages adapter."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import anthropic
import httpx
import pytest

from trip_planner.adapters.llm import AnthropicMessagesAdapter
from trip_planner.config import LLMConfig
from trip_planner.domain.errors import LanguageModelError, LanguageModelTimeoutError

REQUEST = httpx.Request("POST", "https://api.anthropic.com/v1/messages")


def _text(text):
    return SimpleNamespace(type="text", text=text)


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def adapter(client):
    config = LLMConfig(
        provider="anthropic",
        model="claude-3-5-haiku-latest",
        api_key="sk-ant-test",
        max_tokens=1024,
    )
    return AnthropicMessagesAdapter(config=config, _client=client)


def test_joins_text_blocks(adapter, client):
    client.messages.create.return_value = SimpleNamespace(
        content=[_text('{"tips": '), SimpleNamespace(type="tool_use"), _text('["a"]}')]
    )
    assert adapter.generate("recommend") == '{"tips": ["a"]}'


def test_sends_prompt_and_settings(adapter, client):
    client.messages.create.return_value = SimpleNamespace(content=[_text("ok")])
    adapter.generate("recommend", timeout=4.0)

    kwargs = client.messages.create.call_args.kwargs
    assert kwargs["model"] == "claude-3-5-haiku-latest"
    assert kwargs["max_tokens"] == 1024
    assert kwargs["messages"] == [{"role": "user", "content": "recommend"}]
    assert kwargs["timeout"] == 4.0


def test_timeout_maps_to_timeout_error(adapter, client):
    client.messages.create.side_effect = anthropic.APITimeoutError(request=REQUEST)
    with pytest.raises(LanguageModelTimeoutError) as exc_info:
        adapter.generate("recommend")
    assert exc_info.value.provider == "anthropic"


def test_api_error_maps_to_language_model_error(adapter, client):
    client.messages.create.side_effect = anthropic.APIConnectionError(request=REQUEST)
    with pytest.raises(LanguageModelError):
        adapter.generate("recommend")


def test_blank_reply_is_an_error(adapter, client):
    client.messages.create.return_value = SimpleNamespace(content=[_text("  ")])
    with pytest.raises(LanguageModelError):
        adapter.generate("recommend")
