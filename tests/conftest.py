"""Shared fixtures for the Copilot Console test suite."""

import io
from typing import Any, Callable, Dict, List, Optional
from unittest.mock import MagicMock

import httpx
import pytest
from rich.console import Console

from copilot_console.config import (
    AppConfig,
    BingConfig,
    ChatConfig,
    GitHubConfig,
    OpenAIConfig,
    ProviderType,
)
from copilot_console.plugins import PluginContext, PluginRegistry
from copilot_console.plugins.builtin import BUILTIN_PLUGINS
from copilot_console.providers.base import BaseProvider, ChatCompletion, Message


class FakeProvider(BaseProvider):
    """Provider that replays scripted completions and quick-prompt replies."""

    def __init__(self, completions: Optional[List[Any]] = None, replies: Optional[List[Any]] = None):
        super().__init__(api_key="test-key", model="gpt-4")
        self.completions = list(completions or [])
        self.replies = list(replies or [])
        self.complete_calls: List[Dict[str, Any]] = []
        self.message_calls: List[Dict[str, Any]] = []

    async def complete(self, messages, functions=None, **kwargs) -> ChatCompletion:
        self.complete_calls.append({"messages": list(messages), "functions": functions, "kwargs": kwargs})
        result = self.completions.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    async def create_message(self, messages: List[Message], model: Optional[str] = None, **kwargs) -> str:
        self.message_calls.append({"messages": list(messages), "model": model})
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    @property
    def prompts(self) -> List[str]:
        """Content of every quick prompt sent so far."""
        return [call["messages"][0].content for call in self.message_calls]


@pytest.fixture()
def app_config():
    """Fully populated configuration that never reads the environment."""
    return AppConfig(
        openai=OpenAIConfig(
            provider_type=ProviderType.AZURE,
            api_key="openai-key",
            endpoint="https://example.openai.azure.com",
            model="gpt-4",
        ),
        github=GitHubConfig(token="gh-token", org="acme"),
        bing=BingConfig(endpoint="https://bing.test/v7.0/news/search", api_key="bing-key"),
        chat=ChatConfig(),
    )


@pytest.fixture()
def provider():
    return FakeProvider()


@pytest.fixture()
def make_context(app_config, provider):
    """Build a PluginContext whose HTTP calls go to the given handler.

    The console writes to a string buffer (``context.console.file``) and
    ``open_url`` is a MagicMock.
    """

    def _make(handler: Optional[Callable[[httpx.Request], httpx.Response]] = None) -> PluginContext:
        transport = httpx.MockTransport(handler) if handler else None
        return PluginContext(
            config=app_config,
            provider=provider,
            console=Console(file=io.StringIO(), force_terminal=False, width=200),
            open_url=MagicMock(return_value=True),
            http_transport=transport,
        )

    return _make


@pytest.fixture()
def registry(make_context):
    return PluginRegistry.from_classes(BUILTIN_PLUGINS, make_context())