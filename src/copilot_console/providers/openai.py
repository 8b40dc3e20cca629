"""
OpenAI provider implementation for Copilot Console

Implements the BaseProvider interface for OpenAI's chat completions API.
"""

import logging
from typing import Any, Dict, List, Optional

import openai
from openai import AsyncOpenAI

from .base import (
    AuthenticationError,
    BaseProvider,
    ChatCompletion,
    FunctionCall,
    Message,
    ModelNotFoundError,
    ProviderError,
    RateLimitError,
)

logger = logging.getLogger(__name__)


class OpenAIProvider(BaseProvider):
    """OpenAI API provider"""

    def __init__(self, api_key: str, model: str, endpoint: Optional[str] = None, **kwargs):
        super().__init__(api_key, model, **kwargs)
        self.endpoint = endpoint
        self.openai_client = self._create_client(**kwargs)

    def _create_client(self, **kwargs) -> AsyncOpenAI:
        """Create the SDK client"""
        client_config = {
            "api_key": self.api_key,
        }

        # Use custom base URL if provided
        if self.endpoint:
            client_config["base_url"] = self.endpoint

        if kwargs.get("timeout"):
            client_config["timeout"] = kwargs["timeout"]

        return AsyncOpenAI(**client_config)

    async def complete(
        self,
        messages: List[Message],
        functions: Optional[List[Dict[str, Any]]] = None,
        **kwargs
    ) -> ChatCompletion:
        """Send the conversation with the available functions"""
        request = {
            "model": self.model,
            "messages": self._prepare_messages(messages),
            **kwargs,
        }
        if functions:
            request["tools"] = self._prepare_functions(functions)

        try:
            response = await self.openai_client.chat.completions.create(**request)
        except openai.AuthenticationError as e:
            raise AuthenticationError(f"OpenAI authentication failed: {e}")
        except openai.RateLimitError as e:
            raise RateLimitError(f"OpenAI rate limit exceeded: {e}")
        except openai.NotFoundError as e:
            raise ModelNotFoundError(f"OpenAI model not found: {e}")
        except openai.APIError as e:
            raise ProviderError(f"OpenAI API error: {e}")

        message = response.choices[0].message
        function_call = None

        if message.tool_calls:
            if len(message.tool_calls) > 1:
                logger.warning("Model requested %d tool calls, only the first is used", len(message.tool_calls))
            tool_call = message.tool_calls[0]
            function_call = FunctionCall(
                name=tool_call.function.name,
                arguments=tool_call.function.arguments,
            )

        return ChatCompletion(
            content=message.content or "",
            function_call=function_call,
            model=response.model,
            usage={
                "prompt_tokens": response.usage.prompt_tokens,
                "completion_tokens": response.usage.completion_tokens,
                "total_tokens": response.usage.total_tokens,
            } if response.usage else None,
        )

    async def create_message(
        self,
        messages: List[Message],
        model: Optional[str] = None,
        **kwargs
    ) -> str:
        """Create a plain text completion"""
        try:
            response = await self.openai_client.chat.completions.create(
                model=model or self.model,
                messages=self._prepare_messages(messages),
                **kwargs,
            )
        except openai.AuthenticationError as e:
            raise AuthenticationError(f"OpenAI authentication failed: {e}")
        except openai.RateLimitError as e:
            raise RateLimitError(f"OpenAI rate limit exceeded: {e}")
        except openai.NotFoundError as e:
            raise ModelNotFoundError(f"OpenAI model not found: {e}")
        except openai.APIError as e:
            raise ProviderError(f"OpenAI API error: {e}")

        return response.choices[0].message.content or ""

    async def close(self):
        await self.openai_client.close()
