"""
Core chat engine for Copilot Console

Sends the conversation to the chat endpoint, routes function calls to the
matching plugin and records the reply as an assistant turn.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Any, List, Optional

from ..config import ChatConfig
from ..plugins import PluginRegistry
from ..providers.base import BaseProvider, FunctionCall, Message, ProviderError
from .conversation import Conversation

logger = logging.getLogger(__name__)


class ProtocolError(Exception):
    """The model's reply cannot be acted upon; there is no recovery path"""
    pass


class UnknownPluginError(ProtocolError):
    """Raised when the model calls a function no plugin provides"""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown plugin name: {name}")


class MissingArgumentsError(ProtocolError):
    """Raised when a function call carries no arguments"""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Function call arguments are missing or invalid for {name}")


@dataclass
class ChatResponse:
    """Represents a reply appended to the conversation"""
    content: str
    function_call: Optional[FunctionCall] = None
    model: Optional[str] = None
    usage: Optional[Dict[str, Any]] = None


class ChatEngine:
    """Main chat engine that coordinates provider, plugins and conversation"""

    def __init__(self, provider: BaseProvider, config: ChatConfig, registry: PluginRegistry):
        self.provider = provider
        self.config = config
        self.registry = registry
        self.conversation = Conversation.with_system_prompt(config.system_prompt)

    @property
    def plugins_enabled(self) -> bool:
        return self.config.plugins_enabled and len(self.registry) > 0

    def _function_descriptors(self) -> Optional[List[Dict[str, Any]]]:
        if not self.plugins_enabled:
            return None
        return self.registry.descriptors()

    async def send_message(self, content: str) -> ChatResponse:
        """
        Send a user message and get the assistant's reply

        Args:
            content: Message content

        Returns:
            ChatResponse with the text appended to the conversation

        Raises:
            ProviderError: If the chat endpoint fails; the user message is removed
            UnknownPluginError: If the model calls an unregistered function
            MissingArgumentsError: If the model calls a function without arguments
        """
        user_msg = self.conversation.add_user_message(content)

        try:
            completion = await self.provider.complete(
                messages=self.conversation.get_messages_for_provider(),
                functions=self._function_descriptors(),
                **self.config.sampling.as_kwargs(),
            )
        except ProviderError:
            self.conversation.discard_last(user_msg)
            raise

        if completion.function_call is not None:
            reply = await self._dispatch(completion.function_call)
        else:
            reply = completion.content.strip()

        self.conversation.add_assistant_message(reply)

        return ChatResponse(
            content=reply,
            function_call=completion.function_call,
            model=completion.model,
            usage=completion.usage,
        )

    async def _dispatch(self, function_call: FunctionCall) -> str:
        """Run the plugin named by a function call and return its text"""
        plugin = self.registry.resolve(function_call.name)
        if plugin is None:
            raise UnknownPluginError(function_call.name)

        if not function_call.arguments:
            raise MissingArgumentsError(function_call.name)

        logger.info("Calling plugin %s", plugin.name)
        logger.debug("Arguments for %s: %s", plugin.name, function_call.arguments)
        return await plugin.process(function_call.arguments)

    def get_conversation_history(self) -> List[Message]:
        """Get the current conversation history"""
        return self.conversation.messages.copy()
