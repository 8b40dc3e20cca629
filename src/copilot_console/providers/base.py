"""
Base provider interface for Copilot Console

Defines the abstract interface that all chat completion providers must implement.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Any
from dataclasses import dataclass
from enum import Enum


class MessageRole(Enum):
    """Message role types"""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """Represents a chat message"""
    role: MessageRole
    content: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert message to dictionary format"""
        return {
            "role": self.role.value,
            "content": self.content,
        }


@dataclass(frozen=True)
class FunctionCall:
    """A function the model asked to invoke, with its raw JSON arguments"""
    name: str
    arguments: Optional[str] = None


@dataclass
class ChatCompletion:
    """Reply from the chat completion service"""
    content: str = ""
    function_call: Optional[FunctionCall] = None
    model: Optional[str] = None
    usage: Optional[Dict[str, Any]] = None


class ProviderError(Exception):
    """Base exception for provider errors"""
    pass


class AuthenticationError(ProviderError):
    """Raised when authentication fails"""
    pass


class RateLimitError(ProviderError):
    """Raised when rate limit is exceeded"""
    pass


class ModelNotFoundError(ProviderError):
    """Raised when requested model is not found"""
    pass


class BaseProvider(ABC):
    """Abstract base class for all chat completion providers"""

    def __init__(self, api_key: str, model: str, **kwargs):
        self.api_key = api_key
        self.model = model

    @abstractmethod
    async def complete(
        self,
        messages: List[Message],
        functions: Optional[List[Dict[str, Any]]] = None,
        **kwargs
    ) -> ChatCompletion:
        """
        Send the conversation and the available functions to the model

        Args:
            messages: List of conversation messages
            functions: Function descriptors the model may call
            **kwargs: Sampling parameters (temperature, top_p, max_tokens, ...)

        Returns:
            Either the assistant text or a function call
        """
        pass

    @abstractmethod
    async def create_message(
        self,
        messages: List[Message],
        model: Optional[str] = None,
        **kwargs
    ) -> str:
        """
        Create a plain text completion without functions

        Args:
            messages: List of conversation messages
            model: Override the model or deployment used for this call
            **kwargs: Additional parameters

        Returns:
            The complete response text
        """
        pass

    async def __aenter__(self):
        """Async context manager entry"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()

    async def close(self):
        """Close the provider and cleanup resources"""
        pass

    def _prepare_messages(self, messages: List[Message]) -> List[Dict[str, Any]]:
        """Prepare messages for API request"""
        return [msg.to_dict() for msg in messages]

    def _prepare_functions(self, functions: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Wrap function descriptors in the tools format"""
        return [
            {
                "type": "function",
                "function": {
                    "name": function["name"],
                    "description": function["description"],
                    "parameters": function.get("parameters", {}),
                },
            }
            for function in functions
        ]
