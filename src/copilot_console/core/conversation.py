"""
Conversation management for Copilot Console

Holds the running message list sent to the chat endpoint. Messages are
only ever appended during a session.
"""

from datetime import datetime
from typing import List, Optional
from dataclasses import dataclass, field

from ..providers.base import Message, MessageRole


def build_system_prompt(base_prompt: str, now: Optional[datetime] = None) -> str:
    """System prompt followed by the current date and time"""
    now = now or datetime.now()
    return f"{base_prompt}\n\nCurrent date and time: {now:%Y-%m-%d %H:%M:%S}"


@dataclass
class Conversation:
    """Represents a conversation with the AI"""
    messages: List[Message] = field(default_factory=list)

    @classmethod
    def with_system_prompt(cls, base_prompt: str, now: Optional[datetime] = None) -> "Conversation":
        conversation = cls()
        conversation.add_message(Message(role=MessageRole.SYSTEM, content=build_system_prompt(base_prompt, now)))
        return conversation

    def add_message(self, message: Message) -> None:
        """Add a message to the conversation"""
        self.messages.append(message)

    def add_user_message(self, content: str) -> Message:
        message = Message(role=MessageRole.USER, content=content)
        self.add_message(message)
        return message

    def add_assistant_message(self, content: str) -> Message:
        message = Message(role=MessageRole.ASSISTANT, content=content)
        self.add_message(message)
        return message

    def discard_last(self, message: Message) -> None:
        """Drop a message that was appended for a request that failed"""
        if self.messages and self.messages[-1] is message:
            self.messages.pop()

    def get_messages_for_provider(self) -> List[Message]:
        """Get messages formatted for provider"""
        return self.messages.copy()
