"""
Copilot Console - console chat assistant with function plugins

Forwards user text to a hosted chat model and lets the model call
registered plugins: image generation, GitHub Actions status and dispatch,
weather, news, parking registration and doctor intake.
"""

__version__ = "0.1.0"
__description__ = "Console chat assistant with function plugins"

from .config import AppConfig, ChatConfig, OpenAIConfig
from .core.chat import ChatEngine
from .providers.base import BaseProvider

__all__ = [
    "AppConfig",
    "ChatConfig",
    "OpenAIConfig",
    "ChatEngine",
    "BaseProvider",
]
