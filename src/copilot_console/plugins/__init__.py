"""
Copilot Console Plugins Package

Provides the contract, validation layer and registry for the function
plugins the model can call during a conversation.
"""

from .base import (
    BasePlugin,
    DeserializationError,
    FunctionDescriptor,
    MissingRequiredFieldError,
    PluginContext,
    PluginParameter,
    PluginRequestError,
    TypedPlugin,
    canonical_plugin_name,
)
from .registry import DuplicatePluginError, PluginDefinitionError, PluginRegistry

__all__ = [
    "BasePlugin",
    "DeserializationError",
    "FunctionDescriptor",
    "MissingRequiredFieldError",
    "PluginContext",
    "PluginParameter",
    "PluginRequestError",
    "TypedPlugin",
    "canonical_plugin_name",
    "DuplicatePluginError",
    "PluginDefinitionError",
    "PluginRegistry",
]
