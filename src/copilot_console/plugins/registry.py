"""
Plugin registry for Copilot Console

Builds the name -> plugin mapping once at startup from an explicit list of
plugin classes. The mapping is read-only afterwards.
"""

import logging
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Optional, Type

from .base import BasePlugin, PluginContext, TypedPlugin, canonical_plugin_name

logger = logging.getLogger(__name__)


class DuplicatePluginError(Exception):
    """Raised when two plugins normalize to the same registry key"""
    pass


class PluginDefinitionError(Exception):
    """Raised when a plugin's parameter table does not match its request model"""
    pass


class PluginRegistry:
    """Read-only index of plugins by canonical name"""

    def __init__(self, plugins: Iterable[BasePlugin]):
        registered: Dict[str, BasePlugin] = {}

        for plugin in plugins:
            key = canonical_plugin_name(plugin.name)
            if key in registered:
                raise DuplicatePluginError(
                    f"Plugins '{registered[key].name}' and '{plugin.name}' both register as '{key}'"
                )
            registered[key] = plugin
            logger.debug("Registered plugin %s as %s", plugin.name, key)

        self._plugins = MappingProxyType(registered)

    @classmethod
    def from_classes(cls, plugin_classes: Iterable[Type[BasePlugin]], context: PluginContext) -> "PluginRegistry":
        """
        Instantiate every plugin class with the shared context

        Raises:
            PluginDefinitionError: If a parameter does not name a request field
            DuplicatePluginError: If two plugins share a canonical name
        """
        plugins = []
        for plugin_class in plugin_classes:
            if issubclass(plugin_class, TypedPlugin):
                unknown = plugin_class.check_definition()
                if unknown:
                    raise PluginDefinitionError(
                        f"{plugin_class.__name__} declares parameters without request fields: {', '.join(unknown)}"
                    )
            plugins.append(plugin_class(context))

        return cls(plugins)

    def get(self, name: str) -> Optional[BasePlugin]:
        """Get a plugin by canonical name"""
        return self._plugins.get(name)

    def resolve(self, function_name: str) -> Optional[BasePlugin]:
        """Get the plugin for a function name as sent by the model"""
        return self._plugins.get(canonical_plugin_name(function_name))

    def names(self) -> List[str]:
        return list(self._plugins.keys())

    def descriptors(self) -> List[dict]:
        """Function descriptors of every registered plugin, as dicts"""
        return [plugin.descriptor.to_dict() for plugin in self._plugins.values()]

    def __contains__(self, name: str) -> bool:
        return name in self._plugins

    def __iter__(self) -> Iterator[BasePlugin]:
        return iter(self._plugins.values())

    def __len__(self) -> int:
        return len(self._plugins)
