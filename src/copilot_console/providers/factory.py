"""
Provider factory for creating chat completion provider instances

Factory pattern implementation for creating different types of providers.
"""

from typing import Dict, Type

from .base import BaseProvider
from .azure import AzureOpenAIProvider
from .openai import OpenAIProvider
from ..config import OpenAIConfig, ProviderType


class ProviderFactory:
    """Factory for creating provider instances"""

    # Registry of available providers
    _providers: Dict[ProviderType, Type[BaseProvider]] = {
        ProviderType.AZURE: AzureOpenAIProvider,
        ProviderType.OPENAI: OpenAIProvider,
    }

    @classmethod
    def create_provider(cls, config: OpenAIConfig, timeout: float = 60.0) -> BaseProvider:
        """
        Create a provider instance from configuration

        Args:
            config: Chat service configuration
            timeout: Request timeout in seconds

        Returns:
            Provider instance

        Raises:
            ValueError: If provider type is not supported
        """
        provider_type = config.provider_type

        if provider_type not in cls._providers:
            raise ValueError(f"Unsupported provider type: {provider_type.value}")

        provider_class = cls._providers[provider_type]
        return provider_class(
            api_key=config.api_key,
            model=config.model,
            endpoint=config.endpoint or None,
            api_version=config.api_version,
            timeout=timeout,
        )
