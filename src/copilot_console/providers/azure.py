"""
Azure OpenAI provider implementation for Copilot Console

Same wire protocol as OpenAI; the model name is the Azure deployment name.
"""

from typing import Optional

from openai import AsyncAzureOpenAI

from .openai import OpenAIProvider


class AzureOpenAIProvider(OpenAIProvider):
    """Azure OpenAI API provider"""

    def __init__(self, api_key: str, model: str, endpoint: Optional[str] = None,
                 api_version: str = "2024-02-01", **kwargs):
        self.api_version = api_version
        super().__init__(api_key, model, endpoint=endpoint, **kwargs)

    def _create_client(self, **kwargs) -> AsyncAzureOpenAI:
        """Create the Azure SDK client"""
        if not self.endpoint:
            raise ValueError("Azure OpenAI requires an endpoint")

        client_config = {
            "api_key": self.api_key,
            "azure_endpoint": self.endpoint,
            "api_version": self.api_version,
        }

        if kwargs.get("timeout"):
            client_config["timeout"] = kwargs["timeout"]

        return AsyncAzureOpenAI(**client_config)
