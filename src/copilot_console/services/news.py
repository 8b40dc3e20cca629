"""
Bing News Search client
"""

from typing import Dict

import httpx

from .base import ServiceClient
from ..config import BingConfig, ConfigurationError

RESULT_COUNT = 30
MARKET = "en-us"
TEXT_FORMAT = "Raw"  # Raw or HTML
SAFE_SEARCH = "Strict"  # Off, Moderate or Strict


class BingNewsClient(ServiceClient):
    """Client for the Bing News Search API"""

    def __init__(self, config: BingConfig, **kwargs):
        super().__init__(**kwargs)
        if not config.api_key or not config.endpoint:
            raise ConfigurationError("Bing endpoint and API key must be configured")
        self.config = config

    def _get_headers(self) -> Dict[str, str]:
        headers = super()._get_headers()
        headers["Ocp-Apim-Subscription-Key"] = self.config.api_key
        return headers

    async def search(self, topic: str) -> httpx.Response:
        """Search the latest news about a topic; the caller checks the status"""
        async with self._client() as client:
            return await client.get(
                self.config.endpoint,
                params={
                    "q": f"Give me the latest News about: {topic}",
                    "mkt": MARKET,
                    "count": RESULT_COUNT,
                    "textDecorations": "false",
                    "textFormat": TEXT_FORMAT,
                    "safeSearch": SAFE_SEARCH,
                },
            )
