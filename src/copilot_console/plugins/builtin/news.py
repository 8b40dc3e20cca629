"""
News search plugin
"""

import json
from typing import Optional

from pydantic import BaseModel

from ..base import PluginParameter, TypedPlugin
from ...services import BingNewsClient


class NewsRequest(BaseModel):
    topic: Optional[str] = None


class NewsPlugin(TypedPlugin[NewsRequest]):
    """Returns the raw search results for a topic, pretty-printed"""

    name = "NewsPlugin"
    description = (
        "Get the news related to a specific topic. "
        "The topic is a mandatory field so require this from the user."
    )
    request_model = NewsRequest
    parameters = [
        PluginParameter(name="topic", description="Topic or category of the news"),
    ]

    async def run(self, request: NewsRequest) -> str:
        client = BingNewsClient(self.context.config.bing, **self.context.service_kwargs())
        response = await client.search(request.topic)

        if response.is_error:
            return f"Error: {response.status_code} {response.reason_phrase}"

        return json.dumps(response.json(), indent=2)
