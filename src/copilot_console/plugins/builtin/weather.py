"""
Weather plugin

The model is asked for the coordinates of a free-text location, then the
current weather at those coordinates is summarized.
"""

import re
from typing import Optional, Tuple

from pydantic import BaseModel

from ..base import PluginParameter, TypedPlugin
from ...services import OpenMeteoClient

DECIMAL_PATTERN = re.compile(r"(-?\d+\.\d+)")


def extract_coordinates(text: str) -> Tuple[float, float]:
    """
    Take the first two decimal numbers of a reply as (latitude, longitude)

    Fewer than two matches gives (0.0, 0.0).
    """
    matches = DECIMAL_PATTERN.findall(text or "")
    if len(matches) < 2:
        return 0.0, 0.0
    return float(matches[0]), float(matches[1])


class WeatherRequest(BaseModel):
    location: Optional[str] = None


class WeatherPlugin(TypedPlugin[WeatherRequest]):
    """Summarizes the current weather for a location"""

    name = "WeatherPlugin"
    description = (
        "Get the weather forecast of a given location.\n\n"
        "Location is mandatory so dont guess this. If users express its cold you can ask for location "
        "or try to guess if user might be interested in weather."
    )
    request_model = WeatherRequest
    parameters = [
        PluginParameter(name="location", description="The city and state, e.g. San Francisco, CA"),
    ]

    async def run(self, request: WeatherRequest) -> str:
        reply = await self.context.quick_prompt(request.location, "What is longitude and latitude for:")
        latitude, longitude = extract_coordinates(reply)

        client = OpenMeteoClient(**self.context.service_kwargs())
        weather = await client.current_weather(latitude, longitude)

        return await self.context.quick_prompt(
            f"Location: {request.location} , Weather: {weather}",
            "summarize the weather",
        )
