"""
Open-Meteo current weather client (no authentication)
"""

from .base import ServiceClient


class OpenMeteoClient(ServiceClient):
    """Client for api.open-meteo.com"""

    base_url = "https://api.open-meteo.com"

    async def current_weather(self, latitude: float, longitude: float) -> str:
        """Return the raw forecast JSON for a coordinate"""
        async with self._client() as client:
            response = await client.get(
                "/v1/forecast",
                params={
                    "latitude": latitude,
                    "longitude": longitude,
                    "current_weather": "true",
                },
            )
            response.raise_for_status()
            return response.text
