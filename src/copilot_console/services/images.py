"""
Azure OpenAI image generation client
"""

from typing import Dict

from .base import ServiceClient, ServiceError
from ..config import OpenAIConfig

IMAGE_SIZE = "1024x1024"
IMAGE_QUALITY = "hd"
IMAGE_STYLE = "vivid"


class ImageGenerationClient(ServiceClient):
    """Generates images through an image deployment on the chat endpoint"""

    def __init__(self, config: OpenAIConfig, **kwargs):
        super().__init__(**kwargs)
        self.config = config
        self.base_url = config.endpoint.rstrip('/')

    def _get_headers(self) -> Dict[str, str]:
        headers = super()._get_headers()
        headers["api-key"] = self.config.api_key
        return headers

    async def generate(self, prompt: str) -> str:
        """
        Generate one image and return its URL

        Raises:
            ServiceError: If the service fails or returns no image
        """
        body = {
            "prompt": prompt,
            "size": IMAGE_SIZE,
            "n": 1,
            "quality": IMAGE_QUALITY,
            "style": IMAGE_STYLE,
        }

        async with self._client() as client:
            response = await client.post(
                f"/openai/deployments/{self.config.image_deployment}/images/generations",
                params={"api-version": self.config.image_api_version},
                json=body,
            )
            self._handle_error(response, "Image generation")
            data = response.json()

        images = data.get("data") or []
        if not images or not images[0].get("url"):
            raise ServiceError("Image generation returned no image")
        return images[0]["url"]
