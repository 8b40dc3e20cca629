"""
Image generation plugin
"""

from typing import Optional

from pydantic import BaseModel

from ..base import PluginParameter, TypedPlugin
from ...services import ImageGenerationClient


class ImageRequest(BaseModel):
    image_prompt: Optional[str] = None


class ImagePlugin(TypedPlugin[ImageRequest]):
    """Generates an image, opens it and returns its URL"""

    name = "ImagePlugin"
    description = "This function generates an image based on the prompt"
    request_model = ImageRequest
    parameters = [
        PluginParameter(
            name="imagePrompt",
            target="image_prompt",
            description=(
                "Prompt describing the image the user wants. "
                "The user should give a detailed description of the image they want."
            ),
        ),
    ]

    async def run(self, request: ImageRequest) -> str:
        client = ImageGenerationClient(self.context.config.openai, **self.context.service_kwargs())
        image_url = await client.generate(request.image_prompt)
        self.context.open_url(image_url)
        return image_url
