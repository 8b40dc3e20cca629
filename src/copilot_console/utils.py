"""
Helpers shared by the plugins: quick prompts and opening URLs.
"""

import logging
import webbrowser
from typing import Optional

from .providers.base import BaseProvider, Message, MessageRole

logger = logging.getLogger(__name__)

QUICK_PROMPT_FALLBACK = "Sorry, I don't know how to summarize that."


async def quick_prompt(
    provider: BaseProvider,
    data: str,
    prompt: str = "Summarize this: ",
    model: Optional[str] = None,
) -> str:
    """
    Run a one-off completion over some data, outside the conversation

    Args:
        provider: Chat provider used for the completion
        data: Text appended to the prompt
        prompt: Instruction placed in front of the data
        model: Model or deployment to use instead of the provider default

    Returns:
        The trimmed reply, or a fallback sentence if the call failed
    """
    message = Message(role=MessageRole.USER, content=f"{prompt} {data}")
    try:
        reply = await provider.create_message([message], model=model)
    except Exception as e:
        logger.warning("Quick prompt failed: %s", e)
        return QUICK_PROMPT_FALLBACK

    return (reply or "").strip()


def open_url_in_browser(url: str) -> bool:
    """Open a URL with the default browser. Returns False if it could not be opened."""
    try:
        opened = webbrowser.open(url)
    except webbrowser.Error as e:
        logger.warning("An error occurred while trying to open the URL %s: %s", url, e)
        return False

    if not opened:
        logger.info("No browser available to open %s", url)
    return opened
