"""
Clients for the external HTTP services called by plugins.
"""

from .base import ServiceClient, ServiceError
from .github import GitHubClient, Workflow, WorkflowList
from .images import ImageGenerationClient
from .news import BingNewsClient
from .weather import OpenMeteoClient

__all__ = [
    "ServiceClient",
    "ServiceError",
    "GitHubClient",
    "Workflow",
    "WorkflowList",
    "ImageGenerationClient",
    "BingNewsClient",
    "OpenMeteoClient",
]
