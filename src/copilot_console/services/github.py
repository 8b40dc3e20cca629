"""
GitHub Actions REST client

Covers the three calls the workflow plugins need: recent runs, the
workflow list and workflow dispatch.
"""

from typing import Dict, List, Optional

import httpx
from pydantic import BaseModel, Field

from .base import ServiceClient
from ..config import ConfigurationError, GitHubConfig


class Workflow(BaseModel):
    """A workflow as listed by the Actions API"""
    id: int
    name: str
    path: Optional[str] = None
    state: Optional[str] = None


class WorkflowList(BaseModel):
    """Response of GET /repos/{org}/{repo}/actions/workflows"""
    total_count: int = 0
    workflows: List[Workflow] = Field(default_factory=list)

    def find_by_name(self, name: str) -> Optional[Workflow]:
        """Find a workflow by name, ignoring case"""
        wanted = name.lower()
        for workflow in self.workflows:
            if workflow.name.lower() == wanted:
                return workflow
        return None


class GitHubClient(ServiceClient):
    """Client for the GitHub Actions API"""

    def __init__(self, config: GitHubConfig, **kwargs):
        super().__init__(**kwargs)
        if not config.token or not config.org:
            raise ConfigurationError("GitHub token and org must be configured")
        self.config = config
        self.base_url = config.api_url

    def _get_headers(self) -> Dict[str, str]:
        headers = super()._get_headers()
        headers["Accept"] = "application/vnd.github+json"
        headers["Authorization"] = f"Bearer {self.config.token}"
        return headers

    def actions_page_url(self, repository: str) -> str:
        """Browser URL of the repository's Actions tab"""
        return f"https://github.com/{self.config.org}/{repository}/actions"

    async def get_completed_runs(self, repository: str, per_page: int = 3) -> str:
        """
        Fetch the most recent completed workflow runs

        Returns:
            The raw JSON body

        Raises:
            httpx.HTTPStatusError: If the API call does not succeed
        """
        async with self._client() as client:
            response = await client.get(
                f"/repos/{self.config.org}/{repository}/actions/runs",
                params={"status": "completed", "per_page": per_page},
            )
            response.raise_for_status()
            return response.text

    async def list_workflows(self, repository: str) -> WorkflowList:
        async with self._client() as client:
            response = await client.get(f"/repos/{self.config.org}/{repository}/actions/workflows")
            response.raise_for_status()
            return WorkflowList.model_validate(response.json())

    async def dispatch_workflow(self, repository: str, workflow_id: int, ref: str = "main") -> httpx.Response:
        """Trigger a workflow_dispatch event on the given ref"""
        async with self._client() as client:
            response = await client.post(
                f"/repos/{self.config.org}/{repository}/actions/workflows/{workflow_id}/dispatches",
                json={"ref": ref},
            )
            response.raise_for_status()
            return response
