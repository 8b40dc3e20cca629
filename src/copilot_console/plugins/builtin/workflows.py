"""
GitHub Actions plugins: run status and workflow dispatch
"""

import logging
from typing import Optional

from pydantic import BaseModel

from ..base import PluginParameter, TypedPlugin
from ...services import GitHubClient

logger = logging.getLogger(__name__)

DISPATCH_REF = "main"


class WorkflowStatusRequest(BaseModel):
    repository: Optional[str] = None


class WorkflowAutomationRequest(BaseModel):
    project: Optional[str] = None
    workflow: Optional[str] = None


class WorkflowStatusPlugin(TypedPlugin[WorkflowStatusRequest]):
    """Summarizes the latest completed runs of a repository"""

    name = "WorkflowStatusPlugin"
    description = "Get the status of a GitHub action workflows by the name of the repository"
    request_model = WorkflowStatusRequest
    parameters = [
        PluginParameter(name="repository", description="Repository in the GitHub organization"),
    ]

    async def run(self, request: WorkflowStatusRequest) -> str:
        client = GitHubClient(self.context.config.github, **self.context.service_kwargs())
        self.context.open_url(client.actions_page_url(request.repository))

        runs = await client.get_completed_runs(request.repository, per_page=3)
        return await self.context.quick_prompt(runs, "Summarize the build status")


class WorkflowAutomationPlugin(TypedPlugin[WorkflowAutomationRequest]):
    """Dispatches a workflow, looked up by name, on the main branch"""

    name = "WorkflowAutomationPlugin"
    description = "Runs a workflow by the name, first user always says project name and then workflow name"
    request_model = WorkflowAutomationRequest
    parameters = [
        PluginParameter(name="project", description="Name of the project"),
        PluginParameter(name="workflow", description="Name of the workflow"),
    ]

    async def run(self, request: WorkflowAutomationRequest) -> str:
        client = GitHubClient(self.context.config.github, **self.context.service_kwargs())

        workflows = await client.list_workflows(request.project)
        workflow = workflows.find_by_name(request.workflow)
        if workflow is None:
            return f"Workflow '{request.workflow}' not found in repository '{request.project}'"

        logger.info("Dispatching workflow %s (%d) in %s", workflow.name, workflow.id, request.project)
        self.context.open_url(client.actions_page_url(request.project))
        response = await client.dispatch_workflow(request.project, workflow.id, ref=DISPATCH_REF)

        return (
            f"Workflow '{request.workflow}' dispatched in repository '{request.project}' "
            f"Status code: {response.status_code}"
        )
