"""
GitHub Actions Module
=====================
REST client and entity models for workflows, runs and jobs.

Usage:
    from modules.github import ActionsClient

    with ActionsClient(config.github) as client:
        workflows = client.fetch_all(client.list_workflows(), "workflows")
"""

from .client import ActionsClient, Page
from .models import Job, Step, Workflow, WorkflowRun, workflow_id_from_path

__all__ = [
    "ActionsClient",
    "Page",
    "Job",
    "Step",
    "Workflow",
    "WorkflowRun",
    "workflow_id_from_path",
]
