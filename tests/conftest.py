"""
Actions Analytics Test Configuration

Shared fixtures for all tests.
"""
import json
import os
from pathlib import Path
from typing import Dict, List
from unittest.mock import patch

import httpx
import pytest

from common.config import AnalyticsConfig, GitHubConfig
from modules.github.client import ActionsClient
from modules.loading.service import RawStore

DAY = "2024-01-01"


# =============================================================================
# FIXTURES: Sample Data
# =============================================================================

@pytest.fixture
def sample_workflows() -> List[Dict]:
    """Workflow list as returned by GET /actions/workflows."""
    return [
        {"id": 11, "name": "CI", "path": ".github/workflows/ci.yml", "state": "active"},
        {"id": 12, "name": "Nightly", "path": ".github/workflows/nightly.yml", "state": "active"},
    ]


@pytest.fixture
def sample_runs() -> List[Dict]:
    """Workflow runs of one day, main and PR branches mixed."""
    return [
        {
            "id": 101,
            "name": "CI",
            "path": ".github/workflows/ci.yml",
            "head_branch": "02_3",
            "run_attempt": 1,
            "conclusion": "success",
            "run_started_at": "2024-01-01T00:00:00Z",
            "updated_at": "2024-01-01T01:00:00Z",
        },
        {
            "id": 102,
            "name": "CI",
            "path": ".github/workflows/ci.yml",
            "head_branch": "feature/login",
            "run_attempt": 2,
            "conclusion": "failure",
            "run_started_at": "2024-01-01T02:00:00Z",
            "updated_at": "2024-01-01T08:00:00Z",
        },
        {
            "id": 103,
            "name": "CI",
            "path": ".github/workflows/ci.yml",
            "head_branch": "feature/login",
            "run_attempt": 1,
            "conclusion": "skipped",
            "run_started_at": "2024-01-01T09:00:00Z",
            "updated_at": "2024-01-01T09:00:00Z",
        },
    ]


@pytest.fixture
def sample_jobs() -> List[Dict]:
    """Jobs of one day with steps."""
    return [
        {
            "id": 1001,
            "run_id": 101,
            "run_attempt": 1,
            "workflow_name": "CI",
            "name": "build",
            "head_branch": "02_3",
            "conclusion": "success",
            "created_at": "2024-01-01T00:00:00Z",
            "started_at": "2024-01-01T00:00:00Z",
            "completed_at": "2024-01-01T00:30:00Z",
            "steps": [{"name": "checkout", "conclusion": "success"}],
            "html_url": "https://github.com/acme/widgets/actions/runs/101/job/1001",
        },
        {
            "id": 1002,
            "run_id": 102,
            "run_attempt": 2,
            "workflow_name": "CI",
            "name": "test",
            "head_branch": "feature/login",
            "conclusion": "failure",
            "created_at": "2024-01-01T02:00:00Z",
            "started_at": "2024-01-01T02:00:00Z",
            "completed_at": "2024-01-01T03:00:00Z",
            "steps": [
                {"name": "build", "conclusion": "success"},
                {"name": "test", "conclusion": "failure"},
            ],
            "html_url": "https://github.com/acme/widgets/actions/runs/102/job/1002",
        },
        {
            "id": 1003,
            "run_id": 102,
            "run_attempt": 2,
            "workflow_name": "CI",
            "name": "lint",
            "head_branch": "feature/login",
            "conclusion": "cancelled",
            "created_at": "2024-01-01T02:00:00Z",
            "started_at": "2024-01-01T02:00:00Z",
            "completed_at": "2024-01-01T02:10:00Z",
            "steps": [{"name": "lint", "conclusion": "success"}],
            "html_url": "https://github.com/acme/widgets/actions/runs/102/job/1003",
        },
    ]


# =============================================================================
# FIXTURES: Config & Store
# =============================================================================

@pytest.fixture
def config(tmp_path) -> AnalyticsConfig:
    return AnalyticsConfig(
        github=GitHubConfig(owner="acme", repo="widgets", token="test-token"),
        data_dir=str(tmp_path / "data"),
    )


@pytest.fixture
def store(config) -> RawStore:
    """Raw store without API access."""
    return RawStore(config)


@pytest.fixture
def write_raw(store):
    """Write a raw snapshot file directly, bypassing the API."""

    def _write(day: str, relative: str, payload: dict) -> Path:
        path = store.day_path(day) / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, indent=2))
        return path

    return _write


# =============================================================================
# FIXTURES: GitHub API Mock
# =============================================================================

class FakeGitHub:
    """In-memory GitHub Actions API served through httpx.MockTransport."""

    def __init__(self, workflows, runs_by_workflow, jobs_by_run):
        self.workflows = workflows
        self.runs_by_workflow = runs_by_workflow
        self.jobs_by_run = jobs_by_run
        self.requests: List[httpx.Request] = []
        self.failing_paths: set = set()

    def _page(self, items, request, key):
        per_page = int(request.url.params.get("per_page", 100))
        page = int(request.url.params.get("page", 1))
        chunk = items[(page - 1) * per_page: page * per_page]
        return httpx.Response(200, json={"total_count": len(items), key: chunk})

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if any(path.endswith(p) for p in self.failing_paths):
            return httpx.Response(500, json={"message": "boom"})

        if path.endswith("/actions/workflows"):
            return self._page(self.workflows, request, "workflows")

        if "/actions/workflows/" in path and path.endswith("/runs"):
            workflow_id = path.split("/")[-2]
            return self._page(self.runs_by_workflow.get(workflow_id, []), request, "workflow_runs")

        if "/actions/runs/" in path and path.endswith("/jobs"):
            run_id = int(path.split("/")[-2])
            return self._page(self.jobs_by_run.get(run_id, []), request, "jobs")

        return httpx.Response(404, json={"message": "Not Found"})

    def client(self, github_config) -> ActionsClient:
        return ActionsClient(github_config, transport=httpx.MockTransport(self.handler))


@pytest.fixture
def fake_github(sample_workflows, sample_runs, sample_jobs) -> FakeGitHub:
    return FakeGitHub(
        workflows=sample_workflows,
        runs_by_workflow={"ci.yml": sample_runs, "nightly.yml": []},
        jobs_by_run={
            101: [sample_jobs[0]],
            102: sample_jobs[1:],
            103: [],
        },
    )


@pytest.fixture
def fetching_store(config, fake_github) -> RawStore:
    """Raw store backed by the fake API."""
    client = fake_github.client(config.github)
    yield RawStore(config, client=client)
    client.close()


@pytest.fixture
def mock_env_github():
    """Set up GitHub environment variables."""
    with patch.dict(os.environ, {
        "GH_REPO_OWNER": "acme",
        "GH_REPO_NAME": "widgets",
        "GH_AUTH_TOKEN": "test-token-12345",
    }):
        yield
