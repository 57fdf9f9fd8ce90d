"""GitHub Actions REST client.

Handles:
- Token authentication and API version pinning
- Page-by-page listing of workflows, workflow runs and run jobs

Pages are requested one at a time. Listing stops after the first page
holding fewer than ``per_page`` items or answered with a non-200 status.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterator, Optional

import httpx

from common.config import GitHubConfig

logger = logging.getLogger(__name__)


@dataclass
class Page:
    """One page of a list endpoint."""
    status: int
    items: list[dict]
    total_count: int


class ActionsClient:
    """GitHub Actions API client for a single repository."""

    def __init__(
        self,
        config: GitHubConfig,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.config = config
        self.base = f"{config.api_url}/repos/{config.owner}/{config.repo}/actions"
        self._client = httpx.Client(
            headers={
                "Accept": "application/vnd.github+json",
                "Authorization": f"Bearer {config.token}",
                "X-GitHub-Api-Version": config.api_version,
            },
            timeout=config.timeout,
            transport=transport,
        )

    def close(self):
        self._client.close()

    def __enter__(self) -> "ActionsClient":
        return self

    def __exit__(self, *exc_info):
        self.close()

    # --- Endpoints ---

    def list_workflows(self) -> Iterator[Page]:
        return self._paginate("/workflows", "workflows")

    def list_workflow_runs(self, workflow_id: str, created: str) -> Iterator[Page]:
        """Runs of one workflow created on the given day (or timestamp)."""
        return self._paginate(
            f"/workflows/{workflow_id}/runs",
            "workflow_runs",
            {"created": created},
        )

    def list_run_jobs(self, run_id: int) -> Iterator[Page]:
        """Jobs of every attempt of a run."""
        return self._paginate(f"/runs/{run_id}/jobs", "jobs", {"filter": "all"})

    def fetch_all(self, pages: Iterator[Page], label: str = "items") -> list[dict]:
        """Drain a paginated listing, logging progress per page."""
        items = []
        per_page = self.config.per_page
        for number, page in enumerate(pages, start=1):
            items.extend(page.items)
            current = min(number * per_page, page.total_count)
            logger.info(f"  {current}/{page.total_count} {label} loaded")
        return items

    # --- Internal ---

    def _paginate(
        self,
        endpoint: str,
        key: str,
        params: Optional[dict[str, Any]] = None,
    ) -> Iterator[Page]:
        page_number = 1
        while True:
            resp = self._client.get(
                f"{self.base}{endpoint}",
                params={
                    **(params or {}),
                    "per_page": self.config.per_page,
                    "page": page_number,
                },
            )
            resp.raise_for_status()
            data = resp.json()
            items = data.get(key) or []
            page = Page(
                status=resp.status_code,
                items=items,
                total_count=data.get("total_count", len(items)),
            )
            yield page

            if page.status != 200 or len(items) < self.config.per_page:
                break
            page_number += 1
