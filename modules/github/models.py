"""GitHub Actions API entities as stored in the raw snapshots.

Only the fields the analytics read are declared; everything else in the
API payload is ignored on validation and kept verbatim in the snapshot.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


def workflow_id_from_path(path: str) -> str:
    """``.github/workflows/ci.yml`` -> ``ci.yml``."""
    return path.split("/")[-1]


class Workflow(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    name: str = ""
    path: str = ""
    state: str = ""

    @property
    def workflow_id(self) -> str:
        return workflow_id_from_path(self.path)


class WorkflowRun(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    name: str = ""
    path: str = ""
    head_branch: Optional[str] = None
    run_attempt: int = 1
    conclusion: Optional[str] = None
    created_at: Optional[datetime] = None
    run_started_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def workflow_id(self) -> str:
        return workflow_id_from_path(self.path)


class Step(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = ""
    conclusion: Optional[str] = None


class Job(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    run_id: int
    run_attempt: int = 1
    workflow_name: str = ""
    name: str = ""
    head_branch: Optional[str] = None
    conclusion: Optional[str] = None
    created_at: Optional[datetime] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    steps: list[Step] = []
    html_url: str = ""
