"""Raw snapshot cache: fetch GitHub Actions data at most once per day.

Layout under ``<data_dir>/<owner>∕<repo>/<YYYY-MM-DD>/``:

    workflows.json              {"workflows": [...]}
    runs/<workflow-id>.json     {"workflow_runs": [...]}
    jobs/<workflow-id>.json     {"jobs": [...]}

An existing snapshot is never rewritten. Running a load twice for the same
day is a cache hit that costs no API call.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Iterator, Optional

from common.config import AnalyticsConfig
from common.dates import get_dates_from_range, normalize_date
from common.errors import RawDataMissing
from common.storage.backend import StorageBackend
from common.storage.local import LocalStorage
from modules.github.client import ActionsClient
from modules.github.models import Job, Workflow, WorkflowRun

logger = logging.getLogger(__name__)


class RawKind(Enum):
    WORKFLOWS = 'workflows'
    RUNS = 'runs'
    JOBS = 'jobs'


class EnsureResult(Enum):
    PRESENT = 'present'    # Snapshot was already cached
    FETCHED = 'fetched'    # Snapshot was absent and has been loaded now
    MISSING = 'missing'    # Snapshot is absent and fetching was not allowed


_FETCH_HINTS = {
    RawKind.WORKFLOWS: 'Load workflows first or pass --fetch',
    RawKind.RUNS: 'Load workflow runs first or pass --fetch',
    RawKind.JOBS: 'Load jobs first or pass --fetch',
}


class RawStore:
    """On-disk cache of per-day raw entity snapshots."""

    def __init__(
        self,
        config: AnalyticsConfig,
        client: Optional[ActionsClient] = None,
        storage: Optional[StorageBackend] = None,
    ):
        self.config = config
        self.client = client
        self.storage = storage or LocalStorage()

    # --- Paths ---

    @property
    def repo_path(self) -> Path:
        return self.config.repo_path

    def day_path(self, day: str) -> Path:
        return self.repo_path / normalize_date(day)

    def raw_path(self, day: str, kind: RawKind) -> Path:
        if kind is RawKind.WORKFLOWS:
            return self.day_path(day) / 'workflows.json'
        return self.day_path(day) / kind.value

    def reports_path(self) -> Path:
        return self.repo_path / 'reports'

    # --- Cache contract ---

    def has_raw(self, day: str, kind: RawKind) -> bool:
        path = self.raw_path(day, kind)
        if kind is RawKind.WORKFLOWS:
            return self.storage.exists(path)
        # A runs/ or jobs/ directory counts only once it holds a snapshot
        return bool(self.storage.list(path, '.json'))

    def ensure_raw(self, day: str, kind: RawKind, allow_fetch: bool = False) -> EnsureResult:
        """Make sure the snapshot for (day, kind) exists, fetching if allowed.

        Returns MISSING when fetching was allowed but wrote nothing.
        """
        if self.has_raw(day, kind):
            return EnsureResult.PRESENT
        if not allow_fetch:
            return EnsureResult.MISSING

        logger.info(f"Raw {kind.value} data for {day} is absent. Loading...")
        if kind is RawKind.WORKFLOWS:
            self.load_workflows(day)
        elif kind is RawKind.RUNS:
            self.load_workflow_runs(day, with_fetch=True)
        else:
            self.load_jobs(day, with_fetch=True)

        if not self.has_raw(day, kind):
            logger.error(f"Raw {kind.value} data for {day} could not be loaded")
            return EnsureResult.MISSING
        return EnsureResult.FETCHED

    def require_raw(self, day: str, kind: RawKind, allow_fetch: bool = False) -> EnsureResult:
        """Like ensure_raw, but a missing snapshot is fatal."""
        result = self.ensure_raw(day, kind, allow_fetch)
        if result is EnsureResult.MISSING:
            hint = 'Fetching failed, see the errors above' if allow_fetch else _FETCH_HINTS[kind]
            raise RawDataMissing(normalize_date(day), kind.value, hint)
        return result

    # --- Readers ---

    def read_workflows(self, day: str) -> list[Workflow]:
        data = self.storage.read_json(self.raw_path(day, RawKind.WORKFLOWS))
        return [Workflow.model_validate(w) for w in data.get('workflows', [])]

    def iter_runs(self, day: str) -> Iterator[WorkflowRun]:
        """All runs of the day, file by file in name order."""
        for path in self.storage.list(self.raw_path(day, RawKind.RUNS), '.json'):
            for run in self.storage.read_json(path).get('workflow_runs', []):
                yield WorkflowRun.model_validate(run)

    def iter_jobs(self, day: str) -> Iterator[Job]:
        """All jobs of the day, file by file in name order."""
        for path in self.storage.list(self.raw_path(day, RawKind.JOBS), '.json'):
            for job in self.storage.read_json(path).get('jobs', []):
                yield Job.model_validate(job)

    # --- Loaders ---

    def load_workflows(self, day: str) -> bool:
        """Fetch the workflow list for a day. Returns False on cache hit."""
        created = normalize_date(day)
        path = self.raw_path(created, RawKind.WORKFLOWS)

        if self.storage.exists(path):
            logger.warning(f"Workflows for {created} already loaded, skip")
            return False

        logger.info('Loading workflows...')
        client = self._require_client()
        workflows = client.fetch_all(client.list_workflows(), 'workflows')

        written = self.storage.create_if_absent(path, {'workflows': workflows})
        if written:
            logger.info(f"Workflows for {created} saved")
        return written

    def load_workflow_runs(
        self,
        day: str,
        with_fetch: bool = False,
        workflow_id: Optional[str] = None,
    ) -> int:
        """Fetch runs of every workflow (or just one) created on a day.

        A failure for one workflow is logged and the next one is tried.
        Returns the number of snapshot files written.
        """
        created = normalize_date(day)

        if workflow_id is None:
            self.require_raw(created, RawKind.WORKFLOWS, with_fetch)
            workflow_ids = [w.workflow_id for w in self.read_workflows(created)]
        else:
            workflow_ids = [workflow_id]

        runs_dir = self.raw_path(created, RawKind.RUNS)
        logger.info(f"{len(workflow_ids)} workflows will be loaded")

        written = 0
        for wid in workflow_ids:
            try:
                if self._load_runs_by_id(wid, created, runs_dir / f"{wid}.json"):
                    written += 1
            except Exception as e:
                logger.error(f'"{wid}" cannot be loaded: {e}')
        return written

    def load_jobs(self, day: str, with_fetch: bool = False) -> int:
        """Fetch jobs of every run of a day, one snapshot per workflow.

        Returns the number of snapshot files written.
        """
        created = normalize_date(day)
        self.require_raw(created, RawKind.RUNS, with_fetch)

        jobs_dir = self.raw_path(created, RawKind.JOBS)
        run_files = self.storage.list(self.raw_path(created, RawKind.RUNS), '.json')

        written = 0
        for run_file in run_files:
            wid = run_file.stem
            target = jobs_dir / run_file.name
            if self.storage.exists(target):
                logger.warning(f'"{wid}" jobs already loaded, skip')
                continue
            try:
                runs = self.storage.read_json(run_file).get('workflow_runs', [])
                if self._load_jobs_for_runs(wid, runs, target):
                    written += 1
            except Exception as e:
                logger.error(f'"{wid}" jobs cannot be loaded: {e}')
        return written

    def load_workflows_from_range(self, start: str, end: str):
        # Newest day first
        for day in reversed(get_dates_from_range(start, end)):
            self.load_workflows(day)

    def load_workflow_runs_from_range(
        self,
        start: str,
        end: str,
        with_fetch: bool = False,
        workflow_id: Optional[str] = None,
    ):
        for day in get_dates_from_range(start, end):
            self.load_workflow_runs(day, with_fetch, workflow_id)

    def load_jobs_from_range(self, start: str, end: str, with_fetch: bool = False):
        for day in get_dates_from_range(start, end):
            self.load_jobs(day, with_fetch)

    # --- Internal ---

    def _require_client(self) -> ActionsClient:
        if self.client is None:
            raise RuntimeError('No GitHub client configured for fetching')
        return self.client

    def _load_runs_by_id(self, workflow_id: str, created: str, path: Path) -> bool:
        if self.storage.exists(path):
            logger.warning(f'"{workflow_id}" workflow runs already loaded, skip')
            return False

        logger.info(f'"{workflow_id}" workflow runs loading...')
        client = self._require_client()
        runs = client.fetch_all(
            client.list_workflow_runs(workflow_id, created), 'runs'
        )

        written = self.storage.create_if_absent(path, {'workflow_runs': runs})
        if written:
            logger.info(f'"{workflow_id}" workflow runs saved')
        return written

    def _load_jobs_for_runs(self, workflow_id: str, runs: list[dict], path: Path) -> bool:
        client = self._require_client()
        logger.info(f'"{workflow_id}" workflow. Loading jobs for {len(runs)} workflow runs...')

        jobs = []
        for i, run in enumerate(runs, start=1):
            logger.info(f"  {i}/{len(runs)} run jobs loading...")
            jobs.extend(client.fetch_all(client.list_run_jobs(run['id']), 'jobs'))

        written = self.storage.create_if_absent(path, {'jobs': jobs})
        if written:
            logger.info(f'"{workflow_id}" workflow jobs saved')
        return written
