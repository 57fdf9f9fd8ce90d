"""Failed and cancelled jobs.

Per day, every job concluding in failure or cancellation becomes one row
of ``<repo>/<day>/failed_jobs.csv`` with the name of the step that
failed. The file is regenerated on each call since the delimiter and
locale are chosen by the caller.
"""

import logging
from dataclasses import astuple, dataclass, fields
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional

from common.dates import get_dates_from_range, normalize_date
from modules.github.models import Job
from modules.loading.service import RawKind, RawStore
from modules.reporting import csv_codec
from modules.reporting.formatting import ValueFormatter, check_delimiter

logger = logging.getLogger(__name__)

FAILED_JOBS_FILE = 'failed_jobs.csv'
FAILING_CONCLUSIONS = ('failure', 'cancelled')


@dataclass
class FailureRow:
    created_at: Optional[datetime]
    id: int
    run_id: int
    run_attempt: int
    workflow_name: str
    name: str
    head_branch: str
    conclusion: str
    step: str
    html_url: str


FAILURE_HEADERS = [f.name for f in fields(FailureRow)]


def failing_step(job: Job) -> str:
    """Name of the last step that ended like the job, '' if none did."""
    for step in reversed(job.steps):
        if step.conclusion == job.conclusion:
            return step.name
    return ''


def extract_failures(jobs: Iterable[Job]) -> List[FailureRow]:
    return [
        FailureRow(
            created_at=job.created_at,
            id=job.id,
            run_id=job.run_id,
            run_attempt=job.run_attempt,
            workflow_name=job.workflow_name,
            name=job.name,
            head_branch=job.head_branch or '',
            conclusion=job.conclusion,
            step=failing_step(job),
            html_url=job.html_url,
        )
        for job in jobs
        if job.conclusion in FAILING_CONCLUSIONS
    ]


def failure_cells(row: FailureRow, formatter: ValueFormatter) -> list:
    cells = []
    for name, value in zip(FAILURE_HEADERS, astuple(row)):
        if name in ('id', 'run_id'):
            # Identifiers are not quantities; no group separators
            cells.append(str(value))
        else:
            cells.append(formatter.format_value(value))
    return cells


class FailureService:
    """Builds and merges failed-job lists."""

    def __init__(
        self,
        store: RawStore,
        delimiter: Optional[str] = None,
        locale: Optional[str] = None,
    ):
        output = store.config.output
        self.store = store
        self.delimiter = delimiter or output.failures_delimiter
        self.formatter = ValueFormatter(locale or output.locale)

    def failures_path(self, day: str) -> Path:
        return self.store.day_path(day) / FAILED_JOBS_FILE

    def build_failed_jobs(self, day: str, with_fetch: bool = False) -> Path:
        created = normalize_date(day)
        self.store.require_raw(created, RawKind.JOBS, with_fetch)

        rows = extract_failures(self.store.iter_jobs(created))

        check_delimiter(self.formatter, self.delimiter)
        path = csv_codec.write_csv(
            self.failures_path(created),
            FAILURE_HEADERS,
            [failure_cells(row, self.formatter) for row in rows],
            self.delimiter,
        )
        logger.info(f"Failed jobs for {created}: {len(rows)}")
        return path

    def build_failed_jobs_from_range(
        self, start: str, end: str, with_fetch: bool = False
    ) -> List[Path]:
        return [
            self.build_failed_jobs(day, with_fetch)
            for day in get_dates_from_range(start, end)
        ]

    def merge_failures(self, start: str, end: str) -> Path:
        """Merge the per-day failure lists of a range into one report."""
        days = get_dates_from_range(start, end)
        sources = []
        for day in days:
            path = self.failures_path(day)
            if path.exists():
                sources.append(path)
            else:
                logger.warning(f"No failed jobs list for {day}, skip")

        target = self.store.reports_path() / f"failed_jobs_{days[0]}_{days[-1]}.csv"
        return csv_codec.merge(target, sources)
