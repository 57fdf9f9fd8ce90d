"""Daily workflow-run and job summaries.

Folds one day's raw runs (or jobs) into one SummaryRow per workflow
(or per workflow job), split by branch class, and writes it as CSV:

    <repo>/<day>/workflow_runs.csv
    <repo>/<day>/jobs_summary.csv

Durations are fractional days. An existing summary file is not rebuilt.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from common.dates import get_dates_from_range, normalize_date
from common.errors import UnknownConclusion
from modules.github.models import Job, WorkflowRun
from modules.loading.service import RawKind, RawStore
from modules.reporting.csv_codec import write_csv
from modules.reporting.formatting import ValueFormatter, check_delimiter

from .models import (
    JOB_SUMMARY_HEADERS,
    RUN_SUMMARY_HEADERS,
    BranchClass,
    Conclusion,
    SummaryRow,
)

logger = logging.getLogger(__name__)

RUN_SUMMARY_FILE = 'workflow_runs.csv'
JOB_SUMMARY_FILE = 'jobs_summary.csv'
SECONDS_PER_DAY = 24 * 60 * 60


def duration_days(start: Optional[datetime], end: Optional[datetime]) -> float:
    """Elapsed time in fractional days, 0 if either end is unknown."""
    if start is None or end is None:
        return 0.0
    return (end - start).total_seconds() / SECONDS_PER_DAY


class SummaryAggregator:
    """Accumulates statistics per key in first-seen order.

    Unrecognized conclusions still contribute their duration but no run
    bucket; they are counted in ``unrecognized`` and logged, or raise
    UnknownConclusion when ``strict`` is set.
    """

    def __init__(self, day: str, strict: bool = False):
        self.day = day
        self.strict = strict
        self._rows: dict[Tuple, SummaryRow] = {}

    def add_run(self, run: WorkflowRun):
        key = (run.name,)
        if key not in self._rows:
            self._rows[key] = SummaryRow(
                date=self.day,
                workflow_name=run.name,
                workflow_id=run.workflow_id,
            )
        self._fold(
            self._rows[key],
            run.head_branch,
            run.conclusion,
            run.run_attempt,
            duration_days(run.run_started_at, run.updated_at),
            f"run {run.id}",
        )

    def add_job(self, job: Job):
        key = (self.day, job.workflow_name, job.name)
        if key not in self._rows:
            self._rows[key] = SummaryRow(
                date=self.day,
                workflow_name=job.workflow_name,
                job_name=job.name,
            )
        self._fold(
            self._rows[key],
            job.head_branch,
            job.conclusion,
            job.run_attempt,
            duration_days(job.started_at, job.completed_at),
            f"job {job.id}",
        )

    def rows(self) -> List[SummaryRow]:
        """Finalized rows in insertion order."""
        return [row.finalize() for row in self._rows.values()]

    def _fold(
        self,
        row: SummaryRow,
        head_branch: Optional[str],
        conclusion: Optional[str],
        run_attempt: int,
        duration: float,
        label: str,
    ):
        stats = row.stats(BranchClass.of(head_branch))

        if duration < 0:
            logger.warning(f"{label} has a negative duration ({duration} days)")

        try:
            parsed = Conclusion.parse(conclusion)
        except UnknownConclusion:
            if self.strict:
                raise
            logger.warning(f"{label} has unrecognized conclusion {conclusion!r}, not counted")
            stats.unrecognized += 1
            parsed = None
        else:
            stats.count(parsed)

        if run_attempt > 1:
            stats.retries += 1

        stats.add_duration(duration, skipped=parsed is Conclusion.SKIPPED)


def aggregate_runs(day: str, runs: Iterable[WorkflowRun], strict: bool = False) -> List[SummaryRow]:
    aggregator = SummaryAggregator(day, strict)
    for run in runs:
        aggregator.add_run(run)
    return aggregator.rows()


def aggregate_jobs(day: str, jobs: Iterable[Job], strict: bool = False) -> List[SummaryRow]:
    aggregator = SummaryAggregator(day, strict)
    for job in jobs:
        aggregator.add_job(job)
    return aggregator.rows()


def run_summary_cells(row: SummaryRow, formatter: ValueFormatter) -> list:
    cells = [row.date, row.workflow_id or '', row.workflow_name]
    return cells + [formatter.format_value(v) for v in row.main.values() + row.pr.values()]


def job_summary_cells(row: SummaryRow, formatter: ValueFormatter) -> list:
    cells = [row.date, row.workflow_name, row.job_name or '']
    return cells + [formatter.format_value(v) for v in row.main.values() + row.pr.values()]


class SummaryService:
    """Builds daily summary CSVs from the raw store."""

    def __init__(
        self,
        store: RawStore,
        locale: Optional[str] = None,
        delimiter: Optional[str] = None,
        strict: bool = False,
    ):
        output = store.config.output
        self.store = store
        self.formatter = ValueFormatter(locale or output.locale)
        self.delimiter = delimiter or output.summary_delimiter
        self.strict = strict

    def summary_path(self, day: str, filename: str) -> Path:
        return self.store.day_path(day) / filename

    def build_workflow_runs_summary(self, day: str, with_fetch: bool = False) -> Path:
        created = normalize_date(day)
        path = self.summary_path(created, RUN_SUMMARY_FILE)
        if path.exists():
            logger.debug(f"{path} exists, skip")
            return path

        self.store.require_raw(created, RawKind.RUNS, with_fetch)
        rows = aggregate_runs(created, self.store.iter_runs(created), self.strict)

        check_delimiter(self.formatter, self.delimiter)
        write_csv(
            path,
            RUN_SUMMARY_HEADERS,
            [run_summary_cells(row, self.formatter) for row in rows],
            self.delimiter,
        )
        logger.info(f"Workflow runs summary for {created}: {len(rows)} workflows")
        return path

    def build_jobs_summary(self, day: str, with_fetch: bool = False) -> Path:
        created = normalize_date(day)
        path = self.summary_path(created, JOB_SUMMARY_FILE)
        if path.exists():
            logger.debug(f"{path} exists, skip")
            return path

        self.store.require_raw(created, RawKind.JOBS, with_fetch)
        rows = aggregate_jobs(created, self.store.iter_jobs(created), self.strict)

        check_delimiter(self.formatter, self.delimiter)
        write_csv(
            path,
            JOB_SUMMARY_HEADERS,
            [job_summary_cells(row, self.formatter) for row in rows],
            self.delimiter,
        )
        logger.info(f"Jobs summary for {created}: {len(rows)} jobs")
        return path

    def build_workflow_runs_summary_from_range(
        self, start: str, end: str, with_fetch: bool = False
    ) -> List[Path]:
        return [
            self.build_workflow_runs_summary(day, with_fetch)
            for day in get_dates_from_range(start, end)
        ]

    def build_jobs_summary_from_range(
        self, start: str, end: str, with_fetch: bool = False
    ) -> List[Path]:
        return [
            self.build_jobs_summary(day, with_fetch)
            for day in get_dates_from_range(start, end)
        ]
