"""Multi-day reports: daily summaries merged into one CSV per range."""

import logging
from pathlib import Path

from common.dates import get_date_range, get_dates_from_range
from modules.summary.service import SummaryService

from . import csv_codec

logger = logging.getLogger(__name__)

REPORT_KINDS = ('workflow_runs', 'jobs')


class ReportService:
    """Builds missing daily summaries for a range and merges them."""

    def __init__(self, summaries: SummaryService):
        self.summaries = summaries

    def build_report(self, kind: str, start: str, end: str, with_fetch: bool = False) -> Path:
        if kind == 'workflow_runs':
            sources = self.summaries.build_workflow_runs_summary_from_range(start, end, with_fetch)
        elif kind == 'jobs':
            sources = self.summaries.build_jobs_summary_from_range(start, end, with_fetch)
        else:
            raise ValueError(f"Unknown report kind: {kind}")

        days = get_dates_from_range(start, end)
        target = (
            self.summaries.store.reports_path()
            / f"{kind}_{days[0]}_{days[-1]}.csv"
        )
        logger.info(f"Building {kind} report for {days[0]}..{days[-1]}")
        return csv_codec.merge(target, sources)

    def build_last_days_report(self, kind: str, days: int, with_fetch: bool = False) -> Path:
        start, end = get_date_range(days)
        return self.build_report(kind, start, end, with_fetch)
