"""Summary row shapes for workflow-run and job statistics."""

import math
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from common.errors import UnknownConclusion

# Release branches are named like "24_1"; everything else counts as a PR build
MAIN_BRANCH_RE = re.compile(r"\d{2}_\d")


class BranchClass(Enum):
    MAIN = 'main'
    PR = 'pr'

    @classmethod
    def of(cls, head_branch: Optional[str]) -> "BranchClass":
        if head_branch and MAIN_BRANCH_RE.fullmatch(head_branch):
            return cls.MAIN
        return cls.PR


class Conclusion(Enum):
    SUCCESS = 'success'
    FAILURE = 'failure'
    CANCELLED = 'cancelled'
    SKIPPED = 'skipped'

    @classmethod
    def parse(cls, value: Optional[str]) -> "Conclusion":
        try:
            return cls(value)
        except ValueError:
            raise UnknownConclusion(value) from None


STAT_COLUMNS = [
    'success_runs',
    'failure_runs',
    'cancelled_runs',
    'skipped_runs',
    'retries',
    'min_duration',
    'avg_duration',
    'max_duration',
]


@dataclass
class BranchStats:
    """Counters and duration statistics (in days) for one branch class."""
    success_runs: int = 0
    failure_runs: int = 0
    cancelled_runs: int = 0
    skipped_runs: int = 0
    retries: int = 0
    min_duration: float = math.inf
    max_duration: float = 0.0
    avg_duration: float = 0.0
    sum_duration: float = 0.0
    count_duration: int = 0
    unrecognized: int = 0

    def count(self, conclusion: Conclusion):
        if conclusion is Conclusion.SUCCESS:
            self.success_runs += 1
        elif conclusion is Conclusion.FAILURE:
            self.failure_runs += 1
        elif conclusion is Conclusion.CANCELLED:
            self.cancelled_runs += 1
        elif conclusion is Conclusion.SKIPPED:
            self.skipped_runs += 1

    def add_duration(self, duration: float, skipped: bool):
        self.sum_duration += duration
        self.count_duration += 1

        # Skipped samples never set the minimum
        if not skipped and duration < self.min_duration:
            self.min_duration = duration
        if duration > self.max_duration:
            self.max_duration = duration

    def finalize(self):
        self.avg_duration = (
            self.sum_duration / self.count_duration if self.count_duration > 0 else 0
        )
        if not math.isfinite(self.min_duration):
            self.min_duration = 0

    def values(self) -> list:
        return [getattr(self, column) for column in STAT_COLUMNS]


@dataclass
class SummaryRow:
    """Statistics for one (date, workflow[, job]) key."""
    date: str
    workflow_name: str
    workflow_id: Optional[str] = None
    job_name: Optional[str] = None
    main: BranchStats = field(default_factory=BranchStats)
    pr: BranchStats = field(default_factory=BranchStats)

    def stats(self, branch: BranchClass) -> BranchStats:
        return self.main if branch is BranchClass.MAIN else self.pr

    def finalize(self) -> "SummaryRow":
        self.main.finalize()
        self.pr.finalize()
        return self

    @property
    def unrecognized(self) -> int:
        return self.main.unrecognized + self.pr.unrecognized


def stat_headers() -> list[str]:
    return [f"{branch.value}_{column}" for branch in BranchClass for column in STAT_COLUMNS]


RUN_SUMMARY_HEADERS = ['date', 'id', 'workflow_name'] + stat_headers()
JOB_SUMMARY_HEADERS = ['date', 'workflow_name', 'job_name'] + stat_headers()
