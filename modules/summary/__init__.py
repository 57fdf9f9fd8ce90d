"""
Summary Module
==============
Per-day run and job statistics by workflow, job and branch class.
"""

from .models import BranchClass, BranchStats, Conclusion, SummaryRow
from .service import SummaryAggregator, SummaryService, aggregate_jobs, aggregate_runs

__all__ = [
    "BranchClass",
    "BranchStats",
    "Conclusion",
    "SummaryRow",
    "SummaryAggregator",
    "SummaryService",
    "aggregate_jobs",
    "aggregate_runs",
]
