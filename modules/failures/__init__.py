"""Failed and cancelled job lists."""

from .service import FailureRow, FailureService, extract_failures, failing_step

__all__ = ["FailureRow", "FailureService", "extract_failures", "failing_step"]
