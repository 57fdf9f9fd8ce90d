"""
Unit Tests for Failed Job Lists
===============================
"""

import pytest

from common.errors import EmptySourceList, HeaderMismatch, RawDataMissing
from modules.failures.service import (
    FAILURE_HEADERS,
    FailureService,
    extract_failures,
    failing_step,
)
from modules.github.models import Job

DAY = "2024-01-01"


def _job(conclusion, steps, **overrides) -> Job:
    data = {
        "id": 1,
        "run_id": 2,
        "workflow_name": "CI",
        "name": "test",
        "conclusion": conclusion,
        "steps": [{"name": n, "conclusion": c} for n, c in steps],
    }
    data.update(overrides)
    return Job.model_validate(data)


class TestFailingStep:

    def test_last_matching_step(self):
        job = _job("failure", [("build", "success"), ("test", "failure")])
        assert failing_step(job) == "test"

    def test_last_of_several_matches(self):
        job = _job("failure", [("a", "failure"), ("b", "success"), ("c", "failure"), ("d", "skipped")])
        assert failing_step(job) == "c"

    def test_cancelled_job(self):
        job = _job("cancelled", [("build", "success"), ("deploy", "cancelled")])
        assert failing_step(job) == "deploy"

    def test_no_match(self):
        assert failing_step(_job("failure", [("build", "success")])) == ""
        assert failing_step(_job("failure", [])) == ""


class TestExtractFailures:

    def test_only_failed_and_cancelled(self, sample_jobs):
        rows = extract_failures(Job.model_validate(j) for j in sample_jobs)

        assert [(r.id, r.conclusion, r.step) for r in rows] == [
            (1002, "failure", "test"),
            (1003, "cancelled", ""),
        ]
        assert rows[0].head_branch == "feature/login"
        assert rows[0].html_url.endswith("/job/1002")

    def test_skipped_and_unknown_ignored(self):
        jobs = [_job("skipped", []), _job(None, []), _job("neutral", [])]
        assert extract_failures(jobs) == []


class TestFailureService:

    def test_failed_jobs_csv(self, store, write_raw, sample_jobs):
        write_raw(DAY, "jobs/ci.yml.json", {"jobs": sample_jobs})
        path = FailureService(store).build_failed_jobs(DAY)

        lines = path.read_text(encoding="utf-8").splitlines()
        assert lines[0] == ";".join(h.replace("_", " ") for h in FAILURE_HEADERS)
        assert len(lines) == 3

        cells = lines[1].split(";")
        assert "01.01.24" in cells[0]
        assert cells[1:] == [
            "1002", "102", "2", "CI", "test", "feature/login", "failure", "test",
            "https://github.com/acme/widgets/actions/runs/102/job/1002",
        ]

    def test_comma_delimiter_warns_but_writes(self, store, write_raw, sample_jobs, caplog):
        write_raw(DAY, "jobs/ci.yml.json", {"jobs": sample_jobs})
        path = FailureService(store, delimiter=",", locale="en-US").build_failed_jobs(DAY)

        assert "occurs in en-US dates" in caplog.text
        header, first, _ = path.read_text().splitlines()
        assert header.startswith("created at,id,run id")
        # the date cell holds the delimiter and is quoted
        assert first.startswith('"1/1/24,')

    def test_regenerated_each_time(self, store, write_raw, sample_jobs):
        write_raw(DAY, "jobs/ci.yml.json", {"jobs": sample_jobs})
        service = FailureService(store)
        path = service.build_failed_jobs(DAY)
        path.write_text("stale\n")

        assert service.build_failed_jobs(DAY).read_text() != "stale\n"

    def test_missing_jobs(self, store):
        with pytest.raises(RawDataMissing):
            FailureService(store).build_failed_jobs(DAY)

    def test_merge_failures(self, store, write_raw, sample_jobs, caplog):
        for day in ("2024-01-01", "2024-01-03"):
            write_raw(day, "jobs/ci.yml.json", {"jobs": sample_jobs})
        service = FailureService(store)
        service.build_failed_jobs("2024-01-01")
        service.build_failed_jobs("2024-01-03")

        target = service.merge_failures("2024-01-01", "2024-01-03")

        assert target.name == "failed_jobs_2024-01-01_2024-01-03.csv"
        lines = target.read_text().splitlines()
        assert len(lines) == 1 + 4
        assert "No failed jobs list for 2024-01-02" in caplog.text

    def test_merge_failures_nothing_to_merge(self, store):
        with pytest.raises(EmptySourceList):
            FailureService(store).merge_failures("2024-01-01", "2024-01-02")

    def test_merge_failures_mixed_delimiters(self, store, write_raw, sample_jobs):
        for day in ("2024-01-01", "2024-01-02"):
            write_raw(day, "jobs/ci.yml.json", {"jobs": sample_jobs})
        FailureService(store, delimiter=";").build_failed_jobs("2024-01-01")
        FailureService(store, delimiter="\t").build_failed_jobs("2024-01-02")

        with pytest.raises(HeaderMismatch):
            FailureService(store).merge_failures("2024-01-01", "2024-01-02")
