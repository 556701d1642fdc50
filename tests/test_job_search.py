"""Tests for utils.job_search: normalization, matching and deduplication."""

from __future__ import annotations

import pytest

from utils.job_model import Job
from utils.job_search import matches, normalize, search_jobs


class TestNormalize:
    def test_case_folded(self):
        assert normalize("LiGoJ") == "ligoj"

    def test_accents_stripped(self):
        assert normalize("Élan Crème brûlée") == "elan creme brulee"

    def test_whitespace_collapsed(self):
        assert normalize("  Ligoj \t - \n Cron  ") == "ligoj - cron"

    @pytest.mark.parametrize("text", [None, ""])
    def test_empty(self, text):
        assert normalize(text) == ""

    def test_symmetric_variants_equal(self):
        assert normalize("Équipe  Dév") == normalize("equipe dev")


class TestMatches:
    JOB = Job(id="ligoj-cron-rse", name="Ligoj - Cron - RSE", description="CRON - Project RSE")

    def test_matches_id_regardless_of_case(self):
        assert matches(self.JOB, "LIGOJ")

    def test_matches_name(self):
        assert matches(self.JOB, "cron - rse")

    def test_matches_description(self):
        assert matches(self.JOB, "project")

    def test_accented_criteria(self):
        assert matches(self.JOB, "Prôject")

    def test_no_match(self):
        assert not matches(self.JOB, "bootstrap")

    def test_absent_fields(self):
        assert matches(Job(id="only-id"), "only")
        assert not matches(Job(id="only-id"), "desc")


class TestSearchJobs:
    def test_sorted_by_normalized_display_name(self):
        jobs = [
            Job(id="z-job", name="Alpha"),
            Job(id="a-job"),
            Job(id="m-job", name="beta"),
        ]
        result = search_jobs(jobs, "job")
        assert [j.id for j in result] == ["a-job", "z-job", "m-job"]

    def test_non_matching_excluded(self):
        jobs = [Job(id="ligoj-a"), Job(id="other")]
        assert [j.id for j in search_jobs(jobs, "ligoj")] == ["ligoj-a"]

    def test_key_collision_last_wins(self):
        jobs = [
            Job(id="first", name="Bootstrap"),
            Job(id="second", name="BOOTSTRÄP"),
        ]
        result = search_jobs(jobs, "boot")
        assert len(result) == 1
        assert result[0].id == "second"

    def test_disabled_jobs_kept(self):
        jobs = [Job(id="ligoj", status="disabled")]
        assert search_jobs(jobs, "ligoj") == jobs

    def test_no_cap(self):
        jobs = [Job(id=f"job-{i:03d}") for i in range(40)]
        assert len(search_jobs(jobs, "job")) == 40

    def test_empty_criteria_matches_everything(self):
        jobs = [Job(id="a"), Job(id="b")]
        assert len(search_jobs(jobs, "")) == 2

    def test_no_jobs(self):
        assert search_jobs([], "ligoj") == []

    def test_accepts_generator(self):
        result = search_jobs((Job(id=f"ligoj-{i}") for i in range(3)), "LIGOJ")
        assert [j.id for j in result] == ["ligoj-0", "ligoj-1", "ligoj-2"]
