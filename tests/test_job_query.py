"""Tests for utils.job_query: bounded recursive tree= selectors."""

from __future__ import annotations

import pytest

from utils.job_query import JOB_FIELDS, build_job_query, build_tree_query


class TestBuildTreeQuery:
    @pytest.mark.parametrize("depth", [1, 2, 3, 5, 8])
    def test_template_repeated_once_per_level(self, depth):
        query = build_tree_query(depth)
        assert query.count(JOB_FIELDS) == depth
        assert query.count("jobs[") == depth

    @pytest.mark.parametrize("depth", [-1, 0, 1, 2, 5])
    def test_no_recursion_marker_left(self, depth):
        query = build_tree_query(depth)
        assert "__" not in query
        assert query.count("[") == query.count("]")

    def test_single_level(self):
        assert build_tree_query(1) == f"jobs[{JOB_FIELDS}]"

    def test_two_levels(self):
        assert build_tree_query(2) == f"jobs[{JOB_FIELDS},jobs[{JOB_FIELDS}]]"

    @pytest.mark.parametrize("depth", [0, -3])
    def test_non_positive_depth_is_single_level(self, depth):
        assert build_tree_query(depth) == build_tree_query(1)

    def test_default_depth_is_five(self):
        assert build_tree_query() == build_tree_query(5)
        assert build_tree_query().endswith("]" * 5)

    def test_requested_fields(self):
        for field in ("fullName", "displayName", "color", "lastBuild[timestamp]",
                      "property[branch[head]]"):
            assert field in JOB_FIELDS


class TestBuildJobQuery:
    def test_job_and_one_level_of_branches(self):
        assert build_job_query() == f"{JOB_FIELDS},jobs[{JOB_FIELDS}]"

    def test_no_recursion_marker_left(self):
        assert "__" not in build_job_query()
