# Copyright (c) Syntropy Systems
"""Tests for judge result partitioning."""

from __future__ import annotations

from canaryctl.models.api import CanaryAnalysisResult
from canaryctl.results import partition


def result(name: str, classification: str | None) -> CanaryAnalysisResult:
    return CanaryAnalysisResult(name=name, classification=classification)


class TestPartition:
    """Tests for partition."""

    def test_splits_and_keeps_order(self) -> None:
        """Test pass/fail partitions preserve input order."""
        results = [
            result("cpu", "Pass"),
            result("mem", "High"),
            result("disk", "Pass"),
            result("p99", "Nodata"),
        ]

        passing, failing = partition(results)

        assert [r.name for r in passing] == ["cpu", "disk"]
        assert [r.name for r in failing] == ["mem", "p99"]
        assert len(passing) + len(failing) == len(results)

    def test_pass_is_case_sensitive(self) -> None:
        """Test only the exact label "Pass" counts as passing."""
        passing, failing = partition(
            [result("a", "pass"), result("b", "PASS"), result("c", " Pass")]
        )

        assert passing == []
        assert [r.name for r in failing] == ["a", "b", "c"]

    def test_missing_classification_fails(self) -> None:
        """Test results without a label are failing."""
        passing, failing = partition([result("a", None)])

        assert passing == []
        assert len(failing) == 1

    def test_empty(self) -> None:
        """Test empty input gives empty partitions."""
        assert partition([]) == ([], [])
