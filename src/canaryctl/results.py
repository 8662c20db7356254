# Copyright (c) Syntropy Systems
"""Split judge results into passing and failing metrics."""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from canaryctl.models.api import CanaryAnalysisResult

PASS_CLASSIFICATION = "Pass"


def partition(
    results: Iterable[CanaryAnalysisResult],
) -> tuple[list[CanaryAnalysisResult], list[CanaryAnalysisResult]]:
    """Partition results into (passing, failing), keeping input order.

    Only the exact classification "Pass" counts as passing.
    """
    passing: list[CanaryAnalysisResult] = []
    failing: list[CanaryAnalysisResult] = []
    for result in results:
        if result.classification == PASS_CLASSIFICATION:
            passing.append(result)
        else:
            failing.append(result)
    return passing, failing
