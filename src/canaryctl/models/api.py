# Copyright (c) Syntropy Systems
"""Pydantic models for canary service responses."""

from __future__ import annotations

from pydantic import Field

from .base import CanaryBaseModel, ExtraAllowModel, JSONValue

TIMED_OUT_STATUS = "timed out waiting for completion status"


class ErrorResponse(ExtraAllowModel):
    """Error payload returned by the service."""

    message: str | None = None
    error: str | None = None

    @property
    def detail(self) -> str | None:
        """Best available error description."""
        return self.message or self.error


class CanaryExecutionResponse(CanaryBaseModel):
    """Response from starting an ad-hoc execution."""

    canary_execution_id: str = Field(min_length=1)


class CanaryJudgeScore(ExtraAllowModel):
    """Overall score assigned by the judge."""

    score: float | None = None
    classification: str | None = None
    classification_reason: str | None = None


class CanaryAnalysisResult(ExtraAllowModel):
    """Judge result for a single metric."""

    name: str
    classification: str | None = None
    classification_reason: str | None = None
    experiment_metadata: dict[str, JSONValue] = Field(default_factory=dict)
    control_metadata: dict[str, JSONValue] = Field(default_factory=dict)
    result_metadata: dict[str, JSONValue] = Field(default_factory=dict)


class CanaryJudgeResult(ExtraAllowModel):
    """Judge verdict with per-metric results."""

    judge_name: str | None = None
    score: CanaryJudgeScore | None = None
    results: list[CanaryAnalysisResult] = Field(default_factory=list)
    group_scores: list[dict[str, JSONValue]] = Field(default_factory=list)


class CanaryResult(ExtraAllowModel):
    """Result payload of a finished execution."""

    judge_result: CanaryJudgeResult | None = None


class CanaryExecutionStatusResponse(ExtraAllowModel):
    """Snapshot of an execution's state."""

    complete: bool = False
    status: str | None = None
    result: CanaryResult | None = None

    @classmethod
    def failed(cls, message: str) -> CanaryExecutionStatusResponse:
        """Build a terminal status for an execution that could not be tracked."""
        return cls(complete=False, status=message)

    @classmethod
    def timed_out(cls) -> CanaryExecutionStatusResponse:
        """Build the terminal status used when waiting runs out."""
        return cls(complete=False, status=TIMED_OUT_STATUS)
