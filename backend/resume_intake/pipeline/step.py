"""
PipelineStep — abstract base class for the document pipeline stages.

The engine calls execute() and records timing, logging, retries and
errors.  Steps only implement the stage logic and raise a
DocumentPipelineError subclass on failure.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any

from resume_intake.core.constants import StepStatus
from resume_intake.pipeline.context import DocumentContext, StepResult


class PipelineStep(ABC):
    """
    Base class for every pipeline step.

    Subclasses MUST implement:
        - name (str)          — stage identifier, e.g. "rasterize_document"
        - description (str)   — human-readable label for logs
        - execute(ctx)        — the actual stage logic

    Set `retryable = True` to let the engine re-run the step when it
    raises a transient error, up to `max_attempts` total runs.
    """

    name: str = "unnamed_step"
    description: str = "No description"
    retryable: bool = False
    max_attempts: int = 1

    @abstractmethod
    async def execute(self, ctx: DocumentContext) -> dict[str, Any]:
        """
        Run the step's logic.  Returns metadata for the StepResult.

        Read from and write to `ctx` to pass data between steps.
        """
        ...

    # ─── Helpers available to all steps ────────────────

    def _result(
        self,
        started_at: datetime,
        status: str,
        *,
        attempts: int = 1,
        error: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> StepResult:
        """Build a StepResult with timing."""
        now = self._now()
        return StepResult(
            step_name=self.name,
            status=status,
            started_at=started_at,
            completed_at=now,
            duration_ms=int((now - started_at).total_seconds() * 1000),
            attempts=attempts,
            error=error,
            metadata=metadata or {},
        )

    def _success(self, started_at: datetime, metadata: dict[str, Any] | None = None, attempts: int = 1) -> StepResult:
        return self._result(started_at, StepStatus.COMPLETED, attempts=attempts, metadata=metadata)

    def _failure(self, started_at: datetime, error: str, attempts: int = 1) -> StepResult:
        return self._result(started_at, StepStatus.FAILED, attempts=attempts, error=error)

    def _now(self) -> datetime:
        """UTC-aware now."""
        return datetime.now(timezone.utc)
